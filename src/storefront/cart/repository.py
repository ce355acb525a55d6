"""Repository for the Cart aggregate."""

from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id) -> Cart | None:
        return self._dao.query.filter(user_id=str(user_id)).all().first

    def get_or_create_for_user(self, user_id) -> Cart:
        """Return the user's cart, creating and persisting an empty one if missing."""
        cart = self.for_user(user_id)
        if cart is None:
            cart = Cart.create(user_id=user_id)
            self.add(cart)
        return cart

    def containing_product(self, product_id) -> list[Cart]:
        return [c for c in self._dao.query.limit(None).all().items if c.item_for(product_id) is not None]
