"""Cart item management — commands and handler.

Every command is keyed by user: the user's cart is created on first use, so a
cart that went missing never blocks shopping.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class CartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create_for_user(command.user_id)
        cart.add_item(product, command.quantity)
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create_for_user(command.user_id)
        cart.update_item_quantity(product, command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create_for_user(command.user_id)
        cart.remove_item(command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create_for_user(command.user_id)
        cart.clear()
        repo.add(cart)


def get_or_create_cart(user_id) -> Cart:
    """Read the user's cart for display, creating it when missing."""
    return current_domain.repository_for(Cart).get_or_create_for_user(user_id)
