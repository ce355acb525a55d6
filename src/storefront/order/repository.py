"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        return self._dao.query.filter(user_id=str(user_id)).limit(None).all().items

    def all_orders(self) -> list[Order]:
        return self._dao.query.limit(None).all().items

    def with_status(self, status) -> list[Order]:
        return self._dao.query.filter(status=status).limit(None).all().items
