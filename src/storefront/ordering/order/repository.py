"""Query methods for the Order aggregate."""

from storefront.domain import storefront
from storefront.ordering.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def newest_first(self, user_id: str | None = None) -> list[Order]:
        """All orders, or only ``user_id``'s, most recently created first."""
        query = self._dao.query
        if user_id:
            query = query.filter(user_id=user_id)
        return query.order_by("-created_at").all().items
