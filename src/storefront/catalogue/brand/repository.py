"""Query methods for the Brand aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.catalogue.brand.brand import Brand
from storefront.domain import storefront


@storefront.repository(part_of=Brand)
class BrandRepository:
    def list_active(self) -> list[Brand]:
        """Active brands, alphabetical by name."""
        return self._dao.query.filter(is_active=True).order_by("name").all().items

    def get_active_by_slug(self, slug: str) -> Brand:
        matches = self._dao.query.filter(slug=slug, is_active=True).all().items
        if not matches:
            raise ObjectNotFoundError("Brand not found")
        return matches[0]
