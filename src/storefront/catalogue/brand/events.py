"""Domain events for the Brand aggregate."""

from protean.fields import Boolean, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Brand")
class BrandCreated:
    __version__ = 1

    brand_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)


@storefront.event(part_of="Brand")
class BrandUpdated:
    __version__ = 1

    brand_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    is_active: Boolean()
