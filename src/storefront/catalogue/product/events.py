"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    title: String(required=True)
    price: Float(required=True)
    stock: Integer()
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive, pricing or stock fields of a product changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    title: String(required=True)
    price: Float(required=True)
    stock: Integer()


@storefront.event(part_of="Product")
class ProductImageAdded:
    __version__ = 1

    product_id: Identifier(required=True)
    image_id: Identifier(required=True)
    url: String(required=True)
