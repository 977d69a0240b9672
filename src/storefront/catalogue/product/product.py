"""Product aggregate root with Image entity."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, Text

from storefront.domain import storefront


@storefront.entity(part_of="Product")
class Image:
    """Reference to an uploaded product image."""

    url: String(required=True, max_length=500)
    display_order: Integer(default=0)


@storefront.aggregate
class Product:
    """Product aggregate root."""

    title: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    brand: String(max_length=100)
    stock: Integer(default=0, min_value=0)
    category: String(max_length=100)
    images: HasMany(Image)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        title,
        price,
        description=None,
        brand=None,
        stock=None,
        category=None,
        image_url=None,
    ):
        from storefront.catalogue.product.events import ProductCreated

        if not title or price is None:
            raise ValidationError({"product": ["Title and price are required"]})

        now = datetime.now(UTC)
        product = cls(
            title=title,
            description=description,
            price=price,
            brand=brand,
            stock=stock if stock is not None else 0,
            category=category,
            created_at=now,
            updated_at=now,
        )
        if image_url:
            product.add_images(Image(url=image_url, display_order=0))

        product.raise_(
            ProductCreated(
                product_id=product.id,
                title=product.title,
                price=product.price,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    def update_details(
        self,
        title=None,
        description=None,
        price=None,
        brand=None,
        stock=None,
        category=None,
    ):
        from storefront.catalogue.product.events import ProductDetailsUpdated

        if title is not None:
            if not title:
                raise ValidationError({"title": ["Title cannot be blank"]})
            self.title = title
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if brand is not None:
            self.brand = brand
        if stock is not None:
            self.stock = stock
        if category is not None:
            self.category = category

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                title=self.title,
                price=self.price,
                stock=self.stock,
            )
        )

    def add_image(self, url):
        """Append an image after the existing ones. Images are never replaced."""
        from storefront.catalogue.product.events import ProductImageAdded

        image = Image(url=url, display_order=len(self.images))
        self.add_images(image)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductImageAdded(
                product_id=self.id,
                image_id=image.id,
                url=url,
            )
        )
        return image
