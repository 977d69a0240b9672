"""Pydantic request/response schemas for the Catalogue API."""

from datetime import datetime

from storefront.api.schemas import CamelModel


class ProductPayload(CamelModel):
    """Product fields as sent in a JSON body or multipart form. Every field is optional here; the domain decides what is required."""

    title: str | None = None
    description: str | None = None
    price: float | None = None
    brand: str | None = None
    stock: int | None = None
    category: str | None = None


class ProductResponse(CamelModel):
    id: str
    title: str
    description: str | None = None
    price: float
    brand: str | None = None
    stock: int
    category: str | None = None
    images: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            title=product.title,
            description=product.description,
            price=product.price,
            brand=product.brand,
            stock=product.stock,
            category=product.category,
            images=[image.url for image in sorted(product.images, key=lambda i: i.display_order)],
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class CreateBrandRequest(CamelModel):
    name: str | None = None
    description: str | None = None
    logo: str | None = None
    is_active: bool | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Acme Corp",
                    "description": "Quality goods since 1949",
                    "logo": "/uploads/acme.png",
                }
            ]
        }
    }


class UpdateBrandRequest(CamelModel):
    name: str | None = None
    description: str | None = None
    logo: str | None = None
    is_active: bool | None = None


class BrandResponse(CamelModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    logo: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_brand(cls, brand) -> "BrandResponse":
        return cls(
            id=str(brand.id),
            name=brand.name,
            slug=brand.slug,
            description=brand.description,
            logo=brand.logo,
            is_active=brand.is_active,
            created_at=brand.created_at,
            updated_at=brand.updated_at,
        )
