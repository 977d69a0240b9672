"""Brand management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.brand.brand import Brand
from storefront.domain import storefront
from storefront.shared.lookup import load
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DUPLICATE_BRAND_MESSAGE = "Brand name or slug already exists"


@storefront.command(part_of="Brand")
class CreateBrand:
    name: String(max_length=100)
    description: Text()
    logo: String(max_length=500)
    is_active: Boolean()


@storefront.command(part_of="Brand")
class UpdateBrand:
    brand_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    logo: String(max_length=500)
    is_active: Boolean()


@storefront.command(part_of="Brand")
class DeleteBrand:
    brand_id: Identifier(required=True)


def _ensure_unique(repo, brand):
    """Reject ``brand`` when another brand already holds its name or slug."""
    for field in ("name", "slug"):
        clashes = repo._dao.query.filter(**{field: getattr(brand, field)}).all().items
        if any(other.id != brand.id for other in clashes):
            raise ValidationError({"brand": [DUPLICATE_BRAND_MESSAGE]})


@storefront.command_handler(part_of=Brand)
class ManageBrandHandler:
    @handle(CreateBrand)
    def create_brand(self, command):
        repo = current_domain.repository_for(Brand)
        brand = Brand.create(
            name=command.name,
            description=command.description,
            logo=command.logo,
            is_active=command.is_active,
        )
        _ensure_unique(repo, brand)
        repo.add(brand)
        logger.info("brand_created", brand_id=str(brand.id), slug=brand.slug)
        return str(brand.id)

    @handle(UpdateBrand)
    def update_brand(self, command):
        repo = current_domain.repository_for(Brand)
        brand = load(Brand, command.brand_id)
        brand.update(
            name=command.name,
            description=command.description,
            logo=command.logo,
            is_active=command.is_active,
        )
        _ensure_unique(repo, brand)
        repo.add(brand)

    @handle(DeleteBrand)
    def delete_brand(self, command):
        repo = current_domain.repository_for(Brand)
        brand = load(Brand, command.brand_id)
        repo._dao.delete(brand)
        logger.info("brand_deleted", brand_id=str(command.brand_id))
