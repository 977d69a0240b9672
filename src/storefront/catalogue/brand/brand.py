"""Brand aggregate root."""

import re
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from storefront.catalogue.shared.slug import slugify
from storefront.domain import storefront


def _slug_for(name):
    slug = slugify(name)
    if not slug:
        raise ValidationError({"name": ["Brand name must contain at least one letter or digit"]})
    return slug


@storefront.aggregate
class Brand:
    """A manufacturer or label that products are sold under.

    The slug is always derived from the name and is regenerated whenever the
    name changes.
    """

    name: String(required=True, max_length=100, unique=True)
    slug: String(required=True, max_length=120, unique=True)
    description: Text()
    logo: String(max_length=500)
    is_active: Boolean(default=True)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug and not re.fullmatch(r"[a-z0-9-]+", self.slug):
            raise ValidationError({"slug": ["Slug must contain only lowercase alphanumeric characters and hyphens"]})

    @classmethod
    def create(cls, name, description=None, logo=None, is_active=True):
        from storefront.catalogue.brand.events import BrandCreated

        if not name:
            raise ValidationError({"name": ["Brand name is required"]})

        now = datetime.now(UTC)
        brand = cls(
            name=name,
            slug=_slug_for(name),
            description=description,
            logo=logo,
            is_active=True if is_active is None else is_active,
            created_at=now,
            updated_at=now,
        )
        brand.raise_(BrandCreated(brand_id=brand.id, name=brand.name, slug=brand.slug))
        return brand

    def update(self, name=None, description=None, logo=None, is_active=None):
        from storefront.catalogue.brand.events import BrandUpdated

        if name:
            self.name = name
            self.slug = _slug_for(name)
        if description is not None:
            self.description = description
        if logo is not None:
            self.logo = logo
        if is_active is not None:
            self.is_active = is_active

        self.updated_at = datetime.now(UTC)
        self.raise_(
            BrandUpdated(
                brand_id=self.id,
                name=self.name,
                slug=self.slug,
                is_active=self.is_active,
            )
        )
