"""User aggregate root with role-specific profile value objects.

Every account is a single ``User``. Its ``role`` decides which optional
profile group is populated and which capabilities it holds; callers ask
``user.can(Capability.X)`` instead of inspecting the role directly.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String, ValueObject

from storefront.domain import storefront

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserRole(Enum):
    USER = "user"
    ADMIN = "admin"


class Capability(Enum):
    """Things a role may be allowed to do."""

    PLACE_ORDERS = "place_orders"
    EARN_LOYALTY = "earn_loyalty"
    MANAGE_CATALOGUE = "manage_catalogue"
    MANAGE_ORDERS = "manage_orders"


_ROLE_CAPABILITIES = {
    UserRole.USER.value: frozenset({Capability.PLACE_ORDERS, Capability.EARN_LOYALTY}),
    UserRole.ADMIN.value: frozenset(
        {
            Capability.PLACE_ORDERS,
            Capability.MANAGE_CATALOGUE,
            Capability.MANAGE_ORDERS,
        }
    ),
}


def normalize_email(email):
    return email.strip().lower() if email else email


@storefront.value_object(part_of="User")
class CustomerProfile:
    loyalty_points: Integer(default=0, min_value=0)


@storefront.value_object(part_of="User")
class AdminProfile:
    access_level: String(max_length=50, default="full")


@storefront.aggregate
class User:
    """A registered account. The password is only ever stored as a bcrypt hash."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    address: String(max_length=500)
    role: String(choices=UserRole, default=UserRole.USER.value)
    customer_profile: ValueObject(CustomerProfile)
    admin_profile: ValueObject(AdminProfile)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def email_must_be_valid(self):
        if self.email and not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @invariant.post
    def profile_must_match_role(self):
        if self.role == UserRole.ADMIN.value and self.customer_profile is not None:
            raise ValidationError({"role": ["Administrators do not carry a customer profile"]})
        if self.role == UserRole.USER.value and self.admin_profile is not None:
            raise ValidationError({"role": ["Customers do not carry an admin profile"]})

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def can(self, capability: Capability) -> bool:
        return capability in _ROLE_CAPABILITIES.get(self.role, frozenset())

    @classmethod
    def register(cls, name, email, password_hash, address=None, role=UserRole.USER.value):
        from storefront.identity.user.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=normalize_email(email),
            password_hash=password_hash,
            address=address,
            role=role,
            customer_profile=CustomerProfile() if role == UserRole.USER.value else None,
            admin_profile=AdminProfile() if role == UserRole.ADMIN.value else None,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=user.name,
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    def update_profile(self, name=None, email=None, password_hash=None, address=None):
        from storefront.identity.user.events import UserProfileUpdated

        if name:
            self.name = name
        if email:
            self.email = normalize_email(email)
        if password_hash:
            self.password_hash = password_hash
        if address is not None:
            self.address = address

        self.updated_at = datetime.now(UTC)
        self.raise_(UserProfileUpdated(user_id=self.id, name=self.name, email=self.email))

    def change_role(self, role):
        from storefront.identity.user.events import UserRoleChanged

        previous_role = self.role
        if role == previous_role:
            return

        with atomic_change(self):
            self.role = role
            if role == UserRole.ADMIN.value:
                self.customer_profile = None
                self.admin_profile = AdminProfile()
            else:
                self.admin_profile = None
                self.customer_profile = CustomerProfile()

        self.updated_at = datetime.now(UTC)
        self.raise_(UserRoleChanged(user_id=self.id, previous_role=previous_role, new_role=role))

