"""Pydantic request/response schemas for the Identity API.

These are external contracts, kept separate from internal Protean
commands. The password hash never appears in any response model.
"""

from datetime import datetime

from storefront.api.schemas import CamelModel


class RegisterRequest(CamelModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    address: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jane Doe",
                    "email": "jane@example.com",
                    "password": "s3cret!",
                    "address": "1 High Street",
                }
            ]
        }
    }


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class UpdateUserRequest(CamelModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    address: str | None = None


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    address: str | None = None
    role: str
    is_admin: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            address=user.address,
            role=user.role,
            is_admin=user.is_admin,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthResponse(CamelModel):
    user: UserResponse
    token: str
