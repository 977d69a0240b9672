"""FastAPI routes for the Identity context."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.api.schemas import MessageResponse
from storefront.identity.api.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UpdateUserRequest,
    UserResponse,
)
from storefront.identity.user.authentication import authenticate
from storefront.identity.user.profile import UpdateUser
from storefront.identity.user.registration import RegisterUser
from storefront.identity.user.removal import DeleteUser
from storefront.identity.user.user import User
from storefront.shared.lookup import load
from storefront.utils.security import issue_token

user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("/register", status_code=201, response_model=AuthResponse)
async def register(body: RegisterRequest) -> AuthResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password=body.password,
        address=body.address,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = load(User, user_id)
    return AuthResponse(user=UserResponse.from_user(user), token=issue_token(user_id))


@user_router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest) -> AuthResponse:
    user = authenticate(body.email, body.password)
    return AuthResponse(user=UserResponse.from_user(user), token=issue_token(str(user.id)))


@user_router.get("", response_model=list[UserResponse])
async def list_users() -> list[UserResponse]:
    users = current_domain.repository_for(User)._dao.query.order_by("-created_at").all().items
    return [UserResponse.from_user(user) for user in users]


@user_router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str) -> UserResponse:
    return UserResponse.from_user(load(User, user_id))


@user_router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: str, body: UpdateUserRequest) -> UserResponse:
    command = UpdateUser(
        user_id=user_id,
        name=body.name,
        email=body.email,
        password=body.password,
        address=body.address,
    )
    current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(load(User, user_id))


@user_router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str) -> MessageResponse:
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return MessageResponse(message="User deleted")
