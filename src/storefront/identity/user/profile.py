"""Profile updates: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.registration import ensure_email_available, validate_password
from storefront.identity.user.user import User
from storefront.shared.lookup import load
from storefront.utils.security import hash_password


@storefront.command(part_of="User")
class UpdateUser:
    user_id: Identifier(required=True)
    name: String(max_length=100)
    email: String(max_length=254)
    password: String(max_length=128)
    address: String(max_length=500)


@storefront.command_handler(part_of=User)
class UpdateUserHandler:
    @handle(UpdateUser)
    def update_user(self, command):
        user = load(User, command.user_id)
        if command.email:
            ensure_email_available(command.email, user_id=user.id)
        password_hash = None
        if command.password:
            validate_password(command.password)
            password_hash = hash_password(command.password)

        user.update_profile(
            name=command.name,
            email=command.email,
            password_hash=password_hash,
            address=command.address,
        )
        current_domain.repository_for(User).add(user)
