"""User registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.user import User, UserRole, normalize_email
from storefront.utils.logging import get_logger
from storefront.utils.security import hash_password

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


def validate_password(password):
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})


def ensure_email_available(email, user_id=None):
    """Raise when another account already uses ``email``."""
    repo = current_domain.repository_for(User)
    clashes = repo._dao.query.filter(email=normalize_email(email)).all().items
    if any(str(existing.id) != str(user_id) for existing in clashes):
        raise ValidationError({"email": ["Email already in use"]})


@storefront.command(part_of="User")
class RegisterUser:
    name: String(max_length=100)
    email: String(max_length=254)
    password: String(max_length=128)
    address: String(max_length=500)
    role: String(max_length=20, default=UserRole.USER.value)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        if not command.name or not command.email or not command.password:
            raise ValidationError({"user": ["Name, email and password are required"]})
        validate_password(command.password)
        ensure_email_available(command.email)

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=hash_password(command.password),
            address=command.address,
            role=command.role or UserRole.USER.value,
        )
        current_domain.repository_for(User).add(user)
        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return str(user.id)
