"""Role changes: command and handler.

Not exposed over HTTP; administrators are promoted from the management CLI.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.user import User, UserRole
from storefront.shared.lookup import load
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class ChangeUserRole:
    user_id: Identifier(required=True)
    role: String(required=True, choices=UserRole)


@storefront.command_handler(part_of=User)
class ChangeUserRoleHandler:
    @handle(ChangeUserRole)
    def change_role(self, command):
        user = load(User, command.user_id)
        user.change_role(command.role)
        current_domain.repository_for(User).add(user)
        logger.info("user_role_changed", user_id=str(user.id), role=user.role)
