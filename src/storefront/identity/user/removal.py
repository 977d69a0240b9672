"""Account removal: command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.user import User
from storefront.shared.lookup import load
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class DeleteUser:
    user_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class DeleteUserHandler:
    @handle(DeleteUser)
    def delete_user(self, command):
        user = load(User, command.user_id)
        current_domain.repository_for(User)._dao.delete(user)
        logger.info("user_deleted", user_id=str(command.user_id))
