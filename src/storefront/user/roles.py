"""Role changes: self-service premium toggle and admin assignment."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class TogglePremium:
    user_id = Identifier(required=True)


@storefront.command(part_of="User")
class ChangeUserRole:
    user_id = Identifier(required=True)
    role = String(required=True, max_length=20)


@storefront.command_handler(part_of=User)
class UserRoleHandler:
    @handle(TogglePremium)
    def toggle_premium(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.toggle_premium()
        repo.add(user)

        logger.info("Premium toggled", user_id=str(user.id), role=user.role)
        return user.role

    @handle(ChangeUserRole)
    def change_role(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_role(command.role)
        repo.add(user)

        logger.info("Role changed", user_id=str(user.id), role=user.role)
        return user.role
