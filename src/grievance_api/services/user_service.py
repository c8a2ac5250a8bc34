"""Admin user management for the Grievance API."""

import logging

from grievance_api.database.models.base import ComplaintAction
from grievance_api.database.models.base import UserRole
from grievance_api.database.models.complaint_log import ComplaintLogCreate
from grievance_api.database.models.user import User
from grievance_api.database.models.user import UserRoleUpdate
from grievance_api.database.repositories.complaint_log import ComplaintLogRepository
from grievance_api.database.repositories.user import UserRepository
from grievance_api.services.exceptions import ForbiddenError
from grievance_api.services.exceptions import InvalidOperationError
from grievance_api.services.exceptions import NotFoundError
from grievance_api.services.grievance_service import grievance_transaction

logger = logging.getLogger(__name__)


class UserService:
    """Role and committee membership changes, recorded in the complaint log."""

    def __init__(self):
        self.user_repository = UserRepository()
        self.complaint_log_repository = ComplaintLogRepository()

    async def update_user_role(
        self, user_id: int, update: UserRoleUpdate, actor: User
    ) -> User:
        """Change a user's role and committee membership."""
        if not actor.is_admin:
            raise ForbiddenError("Only admins can change user roles")

        if update.is_committee_member and update.user_role != UserRole.STAFF:
            raise InvalidOperationError(
                'Only users with the role "Staff" can be made committee members'
            )

        async with grievance_transaction() as connection:
            user = await self.user_repository.get_by_id(user_id, connection)
            if user is None:
                raise NotFoundError("User not found")

            updated = await self.user_repository.update_role_and_membership(
                user_id, update, connection
            )
            if updated is None:
                raise NotFoundError("User not found")

            await self.complaint_log_repository.append(
                ComplaintLogCreate(
                    complaint_id=None,
                    action_taken=ComplaintAction.USER_ROLE_UPDATED,
                    performed_by=actor.id,
                    action_role=actor.user_role,
                    remarks=(
                        f"Updated role of user {user.name} (ID: {user_id}) to "
                        f"{update.user_role}, Committee Member: {update.is_committee_member}"
                    ),
                ),
                connection,
            )

        logger.info(f"User {user_id} role set to {update.user_role} by admin {actor.id}")
        return updated
