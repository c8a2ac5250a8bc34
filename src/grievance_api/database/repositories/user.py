"""User directory repository for the Grievance API."""

from asyncpg import Connection
from asyncpg import Record

from grievance_api.database.models.base import UserRole
from grievance_api.database.models.user import CommitteeMember
from grievance_api.database.models.user import User
from grievance_api.database.models.user import UserRoleUpdate
from grievance_api.database.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Read access to users plus the admin role update."""

    def __init__(self):
        super().__init__("users")

    def _record_to_model(self, record: Record) -> User:
        """Convert database record to User model."""
        return User.model_validate(dict(record))

    async def get_by_email(
        self, email: str, connection: Connection | None = None
    ) -> User | None:
        """Get user by email address."""
        return await self.find_one_by(connection, email=email)

    async def get_first_admin(self, connection: Connection | None = None) -> User | None:
        """The admin that receives escalations: the one with the lowest id."""
        query = "SELECT * FROM users WHERE user_role = $1 ORDER BY id ASC LIMIT 1"

        async with self._use_connection(connection) as conn:
            record = await conn.fetchrow(query, UserRole.ADMIN.value)
            return self._record_to_model(record) if record else None

    async def get_committee_members(
        self, exclude_id: int | None = None
    ) -> list[CommitteeMember]:
        """Committee members, optionally excluding one user (the complainant)."""
        query = """
            SELECT id, name, email, designation FROM users
            WHERE is_committee_member = TRUE
              AND ($1::bigint IS NULL OR id <> $1)
            ORDER BY name ASC
        """

        async with self._use_connection(None) as conn:
            records = await conn.fetch(query, exclude_id)
            return [CommitteeMember.model_validate(dict(record)) for record in records]

    async def update_role_and_membership(
        self, user_id: int, update: UserRoleUpdate, connection: Connection | None = None
    ) -> User | None:
        query = """
            UPDATE users
            SET user_role = $1, is_committee_member = $2
            WHERE id = $3
            RETURNING *
        """

        async with self._use_connection(connection) as conn:
            record = await conn.fetchrow(
                query, update.user_role, update.is_committee_member, user_id
            )
            return self._record_to_model(record) if record else None
