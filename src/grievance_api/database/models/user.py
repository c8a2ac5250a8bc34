"""User model for the Grievance API."""

from pydantic import BaseModel
from pydantic import ConfigDict

from grievance_api.database.models.base import BaseDBModel
from grievance_api.database.models.base import Capability
from grievance_api.database.models.base import Gender
from grievance_api.database.models.base import UserRole


class User(BaseDBModel):
    """User database model."""

    name: str
    email: str
    gender: Gender
    user_role: UserRole = UserRole.STUDENT
    is_committee_member: bool = False
    roll_no: str | None = None
    designation: str | None = None

    @property
    def capabilities(self) -> frozenset[Capability]:
        """Capabilities granted by role, gender and committee membership."""
        granted = set()
        if self.user_role == UserRole.ADMIN:
            granted.add(Capability.ADMIN)
        elif self.gender == Gender.FEMALE:
            granted.add(Capability.FILE_GRIEVANCE)
        if self.is_committee_member:
            granted.add(Capability.COMMITTEE_MEMBER)
        return frozenset(granted)

    def has_capability(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @property
    def is_admin(self) -> bool:
        return self.has_capability(Capability.ADMIN)


class CommitteeMember(BaseModel):
    """Committee member listing entry."""

    id: int
    name: str
    email: str
    designation: str | None = None

    model_config = ConfigDict(from_attributes=True)


class UserRoleUpdate(BaseModel):
    """Role and committee membership change requested by an admin."""

    user_role: UserRole
    is_committee_member: bool

    model_config = ConfigDict(use_enum_values=True)
