"""Base models and types for the Grievance API database."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel
from pydantic import ConfigDict


class UserRole(str, Enum):
    """User role enumeration."""

    STUDENT = "Student"
    STAFF = "Staff"
    ADMIN = "Admin"


class Gender(str, Enum):
    """Gender as recorded at registration."""

    FEMALE = "Female"
    MALE = "Male"
    OTHER = "Other"


class Capability(str, Enum):
    """Capabilities derived from a user's role and flags."""

    FILE_GRIEVANCE = "file_grievance"
    COMMITTEE_MEMBER = "committee_member"
    ADMIN = "admin"


class ComplaintStatus(str, Enum):
    """Complaint lifecycle status enumeration."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    ESCALATED = "Escalated"


class Urgency(str, Enum):
    """Complaint urgency tier."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ComplaintAction(str, Enum):
    """Action labels written to the complaint log."""

    SUBMITTED = "Submitted"
    ASSIGNED = "Assigned"
    RESOLVED = "Resolved"
    DELETED = "Deleted"
    AUTO_ESCALATED = "Auto-Escalated"
    ESCALATED = "Escalated"
    USER_ROLE_UPDATED = "User Role Updated"


# Role recorded on log entries written by the escalation machinery
SYSTEM_ROLE = "System"


class BaseDBModel(BaseModel):
    """Base model for database entities."""

    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
