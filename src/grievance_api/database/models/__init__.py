"""Database models for the Grievance API."""

from grievance_api.database.models.base import BaseDBModel
from grievance_api.database.models.base import Capability
from grievance_api.database.models.base import ComplaintAction
from grievance_api.database.models.base import ComplaintStatus
from grievance_api.database.models.base import Gender
from grievance_api.database.models.base import Urgency
from grievance_api.database.models.base import UserRole
from grievance_api.database.models.complaint import Complaint
from grievance_api.database.models.complaint import ComplaintCreate
from grievance_api.database.models.complaint import ComplaintSubmission
from grievance_api.database.models.complaint import GrievanceDetail
from grievance_api.database.models.complaint_log import ComplaintLogCreate
from grievance_api.database.models.complaint_log import ComplaintLogEntry
from grievance_api.database.models.escalation import Escalation
from grievance_api.database.models.escalation import EscalationCreate
from grievance_api.database.models.evidence import Evidence
from grievance_api.database.models.evidence import EvidenceCreate
from grievance_api.database.models.evidence import EvidenceUpload
from grievance_api.database.models.resolution import Resolution
from grievance_api.database.models.resolution import ResolutionCreate
from grievance_api.database.models.user import CommitteeMember
from grievance_api.database.models.user import User
from grievance_api.database.models.user import UserRoleUpdate

__all__ = [
    "BaseDBModel",
    "Capability",
    "CommitteeMember",
    "Complaint",
    "ComplaintAction",
    "ComplaintCreate",
    "ComplaintLogCreate",
    "ComplaintLogEntry",
    "ComplaintStatus",
    "ComplaintSubmission",
    "Escalation",
    "EscalationCreate",
    "Evidence",
    "EvidenceCreate",
    "EvidenceUpload",
    "Gender",
    "GrievanceDetail",
    "Resolution",
    "ResolutionCreate",
    "Urgency",
    "User",
    "UserRole",
    "UserRoleUpdate",
]
