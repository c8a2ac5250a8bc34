"""Database repositories for the Grievance API."""

from grievance_api.database.repositories.base import BaseRepository
from grievance_api.database.repositories.complaint import ComplaintRepository
from grievance_api.database.repositories.complaint_log import ComplaintLogRepository
from grievance_api.database.repositories.escalation import EscalationRepository
from grievance_api.database.repositories.evidence import EvidenceRepository
from grievance_api.database.repositories.resolution import ResolutionRepository
from grievance_api.database.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "ComplaintLogRepository",
    "ComplaintRepository",
    "EscalationRepository",
    "EvidenceRepository",
    "ResolutionRepository",
    "UserRepository",
]
