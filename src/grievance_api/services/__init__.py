"""Service layer for the Grievance API."""

from grievance_api.services.escalation_service import EscalationService
from grievance_api.services.grievance_service import GrievanceService
from grievance_api.services.notification_service import NotificationDispatcher
from grievance_api.services.user_service import UserService

__all__ = [
    "EscalationService",
    "GrievanceService",
    "NotificationDispatcher",
    "UserService",
]
