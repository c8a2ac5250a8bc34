"""Automatic escalation of complaints that missed their deadline."""

import logging

from datetime import UTC
from datetime import datetime

from grievance_api.database.repositories.complaint import ComplaintRepository
from grievance_api.database.repositories.user import UserRepository
from grievance_api.services.exceptions import GrievanceError
from grievance_api.services.exceptions import PersistenceError
from grievance_api.services.grievance_service import GrievanceService

logger = logging.getLogger(__name__)

DEADLINE_MISSED_REASON = "Resolution deadline was missed."


class EscalationService:
    """Finds overdue in-progress complaints and escalates them to an admin."""

    def __init__(self, grievance_service: GrievanceService | None = None):
        self.grievance_service = grievance_service or GrievanceService()
        self.complaint_repository = ComplaintRepository()
        self.user_repository = UserRepository()

    async def sweep(self) -> int:
        """Escalate every overdue complaint. Returns how many were escalated.

        Each complaint is escalated in its own transaction; a failure is
        logged and the sweep moves on to the next one.
        """
        admin = await self.user_repository.get_first_admin()
        if admin is None:
            logger.warning("Escalation sweep skipped: no admin user to escalate to")
            return 0

        overdue = await self.complaint_repository.get_overdue(datetime.now(UTC))
        if not overdue:
            logger.info("Escalation sweep: no overdue complaints found")
            return 0

        logger.info(f"Escalation sweep: {len(overdue)} overdue complaints to escalate")

        escalated = 0
        for complaint in overdue:
            try:
                await self.grievance_service.escalate(
                    complaint.id, DEADLINE_MISSED_REASON, admin.id, automatic=True
                )
                escalated += 1
            except PersistenceError:
                logger.exception(f"Could not persist escalation of complaint {complaint.id}")
            except GrievanceError as e:
                logger.warning(f"Skipped escalation of complaint {complaint.id}: {e}")
            except Exception:
                logger.exception(f"Failed to escalate complaint {complaint.id}")

        logger.info(f"Escalation sweep completed: {escalated}/{len(overdue)} escalated")
        return escalated


def get_escalation_service() -> EscalationService:
    """Get escalation service instance."""
    return EscalationService()
