"""Deadline escalation worker for the Grievance API."""

import logging

from arq import cron

from grievance_api.config.settings import get_escalation_settings
from grievance_api.services.escalation_service import get_escalation_service
from grievance_api.workers.base import BaseWorker
from grievance_api.workers.base import create_worker_class

logger = logging.getLogger(__name__)


class EscalationSweepWorker(BaseWorker):
    """Worker that escalates In Progress complaints past their deadline."""

    async def sweep_overdue_complaints(self, ctx: dict) -> int:
        """Run one escalation sweep and report how many complaints moved."""
        try:
            logger.info("Starting overdue complaint sweep")

            service = get_escalation_service()
            escalated = await service.sweep()

            logger.info(f"Overdue complaint sweep finished, {escalated} escalated")
            return escalated

        except Exception:
            logger.exception("Error sweeping overdue complaints")
            return 0


# Define worker functions
async def sweep_overdue_complaints(ctx: dict) -> int:
    """Worker function for the periodic escalation sweep."""
    try:
        worker = EscalationSweepWorker()
        return await worker.sweep_overdue_complaints(ctx)
    except Exception:
        logger.exception("Error in escalation sweep worker")
        return 0


def sweep_minutes(interval_minutes: int) -> set[int]:
    """Minutes of the hour on which the sweep fires."""
    return set(range(0, 60, interval_minutes))


_escalation_settings = get_escalation_settings()

# Create the worker class
EscalationWorker = create_worker_class(
    functions=[sweep_overdue_complaints],
    cron_jobs=[
        cron(
            sweep_overdue_complaints,
            minute=sweep_minutes(_escalation_settings.sweep_interval_minutes),
            run_at_startup=True,
            unique=True,
            timeout=_escalation_settings.job_timeout,
        )
    ],
    max_jobs=1,  # Sweeps never overlap within one worker
    job_timeout=_escalation_settings.job_timeout,
)
