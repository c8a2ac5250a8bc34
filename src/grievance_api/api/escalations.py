"""Escalation admin endpoints for the Grievance API."""

import logging

from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends

from grievance_api.auth.dependencies import require_admin
from grievance_api.database.models.user import User
from grievance_api.services.escalation_service import EscalationService
from grievance_api.services.escalation_service import get_escalation_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/escalations", tags=["escalations"])


@router.post("/sweep")
async def run_escalation_sweep(
    current_user: Annotated[User, Depends(require_admin)],
    escalation_service: Annotated[EscalationService, Depends(get_escalation_service)],
) -> dict[str, int]:
    """Escalate overdue complaints now instead of waiting for the worker."""
    logger.info(f"Manual escalation sweep requested by admin {current_user.id}")
    escalated = await escalation_service.sweep()
    return {"escalated": escalated}
