"""Escalation models for the Grievance API."""

from pydantic import BaseModel

from grievance_api.database.models.base import BaseDBModel


class Escalation(BaseDBModel):
    """Escalation of a complaint to an admin. Immutable once written."""

    complaint_id: int
    reason: str
    escalated_from: int | None = None
    escalated_to: int


class EscalationCreate(BaseModel):
    """Escalation creation model."""

    complaint_id: int
    reason: str
    escalated_from: int | None = None
    escalated_to: int
