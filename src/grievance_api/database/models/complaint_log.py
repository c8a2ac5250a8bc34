"""Complaint action log models for the Grievance API."""

from pydantic import BaseModel
from pydantic import ConfigDict

from grievance_api.database.models.base import BaseDBModel
from grievance_api.database.models.base import ComplaintAction


class ComplaintLogEntry(BaseDBModel):
    """Append-only record of a lifecycle transition or admin action."""

    complaint_id: int | None = None  # NULL for user management actions
    action_taken: ComplaintAction
    performed_by: int
    action_role: str
    remarks: str | None = None


class ComplaintLogCreate(BaseModel):
    """Model for appending to the complaint log."""

    complaint_id: int | None = None
    action_taken: ComplaintAction
    performed_by: int
    action_role: str
    remarks: str | None = None

    model_config = ConfigDict(use_enum_values=True)
