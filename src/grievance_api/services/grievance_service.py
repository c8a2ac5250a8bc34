"""Grievance lifecycle service for the Grievance API.

Every transition runs in one database transaction: the complaint row is
re-read under a row lock, validated, updated with a status-conditional
UPDATE, and logged before commit. Notifications go out after commit.
"""

import logging

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC
from datetime import datetime
from typing import Any

import asyncpg

from asyncpg import Connection

from grievance_api.database.connection import get_db_transaction
from grievance_api.database.models.base import SYSTEM_ROLE
from grievance_api.database.models.base import Capability
from grievance_api.database.models.base import ComplaintAction
from grievance_api.database.models.base import ComplaintStatus
from grievance_api.database.models.complaint import Complaint
from grievance_api.database.models.complaint import ComplaintCreate
from grievance_api.database.models.complaint import ComplaintSubmission
from grievance_api.database.models.complaint import GrievanceDetail
from grievance_api.database.models.complaint_log import ComplaintLogCreate
from grievance_api.database.models.escalation import Escalation
from grievance_api.database.models.escalation import EscalationCreate
from grievance_api.database.models.evidence import EvidenceCreate
from grievance_api.database.models.evidence import EvidenceUpload
from grievance_api.database.models.resolution import ResolutionCreate
from grievance_api.database.models.user import CommitteeMember
from grievance_api.database.models.user import User
from grievance_api.database.repositories.complaint import ComplaintRepository
from grievance_api.database.repositories.complaint_log import ComplaintLogRepository
from grievance_api.database.repositories.escalation import EscalationRepository
from grievance_api.database.repositories.evidence import EvidenceRepository
from grievance_api.database.repositories.resolution import ResolutionRepository
from grievance_api.database.repositories.user import UserRepository
from grievance_api.services.deadline_service import classify_urgency
from grievance_api.services.deadline_service import compute_deadline
from grievance_api.services.evidence_service import EvidenceStore
from grievance_api.services.evidence_service import EvidenceUploadError
from grievance_api.services.exceptions import ConflictError
from grievance_api.services.exceptions import ForbiddenError
from grievance_api.services.exceptions import GrievanceError
from grievance_api.services.exceptions import InvalidOperationError
from grievance_api.services.exceptions import NotFoundError
from grievance_api.services.exceptions import PersistenceError
from grievance_api.services.notification_service import NotificationDispatcher
from grievance_api.services.notification_service import NotificationKind

logger = logging.getLogger(__name__)

ASSIGNABLE_STATUSES = (ComplaintStatus.PENDING, ComplaintStatus.ESCALATED)


@asynccontextmanager
async def grievance_transaction() -> AsyncGenerator[Connection]:
    """Open a transaction and translate store failures into service errors."""
    try:
        async with get_db_transaction() as connection:
            yield connection
    except GrievanceError:
        raise
    except (asyncpg.SerializationError, asyncpg.DeadlockDetectedError) as e:
        raise ConflictError("Concurrent update detected, please retry") from e
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
        raise PersistenceError("Database operation failed") from e
    except EvidenceUploadError as e:
        raise PersistenceError("Evidence could not be stored") from e


class GrievanceService:
    """Service for the complaint lifecycle: submit, assign, resolve, escalate."""

    def __init__(self):
        self.complaint_repository = ComplaintRepository()
        self.complaint_log_repository = ComplaintLogRepository()
        self.escalation_repository = EscalationRepository()
        self.resolution_repository = ResolutionRepository()
        self.evidence_repository = EvidenceRepository()
        self.user_repository = UserRepository()
        self.notification_dispatcher = NotificationDispatcher()
        self.evidence_store = EvidenceStore()

    async def submit(
        self,
        complainant_id: int,
        submission: ComplaintSubmission,
        evidence: EvidenceUpload | None = None,
        submitted_at: datetime | None = None,
    ) -> Complaint:
        """Register a new grievance in Pending with its SLA deadline."""
        tier = classify_urgency(submission.category)
        deadline = compute_deadline(submitted_at or datetime.now(UTC), tier.sla_hours)

        async with grievance_transaction() as connection:
            complainant = await self.user_repository.get_by_id(
                complainant_id, connection
            )
            if complainant is None:
                raise NotFoundError("Complainant user not found")

            if not complainant.has_capability(Capability.FILE_GRIEVANCE):
                raise ForbiddenError("This user may not submit grievances")

            complaint = await self.complaint_repository.create_complaint(
                ComplaintCreate(
                    complainant_id=complainant.id,
                    title=submission.title,
                    description=submission.description,
                    category=submission.category,
                    urgency=tier.urgency,
                    deadline=deadline,
                ),
                connection,
            )

            if evidence is not None:
                await self._store_evidence(complaint.id, complainant.id, evidence, connection)

            await self.complaint_log_repository.append(
                ComplaintLogCreate(
                    complaint_id=complaint.id,
                    action_taken=ComplaintAction.SUBMITTED,
                    performed_by=complainant.id,
                    action_role=complainant.user_role,
                    remarks="Complaint submitted by user.",
                ),
                connection,
            )

        logger.info(
            f"Complaint {complaint.id} submitted by user {complainant_id} "
            f"({tier.urgency.value}, due {deadline.isoformat()})"
        )
        self._notify(
            NotificationKind.SUBMISSION_CONFIRMED,
            complainant.id,
            {
                "complaint_id": complaint.id,
                "category": complaint.category,
                "resolve_in": tier.label,
            },
        )
        return complaint

    async def assign(self, complaint_id: int, member_id: int, actor: User) -> Complaint:
        """Assign a Pending or Escalated complaint to a committee member."""
        async with grievance_transaction() as connection:
            complaint = await self._lock_complaint(complaint_id, connection)

            if member_id == complaint.complainant_id:
                raise InvalidOperationError(
                    "Cannot assign a complaint to the complainant"
                )

            if complaint.status not in ASSIGNABLE_STATUSES:
                raise InvalidOperationError(
                    f"Complaint cannot be assigned (status: {complaint.status})"
                )

            member = await self.user_repository.get_by_id(member_id, connection)
            if member is None:
                raise NotFoundError("Committee member not found")
            if not member.has_capability(Capability.COMMITTEE_MEMBER):
                raise InvalidOperationError(f"User {member_id} is not a committee member")

            updated = await self.complaint_repository.transition(
                complaint_id,
                ASSIGNABLE_STATUSES,
                ComplaintStatus.IN_PROGRESS,
                connection,
                assigned_to=member_id,
            )
            if updated is None:
                raise ConflictError(f"Complaint {complaint_id} changed during assignment")

            await self.complaint_log_repository.append(
                ComplaintLogCreate(
                    complaint_id=complaint_id,
                    action_taken=ComplaintAction.ASSIGNED,
                    performed_by=actor.id,
                    action_role=actor.user_role,
                    remarks=f"Assigned to committee member: {member.name}",
                ),
                connection,
            )

        logger.info(f"Complaint {complaint_id} assigned to user {member_id} by {actor.id}")
        self._notify(
            NotificationKind.ASSIGNED_TO_USER,
            updated.complainant_id,
            {"complaint_id": complaint_id},
        )
        self._notify(
            NotificationKind.ASSIGNED_TO_MEMBER,
            member_id,
            {
                "complaint_id": complaint_id,
                "title": updated.title,
                "urgency": updated.urgency,
                "deadline": updated.deadline.isoformat(),
            },
        )
        return updated

    async def resolve(
        self,
        complaint_id: int,
        actor: User,
        action_taken: str,
        remarks: str | None = None,
    ) -> Complaint:
        """Resolve an In Progress complaint; only its assignee or an admin may."""
        async with grievance_transaction() as connection:
            complaint = await self._lock_complaint(complaint_id, connection)

            if not actor.is_admin and complaint.assigned_to != actor.id:
                raise ForbiddenError("You are not authorized to resolve this grievance")

            if complaint.status != ComplaintStatus.IN_PROGRESS:
                raise InvalidOperationError(
                    f"Complaint is not in progress (status: {complaint.status})"
                )

            updated = await self.complaint_repository.transition(
                complaint_id,
                (ComplaintStatus.IN_PROGRESS,),
                ComplaintStatus.RESOLVED,
                connection,
            )
            if updated is None:
                raise ConflictError(f"Complaint {complaint_id} changed during resolution")

            await self.resolution_repository.create_resolution(
                ResolutionCreate(
                    complaint_id=complaint_id,
                    resolved_by=actor.id,
                    action_taken=action_taken,
                    remarks=remarks,
                ),
                connection,
            )
            await self.complaint_log_repository.append(
                ComplaintLogCreate(
                    complaint_id=complaint_id,
                    action_taken=ComplaintAction.RESOLVED,
                    performed_by=actor.id,
                    action_role=actor.user_role,
                    remarks=remarks,
                ),
                connection,
            )

        logger.info(f"Complaint {complaint_id} resolved by user {actor.id}")
        self._notify(
            NotificationKind.RESOLVED,
            updated.complainant_id,
            {"complaint_id": complaint_id, "action_taken": action_taken},
        )
        return updated

    async def escalate(
        self,
        complaint_id: int,
        reason: str,
        to_admin_id: int,
        *,
        automatic: bool,
    ) -> Escalation:
        """Escalate an In Progress complaint to an admin.

        The log entry is attributed to the receiving admin with the System
        role, whether the escalation came from a sweep or a manual request.
        """
        async with grievance_transaction() as connection:
            complaint = await self._lock_complaint(complaint_id, connection)

            if complaint.status != ComplaintStatus.IN_PROGRESS:
                raise InvalidOperationError(
                    f"Only in-progress complaints can be escalated (status: {complaint.status})"
                )

            target = await self.user_repository.get_by_id(to_admin_id, connection)
            if target is None:
                raise NotFoundError("Escalation target not found")
            if not target.is_admin:
                raise InvalidOperationError(f"User {to_admin_id} is not an admin")

            previous_assignee = None
            if complaint.assigned_to is not None:
                previous_assignee = await self.user_repository.get_by_id(
                    complaint.assigned_to, connection
                )

            updated = await self.complaint_repository.transition(
                complaint_id,
                (ComplaintStatus.IN_PROGRESS,),
                ComplaintStatus.ESCALATED,
                connection,
            )
            if updated is None:
                raise ConflictError(f"Complaint {complaint_id} changed during escalation")

            escalation = await self.escalation_repository.create_escalation(
                EscalationCreate(
                    complaint_id=complaint_id,
                    reason=reason,
                    escalated_from=complaint.assigned_to,
                    escalated_to=to_admin_id,
                ),
                connection,
            )
            await self.complaint_log_repository.append(
                ComplaintLogCreate(
                    complaint_id=complaint_id,
                    action_taken=ComplaintAction.AUTO_ESCALATED
                    if automatic
                    else ComplaintAction.ESCALATED,
                    performed_by=to_admin_id,
                    action_role=SYSTEM_ROLE,
                    remarks="Complaint escalated automatically due to missed deadline."
                    if automatic
                    else reason,
                ),
                connection,
            )

        logger.info(f"Complaint {complaint_id} escalated to admin {to_admin_id}: {reason}")
        self._notify(
            NotificationKind.ESCALATED,
            to_admin_id,
            {
                "complaint_id": complaint_id,
                "title": complaint.title,
                "reason": reason,
                "escalated_from": previous_assignee.name if previous_assignee else None,
            },
        )
        return escalation

    async def delete(self, complaint_id: int, actor: User) -> None:
        """Remove a complaint, keeping a Deleted entry in the log."""
        if not actor.is_admin:
            raise ForbiddenError("Only admins can delete complaints")

        async with grievance_transaction() as connection:
            await self._lock_complaint(complaint_id, connection)

            await self.complaint_log_repository.append(
                ComplaintLogCreate(
                    complaint_id=complaint_id,
                    action_taken=ComplaintAction.DELETED,
                    performed_by=actor.id,
                    action_role=actor.user_role,
                    remarks=f"Complaint (ID: {complaint_id}) deleted by Admin.",
                ),
                connection,
            )

            deleted = await self.complaint_repository.delete_by_id(
                complaint_id, connection
            )
            if not deleted:
                raise NotFoundError("Complaint not found or already deleted")

        logger.info(f"Complaint {complaint_id} deleted by admin {actor.id}")

    async def get_grievance_detail(self, complaint_id: int, viewer: User) -> GrievanceDetail:
        """Complaint with history, evidence and resolution, for permitted viewers."""
        complaint = await self.complaint_repository.get_by_id(complaint_id)
        if complaint is None:
            raise NotFoundError("Grievance not found")

        is_complainant = viewer.id == complaint.complainant_id
        is_assigned_member = (
            viewer.has_capability(Capability.COMMITTEE_MEMBER)
            and complaint.assigned_to == viewer.id
        )
        if not (is_complainant or viewer.is_admin or is_assigned_member):
            raise ForbiddenError("Not authorized to view this grievance")

        resolution = None
        if complaint.status == ComplaintStatus.RESOLVED:
            resolution = await self.resolution_repository.get_by_complaint(complaint_id)

        return GrievanceDetail(
            grievance=complaint,
            resolution=resolution,
            evidence=await self.evidence_repository.get_by_complaint(complaint_id),
            history=await self.complaint_log_repository.get_by_complaint(complaint_id),
        )

    async def get_available_members(self, complaint_id: int) -> list[CommitteeMember]:
        """Committee members who may take a complaint (never its complainant)."""
        complaint = await self.complaint_repository.get_by_id(complaint_id)
        if complaint is None:
            raise NotFoundError("Complaint not found")

        return await self.user_repository.get_committee_members(
            exclude_id=complaint.complainant_id
        )

    async def get_history(self, complainant: User) -> list[Complaint]:
        """Complaints filed by a user, newest first."""
        return await self.complaint_repository.get_by_complainant(complainant.id)

    async def get_assigned(self, member: User) -> list[Complaint]:
        """Complaints currently assigned to a committee member, newest first."""
        if not member.has_capability(Capability.COMMITTEE_MEMBER):
            raise ForbiddenError("Only committee members have assigned grievances")

        return await self.complaint_repository.get_by_assignee(member.id)

    async def get_by_status(
        self, status: ComplaintStatus, viewer: User
    ) -> list[Complaint]:
        """Admin listing of complaints in one status, e.g. Pending or Escalated."""
        if not viewer.is_admin:
            raise ForbiddenError("Only admins can list grievances by status")

        return await self.complaint_repository.get_by_status(status)

    async def _lock_complaint(self, complaint_id: int, connection: Connection) -> Complaint:
        complaint = await self.complaint_repository.get_for_update(complaint_id, connection)
        if complaint is None:
            raise NotFoundError("Grievance not found")
        return complaint

    async def _store_evidence(
        self,
        complaint_id: int,
        uploader_id: int,
        evidence: EvidenceUpload,
        connection: Connection,
    ) -> None:
        if not self.evidence_store.is_configured:
            logger.info(
                f"No evidence store configured, attachment for complaint {complaint_id} not persisted"
            )
            return

        file_url = await self.evidence_store.upload(complaint_id, evidence)
        await self.evidence_repository.create_evidence(
            EvidenceCreate(
                complaint_id=complaint_id,
                file_name=evidence.file_name,
                file_url=file_url,
                uploaded_by=uploader_id,
            ),
            connection,
        )

    def _notify(
        self, kind: NotificationKind, recipient_id: int, payload: dict[str, Any]
    ) -> None:
        try:
            self.notification_dispatcher.dispatch(kind, recipient_id, payload)
        except Exception:
            logger.exception(
                f"Could not schedule {kind.value} notification for complaint "
                f"{payload.get('complaint_id')}"
            )


def get_grievance_service() -> GrievanceService:
    """Get grievance service instance."""
    return GrievanceService()
