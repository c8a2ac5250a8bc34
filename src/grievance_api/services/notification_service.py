"""Best-effort grievance notification emails."""

import asyncio
import logging
import smtplib

from email.message import EmailMessage
from enum import Enum
from typing import Any

from grievance_api.config.settings import NotificationSettings
from grievance_api.config.settings import get_notification_settings
from grievance_api.database.models.user import User
from grievance_api.database.repositories.user import UserRepository
from grievance_api.services.exceptions import NotificationError

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    """Notifications sent after lifecycle transitions."""

    SUBMISSION_CONFIRMED = "submission_confirmed"
    ASSIGNED_TO_USER = "assigned_to_user"
    ASSIGNED_TO_MEMBER = "assigned_to_member"
    RESOLVED = "resolved"
    ESCALATED = "escalated"


def build_message(
    kind: NotificationKind, recipient: User, payload: dict[str, Any]
) -> tuple[str, str]:
    """Subject and plain-text body for a notification."""
    complaint_id = payload.get("complaint_id")
    greeting = f"Dear {recipient.name},\n\n"

    if kind == NotificationKind.SUBMISSION_CONFIRMED:
        return (
            f"Grievance #{complaint_id} received",
            greeting
            + f"Your grievance has been registered with ticket ID #{complaint_id}.\n"
            f"Category: {payload.get('category')}\n"
            f"It will be addressed within {payload.get('resolve_in')}.\n",
        )
    if kind == NotificationKind.ASSIGNED_TO_USER:
        return (
            f"Grievance #{complaint_id} assigned",
            greeting
            + f"Your grievance #{complaint_id} has been assigned to a committee "
            "member and is now in progress.\n",
        )
    if kind == NotificationKind.ASSIGNED_TO_MEMBER:
        return (
            f"New grievance assigned: #{complaint_id}",
            greeting
            + f"Grievance #{complaint_id} has been assigned to you.\n"
            f"Title: {payload.get('title')}\n"
            f"Urgency: {payload.get('urgency')}\n"
            f"Deadline: {payload.get('deadline')}\n",
        )
    if kind == NotificationKind.RESOLVED:
        return (
            f"Grievance #{complaint_id} resolved",
            greeting
            + f"The status of your grievance #{complaint_id} is now Resolved.\n"
            f"Action taken: {payload.get('action_taken')}\n",
        )
    return (
        f"Grievance #{complaint_id} escalated",
        greeting
        + f"Grievance #{complaint_id} ({payload.get('title')}) has been escalated "
        f"to you.\nReason: {payload.get('reason')}\n"
        f"Previously assigned to: {payload.get('escalated_from') or 'nobody'}\n",
    )


class NotificationDispatcher:
    """Sends notification emails without holding up the caller.

    ``dispatch`` schedules delivery as a background task and returns
    immediately; delivery failures are logged and never propagate.
    """

    def __init__(self, settings: NotificationSettings | None = None):
        self.settings = settings or get_notification_settings()
        self.user_repository = UserRepository()
        self._pending: set[asyncio.Task] = set()

    def dispatch(
        self, kind: NotificationKind, recipient_id: int, payload: dict[str, Any]
    ) -> None:
        """Schedule a notification on the running event loop."""
        task = asyncio.create_task(self.notify(kind, recipient_id, payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for every scheduled notification to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def notify(
        self, kind: NotificationKind, recipient_id: int, payload: dict[str, Any]
    ) -> bool:
        """Deliver one notification. Returns False if it could not be sent."""
        if not self.settings.enabled:
            logger.debug(f"SMTP not configured, skipping {kind.value} notification")
            return False

        try:
            recipient = await self.user_repository.get_by_id(recipient_id)
            if recipient is None:
                raise NotificationError(f"Recipient {recipient_id} not found")

            subject, body = build_message(kind, recipient, payload)
            await self._send(recipient.email, subject, body)
            logger.info(
                f"Sent {kind.value} notification for complaint "
                f"{payload.get('complaint_id')} to user {recipient_id}"
            )
            return True

        except Exception:
            logger.exception(
                f"Failed to send {kind.value} notification to user {recipient_id}"
            )
            return False

    async def _send(self, to_address: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = self.settings.from_address
        message["To"] = to_address
        message["Subject"] = subject
        message.set_content(body)

        try:
            await asyncio.to_thread(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"SMTP delivery to {to_address} failed") from e

    def _send_sync(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.settings.host, self.settings.port, timeout=self.settings.timeout
        ) as server:
            if self.settings.use_tls:
                server.starttls()
            if self.settings.username:
                server.login(self.settings.username, self.settings.password)
            server.send_message(message)
