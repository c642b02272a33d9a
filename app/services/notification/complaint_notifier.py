"""
Best-effort email notifications for complaint events.

Two events are covered: a new submission (mailed to the admin address)
and a status change (mailed to the customer). Neither ever raises: a
missing mail configuration is reported as a skipped success and any
transport or rendering failure as a failed outcome.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional

from app.config.settings import Settings, settings as default_settings
from app.core.logging import get_logger
from app.services.notification.templates import PRIORITY_COLORS, STATUS_COLORS, render
from app.utils.email import EmailConfig, EmailMessage, build_email, send_email

logger = get_logger(__name__)

Sender = Callable[[EmailMessage, EmailConfig], str]

DATE_FORMAT = "%B %d, %Y"


@dataclass(frozen=True)
class NotificationOutcome:
    """Result of one notification attempt."""
    success: bool
    skipped: bool = False
    message_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def sent(cls, message_id: str) -> "NotificationOutcome":
        return cls(success=True, message_id=message_id)

    @classmethod
    def skip(cls, reason: str) -> "NotificationOutcome":
        return cls(success=True, skipped=True, error=reason)

    @classmethod
    def failed(cls, error: str) -> "NotificationOutcome":
        return cls(success=False, error=error)


def _label(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return "" if value is None else str(value)


def _format_date(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.strftime(DATE_FORMAT)


class ComplaintNotifier:
    """
    Sends complaint emails through SMTP.

    Works on any object exposing the complaint attributes (``title``,
    ``description``, ``category``, ``priority``, ``status``,
    ``date_submitted``, ``email``, ``customer_name``), typically a detached
    ``ComplaintResponse`` snapshot.
    """

    def __init__(
        self,
        email_config: Optional[EmailConfig],
        admin_email: Optional[str] = None,
        sender: Sender = send_email,
    ):
        self.email_config = email_config
        self.admin_email = admin_email
        self._send = sender

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ComplaintNotifier":
        settings = settings or default_settings
        return cls(
            email_config=EmailConfig.from_settings(settings),
            admin_email=settings.ADMIN_EMAIL,
        )

    @property
    def configured(self) -> bool:
        return self.email_config is not None

    # ------------------------------------------------------------------ #
    # Events
    # ------------------------------------------------------------------ #

    def notify_new_complaint(self, complaint: Any) -> NotificationOutcome:
        """Tell the admin address that a complaint was submitted."""
        if not self.configured:
            logger.warning("SMTP not configured. Skipping admin notification.")
            return NotificationOutcome.skip("SMTP not configured")

        if not self.admin_email:
            logger.warning("ADMIN_EMAIL not set. Skipping admin notification.")
            return NotificationOutcome.skip("No admin email configured")

        try:
            context = self._context(complaint)
            message = build_email(
                subject=f"New Complaint Submitted: {context['title']}",
                to=[self.admin_email],
                body_text=render("new_complaint.txt", context),
                body_html=render("new_complaint.html", context),
            )
            message_id = self._send(message, self.email_config)
        except Exception as e:
            logger.error(f"Error sending new complaint email: {e}")
            return NotificationOutcome.failed(str(e))

        logger.info(f"New complaint email sent: {message_id}")
        return NotificationOutcome.sent(message_id)

    def notify_status_change(self, complaint: Any) -> NotificationOutcome:
        """Tell the customer about the complaint's current status."""
        if not getattr(complaint, "email", None):
            logger.info("No customer email provided, skipping status update email")
            return NotificationOutcome(success=True)

        if not self.configured:
            logger.warning("SMTP not configured. Skipping status update email.")
            return NotificationOutcome.skip("SMTP not configured")

        try:
            context = self._context(complaint)
            message = build_email(
                subject=f"Complaint Status Update: {context['title']}",
                to=[complaint.email],
                body_text=render("status_update.txt", context),
                body_html=render("status_update.html", context),
            )
            message_id = self._send(message, self.email_config)
        except Exception as e:
            logger.error(f"Error sending status update email: {e}")
            return NotificationOutcome.failed(str(e))

        logger.info(f"Status update email sent: {message_id}")
        return NotificationOutcome.sent(message_id)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _context(complaint: Any) -> dict:
        priority = _label(complaint.priority)
        status = _label(complaint.status)
        return {
            "title": complaint.title,
            "description": complaint.description,
            "category": _label(complaint.category),
            "priority": priority,
            "priority_color": PRIORITY_COLORS.get(priority, PRIORITY_COLORS["Low"]),
            "status": status,
            "status_color": STATUS_COLORS.get(status, STATUS_COLORS["Pending"]),
            "date_submitted": _format_date(getattr(complaint, "date_submitted", None)),
            "customer_name": getattr(complaint, "customer_name", None),
            "email": getattr(complaint, "email", None),
            "updated_on": _format_date(datetime.now(timezone.utc)),
        }
