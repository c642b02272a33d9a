"""
Outgoing mail over SMTP.

``EmailConfig.from_settings`` returns None when the SMTP settings are
incomplete; callers treat that as "mail disabled". Port 465 means
implicit TLS, any other port upgrades with STARTTLS when ``use_tls`` is
set.
"""

from __future__ import annotations

import smtplib
from dataclasses import dataclass, field
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Iterable, Optional

from app.config.settings import Settings
from app.core.exceptions import EmailServiceError
from app.core.logging import get_logger

from .validators import is_valid_email

logger = get_logger(__name__)

SMTP_TIMEOUT_SECONDS = 15.0
IMPLICIT_TLS_PORT = 465


class EmailError(ValueError):
    """A message cannot be built from the given parts."""


@dataclass(frozen=True)
class EmailMessage:
    subject: str
    to: list[str] = field(default_factory=list)
    body_text: str | None = None
    body_html: str | None = None

    def __post_init__(self) -> None:
        if not self.subject.strip():
            raise EmailError("Subject cannot be empty")
        if not self.to:
            raise EmailError("At least one recipient is required")
        if not (self.body_text or self.body_html):
            raise EmailError("A text or HTML body is required")
        bad = [address for address in self.to if not is_valid_email(address)]
        if bad:
            raise EmailError(f"Invalid recipient email: {', '.join(bad)}")


@dataclass(frozen=True)
class EmailConfig:
    smtp_host: str
    smtp_port: int
    username: str
    password: str
    use_tls: bool = True
    from_email: str | None = None
    from_name: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> Optional[EmailConfig]:
        if not settings.smtp_configured():
            return None
        return cls(
            smtp_host=settings.SMTP_HOST,
            smtp_port=int(settings.SMTP_PORT),
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            use_tls=settings.SMTP_TLS,
            from_email=settings.EMAIL_FROM,
            from_name=settings.APP_NAME,
        )

    @property
    def implicit_tls(self) -> bool:
        return self.smtp_port == IMPLICIT_TLS_PORT

    @property
    def sender_address(self) -> str:
        address = self.from_email or self.username
        return formataddr((self.from_name, address)) if self.from_name else address


def build_email(
    *,
    subject: str,
    to: Iterable[str],
    body_text: str | None = None,
    body_html: str | None = None,
) -> EmailMessage:
    return EmailMessage(subject=subject, to=list(to), body_text=body_text, body_html=body_html)


def _to_mime(message: EmailMessage, config: EmailConfig, message_id: str) -> MIMEMultipart:
    mime = MIMEMultipart('alternative')
    mime['Subject'] = message.subject
    mime['From'] = config.sender_address
    mime['To'] = ', '.join(message.to)
    mime['Message-ID'] = message_id

    # Last part is the preferred alternative.
    for body, subtype in ((message.body_text, 'plain'), (message.body_html, 'html')):
        if body:
            mime.attach(MIMEText(body, subtype, 'utf-8'))
    return mime


def _open_connection(config: EmailConfig) -> smtplib.SMTP:
    if config.implicit_tls:
        return smtplib.SMTP_SSL(config.smtp_host, config.smtp_port, timeout=SMTP_TIMEOUT_SECONDS)

    server = smtplib.SMTP(config.smtp_host, config.smtp_port, timeout=SMTP_TIMEOUT_SECONDS)
    if config.use_tls:
        server.starttls()
    return server


def send_email(message: EmailMessage, config: EmailConfig) -> str:
    """
    Deliver `message` and return its Message-ID.

    Raises:
        EmailServiceError: if connecting, authenticating or sending fails
    """
    message_id = make_msgid(domain=config.smtp_host)
    mime = _to_mime(message, config, message_id)

    try:
        with _open_connection(config) as server:
            if config.username and config.password:
                server.login(config.username, config.password)
            server.send_message(mime, to_addrs=message.to)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"SMTP delivery to {config.smtp_host}:{config.smtp_port} failed: {e}")
        raise EmailServiceError(f"Failed to send email: {e}") from e

    logger.info(f"Email {message_id} sent to {len(message.to)} recipient(s)")
    return message_id
