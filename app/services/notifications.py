"""Outbound notifications (password reset email)."""

import logging
import smtplib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.config import Settings, get_settings

logger = logging.getLogger("teampulse.notifications")

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
RESET_PASSWORD_SUBJECT = "Password Reset Request"

_templates = Environment(loader=FileSystemLoader(TEMPLATES_DIR), autoescape=select_autoescape(["html"]))


class EmailDeliveryError(Exception):
    """Raised when a notification could not be delivered."""


@dataclass
class EmailMessage:
    to: str
    subject: str
    html: str


def build_reset_password_email(email: str, name: str, link: str) -> EmailMessage:
    """Render the reset-password email for a user."""
    template = _templates.get_template("email/request_reset_password.html")
    return EmailMessage(to=email, subject=RESET_PASSWORD_SUBJECT, html=template.render(name=name, link=link))


class NotificationGateway(ABC):
    """Delivers email messages. Implementations raise EmailDeliveryError on failure."""

    @abstractmethod
    def send(self, message: EmailMessage) -> None: ...


class SmtpNotificationGateway(NotificationGateway):
    """Sends email through an SMTP relay."""

    def __init__(self, settings: Settings) -> None:
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        self.sender = settings.SMTP_SENDER
        self.use_tls = settings.SMTP_USE_TLS
        self.timeout = settings.SMTP_TIMEOUT_SECONDS

    def send(self, message: EmailMessage) -> None:
        mime = MIMEMultipart("alternative")
        mime["From"] = self.sender
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime.attach(MIMEText(message.html, "html"))

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username:
                    server.login(self.username, self.password)
                server.send_message(mime)
        except (smtplib.SMTPException, OSError) as e:
            raise EmailDeliveryError(f"Failed to send email to {message.to}: {e}") from e

        logger.info("Email '%s' sent to %s", message.subject, message.to)


class ConsoleNotificationGateway(NotificationGateway):
    """Fallback when no SMTP relay is configured.

    In development the message, reset link included, is written to the log and
    counts as delivered. Elsewhere nothing reaches the recipient, so sending fails
    and the link is kept out of the log.
    """

    def __init__(self, log_messages: bool = True) -> None:
        self.log_messages = log_messages

    def send(self, message: EmailMessage) -> None:
        if not self.log_messages:
            logger.warning("No SMTP relay configured; email '%s' to %s dropped", message.subject, message.to)
            raise EmailDeliveryError("No SMTP relay configured")
        logger.info("EMAIL to=%s subject=%s\n%s", message.to, message.subject, message.html)


def get_notification_gateway(settings: Settings | None = None) -> NotificationGateway:
    """Pick the gateway for the configured environment."""
    settings = settings or get_settings()
    if settings.SMTP_HOST:
        return SmtpNotificationGateway(settings)
    return ConsoleNotificationGateway(log_messages=settings.APP_ENV == "development")
