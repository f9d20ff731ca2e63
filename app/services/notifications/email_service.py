"""
Email notification service for feedback submissions.
"""

import asyncio
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.config import Settings, get_settings
from app.core.exceptions import NotificationError
from app.utils.helpers import utc_now
from app.utils.logger import get_logger

logger = get_logger(__name__)

# Set up Jinja2 environment for email templates
TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates" / "emails"
jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(['html', 'xml'])
)


class EmailService:
    """Sends templated HTML + plain text email over SMTP."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    async def send_feedback_notification(self, name: str, email: str, message: str, feedback_id: str):
        """
        Notify the administrator about a new feedback submission.

        Raises:
            NotificationError: configuration is missing or delivery failed
        """
        if not self.settings.ADMIN_EMAIL:
            raise NotificationError("ADMIN_EMAIL environment variable is not set")
        if not self.settings.EMAIL_USER:
            raise NotificationError("EMAIL_USER environment variable is not set")

        context = {
            "name": name,
            "email": email,
            "message": message,
            "feedback_id": feedback_id,
            "received_at": utc_now().strftime("%Y-%m-%d %H:%M:%S UTC"),
        }
        await self._send(
            to_address=self.settings.ADMIN_EMAIL,
            subject=f"New Feedback Received from {name}",
            template_name="feedback_notification",
            context=context,
            from_name=self.settings.EMAIL_FROM_NAME,
        )

    async def send_confirmation_email(self, name: str, email: str):
        """
        Thank the submitter for their feedback.

        Raises:
            NotificationError: configuration is missing or delivery failed
        """
        if not self.settings.EMAIL_USER:
            raise NotificationError("EMAIL_USER environment variable is not set")

        await self._send(
            to_address=email,
            subject="We received your feedback!",
            template_name="feedback_confirmation",
            context={"name": name},
            from_name="Support Team",
        )

    async def _send(self, to_address: str, subject: str, template_name: str, context: dict, from_name: str):
        """Render both template variants and deliver them in a worker thread."""
        mail = MIMEMultipart("alternative")
        mail["Subject"] = subject
        mail["From"] = formataddr((from_name, self.settings.EMAIL_USER))
        mail["To"] = to_address
        mail.attach(MIMEText(self._render(f"{template_name}.txt", context), "plain"))
        mail.attach(MIMEText(self._render(f"{template_name}.html", context), "html"))

        try:
            await asyncio.to_thread(self._deliver, to_address, mail)
            logger.info(f"✅ Email '{subject}' sent to {to_address}")
        except (smtplib.SMTPException, OSError) as e:
            self._log_environment_check()
            raise NotificationError(f"SMTP error: {str(e)}") from e

    def _deliver(self, to_address: str, mail: MIMEMultipart):
        """Blocking SMTP delivery."""
        if not self.settings.EMAIL_HOST:
            raise NotificationError("EMAIL_HOST environment variable is not set")

        host = self.settings.EMAIL_HOST
        port = self.settings.EMAIL_PORT
        timeout = self.settings.EMAIL_TIMEOUT_SECONDS
        context = ssl.create_default_context()

        if self.settings.EMAIL_SECURE:
            with smtplib.SMTP_SSL(host, port, context=context, timeout=timeout) as server:
                self._login(server)
                server.sendmail(self.settings.EMAIL_USER, [to_address], mail.as_string())
        else:
            with smtplib.SMTP(host, port, timeout=timeout) as server:
                if port == 587:
                    server.starttls(context=context)
                self._login(server)
                server.sendmail(self.settings.EMAIL_USER, [to_address], mail.as_string())

    def _login(self, server: smtplib.SMTP):
        if self.settings.smtp_auth_enabled:
            server.login(self.settings.EMAIL_USER, self.settings.EMAIL_PASSWORD)

    @staticmethod
    def _render(template_file: str, context: dict) -> str:
        return jinja_env.get_template(template_file).render(**context)

    def _log_environment_check(self):
        logger.error("Email environment check:")
        logger.error(f"- EMAIL_USER: {'Set' if self.settings.EMAIL_USER else 'NOT SET'}")
        logger.error(f"- EMAIL_PASSWORD: {'Set' if self.settings.EMAIL_PASSWORD else 'NOT SET'}")
        logger.error(f"- ADMIN_EMAIL: {'Set' if self.settings.ADMIN_EMAIL else 'NOT SET'}")
        logger.error(f"- EMAIL_HOST: {self.settings.EMAIL_HOST or 'NOT SET'}")
        logger.error(f"- EMAIL_PORT: {self.settings.EMAIL_PORT}")


# Global email service instance
_email_service = None


def get_email_service() -> EmailService:
    """Get the global email service instance."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
