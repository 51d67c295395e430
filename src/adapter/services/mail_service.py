"""Mail Service Implementations

SMTP delivery for configured deployments and a logging fallback otherwise.
"""

import asyncio
import logging
import smtplib
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from src.app.services.mail_service import MailMessage, MailService

logger = logging.getLogger(__name__)


class LoggingMailService(MailService):
    """
    Mail service that only logs messages

    Used when no SMTP host is configured.
    """

    async def send(self, message: MailMessage) -> bool:
        attachments = ", ".join(a.filename for a in message.attachments) or "none"
        logger.warning(
            f"[EMAIL] Delivery disabled. Would send to {message.to}: "
            f"{message.subject} (attachments: {attachments})"
        )
        return True


class SmtpMailService(MailService):
    """
    Mail service that delivers through an SMTP server

    Port 465 uses implicit TLS; any other port upgrades with STARTTLS.
    smtplib blocks, so each send runs in a worker thread.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.timeout = timeout

    def _build(self, message: MailMessage) -> MIMEMultipart:
        msg = MIMEMultipart("mixed")
        msg["Subject"] = message.subject
        msg["From"] = self.sender
        msg["To"] = message.to
        msg.attach(MIMEText(message.html, "html", "utf-8"))

        for attachment in message.attachments:
            _, subtype = attachment.mime_type.split("/", 1)
            part = MIMEApplication(attachment.content, _subtype=subtype)
            part.add_header("Content-Disposition", "attachment", filename=attachment.filename)
            msg.attach(part)
        return msg

    def _deliver(self, msg: MIMEMultipart, recipient: str) -> None:
        if self.port == 465:
            server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        with server:
            if self.port != 465:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.sendmail(self.sender, [recipient], msg.as_string())

    async def send(self, message: MailMessage) -> bool:
        msg = self._build(message)
        try:
            await asyncio.to_thread(self._deliver, msg, message.to)
            logger.info(f"[EMAIL] Sent to {message.to}: {message.subject}")
            return True
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"[EMAIL] Authentication failed: {e}")
            return False
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"[EMAIL] Delivery to {message.to} failed: {e}")
            return False


def create_mail_service(config) -> MailService:
    """
    Factory function to create the configured mail service

    Args:
        config: ApplicationConfig (or any object with the EMAIL_* attributes)

    Returns:
        SmtpMailService when EMAIL_HOST is set, otherwise LoggingMailService
    """
    if not config.EMAIL_HOST:
        logger.info("EMAIL_HOST not configured, invoice e-mails will only be logged")
        return LoggingMailService()

    return SmtpMailService(
        host=config.EMAIL_HOST,
        port=config.EMAIL_PORT,
        username=config.EMAIL_USER,
        password=config.EMAIL_PASS,
        sender=config.EMAIL_FROM,
        timeout=config.EMAIL_TIMEOUT_SECONDS,
    )
