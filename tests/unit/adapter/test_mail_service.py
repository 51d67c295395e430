"""Unit tests for mail service implementations"""

import smtplib
import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from src.adapter.services.mail_service import (
    LoggingMailService,
    SmtpMailService,
    create_mail_service,
)
from src.app.services.mail_service import MailAttachment, MailMessage


@pytest.fixture
def message():
    return MailMessage(
        to="guest@example.com",
        subject="Invoice #KT202403050042 from Hillside Resort",
        html="<h3>Invoice #KT202403050042</h3>",
        attachments=[MailAttachment(filename="invoice_KT202403050042.pdf", content=b"%PDF-1.4")],
    )


def smtp_service(port=587, username="billing@example.com"):
    return SmtpMailService(
        host="smtp.example.com",
        port=port,
        username=username,
        password="secret",
        sender="billing@example.com",
        timeout=5.0,
    )


def mock_server():
    server = MagicMock()
    server.__enter__ = MagicMock(return_value=server)
    server.__exit__ = MagicMock(return_value=False)
    return server


@pytest.mark.asyncio
class TestSmtpMailService:

    @patch("src.adapter.services.mail_service.smtplib.SMTP")
    async def test_starttls_login_and_send(self, mock_smtp, message):
        """
        Given: A submission port
        When: A message is sent
        Then: The connection is upgraded, authenticated and the message delivered
        """
        server = mock_server()
        mock_smtp.return_value = server

        delivered = await smtp_service().send(message)

        assert delivered is True
        mock_smtp.assert_called_once_with("smtp.example.com", 587, timeout=5.0)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("billing@example.com", "secret")
        sender, recipients, raw = server.sendmail.call_args[0]
        assert sender == "billing@example.com"
        assert recipients == ["guest@example.com"]
        assert "invoice_KT202403050042.pdf" in raw
        assert "text/html" in raw

    @patch("src.adapter.services.mail_service.smtplib.SMTP_SSL")
    async def test_implicit_tls_on_port_465(self, mock_smtp_ssl, message):
        server = mock_server()
        mock_smtp_ssl.return_value = server

        delivered = await smtp_service(port=465).send(message)

        assert delivered is True
        server.starttls.assert_not_called()
        server.sendmail.assert_called_once()

    @patch("src.adapter.services.mail_service.smtplib.SMTP")
    async def test_no_login_without_username(self, mock_smtp, message):
        server = mock_server()
        mock_smtp.return_value = server

        await smtp_service(username="").send(message)

        server.login.assert_not_called()

    @patch("src.adapter.services.mail_service.smtplib.SMTP")
    async def test_authentication_failure_returns_false(self, mock_smtp, message):
        server = mock_server()
        server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")
        mock_smtp.return_value = server

        assert await smtp_service().send(message) is False
        server.sendmail.assert_not_called()

    @patch("src.adapter.services.mail_service.smtplib.SMTP")
    async def test_connection_failure_returns_false(self, mock_smtp, message):
        mock_smtp.side_effect = ConnectionRefusedError("refused")

        assert await smtp_service().send(message) is False


@pytest.mark.asyncio
class TestLoggingMailService:

    async def test_logs_and_reports_success(self, message, caplog):
        assert await LoggingMailService().send(message) is True
        assert "guest@example.com" in caplog.text


class TestCreateMailService:

    def test_logging_fallback_without_host(self):
        config = SimpleNamespace(EMAIL_HOST="")

        assert isinstance(create_mail_service(config), LoggingMailService)

    def test_smtp_when_host_configured(self):
        config = SimpleNamespace(
            EMAIL_HOST="smtp.example.com",
            EMAIL_PORT=587,
            EMAIL_USER="billing@example.com",
            EMAIL_PASS="secret",
            EMAIL_FROM="billing@example.com",
            EMAIL_TIMEOUT_SECONDS=5.0,
        )

        service = create_mail_service(config)

        assert isinstance(service, SmtpMailService)
        assert service.host == "smtp.example.com"
        assert service.port == 587
