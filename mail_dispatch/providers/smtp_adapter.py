"""
SMTP Email Adapter Implementation

Concrete implementation of the EmailAdapter that delivers directly over SMTP.
"""

from dataclasses import dataclass

from mail_dispatch import config, logger
from mail_dispatch.providers.email_adapter import (
    EmailAdapter, EmailMessage, EmailResponse, SendErrorKind, TransportConfig
)
from mail_dispatch.providers.smtp_client import SmtpClient


@dataclass
class SmtpSettings:
    host: str
    port: int
    username: str
    password: str
    use_auth: bool
    timeout: int

    @classmethod
    def from_transport_config(cls, transport: TransportConfig) -> 'SmtpSettings':
        return cls(
            host=transport.host,
            port=transport.port,
            username=transport.username,
            password=transport.password,
            use_auth=transport.smtp_enabled,
            timeout=config.SMTP_TIMEOUT
        )


class SmtpAdapter(EmailAdapter):
    """SMTP implementation of the EmailAdapter interface."""

    def get_provider_name(self) -> str:
        return "SMTP"

    def build_client(self, message: EmailMessage) -> SmtpClient:
        """Configure an SmtpClient with every field of the message."""
        settings = SmtpSettings.from_transport_config(message.transport_config)

        client = SmtpClient(timeout=settings.timeout)
        client.host = settings.host
        client.port = settings.port
        client.smtp_auth = settings.use_auth
        client.username = settings.username
        client.password = settings.password

        client.set_from(message.from_address.email, message.from_address.name)
        for recipient in message.reply_to:
            client.add_reply_to(recipient.email, recipient.name)
        for recipient in message.to:
            client.add_address(recipient.email, recipient.name)
        for recipient in message.cc:
            client.add_cc(recipient.email, recipient.name)
        for recipient in message.bcc:
            client.add_bcc(recipient.email, recipient.name)

        client.is_html(message.use_html)
        client.subject = message.subject
        # Body always comes from the HTML field, even in text mode
        client.body = message.html_body
        client.alt_body = message.alt_body

        for file_path in message.attachments:
            client.add_attachment(file_path)

        return client

    def send_email(self, message: EmailMessage) -> EmailResponse:
        """
        Send email via SMTP.

        Args:
            message: EmailMessage with email details and transport config

        Returns:
            EmailResponse with send result
        """
        client = self.build_client(message)

        logger.debug(
            'Sending email via SMTP',
            host=client.host,
            port=client.port,
            recipients=len(message.to) + len(message.cc) + len(message.bcc)
        )

        if not client.send():
            return EmailResponse(
                success=False,
                error='SMTP server refused the message',
                error_kind=SendErrorKind.TRANSPORT
            )

        return EmailResponse(success=True)
