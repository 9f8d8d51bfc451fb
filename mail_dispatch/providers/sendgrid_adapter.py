"""
SendGrid Email Adapter Implementation

Concrete implementation of the EmailAdapter for SendGrid.
"""

from dataclasses import dataclass
from typing import Optional

from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import (
    Attachment, Bcc, Cc, Disposition, FileContent, FileName, FileType,
    From, Mail, ReplyTo, To
)

from mail_dispatch import logger
from mail_dispatch.providers.email_adapter import (
    AttachmentError, EmailAdapter, EmailMessage, EmailResponse,
    SendErrorKind, TransportConfig
)
from mail_dispatch.utils.attachment_filter import describe_attachment, read_attachment_base64

ACCEPTED_STATUS = 202


@dataclass
class SendGridSettings:
    api_key: str

    @classmethod
    def from_transport_config(cls, transport: TransportConfig) -> 'SendGridSettings':
        return cls(api_key=transport.username)


def _display_name(name: str) -> Optional[str]:
    return name or None


class SendGridAdapter(EmailAdapter):
    """SendGrid implementation of the EmailAdapter interface."""

    def get_provider_name(self) -> str:
        return "SendGrid"

    def validate(self, message: EmailMessage) -> Optional[str]:
        problem = super().validate(message)
        if problem:
            return problem

        if not SendGridSettings.from_transport_config(message.transport_config).api_key:
            return 'Missing SendGrid API key in config'
        return None

    def build_mail(self, message: EmailMessage) -> Mail:
        """Translate the message into a SendGrid Mail object."""
        mail = Mail()
        mail.from_email = From(message.from_address.email, _display_name(message.from_address.name))

        # Each recipient list is handed over in one call
        if message.reply_to:
            mail.reply_to_list = [ReplyTo(r.email, _display_name(r.name)) for r in message.reply_to]
        # The helper keeps one entry per address, so repeated recipients collapse
        mail.to = [To(r.email, _display_name(r.name)) for r in message.to]
        if message.cc:
            mail.cc = [Cc(r.email, _display_name(r.name)) for r in message.cc]
        if message.bcc:
            mail.bcc = [Bcc(r.email, _display_name(r.name)) for r in message.bcc]

        mail.subject = message.subject
        mail.add_content(message.html_body, 'text/html')
        mail.add_content(message.alt_body, 'text/plain')

        for file_path in message.attachments:
            filename, mime_type = describe_attachment(file_path)
            try:
                encoded = read_attachment_base64(file_path)
            except OSError as e:
                raise AttachmentError(f'{file_path}: {e}') from e

            mail.add_attachment(Attachment(
                FileContent(encoded),
                FileName(filename),
                FileType(mime_type),
                Disposition('attachment')
            ))

        return mail

    def send_email(self, message: EmailMessage) -> EmailResponse:
        """
        Send email via SendGrid API.

        Args:
            message: EmailMessage with email details; the API key is taken
                from transport_config.username

        Returns:
            EmailResponse with send result
        """
        settings = SendGridSettings.from_transport_config(message.transport_config)
        mail = self.build_mail(message)

        # Send via SendGrid
        logger.debug(f'Sending email via SendGrid to {len(message.to)} recipient(s)')
        sg = SendGridAPIClient(settings.api_key)
        try:
            response = sg.send(mail)
        except HTTPError as e:
            # The client raises for 4xx/5xx instead of returning the response
            logger.error(f'SendGrid rejected email with status {e.status_code}', err=e)
            return EmailResponse(
                success=False,
                error=f'SendGrid returned status {e.status_code}',
                error_kind=SendErrorKind.REJECTED,
                status_code=e.status_code,
                raw_response=e.body
            )

        # Only 202 Accepted counts as success
        if response.status_code != ACCEPTED_STATUS:
            return EmailResponse(
                success=False,
                error=f'SendGrid returned status {response.status_code}',
                error_kind=SendErrorKind.REJECTED,
                status_code=response.status_code,
                raw_response=response.body
            )

        # Extract message ID from headers if available
        message_id = response.headers.get('X-Message-Id') if response.headers else None

        return EmailResponse(
            success=True,
            message_id=message_id,
            status_code=response.status_code,
            raw_response=response.body
        )
