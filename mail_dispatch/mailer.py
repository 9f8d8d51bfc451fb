"""
Mailer - builder facade for composing and sending one message.

Example:
    >>> mailer = Mailer()
    >>> mailer.set_from('sender@example.com', 'Sender')
    >>> mailer.add_to('recipient@example.com', 'Recipient')
    >>> mailer.set_html('<h1>Hello</h1>')
    >>> mailer.set_text('Hello')
    >>> mailer.set_alt_body(True)
    >>> mailer.set_backend('sendgrid')
    >>> mailer.set_smtp_config('', 587, 'SG.api_key', '')
    >>> mailer.send()
"""

from typing import Optional

from mail_dispatch import config
from mail_dispatch.providers.email_adapter import (
    EmailMessage, EmailResponse, TransportConfig, format_recipient
)
from mail_dispatch.providers.email_service import EmailService
from mail_dispatch.utils.attachment_filter import admit_attachment


class Mailer:
    """Collects sender, recipients, bodies and attachments, then sends them."""

    def __init__(self, backend: str = 'smtp', transport_config: Optional[TransportConfig] = None):
        self.message = EmailMessage(
            backend=backend,
            transport_config=transport_config or TransportConfig()
        )

    @classmethod
    def from_env(cls) -> 'Mailer':
        """Create a Mailer using MAIL_BACKEND and the SMTP_* settings."""
        return cls(backend=config.MAIL_BACKEND, transport_config=TransportConfig.from_env())

    def set_from(self, email: str, name: str):
        self.message.from_address = format_recipient(email, name)

    def add_to(self, email: str, name: str = ''):
        self.message.to.append(format_recipient(email, name))

    def add_reply_to(self, email: str, name: str = ''):
        self.message.reply_to.append(format_recipient(email, name))

    def add_cc(self, email: str, name: str = ''):
        self.message.cc.append(format_recipient(email, name))

    def add_bcc(self, email: str, name: str = ''):
        self.message.bcc.append(format_recipient(email, name))

    def set_html(self, html: str):
        self.message.html_body = html
        self.message.use_html = True

    def set_text(self, text: str):
        self.message.text_body = text
        self.message.use_html = False

    def set_alt_body(self, include_alt_body: bool):
        """Send text_body as the plain alternative; otherwise it is sent empty."""
        self.message.include_alt_body = include_alt_body

    def add_attachment(self, file_path: str) -> bool:
        """Attach a file if its extension is allowed; others are dropped silently."""
        return admit_attachment(self.message.attachments, file_path)

    def use_smtp(self, enabled: bool):
        self.message.transport_config.smtp_enabled = enabled

    def set_smtp_config(self, host: str, port: int, username: str, password: str):
        transport = self.message.transport_config
        transport.host = host
        transport.port = port
        transport.username = username
        transport.password = password

    def set_transport_config(self, transport_config: TransportConfig):
        self.message.transport_config = transport_config

    def set_backend(self, backend: str):
        self.message.backend = backend

    def send_with_response(self) -> EmailResponse:
        return EmailService().dispatch_with_response(self.message)

    def send(self) -> bool:
        """Send the message. Returns False on any failure; never raises."""
        return EmailService().dispatch(self.message)
