"""Compose an email once and send it through SMTP, SendGrid or Mailgun."""

from mail_dispatch.providers.email_adapter import (
    EmailAdapter,
    EmailMessage,
    EmailResponse,
    Recipient,
    SendErrorKind,
    TransportConfig,
    format_recipient,
)
from mail_dispatch.providers.email_service import EmailService, dispatch
from mail_dispatch.mailer import Mailer

__all__ = [
    'EmailAdapter',
    'EmailMessage',
    'EmailResponse',
    'EmailService',
    'Mailer',
    'Recipient',
    'SendErrorKind',
    'TransportConfig',
    'dispatch',
    'format_recipient',
]
