"""
Email Service - Registry and Dispatcher

This module selects the adapter named by a message's backend identifier and
runs it. Dispatch always reports a boolean; dispatch_with_response exposes
the underlying EmailResponse for callers that need the failure reason.
"""

from mail_dispatch.providers.email_adapter import (
    EmailAdapter, EmailMessage, EmailResponse, SendErrorKind
)
from mail_dispatch.providers.smtp_adapter import SmtpAdapter
from mail_dispatch.providers.sendgrid_adapter import SendGridAdapter
from mail_dispatch.providers.mailgun_adapter import MailgunAdapter
from mail_dispatch import logger


class EmailService:
    """
    Email service that manages adapters and provides a unified interface.

    This is the class that the Mailer facade uses to send messages. The
    adapter is chosen per message from message.backend.
    """

    # Registry of available adapters
    ADAPTERS = {
        'smtp': SmtpAdapter,
        'sendgrid': SendGridAdapter,
        'mailgun': MailgunAdapter
    }

    def get_adapter(self, backend: str):
        """
        Get an adapter instance for the backend identifier.

        Returns:
            EmailAdapter instance, or None if the backend is not registered
        """
        adapter_class = self.ADAPTERS.get(str(backend or '').lower())
        if not adapter_class:
            return None
        return adapter_class()

    def dispatch_with_response(self, message: EmailMessage) -> EmailResponse:
        """Send the message through its backend and return the full response."""
        adapter = self.get_adapter(message.backend)
        if adapter is None:
            available = ', '.join(self.ADAPTERS.keys())
            logger.warn(
                f'Unsupported email backend: {message.backend}',
                available=available
            )
            return EmailResponse(
                success=False,
                error=f'Unsupported email backend: {message.backend}. '
                      f'Available backends: {available}',
                error_kind=SendErrorKind.UNKNOWN_BACKEND
            )

        provider = adapter.get_provider_name()
        logger.info(
            f'Sending email via {provider}',
            to=len(message.to),
            cc=len(message.cc),
            bcc=len(message.bcc),
            attachments=len(message.attachments)
        )

        response = adapter.deliver(message)

        if response.success:
            logger.info(
                f'Email sent successfully via {provider}',
                message_id=response.message_id
            )
        else:
            logger.error(
                f'Email send failed via {provider}',
                error=response.error,
                error_kind=response.error_kind
            )

        return response

    def dispatch(self, message: EmailMessage) -> bool:
        return self.dispatch_with_response(message).success

    @classmethod
    def register_adapter(cls, backend: str, adapter_class: type):
        """
        Register a new email adapter.

        This allows adding custom backends at runtime.

        Args:
            backend: Backend identifier (e.g., 'custom_backend')
            adapter_class: Class that implements EmailAdapter
        """
        if not isinstance(adapter_class, type) or not issubclass(adapter_class, EmailAdapter):
            raise TypeError(f'{adapter_class} must implement EmailAdapter')

        cls.ADAPTERS[backend.lower()] = adapter_class
        logger.info(f'Registered email adapter: {backend}')


def dispatch(message: EmailMessage) -> bool:
    """Send a message through the backend it names. Never raises."""
    return EmailService().dispatch(message)
