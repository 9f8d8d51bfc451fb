"""
Email Adapter Pattern - Interface and Message Model

This module defines the backend-agnostic message model and the contract
(interface) that every delivery backend must implement, making it easy to
switch between SMTP, SendGrid and Mailgun without changing calling code.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Any, List
from dataclasses import dataclass, field

from mail_dispatch import config, logger

DEFAULT_SMTP_PORT = 587


@dataclass(frozen=True)
class Recipient:
    """An email address with an optional display name."""
    email: str
    name: str = ''


def format_recipient(email: str, name: str = '') -> Recipient:
    # No syntax validation, malformed addresses are left to the backend
    return Recipient(email=email, name=name)


@dataclass
class TransportConfig:
    """
    Shared connection parameters.

    Each adapter extracts its own settings from these fields: SMTP uses all
    of them, SendGrid reads its API key from ``username`` and Mailgun reads
    its API key from ``username`` and its sending domain from ``host``.
    """
    host: str = ''
    port: int = DEFAULT_SMTP_PORT
    username: str = ''
    password: str = ''
    smtp_enabled: bool = False

    @classmethod
    def from_env(cls) -> 'TransportConfig':
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USERNAME,
            password=config.SMTP_PASSWORD,
            smtp_enabled=config.SMTP_ENABLED
        )


@dataclass
class EmailMessage:
    """Standard email message format used across all adapters."""
    from_address: Optional[Recipient] = None
    to: List[Recipient] = field(default_factory=list)
    reply_to: List[Recipient] = field(default_factory=list)
    cc: List[Recipient] = field(default_factory=list)
    bcc: List[Recipient] = field(default_factory=list)
    html_body: str = ''
    text_body: str = ''
    use_html: bool = False
    include_alt_body: bool = False
    attachments: List[str] = field(default_factory=list)
    backend: str = 'smtp'
    transport_config: TransportConfig = field(default_factory=TransportConfig)

    @property
    def subject(self) -> str:
        # There is no subject setter; every backend sends an empty subject
        return ''

    @property
    def alt_body(self) -> str:
        """The plain text alternative, or '' when it is not requested."""
        return self.text_body if self.include_alt_body else ''


class SendErrorKind(str, Enum):
    UNKNOWN_BACKEND = 'unknown_backend'
    INVALID_MESSAGE = 'invalid_message'
    ATTACHMENT = 'attachment'
    REJECTED = 'rejected'
    TRANSPORT = 'transport'


@dataclass
class EmailResponse:
    """Standard response format from email providers."""
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[SendErrorKind] = None
    status_code: Optional[int] = None
    raw_response: Optional[Any] = None


class AttachmentError(Exception):
    """An attachment could not be read or encoded."""
    pass


class EmailAdapter(ABC):
    """
    Abstract base class (interface) for email providers.

    Any email provider implementation must extend this class and implement
    get_provider_name and send_email. Callers use send (boolean) or
    deliver (EmailResponse); neither raises.
    """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the name of this email provider."""
        pass

    @abstractmethod
    def send_email(self, message: EmailMessage) -> EmailResponse:
        """
        Translate the message into the provider's request shape and send it.

        Args:
            message: EmailMessage that already passed validate()

        Returns:
            EmailResponse object with send result

        Raises:
            Exception: Any transport fault; deliver() converts it
        """
        pass

    def validate(self, message: EmailMessage) -> Optional[str]:
        """Return a description of why the message cannot be sent, or None."""
        if message.from_address is None:
            return 'Message has no sender'
        return None

    def deliver(self, message: EmailMessage) -> EmailResponse:
        """Validate and send the message, converting every fault to a response."""
        provider = self.get_provider_name()
        try:
            problem = self.validate(message)
            if problem:
                logger.warn(f'{provider} rejected message before sending', error=problem)
                return EmailResponse(
                    success=False,
                    error=problem,
                    error_kind=SendErrorKind.INVALID_MESSAGE
                )

            return self.send_email(message)

        except AttachmentError as e:
            logger.error(f'{provider} attachment could not be prepared: {str(e)}', err=e)
            return EmailResponse(
                success=False,
                error=f'Failed to prepare attachment: {str(e)}',
                error_kind=SendErrorKind.ATTACHMENT
            )
        except Exception as e:
            logger.error(f'{provider} email send failed: {str(e)}', err=e)
            return EmailResponse(
                success=False,
                error=f'Failed to send via {provider}: {str(e)}',
                error_kind=SendErrorKind.TRANSPORT
            )

    def send(self, message: EmailMessage) -> bool:
        return self.deliver(message).success
