"""
Mailgun Email Adapter Implementation

Concrete implementation of the EmailAdapter for the Mailgun messages API.
Mailgun receives one request per "to" recipient; cc, bcc and reply-to
are not forwarded.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

import requests

from mail_dispatch import config, logger
from mail_dispatch.providers.email_adapter import (
    EmailAdapter, EmailMessage, EmailResponse, SendErrorKind, TransportConfig
)


@dataclass
class MailgunSettings:
    api_key: str
    domain: str
    api_base: str

    @classmethod
    def from_transport_config(cls, transport: TransportConfig) -> 'MailgunSettings':
        return cls(
            api_key=transport.username,
            domain=transport.host,
            api_base=config.MAILGUN_API_BASE.rstrip('/')
        )

    @property
    def messages_url(self) -> str:
        return f'{self.api_base}/v3/{self.domain}/messages'


class MailgunAdapter(EmailAdapter):
    """Mailgun implementation of the EmailAdapter interface."""

    def get_provider_name(self) -> str:
        return "Mailgun"

    def validate(self, message: EmailMessage) -> Optional[str]:
        problem = super().validate(message)
        if problem:
            return problem

        settings = MailgunSettings.from_transport_config(message.transport_config)
        if not settings.api_key:
            return 'Missing Mailgun API key in config'
        if not settings.domain:
            return 'Missing Mailgun sending domain in config'
        return None

    def build_params(self, message: EmailMessage) -> Dict[str, Any]:
        """Build the shared request parameters; 'to' is filled per recipient."""
        return {
            'from': message.from_address.email,
            'subject': message.subject,
            'html': message.html_body,
            'text': message.alt_body
        }

    def send_email(self, message: EmailMessage) -> EmailResponse:
        """
        Send email via Mailgun API, one request per recipient.

        A failed request stops the loop; recipients already sent to are not
        rolled back.

        Args:
            message: EmailMessage with email details; the API key is taken
                from transport_config.username and the sending domain from
                transport_config.host

        Returns:
            EmailResponse with send result
        """
        settings = MailgunSettings.from_transport_config(message.transport_config)
        params = self.build_params(message)
        sent = 0

        for recipient in message.to:
            data = dict(params, to=recipient.email)

            logger.debug(
                'Sending email via Mailgun',
                domain=settings.domain,
                recipient_index=sent
            )

            try:
                response = requests.post(
                    settings.messages_url,
                    auth=('api', settings.api_key),
                    data=data,
                    timeout=config.HTTP_TIMEOUT
                )
                response.raise_for_status()
            except requests.RequestException as e:
                logger.error(
                    f'Mailgun API request failed: {str(e)}',
                    err=e,
                    delivered=sent,
                    total=len(message.to)
                )
                status_code = e.response.status_code if e.response is not None else None
                return EmailResponse(
                    success=False,
                    error=f'Failed to send via Mailgun after {sent} of {len(message.to)} recipient(s): {str(e)}',
                    error_kind=SendErrorKind.REJECTED if status_code else SendErrorKind.TRANSPORT,
                    status_code=status_code,
                    raw_response={'delivered': sent}
                )

            sent += 1

        return EmailResponse(
            success=True,
            raw_response={'delivered': sent}
        )
