"""
Unit tests for the SendGrid adapter.
SendGridAPIClient is mocked; the Mail object is built for real.
"""

import base64
from unittest.mock import MagicMock, patch

import pytest
from python_http_client.exceptions import BadRequestsError, InternalServerError, UnauthorizedError

from mail_dispatch import SendErrorKind
from mail_dispatch.providers.sendgrid_adapter import SendGridAdapter, SendGridSettings


def _response(status_code, headers=None):
    response = MagicMock()
    response.status_code = status_code
    response.body = b''
    response.headers = headers or {}
    return response


@pytest.fixture
def sendgrid_mailer(mailer):
    mailer.set_backend('sendgrid')
    mailer.set_smtp_config('', 587, 'SG.test_key', '')
    return mailer


class TestSendGridStatus:
    """Only status 202 counts as success."""

    def test_accepted_returns_true(self, sendgrid_mailer):
        with patch('mail_dispatch.providers.sendgrid_adapter.SendGridAPIClient') as mock_client_cls:
            mock_client_cls.return_value.send.return_value = _response(202, {'X-Message-Id': 'msg-1'})

            response = sendgrid_mailer.send_with_response()

            assert response.success is True
            assert response.message_id == 'msg-1'
            mock_client_cls.assert_called_once_with('SG.test_key')
            mock_client_cls.return_value.send.assert_called_once()

    @pytest.mark.parametrize('status_code', [200, 204])
    def test_other_success_status_returns_false(self, sendgrid_mailer, status_code):
        with patch('mail_dispatch.providers.sendgrid_adapter.SendGridAPIClient') as mock_client_cls:
            mock_client_cls.return_value.send.return_value = _response(status_code)

            response = sendgrid_mailer.send_with_response()

            assert response.success is False
            assert response.error_kind == SendErrorKind.REJECTED
            assert response.status_code == status_code

    @pytest.mark.parametrize('error_class,status_code', [
        (BadRequestsError, 400),
        (UnauthorizedError, 401),
        (InternalServerError, 500),
    ])
    def test_http_error_is_rejection_with_status(self, sendgrid_mailer, error_class, status_code):
        """The SendGrid client raises for error statuses instead of returning them."""
        error = error_class(status_code, 'Error', b'{"errors": []}', {})

        with patch('mail_dispatch.providers.sendgrid_adapter.SendGridAPIClient') as mock_client_cls:
            mock_client_cls.return_value.send.side_effect = error

            response = sendgrid_mailer.send_with_response()

            assert response.success is False
            assert response.error_kind == SendErrorKind.REJECTED
            assert response.status_code == status_code
            assert response.raw_response == b'{"errors": []}'

    def test_client_exception_returns_false(self, sendgrid_mailer):
        with patch('mail_dispatch.providers.sendgrid_adapter.SendGridAPIClient') as mock_client_cls:
            mock_client_cls.return_value.send.side_effect = Exception('HTTP Error 401: Unauthorized')

            assert sendgrid_mailer.send() is False

    def test_missing_api_key_is_rejected_before_sending(self, mailer):
        mailer.set_backend('sendgrid')
        mailer.set_smtp_config('', 587, '', '')

        with patch('mail_dispatch.providers.sendgrid_adapter.SendGridAPIClient') as mock_client_cls:
            response = mailer.send_with_response()

            assert response.success is False
            assert response.error_kind == SendErrorKind.INVALID_MESSAGE
            mock_client_cls.assert_not_called()


class TestSendGridMail:
    """The Mail object carries every field of the message."""

    def test_content_and_recipients(self, sendgrid_mailer):
        sendgrid_mailer.add_to('second@example.com')

        payload = SendGridAdapter().build_mail(sendgrid_mailer.message).get()

        assert payload['from'] == {'email': 'sender@example.com', 'name': 'Sender'}
        recipients = [to['email'] for to in payload['personalizations'][0]['to']]
        assert recipients == ['recipient@example.com', 'second@example.com']
        assert payload['content'] == [
            {'type': 'text/plain', 'value': ''},
            {'type': 'text/html', 'value': '<p>Hello</p>'},
        ]

    def test_duplicate_recipients_are_collapsed_by_sendgrid(self, sendgrid_mailer):
        """The SendGrid helper keeps one entry per address in a personalization."""
        sendgrid_mailer.add_to('recipient@example.com')

        payload = SendGridAdapter().build_mail(sendgrid_mailer.message).get()

        recipients = [to['email'] for to in payload['personalizations'][0]['to']]
        assert recipients == ['recipient@example.com']
        assert len(sendgrid_mailer.message.to) == 2

    def test_alt_body_included_when_requested(self, sendgrid_mailer):
        sendgrid_mailer.set_alt_body(True)

        payload = SendGridAdapter().build_mail(sendgrid_mailer.message).get()

        assert {'type': 'text/plain', 'value': 'Hello'} in payload['content']

    def test_cc_and_bcc(self, sendgrid_mailer):
        sendgrid_mailer.add_cc('cc@example.com')
        sendgrid_mailer.add_bcc('bcc@example.com')

        payload = SendGridAdapter().build_mail(sendgrid_mailer.message).get()

        personalization = payload['personalizations'][0]
        assert [cc['email'] for cc in personalization['cc']] == ['cc@example.com']
        assert [bcc['email'] for bcc in personalization['bcc']] == ['bcc@example.com']

    def test_attachment_is_base64_encoded(self, sendgrid_mailer, pdf_file):
        sendgrid_mailer.add_attachment(pdf_file)

        payload = SendGridAdapter().build_mail(sendgrid_mailer.message).get()

        attachment = payload['attachments'][0]
        assert attachment['filename'] == 'invoice.pdf'
        assert attachment['type'] == 'application/pdf'
        assert base64.b64decode(attachment['content']) == b'%PDF-1.4 fake pdf content'

    def test_unreadable_attachment_returns_false(self, sendgrid_mailer, tmp_path):
        sendgrid_mailer.add_attachment(str(tmp_path / 'missing.pdf'))

        with patch('mail_dispatch.providers.sendgrid_adapter.SendGridAPIClient') as mock_client_cls:
            response = sendgrid_mailer.send_with_response()

            assert response.success is False
            assert response.error_kind == SendErrorKind.ATTACHMENT
            mock_client_cls.return_value.send.assert_not_called()

    def test_settings_read_api_key_from_username(self, transport_config):
        assert SendGridSettings.from_transport_config(transport_config).api_key == 'smtp_username'
