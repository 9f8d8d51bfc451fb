"""Shared fixtures for mail_dispatch tests."""

import pytest

from mail_dispatch import Mailer, TransportConfig


@pytest.fixture
def transport_config():
    return TransportConfig(
        host='smtp.example.com',
        port=587,
        username='smtp_username',
        password='smtp_password',
        smtp_enabled=True
    )


@pytest.fixture
def mailer(transport_config):
    """A Mailer with a sender, one recipient and both bodies set."""
    m = Mailer(backend='smtp', transport_config=transport_config)
    m.set_from('sender@example.com', 'Sender')
    m.add_to('recipient@example.com', 'Recipient')
    m.set_html('<p>Hello</p>')
    m.set_text('Hello')
    return m


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / 'invoice.pdf'
    path.write_bytes(b'%PDF-1.4 fake pdf content')
    return str(path)
