"""
SMTP Client

A small mail client over smtplib that collects sender, recipients, bodies
and attachments, then builds the MIME message and sends it in one blocking
call.
"""

import smtplib
import ssl
from email.message import EmailMessage as MimeMessage
from email.utils import formataddr
from typing import List, Tuple

from mail_dispatch.utils.attachment_filter import describe_attachment


def _format_address(address: Tuple[str, str]) -> str:
    email, name = address
    return formataddr((name, email))


class SmtpClient:
    """Collects one message and sends it over SMTP."""

    def __init__(self, timeout: int = 30):
        self.timeout = timeout
        self.host = ''
        self.port = 587
        self.smtp_auth = False
        self.username = ''
        self.password = ''
        self.subject = ''
        self.body = ''
        self.alt_body = ''
        self.html = False
        self.sender: Tuple[str, str] = ('', '')
        self.to: List[Tuple[str, str]] = []
        self.cc: List[Tuple[str, str]] = []
        self.bcc: List[Tuple[str, str]] = []
        self.reply_to: List[Tuple[str, str]] = []
        self.attachments: List[str] = []

    def set_from(self, email: str, name: str = ''):
        self.sender = (email, name)

    def add_address(self, email: str, name: str = ''):
        self.to.append((email, name))

    def add_cc(self, email: str, name: str = ''):
        self.cc.append((email, name))

    def add_bcc(self, email: str, name: str = ''):
        self.bcc.append((email, name))

    def add_reply_to(self, email: str, name: str = ''):
        self.reply_to.append((email, name))

    def is_html(self, enabled: bool = True):
        self.html = enabled

    def add_attachment(self, file_path: str):
        self.attachments.append(file_path)

    def build_message(self) -> MimeMessage:
        """
        Build the MIME message.

        A non-empty alternative body produces multipart/alternative with the
        alternative as the text/plain part and the body as the preferred part
        (text/html in HTML mode, text/plain otherwise). Without one, the body
        is the single part.
        """
        msg = MimeMessage()
        msg['Subject'] = self.subject
        msg['From'] = _format_address(self.sender)
        if self.to:
            msg['To'] = ', '.join(_format_address(addr) for addr in self.to)
        if self.cc:
            msg['Cc'] = ', '.join(_format_address(addr) for addr in self.cc)
        if self.reply_to:
            msg['Reply-To'] = ', '.join(_format_address(addr) for addr in self.reply_to)

        body_subtype = 'html' if self.html else 'plain'
        if self.alt_body:
            msg.set_content(self.alt_body)
            msg.add_alternative(self.body, subtype=body_subtype)
        else:
            msg.set_content(self.body, subtype=body_subtype)

        for file_path in self.attachments:
            filename, mime_type = describe_attachment(file_path)
            maintype, subtype = mime_type.split('/', 1)
            with open(file_path, 'rb') as f:
                content = f.read()
            msg.add_attachment(content, maintype=maintype, subtype=subtype, filename=filename)

        return msg

    def send(self) -> bool:
        """
        Send the collected message.

        Returns:
            True if the server accepted at least one recipient

        Raises:
            smtplib.SMTPException, OSError: On connection or protocol errors
        """
        msg = self.build_message()
        recipients = [email for email, _ in self.to + self.cc + self.bcc]

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.ehlo()
            if server.has_extn('starttls'):
                server.starttls(context=ssl.create_default_context())
                server.ehlo()
            if self.smtp_auth:
                server.login(self.username, self.password)
            refused = server.send_message(msg, from_addr=self.sender[0], to_addrs=recipients)

        return len(refused) < len(recipients)
