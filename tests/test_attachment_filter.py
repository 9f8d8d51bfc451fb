"""
Unit tests for the attachment filter.
Tests extension extraction, the allow-list and attachment encoding.
"""

import base64

import pytest

from mail_dispatch.utils.attachment_filter import (
    admit_attachment,
    describe_attachment,
    get_extension,
    is_allowed_attachment,
    read_attachment_base64,
)


class TestGetExtension:
    """Extension is taken from the base name and lower-cased."""

    @pytest.mark.parametrize('path,expected', [
        ('/path/to/file.pdf', 'pdf'),
        ('/path/to/FILE.PDF', 'pdf'),
        ('archive.tar.Docx', 'docx'),
        ('/path/to/README', ''),
        ('/path.with.dots/README', ''),
        ('.pdf', 'pdf'),
        ('trailing.', ''),
    ])
    def test_extension(self, path, expected):
        assert get_extension(path) == expected


class TestAdmitAttachment:
    """Only allow-listed extensions are appended."""

    @pytest.mark.parametrize('path', [
        'a.jpg', 'a.JPEG', 'a.png', 'a.gif', 'a.Pdf', 'a.doc', 'a.DOCX',
    ])
    def test_allowed_extensions_are_admitted(self, path):
        attachments = []

        assert admit_attachment(attachments, path) is True
        assert attachments == [path]

    @pytest.mark.parametrize('path', [
        'script.exe', 'page.html', 'data.zip', 'notes.txt', 'no_extension', 'pdf',
    ])
    def test_other_extensions_are_dropped(self, path):
        attachments = ['/existing.pdf']

        assert admit_attachment(attachments, path) is False
        assert attachments == ['/existing.pdf']

    def test_is_allowed_attachment(self):
        assert is_allowed_attachment('/tmp/photo.PNG')
        assert not is_allowed_attachment('/tmp/photo.svg')


class TestAttachmentContent:
    """Files are described by base name and detected media type."""

    def test_describe_pdf(self, pdf_file):
        assert describe_attachment(pdf_file) == ('invoice.pdf', 'application/pdf')

    def test_describe_unknown_type_falls_back_to_octet_stream(self):
        assert describe_attachment('/tmp/blob.unknownext') == ('blob.unknownext', 'application/octet-stream')

    def test_read_attachment_base64(self, pdf_file):
        encoded = read_attachment_base64(pdf_file)

        assert base64.b64decode(encoded) == b'%PDF-1.4 fake pdf content'

    def test_read_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            read_attachment_base64(str(tmp_path / 'missing.pdf'))
