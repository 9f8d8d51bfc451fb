"""
Attachment Filter Utility

Decides which file paths may be attached to an outgoing message and
prepares attachment files for the HTTP providers.
"""

import base64
import mimetypes
import os
from typing import List, Tuple

ALLOWED_EXTENSIONS = frozenset({'jpg', 'jpeg', 'png', 'gif', 'pdf', 'doc', 'docx'})

DEFAULT_MIME_TYPE = 'application/octet-stream'


def get_extension(file_path: str) -> str:
    """Return the lower-cased extension of the path's base name, or ''."""
    name = os.path.basename(file_path)
    _, dot, extension = name.rpartition('.')
    if not dot:
        return ''
    return extension.lower()


def is_allowed_attachment(file_path: str) -> bool:
    return get_extension(file_path) in ALLOWED_EXTENSIONS


def admit_attachment(attachments: List[str], file_path: str) -> bool:
    """
    Append file_path to attachments if its extension is allowed.

    Rejected paths are dropped without raising.

    Returns:
        True if the path was appended
    """
    if not is_allowed_attachment(file_path):
        return False

    attachments.append(file_path)
    return True


def describe_attachment(file_path: str) -> Tuple[str, str]:
    """Return (filename, mime_type) for an attachment path."""
    mime_type, _ = mimetypes.guess_type(file_path)
    return os.path.basename(file_path), mime_type or DEFAULT_MIME_TYPE


def read_attachment_base64(file_path: str) -> str:
    """Read an attachment fully and return its content as base64 text."""
    with open(file_path, 'rb') as f:
        content = f.read()
    return base64.b64encode(content).decode('ascii')
