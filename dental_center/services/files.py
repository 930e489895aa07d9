"""Inline file attachments encoded as base64 data URLs."""

from __future__ import annotations

import base64
import binascii
import mimetypes
from typing import Optional
from urllib.parse import quote

from dental_center.exceptions import InvalidAttachmentError
from dental_center.models.base import Base
from dental_center.models.incident import FileAttachment

DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_FILENAME = "attachment"
SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


class AttachmentInfo(Base):
    """Listing entry for an attachment, without its inline payload."""

    index: int
    name: str
    type: str
    size: int
    size_label: str
    kind: str


def create_file_attachment(
    name: str,
    content: bytes,
    content_type: Optional[str] = None,
) -> FileAttachment:
    """Embed ``content`` into a self-contained attachment."""

    mime_type = content_type or mimetypes.guess_type(name)[0] or DEFAULT_CONTENT_TYPE
    payload = base64.b64encode(content).decode("ascii")
    return FileAttachment(
        name=name,
        url=f"data:{mime_type};base64,{payload}",
        type=mime_type,
        size=len(content),
    )


def decode_file_attachment(attachment: FileAttachment) -> bytes:
    """Return the raw bytes behind an attachment's data URL.

    Unpadded payloads are accepted, as browsers accept them.
    """

    header, separator, payload = attachment.url.partition(",")
    if not separator or not header.startswith("data:") or not header.endswith(";base64"):
        raise InvalidAttachmentError(attachment.name, "not a base64 data URL")

    payload = payload.strip()
    payload += "=" * (-len(payload) % 4)
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise InvalidAttachmentError(attachment.name, str(exc)) from exc


def content_disposition(name: str) -> str:
    """Build an ``attachment`` header value safe for any file name.

    The quoted ``filename`` keeps only printable ASCII; ``filename*``
    carries the full name percent-encoded as UTF-8.
    """

    fallback = "".join(
        char for char in name if 32 <= ord(char) < 127 and char not in '"\\'
    ).strip() or DEFAULT_FILENAME
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(name, safe='')}"


def format_file_size(size: int) -> str:
    """Render a byte count as e.g. ``1.5 KB``."""

    if size <= 0:
        return "0 Bytes"

    exponent = 0
    while exponent < len(SIZE_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = f"{size / 1024 ** exponent:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[exponent]}"


def file_kind(content_type: str) -> str:
    if content_type.startswith("image/"):
        return "image"
    if "pdf" in content_type:
        return "pdf"
    if "doc" in content_type:
        return "document"
    if "xls" in content_type:
        return "spreadsheet"
    return "other"


def describe_attachment(index: int, attachment: FileAttachment) -> AttachmentInfo:
    return AttachmentInfo(
        index=index,
        name=attachment.name,
        type=attachment.type,
        size=attachment.size,
        size_label=format_file_size(attachment.size),
        kind=file_kind(attachment.type),
    )
