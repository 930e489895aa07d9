"""Tests for inline file attachments."""

import pytest

from dental_center.exceptions import InvalidAttachmentError
from dental_center.models.incident import FileAttachment
from dental_center.services.files import (
    content_disposition,
    create_file_attachment,
    decode_file_attachment,
    describe_attachment,
    file_kind,
    format_file_size,
)


def test_create_file_attachment_builds_data_url() -> None:
    attachment = create_file_attachment("xray.png", b"\x89PNG")

    assert attachment.type == "image/png"
    assert attachment.size == 4
    assert attachment.url == "data:image/png;base64,iVBORw=="
    assert decode_file_attachment(attachment) == b"\x89PNG"


def test_explicit_content_type_wins() -> None:
    attachment = create_file_attachment("notes", b"hello", "text/plain")

    assert attachment.type == "text/plain"
    assert attachment.url.startswith("data:text/plain;base64,")


def test_unknown_extension_falls_back_to_octet_stream() -> None:
    assert create_file_attachment("scan.zzz", b"").type == "application/octet-stream"


def test_decode_rejects_non_data_urls() -> None:
    attachment = FileAttachment(name="a.pdf", url="https://example.com/a.pdf", type="application/pdf", size=1)

    with pytest.raises(InvalidAttachmentError):
        decode_file_attachment(attachment)


def test_decode_rejects_bad_base64() -> None:
    attachment = FileAttachment(name="a.pdf", url="data:application/pdf;base64,@@@", type="application/pdf", size=1)

    with pytest.raises(InvalidAttachmentError):
        decode_file_attachment(attachment)


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1048576, "1 MB"),
        (1234567, "1.18 MB"),
        (3 * 1024 ** 3, "3 GB"),
    ],
)
def test_format_file_size(size: int, expected: str) -> None:
    assert format_file_size(size) == expected


def test_file_kind() -> None:
    assert file_kind("image/png") == "image"
    assert file_kind("application/pdf") == "pdf"
    assert file_kind("application/msword") == "other"
    assert file_kind("application/vnd.openxmlformats-officedocument.wordprocessingml.document") == "document"
    assert file_kind("application/vnd.ms-excel.sheet.xlsx") == "spreadsheet"
    assert file_kind("text/plain") == "other"


def test_decode_accepts_unpadded_payload() -> None:
    attachment = FileAttachment(name="a.pdf", url="data:application/pdf;base64,JVBERi0xLjQ", type="application/pdf", size=7)

    assert decode_file_attachment(attachment) == b"%PDF-1.4"


def test_content_disposition_encodes_non_ascii_names() -> None:
    header = content_disposition("दांत.txt")

    header.encode("latin-1")
    assert header.startswith('attachment; filename=".txt"')
    assert header.endswith("filename*=UTF-8''%E0%A4%A6%E0%A4%BE%E0%A4%82%E0%A4%A4.txt")


def test_content_disposition_drops_quotes_from_fallback() -> None:
    assert content_disposition('say "hi".txt').startswith('attachment; filename="say hi.txt"')
    assert content_disposition("चित्र").startswith('attachment; filename="attachment"')


def test_describe_attachment() -> None:
    info = describe_attachment(2, create_file_attachment("xray.png", b"\x00" * 1536))

    assert (info.index, info.kind, info.size_label) == (2, "image", "1.5 KB")
