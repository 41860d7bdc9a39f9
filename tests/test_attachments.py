from __future__ import annotations

import pytest

from app.services.attachments import AttachmentKind, attachment_extension, classify_attachment


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("a/b/c.pdf", AttachmentKind.DOCUMENT),
        ("a/b/c.png", AttachmentKind.IMAGE),
        ("a/b/c", AttachmentKind.IMAGE),
        ("https://utfs.test/f/contract.pdf?sig=abc", AttachmentKind.DOCUMENT),
        ("https://utfs.test/f/archive.zip", AttachmentKind.IMAGE),
        (None, AttachmentKind.NONE),
        ("", AttachmentKind.NONE),
    ],
)
def test_classify_attachment(url: str | None, expected: AttachmentKind) -> None:
    assert classify_attachment(url) == expected


def test_extension_is_taken_after_the_last_dot() -> None:
    assert attachment_extension("https://cdn.test/files/report.final.pdf") == "pdf"
    assert attachment_extension("a/b/c") == "a/b/c"


def test_uppercase_pdf_is_not_special_cased() -> None:
    assert classify_attachment("scan.PDF") == AttachmentKind.IMAGE
