"""Decide how a message attachment is displayed."""
from __future__ import annotations

from enum import StrEnum
from urllib.parse import urlsplit

DOCUMENT_EXTENSION = "pdf"


class AttachmentKind(StrEnum):
    NONE = "none"
    IMAGE = "image"
    DOCUMENT = "document"


def attachment_extension(url: str) -> str:
    """Return whatever follows the last ``.`` of the URL path.

    A path without a dot yields the whole path, mirroring a plain split.
    """

    path = urlsplit(url).path or url
    return path.rsplit(".", 1)[-1]


def classify_attachment(url: str | None) -> AttachmentKind:
    """Only PDFs render as documents; every other attachment renders as an image."""

    if not url:
        return AttachmentKind.NONE
    if attachment_extension(url) == DOCUMENT_EXTENSION:
        return AttachmentKind.DOCUMENT
    return AttachmentKind.IMAGE


__all__ = ["AttachmentKind", "DOCUMENT_EXTENSION", "attachment_extension", "classify_attachment"]
