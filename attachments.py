"""
Attachment classification

Uploads happen before the contact form is submitted; the intake only ever
sees references (URLs or data: URLs). When the caller sends them as one flat
list, each reference is sorted into images or documents by its declared
media type. Anything outside the permitted types is rejected.
"""

import mimetypes
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlparse

IMAGE_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})
DOCUMENT_TYPES = frozenset({"application/pdf"})


class UnsupportedAttachment(ValueError):
    def __init__(self, index: int, declared: Optional[str]):
        self.index = index
        self.declared = declared
        super().__init__(f"Attachment {index} has unsupported type {declared!r}")


def declared_type(ref: str, explicit: Optional[str] = None) -> Optional[str]:
    """Media type of a reference: the explicit one if given, else the
    data: URL header, else a guess from the URL path extension."""
    if explicit:
        return explicit.split(";", 1)[0].strip().lower()
    if ref.lower().startswith("data:"):
        header = ref[5:].split(",", 1)[0]
        mediatype = header.split(";", 1)[0].strip().lower()
        return mediatype or None
    guessed, _ = mimetypes.guess_type(urlparse(ref).path)
    return guessed


def _unpack(item) -> Tuple[str, Optional[str]]:
    if isinstance(item, str):
        return item, None
    return item.url, item.type


def classify_attachments(items: Iterable) -> Tuple[List[str], List[str]]:
    """Split references into (images, files), keeping relative order.

    Items are strings or objects with ``url`` and ``type`` attributes.
    Raises UnsupportedAttachment on the first blank or disallowed entry.
    """
    images: List[str] = []
    files: List[str] = []
    for index, item in enumerate(items):
        ref, explicit = _unpack(item)
        if not ref or not ref.strip():
            raise UnsupportedAttachment(index, None)
        kind = declared_type(ref, explicit)
        if kind in IMAGE_TYPES:
            images.append(ref)
        elif kind in DOCUMENT_TYPES:
            files.append(ref)
        else:
            raise UnsupportedAttachment(index, kind)
    return images, files
