"""Recognise data-URI images and describe them as package media parts.

Only ``data:image/<subtype>;base64,<payload>`` sources are embeddable. Remote
URLs and site-relative paths are never fetched during export. The base64
payload is kept as text and decoded only when the part is written into the
archive.

Example
-------
>>> from proposal_export.ooxml.media import parse_data_uri
>>> parse_data_uri("data:image/jpeg;base64,AAAA").extension
'jpg'
>>> parse_data_uri("https://example.com/logo.png") is None
True
"""

from __future__ import annotations

import base64
import dataclasses as dc
import re

DATA_URI_PATTERN = re.compile(r"^data:image/(\w+);base64,(.+)$", re.DOTALL)
BASE64_PAYLOAD_PATTERN = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
_WHITESPACE = re.compile(r"\s+")
EXTENSION_ALIASES = {"jpeg": "jpg"}
MIME_OVERRIDES = {"jpg": "image/jpeg"}


def normalize_extension(subtype: str) -> str:
    """Return the file extension for an image MIME subtype (``jpeg`` → ``jpg``)."""
    lowered = subtype.lower()
    return EXTENSION_ALIASES.get(lowered, lowered)


def content_type_for(extension: str) -> str:
    """Return the MIME type declared for a media extension."""
    return MIME_OVERRIDES.get(extension, f"image/{extension}")


def _is_valid_base64(payload: str) -> bool:
    """Check the payload alphabet and length without decoding it."""
    compact = _WHITESPACE.sub("", payload)
    if not compact or len(compact) % 4:
        return False
    return bool(BASE64_PAYLOAD_PATTERN.match(compact))


@dc.dataclass(frozen=True, slots=True)
class DataUriImage:
    """Extension and still-encoded payload of a data-URI image."""

    extension: str
    payload: str


def parse_data_uri(src: str) -> DataUriImage | None:
    """Return the embeddable image described by ``src``, or ``None``.

    ``None`` covers remote and relative sources as well as data URIs whose
    payload is not well-formed base64.
    """
    match = DATA_URI_PATTERN.match(src)
    if match is None:
        return None
    subtype, payload = match.groups()
    if not _is_valid_base64(payload):
        return None
    return DataUriImage(extension=normalize_extension(subtype), payload=payload)


@dc.dataclass(frozen=True, slots=True)
class EmbeddedImage:
    """A media part registered with the package.

    Attributes
    ----------
    index : int
        1-based position among the document's embedded images.
    filename : str
        ``image<index>.<extension>``.
    extension : str
        Normalised file extension.
    relationship_id : str
        Id of the document relationship pointing at the part.
    payload : str
        Base64 text exactly as found in the data URI.
    """

    index: int
    filename: str
    extension: str
    relationship_id: str
    payload: str

    @property
    def part_name(self) -> str:
        """Return the archive path of the media part."""
        return f"word/media/{self.filename}"

    @property
    def target(self) -> str:
        """Return the relationship target relative to ``word/document.xml``."""
        return f"media/{self.filename}"

    @property
    def content_type(self) -> str:
        """Return the MIME type of the part."""
        return content_type_for(self.extension)

    def data(self) -> bytes:
        """Decode and return the raw image bytes."""
        return base64.b64decode(self.payload)


__all__ = [
    "DATA_URI_PATTERN",
    "DataUriImage",
    "EmbeddedImage",
    "content_type_for",
    "normalize_extension",
    "parse_data_uri",
]
