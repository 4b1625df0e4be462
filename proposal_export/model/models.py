"""Typed dataclasses describing exportable documents and export outcomes."""

from __future__ import annotations

import dataclasses as dc
import enum


class DocumentError(ValueError):
    """Raised when a document payload cannot be turned into a Document."""


class ExportFormat(enum.StrEnum):
    """Output formats understood by the exporter."""

    DOCX = "docx"
    PDF = "pdf"


@dc.dataclass(slots=True)
class HeroContent:
    """Centered title block opening a proposal."""

    title: str = ""
    subtitle: str = ""


@dc.dataclass(slots=True)
class TextContent:
    """Free text with blank-line paragraphs and ``-``/``*``/``•`` bullets."""

    heading: str = ""
    text: str = ""


@dc.dataclass(slots=True)
class ImageContent:
    """Image reference; ``src`` is a URL, a site path, or a data URI."""

    src: str = ""
    alt: str = ""
    caption: str = ""


@dc.dataclass(slots=True)
class TableContent:
    """Grid of string cells; rows may be ragged."""

    title: str = ""
    headers: list[str] = dc.field(default_factory=list)
    rows: list[list[str]] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class QuoteContent:
    """Pull quote with an optional attribution."""

    text: str = ""
    author: str = ""
    role: str = ""


@dc.dataclass(slots=True)
class PricingItem:
    """Single priced package line."""

    name: str = ""
    price: str = ""
    description: str = ""


@dc.dataclass(slots=True)
class PricingContent:
    """Priced packages rendered as a three-column table."""

    title: str = "Pricing"
    items: list[PricingItem] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class GenericContent:
    """Payload for section types without a dedicated renderer."""

    text: str = ""


SectionContent = (
    HeroContent
    | TextContent
    | ImageContent
    | TableContent
    | QuoteContent
    | PricingContent
    | GenericContent
)


@dc.dataclass(slots=True)
class Section:
    """One typed, orderable content block.

    Attributes
    ----------
    id : str
        Identifier, unique within the owning document.
    type : str
        Section type tag such as ``"hero"`` or ``"pricing"``; unknown tags are
        kept verbatim and rendered through the generic fallback.
    title : str
        Display heading independent of the payload.
    order : int
        Position used when encoding; lower values come first.
    content : SectionContent
        Payload matching ``type``, already populated with defaults.
    """

    id: str
    type: str
    title: str
    order: int
    content: SectionContent


@dc.dataclass(slots=True)
class Document:
    """The exportable unit: a named, ordered collection of sections."""

    id: str
    name: str
    sections: list[Section] = dc.field(default_factory=list)

    def ordered_sections(self) -> list[Section]:
        """Return sections sorted by ``order``; ties keep their input order."""
        return sorted(self.sections, key=lambda section: section.order)


@dc.dataclass(slots=True)
class ExportOptions:
    """Per-call export switches."""

    format: str = ExportFormat.DOCX.value
    include_images: bool = True
    include_metadata: bool = True


@dc.dataclass(slots=True)
class ExportResult:
    """Outcome of one export call.

    Attributes
    ----------
    success : bool
        ``True`` when a complete artefact was produced or printed.
    data : bytes or None
        Package bytes for the docx path; ``None`` for PDF and failures.
    filename : str or None
        Suggested download name including the extension.
    error : str or None
        Short reason suitable for display when ``success`` is ``False``.
    """

    success: bool
    data: bytes | None = None
    filename: str | None = None
    error: str | None = None

    @classmethod
    def failure(cls, error: str) -> ExportResult:
        """Build a failed result carrying ``error``."""
        return cls(success=False, error=error)


__all__ = [
    "Document",
    "DocumentError",
    "ExportFormat",
    "ExportOptions",
    "ExportResult",
    "GenericContent",
    "HeroContent",
    "ImageContent",
    "PricingContent",
    "PricingItem",
    "QuoteContent",
    "Section",
    "SectionContent",
    "TableContent",
    "TextContent",
]
