"""Typed content model consumed by the export pipelines.

Documents arrive from the editor as loosely shaped mappings: every section has
a ``type`` tag and an open ``content`` payload. This subpackage turns them into
slotted dataclasses once, at the boundary, so renderers only ever see fully
populated payloads (:class:`HeroContent`, :class:`TableContent`, and so on).
The entry points are :func:`build_document` for in-memory mappings and
:func:`load_document` for JSON files.

Examples
--------
>>> from proposal_export.model import build_document
>>> doc = build_document({"name": "Acme", "sections": [{"type": "quote"}]})
>>> doc.sections[0].content.author
''
"""

from .loader import build_content, build_document, build_section, load_document
from .models import (
    Document,
    DocumentError,
    ExportFormat,
    ExportOptions,
    ExportResult,
    GenericContent,
    HeroContent,
    ImageContent,
    PricingContent,
    PricingItem,
    QuoteContent,
    Section,
    SectionContent,
    TableContent,
    TextContent,
)

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
    "build_content",
    "build_document",
    "build_section",
    "load_document",
]
