"""Assemble a complete ``.docx`` package from a document.

:class:`DocxPackageBuilder` renders the body through the section renderers,
collects the media registered on the :class:`RenderContext`, builds every
manifest and boilerplate part, and writes them into an in-memory zip archive.
Either the whole archive is returned or an exception propagates; no partial
bytes ever leave the builder.

Example
-------
>>> from proposal_export.model import ExportOptions, build_document
>>> from proposal_export.ooxml import DocxPackageBuilder
>>> doc = build_document({"name": "Acme", "sections": []})
>>> DocxPackageBuilder().build(doc, ExportOptions())[:2]
b'PK'
"""

from __future__ import annotations

import datetime as dt
import io
import logging
import typing as typ
import zipfile

from proposal_export._constants import DEFAULT_TITLE

from .context import RenderContext
from .parts import (
    APP_PART,
    CONTENT_TYPES_PART,
    CORE_PART,
    DOCUMENT_PART,
    DOCUMENT_RELS_PART,
    NUMBERING_PART,
    NUMBERING_XML,
    ROOT_RELS_PART,
    SETTINGS_PART,
    SETTINGS_XML,
    STYLES_PART,
    STYLES_XML,
    app_properties_xml,
    content_types_xml,
    core_properties_xml,
    document_relationships_xml,
    document_xml,
    root_relationships_xml,
)
from .primitives import content_control
from .sections import render_section

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from proposal_export.model import Document, ExportOptions

logger = logging.getLogger(__name__)

Clock = typ.Callable[[], dt.datetime]


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


class DocxPackageBuilder:
    """Build OOXML word-processing packages."""

    def __init__(
        self,
        *,
        creator: str = "Proposal Export",
        application: str = "Proposal Export",
        app_version: str = "1.0",
        clock: Clock | None = None,
    ) -> None:
        """Initialize the builder with metadata values and a clock.

        Parameters
        ----------
        creator : str, optional
            Value written to ``dc:creator`` when metadata is requested.
        application : str, optional
            Application name recorded in ``docProps/app.xml``.
        app_version : str, optional
            Application version recorded in ``docProps/app.xml``.
        clock : callable, optional
            Returns the timestamp used for ``dcterms:created``/``modified``;
            defaults to the current UTC time.
        """
        self.creator = creator
        self.application = application
        self.app_version = app_version
        self._clock = clock or _utc_now

    def render_body(self, document: Document, context: RenderContext) -> str:
        """Render sections in ``order`` into the ``w:body`` content.

        Each non-empty section fragment is wrapped in a content control tagged
        with the section id.
        """
        fragments: list[str] = []
        for section in document.ordered_sections():
            fragment = render_section(section, context)
            if fragment:
                fragments.append(content_control(fragment, section.id))
        return "".join(fragments)

    def build_parts(
        self, document: Document, options: ExportOptions
    ) -> dict[str, str | bytes]:
        """Return every package part keyed by its archive path.

        The content-types manifest comes first; media parts come last and hold
        the decoded image bytes.
        """
        context = RenderContext(include_images=options.include_images)
        body = self.render_body(document, context)
        timestamp = self._clock().astimezone(dt.UTC)
        parts: dict[str, str | bytes] = {
            CONTENT_TYPES_PART: content_types_xml(context.image_extensions),
            ROOT_RELS_PART: root_relationships_xml(),
            CORE_PART: core_properties_xml(
                document.name or DEFAULT_TITLE,
                creator=self.creator if options.include_metadata else None,
                timestamp=timestamp,
            ),
            APP_PART: app_properties_xml(self.application, self.app_version),
            DOCUMENT_PART: document_xml(body),
            DOCUMENT_RELS_PART: document_relationships_xml(context.images),
            STYLES_PART: STYLES_XML,
            SETTINGS_PART: SETTINGS_XML,
            NUMBERING_PART: NUMBERING_XML,
        }
        for image in context.images:
            parts[image.part_name] = image.data()
        logger.debug(
            "Assembled %d package parts with %d images",
            len(parts),
            len(context.images),
        )
        return parts

    def build(self, document: Document, options: ExportOptions) -> bytes:
        """Return the zipped ``.docx`` bytes for ``document``."""
        return write_archive(self.build_parts(document, options).items())


def write_archive(parts: cabc.Iterable[tuple[str, str | bytes]]) -> bytes:
    """Deflate ``parts`` into a zip archive and return its bytes.

    Entries carry a fixed timestamp so identical parts give identical archives.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, payload in parts:
            info = zipfile.ZipInfo(name)
            info.compress_type = zipfile.ZIP_DEFLATED
            archive.writestr(info, payload)
    return buffer.getvalue()


__all__ = ["Clock", "DocxPackageBuilder", "write_archive"]
