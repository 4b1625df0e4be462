"""Single public entry point for exporting documents.

:class:`DocumentExporter` picks the OOXML or print pipeline from the requested
format and always answers with an :class:`ExportResult`: encoder failures are
logged and reported as structured failures instead of escaping to the caller.

Example
-------
>>> from proposal_export.model import ExportOptions, build_document
>>> doc = build_document({"name": "Acme Deal", "sections": []})
>>> result = export_document(doc, ExportOptions(format="docx"))
>>> result.success, result.filename
(True, 'Acme_Deal.docx')
>>> export_document(doc, ExportOptions(format="odt")).error
'Unsupported format'
"""

from __future__ import annotations

import logging
import time
import typing as typ

from .config import ExportConfig
from .escaping import sanitize_filename
from .model import ExportFormat, ExportResult
from .ooxml import DocxPackageBuilder
from .printing import PrintDocumentRenderer, PrintSurfaceError, WeasyPrintHost

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .model import Document, ExportOptions
    from .ooxml.package import Clock
    from .printing import PrintHost

logger = logging.getLogger(__name__)

UNSUPPORTED_FORMAT = "Unsupported format"
PRINT_FRAME_ERROR = "Could not create print frame"
GENERIC_FAILURE = "Export failed"


class DocumentExporter:
    """Export documents as ``.docx`` packages or printed PDFs."""

    def __init__(
        self,
        config: ExportConfig | None = None,
        *,
        print_host: PrintHost | None = None,
        clock: Clock | None = None,
        sleep: typ.Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the exporter and its pipelines.

        Parameters
        ----------
        config : ExportConfig, optional
            Metadata values, output directory and print delay; defaults to
            ``ExportConfig()``.
        print_host : PrintHost, optional
            Host used for PDF exports; defaults to a :class:`WeasyPrintHost`
            writing into ``config.output_dir``.
        clock : callable, optional
            Timestamp source for package metadata.
        sleep : callable, optional
            Used for the pause before printing.
        """
        self.config = config or ExportConfig()
        self.print_host: PrintHost = print_host or WeasyPrintHost(
            self.config.output_dir
        )
        self.package_builder = DocxPackageBuilder(
            creator=self.config.creator,
            application=self.config.application,
            app_version=self.config.app_version,
            clock=clock,
        )
        self.print_renderer = PrintDocumentRenderer()
        self._sleep = sleep

    def export(self, document: Document, options: ExportOptions) -> ExportResult:
        """Export ``document`` in ``options.format``.

        Returns
        -------
        ExportResult
            ``data`` and ``filename`` for docx; ``filename`` only for pdf;
            ``error`` for unsupported formats and any failure along the way.
        """
        fmt = str(options.format).lower()
        if fmt not in {member.value for member in ExportFormat}:
            logger.warning("Rejected export in unsupported format %r", options.format)
            return ExportResult.failure(UNSUPPORTED_FORMAT)
        logger.info(
            "Exporting %r (%d sections) as %s",
            document.name,
            len(document.sections),
            fmt,
        )
        try:
            if fmt == ExportFormat.DOCX:
                result = self._export_docx(document, options)
            else:
                result = self._export_pdf(document, options)
        except PrintSurfaceError:
            logger.exception("Print surface unavailable")
            return ExportResult.failure(PRINT_FRAME_ERROR)
        except Exception as exc:  # noqa: BLE001 - reported as a failed result
            logger.exception("Export of %r failed", document.name)
            return ExportResult.failure(str(exc) or GENERIC_FAILURE)
        logger.info("Exported %s", result.filename)
        return result

    def _export_docx(self, document: Document, options: ExportOptions) -> ExportResult:
        data = self.package_builder.build(document, options)
        return ExportResult(
            success=True,
            data=data,
            filename=f"{sanitize_filename(document.name)}.docx",
        )

    def _export_pdf(self, document: Document, options: ExportOptions) -> ExportResult:
        filename = f"{sanitize_filename(document.name)}.pdf"
        html = self.print_renderer.render(document, options)
        with self.print_host.create_surface(filename) as surface:
            surface.write(html)
            if self.config.print_settle_seconds:
                self._sleep(self.config.print_settle_seconds)
            surface.print()
        return ExportResult(success=True, filename=filename)


def export_document(
    document: Document,
    options: ExportOptions,
    *,
    config: ExportConfig | None = None,
    print_host: PrintHost | None = None,
) -> ExportResult:
    """Export ``document`` with a one-off :class:`DocumentExporter`."""
    exporter = DocumentExporter(config, print_host=print_host)
    return exporter.export(document, options)


def write_artifact(result: ExportResult, output_dir: Path) -> Path:
    """Write the bytes of a successful result into ``output_dir``.

    Raises
    ------
    ValueError
        If the result failed or carries no bytes (PDF exports print through
        their host instead).
    """
    if not result.success or result.data is None or not result.filename:
        msg = "Only successful exports that carry bytes can be written."
        raise ValueError(msg)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / result.filename
    path.write_bytes(result.data)
    return path


__all__ = [
    "GENERIC_FAILURE",
    "PRINT_FRAME_ERROR",
    "UNSUPPORTED_FORMAT",
    "DocumentExporter",
    "export_document",
    "write_artifact",
]
