"""Export proposal documents as Word packages or printed PDFs.

This package turns the editor's section-based documents into byte-exact
``.docx`` packages and into print-ready HTML handed to a print host. It also
exposes the CLI entry point used by the ``proposal-export`` console script.

Exports
-------
- ``app``: Cyclopts application with the ``export`` and ``preview`` commands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``DocumentExporter`` / ``export_document``: the export entry points.

Examples
--------
>>> from proposal_export import export_document
>>> from proposal_export.model import ExportOptions, build_document
>>> export_document(build_document({"name": "Q4"}), ExportOptions()).filename
'Q4.docx'
"""

from __future__ import annotations

from .cli import app, main
from .exporter import DocumentExporter, export_document, write_artifact

__all__ = ["DocumentExporter", "app", "export_document", "main", "write_artifact"]
