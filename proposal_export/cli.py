"""Cyclopts CLI entrypoint for exporting proposal documents.

The ``proposal-export`` console script defined here loads a document saved by
the editor as JSON and exports it as a ``.docx`` package or prints it to PDF
through WeasyPrint. ``proposal-export preview`` writes the print HTML so the
layout can be checked in a browser. Every option can also be supplied through
``PROPOSAL_EXPORT_*`` environment variables.

Examples
--------
Export a document as Word:

>>> from proposal_export.cli import main
>>> main()  # doctest: +SKIP

Print a document to PDF into a custom directory:

>>> from proposal_export.cli import app
>>> app(
...     ["export", "proposal.json", "--format", "pdf", "--output-dir", "out"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import ExportConfig, load_export_config
from .exporter import DocumentExporter, write_artifact
from .model import ExportOptions, load_document
from .printing import PrintDocumentRenderer, WeasyPrintHost

app = App(
    name="proposal-export",
    config=cyclopts.config.Env("PROPOSAL_EXPORT_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _load_config(config: Path | None) -> ExportConfig:
    return load_export_config(config) if config else ExportConfig()


@app.command(help="Export a document as .docx or print it to PDF.")
def export(
    document: typ.Annotated[Path, Parameter(help="Path to the document JSON")],
    *,
    format: typ.Annotated[  # noqa: A002 - mirrors the option name
        str | None, Parameter(help="Output format: docx or pdf")
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to export.yaml")
    ] = None,
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Override the output folder")
    ] = None,
    images: typ.Annotated[
        bool | None, Parameter(help="Embed data-URI images")
    ] = None,
    metadata: typ.Annotated[
        bool | None, Parameter(help="Write creator metadata")
    ] = None,
    log_level: typ.Annotated[str, Parameter(help="Logging level")] = "WARNING",
) -> None:
    """Export one document and report the written artefact.

    Parameters
    ----------
    document : Path
        JSON file holding the document (flat or stored proposal shape).
    format : str or None, optional
        ``docx`` or ``pdf``; defaults to the configured format.
    config : Path or None, optional
        YAML configuration; built-in defaults apply when omitted.
    output_dir : Path or None, optional
        Directory for the artefact; defaults to the configured directory.
    images : bool or None, optional
        Override the configured ``include_images`` switch.
    metadata : bool or None, optional
        Override the configured ``include_metadata`` switch.
    log_level : str, optional
        Root logging level, ``WARNING`` by default.

    Notes
    -----
    A failed export prints its reason to stderr and exits with status 1.
    """
    _configure_logging(log_level)
    export_config = _load_config(config)
    if output_dir is not None:
        export_config.output_dir = output_dir
    defaults = export_config.options
    options = ExportOptions(
        format=format or defaults.format,
        include_images=defaults.include_images if images is None else images,
        include_metadata=defaults.include_metadata if metadata is None else metadata,
    )
    exporter = DocumentExporter(
        export_config, print_host=WeasyPrintHost(export_config.output_dir)
    )
    result = exporter.export(load_document(document), options)
    if not result.success:
        print(f"export failed: {result.error}", file=sys.stderr)
        sys.exit(1)
    if result.data is not None:
        path = write_artifact(result, export_config.output_dir)
    else:
        path = export_config.output_dir / str(result.filename)
    print(f"wrote {_format_path(path)}")


@app.command(help="Write the print HTML for a document.")
def preview(
    document: typ.Annotated[Path, Parameter(help="Path to the document JSON")],
    *,
    output: typ.Annotated[
        Path | None, Parameter(help="Where to write the HTML")
    ] = None,
    images: typ.Annotated[
        bool, Parameter(help="Include images in the print HTML")
    ] = True,
) -> None:
    """Render the print HTML of ``document`` to ``output``.

    ``output`` defaults to the document path with an ``.html`` suffix.
    """
    loaded = load_document(document)
    html = PrintDocumentRenderer().render(loaded, ExportOptions(include_images=images))
    target = output or document.with_suffix(".html")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(html, encoding="utf-8")
    print(f"wrote {_format_path(target)}")


def main() -> None:
    """Invoke the Cyclopts application behind the ``proposal-export`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
