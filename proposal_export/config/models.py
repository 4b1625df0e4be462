"""Typed dataclasses describing exporter configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from proposal_export.model import ExportOptions


class ExportConfigError(ValueError):
    """Raised when the export configuration is invalid."""


@dc.dataclass(slots=True)
class ExportConfig:
    """Defaults and metadata shared by every export.

    Attributes
    ----------
    options : ExportOptions
        Default format and image/metadata switches.
    output_dir : Path
        Directory receiving written artefacts.
    creator : str
        ``dc:creator`` value written when metadata is included.
    application : str
        Application name recorded in ``docProps/app.xml``.
    app_version : str
        Application version recorded in ``docProps/app.xml``.
    print_settle_seconds : float
        Best-effort pause between loading the print page and printing it.
    """

    options: ExportOptions = dc.field(default_factory=ExportOptions)
    output_dir: Path = Path("dist")
    creator: str = "Proposal Export"
    application: str = "Proposal Export"
    app_version: str = "1.0"
    print_settle_seconds: float = 0.5


__all__ = ["ExportConfig", "ExportConfigError"]
