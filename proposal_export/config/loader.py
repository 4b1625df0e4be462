"""Load exporter configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from proposal_export.model import ExportFormat, ExportOptions

from .models import ExportConfig, ExportConfigError


def _section(raw: typ.Mapping[str, typ.Any], key: str) -> typ.Mapping[str, typ.Any]:
    """Return the mapping stored under ``key`` or an empty mapping."""
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        msg = f"'{key}' must be a mapping."
        raise ExportConfigError(msg)
    return value


def _build_options(
    payload: typ.Mapping[str, typ.Any], base: ExportOptions
) -> ExportOptions:
    """Build ExportOptions from ``payload``, falling back to ``base`` values."""
    fmt = str(payload.get("format", base.format)).lower()
    if fmt not in {member.value for member in ExportFormat}:
        msg = f"Unsupported default format '{fmt}'."
        raise ExportConfigError(msg)
    return ExportOptions(
        format=fmt,
        include_images=bool(payload.get("include_images", base.include_images)),
        include_metadata=bool(payload.get("include_metadata", base.include_metadata)),
    )


def _settle_seconds(payload: typ.Mapping[str, typ.Any], default: float) -> float:
    """Return a non-negative print delay in seconds."""
    value = payload.get("settle_seconds", default)
    try:
        seconds = float(value)
    except (TypeError, ValueError) as exc:
        msg = f"print.settle_seconds must be a number, got {value!r}."
        raise ExportConfigError(msg) from exc
    if seconds < 0:
        msg = "print.settle_seconds cannot be negative."
        raise ExportConfigError(msg)
    return seconds


def load_export_config(path: Path) -> ExportConfig:
    """Load the YAML configuration describing export defaults.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML file (for example, ``export.yaml``).

    Returns
    -------
    ExportConfig
        Parsed configuration with defaults applied to missing keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ExportConfigError
        If a section is not a mapping or a value is invalid (unknown default
        format, negative print delay).

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_export_config(Path("export.yaml"))  # doctest: +SKIP
    >>> config.options.format  # doctest: +SKIP
    'docx'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    base = ExportConfig()
    defaults = _section(raw, "defaults")
    metadata = _section(raw, "metadata")
    print_settings = _section(raw, "print")

    return ExportConfig(
        options=_build_options(defaults, base.options),
        output_dir=Path(defaults.get("output_dir", base.output_dir)),
        creator=str(metadata.get("creator", base.creator)),
        application=str(metadata.get("application", base.application)),
        app_version=str(metadata.get("app_version", base.app_version)),
        print_settle_seconds=_settle_seconds(
            print_settings, base.print_settle_seconds
        ),
    )


__all__ = ["load_export_config"]
