"""Tests for the export entry point and its failure reporting."""

from __future__ import annotations

import logging
import typing as typ

import pytest

from proposal_export.config import ExportConfig
from proposal_export.exporter import (
    PRINT_FRAME_ERROR,
    UNSUPPORTED_FORMAT,
    DocumentExporter,
    write_artifact,
)
from proposal_export.model import ExportOptions, ExportResult

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from proposal_export.model import Document

    from conftest import RecordingPrintHost


def test_docx_export_returns_bytes_and_sanitised_name(
    exporter: DocumentExporter, make_document: cabc.Callable[..., Document]
) -> None:
    result = exporter.export(
        make_document(name="My/Proposal: Q4<2024>"), ExportOptions(format="docx")
    )
    assert result.success
    assert result.error is None
    assert result.filename == "My_Proposal_Q42024.docx"
    assert result.data is not None
    assert result.data[:2] == b"PK"


@pytest.mark.parametrize("fmt", ["DOCX", "Pdf"])
def test_format_is_case_insensitive(
    exporter: DocumentExporter, make_document: cabc.Callable[..., Document], fmt: str
) -> None:
    assert exporter.export(make_document(), ExportOptions(format=fmt)).success


def test_pdf_export_prints_through_the_host(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    print_host: RecordingPrintHost,
) -> None:
    document = make_document(
        {"type": "hero", "content": {"title": "Acme Proposal"}}, name="Acme Deal"
    )
    result = exporter.export(document, ExportOptions(format="pdf"))
    assert result == ExportResult(success=True, filename="Acme_Deal.pdf")
    (surface,) = print_host.surfaces
    assert surface.filename == "Acme_Deal.pdf"
    assert surface.printed == 1
    assert surface.closed
    assert surface.html is not None
    assert "Acme Proposal" in surface.html


def test_each_pdf_export_uses_a_fresh_surface(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    print_host: RecordingPrintHost,
) -> None:
    for _ in range(2):
        exporter.export(make_document(), ExportOptions(format="pdf"))
    assert len(print_host.surfaces) == 2
    assert all(surface.closed for surface in print_host.surfaces)


def test_pdf_waits_before_printing(
    make_document: cabc.Callable[..., Document], print_host: RecordingPrintHost
) -> None:
    delays: list[float] = []
    exporter = DocumentExporter(
        ExportConfig(print_settle_seconds=0.25),
        print_host=print_host,
        sleep=delays.append,
    )
    exporter.export(make_document(), ExportOptions(format="pdf"))
    assert delays == [0.25]


def test_unsupported_format_is_reported(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    print_host: RecordingPrintHost,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="proposal_export.exporter"):
        result = exporter.export(make_document(), ExportOptions(format="odt"))
    assert result == ExportResult(success=False, error=UNSUPPORTED_FORMAT)
    assert print_host.surfaces == []
    assert "unsupported format" in caplog.text


def test_surface_creation_failure_maps_to_print_frame_error(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    print_host: RecordingPrintHost,
) -> None:
    print_host.fail_on_create = True
    result = exporter.export(make_document(), ExportOptions(format="pdf"))
    assert result == ExportResult(success=False, error=PRINT_FRAME_ERROR)


def test_print_failure_is_reported_and_surface_torn_down(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    print_host: RecordingPrintHost,
    caplog: pytest.LogCaptureFixture,
) -> None:
    print_host.fail_on_print = True
    with caplog.at_level(logging.ERROR, logger="proposal_export.exporter"):
        result = exporter.export(make_document(), ExportOptions(format="pdf"))
    assert not result.success
    assert result.error == "printer jammed"
    assert result.data is None
    (surface,) = print_host.surfaces
    assert surface.closed
    assert surface.printed == 0
    assert "failed" in caplog.text


def test_encoder_failure_becomes_failed_result(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _boom(*_args: object) -> bytes:
        raise RuntimeError

    monkeypatch.setattr(exporter.package_builder, "build", _boom)
    result = exporter.export(make_document(), ExportOptions())
    assert result == ExportResult(success=False, error="Export failed")


def test_write_artifact_writes_docx_bytes(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    tmp_path: Path,
) -> None:
    result = exporter.export(make_document(), ExportOptions())
    path = write_artifact(result, tmp_path / "out")
    assert path == tmp_path / "out" / "Acme_Deal.docx"
    assert path.read_bytes() == result.data


@pytest.mark.parametrize(
    "result",
    [
        ExportResult.failure("Unsupported format"),
        ExportResult(success=True, filename="Acme_Deal.pdf"),
    ],
)
def test_write_artifact_requires_bytes(result: ExportResult, tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="carry bytes"):
        write_artifact(result, tmp_path)


@pytest.mark.parametrize(
    ("fmt", "expected"), [("docx", "proposal.docx"), ("pdf", "proposal.pdf")]
)
def test_unnamed_document_falls_back_to_default_filename(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    fmt: str,
    expected: str,
) -> None:
    result = exporter.export(make_document(name=""), ExportOptions(format=fmt))
    assert result.filename == expected
