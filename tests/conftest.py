"""Shared fixtures for the proposal_export test suite.

The fixtures build documents from the same loosely shaped mappings the editor
saves, pin the package clock so archives are comparable, unpack exported
packages into ``{part name: bytes}`` mappings, and provide an in-memory print
host that records what the exporter asked it to print.
"""

from __future__ import annotations

import contextlib
import dataclasses as dc
import datetime as dt
import io
import typing as typ
import zipfile

import pytest

from proposal_export.config import ExportConfig
from proposal_export.exporter import DocumentExporter
from proposal_export.model import Document, build_document
from proposal_export.printing import PrintSurfaceError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

PNG_PAYLOAD = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA"
    "60e6kgAAAABJRU5ErkJggg=="
)
JPEG_PAYLOAD = "/9j/4AAQSkZJRg=="
FIXED_TIME = dt.datetime(2024, 5, 1, 9, 30, tzinfo=dt.UTC)


@dc.dataclass
class RecordingSurface:
    """Print surface that keeps the written HTML and counts print calls."""

    filename: str
    html: str | None = None
    printed: int = 0
    closed: bool = False
    fail: bool = False

    def write(self, html: str) -> None:
        self.html = html

    def print(self) -> None:
        if self.fail:
            msg = "printer jammed"
            raise RuntimeError(msg)
        self.printed += 1


@dc.dataclass
class RecordingPrintHost:
    """Print host that hands out :class:`RecordingSurface` objects."""

    surfaces: list[RecordingSurface] = dc.field(default_factory=list)
    fail_on_create: bool = False
    fail_on_print: bool = False

    @contextlib.contextmanager
    def create_surface(self, filename: str) -> cabc.Iterator[RecordingSurface]:
        if self.fail_on_create:
            msg = "no rendering surface available"
            raise PrintSurfaceError(msg)
        surface = RecordingSurface(filename, fail=self.fail_on_print)
        self.surfaces.append(surface)
        try:
            yield surface
        finally:
            surface.closed = True


@pytest.fixture
def png_data_uri() -> str:
    """Return a 1x1 PNG encoded as a data URI."""
    return f"data:image/png;base64,{PNG_PAYLOAD}"


@pytest.fixture
def jpeg_data_uri() -> str:
    """Return a JPEG header encoded as a data URI with the ``jpeg`` subtype."""
    return f"data:image/jpeg;base64,{JPEG_PAYLOAD}"


@pytest.fixture
def make_document() -> cabc.Callable[..., Document]:
    """Return a factory building documents from raw section mappings."""

    def _make(
        *sections: cabc.Mapping[str, typ.Any], name: str = "Acme Deal"
    ) -> Document:
        return build_document({"id": "doc-1", "name": name, "sections": list(sections)})

    return _make


@pytest.fixture
def print_host() -> RecordingPrintHost:
    """Return a fresh in-memory print host."""
    return RecordingPrintHost()


@pytest.fixture
def exporter(print_host: RecordingPrintHost) -> DocumentExporter:
    """Return an exporter with a pinned clock, no print delay and a fake host."""
    config = ExportConfig(print_settle_seconds=0)
    return DocumentExporter(config, print_host=print_host, clock=lambda: FIXED_TIME)


@pytest.fixture
def read_package() -> cabc.Callable[[bytes], dict[str, bytes]]:
    """Return a helper unpacking package bytes into ``{name: bytes}``."""

    def _read(data: bytes) -> dict[str, bytes]:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            return {name: archive.read(name) for name in archive.namelist()}

    return _read
