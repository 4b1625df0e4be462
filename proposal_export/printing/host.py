r"""Print hosts that turn rendered HTML into a printed artefact.

The exporter never prints by itself. It asks a :class:`PrintHost` for a
short-lived :class:`PrintSurface`, writes the page into it, waits briefly so
remote images can load, and triggers printing. Surfaces are context managers
and are torn down on exit whether printing succeeded or not; a fresh surface
is created for every export.

:class:`WeasyPrintHost` is the bundled host and writes PDF files with
WeasyPrint.

Example
-------
>>> from pathlib import Path
>>> host = WeasyPrintHost(Path("dist"))
>>> with host.create_surface("Acme_Deal.pdf") as surface:  # doctest: +SKIP
...     surface.write("<html><body>Hi</body></html>")
...     surface.print()
"""

from __future__ import annotations

import contextlib
import logging
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)


class PrintSurfaceError(RuntimeError):
    """Raised when a host cannot create a rendering surface."""


class PrintSurface(typ.Protocol):
    """Transient rendering target for one print job."""

    def write(self, html: str) -> None:
        """Load ``html`` into the surface."""
        ...

    def print(self) -> None:
        """Trigger the host's print capability for the loaded page."""
        ...


class PrintHost(typ.Protocol):
    """Factory for per-export print surfaces."""

    def create_surface(
        self, filename: str
    ) -> contextlib.AbstractContextManager[PrintSurface]:
        """Return a context manager yielding a surface that prints ``filename``."""
        ...


class _WeasyPrintSurface:
    """Buffer HTML and render it to a PDF file on ``print``."""

    def __init__(self, target: Path, base_url: str | None) -> None:
        self.target = target
        self.base_url = base_url
        self._html: str | None = None

    def write(self, html: str) -> None:
        self._html = html

    def print(self) -> None:
        if self._html is None:
            msg = "Nothing has been written to the print surface."
            raise RuntimeError(msg)
        from weasyprint import HTML

        HTML(string=self._html, base_url=self.base_url).write_pdf(str(self.target))
        logger.info("Printed %s", self.target)

    def close(self) -> None:
        self._html = None


class WeasyPrintHost:
    """Print surfaces backed by WeasyPrint, writing PDFs into ``output_dir``."""

    def __init__(self, output_dir: Path, *, base_url: str | None = None) -> None:
        """Initialize the host.

        Parameters
        ----------
        output_dir : Path
            Directory receiving the printed PDF files; created on demand.
        base_url : str, optional
            Base used to resolve site-relative image paths in the HTML.
        """
        self.output_dir = output_dir
        self.base_url = base_url

    @contextlib.contextmanager
    def create_surface(self, filename: str) -> cabc.Iterator[_WeasyPrintSurface]:
        """Yield a surface printing to ``output_dir / filename``.

        Raises
        ------
        PrintSurfaceError
            If the output directory cannot be created.
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Cannot prepare print output directory '{self.output_dir}'."
            raise PrintSurfaceError(msg) from exc
        surface = _WeasyPrintSurface(self.output_dir / filename, self.base_url)
        try:
            yield surface
        finally:
            surface.close()


__all__ = ["PrintHost", "PrintSurface", "PrintSurfaceError", "WeasyPrintHost"]
