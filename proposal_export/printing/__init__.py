"""Print path: HTML rendering and the hosts that print it."""

from .host import PrintHost, PrintSurface, PrintSurfaceError, WeasyPrintHost
from .renderer import PrintDocumentRenderer, render_html_section

__all__ = [
    "PrintDocumentRenderer",
    "PrintHost",
    "PrintSurface",
    "PrintSurfaceError",
    "WeasyPrintHost",
    "render_html_section",
]
