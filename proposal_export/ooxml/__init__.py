"""OOXML (``.docx``) encoding: fragment builders, section renderers, packaging."""

from .context import RenderContext
from .media import EmbeddedImage, parse_data_uri
from .package import DocxPackageBuilder, write_archive
from .sections import SECTION_RENDERERS, render_section

__all__ = [
    "SECTION_RENDERERS",
    "DocxPackageBuilder",
    "EmbeddedImage",
    "RenderContext",
    "parse_data_uri",
    "render_section",
    "write_archive",
]
