"""Render documents as a single self-contained print HTML page.

Section fragments are built here with :func:`escape_html`; the page shell and
its inline stylesheet live in ``templates/print_document.jinja``. Rendering is
pure: the returned string knows nothing about how it gets printed.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from proposal_export._constants import DEFAULT_TITLE
from proposal_export.escaping import escape_html
from proposal_export.model import (
    GenericContent,
    HeroContent,
    ImageContent,
    PricingContent,
    QuoteContent,
    Section,
    TableContent,
    TextContent,
)
from proposal_export.ooxml.sections import PRICING_HEADERS, format_attribution

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from proposal_export.model import Document, ExportOptions

PRINT_TEMPLATE = "print_document.jinja"


def _table_html(
    headers: cabc.Sequence[str], rows: cabc.Iterable[cabc.Sequence[str]]
) -> str:
    head = "".join(f"<th>{escape_html(header)}</th>" for header in headers)
    body = "".join(
        "<tr>" + "".join(f"<td>{escape_html(cell)}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"


def html_hero(content: HeroContent) -> str:
    return (
        '<div class="hero">'
        f"<h1>{escape_html(content.title)}</h1>"
        f'<p class="subtitle">{escape_html(content.subtitle)}</p>'
        "</div>"
    )


def html_text(content: TextContent) -> str:
    """Render the ``<h2>`` heading and the body with line breaks kept as ``<br>``."""
    heading = f"<h2>{escape_html(content.heading)}</h2>"
    body = "<br>".join(escape_html(line) for line in content.text.split("\n"))
    return f'<div class="section">{heading}<p>{body}</p></div>'


def html_image(content: ImageContent, *, include_images: bool) -> str:
    if not include_images or not content.src:
        return ""
    caption = (
        f'<p class="caption">{escape_html(content.caption)}</p>'
        if content.caption
        else ""
    )
    return (
        '<div class="image-section">'
        f'<img src="{escape_html(content.src)}" alt="{escape_html(content.alt)}">'
        f"{caption}</div>"
    )


def html_quote(content: QuoteContent) -> str:
    cite = ""
    if content.author or content.role:
        attribution = format_attribution(content.author, content.role)
        cite = f"<cite>{escape_html(attribution)}</cite>"
    return f'<blockquote><p>"{escape_html(content.text)}"</p>{cite}</blockquote>'


def html_table(content: TableContent) -> str:
    title = f"<h3>{escape_html(content.title)}</h3>" if content.title else ""
    return (
        f'<div class="table-section">{title}'
        f"{_table_html(content.headers, content.rows)}</div>"
    )


def html_pricing(content: PricingContent) -> str:
    rows = [(item.name, item.price, item.description) for item in content.items]
    return (
        '<div class="table-section pricing">'
        f"<h2>{escape_html(content.title)}</h2>"
        f"{_table_html(PRICING_HEADERS, rows)}</div>"
    )


def render_html_section(section: Section, *, include_images: bool = True) -> str:
    """Return the HTML fragment for ``section``.

    Unrecognised sections with text render like a text section headed by the
    section title; without text they render to an empty string.
    """
    match section.content:
        case HeroContent() as content:
            return html_hero(content)
        case TextContent() as content:
            return html_text(content)
        case ImageContent() as content:
            return html_image(content, include_images=include_images)
        case QuoteContent() as content:
            return html_quote(content)
        case TableContent() as content:
            return html_table(content)
        case PricingContent() as content:
            return html_pricing(content)
        case GenericContent(text=text) if text:
            return html_text(TextContent(heading=section.title, text=text))
        case _:
            return ""


class PrintDocumentRenderer:
    """Render whole documents into print-ready HTML."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory holding ``print_document.jinja``; defaults to the
            package templates.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template(PRINT_TEMPLATE)

    def render_body(self, document: Document, options: ExportOptions) -> str:
        """Return the concatenated section fragments in ``order``."""
        return "\n".join(
            fragment
            for section in document.ordered_sections()
            if (
                fragment := render_html_section(
                    section, include_images=options.include_images
                )
            )
        )

    def render(self, document: Document, options: ExportOptions) -> str:
        """Return the complete HTML page for ``document``."""
        html = self.template.render(
            title=document.name or DEFAULT_TITLE,
            body=Markup(self.render_body(document, options)),  # noqa: S704 - fragments are escaped
        )
        if not html.endswith("\n"):
            html += "\n"
        return html


__all__ = ["PRINT_TEMPLATE", "PrintDocumentRenderer", "render_html_section"]
