"""Turn typed section payloads into WordprocessingML body fragments.

Every renderer takes its payload and the export's :class:`RenderContext` and
returns a string of block-level elements (paragraphs and tables). Missing
fields were already defaulted by the model loader, so renderers only decide
what to leave out. Each dedicated renderer ends its block with an empty
spacer paragraph, so its fragment is never empty.

Example
-------
>>> from proposal_export.model import HeroContent
>>> from proposal_export.ooxml.context import RenderContext
>>> xml = render_hero(HeroContent(title="Acme"), RenderContext())
>>> "Acme" in xml
True
"""

from __future__ import annotations

import re
import typing as typ

from proposal_export._constants import BULLET_NUMBERING_ID
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

from .primitives import (
    empty_paragraph,
    header_cell,
    inline_drawing,
    paragraph,
    run,
    table,
    table_cell,
    table_row,
)

if typ.TYPE_CHECKING:
    from .context import RenderContext

BULLET_PATTERN = re.compile(r"^[-*•]\s")
BULLET_MARKER_PATTERN = re.compile(r"^[-*•]\s*")
PARAGRAPH_BREAK = "\n\n"
PRICING_HEADERS = ("Package", "Price", "Description")


def _split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines, dropping whitespace-only paragraphs."""
    normalized = text.replace("\r\n", "\n")
    return [chunk for chunk in normalized.split(PARAGRAPH_BREAK) if chunk.strip()]


def format_attribution(author: str, role: str) -> str:
    """Return ``"— Author, Role"``, leaving out the comma when ``role`` is empty."""
    return f"— {author}, {role}" if role else f"— {author}"


def render_hero(content: HeroContent, context: RenderContext) -> str:
    """Render a centered title and a muted centered subtitle."""
    return (
        paragraph(run(content.title, bold=True, size=72), style="Title", align="center")
        + paragraph(
            run(content.subtitle, size=32, color="666666"),
            style="Subtitle",
            align="center",
        )
        + empty_paragraph()
    )


def render_text(content: TextContent, context: RenderContext | None = None) -> str:
    """Render an optional heading followed by paragraphs and bullet items.

    Lines starting with ``-``, ``*`` or ``•`` followed by whitespace become
    list items bound to the bullet numbering definition, with the marker
    removed. Every other line becomes its own paragraph.
    """
    parts: list[str] = []
    if content.heading:
        parts.append(
            paragraph(run(content.heading, bold=True, size=28), style="Heading1")
        )
    for chunk in _split_paragraphs(content.text):
        for line in chunk.split("\n"):
            if BULLET_PATTERN.match(line):
                parts.append(
                    paragraph(
                        run(BULLET_MARKER_PATTERN.sub("", line, count=1)),
                        style="ListParagraph",
                        numbering_id=BULLET_NUMBERING_ID,
                    )
                )
            else:
                parts.append(paragraph(run(line)))
    parts.append(empty_paragraph())
    return "".join(parts)


def render_image(content: ImageContent, context: RenderContext) -> str:
    """Render an inline picture when the context embeds the source.

    Without an embedded part (images disabled, remote source, malformed data
    URI) only the caption and spacer remain, so no relationship is ever
    referenced without being registered.
    """
    parts: list[str] = []
    image = context.embed_image(content.src)
    if image is not None:
        parts.append(
            paragraph(
                inline_drawing(image.relationship_id, image.index), align="center"
            )
        )
    if content.caption:
        parts.append(
            paragraph(run(content.caption, italic=True, size=20), align="center")
        )
    parts.append(empty_paragraph())
    return "".join(parts)


def render_table(content: TableContent, context: RenderContext) -> str:
    """Render an optional heading and a bordered grid with a shaded header row.

    Rows keep their own cell count; nothing is padded or truncated to match
    the header.
    """
    parts: list[str] = []
    if content.title:
        parts.append(paragraph(run(content.title, bold=True), style="Heading2"))
    rows: list[str] = []
    if content.headers:
        rows.append(table_row(header_cell(header) for header in content.headers))
    rows.extend(
        table_row(table_cell(cell) for cell in cells) for cells in content.rows
    )
    if rows:
        widest = max([len(content.headers), *(len(cells) for cells in content.rows)])
        parts.append(table(rows, column_count=widest))
    parts.append(empty_paragraph())
    return "".join(parts)


def render_quote(content: QuoteContent, context: RenderContext) -> str:
    """Render an indented italic quote and a right-aligned attribution."""
    parts = [
        paragraph(
            run(f'"{content.text}"', italic=True, size=28),
            style="Quote",
            indent_left=720,
            indent_right=720,
        )
    ]
    if content.author or content.role:
        parts.append(
            paragraph(
                run(format_attribution(content.author, content.role), bold=True),
                align="right",
                indent_right=720,
            )
        )
    parts.append(empty_paragraph())
    return "".join(parts)


def render_pricing(content: PricingContent, context: RenderContext) -> str:
    """Render a heading and a Package/Price/Description table with bold prices."""
    rows = [table_row(header_cell(label) for label in PRICING_HEADERS)]
    rows.extend(
        table_row(
            (
                table_cell(item.name),
                table_cell(item.price, bold=True),
                table_cell(item.description),
            )
        )
        for item in content.items
    )
    return (
        paragraph(run(content.title, bold=True), style="Heading1")
        + table(rows, column_count=len(PRICING_HEADERS))
        + empty_paragraph()
    )


def render_generic(section: Section, context: RenderContext) -> str:
    """Render an unrecognised section as text under its title, or nothing.

    The result is identical to a text section whose heading is the section
    title and whose body is the payload ``text``.
    """
    content = section.content
    if not isinstance(content, GenericContent) or not content.text:
        return ""
    return render_text(TextContent(heading=section.title, text=content.text), context)


SECTION_RENDERERS: dict[type, typ.Callable[[typ.Any, RenderContext], str]] = {
    HeroContent: render_hero,
    TextContent: render_text,
    ImageContent: render_image,
    TableContent: render_table,
    QuoteContent: render_quote,
    PricingContent: render_pricing,
}


def render_section(section: Section, context: RenderContext) -> str:
    """Dispatch ``section`` to the renderer registered for its payload type."""
    renderer = SECTION_RENDERERS.get(type(section.content))
    if renderer is None:
        return render_generic(section, context)
    return renderer(section.content, context)


__all__ = [
    "SECTION_RENDERERS",
    "format_attribution",
    "render_generic",
    "render_hero",
    "render_image",
    "render_pricing",
    "render_quote",
    "render_section",
    "render_table",
    "render_text",
]
