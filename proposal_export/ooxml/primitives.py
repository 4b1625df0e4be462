"""WordprocessingML fragment builders.

Each helper returns a string fragment and escapes every piece of text it is
given, so callers pass raw content straight through. Child elements are
emitted in schema order (``pStyle``, ``numPr``, ``ind``, ``jc`` inside
``w:pPr``; ``b``, ``i``, ``color``, ``sz`` inside ``w:rPr``).
"""

from __future__ import annotations

import typing as typ

from proposal_export._constants import (
    HEADER_SHADING,
    IMAGE_HEIGHT_EMU,
    IMAGE_WIDTH_EMU,
    NS_PIC,
)
from proposal_export.escaping import escape_xml

if typ.TYPE_CHECKING:
    import collections.abc as cabc

# Usable width of a Letter page with 1in margins, in twentieths of a point.
TEXT_WIDTH_TWIPS = 9360
_BORDER_EDGES = ("top", "left", "bottom", "right", "insideH", "insideV")


def run(
    text: str,
    *,
    bold: bool = False,
    italic: bool = False,
    size: int | None = None,
    color: str | None = None,
) -> str:
    """Return a ``w:r`` run holding ``text`` with optional formatting.

    ``size`` is expressed in half-points, as ``w:sz`` expects.
    """
    props: list[str] = []
    if bold:
        props.append("<w:b/>")
    if italic:
        props.append("<w:i/>")
    if color:
        props.append(f'<w:color w:val="{escape_xml(color)}"/>')
    if size is not None:
        props.append(f'<w:sz w:val="{size}"/>')
    rpr = f"<w:rPr>{''.join(props)}</w:rPr>" if props else ""
    return f'<w:r>{rpr}<w:t xml:space="preserve">{escape_xml(text)}</w:t></w:r>'


def paragraph(
    *runs: str,
    style: str | None = None,
    align: str | None = None,
    indent_left: int | None = None,
    indent_right: int | None = None,
    numbering_id: int | None = None,
) -> str:
    """Return a ``w:p`` wrapping pre-built ``runs`` with paragraph properties."""
    props: list[str] = []
    if style:
        props.append(f'<w:pStyle w:val="{style}"/>')
    if numbering_id is not None:
        props.append(
            f'<w:numPr><w:ilvl w:val="0"/><w:numId w:val="{numbering_id}"/></w:numPr>'
        )
    if indent_left is not None or indent_right is not None:
        attrs = ""
        if indent_left is not None:
            attrs += f' w:left="{indent_left}"'
        if indent_right is not None:
            attrs += f' w:right="{indent_right}"'
        props.append(f"<w:ind{attrs}/>")
    if align:
        props.append(f'<w:jc w:val="{align}"/>')
    ppr = f"<w:pPr>{''.join(props)}</w:pPr>" if props else ""
    return f"<w:p>{ppr}{''.join(runs)}</w:p>"


def empty_paragraph() -> str:
    """Return an empty paragraph used as vertical spacing between blocks."""
    return "<w:p/>"


def table_cell(text: str, *, bold: bool = False, shading: str | None = None) -> str:
    """Return a single-paragraph ``w:tc`` cell."""
    tcpr = ""
    if shading:
        tcpr = (
            f'<w:tcPr><w:shd w:val="clear" w:color="auto" w:fill="{shading}"/>'
            "</w:tcPr>"
        )
    return f"<w:tc>{tcpr}{paragraph(run(text, bold=bold))}</w:tc>"


def header_cell(text: str) -> str:
    """Return a bold, shaded header cell."""
    return table_cell(text, bold=True, shading=HEADER_SHADING)


def table_row(cells: cabc.Iterable[str]) -> str:
    """Return a ``w:tr`` from pre-built cells, without padding."""
    return f"<w:tr>{''.join(cells)}</w:tr>"


def table(
    rows: cabc.Sequence[str], *, column_count: int, borders: bool = True
) -> str:
    """Return a full-width ``w:tbl`` from pre-built rows.

    Parameters
    ----------
    rows : Sequence[str]
        Rows produced by :func:`table_row`.
    column_count : int
        Widest row length; sizes the ``w:tblGrid``.
    borders : bool, optional
        Draw single-line borders around and inside the grid. Defaults to
        ``True``.
    """
    border_xml = ""
    if borders:
        edges = "".join(
            f'<w:{edge} w:val="single" w:sz="4" w:space="0" w:color="000000"/>'
            for edge in _BORDER_EDGES
        )
        border_xml = f"<w:tblBorders>{edges}</w:tblBorders>"
    columns = max(column_count, 1)
    col_width = TEXT_WIDTH_TWIPS // columns
    grid = "".join(f'<w:gridCol w:w="{col_width}"/>' for _ in range(columns))
    return (
        "<w:tbl>"
        '<w:tblPr><w:tblStyle w:val="TableGrid"/><w:tblW w:w="5000" w:type="pct"/>'
        f"{border_xml}</w:tblPr>"
        f"<w:tblGrid>{grid}</w:tblGrid>"
        f"{''.join(rows)}"
        "</w:tbl>"
    )


def inline_drawing(
    relationship_id: str,
    drawing_id: int,
    *,
    width: int = IMAGE_WIDTH_EMU,
    height: int = IMAGE_HEIGHT_EMU,
) -> str:
    """Return a run containing an inline picture bound to ``relationship_id``.

    ``width`` and ``height`` are in EMU (914400 per inch).
    """
    name = f"Image {drawing_id}"
    return (
        "<w:r><w:drawing>"
        '<wp:inline distT="0" distB="0" distL="0" distR="0">'
        f'<wp:extent cx="{width}" cy="{height}"/>'
        f'<wp:docPr id="{drawing_id}" name="{name}"/>'
        "<a:graphic>"
        f'<a:graphicData uri="{NS_PIC}">'
        "<pic:pic>"
        f'<pic:nvPicPr><pic:cNvPr id="{drawing_id}" name="{name}"/>'
        "<pic:cNvPicPr/></pic:nvPicPr>"
        f'<pic:blipFill><a:blip r:embed="{relationship_id}"/>'
        "<a:stretch><a:fillRect/></a:stretch></pic:blipFill>"
        '<pic:spPr><a:xfrm><a:off x="0" y="0"/>'
        f'<a:ext cx="{width}" cy="{height}"/></a:xfrm>'
        '<a:prstGeom prst="rect"><a:avLst/></a:prstGeom></pic:spPr>'
        "</pic:pic>"
        "</a:graphicData>"
        "</a:graphic>"
        "</wp:inline>"
        "</w:drawing></w:r>"
    )


def content_control(fragment: str, tag: str) -> str:
    """Wrap a block-level ``fragment`` in a ``w:sdt`` tagged with ``tag``."""
    return (
        f'<w:sdt><w:sdtPr><w:tag w:val="{escape_xml(tag)}"/></w:sdtPr>'
        f"<w:sdtContent>{fragment}</w:sdtContent></w:sdt>"
    )


__all__ = [
    "TEXT_WIDTH_TWIPS",
    "content_control",
    "empty_paragraph",
    "header_cell",
    "inline_drawing",
    "paragraph",
    "run",
    "table",
    "table_cell",
    "table_row",
]
