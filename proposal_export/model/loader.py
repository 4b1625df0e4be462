"""Build typed documents from loosely shaped mappings and JSON files."""

from __future__ import annotations

import typing as typ

import msgspec
import msgspec.json as msgspec_json

from .helpers import _as_mapping, _as_order, _as_rows, _as_text, _as_text_list
from .models import (
    Document,
    DocumentError,
    GenericContent,
    HeroContent,
    ImageContent,
    PricingContent,
    PricingItem,
    QuoteContent,
    Section,
    SectionContent,
    TableContent,
    TextContent,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

Payload = typ.Mapping[str, typ.Any]


def _build_hero(payload: Payload) -> HeroContent:
    return HeroContent(
        title=_as_text(payload.get("title")),
        subtitle=_as_text(payload.get("subtitle")),
    )


def _build_text(payload: Payload) -> TextContent:
    return TextContent(
        heading=_as_text(payload.get("heading")),
        text=_as_text(payload.get("text")),
    )


def _build_image(payload: Payload) -> ImageContent:
    return ImageContent(
        src=_as_text(payload.get("src")).strip(),
        alt=_as_text(payload.get("alt")),
        caption=_as_text(payload.get("caption")),
    )


def _build_table(payload: Payload) -> TableContent:
    return TableContent(
        title=_as_text(payload.get("title")),
        headers=_as_text_list(payload.get("headers")),
        rows=_as_rows(payload.get("rows")),
    )


def _build_quote(payload: Payload) -> QuoteContent:
    return QuoteContent(
        text=_as_text(payload.get("text")),
        author=_as_text(payload.get("author")),
        role=_as_text(payload.get("role")),
    )


def _build_pricing(payload: Payload) -> PricingContent:
    raw_items = payload.get("items")
    items: list[PricingItem] = []
    if isinstance(raw_items, list):
        for raw in raw_items:
            if not isinstance(raw, dict):
                continue
            items.append(
                PricingItem(
                    name=_as_text(raw.get("name")),
                    price=_as_text(raw.get("price")),
                    description=_as_text(raw.get("description")),
                )
            )
    return PricingContent(
        title=_as_text(payload.get("title")) or "Pricing",
        items=items,
    )


def _build_generic(payload: Payload) -> GenericContent:
    return GenericContent(text=_as_text(payload.get("text")))


CONTENT_BUILDERS: dict[str, cabc.Callable[[Payload], SectionContent]] = {
    "hero": _build_hero,
    "text": _build_text,
    "image": _build_image,
    "table": _build_table,
    "quote": _build_quote,
    "pricing": _build_pricing,
}


def build_content(section_type: str, payload: object | None) -> SectionContent:
    """Return the typed payload for ``section_type`` with defaults applied.

    Types without a dedicated builder receive :class:`GenericContent`.
    """
    builder = CONTENT_BUILDERS.get(section_type, _build_generic)
    return builder(_as_mapping(payload))


def build_section(payload: Payload, *, index: int = 0) -> Section:
    """Build a :class:`Section` from a raw mapping.

    Parameters
    ----------
    payload : Mapping[str, Any]
        Raw section mapping with ``id``, ``type``, ``title``, ``order`` and
        ``content`` keys; every key is optional.
    index : int, optional
        Position of the section in its source list. Used for the default id
        and as the order when ``order`` is missing or not an integer.

    Returns
    -------
    Section
        Section whose ``content`` matches its ``type``.
    """
    section_type = _as_text(payload.get("type")).strip()
    return Section(
        id=_as_text(payload.get("id")) or f"section-{index}",
        type=section_type,
        title=_as_text(payload.get("title")),
        order=_as_order(payload.get("order"), index),
        content=build_content(section_type, payload.get("content")),
    )


def build_document(payload: Payload) -> Document:
    """Build a :class:`Document` from either the flat or the stored shape.

    The flat shape carries ``sections`` at the top level; stored proposals
    nest them under ``content.sections``. Entries that are not mappings are
    skipped.

    Examples
    --------
    >>> doc = build_document({"name": "Deal", "sections": [{"type": "hero"}]})
    >>> doc.sections[0].content
    HeroContent(title='', subtitle='')
    """
    raw_sections = payload.get("sections")
    if raw_sections is None:
        raw_sections = _as_mapping(payload.get("content")).get("sections")
    sections: list[Section] = []
    if isinstance(raw_sections, list):
        for index, raw in enumerate(raw_sections):
            match raw:
                case dict():
                    sections.append(build_section(raw, index=index))
                case _:
                    continue
    return Document(
        id=_as_text(payload.get("id")),
        name=_as_text(payload.get("name")),
        sections=sections,
    )


def load_document(path: Path) -> Document:
    """Load a JSON document file into a :class:`Document`.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    DocumentError
        If the file is not valid JSON or its top level is not an object.
    """
    if not path.exists():
        msg = f"Document file '{path}' not found."
        raise FileNotFoundError(msg)
    try:
        loaded = msgspec_json.decode(path.read_bytes())
    except msgspec.DecodeError as exc:
        msg = f"Document file '{path}' is not valid JSON: {exc}"
        raise DocumentError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level JSON structure must be an object."
        raise DocumentError(msg)
    return build_document(loaded)


__all__ = [
    "CONTENT_BUILDERS",
    "build_content",
    "build_document",
    "build_section",
    "load_document",
]
