r"""Text escaping and filename helpers shared by both export paths.

The OOXML and print renderers never interpret the text they receive; they only
make it safe for the markup it lands in. Entities already present in the input
are escaped again, so ``"&amp;"`` becomes ``"&amp;amp;"``.

Example
-------
>>> from proposal_export.escaping import escape_xml, sanitize_filename
>>> escape_xml("Fish & 'Chips'")
'Fish &amp; &apos;Chips&apos;'
>>> sanitize_filename("Acme Deal")
'Acme_Deal'
"""

from __future__ import annotations

import re
from html import escape
from xml.sax.saxutils import escape as _sax_escape

from ._constants import DEFAULT_BASENAME, MAX_FILENAME_LENGTH

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}
PATH_SEPARATOR_PATTERN = re.compile(r"[/\\]")
RESERVED_FILENAME_PATTERN = re.compile(r'[<>:"|?*]')
WHITESPACE_PATTERN = re.compile(r"\s+")
# Code points XML 1.0 cannot carry at all, lone surrogates included.
XML_ILLEGAL_PATTERN = re.compile(
    r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]"
)


def escape_xml(text: str) -> str:
    """Escape ``&``, ``<``, ``>``, ``"`` and ``'`` for XML text and attributes.

    Control characters that XML 1.0 forbids (form feeds, NUL, lone
    surrogates) are dropped so the part stays well-formed.
    """
    return _sax_escape(XML_ILLEGAL_PATTERN.sub("", text), _XML_ENTITIES)


def escape_html(text: str) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"`` for HTML text and attributes.

    Single quotes pass through untouched; every attribute the print renderer
    emits is double-quoted.
    """
    return escape(text, quote=False).replace('"', "&quot;")


def sanitize_filename(name: str | None) -> str:
    """Return a filesystem-safe base name derived from a document name.

    Parameters
    ----------
    name : str or None
        Display name of the document.

    Returns
    -------
    str
        The name with path separators turned into word breaks, the characters
        ``<>:"|?*`` removed, whitespace runs collapsed to ``_`` and the result
        truncated to 100 characters. Case is preserved. Falls back to
        ``"proposal"`` when nothing usable remains.

    Examples
    --------
    >>> sanitize_filename("My/Proposal: Q4<2024>")
    'My_Proposal_Q42024'
    >>> sanitize_filename("")
    'proposal'
    """
    if not name:
        return DEFAULT_BASENAME
    cleaned = PATH_SEPARATOR_PATTERN.sub(" ", name)
    cleaned = RESERVED_FILENAME_PATTERN.sub("", cleaned)
    cleaned = WHITESPACE_PATTERN.sub("_", cleaned)
    return cleaned[:MAX_FILENAME_LENGTH] or DEFAULT_BASENAME


__all__ = ["escape_html", "escape_xml", "sanitize_filename"]
