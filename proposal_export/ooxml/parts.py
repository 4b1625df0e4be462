"""XML parts of the OOXML package skeleton.

Manifests that depend on the export (content types, relationships, core and
app properties, the document wrapper) are built by functions; styles,
settings and numbering are fixed boilerplate.
"""

from __future__ import annotations

import typing as typ

from proposal_export._constants import (
    CT_APP,
    CT_CORE,
    CT_DOCUMENT,
    CT_NUMBERING,
    CT_RELATIONSHIPS,
    CT_SETTINGS,
    CT_STYLES,
    CT_XML,
    NS_A,
    NS_CONTENT_TYPES,
    NS_PACKAGE_RELS,
    NS_PIC,
    NS_R,
    NS_W,
    NS_WP,
    REL_CORE_PROPERTIES,
    REL_EXTENDED_PROPERTIES,
    REL_IMAGE,
    REL_NUMBERING,
    REL_OFFICE_DOCUMENT,
    REL_SETTINGS,
    REL_STYLES,
    XML_DECLARATION,
)
from proposal_export.escaping import escape_xml

from .media import content_type_for

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from .media import EmbeddedImage

CONTENT_TYPES_PART = "[Content_Types].xml"
ROOT_RELS_PART = "_rels/.rels"
CORE_PART = "docProps/core.xml"
APP_PART = "docProps/app.xml"
DOCUMENT_PART = "word/document.xml"
DOCUMENT_RELS_PART = "word/_rels/document.xml.rels"
STYLES_PART = "word/styles.xml"
SETTINGS_PART = "word/settings.xml"
NUMBERING_PART = "word/numbering.xml"

_OVERRIDES: tuple[tuple[str, str], ...] = (
    (DOCUMENT_PART, CT_DOCUMENT),
    (STYLES_PART, CT_STYLES),
    (SETTINGS_PART, CT_SETTINGS),
    (NUMBERING_PART, CT_NUMBERING),
    (CORE_PART, CT_CORE),
    (APP_PART, CT_APP),
)

# (id, type, target) for the boilerplate document relationships.
_DOCUMENT_RELATIONSHIPS: tuple[tuple[str, str, str], ...] = (
    ("rId1", REL_STYLES, "styles.xml"),
    ("rId2", REL_SETTINGS, "settings.xml"),
    ("rId3", REL_NUMBERING, "numbering.xml"),
)

_ROOT_RELATIONSHIPS: tuple[tuple[str, str, str], ...] = (
    ("rId1", REL_OFFICE_DOCUMENT, DOCUMENT_PART),
    ("rId2", REL_CORE_PROPERTIES, CORE_PART),
    ("rId3", REL_EXTENDED_PROPERTIES, APP_PART),
)


def _relationship(rel_id: str, rel_type: str, target: str) -> str:
    return f'<Relationship Id="{rel_id}" Type="{rel_type}" Target="{target}"/>'


def content_types_xml(image_extensions: cabc.Iterable[str]) -> str:
    """Return ``[Content_Types].xml`` declaring each embedded image extension once."""
    defaults = [
        f'<Default Extension="rels" ContentType="{CT_RELATIONSHIPS}"/>',
        f'<Default Extension="xml" ContentType="{CT_XML}"/>',
    ]
    defaults.extend(
        f'<Default Extension="{ext}" ContentType="{content_type_for(ext)}"/>'
        for ext in dict.fromkeys(image_extensions)
    )
    overrides = [
        f'<Override PartName="/{part}" ContentType="{content_type}"/>'
        for part, content_type in _OVERRIDES
    ]
    return (
        f'{XML_DECLARATION}\n<Types xmlns="{NS_CONTENT_TYPES}">'
        f"{''.join(defaults)}{''.join(overrides)}</Types>"
    )


def root_relationships_xml() -> str:
    """Return ``_rels/.rels`` pointing at the document, core and app parts."""
    rels = "".join(_relationship(*entry) for entry in _ROOT_RELATIONSHIPS)
    return (
        f'{XML_DECLARATION}\n<Relationships xmlns="{NS_PACKAGE_RELS}">'
        f"{rels}</Relationships>"
    )


def document_relationships_xml(images: cabc.Iterable[EmbeddedImage]) -> str:
    """Return ``word/_rels/document.xml.rels`` for boilerplate parts and images."""
    rels = [_relationship(*entry) for entry in _DOCUMENT_RELATIONSHIPS]
    rels.extend(
        _relationship(image.relationship_id, REL_IMAGE, image.target)
        for image in images
    )
    return (
        f'{XML_DECLARATION}\n<Relationships xmlns="{NS_PACKAGE_RELS}">'
        f"{''.join(rels)}</Relationships>"
    )


def core_properties_xml(
    title: str, *, creator: str | None, timestamp: dt.datetime
) -> str:
    """Return ``docProps/core.xml``; ``dc:creator`` is written only when given."""
    stamp = timestamp.strftime("%Y-%m-%dT%H:%M:%SZ")
    creator_xml = f"<dc:creator>{escape_xml(creator)}</dc:creator>" if creator else ""
    return (
        f"{XML_DECLARATION}\n"
        "<cp:coreProperties"
        ' xmlns:cp="http://schemas.openxmlformats.org/package/2006/metadata/core-properties"'
        ' xmlns:dc="http://purl.org/dc/elements/1.1/"'
        ' xmlns:dcterms="http://purl.org/dc/terms/"'
        ' xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">'
        f"<dc:title>{escape_xml(title)}</dc:title>"
        f"{creator_xml}"
        f'<dcterms:created xsi:type="dcterms:W3CDTF">{stamp}</dcterms:created>'
        f'<dcterms:modified xsi:type="dcterms:W3CDTF">{stamp}</dcterms:modified>'
        "</cp:coreProperties>"
    )


def app_properties_xml(application: str, app_version: str) -> str:
    """Return ``docProps/app.xml`` naming the producing application."""
    return (
        f"{XML_DECLARATION}\n"
        "<Properties"
        ' xmlns="http://schemas.openxmlformats.org/officeDocument/2006/extended-properties">'
        f"<Application>{escape_xml(application)}</Application>"
        f"<AppVersion>{escape_xml(app_version)}</AppVersion>"
        "</Properties>"
    )


def document_xml(body: str) -> str:
    """Wrap rendered body fragments in ``w:document`` with a Letter page setup."""
    return (
        f"{XML_DECLARATION}\n"
        f'<w:document xmlns:w="{NS_W}" xmlns:r="{NS_R}" xmlns:wp="{NS_WP}"'
        f' xmlns:a="{NS_A}" xmlns:pic="{NS_PIC}">'
        f"<w:body>{body}"
        "<w:sectPr>"
        '<w:pgSz w:w="12240" w:h="15840"/>'
        '<w:pgMar w:top="1440" w:right="1440" w:bottom="1440" w:left="1440"'
        ' w:header="720" w:footer="720" w:gutter="0"/>'
        "</w:sectPr>"
        "</w:body></w:document>"
    )


STYLES_XML = f"""{XML_DECLARATION}
<w:styles xmlns:w="{NS_W}">
  <w:docDefaults>
    <w:rPrDefault>
      <w:rPr>
        <w:rFonts w:ascii="Arial" w:hAnsi="Arial"/>
        <w:sz w:val="22"/>
      </w:rPr>
    </w:rPrDefault>
  </w:docDefaults>
  <w:style w:type="paragraph" w:default="1" w:styleId="Normal">
    <w:name w:val="Normal"/>
  </w:style>
  <w:style w:type="paragraph" w:styleId="Title">
    <w:name w:val="Title"/>
    <w:basedOn w:val="Normal"/>
    <w:pPr><w:spacing w:after="200"/></w:pPr>
    <w:rPr><w:b/><w:sz w:val="72"/></w:rPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="Subtitle">
    <w:name w:val="Subtitle"/>
    <w:basedOn w:val="Normal"/>
    <w:pPr><w:spacing w:after="400"/></w:pPr>
    <w:rPr><w:color w:val="666666"/><w:sz w:val="32"/></w:rPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="Heading1">
    <w:name w:val="heading 1"/>
    <w:basedOn w:val="Normal"/>
    <w:pPr><w:spacing w:before="400" w:after="200"/><w:outlineLvl w:val="0"/></w:pPr>
    <w:rPr><w:b/><w:sz w:val="32"/></w:rPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="Heading2">
    <w:name w:val="heading 2"/>
    <w:basedOn w:val="Normal"/>
    <w:pPr><w:spacing w:before="200" w:after="100"/><w:outlineLvl w:val="1"/></w:pPr>
    <w:rPr><w:b/><w:sz w:val="28"/></w:rPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="Quote">
    <w:name w:val="Quote"/>
    <w:basedOn w:val="Normal"/>
    <w:pPr><w:spacing w:before="200" w:after="200"/></w:pPr>
    <w:rPr><w:i/><w:sz w:val="28"/></w:rPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="ListParagraph">
    <w:name w:val="List Paragraph"/>
    <w:basedOn w:val="Normal"/>
    <w:pPr><w:ind w:left="720"/></w:pPr>
  </w:style>
  <w:style w:type="table" w:styleId="TableGrid">
    <w:name w:val="Table Grid"/>
  </w:style>
</w:styles>"""

SETTINGS_XML = f"""{XML_DECLARATION}
<w:settings xmlns:w="{NS_W}">
  <w:defaultTabStop w:val="720"/>
  <w:characterSpacingControl w:val="doNotCompress"/>
</w:settings>"""

NUMBERING_XML = f"""{XML_DECLARATION}
<w:numbering xmlns:w="{NS_W}">
  <w:abstractNum w:abstractNumId="0">
    <w:lvl w:ilvl="0">
      <w:start w:val="1"/>
      <w:numFmt w:val="bullet"/>
      <w:lvlText w:val="•"/>
      <w:lvlJc w:val="left"/>
      <w:pPr><w:ind w:left="720" w:hanging="360"/></w:pPr>
    </w:lvl>
  </w:abstractNum>
  <w:num w:numId="1">
    <w:abstractNumId w:val="0"/>
  </w:num>
</w:numbering>"""


__all__ = [
    "APP_PART",
    "CONTENT_TYPES_PART",
    "CORE_PART",
    "DOCUMENT_PART",
    "DOCUMENT_RELS_PART",
    "NUMBERING_PART",
    "NUMBERING_XML",
    "ROOT_RELS_PART",
    "SETTINGS_PART",
    "SETTINGS_XML",
    "STYLES_PART",
    "STYLES_XML",
    "app_properties_xml",
    "content_types_xml",
    "core_properties_xml",
    "document_relationships_xml",
    "document_xml",
    "root_relationships_xml",
]
