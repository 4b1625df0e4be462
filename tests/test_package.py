"""Package-level tests: unzip exported ``.docx`` bytes and inspect the parts."""

from __future__ import annotations

import datetime as dt
import io
import re
import typing as typ
import xml.etree.ElementTree as ET
import zipfile

from proposal_export._constants import NS_CONTENT_TYPES, NS_PACKAGE_RELS, NS_R, NS_W
from proposal_export.model import ExportOptions
from proposal_export.ooxml import DocxPackageBuilder

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from proposal_export.exporter import DocumentExporter
    from proposal_export.model import Document

W = f"{{{NS_W}}}"
CT = f"{{{NS_CONTENT_TYPES}}}"
RELS = f"{{{NS_PACKAGE_RELS}}}"

BASE_PARTS = {
    "[Content_Types].xml",
    "_rels/.rels",
    "docProps/core.xml",
    "docProps/app.xml",
    "word/document.xml",
    "word/_rels/document.xml.rels",
    "word/styles.xml",
    "word/settings.xml",
    "word/numbering.xml",
}


def _export(
    exporter: DocumentExporter, document: Document, **options: typ.Any
) -> bytes:
    result = exporter.export(document, ExportOptions(format="docx", **options))
    assert result.success, result.error
    assert result.data is not None
    return result.data


def _image_relationships(parts: dict[str, bytes]) -> dict[str, str]:
    root = ET.fromstring(parts["word/_rels/document.xml.rels"])
    return {
        rel.get("Id"): rel.get("Target")
        for rel in root.iter(f"{RELS}Relationship")
        if rel.get("Type", "").endswith("/image")
    }


def _image_defaults(parts: dict[str, bytes]) -> set[str]:
    root = ET.fromstring(parts["[Content_Types].xml"])
    return {
        node.get("Extension")
        for node in root.iter(f"{CT}Default")
        if node.get("ContentType", "").startswith("image/")
    }


def test_minimal_package_has_the_base_parts(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    read_package: cabc.Callable[[bytes], dict[str, bytes]],
) -> None:
    data = _export(exporter, make_document())
    assert zipfile.is_zipfile(io.BytesIO(data))
    parts = read_package(data)
    assert set(parts) == BASE_PARTS
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        assert archive.namelist()[0] == "[Content_Types].xml"
        assert {info.compress_type for info in archive.infolist()} == {
            zipfile.ZIP_DEFLATED
        }
    for name, payload in parts.items():
        ET.fromstring(payload)
        assert payload.startswith(b"<?xml"), name


def test_every_embed_has_a_relationship_and_media_part(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    read_package: cabc.Callable[[bytes], dict[str, bytes]],
    png_data_uri: str,
    jpeg_data_uri: str,
) -> None:
    document = make_document(
        {"type": "image", "order": 0, "content": {"src": png_data_uri}},
        {"type": "image", "order": 1, "content": {"src": "https://x.test/a.png"}},
        {"type": "image", "order": 2, "content": {"src": jpeg_data_uri}},
    )
    parts = read_package(_export(exporter, document))
    body = ET.fromstring(parts["word/document.xml"])
    embeds = [
        node.get(f"{{{NS_R}}}embed")
        for node in body.iter()
        if node.get(f"{{{NS_R}}}embed") is not None
    ]
    relationships = _image_relationships(parts)
    assert embeds == ["rId11", "rId12"]
    assert set(embeds) == set(relationships)
    assert relationships == {"rId11": "media/image1.png", "rId12": "media/image2.jpg"}
    for target in relationships.values():
        assert f"word/{target}" in parts
    media = {name for name in parts if name.startswith("word/media/")}
    assert media == {"word/media/image1.png", "word/media/image2.jpg"}
    assert _image_defaults(parts) == {"png", "jpg"}


def test_repeated_extension_is_declared_once(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    read_package: cabc.Callable[[bytes], dict[str, bytes]],
    png_data_uri: str,
) -> None:
    document = make_document(
        {"type": "image", "content": {"src": png_data_uri}},
        {"type": "image", "content": {"src": png_data_uri}},
    )
    parts = read_package(_export(exporter, document))
    content_types = parts["[Content_Types].xml"].decode()
    assert content_types.count('Extension="png"') == 1
    assert len(_image_relationships(parts)) == 2


def test_include_images_false_drops_media(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    read_package: cabc.Callable[[bytes], dict[str, bytes]],
    png_data_uri: str,
) -> None:
    document = make_document(
        {"type": "image", "content": {"src": png_data_uri, "caption": "Chart"}}
    )
    parts = read_package(_export(exporter, document, include_images=False))
    assert set(parts) == BASE_PARTS
    assert _image_relationships(parts) == {}
    assert _image_defaults(parts) == set()
    assert b"r:embed" not in parts["word/document.xml"]
    assert b"Chart" in parts["word/document.xml"]


def test_sections_follow_order_not_input_position(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    read_package: cabc.Callable[[bytes], dict[str, bytes]],
) -> None:
    document = make_document(
        {"id": "third", "type": "text", "order": 2, "content": {"text": "c"}},
        {"id": "first", "type": "text", "order": 0, "content": {"text": "a"}},
        {"id": "empty", "type": "mystery", "order": 1, "content": {}},
        {"id": "second", "type": "text", "order": 1, "content": {"text": "b"}},
    )
    parts = read_package(_export(exporter, document))
    body = ET.fromstring(parts["word/document.xml"]).find(f"{W}body")
    tags = [
        sdt.find(f"{W}sdtPr/{W}tag").get(f"{W}val") for sdt in body.findall(f"{W}sdt")
    ]
    assert tags == ["first", "second", "third"]
    assert body[-1].tag == f"{W}sectPr"


def test_core_properties_follow_metadata_switch(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    read_package: cabc.Callable[[bytes], dict[str, bytes]],
) -> None:
    document = make_document(name="Q4 <Plan>")
    with_meta = read_package(_export(exporter, document))["docProps/core.xml"]
    without_meta = read_package(_export(exporter, document, include_metadata=False))[
        "docProps/core.xml"
    ]
    assert b"<dc:title>Q4 &lt;Plan&gt;</dc:title>" in with_meta
    assert b"<dc:creator>Proposal Export</dc:creator>" in with_meta
    assert b"2024-05-01T09:30:00Z" in with_meta
    assert b"dc:creator" not in without_meta
    assert b"<dc:title>Q4 &lt;Plan&gt;</dc:title>" in without_meta


def test_unnamed_document_uses_default_title(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    read_package: cabc.Callable[[bytes], dict[str, bytes]],
) -> None:
    parts = read_package(_export(exporter, make_document(name="")))
    assert b"<dc:title>Proposal</dc:title>" in parts["docProps/core.xml"]


def test_builder_output_is_deterministic_with_fixed_clock(
    make_document: cabc.Callable[..., Document], png_data_uri: str
) -> None:
    stamp = dt.datetime(2023, 1, 2, 3, 4, 5, tzinfo=dt.UTC)
    builder = DocxPackageBuilder(clock=lambda: stamp)
    document = make_document(
        {"type": "hero", "content": {"title": "Acme"}},
        {"type": "image", "content": {"src": png_data_uri}},
    )
    options = ExportOptions()
    assert builder.build(document, options) == builder.build(document, options)
    core = builder.build_parts(document, options)["docProps/core.xml"]
    assert "2023-01-02T03:04:05Z" in core


def test_image_toggle_only_changes_image_parts(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    read_package: cabc.Callable[[bytes], dict[str, bytes]],
    png_data_uri: str,
) -> None:
    document = make_document(
        {"type": "hero", "content": {"title": "Acme"}},
        {"type": "image", "content": {"src": png_data_uri, "caption": "Chart"}},
        {"type": "quote", "content": {"text": "Ship it", "author": "Ada"}},
    )
    with_images = read_package(_export(exporter, document))
    without_images = read_package(_export(exporter, document, include_images=False))

    drawing = re.compile(
        rb'<w:p><w:pPr><w:jc w:val="center"/></w:pPr>'
        rb"<w:r><w:drawing>.*?</w:drawing></w:r></w:p>"
    )
    image_default = re.compile(rb'<Default Extension="png" ContentType="image/png"/>')
    image_rel = re.compile(rb'<Relationship Id="rId11"[^>]*/>')
    stripped = {
        "word/document.xml": drawing,
        "[Content_Types].xml": image_default,
        "word/_rels/document.xml.rels": image_rel,
    }
    assert set(with_images) - set(without_images) == {"word/media/image1.png"}
    for name, payload in without_images.items():
        pattern = stripped.get(name)
        expected = with_images[name]
        if pattern is not None:
            expected = pattern.sub(b"", expected, count=1)
        assert payload == expected, name


def test_control_characters_in_text_keep_document_well_formed(
    exporter: DocumentExporter,
    make_document: cabc.Callable[..., Document],
    read_package: cabc.Callable[[bytes], dict[str, bytes]],
) -> None:
    document = make_document(
        {
            "type": "text",
            "content": {"heading": "Notes\x0b", "text": "Page one\x0cPage two"},
        }
    )
    parts = read_package(_export(exporter, document))
    body = ET.fromstring(parts["word/document.xml"])
    texts = [node.text for node in body.iter(f"{W}t")]
    assert texts == ["Notes", "Page onePage two"]
