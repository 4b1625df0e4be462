"""Common literal values used across proposal_export.

These constants keep OOXML namespaces, relationship types, content types and
drawing geometry centralized so the section renderers, the package builder,
and tests can import the same values without drifting. Intended for internal
use within the proposal_export package.

Examples
--------
>>> from proposal_export import _constants
>>> _constants.image_relationship_id(1)
'rId11'
>>> _constants.IMAGE_WIDTH_EMU // _constants.EMU_PER_INCH
6
"""

NS_W = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
NS_R = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
NS_WP = "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing"
NS_A = "http://schemas.openxmlformats.org/drawingml/2006/main"
NS_PIC = "http://schemas.openxmlformats.org/drawingml/2006/picture"
NS_PACKAGE_RELS = "http://schemas.openxmlformats.org/package/2006/relationships"
NS_CONTENT_TYPES = "http://schemas.openxmlformats.org/package/2006/content-types"

REL_OFFICE_DOCUMENT = f"{NS_R}/officeDocument"
REL_CORE_PROPERTIES = (
    "http://schemas.openxmlformats.org/package/2006/relationships/metadata/"
    "core-properties"
)
REL_EXTENDED_PROPERTIES = f"{NS_R}/extended-properties"
REL_STYLES = f"{NS_R}/styles"
REL_SETTINGS = f"{NS_R}/settings"
REL_NUMBERING = f"{NS_R}/numbering"
REL_IMAGE = f"{NS_R}/image"

CT_RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"
CT_XML = "application/xml"
CT_DOCUMENT = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"
)
CT_STYLES = "application/vnd.openxmlformats-officedocument.wordprocessingml.styles+xml"
CT_SETTINGS = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.settings+xml"
)
CT_NUMBERING = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.numbering+xml"
)
CT_CORE = "application/vnd.openxmlformats-package.core-properties+xml"
CT_APP = "application/vnd.openxmlformats-officedocument.extended-properties+xml"
DOCX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'

# Image relationship ids start at rId11; rId1-rId3 belong to the boilerplate
# parts and rId4-rId10 stay reserved.
IMAGE_RELATIONSHIP_OFFSET = 10

EMU_PER_INCH = 914400
IMAGE_WIDTH_EMU = 5486400
IMAGE_HEIGHT_EMU = 3200400

BULLET_NUMBERING_ID = 1
HEADER_SHADING = "E7E6E6"

DEFAULT_BASENAME = "proposal"
DEFAULT_TITLE = "Proposal"
MAX_FILENAME_LENGTH = 100


def image_relationship_id(image_index: int) -> str:
    """Return the document relationship id for the 1-based ``image_index``."""
    return f"rId{IMAGE_RELATIONSHIP_OFFSET + image_index}"
