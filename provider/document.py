"""
Document parsing for ENTSO-E market documents.

I turn raw response bytes into an immutable tree of DocumentNode values.
Namespaces are stripped from tags because ENTSO-E ships several schema
versions (3:0, 4:1, ...) of the same document.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Optional, Tuple

from reconstruction.interfaces import INode

logger = logging.getLogger(__name__)


class DocumentParseError(Exception):
    """Raw bytes could not be decoded into a document tree."""


def local_tag(tag: str) -> str:
    """'{urn:...:4:1}TimeSeries' -> 'TimeSeries'"""
    return tag.split('}', 1)[1] if '}' in tag else tag


@dataclass(frozen=True)
class DocumentNode(INode):
    tag: str
    node_text: Optional[str] = None
    children: Tuple['DocumentNode', ...] = ()

    @property
    def text(self) -> Optional[str]:
        return self.node_text

    def get_children(self, tag: str) -> Tuple['DocumentNode', ...]:
        return tuple(child for child in self.children if child.tag == tag)

    def find(self, tag: str) -> Optional['DocumentNode']:
        """First direct child with this tag, or None."""
        for child in self.children:
            if child.tag == tag:
                return child
        return None

    def find_text(self, tag: str) -> Optional[str]:
        child = self.find(tag)
        return child.text if child is not None else None


def _freeze(element: ET.Element) -> DocumentNode:
    text = element.text.strip() if element.text is not None else None
    return DocumentNode(
        tag=local_tag(element.tag),
        node_text=text,
        children=tuple(_freeze(child) for child in element),
    )


def parse_document(raw: bytes) -> DocumentNode:
    """
    Parse raw XML bytes into a DocumentNode tree.

    Raises:
        DocumentParseError: If the bytes are empty or not well-formed XML
    """
    if not raw:
        raise DocumentParseError("Empty document")

    try:
        root = ET.fromstring(raw)
    except ET.ParseError as e:
        logger.error(f"XML parse error: {e}")
        raise DocumentParseError(f"Malformed XML: {e}") from e

    document = _freeze(root)
    logger.debug(f"Parsed {document.tag} with {len(document.get_children('TimeSeries'))} TimeSeries")
    return document
