"""
Segment extraction from a parsed market document.

Path walked per segment:
    document -> TimeSeries -> Period (exactly one)
             -> timeInterval/start, timeInterval/end  ('YYYY-MM-DDTHH:MMZ')
             -> Point* -> quantity

Every text-to-value conversion fails loudly with ExtractionError. A broken
segment is never skipped silently, since a missing segment would shift
everything after it.
"""

import logging
import re
from datetime import datetime, timezone
from typing import List, Optional, Tuple

import pandas as pd

from .interfaces import ExtractionError, INode, Segment
from .resolution import parse_iso_duration

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%MZ'
_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}Z$")
_QUANTITY_RE = re.compile(r"^[+-]?\d+(\.\d+)?$")


def _only_child(node: INode, tag: str, index: int, context: str) -> INode:
    children = node.get_children(tag)
    if not children:
        raise ExtractionError(f"missing {tag} under {context}", index)
    if len(children) > 1:
        raise ExtractionError(f"expected exactly one {tag} under {context}, found {len(children)}", index)
    return children[0]


def parse_instant(text: Optional[str], index: int, field_name: str) -> pd.Timestamp:
    """Parse 'YYYY-MM-DDTHH:MMZ' into a UTC Timestamp."""
    if not text:
        raise ExtractionError(f"empty {field_name} timestamp", index)
    text = text.strip()
    # strptime alone accepts unpadded fields like 2024-6-3T2:0Z
    if not _TIMESTAMP_RE.match(text):
        raise ExtractionError(f"bad {field_name} timestamp {text!r}: expected YYYY-MM-DDTHH:MMZ", index)
    try:
        parsed = datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise ExtractionError(f"bad {field_name} timestamp {text!r}: {e}", index) from e
    return pd.Timestamp(parsed.replace(tzinfo=timezone.utc))


def parse_quantity(text: Optional[str], index: int, position: int) -> Optional[float]:
    """Empty quantity text is a gap (None). Anything else must be a number."""
    if text is None or not text.strip():
        return None
    # float() would also take nan, inf and 1_000
    if not _QUANTITY_RE.match(text.strip()):
        raise ExtractionError(f"point {position}: quantity {text!r} is not numeric", index)
    return float(text)


def extract_segment(timeseries: INode, index: int) -> Segment:
    """
    Turn one TimeSeries subtree into a Segment.

    Args:
        timeseries: The TimeSeries node
        index: Position of this TimeSeries in the document (for error context)

    Raises:
        ExtractionError: On any structural defect or unparseable text
    """
    period = _only_child(timeseries, 'Period', index, 'TimeSeries')
    interval = _only_child(period, 'timeInterval', index, 'Period')

    start = parse_instant(_only_child(interval, 'start', index, 'timeInterval').text, index, 'start')
    end = parse_instant(_only_child(interval, 'end', index, 'timeInterval').text, index, 'end')
    if end <= start:
        raise ExtractionError(f"end {end} is not after start {start}", index)

    samples = []
    for position, point in enumerate(period.get_children('Point'), start=1):
        quantities = point.get_children('quantity')
        if len(quantities) != 1:
            raise ExtractionError(
                f"point {position}: expected one quantity, found {len(quantities)}", index
            )
        samples.append(parse_quantity(quantities[0].text, index, position))

    declared = None
    resolution_nodes = period.get_children('resolution')
    if resolution_nodes and resolution_nodes[0].text:
        declared = parse_iso_duration(resolution_nodes[0].text)

    return Segment(
        index=index,
        start=start,
        end=end,
        samples=tuple(samples),
        declared_resolution=declared,
    )


def extract_segments(document: INode) -> Tuple[List[Segment], List[ExtractionError]]:
    """
    Extract every TimeSeries of the document, in document order.

    A failure on one TimeSeries doesn't stop the others.

    Returns:
        (segments, errors)
    """
    segments: List[Segment] = []
    errors: List[ExtractionError] = []

    for index, timeseries in enumerate(document.get_children('TimeSeries')):
        try:
            segments.append(extract_segment(timeseries, index))
        except ExtractionError as e:
            logger.warning(f"Extraction failed: {e}")
            errors.append(e)

    logger.debug(f"Extracted {len(segments)} segments, {len(errors)} failed")
    return segments, errors
