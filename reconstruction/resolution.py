"""
Resolution inference for a single segment.

The provider returns a half-open, equally spaced series: the declared end is
exactly one interval past the last sample, not the last sample itself.
So interval = (end - start) / n.
"""

import logging
import re
from typing import List, Optional

import pandas as pd

from .interfaces import Segment, SuspiciousResolutionWarning

logger = logging.getLogger(__name__)

ONE_MINUTE = pd.Timedelta(minutes=1)

_ISO_DURATION_RE = re.compile(
    r"^P(?:(?P<d>\d+)D)?(?:T(?:(?P<h>\d+)H)?(?:(?P<m>\d+)M)?(?:(?P<s>\d+)S)?)?$"
)


def infer_resolution(start: pd.Timestamp, end: pd.Timestamp,
                     sample_count: int) -> Optional[pd.Timedelta]:
    """
    Derive the sampling interval of a segment.

    Args:
        start: Segment start instant (inclusive)
        end: Segment end instant (exclusive)
        sample_count: Number of samples in the segment

    Returns:
        (end - start) / sample_count, or None when there are no samples
    """
    if sample_count <= 0:
        return None
    return (end - start) / sample_count


def parse_iso_duration(text: str) -> Optional[pd.Timedelta]:
    """Parse PT15M / PT60M / P1D style durations. None if the text doesn't match."""
    match = _ISO_DURATION_RE.match(text.strip())
    if not match or not any(match.groupdict().values()):
        return None
    parts = {k: int(v or 0) for k, v in match.groupdict().items()}
    return pd.Timedelta(days=parts['d'], hours=parts['h'],
                        minutes=parts['m'], seconds=parts['s'])


def check_resolution(segment: Segment,
                     interval: Optional[pd.Timedelta]) -> List[SuspiciousResolutionWarning]:
    """
    I flag derived intervals that probably come from an upstream defect.

    Nothing here raises: the derived interval is trusted either way and the
    warnings travel with the result.
    """
    warnings: List[SuspiciousResolutionWarning] = []
    if interval is None:
        return warnings

    if interval % ONE_MINUTE != pd.Timedelta(0):
        warnings.append(SuspiciousResolutionWarning(
            f"derived interval {interval} is not a whole number of minutes "
            f"({segment.sample_count} samples over {segment.span})",
            segment.index, interval,
        ))

    # The derivation absorbs a provider that omits trailing points, so a
    # declared resolution is the only way to notice.
    declared = segment.declared_resolution
    if declared is not None and declared != interval:
        warnings.append(SuspiciousResolutionWarning(
            f"derived interval {interval} disagrees with declared resolution {declared}",
            segment.index, interval,
        ))

    for warning in warnings:
        logger.warning(str(warning))
    return warnings
