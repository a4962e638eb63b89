"""
Per-segment reconstruction pipeline.

extract -> infer resolution -> synthesize timestamps, once per segment,
then a single concatenation pass in document order.

Segments don't share state, so they can run on a thread pool. Results are
always merged back in the original segment order before concatenation.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from .aligner import concatenate
from .extractor import extract_segments
from .interfaces import INode, ReconstructionResult, Segment, SynthesizedSegment
from .resolution import check_resolution, infer_resolution
from .timestamps import synthesize_timestamps

logger = logging.getLogger(__name__)


def synthesize_segment(segment: Segment) -> SynthesizedSegment:
    """Infer the interval of a segment and build its timestamps."""
    interval = infer_resolution(segment.start, segment.end, segment.sample_count)
    warnings = check_resolution(segment, interval)
    timestamps = synthesize_timestamps(segment.start, interval, segment.sample_count)
    return SynthesizedSegment(
        segment=segment,
        interval=interval,
        timestamps=timestamps,
        warnings=tuple(warnings),
    )


def synthesize_all(segments: List[Segment],
                   max_workers: Optional[int] = None) -> List[SynthesizedSegment]:
    """Synthesize every segment, in parallel when max_workers > 1. Order is preserved."""
    if not max_workers or max_workers <= 1 or len(segments) <= 1:
        return [synthesize_segment(segment) for segment in segments]

    # executor.map yields in submission order
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(synthesize_segment, segments))


def reconstruct(document: INode, max_workers: Optional[int] = None) -> ReconstructionResult:
    """
    Rebuild one continuous dataset from a parsed market document.

    Args:
        document: Parsed document root
        max_workers: Thread pool size for per-segment work (None/1 = serial)

    Returns:
        ReconstructionResult. Broken segments are recorded in .errors and
        contribute no rows; the remaining segments are kept.
    """
    segments, extraction_errors = extract_segments(document)
    synthesized = synthesize_all(segments, max_workers=max_workers)
    return concatenate(synthesized, errors=extraction_errors)
