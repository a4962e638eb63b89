"""
Aligner / concatenator.

I pair each synthesized timestamp with its sample, position for position,
and append segments in the order the provider returned them. Segments are
never re-sorted: out-of-order segments stay out of order.
"""

import logging
from typing import Iterable, List, Sequence

from .interfaces import (
    MisalignmentError,
    ReconstructionError,
    ReconstructionResult,
    SynthesizedSegment,
    TimestampedSample,
)

logger = logging.getLogger(__name__)


def align_segment(synthesized: SynthesizedSegment) -> List[TimestampedSample]:
    """
    Pair timestamps with samples for one segment.

    Raises:
        MisalignmentError: If the counts differ. Nothing is truncated, a
            zip-shortened segment would pin later values to earlier times.
    """
    timestamps = synthesized.timestamps
    samples = synthesized.segment.samples
    if len(timestamps) != len(samples):
        raise MisalignmentError(synthesized.segment.index, len(timestamps), len(samples))

    return [
        TimestampedSample(timestamp=ts, value=value)
        for ts, value in zip(timestamps, samples)
    ]


def concatenate(synthesized_segments: Sequence[SynthesizedSegment],
                errors: Iterable[ReconstructionError] = ()) -> ReconstructionResult:
    """
    Build the dataset from segments already in document order.

    Args:
        synthesized_segments: Segments with their timestamps, in document order
        errors: Errors recorded before alignment (e.g. extraction failures)

    Returns:
        ReconstructionResult with rows, skipped count, warnings and errors
    """
    result = ReconstructionResult(errors=list(errors))

    for synthesized in synthesized_segments:
        result.warnings.extend(synthesized.warnings)

        if synthesized.is_empty:
            result.skipped_segments += 1
            continue

        try:
            rows = align_segment(synthesized)
        except MisalignmentError as e:
            logger.warning(f"Alignment failed: {e}")
            result.errors.append(e)
            continue

        result.dataset.extend(rows)

    result.errors.sort(key=lambda e: e.segment_index)

    logger.info(
        f"Reconstructed {len(result.dataset)} rows from {len(synthesized_segments)} segments "
        f"(skipped={result.skipped_segments}, warned={result.warned_segments}, "
        f"errors={len(result.errors)})"
    )
    return result
