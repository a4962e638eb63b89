"""
Segment Reconstruction Package

I rebuild one uniformly timestamped dataset from the independently bounded
TimeSeries segments of an ENTSO-E market document.

Stages:
- extractor: TimeSeries subtree -> Segment (start, end, samples)
- resolution: interval = (end - start) / n
- timestamps: start + k * interval, k = 0..n-1
- aligner: pair and concatenate in document order

Usage:
    from provider.document import parse_document
    from reconstruction import reconstruct

    result = reconstruct(parse_document(raw_bytes))
    df = result.to_frame()
"""

from .interfaces import (
    # Interfaces
    INode,
    # Data classes
    Segment,
    SynthesizedSegment,
    TimestampedSample,
    ReconstructionResult,
    # Errors
    ReconstructionError,
    ExtractionError,
    MisalignmentError,
    SuspiciousResolutionWarning,
)

from .extractor import extract_segment, extract_segments
from .resolution import infer_resolution, check_resolution
from .timestamps import synthesize_timestamps
from .aligner import align_segment, concatenate
from .pipeline import synthesize_segment, reconstruct

__all__ = [
    'INode',
    'Segment',
    'SynthesizedSegment',
    'TimestampedSample',
    'ReconstructionResult',
    'ReconstructionError',
    'ExtractionError',
    'MisalignmentError',
    'SuspiciousResolutionWarning',
    'extract_segment',
    'extract_segments',
    'infer_resolution',
    'check_resolution',
    'synthesize_timestamps',
    'align_segment',
    'concatenate',
    'synthesize_segment',
    'reconstruct',
]
