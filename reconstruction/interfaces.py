"""
Data types and errors for segment reconstruction.

I define the values that flow through the pipeline:
Segment -> SynthesizedSegment -> TimestampedSample rows -> ReconstructionResult.
Every value here is immutable once built, except the result lists which the
aligner owns as the single writer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd


# ============================================================================
# INTERFACES
# ============================================================================

class INode(ABC):
    """Read-only view of a parsed document node.

    The extractor needs nothing beyond child lookup by tag and node text,
    so any tree representation can be plugged in.
    """

    @property
    @abstractmethod
    def text(self) -> Optional[str]:
        """Text content of this node, None if it has none."""

    @abstractmethod
    def get_children(self, tag: str) -> Sequence['INode']:
        """All direct children with the given local tag name, in document order."""


# ============================================================================
# ERRORS
# ============================================================================

class ReconstructionError(Exception):
    """Base error for a single segment, carrying its index in the document."""

    def __init__(self, message: str, segment_index: int):
        self.segment_index = segment_index
        super().__init__(f"[segment {segment_index}] {message}")


class ExtractionError(ReconstructionError):
    """A TimeSeries subtree is structurally broken or holds unparseable text."""


class MisalignmentError(ReconstructionError):
    """Synthesized timestamp count differs from the sample count."""

    def __init__(self, segment_index: int, n_timestamps: int, n_samples: int):
        self.n_timestamps = n_timestamps
        self.n_samples = n_samples
        super().__init__(
            f"{n_timestamps} timestamps synthesized for {n_samples} samples",
            segment_index,
        )


class SuspiciousResolutionWarning(UserWarning):
    """Non-fatal: the derived interval looks like an upstream defect."""

    def __init__(self, message: str, segment_index: int, interval: pd.Timedelta):
        self.segment_index = segment_index
        self.interval = interval
        super().__init__(f"[segment {segment_index}] {message}")


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass(frozen=True)
class Segment:
    """One provider TimeSeries: [start, end) and its ordered samples.

    None in samples marks a missing value (kept, never dropped).
    """
    index: int
    start: pd.Timestamp
    end: pd.Timestamp
    samples: Tuple[Optional[float], ...]
    declared_resolution: Optional[pd.Timedelta] = None

    @property
    def sample_count(self) -> int:
        return len(self.samples)

    @property
    def span(self) -> pd.Timedelta:
        return self.end - self.start


@dataclass(frozen=True, eq=False)
class SynthesizedSegment:
    """A segment annotated with its inferred interval and timestamps."""
    segment: Segment
    interval: Optional[pd.Timedelta]
    timestamps: pd.DatetimeIndex
    warnings: Tuple[SuspiciousResolutionWarning, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.segment.sample_count == 0 and len(self.timestamps) == 0


@dataclass(frozen=True)
class TimestampedSample:
    timestamp: pd.Timestamp
    value: Optional[float]


@dataclass
class ReconstructionResult:
    """The rebuilt dataset plus per-segment diagnostics.

    Rows keep segment order as returned by the provider. Overlapping
    segments produce duplicate timestamps; resolving them is up to the caller.
    """
    dataset: List[TimestampedSample] = field(default_factory=list)
    skipped_segments: int = 0
    warnings: List[SuspiciousResolutionWarning] = field(default_factory=list)
    errors: List[ReconstructionError] = field(default_factory=list)

    @property
    def warned_segments(self) -> int:
        return len({w.segment_index for w in self.warnings})

    @property
    def ok(self) -> bool:
        return not self.errors

    def __len__(self) -> int:
        return len(self.dataset)

    def raise_for_errors(self) -> None:
        """I raise the first recorded error for callers that want strict behavior."""
        if self.errors:
            raise self.errors[0]

    def merge(self, other: 'ReconstructionResult') -> 'ReconstructionResult':
        """Append another result (e.g. the next request window) after this one."""
        return ReconstructionResult(
            dataset=self.dataset + other.dataset,
            skipped_segments=self.skipped_segments + other.skipped_segments,
            warnings=self.warnings + other.warnings,
            errors=self.errors + other.errors,
        )

    def to_frame(self) -> pd.DataFrame:
        """
        Convert the dataset to a DataFrame.

        Returns:
            DataFrame indexed by UTC 'timestamp' with a float 'value' column.
            Missing samples become NaN. No sorting or deduplication.
        """
        index = pd.DatetimeIndex(
            [row.timestamp for row in self.dataset], name='timestamp'
        )
        if index.tz is None:
            index = index.tz_localize('UTC')
        values = np.array(
            [np.nan if row.value is None else row.value for row in self.dataset],
            dtype=float,
        )
        return pd.DataFrame({'value': values}, index=index)
