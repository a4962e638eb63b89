"""Timestamp synthesis for a single segment."""

from typing import Optional

import pandas as pd


def synthesize_timestamps(start: pd.Timestamp, interval: Optional[pd.Timedelta],
                          sample_count: int) -> pd.DatetimeIndex:
    """
    Build exactly sample_count instants: start, start + interval, ...,
    start + (n - 1) * interval.

    The segment end is never produced; generating up to and including it
    would give one timestamp too many. No timezone conversion happens, the
    index carries whatever zone start carries.
    """
    if sample_count <= 0:
        return pd.DatetimeIndex([], tz=start.tz, name='timestamp')
    if interval is None or interval <= pd.Timedelta(0):
        raise ValueError(f"Interval must be positive for {sample_count} samples, got {interval}")

    # I build the offsets explicitly so the count can't drift with freq inference
    offsets = pd.TimedeltaIndex([interval * k for k in range(sample_count)])
    return pd.DatetimeIndex(start + offsets, name='timestamp')
