from __future__ import annotations

import datetime as dt
from typing import Dict, Iterable, List, Optional, Union

from finscope_core.domain.models import Bucket

WindowLength = Union[int, str]

ALL_HISTORY = "all"

WINDOW_PRESETS: Dict[str, WindowLength] = {
    "6m": 6,
    "1y": 12,
    "2y": 24,
    "3y": 36,
    "all": ALL_HISTORY,
}


def bucket_of(date: dt.date) -> Bucket:
    return Bucket.of(date)


def bucket_range(end: Bucket, length: int) -> List[Bucket]:
    """Trailing ``length`` buckets ending at ``end``, oldest first."""
    return [end.shift(-offset) for offset in range(length - 1, -1, -1)]


def parse_window(raw: str) -> WindowLength:
    """
    Accepts a preset name ("6m", "1y", "2y", "3y", "all") or a bare month count.
    """
    txt = raw.strip().lower()
    if txt in WINDOW_PRESETS:
        return WINDOW_PRESETS[txt]
    try:
        months = int(txt)
    except ValueError:
        raise ValueError(f"Unknown window: {raw!r}") from None
    if months < 1:
        raise ValueError(f"Window must cover at least one month, got {months}")
    return months


def resolve_window(end: Bucket, length: WindowLength, dates: Iterable[dt.date] = ()) -> List[Bucket]:
    """
    Expand a window spec into its buckets.

    ``"all"`` starts at the earliest of ``dates`` (or at ``end`` when there is
    nothing older).
    """
    if length == ALL_HISTORY:
        earliest: Optional[Bucket] = min((bucket_of(d) for d in dates), default=None)
        if earliest is None or earliest > end:
            return [end]
        return bucket_range(end, end.months_since(earliest) + 1)
    if not isinstance(length, int) or length < 1:
        raise ValueError(f"Window must be a positive month count or {ALL_HISTORY!r}, got {length!r}")
    return bucket_range(end, length)
