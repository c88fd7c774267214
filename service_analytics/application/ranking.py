"""Top-N ranking of aggregated buckets."""

from __future__ import annotations

from typing import List, Mapping, Optional, Tuple

from service_analytics.domain.models import MatrixEntry, RankedEntry

from .aggregation import DEFAULT_HOUR


def _truncate(items: list, limit: Optional[int]) -> list:
    if limit is None:
        return items
    return items[: max(0, limit)]


def rank_bucket(bucket: Mapping[str, int], limit: Optional[int] = None) -> List[RankedEntry]:
    """Entries by descending count, ties by ascending name, cut to ``limit``."""
    ordered = sorted(bucket.items(), key=lambda item: (-item[1], item[0]))
    return [RankedEntry(name=name, count=count) for name, count in _truncate(ordered, limit)]


def rank_named_bucket(bucket: Mapping[str, int], limit: Optional[int] = None) -> List[RankedEntry]:
    """Like ``rank_bucket`` but drops blank keys first."""
    named = {key: value for key, value in bucket.items() if key and key.strip()}
    return rank_bucket(named, limit)


def rank_matrix(bucket: Mapping[Tuple[str, str], int], limit: Optional[int] = None) -> List[MatrixEntry]:
    ordered = sorted(bucket.items(), key=lambda item: (-item[1], item[0]))
    return [
        MatrixEntry(it_system=it_system, operation=operation, calls=calls)
        for (it_system, operation), calls in _truncate(ordered, limit)
    ]


def hourly_series(bucket: Mapping[str, int]) -> List[RankedEntry]:
    """Full-day series ordered by ``"HH:00"`` key; never truncated."""
    return [RankedEntry(name=hour, count=bucket[hour]) for hour in sorted(bucket)]


def most_active(series: List[RankedEntry], default_name: str = DEFAULT_HOUR) -> RankedEntry:
    """First entry with the strictly greatest count, starting from ``(default_name, 0)``."""
    best = RankedEntry(name=default_name, count=0)
    for entry in series:
        if entry.count > best.count:
            best = entry
    return best
