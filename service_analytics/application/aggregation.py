"""Weighted per-dimension aggregation of admitted call events."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Iterable, List, Tuple

import polars as pl

from service_analytics.domain.models import ParsedEvent

DEFAULT_HOUR = "00:00"
HOUR_PATTERN = r"T(\d{2}):"
# Output bucket name -> event column feeding it.
DIMENSION_COLUMNS: Dict[str, str] = {
    "it_system": "it_system",
    "service": "service",
    "operation": "operation",
    "support_system": "support_system",
    "version": "version",
}
MATRIX_COLUMNS: Tuple[str, str] = ("it_system", "operation")
EVENT_SCHEMA: Dict[str, pl.DataType] = {
    "calls": pl.Int64,
    "it_system": pl.Utf8,
    "service": pl.Utf8,
    "operation": pl.Utf8,
    "support_system": pl.Utf8,
    "version": pl.Utf8,
    "period": pl.Utf8,
}

Bucket = Dict[str, int]
CompositeBucket = Dict[Tuple[str, str], int]


def hour_expr(column_name: str = "period") -> pl.Expr:
    """``"HH:00"`` from a ``...THH:...`` timestamp, ``"00:00"`` when absent."""
    return (
        pl.concat_str(
            [
                pl.col(column_name).str.extract(HOUR_PATTERN, group_index=1),
                pl.lit(":00"),
            ]
        )
        .fill_null(DEFAULT_HOUR)
        .alias("hour")
    )


def _bucket(frame: pl.DataFrame, column_name: str) -> Bucket:
    grouped = frame.group_by(column_name, maintain_order=True).agg(pl.col("calls").sum())
    return {str(key): int(total or 0) for key, total in grouped.iter_rows()}


def _composite_bucket(frame: pl.DataFrame, columns: Tuple[str, str]) -> CompositeBucket:
    grouped = frame.group_by(list(columns), maintain_order=True).agg(pl.col("calls").sum())
    return {(str(first), str(second)): int(total or 0) for first, second, total in grouped.iter_rows()}


@dataclass(frozen=True)
class ServiceAggregation:
    """Finished buckets for one source."""

    total_calls: int
    event_count: int
    hourly: Bucket
    dimensions: Dict[str, Bucket]
    matrix: CompositeBucket

    def bucket(self, dimension: str) -> Bucket:
        return self.dimensions[dimension]


class ServiceAggregator:
    """Accumulator owned by a single source's processing run.

    Events are buffered column-wise and summed with polars group-bys when
    ``finish`` is called. Every bucket is weighted by the event call count.
    """

    def __init__(self) -> None:
        self._columns: Dict[str, List[object]] = {name: [] for name in EVENT_SCHEMA}

    def __len__(self) -> int:
        return len(self._columns["calls"])

    def add(self, event: ParsedEvent) -> None:
        for item in fields(event):
            self._columns[item.name].append(getattr(event, item.name))

    def extend(self, events: Iterable[ParsedEvent]) -> None:
        for event in events:
            self.add(event)

    def frame(self) -> pl.DataFrame:
        return pl.DataFrame(self._columns, schema=EVENT_SCHEMA)

    def finish(self) -> ServiceAggregation:
        frame = self.frame().with_columns(hour_expr())
        total = frame.select(pl.col("calls").sum()).to_series(0)[0]
        return ServiceAggregation(
            total_calls=int(total or 0),
            event_count=frame.height,
            hourly=_bucket(frame, "hour"),
            dimensions={name: _bucket(frame, column) for name, column in DIMENSION_COLUMNS.items()},
            matrix=_composite_bucket(frame, MATRIX_COLUMNS),
        )


def aggregate_events(events: Iterable[ParsedEvent]) -> ServiceAggregation:
    aggregator = ServiceAggregator()
    aggregator.extend(events)
    return aggregator.finish()
