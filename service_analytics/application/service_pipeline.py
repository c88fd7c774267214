"""Application service for the dated call-extract use case."""

from __future__ import annotations

import re
from typing import Dict, Iterable, Mapping, Optional, Tuple

from service_analytics.config import PipelineConfig, RankingLimits
from service_analytics.domain.models import Dataset, SourceResult, utc_timestamp
from service_analytics.errors import UnresolvableSourceDateError
from service_analytics.ingestion import data_lines, extract_event, split_line
from service_analytics.logging import get_logger

from .aggregation import ServiceAggregator
from .ranking import hourly_series, most_active, rank_bucket, rank_matrix

logger = get_logger(__name__)

SOURCE_DATE_PATTERN = re.compile(r"KOSDY-PROD\.(\d{8})\.csv")
UNKNOWN = "Unknown"

SourceLines = Tuple[str, Iterable[str]]


def extract_source_date(name: str) -> str:
    """``KOSDY-PROD.20251130.csv`` -> ``2025-11-30``."""
    match = SOURCE_DATE_PATTERN.search(name)
    if not match:
        raise UnresolvableSourceDateError(name)
    digits = match.group(1)
    return f"{digits[0:4]}-{digits[4:6]}-{digits[6:8]}"


def process_service_source(
    name: str,
    lines: Iterable[str],
    limits: Optional[RankingLimits] = None,
    progress_every: int = 5000,
) -> SourceResult:
    """Tokenize, filter, aggregate and rank one call extract."""
    limits = limits or RankingLimits()
    aggregator = ServiceAggregator()
    filtered_rows = 0

    for line in data_lines(lines):
        event = extract_event(split_line(line))
        if event is None:
            filtered_rows += 1
            continue
        aggregator.add(event)
        if progress_every and len(aggregator) % progress_every == 0:
            logger.info("rows_progress", source=name, processed_rows=len(aggregator))

    aggregation = aggregator.finish()

    hourly = hourly_series(aggregation.hourly)
    top_it_systems = rank_bucket(aggregation.bucket("it_system"), limits.it_systems)
    result = SourceResult(
        total_calls=aggregation.total_calls,
        processed_rows=aggregation.event_count,
        filtered_rows=filtered_rows,
        unique_it_systems=len(aggregation.bucket("it_system")),
        unique_services=len(aggregation.bucket("service")),
        unique_operations=len(aggregation.bucket("operation")),
        most_active_hour=most_active(hourly).name,
        most_active_it_system=top_it_systems[0].name if top_it_systems else UNKNOWN,
        hourly=hourly,
        top_it_systems=top_it_systems,
        top_services=rank_bucket(aggregation.bucket("service"), limits.services),
        top_operations=rank_bucket(aggregation.bucket("operation"), limits.operations),
        support_systems=rank_bucket(aggregation.bucket("support_system"), limits.support_systems),
        service_versions=rank_bucket(aggregation.bucket("version"), limits.versions),
        it_system_operations=rank_matrix(aggregation.matrix, limits.matrix),
    )
    logger.info(
        "source_processed",
        source=name,
        processed_rows=result.processed_rows,
        filtered_rows=result.filtered_rows,
        total_calls=result.total_calls,
    )
    return result


def merge_results(results: Mapping[str, SourceResult], files_processed: int) -> Dataset:
    """Combine finished per-date results into the output dataset."""
    return Dataset(
        dates=sorted(results),
        data=dict(results),
        processed_at=utc_timestamp(),
        files_processed=files_processed,
    )


def build_dataset(sources: Iterable[SourceLines], config: Optional[PipelineConfig] = None) -> Dataset:
    """Process every ``(name, lines)`` source and merge them by date.

    Sources whose name carries no date are skipped with a warning. An empty
    input still yields a well-formed, empty dataset.
    """
    limits = config.limits if config else RankingLimits()
    progress_every = config.progress_every if config else 5000
    results: Dict[str, SourceResult] = {}
    offered = 0

    for name, lines in sources:
        offered += 1
        try:
            date = extract_source_date(name)
        except UnresolvableSourceDateError as exc:
            logger.warning("source_date_unresolved", source=name, error=str(exc))
            continue
        if date in results:
            logger.warning("source_date_duplicate", source=name, date=date)
        results[date] = process_service_source(name, lines, limits=limits, progress_every=progress_every)

    dataset = merge_results(results, files_processed=offered)
    if not dataset.dates:
        logger.warning("dataset_empty", files_processed=offered)
    return dataset