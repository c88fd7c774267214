"""Application service for the case classification grid."""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Optional, Sequence

from service_analytics.config import CASE_REPORT_FILE, RankingLimits
from service_analytics.domain.hierarchy import build_classification_tree
from service_analytics.domain.layout import CASE_GRID_LAYOUT
from service_analytics.domain.models import CaseReport, utc_timestamp
from service_analytics.logging import get_logger

from .ranking import rank_named_bucket

logger = get_logger(__name__)


def count_grid_dimensions(
    grid: Sequence[Sequence[Any]], progress_every: int = 5000
) -> tuple[int, Dict[str, Counter]]:
    """Per-dimension row counts for every data row of ``grid`` (header skipped).

    Empty cells are not counted, but every data row counts toward the total.
    """
    counts: Dict[str, Counter] = {name: Counter() for name in CASE_GRID_LAYOUT.names}
    processed_rows = 0
    for row in grid[1:]:
        named = CASE_GRID_LAYOUT.project(row or ())
        for dimension, value in named.items():
            if value:
                counts[dimension][value] += 1
        processed_rows += 1
        if progress_every and processed_rows % progress_every == 0:
            logger.info("rows_progress", processed_rows=processed_rows)
    return processed_rows, counts


def process_case_grid(
    grid: Sequence[Sequence[Any]],
    limits: Optional[RankingLimits] = None,
    source_file: str = CASE_REPORT_FILE,
    progress_every: int = 5000,
) -> CaseReport:
    """Count, rank and build the classification hierarchy for one grid."""
    limits = limits or RankingLimits()
    total_records, counts = count_grid_dimensions(grid, progress_every=progress_every)
    classification_counts = dict(counts["classification"])

    report = CaseReport(
        total_records=total_records,
        processed_at=utc_timestamp(),
        source_file=source_file,
        authorities=rank_named_bucket(counts["authority"]),
        it_systems=rank_named_bucket(counts["it_system"]),
        classification_tree=build_classification_tree(classification_counts),
        top_classifications=rank_named_bucket(classification_counts, limits.classifications),
        progress=rank_named_bucket(counts["progress"]),
    )
    logger.info(
        "case_grid_processed",
        total_records=total_records,
        unique_authorities=len(counts["authority"]),
        unique_it_systems=len(counts["it_system"]),
        unique_classifications=len(classification_counts),
        unique_progress=len(counts["progress"]),
    )
    return report
