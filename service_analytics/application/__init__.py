"""Application layer package."""

from .aggregation import ServiceAggregation, ServiceAggregator, aggregate_events
from .case_pipeline import process_case_grid
from .ranking import hourly_series, rank_bucket, rank_matrix
from .service_pipeline import build_dataset, extract_source_date, merge_results, process_service_source

__all__ = [
    "ServiceAggregation",
    "ServiceAggregator",
    "aggregate_events",
    "process_case_grid",
    "hourly_series",
    "rank_bucket",
    "rank_matrix",
    "build_dataset",
    "extract_source_date",
    "merge_results",
    "process_service_source",
]
