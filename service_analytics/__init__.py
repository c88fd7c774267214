"""Service call and case classification analytics package."""

from .application import build_dataset, process_case_grid, process_service_source
from .domain import build_classification_tree
from .ingestion import extract_event, split_line

__all__ = [
    "build_classification_tree",
    "build_dataset",
    "extract_event",
    "process_case_grid",
    "process_service_source",
    "split_line",
]
