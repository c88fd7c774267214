"""Infrastructure layer package."""

from .report_exporter import save_summary_json
from .source_repository import find_service_sources, iter_service_sources, read_grid

__all__ = ["find_service_sources", "iter_service_sources", "read_grid", "save_summary_json"]
