"""Domain models for parsed call events and the produced summaries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from .hierarchy import ClassificationTree


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ParsedEvent:
    """Typed projection of one admitted call-extract row."""

    calls: int
    it_system: str
    service: str
    operation: str
    support_system: str
    version: str
    period: str


@dataclass(frozen=True)
class RankedEntry:
    name: str
    count: int

    def to_dict(self, name_field: str = "name", count_field: str = "count") -> Dict[str, Any]:
        return {name_field: self.name, count_field: self.count}


@dataclass(frozen=True)
class MatrixEntry:
    """One cell of the IT system x operation matrix."""

    it_system: str
    operation: str
    calls: int

    def to_dict(self) -> Dict[str, Any]:
        return {"itSystem": self.it_system, "operation": self.operation, "calls": self.calls}


def _entries(entries: List[RankedEntry], name_field: str) -> List[Dict[str, Any]]:
    return [entry.to_dict(name_field=name_field, count_field="calls") for entry in entries]


@dataclass(frozen=True)
class SourceResult:
    """Everything derived from one dated call extract."""

    total_calls: int
    processed_rows: int
    filtered_rows: int
    unique_it_systems: int
    unique_services: int
    unique_operations: int
    most_active_hour: str
    most_active_it_system: str
    hourly: List[RankedEntry]
    top_it_systems: List[RankedEntry]
    top_services: List[RankedEntry]
    top_operations: List[RankedEntry]
    support_systems: List[RankedEntry]
    service_versions: List[RankedEntry]
    it_system_operations: List[MatrixEntry]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCalls": self.total_calls,
            "processedRows": self.processed_rows,
            "filteredRows": self.filtered_rows,
            "uniqueITSystems": self.unique_it_systems,
            "uniqueServices": self.unique_services,
            "uniqueOperations": self.unique_operations,
            "mostActiveHour": self.most_active_hour,
            "mostActiveITSystem": self.most_active_it_system,
            "hourly": _entries(self.hourly, "hour"),
            "topITSystems": _entries(self.top_it_systems, "name"),
            "topServices": _entries(self.top_services, "name"),
            "topOperations": _entries(self.top_operations, "name"),
            "supportSystems": _entries(self.support_systems, "name"),
            "serviceVersions": _entries(self.service_versions, "version"),
            "itSystemOperations": [entry.to_dict() for entry in self.it_system_operations],
        }


@dataclass(frozen=True)
class Dataset:
    """Multi-source output keyed by ISO date."""

    dates: List[str]
    data: Mapping[str, SourceResult]
    processed_at: str
    files_processed: int

    def to_dict(self) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {
            "processedAt": self.processed_at,
            "filesProcessed": self.files_processed,
        }
        return {
            "dates": list(self.dates),
            "data": {date: self.data[date].to_dict() for date in self.dates},
            "metadata": metadata,
        }


@dataclass(frozen=True)
class CaseReport:
    """Case classification summary built from the spreadsheet grid."""

    total_records: int
    processed_at: str
    source_file: str
    authorities: List[RankedEntry]
    it_systems: List[RankedEntry]
    classification_tree: ClassificationTree
    top_classifications: List[RankedEntry]
    progress: List[RankedEntry]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": {
                "totalRecords": self.total_records,
                "processedAt": self.processed_at,
                "sourceFile": self.source_file,
            },
            "ejendeMyndighed": [entry.to_dict() for entry in self.authorities],
            "masterITSystemNavn": [entry.to_dict() for entry in self.it_systems],
            "kleEmne": self.classification_tree.to_dict(),
            "kleEmneFlat": [entry.to_dict() for entry in self.top_classifications],
            "fremdrift": [entry.to_dict() for entry in self.progress],
        }
