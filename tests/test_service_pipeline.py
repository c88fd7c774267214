import pytest

from service_analytics.application.service_pipeline import (
    build_dataset,
    extract_source_date,
    process_service_source,
)
from service_analytics.config import RankingLimits
from service_analytics.errors import UnresolvableSourceDateError

from .helpers import HEADER, call_row


def test_extract_source_date_from_file_name():
    assert extract_source_date("KOSDY-PROD.20251130.csv") == "2025-11-30"


@pytest.mark.parametrize("name", ["KOSDY-PROD.2025113.csv", "KOSDY-PROD.latest.csv", "report.csv"])
def test_extract_source_date_rejects_undated_names(name):
    with pytest.raises(UnresolvableSourceDateError):
        extract_source_date(name)


def test_process_service_source_summarizes_admitted_rows(call_lines):
    result = process_service_source("KOSDY-PROD.20251130.csv", call_lines)

    assert result.total_calls == 22
    assert result.processed_rows == 4
    assert result.filtered_rows == 2
    assert result.unique_it_systems == 2
    assert result.unique_services == 1
    assert result.unique_operations == 2
    assert result.most_active_hour == "08:00"
    assert result.most_active_it_system == "SysA"
    assert [(entry.name, entry.count) for entry in result.hourly] == [
        ("00:00", 0),
        ("08:00", 15),
        ("14:00", 7),
    ]
    assert [(entry.name, entry.count) for entry in result.top_operations] == [("put", 12), ("get", 10)]
    assert [(entry.name, entry.count) for entry in result.service_versions] == [("v1", 15), ("v2", 7)]
    assert [(entry.name, entry.count) for entry in result.support_systems] == [("Support1", 22), ("Support2", 0)]
    assert [(entry.it_system, entry.operation, entry.calls) for entry in result.it_system_operations] == [
        ("SysA", "get", 10),
        ("SysA", "put", 7),
        ("SysB", "put", 5),
        ("SysB", "get", 0),
    ]


def test_filtered_rows_never_reach_buckets():
    lines = [HEADER, call_row(calls="50", it_system="Hidden", version="NULL"), call_row(calls="2")]

    result = process_service_source("KOSDY-PROD.20251130.csv", lines)

    assert result.total_calls == 2
    assert all(entry.name != "Hidden" for entry in result.top_it_systems)


def test_process_service_source_applies_limits():
    lines = [HEADER] + [call_row(calls=str(i + 1), it_system=f"Sys{i:02d}") for i in range(20)]

    result = process_service_source("KOSDY-PROD.20251130.csv", lines, limits=RankingLimits(it_systems=3))

    assert [entry.name for entry in result.top_it_systems] == ["Sys19", "Sys18", "Sys17"]
    assert result.unique_it_systems == 20


def test_header_only_source_yields_empty_result():
    result = process_service_source("KOSDY-PROD.20251130.csv", [HEADER])

    assert result.total_calls == 0
    assert result.hourly == []
    assert result.most_active_hour == "00:00"
    assert result.most_active_it_system == "Unknown"


def test_to_dict_uses_output_field_names(call_lines):
    document = process_service_source("KOSDY-PROD.20251130.csv", call_lines).to_dict()

    assert document["hourly"][0] == {"hour": "00:00", "calls": 0}
    assert document["topITSystems"][0] == {"name": "SysA", "calls": 17}
    assert document["serviceVersions"][0] == {"version": "v1", "calls": 15}
    assert document["itSystemOperations"][0] == {"itSystem": "SysA", "operation": "get", "calls": 10}
    assert document["filteredRows"] == 2


def test_build_dataset_merges_by_sorted_date_and_skips_undated(call_lines):
    sources = [
        ("KOSDY-PROD.20251201.csv", [HEADER, call_row(calls="4")]),
        ("KOSDY-PROD.notadate.csv", [HEADER, call_row(calls="999")]),
        ("KOSDY-PROD.20251130.csv", call_lines),
    ]

    dataset = build_dataset(sources)
    document = dataset.to_dict()

    assert document["dates"] == ["2025-11-30", "2025-12-01"]
    assert document["data"]["2025-11-30"]["totalCalls"] == 22
    assert document["data"]["2025-12-01"]["totalCalls"] == 4
    assert document["metadata"]["filesProcessed"] == 3
    assert document["metadata"]["processedAt"].endswith("Z")


def test_build_dataset_without_sources_is_well_formed():
    document = build_dataset([]).to_dict()

    assert document["dates"] == []
    assert document["data"] == {}
    assert document["metadata"]["filesProcessed"] == 0
