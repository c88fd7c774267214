import pytest

from service_analytics.domain.layout import ColumnLayout, ColumnSpec
from service_analytics.ingestion import data_lines, extract_event, parse_count, split_line

from .helpers import call_row


def test_split_line_keeps_separator_inside_quotes():
    assert split_line('a,"b,c",d') == ["a", "b,c", "d"]


def test_split_line_emits_trailing_empty_field():
    assert split_line("a,b,") == ["a", "b", ""]


def test_split_line_empty_line_is_single_empty_field():
    assert split_line("") == [""]


def test_split_line_strips_fields_and_carriage_return():
    assert split_line("  a , b\r") == ["a", "b"]


def test_split_line_doubled_quote_only_toggles():
    assert split_line('"say ""hi""",x') == ["say hi", "x"]


@pytest.mark.parametrize(
    "raw, expected",
    [("42", 42), (" 7", 7), ("12abc", 12), ("3.9", 3), ("-5", -5), ("abc", 0), ("", 0), (None, 0)],
)
def test_parse_count_takes_leading_integer(raw, expected):
    assert parse_count(raw) == expected


def test_extract_event_admits_versioned_row():
    event = extract_event(split_line(call_row(calls="12", version="v1")))

    assert event is not None
    assert event.calls == 12
    assert event.it_system == "SysA"
    assert event.service == "CaseService"
    assert event.operation == "get"
    assert event.version == "v1"
    assert event.support_system == "Support1"
    assert event.period == "2025-11-30T10:00:00"


@pytest.mark.parametrize("version", ["NULL", "", "   "])
def test_extract_event_rejects_missing_version(version):
    assert extract_event(split_line(call_row(version=version))) is None


def test_extract_event_rejects_short_row():
    assert extract_event(["5", "PROD", "SysA"]) is None


def test_extract_event_defaults_blank_categories_to_unknown():
    event = extract_event(split_line(call_row(it_system="", service="", operation="", support="")))

    assert event is not None
    assert (event.it_system, event.service, event.operation, event.support_system) == (
        "Unknown",
        "Unknown",
        "Unknown",
        "Unknown",
    )


def test_data_lines_skips_header_and_blank_lines():
    lines = ["", "HEADER", "  ", "row1", "", "row2"]
    assert list(data_lines(lines)) == ["row1", "row2"]


def test_layout_rejects_duplicate_indices():
    with pytest.raises(ValueError):
        ColumnLayout(columns=(ColumnSpec(0, "a"), ColumnSpec(0, "b")))
