"""Line tokenizing and row extraction for the delimited call extracts."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Optional, Sequence

from .domain.layout import SERVICE_CALL_LAYOUT, ColumnLayout
from .domain.models import ParsedEvent

FIELD_SEPARATOR = ","
QUOTE_CHAR = '"'
NULL_MARKER = "NULL"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def split_line(line: str, separator: str = FIELD_SEPARATOR) -> List[str]:
    """Split one raw line into stripped fields.

    A double quote toggles quoted mode and is dropped; the separator only splits
    outside quotes. Doubled quotes are not treated as an escaped literal quote.
    The final field is always emitted, so ``"a,b,"`` gives ``["a", "b", ""]``.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE_CHAR:
            in_quotes = not in_quotes
        elif char == separator and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append("".join(current).strip())

    return fields


def parse_count(raw: Optional[str]) -> int:
    """Leading integer of ``raw``; anything unparsable counts as zero."""
    if not raw:
        return 0
    match = _LEADING_INT.match(raw)
    if not match:
        return 0
    return int(match.group(1))


def is_admitted_version(version: Optional[str]) -> bool:
    if version is None:
        return False
    text = version.strip()
    return text != "" and text != NULL_MARKER


def extract_event(fields: Sequence[str], layout: ColumnLayout = SERVICE_CALL_LAYOUT) -> Optional[ParsedEvent]:
    """Project one tokenized data row, or ``None`` when the row is filtered out."""
    named = layout.project(fields)
    if not is_admitted_version(named["version"]):
        return None
    return ParsedEvent(
        calls=parse_count(named["calls"]),
        it_system=named["it_system"],
        service=named["service"],
        operation=named["operation"],
        support_system=named["support_system"],
        version=named["version"],
        period=named["period"],
    )


def data_lines(lines: Iterable[str]) -> Iterator[str]:
    """Non-blank lines after the header line."""
    header_seen = False
    for line in lines:
        if not line.strip():
            continue
        if not header_seen:
            header_seen = True
            continue
        yield line
