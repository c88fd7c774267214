"""Infrastructure adapter for the on-disk extracts."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple

from service_analytics.config import SERVICE_SOURCE_PREFIX, SERVICE_SOURCE_SUFFIX
from service_analytics.errors import MissingMandatorySourceError
from service_analytics.logging import get_logger

logger = get_logger(__name__)

Grid = List[Tuple[Any, ...]]


def _import_openpyxl() -> Any:
    try:
        from openpyxl import load_workbook
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("openpyxl is required to read the classification workbook.") from exc
    return load_workbook


def find_service_sources(data_dir: Path) -> List[Path]:
    """Call extracts in ``data_dir``, sorted by file name."""
    if not data_dir.is_dir():
        logger.warning("data_dir_missing", data_dir=str(data_dir))
        return []
    sources = sorted(
        path
        for path in data_dir.iterdir()
        if path.is_file() and path.name.startswith(SERVICE_SOURCE_PREFIX) and path.name.endswith(SERVICE_SOURCE_SUFFIX)
    )
    logger.info("source_found", count=len(sources), files=[path.name for path in sources])
    return sources


def _iter_lines(path: Path) -> Iterator[str]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        for line in handle:
            yield line.rstrip("\n")


def iter_service_sources(data_dir: Path) -> Iterator[Tuple[str, Iterator[str]]]:
    """``(file name, lazy line iterator)`` for every call extract."""
    for path in find_service_sources(data_dir):
        yield path.name, _iter_lines(path)


def read_grid(path: Path, sheet_name: Optional[str] = None) -> Grid:
    """Rows of one worksheet, header included, as value tuples.

    Interior blank rows are kept as all-``None`` tuples; trailing ones are dropped.
    """
    if not path.exists():
        raise MissingMandatorySourceError(path)

    load_workbook = _import_openpyxl()
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        if not workbook.sheetnames:
            raise ValueError(f"No sheets found in {path}")
        target = sheet_name if sheet_name in workbook.sheetnames else workbook.sheetnames[0]
        worksheet = workbook[target]
        rows: Grid = []
        for values in worksheet.iter_rows(values_only=True):
            rows.append(tuple(values or ()))
        while rows and all(value is None for value in rows[-1]):
            rows.pop()
    finally:
        workbook.close()

    logger.info("grid_loaded", path=str(path), sheet=target, rows=len(rows))
    return rows
