"""Fixed positional column layouts for the raw extracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple


@dataclass(frozen=True)
class ColumnSpec:
    index: int
    name: str
    default: str = ""


@dataclass(frozen=True)
class ColumnLayout:
    """Maps positional cells onto named fields.

    Missing or empty cells resolve to the column default. Indices and names are
    checked for uniqueness when the layout is declared.
    """

    columns: Tuple[ColumnSpec, ...]

    def __post_init__(self) -> None:
        indices = [column.index for column in self.columns]
        names = [column.name for column in self.columns]
        if any(index < 0 for index in indices):
            raise ValueError(f"Column indices must be non-negative: {indices}")
        if len(set(indices)) != len(indices):
            raise ValueError(f"Duplicate column indices in layout: {indices}")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate column names in layout: {names}")

    @property
    def names(self) -> list[str]:
        return [column.name for column in self.columns]

    def project(self, cells: Sequence[Any]) -> Dict[str, str]:
        projected: Dict[str, str] = {}
        for column in self.columns:
            raw = cells[column.index] if column.index < len(cells) else None
            text = "" if raw is None else str(raw).strip()
            projected[column.name] = text or column.default
        return projected


# KOSDY-PROD call extract: A=count, C=IT system, G=period, H=service,
# I=operation, J=service version, K=support system.
SERVICE_CALL_LAYOUT = ColumnLayout(
    columns=(
        ColumnSpec(0, "calls"),
        ColumnSpec(2, "it_system", "Unknown"),
        ColumnSpec(6, "period"),
        ColumnSpec(7, "service", "Unknown"),
        ColumnSpec(8, "operation", "Unknown"),
        ColumnSpec(9, "version"),
        ColumnSpec(10, "support_system", "Unknown"),
    )
)

# sagKlasseReport grid: B=owning authority, C=master IT system,
# E=classification code, G=progress.
CASE_GRID_LAYOUT = ColumnLayout(
    columns=(
        ColumnSpec(1, "authority"),
        ColumnSpec(2, "it_system"),
        ColumnSpec(4, "classification"),
        ColumnSpec(6, "progress"),
    )
)
