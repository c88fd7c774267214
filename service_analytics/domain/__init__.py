"""Domain layer package."""

from .hierarchy import ClassificationTree, TreeNode, build_classification_tree
from .layout import CASE_GRID_LAYOUT, SERVICE_CALL_LAYOUT, ColumnLayout, ColumnSpec
from .models import CaseReport, Dataset, MatrixEntry, ParsedEvent, RankedEntry, SourceResult

__all__ = [
    "ClassificationTree",
    "TreeNode",
    "build_classification_tree",
    "ColumnLayout",
    "ColumnSpec",
    "SERVICE_CALL_LAYOUT",
    "CASE_GRID_LAYOUT",
    "CaseReport",
    "Dataset",
    "MatrixEntry",
    "ParsedEvent",
    "RankedEntry",
    "SourceResult",
]
