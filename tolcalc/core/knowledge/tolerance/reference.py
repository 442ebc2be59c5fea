"""Read-only views of the tolerance tables for rendering a reference grid."""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from tolcalc.utils.natural_sort import natural_sorted

from .fits import FIT_RANGES, FitCategory, FitDeviation, get_fit_table, parse_fit_category
from .general_tolerances import GENERAL_RANGES, GENERAL_TOLERANCE_TABLE, ToleranceClass
from .ranges import SizeRange
from .resolver import Mode

Cell = Union[float, FitDeviation, None]


def list_general_classes() -> List[ToleranceClass]:
    """Coarseness classes from finest to coarsest."""
    return list(ToleranceClass)


def list_fit_classes(category: Union[FitCategory, str]) -> List[str]:
    """Tabulated class labels of a category in natural order (h9 before h10)."""
    return natural_sorted(get_fit_table(category))


def format_cell(value: Cell) -> str:
    """Cell text: "±0.1" for a general value, "0/-9" for a deviation, "-" if absent."""
    if value is None:
        return "-"
    if isinstance(value, FitDeviation):
        return f"{value.upper:g}/{value.lower:g}"
    return f"±{value:g}"


@dataclass(frozen=True)
class ReferenceRow:
    label: str
    cells: Tuple[Cell, ...]

    def to_dict(self) -> dict:
        values = []
        for cell in self.cells:
            if isinstance(cell, FitDeviation):
                values.append({"upper": cell.upper, "lower": cell.lower})
            else:
                values.append(cell)
        return {
            "label": self.label,
            "values": values,
            "text": [format_cell(cell) for cell in self.cells],
        }


@dataclass(frozen=True)
class ReferenceTable:
    mode: Mode
    category: Optional[FitCategory]
    ranges: Tuple[SizeRange, ...]
    rows: Tuple[ReferenceRow, ...]

    @property
    def headers(self) -> List[str]:
        return [size_range.text for size_range in self.ranges]

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "category": self.category.value if self.category else None,
            "ranges": self.headers,
            "rows": [row.to_dict() for row in self.rows],
        }


def get_reference_table(
    mode: Union[Mode, str],
    category: Union[FitCategory, str, None] = None,
) -> ReferenceTable:
    """
    Raw per-bracket values for every class of a mode.

    Args:
        mode: general or fit
        category: hole or shaft, required for fit mode

    Returns:
        ReferenceTable with one row per class, in the order of
        list_general_classes() / list_fit_classes()
    """
    mode = Mode(mode)

    if mode is Mode.GENERAL:
        rows = tuple(
            ReferenceRow(
                label=tol_class.value,
                cells=tuple(row.get(tol_class) for row in GENERAL_TOLERANCE_TABLE),
            )
            for tol_class in list_general_classes()
        )
        return ReferenceTable(mode=mode, category=None, ranges=GENERAL_RANGES, rows=rows)

    if category is None:
        raise ValueError("Fit reference table needs a category (hole/shaft)")
    fit_category = parse_fit_category(category)
    table = get_fit_table(fit_category)
    rows = tuple(
        ReferenceRow(
            label=label,
            cells=tuple(
                table[label][index] if index < len(table[label]) else None
                for index in range(len(FIT_RANGES))
            ),
        )
        for label in list_fit_classes(fit_category)
    )
    return ReferenceTable(mode=mode, category=fit_category, ranges=FIT_RANGES, rows=rows)


__all__ = [
    "list_general_classes",
    "list_fit_classes",
    "format_cell",
    "ReferenceRow",
    "ReferenceTable",
    "get_reference_table",
]
