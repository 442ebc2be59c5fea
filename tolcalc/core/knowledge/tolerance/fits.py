"""
ISO Fit Systems Knowledge Base.

Limit deviations for common hole (uppercase) and shaft (lowercase) tolerance
classes according to ISO 286-2:2010 / JIS B 0401-2, tabulated per nominal
size bracket. Both tables share one bracket sequence (0 to 500 mm).

Deviation values are in micrometres (μm); convert with ``/ 1000`` before
applying to a nominal size in millimetres.

Reference:
- ISO 286-2:2010 - Tables of standard tolerance classes and limit deviations
- JIS B 0401-2:2016 (Japanese equivalent)
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple, Union

from .ranges import Nominal, SizeRange, find_range_index, parse_dimension, validate_ranges


class FitCategory(str, Enum):
    """Which mating feature a fit class applies to."""

    HOLE = "hole"
    SHAFT = "shaft"


class FitType(str, Enum):
    """Classification of fits by clearance/interference."""

    CLEARANCE = "clearance"
    TRANSITION = "transition"
    INTERFERENCE = "interference"


@dataclass(frozen=True)
class FitDeviation:
    """Upper/lower limit deviation pair in μm (signed)."""

    upper: float
    lower: float


FitTable = Mapping[str, Tuple[Optional[FitDeviation], ...]]


# Nominal size brackets (mm), ISO 286-1 Table 1 main steps up to 500 mm
FIT_RANGES: Tuple[SizeRange, ...] = tuple(
    SizeRange(lo, hi)
    for lo, hi in (
        (0, 3), (3, 6), (6, 10), (10, 18), (18, 30),
        (30, 50), (50, 80), (80, 120), (120, 180),
        (180, 250), (250, 315), (315, 400), (400, 500),
    )
)

validate_ranges(FIT_RANGES)


def _zone(uppers: Sequence[float], lowers: Sequence[float]) -> Tuple[Optional[FitDeviation], ...]:
    if len(uppers) != len(FIT_RANGES) or len(lowers) != len(FIT_RANGES):
        raise ValueError("Deviation rows must align with FIT_RANGES")
    return tuple(FitDeviation(upper, lower) for upper, lower in zip(uppers, lowers))


def _symmetric(it_values: Sequence[float]) -> Tuple[Optional[FitDeviation], ...]:
    return _zone([it / 2 for it in it_values], [-it / 2 for it in it_values])


def _freeze(table: dict) -> FitTable:
    return MappingProxyType(dict(table))


_ZERO = [0] * len(FIT_RANGES)

# Standard tolerance grades (μm) per bracket, ISO 286-1 Table 1
_IT5 = [4, 5, 6, 8, 9, 11, 13, 15, 18, 20, 23, 25, 27]
_IT6 = [6, 8, 9, 11, 13, 16, 19, 22, 25, 29, 32, 36, 40]
_IT7 = [10, 12, 15, 18, 21, 25, 30, 35, 40, 46, 52, 57, 63]
_IT8 = [14, 18, 22, 27, 33, 39, 46, 54, 63, 72, 81, 89, 97]
_IT9 = [25, 30, 36, 43, 52, 62, 74, 87, 100, 115, 130, 140, 155]
_IT11 = [60, 75, 90, 110, 130, 160, 190, 220, 250, 290, 320, 360, 400]


def _negated(values: Sequence[float]) -> list:
    return [-v for v in values]


# Hole limit deviations (ES, EI) in μm
# Key order is the natural table order used by the category remapping fallback
HOLE_FIT_DATA: FitTable = _freeze({
    "E9": _zone(
        [39, 50, 61, 75, 92, 112, 134, 159, 185, 215, 240, 265, 290],
        [14, 20, 25, 32, 40, 50, 60, 72, 85, 100, 110, 125, 135],
    ),
    "F7": _zone(
        [16, 22, 28, 34, 41, 50, 60, 71, 83, 96, 108, 119, 131],
        [6, 10, 13, 16, 20, 25, 30, 36, 43, 50, 56, 62, 68],
    ),
    "F8": _zone(
        [20, 28, 35, 43, 53, 64, 76, 90, 106, 122, 137, 151, 165],
        [6, 10, 13, 16, 20, 25, 30, 36, 43, 50, 56, 62, 68],
    ),
    "G7": _zone(
        [12, 16, 20, 24, 28, 34, 40, 47, 54, 61, 69, 75, 83],
        [2, 4, 5, 6, 7, 9, 10, 12, 14, 15, 17, 18, 20],
    ),
    "H6": _zone(_IT6, _ZERO),
    "H7": _zone(_IT7, _ZERO),
    "H8": _zone(_IT8, _ZERO),
    "H9": _zone(_IT9, _ZERO),
    "H11": _zone(_IT11, _ZERO),
    "JS7": _symmetric(_IT7),
    "K7": _zone(
        [0, 3, 5, 6, 6, 7, 9, 10, 12, 13, 16, 17, 18],
        [-10, -9, -10, -12, -15, -18, -21, -25, -28, -33, -36, -40, -45],
    ),
    "M7": _zone(
        [-2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
        [-12, -12, -15, -18, -21, -25, -30, -35, -40, -46, -52, -57, -63],
    ),
    "N7": _zone(
        [-4, -4, -4, -5, -7, -8, -9, -10, -12, -14, -14, -16, -17],
        [-14, -16, -19, -23, -28, -33, -39, -45, -52, -60, -66, -73, -80],
    ),
    "P7": _zone(
        [-6, -8, -9, -11, -14, -17, -21, -24, -28, -33, -36, -41, -45],
        [-16, -20, -24, -29, -35, -42, -51, -59, -68, -79, -88, -98, -108],
    ),
})

# Shaft limit deviations (es, ei) in μm
SHAFT_FIT_DATA: FitTable = _freeze({
    "d9": _zone(
        [-20, -30, -40, -50, -65, -80, -100, -120, -145, -170, -190, -210, -230],
        [-45, -60, -76, -93, -117, -142, -174, -207, -245, -285, -320, -350, -385],
    ),
    "e8": _zone(
        [-14, -20, -25, -32, -40, -50, -60, -72, -85, -100, -110, -125, -135],
        [-28, -38, -47, -59, -73, -89, -106, -126, -148, -172, -191, -214, -232],
    ),
    "f7": _zone(
        [-6, -10, -13, -16, -20, -25, -30, -36, -43, -50, -56, -62, -68],
        [-16, -22, -28, -34, -41, -50, -60, -71, -83, -96, -108, -119, -131],
    ),
    "g6": _zone(
        [-2, -4, -5, -6, -7, -9, -10, -12, -14, -15, -17, -18, -20],
        [-8, -12, -14, -17, -20, -25, -29, -34, -39, -44, -49, -54, -60],
    ),
    "h5": _zone(_ZERO, _negated(_IT5)),
    "h6": _zone(_ZERO, _negated(_IT6)),
    "h7": _zone(_ZERO, _negated(_IT7)),
    "h8": _zone(_ZERO, _negated(_IT8)),
    "h9": _zone(_ZERO, _negated(_IT9)),
    "h11": _zone(_ZERO, _negated(_IT11)),
    "js6": _symmetric(_IT6),
    "k6": _zone(
        [6, 9, 10, 12, 15, 18, 21, 25, 28, 33, 36, 40, 45],
        [0, 1, 1, 1, 2, 2, 2, 3, 3, 4, 4, 4, 5],
    ),
    "m6": _zone(
        [8, 12, 15, 18, 21, 25, 30, 35, 40, 46, 52, 57, 63],
        [2, 4, 6, 7, 8, 9, 11, 13, 15, 17, 20, 21, 23],
    ),
    "n6": _zone(
        [10, 16, 19, 23, 28, 33, 39, 45, 52, 60, 66, 73, 80],
        [4, 8, 10, 12, 15, 17, 20, 23, 27, 31, 34, 37, 40],
    ),
    "p6": _zone(
        [12, 20, 24, 29, 35, 42, 51, 59, 68, 79, 88, 98, 108],
        [6, 12, 15, 18, 22, 26, 32, 37, 43, 50, 56, 62, 68],
    ),
})


def get_fit_table(category: Union[FitCategory, str]) -> FitTable:
    """Deviation table for a category ("hole" or "shaft")."""
    if FitCategory(category) is FitCategory.HOLE:
        return HOLE_FIT_DATA
    return SHAFT_FIT_DATA


def parse_fit_category(raw: Union[str, FitCategory]) -> FitCategory:
    """Parse a category name; raises ValueError for anything but hole/shaft."""
    if isinstance(raw, FitCategory):
        return raw
    token = (raw or "").strip().lower()
    try:
        return FitCategory(token)
    except ValueError:
        raise ValueError(f"Invalid fit category '{raw}' (expect hole/shaft)") from None


def lookup_deviation(table: FitTable, label: str, index: int) -> Optional[FitDeviation]:
    """Deviation for a class at a bracket index; None if either is unknown."""
    zone = table.get(label)
    if zone is None or not 0 <= index < len(zone):
        return None
    return zone[index]


@dataclass(frozen=True)
class FitEvaluation:
    """Combined hole/shaft deviation data at one nominal size."""

    fit_code: str  # e.g., "H7/g6"
    nominal_size_mm: float
    range_text: str
    hole: FitDeviation
    shaft: FitDeviation
    max_clearance_um: float  # negative = interference
    min_clearance_um: float  # negative = interference
    fit_type: FitType

    def to_dict(self) -> dict:
        return {
            "fit_code": self.fit_code,
            "nominal_size_mm": self.nominal_size_mm,
            "range_text": self.range_text,
            "hole_upper_deviation_um": self.hole.upper,
            "hole_lower_deviation_um": self.hole.lower,
            "shaft_upper_deviation_um": self.shaft.upper,
            "shaft_lower_deviation_um": self.shaft.lower,
            "max_clearance_um": self.max_clearance_um,
            "min_clearance_um": self.min_clearance_um,
            "fit_type": self.fit_type.value,
        }


def classify_fit(max_clearance_um: float, min_clearance_um: float) -> FitType:
    """Clearance if the tightest pairing still has play, interference if the loosest doesn't."""
    if min_clearance_um >= 0:
        return FitType.CLEARANCE
    if max_clearance_um <= 0:
        return FitType.INTERFERENCE
    return FitType.TRANSITION


def evaluate_fit(
    nominal_size_mm: Nominal,
    hole_class: str,
    shaft_class: str,
) -> Optional[FitEvaluation]:
    """
    Combine a hole and a shaft class at one nominal size.

    Args:
        nominal_size_mm: Nominal dimension in mm (number or numeric text)
        hole_class: Hole tolerance class (e.g., "H7")
        shaft_class: Shaft tolerance class (e.g., "g6")

    Returns:
        FitEvaluation, or None if the size is outside the table or either
        class is not tabulated at that size

    Example:
        >>> result = evaluate_fit(25, "H7", "g6")
        >>> print(f"Max clearance: {result.max_clearance_um} μm")
        Max clearance: 41 μm
    """
    value = parse_dimension(nominal_size_mm)
    if value is None:
        return None

    index = find_range_index(FIT_RANGES, value)
    if index is None:
        return None

    hole = lookup_deviation(HOLE_FIT_DATA, hole_class, index)
    shaft = lookup_deviation(SHAFT_FIT_DATA, shaft_class, index)
    if hole is None or shaft is None:
        return None

    # Clearance = hole size - shaft size
    max_clearance = hole.upper - shaft.lower  # largest hole, smallest shaft
    min_clearance = hole.lower - shaft.upper  # smallest hole, largest shaft

    return FitEvaluation(
        fit_code=f"{hole_class}/{shaft_class}",
        nominal_size_mm=value,
        range_text=FIT_RANGES[index].text,
        hole=hole,
        shaft=shaft,
        max_clearance_um=max_clearance,
        min_clearance_um=min_clearance,
        fit_type=classify_fit(max_clearance, min_clearance),
    )


__all__ = [
    "FitCategory",
    "FitType",
    "FitDeviation",
    "FitTable",
    "FitEvaluation",
    "FIT_RANGES",
    "HOLE_FIT_DATA",
    "SHAFT_FIT_DATA",
    "get_fit_table",
    "parse_fit_category",
    "lookup_deviation",
    "classify_fit",
    "evaluate_fit",
]
