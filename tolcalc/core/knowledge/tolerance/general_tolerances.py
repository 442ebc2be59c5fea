"""
General Tolerances Knowledge Base.

Provides general tolerances for linear dimensions without individual
tolerance indication, per JIS B 0405 (identical to ISO 2768-1).

Reference:
- JIS B 0405:1991 - General tolerances, linear and angular dimensions
- ISO 2768-1:1989 - General tolerances for linear and angular dimensions

The first bracket is taken down to zero so that the table covers every
non-negative size up to 4000 mm.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .ranges import SizeRange, validate_ranges


class ToleranceClass(str, Enum):
    """General tolerance (coarseness) class."""

    F = "f"  # Fine
    M = "m"  # Medium
    C = "c"  # Coarse
    V = "v"  # Extra coarse

    @property
    def label(self) -> str:
        return _CLASS_LABELS[self]


_CLASS_LABELS = {
    ToleranceClass.F: "Fine",
    ToleranceClass.M: "Medium",
    ToleranceClass.C: "Coarse",
    ToleranceClass.V: "Extra coarse",
}

# Geometric tolerance classes (ISO 2768-2) that may trail the letter
_GEOMETRIC_CLASSES = frozenset("HKL")


@dataclass(frozen=True)
class GeneralToleranceRow:
    """One bracket of the linear tolerance table; values are ± mm."""

    range: SizeRange
    f: Optional[float] = None
    m: Optional[float] = None
    c: Optional[float] = None
    v: Optional[float] = None

    @property
    def min(self) -> float:
        return self.range.min

    @property
    def max(self) -> float:
        return self.range.max

    def get(self, tolerance_class: "ToleranceClass") -> Optional[float]:
        """Tolerance for a class, or None where the class is not defined."""
        return getattr(self, ToleranceClass(tolerance_class).value)


def _row(
    lo: float,
    hi: float,
    f: Optional[float],
    m: Optional[float],
    c: Optional[float],
    v: Optional[float],
) -> GeneralToleranceRow:
    return GeneralToleranceRow(SizeRange(lo, hi), f=f, m=m, c=c, v=v)


# Linear tolerance table (JIS B 0405 Table 1)
# Format: (min_size, max_size, f, m, c, v) in mm, None = not specified
GENERAL_TOLERANCE_TABLE: Tuple[GeneralToleranceRow, ...] = (
    _row(0, 3, 0.05, 0.1, 0.2, None),
    _row(3, 6, 0.05, 0.1, 0.3, 0.5),
    _row(6, 30, 0.1, 0.2, 0.5, 1),
    _row(30, 120, 0.15, 0.3, 0.8, 1.5),
    _row(120, 400, 0.2, 0.5, 1.2, 2.5),
    _row(400, 1000, 0.3, 0.8, 2, 4),
    _row(1000, 2000, 0.5, 1.2, 3, 6),
    _row(2000, 4000, None, 2, 4, 8),
)

GENERAL_RANGES: Tuple[SizeRange, ...] = tuple(row.range for row in GENERAL_TOLERANCE_TABLE)

validate_ranges(GENERAL_RANGES)


def parse_tolerance_class(raw: Union[str, ToleranceClass]) -> ToleranceClass:
    """
    Parse a coarseness class from user text.

    Accepts the class letter (``"m"``, ``"M"``), the English name
    (``"medium"``, ``"extra coarse"``) or a drawing designation such as
    ``"JIS B 0405-m"`` / ``"ISO 2768-mK"``.

    Raises:
        ValueError: if no class can be recognised
    """
    if isinstance(raw, ToleranceClass):
        return raw

    token = (raw or "").strip()
    if not token:
        raise ValueError("Missing tolerance class")

    lowered = token.lower().replace("_", " ").replace("-", " ")
    lowered = " ".join(lowered.split())
    for tolerance_class, label in _CLASS_LABELS.items():
        if lowered == label.lower():
            return tolerance_class

    # Designation: class letter follows the last dash, optionally with the
    # geometric tolerance class of ISO 2768-2 ("ISO 2768-mK")
    if ("2768" in token or "0405" in token) and "-" in token:
        token = token.rsplit("-", 1)[-1].strip()
        if len(token) == 2 and token[1].upper() in _GEOMETRIC_CLASSES:
            token = token[0]

    letter = token.lower()
    if len(letter) == 1 and letter in {c.value for c in ToleranceClass}:
        return ToleranceClass(letter)

    raise ValueError(f"Invalid tolerance class '{raw}' (expect f/m/c/v)")


__all__ = [
    "ToleranceClass",
    "GeneralToleranceRow",
    "GENERAL_TOLERANCE_TABLE",
    "GENERAL_RANGES",
    "parse_tolerance_class",
]
