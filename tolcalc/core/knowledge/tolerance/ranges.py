"""
Size Range Brackets.

Tabulated standards split the dimension axis into contiguous brackets.
Every bracket is half-open ``[min, max)`` except the last bracket of a
table, which is closed ``[min, max]``.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional, Sequence, Union


def _format_bound(value: float) -> str:
    """Render a bracket bound the way the tables print it (3, 0.5, 1000)."""
    return f"{value:g}"


@dataclass(frozen=True)
class SizeRange:
    """A size bracket in millimetres."""

    min: float
    max: float

    @property
    def text(self) -> str:
        return f"{_format_bound(self.min)} - {_format_bound(self.max)}"

    def contains(self, value: float, is_last: bool = False) -> bool:
        """Check membership; the top bound only counts for the last bracket."""
        if value < self.min:
            return False
        if is_last:
            return value <= self.max
        return value < self.max


Nominal = Union[str, float, int, None]

# Leading decimal literal, as read by a numeric input field ("12.5mm" -> 12.5)
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_dimension(raw: Nominal) -> Optional[float]:
    """
    Parse a nominal dimension from free-form numeric text.

    Returns:
        The value in mm, or None when no finite number can be read. Negative
        values are returned as-is; bracket search rejects them.

    Example:
        >>> parse_dimension(" 12.5mm")
        12.5
        >>> parse_dimension("abc") is None
        True
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return None
    else:
        text = str(raw).strip().replace(",", ".")
        match = _LEADING_NUMBER_RE.match(text)
        if not match:
            return None
        value = float(match.group(0))

    if math.isnan(value) or math.isinf(value):
        return None
    return value


def find_range_index(ranges: Sequence[SizeRange], value: float) -> Optional[int]:
    """
    Find the bracket index containing a nominal dimension.

    Args:
        ranges: Contiguous, ascending bracket sequence
        value: Nominal dimension in mm

    Returns:
        Index of the first matching bracket, or None for negative, NaN or
        out-of-table values

    Example:
        >>> find_range_index(FIT_RANGES, 10)
        3
    """
    if value is None or math.isnan(value) or value < 0:
        return None

    last = len(ranges) - 1
    for index, size_range in enumerate(ranges):
        if size_range.contains(value, is_last=index == last):
            return index

    return None


def validate_ranges(ranges: Sequence[SizeRange]) -> None:
    """Raise ValueError unless the brackets are sorted, non-empty and gap-free."""
    if not ranges:
        raise ValueError("Range table is empty")

    for index, size_range in enumerate(ranges):
        if size_range.min >= size_range.max:
            raise ValueError(f"Range {index} ({size_range.text}) is empty or inverted")
        if index and ranges[index - 1].max != size_range.min:
            raise ValueError(
                f"Ranges {index - 1} and {index} are not contiguous "
                f"({ranges[index - 1].text} / {size_range.text})"
            )


__all__ = ["Nominal", "SizeRange", "parse_dimension", "find_range_index", "validate_ranges"]
