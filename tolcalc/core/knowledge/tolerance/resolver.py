"""
Tolerance Resolver.

Maps a nominal dimension onto its tabulated size bracket and derives the
resulting limits for either a general tolerance class or a hole/shaft fit
class.

A result of ``None`` means "no tabulated value applies" (size outside the
table, unparsable or negative input, or a class that is not defined for the
matched bracket). It is an expected outcome, not an error, and callers
render it as "awaiting valid input".
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .fits import (
    FIT_RANGES,
    FitCategory,
    get_fit_table,
    lookup_deviation,
    parse_fit_category,
)
from .general_tolerances import (
    GENERAL_RANGES,
    GENERAL_TOLERANCE_TABLE,
    ToleranceClass,
    parse_tolerance_class,
)
from .ranges import Nominal, find_range_index, parse_dimension

logger = logging.getLogger(__name__)

UNIT = "mm"
MICRONS_PER_MM = 1000


class Mode(str, Enum):
    """Calculation mode."""

    GENERAL = "general"
    FIT = "fit"


FitSelector = Tuple[Union[FitCategory, str], str]
ClassSelector = Union[ToleranceClass, str, FitSelector]


def format_limit(value: float) -> str:
    """Limits are shown to the micrometre."""
    return f"{value:.3f}"


def format_deviation(value_um: float) -> str:
    """Signed deviation text: "+21", "0", "-9"."""
    text = f"{value_um:g}"
    return f"+{text}" if value_um > 0 else text


@dataclass(frozen=True)
class GeneralResult:
    """Symmetric general tolerance band around a nominal size."""

    nominal: float
    tolerance_class: ToleranceClass
    range_index: int
    range_text: str
    tolerance: float
    upper_limit: float
    lower_limit: float
    unit: str = UNIT

    @property
    def mode(self) -> Mode:
        return Mode.GENERAL

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "nominal": self.nominal,
            "tolerance_class": self.tolerance_class.value,
            "range_index": self.range_index,
            "range_text": self.range_text,
            "tolerance": self.tolerance,
            "tolerance_text": f"±{self.tolerance:g}",
            "upper_limit": self.upper_limit,
            "lower_limit": self.lower_limit,
            "upper_limit_text": format_limit(self.upper_limit),
            "lower_limit_text": format_limit(self.lower_limit),
            "unit": self.unit,
        }


@dataclass(frozen=True)
class FitResult:
    """Asymmetric fit tolerance zone; deviations in μm, limits in mm."""

    nominal: float
    category: FitCategory
    fit_class: str
    range_index: int
    range_text: str
    upper_dev: float
    lower_dev: float
    upper_limit: float
    lower_limit: float
    unit: str = UNIT

    @property
    def mode(self) -> Mode:
        return Mode.FIT

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "nominal": self.nominal,
            "category": self.category.value,
            "fit_class": self.fit_class,
            "range_index": self.range_index,
            "range_text": self.range_text,
            "upper_dev": self.upper_dev,
            "lower_dev": self.lower_dev,
            "upper_dev_text": format_deviation(self.upper_dev),
            "lower_dev_text": format_deviation(self.lower_dev),
            "upper_limit": self.upper_limit,
            "lower_limit": self.lower_limit,
            "upper_limit_text": format_limit(self.upper_limit),
            "lower_limit_text": format_limit(self.lower_limit),
            "unit": self.unit,
        }


CalculationResult = Union[GeneralResult, FitResult]


def _not_found(mode: Mode, reason: str, nominal: Nominal) -> None:
    logger.debug(
        "No tabulated value",
        extra={"mode": mode.value, "reason": reason, "nominal": str(nominal)},
    )
    return None


def resolve_general(
    nominal: Nominal,
    tolerance_class: Union[ToleranceClass, str],
) -> Optional[GeneralResult]:
    """
    Resolve a general (coarseness class) tolerance.

    Args:
        nominal: Nominal dimension in mm (number or numeric text)
        tolerance_class: f, m, c or v

    Returns:
        GeneralResult, or None if no value applies

    Example:
        >>> resolve_general("3", "m").upper_limit
        3.1
    """
    tol_class = parse_tolerance_class(tolerance_class)

    value = parse_dimension(nominal)
    if value is None:
        return _not_found(Mode.GENERAL, "unparsable", nominal)

    index = find_range_index(GENERAL_RANGES, value)
    if index is None:
        return _not_found(Mode.GENERAL, "out_of_range", nominal)

    row = GENERAL_TOLERANCE_TABLE[index]
    tolerance = row.get(tol_class)
    if tolerance is None:
        return _not_found(Mode.GENERAL, "class_undefined", nominal)

    return GeneralResult(
        nominal=value,
        tolerance_class=tol_class,
        range_index=index,
        range_text=row.range.text,
        tolerance=tolerance,
        upper_limit=value + tolerance,
        lower_limit=value - tolerance,
    )


def resolve_fit(
    nominal: Nominal,
    category: Union[FitCategory, str],
    fit_class: str,
) -> Optional[FitResult]:
    """
    Resolve the limits of a hole or shaft tolerance class.

    Args:
        nominal: Nominal dimension in mm (number or numeric text)
        category: "hole" or "shaft"
        fit_class: Class label as tabulated (e.g., "H7", "g6")

    Returns:
        FitResult, or None if no value applies

    Example:
        >>> resolve_fit(25, "shaft", "g6").lower_limit
        24.98
    """
    fit_category = parse_fit_category(category)

    value = parse_dimension(nominal)
    if value is None:
        return _not_found(Mode.FIT, "unparsable", nominal)

    index = find_range_index(FIT_RANGES, value)
    if index is None:
        return _not_found(Mode.FIT, "out_of_range", nominal)

    deviation = lookup_deviation(get_fit_table(fit_category), fit_class, index)
    if deviation is None:
        return _not_found(Mode.FIT, "class_undefined", nominal)

    return FitResult(
        nominal=value,
        category=fit_category,
        fit_class=fit_class,
        range_index=index,
        range_text=FIT_RANGES[index].text,
        upper_dev=deviation.upper,
        lower_dev=deviation.lower,
        upper_limit=value + deviation.upper / MICRONS_PER_MM,
        lower_limit=value + deviation.lower / MICRONS_PER_MM,
    )


def resolve(
    mode: Union[Mode, str],
    nominal: Nominal,
    class_selector: ClassSelector,
) -> Optional[CalculationResult]:
    """
    Resolve a tolerance query for either mode.

    Args:
        mode: Mode.GENERAL or Mode.FIT
        nominal: Nominal dimension in mm (number or numeric text)
        class_selector: a ToleranceClass for general mode, a
            ``(category, fit_class)`` pair for fit mode

    Returns:
        GeneralResult / FitResult, or None if no value applies

    Raises:
        ValueError: for an unknown mode or a selector that does not fit the mode
    """
    mode = Mode(mode)

    if mode is Mode.GENERAL:
        if not isinstance(class_selector, str):
            raise ValueError("General mode expects a tolerance class (f/m/c/v)")
        return resolve_general(nominal, class_selector)

    if isinstance(class_selector, str) or len(class_selector) != 2:
        raise ValueError("Fit mode expects a (category, fit_class) pair")
    category, fit_class = class_selector
    return resolve_fit(nominal, category, fit_class)


__all__ = [
    "Mode",
    "UNIT",
    "GeneralResult",
    "FitResult",
    "CalculationResult",
    "format_limit",
    "format_deviation",
    "resolve_general",
    "resolve_fit",
    "resolve",
]
