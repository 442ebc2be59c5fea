"""
Tolerance and Fits Knowledge Module.

Resolves a nominal dimension against tabulated general tolerances
(JIS B 0405 / ISO 2768-1) and hole/shaft limit deviations (ISO 286-2), and
derives the resulting upper/lower limits.

Reference Standards:
- JIS B 0405:1991 / ISO 2768-1:1989 - General tolerances
- ISO 286-2:2010 - Tables of standard tolerance classes and limit deviations
- JIS B 0401-2:2016 (Japanese equivalent)
"""

from .ranges import (
    Nominal,
    SizeRange,
    parse_dimension,
    find_range_index,
    validate_ranges,
)
from .general_tolerances import (
    ToleranceClass,
    GeneralToleranceRow,
    GENERAL_TOLERANCE_TABLE,
    GENERAL_RANGES,
    parse_tolerance_class,
)
from .fits import (
    FitCategory,
    FitType,
    FitDeviation,
    FitEvaluation,
    FIT_RANGES,
    HOLE_FIT_DATA,
    SHAFT_FIT_DATA,
    get_fit_table,
    parse_fit_category,
    lookup_deviation,
    evaluate_fit,
)
from .resolver import (
    Mode,
    GeneralResult,
    FitResult,
    CalculationResult,
    format_limit,
    format_deviation,
    resolve,
    resolve_general,
    resolve_fit,
)
from .equivalence import remap_fit_class
from .reference import (
    ReferenceTable,
    format_cell,
    get_reference_table,
    list_fit_classes,
    list_general_classes,
)

__all__ = [
    # Ranges
    "Nominal",
    "SizeRange",
    "parse_dimension",
    "find_range_index",
    "validate_ranges",
    # General tolerances
    "ToleranceClass",
    "GeneralToleranceRow",
    "GENERAL_TOLERANCE_TABLE",
    "GENERAL_RANGES",
    "parse_tolerance_class",
    # Fits
    "FitCategory",
    "FitType",
    "FitDeviation",
    "FitEvaluation",
    "FIT_RANGES",
    "HOLE_FIT_DATA",
    "SHAFT_FIT_DATA",
    "get_fit_table",
    "parse_fit_category",
    "lookup_deviation",
    "evaluate_fit",
    # Resolver
    "Mode",
    "GeneralResult",
    "FitResult",
    "CalculationResult",
    "format_limit",
    "format_deviation",
    "resolve",
    "resolve_general",
    "resolve_fit",
    # Equivalence
    "remap_fit_class",
    # Reference table
    "ReferenceTable",
    "format_cell",
    "get_reference_table",
    "list_fit_classes",
    "list_general_classes",
]
