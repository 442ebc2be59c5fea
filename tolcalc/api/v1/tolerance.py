"""Tolerance query API endpoints (JIS B 0405 / ISO 2768-1, ISO 286-2).

A query that matches no tabulated value is answered with ``found: false``
and HTTP 200; only malformed selectors are rejected with HTTP 400.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from tolcalc.core.config import get_settings
from tolcalc.core.errors import ErrorCode, build_error
from tolcalc.core.knowledge.tolerance import (
    FitCategory,
    Mode,
    ToleranceClass,
    evaluate_fit,
    find_range_index,
    get_reference_table,
    list_fit_classes,
    list_general_classes,
    parse_dimension,
    parse_fit_category,
    parse_tolerance_class,
    remap_fit_class,
    resolve_fit,
    resolve_general,
)
from tolcalc.utils.metrics import (
    record_resolve,
    tolerance_input_errors_total,
    tolerance_remap_total,
)

logger = logging.getLogger(__name__)
router = APIRouter()

AWAITING_INPUT = "Awaiting valid input: no tabulated value applies to this dimension and class."


def _input_error(endpoint: str, message: str) -> HTTPException:
    tolerance_input_errors_total.labels(endpoint=endpoint).inc()
    logger.info(message, extra={"error_code": ErrorCode.INPUT_ERROR.value})
    return HTTPException(status_code=400, detail=build_error(ErrorCode.INPUT_ERROR, message))


def _parse_mode(raw: Optional[str], endpoint: str) -> Mode:
    token = (raw or get_settings().DEFAULT_MODE).strip().lower()
    try:
        return Mode(token)
    except ValueError:
        raise _input_error(endpoint, f"Invalid mode '{raw}' (expect general/fit)") from None


def _parse_category(raw: Optional[str], endpoint: str) -> FitCategory:
    try:
        return parse_fit_category(raw or get_settings().DEFAULT_FIT_CATEGORY)
    except ValueError as exc:
        raise _input_error(endpoint, str(exc)) from None


def _parse_class(raw: Optional[str], endpoint: str) -> ToleranceClass:
    try:
        return parse_tolerance_class(raw or get_settings().DEFAULT_GENERAL_CLASS)
    except ValueError as exc:
        raise _input_error(endpoint, str(exc)) from None


class ResolveResponse(BaseModel):
    found: bool = Field(..., description="False when no tabulated value applies")
    mode: str
    dimension: str = Field(..., description="Dimension text as received")
    result: Optional[Dict[str, Any]] = None
    message: Optional[str] = None


def _resolve_response(mode: Mode, dimension: str, result: Any) -> ResolveResponse:
    record_resolve(mode.value, result is not None)
    if result is None:
        return ResolveResponse(found=False, mode=mode.value, dimension=dimension, message=AWAITING_INPUT)
    return ResolveResponse(found=True, mode=mode.value, dimension=dimension, result=result.to_dict())


@router.get("/general", response_model=ResolveResponse)
async def general_tolerance(
    dimension: Optional[str] = Query(None, description="Nominal size in mm (numeric text)"),
    tolerance_class: Optional[str] = Query(None, description="f/m/c/v or a designation like ISO 2768-m"),
) -> ResolveResponse:
    tol_class = _parse_class(tolerance_class, "general")
    dimension = dimension if dimension is not None else get_settings().DEFAULT_DIMENSION
    return _resolve_response(Mode.GENERAL, dimension, resolve_general(dimension, tol_class))


@router.get("/fit", response_model=ResolveResponse)
async def fit_tolerance(
    dimension: Optional[str] = Query(None, description="Nominal size in mm (numeric text)"),
    category: Optional[str] = Query(None, description="hole or shaft"),
    fit_class: Optional[str] = Query(None, description="Tolerance class, e.g. H7 or g6"),
) -> ResolveResponse:
    fit_category = _parse_category(category, "fit")
    label = (fit_class or get_settings().DEFAULT_FIT_CLASS).strip()
    dimension = dimension if dimension is not None else get_settings().DEFAULT_DIMENSION
    return _resolve_response(Mode.FIT, dimension, resolve_fit(dimension, fit_category, label))


class ClassOption(BaseModel):
    key: str
    label: str


class ClassListResponse(BaseModel):
    mode: str
    category: Optional[str] = None
    classes: List[ClassOption]


@router.get("/classes", response_model=ClassListResponse)
async def available_classes(
    mode: Optional[str] = Query(None, description="general or fit"),
    category: Optional[str] = Query(None, description="hole or shaft (fit mode)"),
) -> ClassListResponse:
    parsed_mode = _parse_mode(mode, "classes")
    if parsed_mode is Mode.GENERAL:
        return ClassListResponse(
            mode=parsed_mode.value,
            classes=[ClassOption(key=c.value, label=c.label) for c in list_general_classes()],
        )
    fit_category = _parse_category(category, "classes")
    return ClassListResponse(
        mode=parsed_mode.value,
        category=fit_category.value,
        classes=[ClassOption(key=label, label=label) for label in list_fit_classes(fit_category)],
    )


class ReferenceTableResponse(BaseModel):
    mode: str
    category: Optional[str] = None
    ranges: List[str]
    rows: List[Dict[str, Any]]
    active_range_index: Optional[int] = Field(
        None, description="Bracket containing `dimension`, if one was given and matched"
    )


@router.get("/table", response_model=ReferenceTableResponse)
async def reference_table(
    mode: Optional[str] = Query(None, description="general or fit"),
    category: Optional[str] = Query(None, description="hole or shaft (fit mode)"),
    dimension: Optional[str] = Query(None, description="Highlight the bracket of this size"),
) -> ReferenceTableResponse:
    parsed_mode = _parse_mode(mode, "table")
    fit_category = _parse_category(category, "table") if parsed_mode is Mode.FIT else None
    table = get_reference_table(parsed_mode, fit_category)

    active = None
    value = parse_dimension(dimension)
    if value is not None:
        active = find_range_index(table.ranges, value)

    data = table.to_dict()
    return ReferenceTableResponse(
        mode=data["mode"],
        category=data["category"],
        ranges=data["ranges"],
        rows=data["rows"],
        active_range_index=active,
    )


class RemapResponse(BaseModel):
    previous: str
    target_category: str
    fit_class: str


@router.get("/remap", response_model=RemapResponse)
async def remap_class(
    fit_class: str = Query(..., min_length=1, description="Currently selected class"),
    target_category: str = Query(..., description="Category being switched to"),
) -> RemapResponse:
    category = _parse_category(target_category, "remap")
    new_label = remap_fit_class(fit_class, category)
    tolerance_remap_total.labels(target=category.value).inc()
    return RemapResponse(previous=fit_class, target_category=category.value, fit_class=new_label)


class FitPairResponse(BaseModel):
    found: bool
    dimension: str
    result: Optional[Dict[str, Any]] = None
    message: Optional[str] = None


@router.get("/fit-pair", response_model=FitPairResponse)
async def fit_pair(
    dimension: str = Query(..., description="Nominal size in mm (numeric text)"),
    hole: str = Query(..., min_length=2, description="Hole class, e.g. H7"),
    shaft: str = Query(..., min_length=2, description="Shaft class, e.g. g6"),
) -> FitPairResponse:
    result = evaluate_fit(dimension, hole.strip(), shaft.strip())
    if result is None:
        return FitPairResponse(found=False, dimension=dimension, message=AWAITING_INPUT)
    return FitPairResponse(found=True, dimension=dimension, result=result.to_dict())


__all__ = ["router"]
