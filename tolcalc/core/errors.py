"""Shared error codes for API and CLI responses."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    INPUT_ERROR = "INPUT_ERROR"  # malformed mode/category/class selector


def build_error(code: ErrorCode, message: str, **context: object) -> dict:
    """Uniform error payload used as HTTPException detail."""
    payload: dict = {"code": code.value, "message": message}
    if context:
        payload["context"] = context
    return payload


__all__ = ["ErrorCode", "build_error"]
