"""Prometheus metrics for tolerance queries.

Metric objects are defined at import time and exposed by the app at
``/metrics``.
"""

from __future__ import annotations

from prometheus_client import Counter

tolerance_resolve_total = Counter(
    "tolcalc_resolve_total",
    "Tolerance resolve requests by mode and outcome",
    ["mode", "outcome"],
)
tolerance_remap_total = Counter(
    "tolcalc_remap_total",
    "Fit class remaps by target category",
    ["target"],
)
tolerance_input_errors_total = Counter(
    "tolcalc_input_errors_total",
    "Rejected queries with malformed selectors",
    ["endpoint"],
)


def record_resolve(mode: str, found: bool) -> None:
    tolerance_resolve_total.labels(mode=mode, outcome="found" if found else "not_found").inc()


__all__ = [
    "tolerance_resolve_total",
    "tolerance_remap_total",
    "tolerance_input_errors_total",
    "record_resolve",
]
