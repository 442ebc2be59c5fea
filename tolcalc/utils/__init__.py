"""Shared helpers (logging, metrics, sorting)."""
