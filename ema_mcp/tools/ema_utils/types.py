"""
Type definitions for EMA query tools.
"""

from typing import Any, Dict, List, TypedDict


# Upstream rows are untyped: field names are chosen by EMA per dataset
EmaRecord = Dict[str, Any]


class ResultEnvelope(TypedDict):
    """Uniform response of every list-returning query."""
    total_count: int  # Always len(results), after filtering and limit
    results: List[EmaRecord]
    source: str  # Human-readable dataset label
    source_url: str  # Endpoint URL the records came from
    last_updated: str  # ISO-8601 timestamp of the call


class MedicineNotFound(TypedDict):
    """Lookup result when no medicine name matches."""
    found: bool  # Always False
    message: str
    source: str
    source_url: str


class MedicineFound(TypedDict):
    """Lookup result carrying the first matching medicine."""
    found: bool  # Always True
    medicine: EmaRecord
    source: str
    source_url: str
    last_updated: str
