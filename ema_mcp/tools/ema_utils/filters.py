"""
Declarative record filters for EMA datasets.

EMA names the same concept differently in every report, so each dataset
maps its query parameters to one or more upstream fields with a list of
FieldFilter descriptors. apply_filters runs them in order.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Tuple

from .types import EmaRecord

CONTAINS = "contains"
EQUALS = "equals"
EXACT = "exact"


def as_terms(value: Any) -> Tuple[str, ...]:
    return (str(value),)


def yes_flag(value: Any) -> Tuple[str, ...]:
    """Yes/No flag fields: only a true parameter narrows the results."""
    return ("Yes",) if value else ()


def safety_flag(value: Any) -> Tuple[str, ...]:
    """The referrals report spells its affirmative as "Sì" as well as "Yes"."""
    return ("Sì", "Yes") if value else ("No",)


@dataclass(frozen=True)
class FieldFilter:
    """
    Maps one query parameter onto record fields.

    A record matches when ANY of `fields` matches ANY of the terms produced
    by `terms(value)`. CONTAINS is case-insensitive substring containment,
    EQUALS compares the whole (stripped) field value case-insensitively and
    EXACT compares it with case preserved.
    """
    param: str
    fields: Tuple[str, ...]
    match: str = CONTAINS
    terms: Callable[[Any], Tuple[str, ...]] = as_terms

    def matches(self, record: EmaRecord, terms: Iterable[str]) -> bool:
        exact = self.match == EXACT
        wanted = [t.strip() if exact else t.strip().lower() for t in terms]
        for field_name in self.fields:
            text = _field_text(record, field_name)
            if not text:
                continue
            if exact:
                if text.strip() in wanted:
                    return True
                continue
            text = text.lower()
            for term in wanted:
                if self.match == EQUALS:
                    if text.strip() == term:
                        return True
                elif term in text:
                    return True
        return False


def _field_text(record: EmaRecord, field_name: str) -> str:
    if not isinstance(record, dict):
        return ""
    value = record.get(field_name)
    if not isinstance(value, str):
        return ""
    return value


def apply_filters(
    records: Iterable[EmaRecord],
    filters: Iterable[FieldFilter],
    params: Mapping[str, Any],
) -> List[EmaRecord]:
    """
    Narrow `records` with every filter whose parameter is present.

    Upstream order is preserved; filters for absent parameters are no-ops.
    """
    results = list(records)

    for field_filter in filters:
        if field_filter.param not in params:
            continue
        terms = field_filter.terms(params[field_filter.param])
        if not terms:
            continue
        results = [r for r in results if field_filter.matches(r, terms)]

    return results
