"""
Parameter validation for EMA queries.

Each dataset declares the parameters it understands as a list of
ParamRule. Anything else in the parameter bag is ignored.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Tuple

from ...base import ValidationError

LIMIT_MIN = 1
LIMIT_MAX = 10000
YEAR_MIN = 1995

STRING = "string"
BOOLEAN = "boolean"
CHOICE = "choice"
YEAR = "year"
LIMIT = "limit"


@dataclass(frozen=True)
class ParamRule:
    """A recognized parameter and how to check it."""
    name: str
    kind: str = STRING
    choices: Tuple[str, ...] = ()


def _is_int(value: Any) -> bool:
    # bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def validate_limit(value: Any) -> int:
    if not _is_int(value) or not LIMIT_MIN <= value <= LIMIT_MAX:
        raise ValidationError(
            f"Invalid limit: {value!r}. Must be an integer between {LIMIT_MIN} and {LIMIT_MAX}"
        )
    return value


def validate_year(value: Any, now: datetime) -> int:
    """Accept years from the first EMA records up to next year."""
    year_max = now.year + 1
    if not _is_int(value) or not YEAR_MIN <= value <= year_max:
        raise ValidationError(
            f"Invalid year: {value!r}. Must be an integer between {YEAR_MIN} and {year_max}"
        )
    return value


def validate_choice(name: str, value: Any, choices: Iterable[str]) -> str:
    """Case-insensitive enum check; returns the canonical spelling."""
    choices = tuple(choices)
    if isinstance(value, str):
        wanted = value.strip().lower()
        for choice in choices:
            if choice.lower() == wanted:
                return choice
    raise ValidationError(
        f"Invalid {name}: {value!r}. Must be one of: {', '.join(choices)}"
    )


def validate_boolean(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"Invalid {name}: {value!r}. Must be a boolean (true or false)")
    return value


def validate_string(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {name}: {value!r}. Must be a string")
    return value.strip()


def validate_params(
    params: Mapping[str, Any],
    rules: Iterable[ParamRule],
    now: datetime,
) -> Dict[str, Any]:
    """
    Validate the recognized parameters of a query.

    Returns only the parameters that were supplied. None and blank
    strings count as not supplied.
    """
    cleaned: Dict[str, Any] = {}

    for rule in rules:
        value = params.get(rule.name)
        if value is None or (isinstance(value, str) and not value.strip()):
            continue

        if rule.kind == LIMIT:
            cleaned[rule.name] = validate_limit(value)
        elif rule.kind == YEAR:
            cleaned[rule.name] = validate_year(value, now)
        elif rule.kind == CHOICE:
            cleaned[rule.name] = validate_choice(rule.name, value, rule.choices)
        elif rule.kind == BOOLEAN:
            cleaned[rule.name] = validate_boolean(rule.name, value)
        else:
            cleaned[rule.name] = validate_string(rule.name, value)

    return cleaned
