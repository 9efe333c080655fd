"""
EMA query handlers.

Every list query runs the same pipeline: validate -> fetch -> filter ->
limit -> envelope. Only the DatasetSpec differs between methods.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from ...base import ValidationError
from .client import EmaClient
from .datasets import DATASETS, MEDICINES_ENDPOINT, MEDICINES_SOURCE, DatasetSpec
from .filters import apply_filters
from .types import EmaRecord, MedicineFound, MedicineNotFound, ResultEnvelope
from .validators import validate_params

logger = logging.getLogger(__name__)

MEDICINE_BY_NAME = "get_medicine_by_name"

# Order mirrors the method enum advertised by the ema_info tool
METHODS = (
    "search_medicines",
    MEDICINE_BY_NAME,
    "get_orphan_designations",
    "get_supply_shortages",
    "get_referrals",
    "get_post_auth_procedures",
    "get_dhpcs",
    "get_psusas",
    "get_pips",
    "get_herbal_medicines",
    "get_article58_medicines",
    "search_epar_documents",
    "search_all_documents",
    "search_non_epar_documents",
)


class UnknownMethodError(ValidationError):
    """Raised when a method name is not one of METHODS."""
    error_type = "unknown_method"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def _load_records(spec: DatasetSpec, client: EmaClient) -> List[EmaRecord]:
    if spec.static_empty:
        return []
    return await client.fetch_records(spec.endpoint, spec.fetch_mode)


async def query_dataset(
    spec: DatasetSpec,
    params: Mapping[str, Any],
    client: Optional[EmaClient] = None,
    now: Optional[datetime] = None,
) -> ResultEnvelope:
    """Run one list query and wrap the matching records in an envelope."""
    now = now or _utcnow()
    client = client or EmaClient()

    cleaned = validate_params(params, spec.rules, now)
    limit = cleaned.get("limit", spec.default_limit)

    records = await _load_records(spec, client)
    matched = apply_filters(records, spec.filters, cleaned)
    results = matched[:limit]

    logger.info(
        f"{spec.method}: {len(records)} records, {len(matched)} matched, "
        f"{len(results)} returned"
    )

    return {
        "total_count": len(results),
        "results": results,
        "source": spec.source,
        "source_url": client.url_for(spec.endpoint),
        "last_updated": now.isoformat(),
    }


async def get_medicine_by_name(
    params: Mapping[str, Any],
    client: Optional[EmaClient] = None,
    now: Optional[datetime] = None,
) -> Union[MedicineFound, MedicineNotFound]:
    """
    Look up the first medicine whose name contains `name`.

    A missing match is a normal result (found=False), not an error.
    """
    name = params.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("name parameter is required for get_medicine_by_name")

    now = now or _utcnow()
    client = client or EmaClient()
    source_url = client.url_for(MEDICINES_ENDPOINT)

    term = name.strip().lower()
    medicines = await client.fetch(MEDICINES_ENDPOINT)
    medicine = next(
        (
            m for m in medicines
            if isinstance(m, dict)
            and isinstance(m.get("name_of_medicine"), str)
            and term in m["name_of_medicine"].lower()
        ),
        None,
    )

    if medicine is None:
        logger.info(f"{MEDICINE_BY_NAME}: no match for {name!r}")
        return {
            "found": False,
            "message": f'Medicine "{name}" not found in EMA database',
            "source": MEDICINES_SOURCE,
            "source_url": source_url,
        }

    return {
        "found": True,
        "medicine": medicine,
        "source": MEDICINES_SOURCE,
        "source_url": source_url,
        "last_updated": now.isoformat(),
    }


async def invoke(
    method: str,
    params: Optional[Mapping[str, Any]] = None,
    client: Optional[EmaClient] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Route a method name and parameter bag to its handler."""
    params = params or {}

    if method == MEDICINE_BY_NAME:
        return await get_medicine_by_name(params, client=client, now=now)

    spec = DATASETS.get(method)
    if spec is None:
        raise UnknownMethodError(
            f"Unknown method: {method}. Must be one of: {', '.join(METHODS)}"
        )

    return await query_dataset(spec, params, client=client, now=now)
