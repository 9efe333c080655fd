"""
Shared fixtures for the EMA tool tests.
"""

from datetime import datetime, timezone
from typing import Dict, List
from unittest.mock import AsyncMock

import pytest

from ema_mcp.tools.ema_utils import EmaClient


NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed call time so year boundaries are deterministic."""
    return NOW


@pytest.fixture
def make_client():
    """Build an EmaClient whose fetches return canned records."""
    def _make(records: List[Dict]) -> EmaClient:
        client = EmaClient()
        client.fetch_records = AsyncMock(return_value=records)
        return client
    return _make


@pytest.fixture
def sample_medicines() -> List[Dict]:
    return [
        {
            "name_of_medicine": "Ozempic",
            "active_substance": "semaglutide",
            "ema_product_number": "EMEA/H/C/004174",
            "medicine_status": "Authorised",
            "therapeutic_area_mesh": "Diabetes Mellitus, Type 2",
            "therapeutic_indication": "Treatment of adults with insufficiently controlled type 2 diabetes",
            "orphan_medicine": "No",
            "prime_priority_medicine": "No",
            "biosimilar": "No",
            "conditional_approval": "No",
        },
        {
            "name_of_medicine": "Humira",
            "active_substance": "adalimumab",
            "ema_product_number": "EMEA/H/C/000481",
            "medicine_status": "Authorised",
            "therapeutic_area_mesh": "Arthritis, Rheumatoid",
            "therapeutic_indication": "Rheumatoid arthritis, psoriasis",
            "orphan_medicine": "No",
            "prime_priority_medicine": "No",
            "biosimilar": "No",
            "conditional_approval": "No",
        },
        {
            "name_of_medicine": "Wegovy",
            "active_substance": "semaglutide",
            "ema_product_number": "EMEA/H/C/005422",
            "medicine_status": "Authorised",
            "therapeutic_area_mesh": "Obesity",
            "therapeutic_indication": "Weight management in adults with obesity",
            "orphan_medicine": "No",
            "prime_priority_medicine": "No",
            "biosimilar": "No",
            "conditional_approval": "No",
        },
        {
            "name_of_medicine": "Imraldi",
            "active_substance": "adalimumab",
            "ema_product_number": "EMEA/H/C/004279",
            "medicine_status": "Authorised",
            "therapeutic_area_mesh": "Arthritis, Rheumatoid",
            "therapeutic_indication": "Rheumatoid arthritis",
            "orphan_medicine": "No",
            "prime_priority_medicine": "No",
            "biosimilar": "Yes",
            "conditional_approval": "No",
        },
        {
            "name_of_medicine": "Rybelsus",
            "active_substance": "semaglutide",
            "ema_product_number": "EMEA/H/C/004953",
            "medicine_status": "Authorised",
            "therapeutic_area_mesh": "Diabetes Mellitus, Type 2",
            "therapeutic_indication": "Oral treatment of type 2 diabetes",
            "orphan_medicine": "No",
            "prime_priority_medicine": "No",
            "biosimilar": "No",
            "conditional_approval": "No",
        },
        {
            "name_of_medicine": "Semaglutide Generic",
            "active_substance": "semaglutide",
            "ema_product_number": "EMEA/H/C/009999",
            "medicine_status": "Withdrawn",
            "therapeutic_area_mesh": "Diabetes Mellitus, Type 2",
            "therapeutic_indication": "Type 2 diabetes",
            "orphan_medicine": "No",
            "prime_priority_medicine": "No",
            "biosimilar": "No",
            "conditional_approval": "No",
        },
        {
            "name_of_medicine": "Kymriah",
            "active_substance": "tisagenlecleucel",
            "ema_product_number": "EMEA/H/C/004090",
            "medicine_status": "Authorised",
            "therapeutic_area_mesh": "Lymphoma, Large B-Cell, Diffuse",
            "therapeutic_indication": "B-cell acute lymphoblastic leukaemia",
            "orphan_medicine": "Yes",
            "prime_priority_medicine": "Yes",
            "biosimilar": "No",
            "conditional_approval": "No",
        },
        {
            "name_of_medicine": "Translarna",
            "active_substance": "ataluren",
            "ema_product_number": "EMEA/H/C/002720",
            "medicine_status": "Refused",
            "therapeutic_area_mesh": "Muscular Dystrophy, Duchenne",
            "therapeutic_indication": "Duchenne muscular dystrophy",
            "orphan_medicine": "Yes",
            "prime_priority_medicine": "No",
            "biosimilar": "No",
            "conditional_approval": "Yes",
        },
    ]


@pytest.fixture
def sample_shortages() -> List[Dict]:
    return [
        {
            "medicine_affected": "Ozempic",
            "international_non_proprietary_name_inn_or_common_name": "semaglutide",
            "therapeutic_area_mesh": "Diabetes Mellitus, Type 2",
            "supply_shortage_status": "Ongoing",
        },
        {
            "medicine_affected": "Humira",
            "international_non_proprietary_name_inn_or_common_name": "adalimumab",
            "therapeutic_area_mesh": "Arthritis, Rheumatoid",
            "supply_shortage_status": "Resolved",
        },
        {
            "medicine_affected": "Victoza",
            "international_non_proprietary_name_inn_or_common_name": "liraglutide",
            "therapeutic_area_mesh": "Diabetes Mellitus, Type 2",
            "supply_shortage_status": "ongoing",
        },
        {
            "medicine_affected": "Semaglutide pen (various)",
            "international_non_proprietary_name_inn_or_common_name": "",
            "therapeutic_area_mesh": "Obesity",
            "supply_shortage_status": "Resolved",
        },
    ]


@pytest.fixture
def sample_referrals() -> List[Dict]:
    return [
        {
            "referral_name": "Valproate",
            "international_non_proprietary_name_inn_common_name": "valproate",
            "safety_referral": "Sì",
            "current_status": "European Commission final decision",
            "procedure_start_date": "9 March 2017",
        },
        {
            "referral_name": "Ranitidine",
            "international_non_proprietary_name_inn_common_name": "ranitidine",
            "safety_referral": "Yes",
            "current_status": "Ongoing",
            "procedure_start_date": "12 September 2019",
        },
        {
            "referral_name": "Generic X",
            "international_non_proprietary_name_inn_common_name": "generic x",
            "safety_referral": "No",
            "current_status": "Ongoing",
            "procedure_start_date": "3 March 2019",
        },
    ]
