"""
EMA dataset catalogue.

One DatasetSpec per query method: which report it reads, how the report
is shaped, which parameters it validates and how they map onto the
report's fields.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .client import FetchMode
from .filters import CONTAINS, EQUALS, EXACT, FieldFilter, safety_flag, yes_flag
from .validators import BOOLEAN, CHOICE, LIMIT, YEAR, ParamRule

# Report file names under EMA_BASE_URL
MEDICINES_ENDPOINT = "medicines-output-medicines_json-report_en.json"
ORPHAN_DESIGNATIONS_ENDPOINT = "medicines-output-orphan_designations-json-report_en.json"
SHORTAGES_ENDPOINT = "shortages-output-json-report_en.json"
REFERRALS_ENDPOINT = "referrals-output-json-report_en.json"
POST_AUTH_ENDPOINT = "medicines-output-post_authorisation_json-report_en.json"
DHPC_ENDPOINT = "dhpc-output-json-report_en.json"
PSUSA_ENDPOINT = "medicines-output-periodic_safety_update_report_single_assessments-output-json-report_en.json"
PIP_ENDPOINT = "medicines-output-paediatric_investigation_plans-output-json-report_en.json"
HERBAL_ENDPOINT = "medicines-output-herbal_medicines-report-output-json_en.json"
ARTICLE58_ENDPOINT = "medicine-use-outside-eu-output-json-report_en.json"
EPAR_DOCUMENTS_ENDPOINT = "documents-output-epar_documents_json-report_en.json"
ALL_DOCUMENTS_ENDPOINT = "documents-output-json-report_en.json"
NON_EPAR_DOCUMENTS_ENDPOINT = "documents-output-non_epar_documents_json-report_en.json"

MEDICINES_SOURCE = "EMA Medicines Database"

MEDICINE_STATUSES = ("Authorised", "Withdrawn", "Refused", "Suspended")
ORPHAN_STATUSES = ("Positive", "Negative", "Withdrawn")
SHORTAGE_STATUSES = ("Ongoing", "Resolved")

LIMIT_RULE = ParamRule("limit", LIMIT)
YEAR_RULE = ParamRule("year", YEAR)


@dataclass(frozen=True)
class DatasetSpec:
    """How one query method reads and filters its report."""
    method: str
    endpoint: str
    source: str
    default_limit: int
    rules: Tuple[ParamRule, ...]
    filters: Tuple[FieldFilter, ...]
    fetch_mode: FetchMode = FetchMode.ARRAY
    # No usable upstream report: the pipeline runs over an empty collection
    static_empty: bool = False


DATASETS: Dict[str, DatasetSpec] = {}


def _register(spec: DatasetSpec) -> DatasetSpec:
    DATASETS[spec.method] = spec
    return spec


SEARCH_MEDICINES = _register(DatasetSpec(
    method="search_medicines",
    endpoint=MEDICINES_ENDPOINT,
    source=MEDICINES_SOURCE,
    default_limit=100,
    rules=(
        ParamRule("active_substance"),
        ParamRule("therapeutic_area"),
        ParamRule("status", CHOICE, MEDICINE_STATUSES),
        ParamRule("orphan", BOOLEAN),
        ParamRule("prime", BOOLEAN),
        ParamRule("biosimilar", BOOLEAN),
        ParamRule("conditional_approval", BOOLEAN),
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter("active_substance", ("active_substance",)),
        FieldFilter("therapeutic_area", ("therapeutic_area_mesh", "therapeutic_indication")),
        FieldFilter("status", ("medicine_status",), EXACT),
        FieldFilter("orphan", ("orphan_medicine",), EXACT, yes_flag),
        FieldFilter("prime", ("prime_priority_medicine",), EXACT, yes_flag),
        FieldFilter("biosimilar", ("biosimilar",), EXACT, yes_flag),
        FieldFilter("conditional_approval", ("conditional_approval",), EXACT, yes_flag),
    ),
))

ORPHAN_DESIGNATIONS = _register(DatasetSpec(
    method="get_orphan_designations",
    endpoint=ORPHAN_DESIGNATIONS_ENDPOINT,
    source="EMA Orphan Designations",
    default_limit=100,
    rules=(
        ParamRule("therapeutic_area"),
        ParamRule("active_substance"),
        YEAR_RULE,
        ParamRule("status", CHOICE, ORPHAN_STATUSES),
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter("therapeutic_area", ("intended_use",)),
        FieldFilter("active_substance", ("active_substance",)),
        FieldFilter("year", ("date_of_designation_or_refusal",)),
        FieldFilter("status", ("status",), EQUALS),
    ),
))

SUPPLY_SHORTAGES = _register(DatasetSpec(
    method="get_supply_shortages",
    endpoint=SHORTAGES_ENDPOINT,
    source="EMA Medicine Supply Shortages",
    default_limit=50,
    rules=(
        ParamRule("active_substance"),
        ParamRule("medicine_name"),
        ParamRule("therapeutic_area"),
        ParamRule("status", CHOICE, SHORTAGE_STATUSES),
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter(
            "active_substance",
            ("international_non_proprietary_name_inn_or_common_name", "medicine_affected"),
        ),
        FieldFilter("medicine_name", ("medicine_affected",)),
        FieldFilter("therapeutic_area", ("therapeutic_area_mesh",)),
        FieldFilter("status", ("supply_shortage_status",), EQUALS),
    ),
))

REFERRALS = _register(DatasetSpec(
    method="get_referrals",
    endpoint=REFERRALS_ENDPOINT,
    source="EMA Referrals",
    default_limit=50,
    rules=(
        ParamRule("safety", BOOLEAN),
        ParamRule("active_substance"),
        ParamRule("status"),
        YEAR_RULE,
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter("safety", ("safety_referral",), EQUALS, safety_flag),
        FieldFilter("active_substance", ("international_non_proprietary_name_inn_common_name",)),
        FieldFilter("status", ("current_status",)),
        FieldFilter("year", ("procedure_start_date",)),
    ),
))

POST_AUTH_PROCEDURES = _register(DatasetSpec(
    method="get_post_auth_procedures",
    endpoint=POST_AUTH_ENDPOINT,
    source="EMA Post-Authorization Procedures",
    default_limit=50,
    rules=(
        ParamRule("medicine_name"),
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter("medicine_name", ("medicine_name",)),
    ),
))

DHPCS = _register(DatasetSpec(
    method="get_dhpcs",
    endpoint=DHPC_ENDPOINT,
    source="EMA Direct Healthcare Professional Communications",
    default_limit=50,
    rules=(
        ParamRule("medicine_name"),
        ParamRule("active_substance"),
        ParamRule("dhpc_type"),
        YEAR_RULE,
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter("medicine_name", ("name_of_medicine",)),
        FieldFilter("active_substance", ("active_substances",)),
        FieldFilter("dhpc_type", ("dhpc_type",), EQUALS),
        FieldFilter("year", ("dissemination_date",)),
    ),
))

PSUSAS = _register(DatasetSpec(
    method="get_psusas",
    endpoint=PSUSA_ENDPOINT,
    source="EMA Periodic Safety Update Report Single Assessments",
    default_limit=100,
    rules=(
        ParamRule("active_substance"),
        ParamRule("regulatory_outcome"),
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter("active_substance", ("active_substance", "active_substances_in_scope_of_procedure")),
        FieldFilter("regulatory_outcome", ("regulatory_outcome",), EQUALS),
    ),
))

PIPS = _register(DatasetSpec(
    method="get_pips",
    endpoint=PIP_ENDPOINT,
    source="EMA Paediatric Investigation Plans",
    default_limit=100,
    rules=(
        ParamRule("active_substance"),
        ParamRule("therapeutic_area"),
        ParamRule("decision_type"),
        YEAR_RULE,
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter("active_substance", ("active_substance",)),
        FieldFilter("therapeutic_area", ("therapeutic_area",)),
        FieldFilter("decision_type", ("decision_type",)),
        FieldFilter("year", ("decision_date",)),
    ),
))

HERBAL_MEDICINES = _register(DatasetSpec(
    method="get_herbal_medicines",
    endpoint=HERBAL_ENDPOINT,
    source="EMA Herbal Medicines",
    default_limit=50,
    rules=(
        ParamRule("active_substance"),
        ParamRule("therapeutic_area"),
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter("active_substance", ("latin_name_of_herbal_substance", "english_common_name")),
        FieldFilter("therapeutic_area", ("therapeutic_area",)),
    ),
    static_empty=True,
))

ARTICLE58_MEDICINES = _register(DatasetSpec(
    method="get_article58_medicines",
    endpoint=ARTICLE58_ENDPOINT,
    source="EMA Article 58 Medicines (Use Outside EU)",
    default_limit=50,
    rules=(
        ParamRule("medicine_name"),
        ParamRule("active_substance"),
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter("medicine_name", ("medicine_name",)),
        FieldFilter("active_substance", ("active_substance",)),
    ),
    static_empty=True,
))

EPAR_DOCUMENTS = _register(DatasetSpec(
    method="search_epar_documents",
    endpoint=EPAR_DOCUMENTS_ENDPOINT,
    source="EMA EPAR Documents",
    default_limit=100,
    rules=(
        ParamRule("medicine_name"),
        ParamRule("document_type"),
        ParamRule("language"),
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter("medicine_name", ("medicine_name",)),
        FieldFilter("document_type", ("document_type",), CONTAINS),
        FieldFilter("language", ("language",), EQUALS),
    ),
    fetch_mode=FetchMode.DOCUMENTS,
))

ALL_DOCUMENTS = _register(DatasetSpec(
    method="search_all_documents",
    endpoint=ALL_DOCUMENTS_ENDPOINT,
    source="EMA Documents",
    default_limit=100,
    rules=(
        ParamRule("search_term"),
        ParamRule("document_type"),
        ParamRule("category"),
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter("search_term", ("title", "document_title")),
        FieldFilter("document_type", ("document_type",)),
        FieldFilter("category", ("category",)),
    ),
    fetch_mode=FetchMode.DOCUMENTS,
))

NON_EPAR_DOCUMENTS = _register(DatasetSpec(
    method="search_non_epar_documents",
    endpoint=NON_EPAR_DOCUMENTS_ENDPOINT,
    source="EMA Non-EPAR Documents",
    default_limit=100,
    rules=(
        ParamRule("search_term"),
        ParamRule("document_type"),
        LIMIT_RULE,
    ),
    filters=(
        FieldFilter("search_term", ("title", "document_title")),
        FieldFilter("document_type", ("document_type",)),
    ),
    fetch_mode=FetchMode.DOCUMENTS,
))
