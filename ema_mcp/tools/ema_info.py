"""
EMA Info Tool

Unified lookup tool for European Medicines Agency data: EU drug approvals,
EPARs, orphan designations, supply shortages, referrals and other
regulatory information from EMA's public JSON reports.
"""

import logging
from typing import Any, Dict, List, Optional

from ..base import MCPTool, ToolParameter
from .ema_utils import METHODS, EmaClient, invoke

logger = logging.getLogger(__name__)


class EmaInfoTool(MCPTool):
    """Route an EMA query method and its parameters to the query handlers."""

    def __init__(self, client: Optional[EmaClient] = None):
        self._client = client

    @property
    def name(self) -> str:
        return "ema_info"

    @property
    def description(self) -> str:
        return (
            "Unified tool for EMA (European Medicines Agency) drug information lookup. "
            "Provides access to EU drug approvals, EPARs, orphan designations, supply "
            "shortages, and regulatory information through EMA's public JSON API."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="method",
                type="string",
                description=(
                    "The operation to perform: search_medicines (search EU approved drugs), "
                    "get_medicine_by_name (get specific medicine), get_orphan_designations "
                    "(EU orphan drugs), get_supply_shortages (medicine shortages), "
                    "get_referrals (EU safety reviews), get_post_auth_procedures (label updates), "
                    "get_dhpcs (safety communications), get_psusas (periodic safety reports), "
                    "get_pips (paediatric plans), get_herbal_medicines (herbal assessments), "
                    "get_article58_medicines (non-EU use), search_epar_documents (EPAR docs), "
                    "search_all_documents (all EMA docs), search_non_epar_documents (non-EPAR docs)"
                ),
                required=True,
                enum=list(METHODS),
                examples=["search_medicines", "get_dhpcs", "search_epar_documents"],
            ),
            ToolParameter(
                name="active_substance",
                type="string",
                description=(
                    "Active substance name (e.g., 'semaglutide', 'adalimumab'). Used by most "
                    "dataset methods"
                ),
                required=False,
                examples=["semaglutide", "adalimumab", "pembrolizumab"],
            ),
            ToolParameter(
                name="therapeutic_area",
                type="string",
                description=(
                    "For search_medicines, get_orphan_designations, get_supply_shortages, "
                    "get_pips: Therapeutic area or disease (e.g., 'diabetes', 'cancer')"
                ),
                required=False,
                examples=["diabetes", "cancer", "multiple sclerosis", "obesity"],
            ),
            ToolParameter(
                name="status",
                type="string",
                description=(
                    "For search_medicines: Authorised, Withdrawn, Refused or Suspended. "
                    "For get_orphan_designations: Positive, Negative or Withdrawn. "
                    "For get_supply_shortages: Ongoing or Resolved. "
                    "For get_referrals: free-text procedure status"
                ),
                required=False,
                examples=["Authorised", "Withdrawn", "Ongoing", "Resolved"],
            ),
            ToolParameter(
                name="orphan",
                type="boolean",
                description="For search_medicines: Filter for orphan medicines only",
                required=False,
            ),
            ToolParameter(
                name="prime",
                type="boolean",
                description="For search_medicines: Filter for PRIME (priority) medicines only",
                required=False,
            ),
            ToolParameter(
                name="biosimilar",
                type="boolean",
                description="For search_medicines: Filter for biosimilar medicines only",
                required=False,
            ),
            ToolParameter(
                name="conditional_approval",
                type="boolean",
                description="For search_medicines: Filter for conditionally approved medicines",
                required=False,
            ),
            ToolParameter(
                name="limit",
                type="integer",
                description=(
                    "Maximum number of results to return, 1-10000 (default: 100 for medicines, "
                    "orphan designations, PSUSAs, PIPs and documents; 50 for other methods)"
                ),
                required=False,
                examples=[10, 50, 100],
            ),
            ToolParameter(
                name="name",
                type="string",
                description=(
                    "For get_medicine_by_name: Medicine trade name to search "
                    "(e.g., 'Ozempic', 'Wegovy', 'Humira')"
                ),
                required=False,
                examples=["Ozempic", "Wegovy", "Humira", "Keytruda"],
            ),
            ToolParameter(
                name="year",
                type="integer",
                description=(
                    "For get_orphan_designations, get_referrals, get_dhpcs, get_pips: "
                    "Filter by year (1995 to next year)"
                ),
                required=False,
                examples=[2024, 2023, 2022],
            ),
            ToolParameter(
                name="safety",
                type="boolean",
                description="For get_referrals: Filter for safety-related referrals (true=Yes, false=No)",
                required=False,
            ),
            ToolParameter(
                name="medicine_name",
                type="string",
                description=(
                    "For get_supply_shortages, get_post_auth_procedures, get_dhpcs, "
                    "search_epar_documents: Medicine name to filter"
                ),
                required=False,
                examples=["Ozempic", "Keytruda", "Insulin lispro"],
            ),
            ToolParameter(
                name="dhpc_type",
                type="string",
                description="For get_dhpcs: Exact DHPC type",
                required=False,
            ),
            ToolParameter(
                name="regulatory_outcome",
                type="string",
                description="For get_psusas: Exact regulatory outcome (e.g., 'Variation', 'Maintenance')",
                required=False,
            ),
            ToolParameter(
                name="decision_type",
                type="string",
                description="For get_pips: Decision type (partial match)",
                required=False,
            ),
            ToolParameter(
                name="document_type",
                type="string",
                description="For document searches: Document type (partial match)",
                required=False,
            ),
            ToolParameter(
                name="language",
                type="string",
                description="For search_epar_documents: Document language (e.g., 'English')",
                required=False,
            ),
            ToolParameter(
                name="search_term",
                type="string",
                description=(
                    "For search_all_documents, search_non_epar_documents: Text to find in "
                    "document titles"
                ),
                required=False,
            ),
            ToolParameter(
                name="category",
                type="string",
                description="For search_all_documents: Document category (partial match)",
                required=False,
            ),
        ]

    @property
    def category(self) -> str:
        return "ema"

    async def execute(self, method: str, **params) -> Dict[str, Any]:
        arguments = {k: v for k, v in params.items() if v is not None}
        logger.debug(f"ema_info {method} with {sorted(arguments)}")
        return await invoke(method, arguments, client=self._client)
