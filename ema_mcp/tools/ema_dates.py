"""
EMA date conversion tool.
"""

from typing import Any, Dict

from ..base import ToolParameter, ValidationError, tool
from .ema_utils import parse_ema_date


@tool(
    name="ema_parse_date",
    description="Convert an EMA date such as '15 March 2024' to ISO format (2024-03-15)",
    parameters=[
        ToolParameter(
            name="date",
            type="string",
            description="Date as rendered in EMA reports: '<day> <Month> <year>'",
            examples=["15 March 2024", "3 January 2023"],
        )
    ],
    category="ema",
)
async def ema_parse_date(date: str = None) -> Dict[str, Any]:
    if date is None:
        raise ValidationError("Missing required parameter: date", tool_name="ema_parse_date")
    return {"input": date, "iso_date": parse_ema_date(date)}
