"""
EMA date helpers.

EMA reports render dates as "<day> <Month> <year>", e.g. "15 March 2024".
"""

from typing import Optional

MONTHS = {
    "January": "01", "February": "02", "March": "03", "April": "04",
    "May": "05", "June": "06", "July": "07", "August": "08",
    "September": "09", "October": "10", "November": "11", "December": "12",
}


def parse_ema_date(text: Optional[str]) -> Optional[str]:
    """
    Convert an EMA date ("15 March 2024") to ISO format ("2024-03-15").

    Returns None for anything that is not exactly day, full English month
    name and year.
    """
    if not text or not isinstance(text, str):
        return None

    parts = text.split()
    if len(parts) != 3:
        return None

    day, month_name, year = parts
    month = MONTHS.get(month_name)
    if month is None or not day.isdigit() or not year.isdigit():
        return None

    return f"{year}-{month}-{day.zfill(2)}"
