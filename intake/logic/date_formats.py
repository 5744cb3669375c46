"""Date helpers for the UI and stored answer bags."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

UI_FORMATS = {
    "long": "%A {day} %B %Y",
    "medium": "{day} %B %Y",
    "short": "%d/%m/%Y",
}


def iso_date(value: Optional[date] = None) -> str:
    """Return `value` (default today) as '2023-08-29'."""
    return (value or date.today()).isoformat()


def parse_iso(value: Union[str, date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if "T" in text:
        return datetime.fromisoformat(text).date()
    return date.fromisoformat(text)


def iso_to_ui_date(value: Union[str, date, datetime], fmt: str = "long") -> str:
    """Render an ISO date for display, e.g. medium -> '29 August 2023'."""
    if fmt not in UI_FORMATS:
        raise ValueError(f"unknown date format: {fmt}")
    parsed = parse_iso(value)
    # strftime pads the day; the UI shows it unpadded
    return parsed.strftime(UI_FORMATS[fmt].replace("{day}", str(parsed.day)))


__all__ = ["iso_date", "parse_iso", "iso_to_ui_date"]
