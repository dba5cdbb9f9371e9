# formatting.py
from __future__ import annotations

import logging
import math
from datetime import datetime, timezone as dt_timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo

from django.utils import timezone
from django.utils.dateparse import parse_datetime

log = logging.getLogger("eticket.formatting")

EMAIL_MAX = 25


# =====================================================================
# MONEY
# =====================================================================

def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def format_currency(price: Any) -> str:
    """`$` + two decimals; anything that is not a finite number prints $0.00."""
    if not _is_number(price):
        price = 0
    return f"${price:.2f}"


def line_total(price: Any, quantity: Any) -> float | int:
    unit = price if _is_number(price) else 0
    qty = quantity if (_is_number(quantity) and quantity) else 1
    return unit * qty


def invoice_rows(items: List[Mapping], tax: Any = None) -> Tuple[List[Tuple[str, str, str, str]], Dict[str, str]]:
    """
    Rows (name, unit cost, quantity, line total) for the summary table and the
    Subtotal / Tax / Total strings. Tax defaults to 0, total = subtotal + tax.
    """
    rows = []
    subtotal = 0
    for item in items:
        item = item if isinstance(item, Mapping) else {}
        price = item.get("price") or 0
        qty = item.get("quantity") or 1
        total = line_total(price, qty)
        subtotal += total
        rows.append((str(item.get("name") or ""), format_currency(price), str(qty), format_currency(total)))

    tax = tax if _is_number(tax) else 0
    totals = {
        "Subtotal": format_currency(subtotal),
        "Tax": format_currency(tax),
        "Total": format_currency(subtotal + tax),
    }
    return rows, totals


# =====================================================================
# CUSTOMER FIELDS
# =====================================================================

def truncate_email(email: Any, limit: int = EMAIL_MAX) -> str:
    text = str(email or "")
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def order_id_tail(order_id: Any, size: int = 7) -> str:
    return str(order_id or "")[-size:]


# =====================================================================
# DATES
# =====================================================================

def parse_order_date(value: Any) -> datetime:
    """ISO string → aware datetime; unparseable input logs and falls back to now."""
    parsed = None
    if isinstance(value, str):
        try:
            parsed = parse_datetime(value.strip())
        except ValueError:
            parsed = None
    elif isinstance(value, datetime):
        parsed = value
    if parsed is None:
        log.warning("Invalid orderDate: %r, using current time", value)
        return timezone.now()
    if timezone.is_naive(parsed):
        parsed = parsed.replace(tzinfo=dt_timezone.utc)
    return parsed


def from_epoch(seconds: Any) -> Optional[datetime]:
    if not _is_number(seconds):
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=dt_timezone.utc)
    except (OverflowError, OSError, ValueError):
        log.warning("Epoch value out of range: %r", seconds)
        return None


def format_datetime(value: Optional[datetime], zone: str) -> str:
    """'Aug 9 at 01:16 AM EDT' in the given zone."""
    if value is None:
        return ""
    local = value.astimezone(ZoneInfo(zone))
    return f"{local:%b} {local.day} at {local:%I:%M %p} {local:%Z}"


def format_short_date(value: Any, zone: str) -> str:
    """Numeric M/D/YYYY for ISO strings or epoch seconds; 'N/A' when unreadable."""
    dt = from_epoch(value) if _is_number(value) else None
    if dt is None and isinstance(value, str):
        try:
            dt = parse_datetime(value.strip())
        except ValueError:
            dt = None
        if dt is not None and timezone.is_naive(dt):
            dt = dt.replace(tzinfo=dt_timezone.utc)
    if dt is None:
        return "N/A"
    local = dt.astimezone(ZoneInfo(zone))
    return f"{local.month}/{local.day}/{local.year}"


def date_range_text(start: Any, end: Any, zone: str) -> str:
    gap = " " * 3
    return f"{format_short_date(start, zone)}{gap}>{gap} {format_short_date(end, zone)}"
