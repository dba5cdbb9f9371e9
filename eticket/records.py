# records.py
"""
Read-only accessors over an order mapping.

Every value the layout prints goes through one of these helpers so the
default used for a missing field is stated once and can be tested without
a canvas.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

log = logging.getLogger("eticket.records")

NA = "N/A"

EVENT = "event"
PRODUCT = "product"

SAMPLES_DIR = Path(__file__).resolve().parent / "samples"


def _or(value: Any, default: Any) -> Any:
    """JS-style `value || default`: any falsy value yields the default."""
    return value if value else default


def _get(obj: Optional[Mapping], key: str) -> Any:
    if not isinstance(obj, Mapping):
        return None
    return obj.get(key)


def _list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


# =====================================================================
# RECORD SOURCE (event vs product)
# =====================================================================

@dataclass(frozen=True)
class RecordSource:
    """Tagged union over the two record kinds that carry tickets."""
    kind: str
    data: Mapping

    @property
    def tickets(self) -> List[Mapping]:
        return _list(self.data.get("tickets"))

    @property
    def name(self) -> str:
        return str(_or(self.data.get("name"), ""))

    @property
    def start(self) -> Any:
        return self.data.get("start")

    @property
    def images(self) -> List[str]:
        return [u for u in _list(self.data.get("images")) if u]

    def address_lines(self) -> List[str]:
        location = self.data.get("location") or {}
        address = _get(location, "address") or {}
        return [
            f"City: {_or(_get(address, 'city'), '')}",
            f"Address Line: {_or(_get(address, 'lineOne'), '')}",
            f"Postal Code: {_or(_get(address, 'postalCode'), '')}",
            f"State: {_or(_get(address, 'state'), '')}",
            f"Location Name: {_or(_get(location, 'name'), '')}",
        ]


def record_source(order: Mapping, kind: str) -> Optional[RecordSource]:
    if kind not in (EVENT, PRODUCT):
        raise ValueError(f"unknown record kind: {kind!r}")
    data = order.get(kind)
    if not isinstance(data, Mapping):
        return None
    return RecordSource(kind=kind, data=data)


def has_tickets(order: Mapping, kind: str) -> bool:
    source = record_source(order, kind)
    return bool(source and source.tickets)


def event_check(order: Mapping) -> bool:
    return has_tickets(order, EVENT)


def products_check(order: Mapping) -> bool:
    return has_tickets(order, PRODUCT)


def available_tickets(order: Mapping) -> List[Mapping]:
    """Event tickets when present, else product tickets."""
    for kind in (EVENT, PRODUCT):
        source = record_source(order, kind)
        if source and source.tickets:
            return source.tickets
    return []


def order_items(order: Mapping) -> List[Mapping]:
    return _list(order.get("items"))


def max_length(order: Mapping) -> int:
    return max(len(available_tickets(order)), len(order_items(order)))


# =====================================================================
# FIELD DEFAULTS
# =====================================================================

def header(order: Mapping) -> Mapping:
    hdr = order.get("header")
    return hdr if isinstance(hdr, Mapping) else {}


def header_text(order: Mapping, key: str) -> str:
    return str(_or(header(order).get(key), ""))


def ticket_fields(ticket: Mapping) -> Dict[str, Any]:
    party = ticket.get("party")
    return {
        "name": _or(ticket.get("name"), NA),
        "details": _or(ticket.get("details"), NA),
        "id": _or(ticket.get("id"), NA),
        "party": NA if party is None else party,
        "price": _or(ticket.get("price"), 0),
        "quantity": _or(ticket.get("quantity"), 0),
        "sale_start": _or(ticket.get("saleStart"), NA),
    }


def ticket_response_lines(ticket: Mapping) -> List[str]:
    """'Responses' heading plus title/response lines for answered options only."""
    answered = [o for o in _list(ticket.get("options")) if isinstance(o, Mapping) and "response" in o]
    if not answered:
        return []
    lines = ["Responses"]
    for option in answered:
        lines.append(f"Title: {_or(option.get('title'), NA)}")
        lines.append(f"Responses: {_or(option.get('response'), NA)}")
    return lines


def item_fields(item: Mapping) -> Dict[str, Any]:
    return {
        "name": _or(item.get("name"), ""),
        "price": _or(item.get("price"), ""),
        "quantity": _or(item.get("quantity"), ""),
        "type": _or(item.get("type"), ""),
        "details": _or(item.get("details"), ""),
    }


def item_response_pairs(item: Mapping) -> List[tuple]:
    pairs = []
    for r in _list(item.get("responses")):
        if not isinstance(r, Mapping):
            continue
        pairs.append((str(_or(r.get("title"), "")), str(_or(r.get("response"), ""))))
    return pairs


def usage_box(order: Mapping) -> tuple:
    box = header(order).get("usageBox") or {}
    return str(_or(_get(box, "title"), "")), str(_or(_get(box, "details"), ""))


def app_icon(order: Mapping) -> Mapping:
    icon = header(order).get("appIcon")
    return icon if isinstance(icon, Mapping) else {}


def ticket_at(source: RecordSource, index: int) -> Optional[Mapping]:
    tickets = source.tickets
    if index < 0 or index >= len(tickets):
        log.error("Invalid %s ticket index %s (have %s)", source.kind, index, len(tickets))
        return None
    return tickets[index] if isinstance(tickets[index], Mapping) else {}


def item_at(order: Mapping, index: int) -> Optional[Mapping]:
    items = order_items(order)
    if index < 0 or index >= len(items):
        log.error("Item index out of bounds: %s (have %s)", index, len(items))
        return None
    return items[index] if isinstance(items[index], Mapping) else {}


def representative_image_url(order: Mapping, index: int, per_item: bool = False) -> Optional[str]:
    """Image shown beside each ticket block; items[0] unless per_item is on."""
    items = order_items(order)
    if per_item and 0 <= index < len(items):
        url = _get(items[index], "image")
        if url:
            return url
    if not items:
        return None
    return _get(items[0], "image") or None


def load_order(path: Union[str, Path]) -> Dict[str, Any]:
    """Read an order from a JSON file. The top level must be an object."""
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: order must be a JSON object, got {type(data).__name__}")
    return data


def sample_order(name: str = "event_order") -> Dict[str, Any]:
    return load_order(SAMPLES_DIR / f"{name}.json")
