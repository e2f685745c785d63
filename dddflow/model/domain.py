"""
domain.py - Dataclasses for domain documents (domain.yaml).

A domain groups flows and declares the events it publishes to and consumes
from other domains. The layout block belongs to the map renderer and is kept
as an opaque mapping.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .flow import FlowKind


@dataclass(frozen=True)
class DomainFlowEntry:
    """A flow registered in a domain."""
    id: str
    name: str
    kind: Optional[FlowKind] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class EventWiring:
    """A published or consumed event.

    Attributes:
        event: Event name, e.g. "billing.invoice.paid".
        schema: Optional payload schema reference.
        from_flow: Flow that publishes the event (published events).
        handled_by_flow: Flow that handles the event (consumed events).
        description: Free text.
    """
    event: str
    schema: Optional[str] = None
    from_flow: Optional[str] = None
    handled_by_flow: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class DomainDocument:
    name: str
    description: Optional[str] = None
    flows: Tuple[DomainFlowEntry, ...] = ()
    publishes_events: Tuple[EventWiring, ...] = ()
    consumes_events: Tuple[EventWiring, ...] = ()
    layout: Dict[str, Any] = field(default_factory=dict)


def domain_id_from_name(name: str) -> str:
    """Derive the on-disk domain id from a display name ("Order Fulfilment" -> "order-fulfilment")."""
    return re.sub(r"\s+", "-", name.lower())


def empty_domain_document(name: str, description: Optional[str] = None) -> DomainDocument:
    """Minimal domain used when domain.yaml is missing or unreadable."""
    return DomainDocument(name=name, description=description)


def _event_wiring_from_dict(data: Dict[str, Any]) -> EventWiring:
    if not isinstance(data, dict) or "event" not in data:
        raise ValueError(f"Event wiring entry is missing 'event': {data!r}")
    return EventWiring(
        event=str(data["event"]),
        schema=data.get("schema"),
        from_flow=data.get("from_flow"),
        handled_by_flow=data.get("handled_by_flow"),
        description=data.get("description"),
    )


def _flow_entry_from_dict(data: Dict[str, Any]) -> DomainFlowEntry:
    if not isinstance(data, dict) or "id" not in data:
        raise ValueError(f"Domain flow entry is missing 'id': {data!r}")
    kind_str = data.get("type")
    try:
        kind = FlowKind(kind_str) if kind_str else None
    except ValueError:
        kind = None
    return DomainFlowEntry(
        id=str(data["id"]),
        name=data.get("name", str(data["id"])),
        kind=kind,
        description=data.get("description"),
    )


def _entries(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ValueError(f"Domain '{key}' must be a list, got {type(value).__name__}")
    return value


def domain_document_from_dict(data: Dict[str, Any]) -> DomainDocument:
    """Parse a DomainDocument from a dictionary (e.g., YAML load).

    Raises:
        ValueError: If the document is not a mapping or an entry is malformed.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping for a domain document, got {type(data).__name__}")
    return DomainDocument(
        name=data.get("name", ""),
        description=data.get("description"),
        flows=tuple(_flow_entry_from_dict(f) for f in _entries(data, "flows")),
        publishes_events=tuple(_event_wiring_from_dict(e) for e in _entries(data, "publishes_events")),
        consumes_events=tuple(_event_wiring_from_dict(e) for e in _entries(data, "consumes_events")),
        layout=data.get("layout") or {},
    )
