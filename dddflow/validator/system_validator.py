"""
system_validator.py - System-scope validation across all domains.

Matches published events against consumed events:
- consumed but never published: error (dangling subscription)
- published but never consumed: warning (consumers may live outside the model)
- mixed dot.notation / camelCase event names: one style warning
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Mapping

from dddflow.model.domain import DomainDocument, EventWiring

from .errors import Category, Scope, Severity, ValidationIssue, ValidationResult, build_result, issue

logger = logging.getLogger(__name__)

SYSTEM_TARGET_ID = "system"

_CAMEL_CASE = re.compile(r"[a-z][A-Z]")


def _index_events(
    domains: Mapping[str, DomainDocument],
    select: str,
) -> Dict[str, List[str]]:
    """Map event name -> distinct domain ids, in first-seen order."""
    index: Dict[str, List[str]] = {}
    for domain_id, domain in domains.items():
        wirings: Iterable[EventWiring] = getattr(domain, select)
        for wiring in wirings:
            owners = index.setdefault(wiring.event, [])
            if domain_id not in owners:
                owners.append(domain_id)
    return index


def _event_issue(severity: Severity, message: str, suggestion: str) -> ValidationIssue:
    return issue(Scope.SYSTEM, severity, Category.EVENT_WIRING, message, suggestion=suggestion)


def check_event_naming(event_names: List[str]) -> List[ValidationIssue]:
    """Warn once when dot.notation and camelCase names are mixed."""
    if len(event_names) < 2:
        return []
    dot_notation = [n for n in event_names if "." in n]
    camel_case = [n for n in event_names if "." not in n and _CAMEL_CASE.search(n)]
    if dot_notation and camel_case:
        return [_event_issue(
            Severity.WARNING,
            f"Inconsistent event naming: {len(dot_notation)} use dot notation, "
            f"{len(camel_case)} use camelCase",
            "Standardize event naming across domains (prefer dot notation: domain.event.action)",
        )]
    return []


def validate_system(domains: Mapping[str, DomainDocument]) -> ValidationResult:
    """Validate event wiring across every domain in the project.

    Args:
        domains: Mapping of domain id to domain document. Not modified.

    Returns:
        A system-scope ValidationResult targeting "system".
    """
    published = _index_events(domains, "publishes_events")
    consumed = _index_events(domains, "consumes_events")
    issues: List[ValidationIssue] = []

    for event, consumers in consumed.items():
        if event not in published:
            issues.append(_event_issue(
                Severity.ERROR,
                f'Event "{event}" is consumed by {", ".join(consumers)} but no domain publishes it',
                "Add this event to the publishing domain or remove the consumer",
            ))

    for event, publishers in published.items():
        if event not in consumed:
            issues.append(_event_issue(
                Severity.WARNING,
                f'Event "{event}" is published by {", ".join(publishers)} but no domain consumes it',
                "This event may be unused - consider adding a consumer or removing it",
            ))

    event_names = list(dict.fromkeys([*published, *consumed]))
    issues.extend(check_event_naming(event_names))

    result = build_result(Scope.SYSTEM, SYSTEM_TARGET_ID, issues)
    logger.debug(
        "Validated system (%d domains, %d events): %d error(s), %d warning(s)",
        len(domains),
        len(event_names),
        result.error_count,
        result.warning_count,
    )
    return result
