"""
domain_validator.py - Domain-scope validation.

Checks consistency inside one domain document. Events a domain consumes but
does not publish itself are expected to come from other domains; matching
publishers to consumers is the system validator's job.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Set

from dddflow.model.domain import DomainDocument

from .errors import Category, Scope, Severity, ValidationIssue, ValidationResult, build_result, issue

logger = logging.getLogger(__name__)


def check_duplicate_flow_ids(domain: DomainDocument) -> List[ValidationIssue]:
    """One error per repeated occurrence of a flow id."""
    issues: List[ValidationIssue] = []
    seen: Set[str] = set()
    for entry in domain.flows:
        if entry.id in seen:
            issues.append(issue(
                Scope.DOMAIN, Severity.ERROR, Category.DOMAIN_CONSISTENCY,
                f'Duplicate flow ID "{entry.id}" in domain "{domain.name}"',
                suggestion="Rename or remove one of the flows sharing this ID",
            ))
        seen.add(entry.id)
    return issues


def validate_domain(
    domain_id: str,
    domain: DomainDocument,
    all_domains: Optional[Mapping[str, DomainDocument]] = None,
) -> ValidationResult:
    """Validate one domain document.

    Args:
        domain_id: Identifier of the domain being validated.
        domain: The domain document. Not modified.
        all_domains: The full domain registry. Accepted so domain rules can
            consult sibling domains; the current rules do not need it.

    Returns:
        A domain-scope ValidationResult targeting ``domain_id``.
    """
    issues = [i.stamped(domain_id=domain_id) for i in check_duplicate_flow_ids(domain)]
    result = build_result(Scope.DOMAIN, domain_id, issues)

    logger.debug(
        "Validated domain %s: %d error(s), %d warning(s)",
        domain_id,
        result.error_count,
        result.warning_count,
    )
    return result
