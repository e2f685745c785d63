# dddflow/validator/errors.py
"""Validation issue and result types."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from dddflow.model._ids import generate_short_id
from dddflow.model._time import utc_now_iso

# Issue message template: [FAIL] category: location message -> Fix: suggestion
ISSUE_TEMPLATE = "[{tag}] {category}: {location}{message}"
FIX_TEMPLATE = "\n  Fix: {suggestion}"


class Severity(Enum):
    """Errors block the implement gate; warnings and info do not."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Scope(Enum):
    FLOW = "flow"
    DOMAIN = "domain"
    SYSTEM = "system"


class Category(Enum):
    GRAPH_COMPLETENESS = "graph_completeness"
    SPEC_COMPLETENESS = "spec_completeness"
    AGENT_VALIDATION = "agent_validation"
    ORCHESTRATION_VALIDATION = "orchestration_validation"
    DOMAIN_CONSISTENCY = "domain_consistency"
    EVENT_WIRING = "event_wiring"


_SEVERITY_TAGS = {
    Severity.ERROR: "FAIL",
    Severity.WARNING: "WARN",
    Severity.INFO: "INFO",
}


@dataclass(frozen=True)
class ValidationIssue:
    """A single finding. Value object; never mutated after creation."""

    id: str
    scope: Scope
    severity: Severity
    category: Category
    message: str
    suggestion: Optional[str] = None
    node_id: Optional[str] = None
    flow_id: Optional[str] = None
    domain_id: Optional[str] = None

    def stamped(self, flow_id: Optional[str] = None, domain_id: Optional[str] = None) -> "ValidationIssue":
        """Return a copy carrying the owning flow and/or domain ids."""
        changes: Dict[str, Any] = {}
        if flow_id is not None:
            changes["flow_id"] = flow_id
        if domain_id is not None:
            changes["domain_id"] = domain_id
        return replace(self, **changes)

    def format(self) -> str:
        """Format issue for terminal output."""
        location = f"{self.node_id} " if self.node_id else ""
        text = ISSUE_TEMPLATE.format(
            tag=_SEVERITY_TAGS[self.severity],
            category=self.category.value,
            location=location,
            message=self.message,
        )
        if self.suggestion:
            text += FIX_TEMPLATE.format(suggestion=self.suggestion)
        return text

    def to_dict(self) -> Dict[str, Any]:
        """Convert issue to dictionary for JSON serialization."""
        result: Dict[str, Any] = {
            "id": self.id,
            "scope": self.scope.value,
            "severity": self.severity.value,
            "category": self.category.value,
            "message": self.message,
        }
        for key, value in (
            ("suggestion", self.suggestion),
            ("nodeId", self.node_id),
            ("flowId", self.flow_id),
            ("domainId", self.domain_id),
        ):
            if value is not None:
                result[key] = value
        return result


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation run for one target."""

    scope: Scope
    target_id: str
    issues: Tuple[ValidationIssue, ...]
    error_count: int
    warning_count: int
    info_count: int
    is_valid: bool
    validated_at: str

    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    def has_errors(self) -> bool:
        """Check if any errors were collected."""
        return self.error_count > 0

    def has_warnings(self) -> bool:
        """Check if any warnings were collected."""
        return self.warning_count > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        return {
            "scope": self.scope.value,
            "targetId": self.target_id,
            "issues": [i.to_dict() for i in self.issues],
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "infoCount": self.info_count,
            "isValid": self.is_valid,
            "validatedAt": self.validated_at,
        }


def issue(
    scope: Scope,
    severity: Severity,
    category: Category,
    message: str,
    suggestion: Optional[str] = None,
    node_id: Optional[str] = None,
    flow_id: Optional[str] = None,
    domain_id: Optional[str] = None,
) -> ValidationIssue:
    """Create an issue with a fresh id."""
    return ValidationIssue(
        id=generate_short_id(),
        scope=scope,
        severity=severity,
        category=category,
        message=message,
        suggestion=suggestion,
        node_id=node_id,
        flow_id=flow_id,
        domain_id=domain_id,
    )


def build_result(scope: Scope, target_id: str, issues: Iterable[ValidationIssue]) -> ValidationResult:
    """Count severities and wrap issues into a result stamped with the current time."""
    issues = tuple(issues)
    error_count = sum(1 for i in issues if i.severity == Severity.ERROR)
    warning_count = sum(1 for i in issues if i.severity == Severity.WARNING)
    info_count = sum(1 for i in issues if i.severity == Severity.INFO)
    return ValidationResult(
        scope=scope,
        target_id=target_id,
        issues=issues,
        error_count=error_count,
        warning_count=warning_count,
        info_count=info_count,
        is_valid=error_count == 0,
        validated_at=utc_now_iso(),
    )
