"""Validation engine: flow, domain and system scopes plus the implement gate."""

from .domain_validator import validate_domain
from .errors import (
    Category,
    Scope,
    Severity,
    ValidationIssue,
    ValidationResult,
)
from .flow_validator import validate_flow
from .gate import ImplementGateState, ValidationStore, check_implement_gate
from .system_validator import validate_system

__all__ = [
    "Category",
    "ImplementGateState",
    "Scope",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "ValidationStore",
    "check_implement_gate",
    "validate_domain",
    "validate_flow",
    "validate_system",
]
