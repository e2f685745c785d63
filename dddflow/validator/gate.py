"""
gate.py - Implement gate and the caller-side result cache.

The gate never validates. It reads the most recent flow, domain and system
results and allows implementation only when their summed error count is zero.
Keeping those results fresh is the caller's job; ValidationStore is the cache
the API and CLI use for that.

Usage:
    from dddflow.validator.gate import ValidationStore

    store = ValidationStore()
    store.validate_all(flow, domain_id, domains)
    gate = store.check_implement_gate(flow.id, domain_id)
    if not gate.can_implement:
        ...
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from dddflow.model.domain import DomainDocument
from dddflow.model.flow import FlowDocument

from .domain_validator import validate_domain as _validate_domain
from .errors import ValidationIssue, ValidationResult
from .flow_validator import validate_flow as _validate_flow
from .system_validator import validate_system as _validate_system

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImplementGateState:
    """Gate decision plus the results it was derived from."""

    flow_validation: Optional[ValidationResult]
    domain_validation: Optional[ValidationResult]
    system_validation: Optional[ValidationResult]
    can_implement: bool
    has_warnings: bool

    @property
    def total_errors(self) -> int:
        return sum(r.error_count for r in self._results())

    @property
    def total_warnings(self) -> int:
        return sum(r.warning_count for r in self._results())

    def _results(self) -> List[ValidationResult]:
        return [
            r
            for r in (self.flow_validation, self.domain_validation, self.system_validation)
            if r is not None
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert gate state to dictionary for JSON serialization."""
        return {
            "flowValidation": self.flow_validation.to_dict() if self.flow_validation else None,
            "domainValidation": self.domain_validation.to_dict() if self.domain_validation else None,
            "systemValidation": self.system_validation.to_dict() if self.system_validation else None,
            "canImplement": self.can_implement,
            "hasWarnings": self.has_warnings,
        }


def flow_key(domain_id: str, flow_id: str) -> str:
    return f"{domain_id}/{flow_id}"


def check_implement_gate(
    flow_result: Optional[ValidationResult],
    domain_result: Optional[ValidationResult],
    system_result: Optional[ValidationResult],
) -> ImplementGateState:
    """Decide whether implementation may proceed.

    Missing results count as zero errors and zero warnings.
    """
    results = [r for r in (flow_result, domain_result, system_result) if r is not None]
    total_errors = sum(r.error_count for r in results)
    total_warnings = sum(r.warning_count for r in results)
    return ImplementGateState(
        flow_validation=flow_result,
        domain_validation=domain_result,
        system_validation=system_result,
        can_implement=total_errors == 0,
        has_warnings=total_warnings > 0,
    )


class ValidationStore:
    """Cache of the latest validation result per target.

    Flow results are keyed "<domain>/<flow>", domain results by domain id.
    A new result replaces the previous one for the same key.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._flow_results: Dict[str, ValidationResult] = {}
        self._domain_results: Dict[str, ValidationResult] = {}
        self._system_result: Optional[ValidationResult] = None

    def validate_flow(self, flow: FlowDocument) -> ValidationResult:
        result = _validate_flow(flow)
        with self._lock:
            self._flow_results[flow.key] = result
        return result

    def validate_domain(
        self,
        domain_id: str,
        domains: Mapping[str, DomainDocument],
    ) -> Optional[ValidationResult]:
        """Validate ``domain_id`` from the registry; None if it is not registered."""
        domain = domains.get(domain_id)
        if domain is None:
            logger.debug("Skipping domain validation for unknown domain %s", domain_id)
            return None
        result = _validate_domain(domain_id, domain, domains)
        with self._lock:
            self._domain_results[domain_id] = result
        return result

    def validate_system(self, domains: Mapping[str, DomainDocument]) -> ValidationResult:
        result = _validate_system(domains)
        with self._lock:
            self._system_result = result
        return result

    def validate_all(
        self,
        flow: Optional[FlowDocument],
        domain_id: Optional[str],
        domains: Mapping[str, DomainDocument],
    ) -> None:
        """Refresh the flow, domain and system results in one call."""
        if flow is not None:
            self.validate_flow(flow)
        if domain_id:
            self.validate_domain(domain_id, domains)
        self.validate_system(domains)

    def get_flow_result(self, key: str) -> Optional[ValidationResult]:
        with self._lock:
            return self._flow_results.get(key)

    def get_domain_result(self, domain_id: str) -> Optional[ValidationResult]:
        with self._lock:
            return self._domain_results.get(domain_id)

    @property
    def system_result(self) -> Optional[ValidationResult]:
        with self._lock:
            return self._system_result

    def get_node_issues(self, key: str, node_id: str) -> List[ValidationIssue]:
        """Issues of a cached flow result that point at one node."""
        result = self.get_flow_result(key)
        if result is None:
            return []
        return [i for i in result.issues if i.node_id == node_id]

    def check_implement_gate(self, flow_id: str, domain_id: str) -> ImplementGateState:
        """Gate on the cached results; does not re-validate."""
        with self._lock:
            flow_result = self._flow_results.get(flow_key(domain_id, flow_id))
            domain_result = self._domain_results.get(domain_id)
            system_result = self._system_result
        return check_implement_gate(flow_result, domain_result, system_result)

    def reset(self) -> None:
        with self._lock:
            self._flow_results.clear()
            self._domain_results.clear()
            self._system_result = None
