"""
Validation endpoints for the flow editor.

Provides REST endpoints for:
- Validating a flow, a domain, or the whole system's event wiring
- Reading the implement gate from the cached results
- Looking up the issues attached to one node of a cached flow result

Documents are posted in their persisted shape (the same mappings stored in
flow and domain YAML files). Handlers are plain ``def`` so FastAPI runs them
in its thread pool; the shared ValidationStore is lock-guarded.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, HTTPException, Request
from pydantic import BaseModel, Field

from dddflow.model.domain import DomainDocument, domain_document_from_dict
from dddflow.model.flow import flow_document_from_dict
from dddflow.validator.gate import ValidationStore, flow_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/validation", tags=["validation"])


# =============================================================================
# Pydantic Models
# =============================================================================


class DomainValidationRequest(BaseModel):
    """Request for domain validation."""

    domain: Dict[str, Any] = Field(..., description="Domain document as stored in domain.yaml")
    all_domains: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict,
        description="Domain id -> domain document for the rest of the project",
    )


class SystemValidationRequest(BaseModel):
    """Request for system validation."""

    domains: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict,
        description="Domain id -> domain document for every domain in the project",
    )


class NodeIssuesResponse(BaseModel):
    """Issues of a cached flow result that point at one node."""

    flow_key: str
    node_id: str
    issues: List[Dict[str, Any]]


# =============================================================================
# Helpers
# =============================================================================


def get_store(request: Request) -> ValidationStore:
    return request.app.state.validation_store


def _invalid_document(e: ValueError) -> HTTPException:
    logger.info("Rejected malformed document: %s", e)
    return HTTPException(
        status_code=422,
        detail={"error": "invalid_document", "message": str(e)},
    )


def _parse_domains(raw: Dict[str, Dict[str, Any]]) -> Dict[str, DomainDocument]:
    try:
        return {domain_id: domain_document_from_dict(data) for domain_id, data in raw.items()}
    except ValueError as e:
        raise _invalid_document(e) from e


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/flow")
def validate_flow(request: Request, document: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Validate one flow document and cache the result under "<domain>/<flow>"."""
    try:
        flow = flow_document_from_dict(document)
    except ValueError as e:
        raise _invalid_document(e) from e
    return get_store(request).validate_flow(flow).to_dict()


@router.post("/domain/{domain_id}")
def validate_domain(request: Request, domain_id: str, body: DomainValidationRequest) -> Dict[str, Any]:
    """Validate one domain document and cache the result under its id."""
    domains = _parse_domains(body.all_domains)
    try:
        domains[domain_id] = domain_document_from_dict(body.domain)
    except ValueError as e:
        raise _invalid_document(e) from e
    result = get_store(request).validate_domain(domain_id, domains)
    return result.to_dict()


@router.post("/system")
def validate_system(request: Request, body: SystemValidationRequest) -> Dict[str, Any]:
    """Validate event wiring across the posted domains and cache the result."""
    domains = _parse_domains(body.domains)
    return get_store(request).validate_system(domains).to_dict()


@router.get("/gate")
def implement_gate(request: Request, flow_id: str, domain_id: str) -> Dict[str, Any]:
    """Implement gate for a flow, derived from cached results only."""
    return get_store(request).check_implement_gate(flow_id, domain_id).to_dict()


@router.get("/flows/{domain_id}/{flow_id}/nodes/{node_id}/issues", response_model=NodeIssuesResponse)
def node_issues(request: Request, domain_id: str, flow_id: str, node_id: str) -> NodeIssuesResponse:
    key = flow_key(domain_id, flow_id)
    issues = get_store(request).get_node_issues(key, node_id)
    return NodeIssuesResponse(
        flow_key=key,
        node_id=node_id,
        issues=[i.to_dict() for i in issues],
    )


@router.delete("")
def reset_results(request: Request) -> Dict[str, str]:
    """Drop every cached result."""
    get_store(request).reset()
    return {"status": "reset"}
