"""
project_loader.py - Read-only loading of a flow design project from disk.

Layout (specs dir configurable, see validation_config):

    <project>/ddd-project.json                         {"domains": [{"name", "description"}]}
    <project>/specs/domains/<domain-id>/domain.yaml
    <project>/specs/domains/<domain-id>/flows/<flow-id>.yaml

Domain ids are derived from domain names ("Order Fulfilment" -> "order-fulfilment").
A missing or unreadable domain.yaml falls back to an empty domain so the
rest of the project still validates.

Usage:
    from dddflow.config.project_loader import ProjectRegistry

    registry = ProjectRegistry(Path("my-project"))
    for flow in registry.flows:
        ...
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from dddflow.model.domain import (
    DomainDocument,
    domain_document_from_dict,
    domain_id_from_name,
    empty_domain_document,
)
from dddflow.model.flow import FlowDocument, flow_document_from_dict

from .validation_config import get_project_file, get_specs_dir

logger = logging.getLogger(__name__)


class ProjectRegistry:
    """Domains and flows of one project, loaded once at construction."""

    def __init__(self, project_root: Path, specs_dir: Optional[str] = None):
        """Load the project.

        Raises:
            FileNotFoundError: If the project directory or manifest is missing.
            ValueError: If the manifest is not valid JSON or a flow file
                cannot be parsed.
        """
        self.project_root = Path(project_root)
        self.specs_root = self.project_root / (specs_dir or get_specs_dir())

        if not self.project_root.is_dir():
            raise FileNotFoundError(f"Project directory not found: {self.project_root}")

        self._domains: Dict[str, DomainDocument] = {}
        self._flows: Dict[str, FlowDocument] = {}
        self._domain_flows: Dict[str, List[str]] = {}

        for entry in self._load_manifest():
            name = entry.get("name", "") if isinstance(entry, dict) else ""
            if not name:
                logger.warning("Skipping domain entry without a name in %s", get_project_file())
                continue
            domain_id = domain_id_from_name(name)
            domain = self._load_domain(domain_id, name, entry.get("description"))
            self._domains[domain_id] = domain
            self._domain_flows[domain_id] = []

            for flow_entry in domain.flows:
                key = f"{domain_id}/{flow_entry.id}"
                if key in self._flows:
                    continue
                flow = self._load_flow(domain_id, flow_entry.id)
                if flow is not None:
                    self._flows[key] = flow
                    self._domain_flows[domain_id].append(key)

        logger.debug(
            "Loaded project %s: %d domain(s), %d flow(s)",
            self.project_root,
            len(self._domains),
            len(self._flows),
        )

    def _load_manifest(self) -> List[Dict]:
        manifest_path = self.project_root / get_project_file()
        if not manifest_path.exists():
            raise FileNotFoundError(f"Project manifest not found: {manifest_path}")
        try:
            with open(manifest_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in project manifest {manifest_path}: {e}") from e
        return list(data.get("domains") or []) if isinstance(data, dict) else []

    def domain_dir(self, domain_id: str) -> Path:
        return self.specs_root / "domains" / domain_id

    def _load_domain(self, domain_id: str, name: str, description: Optional[str]) -> DomainDocument:
        domain_path = self.domain_dir(domain_id) / "domain.yaml"
        if not domain_path.exists():
            logger.warning("domain.yaml missing for %s, using an empty domain", domain_id)
            return empty_domain_document(name, description)
        try:
            with open(domain_path, "r", encoding="utf-8") as f:
                return domain_document_from_dict(yaml.safe_load(f) or {})
        except (yaml.YAMLError, ValueError) as e:
            logger.warning("Could not parse %s, using an empty domain: %s", domain_path, e)
            return empty_domain_document(name, description)

    def _load_flow(self, domain_id: str, flow_id: str) -> Optional[FlowDocument]:
        flow_path = self.domain_dir(domain_id) / "flows" / f"{flow_id}.yaml"
        if not flow_path.exists():
            logger.warning("Flow file missing for %s/%s: %s", domain_id, flow_id, flow_path)
            return None
        try:
            with open(flow_path, "r", encoding="utf-8") as f:
                flow = flow_document_from_dict(yaml.safe_load(f) or {})
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in flow {flow_path}: {e}") from e
        except ValueError as e:
            raise ValueError(f"Malformed flow {flow_path}: {e}") from e

        if flow.domain != domain_id:
            flow = replace(flow, domain=domain_id)
        return flow

    @property
    def domain_ids(self) -> List[str]:
        return list(self._domains)

    @property
    def domains(self) -> Dict[str, DomainDocument]:
        """Domain id -> document. Returns a copy."""
        return dict(self._domains)

    @property
    def flows(self) -> List[FlowDocument]:
        return list(self._flows.values())

    def get_domain(self, domain_id: str) -> Optional[DomainDocument]:
        return self._domains.get(domain_id)

    def get_flow(self, domain_id: str, flow_id: str) -> Optional[FlowDocument]:
        return self._flows.get(f"{domain_id}/{flow_id}")

    def get_domain_flows(self, domain_id: str) -> List[FlowDocument]:
        return [self._flows[key] for key in self._domain_flows.get(domain_id, [])]
