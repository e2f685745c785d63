"""
Test fixtures and utilities for dddflow tests.

Provides on-disk project fixtures for loader/CLI tests and isolates every test
from DDDFLOW_* environment variables and the cached validation config.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import yaml

# Make tests/flow_builders.py importable from every test module
_tests_dir = Path(__file__).parent
if str(_tests_dir) not in sys.path:
    sys.path.insert(0, str(_tests_dir))

from dddflow.config.validation_config import reset_config_cache  # noqa: E402

_ENV_VARS = ("DDDFLOW_SPECS_DIR", "DDDFLOW_PROJECT_FILE", "DDDFLOW_STRICT", "DDDFLOW_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Run each test against the packaged validation.yaml with no env overrides."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


# ============================================================================
# On-disk project fixtures
# ============================================================================


def write_project(
    root: Path,
    domains: Dict[str, Dict[str, Any]],
    flows: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None,
    manifest: Optional[List[Dict[str, Any]]] = None,
    specs_dir: str = "specs",
) -> Path:
    """Write a project tree.

    Args:
        root: Project root (created if needed).
        domains: Domain id -> domain.yaml content.
        flows: Domain id -> flow id -> flow YAML content.
        manifest: Domain entries for ddd-project.json. Defaults to one entry
            per domain, named after its ``name`` field.
        specs_dir: Specs directory name relative to ``root``.
    """
    root.mkdir(parents=True, exist_ok=True)
    if manifest is None:
        manifest = [{"name": d.get("name", domain_id)} for domain_id, d in domains.items()]
    (root / "ddd-project.json").write_text(json.dumps({"name": "test", "domains": manifest}))

    for domain_id, domain in domains.items():
        domain_dir = root / specs_dir / "domains" / domain_id
        (domain_dir / "flows").mkdir(parents=True, exist_ok=True)
        (domain_dir / "domain.yaml").write_text(yaml.safe_dump(domain))
        for flow_id, flow in (flows or {}).get(domain_id, {}).items():
            (domain_dir / "flows" / f"{flow_id}.yaml").write_text(yaml.safe_dump(flow))
    return root


def valid_flow_yaml(flow_id: str, domain: str, event: str = "user.signed_up") -> Dict[str, Any]:
    """Persisted shape of a minimal valid flow: trigger -> process -> terminal."""
    return {
        "flow": {"id": flow_id, "name": flow_id.title(), "type": "traditional", "domain": domain},
        "trigger": {
            "id": "trigger-1",
            "type": "trigger",
            "position": {"x": 250, "y": 50},
            "connections": [{"targetNodeId": "process-1"}],
            "spec": {"event": event},
            "label": "Trigger",
        },
        "nodes": [
            {
                "id": "process-1",
                "type": "process",
                "position": {"x": 250, "y": 150},
                "connections": [{"targetNodeId": "terminal-1"}],
                "spec": {"action": "create_account"},
                "label": "Create account",
            },
            {
                "id": "terminal-1",
                "type": "terminal",
                "position": {"x": 250, "y": 250},
                "connections": [],
                "spec": {"outcome": "success"},
                "label": "Done",
            },
        ],
        "metadata": {"created": "2026-01-01T00:00:00Z", "modified": "2026-01-01T00:00:00Z"},
    }


@pytest.fixture
def sample_project(tmp_path) -> Path:
    """Two domains with matched event wiring and one valid flow each."""
    domains = {
        "accounts": {
            "name": "Accounts",
            "flows": [{"id": "signup", "name": "Signup", "type": "traditional"}],
            "publishes_events": [{"event": "accounts.user.created", "from_flow": "signup"}],
        },
        "billing": {
            "name": "Billing",
            "flows": [{"id": "open-account", "name": "Open Account"}],
            "consumes_events": [{"event": "accounts.user.created", "handled_by_flow": "open-account"}],
        },
    }
    flows = {
        "accounts": {"signup": valid_flow_yaml("signup", "accounts")},
        "billing": {"open-account": valid_flow_yaml("open-account", "billing", "accounts.user.created")},
    }
    return write_project(tmp_path / "project", domains, flows)
