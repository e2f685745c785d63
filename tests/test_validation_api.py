"""Tests for the validation REST API."""

import pytest
from fastapi.testclient import TestClient

from dddflow.api import create_app
from dddflow.validator.gate import ValidationStore

from conftest import valid_flow_yaml


@pytest.fixture
def store():
    return ValidationStore()


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store))


def _broken_flow():
    flow = valid_flow_yaml("signup", "accounts")
    flow["trigger"]["spec"] = {}
    return flow


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestFlowValidation:
    """Tests for POST /api/validation/flow."""

    def test_valid_flow(self, client, store):
        response = client.post("/api/validation/flow", json=valid_flow_yaml("signup", "accounts"))

        assert response.status_code == 200
        data = response.json()
        assert data["scope"] == "flow"
        assert data["targetId"] == "accounts/signup"
        assert data["isValid"] is True
        assert store.get_flow_result("accounts/signup") is not None

    def test_invalid_flow_result(self, client):
        data = client.post("/api/validation/flow", json=_broken_flow()).json()

        assert data["errorCount"] == 1
        assert data["issues"][0]["message"] == "Trigger must have an event defined"

    def test_unknown_node_type_is_422(self, client):
        flow = valid_flow_yaml("signup", "accounts")
        flow["nodes"][0]["type"] = "teleport"
        response = client.post("/api/validation/flow", json=flow)

        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "invalid_document"
        assert "teleport" in response.json()["detail"]["message"]

    def _parallel_flow(self, spec):
        flow = valid_flow_yaml("fanout", "accounts")
        flow["nodes"][0]["type"] = "parallel"
        flow["nodes"][0]["spec"] = spec
        return flow

    def test_non_list_branches_is_422(self, client):
        response = client.post("/api/validation/flow", json=self._parallel_flow({"branches": 3}))

        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "invalid_document"
        assert "branches" in response.json()["detail"]["message"]

    def test_numeric_string_join_count_accepted(self, client):
        spec = {"branches": ["email", "sms"], "join": "n_of", "join_count": "2"}
        response = client.post("/api/validation/flow", json=self._parallel_flow(spec))

        assert response.status_code == 200
        assert response.json()["isValid"] is True

    def test_false_string_terminal_tool_is_reported(self, client):
        flow = valid_flow_yaml("support", "accounts")
        flow["flow"]["type"] = "agent"
        flow["nodes"][0]["type"] = "agent_loop"
        flow["nodes"][0]["spec"] = {
            "model": "claude-sonnet",
            "max_iterations": 5,
            "tools": [{"name": "reply", "is_terminal": "false"}],
        }
        data = client.post("/api/validation/flow", json=flow).json()

        assert data["errorCount"] == 1
        assert "no terminal tool" in data["issues"][0]["message"]


class TestDomainAndSystemValidation:
    """Tests for domain and system endpoints."""

    def test_domain_duplicates(self, client):
        body = {"domain": {"name": "Orders", "flows": [{"id": "a", "name": "A"}, {"id": "a", "name": "A"}]}}
        data = client.post("/api/validation/domain/orders", json=body).json()

        assert data["targetId"] == "orders"
        assert data["errorCount"] == 1

    def test_malformed_domain_is_422(self, client):
        body = {"domain": {"name": "Orders", "publishes_events": [{"schema": "x"}]}}
        response = client.post("/api/validation/domain/orders", json=body)

        assert response.status_code == 422

    def test_system(self, client):
        body = {
            "domains": {
                "orders": {"name": "Orders", "publishes_events": [{"event": "orders.placed"}]},
                "billing": {"name": "Billing", "consumes_events": [{"event": "payments.captured"}]},
            }
        }
        data = client.post("/api/validation/system", json=body).json()

        assert data["targetId"] == "system"
        assert data["errorCount"] == 1
        assert data["warningCount"] == 1


class TestGateAndCache:
    """Tests for the gate, node issues and reset endpoints."""

    def test_gate_blocks_after_failed_flow(self, client):
        client.post("/api/validation/flow", json=_broken_flow())
        data = client.get("/api/validation/gate", params={"flow_id": "signup", "domain_id": "accounts"}).json()

        assert data["canImplement"] is False
        assert data["flowValidation"]["errorCount"] == 1
        assert data["systemValidation"] is None

    def test_gate_without_results(self, client):
        data = client.get("/api/validation/gate", params={"flow_id": "x", "domain_id": "y"}).json()
        assert data["canImplement"] is True

    def test_node_issues(self, client):
        client.post("/api/validation/flow", json=_broken_flow())
        data = client.get("/api/validation/flows/accounts/signup/nodes/trigger-1/issues").json()

        assert data["flow_key"] == "accounts/signup"
        assert len(data["issues"]) == 1
        assert data["issues"][0]["nodeId"] == "trigger-1"

    def test_reset(self, client, store):
        client.post("/api/validation/flow", json=_broken_flow())
        response = client.delete("/api/validation")

        assert response.status_code == 200
        assert store.get_flow_result("accounts/signup") is None
