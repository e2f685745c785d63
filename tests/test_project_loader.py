"""Tests for loading a project from disk."""

import json

import pytest

from dddflow.config.project_loader import ProjectRegistry
from dddflow.validator.flow_validator import validate_flow

from conftest import valid_flow_yaml, write_project


class TestProjectRegistry:
    """Tests for ProjectRegistry loading."""

    def test_loads_domains_and_flows(self, sample_project):
        registry = ProjectRegistry(sample_project)

        assert registry.domain_ids == ["accounts", "billing"]
        assert [f.key for f in registry.flows] == ["accounts/signup", "billing/open-account"]
        assert registry.get_domain("billing").consumes_events[0].event == "accounts.user.created"
        assert registry.get_flow("accounts", "signup").trigger.spec.event == "user.signed_up"
        assert [f.id for f in registry.get_domain_flows("billing")] == ["open-account"]

    def test_loaded_flows_validate(self, sample_project):
        registry = ProjectRegistry(sample_project)
        assert all(validate_flow(f).is_valid for f in registry.flows)

    def test_domain_id_from_manifest_name(self, tmp_path):
        root = write_project(
            tmp_path,
            {"order-fulfilment": {"name": "Order Fulfilment"}},
            manifest=[{"name": "Order Fulfilment"}],
        )
        assert ProjectRegistry(root).domain_ids == ["order-fulfilment"]

    def test_flow_domain_forced_to_owner(self, tmp_path):
        flow = valid_flow_yaml("signup", "somewhere-else")
        root = write_project(
            tmp_path,
            {"accounts": {"name": "Accounts", "flows": [{"id": "signup", "name": "Signup"}]}},
            {"accounts": {"signup": flow}},
        )
        assert ProjectRegistry(root).get_flow("accounts", "signup").domain == "accounts"

    def test_domains_returns_copy(self, sample_project):
        registry = ProjectRegistry(sample_project)
        registry.domains.clear()
        assert len(registry.domains) == 2

    def test_custom_specs_dir_from_env(self, tmp_path, monkeypatch):
        root = write_project(
            tmp_path,
            {"accounts": {"name": "Accounts", "flows": [{"id": "signup", "name": "Signup"}]}},
            {"accounts": {"signup": valid_flow_yaml("signup", "accounts")}},
            specs_dir="design",
        )
        monkeypatch.setenv("DDDFLOW_SPECS_DIR", "design")

        assert [f.key for f in ProjectRegistry(root).flows] == ["accounts/signup"]


class TestLoaderFallbacks:
    """Tests for missing and malformed files."""

    def test_missing_project_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ProjectRegistry(tmp_path / "nope")

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="manifest"):
            ProjectRegistry(tmp_path)

    def test_invalid_manifest_json(self, tmp_path):
        (tmp_path / "ddd-project.json").write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON"):
            ProjectRegistry(tmp_path)

    def test_missing_domain_yaml_uses_empty_domain(self, tmp_path, caplog):
        (tmp_path / "ddd-project.json").write_text(
            json.dumps({"domains": [{"name": "Billing", "description": "Money"}]})
        )
        registry = ProjectRegistry(tmp_path)

        billing = registry.get_domain("billing")
        assert billing.name == "Billing"
        assert billing.description == "Money"
        assert billing.flows == ()
        assert "domain.yaml missing" in caplog.text

    def test_unparseable_domain_yaml_uses_empty_domain(self, tmp_path):
        root = write_project(tmp_path, {"billing": {"name": "Billing"}})
        (root / "specs" / "domains" / "billing" / "domain.yaml").write_text("flows: [unclosed")

        assert ProjectRegistry(root).get_domain("billing").flows == ()

    def test_missing_flow_file_is_skipped(self, tmp_path):
        root = write_project(
            tmp_path,
            {"accounts": {"name": "Accounts", "flows": [{"id": "signup", "name": "Signup"}]}},
        )
        registry = ProjectRegistry(root)

        assert registry.flows == []
        assert registry.get_flow("accounts", "signup") is None

    def test_malformed_flow_raises(self, tmp_path):
        bad = valid_flow_yaml("signup", "accounts")
        bad["nodes"][0]["type"] = "teleport"
        root = write_project(
            tmp_path,
            {"accounts": {"name": "Accounts", "flows": [{"id": "signup", "name": "Signup"}]}},
            {"accounts": {"signup": bad}},
        )
        with pytest.raises(ValueError, match="Malformed flow"):
            ProjectRegistry(root)

    def test_manifest_entry_without_name_is_skipped(self, tmp_path):
        (tmp_path / "ddd-project.json").write_text(json.dumps({"domains": [{"description": "x"}, "junk"]}))
        assert ProjectRegistry(tmp_path).domain_ids == []
