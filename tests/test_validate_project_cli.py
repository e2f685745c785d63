"""Tests for the dddflow-validate command line tool.

Exit code contract:
    0 - passed
    1 - validation failed
    2 - fatal error
"""

import json

import pytest

from dddflow.tools.validate_project import (
    EXIT_FATAL_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_FAILED,
    main,
)

from conftest import valid_flow_yaml, write_project


def run_cli(*argv):
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    return exc_info.value.code


def _broken_flow(flow_id, domain):
    flow = valid_flow_yaml(flow_id, domain)
    flow["trigger"]["spec"] = {}
    return flow


@pytest.fixture
def warning_project(tmp_path):
    """Valid flows, but an event nobody consumes."""
    return write_project(
        tmp_path / "warn",
        {
            "orders": {
                "name": "Orders",
                "flows": [{"id": "checkout", "name": "Checkout"}],
                "publishes_events": [{"event": "orders.placed"}],
            }
        },
        {"orders": {"checkout": valid_flow_yaml("checkout", "orders")}},
    )


@pytest.fixture
def broken_billing_project(tmp_path):
    """Accounts is clean; billing has a flow whose trigger has no event."""
    return write_project(
        tmp_path / "broken",
        {
            "accounts": {"name": "Accounts", "flows": [{"id": "signup", "name": "Signup"}]},
            "billing": {"name": "Billing", "flows": [{"id": "invoice", "name": "Invoice"}]},
        },
        {
            "accounts": {"signup": valid_flow_yaml("signup", "accounts")},
            "billing": {"invoice": _broken_flow("invoice", "billing")},
        },
    )


class TestExitCodes:
    """Tests for the exit code contract."""

    def test_valid_project_passes(self, sample_project, capsys):
        assert run_cli(str(sample_project)) == EXIT_SUCCESS
        assert "Project validation PASSED." in capsys.readouterr().out

    def test_errors_fail(self, broken_billing_project, capsys):
        assert run_cli(str(broken_billing_project)) == EXIT_VALIDATION_FAILED

        err = capsys.readouterr().err
        assert "[FAIL] spec_completeness" in err
        assert "Trigger must have an event defined" in err
        assert "Project validation FAILED (1 errors)." in err

    def test_missing_project_is_fatal(self, tmp_path, capsys):
        assert run_cli(str(tmp_path / "nope")) == EXIT_FATAL_ERROR
        assert "ERROR:" in capsys.readouterr().err

    def test_unknown_domain_is_fatal(self, sample_project):
        assert run_cli(str(sample_project), "--domain", "shipping") == EXIT_FATAL_ERROR


class TestStrictMode:
    """Tests for warnings under --strict."""

    def test_warnings_pass_by_default(self, warning_project, capsys):
        assert run_cli(str(warning_project)) == EXIT_SUCCESS
        assert "Use --strict flag" in capsys.readouterr().err

    def test_wiring_pass_line_hidden_when_system_warns(self, warning_project, capsys):
        run_cli(str(warning_project))
        assert "Event wiring consistent" not in capsys.readouterr().out

    def test_wiring_pass_line_shown_when_clean(self, sample_project, capsys):
        run_cli(str(sample_project))
        assert "[PASS] Event wiring consistent across domains" in capsys.readouterr().out

    def test_strict_flag_fails_on_warnings(self, warning_project):
        assert run_cli(str(warning_project), "--strict") == EXIT_VALIDATION_FAILED

    def test_strict_from_environment(self, warning_project, monkeypatch):
        monkeypatch.setenv("DDDFLOW_STRICT", "1")
        assert run_cli(str(warning_project)) == EXIT_VALIDATION_FAILED


class TestDomainFilter:
    """Tests for --domain."""

    def test_filter_skips_other_domains(self, broken_billing_project):
        assert run_cli(str(broken_billing_project), "--domain", "accounts") == EXIT_SUCCESS

    def test_filter_selects_broken_domain(self, broken_billing_project):
        assert run_cli(str(broken_billing_project), "--domain", "billing") == EXIT_VALIDATION_FAILED


class TestJsonOutput:
    """Tests for --json output."""

    def test_json_structure(self, sample_project, capsys):
        assert run_cli(str(sample_project), "--json") == EXIT_SUCCESS

        output = json.loads(capsys.readouterr().out)
        assert output["summary"]["status"] == "PASS"
        assert output["summary"]["flows"] == 2
        assert output["summary"]["domains"] == 2
        assert set(output["flows"]) == {"accounts/signup", "billing/open-account"}
        assert output["flows"]["accounts/signup"]["isValid"] is True
        assert output["system"]["targetId"] == "system"

    def test_json_reports_failures(self, broken_billing_project, capsys):
        assert run_cli(str(broken_billing_project), "--json") == EXIT_VALIDATION_FAILED

        output = json.loads(capsys.readouterr().out)
        assert output["summary"]["status"] == "FAIL"
        assert output["summary"]["errors"] == 1
        issue = output["flows"]["billing/invoice"]["issues"][0]
        assert issue["nodeId"] == "trigger-1"
        assert issue["flowId"] == "invoice"
        assert issue["domainId"] == "billing"

    def test_json_fatal_error(self, tmp_path, capsys):
        assert run_cli(str(tmp_path), "--json") == EXIT_FATAL_ERROR

        output = json.loads(capsys.readouterr().out)
        assert output["summary"]["status"] == "ERROR"
        assert "manifest" in output["summary"]["message"]
