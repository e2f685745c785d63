"""Tests for system-scope event wiring validation."""

from dddflow.validator.errors import Category, Scope, Severity
from dddflow.validator.system_validator import SYSTEM_TARGET_ID, check_event_naming, validate_system

from flow_builders import domain


class TestEventWiring:
    """Tests for publisher/consumer matching across domains."""

    def test_no_domains(self):
        result = validate_system({})

        assert result.issues == ()
        assert result.scope == Scope.SYSTEM
        assert result.target_id == SYSTEM_TARGET_ID == "system"

    def test_matched_event(self):
        domains = {
            "orders": domain("Orders", publishes=["orders.placed"]),
            "billing": domain("Billing", consumes=["orders.placed"]),
        }
        assert validate_system(domains).issues == ()

    def test_consumed_without_publisher_is_error(self):
        domains = {"billing": domain("Billing", consumes=["orders.placed"])}
        result = validate_system(domains)

        assert result.error_count == 1
        item = result.issues[0]
        assert item.severity == Severity.ERROR
        assert item.category == Category.EVENT_WIRING
        assert item.message == 'Event "orders.placed" is consumed by billing but no domain publishes it'

    def test_published_without_consumer_is_warning(self):
        domains = {"orders": domain("Orders", publishes=["orders.placed"])}
        result = validate_system(domains)

        assert result.error_count == 0
        assert result.warning_count == 1
        assert result.is_valid is True
        assert "is published by orders but no domain consumes it" in result.issues[0].message

    def test_all_publishers_listed_once(self):
        domains = {
            "orders": domain("Orders", publishes=["order.cancelled", "order.cancelled"]),
            "support": domain("Support", publishes=["order.cancelled"]),
        }
        result = validate_system(domains)

        assert result.warning_count == 1
        assert "published by orders, support but" in result.issues[0].message

    def test_self_published_and_consumed(self):
        """A domain consuming its own event is wired."""
        domains = {"orders": domain("Orders", publishes=["orders.placed"], consumes=["orders.placed"])}
        assert validate_system(domains).issues == ()


class TestEventNaming:
    """Tests for the mixed naming style warning."""

    def test_mixed_styles_warn_once(self):
        domains = {
            "orders": domain("Orders", publishes=["orders.placed", "orderShipped"]),
            "billing": domain("Billing", consumes=["orders.placed", "orderShipped"]),
        }
        result = validate_system(domains)

        assert result.warning_count == 1
        assert result.issues[0].message == "Inconsistent event naming: 1 use dot notation, 1 use camelCase"

    def test_event_in_both_maps_counted_once(self):
        issues = check_event_naming(["orders.placed", "orderShipped"])
        assert "1 use dot notation, 1 use camelCase" in issues[0].message

    def test_single_event_never_warns(self):
        assert check_event_naming(["orderShipped"]) == []

    def test_consistent_dot_notation(self):
        assert check_event_naming(["orders.placed", "orders.shipped"]) == []

    def test_plain_lowercase_is_neither_style(self):
        assert check_event_naming(["orders.placed", "shipped"]) == []
