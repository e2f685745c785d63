"""
flow_validator.py - Flow-scope validation.

Runs graph completeness checks and the per-kind rule table over a single
flow document. Every check runs; a failing check never suppresses another.

Checks, in order:
1. Trigger exists
2. Every reachable path ends at a terminal (no dead ends)
3. No node is unreachable from the trigger
4. No cycles (traditional flows only; agent loops may revisit nodes)
5. Decisions wire both the true and false branches
6. Terminals have no outgoing connections (warning)
7. Core spec rules
8. Agent flow rules (agent flows only)
9. Orchestration rules
10. Extended node rules

Usage:
    from dddflow.validator.flow_validator import validate_flow

    result = validate_flow(flow)
    print(result.error_count, result.warning_count)
"""

from __future__ import annotations

import logging
from typing import List, Set

from dddflow.model.flow import FlowDocument, FlowKind, NodeKind

from .errors import Category, Scope, Severity, ValidationIssue, ValidationResult, build_result, issue
from .graph import bfs_reachable, build_adjacency, has_cycle
from .node_rules import RuleFamily, run_rule_family

logger = logging.getLogger(__name__)

# Loop and parallel nodes fan out through their spec, not only their edges
_DEAD_END_EXEMPT = {NodeKind.TERMINAL, NodeKind.LOOP, NodeKind.PARALLEL}


def _graph_issue(severity: Severity, message: str, **kwargs) -> ValidationIssue:
    return issue(Scope.FLOW, severity, Category.GRAPH_COMPLETENESS, message, **kwargs)


def _reachable_from_trigger(flow: FlowDocument) -> Set[str]:
    if flow.trigger is None:
        return set()
    return bfs_reachable(flow.trigger.id, build_adjacency(flow))


# =============================================================================
# Graph completeness checks
# =============================================================================


def check_trigger_exists(flow: FlowDocument) -> List[ValidationIssue]:
    if flow.trigger is None:
        return [_graph_issue(
            Severity.ERROR,
            "Flow must have a trigger node",
            suggestion="Add a trigger node to start the flow",
        )]
    return []


def check_all_paths_reach_terminal(flow: FlowDocument) -> List[ValidationIssue]:
    all_nodes = flow.all_nodes

    if not any(n.kind == NodeKind.TERMINAL for n in all_nodes):
        return [_graph_issue(
            Severity.ERROR,
            "Flow has no terminal nodes - all paths must end at a terminal",
            suggestion="Add a terminal node and connect your flow to it",
        )]

    issues: List[ValidationIssue] = []
    reachable = _reachable_from_trigger(flow)
    for node in all_nodes:
        if node.kind in _DEAD_END_EXEMPT or node.id not in reachable:
            continue
        if not node.connections:
            issues.append(_graph_issue(
                Severity.ERROR,
                f'Node "{node.label}" ({node.kind.value}) is a dead end with no outgoing connections',
                node_id=node.id,
                suggestion="Connect this node to a downstream node or terminal",
            ))
    return issues


def check_orphaned_nodes(flow: FlowDocument) -> List[ValidationIssue]:
    reachable = _reachable_from_trigger(flow)
    return [
        _graph_issue(
            Severity.ERROR,
            f'Node "{node.label}" ({node.kind.value}) is unreachable from the trigger',
            node_id=node.id,
            suggestion="Connect this node to the flow graph or remove it",
        )
        for node in flow.nodes
        if node.id not in reachable
    ]


def check_circular_paths(flow: FlowDocument) -> List[ValidationIssue]:
    if flow.kind == FlowKind.AGENT or flow.trigger is None:
        return []
    if has_cycle(flow.trigger.id, build_adjacency(flow)):
        return [_graph_issue(
            Severity.ERROR,
            "Flow contains a circular path (cycle detected)",
            suggestion="Remove the cycle or convert to an agent flow if loops are intentional",
        )]
    return []


def check_decision_branches(flow: FlowDocument) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for node in flow.all_nodes:
        if node.kind != NodeKind.DECISION:
            continue
        handles = {c.source_handle for c in node.connections}
        if "true" not in handles:
            issues.append(_graph_issue(
                Severity.ERROR,
                f'Decision "{node.label}" is missing a "Yes" (true) branch connection',
                node_id=node.id,
                suggestion='Connect the "Yes" handle to a downstream node',
            ))
        if "false" not in handles:
            issues.append(_graph_issue(
                Severity.ERROR,
                f'Decision "{node.label}" is missing a "No" (false) branch connection',
                node_id=node.id,
                suggestion='Connect the "No" handle to a downstream node',
            ))
    return issues


def check_terminal_no_outgoing(flow: FlowDocument) -> List[ValidationIssue]:
    return [
        _graph_issue(
            Severity.WARNING,
            f'Terminal "{node.label}" has outgoing connections - terminals should be endpoints',
            node_id=node.id,
            suggestion="Remove outgoing connections from this terminal node",
        )
        for node in flow.all_nodes
        if node.kind == NodeKind.TERMINAL and node.connections
    ]


# =============================================================================
# Agent flow checks
# =============================================================================


def check_agent_flow(flow: FlowDocument) -> List[ValidationIssue]:
    """Agent-only rules: one agent_loop per flow, then per-node agent rules."""
    if flow.kind != FlowKind.AGENT:
        return []

    issues: List[ValidationIssue] = []
    agent_loops = [n for n in flow.all_nodes if n.kind == NodeKind.AGENT_LOOP]

    if not agent_loops:
        issues.append(issue(
            Scope.FLOW, Severity.ERROR, Category.AGENT_VALIDATION,
            "Agent flow must have exactly one agent_loop node",
            suggestion="Add an agent_loop node from the toolbar",
        ))
    elif len(agent_loops) > 1:
        issues.append(issue(
            Scope.FLOW, Severity.WARNING, Category.AGENT_VALIDATION,
            f"Agent flow has {len(agent_loops)} agent_loop nodes - typically only one is expected",
        ))

    issues.extend(run_rule_family(RuleFamily.AGENT, flow.all_nodes))
    return issues


# =============================================================================
# Public: Flow validation
# =============================================================================


def validate_flow(flow: FlowDocument) -> ValidationResult:
    """Validate a single flow document.

    Args:
        flow: The flow to inspect. Not modified.

    Returns:
        A flow-scope ValidationResult targeting "<domain>/<flow id>". Every
        issue carries the flow id and domain id.
    """
    all_nodes = flow.all_nodes
    issues: List[ValidationIssue] = [
        *check_trigger_exists(flow),
        *check_all_paths_reach_terminal(flow),
        *check_orphaned_nodes(flow),
        *check_circular_paths(flow),
        *check_decision_branches(flow),
        *check_terminal_no_outgoing(flow),
        *run_rule_family(RuleFamily.CORE, all_nodes),
        *check_agent_flow(flow),
        *run_rule_family(RuleFamily.ORCHESTRATION, all_nodes),
        *run_rule_family(RuleFamily.EXTENDED, all_nodes),
    ]

    issues = [i.stamped(flow_id=flow.id, domain_id=flow.domain) for i in issues]
    result = build_result(Scope.FLOW, flow.key, issues)

    logger.debug(
        "Validated flow %s: %d error(s), %d warning(s)",
        result.target_id,
        result.error_count,
        result.warning_count,
    )
    return result
