"""
node_rules.py - Per-node-kind spec rules.

Every NodeKind maps to exactly one (family, rule) entry. The flow validator
runs the families in a fixed order:

- core: trigger, input, decision, process, terminal
- agent: agent_loop, guardrail, human_gate (agent flows only)
- orchestration: orchestrator, smart_router, handoff, agent_group
- extended: data_store, service_call, event, loop, parallel, sub_flow, llm_call

A missing required field is an error; an empty advisory field is a warning.
Structural rules keyed on connections (decision branches, terminal outgoing
edges) live in flow_validator, not here.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from dddflow.model.flow import (
    AgentGroupSpec,
    AgentLoopSpec,
    DataStoreSpec,
    DecisionSpec,
    EventNodeSpec,
    FlowNode,
    GuardrailSpec,
    HandoffSpec,
    HumanGateSpec,
    InputSpec,
    LlmCallSpec,
    LoopSpec,
    NodeKind,
    OrchestratorSpec,
    ParallelSpec,
    ProcessSpec,
    ServiceCallSpec,
    SmartRouterSpec,
    SubFlowSpec,
    TriggerSpec,
)

from .errors import Category, Scope, Severity, ValidationIssue, issue


class RuleFamily(Enum):
    CORE = "core"
    AGENT = "agent"
    ORCHESTRATION = "orchestration"
    EXTENDED = "extended"


NodeRule = Callable[[FlowNode], List[ValidationIssue]]


def is_blank(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    if value is None:
        return True
    return str(value).strip() == ""


def _node_issue(
    node: FlowNode,
    severity: Severity,
    category: Category,
    message: str,
    suggestion: Optional[str] = None,
) -> ValidationIssue:
    return issue(Scope.FLOW, severity, category, message, suggestion=suggestion, node_id=node.id)


def _spec_error(node: FlowNode, message: str, suggestion: str) -> ValidationIssue:
    return _node_issue(node, Severity.ERROR, Category.SPEC_COMPLETENESS, message, suggestion)


def _spec_warning(node: FlowNode, message: str, suggestion: str) -> ValidationIssue:
    return _node_issue(node, Severity.WARNING, Category.SPEC_COMPLETENESS, message, suggestion)


# =============================================================================
# Core rules
# =============================================================================


def check_trigger(node: FlowNode) -> List[ValidationIssue]:
    spec: TriggerSpec = node.spec
    if is_blank(spec.event):
        return [_spec_error(node, "Trigger must have an event defined", "Set the trigger event in the spec panel")]
    return []


def check_input(node: FlowNode) -> List[ValidationIssue]:
    spec: InputSpec = node.spec
    return [
        _spec_error(
            node,
            f'Input "{node.label}" field "{f.name}" is missing a type',
            "Set a type for each input field (e.g., string, number)",
        )
        for f in spec.fields
        if is_blank(f.type)
    ]


def check_decision(node: FlowNode) -> List[ValidationIssue]:
    spec: DecisionSpec = node.spec
    if is_blank(spec.condition):
        return [
            _spec_error(
                node,
                f'Decision "{node.label}" must have a condition defined',
                "Set the condition expression in the spec panel",
            )
        ]
    return []


def check_process(node: FlowNode) -> List[ValidationIssue]:
    spec: ProcessSpec = node.spec
    if is_blank(spec.description) and is_blank(spec.action):
        return [
            _spec_warning(
                node,
                f'Process "{node.label}" has no description or action defined',
                "Add a description or action to clarify what this process does",
            )
        ]
    return []


def no_spec_rules(node: FlowNode) -> List[ValidationIssue]:
    """Kinds whose checks are purely structural."""
    return []


# =============================================================================
# Agent rules
# =============================================================================


def check_agent_loop(node: FlowNode) -> List[ValidationIssue]:
    spec: AgentLoopSpec = node.spec
    issues: List[ValidationIssue] = []

    if not spec.tools:
        issues.append(_node_issue(
            node, Severity.ERROR, Category.AGENT_VALIDATION,
            f'Agent loop "{node.label}" has no tools defined',
            "Add at least one tool to the agent loop",
        ))
    elif not any(t.is_terminal for t in spec.tools):
        issues.append(_node_issue(
            node, Severity.ERROR, Category.AGENT_VALIDATION,
            f'Agent loop "{node.label}" has no terminal tool - the agent needs a way to finish',
            "Mark at least one tool as terminal (is_terminal: true)",
        ))

    if not spec.max_iterations:
        issues.append(_node_issue(
            node, Severity.WARNING, Category.AGENT_VALIDATION,
            f'Agent loop "{node.label}" has no max_iterations set',
            "Set max_iterations to prevent infinite loops",
        ))

    if is_blank(spec.model):
        issues.append(_node_issue(
            node, Severity.WARNING, Category.AGENT_VALIDATION,
            f'Agent loop "{node.label}" has no LLM model specified',
            "Set the model (e.g., claude-sonnet) in the spec panel",
        ))

    return issues


# Guardrail and human gate checks are project additions: advisory warnings
# only, never blocking the implement gate.
def check_guardrail(node: FlowNode) -> List[ValidationIssue]:
    spec: GuardrailSpec = node.spec
    if not spec.checks:
        return [_node_issue(
            node, Severity.WARNING, Category.AGENT_VALIDATION,
            f'Guardrail "{node.label}" has no checks defined',
            "Add at least one check (e.g., pii_detection, content_filter)",
        )]
    return []


def check_human_gate(node: FlowNode) -> List[ValidationIssue]:
    spec: HumanGateSpec = node.spec
    if not spec.approval_options:
        return [_node_issue(
            node, Severity.WARNING, Category.AGENT_VALIDATION,
            f'Human gate "{node.label}" has no approval options defined',
            "Add approval options (e.g., approve, reject) for the reviewer",
        )]
    return []


# =============================================================================
# Orchestration rules
# =============================================================================


def _orchestration_error(node: FlowNode, message: str, suggestion: str) -> ValidationIssue:
    return _node_issue(node, Severity.ERROR, Category.ORCHESTRATION_VALIDATION, message, suggestion)


def check_orchestrator(node: FlowNode) -> List[ValidationIssue]:
    spec: OrchestratorSpec = node.spec
    issues: List[ValidationIssue] = []
    if len(spec.agents) < 2:
        issues.append(_orchestration_error(
            node,
            f'Orchestrator "{node.label}" must have at least 2 agents',
            "Add agents to the orchestrator in the spec panel",
        ))
    if is_blank(spec.strategy):
        issues.append(_orchestration_error(
            node,
            f'Orchestrator "{node.label}" must have a strategy defined',
            "Set the strategy (supervisor, round_robin, broadcast, or consensus)",
        ))
    return issues


def check_smart_router(node: FlowNode) -> List[ValidationIssue]:
    spec: SmartRouterSpec = node.spec
    llm_enabled = bool(spec.llm_routing and spec.llm_routing.enabled)
    if not spec.rules and not llm_enabled:
        return [_orchestration_error(
            node,
            f'Smart router "{node.label}" has no rules defined',
            "Add routing rules or enable LLM routing",
        )]
    return []


def check_handoff(node: FlowNode) -> List[ValidationIssue]:
    spec: HandoffSpec = node.spec
    if spec.target is None or is_blank(spec.target.flow):
        return [_orchestration_error(
            node,
            f'Handoff "{node.label}" must have a target flow',
            "Set the target flow in the spec panel",
        )]
    return []


def check_agent_group(node: FlowNode) -> List[ValidationIssue]:
    spec: AgentGroupSpec = node.spec
    if len(spec.members) < 2:
        return [_orchestration_error(
            node,
            f'Agent group "{node.label}" must have at least 2 members',
            "Add members to the agent group in the spec panel",
        )]
    return []


# =============================================================================
# Extended (integration) rules
# =============================================================================


def check_data_store(node: FlowNode) -> List[ValidationIssue]:
    spec: DataStoreSpec = node.spec
    issues: List[ValidationIssue] = []
    if is_blank(spec.operation):
        issues.append(_spec_error(
            node,
            f'Data store "{node.label}" must have an operation set',
            "Set the operation (create, read, update, or delete)",
        ))
    if is_blank(spec.model):
        issues.append(_spec_error(
            node,
            f'Data store "{node.label}" must have a model defined',
            "Set the model name (e.g., User, Order)",
        ))
    return issues


def check_service_call(node: FlowNode) -> List[ValidationIssue]:
    spec: ServiceCallSpec = node.spec
    issues: List[ValidationIssue] = []
    if is_blank(spec.method):
        issues.append(_spec_error(
            node,
            f'Service call "{node.label}" must have a method set',
            "Set the HTTP method (GET, POST, PUT, PATCH, DELETE)",
        ))
    if is_blank(spec.url):
        issues.append(_spec_error(
            node,
            f'Service call "{node.label}" must have a URL defined',
            "Set the service URL",
        ))
    return issues


def check_event(node: FlowNode) -> List[ValidationIssue]:
    spec: EventNodeSpec = node.spec
    issues: List[ValidationIssue] = []
    if is_blank(spec.direction):
        issues.append(_spec_error(
            node,
            f'Event "{node.label}" must have a direction set',
            "Set the direction (emit or consume)",
        ))
    if is_blank(spec.event_name):
        issues.append(_spec_error(
            node,
            f'Event "{node.label}" must have an event name defined',
            "Set the event name",
        ))
    return issues


def check_loop(node: FlowNode) -> List[ValidationIssue]:
    spec: LoopSpec = node.spec
    issues: List[ValidationIssue] = []
    if is_blank(spec.collection):
        issues.append(_spec_error(
            node,
            f'Loop "{node.label}" must have a collection defined',
            "Set the collection to iterate over",
        ))
    if is_blank(spec.iterator):
        issues.append(_spec_error(
            node,
            f'Loop "{node.label}" must have an iterator variable defined',
            "Set the iterator variable name",
        ))
    return issues


def check_parallel(node: FlowNode) -> List[ValidationIssue]:
    spec: ParallelSpec = node.spec
    issues: List[ValidationIssue] = []
    if len(spec.branches) < 2:
        issues.append(_spec_error(
            node,
            f'Parallel "{node.label}" must have at least 2 branches',
            "Add at least 2 branches to the parallel node",
        ))
    if spec.join == "n_of" and (not spec.join_count or spec.join_count < 1):
        issues.append(_spec_error(
            node,
            f'Parallel "{node.label}" uses n_of join but join_count is not set',
            "Set join_count to specify how many branches must complete",
        ))
    return issues


def check_sub_flow(node: FlowNode) -> List[ValidationIssue]:
    spec: SubFlowSpec = node.spec
    if is_blank(spec.flow_ref):
        return [_spec_error(
            node,
            f'Sub-flow "{node.label}" must have a flow reference defined',
            "Set the flow_ref (e.g., domain/flow-id)",
        )]
    if "/" not in str(spec.flow_ref):
        return [_spec_warning(
            node,
            f'Sub-flow "{node.label}" flow_ref should be in domain/flow-id format',
            "Use the format domain/flow-id for the flow reference",
        )]
    return []


def check_llm_call(node: FlowNode) -> List[ValidationIssue]:
    spec: LlmCallSpec = node.spec
    issues: List[ValidationIssue] = []
    if is_blank(spec.model):
        issues.append(_spec_error(
            node,
            f'LLM call "{node.label}" must have a model specified',
            "Set the model (e.g., claude-sonnet, gpt-4o)",
        ))
    if is_blank(spec.prompt_template):
        issues.append(_spec_warning(
            node,
            f'LLM call "{node.label}" has no prompt template defined',
            "Set the prompt template with {{variables}} for dynamic content",
        ))
    return issues


# =============================================================================
# Rule table
# =============================================================================


NODE_RULES: Dict[NodeKind, Tuple[RuleFamily, NodeRule]] = {
    NodeKind.TRIGGER: (RuleFamily.CORE, check_trigger),
    NodeKind.INPUT: (RuleFamily.CORE, check_input),
    NodeKind.PROCESS: (RuleFamily.CORE, check_process),
    NodeKind.DECISION: (RuleFamily.CORE, check_decision),
    NodeKind.TERMINAL: (RuleFamily.CORE, no_spec_rules),
    NodeKind.DATA_STORE: (RuleFamily.EXTENDED, check_data_store),
    NodeKind.SERVICE_CALL: (RuleFamily.EXTENDED, check_service_call),
    NodeKind.EVENT: (RuleFamily.EXTENDED, check_event),
    NodeKind.LOOP: (RuleFamily.EXTENDED, check_loop),
    NodeKind.PARALLEL: (RuleFamily.EXTENDED, check_parallel),
    NodeKind.SUB_FLOW: (RuleFamily.EXTENDED, check_sub_flow),
    NodeKind.LLM_CALL: (RuleFamily.EXTENDED, check_llm_call),
    NodeKind.AGENT_LOOP: (RuleFamily.AGENT, check_agent_loop),
    NodeKind.GUARDRAIL: (RuleFamily.AGENT, check_guardrail),
    NodeKind.HUMAN_GATE: (RuleFamily.AGENT, check_human_gate),
    NodeKind.ORCHESTRATOR: (RuleFamily.ORCHESTRATION, check_orchestrator),
    NodeKind.SMART_ROUTER: (RuleFamily.ORCHESTRATION, check_smart_router),
    NodeKind.HANDOFF: (RuleFamily.ORCHESTRATION, check_handoff),
    NodeKind.AGENT_GROUP: (RuleFamily.ORCHESTRATION, check_agent_group),
}

_missing_rules = set(NodeKind) - set(NODE_RULES)
if _missing_rules:
    raise RuntimeError(f"Node kinds without a validation rule: {sorted(k.value for k in _missing_rules)}")


def check_node(node: FlowNode) -> List[ValidationIssue]:
    """Run the rule registered for a node's kind."""
    _, rule = NODE_RULES[node.kind]
    return rule(node)


def run_rule_family(family: RuleFamily, nodes: Iterable[FlowNode]) -> List[ValidationIssue]:
    """Run the rules of one family over every node whose kind belongs to it."""
    issues: List[ValidationIssue] = []
    for node in nodes:
        node_family, rule = NODE_RULES[node.kind]
        if node_family == family:
            issues.extend(rule(node))
    return issues
