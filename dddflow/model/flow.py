"""
flow.py - Dataclasses for flow documents and their typed node specs.

A flow is a node graph rooted at a single trigger node. Every node carries a
kind-specific spec record; keys the editor stores that are not part of a
spec's known fields are preserved in the record's ``extra`` map so a document
survives a parse/dump round trip unchanged.

Usage:
    from dddflow.model.flow import flow_document_from_dict

    with open(path) as f:
        flow = flow_document_from_dict(yaml.safe_load(f))
    for node in flow.all_nodes:
        print(node.id, node.kind.value)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from ._ids import generate_node_id
from ._time import utc_now_iso

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """Closed set of node kinds a flow graph may contain."""
    TRIGGER = "trigger"
    INPUT = "input"
    PROCESS = "process"
    DECISION = "decision"
    TERMINAL = "terminal"
    DATA_STORE = "data_store"
    SERVICE_CALL = "service_call"
    EVENT = "event"
    LOOP = "loop"
    PARALLEL = "parallel"
    SUB_FLOW = "sub_flow"
    LLM_CALL = "llm_call"
    AGENT_LOOP = "agent_loop"
    GUARDRAIL = "guardrail"
    HUMAN_GATE = "human_gate"
    ORCHESTRATOR = "orchestrator"
    SMART_ROUTER = "smart_router"
    HANDOFF = "handoff"
    AGENT_GROUP = "agent_group"


class FlowKind(Enum):
    """Flow flavour. Agent flows are allowed to contain cycles."""
    TRADITIONAL = "traditional"
    AGENT = "agent"


# =============================================================================
# Record parsing helpers
# =============================================================================


def _many(item_cls: Type[Any]) -> Callable[[Any], Tuple[Any, ...]]:
    """Build a parser turning a list of mappings into a tuple of records."""

    def parse(value: Any) -> Tuple[Any, ...]:
        if not isinstance(value, list):
            raise ValueError(f"Expected a list for {item_cls.__name__} entries, got {type(value).__name__}")
        return tuple(record_from_dict(item_cls, item) for item in value)

    return parse


def _one(item_cls: Type[Any]) -> Callable[[Any], Any]:
    return lambda value: record_from_dict(item_cls, value)


def _key(name: str) -> Dict[str, Any]:
    return {"key": name}


_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def _strings(value: Any) -> Tuple[str, ...]:
    """A list of scalars as a tuple of strings."""
    if not isinstance(value, list):
        raise ValueError(f"expected a list, got {type(value).__name__}")
    if any(isinstance(v, (dict, list)) for v in value):
        raise ValueError("expected a list of scalar values")
    return tuple(str(v) for v in value)


def _int(value: Any) -> int:
    """Integers, or strings holding one. Booleans are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"expected an integer, got {value!r}")


def _float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise ValueError(f"expected a number, got {value!r}")


def _bool(value: Any) -> bool:
    """Booleans, or the usual YAML spellings of one ("false", "yes", ...)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError(f"expected a boolean, got {value!r}")


def record_from_dict(cls: Type[Any], data: Any) -> Any:
    """Parse a spec record dataclass from a mapping.

    Known fields are read by their persisted key (``metadata["key"]`` when it
    differs from the attribute name) and converted with ``metadata["parse"]``
    when present. Remaining keys land in ``extra``.

    Raises:
        ValueError: If ``data`` is not a mapping or a field has the wrong type.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping for {cls.__name__}, got {type(data).__name__}")

    values: Dict[str, Any] = {}
    known = set()
    for f in fields(cls):
        if f.name == "extra":
            continue
        key = f.metadata.get("key", f.name)
        known.add(key)
        if data.get(key) is None:
            continue
        parse = f.metadata.get("parse")
        if parse is None:
            values[f.name] = data[key]
            continue
        try:
            values[f.name] = parse(data[key])
        except ValueError as e:
            raise ValueError(f"{cls.__name__}.{key}: {e}") from e

    extra = {k: v for k, v in data.items() if k not in known}
    return cls(extra=extra, **values)


def record_to_dict(record: Any) -> Dict[str, Any]:
    """Dump a spec record back to its persisted mapping shape.

    None-valued fields are omitted; ``extra`` keys are merged back in.
    """
    result: Dict[str, Any] = {}
    for f in fields(record):
        if f.name == "extra":
            continue
        value = getattr(record, f.name)
        if value is None:
            continue
        result[f.metadata.get("key", f.name)] = _dump_value(value)
    result.update(record.extra)
    return result


def _dump_value(value: Any) -> Any:
    if is_dataclass(value):
        return record_to_dict(value)
    if isinstance(value, tuple):
        return [_dump_value(v) for v in value]
    return value


# =============================================================================
# Nested spec components
# =============================================================================


@dataclass(frozen=True)
class InputField:
    """A field collected by an input node."""
    name: Optional[str] = None
    type: Optional[str] = None
    required: Optional[bool] = field(default=None, metadata={"parse": _bool})
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolDefinition:
    """A tool an agent loop may call. Terminal tools end the loop."""
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    parameters: Optional[str] = None
    implementation: Optional[str] = None
    is_terminal: Optional[bool] = field(default=None, metadata={"parse": _bool})
    requires_confirmation: Optional[bool] = field(default=None, metadata={"parse": _bool})
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GuardrailCheck:
    type: Optional[str] = None
    action: Optional[str] = None  # "block" | "warn" | "log"
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ApprovalOption:
    id: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    requires_input: Optional[bool] = field(default=None, metadata={"parse": _bool})
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class OrchestratorAgent:
    id: Optional[str] = None
    flow: Optional[str] = None
    specialization: Optional[str] = None
    priority: Optional[int] = field(default=None, metadata={"parse": _int})
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SmartRouterRule:
    id: Optional[str] = None
    condition: Optional[str] = None
    route: Optional[str] = None
    priority: Optional[int] = field(default=None, metadata={"parse": _int})
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class LlmRouting:
    """LLM-based routing for a smart router; replaces explicit rules when enabled."""
    enabled: Optional[bool] = field(default=None, metadata={"parse": _bool})
    model: Optional[str] = None
    routing_prompt: Optional[str] = None
    confidence_threshold: Optional[float] = field(default=None, metadata={"parse": _float})
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class HandoffTarget:
    flow: Optional[str] = None
    domain: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AgentGroupMember:
    flow: Optional[str] = None
    domain: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Per-kind node specs
# =============================================================================


@dataclass(frozen=True)
class TriggerSpec:
    event: Optional[str] = None
    source: Optional[str] = None
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class InputSpec:
    fields: Tuple[InputField, ...] = field(default=(), metadata={"parse": _many(InputField)})
    validation: Optional[str] = None
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProcessSpec:
    action: Optional[str] = None
    service: Optional[str] = None
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DecisionSpec:
    condition: Optional[str] = None
    true_label: Optional[str] = field(default=None, metadata=_key("trueLabel"))
    false_label: Optional[str] = field(default=None, metadata=_key("falseLabel"))
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TerminalSpec:
    outcome: Optional[str] = None
    status: Optional[int] = field(default=None, metadata={"parse": _int})
    body: Optional[Dict[str, Any]] = None
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DataStoreSpec:
    operation: Optional[str] = None  # "create" | "read" | "update" | "delete"
    model: Optional[str] = None
    data: Optional[Dict[str, str]] = None
    query: Optional[Dict[str, str]] = None
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ServiceCallSpec:
    method: Optional[str] = None  # "GET" | "POST" | "PUT" | "PATCH" | "DELETE"
    url: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    body: Optional[Dict[str, Any]] = None
    timeout_ms: Optional[int] = field(default=None, metadata={"parse": _int})
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EventNodeSpec:
    direction: Optional[str] = None  # "emit" | "consume"
    event_name: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None
    is_async: Optional[bool] = field(default=None, metadata={"key": "async", "parse": _bool})
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class LoopSpec:
    collection: Optional[str] = None
    iterator: Optional[str] = None
    break_condition: Optional[str] = None
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ParallelSpec:
    branches: Tuple[str, ...] = field(default=(), metadata={"parse": _strings})
    join: Optional[str] = None  # "all" | "any" | "n_of"
    join_count: Optional[int] = field(default=None, metadata={"parse": _int})
    timeout_ms: Optional[int] = field(default=None, metadata={"parse": _int})
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SubFlowSpec:
    flow_ref: Optional[str] = None  # "domain/flow-id"
    input_mapping: Optional[Dict[str, str]] = None
    output_mapping: Optional[Dict[str, str]] = None
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class LlmCallSpec:
    model: Optional[str] = None
    system_prompt: Optional[str] = None
    prompt_template: Optional[str] = None
    temperature: Optional[float] = field(default=None, metadata={"parse": _float})
    max_tokens: Optional[int] = field(default=None, metadata={"parse": _int})
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AgentLoopSpec:
    model: Optional[str] = None
    system_prompt: Optional[str] = None
    max_iterations: Optional[int] = field(default=None, metadata={"parse": _int})
    temperature: Optional[float] = field(default=None, metadata={"parse": _float})
    stop_conditions: Tuple[str, ...] = field(default=(), metadata={"parse": _strings})
    tools: Tuple[ToolDefinition, ...] = field(default=(), metadata={"parse": _many(ToolDefinition)})
    on_max_iterations: Optional[str] = None  # "escalate" | "respond" | "error"
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GuardrailSpec:
    position: Optional[str] = None  # "input" | "output"
    checks: Tuple[GuardrailCheck, ...] = field(default=(), metadata={"parse": _many(GuardrailCheck)})
    on_block: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class HumanGateSpec:
    notification_channels: Tuple[str, ...] = field(default=(), metadata={"parse": _strings})
    approval_options: Tuple[ApprovalOption, ...] = field(
        default=(), metadata={"parse": _many(ApprovalOption)}
    )
    timeout: Optional[Dict[str, Any]] = None
    context_for_human: Tuple[str, ...] = field(default=(), metadata={"parse": _strings})
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class OrchestratorSpec:
    strategy: Optional[str] = None  # supervisor | round_robin | broadcast | consensus
    model: Optional[str] = None
    supervisor_prompt: Optional[str] = None
    agents: Tuple[OrchestratorAgent, ...] = field(default=(), metadata={"parse": _many(OrchestratorAgent)})
    fallback_chain: Tuple[str, ...] = field(default=(), metadata={"parse": _strings})
    result_merge_strategy: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SmartRouterSpec:
    rules: Tuple[SmartRouterRule, ...] = field(default=(), metadata={"parse": _many(SmartRouterRule)})
    llm_routing: Optional[LlmRouting] = field(default=None, metadata={"parse": _one(LlmRouting)})
    fallback_chain: Tuple[str, ...] = field(default=(), metadata={"parse": _strings})
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class HandoffSpec:
    mode: Optional[str] = None  # "transfer" | "consult" | "collaborate"
    target: Optional[HandoffTarget] = field(default=None, metadata={"parse": _one(HandoffTarget)})
    notify_customer: Optional[bool] = field(default=None, metadata={"parse": _bool})
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AgentGroupSpec:
    name: Optional[str] = None
    description: Optional[str] = None
    members: Tuple[AgentGroupMember, ...] = field(default=(), metadata={"parse": _many(AgentGroupMember)})
    extra: Dict[str, Any] = field(default_factory=dict)


NODE_SPEC_TYPES: Dict[NodeKind, Type[Any]] = {
    NodeKind.TRIGGER: TriggerSpec,
    NodeKind.INPUT: InputSpec,
    NodeKind.PROCESS: ProcessSpec,
    NodeKind.DECISION: DecisionSpec,
    NodeKind.TERMINAL: TerminalSpec,
    NodeKind.DATA_STORE: DataStoreSpec,
    NodeKind.SERVICE_CALL: ServiceCallSpec,
    NodeKind.EVENT: EventNodeSpec,
    NodeKind.LOOP: LoopSpec,
    NodeKind.PARALLEL: ParallelSpec,
    NodeKind.SUB_FLOW: SubFlowSpec,
    NodeKind.LLM_CALL: LlmCallSpec,
    NodeKind.AGENT_LOOP: AgentLoopSpec,
    NodeKind.GUARDRAIL: GuardrailSpec,
    NodeKind.HUMAN_GATE: HumanGateSpec,
    NodeKind.ORCHESTRATOR: OrchestratorSpec,
    NodeKind.SMART_ROUTER: SmartRouterSpec,
    NodeKind.HANDOFF: HandoffSpec,
    NodeKind.AGENT_GROUP: AgentGroupSpec,
}

_missing_specs = set(NodeKind) - set(NODE_SPEC_TYPES)
if _missing_specs:
    raise RuntimeError(f"Node kinds without a spec type: {sorted(k.value for k in _missing_specs)}")


# =============================================================================
# Graph structures
# =============================================================================


@dataclass(frozen=True)
class Position:
    """Canvas position. Presentation only."""
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Connection:
    """An outgoing edge. Handles disambiguate edges leaving the same node."""
    target_node_id: str
    source_handle: Optional[str] = None
    target_handle: Optional[str] = None


@dataclass(frozen=True)
class FlowNode:
    """A node in a flow graph.

    Attributes:
        id: Stable identifier, unique within the flow.
        kind: Node kind; selects the spec type and validation rules.
        spec: Kind-specific spec record (see NODE_SPEC_TYPES).
        label: Human label shown on the canvas and in messages.
        position: Canvas position, ignored by validation.
        connections: Outgoing edges.
        parent_id: Containing group node, if any.
    """
    id: str
    kind: NodeKind
    spec: Any
    label: str = ""
    position: Position = field(default_factory=Position)
    connections: Tuple[Connection, ...] = ()
    parent_id: Optional[str] = None


@dataclass(frozen=True)
class FlowDocument:
    """A flow graph: one trigger plus the remaining nodes.

    ``trigger`` is None only for malformed documents; the flow validator
    reports that as a finding rather than failing.
    """
    id: str
    name: str
    domain: str
    kind: FlowKind = FlowKind.TRADITIONAL
    trigger: Optional[FlowNode] = None
    nodes: Tuple[FlowNode, ...] = ()
    description: Optional[str] = None
    created: str = ""
    modified: str = ""

    @property
    def all_nodes(self) -> List[FlowNode]:
        """Trigger followed by the node list; connections may target either."""
        if self.trigger is None:
            return list(self.nodes)
        return [self.trigger, *self.nodes]

    @property
    def key(self) -> str:
        """Cache key for this flow: "<domain>/<flow id>"."""
        return f"{self.domain}/{self.id}"


# =============================================================================
# Parsing
# =============================================================================


def _list_field(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def node_spec_from_dict(kind: NodeKind, data: Any) -> Any:
    """Parse the spec record for a node kind."""
    return record_from_dict(NODE_SPEC_TYPES[kind], data)


def connection_from_dict(data: Dict[str, Any]) -> Connection:
    if not isinstance(data, dict) or not data.get("targetNodeId"):
        raise ValueError(f"Connection is missing targetNodeId: {data!r}")
    return Connection(
        target_node_id=str(data["targetNodeId"]),
        source_handle=data.get("sourceHandle"),
        target_handle=data.get("targetHandle"),
    )


def flow_node_from_dict(data: Dict[str, Any], default_kind: Optional[str] = None) -> FlowNode:
    """Parse a FlowNode from its persisted mapping.

    Raises:
        ValueError: If the node has no id or an unknown type.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping for a flow node, got {type(data).__name__}")
    if not data.get("id"):
        raise ValueError(f"Flow node is missing an id: {data!r}")

    kind_str = data.get("type", default_kind)
    try:
        kind = NodeKind(kind_str)
    except ValueError:
        raise ValueError(f"Node '{data['id']}' has unknown type {kind_str!r}") from None

    pos = data.get("position") or {}
    if not isinstance(pos, dict):
        raise ValueError(f"Node '{data['id']}' position must be a mapping, got {type(pos).__name__}")
    return FlowNode(
        id=str(data["id"]),
        kind=kind,
        spec=node_spec_from_dict(kind, data.get("spec")),
        label=str(data.get("label") or ""),
        position=Position(x=pos.get("x", 0.0), y=pos.get("y", 0.0)),
        connections=tuple(connection_from_dict(c) for c in _list_field(data, "connections")),
        parent_id=data.get("parentId"),
    )


def flow_document_from_dict(data: Dict[str, Any]) -> FlowDocument:
    """Parse a FlowDocument from a dictionary (e.g., YAML load).

    A missing ``trigger`` key is tolerated and yields ``trigger=None``.

    Raises:
        ValueError: If the document or its ``flow`` header is malformed.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping for a flow document, got {type(data).__name__}")
    header = data.get("flow")
    if not isinstance(header, dict) or not header.get("id"):
        raise ValueError("Flow document is missing its 'flow' header or flow id")

    kind_str = header.get("type", FlowKind.TRADITIONAL.value)
    try:
        kind = FlowKind(kind_str)
    except ValueError:
        logger.warning("Flow '%s' has unknown type %r, treating as traditional", header["id"], kind_str)
        kind = FlowKind.TRADITIONAL

    trigger_data = data.get("trigger")
    trigger = flow_node_from_dict(trigger_data, default_kind="trigger") if trigger_data else None
    metadata = data.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise ValueError(f"Flow '{header['id']}' metadata must be a mapping")

    return FlowDocument(
        id=str(header["id"]),
        name=header.get("name", header["id"]),
        domain=header.get("domain", ""),
        kind=kind,
        trigger=trigger,
        nodes=tuple(flow_node_from_dict(n) for n in _list_field(data, "nodes")),
        description=header.get("description"),
        created=metadata.get("created", ""),
        modified=metadata.get("modified", ""),
    )


def flow_node_to_dict(node: FlowNode) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "id": node.id,
        "type": node.kind.value,
        "position": {"x": node.position.x, "y": node.position.y},
        "connections": [
            {
                k: v
                for k, v in (
                    ("targetNodeId", c.target_node_id),
                    ("sourceHandle", c.source_handle),
                    ("targetHandle", c.target_handle),
                )
                if v is not None
            }
            for c in node.connections
        ],
        "spec": record_to_dict(node.spec),
        "label": node.label,
    }
    if node.parent_id:
        result["parentId"] = node.parent_id
    return result


def flow_document_to_dict(flow: FlowDocument) -> Dict[str, Any]:
    """Dump a FlowDocument back to the persisted YAML shape."""
    header: Dict[str, Any] = {
        "id": flow.id,
        "name": flow.name,
        "type": flow.kind.value,
        "domain": flow.domain,
    }
    if flow.description:
        header["description"] = flow.description
    result: Dict[str, Any] = {"flow": header}
    if flow.trigger is not None:
        result["trigger"] = flow_node_to_dict(flow.trigger)
    result["nodes"] = [flow_node_to_dict(n) for n in flow.nodes]
    result["metadata"] = {"created": flow.created, "modified": flow.modified}
    return result


def default_flow_document(
    domain_id: str,
    flow_id: str,
    name: Optional[str] = None,
    kind: FlowKind = FlowKind.TRADITIONAL,
) -> FlowDocument:
    """Create the document the editor starts from when a flow is first opened.

    Traditional flows hold just an unconfigured trigger. Agent flows also get
    an agent_loop node wired from the trigger.
    """
    now = utc_now_iso()
    nodes: Tuple[FlowNode, ...] = ()
    connections: Tuple[Connection, ...] = ()

    if kind == FlowKind.AGENT:
        agent_node = FlowNode(
            id=generate_node_id(NodeKind.AGENT_LOOP.value),
            kind=NodeKind.AGENT_LOOP,
            spec=AgentLoopSpec(
                model="claude-sonnet",
                max_iterations=10,
                temperature=0.7,
                on_max_iterations="respond",
            ),
            label="Agent Loop",
            position=Position(x=200, y=200),
        )
        nodes = (agent_node,)
        connections = (Connection(target_node_id=agent_node.id),)

    trigger = FlowNode(
        id=generate_node_id(NodeKind.TRIGGER.value),
        kind=NodeKind.TRIGGER,
        spec=TriggerSpec(),
        label="Trigger",
        position=Position(x=250, y=50),
        connections=connections,
    )
    return FlowDocument(
        id=flow_id,
        name=name or flow_id,
        domain=domain_id,
        kind=kind,
        trigger=trigger,
        nodes=nodes,
        created=now,
        modified=now,
    )
