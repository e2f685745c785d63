"""Document model for flows and domains.

Re-exports the public types so callers can write:

    from dddflow.model import FlowDocument, NodeKind, DomainDocument
"""

from .domain import (
    DomainDocument,
    DomainFlowEntry,
    EventWiring,
    domain_document_from_dict,
    domain_id_from_name,
    empty_domain_document,
)
from .flow import (
    NODE_SPEC_TYPES,
    AgentGroupMember,
    AgentGroupSpec,
    AgentLoopSpec,
    ApprovalOption,
    Connection,
    DataStoreSpec,
    DecisionSpec,
    EventNodeSpec,
    FlowDocument,
    FlowKind,
    FlowNode,
    GuardrailCheck,
    GuardrailSpec,
    HandoffSpec,
    HandoffTarget,
    HumanGateSpec,
    InputField,
    InputSpec,
    LlmCallSpec,
    LlmRouting,
    LoopSpec,
    NodeKind,
    OrchestratorAgent,
    OrchestratorSpec,
    ParallelSpec,
    Position,
    ProcessSpec,
    ServiceCallSpec,
    SmartRouterRule,
    SmartRouterSpec,
    SubFlowSpec,
    TerminalSpec,
    ToolDefinition,
    TriggerSpec,
    default_flow_document,
    flow_document_from_dict,
    flow_document_to_dict,
    flow_node_from_dict,
    record_to_dict,
)

__all__ = [
    "NODE_SPEC_TYPES",
    "AgentGroupMember",
    "AgentGroupSpec",
    "AgentLoopSpec",
    "ApprovalOption",
    "Connection",
    "DataStoreSpec",
    "DecisionSpec",
    "DomainDocument",
    "DomainFlowEntry",
    "EventNodeSpec",
    "EventWiring",
    "FlowDocument",
    "FlowKind",
    "FlowNode",
    "GuardrailCheck",
    "GuardrailSpec",
    "HandoffSpec",
    "HandoffTarget",
    "HumanGateSpec",
    "InputField",
    "InputSpec",
    "LlmCallSpec",
    "LlmRouting",
    "LoopSpec",
    "NodeKind",
    "OrchestratorAgent",
    "OrchestratorSpec",
    "ParallelSpec",
    "Position",
    "ProcessSpec",
    "ServiceCallSpec",
    "SmartRouterRule",
    "SmartRouterSpec",
    "SubFlowSpec",
    "TerminalSpec",
    "ToolDefinition",
    "TriggerSpec",
    "default_flow_document",
    "domain_document_from_dict",
    "domain_id_from_name",
    "empty_domain_document",
    "flow_document_from_dict",
    "flow_document_to_dict",
    "flow_node_from_dict",
    "record_to_dict",
]
