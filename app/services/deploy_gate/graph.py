"""
Deploy Gate Graph.

Builds the LangGraph StateGraph for one status event. Every node may end the
run with a SKIP verdict; only a MERGE_ONLY or DEPLOY verdict reaches dispatch.
"""

from langgraph.graph import StateGraph, START, END

from app.schemas.enums import Decision
from app.services.deploy_gate.state import PipelineState
from app.services.deploy_gate.context import Ctx
from app.services.deploy_gate.nodes import (
    read_status_event,
    locate_pull_request,
    inspect_history,
    evaluate_policy,
    dispatch_actions,
)


def route_on_verdict(state: PipelineState) -> str:
    if state.verdict is not None and state.verdict.decision == Decision.SKIP:
        return "skip"
    return "continue"


# 1. Initialize Graph with context schema
workflow = StateGraph(PipelineState, context_schema=Ctx)

# 2. Add Nodes
workflow.add_node("read_status_event", read_status_event)
workflow.add_node("locate_pull_request", locate_pull_request)
workflow.add_node("inspect_history", inspect_history)
workflow.add_node("evaluate_policy", evaluate_policy)
workflow.add_node("dispatch_actions", dispatch_actions)

# 3. Add Edges
workflow.add_edge(START, "read_status_event")
workflow.add_conditional_edges(
    "read_status_event",
    route_on_verdict,
    {"continue": "locate_pull_request", "skip": END},
)
workflow.add_edge("locate_pull_request", "inspect_history")
workflow.add_conditional_edges(
    "inspect_history",
    route_on_verdict,
    {"continue": "evaluate_policy", "skip": END},
)
workflow.add_conditional_edges(
    "evaluate_policy",
    route_on_verdict,
    {"continue": "dispatch_actions", "skip": END},
)
workflow.add_edge("dispatch_actions", END)

# 4. Compile
deploy_gate_graph = workflow.compile()
