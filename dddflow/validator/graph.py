"""
graph.py - Graph algorithms over a flow's connection graph.

The adjacency view maps every node id (trigger included) to the target ids of
its outgoing connections. Targets that name removed or unknown nodes are kept;
the traversals below treat them as nodes with no outgoing edges.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Set

from dddflow.model.flow import FlowDocument

Adjacency = Dict[str, List[str]]


def build_adjacency(flow: FlowDocument) -> Adjacency:
    """Map each node id to the target ids of its outgoing connections."""
    return {
        node.id: [c.target_node_id for c in node.connections]
        for node in flow.all_nodes
    }


def bfs_reachable(start_id: str, adjacency: Adjacency) -> Set[str]:
    """Return every id reachable from ``start_id``, including itself."""
    visited: Set[str] = set()
    queue = deque([start_id])
    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        for neighbor in adjacency.get(current, []):
            if neighbor not in visited:
                queue.append(neighbor)
    return visited


def has_cycle(start_id: str, adjacency: Adjacency) -> bool:
    """Depth-first search for a back edge reachable from ``start_id``.

    ``on_stack`` holds the ids on the current DFS path and is kept separate
    from ``visited``; an edge into ``on_stack`` closes a cycle. Only existence
    is reported, not the nodes forming the cycle.
    """
    visited: Set[str] = set()
    on_stack: Set[str] = set()
    # Explicit stack of (node, iterator over its neighbors) instead of recursion
    stack = [(start_id, iter(adjacency.get(start_id, [])))]
    visited.add(start_id)
    on_stack.add(start_id)

    while stack:
        node_id, neighbors = stack[-1]
        advanced = False
        for neighbor in neighbors:
            if neighbor in on_stack:
                return True
            if neighbor not in visited:
                visited.add(neighbor)
                on_stack.add(neighbor)
                stack.append((neighbor, iter(adjacency.get(neighbor, []))))
                advanced = True
                break
        if not advanced:
            stack.pop()
            on_stack.discard(node_id)

    return False
