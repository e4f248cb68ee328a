"""
Cycle Detector
Finds the circular dependency chains that lead back to a node, up to a maximum search depth
"""

import networkx as nx
from typing import Dict, Iterator, List
import logging

from .graph_builder import to_networkx
from .models import CycleChain, DependencyGraph

logger = logging.getLogger(__name__)

MAX_DEPTH = 20

_EXHAUSTED = object()


def iter_cycles(graph: DependencyGraph, target: str, max_depth: int = MAX_DEPTH) -> Iterator[CycleChain]:
    """Yield every chain that starts at ``target`` and depends its way back to it.

    The search is a depth-first walk over ``target``'s dependencies. A chain
    ``(target, *path, dep, target)`` is recorded whenever ``dep`` directly
    depends on ``target`` and ``target`` is not already part of the path, so
    a loop that passes back through the target is reported only once per
    branch. Nodes without dependencies of their own (or missing from the
    graph) are leaves and are never descended into.

    The path is kept per branch rather than globally visited, so the same
    cycle reached through different intermediate nodes is reported once per
    route. Descending stops once the next depth would exceed ``max_depth``;
    the root dependencies sit at depth 1.

    Dependencies are walked in sorted order, which makes the output order
    reproducible for the same graph.
    """
    if max_depth < 1:
        return

    # each frame: remaining dependencies, path so far, depth of the frame
    stack = [(iter(sorted(graph.get(target) or ())), (), 1)]
    while stack:
        remaining, chain, depth = stack[-1]
        dep = next(remaining, _EXHAUSTED)
        if dep is _EXHAUSTED:
            stack.pop()
            continue

        deps_of_dep = graph.get(dep)
        if not deps_of_dep:
            continue

        if target in deps_of_dep and target not in chain:
            yield (target,) + chain + (dep, target)

        if depth + 1 <= max_depth:
            # the path is an ordered set, a repeated node keeps its first position
            next_chain = chain if dep in chain else chain + (dep,)
            stack.append((iter(sorted(deps_of_dep)), next_chain, depth + 1))


def find_cycles(graph: DependencyGraph, target: str, max_depth: int = MAX_DEPTH) -> List[CycleChain]:
    """All cycle chains through ``target`` in discovery order, see :func:`iter_cycles`"""
    return list(iter_cycles(graph, target, max_depth))


class CycleDetector:
    """Runs cycle searches against one dependency graph"""

    def __init__(self, graph: DependencyGraph, max_depth: int = MAX_DEPTH):
        self.graph = graph
        self.max_depth = max_depth

    def find_cycles(self, target: str) -> List[CycleChain]:
        """Cycle chains leading back to a single node"""
        return find_cycles(self.graph, target, self.max_depth)

    def detect_all_cycles(self) -> Dict[str, List[CycleChain]]:
        """Cycle chains for every node, keyed by node name in sorted order"""
        cycles = {name: self.find_cycles(name) for name in sorted(self.graph)}
        found = sum(len(chains) for chains in cycles.values())
        logger.info(f"Found {found} cycle chains across {len(cycles)} nodes (max depth {self.max_depth})")
        return cycles

    def find_strongly_connected_components(self) -> List[List[str]]:
        """Strongly connected components that can hold a cycle

        Only components with more than one node, or a single node with a
        self-loop, are returned. Every node that reports a cycle chain
        belongs to one of these.
        """
        digraph = to_networkx(self.graph)
        significant_sccs = []
        for scc in nx.strongly_connected_components(digraph):
            if len(scc) > 1:
                significant_sccs.append(sorted(scc))
            else:
                node = next(iter(scc))
                if digraph.has_edge(node, node):
                    significant_sccs.append([node])

        significant_sccs.sort(key=lambda scc: (-len(scc), scc[0]))
        logger.debug(f"Found {len(significant_sccs)} significant strongly connected components")
        return significant_sccs

    def is_dag(self) -> bool:
        """Check if the graph is a Directed Acyclic Graph (DAG)"""
        return nx.is_directed_acyclic_graph(to_networkx(self.graph))
