"""
Dependency Statistics
Aggregates per-node cycle chains into a ranked report
"""

from typing import Dict, Mapping, Optional
import logging

import networkx as nx

from .cycle_detector import MAX_DEPTH, find_cycles
from .graph_builder import to_networkx
from .models import AnalysisReport, DependencyGraph, NodeDependencyInfo

logger = logging.getLogger(__name__)


def rank_nodes(infos: Mapping[str, NodeDependencyInfo]) -> Dict[str, NodeDependencyInfo]:
    """Order nodes by circular dependency count, highest first, then by name"""
    ranked = sorted(infos.items(), key=lambda item: (-item[1].circular_dependency_count, item[0]))
    return dict(ranked)


def analyze_node(graph: DependencyGraph, name: str, max_depth: int = MAX_DEPTH) -> NodeDependencyInfo:
    dependencies = tuple(sorted(graph.get(name) or ()))
    cycles = find_cycles(graph, name, max_depth)

    # the count is the number of flattened chain elements, not the number of chains
    descriptions = tuple(element for chain in cycles for element in chain)
    return NodeDependencyInfo(
        injected_count=len(dependencies),
        injected_names=dependencies,
        circular_dependency_count=len(descriptions),
        circular_dependency_descriptions=descriptions,
        cycles=tuple(cycles),
    )


def build_report(graph: DependencyGraph, max_depth: int = MAX_DEPTH) -> AnalysisReport:
    """Analyze every node of ``graph`` and rank them by how entangled they are

    The total is the sum of all per-node counts, so a cycle shared by
    several nodes contributes once for each of them.
    """
    infos = {}
    for name in sorted(graph):
        info = analyze_node(graph, name, max_depth)
        if info.has_cycles:
            logger.debug(f"{name}: {info.cycle_count} chains, count {info.circular_dependency_count}")
        infos[name] = info

    total = sum(info.circular_dependency_count for info in infos.values())
    logger.info(f"Analyzed {len(infos)} nodes, total circular dependency count {total}")
    return AnalysisReport(total_circular_dependency_count=total, dependency_map=rank_nodes(infos))


def summarize_report(report: AnalysisReport, graph: Optional[DependencyGraph] = None) -> Dict:
    """Headline numbers for a report, optionally with graph-level facts"""
    entangled = report.entangled_nodes()
    summary = {
        'total_nodes': len(report),
        'entangled_nodes': len(entangled),
        'total_circular_dependency_count': report.total_circular_dependency_count,
        'most_entangled': entangled[0] if entangled else None,
        'total_cycle_chains': sum(info.cycle_count for info in report.dependency_map.values()),
    }

    if graph is not None:
        digraph = to_networkx(graph)
        summary['total_edges'] = digraph.number_of_edges()
        summary['is_dag'] = nx.is_directed_acyclic_graph(digraph)

    return summary
