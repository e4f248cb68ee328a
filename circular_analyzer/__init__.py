"""
Circular dependency analysis
Finds dependency chains that loop back to a node and ranks nodes by how entangled they are
"""

from .models import AnalysisReport, CycleChain, DependencyGraph, NodeDependencyInfo
from .cycle_detector import MAX_DEPTH, CycleDetector, find_cycles, iter_cycles
from .statistics import build_report, rank_nodes, summarize_report
from .graph_builder import DependencyGraphBuilder, graph_stats, to_networkx
from .report import format_circles, print_circles, report_to_dataframe
from .visualizer import DependencyVisualizer

__all__ = [
    'AnalysisReport', 'CycleChain', 'DependencyGraph', 'NodeDependencyInfo',
    'MAX_DEPTH', 'CycleDetector', 'find_cycles', 'iter_cycles',
    'build_report', 'rank_nodes', 'summarize_report',
    'DependencyGraphBuilder', 'graph_stats', 'to_networkx',
    'format_circles', 'print_circles', 'report_to_dataframe',
    'DependencyVisualizer',
]
