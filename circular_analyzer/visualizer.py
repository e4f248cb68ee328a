"""
Dependency Visualizer
Creates interactive visualizations for dependency graphs and their ranked cycles
"""

import plotly.graph_objects as go
import networkx as nx
from typing import Dict, List, Set, Tuple
import streamlit as st
import logging

from .models import AnalysisReport
from .report import report_to_dataframe

logger = logging.getLogger(__name__)


class DependencyVisualizer:
    """Creates interactive visualizations for a dependency analysis report"""

    def __init__(self, graph: nx.DiGraph):
        self.graph = graph
        self.layout_cache = {}

    def create_dependency_graph_plot(self, report: AnalysisReport) -> go.Figure:
        """Create an interactive dependency graph, cycle edges in red"""
        if self.graph.number_of_nodes() == 0:
            return self._create_empty_plot("No dependencies to visualize")

        pos = self._get_graph_layout()
        cycle_edges = self._get_cycle_edges(report)

        node_trace = self._create_node_trace(pos, report)
        edge_traces = self._create_edge_traces(pos, cycle_edges)

        return go.Figure(data=edge_traces + [node_trace], layout=self._get_plot_layout())

    def _get_graph_layout(self) -> Dict:
        """Calculate graph layout using spring algorithm"""
        if 'spring' not in self.layout_cache:
            if self.graph.number_of_nodes() > 100:
                # For large graphs, use a faster algorithm
                pos = nx.spring_layout(self.graph, k=1, iterations=20, seed=42)
            else:
                pos = nx.spring_layout(self.graph, k=2, iterations=50, seed=42)
            self.layout_cache['spring'] = pos

        return self.layout_cache['spring']

    def _get_cycle_edges(self, report: AnalysisReport) -> Set[Tuple[str, str]]:
        cycle_edges = set()
        for info in report.dependency_map.values():
            for chain in info.cycles:
                cycle_edges.update(zip(chain, chain[1:]))
        return cycle_edges

    def _create_node_trace(self, pos: Dict, report: AnalysisReport) -> go.Scatter:
        node_x = []
        node_y = []
        node_labels = []
        node_text = []
        node_colors = []
        node_sizes = []

        for node in self.graph.nodes():
            if node not in pos:
                continue
            x, y = pos[node]
            node_x.append(x)
            node_y.append(y)
            node_labels.append(node)

            info = report.get(node)
            count = info.circular_dependency_count if info else 0
            color, size = self._get_node_style(node, count)
            node_colors.append(color)
            node_sizes.append(size)

            hover_text = f"<b>{node}</b><br>"
            hover_text += f"Dependencies: {self.graph.out_degree(node)}<br>"
            hover_text += f"Dependents: {self.graph.in_degree(node)}"
            if info is None:
                hover_text += "<br><i>Not declared, treated as leaf</i>"
            elif count:
                hover_text += f"<br><b>⚠️ {info.cycle_count} cycle chains (count {count})</b>"
            node_text.append(hover_text)

        return go.Scatter(
            x=node_x, y=node_y,
            mode='markers+text',
            text=node_labels,
            textposition="middle center",
            textfont=dict(size=8),
            hovertemplate='%{hovertext}<extra></extra>',
            hovertext=node_text,
            marker=dict(
                size=node_sizes,
                color=node_colors,
                line=dict(width=2, color='white'),
                opacity=0.8
            ),
            name="Nodes"
        )

    def _get_node_style(self, node: str, count: int) -> Tuple[str, int]:
        """Node color from its circular dependency count, size from its degree"""
        size = 15
        degree = self.graph.degree(node)
        if degree > 10:
            size = 25
        elif degree > 5:
            size = 20

        if count >= 10:
            color = '#FF4444'
        elif count > 0:
            color = '#FF8800'
        else:
            color = '#44AA44'

        return color, size

    def _create_edge_traces(self, pos: Dict, cycle_edges: Set[Tuple[str, str]]) -> List[go.Scatter]:
        edge_traces = []

        regular_edge_x = []
        regular_edge_y = []
        cycle_edge_x = []
        cycle_edge_y = []

        for edge in self.graph.edges():
            x0, y0 = pos.get(edge[0], (0, 0))
            x1, y1 = pos.get(edge[1], (0, 0))

            if edge in cycle_edges:
                cycle_edge_x.extend([x0, x1, None])
                cycle_edge_y.extend([y0, y1, None])
            else:
                regular_edge_x.extend([x0, x1, None])
                regular_edge_y.extend([y0, y1, None])

        if regular_edge_x:
            edge_traces.append(go.Scatter(
                x=regular_edge_x, y=regular_edge_y,
                line=dict(width=1, color='#888'),
                hoverinfo='none',
                mode='lines',
                name="Dependencies"
            ))

        if cycle_edge_x:
            edge_traces.append(go.Scatter(
                x=cycle_edge_x, y=cycle_edge_y,
                line=dict(width=3, color='#FF4444'),
                hoverinfo='none',
                mode='lines',
                name="Cycle Dependencies"
            ))

        return edge_traces

    def _get_plot_layout(self) -> dict:
        return dict(
            title=dict(text="Dependency Graph", font=dict(size=16)),
            showlegend=True,
            hovermode='closest',
            margin=dict(b=20, l=5, r=5, t=40),
            annotations=[dict(
                text="Hover over nodes for details. Red edges lie on a cycle.",
                showarrow=False,
                xref="paper", yref="paper",
                x=0.005, y=-0.002,
                xanchor='left', yanchor='bottom',
                font=dict(color="#888", size=12)
            )],
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            plot_bgcolor='white'
        )

    def _create_empty_plot(self, message: str) -> go.Figure:
        """Create an empty plot with a message"""
        fig = go.Figure()
        fig.add_annotation(
            text=message,
            xref="paper", yref="paper",
            x=0.5, y=0.5,
            showarrow=False,
            font=dict(size=16, color="gray")
        )
        fig.update_layout(
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            plot_bgcolor='white'
        )
        return fig

    def create_ranking_chart(self, report: AnalysisReport, top_n: int = 25) -> go.Figure:
        """Horizontal bar chart of the most entangled nodes"""
        ranked = [(name, info) for name, info in report.top(top_n) if info.has_cycles]
        if not ranked:
            return self._create_empty_plot("No circular dependencies detected")

        # plotly draws the first bar at the bottom
        names = [name for name, _ in reversed(ranked)]
        counts = [info.circular_dependency_count for _, info in reversed(ranked)]

        fig = go.Figure(data=[
            go.Bar(
                x=counts,
                y=names,
                orientation='h',
                marker_color='#FF8800',
                text=counts,
                textposition='auto',
            )
        ])
        fig.update_layout(
            title=f"Most Entangled Nodes (top {len(ranked)})",
            xaxis_title="Circular Dependency Count",
            yaxis_title="Node",
            plot_bgcolor='white'
        )
        return fig

    def display_ranking_table(self, report: AnalysisReport):
        """Display the ranking in a table"""
        if len(report) == 0:
            st.info("The dependency graph is empty.")
            return

        df = report_to_dataframe(report)

        def style_count(val):
            if val >= 10:
                return 'background-color: #ffebee'
            if val > 0:
                return 'background-color: #fff3e0'
            return ''

        styled_df = df.style.map(style_count, subset=['circular_dependency_count'])
        st.dataframe(styled_df, use_container_width=True)

    def display_circle_details(self, report: AnalysisReport):
        """One expander per entangled node with its injected names and cycle chains"""
        entangled = report.entangled_nodes()
        if not entangled:
            st.success("🎉 No circular dependencies found! Your dependency graph is healthy.")
            return

        for name in entangled:
            info = report.dependency_map[name]
            with st.expander(f"== #{info.circular_dependency_count} {name}"):
                st.write(f"**Injected**: {', '.join(info.injected_names)}")
                for chain in info.cycles:
                    st.write(f"- {' → '.join(chain)}")
