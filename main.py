import streamlit as st
from dataclasses import dataclass
from typing import Dict
import logging

from circular_analyzer import (
    AnalysisReport,
    CycleDetector,
    DependencyGraphBuilder,
    DependencyVisualizer,
    build_report,
    format_circles,
    graph_stats,
    summarize_report,
    to_networkx,
)
from circular_analyzer.config import Config

# Configure logging
logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# =============================================================================
# DATA MODELS
# =============================================================================

@dataclass
class DashboardResult:
    """Everything the dashboard shows for one analysis run"""
    graph: Dict
    report: AnalysisReport
    summary: Dict
    graph_stats: Dict
    max_depth: int


def run_analysis(file_content: str, file_type: str, max_depth: int) -> DashboardResult:
    graph_builder = DependencyGraphBuilder()
    if file_type == "package-lock.json":
        graph = graph_builder.from_package_lock(file_content)
    else:
        graph = graph_builder.from_json(file_content)

    report = build_report(graph, max_depth)
    return DashboardResult(
        graph=graph,
        report=report,
        summary=summarize_report(report, graph),
        graph_stats=graph_stats(graph),
        max_depth=max_depth,
    )


def main():
    st.set_page_config(page_title="Circular Dependency Analyzer", page_icon="🔁", layout="wide")

    st.markdown("""
        <style>
            .stMetric {
                border: 1px solid #2e2e2e;
                border-radius: 10px;
                padding: 10px;
                background-color: #0F1116;
            }
        </style>
    """, unsafe_allow_html=True)

    st.title("🔁 Circular Dependency Analyzer")
    st.markdown("##### Find dependency chains that loop back on themselves and see which nodes are most entangled.")

    # --- Sidebar for Configuration ---
    with st.sidebar:
        st.header("⚙️ Configuration")
        max_depth = st.number_input("Maximum search depth", min_value=1, max_value=100,
                                    value=min(max(Config.MAX_DEPTH, 1), 100), step=1)
        top_n = st.slider("Nodes in ranking chart", min_value=5, max_value=100, value=min(max(Config.TOP_N, 5), 100))
        st.info("Defaults come from `CIRCULAR_MAX_DEPTH` and `CIRCULAR_TOP_N`.")

    col1, col2 = st.columns([1, 2])

    with col1:
        st.markdown("#### Upload Dependency Map")
        file_type = st.radio(
            "Choose file type:",
            ["dependency map (JSON)", "package-lock.json"],
            key="upload_option"
        )
        uploaded_file = st.file_uploader("Upload a JSON file", type=['json'], key="dependency_file")

        if uploaded_file is not None and st.button("🔍 Analyze Dependencies", type="primary", use_container_width=True):
            try:
                file_content = uploaded_file.read().decode('utf-8')
                with st.spinner("Searching for circular dependencies..."):
                    result = run_analysis(file_content, file_type, int(max_depth))

                if result.graph:
                    st.session_state.dependency_analysis = result
                    st.success(f"✅ Analysis complete! {result.summary['entangled_nodes']} nodes take part in cycles.")
                else:
                    st.error("No dependencies found in the uploaded file.")
            except Exception as e:
                logger.exception("Failed to analyze uploaded file")
                st.error(f"Error processing file: {str(e)}")

    with col2:
        if 'dependency_analysis' in st.session_state:
            result = st.session_state.dependency_analysis
            summary = result.summary

            st.markdown("#### 📊 Quick Stats")
            stat_col1, stat_col2, stat_col3, stat_col4 = st.columns(4)
            with stat_col1:
                st.metric("Nodes", summary['total_nodes'])
            with stat_col2:
                st.metric("Entangled Nodes", summary['entangled_nodes'])
            with stat_col3:
                st.metric("Total Circular Count", summary['total_circular_dependency_count'])
            with stat_col4:
                st.metric("Is DAG", "Yes" if summary['is_dag'] else "No")

            if summary['most_entangled']:
                st.warning(f"Most entangled node: **{summary['most_entangled']}**")

    if 'dependency_analysis' in st.session_state:
        st.markdown("---")
        result = st.session_state.dependency_analysis
        visualizer = DependencyVisualizer(to_networkx(result.graph))

        tab1, tab2, tab3, tab4 = st.tabs([
            "🏆 Ranking",
            "🔍 Circle Details",
            "📊 Graph Visualization",
            "🔗 Strongly Connected Components",
        ])

        with tab1:
            st.plotly_chart(visualizer.create_ranking_chart(result.report, top_n), use_container_width=True)
            visualizer.display_ranking_table(result.report)

        with tab2:
            visualizer.display_circle_details(result.report)
            text = format_circles(result.report)
            if text:
                st.download_button("Download report", text, file_name="circles.txt")

        with tab3:
            st.plotly_chart(visualizer.create_dependency_graph_plot(result.report), use_container_width=True)

            st.markdown("#### Graph Statistics")
            stats_col1, stats_col2, stats_col3 = st.columns(3)
            with stats_col1:
                st.metric("Graph Density", f"{result.graph_stats['density']:.3f}")
            with stats_col2:
                st.metric("Average Degree", f"{result.graph_stats['average_degree']:.1f}")
            with stats_col3:
                st.metric("Dangling References", result.graph_stats['dangling_references'])

        with tab4:
            sccs = CycleDetector(result.graph, result.max_depth).find_strongly_connected_components()
            if sccs:
                for i, scc in enumerate(sccs):
                    st.write(f"**Component {i}** ({len(scc)} nodes): {', '.join(scc)}")
            else:
                st.success("🎉 No strongly connected components, the graph is acyclic.")


if __name__ == "__main__":
    main()
