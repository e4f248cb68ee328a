"""
Report rendering for circular dependency analysis
"""

import sys
from typing import Optional, TextIO

import pandas as pd

from .models import AnalysisReport

REPORT_COLUMNS = ['node', 'injected_count', 'injected', 'circular_dependency_count', 'cycle_count', 'circle']


def format_circles(report: AnalysisReport) -> str:
    """Text listing of every node that takes part in a cycle, most entangled first"""
    lines = []
    for name, info in report.dependency_map.items():
        if not info.has_cycles:
            continue
        lines.append(f"== #{info.circular_dependency_count} {name}")
        lines.append(f"injected: {', '.join(info.injected_names)}")
        lines.append(f"circle:   {info.describe_circle()}")
    return "\n".join(lines)


def print_circles(report: AnalysisReport, file: Optional[TextIO] = None):
    text = format_circles(report)
    if text:
        print(text, file=file or sys.stdout)


def report_to_dataframe(report: AnalysisReport) -> pd.DataFrame:
    """One row per node in ranking order"""
    rows = [
        {
            'node': name,
            'injected_count': info.injected_count,
            'injected': ', '.join(info.injected_names),
            'circular_dependency_count': info.circular_dependency_count,
            'cycle_count': info.cycle_count,
            'circle': info.describe_circle(),
        }
        for name, info in report.dependency_map.items()
    ]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)
