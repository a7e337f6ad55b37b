"""
CLI Module

Case loading and rich output formatting for the command-line interface.
"""

from .formatting import format_results_table, format_summary_panel, format_result_detail, score_bar
from .loader import GradingCase, load_cases, parse_case

__all__ = [
    "format_results_table",
    "format_summary_panel",
    "format_result_detail",
    "score_bar",
    "GradingCase",
    "load_cases",
    "parse_case",
]
