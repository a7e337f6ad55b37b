"""
CLI Output Formatting

Rich tables, score bars and summary panels for grading results.
"""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..evaluation.metrics import EvaluationSummary
from ..evaluation.types import EvalResult

console = Console()

SCORE_BAR_WIDTH = 20


def score_bar(score: float, width: int = SCORE_BAR_WIDTH) -> Text:
    """
    Render a score as a colored bar.

    Scores above 1.0 (bonus earned) are shown full with the total appended.
    """
    filled = min(width, max(0, round(score * width)))
    bar = "[" + "█" * filled + "░" * (width - filled) + "]"

    if score > 1.0:
        return Text(f"{bar} ({score:.3f})", style="bold magenta")
    if score >= 0.85:
        return Text(bar, style="green")
    if score >= 0.6:
        return Text(bar, style="yellow")
    return Text(bar, style="red")


def _truncate(value: Optional[str], limit: int = 60) -> str:
    if not value:
        return ""
    value = " ".join(str(value).split())
    value = value if len(value) <= limit else value[:limit - 3] + "..."
    return escape(value)


def format_results_table(results: List[EvalResult], title: str = "Grading Results") -> Table:
    """Build a table with one row per graded answer."""
    table = Table(title=title, show_header=True, header_style="bold blue")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Question", style="white")
    table.add_column("Status", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("Bar")
    table.add_column("Bonus", justify="right")
    table.add_column("Details", style="dim")

    if not results:
        table.add_row("", "No results", "", "", "", "", "")
        return table

    for index, result in enumerate(results, 1):
        status = Text("PASS", style="bold green") if result.passed else Text("FAIL", style="bold red")
        details = result.bonus_reason if result.bonus_score > 0 else result.error_message
        table.add_row(
            str(index),
            _truncate(result.question),
            status,
            f"{result.similarity_score:.3f}",
            score_bar(result.total_score),
            f"+{result.bonus_score:.1f}" if result.bonus_score > 0 else "",
            _truncate(details),
        )
    return table


def format_summary_panel(summary: EvaluationSummary) -> Panel:
    """Build a panel with run-level statistics."""
    lines = [
        f"Total Tests: {summary.total_tests}",
        f"Passed: [green]{summary.passed_tests}[/green]",
        f"Failed: [red]{summary.failed_tests}[/red]",
        f"Accuracy: {summary.accuracy:.1%}",
        f"Avg Base Score: {summary.average_similarity_score:.3f}",
        f"Avg Bonus Score: {summary.average_bonus_score:.3f}",
        f"Avg Total Score: {summary.average_total_score:.3f}",
        f"Bonus Awards: {summary.bonus_tests}/{summary.total_tests} "
        f"({summary.total_bonus_score:.1f} of {summary.possible_bonus_score:.1f} possible)",
    ]
    return Panel("\n".join(lines), title="Evaluation Summary", border_style="blue")


def format_result_detail(result: EvalResult) -> Panel:
    """Build a panel describing a single graded answer."""
    status = "[bold green]PASS[/bold green]" if result.passed else "[bold red]FAIL[/bold red]"
    lines = [
        f"Status: {status}",
        f"Similarity Score: {result.similarity_score:.3f}",
        f"Total Score: {result.total_score:.3f}",
    ]
    if result.bonus_score > 0:
        lines.append(f"Bonus: +{result.bonus_score:.3f} ({escape(result.bonus_reason or '')})")
    if result.error_message:
        lines.append(f"Details: {escape(result.error_message)}")
    return Panel("\n".join(lines), title=_truncate(result.question) or "Result", border_style="blue")
