"""
CLI Entry Point

Command-line interface for grading collected model answers offline,
using Click with rich output formatting.
"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from .core.config import get_config, reload_config
from .core.exceptions import CsvQaEvalException
from .evaluation.grader import AnswerEvaluator
from .evaluation.metrics import MetricsCalculator
from .cli.formatting import format_result_detail, format_results_table, format_summary_panel
from .cli.loader import load_cases
from .utils.logging import PerformanceTimer, get_logger, setup_logging

console = Console()
logger = get_logger(__name__)


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--json-logs', is_flag=True, help='Emit logs as JSON lines')
@click.pass_context
def cli(ctx, config, verbose, json_logs):
    """csvqa-eval - grade language model answers to CSV questions"""
    ctx.ensure_object(dict)

    try:
        app_config = reload_config(Path(config)) if config else get_config()
    except CsvQaEvalException as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        sys.exit(2)

    if verbose:
        app_config.logging.console_level = "DEBUG"
        app_config.logging.level = "DEBUG"

    setup_logging(app_config, enable_json=json_logs)
    ctx.obj['config'] = app_config


@cli.command()
@click.argument('cases_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', '-f', 'output_format', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
@click.option('--failures-only', is_flag=True, help='Only list answers that failed')
@click.pass_context
def grade(ctx, cases_file, output_format, failures_only):
    """Grade every case in a JSON or YAML cases file.

    \b
    Each case needs 'question', 'model_answer' and 'expected' keys,
    and may carry a 'query_type'. Exits with status 1 if any case fails.

    \b
    csvqa-eval grade cases.json
    csvqa-eval grade cases.yaml --format json
    """
    config = ctx.obj['config']

    try:
        cases = load_cases(Path(cases_file))
    except CsvQaEvalException as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(2)

    evaluator = AnswerEvaluator(config.evaluation)
    with PerformanceTimer(f"grading {len(cases)} cases", logger):
        results = [
            evaluator.evaluate(case.question, case.model_answer, case.expected, case.query_type)
            for case in cases
        ]

    calculator = MetricsCalculator(config.evaluation)
    summary = calculator.summarize(results, [case.expected for case in cases])
    shown = [result for result in results if not result.passed] if failures_only else results

    if output_format == 'json':
        click.echo(json.dumps({
            'summary': summary.to_dict(),
            'score_distribution': calculator.score_distribution(results),
            'results': [result.to_dict() for result in shown],
        }, indent=2, default=str))
    else:
        console.print(format_results_table(shown))
        console.print(format_summary_panel(summary))

    if summary.failed_tests:
        sys.exit(1)


@cli.command()
@click.argument('question')
@click.argument('answer')
@click.option('--expected', '-e', required=True, help='Expected answer descriptor as JSON')
@click.option('--query-type', '-q', default=None, help='Query type tag (e.g. latest_n)')
@click.pass_context
def check(ctx, question, answer, expected, query_type):
    """Grade a single answer.

    \b
    csvqa-eval check "How many events?" "There were 42 events." \\
        -e '{"answer_type": "number", "valid_values": [42]}'
    """
    config = ctx.obj['config']

    try:
        expected_data = json.loads(expected)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--expected")

    result = AnswerEvaluator(config.evaluation).evaluate(question, answer, expected_data, query_type)
    console.print(format_result_detail(result))

    if not result.passed:
        sys.exit(1)


if __name__ == '__main__':
    cli()
