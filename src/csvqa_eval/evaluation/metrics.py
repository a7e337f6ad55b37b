"""
Evaluation Metrics

Aggregates per-question grading results into run-level summary statistics.
"""

import statistics
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Sequence

from ..core.config import EvaluationConfig
from ..utils.logging import get_logger
from .types import EvalResult, ExpectedAnswer

logger = get_logger(__name__)


@dataclass
class EvaluationSummary:
    """Summary statistics for a batch of graded answers."""
    total_tests: int
    passed_tests: int
    failed_tests: int
    accuracy: float
    average_similarity_score: float
    average_bonus_score: float
    average_total_score: float
    bonus_tests: int
    total_bonus_score: float
    possible_bonus_score: float
    error_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class MetricsCalculator:
    """Calculates summary metrics over grading results."""

    def __init__(self, config: Optional[EvaluationConfig] = None):
        self.config = config or EvaluationConfig()

    def summarize(self, results: Sequence[EvalResult],
                  expected_answers: Optional[Sequence[Any]] = None) -> EvaluationSummary:
        """
        Summarize a batch of results.

        Args:
            results: Graded results
            expected_answers: Descriptors the results were graded against;
                used to compute the bonus score that was available

        Returns:
            EvaluationSummary (all zeros for an empty batch)
        """
        total = len(results)
        passed = sum(1 for result in results if result.passed)
        bonus_scores = [result.bonus_score for result in results]

        possible_bonus = 0.0
        if expected_answers is not None:
            with_bonus = sum(1 for expected in expected_answers if self._has_bonus(expected))
            possible_bonus = with_bonus * self.config.bonus_unit

        summary = EvaluationSummary(
            total_tests=total,
            passed_tests=passed,
            failed_tests=total - passed,
            accuracy=passed / total if total else 0.0,
            average_similarity_score=_mean([result.similarity_score for result in results]),
            average_bonus_score=_mean(bonus_scores),
            average_total_score=_mean([result.total_score for result in results]),
            bonus_tests=sum(1 for score in bonus_scores if score > 0),
            total_bonus_score=sum(bonus_scores),
            possible_bonus_score=possible_bonus,
            error_count=sum(1 for result in results if result.error_message and not result.passed),
        )

        logger.info(f"Summarized {total} results: {passed} passed, accuracy {summary.accuracy:.1%}")
        return summary

    @staticmethod
    def _has_bonus(expected: Any) -> bool:
        if isinstance(expected, ExpectedAnswer):
            return expected.bonus is not None
        if isinstance(expected, dict):
            return bool(expected.get("bonus"))
        return False

    def score_distribution(self, results: Sequence[EvalResult]) -> Dict[str, float]:
        """Spread of similarity scores across a batch."""
        if not results:
            return {}

        scores: List[float] = [result.similarity_score for result in results]
        return {
            'mean': statistics.mean(scores),
            'min': min(scores),
            'max': max(scores),
            'median': statistics.median(scores),
            'std': statistics.pstdev(scores),
        }


def _mean(values: Sequence[float]) -> float:
    return statistics.mean(values) if values else 0.0
