"""
Bonus Criteria Evaluation

Lightweight checks for optional extra credit. They are only consulted after
the primary answer has passed, and report a reason instead of a score.
"""

from typing import Any, Optional, Sequence

from ..core.config import EvaluationConfig
from ..utils.logging import get_logger
from .evaluators import object_label
from .normalizer import normalize_list, normalize_number, normalize_string
from .relevance import NumberRelevanceFilter, extract_numbers
from .similarity import fuzzy_similarity
from .types import AnswerType, BonusResult, ExpectedAnswer

logger = get_logger(__name__)


class BonusEvaluator:
    """Checks a model answer against a bonus descriptor."""

    def __init__(self, config: Optional[EvaluationConfig] = None):
        self.config = config or EvaluationConfig()
        self.relevance = NumberRelevanceFilter.from_config(self.config)

    def evaluate(self, model_answer: str, bonus: ExpectedAnswer) -> BonusResult:
        """
        Check whether the bonus criteria are met.

        Args:
            model_answer: The model answer text
            bonus: Bonus descriptor nested in the expected answer

        Returns:
            BonusResult with the reason for the decision
        """
        answer_type = bonus.answer_type
        if answer_type is AnswerType.NUMBER:
            result = self.evaluate_number(model_answer, bonus.valid_values)
        elif answer_type is AnswerType.LIST_OF_STRINGS:
            result = self.evaluate_string_list(model_answer, bonus.valid_values)
        elif answer_type is AnswerType.LIST_OF_OBJECTS:
            labels = [object_label(obj) for obj in bonus.valid_values]
            result = self.evaluate_string_list(model_answer, labels)
        elif answer_type is AnswerType.STRING:
            result = self.evaluate_string(model_answer, bonus.valid_values)
        else:
            raise ValueError(f"Unhandled bonus answer type: {answer_type}")

        logger.debug(f"Bonus ({answer_type.value}): passed={result.passed}, reason={result.reason}")
        return result

    def _numbers_match(self, first: float, second: float) -> bool:
        return abs(first - second) < self.config.numeric_tolerance

    def evaluate_string(self, model_answer: str, bonus_values: Sequence[Any]) -> BonusResult:
        model_normalized = normalize_string(model_answer)

        for value in bonus_values:
            bonus_normalized = normalize_string(value)
            if bonus_normalized and bonus_normalized in model_normalized:
                return BonusResult(True, f'Found "{value}" in response')

            expected_number = normalize_number(value)
            if expected_number is not None:
                if any(self._numbers_match(num, expected_number)
                       for num in extract_numbers(model_answer)):
                    return BonusResult(True, f'Found number "{value}" in response')

        return BonusResult(False, 'Bonus criteria not met')

    def evaluate_number(self, model_answer: str, bonus_values: Sequence[Any]) -> BonusResult:
        candidates = self.relevance.exclude_dates(model_answer)

        for value in bonus_values:
            expected_number = normalize_number(value)
            if expected_number is None:
                continue
            if any(self._numbers_match(num, expected_number) for num in candidates):
                return BonusResult(True, f'Found bonus number "{value}"')

        return BonusResult(False, 'Bonus number criteria not met')

    def evaluate_string_list(self, model_answer: str, bonus_values: Sequence[Any]) -> BonusResult:
        model_list = normalize_list(model_answer)

        for value in bonus_values:
            bonus_normalized = normalize_string(value)
            for model_item in model_list:
                if fuzzy_similarity(model_item, bonus_normalized) >= self.config.similarity_threshold:
                    return BonusResult(True, f'Found "{value}" in response list')

        return BonusResult(False, 'Bonus list criteria not met')
