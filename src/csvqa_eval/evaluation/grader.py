"""
Answer Grading Facade

Dispatches a model answer to the evaluator for its declared answer type,
applies gated bonus scoring, and guarantees that grading never raises.
"""

from typing import Any, Mapping, Optional, Union

from ..core.config import EvaluationConfig, get_config
from ..core.exceptions import EvaluationError
from ..utils.logging import get_logger
from .bonus import BonusEvaluator
from .evaluators import (
    BaseEvaluator, NumberEvaluator, ObjectListEvaluator, OrderedListEvaluator,
    StringEvaluator, UnorderedListEvaluator, describe_result,
)
from .types import AnswerType, EvalResult, ExpectedAnswer, QueryType

logger = get_logger(__name__)

ExpectedSpec = Union[ExpectedAnswer, Mapping[str, Any]]

_default_evaluator: Optional["AnswerEvaluator"] = None


class AnswerEvaluator:
    """Grades model answers against expected-answer descriptors."""

    def __init__(self, config: Optional[EvaluationConfig] = None):
        """
        Initialize the evaluator.

        Args:
            config: Evaluation settings (defaults to the built-in values)
        """
        self.config = config or EvaluationConfig()
        self.ordered_query_types = {name.lower() for name in self.config.ordered_query_types}

        self.number_evaluator = NumberEvaluator(self.config)
        self.string_evaluator = StringEvaluator(self.config)
        self.ordered_list_evaluator = OrderedListEvaluator(self.config)
        self.unordered_list_evaluator = UnorderedListEvaluator(self.config)
        self.object_list_evaluator = ObjectListEvaluator(self.config)
        self.bonus_evaluator = BonusEvaluator(self.config)

    def is_ordered_query(self, query_type: Optional[Union[str, QueryType]]) -> bool:
        """True when the query expects a specific sequence rather than a set."""
        if not query_type:
            return False
        if isinstance(query_type, QueryType):
            query_type = query_type.value
        return str(query_type).strip().lower() in self.ordered_query_types

    def select_evaluator(self, answer_type: AnswerType,
                         query_type: Optional[Union[str, QueryType]] = None) -> BaseEvaluator:
        """Pick the scoring strategy for an answer type and query type."""
        if answer_type is AnswerType.NUMBER:
            return self.number_evaluator
        if answer_type is AnswerType.LIST_OF_STRINGS:
            if self.is_ordered_query(query_type):
                return self.ordered_list_evaluator
            return self.unordered_list_evaluator
        if answer_type is AnswerType.LIST_OF_OBJECTS:
            return self.object_list_evaluator
        if answer_type is AnswerType.STRING:
            return self.string_evaluator
        raise EvaluationError(f"No evaluator for answer type {answer_type!r}")

    def evaluate(self,
                 question: Optional[str],
                 model_answer: Any,
                 expected: ExpectedSpec,
                 query_type: Optional[Union[str, QueryType]] = None) -> EvalResult:
        """
        Grade a single model answer.

        Args:
            question: The question put to the model
            model_answer: The model's reply text
            expected: ExpectedAnswer or its JSON-shaped mapping
            query_type: Optional query classification; falls back to the
                descriptor's own ``query_type``

        Returns:
            EvalResult; failures of any kind are reported in the result
        """
        try:
            descriptor = ExpectedAnswer.from_dict(expected)

            if not isinstance(model_answer, str):
                raise EvaluationError(
                    f"Model answer must be text, got {type(model_answer).__name__}",
                    question=question,
                    answer_type=descriptor.answer_type.value,
                )

            query_type = query_type or descriptor.query_type
            evaluator = self.select_evaluator(descriptor.answer_type, query_type)
            result = evaluator.evaluate(question, model_answer, descriptor)

            if result.passed and descriptor.bonus is not None:
                bonus = self.bonus_evaluator.evaluate(model_answer, descriptor.bonus)
                if bonus.passed:
                    result = result.with_bonus(self.config.bonus_unit, bonus.reason)

            logger.debug(f"Graded {descriptor.answer_type.value} answer "
                         f"({type(evaluator).__name__}): {describe_result(result)}")
            return result

        except Exception as e:
            logger.error(f"Evaluation failed for question {question!r}: {str(e)}")
            return EvalResult(
                question=question,
                model_answer=model_answer,
                expected=_echo_expected(expected),
                passed=False,
                similarity_score=0.0,
                error_message=str(e) or type(e).__name__,
            )


def _echo_expected(expected: Any) -> Any:
    if isinstance(expected, ExpectedAnswer):
        return expected.to_dict()
    if isinstance(expected, Mapping):
        return dict(expected)
    return expected


def evaluate(question: Optional[str],
             model_answer: Any,
             expected: ExpectedSpec,
             query_type: Optional[Union[str, QueryType]] = None) -> EvalResult:
    """
    Grade one answer with the globally configured evaluation settings.

    The evaluator is built once per configuration instance and reused.

    Raises:
        ConfigurationError: If the global configuration cannot be loaded;
            grading failures are still reported in the result
    """
    global _default_evaluator

    config = get_config().evaluation
    if _default_evaluator is None or _default_evaluator.config is not config:
        _default_evaluator = AnswerEvaluator(config)
    return _default_evaluator.evaluate(question, model_answer, expected, query_type)
