"""
Evaluation Module

Answer normalization, numeric relevance filtering, fuzzy matching and
per-answer-type scoring with gated bonus credit.
"""

from .types import AnswerType, QueryType, ExpectedAnswer, EvalResult, BonusResult
from .evaluators import (
    NumberEvaluator,
    StringEvaluator,
    OrderedListEvaluator,
    UnorderedListEvaluator,
    ObjectListEvaluator,
)
from .bonus import BonusEvaluator
from .grader import AnswerEvaluator, evaluate
from .metrics import MetricsCalculator, EvaluationSummary

__all__ = [
    "AnswerType",
    "QueryType",
    "ExpectedAnswer",
    "EvalResult",
    "BonusResult",
    "NumberEvaluator",
    "StringEvaluator",
    "OrderedListEvaluator",
    "UnorderedListEvaluator",
    "ObjectListEvaluator",
    "BonusEvaluator",
    "AnswerEvaluator",
    "evaluate",
    "MetricsCalculator",
    "EvaluationSummary",
]
