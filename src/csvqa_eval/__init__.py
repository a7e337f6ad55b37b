"""
CSV Question-Answering Evaluation

Grades free-text language model answers about CSV data against structured
expected-answer descriptors with normalization, fuzzy matching and
gated bonus scoring.
"""

__version__ = "1.0.0"

from .core.config import get_config
from .core.exceptions import CsvQaEvalException
from .evaluation import AnswerEvaluator, EvalResult, ExpectedAnswer, evaluate

__all__ = [
    "get_config",
    "CsvQaEvalException",
    "AnswerEvaluator",
    "EvalResult",
    "ExpectedAnswer",
    "evaluate",
]
