"""
Answer Type Evaluators

One scoring strategy per expected answer shape: scalar numbers, scalar
strings, ordered lists, unordered lists and lists of records.
"""

from typing import Any, Dict, List, Optional, Sequence, Set

from ..core.config import EvaluationConfig
from ..utils.logging import get_logger
from .normalizer import (
    extract_csv_rows, extract_ordered_list, normalize_list,
    normalize_number, normalize_string,
)
from .relevance import NumberRelevanceFilter, extract_numbers, format_number
from .similarity import fuzzy_similarity
from .types import EvalResult, ExpectedAnswer

logger = get_logger(__name__)

NAME_FIELDS = ('name', 'title', 'event_name', 'player_name')


def object_label(obj: Any) -> str:
    """Pick the name-like field of an expected record."""
    if isinstance(obj, dict):
        for key in NAME_FIELDS:
            if obj.get(key):
                return str(obj[key])
        for value in obj.values():
            if isinstance(value, str) and value.strip():
                return value
    return str(obj)


def _format_values(values: Sequence[Any]) -> str:
    formatted = []
    for value in values:
        if isinstance(value, float):
            formatted.append(format_number(value))
        else:
            formatted.append(str(value))
    return ", ".join(formatted)


class BaseEvaluator:
    """Shared configuration and helpers for the answer evaluators."""

    def __init__(self, config: Optional[EvaluationConfig] = None):
        self.config = config or EvaluationConfig()
        self.threshold = self.config.similarity_threshold
        self.tolerance = self.config.numeric_tolerance
        self.relevance = NumberRelevanceFilter.from_config(self.config)

    def evaluate(self, question: str, model_answer: str,
                 expected: ExpectedAnswer) -> EvalResult:
        raise NotImplementedError

    def numbers_match(self, first: float, second: float) -> bool:
        return abs(first - second) < self.tolerance

    def _result(self, question: str, model_answer: str, expected: ExpectedAnswer,
                passed: bool, score: float,
                error_message: Optional[str] = None) -> EvalResult:
        return EvalResult(
            question=question,
            model_answer=model_answer,
            expected=expected.to_dict(),
            passed=passed,
            similarity_score=score,
            error_message=error_message,
        )


class NumberEvaluator(BaseEvaluator):
    """Passes when any relevant number in the answer equals an expected value."""

    def evaluate(self, question: str, model_answer: str,
                 expected: ExpectedAnswer) -> EvalResult:
        candidates = self.relevance.extract_relevant_numbers(question, model_answer)

        if not candidates:
            return self._result(
                question, model_answer, expected, False, 0.0,
                'Could not extract any relevant numbers from response'
            )

        expected_numbers = [normalize_number(value) for value in expected.valid_values]
        for candidate in candidates:
            for expected_number in expected_numbers:
                if expected_number is not None and self.numbers_match(candidate, expected_number):
                    return self._result(question, model_answer, expected, True, 1.0)

        return self._result(
            question, model_answer, expected, False, 0.0,
            f"Found relevant numbers: [{_format_values(candidates)}], "
            f"expected one of: [{_format_values(expected.valid_values)}]"
        )


class StringEvaluator(BaseEvaluator):
    """
    Compares a scalar string answer against the acceptable values.

    Strategies, per expected value: exact match, substring containment in
    either direction, numeric equality for numeric values, then fuzzy
    similarity. Containment counts as a full match because descriptive
    answers usually embed the short expected value in longer prose.
    """

    def evaluate(self, question: str, model_answer: str,
                 expected: ExpectedAnswer) -> EvalResult:
        model_normalized = normalize_string(model_answer)
        answer_numbers: Optional[List[float]] = None
        best_score = 0.0
        full_match = False

        for value in expected.valid_values:
            expected_normalized = normalize_string(value)

            if model_normalized == expected_normalized:
                return self._result(question, model_answer, expected, True, 1.0)

            if model_normalized and expected_normalized and (
                    expected_normalized in model_normalized
                    or model_normalized in expected_normalized):
                full_match = True
                continue

            expected_number = normalize_number(value)
            if expected_number is not None:
                if answer_numbers is None:
                    answer_numbers = extract_numbers(model_answer)
                if any(self.numbers_match(num, expected_number) for num in answer_numbers):
                    full_match = True
                    continue

            best_score = max(best_score, fuzzy_similarity(model_normalized, expected_normalized))

        if full_match:
            return self._result(question, model_answer, expected, True, 1.0)

        passed = best_score >= self.threshold
        error_message = None
        if not passed:
            error_message = (f"Best similarity {best_score:.3f} below threshold "
                             f"{self.threshold:.2f}")
        return self._result(question, model_answer, expected, passed, best_score, error_message)


class OrderedListEvaluator(BaseEvaluator):
    """Position-by-position comparison for ranked or sorted answers."""

    def evaluate(self, question: str, model_answer: str,
                 expected: ExpectedAnswer) -> EvalResult:
        model_list = extract_ordered_list(model_answer)
        expected_list = [normalize_string(value) for value in expected.valid_values]

        correct_positions = 0
        for position, expected_item in enumerate(expected_list):
            if position < len(model_list):
                if fuzzy_similarity(model_list[position], expected_item) >= self.threshold:
                    correct_positions += 1

        score = correct_positions / len(expected_list) if expected_list else 1.0
        passed = score >= 1.0

        error_message = None
        if correct_positions < len(expected_list):
            error_message = f"Correct order for {correct_positions}/{len(expected_list)} items"
            if len(model_list) != len(expected_list):
                error_message += f" (got {len(model_list)} items, expected {len(expected_list)})"

        return self._result(question, model_answer, expected, passed, score, error_message)


class UnorderedListEvaluator(BaseEvaluator):
    """
    Set comparison with a penalty for forbidden items.

    Matching is greedy: each expected item, in the order given, claims the
    most similar unused model item at or above the threshold. Leftover
    model items that match an invalid value are penalized with the same
    denominator as found items, so one invalid item cancels one correct one.
    """

    def evaluate(self, question: str, model_answer: str,
                 expected: ExpectedAnswer) -> EvalResult:
        model_list = normalize_list(model_answer)
        expected_list = [normalize_string(value) for value in expected.valid_values]
        invalid_list = [normalize_string(value) for value in expected.invalid_values]

        used_model_items: Set[str] = set()
        found_expected: Set[str] = set()
        found_invalid: Set[str] = set()
        found_items = 0
        invalid_items = 0

        for expected_item in expected_list:
            if expected_item in found_expected:
                continue
            best_match = None
            best_similarity = 0.0
            for model_item in model_list:
                if model_item in used_model_items:
                    continue
                similarity = fuzzy_similarity(model_item, expected_item)
                if similarity >= self.threshold and similarity > best_similarity:
                    best_match = model_item
                    best_similarity = similarity
            if best_match is not None:
                found_items += 1
                found_expected.add(expected_item)
                used_model_items.add(best_match)

        for model_item in model_list:
            if model_item in used_model_items:
                continue
            for invalid_item in invalid_list:
                if invalid_item in found_invalid:
                    continue
                if fuzzy_similarity(model_item, invalid_item) >= self.threshold:
                    invalid_items += 1
                    found_invalid.add(invalid_item)
                    used_model_items.add(model_item)
                    break

        expected_count = len(expected_list)
        if expected_count:
            score = max(0.0, found_items / expected_count - invalid_items / expected_count)
        else:
            score = 0.0 if invalid_items else 1.0
        passed = score >= 1.0

        error_message = None
        if found_items < expected_count or invalid_items > 0:
            parts = []
            if found_items < expected_count:
                parts.append(f"Found {found_items}/{expected_count} expected items")
            if invalid_items > 0:
                parts.append(f"{invalid_items} invalid item(s) included")
            error_message = ", ".join(parts)

        logger.debug(f"Unordered list match: found={found_items}, invalid={invalid_items}, "
                     f"model_items={len(model_list)}")
        return self._result(question, model_answer, expected, passed, score, error_message)


class ObjectListEvaluator(BaseEvaluator):
    """Counts record rows in CSV-like answers, falling back to name matching."""

    def __init__(self, config: Optional[EvaluationConfig] = None):
        super().__init__(config)
        self.list_evaluator = UnorderedListEvaluator(self.config)

    def evaluate(self, question: str, model_answer: str,
                 expected: ExpectedAnswer) -> EvalResult:
        rows = extract_csv_rows(model_answer)

        if not rows:
            names = ExpectedAnswer(
                answer_type=expected.answer_type,
                valid_values=[object_label(obj) for obj in expected.valid_values],
            )
            fallback = self.list_evaluator.evaluate(question, model_answer, names)
            return self._result(question, model_answer, expected, fallback.passed,
                                 fallback.similarity_score, fallback.error_message)

        found_objects = len(rows)
        expected_objects = len(expected.valid_values)
        score = min(1.0, found_objects / expected_objects) if expected_objects else 1.0
        passed = score >= 1.0

        error_message = None
        if found_objects < expected_objects:
            error_message = f"Found {found_objects}/{expected_objects} expected objects"
        return self._result(question, model_answer, expected, passed, score, error_message)


def describe_result(result: EvalResult) -> Dict[str, Any]:
    """Compact view of a result for debug logging."""
    return {
        'passed': result.passed,
        'score': round(result.similarity_score, 3),
        'error': result.error_message,
    }
