"""
Tests for Answer Type Evaluators
"""

import pytest

from csvqa_eval.core.config import EvaluationConfig
from csvqa_eval.evaluation.evaluators import (
    NumberEvaluator, ObjectListEvaluator, OrderedListEvaluator,
    StringEvaluator, UnorderedListEvaluator, describe_result, object_label,
)
from csvqa_eval.evaluation.types import AnswerType, ExpectedAnswer


def expected(answer_type, valid, invalid=None):
    return ExpectedAnswer(answer_type=answer_type, valid_values=valid,
                          invalid_values=invalid or [])


class TestNumberEvaluator:
    """Test cases for NumberEvaluator."""

    def setup_method(self):
        """Set up test fixtures."""
        self.evaluator = NumberEvaluator()

    def test_count_answer(self):
        result = self.evaluator.evaluate(
            "How many events were there?",
            "There were approximately 42 events in total.",
            expected(AnswerType.NUMBER, [42]),
        )

        assert result.passed
        assert result.similarity_score == 1.0
        assert result.error_message is None

    def test_currency_answer(self):
        result = self.evaluator.evaluate(
            "What was the total revenue?",
            "The total revenue was $1,234.50",
            expected(AnswerType.NUMBER, ["1234.5"]),
        )
        assert result.passed

    def test_no_relevant_numbers(self):
        result = self.evaluator.evaluate(
            "How many events were there?", "I don't know.",
            expected(AnswerType.NUMBER, [42]),
        )

        assert not result.passed
        assert result.similarity_score == 0.0
        assert result.error_message == "Could not extract any relevant numbers from response"

    def test_wrong_number(self):
        result = self.evaluator.evaluate(
            "How many events?", "There were 40 events",
            expected(AnswerType.NUMBER, [42]),
        )

        assert not result.passed
        assert result.error_message == "Found relevant numbers: [40], expected one of: [42]"

    def test_year_is_not_an_answer(self):
        result = self.evaluator.evaluate(
            "How many events in 2023?", "In 2023 there were 7 events",
            expected(AnswerType.NUMBER, [7]),
        )
        assert result.passed

        result = self.evaluator.evaluate(
            "Which year?", "Events peaked in 2023",
            expected(AnswerType.NUMBER, [2023]),
        )
        assert not result.passed
        assert result.error_message == "Could not extract any relevant numbers from response"

    def test_count_equal_to_a_date_part(self):
        result = self.evaluator.evaluate(
            "How many events happened on 2024-05-01?",
            "There were 5 events on 2024-05-01.",
            expected(AnswerType.NUMBER, [5]),
        )
        assert result.passed

    def test_any_expected_value(self):
        result = self.evaluator.evaluate(
            "What was the score?", "It was 7.5",
            expected(AnswerType.NUMBER, [7, 7.5]),
        )
        assert result.passed


class TestStringEvaluator:
    """Test cases for StringEvaluator."""

    def setup_method(self):
        """Set up test fixtures."""
        self.evaluator = StringEvaluator()

    def test_exact_match(self):
        result = self.evaluator.evaluate("Who?", "Alice.", expected(AnswerType.STRING, ["alice"]))
        assert result.passed
        assert result.similarity_score == 1.0

    def test_containment(self):
        result = self.evaluator.evaluate(
            "Who was the top performer?",
            "The top performer was Alice Johnson, with 120 points.",
            expected(AnswerType.STRING, ["Alice Johnson"]),
        )

        assert result.passed
        assert result.similarity_score == 1.0

    def test_answer_contained_in_expected(self):
        result = self.evaluator.evaluate(
            "Who was the top performer?", "Johnson",
            expected(AnswerType.STRING, ["Alice Johnson"]),
        )

        assert result.passed
        assert result.similarity_score == 1.0
        assert result.error_message is None

    def test_numeric_value(self):
        result = self.evaluator.evaluate(
            "What is the price?", "Price 7.5 dollars",
            expected(AnswerType.STRING, ["7.50"]),
        )
        assert result.passed

    def test_fuzzy_match(self):
        result = self.evaluator.evaluate(
            "Who won?", "Jon Smith", expected(AnswerType.STRING, ["John Smith"])
        )

        assert result.passed
        assert 0.85 <= result.similarity_score < 1.0
        assert result.error_message is None

    def test_mismatch(self):
        result = self.evaluator.evaluate(
            "Who won?", "Bob", expected(AnswerType.STRING, ["Alice Johnson"])
        )

        assert not result.passed
        assert result.similarity_score < 0.85
        assert result.error_message.startswith("Best similarity")

    def test_empty_answer_is_not_contained(self):
        result = self.evaluator.evaluate("Who won?", "", expected(AnswerType.STRING, ["Alice"]))

        assert not result.passed
        assert result.similarity_score == 0.0

    def test_threshold_from_config(self):
        strict = StringEvaluator(EvaluationConfig(similarity_threshold=0.99))
        result = strict.evaluate("Who won?", "Jon Smith", expected(AnswerType.STRING, ["John Smith"]))
        assert not result.passed


class TestOrderedListEvaluator:
    """Test cases for OrderedListEvaluator."""

    def setup_method(self):
        """Set up test fixtures."""
        self.evaluator = OrderedListEvaluator()

    def test_correct_order(self):
        result = self.evaluator.evaluate(
            "List the latest events.", "1. Carol\n2. Bob\n3. Alice",
            expected(AnswerType.LIST_OF_STRINGS, ["Carol", "Bob", "Alice"]),
        )

        assert result.passed
        assert result.similarity_score == 1.0
        assert result.error_message is None

    def test_wrong_order(self):
        result = self.evaluator.evaluate(
            "List the three most recent events.", "1. Carol 2. Alice 3. Bob",
            expected(AnswerType.LIST_OF_STRINGS, ["Carol", "Bob", "Alice"]),
        )

        assert not result.passed
        assert result.similarity_score == pytest.approx(1 / 3)
        assert result.error_message == "Correct order for 1/3 items"

    def test_missing_items(self):
        result = self.evaluator.evaluate(
            "List them.", "Carol, Bob",
            expected(AnswerType.LIST_OF_STRINGS, ["Carol", "Bob", "Alice"]),
        )

        assert result.similarity_score == pytest.approx(2 / 3)
        assert result.error_message == "Correct order for 2/3 items (got 2 items, expected 3)"

    def test_empty_expected(self):
        result = self.evaluator.evaluate("List them.", "Anything",
                                         expected(AnswerType.LIST_OF_STRINGS, []))
        assert result.passed


class TestUnorderedListEvaluator:
    """Test cases for UnorderedListEvaluator."""

    def setup_method(self):
        """Set up test fixtures."""
        self.evaluator = UnorderedListEvaluator()
        self.expected = expected(AnswerType.LIST_OF_STRINGS,
                                 ["Alice", "Bob", "Carol"], ["Dave", "Eve"])

    def test_all_found(self):
        result = self.evaluator.evaluate("Who joined?", "Carol\nAlice\nBob", self.expected)

        assert result.passed
        assert result.similarity_score == 1.0
        assert result.error_message is None

    def test_invalid_item_penalty(self):
        result = self.evaluator.evaluate("Who joined?", "Alice, Bob, Carol, Dave", self.expected)

        assert not result.passed
        assert result.similarity_score == pytest.approx(2 / 3)
        assert result.error_message == "1 invalid item(s) included"

    def test_penalty_is_monotonic(self):
        answers = [
            "Alice, Bob, Carol",
            "Alice, Bob, Carol, Dave",
            "Alice, Bob, Carol, Dave, Eve",
        ]
        scores = [self.evaluator.evaluate("Who?", answer, self.expected).similarity_score
                  for answer in answers]

        assert scores == pytest.approx([1.0, 2 / 3, 1 / 3])

    def test_score_floor(self):
        result = self.evaluator.evaluate(
            "Who?", "Bob, Carol",
            expected(AnswerType.LIST_OF_STRINGS, ["Alice"], ["Bob", "Carol"]),
        )

        assert result.similarity_score == 0.0
        assert result.error_message == "Found 0/1 expected items, 2 invalid item(s) included"

    def test_model_items_match_once(self):
        result = self.evaluator.evaluate(
            "Who?", "John", expected(AnswerType.LIST_OF_STRINGS, ["Jon", "John"])
        )

        assert result.similarity_score == pytest.approx(0.5)
        assert result.error_message == "Found 1/2 expected items"

    def test_empty_expected(self):
        assert self.evaluator.evaluate(
            "Who?", "Anyone", expected(AnswerType.LIST_OF_STRINGS, [])
        ).passed
        assert self.evaluator.evaluate(
            "Who?", "Mallory", expected(AnswerType.LIST_OF_STRINGS, [], ["Mallory"])
        ).similarity_score == 0.0

    def test_repeated_calls_are_independent(self):
        first = self.evaluator.evaluate("Who?", "Alice, Bob, Carol", self.expected)
        second = self.evaluator.evaluate("Who?", "Alice, Bob, Carol", self.expected)
        assert first == second


class TestObjectListEvaluator:
    """Test cases for ObjectListEvaluator."""

    def setup_method(self):
        """Set up test fixtures."""
        self.evaluator = ObjectListEvaluator()
        self.expected = expected(AnswerType.LIST_OF_OBJECTS, [
            {"event_name": "Gala", "date": "2024-01-01"},
            {"event_name": "Launch", "date": "2024-02-01"},
        ])

    def test_rows_counted(self):
        result = self.evaluator.evaluate("Which events?", "Gala, 2024-01-01\nLaunch, 2024-02-01",
                                         self.expected)
        assert result.passed
        assert result.similarity_score == 1.0

    def test_missing_rows(self):
        result = self.evaluator.evaluate("Which events?", "Gala, 2024-01-01", self.expected)

        assert not result.passed
        assert result.similarity_score == pytest.approx(0.5)
        assert result.error_message == "Found 1/2 expected objects"

    def test_extra_rows_capped(self):
        answer = "event, date\nGala, 2024-01-01\nLaunch, 2024-02-01"
        result = self.evaluator.evaluate("Which events?", answer, self.expected)
        assert result.similarity_score == 1.0

    def test_falls_back_to_names(self):
        result = self.evaluator.evaluate("Which events?", "Launch\nGala", self.expected)

        assert result.passed
        assert result.expected["valid_values"][0]["event_name"] == "Gala"

    def test_fallback_reports_missing_names(self):
        result = self.evaluator.evaluate("Which events?", "Picnic", self.expected)

        assert not result.passed
        assert result.error_message == "Found 0/2 expected items"


class TestHelpers:
    """Test cases for evaluator helpers."""

    def test_object_label(self):
        assert object_label({"name": "Alice", "title": "CEO"}) == "Alice"
        assert object_label({"id": 1, "city": "Paris"}) == "Paris"
        assert object_label({"id": 1}) == "{'id': 1}"
        assert object_label("plain") == "plain"

    def test_describe_result(self):
        result = NumberEvaluator().evaluate("How many?", "There are 3",
                                            expected(AnswerType.NUMBER, [3]))
        assert describe_result(result) == {"passed": True, "score": 1.0, "error": None}
