"""
Evaluation Data Types

Expected-answer descriptors, query classifications and grading results
shared by all evaluators.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from ..core.exceptions import ConfigurationError


class AnswerType(str, Enum):
    """Shapes an expected answer can take."""
    NUMBER = "number"
    STRING = "string"
    LIST_OF_STRINGS = "list_of_strings"
    LIST_OF_OBJECTS = "list_of_objects"

    @classmethod
    def parse(cls, value: Any) -> "AnswerType":
        """Resolve a declared answer type, rejecting unknown names."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.STRING
        name = str(value).strip().lower()
        if name == "strings":
            return cls.STRING
        try:
            return cls(name)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ConfigurationError(
                f"Unknown answer_type '{value}'", {"valid_types": valid}
            ) from None


class QueryType(str, Enum):
    """Known query classifications for list questions."""
    GREATER_EQUAL = "greater_equal"
    GREATER = "greater"
    LESS_EQUAL = "less_equal"
    LESS = "less"
    BEFORE_DATE = "before_date"
    AFTER_DATE = "after_date"
    BETWEEN_DATES = "between_dates"
    LATEST_N = "latest_n"
    EARLIEST_N = "earliest_n"
    SORT_ASC = "sort_asc"
    SORT_DESC = "sort_desc"


def _as_list(values: Any) -> List[Any]:
    if values is None:
        return []
    if isinstance(values, (list, tuple, set)):
        return list(values)
    return [values]


@dataclass
class ExpectedAnswer:
    """What a correct model answer must contain."""
    answer_type: AnswerType
    valid_values: List[Any] = field(default_factory=list)
    invalid_values: List[Any] = field(default_factory=list)
    bonus: Optional["ExpectedAnswer"] = None
    query_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExpectedAnswer":
        """
        Build a descriptor from its JSON-shaped form.

        Args:
            data: Mapping with ``answer_type``, ``valid_values`` and optional
                ``invalid_values``, ``bonus`` and ``query_type`` keys

        Raises:
            ConfigurationError: If the mapping is malformed or names an
                unknown answer type
        """
        if isinstance(data, ExpectedAnswer):
            return data
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Expected answer must be a mapping, got {type(data).__name__}"
            )

        bonus = data.get("bonus")
        return cls(
            answer_type=AnswerType.parse(data.get("answer_type")),
            valid_values=_as_list(data.get("valid_values")),
            invalid_values=_as_list(data.get("invalid_values")),
            bonus=cls.from_dict(bonus) if bonus else None,
            query_type=data.get("query_type"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Echo the descriptor in its JSON-shaped form."""
        data: Dict[str, Any] = {
            "answer_type": self.answer_type.value,
            "valid_values": list(self.valid_values),
        }
        if self.invalid_values:
            data["invalid_values"] = list(self.invalid_values)
        if self.bonus is not None:
            data["bonus"] = self.bonus.to_dict()
        if self.query_type:
            data["query_type"] = self.query_type
        return data


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class EvalResult:
    """Outcome of grading one model answer."""
    question: Optional[str]
    model_answer: Any
    expected: Any
    passed: bool
    similarity_score: float
    error_message: Optional[str] = None
    bonus_score: float = 0.0
    bonus_reason: Optional[str] = None
    total_score: float = field(init=False)
    timestamp: str = field(default_factory=_utc_timestamp, compare=False)

    def __post_init__(self):
        self.similarity_score = min(1.0, max(0.0, float(self.similarity_score)))
        self.total_score = self.similarity_score + self.bonus_score

    def with_bonus(self, bonus_score: float, bonus_reason: str) -> "EvalResult":
        """Copy of this result with a bonus applied."""
        return EvalResult(
            question=self.question,
            model_answer=self.model_answer,
            expected=self.expected,
            passed=self.passed,
            similarity_score=self.similarity_score,
            error_message=self.error_message,
            bonus_score=bonus_score,
            bonus_reason=bonus_reason,
            timestamp=self.timestamp,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the report field names."""
        return {
            "question": self.question,
            "modelAnswer": self.model_answer,
            "expected": self.expected,
            "passed": self.passed,
            "similarityScore": self.similarity_score,
            "bonusScore": self.bonus_score,
            "totalScore": self.total_score,
            "bonusReason": self.bonus_reason,
            "errorMessage": self.error_message,
            "timestamp": self.timestamp,
        }


@dataclass
class BonusResult:
    """Outcome of checking bonus criteria."""
    passed: bool
    reason: str
