"""
Numeric Relevance Filtering

Model answers interleave the number being asked for with incidental numbers
such as dates, ranks and identifiers. This module extracts numeric candidates
and narrows them using heuristics keyed on the wording of the question.
"""

import re
from typing import Iterable, List, Optional, Tuple

from ..core.config import COUNT_MAX, DAY_RANGE, YEAR_RANGE
from ..utils.logging import get_logger
from .normalizer import MONTH_NAMES

logger = get_logger(__name__)

THOUSANDS_PATTERN = re.compile(r'\b\d{1,3}(?:,\d{3})+(?:\.\d+)?\b')
# A minus sign only counts when it is not glued to a preceding word,
# so "2024-05-01" yields 2024, 5 and 1 rather than -5 and -1.
SIGNED_NUMBER_PATTERN = re.compile(r'(?:(?<![\w-])-)?\d+(?:\.\d+)?')

# Numeric (2024-05-01, 03/15/2024), "5 March 2024" and "March 5, 2024" dates
DATE_SPAN_PATTERNS = [
    re.compile(r'\b\d{1,4}[-/]\d{1,2}[-/]\d{1,4}\b'),
    re.compile(r'\b\d{1,2}\s+(?:' + MONTH_NAMES + r')\.?\s+\d{4}\b', re.IGNORECASE),
    re.compile(r'\b(?:' + MONTH_NAMES + r')\.?\s+\d{1,2}\s*,?\s*\d{4}\b', re.IGNORECASE),
]

DAY_QUESTION_PATTERN = re.compile(r'\bdays?\b', re.IGNORECASE)
COUNT_QUESTION_PATTERN = re.compile(r'\bhow\s+many\b|\bcount', re.IGNORECASE)
DAY_CONTEXT_WORDS = ['days?']

# (value, start, end) of one numeral in collapsed text
NumberOccurrence = Tuple[float, int, int]


def format_number(number: float) -> str:
    """Render a number the way it would be written in text."""
    if float(number).is_integer():
        return str(int(number))
    return repr(float(number))


def _collapse_thousands(text: str) -> str:
    return THOUSANDS_PATTERN.sub(lambda match: match.group(0).replace(',', ''), text)


def _number_occurrences(text: str) -> List[NumberOccurrence]:
    return [(float(match.group(0)), match.start(), match.end())
            for match in SIGNED_NUMBER_PATTERN.finditer(text)]


def _date_spans(text: str) -> List[Tuple[int, int]]:
    return [match.span() for pattern in DATE_SPAN_PATTERNS for match in pattern.finditer(text)]


def _inside_date(start: int, end: int, spans: List[Tuple[int, int]]) -> bool:
    return any(span_start <= start and end <= span_end for span_start, span_end in spans)


def extract_numbers(text: str) -> List[float]:
    """
    Extract every signed decimal number from the text.

    Thousands-separated numerals ("2,810") are collapsed first so that
    they are read as one number; other commas are left untouched.
    """
    return [value for value, _, _ in _number_occurrences(_collapse_thousands(text))]


def is_year_like(number: float, year_range: Tuple[int, int] = YEAR_RANGE) -> bool:
    """True for integers inside the plausible year range."""
    return float(number).is_integer() and year_range[0] <= number <= year_range[1]


def is_part_of_date(number: float, text: str,
                    year_range: Tuple[int, int] = YEAR_RANGE) -> bool:
    """
    Decide whether a number is (probably) a date component.

    Args:
        number: Candidate number
        text: Source text the number was extracted from
        year_range: Inclusive range treated as years

    Returns:
        True if the number looks like a year, or if it occurs in the text
        and every occurrence lies inside a date
    """
    if is_year_like(number, year_range):
        return True

    collapsed = _collapse_thousands(text)
    occurrences = [(start, end) for value, start, end in _number_occurrences(collapsed)
                   if value == number]
    if not occurrences:
        return False

    spans = _date_spans(collapsed)
    return all(_inside_date(start, end, spans) for start, end in occurrences)


def extract_numbers_with_context(text: str, context_words: Iterable[str]) -> List[float]:
    """
    Find numbers explicitly labelled by a context word.

    Matches both "<number> <word>" ("12 days") and "<word>: <number>"
    ("days: 12"). Context words are regular expression fragments.

    Returns:
        Unique numbers in order of discovery
    """
    numbers = []
    for context_word in context_words:
        forward = re.compile(rf'(\d+(?:\.\d+)?)\s*{context_word}\b', re.IGNORECASE)
        reverse = re.compile(rf'\b{context_word}\s*:\s*(\d+(?:\.\d+)?)', re.IGNORECASE)
        for pattern in (forward, reverse):
            numbers.extend(float(match) for match in pattern.findall(text))

    unique = []
    for number in numbers:
        if number not in unique:
            unique.append(number)
    return unique


class NumberRelevanceFilter:
    """Selects the numbers in an answer that could answer the question."""

    def __init__(self,
                 day_range: Tuple[int, int] = DAY_RANGE,
                 count_max: int = COUNT_MAX,
                 year_range: Tuple[int, int] = YEAR_RANGE):
        """
        Initialize the filter.

        Args:
            day_range: [low, high) range of plausible day counts
            count_max: Largest plausible answer to a counting question
            year_range: Inclusive range of integers treated as years
        """
        self.day_range = day_range
        self.count_max = count_max
        self.year_range = year_range

    @classmethod
    def from_config(cls, config) -> "NumberRelevanceFilter":
        """Build a filter from an EvaluationConfig."""
        return cls(day_range=config.day_range,
                   count_max=config.count_max,
                   year_range=config.year_range)

    def exclude_dates(self, text: str) -> List[float]:
        """
        Extract the numbers in ``text`` that are not years or date components.

        Each numeral is judged by where it occurs, so the 5 in
        "5 events on 2024-05-01" is kept while the "05" inside the date is not.
        """
        collapsed = _collapse_thousands(text)
        spans = _date_spans(collapsed)
        return [value for value, start, end in _number_occurrences(collapsed)
                if not is_year_like(value, self.year_range)
                and not _inside_date(start, end, spans)]

    def extract_relevant_numbers(self, question: Optional[str], text: str) -> List[float]:
        """
        Extract the numbers in ``text`` that plausibly answer ``question``.

        Args:
            question: The question that was asked (may be empty)
            text: The model answer

        Returns:
            Candidate numbers in order of appearance
        """
        question = question or ""
        candidates = self.exclude_dates(text)

        if DAY_QUESTION_PATTERN.search(question):
            labelled = extract_numbers_with_context(text, DAY_CONTEXT_WORDS)
            if labelled:
                logger.debug(f"Using explicitly labelled day counts: {labelled}")
                return labelled
            low, high = self.day_range
            return [num for num in candidates
                    if low <= num < high and not is_year_like(num, self.year_range)]

        if COUNT_QUESTION_PATTERN.search(question):
            return [num for num in candidates
                    if float(num).is_integer()
                    and 0 <= num <= self.count_max
                    and not is_year_like(num, self.year_range)]

        return candidates
