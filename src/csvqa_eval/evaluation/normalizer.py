"""
Response Normalization

Pure text, number and list normalization primitives used by every answer
evaluator, plus CSV-row and date extraction from free-form model responses.
"""

import re
from datetime import date, datetime
from typing import Any, List, Optional, Sequence, Union

from ..utils.logging import get_logger

logger = get_logger(__name__)

CURRENCY_PATTERN = re.compile(r'[$,€£¥]')
NUMBER_PATTERN = re.compile(r'-?\d+(?:\.\d+)?')
PUNCTUATION_PATTERN = re.compile(r'[.,;:!?"\']')
WHITESPACE_PATTERN = re.compile(r'\s+')

# Item separators: comma, newline, semicolon, pipe, and inline "2. " / "3) "
# ordinals that follow whitespace.
ITEM_SPLIT_PATTERN = re.compile(r'[,\n;|]|\s+(?=\d+[.)]\s)')
LEADING_MARKER_PATTERN = re.compile(r'^(?:\d+[.)]|[-*+•])\s*')
HAS_LETTER_PATTERN = re.compile(r'[a-zA-Z]')

TABULAR_HEADER_TOKENS = {'name', 'title', 'player_name', 'event_name'}
TABULAR_MIN_COMMAS = 3
TABULAR_MIN_LINES = 2

MONTH_NAMES = (
    'january|february|march|april|may|june|july|august|september|'
    'october|november|december|jan|feb|mar|apr|jun|jul|aug|sep|sept|oct|nov|dec'
)

# (pattern, strptime formats) tried in order
DATE_FORMATS = [
    (re.compile(r'\b\d{4}-\d{2}-\d{2}\b'), ['%Y-%m-%d']),
    (re.compile(r'\b\d{2}/\d{2}/\d{4}\b'), ['%m/%d/%Y']),
    (re.compile(r'\b\d{1,2}\s+(?:' + MONTH_NAMES + r')\s+\d{4}\b', re.IGNORECASE),
     ['%d %B %Y', '%d %b %Y']),
]


def normalize_number(value: Any) -> Optional[float]:
    """
    Extract a numeric value from a scalar.

    Currency symbols and thousands separators are stripped before the first
    signed decimal number is taken.

    Args:
        value: Number, string or any other object

    Returns:
        The number as float, or None when no number is present
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)

    cleaned = CURRENCY_PATTERN.sub('', str(value).strip())
    match = NUMBER_PATTERN.search(cleaned)
    if match:
        return float(match.group(0))
    return None


def normalize_string(value: Any) -> str:
    """Lowercase, drop punctuation and collapse whitespace."""
    if value is None:
        return ""
    text = PUNCTUATION_PATTERN.sub('', str(value).lower())
    return WHITESPACE_PATTERN.sub(' ', text).strip()


def _split_items(text: str) -> List[str]:
    """Split free text into normalized, non-empty list items."""
    items = []
    for raw_item in ITEM_SPLIT_PATTERN.split(text):
        item = LEADING_MARKER_PATTERN.sub('', raw_item.strip())
        item = normalize_string(item)
        if item:
            items.append(item)
    return items


def _unique_in_order(items: List[str]) -> List[str]:
    seen = set()
    unique = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


def normalize_list(text: Union[str, Sequence[Any]]) -> List[str]:
    """
    Normalize a list answer for order-insensitive comparison.

    Args:
        text: Free text with delimited items, or an already split sequence

    Returns:
        Sorted list of unique normalized items
    """
    if isinstance(text, (list, tuple)):
        items = [normalize_string(item) for item in text]
        return sorted({item for item in items if item})

    return sorted(set(_split_items(str(text))))


def extract_ordered_list(text: Union[str, Sequence[Any]]) -> List[str]:
    """
    Normalize a list answer keeping the order items were first mentioned.

    Tabular answers (several lines with at least three commas each) are
    read column-wise: the second field of each line is taken as the item
    label, skipping headers and numeric cells.

    Args:
        text: Free text, CSV-like text or an already split sequence

    Returns:
        Unique normalized items in first-seen order
    """
    if isinstance(text, (list, tuple)):
        return _unique_in_order([item for item in map(normalize_string, text) if item])

    lines = [line for line in str(text).split('\n') if line.strip()]
    tabular_lines = [line for line in lines if line.count(',') >= TABULAR_MIN_COMMAS]

    if len(tabular_lines) < TABULAR_MIN_LINES:
        return _unique_in_order(_split_items(str(text)))

    labels = []
    for line in lines:
        columns = [column.strip() for column in line.split(',')]
        if len(columns) < 2:
            continue
        label = columns[1]
        if (HAS_LETTER_PATTERN.search(label)
                and not label.isdigit()
                and label.lower() not in TABULAR_HEADER_TOKENS):
            normalized = normalize_string(label)
            if normalized:
                labels.append(normalized)

    logger.debug(f"Read {len(labels)} labels from {len(lines)} tabular lines")
    return _unique_in_order(labels)


def extract_csv_rows(text: Any) -> List[List[str]]:
    """Return comma-separated rows found in the text (header rows included)."""
    if text is None:
        return []

    rows = []
    for line in str(text).strip().split('\n'):
        line = line.rstrip()
        if ',' in line and not line.endswith(':'):
            values = [value.strip() for value in line.split(',')]
            if len(values) >= 2:
                rows.append(values)
    return rows


def extract_date(text: Any) -> Optional[date]:
    """
    Find and parse the first recognizable date in the text.

    Supports ``YYYY-MM-DD``, ``MM/DD/YYYY`` and ``D Month YYYY``.

    Args:
        text: Text that may contain a date

    Returns:
        Parsed date, or None if no supported date could be parsed
    """
    if text is None:
        return None

    value = str(text)
    for pattern, formats in DATE_FORMATS:
        match = pattern.search(value)
        if not match:
            continue
        candidate = WHITESPACE_PATTERN.sub(' ', match.group(0))
        for fmt in formats:
            try:
                return datetime.strptime(candidate, fmt).date()
            except ValueError:
                continue
    return None
