"""
Grading Case Loader

Reads question/answer cases (with model answers already collected)
from JSON or YAML files.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..core.exceptions import ConfigurationError, DatasetError
from ..evaluation.types import ExpectedAnswer
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class GradingCase:
    """One question with the model's answer and the expected answer."""
    question: str
    model_answer: Any
    expected: ExpectedAnswer
    query_type: Optional[str] = None


def _read_document(path: Path) -> Any:
    text = path.read_text(encoding='utf-8')
    if path.suffix.lower() in ('.yaml', '.yml'):
        return yaml.safe_load(text)
    return json.loads(text)


def parse_case(raw: Dict[str, Any], index: int, file_path: str = "<memory>") -> GradingCase:
    """Validate and convert one raw case."""
    if not isinstance(raw, dict):
        raise DatasetError(f"Case {index} must be a mapping", file_path=file_path, case_index=index)
    if 'question' not in raw:
        raise DatasetError(f"Case {index} is missing 'question'", file_path=file_path, case_index=index)
    if 'expected' not in raw:
        raise DatasetError(f"Case {index} is missing 'expected'", file_path=file_path, case_index=index)

    try:
        expected = ExpectedAnswer.from_dict(raw['expected'])
    except ConfigurationError as e:
        raise DatasetError(f"Case {index}: {e.message}", file_path=file_path,
                           case_index=index) from e

    model_answer = raw.get('model_answer', raw.get('modelAnswer'))
    return GradingCase(
        question=raw['question'],
        model_answer=model_answer,
        expected=expected,
        query_type=raw.get('query_type') or expected.query_type,
    )


def load_cases(file_path: Path) -> List[GradingCase]:
    """
    Load grading cases from a JSON or YAML file.

    The file holds either a list of cases or a mapping with a ``cases`` list.
    Each case has ``question``, ``model_answer`` and ``expected`` keys and an
    optional ``query_type``.

    Raises:
        DatasetError: If the file cannot be read or a case is malformed
    """
    path = Path(file_path)
    try:
        document = _read_document(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise DatasetError(f"Could not read cases: {str(e)}", file_path=str(path)) from e

    if isinstance(document, dict):
        document = document.get('cases')
    if not isinstance(document, list):
        raise DatasetError("Cases file must contain a list of cases", file_path=str(path))

    cases = [parse_case(raw, index, str(path)) for index, raw in enumerate(document)]
    logger.info(f"Loaded {len(cases)} grading cases from {path}")
    return cases
