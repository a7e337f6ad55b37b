"""
Pytest Configuration

Global test configuration, fixtures, and utilities for the
answer evaluation test suite.
"""

import pytest
import tempfile
from pathlib import Path

# Add src to Python path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from csvqa_eval.core.config import AppConfig, EvaluationConfig, LoggingConfig, set_config
from csvqa_eval.evaluation.grader import AnswerEvaluator


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def eval_config():
    """Provide default evaluation settings."""
    return EvaluationConfig()


@pytest.fixture
def test_config(temp_dir):
    """Provide test configuration."""
    return AppConfig(
        name="Test csvqa-eval",
        version="test",
        debug=True,
        evaluation=EvaluationConfig(),
        logging=LoggingConfig(
            level="DEBUG",
            console_level="ERROR",
            file=str(temp_dir / "test.log")
        ),
    )


@pytest.fixture
def evaluator(eval_config):
    """Provide an answer evaluator with default settings."""
    return AnswerEvaluator(eval_config)


@pytest.fixture
def sample_cases():
    """Provide grading cases covering every answer type."""
    return [
        {
            "question": "How many events were there?",
            "model_answer": "There were approximately 42 events in total.",
            "expected": {"answer_type": "number", "valid_values": [42]},
        },
        {
            "question": "Who was the top performer?",
            "model_answer": "The top performer was Alice Johnson, with 120 points.",
            "expected": {"answer_type": "string", "valid_values": ["Alice Johnson"]},
        },
        {
            "question": "Which players joined the team?",
            "model_answer": "Alice, Bob, Carol, Dave",
            "expected": {
                "answer_type": "list_of_strings",
                "valid_values": ["Alice", "Bob", "Carol"],
                "invalid_values": ["Dave"],
            },
        },
        {
            "question": "List the three most recent events.",
            "model_answer": "1. Carol 2. Alice 3. Bob",
            "query_type": "latest_n",
            "expected": {"answer_type": "list_of_strings", "valid_values": ["Carol", "Bob", "Alice"]},
        },
        {
            "question": "What is the event count and trend?",
            "model_answer": "The count is 10, and the trend is trending upward.",
            "expected": {
                "answer_type": "number",
                "valid_values": [10],
                "bonus": {"answer_type": "string", "valid_values": ["trending upward"]},
            },
        },
    ]


# Pytest markers for test categorization

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external dependencies"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that drive the command-line interface"
    )


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch):
    """Isolate tests from environment overrides and cached configuration."""
    monkeypatch.delenv("CSVQA_LOG_LEVEL", raising=False)
    monkeypatch.delenv("CSVQA_SIMILARITY_THRESHOLD", raising=False)
    set_config(AppConfig())
    yield
    set_config(None)
