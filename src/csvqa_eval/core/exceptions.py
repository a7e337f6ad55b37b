"""
Custom Exception Classes

Application-specific exception classes for error handling
throughout the answer evaluation system.
"""

from typing import Optional, Any, Dict


class CsvQaEvalException(Exception):
    """Base exception class for all csvqa-eval errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(CsvQaEvalException):
    """Raised for invalid configuration or malformed expected-answer descriptors."""
    pass


class EvaluationError(CsvQaEvalException):
    """Raised when an answer cannot be evaluated."""

    def __init__(self, message: str, question: Optional[str] = None,
                 answer_type: Optional[str] = None, **kwargs):
        super().__init__(message, kwargs)
        self.question = question
        self.answer_type = answer_type


class DatasetError(CsvQaEvalException):
    """Raised when a file of grading cases cannot be loaded."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 case_index: Optional[int] = None, **kwargs):
        super().__init__(message, kwargs)
        self.file_path = file_path
        self.case_index = case_index
