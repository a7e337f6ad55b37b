"""
Core Module

Configuration management and exception hierarchy.
"""

from .config import AppConfig, EvaluationConfig, LoggingConfig, get_config, set_config, reload_config
from .exceptions import CsvQaEvalException, ConfigurationError, EvaluationError, DatasetError

__all__ = [
    "AppConfig",
    "EvaluationConfig",
    "LoggingConfig",
    "get_config",
    "set_config",
    "reload_config",
    "CsvQaEvalException",
    "ConfigurationError",
    "EvaluationError",
    "DatasetError",
]
