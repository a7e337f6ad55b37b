"""
Configuration Management

Centralized configuration management with YAML file support
and environment variable overrides.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any, List, Tuple
from dataclasses import dataclass, field
import yaml

from .exceptions import ConfigurationError


# Relevance-filter ranges. A legitimate day count of 1000 or more is
# still discarded by the day heuristic.
DAY_RANGE: Tuple[int, int] = (0, 1000)
COUNT_MAX: int = 1000
YEAR_RANGE: Tuple[int, int] = (1900, 2100)

ORDERED_QUERY_TYPES: List[str] = [
    "greater_equal", "greater", "less_equal", "less",
    "before_date", "after_date", "between_dates",
    "latest_n", "earliest_n", "sort_asc", "sort_desc",
]


@dataclass
class EvaluationConfig:
    """Answer evaluation settings."""
    similarity_threshold: float = 0.85
    bonus_unit: float = 0.5
    numeric_tolerance: float = 1e-6
    day_range: Tuple[int, int] = DAY_RANGE
    count_max: int = COUNT_MAX
    year_range: Tuple[int, int] = YEAR_RANGE
    ordered_query_types: List[str] = field(default_factory=lambda: list(ORDERED_QUERY_TYPES))

    def __post_init__(self):
        self.similarity_threshold = float(self.similarity_threshold)
        self.bonus_unit = float(self.bonus_unit)
        self.numeric_tolerance = float(self.numeric_tolerance)
        self.day_range = tuple(self.day_range)
        self.year_range = tuple(self.year_range)
        self.validate()

    def validate(self) -> None:
        """Reject settings the evaluators cannot work with."""
        if not 0.0 < self.similarity_threshold <= 1.0:
            raise ConfigurationError(
                "similarity_threshold must be in (0, 1]",
                {"similarity_threshold": self.similarity_threshold}
            )
        if self.bonus_unit < 0:
            raise ConfigurationError(
                "bonus_unit must not be negative", {"bonus_unit": self.bonus_unit}
            )
        if self.numeric_tolerance < 0:
            raise ConfigurationError(
                "numeric_tolerance must not be negative",
                {"numeric_tolerance": self.numeric_tolerance}
            )
        for name in ("day_range", "year_range"):
            bounds = getattr(self, name)
            if len(bounds) != 2 or bounds[0] > bounds[1]:
                raise ConfigurationError(f"{name} must be a (low, high) pair", {name: bounds})


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    console_level: str = "WARNING"  # Separate level for console output
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    max_size: str = "10MB"
    backup_count: int = 5


@dataclass
class AppConfig:
    """Main application configuration."""
    name: str = "csvqa-eval"
    version: str = "1.0.0"
    debug: bool = False
    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: Path) -> "AppConfig":
        """Load configuration from YAML file."""
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f) or {}

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any]) -> "AppConfig":
        """Build configuration from a plain dictionary."""
        config_data = cls._apply_env_overrides(dict(config_data))

        # Handle nested app configuration structure
        if 'app' in config_data:
            app_config = config_data.pop('app')
            config_data.update(app_config)

        try:
            if 'evaluation' in config_data and isinstance(config_data['evaluation'], dict):
                config_data['evaluation'] = EvaluationConfig(**config_data['evaluation'])

            if 'logging' in config_data and isinstance(config_data['logging'], dict):
                config_data['logging'] = LoggingConfig(**config_data['logging'])

            return cls(**config_data)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {str(e)}") from e

    @staticmethod
    def _apply_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'CSVQA_LOG_LEVEL': ['logging', 'level'],
            'CSVQA_SIMILARITY_THRESHOLD': ['evaluation', 'similarity_threshold'],
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value:
                current = config_data
                for key in config_path[:-1]:
                    current = current.setdefault(key, {})
                current[config_path[-1]] = env_value

        return config_data


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config(config_path: Optional[Path] = None) -> AppConfig:
    """Get the application configuration instance."""
    global _config

    if _config is None:
        if config_path is None:
            # Default configuration path
            config_path = Path("config/default.yaml")

        if config_path.exists():
            _config = AppConfig.from_yaml(config_path)
        else:
            # Use default configuration if file doesn't exist
            _config = AppConfig()

    return _config


def set_config(config: AppConfig) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config


def reload_config(config_path: Optional[Path] = None) -> AppConfig:
    """Drop the cached configuration and load it again."""
    global _config
    _config = None
    return get_config(config_path)
