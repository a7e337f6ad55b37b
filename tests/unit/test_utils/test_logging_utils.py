"""
Tests for Logging Utilities
"""

import json
import logging

import pytest

from csvqa_eval.utils.logging import JSONFormatter, PerformanceTimer, _parse_size, get_logger


class TestParseSize:
    """Test cases for _parse_size."""

    @pytest.mark.parametrize("value,expected", [
        ("10MB", 10 * 1024 ** 2),
        ("512kb", 512 * 1024),
        ("1.5GB", int(1.5 * 1024 ** 3)),
        ("100B", 100),
        ("lots", 10 * 1024 ** 2),
    ])
    def test_sizes(self, value, expected):
        assert _parse_size(value) == expected


class TestJSONFormatter:
    """Test cases for JSONFormatter."""

    def test_includes_extra_fields(self):
        record = logging.LogRecord("csvqa_eval.test", logging.INFO, __file__, 10,
                                   "graded %s", ("answer",), None)
        record.answer_type = "number"
        record.case_index = 3

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "graded answer"
        assert entry["level"] == "INFO"
        assert entry["answer_type"] == "number"
        assert entry["case_index"] == 3
        assert "query_type" not in entry


class TestPerformanceTimer:
    """Test cases for PerformanceTimer."""

    def test_records_duration(self, caplog):
        logger = get_logger("csvqa_eval.test")
        with caplog.at_level(logging.INFO, logger="csvqa_eval.test"):
            with PerformanceTimer("grading", logger) as timer:
                pass

        assert timer.duration >= 0.0
        assert "Completed grading" in caplog.text

    def test_logs_failure(self, caplog):
        logger = get_logger("csvqa_eval.test")
        with caplog.at_level(logging.INFO, logger="csvqa_eval.test"):
            with pytest.raises(ValueError):
                with PerformanceTimer("grading", logger):
                    raise ValueError("boom")

        assert "Failed grading" in caplog.text
