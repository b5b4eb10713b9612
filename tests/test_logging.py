"""
Test Logging Module
===================
"""

import json
import logging
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.logging import JSONFormatter, get_logger


class TestGetLogger:
    """Tests for logger naming."""

    def test_namespaced(self):
        assert get_logger("responder.loaders").logger.name == "techsupport.responder.loaders"

    def test_already_namespaced(self):
        assert get_logger("techsupport.main").logger.name == "techsupport.main"

    def test_extra_reaches_record(self, caplog):
        caplog.set_level(logging.INFO, logger="techsupport")
        logger = get_logger("tests", resource="default.txt")

        logger.info("loaded")

        assert caplog.records[-1].resource == "default.txt"


class TestJSONFormatter:
    """Tests for structured output."""

    def test_format(self):
        record = logging.LogRecord(
            "techsupport.test", logging.WARNING, __file__, 10, "File not found: %s", ("x.txt",), None
        )
        record.resource = "x.txt"

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "WARNING"
        assert data["message"] == "File not found: x.txt"
        assert data["resource"] == "x.txt"
