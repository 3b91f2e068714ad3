# tests/test_logging.py

import json
import sys
import logging

from populator.core.logging_config import (
    PopulatorFormatter,
    PopulatorLogger,
    get_class_logger,
    log_with_context,
)
from populator.transform import TransformRegistry


def test_logger_names_are_namespaced():
    assert PopulatorLogger.get_logger("cli.context").name == "populator.cli.context"
    assert PopulatorLogger.get_logger("populator.x").name == "populator.x"


def test_class_logger_strips_package_prefix():
    logger = get_class_logger(TransformRegistry())
    assert logger.name == "populator.transform.registry.TransformRegistry"


def test_formatter_emits_json_with_context():
    record = logging.LogRecord("populator.test", logging.INFO, "", 0, "Configured transform", (), None)
    record.rule_kind = "defaults"
    record.operator = "status"
    record.value = {"nested": True}
    record.unrelated = "dropped"

    entry = json.loads(PopulatorFormatter().format(record))

    assert entry["message"] == "Configured transform"
    assert entry["level"] == "INFO"
    assert entry["context"] == {"rule_kind": "defaults", "operator": "status", "value": {"nested": True}}


def test_formatter_without_context():
    record = logging.LogRecord("populator.test", logging.INFO, "", 0, "plain", (), None)
    record.operator = "status"

    entry = json.loads(PopulatorFormatter(include_context=False).format(record))
    assert "context" not in entry


def test_log_with_context_respects_level(caplog):
    logger = PopulatorLogger.get_logger("test.levels")
    caplog.set_level(logging.WARNING, logger="populator")

    log_with_context(logger, logging.INFO, "hidden", operator="a")
    log_with_context(logger, logging.WARNING, "shown", operator="b")

    assert [r.getMessage() for r in caplog.records] == ["shown"]
    assert caplog.records[0].operator == "b"


def test_configure_writes_log_files(tmp_path, reset_logging):
    PopulatorLogger.configure(log_dir=tmp_path, log_level="INFO", console_enabled=False)
    logger = PopulatorLogger.get_logger("test.files")

    log_with_context(logger, logging.ERROR, "failed", error="boom")
    for handler in logging.getLogger("populator").handlers:
        handler.flush()

    assert "failed" in (tmp_path / "populator.log").read_text()
    assert "boom" in (tmp_path / "populator_errors.log").read_text()


def test_console_level_is_separate_from_file_level(tmp_path, reset_logging):
    PopulatorLogger.configure(log_dir=tmp_path, log_level="INFO", console_level="WARNING",
                              structured_format=False)
    root = logging.getLogger("populator")

    console, file_handler, error_handler = root.handlers

    assert console.level == logging.WARNING
    assert console.stream is sys.stderr
    assert file_handler.level == logging.INFO
    assert error_handler.level == logging.ERROR
    assert root.level == logging.INFO


def test_configure_runs_once(tmp_path, reset_logging):
    PopulatorLogger.configure(log_level="ERROR", file_enabled=False)
    PopulatorLogger.configure(log_level="DEBUG", file_enabled=False)

    assert logging.getLogger("populator").level == logging.ERROR
