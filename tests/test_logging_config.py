import json
import logging

import pytest
import structlog

from servicebox import ContainerSettings
from servicebox.logging_config import configure_from_settings, configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    structlog.reset_defaults()
    logging.basicConfig(force=True)


def test_configure_logging_json_to_file(tmp_path):
    log_file = tmp_path / "logs" / "servicebox.log"
    configure_logging(level="DEBUG", json_output=True, log_file=log_file)
    get_logger("servicebox.test").info("service_built", contract="Logger")
    for handler in logging.getLogger().handlers:
        handler.flush()

    record = json.loads(log_file.read_text().splitlines()[-1])
    assert record["event"] == "service_built"
    assert record["contract"] == "Logger"
    assert record["level"] == "info"


def test_configure_from_settings_sets_level():
    configure_from_settings(ContainerSettings(log_level="WARNING"))
    assert logging.getLogger().level == logging.WARNING


def test_console_output_to_file_has_no_colors(tmp_path):
    log_file = tmp_path / "servicebox.log"
    configure_from_settings(ContainerSettings(log_level="DEBUG"), log_file=log_file)
    get_logger("servicebox.test").debug("service_registered", contract="Logger")
    for handler in logging.getLogger().handlers:
        handler.flush()

    text = log_file.read_text()
    assert "service_registered" in text
    assert "contract=Logger" in text
    assert "\x1b[" not in text
