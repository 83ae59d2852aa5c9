import json
import logging
import logging.handlers
import pytest
from errors import ConfigurationError
from utils import load_config, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_load_config_reads_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"flow_parameters": {"scale": 4}}))
    config = load_config(str(path))
    assert config["flow_parameters"] == {"scale": 4}
    assert config["visualization"] == {}
    assert config["run_control"] == {}
    assert config["logging"] == {}


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"))


def test_load_config_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))


def test_setup_logging_creates_rotating_log_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "flow.log"
    setup_logging({"logging": {"level": "debug", "log_file": str(log_file)}})

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)

    logging.info("hello from the test")
    for handler in root.handlers:
        handler.flush()
    assert "hello from the test" in log_file.read_text()


def test_setup_logging_without_file(restore_root_logger):
    setup_logging({"logging": {"log_file": None}})
    root = logging.getLogger()
    assert not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)


def test_load_config_rejects_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_load_config_rejects_non_object_section(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"visualization": [800, 600]}))
    with pytest.raises(ConfigurationError):
        load_config(str(path))
