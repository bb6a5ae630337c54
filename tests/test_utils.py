import json
import logging
import logging.handlers

import pytest

from constants import PARTICLE_COUNT
from utils import NOISY_LIBRARY_LOGGERS, load_config, network_params, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    library_levels = {name: logging.getLogger(name).level for name in NOISY_LIBRARY_LOGGERS}
    yield root
    for name, library_level in library_levels.items():
        logging.getLogger(name).setLevel(library_level)
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_load_config_reads_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"network": {"particle_count": 12}}))

    assert load_config(str(path)) == {"network": {"particle_count": 12}}


def test_load_config_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.json"))


def test_load_config_invalid_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))


def test_network_params_fills_defaults():
    params = network_params({"network": {"particle_count": 5, "seed": 3}})

    assert params["particle_count"] == 5
    assert params["seed"] == 3
    assert params["connection_distance"] == 180.0
    assert params["damping"] == 0.99


def test_network_params_without_section():
    params = network_params({})
    assert params["particle_count"] == PARTICLE_COUNT
    assert params["seed"] is None


def test_network_params_ignores_unknown_keys(caplog):
    with caplog.at_level(logging.WARNING):
        params = network_params({"network": {"gravity": 9.8}})

    assert "gravity" not in params
    assert "gravity" in caplog.text


def test_setup_logging_installs_console_and_rotating_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "network.log"
    setup_logging({"logging": {"level": "debug", "log_file": str(log_file)}})

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    assert any(type(h) is logging.StreamHandler for h in root.handlers)
    assert log_file.parent.is_dir()


def test_load_config_rejects_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]")

    with pytest.raises(ValueError):
        load_config(str(path))


def test_setup_logging_applies_rotation_settings(tmp_path, restore_root_logger):
    log_file = tmp_path / "network.log"
    setup_logging({"logging": {"log_file": str(log_file), "max_bytes": 2048, "backup_count": 2}})

    file_handlers = [
        h for h in restore_root_logger.handlers
        if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 2048
    assert file_handlers[0].backupCount == 2


def test_setup_logging_without_log_file(restore_root_logger):
    setup_logging({"logging": {"log_file": None}})

    handlers = restore_root_logger.handlers
    assert len(handlers) == 1
    assert not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in handlers)


def test_setup_logging_quiets_library_loggers(restore_root_logger):
    setup_logging({"logging": {"level": "DEBUG", "log_file": None}})

    assert restore_root_logger.level == logging.DEBUG
    assert logging.getLogger("numba").level == logging.WARNING
    assert logging.getLogger("pygame").level == logging.WARNING
    assert not logging.getLogger("numba").isEnabledFor(logging.DEBUG)
