import logging
from logging.handlers import RotatingFileHandler

import pytest

import containerps.main as app_main
from containerps.config import AppConfig


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_setup_logging_uses_rotating_file(tmp_path, restore_root_logger):
    config = AppConfig()
    config.logging.file_path = str(tmp_path / "containerps.log")
    config.logging.level = "debug"

    path = app_main.setup_logging(config)

    root = logging.getLogger()
    assert path == config.logging.file_path
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler, RotatingFileHandler)
    assert handler.maxBytes == 10 * 1024 * 1024
    assert handler.backupCount == 5


def test_run_wires_context_and_starts_app(tmp_path, mocker, restore_root_logger):
    config = AppConfig()
    config.logging.file_path = str(tmp_path / "containerps.log")
    manager = mocker.patch("containerps.main.ConfigManager")
    manager.return_value.get_config.return_value = config
    backend = mocker.patch("containerps.main.DockerBackend")
    backend.return_value.engine_version.return_value = None
    app_cls = mocker.patch("containerps.main.ContainerPSApp")

    app_main.run()

    app = app_cls.return_value
    app_cls.assert_called_once_with(config)
    context = app.attach.call_args.args[0]
    assert context.config is config
    assert context.dialog is app
    backend.return_value.engine_version.assert_called_once()
    app.run.assert_called_once()


def test_run_skips_engine_check_when_disabled(tmp_path, mocker, restore_root_logger):
    config = AppConfig()
    config.engine.check_engine = False
    config.logging.file_path = str(tmp_path / "containerps.log")
    mocker.patch("containerps.main.ConfigManager").return_value.get_config.return_value = config
    backend = mocker.patch("containerps.main.DockerBackend")
    mocker.patch("containerps.main.ContainerPSApp")

    app_main.run()

    backend.assert_not_called()
