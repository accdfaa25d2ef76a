import logging

from config.logging_config import setup_logging


def test_stdout_only_without_log_dir(tmp_path):
    logger = setup_logging("MyGPTTest", level="debug", log_dir=tmp_path / "missing")

    assert logger.level == logging.DEBUG
    assert not logger.propagate
    assert [type(handler) for handler in logger.handlers] == [logging.StreamHandler]


def test_file_handler_when_log_dir_exists(tmp_path):
    logger = setup_logging("MyGPTFileTest", level="warning", log_dir=tmp_path)

    logger.warning("[Test] written to file")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.WARNING
    assert "[Test] written to file" in (tmp_path / "MyGPTFileTest.log").read_text(encoding="utf-8")


def test_unknown_level_falls_back_to_info(tmp_path):
    logger = setup_logging("MyGPTLevelTest", level="chatty", log_dir=tmp_path / "missing")

    assert logger.level == logging.INFO


def test_reconfiguring_replaces_handlers(tmp_path):
    setup_logging("MyGPTRepeatTest", log_dir=tmp_path / "missing")
    logger = setup_logging("MyGPTRepeatTest", log_dir=tmp_path / "missing")

    assert len(logger.handlers) == 1
