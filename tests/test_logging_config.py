import logging

from geometrylabs.logging_config import PACKAGE_LOGGER, level_from_name, setup_logging


def test_level_from_name():
    assert level_from_name("debug") == logging.DEBUG
    assert level_from_name(" WARNING ") == logging.WARNING
    assert level_from_name("chatty") == logging.INFO
    assert level_from_name(logging.ERROR) == logging.ERROR


def test_setup_logging_writes_file_and_replaces_handlers(tmp_path):
    log_file = tmp_path / "logs" / "labs.log"
    logger = setup_logging("DEBUG", str(log_file))
    try:
        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        logging.getLogger("geometrylabs.model.pipeline").debug("queued")
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "Logging initialized at DEBUG." in text
        assert "geometrylabs.model.pipeline - DEBUG - queued" in text

        setup_logging(logging.WARNING)
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
