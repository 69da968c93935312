# tests/unit/test_logging.py
import logging

from healthlens.utils.logging import HANDLER_NAME, setup_logging


def test_repeated_setup_keeps_a_single_handler():
    setup_logging("INFO")
    setup_logging("DEBUG")

    root_logger = logging.getLogger()
    ours = [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]
    assert len(ours) == 1
    assert root_logger.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING

    setup_logging("WARNING")
