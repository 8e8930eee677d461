from __future__ import annotations

import logging
from pathlib import Path

from docspark.logging import configure_logging, get_logger


def test_get_logger_is_namespaced() -> None:
    assert get_logger().name == "docspark"
    assert get_logger("parser").name == "docspark.parser"


def test_configure_logging_resets_handlers_and_writes_file(tmp_path: Path) -> None:
    log_file = tmp_path / "docspark.log"

    configure_logging()
    logger = configure_logging(verbose=True, log_file=log_file)
    get_logger("builder").debug("Parsing Button.tsx")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    assert "Parsing Button.tsx" in log_file.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
