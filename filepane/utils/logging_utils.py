"""Simple logging utilities for filepane.

Standard Logger Initialization Pattern
--------------------------------------
Modules use the standard Python pattern:

    import logging
    logger = logging.getLogger(__name__)

Configuration happens once at application level through setup_tui_logging(),
which writes to rotating files so nothing is printed over the Textual screen.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from filepane.config.constants import (
    KEY_LOG_FILE_NAME,
    LOG_BACKUP_COUNT,
    LOG_FILE_NAME,
    MAX_LOG_BYTES,
)
from filepane.config.settings import get_config_dir, get_env_var


def setup_tui_logging(verbose: bool = False) -> tuple[logging.Logger, logging.Logger]:
    """
    Set up file logging for the TUI.

    The root logger is set to WARNING to avoid noise from third-party libs.
    filepane's own loggers (filepane.*) use FILEPANE_LOG_LEVEL, or DEBUG when
    verbose. Key events get a separate file.

    Returns:
        tuple: (main_logger, key_events_logger)
    """
    try:
        log_dir = get_config_dir()
        log_file = log_dir / LOG_FILE_NAME

        if not logging.getLogger().handlers:
            handler = RotatingFileHandler(
                log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT
            )
            handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
            logging.basicConfig(level=logging.WARNING, handlers=[handler])

        level_name: Optional[str] = "DEBUG" if verbose else get_env_var("FILEPANE_LOG_LEVEL")
        logging.getLogger("filepane").setLevel(getattr(logging, (level_name or "INFO").upper()))

        key_logger = logging.getLogger("key_events")
        if not key_logger.handlers:
            key_handler = RotatingFileHandler(
                log_dir / KEY_LOG_FILE_NAME, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT
            )
            key_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            key_logger.addHandler(key_handler)
            key_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

        return logging.getLogger("filepane"), key_logger

    except Exception as e:
        # We can't log this failure since logging is what's failing
        print(f"Warning: TUI logging setup failed: {e}", file=sys.stderr)
        return logging.getLogger("filepane"), logging.getLogger("key_events")
