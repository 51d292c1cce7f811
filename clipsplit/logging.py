"""Centralized logging configuration for clipsplit"""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .config import LOG_DIR, LOG_LEVEL
from .utils import get_timestamp

def configure_logging(log_level: Optional[str] = None, file_logging: bool = True) -> Optional[Path]:
    """Central logging configuration for all modules

    Returns:
        The log file path when file logging is enabled.
    """
    level = (log_level or LOG_LEVEL).upper()
    logger = logging.getLogger("clipsplit")
    logger.setLevel(level)
    
    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        
    # Rich console handler
    console_handler = RichHandler(show_path=False, rich_tracebacks=True)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)
    
    log_file = None
    if file_logging:
        try:
            LOG_DIR.mkdir(parents=True, exist_ok=True)
            log_file = LOG_DIR / f"clipsplit_{get_timestamp()}.log"
            file_handler = logging.FileHandler(log_file)
        except OSError as e:
            logger.warning("File logging disabled: %s", e)
            log_file = None
        else:
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ))
            logger.addHandler(file_handler)
    
    # Capture warnings
    logging.captureWarnings(True)
    return log_file
