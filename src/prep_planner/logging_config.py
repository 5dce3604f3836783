"""
Logging configuration for the planner.

Console output goes through rich; a rotating file keeps the detailed log.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.logging import RichHandler

from prep_planner.config import LOG_DIR, LOG_LEVEL


def setup_logging(log_level: str = LOG_LEVEL, log_dir: Path = LOG_DIR) -> None:
    """
    Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the rotating log file
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = RichHandler(level=level, show_path=False, markup=False)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="%H:%M:%S"))

    file_handler = RotatingFileHandler(
        log_dir / "planner.log",
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    logging.getLogger("openpyxl").setLevel(logging.WARNING)
