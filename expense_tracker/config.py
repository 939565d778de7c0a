"""
config.py - runtime settings read from environment variables

app.py copies Streamlit secrets into the environment before anything here
is read, so the same variables work locally and on Streamlit Cloud:
  - EXPENSE_TRACKER_DB: path of the SQLite database file
  - EXPENSE_TRACKER_LOG_LEVEL: logging level name (default INFO)
"""

from dataclasses import dataclass
import logging
import os

# location of the SQLite database file (relative to the package directory)
DEFAULT_DB_FILE = os.path.join(os.path.dirname(__file__), "..", "data", "expenses.db")


@dataclass
class Settings:
    db_path: str
    log_level: int


def get_settings() -> Settings:
    db_path = (os.getenv("EXPENSE_TRACKER_DB") or "").strip() or DEFAULT_DB_FILE
    level_name = (os.getenv("EXPENSE_TRACKER_LOG_LEVEL") or "INFO").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    return Settings(db_path=os.path.abspath(db_path), log_level=level)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, attaching a stream handler if none is configured."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(get_settings().log_level)
    return logger
