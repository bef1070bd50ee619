"""
Application configuration for the book status tracker.
Values are read from the environment (a local .env file is honoured).
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


APP_TITLE = os.getenv("APP_TITLE", "Book Status Tracker")

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./book_status.db")
SQL_ECHO = _env_bool("SQL_ECHO", False)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
