# /gradeflow/core/config.py

"""
Runtime configuration for the Gradeflow backend.

Values are read from the environment (optionally seeded from a local `.env`
file) exactly once, when this module is imported. Two settings select between
the policies that earlier revisions of the product disagreed on:

- `POLL_VISIBILITY_MODE` decides which polls a student may see.
- `TASK_TRANSITION_MODE` decides whether task status changes must follow the
  open -> in-progress -> completed order.
"""

import os
from enum import Enum
from typing import List

from dotenv import load_dotenv

load_dotenv()


class PollVisibilityMode(str, Enum):
    # Students see admin polls and polls from their own assigned teacher.
    ASSIGNED_TEACHER = "assigned-teacher"
    # Students see every poll whose audience includes students.
    AUDIENCE = "audience"


class TaskTransitionMode(str, Enum):
    STRICT = "strict"
    LENIENT = "lenient"


def _parse_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings:
    def __init__(self):
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./gradeflow.db")
        self.POLL_VISIBILITY_MODE = PollVisibilityMode(
            os.getenv("POLL_VISIBILITY_MODE", PollVisibilityMode.ASSIGNED_TEACHER.value)
        )
        self.TASK_TRANSITION_MODE = TaskTransitionMode(
            os.getenv("TASK_TRANSITION_MODE", TaskTransitionMode.STRICT.value)
        )
        self.POLL_MIN_OPTIONS: int = 2
        self.POLL_MAX_OPTIONS: int = int(os.getenv("POLL_MAX_OPTIONS", "6"))
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.LOG_FORMAT: str = os.getenv("LOG_FORMAT", "text").lower()
        self.CORS_ORIGINS: List[str] = _parse_origins(os.getenv("CORS_ORIGINS", "*"))

        if self.POLL_MAX_OPTIONS < self.POLL_MIN_OPTIONS:
            raise ValueError(
                f"POLL_MAX_OPTIONS must be at least {self.POLL_MIN_OPTIONS}, got {self.POLL_MAX_OPTIONS}"
            )


settings = Settings()
