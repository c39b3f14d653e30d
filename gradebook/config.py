"""
gradebook/config.py

Settings read from environment variables (prefix ``GRADEBOOK_``) or a
``.env`` file, using pydantic-settings.
"""

import os
from datetime import date
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GRADEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    DATA_DIR: str = "data"
    STUDENTS_FILE: str = "students.jsonl"
    ASSIGNMENTS_FILE: str = "assignments.jsonl"
    GRADES_FILE: str = "grades.jsonl"

    # Semester start, enables late penalties and deadline extensions
    SEMESTER_START: Optional[date] = None

    # Per-student feedback files, disabled when unset
    FEEDBACK_DIR: Optional[str] = None

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def students_path(self) -> str:
        return os.path.join(self.DATA_DIR, self.STUDENTS_FILE)

    @property
    def assignments_path(self) -> str:
        return os.path.join(self.DATA_DIR, self.ASSIGNMENTS_FILE)

    @property
    def grades_path(self) -> str:
        return os.path.join(self.DATA_DIR, self.GRADES_FILE)


def get_settings() -> Settings:
    return Settings()
