"""
Per-student feedback journal.
"""

import logging
import os
from typing import Optional
from urllib.parse import quote

from ..core.entities import Assignment, Grade, Student
from ..core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class FeedbackJournal:
    """Appends one block per recorded grade to ``<directory>/student_<quoted id>.txt``."""

    def __init__(self, directory: str):
        self._directory = directory
        os.makedirs(directory, exist_ok=True)

    def path_for(self, student: Student) -> str:
        # Ids are free text; quoting keeps the file inside the journal directory.
        return os.path.join(self._directory, f"student_{quote(student.id, safe='')}.txt")

    def record(self, student: Student, assignment: Assignment, grade: Grade,
               feedback: str, week: Optional[int] = None) -> None:
        lines = [
            f"Assignment: {assignment.id}",
            f"Grade: {grade.value}",
        ]
        if week is not None:
            lines.append(f"Submitted in week: {week}")
        lines.append(f"Deadline: {assignment.deadline_week}")
        lines.append(f"Feedback: {feedback}")

        path = self.path_for(student)
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write("\n".join(lines) + "\n\n")
        except OSError as e:
            raise PersistenceError(f"Failed to write feedback for student {student.id}: {str(e)}")
        logger.debug("Recorded feedback for grade %s in %s", grade.id, path)
