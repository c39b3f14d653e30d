"""
Services module: the gradebook service and its helpers.
"""

from .calendar import SemesterCalendar
from .feedback import FeedbackJournal
from .gradebook_service import GradebookService

__all__ = [
    "GradebookService",
    "SemesterCalendar",
    "FeedbackJournal",
]
