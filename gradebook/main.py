"""
Composition root: wires repositories, validators and the service.
"""

import logging
import sys
from typing import Optional

from .config import Settings, get_settings
from .persistence import AssignmentRepository, GradeRepository, StudentRepository
from .services import FeedbackJournal, GradebookService, SemesterCalendar
from .validation import AssignmentValidator, GradeValidator, StudentValidator

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_service(settings: Optional[Settings] = None) -> GradebookService:
    """Build a file-backed service from settings (environment by default)."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    student_repository = StudentRepository(settings.students_path)
    assignment_repository = AssignmentRepository(settings.assignments_path)
    grade_repository = GradeRepository(settings.grades_path)
    logger.info("Repositories loaded from %s: %d students, %d assignments, %d grades",
                settings.DATA_DIR, len(student_repository),
                len(assignment_repository), len(grade_repository))

    calendar = None
    if settings.SEMESTER_START is not None:
        calendar = SemesterCalendar(settings.SEMESTER_START)
        logger.info("Semester started on %s", settings.SEMESTER_START.isoformat())

    journal = FeedbackJournal(settings.FEEDBACK_DIR) if settings.FEEDBACK_DIR else None

    return GradebookService(
        student_repository,
        StudentValidator(),
        assignment_repository,
        AssignmentValidator(),
        grade_repository,
        GradeValidator(student_repository, assignment_repository),
        calendar=calendar,
        journal=journal,
    )
