"""
Gradebook service: validation and cross-entity coordination.
"""

import logging
from datetime import date
from typing import List, Optional

from ..core.entities import Assignment, Grade, Student
from ..core.enums import MIN_GRADE, ValidationKind
from ..core.exceptions import (
    ConfigurationError, PersistenceError, ResourceNotFoundError, ValidationError,
)
from ..core.interfaces import AddResult, Repository, Validator
from .calendar import SemesterCalendar
from .feedback import FeedbackJournal

logger = logging.getLogger(__name__)

# Points lost per week of late submission, and how many late weeks are
# tolerated before the grade drops to the minimum.
LATE_PENALTY_PER_WEEK = 2.5
MAX_LATE_WEEKS = 2


class GradebookService:
    """Single entry point for every student, assignment and grade operation.

    The service owns no entity state. Mutations are validated first and
    only then handed to the repository, so a rejected call never leaves
    a partial change behind. Reads and deletes go straight to the
    repositories.
    """

    def __init__(self,
                 student_repository: Repository[Student],
                 student_validator: Validator[Student],
                 assignment_repository: Repository[Assignment],
                 assignment_validator: Validator[Assignment],
                 grade_repository: Optional[Repository[Grade]] = None,
                 grade_validator: Optional[Validator[Grade]] = None,
                 calendar: Optional[SemesterCalendar] = None,
                 journal: Optional[FeedbackJournal] = None):
        self._students = student_repository
        self._student_validator = student_validator
        self._assignments = assignment_repository
        self._assignment_validator = assignment_validator
        self._grades = grade_repository
        self._grade_validator = grade_validator
        self._calendar = calendar
        self._journal = journal

    # Students

    def add_student(self, student: Student) -> AddResult[Student]:
        self._student_validator.validate(student)
        result = self._students.add(student)
        if result.inserted:
            logger.info("Added student %s", student.id)
        else:
            logger.info("Student %s already exists, add ignored", student.id)
        return result

    def update_student(self, student: Student) -> Optional[Student]:
        """Replace a stored student. Returns the previous version or None."""
        self._student_validator.validate(student)
        return self._students.update(student)

    def delete_student(self, student_id: str) -> Optional[Student]:
        removed = self._students.delete(student_id)
        if removed is not None:
            logger.info("Deleted student %s", student_id)
            self._warn_orphans("student", student_id,
                               lambda g: g.student_id == student_id)
        return removed

    def find_student(self, student_id: str) -> Optional[Student]:
        return self._students.find(student_id)

    def get_all_students(self) -> List[Student]:
        return self._students.get_all()

    # Assignments

    def add_assignment(self, assignment: Assignment) -> AddResult[Assignment]:
        self._assignment_validator.validate(assignment)
        result = self._assignments.add(assignment)
        if result.inserted:
            logger.info("Added assignment %s", assignment.id)
        else:
            logger.info("Assignment %s already exists, add ignored", assignment.id)
        return result

    def update_assignment(self, assignment: Assignment) -> Optional[Assignment]:
        """Replace a stored assignment. Returns the previous version or None."""
        self._assignment_validator.validate(assignment)
        return self._assignments.update(assignment)

    def delete_assignment(self, assignment_id: str) -> Optional[Assignment]:
        removed = self._assignments.delete(assignment_id)
        if removed is not None:
            logger.info("Deleted assignment %s", assignment_id)
            self._warn_orphans("assignment", assignment_id,
                               lambda g: g.assignment_id == assignment_id)
        return removed

    def find_assignment(self, assignment_id: str) -> Optional[Assignment]:
        return self._assignments.find(assignment_id)

    def get_all_assignments(self) -> List[Assignment]:
        return self._assignments.get_all()

    def extend_deadline(self, assignment_id: str, weeks: int,
                        today: Optional[date] = None) -> Assignment:
        """Push an assignment's deadline back by ``weeks``.

        Only allowed while the current semester week has not passed the
        deadline. The extended assignment must still validate, so the new
        deadline cannot go past the last week of the semester.
        """
        if self._calendar is None:
            raise ConfigurationError("Extending deadlines requires a semester calendar")
        if isinstance(weeks, bool) or not isinstance(weeks, int) or weeks < 1:
            raise ValidationError(f"weeks must be a positive integer, got {weeks!r}",
                                  ValidationKind.OUT_OF_RANGE, "weeks")

        assignment = self._assignments.find(assignment_id)
        if assignment is None:
            raise ResourceNotFoundError(f"Assignment {assignment_id} not found",
                                        details={"assignment_id": assignment_id})

        current_week = self._calendar.current_week(today)
        if current_week > assignment.deadline_week:
            raise ValidationError(
                f"deadline week {assignment.deadline_week} already passed (current week {current_week})",
                ValidationKind.OUT_OF_RANGE,
                "deadline_week",
            )

        extended = assignment.replace(deadline_week=assignment.deadline_week + weeks)
        self.update_assignment(extended)
        logger.info("Extended deadline of assignment %s to week %d", assignment_id, extended.deadline_week)
        return extended

    # Grades

    def add_grade(self, grade: Grade, feedback: str = "") -> AddResult[Grade]:
        """Validate and store a grade.

        The validator rejects grades whose student or assignment does not
        exist. With a semester calendar configured, late submissions are
        penalised before the grade is stored.
        """
        grades, validator = self._grade_components()
        validator.validate(grade)

        assignment = self._assignments.find(grade.assignment_id)
        week = None
        if self._calendar is not None:
            week = self._calendar.week_of(grade.submission_date)
            grade = self._apply_late_penalty(grade, assignment, week)

        result = grades.add(grade)
        if not result.inserted:
            logger.info("Grade %s already exists, add ignored", grade.id)
            return result

        logger.info("Added grade %s for student %s on assignment %s",
                    grade.id, grade.student_id, grade.assignment_id)
        if self._journal is not None:
            student = self._students.find(grade.student_id)
            try:
                self._journal.record(student, assignment, grade, feedback, week=week)
            except PersistenceError as e:
                # The grade is already committed.
                logger.error("Grade %s stored but feedback was not recorded: %s", grade.id, e.message)
        return result

    def delete_grade(self, grade_id: str) -> Optional[Grade]:
        grades, _ = self._grade_components()
        removed = grades.delete(grade_id)
        if removed is not None:
            logger.info("Deleted grade %s", grade_id)
        return removed

    def find_grade(self, grade_id: str) -> Optional[Grade]:
        grades, _ = self._grade_components()
        return grades.find(grade_id)

    def get_all_grades(self) -> List[Grade]:
        grades, _ = self._grade_components()
        return grades.get_all()

    def grades_for_student(self, student_id: str) -> List[Grade]:
        grades, _ = self._grade_components()
        return [g for g in grades.get_all() if g.student_id == student_id]

    def _grade_components(self):
        if self._grades is None or self._grade_validator is None:
            raise ConfigurationError("Grade operations need a grade repository and validator")
        return self._grades, self._grade_validator

    @staticmethod
    def _apply_late_penalty(grade: Grade, assignment: Assignment, week: int) -> Grade:
        late_weeks = week - assignment.deadline_week
        if late_weeks <= 0:
            return grade
        if late_weeks > MAX_LATE_WEEKS:
            value = MIN_GRADE
        else:
            value = max(MIN_GRADE, grade.value - LATE_PENALTY_PER_WEEK * late_weeks)
        logger.info("Grade %s submitted %d week(s) late, value %s -> %s",
                    grade.id, late_weeks, grade.value, value)
        return grade.replace(value=value)

    def _warn_orphans(self, kind: str, entity_id: str, references) -> None:
        # Deletes never cascade; dependent grades are kept as they are.
        if self._grades is None:
            return
        orphans = [g.id for g in self._grades.get_all() if references(g)]
        if orphans:
            logger.warning("Deleted %s %s is still referenced by grades %s",
                           kind, entity_id, ", ".join(orphans))
