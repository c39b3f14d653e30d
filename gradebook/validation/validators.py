"""
Field and reference validators, one per entity type.

Every validator stops at the first broken rule. Fields are checked in a
fixed order: the ID, then the name or description, then numeric fields,
then the email or date, and for grades finally the references.
"""

import logging
from datetime import date
from numbers import Real
from typing import Any, Optional

from ..core.entities import Assignment, Grade, Student
from ..core.enums import FIRST_WEEK, LAST_WEEK, MAX_GRADE, MIN_GRADE, ValidationKind
from ..core.exceptions import ContractViolationError, ValidationError
from ..core.interfaces import Repository, Validator

logger = logging.getLogger(__name__)


def require_identifier(value: Optional[str], field: str) -> None:
    """Check a key field. A missing key is a contract violation."""
    if value is None:
        raise ContractViolationError(
            f"{field} is required and must not be None",
            error_code="missing_identifier",
            details={"field": field},
        )
    if not value.strip():
        raise ValidationError(f"{field} must not be empty", ValidationKind.EMPTY_FIELD, field)


def require_text(value: Optional[str], field: str) -> None:
    if value is None:
        raise ValidationError(f"{field} must not be null", ValidationKind.NULL_FIELD, field)
    if not value.strip():
        raise ValidationError(f"{field} must not be empty", ValidationKind.EMPTY_FIELD, field)


def require_integer(value: Any, field: str) -> None:
    if value is None:
        raise ValidationError(f"{field} must not be null", ValidationKind.NULL_FIELD, field)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer", ValidationKind.INVALID_FORMAT, field)


def require_between(value: Real, low: Real, high: Real, field: str) -> None:
    if not low <= value <= high:
        raise ValidationError(
            f"{field} must be between {low} and {high}, got {value}",
            ValidationKind.OUT_OF_RANGE,
            field,
            details={"value": value, "min": low, "max": high},
        )


def is_email(value: str) -> bool:
    """Minimal address shape: ``local@domain`` with both parts non-empty."""
    if any(ch.isspace() for ch in value) or value.count("@") != 1:
        return False
    local, _, domain = value.partition("@")
    return bool(local) and bool(domain)


class StudentValidator(Validator[Student]):
    """Validator for Student entities."""

    def validate(self, entity: Student) -> None:
        require_identifier(entity.id, "id")
        require_text(entity.name, "name")
        require_integer(entity.group, "group")
        # Group 0 is a valid group number.
        if entity.group < 0:
            raise ValidationError(
                f"group must not be negative, got {entity.group}",
                ValidationKind.OUT_OF_RANGE,
                "group",
                details={"value": entity.group, "min": 0},
            )
        require_text(entity.email, "email")
        if not is_email(entity.email):
            raise ValidationError(
                f"email '{entity.email}' is not a valid address",
                ValidationKind.INVALID_FORMAT,
                "email",
            )


class AssignmentValidator(Validator[Assignment]):
    """Validator for Assignment entities."""

    def validate(self, entity: Assignment) -> None:
        require_identifier(entity.id, "id")
        require_text(entity.description, "description")
        require_integer(entity.deadline_week, "deadline_week")
        require_between(entity.deadline_week, FIRST_WEEK, LAST_WEEK, "deadline_week")
        require_integer(entity.start_week, "start_week")
        require_between(entity.start_week, FIRST_WEEK, LAST_WEEK, "start_week")
        if entity.start_week > entity.deadline_week:
            raise ValidationError(
                f"start_week {entity.start_week} is after deadline_week {entity.deadline_week}",
                ValidationKind.OUT_OF_RANGE,
                "start_week",
                details={"start_week": entity.start_week, "deadline_week": entity.deadline_week},
            )


class GradeValidator(Validator[Grade]):
    """Validator for Grade entities.

    Unlike the other validators it needs read access to the student and
    assignment repositories, which are injected here, to check that both
    ends of the grade exist.
    """

    def __init__(self, student_repository: Repository[Student],
                 assignment_repository: Repository[Assignment]):
        self._student_repository = student_repository
        self._assignment_repository = assignment_repository

    def validate(self, entity: Grade) -> None:
        require_identifier(entity.id, "id")
        require_identifier(entity.student_id, "student_id")
        require_identifier(entity.assignment_id, "assignment_id")

        value = entity.value
        if value is None:
            raise ValidationError("value must not be null", ValidationKind.NULL_FIELD, "value")
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ValidationError("value must be a number", ValidationKind.INVALID_FORMAT, "value")
        require_between(value, MIN_GRADE, MAX_GRADE, "value")

        if entity.submission_date is None:
            raise ValidationError(
                "submission_date must not be null", ValidationKind.NULL_FIELD, "submission_date"
            )
        if not isinstance(entity.submission_date, date):
            raise ValidationError(
                "submission_date must be a date", ValidationKind.INVALID_FORMAT, "submission_date"
            )

        if self._student_repository.find(entity.student_id) is None:
            logger.debug("Grade %s references unknown student %s", entity.id, entity.student_id)
            raise ValidationError(
                f"student '{entity.student_id}' does not exist",
                ValidationKind.MISSING_REFERENCE,
                "student_id",
            )
        if self._assignment_repository.find(entity.assignment_id) is None:
            logger.debug("Grade %s references unknown assignment %s", entity.id, entity.assignment_id)
            raise ValidationError(
                f"assignment '{entity.assignment_id}' does not exist",
                ValidationKind.MISSING_REFERENCE,
                "assignment_id",
            )
