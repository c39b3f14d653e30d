from datetime import date

import pytest

from gradebook.core import Assignment, Grade, Student
from gradebook.persistence import (
    AssignmentRepository, GradeRepository, InMemoryRepository, StudentRepository,
)
from gradebook.services import GradebookService
from gradebook.validation import AssignmentValidator, GradeValidator, StudentValidator


def make_service(students, assignments, grades, **kwargs):
    return GradebookService(
        students,
        StudentValidator(),
        assignments,
        AssignmentValidator(),
        grades,
        GradeValidator(students, assignments),
        **kwargs,
    )


@pytest.fixture
def service_factory():
    """Build a service over in-memory repositories with extra options."""
    def factory(**kwargs):
        return make_service(InMemoryRepository(), InMemoryRepository(), InMemoryRepository(), **kwargs)
    return factory


@pytest.fixture
def service():
    """Service over in-memory repositories."""
    return make_service(InMemoryRepository(), InMemoryRepository(), InMemoryRepository())


@pytest.fixture
def file_service(tmp_path):
    """Service over JSON-lines repositories in a temporary directory."""
    return make_service(
        StudentRepository(str(tmp_path / "students.jsonl")),
        AssignmentRepository(str(tmp_path / "assignments.jsonl")),
        GradeRepository(str(tmp_path / "grades.jsonl")),
    )


@pytest.fixture
def ana():
    return Student("1", "Ana", 931, "ana@gmail.com")


@pytest.fixture
def homework():
    return Assignment("1", "s", 5, 4)


@pytest.fixture
def grade():
    return Grade("1", "1", "1", 5, date.today())
