"""
Persistence module: repositories and the file store behind them.
"""

from .store import JsonLinesStore
from .repositories import (
    InMemoryRepository, FileRepository,
    StudentRepository, AssignmentRepository, GradeRepository,
)

__all__ = [
    "JsonLinesStore",
    "InMemoryRepository",
    "FileRepository",
    "StudentRepository",
    "AssignmentRepository",
    "GradeRepository",
]
