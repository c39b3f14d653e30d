"""
Validation module with one rule checker per entity type.
"""

from .validators import AssignmentValidator, GradeValidator, StudentValidator

__all__ = [
    "StudentValidator",
    "AssignmentValidator",
    "GradeValidator",
]
