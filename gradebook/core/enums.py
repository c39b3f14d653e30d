"""
Enumerations and constants for the gradebook.
"""

from enum import Enum


class ValidationKind(Enum):
    """Kind of rule a rejected entity violated."""
    EMPTY_FIELD = "empty_field"
    NULL_FIELD = "null_field"
    OUT_OF_RANGE = "out_of_range"
    INVALID_FORMAT = "invalid_format"
    MISSING_REFERENCE = "missing_reference"


# Teaching weeks in a semester
FIRST_WEEK = 1
LAST_WEEK = 14

MIN_GRADE = 1
MAX_GRADE = 10
