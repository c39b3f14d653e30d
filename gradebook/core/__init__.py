"""
Core module containing the entity model, contracts and exceptions.
"""

from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *

__all__ = [
    # Entities
    "AbstractEntity",
    "Student",
    "Assignment",
    "Grade",

    # Interfaces
    "AddResult",
    "Validator",
    "Repository",
    "EntityStore",

    # Enums
    "ValidationKind",

    # Exceptions
    "GradebookException",
    "ValidationError",
    "ContractViolationError",
    "ResourceNotFoundError",
    "PersistenceError",
    "ConfigurationError",
]
