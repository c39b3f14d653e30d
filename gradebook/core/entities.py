"""
Core entities: students, assignments and the grades linking them.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, Optional, Union


class AbstractEntity(ABC):
    """Base entity identified by an immutable textual ID."""

    def __init__(self, entity_id: Optional[str]):
        self._id = entity_id

    @property
    def id(self) -> Optional[str]:
        """Get the entity ID."""
        return self._id

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary."""
        return {'id': self._id}

    def to_record(self) -> Dict[str, Any]:
        """JSON-safe dictionary written by the durable store."""
        return self.to_dict()

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AbstractEntity':
        """Rebuild an entity from the output of :meth:`to_dict`."""
        pass

    def replace(self, **changes) -> 'AbstractEntity':
        """Return a copy with some fields changed. The ID cannot change."""
        if 'id' in changes:
            raise AttributeError(f"{self.__class__.__name__}.id is immutable")
        data = self.to_dict()
        for key, value in changes.items():
            if key not in data:
                raise AttributeError(f"{self.__class__.__name__} has no field '{key}'")
            data[key] = value
        return self.from_dict(data)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{self.__class__.__name__}({fields})"


class Student(AbstractEntity):
    """A student enrolled in a study group."""

    def __init__(self, student_id: Optional[str], name: Optional[str],
                 group: int, email: Optional[str]):
        super().__init__(student_id)
        self._name = name
        self._group = group
        self._email = email

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def group(self) -> int:
        return self._group

    @property
    def email(self) -> Optional[str]:
        return self._email

    def to_dict(self) -> Dict[str, Any]:
        """Convert student to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'name': self._name,
            'group': self._group,
            'email': self._email,
        })
        return base_dict

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Student':
        return cls(
            student_id=data['id'],
            name=data['name'],
            group=data['group'],
            email=data['email'],
        )


class Assignment(AbstractEntity):
    """A homework unit that may be handed in between two semester weeks."""

    def __init__(self, assignment_id: Optional[str], description: Optional[str],
                 deadline_week: int, start_week: int):
        super().__init__(assignment_id)
        self._description = description
        self._deadline_week = deadline_week
        self._start_week = start_week

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def deadline_week(self) -> int:
        return self._deadline_week

    @property
    def start_week(self) -> int:
        return self._start_week

    def to_dict(self) -> Dict[str, Any]:
        """Convert assignment to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'description': self._description,
            'deadline_week': self._deadline_week,
            'start_week': self._start_week,
        })
        return base_dict

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Assignment':
        return cls(
            assignment_id=data['id'],
            description=data['description'],
            deadline_week=data['deadline_week'],
            start_week=data['start_week'],
        )


class Grade(AbstractEntity):
    """A scored submission of one assignment by one student."""

    def __init__(self, grade_id: Optional[str], student_id: Optional[str],
                 assignment_id: Optional[str], value: Union[int, float],
                 submission_date: Optional[date]):
        super().__init__(grade_id)
        self._student_id = student_id
        self._assignment_id = assignment_id
        self._value = value
        self._submission_date = submission_date

    @property
    def student_id(self) -> Optional[str]:
        return self._student_id

    @property
    def assignment_id(self) -> Optional[str]:
        return self._assignment_id

    @property
    def value(self) -> Union[int, float]:
        return self._value

    @property
    def submission_date(self) -> Optional[date]:
        return self._submission_date

    def to_dict(self) -> Dict[str, Any]:
        """Convert grade to dictionary. The date is kept as a ``date``."""
        base_dict = super().to_dict()
        base_dict.update({
            'student_id': self._student_id,
            'assignment_id': self._assignment_id,
            'value': self._value,
            'submission_date': self._submission_date,
        })
        return base_dict

    def to_record(self) -> Dict[str, Any]:
        """JSON-safe form of :meth:`to_dict`."""
        record = self.to_dict()
        if self._submission_date is not None:
            record['submission_date'] = self._submission_date.isoformat()
        return record

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Grade':
        submitted = data['submission_date']
        if isinstance(submitted, str):
            submitted = date.fromisoformat(submitted)
        elif not isinstance(submitted, date):
            raise ValueError(f"submission_date must be an ISO date, got {submitted!r}")
        return cls(
            grade_id=data['id'],
            student_id=data['student_id'],
            assignment_id=data['assignment_id'],
            value=data['value'],
            submission_date=submitted,
        )
