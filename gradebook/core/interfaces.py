"""
Core interfaces and abstract base classes for the gradebook.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from .entities import AbstractEntity


T = TypeVar('T', bound=AbstractEntity)


@dataclass(frozen=True)
class AddResult(Generic[T]):
    """Outcome of adding an entity to a repository.

    A duplicate ID is an expected outcome rather than an error: the add is
    rejected and ``existing`` holds the unchanged entity already stored
    under that ID.
    """
    inserted: bool
    entity: T

    @classmethod
    def added(cls, entity: T) -> 'AddResult[T]':
        return cls(inserted=True, entity=entity)

    @classmethod
    def already_exists(cls, existing: T) -> 'AddResult[T]':
        return cls(inserted=False, entity=existing)

    @property
    def existing(self) -> Optional[T]:
        """The conflicting stored entity, or None when the add happened."""
        return None if self.inserted else self.entity


class Validator(ABC, Generic[T]):
    """Interface for entity rule checkers."""

    @abstractmethod
    def validate(self, entity: T) -> None:
        """Raise on the first violated rule, return None otherwise."""
        pass


class Repository(ABC, Generic[T]):
    """Abstract base class for repositories keyed by entity ID."""

    @abstractmethod
    def add(self, entity: T) -> AddResult[T]:
        """Insert an entity unless its ID is already taken."""
        pass

    @abstractmethod
    def delete(self, entity_id: str) -> Optional[T]:
        """Remove and return an entity, or None if absent."""
        pass

    @abstractmethod
    def find(self, entity_id: str) -> Optional[T]:
        """Find entity by ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[T]:
        """Snapshot of all entities in insertion order."""
        pass

    @abstractmethod
    def update(self, entity: T) -> Optional[T]:
        """Replace the entity with the same ID and return the previous one.

        Returns None, and stores nothing, when no entity has that ID.
        """
        pass

    def __len__(self) -> int:
        return len(self.get_all())

    def __contains__(self, entity_id: object) -> bool:
        return isinstance(entity_id, str) and self.find(entity_id) is not None


class EntityStore(ABC, Generic[T]):
    """Durable collaborator behind a file-backed repository."""

    @abstractmethod
    def load(self) -> List[T]:
        """Read back every stored entity in the order it was stored."""
        pass

    @abstractmethod
    def persist(self, entity: T) -> None:
        """Record a newly added entity."""
        pass

    @abstractmethod
    def remove(self, entity_id: str) -> None:
        """Forget the entity with the given ID."""
        pass

    @abstractmethod
    def replace(self, entity: T) -> None:
        """Overwrite the stored entity with the same ID, keeping its position."""
        pass
