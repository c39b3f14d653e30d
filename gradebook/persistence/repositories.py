"""
Repository pattern implementations for data access.
"""

import logging
from typing import Any, Dict, List, Optional, Generic

from ..core.entities import Assignment, Grade, Student
from ..core.exceptions import ContractViolationError
from ..core.interfaces import AddResult, EntityStore, Repository, T
from .store import JsonLinesStore

logger = logging.getLogger(__name__)


def _check_key(entity_id: Optional[str]) -> None:
    if entity_id is None:
        raise ContractViolationError(
            "entity id must not be None", error_code="missing_identifier", details={"field": "id"}
        )


class InMemoryRepository(Repository[T], Generic[T]):
    """Repository holding entities in an insertion-ordered dict."""

    def __init__(self) -> None:
        self._entities: Dict[str, T] = {}

    def add(self, entity: T) -> AddResult[T]:
        _check_key(entity.id)
        existing = self._entities.get(entity.id)
        if existing is not None:
            return AddResult.already_exists(existing)
        self._entities[entity.id] = entity
        return AddResult.added(entity)

    def delete(self, entity_id: str) -> Optional[T]:
        _check_key(entity_id)
        return self._entities.pop(entity_id, None)

    def find(self, entity_id: str) -> Optional[T]:
        _check_key(entity_id)
        return self._entities.get(entity_id)

    def get_all(self) -> List[T]:
        return list(self._entities.values())

    def update(self, entity: T) -> Optional[T]:
        _check_key(entity.id)
        previous = self._entities.get(entity.id)
        if previous is not None:
            self._entities[entity.id] = entity
        return previous

    def __len__(self) -> int:
        return len(self._entities)


class FileRepository(InMemoryRepository[T], Generic[T]):
    """In-memory repository mirrored to a durable store.

    The mirror is loaded once at construction. Every successful mutation
    is written through to the store before the call returns; reads never
    touch the store.
    """

    def __init__(self, store: EntityStore[T]):
        super().__init__()
        self._store = store
        for entity in store.load():
            if entity.id in self._entities:
                logger.warning("Duplicate id %s in store, keeping the first record", entity.id)
                continue
            self._entities[entity.id] = entity

    def add(self, entity: T) -> AddResult[T]:
        result = super().add(entity)
        if result.inserted:
            try:
                self._store.persist(entity)
            except Exception:
                del self._entities[entity.id]
                raise
        return result

    def delete(self, entity_id: str) -> Optional[T]:
        before = list(self._entities.items())
        removed = super().delete(entity_id)
        if removed is not None:
            try:
                self._store.remove(entity_id)
            except Exception:
                self._entities = dict(before)
                raise
        return removed

    def update(self, entity: T) -> Optional[T]:
        previous = super().update(entity)
        if previous is not None:
            try:
                self._store.replace(entity)
            except Exception:
                self._entities[entity.id] = previous
                raise
        return previous


class StudentRepository(FileRepository[Student]):
    """Repository for Student entities."""

    def __init__(self, path: str):
        super().__init__(JsonLinesStore(path, self._entity_from_dict))

    def _entity_from_dict(self, data: Dict[str, Any]) -> Student:
        return Student.from_dict(data)


class AssignmentRepository(FileRepository[Assignment]):
    """Repository for Assignment entities."""

    def __init__(self, path: str):
        super().__init__(JsonLinesStore(path, self._entity_from_dict))

    def _entity_from_dict(self, data: Dict[str, Any]) -> Assignment:
        return Assignment.from_dict(data)


class GradeRepository(FileRepository[Grade]):
    """Repository for Grade entities."""

    def __init__(self, path: str):
        super().__init__(JsonLinesStore(path, self._entity_from_dict))

    def _entity_from_dict(self, data: Dict[str, Any]) -> Grade:
        return Grade.from_dict(data)

