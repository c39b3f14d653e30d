"""
File-based durable store for repository contents.
"""

import json
import logging
import os
from typing import Any, Callable, Dict, List, Optional

from ..core.entities import AbstractEntity
from ..core.exceptions import PersistenceError
from ..core.interfaces import EntityStore, T

logger = logging.getLogger(__name__)


class JsonLinesStore(EntityStore[T]):
    """Stores one entity per line as a JSON object.

    Additions are appended to the end of the file; removals and
    replacements rewrite the whole file, so line order always matches
    insertion order.
    """

    def __init__(self, path: str, entity_from_dict: Callable[[Dict[str, Any]], T]):
        self._path = path
        self._entity_from_dict = entity_from_dict
        self._ensure_file_exists()

    @property
    def path(self) -> str:
        return self._path

    def _ensure_file_exists(self) -> None:
        """Create the store file (and its directory) if missing."""
        directory = os.path.dirname(self._path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            if not os.path.exists(self._path):
                open(self._path, "a", encoding="utf-8").close()
        except OSError as e:
            raise PersistenceError(f"Failed to create store {self._path}: {str(e)}")

    def load(self) -> List[T]:
        """Load every entity in file order."""
        entities = []
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, 1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        entities.append(self._entity_from_dict(json.loads(line)))
                    except (json.JSONDecodeError, KeyError, ValueError, TypeError, AttributeError) as e:
                        logger.warning("Skipping malformed record at %s:%d: %s", self._path, line_num, e)
        except OSError as e:
            raise PersistenceError(f"Failed to read store {self._path}: {str(e)}")

        logger.debug("Loaded %d records from %s", len(entities), self._path)
        return entities

    def persist(self, entity: AbstractEntity) -> None:
        """Append an entity to the file."""
        try:
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entity.to_record()) + "\n")
        except OSError as e:
            raise PersistenceError(f"Failed to persist {entity}: {str(e)}")

    def remove(self, entity_id: str) -> None:
        """Rewrite the file without the given entity."""
        self._rewrite(entity_id, None)

    def replace(self, entity: AbstractEntity) -> None:
        """Rewrite the file with the given entity swapped in place."""
        self._rewrite(entity.id, json.dumps(entity.to_record()))

    @staticmethod
    def _line_id(line: str) -> Optional[str]:
        try:
            record = json.loads(line)
        except json.JSONDecodeError:
            return None
        return record.get("id") if isinstance(record, dict) else None

    def _rewrite(self, entity_id: str, replacement: Optional[str]) -> None:
        """Rewrite raw lines, dropping or swapping the one with ``entity_id``.

        Lines that load() skipped are copied unchanged.
        """
        tmp_path = self._path + ".tmp"
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                lines = [line.strip() for line in f if line.strip()]
            with open(tmp_path, "w", encoding="utf-8") as f:
                for line in lines:
                    if self._line_id(line) == entity_id:
                        if replacement is None:
                            continue
                        line = replacement
                    f.write(line + "\n")
            os.replace(tmp_path, self._path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise PersistenceError(f"Failed to rewrite store {self._path}: {str(e)}")
