"""
Common CRUD contract shared by the food, log and profile repositories.
"""
import copy
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Hashable, List, Optional

from diet_tracker.errors import NotFound


class Repository(ABC):
    """
    In-memory authoritative collection backed by a text store.

    Entities are kept in insertion order. Reads return copies, so the
    only way to change repository state is upsert/remove.

    Subclasses implement:
    - _key(): Key of an entity
    - _validate(): Invariant checks run before upsert stores an entity
    - load() / save(): Conversion to and from the text store
    """

    entity_label = "Entity"

    def __init__(self, filepath: Optional[Path] = None):
        """
        Initialize repository.

        Args:
            filepath: Backing store file (None for a purely in-memory repository)
        """
        self.filepath = Path(filepath) if filepath is not None else None
        self._items: Dict[Hashable, Any] = {}
        self.load_warnings: List[str] = []

    @abstractmethod
    def _key(self, entity) -> Hashable:
        """Return the key an entity is stored under."""

    def _validate(self, entity) -> None:
        """Raise ValidationError if entity may not be stored."""

    @abstractmethod
    def load(self) -> None:
        """Replace in-memory state with the contents of the store."""

    @abstractmethod
    def save(self) -> None:
        """Write in-memory state to the store."""

    def get(self, key):
        """
        Get a copy of the entity stored under key.

        Raises:
            NotFound: If key is absent
        """
        if key not in self._items:
            raise NotFound(f"{self.entity_label} not found: {key}")
        return copy.deepcopy(self._items[key])

    def get_all(self) -> list:
        """Copies of all entities in insertion order."""
        return [copy.deepcopy(e) for e in self._items.values()]

    def upsert(self, entity) -> None:
        """
        Insert or replace an entity.

        Raises:
            ValidationError: If the entity violates a model invariant
        """
        self._validate(entity)
        self._items[self._key(entity)] = copy.deepcopy(entity)

    def remove(self, key):
        """
        Remove and return the entity stored under key.

        Raises:
            NotFound: If key is absent
        """
        if key not in self._items:
            raise NotFound(f"{self.entity_label} not found: {key}")
        return self._items.pop(key)

    def keys(self) -> list:
        return list(self._items.keys())

    def __contains__(self, key) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def _warn(self, message: str) -> None:
        """Record a problem found while loading (reported by the REPL)."""
        self.load_warnings.append(message)
