"""
Base repository for in-memory entity collections.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Generic, Hashable, Iterable, List, Optional, TypeVar

from exceptions import EntityNotFoundError
from .specifications import Specification

T = TypeVar('T')

logger = logging.getLogger(__name__)


class InMemoryRepository(ABC, Generic[T]):
    """
    Generic in-memory repository keyed by each entity's natural key.

    Insertion order is preserved, so listings come back in the order
    entities were added.
    """

    entity_name = "Entity"

    def __init__(self, items: Optional[Iterable[T]] = None):
        """
        Initialize the repository.

        Args:
            items: Entities to preload
        """
        self._items: Dict[Hashable, T] = {}
        for item in items or []:
            self.add(item)

    @abstractmethod
    def key_of(self, item: T) -> Hashable:
        """Natural key of an entity."""
        pass

    def not_found(self, key: Hashable) -> EntityNotFoundError:
        """Error raised when ``key`` is missing; subclasses return a specific one."""
        return EntityNotFoundError(self.entity_name, str(key))

    def add(self, item: T) -> T:
        """Insert or replace an entity."""
        self._items[self.key_of(item)] = item
        return item

    def get(self, key: Hashable) -> T:
        """
        Retrieve an entity by key.

        Raises:
            EntityNotFoundError: If no entity has this key
        """
        try:
            return self._items[key]
        except KeyError:
            logger.debug(f"{self.entity_name} lookup missed: {key}")
            raise self.not_found(key) from None

    def all(self) -> List[T]:
        return list(self._items.values())

    def find(self, spec: Specification[T]) -> List[T]:
        """
        Find all entities matching a specification.

        Args:
            spec: Specification to filter by

        Returns:
            Matching entities in insertion order
        """
        return spec.filter(self._items.values())

    def find_one(self, spec: Specification[T]) -> Optional[T]:
        return spec.first(self._items.values())

    def count(self, spec: Optional[Specification[T]] = None) -> int:
        if spec is None:
            return len(self._items)
        return spec.count(self._items.values())

    def exists(self, key: Hashable) -> bool:
        return key in self._items
