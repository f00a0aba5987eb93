"""
In‑memory storage for users and orders.

This module replaces a database with three thread‑safe structures:

``EntityStore``
    Entities of one kind keyed by an integer identifier.  Identifiers
    come from a counter that starts at 1 and is only ever incremented,
    so a deleted identifier is never handed out again until ``clear``.
    An optional ``unique_key`` function turns one attribute into a
    unique index; the key is checked and claimed in the same critical
    section as the insert.

``RelationIndex``
    Maps a parent identifier (a user) to the ordered list of its
    children (that user's orders).

``DataStore``
    Groups the stores used by the application.  One instance is built
    per application in ``main.create_app`` and handed to request
    handlers through the ``get_store`` dependency, so each test can
    work on a fresh instance.

Every structure guards its state with its own ``threading.RLock``.
FastAPI may run handlers on several worker threads at once and the
counters must never lose an increment.
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Generic, List, Optional, Protocol, TypeVar

from fastapi import Request

from ..schemas.order import Order
from ..schemas.user import User
from .errors import ConflictError, NotFoundError


class Entity(Protocol):
    id: Optional[int]


E = TypeVar("E", bound=Entity)
C = TypeVar("C")


class EntityStore(Generic[E]):
    """Keyed collection of one entity kind with identifier allocation."""

    def __init__(
        self,
        kind: str,
        unique_key: Optional[Callable[[E], str]] = None,
        unique_message: str = "Value already in use",
    ) -> None:
        self.kind = kind
        self._unique_key = unique_key
        self._unique_message = unique_message
        self._lock = threading.RLock()
        self._items: Dict[int, E] = {}
        self._unique: Dict[str, int] = {}
        self._next_id = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, entity_id: object) -> bool:
        with self._lock:
            return entity_id in self._items

    @property
    def next_id(self) -> int:
        """Identifier the next ``insert`` will assign."""
        with self._lock:
            return self._next_id

    def _not_found(self, entity_id: int) -> NotFoundError:
        return NotFoundError(f"{self.kind} {entity_id} not found")

    def insert(self, entity: E) -> int:
        """Store ``entity`` under the next identifier and return it.

        The identifier is written to ``entity.id``.  Raises
        ``ConflictError`` without consuming an identifier when the
        entity's unique key is already taken.
        """
        with self._lock:
            key = self._unique_key(entity) if self._unique_key else None
            if key is not None and key in self._unique:
                raise ConflictError(self._unique_message)
            entity_id = self._next_id
            self._next_id += 1
            entity.id = entity_id
            self._items[entity_id] = entity
            if key is not None:
                self._unique[key] = entity_id
            return entity_id

    def get(self, entity_id: int) -> E:
        with self._lock:
            try:
                return self._items[entity_id]
            except KeyError:
                raise self._not_found(entity_id) from None

    def find(self, entity_id: int) -> Optional[E]:
        with self._lock:
            return self._items.get(entity_id)

    def find_by_key(self, key: str) -> Optional[E]:
        """Look an entity up through the unique index."""
        with self._lock:
            entity_id = self._unique.get(key)
            return self._items.get(entity_id) if entity_id is not None else None

    def list(self) -> List[E]:
        """Return a snapshot of all entities in insertion order."""
        with self._lock:
            return list(self._items.values())

    def update(self, entity_id: int, mutator: Callable[[E], E]) -> E:
        """Replace an entity with ``mutator(entity)``.

        The mutator receives the stored entity and returns the new
        version; callers are expected to hand back a copy rather than
        modify the stored instance in place.  When the unique key
        changes, the new key is checked before anything is replaced.
        """
        with self._lock:
            current = self.get(entity_id)
            updated = mutator(current)
            updated.id = entity_id
            if self._unique_key:
                old_key = self._unique_key(current)
                new_key = self._unique_key(updated)
                if new_key != old_key:
                    if new_key is not None and new_key in self._unique:
                        raise ConflictError(self._unique_message)
                    if old_key is not None:
                        self._unique.pop(old_key, None)
                    if new_key is not None:
                        self._unique[new_key] = entity_id
            self._items[entity_id] = updated
            return updated

    def delete(self, entity_id: int) -> bool:
        """Remove an entity; ``False`` when it did not exist."""
        with self._lock:
            entity = self._items.pop(entity_id, None)
            if entity is None:
                return False
            if self._unique_key:
                key = self._unique_key(entity)
                if key is not None and self._unique.get(key) == entity_id:
                    del self._unique[key]
            return True

    def clear(self) -> None:
        """Drop every entity and restart identifiers at 1."""
        with self._lock:
            self._items.clear()
            self._unique.clear()
            self._next_id = 1


class RelationIndex(Generic[C]):
    """Parent identifier -> ordered list of children."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._buckets: Dict[int, List[C]] = {}

    def append(self, parent_id: int, child: C) -> None:
        with self._lock:
            self._buckets.setdefault(parent_id, []).append(child)

    def list_by_parent(self, parent_id: int) -> List[C]:
        """Children of ``parent_id``; an empty list when there are none."""
        with self._lock:
            return list(self._buckets.get(parent_id, ()))

    def replace(self, parent_id: int, match: Callable[[C], bool], child: C) -> bool:
        """Swap the first child matching ``match`` for ``child``."""
        with self._lock:
            bucket = self._buckets.get(parent_id, [])
            for position, existing in enumerate(bucket):
                if match(existing):
                    bucket[position] = child
                    return True
            return False

    def remove_parent(self, parent_id: int) -> List[C]:
        """Drop the bucket of ``parent_id`` and return what it held."""
        with self._lock:
            return self._buckets.pop(parent_id, [])

    def snapshot(self) -> Dict[int, List[C]]:
        with self._lock:
            return {parent_id: list(children) for parent_id, children in self._buckets.items()}

    def count(self) -> int:
        with self._lock:
            return sum(len(children) for children in self._buckets.values())

    def clear(self) -> None:
        with self._lock:
            self._buckets.clear()


class DataStore:
    """All in‑memory collections used by one application instance.

    ``lock`` serialises operations spanning several collections (user
    deletion with its orders, order creation, reset) so that a reader
    never observes an order whose owner is half removed.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.users: EntityStore[User] = EntityStore(
            "User",
            unique_key=lambda user: normalize_email(user.email),
            unique_message="Email already in use",
        )
        self.orders: EntityStore[Order] = EntityStore("Order")
        self.user_orders: RelationIndex[Order] = RelationIndex()

    def clear(self) -> None:
        with self.lock:
            self.users.clear()
            self.orders.clear()
            self.user_orders.clear()


def normalize_email(email: Optional[str]) -> Optional[str]:
    """Key used for case‑insensitive email uniqueness."""
    if email is None:
        return None
    return email.strip().lower()


def get_store(request: Request) -> DataStore:
    """FastAPI dependency returning the application's ``DataStore``."""
    return request.app.state.store
