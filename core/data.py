"""
Data Layer Base Classes.

The data layer provides the Repository pattern for data access and an
in-memory EntityStore that mirrors a remote collection.

Key principles:
- Repositories handle remote CRUD operations only
- No business logic in repositories
- Return domain objects, not raw dicts
- The EntityStore never talks to the network; it is driven by the
  representations that repositories return
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

# Type variables for entity and draft types
T = TypeVar("T")
D = TypeVar("D")


# =============================================================================
# ERRORS
# =============================================================================

class GatewayError(Exception):
    """Base class for failures talking to the remote store."""


class RemoteError(GatewayError):
    """
    The server answered with a non-success status.

    Attributes:
        status: HTTP status code
        body: Raw response body text
    """

    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(f"Remote call failed with status {status}")


class TransportError(GatewayError):
    """The request could not be sent or no response was received (refused, DNS, timeout...)."""


class PayloadError(GatewayError):
    """A success response whose body does not decode into the expected entity."""

    def __init__(self, status: int, body: str = "", reason: str = ""):
        self.status = status
        self.body = body
        self.reason = reason
        super().__init__(f"Could not decode response (status {status}): {reason}")


# =============================================================================
# REPOSITORIES
# =============================================================================

class Repository(ABC, Generic[T, D]):
    """
    Abstract base class for remote repositories.

    A Repository provides CRUD access for one entity type against the
    authoritative store. T is the entity type, D the draft type used for
    create and update payloads.

    Example:
        class DoctorRepository(Repository[Doctor, DoctorDraft]):
            async def create(self, draft: DoctorDraft) -> Doctor:
                return await self._client.post(self.PATH, draft.to_payload(), _doctor)
    """

    @abstractmethod
    async def list(self) -> List[T]:
        """
        Fetch every entity.

        Returns:
            Entities in the order delivered by the server
        """
        pass

    @abstractmethod
    async def create(self, draft: D) -> T:
        """
        Create an entity.

        Args:
            draft: Field values for the new entity

        Returns:
            The server's representation, including the assigned ID
        """
        pass

    @abstractmethod
    async def update(self, id: int, draft: D) -> T:
        """
        Replace the fields of an existing entity.

        Args:
            id: The entity's unique identifier
            draft: New field values

        Returns:
            The server's representation after the update
        """
        pass

    @abstractmethod
    async def delete(self, id: int) -> None:
        """
        Delete an entity by ID.

        Args:
            id: The entity's unique identifier
        """
        pass


class ReadOnlyRepository(ABC, Generic[T]):
    """
    Abstract base class for read-only repositories.

    Use this for entities the client displays but never mutates
    (e.g., appointments on the dashboard).
    """

    @abstractmethod
    async def list(self) -> List[T]:
        """Fetch every entity, in server order."""
        pass


# =============================================================================
# ENTITY STORE
# =============================================================================

class EntityStore(Generic[T]):
    """
    Ordered in-memory collection of entities keyed by their `id` attribute.

    Each ID appears at most once. Insertion order is preserved; updates keep
    an entity in its position and deletes keep the relative order of the rest.
    """

    def __init__(self, entities: Optional[Iterable[T]] = None):
        self._items: Dict[int, T] = {}
        if entities is not None:
            self.replace_all(entities)

    @staticmethod
    def _key(entity: Any) -> int:
        key = getattr(entity, "id", None)
        if key is None:
            raise ValueError("Entity has no id; only server representations can be stored")
        return key

    def get_all(self) -> List[T]:
        """Get all entities in insertion order."""
        return list(self._items.values())

    def get(self, id: int) -> Optional[T]:
        return self._items.get(id)

    def apply_create(self, entity: T):
        """
        Add a newly created entity at the end.

        If the ID is already present the existing entry is replaced in place.
        """
        self._items[self._key(entity)] = entity

    def apply_update(self, entity: T) -> bool:
        """
        Replace the entity with the same ID, keeping its position.

        Returns:
            False if no entity with that ID is present (nothing is added)
        """
        key = self._key(entity)
        if key not in self._items:
            return False
        self._items[key] = entity
        return True

    def apply_delete(self, id: int) -> bool:
        """
        Remove the entity with this ID.

        Returns:
            False if it was already absent (the store is unchanged)
        """
        return self._items.pop(id, None) is not None

    def replace_all(self, entities: Iterable[T]):
        """Swap the whole collection, e.g. after a fresh list fetch."""
        items: Dict[int, T] = {}
        for entity in entities:
            items[self._key(entity)] = entity
        self._items = items

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, id: object) -> bool:
        return id in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self.get_all())
