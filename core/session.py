"""
Edit Session Management.

Provides the create/edit state machine that sits between a form and a
repository. This enables:
- Staging draft field values without touching the entity store
- Switching between "create" and "edit" for one entity type
- Merging the server's representation into the store after a submit
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar
from datetime import datetime, timezone
from enum import Enum
import logging

from .data import EntityStore, GatewayError, Repository
from .domain import RequiredFieldsValidator, Validator

logger = logging.getLogger(__name__)

T = TypeVar("T")
D = TypeVar("D")


class EditMode(Enum):
    """The two states of an edit session."""
    CREATE = "create"
    EDIT = "edit"


@dataclass
class SubmitResult(Generic[T]):
    """
    Outcome of a submit that reached the repository.

    Attributes:
        success: Whether the server accepted the change
        mode: The mode the session was in when submitting
        entity: The server's representation (on success)
        error: The gateway failure (on failure)
    """
    success: bool
    mode: EditMode
    entity: Optional[T] = None
    error: Optional[GatewayError] = None


class EditSession(ABC, Generic[T, D]):
    """
    Create/edit state machine for one entity type.

    Starts in CREATE mode with an empty draft. `begin_edit` switches to EDIT
    for a target entity, `cancel` goes back to CREATE. `submit` validates
    locally, calls the repository, and only after the call resolves writes
    the returned entity into the store.

    Subclasses declare `FIELDS` and how to convert between entities, the
    draft dict and the repository's draft type.
    """

    FIELDS: Tuple[str, ...] = ()

    def __init__(
        self,
        repository: Repository[T, D],
        store: EntityStore[T],
        validator: Optional[Validator] = None,
    ):
        self._repository = repository
        self._store = store
        self._validator = validator or RequiredFieldsValidator(list(self.FIELDS))
        self._target: Optional[T] = None
        self._draft: Dict[str, str] = self._empty_draft()
        self.updated_at: datetime = datetime.now(timezone.utc)

    # ----- Subclass hooks -----

    @abstractmethod
    def _draft_from(self, entity: T) -> Dict[str, str]:
        """Extract draft field values from an entity."""
        pass

    @abstractmethod
    def _build_draft(self, values: Dict[str, str]) -> D:
        """Convert draft values into the repository's draft type."""
        pass

    def _entity_id(self, entity: T) -> int:
        return getattr(entity, "id")

    # ----- State -----

    @property
    def mode(self) -> EditMode:
        return EditMode.CREATE if self._target is None else EditMode.EDIT

    @property
    def is_editing(self) -> bool:
        return self._target is not None

    @property
    def target(self) -> Optional[T]:
        return self._target

    @property
    def draft(self) -> Dict[str, str]:
        """A copy of the staged values."""
        return dict(self._draft)

    def _empty_draft(self) -> Dict[str, str]:
        return {name: "" for name in self.FIELDS}

    def _touch(self):
        """Update the timestamp."""
        self.updated_at = datetime.now(timezone.utc)

    def _reset(self):
        self._target = None
        self._draft = self._empty_draft()
        self._touch()

    # ----- Transitions -----

    def begin_edit(self, entity: T):
        """Switch to EDIT mode with the draft populated from `entity`."""
        self._target = entity
        self._draft = {**self._empty_draft(), **self._draft_from(entity)}
        self._touch()
        logger.debug(f"Editing {type(entity).__name__} {self._entity_id(entity)}")

    def cancel(self):
        """Return to CREATE mode with an empty draft."""
        self._reset()

    def update_field(self, name: str, value: str):
        """Set one draft field. Does not change the mode."""
        if name not in self.FIELDS:
            raise KeyError(f"Unknown field: {name}")
        self._draft[name] = value
        self._touch()

    def missing_fields(self) -> List[str]:
        return [error.field for error in self._validator.validate(self._draft)]

    async def submit(self) -> SubmitResult[T]:
        """
        Send the draft to the repository and merge the result into the store.

        Raises:
            ValidationError: a required field is empty; nothing is sent

        Returns:
            SubmitResult; on failure the mode and draft are left untouched
        """
        values = self.draft
        self._validator.check(values)

        mode = self.mode
        target = self._target
        payload = self._build_draft(values)
        try:
            if target is None:
                entity = await self._repository.create(payload)
            else:
                entity = await self._repository.update(self._entity_id(target), payload)
        except GatewayError as e:
            logger.warning(f"Failed to {'create' if mode is EditMode.CREATE else 'update'} entity: {e}")
            return SubmitResult(success=False, mode=mode, error=e)

        if mode is EditMode.CREATE:
            self._store.apply_create(entity)
            logger.info(f"Created {type(entity).__name__} {self._entity_id(entity)}")
        elif self._store.apply_update(entity):
            logger.info(f"Updated {type(entity).__name__} {self._entity_id(entity)}")
        else:
            logger.info(
                f"{type(entity).__name__} {self._entity_id(entity)} is no longer in the store; update dropped"
            )

        self._reset()
        return SubmitResult(success=True, mode=mode, entity=entity)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "mode": self.mode.value,
            "target_id": self._entity_id(self._target) if self._target is not None else None,
            "draft": self.draft,
            "missing_fields": self.missing_fields(),
            "updated_at": self.updated_at.isoformat(),
        }
