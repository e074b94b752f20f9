"""Immutable state tree models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator


class Character(BaseModel):
    """An entry of the character menu."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    name: str = ""
    url: str = ""

    @property
    def is_empty(self) -> bool:
        """Whether this is the "no selection" placeholder."""
        return not self.url


#: Placeholder meaning "no character selected".
NO_SELECTION = Character()


class ResourceEntry(BaseModel):
    """Fetch result for a single resource or page.

    ``loaded=False`` is the pending state and carries neither data nor
    error. Once loaded, either ``data`` (success) or ``error`` (failure)
    is meaningful; the transition is terminal.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    data: dict[str, Any] = Field(default_factory=dict)
    loaded: bool = False
    error: Exception | None = None

    @model_validator(mode="after")
    def _check_pending_is_blank(self) -> ResourceEntry:
        if not self.loaded and (self.data or self.error is not None):
            raise ValueError("a pending entry cannot carry data or an error")
        return self

    @field_serializer("error")
    def _serialize_error(self, error: Exception | None) -> str | None:
        return None if error is None else str(error)

    @property
    def ok(self) -> bool:
        """Loaded successfully."""
        return self.loaded and self.error is None


#: Placeholder for a resource or page that has not resolved yet.
PENDING = ResourceEntry()


class AppState(BaseModel):
    """Root of the state tree. Replaced, never mutated, on every dispatch."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    resources: dict[str, ResourceEntry] = Field(default_factory=dict)
    pages: dict[str, ResourceEntry] = Field(default_factory=dict)
    characters: tuple[Character, ...] = ()
    selected_character: Character = NO_SELECTION

    @classmethod
    def initial(cls, characters: tuple[Character, ...] | list[Character]) -> AppState:
        return cls(characters=tuple(characters))
