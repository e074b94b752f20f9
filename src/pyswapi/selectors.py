"""Projections from :class:`AppState` to the view models the UI renders."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from pyswapi._urls import resource_key
from pyswapi.state.models import PENDING, AppState, Character, ResourceEntry


class CharacterOption(Character):
    """A menu entry annotated with whether it is the current selection."""

    selected: bool = False


class EmptyViewModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    empty: Literal[True] = True
    characters: tuple[Character, ...]


class PersonViewModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    empty: Literal[False] = False
    characters: tuple[CharacterOption, ...]
    person: ResourceEntry


ViewModel = EmptyViewModel | PersonViewModel


def view_model(state: AppState) -> ViewModel:
    """Build the view model for *state*.

    Holds no state of its own; callers recompute it on every change.
    """
    selected = state.selected_character
    if selected.is_empty:
        return EmptyViewModel(characters=state.characters)

    selected_key = resource_key(selected.url)
    characters = tuple(
        CharacterOption(name=c.name, url=c.url, selected=resource_key(c.url) == selected_key)
        for c in state.characters
    )
    return PersonViewModel(
        characters=characters,
        person=state.pages.get(selected_key, PENDING),
    )
