"""State transitions.

Every event here is a pure function of its parameters that returns a
:data:`StateTransform`.  A transform takes the old state and returns a new
one; it never mutates its input, it only rebinds the touched branch of the
tree on a shallow copy.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pyswapi._urls import resource_key
from pyswapi.state.models import NO_SELECTION, AppState, Character, ResourceEntry

StateTransform = Callable[[AppState], AppState]


def _set_resource(url: str, entry: ResourceEntry) -> StateTransform:
    key = resource_key(url)

    def transform(state: AppState) -> AppState:
        return state.model_copy(update={"resources": {**state.resources, key: entry}})

    return transform


def _set_page(url: str, entry: ResourceEntry) -> StateTransform:
    key = resource_key(url)

    def transform(state: AppState) -> AppState:
        return state.model_copy(update={"pages": {**state.pages, key: entry}})

    return transform


def resource_loaded(url: str, data: dict[str, Any]) -> StateTransform:
    return _set_resource(url, ResourceEntry(data=data, loaded=True))


def resource_failed(url: str, error: Exception) -> StateTransform:
    return _set_resource(url, ResourceEntry(loaded=True, error=error))


def page_loaded(url: str, data: dict[str, Any]) -> StateTransform:
    return _set_page(url, ResourceEntry(data=data, loaded=True))


def page_failed(url: str, error: Exception) -> StateTransform:
    return _set_page(url, ResourceEntry(loaded=True, error=error))


def character_selected(character: Character) -> StateTransform:
    def transform(state: AppState) -> AppState:
        return state.model_copy(update={"selected_character": character})

    return transform


def selection_cleared() -> StateTransform:
    return character_selected(NO_SELECTION)
