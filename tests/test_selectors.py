from __future__ import annotations

from pyswapi.exceptions import SwapiTransportError
from pyswapi.selectors import EmptyViewModel, PersonViewModel, view_model
from pyswapi.state.events import character_selected, page_failed, page_loaded, selection_cleared
from pyswapi.state.models import PENDING, AppState, Character

LUKE = Character(name="Luke Skywalker", url="http://swapi.dev/api/people/1/")
VADER = Character(name="Darth Vader", url="http://swapi.dev/api/people/4/")


def _state() -> AppState:
    return AppState.initial([LUKE, VADER])


def test_no_selection_yields_empty_view_model() -> None:
    vm = view_model(_state())

    assert isinstance(vm, EmptyViewModel)
    assert vm.empty is True
    assert vm.characters == (LUKE, VADER)


def test_selection_without_page_is_pending() -> None:
    vm = view_model(character_selected(LUKE)(_state()))

    assert isinstance(vm, PersonViewModel)
    assert vm.empty is False
    assert vm.person == PENDING
    assert [(c.name, c.selected) for c in vm.characters] == [("Luke Skywalker", True), ("Darth Vader", False)]


def test_selection_matches_across_url_schemes() -> None:
    https_vader = Character(name="Darth Vader", url="https://swapi.dev/api/people/4/")
    state = page_loaded(VADER.url, {"name": "Darth Vader"})(_state())
    vm = view_model(character_selected(https_vader)(state))

    assert isinstance(vm, PersonViewModel)
    assert [c.selected for c in vm.characters] == [False, True]
    assert vm.person.data == {"name": "Darth Vader"}


def test_failed_page_is_exposed_as_is() -> None:
    error = SwapiTransportError("Not found", status_code=404)
    state = page_failed(LUKE.url, error)(character_selected(LUKE)(_state()))
    vm = view_model(state)

    assert isinstance(vm, PersonViewModel)
    assert vm.person.loaded is True
    assert vm.person.error is error


def test_view_model_is_pure() -> None:
    state = page_loaded(LUKE.url, {"name": "Luke Skywalker"})(character_selected(LUKE)(_state()))

    assert view_model(state) == view_model(state)


def test_select_then_clear_returns_initial_view_model() -> None:
    initial = _state()
    state = selection_cleared()(character_selected(VADER)(initial))

    assert view_model(state) == view_model(initial)
