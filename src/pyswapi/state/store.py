"""In-memory store and action dispatcher.

This is the only component allowed to replace the application state.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol, overload

from pyswapi.state.events import StateTransform
from pyswapi.state.models import AppState, Character

_logger = logging.getLogger(__name__)

GetState = Callable[[], AppState]
Listener = Callable[[AppState], None]


class Dispatch(Protocol):
    @overload
    def __call__(self, action: Sync) -> None: ...

    @overload
    def __call__(self, action: Async) -> asyncio.Future[Any]: ...


Command = Callable[[Dispatch, GetState], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class Sync:
    """Apply a state transform immediately."""

    transform: StateTransform


@dataclass(frozen=True, slots=True)
class Async:
    """Run a command that may dispatch further actions over time."""

    command: Command


Action = Sync | Async


class Store:
    """Holds the current :class:`AppState` and applies actions to it.

    Usage::

        store = Store.create(characters)
        store.dispatch(Sync(character_selected(characters[0])))
        page = await store.dispatch(Async(commands.load_person_page(url)))
    """

    def __init__(self, state: AppState) -> None:
        self._state = state
        self._listeners: list[Listener] = []

    @classmethod
    def create(cls, seed: Iterable[Character]) -> Store:
        return cls(AppState.initial(tuple(seed)))

    def get_state(self) -> AppState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with the new state after every transform.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @overload
    def dispatch(self, action: Sync) -> None: ...

    @overload
    def dispatch(self, action: Async) -> asyncio.Future[Any]: ...

    def dispatch(self, action: Action) -> asyncio.Future[Any] | None:
        """Apply a :class:`Sync` transform or schedule an :class:`Async` command.

        A sync transform is visible through :meth:`get_state` as soon as this
        returns. A command is started as a task on the running loop and the
        task is returned so callers can await it or attach callbacks.
        """
        if isinstance(action, Sync):
            self._apply(action.transform)
            return None
        if isinstance(action, Async):
            loop = asyncio.get_running_loop()
            pending = action.command(self.dispatch, self.get_state)
            if asyncio.iscoroutine(pending):
                return loop.create_task(pending)
            return asyncio.ensure_future(pending, loop=loop)
        raise TypeError(f"Cannot dispatch {type(action).__name__}; expected Sync or Async")

    def _apply(self, transform: StateTransform) -> None:
        self._state = transform(self._state)
        state = self._state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _logger.debug("State listener failed", exc_info=True)
