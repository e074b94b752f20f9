"""High-level async client for browsing characters of the Star Wars API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import Any

import aiohttp

from pyswapi._constants import BASE_URL, DEFAULT_CHARACTER_SEED
from pyswapi._transport import AiohttpTransport, HttpTransport
from pyswapi._urls import resource_key
from pyswapi.commands import ResourceCommands
from pyswapi.config import PyswapiConfig
from pyswapi.exceptions import SwapiError
from pyswapi.selectors import ViewModel, view_model
from pyswapi.state.events import character_selected, selection_cleared
from pyswapi.state.models import AppState, Character
from pyswapi.state.store import Action, Async, Store, Sync

_logger = logging.getLogger(__name__)


def default_characters(base_url: str = BASE_URL) -> tuple[Character, ...]:
    """Build the seed character menu under *base_url*."""
    root = base_url.strip().rstrip("/")
    return tuple(Character(name=name, url=f"{root}{path}") for name, path in DEFAULT_CHARACTER_SEED)


DEFAULT_CHARACTERS: tuple[Character, ...] = default_characters()


class SwapiClient:
    """Async client that owns the store and the fetch machinery.

    Usage::

        async with SwapiClient(config) as client:
            await client.select_character(client.character_by_name("Luke Skywalker"))
            print(client.view_model())
    """

    def __init__(
        self,
        config: PyswapiConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: HttpTransport | None = None,
        characters: Iterable[Character] | None = None,
    ) -> None:
        self._config = config or PyswapiConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._external_transport = transport is not None
        self._commands: ResourceCommands | None = None
        self.store = Store.create(
            default_characters(self._config.base_url) if characters is None else characters
        )

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SwapiClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = AiohttpTransport(self._config, self._http_session)
        self._commands = ResourceCommands(self._transport, dedupe_inflight=self._config.dedupe_inflight)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None
        self._commands = None

    # ------------------------------------------------------------------
    # Store surface
    # ------------------------------------------------------------------

    @property
    def state(self) -> AppState:
        return self.store.get_state()

    def view_model(self) -> ViewModel:
        return view_model(self.store.get_state())

    def subscribe(self, listener: Callable[[AppState], None]) -> Callable[[], None]:
        return self.store.subscribe(listener)

    def dispatch(self, action: Action) -> asyncio.Future[Any] | None:
        return self.store.dispatch(action)

    def _require_commands(self) -> ResourceCommands:
        if self._commands is None:
            raise SwapiError("Client not initialized. Use 'async with SwapiClient(...) as client:'")
        return self._commands

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch_resource(self, url: str) -> dict[str, Any]:
        """Return the payload at *url*, from cache when already loaded."""
        commands = self._require_commands()
        return await self.store.dispatch(Async(commands.fetch_resource(url)))

    async def load_person_page(self, url: str) -> dict[str, Any]:
        """Assemble the person page at *url*; raises the first fetch error."""
        commands = self._require_commands()
        return await self.store.dispatch(Async(commands.load_person_page(url)))

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def character_by_name(self, name: str) -> Character | None:
        wanted = name.strip().casefold()
        for character in self.state.characters:
            if character.name.casefold() == wanted:
                return character
        return None

    def select_character(self, character: Character) -> asyncio.Future[None]:
        """Select *character* and start loading its page.

        The returned future completes once the page has settled. It never
        raises for fetch failures: those are already recorded on the page
        entry shown by :meth:`view_model`.
        """
        commands = self._require_commands()
        self.store.dispatch(Sync(character_selected(character)))
        page_task = self.store.dispatch(Async(commands.load_person_page(character.url)))

        done: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        def _settle(task: asyncio.Future[Any]) -> None:
            if task.cancelled():
                if not done.done():
                    done.cancel()
                return
            exc = task.exception()
            if exc is not None:
                _logger.debug("Page for %s failed", resource_key(character.url), exc_info=exc)
            if not done.done():
                done.set_result(None)

        page_task.add_done_callback(_settle)
        return done

    def clear_selection(self) -> None:
        self.store.dispatch(Sync(selection_cleared()))
