"""Async commands that fetch resources and fold the results into the store.

A command is a callable ``(dispatch, get_state) -> awaitable``; run one with
``store.dispatch(Async(command))``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pyswapi._constants import PAGE_LINK_FIELDS
from pyswapi._transport import HttpTransport
from pyswapi._urls import resource_key
from pyswapi.state.events import page_failed, page_loaded, resource_failed, resource_loaded
from pyswapi.state.store import Async, Command, Dispatch, GetState, Sync

_logger = logging.getLogger(__name__)


class ResourceCommands:
    """Builds cache-or-fetch and page assembly commands over one transport.

    Parameters
    ----------
    transport : HttpTransport
        Performs the actual GET requests.
    dedupe_inflight : bool
        When true, concurrent fetches of the same key share a single
        request. When false, each one hits the network and records its
        own result.
    """

    def __init__(self, transport: HttpTransport, *, dedupe_inflight: bool = True) -> None:
        self._transport = transport
        self._dedupe_inflight = dedupe_inflight
        self._inflight: dict[str, asyncio.Future[dict[str, Any]]] = {}

    def fetch_resource(self, url: str) -> Command:
        """Resolve *url* from the resource cache, fetching it once if pending.

        Cached failures are re-raised as-is and never retried.
        """

        async def command(dispatch: Dispatch, get_state: GetState) -> dict[str, Any]:
            key = resource_key(url)
            entry = get_state().resources.get(key)
            if entry is not None and entry.loaded:
                if entry.error is not None:
                    _logger.debug("Cached failure for %s", key)
                    raise entry.error.with_traceback(None)
                _logger.debug("Cache hit for %s", key)
                return entry.data

            if not self._dedupe_inflight:
                return await self._fetch_and_record(url, dispatch)

            shared = self._inflight.get(key)
            if shared is None:
                shared = asyncio.ensure_future(self._fetch_and_record(url, dispatch))
                self._inflight[key] = shared
                shared.add_done_callback(lambda _fut: self._inflight.pop(key, None))
            else:
                _logger.debug("Joining in-flight fetch for %s", key)
            return await asyncio.shield(shared)

        return command

    async def _fetch_and_record(self, url: str, dispatch: Dispatch) -> dict[str, Any]:
        try:
            data = await self._transport.get_json(url)
        except Exception as exc:
            _logger.debug("Fetch of %s failed: %s", url, exc)
            dispatch(Sync(resource_failed(url, exc)))
            raise
        dispatch(Sync(resource_loaded(url, data)))
        return data

    def load_person_page(self, url: str) -> Command:
        """Assemble the page for the person at *url*.

        The person is fetched first, then every URL in its ``films``,
        ``starships`` and ``vehicles`` lists is fetched concurrently and
        replaced by its payload, keeping the original order. The page is
        all-or-fail: the first error marks the whole page as failed.
        """

        async def command(dispatch: Dispatch, get_state: GetState) -> dict[str, Any]:
            try:
                person = await dispatch(Async(self.fetch_resource(url)))
                page = dict(person)
                for field in PAGE_LINK_FIELDS:
                    links = person.get(field) or []
                    page[field] = list(
                        await asyncio.gather(*(dispatch(Async(self.fetch_resource(link))) for link in links))
                    )
            except Exception as exc:
                _logger.debug("Page %s failed: %s", url, exc)
                dispatch(Sync(page_failed(url, exc)))
                raise

            _logger.debug("Page %s assembled", url)
            dispatch(Sync(page_loaded(url, page)))
            return page

        return command
