"""Search session: query/filter state, pagination and result reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from btts.models.chats import ChatCatalog, IndexedChat
from btts.models.pagination import page_offset, total_pages
from btts.models.search import ChatFilter, ResultSet, SearchHit, build_multi_search_request

if TYPE_CHECKING:
    from btts.data.credentials import CredentialStore
    from btts.data.protocols import SearchApiProtocol

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12


class SearchSession:
    """Owns the state behind one search view.

    Mutating the query or a filter resets to page 1 and clears results but
    does not search; callers batch changes and then call :meth:`search`.
    :meth:`go_to_page` is the only mutation that fetches by itself.

    Each request takes a generation number, and every state mutation bumps it.
    A response is committed only if its generation is still the latest, so a
    slow response can never overwrite newer state. Results and the page they
    belong to are committed together.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        api: SearchApiProtocol,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        if page_size < 1:
            msg = f"Page size must be positive, got {page_size}"
            raise ValueError(msg)
        self._credentials = credentials
        self._api = api

        self._query = ""
        self._filters = ChatFilter()
        self._page_size = page_size
        self._current_page = 1
        self._results = ResultSet.empty()

        self._catalog: ChatCatalog | None = None
        self._loading_chats = False

        self._generation = 0
        self._in_flight = 0

    # Query / filter state

    @property
    def query(self) -> str:
        return self._query

    @property
    def filters(self) -> ChatFilter:
        return self._filters

    def set_query(self, text: str) -> None:
        self._query = text
        self.reset_search()

    def set_chat_filter(self, chat_ids: Iterable[int]) -> None:
        self._filters = self._filters.with_chat_ids(chat_ids)
        self.reset_search()

    def set_user_filter(self, user_ids: Iterable[int]) -> None:
        self._filters = self._filters.with_user_ids(user_ids)
        self.reset_search()

    def set_type_filter(self, types: Iterable[str]) -> None:
        self._filters = self._filters.with_types(types)
        self.reset_search()

    def reset_search(self) -> None:
        """Drop results, return to page 1 and orphan any in-flight search."""
        self._results = ResultSet.empty()
        self._current_page = 1
        self._generation += 1

    # Pagination state

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def total_pages(self) -> int:
        return total_pages(self._results.estimated_total, self._page_size)

    @property
    def offset(self) -> int:
        return page_offset(self._current_page, self._page_size)

    def set_page_size(self, size: int) -> None:
        """Change the page size and return to page 1. Results are kept."""
        if size < 1:
            msg = f"Page size must be positive, got {size}"
            raise ValueError(msg)
        self._page_size = size
        self._current_page = 1
        self._generation += 1

    async def go_to_page(self, page: int) -> bool:
        """Fetch ``page`` if it lies within the current result range.

        Returns False without touching state or the network when ``page`` is
        outside ``[1, total_pages]`` or no credential is configured.
        """
        if page < 1 or page > self.total_pages:
            logger.debug("Ignoring navigation to page %d of %d", page, self.total_pages)
            return False
        if not self._credentials.is_configured:
            return False
        await self._run_search(page)
        return True

    # Results

    @property
    def results(self) -> ResultSet:
        return self._results

    @property
    def hits(self) -> tuple[SearchHit, ...]:
        return self._results.hits

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    async def search(self) -> None:
        """Search the current page with the current query and filters.

        No-op without a credential. Transport errors are logged and re-raised;
        the previous results stay in place.
        """
        if not self._credentials.is_configured:
            return
        await self._run_search(self._current_page)

    async def _run_search(self, page: int) -> None:
        self._generation += 1
        generation = self._generation
        request = build_multi_search_request(
            self._query,
            self._filters,
            limit=self._page_size,
            offset=page_offset(page, self._page_size),
            master=self.is_master,
        )

        self._in_flight += 1
        try:
            response = await self._api.search_multi_chat(request)
        except Exception:
            logger.exception("Search failed")
            raise
        finally:
            self._in_flight -= 1

        if generation != self._generation:
            logger.debug(
                "Discarding superseded search response (generation %d, latest %d)",
                generation,
                self._generation,
            )
            return
        self._results = ResultSet.from_response(response)
        self._current_page = page

    # Indexed chat catalogue

    @property
    def indexed_chats(self) -> tuple[IndexedChat, ...]:
        return self._catalog.chats if self._catalog is not None else ()

    @property
    def is_master(self) -> bool:
        return self._catalog.master if self._catalog is not None else False

    @property
    def is_loading_chats(self) -> bool:
        return self._loading_chats

    @property
    def has_chat_catalog(self) -> bool:
        return self._catalog is not None

    def invalidate_chat_catalog(self, _token: str | None = None) -> None:
        """Forget the cached catalogue; used as a credential listener."""
        self._catalog = None

    async def load_chat_catalog(self, *, force: bool = False) -> None:
        """Fetch the indexed chats once per credential.

        No-op without a credential, or when a catalogue for the current
        credential is already cached and ``force`` is not set.
        """
        if not self._credentials.is_configured:
            return
        if self._catalog is not None and not force:
            return

        token = self._credentials.get()
        self._loading_chats = True
        try:
            catalog = await self._api.get_indexed_chats()
        except Exception:
            logger.exception("Loading indexed chats failed")
            raise
        finally:
            self._loading_chats = False

        if self._credentials.get() != token:
            logger.debug("Credential changed while loading chats; discarding catalogue")
            return
        self._catalog = catalog
        logger.info("Loaded %d indexed chats (master=%s)", len(catalog.chats), catalog.master)
