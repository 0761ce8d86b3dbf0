"""Service container with DI wiring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from btts.data.api_client import ApiClient
from btts.data.credentials import CredentialStore
from btts.data.db import Database
from btts.services.chat_service import ChatService
from btts.services.message_service import MessageService
from btts.services.search_session import SearchSession

if TYPE_CHECKING:
    import httpx

    from btts.config import Config


@dataclass
class ClientContainer:
    """Holds one client session's state and services. Built explicitly, never global."""

    db: Database
    credentials: CredentialStore
    api: ApiClient
    search_session: SearchSession
    chat_service: ChatService
    message_service: MessageService

    @classmethod
    async def create(
        cls,
        config: Config,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ClientContainer:
        """Async factory that wires all dependencies."""
        db = Database(config.db_path)
        await db.connect()

        credentials = CredentialStore(db)
        api = ApiClient(config.api_root, timeout=config.timeout, transport=transport)
        search_session = SearchSession(credentials, api, page_size=config.page_size)

        credentials.subscribe(api.set_credential)
        credentials.subscribe(search_session.invalidate_chat_catalog)
        await credentials.load()

        return cls(
            db=db,
            credentials=credentials,
            api=api,
            search_session=search_session,
            chat_service=ChatService(credentials, api),
            message_service=MessageService(credentials, api),
        )

    async def close(self) -> None:
        """Shut down all services."""
        await self.api.close()
        await self.db.close()
