"""Message service: fetch by id, reply, forward and media download."""

from __future__ import annotations

import logging
from contextlib import aclosing
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError
from result import Err, Ok, Result

from btts.models.messages import ForwardMessagesRequest, MessageResponse, ReplyMessageRequest
from btts.models.search import SearchResponse
from btts.services.chat_service import NOT_CONFIGURED

if TYPE_CHECKING:
    from btts.data.credentials import CredentialStore
    from btts.data.protocols import BackendApiProtocol

logger = logging.getLogger(__name__)


class MessageService:
    """Service for actions on individual messages."""

    def __init__(self, credentials: CredentialStore, api: BackendApiProtocol) -> None:
        self._credentials = credentials
        self._api = api

    async def fetch_messages(self, chat_id: int, ids: list[int]) -> Result[SearchResponse, str]:
        """Fetch messages of a chat by id."""
        if not self._credentials.is_configured:
            return Err(NOT_CONFIGURED)
        if not ids:
            return Err("No message ids given")
        try:
            return Ok(await self._api.fetch_messages(chat_id, ids))
        except (httpx.HTTPError, ValidationError) as exc:
            return Err(f"Fetching messages failed: {exc}")

    async def reply(self, chat_id: int, message_id: int, text: str) -> Result[MessageResponse, str]:
        """Reply to a message as the backend's client account."""
        if not self._credentials.is_configured:
            return Err(NOT_CONFIGURED)
        if not text.strip():
            return Err("Reply text cannot be empty")
        request = ReplyMessageRequest(chat_id=chat_id, message_id=message_id, text=text)
        try:
            return Ok(await self._api.reply_message(request))
        except (httpx.HTTPError, ValidationError) as exc:
            return Err(f"Reply failed: {exc}")

    async def forward(
        self, from_chat_id: int, to_chat_id: int, message_ids: list[int]
    ) -> Result[MessageResponse, str]:
        """Forward messages from one chat to another."""
        if not self._credentials.is_configured:
            return Err(NOT_CONFIGURED)
        if not message_ids:
            return Err("No message ids given")
        request = ForwardMessagesRequest(
            from_chat_id=from_chat_id, to_chat_id=to_chat_id, message_ids=message_ids
        )
        try:
            return Ok(await self._api.forward_messages(request))
        except (httpx.HTTPError, ValidationError) as exc:
            return Err(f"Forward failed: {exc}")

    async def download(self, chat_id: int, message_id: int, target: Path) -> Result[int, str]:
        """Write the media of a message to ``target``; returns bytes written.

        A failed download removes whatever part of ``target`` it created.
        """
        written = 0
        created = False
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("wb") as fh:
                created = True
                async with aclosing(self._api.stream_file(chat_id, message_id)) as chunks:
                    async for chunk in chunks:
                        fh.write(chunk)
                        written += len(chunk)
        except (httpx.HTTPError, OSError) as exc:
            if created:
                target.unlink(missing_ok=True)
            return Err(f"Download failed: {exc}")
        logger.info("Downloaded %d bytes to %s", written, target)
        return Ok(written)
