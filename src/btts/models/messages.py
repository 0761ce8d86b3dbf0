"""Message action models: reply, forward and fetch-by-id."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ReplyMessageRequest(BaseModel):
    """Body of ``POST client/reply``."""

    chat_id: int
    message_id: int
    text: str


class ForwardMessagesRequest(BaseModel):
    """Body of ``POST client/forward``."""

    from_chat_id: int
    to_chat_id: int
    message_ids: list[int] = Field(default_factory=list)


class FetchMessagesRequest(BaseModel):
    """Body of ``POST index/{chat_id}/msgs/fetch``."""

    ids: list[int] = Field(default_factory=list)


class MessageResponse(BaseModel):
    """Acknowledgement returned by the client action endpoints."""

    status: str = ""
    message: str = ""
