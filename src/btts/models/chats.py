"""Indexed chat catalogue models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class IndexedChat(BaseModel):
    """A chat source the backend has ingested and made searchable."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    chat_id: int
    title: str = ""
    type: int = 0
    username: str = ""
    is_public: bool = Field(default=False, alias="public")
    is_watching: bool = Field(default=False, alias="watching")
    is_protected: bool = Field(default=False, alias="no_delete")


class ChatCatalog(BaseModel):
    """Indexed chats visible to a credential, plus its privilege level."""

    model_config = ConfigDict(frozen=True)

    chats: tuple[IndexedChat, ...] = ()
    master: bool = False
