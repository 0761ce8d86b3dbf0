"""BTTS client: search indexed chats on a remote message-search backend."""

__version__ = "0.1.0"
