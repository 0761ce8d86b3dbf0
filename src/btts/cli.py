"""Typer CLI for BTTS: API key management, chat catalogue, search and message actions."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Annotated, NoReturn

import httpx
import typer
from pydantic import ValidationError
from result import Err

from btts.config import DEFAULT_API_ROOT, Config, default_data_dir
from btts.formatting import (
    format_file_size,
    format_message_type,
    format_timestamp,
    highlight_terms,
    mask_api_key,
    truncate_text,
    validate_api_key,
)
from btts.models.message_types import (
    ALL_MESSAGE_TYPE_KEYS,
    normalize_message_types,
    ordered_message_types,
)
from btts.models.pagination import page_offset, total_pages
from btts.models.search import SearchHit
from btts.services.container import ClientContainer

app = typer.Typer(
    name="btts",
    help="Search indexed chats on a BTTS message-search backend.",
    no_args_is_help=True,
)
key_app = typer.Typer(help="Manage the API key used for every request.", no_args_is_help=True)
app.add_typer(key_app, name="key")

NOT_CONFIGURED_HINT = "No API key configured. Run 'btts key set <KEY>' first."


@app.callback()
def main(
    ctx: typer.Context,
    api_root: Annotated[
        str,
        typer.Option("--api-root", envvar="BTTS_API_ROOT", help="Backend API root URL"),
    ] = DEFAULT_API_ROOT,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", envvar="BTTS_DATA_DIR", help="Directory for client state"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Configure logging and build the client configuration."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Config(api_root=api_root, data_dir=data_dir or default_data_dir())


@asynccontextmanager
async def _open_container(config: Config) -> AsyncIterator[ClientContainer]:
    container = await ClientContainer.create(config)
    try:
        yield container
    finally:
        await container.close()


def _fail(message: str) -> NoReturn:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


def _mark(term: str) -> str:
    return typer.style(term, fg=typer.colors.YELLOW, bold=True)


def _echo_hit(hit: SearchHit, query: str) -> None:
    chat = hit.chat_title or str(hit.chat_id)
    author = hit.user_full_name or str(hit.user_id)
    typer.echo(
        f"[{chat}] {author} | {format_timestamp(hit.timestamp)} | "
        f"{format_message_type(hit.type)} | #{hit.message_id}"
    )
    body = truncate_text(hit.text or hit.full_text)
    if body:
        typer.echo(f"    {highlight_terms(body, query, _mark)}")


# API key


@key_app.command("set")
def key_set(ctx: typer.Context, key: Annotated[str, typer.Argument(help="API key")]) -> None:
    """Store the API key."""
    if not validate_api_key(key):
        raise typer.BadParameter("API key is too short", param_hint="KEY")
    asyncio.run(_do_key_set(ctx.obj, key))


async def _do_key_set(config: Config, key: str) -> None:
    async with _open_container(config) as container:
        await container.credentials.set(key)
    typer.echo("API key saved.")


@key_app.command("show")
def key_show(ctx: typer.Context) -> None:
    """Show the stored API key, masked."""
    asyncio.run(_do_key_show(ctx.obj))


async def _do_key_show(config: Config) -> None:
    async with _open_container(config) as container:
        token = container.credentials.get()
    if token is None:
        typer.echo("No API key configured.")
        return
    typer.echo(mask_api_key(token))


@key_app.command("clear")
def key_clear(ctx: typer.Context) -> None:
    """Remove the stored API key."""
    asyncio.run(_do_key_clear(ctx.obj))


async def _do_key_clear(config: Config) -> None:
    async with _open_container(config) as container:
        await container.credentials.clear()
    typer.echo("API key cleared.")


# Chats


@app.command()
def chats(ctx: typer.Context) -> None:
    """List the indexed chats available to this API key."""
    asyncio.run(_do_chats(ctx.obj))


async def _do_chats(config: Config) -> None:
    async with _open_container(config) as container:
        if not container.credentials.is_configured:
            _fail(NOT_CONFIGURED_HINT)
        session = container.search_session
        try:
            await session.load_chat_catalog()
        except (httpx.HTTPError, ValidationError) as exc:
            _fail(f"Loading chats failed: {exc}")

    for chat in session.indexed_chats:
        flags = [
            name
            for name, enabled in (
                ("public", chat.is_public),
                ("watching", chat.is_watching),
                ("protected", chat.is_protected),
            )
            if enabled
        ]
        suffix = f" ({', '.join(flags)})" if flags else ""
        typer.echo(f"{chat.chat_id}\t{chat.title}{suffix}")
    typer.echo(f"{len(session.indexed_chats)} chats" + (" [master key]" if session.is_master else ""))


@app.command()
def chat(ctx: typer.Context, chat_id: Annotated[int, typer.Argument(help="Chat id")]) -> None:
    """Show the index entry of one chat."""
    asyncio.run(_do_chat(ctx.obj, chat_id))


async def _do_chat(config: Config, chat_id: int) -> None:
    async with _open_container(config) as container:
        result = await container.chat_service.get_chat_index(chat_id)
    if isinstance(result, Err):
        _fail(result.err_value)
    index = result.ok_value
    typer.echo(f"{index.chat_id}\t{index.title}")
    if index.username:
        typer.echo(f"username: @{index.username}")
    typer.echo(f"public: {index.is_public}  watching: {index.is_watching}  protected: {index.is_protected}")


# Search


@app.command()
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search text")],
    chat_ids: Annotated[
        list[int] | None, typer.Option("--chat", "-c", help="Restrict to chat id (repeatable)")
    ] = None,
    user_ids: Annotated[
        list[int] | None, typer.Option("--user", "-u", help="Restrict to user id (repeatable)")
    ] = None,
    types: Annotated[
        list[str] | None, typer.Option("--type", "-t", help="Restrict to message type (repeatable)")
    ] = None,
    page: Annotated[int, typer.Option("--page", "-p", min=1, help="Result page")] = 1,
    page_size: Annotated[
        int | None, typer.Option("--page-size", min=1, help="Hits per page")
    ] = None,
    in_chat: Annotated[
        int | None, typer.Option("--in-chat", help="Search a single chat through its own index")
    ] = None,
) -> None:
    """Search messages across indexed chats."""
    unknown = sorted(normalize_message_types(types).difference(ALL_MESSAGE_TYPE_KEYS))
    if unknown:
        raise typer.BadParameter(
            f"unknown message type(s): {', '.join(unknown)}. "
            f"Choose from: {', '.join(ALL_MESSAGE_TYPE_KEYS)}",
            param_hint="--type",
        )
    if in_chat is not None:
        if chat_ids:
            raise typer.BadParameter("cannot be combined with --chat", param_hint="--in-chat")
        asyncio.run(
            _do_chat_search(ctx.obj, in_chat, query, user_ids or [], types or [], page, page_size)
        )
        return
    asyncio.run(
        _do_search(ctx.obj, query, chat_ids or [], user_ids or [], types or [], page, page_size)
    )


async def _do_search(
    config: Config,
    query: str,
    chat_ids: list[int],
    user_ids: list[int],
    types: list[str],
    page: int,
    page_size: int | None,
) -> None:
    async with _open_container(config) as container:
        if not container.credentials.is_configured:
            _fail(NOT_CONFIGURED_HINT)
        session = container.search_session
        session.set_query(query)
        session.set_chat_filter(chat_ids)
        session.set_user_filter(user_ids)
        session.set_type_filter(types)
        if page_size is not None:
            session.set_page_size(page_size)
        try:
            if not chat_ids:
                # Only needed for the master flag when no chat is selected.
                await session.load_chat_catalog()
            await session.search()
            if page > 1 and not await session.go_to_page(page):
                _fail(f"Page {page} is out of range (1-{session.total_pages}).")
        except (httpx.HTTPError, ValidationError) as exc:
            _fail(f"Search failed: {exc}")

    results = session.results
    typer.echo(
        f"{results.estimated_total} hits ({results.semantic_hit_count} semantic) "
        f"in {results.processing_time_ms:g} ms | page {session.current_page}/{session.total_pages}"
    )
    for hit in results.hits:
        _echo_hit(hit, session.query)


async def _do_chat_search(
    config: Config,
    chat_id: int,
    query: str,
    user_ids: list[int],
    types: list[str],
    page: int,
    page_size: int | None,
) -> None:
    size = page_size or config.page_size
    async with _open_container(config) as container:
        result = await container.chat_service.search_in_chat(
            chat_id,
            query,
            users=user_ids,
            types=ordered_message_types(normalize_message_types(types)),
            limit=size,
            offset=page_offset(page, size),
        )
    if isinstance(result, Err):
        _fail(result.err_value)
    response = result.ok_value
    pages = total_pages(response.estimated_total_hits, size)
    typer.echo(
        f"{response.estimated_total_hits} hits ({response.semantic_hit_count} semantic) "
        f"in {response.processing_time_ms:g} ms | page {page}/{pages}"
    )
    for hit in response.hits:
        _echo_hit(hit, query)


# Message actions


@app.command()
def fetch(
    ctx: typer.Context,
    chat_id: Annotated[int, typer.Argument(help="Chat id")],
    message_ids: Annotated[list[int], typer.Argument(help="Message ids")],
) -> None:
    """Fetch specific messages of a chat."""
    asyncio.run(_do_fetch(ctx.obj, chat_id, message_ids))


async def _do_fetch(config: Config, chat_id: int, message_ids: list[int]) -> None:
    async with _open_container(config) as container:
        result = await container.message_service.fetch_messages(chat_id, message_ids)
    if isinstance(result, Err):
        _fail(result.err_value)
    for hit in result.ok_value.hits:
        _echo_hit(hit, "")


@app.command()
def reply(
    ctx: typer.Context,
    chat_id: Annotated[int, typer.Argument(help="Chat id")],
    message_id: Annotated[int, typer.Argument(help="Message to reply to")],
    text: Annotated[str, typer.Argument(help="Reply text")],
) -> None:
    """Reply to a message."""
    asyncio.run(_do_reply(ctx.obj, chat_id, message_id, text))


async def _do_reply(config: Config, chat_id: int, message_id: int, text: str) -> None:
    async with _open_container(config) as container:
        result = await container.message_service.reply(chat_id, message_id, text)
    if isinstance(result, Err):
        _fail(result.err_value)
    typer.echo(result.ok_value.message or result.ok_value.status)


@app.command()
def forward(
    ctx: typer.Context,
    from_chat_id: Annotated[int, typer.Argument(help="Source chat id")],
    to_chat_id: Annotated[int, typer.Argument(help="Destination chat id")],
    message_ids: Annotated[list[int], typer.Argument(help="Message ids")],
) -> None:
    """Forward messages to another chat."""
    asyncio.run(_do_forward(ctx.obj, from_chat_id, to_chat_id, message_ids))


async def _do_forward(
    config: Config, from_chat_id: int, to_chat_id: int, message_ids: list[int]
) -> None:
    async with _open_container(config) as container:
        result = await container.message_service.forward(from_chat_id, to_chat_id, message_ids)
    if isinstance(result, Err):
        _fail(result.err_value)
    typer.echo(result.ok_value.message or result.ok_value.status)


@app.command()
def download(
    ctx: typer.Context,
    chat_id: Annotated[int, typer.Argument(help="Chat id")],
    message_id: Annotated[int, typer.Argument(help="Message id")],
    output: Annotated[Path, typer.Argument(help="Destination file")],
) -> None:
    """Download the media attached to a message."""
    asyncio.run(_do_download(ctx.obj, chat_id, message_id, output))


async def _do_download(config: Config, chat_id: int, message_id: int, output: Path) -> None:
    async with _open_container(config) as container:
        result = await container.message_service.download(chat_id, message_id, output)
    if isinstance(result, Err):
        _fail(result.err_value)
    typer.echo(f"Saved {format_file_size(result.ok_value)} to {output}")
