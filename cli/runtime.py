"""Shared plumbing for studio commands: client selection, session lifecycle, output"""

import asyncio
import logging
import mimetypes
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import click
from rich.console import Console

from core.config import StudioConfig
from core.errors import StudioError
from core.models.generation import InlineData
from core.providers import FreepikClient, GenerationProviderConfig, MockFreepikClient, NullSink, TelegramSink
from core.session import StudioSession
from workflows.orchestrator import StudioOrchestrator

from .display import assets_table, render_board, render_status

console = Console()
logger = logging.getLogger(__name__)


def build_client(config: StudioConfig, mock: bool):
    if mock:
        return MockFreepikClient()
    return FreepikClient(GenerationProviderConfig(
        api_key=config.api_key,
        base_url=config.base_url,
        timeout=config.request_timeout,
    ))


def build_sink(config: StudioConfig, mock: bool):
    if mock or not config.telegram_configured:
        return NullSink()
    return TelegramSink.from_config(config)


def load_image(path: Optional[str]) -> Optional[InlineData]:
    """Read an image file as inline data; None when no path was given."""
    if not path:
        return None
    file_path = Path(path)
    mime_type = mimetypes.guess_type(file_path.name)[0] or "image/png"
    return InlineData(data=file_path.read_bytes(), mime_type=mime_type)


def run_studio(
    ctx: click.Context,
    job: Callable[[StudioOrchestrator], Awaitable[Any]],
    output_dir: Optional[str] = None,
) -> Any:
    """
    Run ``job`` against a fresh session and print the resulting board.

    Studio errors become click.ClickException after the board is shown.
    """
    opts = ctx.obj or {}
    config: StudioConfig = opts.get("config") or StudioConfig.from_env()
    if opts.get("no_share"):
        config.sharing_enabled = False
    mock = opts.get("mock", False)

    async def _run():
        client = build_client(config, mock)
        session = StudioSession(
            client,
            config=config,
            sink=build_sink(config, mock),
            user_name=opts.get("user") or "",
        )
        async with session:
            studio = StudioOrchestrator(session)
            try:
                result = await job(studio)
                await studio.wait()
            except StudioError as e:
                render_board(console, session.board)
                render_status(console, session.status)
                raise click.ClickException(e.user_message)

            render_board(console, session.board)
            render_status(console, session.status)
            if len(session.assets):
                console.print(assets_table(session.assets))

            if output_dir:
                saved = session.assets.save_all(Path(output_dir))
                console.print(f"\n[green]Saved {len(saved)} assets to {output_dir}[/green]")
            return result

    logger.debug(f"Running studio job with {config!r}")
    if mock:
        console.print("[yellow]Mock mode:[/yellow] using offline resource client\n")
    return asyncio.run(_run())
