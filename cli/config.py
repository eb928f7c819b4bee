"""Configuration commands"""

import os
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.table import Table

console = Console()


@click.group()
def config_cmd():
    """Configuration management"""
    pass


@config_cmd.command()
def show():
    """Show where each key comes from and the effective settings"""
    from dotenv import dotenv_values

    from core.config import StudioConfig
    from core.secrets import KNOWN_KEYS, list_api_keys

    env_file = Path(".env")
    env_values = dotenv_values(env_file) if env_file.exists() else {}
    key_status = list_api_keys()

    table = Table(title="Keys", box=box.ROUNDED)
    table.add_column("Key", style="cyan")
    table.add_column("Source")
    table.add_column("Status")

    for key, description in KNOWN_KEYS.items():
        state = key_status.get(key, "not_set")
        if state == "keychain":
            source, status = "keychain", "[green]✓ Set[/green]"
        elif key in env_values:
            source, status = ".env file", "[green]✓ Set[/green]"
        elif state == "env":
            source, status = "environment", "[green]✓ Set[/green]"
        else:
            source, status = "—", "[dim]Not set[/dim]"
        table.add_row(f"{key} ({description})", source, status)

    console.print(table)

    config = StudioConfig.from_env()
    settings = Table(title="Settings", box=box.ROUNDED)
    settings.add_column("Setting", style="cyan")
    settings.add_column("Value")
    settings.add_row("Base URL", config.base_url)
    settings.add_row("Request timeout", f"{config.request_timeout}s")
    settings.add_row("Retry delay", f"{config.retry_delay_ms} ms")
    settings.add_row("Max attempts", str(config.max_attempts or "unbounded"))
    settings.add_row("Max elapsed", f"{config.max_elapsed}s" if config.max_elapsed else "unbounded")
    settings.add_row("Batch size", str(config.batch_size))
    settings.add_row("Batch delay", f"{config.inter_batch_delay}s")
    settings.add_row("Sharing", "on" if config.sharing_enabled else "off")
    settings.add_row("Output dir", str(config.output_dir))
    console.print(settings)

    if not env_file.exists() and not os.environ.get("FREEPIK_API_KEY") and key_status.get("FREEPIK_API_KEY") != "keychain":
        console.print("\n[yellow]FREEPIK_API_KEY is not set. Run 'freepik-studio secrets set FREEPIK_API_KEY'.[/yellow]")
