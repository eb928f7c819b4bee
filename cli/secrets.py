"""
CLI commands for secure API key management.

Usage:
    freepik-studio secrets list          # Show configured keys
    freepik-studio secrets set KEY       # Store a key securely
    freepik-studio secrets delete KEY    # Remove a key
    freepik-studio secrets import .env   # Import from .env file
"""

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _normalize(key_name: str) -> str:
    from core.secrets import KNOWN_KEYS

    key_name = key_name.upper()
    if key_name not in KNOWN_KEYS and not key_name.endswith(("_KEY", "_TOKEN", "_ID")):
        key_name = f"{key_name}_API_KEY"
    return key_name


@click.group(name="secrets")
def secrets_cli():
    """Manage API keys securely using OS keychain."""
    pass


@secrets_cli.command(name="list")
def list_keys():
    """List all API keys and their status."""
    from core.secrets import KNOWN_KEYS, list_api_keys

    status = list_api_keys()

    table = Table(title="API Key Status")
    table.add_column("Key", style="cyan")
    table.add_column("Description", style="dim")
    table.add_column("Status", style="bold")

    for key_name, description in KNOWN_KEYS.items():
        key_status = status.get(key_name, "not_set")

        if key_status == "keychain":
            status_display = "[green]Keychain[/green]"
        elif key_status == "env":
            status_display = "[yellow]Env var[/yellow]"
        else:
            status_display = "[red]Not set[/red]"

        table.add_row(key_name, description, status_display)

    console.print(table)
    console.print()
    console.print("[green]Keychain[/green] = Stored securely in OS credential manager")
    console.print("[yellow]Env var[/yellow] = Available via environment variable (less secure)")
    console.print("[red]Not set[/red] = Not configured")


@secrets_cli.command(name="set")
@click.argument("key_name")
@click.option("--value", "-v", help="API key value (will prompt if not provided)")
def set_key(key_name: str, value: str = None):
    """Store an API key in the secure keychain."""
    from core.secrets import KNOWN_KEYS, set_api_key

    key_name = _normalize(key_name)

    if key_name not in KNOWN_KEYS:
        console.print(f"[yellow]Warning:[/yellow] {key_name} is not a recognized key name.")
        if not click.confirm("Store anyway?"):
            return

    if not value:
        value = click.prompt(f"Enter value for {key_name}", hide_input=True)

    if not value:
        raise click.ClickException("No value provided")

    if not set_api_key(key_name, value):
        raise click.ClickException(f"Failed to store {key_name}")
    console.print(f"[green]Success:[/green] Stored {key_name} in secure keychain")


@secrets_cli.command(name="delete")
@click.argument("key_name")
@click.option("--force", "-f", is_flag=True, help="Don't ask for confirmation")
def delete_key(key_name: str, force: bool = False):
    """Delete an API key from the keychain."""
    from core.secrets import delete_api_key

    key_name = _normalize(key_name)

    if not force:
        if not click.confirm(f"Delete {key_name} from keychain?"):
            return

    if delete_api_key(key_name):
        console.print(f"[green]Success:[/green] Deleted {key_name} from keychain")
    else:
        console.print(f"[yellow]Warning:[/yellow] {key_name} was not in the keychain")


@secrets_cli.command(name="import")
@click.argument("env_file", type=click.Path(exists=True, dir_okay=False))
def import_keys(env_file: str):
    """Import known keys from a .env file into the keychain."""
    from core.secrets import import_from_env_file

    results = import_from_env_file(env_file)
    if not results:
        console.print("[yellow]No known keys found in file.[/yellow]")
        return

    for key_name, ok in results.items():
        if ok:
            console.print(f"[green]Imported[/green] {key_name}")
        else:
            console.print(f"[red]Failed[/red] {key_name}")
