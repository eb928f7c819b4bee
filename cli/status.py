"""System status command"""

import asyncio

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--no-ip", is_flag=True, help="Skip the public IP lookup")
def status_cmd(as_json: bool, no_ip: bool):
    """Show overall system status"""

    status = get_status_dict(probe_ip=not no_ip)

    if as_json:
        import json
        click.echo(json.dumps(status, indent=2))
        return

    console.print(Panel.fit(
        "[bold blue]Freepik Studio[/bold blue]\n"
        "Stock-backed video, image and narration studio",
        border_style="blue"
    ))

    provider_table = Table(title="Providers", box=box.ROUNDED)
    provider_table.add_column("Provider", style="cyan")
    provider_table.add_column("Category")
    provider_table.add_column("Features", style="dim")
    for p in status["providers"]:
        provider_table.add_row(p["name"], p["category"], ", ".join(p["features"]))
    console.print(provider_table)

    agent_table = Table(title="Agents", box=box.ROUNDED)
    agent_table.add_column("Agent", style="cyan")
    agent_table.add_column("Status", style="green")
    for agent in status["agents"]:
        status_style = "green" if agent["status"] == "implemented" else "yellow"
        agent_table.add_row(agent["name"], f"[{status_style}]{agent['status']}[/{status_style}]")
    console.print(agent_table)

    config_table = Table(title="Configuration", box=box.ROUNDED)
    config_table.add_column("Key", style="cyan")
    config_table.add_column("Status")
    for key, present in status["config"].items():
        config_table.add_row(key, "[green]✓ Set[/green]" if present else "[red]✗ Missing[/red]")
    console.print(config_table)

    if "public_ip" in status:
        console.print(f"\nPublic IP: [bold]{status['public_ip']}[/bold]")


def get_status_dict(probe_ip: bool = True) -> dict:
    """Get status as dictionary for JSON output"""
    from agents import get_all_agents
    from core.providers import get_all_providers

    status = {
        "providers": get_all_providers(),
        "agents": get_all_agents(),
        "config": check_config(),
    }
    if probe_ip:
        from core.providers.ip_probe import get_public_ip
        status["public_ip"] = asyncio.run(get_public_ip())
    return status


def check_config() -> dict:
    """Check which keys are configured (keychain or environment)"""
    from core.secrets import KNOWN_KEYS, get_api_key

    return {key: bool(get_api_key(key)) for key in KNOWN_KEYS}
