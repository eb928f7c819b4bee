"""Rich rendering of the result board"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.models.results import CardState, ResultBoard, ResultCard

STATE_STYLES = {
    CardState.PENDING: "dim",
    CardState.RUNNING: "yellow",
    CardState.DONE: "green",
    CardState.FAILED: "bold red",
}


def card_panel(card: ResultCard) -> Panel:
    body = Text()
    body.append(card.prompt[:400] + ("..." if len(card.prompt) > 400 else ""), style="white")

    if card.status:
        body.append(f"\n\n{card.status}", style=STATE_STYLES.get(card.state, "white"))
    if card.audio_status:
        body.append(f"\n{card.audio_status}", style="cyan")
    for asset in card.assets:
        location = asset.filename if asset.is_local else f"{asset.filename} ({asset.url})"
        body.append(f"\n  {asset.kind.value}: {location}", style="dim")

    title = card.label or card.kind.title()
    return Panel(
        body,
        title=f"[bold]{title}[/bold] [dim]#{card.card_id} {card.aspect_ratio}[/dim]",
        border_style=STATE_STYLES.get(card.state, "blue"),
        box=box.ROUNDED,
    )


def render_board(console: Console, board: ResultBoard):
    if board.is_empty:
        console.print("[dim]No results.[/dim]")
        return
    for card in board.cards:
        console.print(card_panel(card))


def render_status(console: Console, status: str):
    if status:
        console.print(f"\n[bold]{status}[/bold]")


def assets_table(assets) -> Table:
    table = Table(title="Generated Assets", box=box.ROUNDED)
    table.add_column("File", style="cyan")
    table.add_column("Kind")
    table.add_column("Local", justify="center")
    for asset in assets:
        table.add_row(asset.filename, asset.kind.value, "yes" if asset.is_local else "no")
    return table
