"""Main CLI application using Typer."""
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..config import DEFAULT_CONFIG_FILE, load_config
from ..errors import DggTuiError

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="dggtui",
    help="Terminal client for destiny.gg chat",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command()
def run(
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE),
        "--config",
        "-c",
        help="Location of config file to be used"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Connect to chat and launch the TUI."""
    from ..ui import run_textual_tui

    try:
        chat_config = load_config(config)
        console.print(f"[dim]Connecting to {chat_config.chat_url}...[/dim]")
        run_textual_tui(chat_config, log_level=log_level)
    except DggTuiError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        pass
    console.print("[dim]Goodbye![/dim]")


@app.command(name="check-config")
def check_config(
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE),
        "--config",
        "-c",
        help="Location of config file to be checked"
    ),
):
    """Validate a config file and show the effective settings."""
    try:
        chat_config = load_config(config)
    except DggTuiError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"Configuration: {config}")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Chat URL", chat_config.chat_url)
    table.add_row("Username", chat_config.username or "[dim]not set[/dim]")
    table.add_row("Login key", "set" if chat_config.dgg_key else "[yellow]not set (read only)[/yellow]")
    table.add_row("Highlighted", ", ".join(chat_config.highlighted) or "[dim]none[/dim]")
    table.add_row("Show join/leave", "yes" if chat_config.show_join_leave else "no")
    table.add_row("Reconnect attempts", str(chat_config.reconnect_attempts))

    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
