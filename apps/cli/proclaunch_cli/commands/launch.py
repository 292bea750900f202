"""Launch commands."""

from pathlib import Path

import typer
from proclaunch import ConfigError, LaunchActions
from proclaunch.services.config_manager import ConfigManager
from proclaunch_logging import configure_from_config
from rich.console import Console
from rich.table import Table

console = Console()


def _get_launch_actions(config_path: Path | None) -> LaunchActions:
    """Get LaunchActions configured from the config file and environment."""
    try:
        config = ConfigManager(config_path).config
    except ConfigError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=2)

    configure_from_config(config)
    return LaunchActions(config=config)


def start(
    program: str = typer.Argument(..., help="Executable to start"),
    arguments: list[str] = typer.Argument(None, help="Arguments passed to the program"),
    query: str | None = typer.Option(
        None, "--query", "-q", help="Text identifying the process (defaults to the last argument)"
    ),
    query_command: str | None = typer.Option(
        None, "--query-command", help="Program name expected in the command line"
    ),
    timeout: float | None = typer.Option(None, help="Seconds to keep retrying"),
    interval: float | None = typer.Option(None, help="Seconds between attempts"),
    wait: bool = typer.Option(True, "--wait/--no-wait", help="Stay attached until the process exits"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
):
    """Start a process, retrying until it is confirmed running."""
    actions = _get_launch_actions(config)
    if timeout is not None:
        actions.config.retry.timeout = timeout
    if interval is not None:
        actions.config.retry.interval = interval

    console.print(f"[yellow]Starting {program}...[/yellow]")
    result = actions.start(
        program,
        arguments=list(arguments or []),
        query_argument=query,
        query_command=query_command,
        wait=wait,
    )

    data = result.data
    if result.success:
        console.print(f"[green]✓[/green] {result.message}")
    else:
        console.print(f"[red]✗[/red] {result.message}")

    if data.get("os_pid"):
        console.print(f"[dim]PID: {data.get('pid') or 'unresolved'} (spawned as {data['os_pid']})[/dim]")
    if data.get("attempts"):
        console.print(f"[dim]Attempts: {data['attempts']}[/dim]")

    raise typer.Exit(code=result.exit_status)


def probe(
    config: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
):
    """Show which pid probe is used on this platform."""
    actions = _get_launch_actions(config)
    info = actions.probe_info().data

    table = Table(title="Process Probe")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("Probe", info["probe"])
    table.add_row("Finds pids", "✓ Yes" if info["can_find_pid"] else "✗ No")
    table.add_row(
        "Startup grace",
        f"{info['startup_grace_delay']}s" if info["needs_startup_grace"] else "None",
    )
    table.add_row("Lookups", f"{info['find_pid_retries']} every {info['find_pid_interval']}s")

    console.print(table)
