from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .delegate import TraceDelegate
from .logging import export_logs as export_logs_fn
from .logging import setup_logging
from .router import Router
from .script import ScriptError, parse_script, run_script
from .settings import load_settings
from .tui.components import render_stack_table
from .tui.host import StackHost

app = typer.Typer(
    add_completion=False,
    help="navrouter: navigation stack reconciled from queued intents",
    rich_markup_mode="rich",
)
console = Console()


def _interactive_shell() -> None:
    from .tui.shell import Shell

    s = load_settings()
    setup_logging(s)
    Shell(console=console, settings=s).run()


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN CALLBACK
# ═══════════════════════════════════════════════════════════════════════════════

@app.callback(invoke_without_command=True)
def _root(ctx: typer.Context):
    """
    [bold]navrouter[/bold]: navigation stack reconciled from queued intents.

    [dim]Run without arguments to launch the interactive shell.[/dim]

    [bold]Examples:[/bold]
      python -m navrouter replay flows/checkout.nav
      python -m navrouter replay flows/checkout.nav --json
      python -m navrouter export-logs --dest /tmp/logs.zip
    """
    if ctx.invoked_subcommand is None:
        _interactive_shell()
        raise typer.Exit(code=0)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═══════════════════════════════════════════════════════════════════════════════

@app.command("shell", help="Launch the interactive shell")
def shell():
    _interactive_shell()


@app.command("replay", help="[bold cyan]R[/bold cyan]eplay an intent script and print the lifecycle trace")
def replay(
    script: Annotated[Path, typer.Argument(help="Intent script (one command per line)")],
    json_out: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Run SCRIPT against a fresh router and show every delegate/on_finish event."""
    if not script.is_file():
        console.print(f"[red]Script not found:[/red] {script}")
        raise typer.Exit(code=1)

    try:
        commands = parse_script(script.read_text(encoding="utf-8"))
    except ScriptError as e:
        console.print(f"[red]Invalid script:[/red] {e}")
        raise typer.Exit(code=1)

    s = load_settings()
    trace = TraceDelegate()
    host = StackHost(Router(delegate=trace), max_passes=s.NAVROUTER_MAX_PASSES)
    run_script(commands, host, on_finish_factory=trace.on_finish_for)

    if json_out:
        payload = {
            "events": [
                {"event": event, "path": entry.path, "query": entry.query}
                for event, entry in trace.events
            ],
            "stack": [{"path": e.path, "query": e.query} for e in host.router.stack],
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    t = Table(title="[bold]Lifecycle trace[/bold]")
    t.add_column("#", justify="right", style="dim")
    t.add_column("Event", style="bold")
    t.add_column("Path", style="cyan")
    t.add_column("Query", style="dim")
    for i, (event, entry) in enumerate(trace.events, 1):
        query = ", ".join(f"{k}={v}" for k, v in sorted(entry.query.items()))
        t.add_row(str(i), event, entry.path, query)
    console.print(t)
    render_stack_table(console, host.router.stack)


@app.command("export-logs", help="Zip the log directory for sharing")
def export_logs(
    dest: Annotated[
        Optional[Path],
        typer.Option("--dest", help="Archive path (default: next to the log dir)"),
    ] = None,
):
    s = load_settings()
    try:
        archive = export_logs_fn(s, dest)
    except OSError as e:
        console.print(f"[red]Log export failed:[/red] {e}")
        raise typer.Exit(code=1)

    console.print(Panel.fit(f"[bold]Logs exported[/bold]\n\n  [cyan]{archive}[/cyan]", border_style="green"))


def main():
    app()
