"""Reusable UI components for the shell."""
from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

import questionary
from questionary import Choice, Separator
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from .shell import Shell


# ═══════════════════════════════════════════════════════════════════════════════
# STYLE
# ═══════════════════════════════════════════════════════════════════════════════

SHELL_STYLE = questionary.Style([
    ("qmark", "fg:#00b4d8 bold"),
    ("question", "bold"),
    ("pointer", "fg:#00b4d8 bold"),
    ("highlighted", "fg:#00b4d8 bold"),
    ("answer", "fg:#90e0ef"),
])


# ═══════════════════════════════════════════════════════════════════════════════
# NAVIGATION HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def back_home_choices(separator: bool = True) -> list:
    """Choices that become a pop ("back") or pop-to-root ("home")."""
    choices: list = []
    if separator:
        choices.append(Separator())
    choices.extend([
        Choice(title="← Back", value="back"),
        Choice(title="Home", value="home"),
    ])
    return choices


def render_breadcrumbs(shell: Shell) -> None:
    """Render navigation breadcrumbs."""
    breadcrumbs = shell.host.breadcrumbs(shell.labels, shell.root_label)
    shell.console.print(f"[dim]{breadcrumbs}[/dim]\n")


def stack_table(stack, labels: Mapping[str, str] | None = None) -> Table:
    """Build a table of stack entries, top-most row last."""
    labels = labels or {}
    table = Table(title="Navigation stack", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Path", style="cyan")
    table.add_column("Label")
    table.add_column("Query", style="dim")
    for i, entry in enumerate(stack):
        query = ", ".join(f"{k}={v}" for k, v in sorted(entry.query.items()))
        table.add_row(str(i), entry.path, labels.get(entry.path, entry.path), query or "—")
    return table


def render_stack_table(console: Console, stack, labels: Mapping[str, str] | None = None) -> None:
    if not stack:
        console.print("[dim]Stack is empty (at root).[/dim]")
        return
    console.print(stack_table(stack, labels))
