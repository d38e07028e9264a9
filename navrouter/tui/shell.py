"""Interactive screen loop driving a Router from the terminal."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

import questionary
from rich.panel import Panel

from .components import SHELL_STYLE, back_home_choices, render_breadcrumbs, render_stack_table
from .host import StackHost

if TYPE_CHECKING:
    from rich.console import Console

    from ..settings import Settings

logger = logging.getLogger(__name__)

ROOT_SCREEN = "main_menu"

# Screen ID to human-readable label mapping
SCREEN_LABELS = {
    "main_menu": "Home",
    "stack": "Stack",
    "help": "Help",
}

NAV_ALIASES = {
    **dict.fromkeys(("back", "← back", "< back", "go back", "previous", "prev", "b"), "back"),
    **dict.fromkeys(("home", "main", "main menu", "h"), "home"),
    **dict.fromkeys(("exit", "quit", "q"), "exit"),
}


class Shell:
    """Main navigation loop with screen dispatch.

    Each turn shows the screen for the router's top entry (the root screen
    when the stack is empty), turns the screen's answer into router intents
    and lets the host reconcile them.
    """

    def __init__(
        self,
        console: Console,
        settings: Settings,
        host: StackHost | None = None,
    ):
        """Initialize shell with dependencies.

        Args:
            console: Rich Console for output
            settings: Application settings
            host: Display host (a fresh one is created when omitted)
        """
        self.console = console
        self.settings = settings
        self.host = host or StackHost(max_passes=settings.NAVROUTER_MAX_PASSES)
        self.root_label = settings.NAVROUTER_ROOT_LABEL
        self.labels = {k: v for k, v in SCREEN_LABELS.items() if k != ROOT_SCREEN}
        self.history: list[str] = []

    @property
    def router(self):
        return self.host.router

    def current(self) -> str:
        top = self.router.top
        return top.path if top is not None else ROOT_SCREEN

    def run(self) -> None:
        """Run the loop until a screen returns "exit"."""
        while True:
            current_screen = self.current()
            self.history.append(current_screen)

            screen_fn = SCREENS.get(current_screen)

            if screen_fn is None:
                # Unknown screen - reset to home
                logger.warning("unknown screen %r, returning to root", current_screen)
                self.console.print(
                    f"[yellow]Warning:[/yellow] Unknown screen '{current_screen}', "
                    "returning to main menu"
                )
                self.router.pop_to_root()
                self.host.pump()
                continue

            try:
                result = screen_fn(self)
            except KeyboardInterrupt:
                self.console.print("\n[dim]Interrupted. Returning to main menu...[/]")
                self.router.pop_to_root()
                self.host.pump()
                continue

            if not self.handle(result, current_screen):
                self.console.print("\n[dim]Goodbye![/]")
                break

    def handle(self, result: str | None, current_screen: str) -> bool:
        """Turn a screen result into intents and reconcile.

        Returns:
            False when the loop should stop
        """
        result = self._normalize_nav_result(result)

        if result == "exit":
            return False
        if result == "home":
            self.router.pop_to_root()
        elif result == "back":
            self.router.pop()
        elif result and result != current_screen:
            # Returning the current screen means "refresh", not a duplicate push.
            self.router.push(result)
        self.host.pump()
        return True

    @staticmethod
    def _normalize_nav_result(result: str | None) -> str | None:
        """Map a screen answer to "back", "home", "exit" or a screen id.

        Menu labels ("← Back") and short keys ("b", "q") count as their
        command; None or blank means "stay here".
        """
        if result is None:
            return None
        key = str(result).strip().lower()
        if not key:
            return None
        return NAV_ALIASES.get(key, str(result))


# Screen id -> function rendering it and returning the next command.
SCREENS: dict[str, Callable[[Shell], str | None]] = {}


def register_screen(screen_id: str):
    """Register the decorated function as the screen for ``screen_id``.

    A later registration for the same id replaces the earlier one.
    """
    def decorator(fn: Callable[[Shell], str | None]):
        SCREENS[screen_id] = fn
        return fn
    return decorator


# ═══════════════════════════════════════════════════════════════════════════════
# BUILT-IN SCREENS
# ═══════════════════════════════════════════════════════════════════════════════

@register_screen("main_menu")
def show_main_menu(shell: Shell) -> str | None:
    render_breadcrumbs(shell)

    choice = questionary.select(
        "Where to?",
        choices=[
            questionary.Choice("Show stack", value="stack"),
            questionary.Choice("Help", value="help"),
            questionary.Separator(""),
            questionary.Choice("Exit", value="exit"),
        ],
        style=SHELL_STYLE,
        use_shortcuts=True,
    ).ask()

    if choice is None:
        return "exit"
    return choice


@register_screen("stack")
def show_stack(shell: Shell) -> str | None:
    """Stack inspector; can push further screens to grow the stack."""
    render_breadcrumbs(shell)
    render_stack_table(shell.console, shell.router.stack, shell.labels)
    shell.console.print()

    action = questionary.select(
        "",
        choices=[
            questionary.Choice("Push help", value="help"),
            questionary.Choice("Swipe back (out-of-band pop)", value="swipe"),
            *back_home_choices(),
        ],
        style=SHELL_STYLE,
    ).ask()

    if action == "swipe":
        shell.host.back_gesture()
        return None
    return action or "back"


@register_screen("help")
def show_help(shell: Shell) -> str | None:
    render_breadcrumbs(shell)

    content = """[bold]Navigation[/bold]
  ↑/↓       Navigate menus
  Enter     Select option
  Ctrl+C    Return to main menu

[bold]Command Line Usage[/bold]
  [cyan]navrouter[/cyan]                     Interactive shell
  [cyan]navrouter replay FILE[/cyan]         Replay an intent script
  [cyan]navrouter export-logs[/cyan]         Zip the log directory
"""

    shell.console.print(Panel.fit(content, title="Help", border_style="cyan"))
    shell.console.print()

    action = questionary.select(
        "",
        choices=[questionary.Choice("Show stack", value="stack"), *back_home_choices(separator=False)],
        style=SHELL_STYLE,
    ).ask()

    return action or "back"
