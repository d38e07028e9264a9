"""Unit tests for the interactive Shell loop."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from rich.console import Console

from navrouter.settings import Settings
from navrouter.tui import shell as shell_module
from navrouter.tui.shell import Shell, register_screen


@pytest.fixture
def shell():
    settings = Settings(_env_file=None)
    return Shell(console=Console(), settings=settings)


@pytest.fixture
def screens():
    original = shell_module.SCREENS.copy()
    yield shell_module.SCREENS
    shell_module.SCREENS.clear()
    shell_module.SCREENS.update(original)


def test_shell_starts_at_root(shell):
    assert shell.current() == "main_menu"
    assert shell.router.is_root
    assert shell.root_label == "Home"


def test_register_screen_decorator(screens):
    @register_screen("test_screen")
    def test_screen_fn(shell):
        return "exit"

    assert screens["test_screen"] is test_screen_fn


def test_handle_push_back_home(shell):
    assert shell.handle("stack", "main_menu")
    assert shell.current() == "stack"

    shell.handle("help", "stack")
    assert [e.path for e in shell.router.stack] == ["stack", "help"]

    shell.handle("← Back", "help")
    assert shell.current() == "stack"

    shell.handle("help", "stack")
    shell.handle("main menu", "help")
    assert shell.router.is_root


def test_handle_same_screen_is_refresh(shell):
    shell.handle("stack", "main_menu")
    shell.handle("stack", "stack")
    assert shell.router.depth == 1


def test_handle_exit(shell):
    assert shell.handle("exit", "main_menu") is False


def test_normalize_nav_result_aliases():
    assert Shell._normalize_nav_result("back") == "back"
    assert Shell._normalize_nav_result("← Back") == "back"
    assert Shell._normalize_nav_result("Home") == "home"
    assert Shell._normalize_nav_result("q") == "exit"
    assert Shell._normalize_nav_result("  ") is None
    assert Shell._normalize_nav_result("some_screen") == "some_screen"


def test_run_dispatches_until_exit(shell, screens):
    answers = iter(["stack", "help", "home", "exit"])
    visited = []

    def _screen(s):
        visited.append(s.current())
        return next(answers)

    screens.clear()
    screens.update({"main_menu": _screen, "stack": _screen, "help": _screen})

    shell.run()

    assert visited == ["main_menu", "stack", "help", "main_menu"]
    assert shell.history == visited
    assert shell.router.is_root


def test_run_unknown_screen_returns_to_root(shell, screens):
    main = MagicMock(return_value="exit")
    screens.clear()
    screens.update({"main_menu": main})

    shell.router.push("nowhere")
    shell.host.pump()
    shell.run()

    assert shell.history == ["nowhere", "main_menu"]
    main.assert_called_once_with(shell)


def test_run_keyboard_interrupt_returns_to_root(shell, screens):
    def _boom(s):
        raise KeyboardInterrupt

    screens.clear()
    screens.update({"main_menu": MagicMock(return_value="exit"), "stack": _boom})

    shell.router.push("stack")
    shell.host.pump()
    shell.run()

    assert shell.history == ["stack", "main_menu"]


def test_back_home_choices_values():
    from navrouter.tui.components import back_home_choices

    assert [c.value for c in back_home_choices(separator=False)] == ["back", "home"]
    assert len(back_home_choices()) == 3
