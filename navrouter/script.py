"""Plain-text intent scripts for the `replay` command.

One command per line::

    # comments and blank lines are skipped
    push settings tab=general
    push profile
    reconcile
    pop-multi-if-match profile settings
    back
"""
from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .tui.host import StackHost


COMMANDS = {
    "push": (1, 1),
    "replace": (1, 1),
    "pop": (0, 0),
    "pop-if-match": (1, 1),
    "pop-multi-if-match": (1, None),
    "pop-to-root": (0, 0),
    "reconcile": (0, 0),
    "back": (0, 0),
}


class ScriptError(ValueError):
    """Malformed script line."""

    def __init__(self, line_no: int, message: str):
        super().__init__(f"line {line_no}: {message}")
        self.line_no = line_no


@dataclass
class ScriptCommand:
    name: str
    args: list[str] = field(default_factory=list)
    query: dict[str, str] = field(default_factory=dict)
    line_no: int = 0


def parse_script(text: str) -> list[ScriptCommand]:
    commands: list[ScriptCommand] = []
    for line_no, raw in enumerate(text.splitlines(), 1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            tokens = shlex.split(line)
        except ValueError as exc:
            raise ScriptError(line_no, str(exc)) from exc

        name, rest = tokens[0].lower(), tokens[1:]
        if name not in COMMANDS:
            raise ScriptError(line_no, f"unknown command '{tokens[0]}'")

        args: list[str] = []
        query: dict[str, str] = {}
        for token in rest:
            if "=" in token and name in ("push", "replace"):
                key, value = token.split("=", 1)
                if not key:
                    raise ScriptError(line_no, f"empty query key in '{token}'")
                query[key] = value
            else:
                args.append(token)

        low, high = COMMANDS[name]
        if len(args) < low or (high is not None and len(args) > high):
            raise ScriptError(line_no, f"'{name}' takes {_arity(low, high)}, got {len(args)}")
        commands.append(ScriptCommand(name=name, args=args, query=query, line_no=line_no))
    return commands


def _arity(low: int, high: int | None) -> str:
    if high is None:
        return f"at least {low} path(s)"
    if low == high:
        return f"{low} path(s)"
    return f"{low}-{high} paths"


def run_script(
    commands: list[ScriptCommand],
    host: StackHost,
    on_finish_factory: Callable[[str, dict[str, str]], Callable[[], None]] | None = None,
) -> None:
    """Issue ``commands`` against ``host.router``; pumps once more at the end.

    ``on_finish_factory(path, query)``, when given, supplies the ``on_finish``
    callback for every pushed entry.
    """
    router = host.router

    def _finisher(cmd: ScriptCommand):
        if on_finish_factory is None:
            return None
        return on_finish_factory(cmd.args[0], cmd.query)

    for cmd in commands:
        if cmd.name == "push":
            router.push(cmd.args[0], cmd.query, _finisher(cmd))
        elif cmd.name == "replace":
            router.replace(cmd.args[0], cmd.query, _finisher(cmd))
        elif cmd.name == "pop":
            router.pop()
        elif cmd.name == "pop-if-match":
            router.pop_if_match(cmd.args[0])
        elif cmd.name == "pop-multi-if-match":
            router.pop_multi_if_match(cmd.args)
        elif cmd.name == "pop-to-root":
            router.pop_to_root()
        elif cmd.name == "reconcile":
            host.pump()
        elif cmd.name == "back":
            host.pump()
            host.back_gesture()
    host.pump()
