"""Unit tests for intent scripts."""
from __future__ import annotations

import pytest

from navrouter.delegate import TraceDelegate
from navrouter.router import Router
from navrouter.script import ScriptError, parse_script, run_script
from navrouter.tui.host import StackHost


def test_parse_script_skips_comments_and_blanks():
    commands = parse_script(
        """
        # open settings
        push settings tab=general   # inline comment
        pop-multi-if-match b a

        POP-TO-ROOT
        """
    )

    assert [c.name for c in commands] == ["push", "pop-multi-if-match", "pop-to-root"]
    assert commands[0].args == ["settings"]
    assert commands[0].query == {"tab": "general"}
    assert commands[0].line_no == 3
    assert commands[1].args == ["b", "a"]


def test_parse_script_quoted_values():
    (cmd,) = parse_script('push "user profile" name="Ada Lovelace"')
    assert cmd.args == ["user profile"]
    assert cmd.query == {"name": "Ada Lovelace"}


@pytest.mark.parametrize(
    "text, message",
    [
        ("jump a", "unknown command"),
        ("push", "takes 1 path"),
        ("push a b", "takes 1 path"),
        ("pop now", "takes 0 path"),
        ("pop-multi-if-match", "at least 1"),
        ("push a =x", "empty query key"),
        ('push "a', "No closing quotation"),
    ],
)
def test_parse_script_errors(text, message):
    with pytest.raises(ScriptError) as exc:
        parse_script("# header\n" + text)
    assert exc.value.line_no == 2
    assert message in str(exc.value)


def test_run_script_with_explicit_reconcile_and_back():
    trace = TraceDelegate()
    host = StackHost(Router(delegate=trace))
    commands = parse_script(
        """
        push a
        push b
        push c
        reconcile
        back
        replace x
        """
    )

    run_script(commands, host, on_finish_factory=trace.on_finish_for)

    assert [e.path for e in host.router.stack] == ["a", "x"]
    assert trace.names()[-8:] == [
        ("before_pop", "c"),
        ("on_finish", "c"),
        ("after_pop", "c"),
        ("before_pop", "b"),
        ("on_finish", "b"),
        ("after_pop", "b"),
        ("before_push", "x"),
        ("after_push", "x"),
    ]


def test_run_script_pumps_at_end():
    host = StackHost()
    run_script(parse_script("push a\npush b\npop-if-match b"), host)

    assert [e.path for e in host.router.stack] == ["a"]
