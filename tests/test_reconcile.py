"""Unit tests for the reconciliation steps."""
from __future__ import annotations

import logging
from unittest.mock import MagicMock

from navrouter.actions import Pop, PopIfMatch, PopMultiIfMatch, PopToRoot, Push
from navrouter.delegate import TraceDelegate
from navrouter.entry import make_entry
from navrouter.reconcile import StackDelta, apply_actions, compute_delta, dispatch_delta


def _stack(*names):
    return [make_entry(name) for name in names]


def _paths(stack):
    return [entry.path for entry in stack]


def test_apply_push_and_pop():
    result = apply_actions([], [Push(make_entry("a")), Push(make_entry("b")), Pop()])
    assert _paths(result) == ["a"]


def test_apply_does_not_mutate_input():
    stack = _stack("a", "b")
    apply_actions(stack, [PopToRoot()])
    assert _paths(stack) == ["a", "b"]


def test_pop_on_empty_logs_debug_noop():
    log = MagicMock(spec=logging.Logger)
    result = apply_actions([], [Pop()], log)

    assert result == []
    log.debug.assert_called_once()


def test_pop_if_match_matches_top_only():
    stack = _stack("a", "b")
    assert _paths(apply_actions(stack, [PopIfMatch(make_entry("b"))])) == ["a"]
    assert _paths(apply_actions(stack, [PopIfMatch(make_entry("a"))])) == ["a", "b"]


def test_pop_multi_if_match_reads_top_down():
    stack = _stack("root", "a", "b")
    # entries[0] is compared with the top.
    ok = apply_actions(stack, [PopMultiIfMatch((make_entry("b"), make_entry("a")))])
    miss = apply_actions(stack, [PopMultiIfMatch((make_entry("a"), make_entry("b")))])

    assert _paths(ok) == ["root"]
    assert _paths(miss) == ["root", "a", "b"]


def test_pop_multi_if_match_ignores_query():
    stack = [make_entry("a", {"id": "1"})]
    result = apply_actions(stack, [PopIfMatch(make_entry("a", {"id": "2"}))])
    assert result == []


def test_pop_multi_if_match_longer_than_stack_is_noop():
    log = MagicMock(spec=logging.Logger)
    stack = _stack("a")
    result = apply_actions(stack, [PopMultiIfMatch((make_entry("a"), make_entry("x")))], log)

    assert _paths(result) == ["a"]
    log.debug.assert_called_once()


def test_pop_multi_if_match_empty_is_noop():
    assert _paths(apply_actions(_stack("a"), [PopMultiIfMatch(())])) == ["a"]


def test_pop_to_root_clears():
    assert apply_actions(_stack("a", "b", "c"), [PopToRoot()]) == []


def test_compute_delta_common_prefix():
    old = _stack("a", "b", "c")
    new = _stack("a", "x")
    delta = compute_delta(old, new)

    assert delta.common == 1
    assert _paths(delta.removed) == ["b", "c"]
    assert _paths(delta.added) == ["x"]


def test_compute_delta_compares_query():
    old = [make_entry("a", {"id": "1"})]
    new = [make_entry("a", {"id": "2"})]
    delta = compute_delta(old, new)

    assert delta.common == 0
    assert delta.removed == old
    assert delta.added == new


def test_compute_delta_identical_is_empty():
    delta = compute_delta(_stack("a", "b"), _stack("a", "b"))
    assert delta.is_empty
    assert delta.common == 2


def test_dispatch_order_lifo_removals_fifo_additions():
    trace = TraceDelegate()
    order = []
    removed = [
        make_entry("b", on_finish=lambda: order.append("finish b")),
        make_entry("c", on_finish=lambda: order.append("finish c")),
    ]
    trace.after_pop = lambda entry: order.append(f"after_pop {entry.path}")
    trace.before_pop = lambda entry: order.append(f"before_pop {entry.path}")
    trace.after_push = lambda entry: order.append(f"after_push {entry.path}")

    dispatch_delta(StackDelta(common=1, removed=removed, added=_stack("x", "y")), trace)

    assert order == [
        "before_pop c",
        "before_pop b",
        "finish c",
        "after_pop c",
        "finish b",
        "after_pop b",
        "after_push x",
        "after_push y",
    ]


def test_dispatch_uses_before_push_result():
    delegate = MagicMock()
    rewritten = make_entry("x", {"from": "delegate"})
    delegate.before_push.return_value = rewritten

    shown = dispatch_delta(StackDelta(added=_stack("x")), delegate)

    assert shown == [rewritten]
    delegate.after_push.assert_called_once_with(rewritten)


def test_dispatch_before_push_none_keeps_entry():
    delegate = MagicMock()
    delegate.before_push.return_value = None
    entry = make_entry("x")

    assert dispatch_delta(StackDelta(added=[entry]), delegate) == [entry]
    assert delegate.after_push.call_args.args[0] is entry


def test_dispatch_rewrite_keeps_on_finish():
    calls = []
    original = make_entry("x", on_finish=lambda: calls.append("x"))
    delegate = MagicMock()
    delegate.before_push.return_value = make_entry("x", {"tab": "1"})

    shown = dispatch_delta(StackDelta(added=[original]), delegate)
    shown[0].finish()

    assert calls == ["x"]


def test_dispatch_without_delegate():
    entry = make_entry("x")
    assert dispatch_delta(StackDelta(added=[entry])) == [entry]
