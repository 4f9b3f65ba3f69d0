"""
Tests for event hooks.
"""

from dataclasses import dataclass, field

import pytest

from branchsim.engine.builders import DecisionBuilder
from branchsim.engine.events import CompositeEventHandler, EventHandler, Hook, trigger
from branchsim.engine.node import Node


@dataclass
class Counter:
    value: int = 0
    seen: list = field(default_factory=list)


class Increment(EventHandler):
    """Adds to the counter at turn start."""

    def __init__(self, amount):
        self.amount = amount

    def on_turn_start(self, state):
        state.value += self.amount
        state.seen.append(f"+{self.amount}")
        return Node.pending(state)


class GameOver(EventHandler):
    """Ends the game at turn start."""

    def on_turn_start(self, state):
        state.value *= 10
        state.seen.append("game over")
        return Node.end(state)


class Spy(EventHandler):
    def __init__(self):
        self.calls = []

    def on_turn_start(self, state):
        self.calls.append("turn_start")
        return Node.pending(state)

    def on_turn_end(self, state):
        self.calls.append("turn_end")
        return Node.pending(state)


class AskToContinue(EventHandler):
    """Branches at turn end."""

    def on_turn_end(self, state):
        return (
            DecisionBuilder("continue?", "P1")
            .named_choices([("yes", True), ("no", False)])
            .build(state, lambda s, yes: Node.pending(s) if yes else Node.end(s))
        )


class TestEventHandler:
    """Tests for default hooks."""

    @pytest.mark.parametrize("hook", list(Hook))
    def test_defaults_pass_through(self, hook):
        state = Counter()

        node = EventHandler().handle(hook, state)

        assert node.is_pending
        assert node.state is state

    def test_handle_dispatches(self):
        spy = Spy()

        spy.handle(Hook.TURN_END, Counter())

        assert spy.calls == ["turn_end"]


class TestTrigger:
    """Tests for chaining hooks."""

    def test_pending_then_end_stops_chain(self):
        state = Counter()
        spy = Spy()

        node = trigger(state, [Increment(2), GameOver(), spy], Hook.TURN_START)

        assert node.is_end
        assert node.state is state
        assert state.value == 20
        assert state.seen == ["+2", "game over"]
        assert spy.calls == []

    def test_all_pending(self):
        state = Counter()

        node = trigger(state, [Increment(1), Increment(2)], Hook.TURN_START)

        assert node.is_pending
        assert state.value == 3

    def test_no_handlers(self):
        state = Counter()

        assert trigger(state, [], Hook.TURN_START).is_pending

    def test_other_hooks_untouched(self):
        state = Counter()

        node = trigger(state, [Increment(5)], Hook.TURN_END)

        assert node.is_pending
        assert state.value == 0

    def test_branching_hook_defers_later_handlers(self):
        spy = Spy()

        node = trigger(Counter(), [AskToContinue(), spy], Hook.TURN_END)

        assert node.is_decision
        assert spy.calls == []

        assert node.resolve(1, fork=True).is_end
        assert spy.calls == []

        assert node.resolve(0, fork=True).is_pending
        assert spy.calls == ["turn_end"]


class TestCompositeEventHandler:
    """Tests for CompositeEventHandler."""

    def test_runs_members_in_order(self):
        state = Counter()
        composite = CompositeEventHandler([Increment(1), Increment(2)])

        composite.on_turn_start(state)

        assert state.seen == ["+1", "+2"]

    def test_nested_composite_short_circuits(self):
        state = Counter()
        spy = Spy()
        composite = CompositeEventHandler([Increment(1), GameOver()])

        node = trigger(state, [composite, spy], Hook.TURN_START)

        assert node.is_end
        assert state.value == 10
        assert spy.calls == []

    def test_handlers_copy(self):
        members = [Increment(1)]
        composite = CompositeEventHandler(members)

        composite.handlers.append(Increment(2))

        assert len(composite.handlers) == 1
