"""
Event hooks.

Game content (abilities, items, lingering effects) reacts to points in the
battle by overriding hooks on EventHandler. Each hook returns a Node, so a
handler may introduce a Decision or Chance, end the game, or simply pass
the state through. Orchestration code `then`s the hook results into the
ongoing chain; the engine knows nothing about concrete effects.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, TypeVar

from branchsim.engine.node import Node, fold

S = TypeVar("S")


class Hook(Enum):
    """Named extension points, valued by the handler method they call."""
    TURN_START = "on_turn_start"
    TURN_END = "on_turn_end"
    ENTER_BATTLE = "on_etb"
    LEAVE_BATTLE = "on_leave_battle"


class EventHandler:
    """
    Base class for anything that reacts to battle events.

    Every hook defaults to passing the state through without branching.
    Override only the hooks you need.
    """

    def on_turn_start(self, state: S) -> Node[S]:
        return Node.pending(state)

    def on_turn_end(self, state: S) -> Node[S]:
        return Node.pending(state)

    def on_etb(self, state: S) -> Node[S]:
        """Called when the owner enters the battle."""
        return Node.pending(state)

    def on_leave_battle(self, state: S) -> Node[S]:
        return Node.pending(state)

    def handle(self, hook: Hook, state: S) -> Node[S]:
        """Dispatch `hook` to the matching method."""
        return getattr(self, hook.value)(state)


def trigger(state: S, handlers: Iterable[EventHandler], hook: Hook) -> Node[S]:
    """
    Run `hook` on each handler in order and compose the results.

    A handler returning End stops the chain; later handlers are not called.
    """
    return fold(state, handlers, lambda s, h: h.handle(hook, s))


class CompositeEventHandler(EventHandler):
    """
    Combines several handlers into one.

    Every hook runs the members' hooks in the order they were given.
    """

    def __init__(self, handlers: Iterable[EventHandler]):
        self._handlers: List[EventHandler] = list(handlers)

    @property
    def handlers(self) -> List[EventHandler]:
        return list(self._handlers)

    def handle(self, hook: Hook, state: S) -> Node[S]:
        return trigger(state, self._handlers, hook)

    def on_turn_start(self, state: S) -> Node[S]:
        return self.handle(Hook.TURN_START, state)

    def on_turn_end(self, state: S) -> Node[S]:
        return self.handle(Hook.TURN_END, state)

    def on_etb(self, state: S) -> Node[S]:
        return self.handle(Hook.ENTER_BATTLE, state)

    def on_leave_battle(self, state: S) -> Node[S]:
        return self.handle(Hook.LEAVE_BATTLE, state)
