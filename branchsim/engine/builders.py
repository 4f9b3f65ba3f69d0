"""
Fluent constructors for Decision and Chance nodes.

Both builders accumulate (label, payload) entries and bind every entry to
the same callback when built:

    node = (
        DecisionBuilder("Choose your active pokemon", Player.PLAYER_1)
        .indexed_choices(team)
        .build(state, lambda s, idx: pick(s, idx))
    )

Resolving entry i calls the callback with the resolving state and payload i.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, List, Tuple, TypeVar
import math

from branchsim.engine.errors import EmptyBranchError
from branchsim.engine.node import (
    Chance,
    Choice,
    Continuation,
    Decision,
    Node,
    Possibility,
)

S = TypeVar("S")
T = TypeVar("T")


def _bind(f: Callable[[S, T], Node[S]], payload: T) -> Continuation[S]:
    return Continuation(lambda s: f(s, payload))


class DecisionBuilder(Generic[T]):
    """Accumulates labelled choices for one player."""

    def __init__(self, name: str, player: Any):
        self.name = name
        self.player = player
        self._choices: List[Tuple[str, T]] = []

    def __len__(self) -> int:
        return len(self._choices)

    def named_choice(self, name: str, choice: T) -> "DecisionBuilder[T]":
        self._choices.append((str(name), choice))
        return self

    def named_choices(self, choices: Iterable[Tuple[str, T]]) -> "DecisionBuilder[T]":
        self._choices.extend((str(n), c) for n, c in choices)
        return self

    def choice(self, choice: T) -> "DecisionBuilder[T]":
        """Add a choice labelled with its own text rendering."""
        return self.named_choice(str(choice), choice)

    def choices(self, choices: Iterable[T]) -> "DecisionBuilder[T]":
        return self.named_choices((str(c), c) for c in choices)

    def indexed_choices(self, items: Iterable[Any]) -> "DecisionBuilder[int]":
        """
        Add one choice per item whose payload is the item's position.

        Labels are the items' text renderings; payloads count from 0 in
        iteration order.
        """
        return self.named_choices((str(item), i) for i, item in enumerate(items))

    def build(self, state: S, f: Callable[[S, T], Node[S]]) -> Node[S]:
        """
        Materialize the Decision node.

        Raises:
            EmptyBranchError: If no choices were added
        """
        if not self._choices:
            raise EmptyBranchError("Decision", self.name)
        return Node(
            state=state,
            branches=Decision(
                name=self.name,
                player=self.player,
                choices=[Choice(n, _bind(f, c)) for n, c in self._choices],
            ),
        )


class ChanceBuilder(Generic[T]):
    """
    Accumulates labelled, weighted possibilities.

    Weights must be finite and non-negative; they are stored as given.
    """

    def __init__(self, name: str):
        self.name = name
        self._possibilities: List[Tuple[str, float, T]] = []

    def __len__(self) -> int:
        return len(self._possibilities)

    def named_possibility(self, name: str, weight: float, possibility: T) -> "ChanceBuilder[T]":
        weight = float(weight)
        if not (math.isfinite(weight) and weight >= 0):
            raise ValueError(
                f"Weight of '{name}' must be a finite non-negative number, got {weight}"
            )
        self._possibilities.append((str(name), weight, possibility))
        return self

    def named_possibilities(self, possibilities: Iterable[Tuple[str, float, T]]) -> "ChanceBuilder[T]":
        for name, weight, possibility in possibilities:
            self.named_possibility(name, weight, possibility)
        return self

    def possibility(self, weight: float, possibility: T) -> "ChanceBuilder[T]":
        return self.named_possibility(str(possibility), weight, possibility)

    def possibilities(self, possibilities: Iterable[Tuple[float, T]]) -> "ChanceBuilder[T]":
        """Add (weight, payload) pairs labelled with the payloads' text."""
        return self.named_possibilities((str(p), w, p) for w, p in possibilities)

    def build(self, state: S, f: Callable[[S, T], Node[S]]) -> Node[S]:
        """
        Materialize the Chance node.

        Raises:
            EmptyBranchError: If no possibilities were added
        """
        if not self._possibilities:
            raise EmptyBranchError("Chance", self.name)
        return Node(
            state=state,
            branches=Chance(
                name=self.name,
                possibilities=[
                    Possibility(n, w, _bind(f, p)) for n, w, p in self._possibilities
                ],
            ),
        )


def chance(
    state: S,
    name: str,
    possibilities: Iterable[Tuple[float, T]],
    f: Callable[[S, T], Node[S]],
) -> Node[S]:
    """Build a Chance from (weight, payload) pairs in one call."""
    return ChanceBuilder(name).possibilities(possibilities).build(state, f)
