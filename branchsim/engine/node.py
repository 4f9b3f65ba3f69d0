"""
Suspended computations.

A Node pairs the state as of entering it with one of four branch kinds:

- Decision: a player must pick one of several labelled choices
- Chance: the environment resolves one of several weighted possibilities
- Pending: nothing to resolve, ready for the next step
- End: the simulation is over

Every choice and possibility carries a one-shot Continuation that turns the
state into the next Node. Nothing below a Decision or Chance is computed
until a driver resolves it, so the full tree is never enumerated.

Composition lives on `Node.then`: it appends a step after whatever branching
already exists, recursing into every open branch, and stops at End.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    List,
    Sequence,
    TypeVar,
    Union,
)
import copy

from branchsim.engine.errors import ContinuationConsumedError, ContractViolation

S = TypeVar("S")
T = TypeVar("T")

Step = Callable[[S], "Node[S]"]


class Continuation(Generic[S]):
    """
    One-shot function from a state to the next Node.

    Calling it, or moving it into a composed continuation with `then`,
    consumes it. A second use raises ContinuationConsumedError.
    """

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[[S], "Node[S]"]):
        self._fn = fn

    @property
    def consumed(self) -> bool:
        return self._fn is None

    def _take(self) -> Callable[[S], "Node[S]"]:
        fn = self._fn
        if fn is None:
            raise ContinuationConsumedError("continuation was already used")
        self._fn = None
        return fn

    def __call__(self, state: S) -> "Node[S]":
        return self._take()(state)

    def then(self, step: Step) -> "Continuation[S]":
        """Move this continuation into a new one that runs `step` afterwards."""
        fn = self._take()
        return Continuation(lambda s: fn(s).then(step))

    def __repr__(self) -> str:
        return f"Continuation(consumed={self.consumed})"


@dataclass
class Choice(Generic[S]):
    """One labelled option of a Decision."""
    name: str
    continuation: Continuation[S] = field(repr=False)


@dataclass
class Possibility(Generic[S]):
    """One labelled, weighted outcome of a Chance."""
    name: str
    weight: float
    continuation: Continuation[S] = field(repr=False)


@dataclass
class Decision(Generic[S]):
    """
    Branch point resolved by `player` picking one of `choices`.

    Labels need not be unique; choices are identified by position.
    """
    name: str
    player: Any
    choices: List[Choice[S]]

    def then(self, step: Step) -> "Decision[S]":
        return Decision(
            name=self.name,
            player=self.player,
            choices=[
                Choice(c.name, c.continuation.then(step)) for c in self.choices
            ],
        )


@dataclass
class Chance(Generic[S]):
    """
    Branch point resolved by sampling one of `possibilities`.

    Weights are non-negative and are not normalized here.
    """
    name: str
    possibilities: List[Possibility[S]]

    def then(self, step: Step) -> "Chance[S]":
        return Chance(
            name=self.name,
            possibilities=[
                Possibility(p.name, p.weight, p.continuation.then(step))
                for p in self.possibilities
            ],
        )


@dataclass(frozen=True)
class Pending:
    """No branching; ready for the next step."""


@dataclass(frozen=True)
class End:
    """Terminal; no continuation exists."""


Branches = Union[Decision, Chance, Pending, End]


def _clone_state(state: Any) -> Any:
    clone = getattr(state, "clone", None)
    if callable(clone):
        return clone()
    return copy.deepcopy(state)


@dataclass
class Node(Generic[S]):
    """
    A state snapshot paired with what happens next.

    `state` is the state as of entering this node, before its own branch is
    resolved.
    """
    state: S
    branches: Branches

    @classmethod
    def end(cls, state: S) -> "Node[S]":
        return cls(state=state, branches=End())

    @classmethod
    def pending(cls, state: S) -> "Node[S]":
        return cls(state=state, branches=Pending())

    @property
    def is_end(self) -> bool:
        return isinstance(self.branches, End)

    @property
    def is_pending(self) -> bool:
        return isinstance(self.branches, Pending)

    @property
    def is_decision(self) -> bool:
        return isinstance(self.branches, Decision)

    @property
    def is_chance(self) -> bool:
        return isinstance(self.branches, Chance)

    @property
    def is_branching(self) -> bool:
        return self.is_decision or self.is_chance

    def then(self, step: Step) -> "Node[S]":
        """
        Append `step` after this computation.

        - Pending: `step(state)` is returned immediately.
        - End: this node is returned and `step` is never called.
        - Decision/Chance: a new node with the same labels and weights whose
          every continuation runs `step` on its result. This node's
          continuations are moved into the new one.
        """
        branches = self.branches
        if isinstance(branches, Pending):
            return step(self.state)
        if isinstance(branches, End):
            return self
        return Node(state=self.state, branches=branches.then(step))

    def _options(self) -> Sequence[Union[Choice[S], Possibility[S]]]:
        branches = self.branches
        if isinstance(branches, Decision):
            return branches.choices
        if isinstance(branches, Chance):
            return branches.possibilities
        raise ContractViolation(
            f"{type(branches).__name__} node has nothing to resolve"
        )

    @property
    def labels(self) -> List[str]:
        """Labels of the open choices or possibilities, in order."""
        return [o.name for o in self._options()]

    @property
    def weights(self) -> List[float]:
        """Raw Chance weights, in order."""
        branches = self.branches
        if not isinstance(branches, Chance):
            raise ContractViolation("only Chance nodes carry weights")
        return [p.weight for p in branches.possibilities]

    def resolve(self, index: int, fork: bool = False) -> "Node[S]":
        """
        Invoke the continuation at position `index` with this node's state.

        Args:
            index: Zero-based position of the choice or possibility
            fork: Pass a clone of the state instead of the state itself, so
                sibling branches can be resolved later from the same node

        Returns:
            The Node produced by the continuation
        """
        options = self._options()
        if not 0 <= index < len(options):
            raise IndexError(
                f"index {index} out of range for {len(options)} options"
            )
        state = _clone_state(self.state) if fork else self.state
        return options[index].continuation(state)


def fold(state: S, items: Iterable[T], f: Callable[[S, T], Node[S]]) -> Node[S]:
    """
    Compose one step per item, in iteration order.

    Branching introduced for an item is nested inside every branch of the
    items before it. With no items the result is `Node.pending(state)`.
    """
    node: Node[S] = Node.pending(state)
    for item in items:
        node = node.then(lambda s, item=item: f(s, item))
    return node


@dataclass(frozen=True)
class Flow(Generic[S]):
    """
    Control signal returned by a step inside `sequence`.

    `final` means stop here: no later step of the sequence runs.
    """
    node: Node[S]
    final: bool = False

    @classmethod
    def proceed(cls, node: Node[S]) -> "Flow[S]":
        return cls(node=node, final=False)

    @classmethod
    def stop(cls, node: Node[S]) -> "Flow[S]":
        return cls(node=node, final=True)

    @classmethod
    def check(cls, node: Node[S]) -> "Flow[S]":
        """Final exactly when `node` is End."""
        return cls(node=node, final=node.is_end)


def _as_flow(result: Union[Node[S], Flow[S]]) -> Flow[S]:
    if isinstance(result, Flow):
        return result
    return Flow.check(result)


def sequence(state: S, steps: Iterable[Callable[[S], Union[Node[S], Flow[S]]]]) -> Node[S]:
    """
    Run `steps` in order, stopping at the first final result.

    Each step returns a Node or a Flow. A Pending node passes its state on
    to the next step. A Decision or Chance gets the remaining steps composed
    into every branch. End, or a Flow marked final, is returned as-is and no
    later step is called.
    """
    return _run_steps(state, list(steps), 0)


def _run_steps(state: S, steps: List[Callable], start: int) -> Node[S]:
    for i in range(start, len(steps)):
        flow = _as_flow(steps[i](state))
        node = flow.node
        if flow.final or node.is_end:
            return node
        if node.is_pending:
            state = node.state
            continue
        return node.then(lambda s, nxt=i + 1: _run_steps(s, steps, nxt))
    return Node.pending(state)
