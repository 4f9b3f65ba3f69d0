"""
Policy interface - Abstract base class for decision sources.

A Policy answers Decision nodes for one player by returning the position
of the chosen option. This is the seam for plugging in any decision
source: scripted, random, rule-driven, search-backed, or human.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import numpy as np


@dataclass
class DecisionContext:
    """
    Context provided to a policy for making a decision.

    Attributes:
        state: State as of entering the Decision node
        name: Decision name (e.g. "Choose your active pokemon")
        player: Player who must resolve it
        labels: Choice labels, in position order
        step: Number of resolutions made so far in this playout
        metadata: Additional context information
    """
    state: Any
    name: str
    player: Any
    labels: List[str]
    step: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def n_choices(self) -> int:
        return len(self.labels)

    def index_of(self, label: str) -> Optional[int]:
        """Position of the first choice with this label, if any."""
        for i, candidate in enumerate(self.labels):
            if candidate == label:
                return i
        return None


class Policy(ABC):
    """
    Abstract base class for decision policies.

    A policy takes a decision context and returns a zero-based choice
    index. The driver bounds-checks the answer.
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__
        self._decision_count = 0

    @abstractmethod
    def decide(self, context: DecisionContext) -> int:
        """
        Make a decision given the current context.

        Args:
            context: Decision context with state and choice labels

        Returns:
            Position of the chosen option
        """
        pass

    def reset(self) -> None:
        """Reset any internal state (called between playouts)."""
        self._decision_count = 0

    @property
    def decision_count(self) -> int:
        """Number of decisions made since last reset."""
        return self._decision_count

    def _record_decision(self) -> None:
        self._decision_count += 1


class RandomPolicy(Policy):
    """
    Baseline policy that picks uniformly among the choices.
    """

    def __init__(self, seed: Optional[int] = None, name: str = "RandomPolicy"):
        super().__init__(name)
        self._rng = np.random.default_rng(seed)

    def decide(self, context: DecisionContext) -> int:
        self._record_decision()
        return int(self._rng.integers(0, context.n_choices))


class ConstantPolicy(Policy):
    """
    Policy that always picks a specific label when it is offered.

    Falls back to the first, last, or a random choice otherwise.
    """

    def __init__(
        self,
        prefer_label: Optional[str] = None,
        fallback: str = "first",  # "first", "last", "random"
        seed: Optional[int] = None,
        name: str = "ConstantPolicy",
    ):
        super().__init__(name)
        if fallback not in ("first", "last", "random"):
            raise ValueError(f"Unknown fallback: {fallback}")
        self.prefer_label = prefer_label
        self.fallback = fallback
        self._rng = np.random.default_rng(seed)

    def decide(self, context: DecisionContext) -> int:
        self._record_decision()

        if self.prefer_label is not None:
            index = context.index_of(self.prefer_label)
            if index is not None:
                return index

        if self.fallback == "first":
            return 0
        elif self.fallback == "last":
            return context.n_choices - 1
        else:
            return int(self._rng.integers(0, context.n_choices))


class ScriptedPolicy(Policy):
    """
    Replays a fixed sequence of indices, one per decision.

    Useful for tests and for replaying a recorded line of play.
    """

    def __init__(self, indices: Sequence[int], name: str = "ScriptedPolicy"):
        super().__init__(name)
        self._indices = list(indices)

    @property
    def remaining(self) -> int:
        return len(self._indices) - self._decision_count

    def decide(self, context: DecisionContext) -> int:
        if self.remaining <= 0:
            raise IndexError(
                f"{self.name} has no scripted answer for '{context.name}'"
            )
        index = self._indices[self._decision_count]
        self._record_decision()
        return index
