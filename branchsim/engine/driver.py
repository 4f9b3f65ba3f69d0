"""
Playout driver.

The Driver walks a Node to completion: it asks each player's policy to
resolve Decisions, samples Chances in proportion to their weights, and
records every resolution until it reaches End.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, TYPE_CHECKING
import copy
import logging

import numpy as np

from branchsim.engine.errors import ContractViolation
from branchsim.engine.node import Node
from branchsim.policies.base import DecisionContext

if TYPE_CHECKING:
    from branchsim.policies.base import Policy

logger = logging.getLogger(__name__)


@dataclass
class DriverConfig:
    """
    Driver settings.

    Attributes:
        max_steps: Resolutions allowed before the playout is abandoned
        record_states: Store a copy of the state before each resolution
    """
    max_steps: int = 1000
    record_states: bool = False

    def __post_init__(self):
        if self.max_steps < 1:
            raise ValueError("max_steps must be at least 1")


@dataclass
class ResolutionRecord:
    """One resolved Decision or Chance."""
    step: int
    kind: str  # "decision" or "chance"
    name: str
    player: Any
    labels: List[str]
    index: int
    weight: Optional[float] = None
    state: Any = None

    @property
    def label(self) -> str:
        return self.labels[self.index]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "kind": self.kind,
            "name": self.name,
            "player": str(self.player) if self.player is not None else None,
            "labels": list(self.labels),
            "index": self.index,
            "label": self.label,
            "weight": self.weight,
        }


@dataclass
class PlayoutResult:
    """
    Complete record of a playout.

    Attributes:
        trajectory: Every resolution, in order
        final_state: State carried by the last node reached
        total_steps: Number of resolutions made
        completed: Whether the playout reached End
        seed: Seed used for Chance sampling
    """
    trajectory: List[ResolutionRecord]
    final_state: Any
    total_steps: int
    completed: bool
    seed: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def outcome(self) -> str:
        return "end" if self.completed else "step_limit"

    def decisions(self, player: Any = None) -> List[ResolutionRecord]:
        """Decision records, optionally only those of `player`."""
        return [
            r for r in self.trajectory
            if r.kind == "decision" and (player is None or r.player == player)
        ]

    def chances(self) -> List[ResolutionRecord]:
        return [r for r in self.trajectory if r.kind == "chance"]


class Driver:
    """
    Resolves a Node tree by asking policies and sampling chances.

    The loop:

    1. End: stop and report the final state
    2. Decision: ask the player's policy for an index and bounds-check it
    3. Chance: sample an index with probability proportional to weight
    4. Pending: a construction bug, raise ContractViolation
    5. Resolve the chosen continuation and repeat
    """

    def __init__(
        self,
        policies: Mapping[Any, "Policy"],
        config: Optional[DriverConfig] = None,
    ):
        """
        Initialize the driver.

        Args:
            policies: Policy for each player that may face a Decision
            config: Driver settings
        """
        self.policies = dict(policies)
        self.config = config or DriverConfig()

    def run(self, node: Node, seed: Optional[int] = None) -> PlayoutResult:
        """
        Drive `node` until End or the step limit.

        Args:
            node: Root of the computation; its continuations are consumed
            seed: Seed for Chance sampling

        Returns:
            PlayoutResult with the trajectory and final state
        """
        rng = np.random.default_rng(seed)
        for policy in {id(p): p for p in self.policies.values()}.values():
            policy.reset()

        trajectory: List[ResolutionRecord] = []
        steps = 0

        while not node.is_end:
            if node.is_pending:
                raise ContractViolation(
                    "driver reached a Pending node; steps must end in End"
                )
            if steps >= self.config.max_steps:
                logger.warning(
                    "Playout stopped after %d steps without reaching End", steps
                )
                break

            snapshot = copy.deepcopy(node.state) if self.config.record_states else None

            if node.is_decision:
                record = self._decide(node, steps)
            else:
                record = self._sample(node, steps, rng)
            record.state = snapshot
            trajectory.append(record)

            logger.debug(
                "step %d: %s '%s' -> [%d] %s",
                steps, record.kind, record.name, record.index, record.label,
            )

            node = node.resolve(record.index)
            steps += 1

        return PlayoutResult(
            trajectory=trajectory,
            final_state=node.state,
            total_steps=steps,
            completed=node.is_end,
            seed=seed,
            metadata={"max_steps": self.config.max_steps},
        )

    def _decide(self, node: Node, step: int) -> ResolutionRecord:
        decision = node.branches
        policy = self.policies.get(decision.player)
        if policy is None:
            raise KeyError(f"No policy registered for {decision.player}")

        labels = node.labels
        context = DecisionContext(
            state=node.state,
            name=decision.name,
            player=decision.player,
            labels=labels,
            step=step,
        )
        index = policy.decide(context)

        if (
            isinstance(index, bool)
            or not isinstance(index, (int, np.integer))
            or not 0 <= index < len(labels)
        ):
            raise IndexError(
                f"{policy.name} chose {index!r} for '{decision.name}' "
                f"with {len(labels)} choices"
            )

        return ResolutionRecord(
            step=step,
            kind="decision",
            name=decision.name,
            player=decision.player,
            labels=labels,
            index=int(index),
        )

    def _sample(self, node: Node, step: int, rng: np.random.Generator) -> ResolutionRecord:
        chance = node.branches
        weights = np.asarray(node.weights, dtype=float)
        total = weights.sum()
        if total <= 0:
            raise ValueError(f"Chance '{chance.name}' has no positive weight")

        index = int(rng.choice(len(weights), p=weights / total))

        return ResolutionRecord(
            step=step,
            kind="chance",
            name=chance.name,
            player=None,
            labels=node.labels,
            index=index,
            weight=float(weights[index]),
        )
