"""
Outcome collector and distribution analysis.

Aggregates the playouts of a swarm into frequencies and distributions.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    from branchsim.swarm.executor import SwarmResult


@dataclass
class OutcomeDistribution:
    """
    Statistical distribution of a numeric quantity.

    Attributes:
        values: Raw values
        mean: Mean value
        std: Standard deviation
        median: Median value
        percentiles: Percentile values keyed by percentile point
        min_val: Minimum value
        max_val: Maximum value
    """
    values: List[float]
    mean: float = 0.0
    std: float = 0.0
    median: float = 0.0
    percentiles: Dict[int, float] = field(default_factory=dict)
    min_val: float = 0.0
    max_val: float = 0.0

    @classmethod
    def from_values(
        cls,
        values: List[float],
        percentile_points: Optional[List[int]] = None,
    ) -> "OutcomeDistribution":
        """Create distribution from list of values."""
        if not values:
            return cls(values=[])

        arr = np.array(values, dtype=float)
        percentile_points = percentile_points or [5, 25, 50, 75, 95]

        return cls(
            values=list(values),
            mean=float(np.mean(arr)),
            std=float(np.std(arr)),
            median=float(np.median(arr)),
            percentiles={p: float(np.percentile(arr, p)) for p in percentile_points},
            min_val=float(np.min(arr)),
            max_val=float(np.max(arr)),
        )

    def describe(self) -> str:
        return (
            f"Mean: {self.mean:.3f} +/- {self.std:.3f}\n"
            f"Median: {self.median:.3f}\n"
            f"Range: [{self.min_val:.3f}, {self.max_val:.3f}]"
        )


@dataclass
class OutcomeSummary:
    """
    Counts of outcome labels across a swarm.

    Attributes:
        total: Number of playouts
        counts: Playouts per outcome label
    """
    total: int
    counts: Dict[str, int]

    def rate(self, outcome: str) -> float:
        if self.total == 0:
            return 0.0
        return self.counts.get(outcome, 0) / self.total

    def describe(self) -> str:
        lines = [f"Total Playouts: {self.total}"]
        for outcome, count in sorted(self.counts.items(), key=lambda kv: -kv[1]):
            lines.append(f"{outcome}: {count} ({self.rate(outcome):.1%})")
        return "\n".join(lines)


class OutcomeCollector:
    """
    Collects and analyzes playouts from swarm execution.
    """

    def __init__(self, swarm_result: "SwarmResult"):
        """
        Initialize collector with swarm results.

        Args:
            swarm_result: Results from SwarmExecutor.run()
        """
        self.swarm_result = swarm_result
        self.results = swarm_result.results

    @property
    def n_runs(self) -> int:
        return len(self.results)

    def get_outcome_summary(self) -> OutcomeSummary:
        return OutcomeSummary(
            total=self.n_runs,
            counts=dict(Counter(self.swarm_result.outcomes)),
        )

    def get_length_distribution(self) -> OutcomeDistribution:
        """Distribution of playout lengths in resolutions."""
        return OutcomeDistribution.from_values(
            [r.total_steps for r in self.results]
        )

    def get_choice_frequencies(self, decision_name: str) -> Dict[str, int]:
        """
        How often each label was picked at decisions named `decision_name`.

        Labels are counted by text, so duplicate labels within one decision
        are merged here.
        """
        counts: Counter = Counter()
        for result in self.results:
            for record in result.decisions():
                if record.name == decision_name:
                    counts[record.label] += 1
        return dict(counts)

    def get_chance_frequencies(self, chance_name: str) -> Dict[str, int]:
        counts: Counter = Counter()
        for result in self.results:
            for record in result.chances():
                if record.name == chance_name:
                    counts[record.label] += 1
        return dict(counts)
