"""Swarm module - Many-playout execution and outcome collection."""

from branchsim.swarm.executor import SwarmExecutor, SwarmConfig, SwarmResult
from branchsim.swarm.collector import OutcomeCollector, OutcomeDistribution, OutcomeSummary

__all__ = [
    "SwarmExecutor",
    "SwarmConfig",
    "SwarmResult",
    "OutcomeCollector",
    "OutcomeDistribution",
    "OutcomeSummary",
]
