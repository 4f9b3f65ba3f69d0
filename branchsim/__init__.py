"""
branchsim

A generic engine for branching, multi-agent, turn-based simulations.

Simulation progress is a tree of suspended computations: at every point a
player must decide, chance must resolve, or the simulation is over. Games
compose small steps with `then` and `fold`; drivers walk the result.
"""

from branchsim.engine.node import Node, Flow, fold, sequence
from branchsim.engine.builders import DecisionBuilder, ChanceBuilder
from branchsim.engine.events import EventHandler, Hook
from branchsim.engine.state import PlayerBase, PlayerStateBase, StateBase
from branchsim.engine.driver import Driver, DriverConfig
from branchsim.policies.base import Policy, DecisionContext
from branchsim.swarm.executor import SwarmExecutor

__version__ = "0.1.0"

__all__ = [
    # Core types
    "Node",
    "Flow",
    "fold",
    "sequence",
    "DecisionBuilder",
    "ChanceBuilder",
    "EventHandler",
    "Hook",
    # Contracts
    "PlayerBase",
    "PlayerStateBase",
    "StateBase",
    # Driving
    "Driver",
    "DriverConfig",
    "Policy",
    "DecisionContext",
    "SwarmExecutor",
]
