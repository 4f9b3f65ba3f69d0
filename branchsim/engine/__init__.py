"""Engine module - Suspended computations, composition and playout."""

from branchsim.engine.errors import (
    ContractViolation,
    EmptyBranchError,
    ContinuationConsumedError,
    MissingStateError,
)
from branchsim.engine.state import PlayerBase, PlayerStateBase, StateBase
from branchsim.engine.node import (
    Node,
    Decision,
    Chance,
    Pending,
    End,
    Choice,
    Possibility,
    Continuation,
    Flow,
    fold,
    sequence,
)
from branchsim.engine.builders import DecisionBuilder, ChanceBuilder, chance
from branchsim.engine.events import EventHandler, CompositeEventHandler, Hook, trigger
from branchsim.engine.driver import Driver, DriverConfig, PlayoutResult, ResolutionRecord

__all__ = [
    "ContractViolation",
    "EmptyBranchError",
    "ContinuationConsumedError",
    "MissingStateError",
    "PlayerBase",
    "PlayerStateBase",
    "StateBase",
    "Node",
    "Decision",
    "Chance",
    "Pending",
    "End",
    "Choice",
    "Possibility",
    "Continuation",
    "Flow",
    "fold",
    "sequence",
    "DecisionBuilder",
    "ChanceBuilder",
    "chance",
    "EventHandler",
    "CompositeEventHandler",
    "Hook",
    "trigger",
    "Driver",
    "DriverConfig",
    "PlayoutResult",
    "ResolutionRecord",
]
