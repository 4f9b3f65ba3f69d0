"""Policies module - Decision sources for the driver."""

from branchsim.policies.base import (
    Policy,
    DecisionContext,
    RandomPolicy,
    ConstantPolicy,
    ScriptedPolicy,
)

__all__ = [
    "Policy",
    "DecisionContext",
    "RandomPolicy",
    "ConstantPolicy",
    "ScriptedPolicy",
]
