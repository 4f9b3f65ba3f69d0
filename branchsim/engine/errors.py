"""
Engine error types.

Contract violations are programming errors in the domain layer. They are
fatal: the engine raises them and never catches them.
"""

from __future__ import annotations

from typing import Any


class ContractViolation(RuntimeError):
    """Base class for unrecoverable misuse of the engine."""


class EmptyBranchError(ContractViolation):
    """A Decision or Chance was built with no options."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"{kind} '{name}' was built with no options")
        self.kind = kind
        self.name = name


class ContinuationConsumedError(ContractViolation):
    """A one-shot continuation was invoked or moved a second time."""


class MissingStateError(ContractViolation):
    """
    Domain code required per-player state that was never set.

    Attributes:
        player: The player whose sub-state is incomplete
        field: Name of the unset field
    """

    def __init__(self, player: Any, field: str):
        super().__init__(f"{player}: required field '{field}' is not set")
        self.player = player
        self.field = field
