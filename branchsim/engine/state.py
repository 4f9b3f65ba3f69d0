"""
Player and state contracts.

A simulation plugs into the engine by defining three things:
- a Player enum naming every agent,
- a per-player sub-state record,
- a State aggregate owning exactly one sub-state per player.

The engine only ever moves States between continuations; it never looks
inside them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Generic, Iterator, List, Tuple, Type, TypeVar
import copy


class PlayerBase(Enum):
    """
    Identity tag for an agent.

    Declaration order is the canonical decision order: `fold` over
    `values()` asks the first declared player first.
    """

    @classmethod
    def values(cls) -> List["PlayerBase"]:
        """Return every player in declaration order."""
        return list(cls)


class PlayerStateBase:
    """Opaque per-player record. Subclass with whatever the game needs."""

    def clone(self):
        return copy.deepcopy(self)


P = TypeVar("P", bound=PlayerBase)
PS = TypeVar("PS", bound=PlayerStateBase)


class StateBase(ABC, Generic[P, PS]):
    """
    Aggregate simulation state.

    Exactly one instance is live at a time. Each continuation receives the
    state, may mutate it, and hands it on inside the Node it returns. A
    driver that wants to resolve more than one branch of the same node must
    `clone()` first.
    """

    player_type: ClassVar[Type[PlayerBase]]

    @abstractmethod
    def player(self, player: P) -> PS:
        """
        Return the sub-state owned by `player`.

        The returned object is the live record; mutating it mutates this
        state.
        """
        pass

    def players(self) -> Iterator[Tuple[P, PS]]:
        """Yield (player, sub_state) pairs in canonical order."""
        for p in self.player_type.values():
            yield p, self.player(p)

    def clone(self):
        """Return an independent deep copy of this state."""
        return copy.deepcopy(self)
