"""
Abilities, held items and lingering effects.

Each is an EventHandler whose hooks do nothing by default. Concrete content
subclasses one of these and overrides the hooks it reacts to.
"""

from __future__ import annotations

from dataclasses import dataclass

from branchsim.engine.events import EventHandler


@dataclass(frozen=True)
class Ability(EventHandler):
    name: str = "No Ability"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Item(EventHandler):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class Effect(EventHandler):
    """A condition attached to a pokemon for some number of turns."""
    name: str
    turns_left: int = -1  # -1 lasts until removed

    def __str__(self) -> str:
        return self.name
