"""
Two-player single battle.

Each player owns a team and, once the battle starts, one active pokemon.
The start sequence asks Player 1 and then Player 2 to send out a pokemon,
runs the enter-battle hooks of both actives, and ends. Turn resolution is
left to the game built on top of this module.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional
import logging

from branchsim.engine.builders import DecisionBuilder
from branchsim.engine.errors import MissingStateError
from branchsim.engine.events import Hook, trigger
from branchsim.engine.node import Node, fold, sequence
from branchsim.engine.state import PlayerBase, PlayerStateBase, StateBase
from branchsim.examples.single_battle.pokemon import Pokemon, Team, make_team

logger = logging.getLogger(__name__)

CHOOSE_ACTIVE = "Choose your active pokemon"


class Player(PlayerBase):
    PLAYER_1 = "Player 1"
    PLAYER_2 = "Player 2"

    def __str__(self) -> str:
        return self.value


@dataclass
class PlayerState(PlayerStateBase):
    team: Team
    active_pokemon_idx: Optional[int] = None


@dataclass
class SingleBattle(StateBase[Player, PlayerState]):
    """
    Battle state.

    Attributes:
        player_1: Sub-state of Player 1
        player_2: Sub-state of Player 2
        turn: Number of turns started
        log: Human-readable battle messages, oldest first
    """
    player_type = Player

    player_1: PlayerState
    player_2: PlayerState
    turn: int = 0
    log: List[str] = field(default_factory=list)

    def player(self, player: Player) -> PlayerState:
        if player is Player.PLAYER_1:
            return self.player_1
        return self.player_2

    def active(self, player: Player) -> Pokemon:
        """
        The active pokemon of `player`.

        Raises:
            MissingStateError: If the player has not sent one out yet
        """
        sub = self.player(player)
        if sub.active_pokemon_idx is None:
            raise MissingStateError(player, "active_pokemon_idx")
        return sub.team[sub.active_pokemon_idx]

    def active_pokemon(self) -> List[Pokemon]:
        """Active pokemon in player order, skipping players without one."""
        return [
            sub.team[sub.active_pokemon_idx]
            for _, sub in self.players()
            if sub.active_pokemon_idx is not None
        ]

    @classmethod
    def start(cls, player_1_team: Team, player_2_team: Team) -> Node["SingleBattle"]:
        state = cls(
            player_1=PlayerState(team=make_team(player_1_team)),
            player_2=PlayerState(team=make_team(player_2_team)),
        )
        return sequence(state, [choose_starting_pokemon, enter_battle, Node.end])


def choose_starting_pokemon(state: SingleBattle) -> Node[SingleBattle]:
    """Ask every player, in order, which pokemon to send out."""
    return fold(state, Player.values(), _choose_active)


def _choose_active(state: SingleBattle, player: Player) -> Node[SingleBattle]:
    return (
        DecisionBuilder(CHOOSE_ACTIVE, player)
        .indexed_choices(state.player(player).team)
        .build(state, lambda s, idx: _send_out(s, player, idx))
    )


def _send_out(state: SingleBattle, player: Player, idx: int) -> Node[SingleBattle]:
    state.player(player).active_pokemon_idx = idx
    message = f"{player} sends out {state.active(player)}"
    logger.debug(message)
    state.log.append(message)
    return Node.pending(state)


def trigger_active(state: SingleBattle, hook: Hook) -> Node[SingleBattle]:
    """
    Run `hook` for every active pokemon's handlers, Player 1 first.

    Raises:
        MissingStateError: If a player has no active pokemon
    """
    return fold(
        state,
        Player.values(),
        lambda s, p: trigger(s, s.active(p).event_handlers(), hook),
    )


def enter_battle(state: SingleBattle) -> Node[SingleBattle]:
    return trigger_active(state, Hook.ENTER_BATTLE)


def begin_turn(state: SingleBattle) -> Node[SingleBattle]:
    state.turn += 1
    state.log.append(f"Turn {state.turn}")
    return trigger_active(state, Hook.TURN_START)


def end_turn(state: SingleBattle) -> Node[SingleBattle]:
    return trigger_active(state, Hook.TURN_END)


def matchup(state: SingleBattle) -> str:
    """Outcome label naming both actives, e.g. "Pikachu vs Snorlax"."""
    return " vs ".join(str(p) for p in state.active_pokemon())
