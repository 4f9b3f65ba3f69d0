"""Single battle example module."""

from branchsim.examples.single_battle.effects import Ability, Item, Effect
from branchsim.examples.single_battle.pokemon import (
    Gender,
    AllowedGenders,
    PokeType,
    TypeEffectiveness,
    Stats,
    PokemonSpecies,
    PokemonForm,
    PokeMove,
    Pokemon,
    Team,
    make_team,
)
from branchsim.examples.single_battle.single import (
    Player,
    PlayerState,
    SingleBattle,
    CHOOSE_ACTIVE,
    matchup,
)
from branchsim.examples.single_battle.teams import default_teams, sample_team

__all__ = [
    "Ability",
    "Item",
    "Effect",
    "Gender",
    "AllowedGenders",
    "PokeType",
    "TypeEffectiveness",
    "Stats",
    "PokemonSpecies",
    "PokemonForm",
    "PokeMove",
    "Pokemon",
    "Team",
    "make_team",
    "Player",
    "PlayerState",
    "SingleBattle",
    "CHOOSE_ACTIVE",
    "matchup",
    "default_teams",
    "sample_team",
]
