"""
Sample species and teams for demos and tests.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from branchsim.examples.single_battle.effects import Ability
from branchsim.examples.single_battle.pokemon import (
    AllowedGenders,
    PokeMove,
    PokeType,
    Pokemon,
    PokemonForm,
    PokemonSpecies,
    Stats,
    Team,
    make_team,
)

_T = PokeType


def _species(
    dex_no: int,
    name: str,
    types: List[PokeType],
    stats: Tuple[int, int, int, int, int, int],
    genders: AllowedGenders = AllowedGenders.MALE_OR_FEMALE,
) -> PokemonForm:
    species = PokemonSpecies(national_dex_no=dex_no, name=name)
    return species.add_form(types=types, base_stats=Stats(*stats), genders=genders)


FORMS: Dict[str, PokemonForm] = {
    form.species.name: form
    for form in [
        _species(3, "Venusaur", [_T.GRASS, _T.POISON], (80, 82, 83, 100, 100, 80)),
        _species(6, "Charizard", [_T.FIRE, _T.FLYING], (78, 84, 78, 109, 85, 100)),
        _species(9, "Blastoise", [_T.WATER], (79, 83, 100, 85, 105, 78)),
        _species(25, "Pikachu", [_T.ELECTRIC], (35, 55, 40, 50, 50, 90)),
        _species(94, "Gengar", [_T.GHOST, _T.POISON], (60, 65, 60, 130, 75, 110)),
        _species(121, "Starmie", [_T.WATER, _T.PSYCHIC], (60, 75, 85, 100, 85, 115),
                 AllowedGenders.NO_GENDER),
        _species(143, "Snorlax", [_T.NORMAL], (160, 110, 65, 65, 110, 30)),
        _species(149, "Dragonite", [_T.DRAGON, _T.FLYING], (91, 134, 95, 100, 100, 80)),
        _species(205, "Forretress", [_T.BUG, _T.STEEL], (75, 90, 140, 60, 60, 40)),
        _species(248, "Tyranitar", [_T.ROCK, _T.DARK], (100, 134, 110, 95, 100, 61)),
        _species(282, "Gardevoir", [_T.PSYCHIC, _T.FAIRY], (68, 65, 65, 125, 115, 80)),
        _species(445, "Garchomp", [_T.DRAGON, _T.GROUND], (108, 130, 95, 80, 85, 102)),
    ]
}

MOVES: Dict[str, PokeMove] = {
    m.name: m
    for m in [
        PokeMove("Tackle", _T.NORMAL, 40),
        PokeMove("Flamethrower", _T.FIRE, 90),
        PokeMove("Surf", _T.WATER, 90),
        PokeMove("Thunderbolt", _T.ELECTRIC, 90),
        PokeMove("Energy Ball", _T.GRASS, 90),
        PokeMove("Shadow Ball", _T.GHOST, 80),
        PokeMove("Earthquake", _T.GROUND, 100),
        PokeMove("Psychic", _T.PSYCHIC, 90),
    ]
}

DEFAULT_TEAMS = (
    ["Venusaur", "Charizard", "Blastoise", "Pikachu", "Gengar", "Snorlax"],
    ["Starmie", "Dragonite", "Forretress", "Tyranitar", "Gardevoir", "Garchomp"],
)


def sample_pokemon(name: str, nickname: Optional[str] = None) -> Pokemon:
    """A fresh pokemon of the named sample species with a couple of moves."""
    form = FORMS[name]
    moves = [MOVES["Tackle"]]
    for move in MOVES.values():
        if move.poke_type in form.types and move not in moves:
            moves.append(move)
    return Pokemon(
        form=form,
        ability=Ability(),
        nickname=nickname,
        moves=moves[:4],
    )


def sample_team(names: List[str]) -> Team:
    return make_team([sample_pokemon(n) for n in names])


def default_teams() -> Tuple[Team, Team]:
    """Two fresh six-pokemon teams."""
    return sample_team(DEFAULT_TEAMS[0]), sample_team(DEFAULT_TEAMS[1])
