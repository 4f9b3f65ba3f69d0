"""
Monster data model.

Species, forms, stats and individual pokemon, plus the type chart. None of
this is read by the engine; it is the payload the battle state carries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from branchsim.examples.single_battle.effects import Ability, Effect, Item

MAX_TEAM_SIZE = 6
MAX_MOVES = 4


class Gender(Enum):
    NONE = "none"
    MALE = "male"
    FEMALE = "female"


class AllowedGenders(Enum):
    MALE_OR_FEMALE = "male_or_female"
    MALE_ONLY = "male_only"
    FEMALE_ONLY = "female_only"
    NO_GENDER = "no_gender"

    def as_tuple(self) -> Tuple[Gender, ...]:
        return _ALLOWED[self]


_ALLOWED = {
    AllowedGenders.MALE_OR_FEMALE: (Gender.MALE, Gender.FEMALE),
    AllowedGenders.MALE_ONLY: (Gender.MALE,),
    AllowedGenders.FEMALE_ONLY: (Gender.FEMALE,),
    AllowedGenders.NO_GENDER: (Gender.NONE,),
}


class TypeEffectiveness(Enum):
    NO_EFFECT = 0.0
    NOT_VERY_EFFECTIVE = 0.5
    REGULAR = 1.0
    SUPER_EFFECTIVE = 2.0

    @property
    def multiplier(self) -> float:
        return self.value


class PokeType(Enum):
    NORMAL = "Normal"
    FIRE = "Fire"
    WATER = "Water"
    ELECTRIC = "Electric"
    GRASS = "Grass"
    ICE = "Ice"
    FIGHTING = "Fighting"
    POISON = "Poison"
    GROUND = "Ground"
    FLYING = "Flying"
    PSYCHIC = "Psychic"
    BUG = "Bug"
    ROCK = "Rock"
    GHOST = "Ghost"
    DRAGON = "Dragon"
    DARK = "Dark"
    STEEL = "Steel"
    FAIRY = "Fairy"

    def __str__(self) -> str:
        return self.value

    def effectiveness_on(self, defender: "PokeType") -> TypeEffectiveness:
        """How effective an attack of this type is against `defender`."""
        no_effect, resisted, weak = _TYPE_CHART[self]
        if defender in no_effect:
            return TypeEffectiveness.NO_EFFECT
        if defender in resisted:
            return TypeEffectiveness.NOT_VERY_EFFECTIVE
        if defender in weak:
            return TypeEffectiveness.SUPER_EFFECTIVE
        return TypeEffectiveness.REGULAR


def _chart(no_effect=(), resisted=(), weak=()) -> Tuple[FrozenSet, FrozenSet, FrozenSet]:
    return frozenset(no_effect), frozenset(resisted), frozenset(weak)


_T = PokeType

# attacker -> (no effect on, not very effective on, super effective on)
_TYPE_CHART: Dict[PokeType, Tuple[FrozenSet, FrozenSet, FrozenSet]] = {
    _T.NORMAL: _chart([_T.GHOST], [_T.ROCK, _T.STEEL]),
    _T.FIRE: _chart(
        [],
        [_T.FIRE, _T.WATER, _T.ROCK, _T.DRAGON],
        [_T.GRASS, _T.ICE, _T.BUG, _T.STEEL],
    ),
    _T.WATER: _chart(
        [],
        [_T.WATER, _T.GRASS, _T.DRAGON],
        [_T.FIRE, _T.GROUND, _T.ROCK],
    ),
    _T.ELECTRIC: _chart(
        [_T.GROUND],
        [_T.ELECTRIC, _T.GRASS, _T.DRAGON],
        [_T.WATER, _T.FLYING],
    ),
    _T.GRASS: _chart(
        [],
        [_T.FIRE, _T.GRASS, _T.POISON, _T.FLYING, _T.BUG, _T.DRAGON, _T.STEEL],
        [_T.WATER, _T.GROUND, _T.ROCK],
    ),
    _T.ICE: _chart(
        [],
        [_T.FIRE, _T.WATER, _T.ICE, _T.STEEL],
        [_T.GRASS, _T.GROUND, _T.FLYING, _T.DRAGON],
    ),
    _T.FIGHTING: _chart(
        [_T.GHOST],
        [_T.POISON, _T.FLYING, _T.PSYCHIC, _T.BUG, _T.FAIRY],
        [_T.NORMAL, _T.ICE, _T.ROCK, _T.DARK, _T.STEEL],
    ),
    _T.POISON: _chart(
        [_T.STEEL],
        [_T.POISON, _T.GROUND, _T.ROCK, _T.GHOST],
        [_T.GRASS, _T.FAIRY],
    ),
    _T.GROUND: _chart(
        [_T.FLYING],
        [_T.GRASS, _T.BUG],
        [_T.FIRE, _T.ELECTRIC, _T.POISON, _T.ROCK, _T.STEEL],
    ),
    _T.FLYING: _chart(
        [],
        [_T.ELECTRIC, _T.ROCK, _T.STEEL],
        [_T.GRASS, _T.FIGHTING, _T.BUG],
    ),
    _T.PSYCHIC: _chart(
        [_T.DARK],
        [_T.PSYCHIC, _T.STEEL],
        [_T.FIGHTING, _T.POISON],
    ),
    _T.BUG: _chart(
        [],
        [_T.FIRE, _T.FIGHTING, _T.POISON, _T.FLYING, _T.GHOST, _T.STEEL, _T.FAIRY],
        [_T.GRASS, _T.PSYCHIC, _T.DARK],
    ),
    _T.ROCK: _chart(
        [],
        [_T.FIGHTING, _T.GROUND, _T.STEEL],
        [_T.FIRE, _T.ICE, _T.FLYING, _T.BUG],
    ),
    _T.GHOST: _chart(
        [_T.NORMAL],
        [_T.DARK],
        [_T.PSYCHIC, _T.GHOST],
    ),
    _T.DRAGON: _chart([_T.FAIRY], [_T.STEEL], [_T.DRAGON]),
    _T.DARK: _chart(
        [],
        [_T.FIGHTING, _T.DRAGON, _T.FAIRY],
        [_T.PSYCHIC, _T.GHOST],
    ),
    _T.STEEL: _chart(
        [],
        [_T.FIRE, _T.WATER, _T.ELECTRIC, _T.STEEL],
        [_T.ICE, _T.ROCK, _T.FAIRY],
    ),
    _T.FAIRY: _chart(
        [],
        [_T.FIRE, _T.POISON, _T.STEEL],
        [_T.FIGHTING, _T.DRAGON, _T.DARK],
    ),
}


@dataclass(frozen=True)
class Stats:
    hp: int = 0
    attack: int = 0
    defense: int = 0
    special_attack: int = 0
    special_defense: int = 0
    speed: int = 0


@dataclass(eq=False)
class PokemonSpecies:
    national_dex_no: int
    name: str
    forms: List["PokemonForm"] = field(default_factory=list, repr=False)

    def __str__(self) -> str:
        return self.name

    def add_form(
        self,
        types: List[PokeType],
        base_stats: Stats,
        genders: AllowedGenders = AllowedGenders.MALE_OR_FEMALE,
        name: Optional[str] = None,
    ) -> "PokemonForm":
        """Create a form of this species and register it."""
        form = PokemonForm(
            species=self,
            name=name,
            types=list(types),
            genders=genders,
            base_stats=base_stats,
        )
        self.forms.append(form)
        return form


@dataclass(eq=False)
class PokemonForm:
    species: PokemonSpecies
    name: Optional[str]
    types: List[PokeType]
    genders: AllowedGenders
    base_stats: Stats

    def __str__(self) -> str:
        if self.name:
            return f"{self.species.name} - {self.name}"
        return self.species.name

    def effectiveness_against(self, attack_type: PokeType) -> float:
        """Combined multiplier of an attack of `attack_type` on this form."""
        multiplier = 1.0
        for t in self.types:
            multiplier *= attack_type.effectiveness_on(t).multiplier
        return multiplier


@dataclass(frozen=True)
class PokeMove:
    name: str
    poke_type: PokeType
    power: int = 0

    def __str__(self) -> str:
        return self.name


@dataclass
class Pokemon:
    """An individual pokemon on a team."""
    form: PokemonForm
    ability: Ability
    gender: Optional[Gender] = None  # None picks the first allowed gender
    nickname: Optional[str] = None
    moves: List[PokeMove] = field(default_factory=list)
    ev: Stats = field(default_factory=Stats)
    iv: Stats = field(default_factory=Stats)
    item: Optional[Item] = None
    effects: List[Effect] = field(default_factory=list)

    def __post_init__(self):
        if self.gender is None:
            self.gender = self.form.genders.as_tuple()[0]
        if len(self.moves) > MAX_MOVES:
            raise ValueError(f"A pokemon knows at most {MAX_MOVES} moves, got {len(self.moves)}")
        if self.gender not in self.form.genders.as_tuple():
            raise ValueError(f"{self.form} cannot be {self.gender.value}")

    def __str__(self) -> str:
        if self.nickname:
            return f"{self.nickname} ({self.form})"
        return str(self.form)

    def event_handlers(self) -> list:
        """Ability, held item, then effects, in that order."""
        handlers = [self.ability]
        if self.item is not None:
            handlers.append(self.item)
        handlers.extend(self.effects)
        return handlers


Team = List[Pokemon]


def make_team(members: List[Pokemon]) -> Team:
    """Validate team size and return the team."""
    if not members:
        raise ValueError("A team needs at least one pokemon")
    if len(members) > MAX_TEAM_SIZE:
        raise ValueError(f"A team holds at most {MAX_TEAM_SIZE} pokemon, got {len(members)}")
    return list(members)
