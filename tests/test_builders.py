"""
Tests for DecisionBuilder and ChanceBuilder.
"""

from dataclasses import dataclass, field

import pytest

from branchsim.engine.builders import ChanceBuilder, DecisionBuilder, chance
from branchsim.engine.errors import ContractViolation, EmptyBranchError
from branchsim.engine.node import Node


@dataclass
class Roster:
    members: list = field(default_factory=list)
    picked: list = field(default_factory=list)


class Monster:
    def __init__(self, name):
        self.name = name

    def __str__(self):
        return self.name


def capture(calls):
    """Callback that records (state, payload) and ends."""
    def f(state, payload):
        calls.append((state, payload))
        return Node.end(state)
    return f


class TestDecisionBuilder:
    """Tests for DecisionBuilder."""

    @pytest.mark.parametrize("state", [None, 0, Roster(), "anything"])
    def test_empty_build_rejected(self, state):
        with pytest.raises(EmptyBranchError):
            DecisionBuilder("nothing", "P1").build(state, capture([]))

    def test_empty_build_is_contract_violation(self):
        with pytest.raises(ContractViolation) as exc_info:
            DecisionBuilder("Choose", "P1").build(Roster(), capture([]))

        assert "Choose" in str(exc_info.value)

    def test_named_choices(self):
        node = (
            DecisionBuilder("attack", "P1")
            .named_choice("Tackle", 40)
            .named_choices([("Surf", 90), ("Earthquake", 100)])
            .build(Roster(), capture([]))
        )

        assert node.is_decision
        assert node.branches.name == "attack"
        assert node.branches.player == "P1"
        assert node.labels == ["Tackle", "Surf", "Earthquake"]

    def test_choices_labelled_by_text(self):
        calls = []
        node = (
            DecisionBuilder("number", "P1")
            .choice(7)
            .choices([3, 5])
            .build(Roster(), capture(calls))
        )

        assert node.labels == ["7", "3", "5"]
        node.resolve(0, fork=True)
        node.resolve(2, fork=True)
        assert [payload for _, payload in calls] == [7, 5]

    def test_indexed_choices_roster(self):
        names = ["Venusaur", "Charizard", "Blastoise", "Pikachu", "Gengar", "Snorlax"]
        roster = [Monster(n) for n in names]
        state = Roster(members=roster)
        calls = []

        node = (
            DecisionBuilder("Choose your active pokemon", "P1")
            .indexed_choices(roster)
            .build(state, capture(calls))
        )

        assert node.labels == names
        assert len(node.branches.choices) == 6

        result = node.resolve(2)

        assert calls == [(state, 2)]
        assert calls[0][0] is state
        assert result.state is state

    def test_indexed_payloads_follow_encounter_order(self):
        calls = []
        node = (
            DecisionBuilder("pick", "P1")
            .indexed_choices(iter(["a", "b", "c"]))
            .build(Roster(), capture(calls))
        )

        for i in range(3):
            node.resolve(i, fork=True)

        assert [payload for _, payload in calls] == [0, 1, 2]

    def test_duplicate_labels_resolved_by_position(self):
        calls = []
        node = (
            DecisionBuilder("dup", "P1")
            .named_choices([("same", "first"), ("same", "second")])
            .build(Roster(), capture(calls))
        )

        assert node.labels == ["same", "same"]
        node.resolve(1)
        assert calls[0][1] == "second"

    def test_len(self):
        builder = DecisionBuilder("pick", "P1").choices("abc")

        assert len(builder) == 3

    def test_only_resolved_choice_invoked(self):
        calls = []
        node = (
            DecisionBuilder("pick", "P1")
            .choices(["x", "y", "z"])
            .build(Roster(), capture(calls))
        )

        node.resolve(1)

        assert [payload for _, payload in calls] == ["y"]


class TestChanceBuilder:
    """Tests for ChanceBuilder."""

    @pytest.mark.parametrize("state", [None, 0, Roster()])
    def test_empty_build_rejected(self, state):
        with pytest.raises(EmptyBranchError):
            ChanceBuilder("nothing").build(state, capture([]))

    def test_possibilities(self):
        node = (
            ChanceBuilder("roll")
            .possibilities([(0.1, "A"), (0.9, "B")])
            .build(Roster(), capture([]))
        )

        assert node.is_chance
        assert node.branches.name == "roll"
        assert len(node.branches.possibilities) == 2
        assert node.weights == [0.1, 0.9]
        assert node.labels == ["A", "B"]

    @pytest.mark.parametrize("index,expected", [(0, "A"), (1, "B")])
    def test_resolving_one_does_not_invoke_other(self, index, expected):
        calls = []
        state = Roster()
        node = (
            ChanceBuilder("roll")
            .possibilities([(0.1, "A"), (0.9, "B")])
            .build(state, capture(calls))
        )

        node.resolve(index)

        assert calls == [(state, expected)]

    def test_named_possibilities(self):
        node = (
            ChanceBuilder("crit")
            .named_possibility("critical hit", 1, True)
            .named_possibilities([("normal hit", 23, False)])
            .build(Roster(), capture([]))
        )

        assert node.labels == ["critical hit", "normal hit"]
        assert node.weights == [1.0, 23.0]

    def test_weights_not_normalized(self):
        node = (
            ChanceBuilder("scores")
            .possibility(3, "x")
            .possibility(5, "y")
            .build(Roster(), capture([]))
        )

        assert node.weights == [3.0, 5.0]

    def test_zero_weight_allowed(self):
        builder = ChanceBuilder("never").possibility(0.0, "x")

        assert len(builder) == 1

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError):
            ChanceBuilder("bad").possibility(-0.5, "x")

    @pytest.mark.parametrize("weight", [float("nan"), float("inf"), -1])
    def test_invalid_weight_rejected(self, weight):
        builder = ChanceBuilder("bad").possibility(1.0, "ok")

        with pytest.raises(ValueError, match="'x'"):
            builder.possibility(weight, "x")

        assert len(builder) == 1


class TestChanceShortcut:
    """Tests for the chance() helper."""

    def test_builds_chance(self):
        calls = []
        state = Roster()

        node = chance(state, "coin", [(1, "heads"), (3, "tails")], capture(calls))

        assert node.is_chance
        assert node.branches.name == "coin"
        assert node.labels == ["heads", "tails"]
        assert node.weights == [1.0, 3.0]

        node.resolve(1)

        assert calls == [(state, "tails")]

    def test_empty_rejected(self):
        with pytest.raises(EmptyBranchError):
            chance(Roster(), "nothing", [], capture([]))
