"""
Tests for policy implementations.
"""

import pytest

from branchsim.policies.base import (
    ConstantPolicy,
    DecisionContext,
    Policy,
    RandomPolicy,
    ScriptedPolicy,
)


def make_context(labels=None):
    """Helper to create test context."""
    if labels is None:
        labels = ["rock", "paper", "scissors"]

    return DecisionContext(
        state=None,
        name="throw",
        player="P1",
        labels=labels,
    )


class TestDecisionContext:
    """Tests for DecisionContext."""

    def test_n_choices(self):
        assert make_context().n_choices == 3

    def test_index_of(self):
        context = make_context(["a", "b", "a"])

        assert context.index_of("a") == 0
        assert context.index_of("b") == 1
        assert context.index_of("missing") is None


class TestRandomPolicy:
    """Tests for RandomPolicy."""

    def test_in_range(self):
        policy = RandomPolicy(seed=42)
        context = make_context()

        picks = [policy.decide(context) for _ in range(100)]

        assert all(0 <= p < 3 for p in picks)
        assert set(picks) == {0, 1, 2}
        assert policy.decision_count == 100

    def test_reproducible(self):
        context = make_context()

        a = RandomPolicy(seed=5)
        b = RandomPolicy(seed=5)

        assert [a.decide(context) for _ in range(20)] == [b.decide(context) for _ in range(20)]

    def test_reset_counts(self):
        policy = RandomPolicy(seed=1)
        policy.decide(make_context())

        policy.reset()

        assert policy.decision_count == 0


class TestConstantPolicy:
    """Tests for ConstantPolicy."""

    def test_prefers_label(self):
        policy = ConstantPolicy(prefer_label="scissors")

        assert policy.decide(make_context()) == 2

    def test_fallback_first(self):
        policy = ConstantPolicy(prefer_label="lizard")

        assert policy.decide(make_context()) == 0

    def test_fallback_last(self):
        policy = ConstantPolicy(fallback="last")

        assert policy.decide(make_context()) == 2

    def test_fallback_random(self):
        policy = ConstantPolicy(fallback="random", seed=3)

        assert 0 <= policy.decide(make_context()) < 3

    def test_invalid_fallback(self):
        with pytest.raises(ValueError):
            ConstantPolicy(fallback="middle")


class TestScriptedPolicy:
    """Tests for ScriptedPolicy."""

    def test_replays_in_order(self):
        policy = ScriptedPolicy([2, 0, 1])
        context = make_context()

        assert [policy.decide(context) for _ in range(3)] == [2, 0, 1]
        assert policy.remaining == 0

    def test_exhausted(self):
        policy = ScriptedPolicy([1])
        policy.decide(make_context())

        with pytest.raises(IndexError):
            policy.decide(make_context())

    def test_reset_replays(self):
        policy = ScriptedPolicy([1, 2])
        policy.decide(make_context())

        policy.reset()

        assert policy.decide(make_context()) == 1


class TestPolicyBase:
    """Tests for the abstract base."""

    def test_abstract(self):
        with pytest.raises(TypeError):
            Policy()

    def test_default_name(self):
        class Mine(Policy):
            def decide(self, context):
                return 0

        assert Mine().name == "Mine"
        assert Mine(name="custom").name == "custom"
