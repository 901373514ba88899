#!/usr/bin/env python3
"""
Tests for the victory-probability estimators and pre-attack analysis.
"""

import numpy as np
import pytest

from battle_engine.analysis.odds import (
    analyze_attack,
    recommend,
    sample_victory_probabilities,
    success_rate,
    victory_probabilities,
)
from battle_engine.core.state import AttackType, BattleUnit, VictoryType


def test_closed_form_certain_outcomes():
    assert victory_probabilities(1000, 2000)[VictoryType.IMMENSE_TRIUMPH] == 1.0
    assert victory_probabilities(1000, 0)[VictoryType.UTTERLY_FAILS] == 1.0


def test_closed_form_smoothing():
    # roll = 1.5: split evenly between pyrrhic and moderate.
    probs = victory_probabilities(1000, 1000)
    assert probs[VictoryType.PYRRHIC_VICTORY] == pytest.approx(0.5)
    assert probs[VictoryType.MODERATE_SUCCESS] == pytest.approx(0.5)

    # roll = 0.625: fraction 0.625 -> 81.25% on the upper tier.
    probs = victory_probabilities(1000, 800)
    assert probs[VictoryType.UTTERLY_FAILS] == pytest.approx(0.1875)
    assert probs[VictoryType.PYRRHIC_VICTORY] == pytest.approx(0.8125)
    assert probs[VictoryType.IMMENSE_TRIUMPH] == 0.0


def test_closed_form_sums_to_one():
    for attacking in np.linspace(0, 3000, 61):
        probs = victory_probabilities(1000, float(attacking))
        assert set(probs) == set(VictoryType)
        assert sum(probs.values()) == pytest.approx(1.0)
        assert all(0.0 <= p <= 1.0 for p in probs.values())


def test_monte_carlo_reproducible():
    a = sample_victory_probabilities(1000, 1200, rng=np.random.default_rng(3))
    b = sample_victory_probabilities(1000, 1200, rng=np.random.default_rng(3))
    assert a == b
    assert sum(a.values()) == pytest.approx(1.0)


def test_monte_carlo_extremes():
    rng = np.random.default_rng(0)
    assert sample_victory_probabilities(0, 100, rng)[VictoryType.IMMENSE_TRIUMPH] == 1.0
    assert sample_victory_probabilities(100, 0, rng)[VictoryType.UTTERLY_FAILS] == 1.0
    # Attacker at 2.5x can never lose a roll.
    assert sample_victory_probabilities(100, 251, rng, 200)[VictoryType.IMMENSE_TRIUMPH] == 1.0


def test_monte_carlo_rejects_bad_sample_count():
    with pytest.raises(ValueError):
        sample_victory_probabilities(100, 100, n_samples=0)


def test_recommendation_ladder():
    certain = {VictoryType.IMMENSE_TRIUMPH: 1.0}
    coin = {VictoryType.MODERATE_SUCCESS: 0.45, VictoryType.UTTERLY_FAILS: 0.55}
    hopeless = {VictoryType.UTTERLY_FAILS: 1.0}
    assert success_rate(certain) == 1.0
    assert recommend(certain, 0) == "highly_recommended"
    assert recommend(certain, 1) == "recommended"
    assert recommend(coin, 3) == "risky"
    assert recommend(hopeless, 0) == "not_recommended"


def test_analyze_ground(strong_attacker, weak_defender):
    analysis = analyze_attack(strong_attacker, weak_defender, "ground")
    assert analysis.attack_type == AttackType.GROUND
    assert analysis.attacker_strength == pytest.approx(375000)
    assert analysis.defender_strength == pytest.approx(127500)
    assert analysis.ratio == pytest.approx(375000 / 127500)
    assert analysis.expected.victory_type == VictoryType.IMMENSE_TRIUMPH
    assert analysis.action_cost == 3
    assert analysis.warnings == []
    assert analysis.recommendation == "highly_recommended"
    assert analysis.to_dict()["probabilities"]["IMMENSE_TRIUMPH"] == 1.0


def test_analyze_warnings(strong_attacker, weak_defender):
    tired = strong_attacker.copy_with(action_points=2, gasoline=0)
    analysis = analyze_attack(tired, weak_defender, AttackType.GROUND)
    assert len(analysis.warnings) == 2
    assert analysis.recommendation == "risky"


def test_analyze_air_and_naval(strong_attacker, weak_defender):
    air = analyze_attack(strong_attacker, weak_defender, "air", air_target="soldiers")
    assert air.defender_strength == 75
    assert air.action_cost == 4
    assert air.expected.defender_losses.soldiers > 0

    naval = analyze_attack(BattleUnit(ships=10), weak_defender, "naval")
    assert naval.ratio == pytest.approx(10 / 200)
    assert "Enemy significantly outnumbers you" in naval.warnings
    assert naval.recommendation == "not_recommended"


def test_analyze_monte_carlo(strong_attacker, weak_defender):
    analysis = analyze_attack(
        strong_attacker, weak_defender, "ground",
        rng=np.random.default_rng(11), method="monte_carlo",
    )
    assert sum(analysis.probabilities.values()) == pytest.approx(1.0)
    with pytest.raises(ValueError):
        analyze_attack(strong_attacker, weak_defender, "ground", method="oracle")
    with pytest.raises(ValueError):
        analyze_attack(strong_attacker, weak_defender, "space")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
