#!/usr/bin/env python3
"""
Tests for naval attack resolution.
"""

import pytest

from battle_engine.core.params import BattleParams
from battle_engine.core.state import AttackType, BattleUnit, VictoryType
from battle_engine.systems.naval import calculate_naval_attack, ship_loss


def test_naval_triumph(strong_attacker, weak_defender):
    result = calculate_naval_attack(strong_attacker, weak_defender, 1000)

    assert result.attack_type == AttackType.NAVAL
    assert result.victory_type == VictoryType.IMMENSE_TRIUMPH
    assert result.attacker_losses.ships == 21     # 0.441666 * 48 = 21.2
    assert result.defender_losses.ships == 106    # 0.441666 * 240 = 105.99984
    assert result.attacker_losses.gasoline == pytest.approx(2000.0)
    assert result.attacker_losses.munitions == pytest.approx(3000.0)
    assert result.defender_losses.gasoline == pytest.approx(400.0)
    assert result.defender_losses.munitions == pytest.approx(600.0)
    assert result.infra_destroyed == pytest.approx(1000 * 0.5 + 25)
    assert result.loot == 0.0


def test_naval_reports_only_ship_losses(strong_attacker, weak_defender):
    result = calculate_naval_attack(strong_attacker, weak_defender, 1000)
    for losses in (result.attacker_losses, result.defender_losses):
        assert losses.soldiers == 0
        assert losses.tanks == 0
        assert losses.aircraft == 0


def test_fortify_applies_to_attacker_only(strong_attacker, weak_defender):
    fortified = calculate_naval_attack(
        strong_attacker, weak_defender.copy_with(is_fortified=True), 1000
    )
    assert fortified.attacker_losses.ships == 26   # 0.441666 * 60 = 26.49996
    assert fortified.defender_losses.ships == 106


def test_naval_failure(weak_defender):
    result = calculate_naval_attack(BattleUnit(), weak_defender, 10)
    assert result.victory_type == VictoryType.UTTERLY_FAILS
    assert result.infra_destroyed == 0.0
    assert result.attacker_losses.gasoline == pytest.approx(2 * 10 * 0.4)
    assert result.attacker_losses.munitions == pytest.approx(3 * 10 * 0.4)


def test_naval_infra_formula():
    defender = BattleUnit(ships=100, avg_infra=5000, cities=3)
    result = calculate_naval_attack(BattleUnit(), defender, 150)
    assert result.victory_type > VictoryType.UTTERLY_FAILS
    expected = (150 - 50) * 2.625 * 0.95 * (result.roll / 3)
    assert result.infra_destroyed == pytest.approx(expected)


def test_zero_ships_is_a_no_op(strong_attacker, weak_defender):
    result = calculate_naval_attack(strong_attacker, weak_defender, 0)
    assert result.victory_type == VictoryType.UTTERLY_FAILS
    assert sum(result.attacker_losses.to_dict().values()) == 0
    assert sum(result.defender_losses.to_dict().values()) == 0
    assert result.infra_destroyed == 0.0


def test_ship_loss_models():
    legacy = BattleParams(loss_model="legacy")
    assert ship_loss(200) == 21
    assert ship_loss(200, 1.25) == 26
    assert ship_loss(200, params=legacy) == 0      # 141 / 375
    assert ship_loss(1000, params=legacy) == 2     # 701 / 375
    assert ship_loss(1000, 1.25, legacy) == 2      # fortify ignored


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
