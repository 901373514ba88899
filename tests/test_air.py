#!/usr/bin/env python3
"""
Tests for air attack resolution.
"""

import pytest

from battle_engine.core.params import BattleParams
from battle_engine.core.state import AirTarget, AttackType, BattleUnit, VictoryType
from battle_engine.core.strength import air_defense_strength, max_air_strength
from battle_engine.systems.air import aircraft_loss, calculate_air_attack


def test_air_defense_cap(weak_defender):
    assert max_air_strength(500, 5) == 75
    assert air_defense_strength(weak_defender) == 75


def test_dogfight_losses_and_consumption(strong_attacker, weak_defender):
    result = calculate_air_attack(strong_attacker, weak_defender, 2000, "air")

    assert result.attack_type == AttackType.AIR
    assert result.victory_type == VictoryType.IMMENSE_TRIUMPH
    assert result.attacker_losses.aircraft == 9      # 75 * 0.7 / 54 * 9 = 8.75
    assert result.defender_losses.aircraft == 233    # 2000 * 0.7 / 54 * 9 = 233.3
    assert result.attacker_losses.gasoline == pytest.approx(500.0)
    assert result.attacker_losses.munitions == pytest.approx(500.0)
    assert result.defender_losses.gasoline == pytest.approx(18.75)
    assert result.defender_losses.munitions == pytest.approx(18.75)
    assert result.defender_losses.soldiers == 0
    assert result.defender_losses.tanks == 0
    assert result.defender_losses.ships == 0
    assert result.loot == 0.0


def test_side_infra_always_applied(strong_attacker, weak_defender):
    """Infra cap is avg_infra * 0.5 + 100, then divided by three."""
    for target in AirTarget:
        result = calculate_air_attack(strong_attacker, weak_defender, 2000, target)
        assert result.infra_destroyed == pytest.approx(600.0 / 3)


def test_strike_targets(strong_attacker, weak_defender):
    soldiers = calculate_air_attack(strong_attacker, weak_defender, 2000, AirTarget.SOLDIERS)
    tanks = calculate_air_attack(strong_attacker, weak_defender, 2000, AirTarget.TANKS)
    ships = calculate_air_attack(strong_attacker, weak_defender, 2000, AirTarget.SHIPS)

    assert soldiers.defender_losses.soldiers == 22384   # 38500 * 0.5814
    assert soldiers.defender_losses.tanks == 0
    assert tanks.defender_losses.tanks == 247           # 760 * 0.3256
    assert tanks.defender_losses.soldiers == 0
    assert ships.defender_losses.ships == 44            # 53 * 0.8293
    assert ships.defender_losses.soldiers == 0


def test_strike_limited_by_excess_strength(weak_defender):
    """Ten aircraft can only kill soldiers in proportion to their excess."""
    defender = weak_defender.copy_with(aircraft=0)
    result = calculate_air_attack(BattleUnit(), defender, 10, "soldiers")
    assert result.victory_type == VictoryType.IMMENSE_TRIUMPH
    # min(50000, 38500, 10 * 50 * 0.95 = 475) -> 475 * 0.5814
    assert result.defender_losses.soldiers == 276


def test_failed_strike_does_nothing_to_ground(weak_defender):
    defender = weak_defender.copy_with(aircraft=5000, cities=100)
    result = calculate_air_attack(BattleUnit(), defender, 100, "tanks")
    assert result.victory_type == VictoryType.UTTERLY_FAILS
    assert result.defender_losses.tanks == 0
    assert result.infra_destroyed == 0.0
    # Consumption at 40%.
    assert result.attacker_losses.gasoline == pytest.approx(0.25 * 100 * 0.4)


def test_zero_aircraft_is_a_no_op(strong_attacker, weak_defender):
    result = calculate_air_attack(strong_attacker, weak_defender, 0, "soldiers")
    assert result.victory_type == VictoryType.UTTERLY_FAILS
    assert sum(result.attacker_losses.to_dict().values()) == 0
    assert sum(result.defender_losses.to_dict().values()) == 0
    assert result.infra_destroyed == 0.0


def test_aircraft_loss_models():
    """Pins the constants of both loss formulas."""
    legacy = BattleParams(loss_model="legacy")
    assert aircraft_loss(100) == 12            # 70 / 54 * 9 = 11.67
    assert aircraft_loss(100, legacy) == 1     # 71 / 140 = 0.507
    assert aircraft_loss(0) == 0
    assert aircraft_loss(0, legacy) == 0


def test_unknown_target_rejected(strong_attacker, weak_defender):
    with pytest.raises(ValueError):
        calculate_air_attack(strong_attacker, weak_defender, 100, "missiles")


def test_air_is_deterministic(strong_attacker, weak_defender):
    a = calculate_air_attack(strong_attacker, weak_defender, 60, "ships")
    b = calculate_air_attack(strong_attacker, weak_defender, 60, "ships")
    assert a == b


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
