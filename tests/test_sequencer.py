#!/usr/bin/env python3
"""
Tests for the battle plan sequencer.
"""

import logging

import pytest

from battle_engine.analysis.history import BattleHistory
from battle_engine.core.state import (
    AirTarget,
    AttackType,
    BattleResult,
    BattleUnit,
    UnitLosses,
    VictoryType,
)
from battle_engine.simulation.sequencer import (
    AirOrder,
    BattlePlan,
    GroundOrder,
    NavalOrder,
    apply_losses,
    apply_result,
    simulate_battle,
)


def _border_plan() -> BattlePlan:
    return BattlePlan.from_dict({
        "ground": [{"soldiers": 100000, "tanks": 5000, "use_munitions": True}],
        "air": [{"aircraft": 2000, "target": "soldiers"}],
        "naval": [{"ships": 1000}, {"ships": 1000}],
    })


def test_plan_from_dict():
    plan = _border_plan()
    assert len(plan) == 4
    assert plan.ground == (GroundOrder(100000, 5000, True),)
    assert plan.air[0].target == AirTarget.SOLDIERS
    assert plan.naval == (NavalOrder(1000), NavalOrder(1000))
    assert len(BattlePlan.from_dict({})) == 0


def test_plan_rejects_unknown_input():
    with pytest.raises(ValueError):
        BattlePlan.from_dict({"space": []})
    with pytest.raises(TypeError):
        BattlePlan.from_dict({"ground": [{"infantry": 10}]})
    with pytest.raises(ValueError):
        AirOrder(100, "missiles")


def test_negative_order_counts_rejected():
    for make in (
        lambda: GroundOrder(soldiers=-100000),
        lambda: GroundOrder(tanks=-1),
        lambda: AirOrder(aircraft=-10),
        lambda: NavalOrder(ships=-5),
    ):
        with pytest.raises(ValueError):
            make()
    with pytest.raises(ValueError):
        BattlePlan.from_dict({"ground": [{"soldiers": -100000}]})
    assert GroundOrder(0, 0).soldiers == 0


def test_border_plan_runs_in_order(strong_attacker, weak_defender, caplog):
    with caplog.at_level(logging.WARNING, logger="battle_engine.simulation.sequencer"):
        report = simulate_battle(strong_attacker, weak_defender, _border_plan())

    assert [r.attack_type for r in report.results] == [
        AttackType.GROUND, AttackType.AIR, AttackType.NAVAL,
    ]
    # 12 - 3 - 4 - 4 = 1 left; the second naval attack cannot be paid for.
    assert report.skipped == 1
    assert report.attacker.action_points == 1
    assert "Skipping naval attack" in caplog.text


def test_inputs_are_not_mutated(strong_attacker, weak_defender):
    before_att = strong_attacker.to_dict()
    before_def = weak_defender.to_dict()
    simulate_battle(strong_attacker, weak_defender, _border_plan())
    assert strong_attacker.to_dict() == before_att
    assert weak_defender.to_dict() == before_def


def test_first_result_matches_direct_call(strong_attacker, weak_defender):
    from battle_engine.systems.ground import calculate_ground_attack

    report = simulate_battle(strong_attacker, weak_defender, _border_plan())
    direct = calculate_ground_attack(strong_attacker, weak_defender, 100000, 5000, True)
    assert report.results[0] == direct


def test_loot_changes_hands(strong_attacker, weak_defender):
    report = simulate_battle(strong_attacker, weak_defender, _border_plan())
    loot = sum(r.loot for r in report.results)
    assert loot > 0
    assert report.attacker.money == pytest.approx(strong_attacker.money + loot)
    assert report.defender.money == pytest.approx(weak_defender.money - loot)
    assert report.defender.avg_infra < weak_defender.avg_infra


def test_losses_applied(strong_attacker, weak_defender):
    report = simulate_battle(strong_attacker, weak_defender, _border_plan())
    ground, air, naval = report.results
    assert report.attacker.tanks == 5000 - ground.attacker_losses.tanks
    assert report.defender.soldiers == (
        50000 - ground.defender_losses.soldiers - air.defender_losses.soldiers
    )
    assert report.defender.ships == 200 - naval.defender_losses.ships


def test_apply_losses_clamps_at_zero():
    unit = BattleUnit(soldiers=10, tanks=2, munitions=1.0)
    after = apply_losses(unit, UnitLosses(soldiers=50, tanks=3, munitions=4.0, gasoline=1.0))
    assert after.soldiers == 0
    assert after.tanks == 0
    assert after.munitions == 0.0
    assert after.gasoline == 0.0


def test_control_flags():
    attacker = BattleUnit()
    defender = BattleUnit(is_ground_control=True, is_air_control=True, cities=2)

    triumph = BattleResult(
        AttackType.GROUND, VictoryType.IMMENSE_TRIUMPH, 3.0, UnitLosses(), UnitLosses()
    )
    att, dfn = apply_result(attacker, defender, triumph)
    assert att.is_ground_control and not dfn.is_ground_control
    assert dfn.is_air_control
    assert att.action_points == 9

    pyrrhic = BattleResult(
        AttackType.AIR, VictoryType.PYRRHIC_VICTORY, 0.8, UnitLosses(), UnitLosses()
    )
    att, dfn = apply_result(attacker, defender, pyrrhic)
    assert not att.is_air_control
    assert not dfn.is_air_control

    failure = BattleResult(
        AttackType.GROUND, VictoryType.UTTERLY_FAILS, 0.1, UnitLosses(), UnitLosses()
    )
    _, dfn = apply_result(attacker, defender, failure)
    assert dfn.is_ground_control


def test_loot_capped_at_defender_money():
    result = BattleResult(
        AttackType.GROUND, VictoryType.IMMENSE_TRIUMPH, 3.0,
        UnitLosses(), UnitLosses(), loot=1000.0, infra_destroyed=40.0,
    )
    att, dfn = apply_result(BattleUnit(), BattleUnit(money=300.0, avg_infra=100, cities=4), result)
    assert att.money == 300.0
    assert dfn.money == 0.0
    assert dfn.avg_infra == pytest.approx(90.0)


def test_orders_capped_at_holdings(weak_defender):
    attacker = BattleUnit(aircraft=10)
    plan = BattlePlan(air=(AirOrder(5000, AirTarget.AIR),))
    report = simulate_battle(attacker, weak_defender, plan)
    assert report.results[0].attacker_losses.gasoline == pytest.approx(
        0.25 * 10 * 0.4
    )


def test_history_hook(strong_attacker, weak_defender):
    history = BattleHistory()
    report = simulate_battle(
        strong_attacker, weak_defender, _border_plan(), on_result=history.record
    )
    assert history.records() == list(report.results)


def test_invalid_unit_rejected(weak_defender):
    with pytest.raises(ValueError):
        simulate_battle(BattleUnit(soldiers=-1), weak_defender, BattlePlan())
    with pytest.raises(ValueError):
        simulate_battle(BattleUnit(), weak_defender.copy_with(cities=0), BattlePlan())


def test_report_to_dict(strong_attacker, weak_defender):
    data = simulate_battle(strong_attacker, weak_defender, _border_plan()).to_dict()
    assert len(data["results"]) == 3
    assert data["skipped"] == 1
    assert data["attacker"]["action_points"] == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
