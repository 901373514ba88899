"""Shared force snapshots for the battle engine tests."""

import pytest

from battle_engine.core.state import BattleUnit


@pytest.fixture
def strong_attacker() -> BattleUnit:
    return BattleUnit(
        soldiers=100000,
        tanks=5000,
        aircraft=2000,
        ships=1000,
        munitions=10000,
        gasoline=10000,
        money=10_000_000,
        avg_infra=2000,
        cities=10,
        action_points=12,
    )


@pytest.fixture
def weak_defender() -> BattleUnit:
    return BattleUnit(
        soldiers=50000,
        tanks=1000,
        aircraft=500,
        ships=200,
        munitions=5000,
        gasoline=5000,
        money=5_000_000,
        avg_infra=1000,
        cities=5,
    )
