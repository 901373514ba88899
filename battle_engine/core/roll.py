"""
Battle roll and victory-tier grading.

The roll maps (defending, attacking) strengths to a continuous value in
[0, 3].  Each side is assumed to fight at somewhere between 40% and 100% of
its strength; the roll is the attacker's share of the overlap between the
two ranges, scaled to the four-tier outcome ladder.

    min_def  = 0.4 · D                min_att = 0.4 · A
    def_mean = (D + min_def) / 2
    roll     = 3 · (A − def_mean) / ((A − def_mean) + (def_mean − min_att))

with early exits when one side cannot possibly win.  The function is pure and
deterministic; randomness in outcome odds belongs to analysis.odds.
"""

from __future__ import annotations

import math
from typing import Optional

from .params import BattleParams, DEFAULT_PARAMS
from .state import VictoryType


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (0.5 → 1, 2.5 → 3)."""
    return int(math.floor(value + 0.5))


def roll(
    defending: float,
    attacking: float,
    params: Optional[BattleParams] = None,
) -> float:
    """Continuous battle roll in [0, 3].

    Args:
        defending: Defender strength.
        attacking: Attacker strength.
        params:    Supplies the minimum roll ratio (default 0.4).

    Returns:
        0.0 when the attacker cannot win (including zero attack strength),
        3.0 when the defender cannot resist, otherwise the interpolated
        share of the overlapping roll ranges.
    """
    p = params if params is not None else DEFAULT_PARAMS
    top = float(p.max_tier)

    min_def = defending * p.min_roll_ratio
    min_att = attacking * p.min_roll_ratio

    if attacking <= min_def or attacking == 0:
        return 0.0
    if defending < min_att:
        return top

    def_mean = (defending + min_def) * 0.5
    greater = attacking - def_mean
    less_than = def_mean - min_att

    # Both guards keep greater + less_than away from zero.
    if greater <= 0:
        return 0.0
    if less_than <= 0:
        return top

    return top * greater / (greater + less_than)


def tier_from_roll(value: float, params: Optional[BattleParams] = None) -> VictoryType:
    """Grade a continuous roll: round half-up, clamp to [0, max_tier]."""
    p = params if params is not None else DEFAULT_PARAMS
    return VictoryType(max(0, min(p.max_tier, round_half_up(value))))


def get_victory_type(
    defending: float,
    attacking: float,
    params: Optional[BattleParams] = None,
) -> VictoryType:
    """Discrete victory tier for the given strengths."""
    return tier_from_roll(roll(defending, attacking, params), params)


def consumption_scale(
    victory: VictoryType,
    params: Optional[BattleParams] = None,
) -> float:
    """Fraction of the base resource consumption actually burned.

    Under 'tiered' scaling a failed attack burns 40% of its munitions and
    gasoline, rising to 100% on an immense triumph.  'flat' always burns 100%.
    """
    p = params if params is not None else DEFAULT_PARAMS
    if p.consumption_scaling == "flat":
        return 1.0
    return float(p.consumption_scale[int(victory)])
