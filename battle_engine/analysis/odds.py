"""
Pre-attack odds and analysis.

Two estimators turn strengths into a distribution over the four victory
tiers:

  victory_probabilities        : closed form, deterministic; the default.
                                 Places all mass on the tier the roll rounds
                                 to, and splits it linearly between the two
                                 neighbouring tiers when the roll's fractional
                                 part lies in (0.3, 0.7).

  sample_victory_probabilities : Monte-Carlo alternative.  Each trial draws
                                 three rolls per side uniformly from
                                 [0.4, 1.0] × strength and grades the attack
                                 by how many of the three the attacker wins.
                                 Pass a seeded numpy Generator for
                                 reproducible output.

The two models disagree by construction; neither feeds back into battle
resolution.  analyze_attack() bundles strengths, odds, the expected result of
committing everything, and a go/no-go recommendation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import numpy as np

from ..core.params import BattleParams, DEFAULT_PARAMS
from ..core.roll import roll
from ..core.state import (
    AirTarget,
    AttackType,
    BattleResult,
    BattleUnit,
    VictoryType,
    coerce_attack_type,
)
from ..core.strength import (
    air_defense_strength,
    ground_attack_strength,
    ground_defense_strength,
)
from ..systems.air import calculate_air_attack
from ..systems.ground import calculate_ground_attack
from ..systems.naval import calculate_naval_attack

METHODS = ("closed_form", "monte_carlo")

RECOMMENDATIONS = ("highly_recommended", "recommended", "risky", "not_recommended")

_SMOOTH_LOW = 0.3
_SMOOTH_HIGH = 0.7


def _empty_distribution() -> Dict[VictoryType, float]:
    return {level: 0.0 for level in VictoryType}


def victory_probabilities(
    defending: float,
    attacking: float,
    params: Optional[BattleParams] = None,
) -> Dict[VictoryType, float]:
    """Closed-form tier distribution for the given strengths.

    Returns:
        Dictionary mapping every VictoryType to a probability; values sum to 1.
    """
    value = roll(defending, attacking, params)
    probs = _empty_distribution()

    if value <= 0.5:
        probs[VictoryType.UTTERLY_FAILS] = 1.0
    elif value <= 1.5:
        probs[VictoryType.PYRRHIC_VICTORY] = 1.0
    elif value <= 2.5:
        probs[VictoryType.MODERATE_SUCCESS] = 1.0
    else:
        probs[VictoryType.IMMENSE_TRIUMPH] = 1.0

    fraction = value % 1
    if _SMOOTH_LOW < fraction < _SMOOTH_HIGH:
        current = int(math.floor(value))
        upper = int(math.ceil(value))
        if current != upper:
            share = (fraction - _SMOOTH_LOW) / (_SMOOTH_HIGH - _SMOOTH_LOW)
            probs = _empty_distribution()
            probs[VictoryType(current)] = 1.0 - share
            probs[VictoryType(upper)] = share

    return probs


def sample_victory_probabilities(
    defending: float,
    attacking: float,
    rng: Optional[np.random.Generator] = None,
    n_samples: int = 1000,
) -> Dict[VictoryType, float]:
    """Monte-Carlo tier distribution.

    Args:
        defending: Defender strength.
        attacking: Attacker strength.
        rng:       Random generator; a fresh unseeded one if None.
        n_samples: Number of simulated battles.

    Returns:
        Dictionary mapping every VictoryType to its observed frequency.
    """
    if n_samples <= 0:
        raise ValueError(f"n_samples must be > 0, got {n_samples}")
    if rng is None:
        rng = np.random.default_rng()

    att_rolls = attacking * rng.uniform(0.4, 1.0, size=(n_samples, 3))
    def_rolls = defending * rng.uniform(0.4, 1.0, size=(n_samples, 3))
    wins = np.sum(att_rolls > def_rolls, axis=1)
    counts = np.bincount(wins, minlength=4)

    return {level: float(counts[int(level)]) / n_samples for level in VictoryType}


def success_rate(probabilities: Dict[VictoryType, float]) -> float:
    """Probability of a moderate success or better."""
    return (
        probabilities.get(VictoryType.MODERATE_SUCCESS, 0.0)
        + probabilities.get(VictoryType.IMMENSE_TRIUMPH, 0.0)
    )


def recommend(probabilities: Dict[VictoryType, float], n_warnings: int) -> str:
    """Map odds and warning count to a recommendation label."""
    rate = success_rate(probabilities)
    if rate >= 0.8 and n_warnings == 0:
        return "highly_recommended"
    if rate >= 0.6 and n_warnings <= 1:
        return "recommended"
    if rate >= 0.4 or (rate >= 0.3 and n_warnings <= 1):
        return "risky"
    return "not_recommended"


@dataclass(frozen=True)
class AttackAnalysis:
    """Pre-attack report for committing an entire force of one type.

    Attributes:
        attack_type:       Attack being considered.
        attacker_strength: Strength fed to the roll for the attacker.
        defender_strength: Strength fed to the roll for the defender.
        ratio:             attacker / defender (999 if the defender has none).
        probabilities:     Tier distribution from the chosen estimator.
        expected:          Deterministic result of the attack.
        action_cost:       Action points the attack would consume.
        advantages:        Attacker-side notes.
        warnings:          Problems the attacker should fix first.
        recommendation:    One of RECOMMENDATIONS.
    """

    attack_type: AttackType
    attacker_strength: float
    defender_strength: float
    ratio: float
    probabilities: Dict[VictoryType, float]
    expected: BattleResult
    action_cost: int
    advantages: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    recommendation: str = "not_recommended"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attack_type": self.attack_type.value,
            "attacker_strength": self.attacker_strength,
            "defender_strength": self.defender_strength,
            "ratio": self.ratio,
            "probabilities": {level.name: p for level, p in self.probabilities.items()},
            "expected": self.expected.to_dict(),
            "action_cost": self.action_cost,
            "advantages": list(self.advantages),
            "warnings": list(self.warnings),
            "recommendation": self.recommendation,
        }


def analyze_attack(
    attacker: BattleUnit,
    defender: BattleUnit,
    attack_type: Union[AttackType, str],
    params: Optional[BattleParams] = None,
    rng: Optional[np.random.Generator] = None,
    method: str = "closed_form",
    air_target: Union[AirTarget, str] = AirTarget.AIR,
) -> AttackAnalysis:
    """Analyse an all-in attack of the given type before committing to it."""
    p = params if params is not None else DEFAULT_PARAMS
    attack_type = coerce_attack_type(attack_type)
    if method not in METHODS:
        raise ValueError(f"method must be one of {METHODS}, got {method!r}")

    use_munitions = attacker.munitions > 0
    if attack_type == AttackType.GROUND:
        att_str = ground_attack_strength(attacker.soldiers, attacker.tanks, use_munitions, p)
        def_str = ground_defense_strength(defender, p)
        expected = calculate_ground_attack(
            attacker, defender, attacker.soldiers, attacker.tanks, use_munitions, p
        )
    elif attack_type == AttackType.AIR:
        att_str = float(attacker.aircraft)
        def_str = float(air_defense_strength(defender, p))
        expected = calculate_air_attack(attacker, defender, attacker.aircraft, air_target, p)
    else:
        att_str = float(attacker.ships)
        def_str = float(defender.ships)
        expected = calculate_naval_attack(attacker, defender, attacker.ships, p)

    if def_str > 0:
        ratio = att_str / def_str
    else:
        ratio = 999.0 if att_str > 0 else 1.0

    if method == "monte_carlo":
        probabilities = sample_victory_probabilities(def_str, att_str, rng)
    else:
        probabilities = victory_probabilities(def_str, att_str, p)

    advantages: List[str] = []
    warnings: List[str] = []
    if attack_type == AttackType.GROUND:
        if attacker.munitions <= 0:
            warnings.append("No munitions - soldiers will fight unarmed")
        else:
            advantages.append("Armed soldiers with munitions")
        if attacker.gasoline <= 0:
            warnings.append("No gasoline - tanks cannot operate")
        else:
            advantages.append("Tanks operational with gasoline")

    cost = p.action_cost(attack_type)
    if attacker.action_points < cost:
        warnings.append(f"Insufficient action points for {attack_type.value} attack")

    if ratio > 2:
        advantages.append("Significant strength advantage")
    elif ratio > 1.5:
        advantages.append("Moderate strength advantage")
    elif ratio < 0.5:
        warnings.append("Enemy significantly outnumbers you")

    return AttackAnalysis(
        attack_type=attack_type,
        attacker_strength=att_str,
        defender_strength=def_str,
        ratio=ratio,
        probabilities=probabilities,
        expected=expected,
        action_cost=cost,
        advantages=advantages,
        warnings=warnings,
        recommendation=recommend(probabilities, len(warnings)),
    )
