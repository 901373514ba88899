"""
BattleParams — Immutable constant pack for the battle resolution engine.

Every strength weight, per-city cap, loss multiplier and consumption factor
lives here.  Two formula variants exist for resource consumption and for
air/naval unit losses; both are selectable so older battle logs can be
replayed under the rules they were fought with.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .state import VictoryType

CONSUMPTION_SCALINGS = ("tiered", "flat")
LOSS_MODELS = ("current", "legacy")


@dataclass(frozen=True)
class BattleParams:
    """
    Complete parameter specification for battle resolution.

    Organized by subsystem:
      - Roll
      - Strength
      - Fortification
      - Resource consumption
      - Loot / infrastructure
      - Action points
    """

    # ── Roll ───────────────────────────────────────────────────────────── #
    min_roll_ratio: float = 0.4
    """Fraction of a side's strength it is guaranteed to roll."""
    max_tier: int = 3
    """Highest victory tier; fixed by the VictoryType ladder."""

    # ── Strength ───────────────────────────────────────────────────────── #
    armed_soldier_multiplier: float = 1.75
    """Soldier strength multiplier when munitions are available."""
    tank_strength: float = 40.0
    tanks_per_city: int = 250
    """Defending tanks above cities × this cap do not fight."""
    aircraft_per_city: int = 15
    min_defender_soldier_strength: float = 50.0
    """Floor on defending soldier strength; a nation is never defenceless on the ground."""
    assured_victory_ratio: float = 2.5

    # ── Fortification ─────────────────────────────────────────────────── #
    fortify_multiplier: float = 1.25
    """Applied to attacker losses when the defender is fortified."""

    # ── Resource consumption ──────────────────────────────────────────── #
    consumption_scaling: str = "tiered"
    """'tiered' scales consumption by victory tier, 'flat' always burns the full amount."""
    consumption_scale: Tuple[float, float, float, float] = (0.4, 0.7, 0.9, 1.0)
    """Consumption factor indexed by victory tier (UF, PV, MS, IT)."""
    loss_model: str = "current"
    """'current' or 'legacy' air/naval unit-loss formulas."""

    # ── Loot / infrastructure ─────────────────────────────────────────── #
    loot_treasury_fraction: float = 0.75
    """Loot can never exceed this share of the defender's money."""
    protected_money_per_city: float = 50000.0
    """Money per city that cannot be looted."""

    # ── Action points ─────────────────────────────────────────────────── #
    ground_action_cost: int = 3
    air_action_cost: int = 4
    naval_action_cost: int = 4

    def __post_init__(self) -> None:
        if self.max_tier != len(VictoryType) - 1:
            raise ValueError(
                f"max_tier must match the victory ladder "
                f"({len(VictoryType) - 1}), got {self.max_tier}"
            )
        if self.consumption_scaling not in CONSUMPTION_SCALINGS:
            raise ValueError(
                f"consumption_scaling must be one of {CONSUMPTION_SCALINGS}, "
                f"got {self.consumption_scaling!r}"
            )
        if self.loss_model not in LOSS_MODELS:
            raise ValueError(
                f"loss_model must be one of {LOSS_MODELS}, got {self.loss_model!r}"
            )
        if len(self.consumption_scale) != self.max_tier + 1:
            raise ValueError(
                f"consumption_scale needs {self.max_tier + 1} entries, "
                f"got {len(self.consumption_scale)}"
            )
        for value in self.consumption_scale:
            if not 0.0 <= value <= 1.0:
                raise ValueError(
                    f"consumption_scale entries must be in [0, 1], got {value}"
                )
        if not 0.0 < self.min_roll_ratio < 1.0:
            raise ValueError(
                f"min_roll_ratio must be in (0, 1), got {self.min_roll_ratio}"
            )
        for name in ("tank_strength", "tanks_per_city", "aircraft_per_city",
                     "fortify_multiplier", "assured_victory_ratio"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)}")

    def action_cost(self, attack_type: str) -> int:
        """Action points consumed by one attack of the given type."""
        return {
            "ground": self.ground_action_cost,
            "air": self.air_action_cost,
            "naval": self.naval_action_cost,
        }[getattr(attack_type, "value", attack_type)]

    def to_dict(self) -> Dict[str, Any]:
        return {f: getattr(self, f) for f in self.__dataclass_fields__}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BattleParams":
        kwargs = {k: v for k, v in d.items() if k in cls.__dataclass_fields__}
        if "consumption_scale" in kwargs:
            kwargs["consumption_scale"] = tuple(float(v) for v in kwargs["consumption_scale"])
        return cls(**kwargs)


DEFAULT_PARAMS = BattleParams()
