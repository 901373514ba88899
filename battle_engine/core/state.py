"""
State containers for the battle resolution engine.

  - BattleUnit   : one side's force snapshot (units, stockpiles, flags)
  - UnitLosses   : per-unit-type losses plus resource consumption
  - BattleResult : outcome of a single attack action

All containers are immutable.  The engine never mutates a BattleUnit; callers
apply losses by building a new one (see simulation.sequencer).
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum, IntEnum, unique
from typing import Any, Dict, Union


# --------------------------------------------------------------------------- #
# Enumerations                                                                 #
# --------------------------------------------------------------------------- #


@unique
class VictoryType(IntEnum):
    """Ordered outcome grades (higher integer = better for the attacker)."""

    UTTERLY_FAILS = 0
    PYRRHIC_VICTORY = 1
    MODERATE_SUCCESS = 2
    IMMENSE_TRIUMPH = 3

    @property
    def label(self) -> str:
        """Human-readable name shown to players."""
        return _VICTORY_LABELS[self]


_VICTORY_LABELS = {
    VictoryType.UTTERLY_FAILS: "Utter Failure",
    VictoryType.PYRRHIC_VICTORY: "Pyrrhic Victory",
    VictoryType.MODERATE_SUCCESS: "Moderate Success",
    VictoryType.IMMENSE_TRIUMPH: "Immense Triumph",
}


@unique
class AttackType(str, Enum):
    GROUND = "ground"
    AIR = "air"
    NAVAL = "naval"


@unique
class AirTarget(str, Enum):
    """What an air strike is aimed at besides the defending air force."""

    AIR = "air"
    SOLDIERS = "soldiers"
    TANKS = "tanks"
    SHIPS = "ships"
    INFRA = "infra"


def coerce_attack_type(value: Union[AttackType, str]) -> AttackType:
    """Accept an AttackType or its string value."""
    try:
        return AttackType(value)
    except ValueError:
        valid = [t.value for t in AttackType]
        raise ValueError(f"Unknown attack type {value!r}. Valid: {valid}") from None


def coerce_air_target(value: Union[AirTarget, str]) -> AirTarget:
    """Accept an AirTarget or its string value."""
    try:
        return AirTarget(value)
    except ValueError:
        valid = [t.value for t in AirTarget]
        raise ValueError(f"Unknown air target {value!r}. Valid: {valid}") from None


# --------------------------------------------------------------------------- #
# Force snapshot                                                               #
# --------------------------------------------------------------------------- #

# Keys used by the web client / stored battle records.
_CAMEL_KEYS = {
    "avgInfra": "avg_infra",
    "isFortified": "is_fortified",
    "isGroundControl": "is_ground_control",
    "isAirControl": "is_air_control",
    "isBlockaded": "is_blockaded",
    "actionPoints": "action_points",
}


@dataclass(frozen=True)
class BattleUnit:
    """Immutable snapshot of one side of a war.

    Attributes:
        soldiers, tanks, aircraft, ships: Unit counts (≥ 0).
        munitions, gasoline:  Resource stockpiles (≥ 0, fractional allowed).
        money:                Treasury (≥ 0).
        avg_infra:            Average infrastructure per city (≥ 0).
        cities:               City count (≥ 1); divisor for per-city caps.
        is_fortified:         Defender-only bonus raising attacker losses.
        is_ground_control:    Control flags set by the outcome of earlier
        is_air_control:       battles; the caller copies them back between
        is_blockaded:         calls.
        action_points:        Budget spent by the caller on attack attempts.
        resistance:           Health-like value tracked by the caller.

    No validation happens at construction; use validate_unit() before
    handing caller-supplied data to the engine.
    """

    soldiers: int = 0
    tanks: int = 0
    aircraft: int = 0
    ships: int = 0
    munitions: float = 0.0
    gasoline: float = 0.0
    money: float = 0.0
    avg_infra: float = 0.0
    cities: int = 1
    is_fortified: bool = False
    is_ground_control: bool = False
    is_air_control: bool = False
    is_blockaded: bool = False
    action_points: int = 12
    resistance: float = 100.0

    def copy_with(self, **kwargs: Any) -> "BattleUnit":
        """Return a new BattleUnit with selected fields overridden."""
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to plain dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BattleUnit":
        """Deserialise from a dictionary with snake_case or camelCase keys.

        Unknown keys are ignored.
        """
        names = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            key = _CAMEL_KEYS.get(key, key)
            if key in names:
                kwargs[key] = value
        return cls(**kwargs)


_NON_NEGATIVE = (
    "soldiers", "tanks", "aircraft", "ships",
    "munitions", "gasoline", "money", "avg_infra",
)


def validate_unit(unit: BattleUnit) -> BattleUnit:
    """Reject a snapshot the formulas are undefined for.

    Raises:
        ValueError: if any count or stockpile is negative or cities < 1.

    Returns:
        The same unit, for chaining.
    """
    for name in _NON_NEGATIVE:
        value = getattr(unit, name)
        if value < 0:
            raise ValueError(f"BattleUnit.{name} must be >= 0, got {value}")
    if unit.cities < 1:
        raise ValueError(f"BattleUnit.cities must be >= 1, got {unit.cities}")
    return unit


# --------------------------------------------------------------------------- #
# Outcome                                                                      #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class UnitLosses:
    """Losses suffered by one side in one attack.

    Unit counts are whole numbers; munitions and gasoline are the amounts
    consumed and may be fractional.  Every field is always present.
    """

    soldiers: int = 0
    tanks: int = 0
    aircraft: int = 0
    ships: int = 0
    munitions: float = 0.0
    gasoline: float = 0.0

    @classmethod
    def none(cls) -> "UnitLosses":
        return cls()

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class BattleResult:
    """Outcome of one attack action.

    Attributes:
        attack_type:      Which calculator produced the result.
        victory_type:     Discrete grade derived from roll.
        roll:             Continuous roll value in [0, 3].
        attacker_losses:  Units lost and resources consumed by the attacker.
        defender_losses:  Units lost and resources consumed by the defender.
        loot:             Money moved from defender to attacker (ground only).
        infra_destroyed:  Infrastructure removed from the defender.
    """

    attack_type: AttackType
    victory_type: VictoryType
    roll: float
    attacker_losses: UnitLosses
    defender_losses: UnitLosses
    loot: float = 0.0
    infra_destroyed: float = 0.0

    @property
    def is_success(self) -> bool:
        return self.victory_type > VictoryType.UTTERLY_FAILS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attack_type": self.attack_type.value,
            "victory_type": int(self.victory_type),
            "victory_label": self.victory_type.label,
            "roll": self.roll,
            "attacker_losses": self.attacker_losses.to_dict(),
            "defender_losses": self.defender_losses.to_dict(),
            "loot": self.loot,
            "infra_destroyed": self.infra_destroyed,
        }


def no_op_result(attack_type: AttackType) -> BattleResult:
    """Result of an attack that commits no units: nothing happens."""
    return BattleResult(
        attack_type=attack_type,
        victory_type=VictoryType.UTTERLY_FAILS,
        roll=0.0,
        attacker_losses=UnitLosses.none(),
        defender_losses=UnitLosses.none(),
    )
