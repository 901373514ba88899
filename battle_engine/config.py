"""
config.py — Scenario loader for the battle engine.

Loads YAML scenario files describing an attacker, a defender, an optional
battle plan and optional parameter overrides, and converts them into the
objects the engine consumes.

Scenario layout:

    name: border-skirmish
    params:
      consumption_scaling: tiered
    attacker:
      soldiers: 100000
      tanks: 5000
      ...
    defender:
      ...
    plan:
      ground: [{soldiers: 100000, tanks: 5000, use_munitions: true}]
      air:    [{aircraft: 2000, target: soldiers}]
      naval:  [{ships: 1000}]

Public API:
    load_scenario(path)          -> Scenario
    build_battle_params(block)   -> BattleParams
    build_unit(block, role)      -> BattleUnit
    build_plan(block)            -> BattlePlan
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .core.params import BattleParams
from .core.state import BattleUnit, validate_unit
from .simulation.sequencer import BattlePlan


@dataclass(frozen=True)
class Scenario:
    """A fully parsed scenario file."""

    name: str
    params: BattleParams
    attacker: BattleUnit
    defender: BattleUnit
    plan: BattlePlan = field(default_factory=BattlePlan)
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


# ─────────────────────────────────────────────────────────────────────────── #
# Section builders                                                             #
# ─────────────────────────────────────────────────────────────────────────── #

def build_battle_params(block: Optional[Dict[str, Any]]) -> BattleParams:
    """Convert a flat `params:` block to BattleParams.

    Unknown keys are reported with warnings.warn and ignored; missing keys
    fall back to BattleParams defaults.
    """
    if not block:
        return BattleParams()
    if not isinstance(block, dict):
        raise ValueError("'params' must be a mapping.")

    valid_fields = set(BattleParams.__dataclass_fields__.keys())
    unknown = set(block.keys()) - valid_fields
    if unknown:
        warnings.warn(f"Unknown BattleParams fields ignored: {sorted(unknown)}")
    return BattleParams.from_dict(block)


def build_unit(block: Any, role: str) -> BattleUnit:
    """Convert an `attacker:` / `defender:` block to a validated BattleUnit."""
    if not isinstance(block, dict):
        raise ValueError(f"Scenario must include an '{role}' mapping.")

    known = {f.name for f in fields(BattleUnit)} | {
        "avgInfra", "isFortified", "isGroundControl",
        "isAirControl", "isBlockaded", "actionPoints",
    }
    unknown = set(block.keys()) - known
    if unknown:
        warnings.warn(f"Unknown {role} fields ignored: {sorted(unknown)}")

    unit = BattleUnit.from_dict(block)
    try:
        return validate_unit(unit)
    except ValueError as exc:
        raise ValueError(f"Invalid {role}: {exc}") from None


def build_plan(block: Optional[Dict[str, Any]]) -> BattlePlan:
    if not block:
        return BattlePlan()
    if not isinstance(block, dict):
        raise ValueError("'plan' must be a mapping.")
    try:
        return BattlePlan.from_dict(block)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid plan: {exc}") from None


# ─────────────────────────────────────────────────────────────────────────── #
# YAML loading                                                                 #
# ─────────────────────────────────────────────────────────────────────────── #

def load_scenario(path: str) -> Scenario:
    """Load and validate a scenario YAML file."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Scenario not found: {p.resolve()}")

    with open(p, "r") as f:
        raw = yaml.safe_load(f)

    return scenario_from_dict(raw, default_name=p.stem)


def scenario_from_dict(raw: Any, default_name: str = "scenario") -> Scenario:
    """Build a Scenario from an already-parsed mapping."""
    if not isinstance(raw, dict):
        raise ValueError("Scenario file must contain a mapping at the top level.")

    return Scenario(
        name=str(raw.get("name", default_name)),
        params=build_battle_params(raw.get("params")),
        attacker=build_unit(raw.get("attacker"), "attacker"),
        defender=build_unit(raw.get("defender"), "defender"),
        plan=build_plan(raw.get("plan")),
        raw=raw,
    )
