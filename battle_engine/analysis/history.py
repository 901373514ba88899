"""
Battle history recorder.

Provides BattleHistory, a lightweight observer that records BattleResult
objects in the order they were resolved.  Supports serialisation to
list-of-dicts for downstream persistence.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..core.state import AttackType, BattleResult


class BattleHistory:
    """Records BattleResult objects produced during a war.

    Intended for use as the result hook of the sequencer:

        history = BattleHistory()
        simulate_battle(attacker, defender, plan, on_result=history.record)

    Attributes:
        max_records: Maximum number of results to retain (None = unlimited).
    """

    def __init__(self, max_records: Optional[int] = None) -> None:
        """Initialise an empty history.

        Args:
            max_records: If set, older records are discarded when the buffer
                         exceeds this limit (FIFO).
        """
        if max_records is not None and max_records <= 0:
            raise ValueError(
                f"max_records must be > 0 or None, got {max_records}"
            )
        self.max_records: Optional[int] = max_records
        self._records: List[BattleResult] = []

    def record(self, result: BattleResult) -> None:
        """Append a result to the history."""
        self._records.append(result)
        if self.max_records is not None and len(self._records) > self.max_records:
            self._records.pop(0)

    def records(self) -> List[BattleResult]:
        """Return all recorded results (copy), oldest first."""
        return list(self._records)

    def by_type(self, attack_type: AttackType) -> List[BattleResult]:
        """Return recorded results of one attack type."""
        return [r for r in self._records if r.attack_type == attack_type]

    def clear(self) -> None:
        self._records = []

    def __len__(self) -> int:
        return len(self._records)

    def to_dicts(self) -> List[Dict[str, Any]]:
        """Serialise all recorded results to plain dictionaries."""
        return [r.to_dict() for r in self._records]

    def roll_series(self) -> List[float]:
        return [r.roll for r in self._records]
