"""Analysis: pre-attack odds, result history and summary metrics."""
from .odds import (
    AttackAnalysis,
    analyze_attack,
    recommend,
    sample_victory_probabilities,
    success_rate,
    victory_probabilities,
)
from .history import BattleHistory
from .metrics import mean_roll, summary_statistics, total_losses, victory_distribution

__all__ = [
    "AttackAnalysis",
    "analyze_attack",
    "recommend",
    "sample_victory_probabilities",
    "success_rate",
    "victory_probabilities",
    "BattleHistory",
    "mean_roll",
    "summary_statistics",
    "total_losses",
    "victory_distribution",
]
