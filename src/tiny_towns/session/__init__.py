"""Persistence and achievement hooks around a finished town session.

The user id is always passed in explicitly by the caller.
"""

from .records import GameRecord, GameStore, InMemoryGameStore
from .achievements import AchievementDefinition, evaluate_achievements, is_earned
from .finish import FinishResult, build_record, finish_game, load_last_game, save_game

__all__ = [
    "GameRecord",
    "GameStore",
    "InMemoryGameStore",
    "AchievementDefinition",
    "evaluate_achievements",
    "is_earned",
    "FinishResult",
    "build_record",
    "finish_game",
    "load_last_game",
    "save_game",
]
