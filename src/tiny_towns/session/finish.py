from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from tiny_towns.game.core import TownGame
from tiny_towns.game.tiles import tile_name

from .achievements import AchievementDefinition, evaluate_achievements
from .records import GameRecord, GameStore

logger = logging.getLogger(__name__)


@dataclass
class FinishResult:
    game_id: str
    score: int
    unlocked: List[str] = field(default_factory=list)


def build_record(game: TownGame, user_id: str, final: bool = True) -> GameRecord:
    return GameRecord(
        user_id=user_id,
        board_state=[tile_name(t) for t in game.grid.cells()],
        score=game.compute_score(),
        start_time=game.start_time,
        end_time=datetime.now(timezone.utc).isoformat(),
        columns=game.grid.cols,
        factory_resources={i: s.to_dict() for i, s in game.factory_annotations.items()},
        metadata={"final": True} if final else {},
        game_id=game.game_id,
    )


def save_game(game: TownGame, store: GameStore, user_id: Optional[str]) -> Optional[str]:
    """Save the current board without ending the session."""
    if user_id is None:
        logger.warning("Save skipped: user not signed in")
        return None
    game_id = store.save_game(build_record(game, user_id, final=False))
    game.game_id = game_id
    return game_id


def finish_game(
    game: TownGame,
    store: GameStore,
    user_id: Optional[str],
    definitions: Iterable[AchievementDefinition] = (),
    final: bool = True,
) -> Optional[FinishResult]:
    """Score, persist and award achievements for a session.

    With ``final`` the session moves to GAME_OVER. Store errors propagate.
    """
    score = game.end_game() if final else game.compute_score()
    if user_id is None:
        logger.warning("Save skipped: user not signed in")
        return None
    record = build_record(game, user_id, final=final)
    game_id = store.save_game(record)
    game.game_id = game_id
    earned = evaluate_achievements(
        definitions,
        game.grid.cells(),
        score,
        already_unlocked=store.user_achievements(user_id),
    )
    for achievement_id in earned:
        store.unlock_achievement(user_id, achievement_id, game_id)
        logger.info("User %s unlocked %s via %s", user_id, achievement_id, game_id)
    return FinishResult(game_id=game_id, score=score, unlocked=earned)


def load_last_game(game: TownGame, store: GameStore, user_id: str) -> bool:
    games = store.list_games(user_id)
    if not games:
        return False
    game.load_state(games[0].to_state())
    return True
