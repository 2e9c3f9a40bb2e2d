from __future__ import annotations

import itertools
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    """A finished or saved session as handed to the persistence layer."""

    user_id: str
    board_state: List[Optional[str]]
    score: int
    start_time: str
    end_time: str
    columns: int = 4
    factory_resources: Dict[int, Dict[str, Any]] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    game_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["factory_resources"] = {str(k): v for k, v in self.factory_resources.items()}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameRecord":
        try:
            return cls(
                user_id=str(data["user_id"]),
                board_state=list(data["board_state"]),
                score=int(data["score"]),
                start_time=str(data["start_time"]),
                end_time=str(data["end_time"]),
                columns=int(data.get("columns", 4)),
                factory_resources={int(k): dict(v) for k, v in (data.get("factory_resources") or {}).items()},
                metadata=dict(data.get("metadata") or {}),
                game_id=data.get("game_id"),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed game record: {exc}") from exc

    def to_state(self) -> Dict[str, Any]:
        """Shape accepted by ``TownGame.load_state``."""
        return {
            "game_id": self.game_id,
            "board_state": list(self.board_state),
            "columns": self.columns,
            "factory_resources": dict(self.factory_resources),
            "start_time": self.start_time,
        }


class GameStore(Protocol):
    def save_game(self, record: GameRecord) -> str: ...

    def unlock_achievement(self, user_id: str, achievement_id: str, via_game: str) -> None: ...

    def list_games(self, user_id: str) -> List[GameRecord]: ...

    def user_achievements(self, user_id: str) -> List[str]: ...


class InMemoryGameStore:
    """Process-local store; one unlock per (user, achievement)."""

    def __init__(self) -> None:
        self._games: Dict[str, GameRecord] = {}
        self._order: List[str] = []
        self._unlocks: Dict[str, Dict[str, str]] = {}
        self._ids = itertools.count(1)

    def save_game(self, record: GameRecord) -> str:
        game_id = record.game_id or f"game-{next(self._ids)}"
        stored = GameRecord.from_dict(record.to_dict())
        stored.game_id = game_id
        if game_id not in self._games:
            self._order.append(game_id)
        self._games[game_id] = stored
        logger.debug("Saved game %s for user %s (score %d)", game_id, record.user_id, record.score)
        return game_id

    def unlock_achievement(self, user_id: str, achievement_id: str, via_game: str) -> None:
        if not achievement_id or not via_game:
            raise ValueError("achievement_id and via_game are required")
        unlocked = self._unlocks.setdefault(user_id, {})
        unlocked.setdefault(achievement_id, via_game)

    def list_games(self, user_id: str) -> List[GameRecord]:
        return [
            self._games[gid]
            for gid in reversed(self._order)
            if self._games[gid].user_id == user_id
        ]

    def user_achievements(self, user_id: str) -> List[str]:
        return list(self._unlocks.get(user_id, {}))
