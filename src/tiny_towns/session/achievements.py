from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from tiny_towns.game.tiles import Tile, parse_building

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    criteria: Dict[str, Any] = field(default_factory=dict)
    name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AchievementDefinition":
        return cls(
            id=str(data.get("id", "")),
            criteria=dict(data.get("criteria") or {}),
            name=str(data.get("name", "")),
        )


def is_earned(definition: AchievementDefinition, cells: Sequence[Optional[Tile]], score: int) -> bool:
    """Whether a finished board meets one achievement's criteria.

    Raises ValueError when the criteria are missing fields for their type.
    """
    criteria = definition.criteria
    kind = criteria.get("type")
    try:
        if kind == "noEmptyTiles":
            return all(cell is not None for cell in cells)
        if kind == "minScore":
            return score >= int(criteria["requiredValue"])
        if kind == "range":
            return int(criteria["min"]) <= score <= int(criteria["max"])
        if kind == "countBuilding":
            building = parse_building(criteria["building"])
            if building is None:
                raise ValueError(f"Unknown building {criteria['building']!r}")
            return sum(1 for c in cells if c == building) >= int(criteria["requiredCount"])
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed criteria for {definition.id!r}: {exc}") from exc
    raise ValueError(f"Unsupported criteria type {kind!r}")


def evaluate_achievements(
    definitions: Iterable[AchievementDefinition],
    cells: Sequence[Optional[Tile]],
    score: int,
    already_unlocked: Iterable[str] = (),
) -> List[str]:
    """Ids of achievements newly earned by a board, in definition order."""
    unlocked = set(already_unlocked)
    earned: List[str] = []
    for definition in definitions:
        if not definition.id or not isinstance(definition.criteria.get("type"), str):
            logger.warning("Skipping malformed achievement: %r", definition)
            continue
        if definition.id in unlocked:
            continue
        try:
            ok = is_earned(definition, cells, score)
        except ValueError as exc:
            logger.warning("Skipping achievement %s: %s", definition.id, exc)
            continue
        if ok:
            earned.append(definition.id)
    return earned
