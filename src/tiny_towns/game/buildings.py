from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

from .rules import (
    ScoringContext,
    score_cathedrals,
    score_chapels,
    score_cottages,
    score_factories,
    score_farms,
    score_taverns,
    score_theaters,
    score_wells,
)
from .shapes import Pattern, ShapeCell
from .tiles import Building, parse_building, tile_name


ScoreRule = Callable[[ScoringContext], int]


def _pattern(*cells: Tuple[str, int, int]) -> Pattern:
    return tuple(ShapeCell(color, row, col) for color, row, col in cells)


@dataclass(frozen=True)
class BuildingTemplate:
    kind: Building
    patterns: Tuple[Pattern, ...]
    score_rule: ScoreRule
    waives_empty_penalty: bool = False

    @property
    def name(self) -> str:
        return tile_name(self.kind)

    @property
    def size(self) -> int:
        return max(len(p) for p in self.patterns)


_TEMPLATES: Sequence[BuildingTemplate] = (
    BuildingTemplate(
        Building.COTTAGE,
        (_pattern(("yellow", 0, 1), ("red", 1, 0), ("blue", 1, 1)),),
        score_cottages,
    ),
    BuildingTemplate(
        Building.FARM,
        (_pattern(("yellow", 0, 0), ("yellow", 0, 1), ("brown", 1, 0), ("brown", 1, 1)),),
        score_farms,
    ),
    BuildingTemplate(
        Building.CHAPEL,
        (_pattern(("blue", 0, 2), ("gray", 1, 0), ("blue", 1, 1), ("gray", 1, 2)),),
        score_chapels,
    ),
    BuildingTemplate(
        Building.TAVERN,
        (_pattern(("red", 0, 0), ("red", 0, 1), ("blue", 0, 2)),),
        score_taverns,
    ),
    BuildingTemplate(
        Building.WELL,
        (_pattern(("brown", 0, 0), ("gray", 0, 1)),),
        score_wells,
    ),
    BuildingTemplate(
        Building.THEATER,
        (_pattern(("gray", 0, 1), ("brown", 1, 0), ("blue", 1, 1), ("brown", 1, 2)),),
        score_theaters,
    ),
    BuildingTemplate(
        Building.FACTORY,
        (_pattern(("brown", 0, 0), ("red", 1, 0), ("gray", 1, 1), ("gray", 1, 2), ("red", 1, 3)),),
        score_factories,
    ),
    BuildingTemplate(
        Building.CATHEDRAL,
        (_pattern(("yellow", 0, 1), ("gray", 1, 0), ("blue", 1, 1)),),
        score_cathedrals,
        waives_empty_penalty=True,
    ),
)

CATALOG: Dict[str, BuildingTemplate] = {t.name: t for t in _TEMPLATES}


def get_building(name: Union[str, Building]) -> Optional[BuildingTemplate]:
    """Look up a building template; unknown names give None."""
    kind = parse_building(name)
    if kind is None:
        return None
    return CATALOG.get(tile_name(kind))



def max_pattern_size() -> int:
    return max(t.size for t in CATALOG.values())
