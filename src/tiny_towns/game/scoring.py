from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence, Union

from .buildings import CATALOG
from .grid import CellValue, TownGrid
from .rules import ScoringContext, ScoringRules, parse_factory_annotations


EMPTY_KEY = "empty"


def score_breakdown(
    grid: Union[TownGrid, Sequence[CellValue]],
    factory_annotations: Optional[Mapping[Any, Any]] = None,
    columns: int = 4,
    rules: Optional[ScoringRules] = None,
) -> Dict[str, int]:
    """Points per building kind plus the empty-cell penalty under ``"empty"``."""
    town = TownGrid.coerce(grid, columns)
    ctx = ScoringContext(
        grid=town,
        rules=rules or ScoringRules(),
        factory=parse_factory_annotations(factory_annotations),
    )
    breakdown: Dict[str, int] = {}
    penalty_waived = False
    for name, template in CATALOG.items():
        breakdown[name] = int(template.score_rule(ctx))
        if template.waives_empty_penalty and town.count(template.kind) > 0:
            penalty_waived = True
    breakdown[EMPTY_KEY] = 0 if penalty_waived else -town.empty_count() * ctx.rules.empty_penalty
    return breakdown


def compute_score(
    grid: Union[TownGrid, Sequence[CellValue]],
    factory_annotations: Optional[Mapping[Any, Any]] = None,
    columns: int = 4,
    rules: Optional[ScoringRules] = None,
) -> int:
    """Total score of a board, recomputed from scratch. May be negative."""
    return sum(score_breakdown(grid, factory_annotations, columns, rules).values())
