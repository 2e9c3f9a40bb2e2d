from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Set

from .grid import TownGrid
from .tiles import Building, Resource, Tile, parse_tile


@dataclass
class ScoringRules:
    cottage_points: int = 3
    farm_capacity: int = 4
    tavern_table: tuple[int, ...] = (0, 2, 5, 9, 14, 20)
    cathedral_points: int = 2
    # Stored factory resources are currently zero-weighted
    factory_weight: int = 0
    empty_penalty: int = 1

    def tavern_score(self, taverns: int) -> int:
        if taverns <= 0:
            return self.tavern_table[0]
        return self.tavern_table[min(taverns, len(self.tavern_table) - 1)]


@dataclass(frozen=True)
class FactoryStock:
    """Resource a factory was stocked with when it was built."""

    resource: Resource
    count: int = 1

    @classmethod
    def from_value(cls, value: Any) -> "FactoryStock":
        if isinstance(value, FactoryStock):
            return value
        if isinstance(value, Mapping):
            resource = parse_tile(value.get("resource"))
            if not isinstance(resource, Resource):
                raise ValueError(f"Factory annotation needs a resource, got {value!r}")
            return cls(resource, int(value.get("count", 1)))
        raise ValueError(f"Unsupported factory annotation: {value!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {"resource": self.resource.name.capitalize(), "count": self.count}


def parse_factory_annotations(annotations: Optional[Mapping[Any, Any]]) -> Dict[int, FactoryStock]:
    if not annotations:
        return {}
    return {int(idx): FactoryStock.from_value(value) for idx, value in annotations.items()}


@dataclass
class ScoringContext:
    grid: TownGrid
    rules: ScoringRules = field(default_factory=ScoringRules)
    factory: Mapping[int, FactoryStock] = field(default_factory=dict)

    @property
    def fed_cottages(self) -> int:
        cottages = self.grid.count(Building.COTTAGE)
        farms = self.grid.count(Building.FARM)
        return min(cottages, farms * self.rules.farm_capacity)


# Per-building rules. Each returns the building's total contribution.


def score_cottages(ctx: ScoringContext) -> int:
    return ctx.fed_cottages * ctx.rules.cottage_points


def score_farms(ctx: ScoringContext) -> int:
    # Farms only feed cottages
    return 0


def score_chapels(ctx: ScoringContext) -> int:
    return ctx.grid.count(Building.CHAPEL) * ctx.fed_cottages


def score_taverns(ctx: ScoringContext) -> int:
    return ctx.rules.tavern_score(ctx.grid.count(Building.TAVERN))


def score_wells(ctx: ScoringContext) -> int:
    total = 0
    for well in ctx.grid.indices_of(Building.WELL):
        total += sum(1 for n in ctx.grid.neighbors(well) if ctx.grid.tile_at(n) == Building.COTTAGE)
    return total


def score_theaters(ctx: ScoringContext) -> int:
    total = 0
    for theater in ctx.grid.indices_of(Building.THEATER):
        row, col = ctx.grid.coord(theater)
        kinds: Set[Tile] = set()
        for tile in ctx.grid.row_tiles(row) + ctx.grid.col_tiles(col):
            if tile is not None and tile != Building.THEATER:
                kinds.add(tile)
        total += len(kinds)
    return total


def score_factories(ctx: ScoringContext) -> int:
    total = 0
    for idx, stock in ctx.factory.items():
        if 0 <= idx < ctx.grid.size and ctx.grid.tile_at(idx) == Building.FACTORY:
            total += stock.count * ctx.rules.factory_weight
    return total


def score_cathedrals(ctx: ScoringContext) -> int:
    return ctx.grid.count(Building.CATHEDRAL) * ctx.rules.cathedral_points
