from __future__ import annotations

from enum import IntEnum
from typing import Dict, Optional, Union


EMPTY = 0


class Resource(IntEnum):
    WHEAT = 1
    BRICK = 2
    GLASS = 3
    WOOD = 4
    STONE = 5


class Building(IntEnum):
    COTTAGE = 11
    FARM = 12
    CHAPEL = 13
    TAVERN = 14
    WELL = 15
    THEATER = 16
    FACTORY = 17
    CATHEDRAL = 18


Tile = Union[Resource, Building]


# Color tags used by building patterns
RESOURCE_TO_COLOR: Dict[Resource, str] = {
    Resource.WHEAT: "yellow",
    Resource.BRICK: "red",
    Resource.GLASS: "blue",
    Resource.WOOD: "brown",
    Resource.STONE: "gray",
}

COLOR_TO_RESOURCE: Dict[str, Resource] = {color: res for res, color in RESOURCE_TO_COLOR.items()}

_ALIASES = {
    "catedral": Building.CATHEDRAL,
}


def tile_name(tile: Optional[Tile]) -> Optional[str]:
    """Display name of a tile ("Wheat", "Cottage"), or None for an empty cell."""
    if tile is None:
        return None
    return tile.name.capitalize()


def tile_from_code(code: int) -> Optional[Tile]:
    code = int(code)
    if code == EMPTY:
        return None
    if code < Building.COTTAGE:
        return Resource(code)
    return Building(code)


def parse_tile(value: Union[Tile, str, int, None]) -> Optional[Tile]:
    """Coerce an enum member, display name or raw code into a tile.

    Empty cells may be given as None or the empty string.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (Resource, Building)):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        upper = key.upper()
        if upper in Resource.__members__:
            return Resource[upper]
        if upper in Building.__members__:
            return Building[upper]
        raise ValueError(f"Unknown tile name: {value!r}")
    try:
        return tile_from_code(int(value))
    except ValueError:
        raise ValueError(f"Unknown tile code: {value!r}") from None


def parse_building(value: Union[Building, str]) -> Optional[Building]:
    """Resolve a building name; returns None for anything that is not a building."""
    try:
        tile = parse_tile(value)
    except ValueError:
        return None
    return tile if isinstance(tile, Building) else None


def color_of(tile: Optional[Tile]) -> Optional[str]:
    if isinstance(tile, Resource):
        return RESOURCE_TO_COLOR[tile]
    return None
