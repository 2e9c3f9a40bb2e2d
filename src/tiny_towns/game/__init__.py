"""Game module for Tiny Towns.

Exports the pattern/scoring engine and the session-state manager:
- Resource, Building: tile kinds and the resource colour tags
- TownGrid: flat-indexed board storage
- normalize, rotate90, flip_horizontal, enumerate_orientations, patterns_equal
- CATALOG, get_building: building templates
- match_building, find_placements: footprint recognition
- compute_score, score_breakdown, ScoringRules: end-of-game scoring
- TownGame: live session (deck, selection, construction)
"""

from .tiles import (
    COLOR_TO_RESOURCE,
    RESOURCE_TO_COLOR,
    Building,
    Resource,
    parse_tile,
    tile_name,
)
from .grid import TownGrid, render_text
from .shapes import (
    ShapeCell,
    enumerate_orientations,
    flip_horizontal,
    normalize,
    patterns_equal,
    rotate90,
)
from .buildings import CATALOG, BuildingTemplate, get_building
from .matcher import MatchResult, find_placements, match_building
from .rules import FactoryStock, ScoringRules
from .scoring import compute_score, score_breakdown
from .core import GameConfig, Mode, ResourceCard, TownGame

__all__ = [
    "COLOR_TO_RESOURCE",
    "RESOURCE_TO_COLOR",
    "Building",
    "Resource",
    "parse_tile",
    "tile_name",
    "TownGrid",
    "render_text",
    "ShapeCell",
    "enumerate_orientations",
    "flip_horizontal",
    "normalize",
    "patterns_equal",
    "rotate90",
    "CATALOG",
    "BuildingTemplate",
    "get_building",
    "MatchResult",
    "find_placements",
    "match_building",
    "FactoryStock",
    "ScoringRules",
    "compute_score",
    "score_breakdown",
    "GameConfig",
    "Mode",
    "ResourceCard",
    "TownGame",
]
