from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .buildings import get_building, max_pattern_size
from .grid import TownGrid
from .matcher import NO_MATCH, MatchResult, find_placements, match_building
from .rules import FactoryStock, ScoringRules, parse_factory_annotations
from .scoring import compute_score, score_breakdown
from .tiles import Building, Resource, parse_tile, tile_name


class Mode(str, Enum):
    NORMAL = "normal"
    PLACING_BUILDING = "placingBuilding"
    GAME_OVER = "gameOver"


@dataclass
class GameConfig:
    rows: int = 4
    columns: int = 4
    deck_size: int = 3
    random_seed: Optional[int] = None
    max_episode_steps: int = 200


@dataclass
class ResourceCard:
    id: str
    resource: Resource


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TownGame:
    """Single-player town session: deck, selection state and the live grid."""

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = TownGrid(self.config.rows, self.config.columns)
        self.deck: List[ResourceCard] = []
        self.selected_card_id: Optional[str] = None
        self.selected_indices: List[int] = []
        self.selected_building: Optional[Building] = None
        self.pattern_indices: Tuple[int, ...] = ()
        self.mode = Mode.NORMAL
        self.building_error: Optional[str] = None
        self.factory_annotations: Dict[int, FactoryStock] = {}
        self.score = 0
        self.game_id: Optional[str] = None
        self.start_time = _now()
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        resources = list(Resource)
        self.deck = [
            ResourceCard(f"card-{i}", resources[i % len(resources)])
            for i in range(self.config.deck_size)
        ]
        self.selected_card_id = None
        self.selected_indices = []
        self.selected_building = None
        self.pattern_indices = ()
        self.mode = Mode.NORMAL
        self.building_error = None
        self.factory_annotations = {}
        self.score = 0
        self.game_id = None
        self.start_time = _now()

    # Resource deck

    def _draw(self) -> Resource:
        return self.rng.choice(list(Resource))

    def _card(self, card_id: str) -> Optional[ResourceCard]:
        return next((c for c in self.deck if c.id == card_id), None)

    def select_card(self, card_id: Optional[str]) -> None:
        if card_id is not None and self._card(card_id) is None:
            return
        self.selected_card_id = None if self.selected_card_id == card_id else card_id
        self.selected_indices = []

    def refresh_card(self, card_id: str) -> bool:
        card = self._card(card_id)
        if card is None:
            return False
        card.resource = self._draw()
        self.selected_card_id = None
        return True

    def place_resource(self, index: int) -> bool:
        """Put the selected card's resource on an empty cell and redraw that card."""
        if self.mode == Mode.GAME_OVER or self.selected_card_id is None:
            return False
        if not 0 <= index < self.grid.size or not self.grid.is_empty(index):
            return False
        card = self._card(self.selected_card_id)
        if card is None:
            return False
        self.grid.set_tile(index, card.resource)
        card.resource = self._draw()
        self.selected_card_id = None
        return True

    # Building construction

    def toggle_selection(self, index: int) -> bool:
        if self.mode != Mode.NORMAL or not 0 <= index < self.grid.size:
            return False
        if not isinstance(self.grid.tile_at(index), Resource):
            return False
        if index in self.selected_indices:
            self.selected_indices.remove(index)
            return True
        if len(self.selected_indices) >= max_pattern_size():
            return False
        self.selected_indices.append(index)
        return True

    def select_building(self, name: Union[str, Building]) -> MatchResult:
        """Validate the current selection against a building and arm placement."""
        if self.mode != Mode.NORMAL:
            return NO_MATCH
        if not self.selected_indices:
            self.building_error = "Select squares first."
            return NO_MATCH
        template = get_building(name)
        result = match_building(self.grid, self.selected_indices, name, self.grid.cols)
        if template is None or not result.matched:
            label = name if isinstance(name, str) else tile_name(name)
            self.building_error = f"Invalid {label} pattern."
            return result
        self.selected_building = template.kind
        self.building_error = None
        self.mode = Mode.PLACING_BUILDING
        self.pattern_indices = result.cells_to_clear
        return result

    def cancel_building(self) -> None:
        self.selected_building = None
        self.pattern_indices = ()
        self.selected_indices = []
        if self.mode == Mode.PLACING_BUILDING:
            self.mode = Mode.NORMAL

    def assign_factory_resource(self, index: int, resource: Union[Resource, str]) -> None:
        tile = parse_tile(resource)
        if not isinstance(tile, Resource):
            raise ValueError(f"Factories store resources, not {resource!r}")
        self.factory_annotations[index] = FactoryStock(tile, 1)

    def place_building_at(self, index: int, factory_resource: Union[Resource, str, None] = None) -> bool:
        """Build the armed building on one matched cell; the other cells are cleared."""
        if self.mode != Mode.PLACING_BUILDING or self.selected_building is None:
            return False
        if index not in self.pattern_indices:
            return False
        if self.selected_building == Building.FACTORY and factory_resource is not None:
            self.assign_factory_resource(index, factory_resource)
        for i in self.pattern_indices:
            self.grid.set_tile(i, None)
        self.grid.set_tile(index, self.selected_building)
        self.selected_building = None
        self.pattern_indices = ()
        self.selected_indices = []
        self.mode = Mode.NORMAL
        self.compute_score()
        return True

    def available_placements(self, name: Union[str, Building]) -> List[Tuple[int, ...]]:
        return find_placements(self.grid, name, self.grid.cols)

    def can_build_anything(self) -> bool:
        return any(self.available_placements(kind) for kind in Building)

    # Scoring and lifecycle

    def compute_score(self) -> int:
        self.score = compute_score(self.grid, self.factory_annotations, self.grid.cols, self.rules)
        return self.score

    def score_breakdown(self) -> Dict[str, int]:
        return score_breakdown(self.grid, self.factory_annotations, self.grid.cols, self.rules)

    def is_full(self) -> bool:
        return self.grid.is_full()

    def end_game(self) -> int:
        final = self.compute_score()
        self.mode = Mode.GAME_OVER
        self.selected_indices = []
        self.selected_building = None
        self.pattern_indices = ()
        return final

    def get_state(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "board_state": [tile_name(t) for t in self.grid.cells()],
            "columns": self.grid.cols,
            "deck": [{"id": c.id, "resource": tile_name(c.resource)} for c in self.deck],
            "selected_card_id": self.selected_card_id,
            "selected_indices": list(self.selected_indices),
            "selected_building": tile_name(self.selected_building),
            "pattern_indices": list(self.pattern_indices),
            "mode": self.mode.value,
            "building_error": self.building_error,
            "factory_resources": {i: s.to_dict() for i, s in self.factory_annotations.items()},
            "score": self.score,
            "start_time": self.start_time,
        }

    def load_state(self, state: Dict[str, Any]) -> None:
        """Restore a saved board. The score is recomputed, not trusted."""
        board = state.get("board_state")
        if board is None:
            raise ValueError("Saved game has no board_state")
        columns = int(state.get("columns", self.grid.cols))
        self.grid = TownGrid.from_cells(board, columns)
        self.factory_annotations = parse_factory_annotations(state.get("factory_resources"))
        self.start_time = state.get("start_time") or _now()
        self.game_id = state.get("game_id")
        self.selected_card_id = None
        self.selected_indices = []
        self.selected_building = None
        self.pattern_indices = ()
        self.building_error = None
        self.mode = Mode.NORMAL
        self.compute_score()
