from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tiny_towns.game import Building, GameConfig, Resource, TownGame, render_text

logger = logging.getLogger(__name__)

BUILDINGS = tuple(Building)


def decode_action(game: TownGame, action: int) -> Tuple[str, int, int]:
    """Split a flat action into ("place", card_idx, cell) or ("build", building_idx, cell)."""
    cells = game.grid.size
    place_actions = game.config.deck_size * cells
    if action < place_actions:
        return "place", action // cells, action % cells
    action -= place_actions
    return "build", action // cells, action % cells


def _building_footprint(game: TownGame, building: Building, cell: int) -> Optional[Tuple[int, ...]]:
    for placement in game.available_placements(building):
        if cell in placement:
            return placement
    return None


def _compute_action_mask(game: TownGame) -> np.ndarray:
    cells = game.grid.size
    k = game.config.deck_size
    mask = np.zeros((k + len(BUILDINGS), cells), dtype=np.bool_)
    empty = np.flatnonzero(game.grid.grid.reshape(-1) == 0)
    mask[:k, empty] = True
    for b, building in enumerate(BUILDINGS):
        for placement in game.available_placements(building):
            mask[k + b, list(placement)] = True
    return mask.reshape(-1)


class TinyTownsEnv(gym.Env):
    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 invalid_action_penalty: float = -1.0,
                 step_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = TownGame(config)
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)

        rows, cols = self.game.grid.rows, self.game.grid.cols
        k = self.game.config.deck_size
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=int(max(Building)), shape=(rows, cols), dtype=np.int8),
                "deck": spaces.Box(low=int(min(Resource)), high=int(max(Resource)), shape=(k,), dtype=np.int8),
            }
        )
        self.action_space = spaces.Discrete((k + len(BUILDINGS)) * rows * cols)
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "grid": self.game.grid.clone_state(),
            "deck": np.array([int(c.resource) for c in self.game.deck], dtype=np.int8),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "score_breakdown": self.game.score_breakdown(),
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self.game.compute_score()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def _apply(self, action: int) -> bool:
        kind, which, cell = decode_action(self.game, action)
        if kind == "place":
            self.game.select_card(self.game.deck[which].id)
            if not self.game.place_resource(cell):
                self.game.select_card(None)
                return False
            return True
        building = BUILDINGS[which]
        footprint = _building_footprint(self.game, building, cell)
        if footprint is None:
            return False
        self.game.selected_indices = list(footprint)
        if not self.game.select_building(building).matched:
            self.game.cancel_building()
            return False
        stock = self.game.grid.tile_at(cell) if building == Building.FACTORY else None
        return self.game.place_building_at(cell, factory_resource=stock)

    def step(self, action: int):
        action = int(action)
        before = self.game.compute_score()
        success = 0 <= action < self.action_space.n and self._apply(action)
        if not success:
            logger.debug("Rejected action %d", action)
        after = self.game.compute_score()

        reward = float(after - before) if success else self.invalid_action_penalty
        reward += self.step_penalty
        self._steps += 1

        terminated = self.game.is_full() and not self.game.can_build_anything()
        if terminated:
            self.game.end_game()
        truncated = not terminated and self._steps >= self.game.config.max_episode_steps

        info = self._get_info()
        info["valid"] = bool(success)
        info["engine_score_delta"] = after - before
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[str]:
        if self.render_mode == "ansi":
            return render_text(self.game.grid)
        return None

    def close(self) -> None:
        pass
