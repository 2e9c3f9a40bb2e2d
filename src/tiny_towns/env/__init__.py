"""Gymnasium environments for Tiny Towns."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Standard 4x4 town
register(
    id="TinyTowns-4x4-v0",
    entry_point="tiny_towns.env.town_env:TinyTownsEnv",
)

__all__ = ["TinyTowns-4x4-v0"]
