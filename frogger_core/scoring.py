"""
Scoring System
==============

Applies target and level scores based on game configuration.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from frogger_core.config_loader import GameConfig, get_config


def target_points(
    was_filled: Iterable[bool],
    hit: Iterable[bool],
    config: Optional[GameConfig] = None
) -> int:
    """
    Points earned for targets filled by this collision pass.

    Only a target that was empty and is overlapped now scores; re-entering
    a filled target is worth nothing.

    Args:
        was_filled: Fill state of each target before the pass.
        hit: Whether the frog overlaps each target now.
        config: Game configuration. Uses default if None.

    Returns:
        target_points for each newly filled target.
    """
    if config is None:
        config = get_config()

    newly_filled = sum(1 for filled, h in zip(was_filled, hit) if h and not filled)
    return newly_filled * config.scoring.target_points


def add_points(score: int, high_score: int, points: int) -> Tuple[int, int]:
    """
    Add points to the score and fold the result into the high score.

    Returns:
        (score, high_score) with high_score >= score.
    """
    score = score + points
    return score, max(high_score, score)


def level_bonus(config: Optional[GameConfig] = None) -> int:
    """Bonus awarded when all three targets are filled."""
    if config is None:
        config = get_config()
    return config.scoring.level_bonus
