"""
CPU Difficulty Profiles

A difficulty level (1-9) maps to one named weight record. Lower levels
add more noise to the discard scores and take more marginal calls; the
top level plays the efficiency-optimal tile every time.
"""

from dataclasses import dataclass
from typing import Union

MIN_LEVEL = 1
MAX_LEVEL = 9


@dataclass(frozen=True)
class DifficultyProfile:
    """
    Weights used by the heuristic agent.

    Attributes:
        level: Difficulty level (1-9)
        shanten_weight: Score lost per shanten step after a discard
        ukeire_weight: Score per remaining improving tile
        value_weight: Scale of the tile-shape value heuristic
        defense_weight: Scale of the safety scores against a ready opponent
        noise: Standard deviation of the Gaussian noise added to each score
        reach_rate: Chance of declaring reach when allowed
        marginal_claim_rate: Chance of a shanten-neutral all-simples call
        dora_weight: Bonus for keeping a dora tile
    """
    level: int = MAX_LEVEL
    shanten_weight: float = 1000.0
    ukeire_weight: float = 10.0
    value_weight: float = 1.0
    defense_weight: float = 1.0
    noise: float = 0.0
    reach_rate: float = 0.6
    marginal_claim_rate: float = 0.1
    dora_weight: float = 15.0


def profile_for_level(level: int) -> DifficultyProfile:
    """
    Build the profile for a difficulty level.

    Levels outside 1-9 are clamped.
    """
    level = max(MIN_LEVEL, min(MAX_LEVEL, int(level)))
    weakness = (MAX_LEVEL - level) / (MAX_LEVEL - MIN_LEVEL)  # 1.0 at level 1, 0.0 at 9

    return DifficultyProfile(
        level=level,
        shanten_weight=1000.0,
        ukeire_weight=10.0,
        value_weight=1.0 + 0.5 * (1.0 - weakness),
        defense_weight=0.25 + 0.75 * (1.0 - weakness),
        noise=round(600.0 * weakness ** 2, 3),
        reach_rate=0.6,
        marginal_claim_rate=round(0.1 + 0.4 * weakness, 3),
        dora_weight=5.0 + 10.0 * (1.0 - weakness),
    )


def resolve_profile(difficulty: Union[int, DifficultyProfile]) -> DifficultyProfile:
    """Accept either a level or a ready-made profile."""
    if isinstance(difficulty, DifficultyProfile):
        return difficulty
    return profile_for_level(difficulty)
