"""
CPU opponents for Arcade Mahjong
"""

from .difficulty import DifficultyProfile, profile_for_level, resolve_profile
from .heuristic_agent import HeuristicAgent, choose_discard, should_claim

__all__ = [
    "DifficultyProfile",
    "profile_for_level",
    "resolve_profile",
    "HeuristicAgent",
    "choose_discard",
    "should_claim",
]
