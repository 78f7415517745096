"""
Arcade Mahjong Rules Engine
Japanese Mahjong hand evaluation for a two-player arcade table
"""

from .tiles import Tile, TileFamily, TileSet, WindType, DragonType, parse_tiles, build_deck
from .melds import Meld, MeldType
from .hand import Hand, InvalidHandSizeError
from .agari import is_winning_hand, enumerate_decompositions
from .shanten import ShantenCalculator, ShantenResult, shanten_number
from .waits import waiting_tiles, is_tenpai, is_furiten, FuritenState
from .dora import DoraSystem, dora_from_indicator
from .calls import can_pon, can_chi, can_kan, enumerate_sequence_claim_options
from .rules import RuleSet, ARCADE_RULES, STANDARD_RULES
from .scoring import ArcadeScorer, WinContext, WinResult, WinStatus, Yaku, YakuType, evaluate_win
from .wall import Wall

__version__ = "0.1.0"
__all__ = [
    "Tile",
    "TileFamily",
    "TileSet",
    "WindType",
    "DragonType",
    "parse_tiles",
    "build_deck",
    "Meld",
    "MeldType",
    "Hand",
    "InvalidHandSizeError",
    "is_winning_hand",
    "enumerate_decompositions",
    "ShantenCalculator",
    "ShantenResult",
    "shanten_number",
    "waiting_tiles",
    "is_tenpai",
    "is_furiten",
    "FuritenState",
    "DoraSystem",
    "dora_from_indicator",
    "can_pon",
    "can_chi",
    "can_kan",
    "enumerate_sequence_claim_options",
    "RuleSet",
    "ARCADE_RULES",
    "STANDARD_RULES",
    "ArcadeScorer",
    "WinContext",
    "WinResult",
    "WinStatus",
    "Yaku",
    "YakuType",
    "evaluate_win",
    "Wall",
]
