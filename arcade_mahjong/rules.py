"""
Arcade Mahjong Rule Sets

Defines the scoring variants the engine supports:
- Arcade (the default two-player arcade table)
- Standard (closer to common Japanese club rules)
"""

from dataclasses import dataclass


@dataclass
class RuleSet:
    """
    Rule configuration for scoring.

    The rules module reads these switches; nothing in it hard-codes a
    variant.
    """

    name: str = "Default"

    # Round wind; the seat wind comes from the win context
    round_wind: int = 1  # East

    # Kuitan (open all-simples)
    allow_open_tanyao: bool = True

    # Shousangen (small three dragons) scored as a limit hand
    small_three_dragons_yakuman: bool = True

    # Any terminal/honor pair scores pair fu (otherwise only value pairs)
    terminal_pair_fu: bool = True

    # Counted limit hands (13+ fan from ordinary yaku and dora)
    # pay one yakuman per full 13 fan instead of stopping at one
    kazoe_multiples: bool = True

    # Ura-dora count on reach wins when under-indicators are supplied
    uradora_on_reach_win: bool = True

    # Fixed point tiers (non-dealer)
    mangan_points: int = 8000      # 5 fan (tier D)
    haneman_points: int = 12000    # 6-7 fan (tier C)
    baiman_points: int = 16000     # 8-10 fan (tier B)
    sanbaiman_points: int = 24000  # 11-12 fan (tier A)
    yakuman_points: int = 32000    # per 13 fan

    # Dealer payout multiplier (rounded up to 100)
    dealer_multiplier: float = 1.5

    def __repr__(self) -> str:
        return f"RuleSet({self.name})"


# Arcade rules (default)
ARCADE_RULES = RuleSet(
    name="Arcade",
    round_wind=1,
    allow_open_tanyao=True,
    small_three_dragons_yakuman=True,
    terminal_pair_fu=True,
    kazoe_multiples=True,
    uradora_on_reach_win=True,
)


# Standard club rules
STANDARD_RULES = RuleSet(
    name="Standard",
    round_wind=1,
    allow_open_tanyao=True,
    small_three_dragons_yakuman=False,
    terminal_pair_fu=False,
    kazoe_multiples=False,
    uradora_on_reach_win=True,
)
