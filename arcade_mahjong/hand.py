"""
Arcade Mahjong Hand

A hand is the concealed tiles plus the committed melds. Between turns it
holds 13 tile slots (a meld counts as 3 slots, a kan included); it holds
14 only between a draw or claim and the following discard.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple
import numpy as np

from .tiles import Tile, to_count_array
from .melds import Meld


VALID_SLOT_COUNTS = (13, 14)


class InvalidHandSizeError(ValueError):
    """Raised when concealed tiles + 3 x melds is not a legal slot count."""

    def __init__(self, slots: int, allowed: Tuple[int, ...] = VALID_SLOT_COUNTS):
        self.slots = slots
        self.allowed = allowed
        super().__init__(
            f"Invalid hand size: {slots} tile slots (expected one of {allowed})"
        )


def hand_slots(tiles: Sequence[Tile], melds: Sequence[Meld] = ()) -> int:
    """Tile-equivalent count: concealed tiles + 3 per meld."""
    return len(tiles) + 3 * len(melds)


def validate_hand_size(
    tiles: Sequence[Tile],
    melds: Sequence[Meld] = (),
    allowed: Tuple[int, ...] = VALID_SLOT_COUNTS,
) -> int:
    """Return the slot count, raising InvalidHandSizeError if not allowed."""
    slots = hand_slots(tiles, melds)
    if slots not in allowed:
        raise InvalidHandSizeError(slots, allowed)
    return slots


@dataclass
class Hand:
    """
    Concealed tiles plus committed melds.

    Attributes:
        tiles: Concealed tiles, the most recently drawn last
        melds: Declared melds
    """
    tiles: List[Tile] = field(default_factory=list)
    melds: List[Meld] = field(default_factory=list)

    def __post_init__(self):
        self.tiles = list(self.tiles)
        self.melds = list(self.melds)
        validate_hand_size(self.tiles, self.melds)

    @property
    def slots(self) -> int:
        return hand_slots(self.tiles, self.melds)

    @property
    def is_concealed(self) -> bool:
        """True when every meld is self-formed (concealed kans only)."""
        return all(m.is_concealed for m in self.melds)

    def all_tiles(self) -> List[Tile]:
        """Concealed tiles followed by every meld tile"""
        all_tiles = list(self.tiles)
        for meld in self.melds:
            all_tiles.extend(meld.tiles)
        return all_tiles

    def to_count_array(self) -> np.ndarray:
        """Counts of the concealed tiles only"""
        return to_count_array(self.tiles)

    def __repr__(self) -> str:
        return f"Hand(tiles={len(self.tiles)}, melds={len(self.melds)})"
