"""
Arcade Mahjong Melds

A meld is a committed group of tiles: a sequence (chi), a triplet (pon)
or a quad (kan), either self-formed (concealed) or claimed from a discard.
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import List, Optional
import numpy as np

from .tiles import Tile, to_count_array


class MeldType(IntEnum):
    """Meld shapes"""
    CHI = 0  # 順子 - Sequence of 3 consecutive tiles in one numbered family
    PON = 1  # 刻子 - 3 identical tiles
    KAN = 2  # 槓子 - 4 identical tiles


@dataclass
class Meld:
    """
    Represents a committed meld.

    Attributes:
        meld_type: Chi, Pon or Kan
        tiles: Tiles in the meld (3, or 4 for a kan)
        is_concealed: Self-formed (concealed kan) rather than claimed
        is_added: A kan built by adding a fourth tile to an existing pon;
            it keeps the pon's provenance
        called_tile: The tile claimed from a discard, if any
    """
    meld_type: MeldType
    tiles: List[Tile]
    is_concealed: bool = False
    is_added: bool = False
    called_tile: Optional[Tile] = None

    def __post_init__(self):
        """Validate meld shape"""
        if self.meld_type == MeldType.CHI:
            if len(self.tiles) != 3:
                raise ValueError("Chi must have exactly 3 tiles")
            if not self._is_valid_sequence(self.tiles):
                raise ValueError(f"Invalid chi sequence: {self.tiles}")
        elif self.meld_type == MeldType.PON:
            if len(self.tiles) != 3:
                raise ValueError("Pon must have exactly 3 tiles")
            if not all(t == self.tiles[0] for t in self.tiles):
                raise ValueError("Pon tiles must be identical")
        else:
            if len(self.tiles) != 4:
                raise ValueError("Kan must have exactly 4 tiles")
            if not all(t == self.tiles[0] for t in self.tiles):
                raise ValueError("Kan tiles must be identical")
        if self.is_added and self.meld_type != MeldType.KAN:
            raise ValueError("Only a kan can be an added quad")

    @staticmethod
    def _is_valid_sequence(tiles: List[Tile]) -> bool:
        if any(t.is_honor for t in tiles):
            return False
        if not all(t.family == tiles[0].family for t in tiles):
            return False
        ranks = sorted(t.rank for t in tiles)
        return ranks[1] == ranks[0] + 1 and ranks[2] == ranks[1] + 1

    @property
    def base_tile(self) -> Tile:
        """Lowest tile of a chi, or the repeated tile of a pon/kan"""
        if self.meld_type == MeldType.CHI:
            return min(self.tiles)
        return self.tiles[0]

    @property
    def is_triplet_like(self) -> bool:
        return self.meld_type in (MeldType.PON, MeldType.KAN)

    def to_count_array(self) -> np.ndarray:
        return to_count_array(self.tiles)

    def with_added_tile(self, tile: Tile) -> 'Meld':
        """Extend a pon into an added kan, keeping its provenance."""
        if self.meld_type != MeldType.PON or tile != self.tiles[0]:
            raise ValueError(f"Cannot add {tile} to {self}")
        return Meld(
            MeldType.KAN,
            list(self.tiles) + [tile],
            is_concealed=self.is_concealed,
            is_added=True,
            called_tile=self.called_tile,
        )

    def __repr__(self) -> str:
        return f"Meld({self.meld_type.name}, {self.tiles})"

    def __str__(self) -> str:
        tiles_str = " ".join(str(t) for t in sorted(self.tiles))
        concealed = "暗" if self.is_concealed else "明"
        return f"[{concealed}{self.meld_type.name}: {tiles_str}]"


def chi(tiles: List[Tile], called_tile: Optional[Tile] = None) -> Meld:
    return Meld(MeldType.CHI, sorted(tiles), called_tile=called_tile)


def pon(tile: Tile, is_concealed: bool = False) -> Meld:
    return Meld(MeldType.PON, [tile] * 3, is_concealed=is_concealed)


def kan(tile: Tile, is_concealed: bool = False) -> Meld:
    return Meld(MeldType.KAN, [tile] * 4, is_concealed=is_concealed)
