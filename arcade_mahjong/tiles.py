"""
Arcade Mahjong Tiles

Defines the 136 tiles used by the engine:
- 9 Man (characters) x4 = 36
- 9 Pin (dots) x4 = 36
- 9 Sou (bamboo) x4 = 36
- 7 Honors x4 = 28 (ranks 1-4 are the winds, 5-7 the dragons)
Total: 136 tiles
"""

from enum import IntEnum
from dataclasses import dataclass, field
from typing import Iterable, List, Optional
import numpy as np


class TileFamily(IntEnum):
    """Tile families"""
    MAN = 0     # 萬子 - Numbers 1-9
    PIN = 1     # 筒子 - Numbers 1-9
    SOU = 2     # 索子 - Numbers 1-9
    HONOR = 3   # 字牌 - Winds 1-4, Dragons 5-7


class WindType(IntEnum):
    """Wind ranks within the honor family"""
    EAST = 1   # 東
    SOUTH = 2  # 南
    WEST = 3   # 西
    NORTH = 4  # 北


class DragonType(IntEnum):
    """Dragon ranks within the honor family"""
    WHITE = 5  # 白
    GREEN = 6  # 發
    RED = 7    # 中


NUM_TILE_TYPES = 34
NUM_TILES = 136
COPIES_PER_TYPE = 4

TERMINAL_HONOR_INDICES = (0, 8, 9, 17, 18, 26, 27, 28, 29, 30, 31, 32, 33)
GREEN_INDICES = (19, 20, 21, 23, 25, 32)  # 2s 3s 4s 6s 8s + green dragon

_FAMILY_CHARS = {"m": TileFamily.MAN, "p": TileFamily.PIN, "s": TileFamily.SOU, "z": TileFamily.HONOR}
_HONOR_NAMES = {1: "E", 2: "S", 3: "W", 4: "N", 5: "Wh", 6: "G", 7: "R"}


@dataclass(frozen=True)
class Tile:
    """
    A single physical tile.

    Attributes:
        family: Man, Pin, Sou or Honor
        rank: 1-9 for numbered families, 1-7 for honors
        id: Provenance of this physical piece (0-135); ignored by equality
    """
    family: TileFamily
    rank: int
    id: int = field(default=0, compare=False)

    def __post_init__(self):
        if self.family == TileFamily.HONOR:
            if not 1 <= self.rank <= 7:
                raise ValueError(f"Honor tiles must have rank 1-7, got {self.rank}")
        elif not 1 <= self.rank <= 9:
            raise ValueError(f"Numbered tiles must have rank 1-9, got {self.rank}")

    @property
    def is_honor(self) -> bool:
        return self.family == TileFamily.HONOR

    @property
    def is_wind(self) -> bool:
        return self.is_honor and self.rank <= 4

    @property
    def is_dragon(self) -> bool:
        return self.is_honor and self.rank >= 5

    @property
    def is_terminal(self) -> bool:
        """1 or 9 of a numbered family"""
        return not self.is_honor and self.rank in (1, 9)

    @property
    def is_terminal_or_honor(self) -> bool:
        return self.is_terminal or self.is_honor

    @property
    def is_simple(self) -> bool:
        """2-8 of a numbered family"""
        return not self.is_honor and 2 <= self.rank <= 8

    @property
    def is_green(self) -> bool:
        return self.tile_index in GREEN_INDICES

    @property
    def tile_index(self) -> int:
        """
        Index of this tile type (0-33).

        0-8 man, 9-17 pin, 18-26 sou, 27-30 winds, 31-33 dragons.
        """
        return int(self.family) * 9 + self.rank - 1

    def __lt__(self, other) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.tile_index < other.tile_index

    def __repr__(self) -> str:
        return f"Tile({self.family.name}, {self.rank})"

    def __str__(self) -> str:
        if self.is_honor:
            return _HONOR_NAMES[self.rank]
        return f"{self.rank}{'mps'[self.family]}"

    @classmethod
    def from_index(cls, tile_index: int, instance_id: int = 0) -> 'Tile':
        """Create a tile from its type index (0-33)."""
        if not 0 <= tile_index < NUM_TILE_TYPES:
            raise ValueError(f"Tile index must be 0-33, got {tile_index}")
        family, offset = divmod(tile_index, 9)
        return cls(TileFamily(family), offset + 1, instance_id)


def parse_tiles(notation: str) -> List[Tile]:
    """
    Parse compact notation into tiles.

    Ranks are written before their family letter: "123m456p789s11z".
    Honors use "z" with ranks 1-7 (ESWN, white, green, red).
    """
    tiles: List[Tile] = []
    pending: List[int] = []
    for ch in notation.replace(" ", ""):
        if ch.isdigit():
            pending.append(int(ch))
        elif ch in _FAMILY_CHARS:
            if not pending:
                raise ValueError(f"No ranks before '{ch}' in {notation!r}")
            tiles.extend(Tile(_FAMILY_CHARS[ch], rank) for rank in pending)
            pending = []
        else:
            raise ValueError(f"Cannot parse tile notation: {notation!r}")
    if pending:
        raise ValueError(f"Trailing ranks without family in {notation!r}")
    return tiles


def tiles_to_string(tiles: Iterable[Tile]) -> str:
    """Inverse of parse_tiles, grouped by family in sorted order."""
    out = []
    for family, letter in zip(TileFamily, "mpsz"):
        ranks = sorted(t.rank for t in tiles if t.family == family)
        if ranks:
            out.append("".join(str(r) for r in ranks) + letter)
    return "".join(out)


def sort_hand(tiles: Iterable[Tile]) -> List[Tile]:
    """Sort man < pin < sou < honors, then by rank."""
    return sorted(tiles, key=lambda t: (t.tile_index, t.id))


def to_count_array(tiles: Iterable[Tile]) -> np.ndarray:
    """34-element array counting each tile type."""
    counts = np.zeros(NUM_TILE_TYPES, dtype=np.int8)
    for tile in tiles:
        counts[tile.tile_index] += 1
    return counts


class TileSet:
    """
    A collection of tiles with utility methods.
    Used to represent concealed hands and discard piles.
    """

    def __init__(self, tiles: Optional[Iterable[Tile]] = None):
        self.tiles: List[Tile] = list(tiles) if tiles else []

    def add(self, tile: Tile) -> None:
        self.tiles.append(tile)

    def remove(self, tile: Tile) -> bool:
        """
        Remove one rule-equivalent tile.
        Returns True if removed, False if not found.
        """
        for i, t in enumerate(self.tiles):
            if t == tile:
                self.tiles.pop(i)
                return True
        return False

    def count(self, tile: Tile) -> int:
        return sum(1 for t in self.tiles if t == tile)

    def contains(self, tile: Tile) -> bool:
        return tile in self.tiles

    def to_count_array(self) -> np.ndarray:
        return to_count_array(self.tiles)

    def sort(self) -> None:
        self.tiles = sort_hand(self.tiles)

    def copy(self) -> 'TileSet':
        return TileSet(self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self):
        return iter(self.tiles)

    def __getitem__(self, index):
        return self.tiles[index]

    def __repr__(self) -> str:
        return f"TileSet({len(self.tiles)} tiles)"

    def __str__(self) -> str:
        return " ".join(str(t) for t in sort_hand(self.tiles))


def build_deck() -> List[Tile]:
    """
    Create the full, unshuffled 136-tile deck.

    Each of the 34 tile types appears four times; ids run 0-135 in
    tile-index order so that id // 4 == tile_index.
    """
    return [
        Tile.from_index(tile_index, tile_index * COPIES_PER_TYPE + copy)
        for tile_index in range(NUM_TILE_TYPES)
        for copy in range(COPIES_PER_TYPE)
    ]


# Convenience constructors
def man(rank: int, instance_id: int = 0) -> Tile:
    return Tile(TileFamily.MAN, rank, instance_id)


def pin(rank: int, instance_id: int = 0) -> Tile:
    return Tile(TileFamily.PIN, rank, instance_id)


def sou(rank: int, instance_id: int = 0) -> Tile:
    return Tile(TileFamily.SOU, rank, instance_id)


def wind(wind_type: WindType, instance_id: int = 0) -> Tile:
    return Tile(TileFamily.HONOR, int(wind_type), instance_id)


def dragon(dragon_type: DragonType, instance_id: int = 0) -> Tile:
    return Tile(TileFamily.HONOR, int(dragon_type), instance_id)


EAST = wind(WindType.EAST)
SOUTH = wind(WindType.SOUTH)
WEST = wind(WindType.WEST)
NORTH = wind(WindType.NORTH)

WHITE_DRAGON = dragon(DragonType.WHITE)
GREEN_DRAGON = dragon(DragonType.GREEN)
RED_DRAGON = dragon(DragonType.RED)
