"""
Claim Availability

Which calls (chi / pon / kan) a hand can make on a discard, the sequence
options a caller has to choose between, and the quads available on the
player's own turn.
"""

from typing import List, Sequence, Tuple

from .tiles import Tile
from .melds import Meld, MeldType


def _count(tiles: Sequence[Tile], tile: Tile) -> int:
    return sum(1 for t in tiles if t == tile)


def can_pon(tiles: Sequence[Tile], tile: Tile) -> bool:
    """Two matching tiles in hand"""
    return _count(tiles, tile) >= 2


def can_kan(tiles: Sequence[Tile], tile: Tile) -> bool:
    """Three matching tiles in hand (open quad on a discard)"""
    return _count(tiles, tile) >= 3


def enumerate_sequence_claim_options(
    tiles: Sequence[Tile],
    discarded: Tile,
) -> List[Tuple[Tile, Tile]]:
    """
    Pairs of hand tiles that complete a chi with the discarded tile.

    Options are returned lowest sequence first; each pair holds the actual
    hand tiles (with their ids) so the caller can remove them.
    """
    if discarded.is_honor:
        return []

    def find(rank: int, exclude: int = -1):
        for i, t in enumerate(tiles):
            if i != exclude and t.family == discarded.family and t.rank == rank:
                return i
        return -1

    options = []
    rank = discarded.rank
    for low, high in ((rank - 2, rank - 1), (rank - 1, rank + 1), (rank + 1, rank + 2)):
        if low < 1 or high > 9:
            continue
        i = find(low)
        j = find(high, exclude=i)
        if i != -1 and j != -1:
            options.append((tiles[i], tiles[j]))
    return options


def can_chi(tiles: Sequence[Tile], discarded: Tile) -> bool:
    return bool(enumerate_sequence_claim_options(tiles, discarded))


def find_self_quad_options(
    tiles: Sequence[Tile],
    melds: Sequence[Meld] = (),
) -> List[Tuple[Tile, bool]]:
    """
    Quads the player may declare on their own turn.

    Returns (tile, is_added) pairs: a concealed quad from four tiles in
    hand, or an added quad extending an existing pon with a held tile.
    """
    options: List[Tuple[Tile, bool]] = []
    seen = set()
    for tile in tiles:
        if tile in seen:
            continue
        seen.add(tile)
        if _count(tiles, tile) == 4:
            options.append((tile, False))
    for meld in melds:
        if meld.meld_type == MeldType.PON and meld.tiles[0] in seen:
            options.append((meld.tiles[0], True))
    return options
