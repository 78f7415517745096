"""
Hand Decomposition & Win Detection

A complete hand is one of three archetypes:
- Standard: four sets (sequences / triplets / quads) + one pair
- Seven pairs: seven distinct pairs, no melds
- Thirteen orphans: every terminal and honor once, one of them twice, no melds

The detector only needs one valid decomposition; scoring needs all of
them, since different splits expose different patterns.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .tiles import Tile, TERMINAL_HONOR_INDICES, to_count_array
from .melds import Meld, MeldType
from .hand import validate_hand_size


@dataclass(frozen=True)
class TileGroup:
    """
    One set within a decomposition.

    Attributes:
        kind: CHI, PON or KAN
        tile_index: Lowest tile index of a chi, or the repeated tile
        is_concealed: Formed from concealed tiles (or a concealed kan)
        is_meld: Came from a declared meld rather than the concealed tiles
    """
    kind: MeldType
    tile_index: int
    is_concealed: bool = True
    is_meld: bool = False

    @property
    def indices(self) -> Tuple[int, ...]:
        if self.kind == MeldType.CHI:
            return (self.tile_index, self.tile_index + 1, self.tile_index + 2)
        return (self.tile_index,)

    @property
    def is_triplet_like(self) -> bool:
        return self.kind != MeldType.CHI

    @classmethod
    def from_meld(cls, meld: Meld) -> 'TileGroup':
        return cls(meld.meld_type, meld.base_tile.tile_index, meld.is_concealed, True)


@dataclass(frozen=True)
class Decomposition:
    """A standard-archetype split: a pair head and four groups."""
    pair: int
    groups: Tuple[TileGroup, ...]


def _first_nonzero(counts: List[int], start: int = 0) -> int:
    for i in range(start, 34):
        if counts[i] > 0:
            return i
    return -1


def _can_form_sets(counts: List[int]) -> bool:
    """True if counts splits entirely into triplets and sequences."""
    idx = _first_nonzero(counts)
    if idx == -1:
        return True

    # Try triplet
    if counts[idx] >= 3:
        counts[idx] -= 3
        ok = _can_form_sets(counts)
        counts[idx] += 3
        if ok:
            return True

    # Try sequence (numbered families only)
    if idx < 27 and idx % 9 <= 6 and counts[idx + 1] > 0 and counts[idx + 2] > 0:
        counts[idx] -= 1
        counts[idx + 1] -= 1
        counts[idx + 2] -= 1
        ok = _can_form_sets(counts)
        counts[idx] += 1
        counts[idx + 1] += 1
        counts[idx + 2] += 1
        if ok:
            return True

    return False


def _collect_sets(counts: List[int], current: List[TileGroup], out: List[Tuple[TileGroup, ...]]):
    """Enumerate every split of counts into triplets and sequences."""
    idx = _first_nonzero(counts)
    if idx == -1:
        out.append(tuple(current))
        return

    if counts[idx] >= 3:
        counts[idx] -= 3
        current.append(TileGroup(MeldType.PON, idx))
        _collect_sets(counts, current, out)
        current.pop()
        counts[idx] += 3

    if idx < 27 and idx % 9 <= 6 and counts[idx + 1] > 0 and counts[idx + 2] > 0:
        counts[idx] -= 1
        counts[idx + 1] -= 1
        counts[idx + 2] -= 1
        current.append(TileGroup(MeldType.CHI, idx))
        _collect_sets(counts, current, out)
        current.pop()
        counts[idx] += 1
        counts[idx + 1] += 1
        counts[idx + 2] += 1


def is_seven_pairs(counts: Sequence[int], num_melds: int = 0) -> bool:
    """Exactly seven distinct ranks, each held twice"""
    if num_melds:
        return False
    return sum(1 for c in counts if c == 2) == 7 and sum(counts) == 14


def is_thirteen_orphans(counts: Sequence[int], num_melds: int = 0) -> bool:
    """All 13 terminals/honors present, one duplicated, nothing else"""
    if num_melds or sum(counts) != 14:
        return False
    if any(counts[i] == 0 for i in TERMINAL_HONOR_INDICES):
        return False
    return all(counts[i] == 0 for i in range(34) if i not in TERMINAL_HONOR_INDICES)


def is_standard_complete(counts: Sequence[int]) -> bool:
    """Concealed counts split into one pair + sets (melds already removed)."""
    scratch = [int(c) for c in counts]
    if sum(scratch) % 3 != 2:
        return False
    for i in range(34):
        if scratch[i] >= 2:
            scratch[i] -= 2
            ok = _can_form_sets(scratch)
            scratch[i] += 2
            if ok:
                return True
    return False


def is_winning_hand(tiles: Sequence[Tile], melds: Sequence[Meld] = ()) -> bool:
    """
    Check whether tiles + melds form a complete hand.

    Raises:
        InvalidHandSizeError: if tiles + 3 x melds is not 13 or 14
    """
    slots = validate_hand_size(tiles, melds)
    if slots != 14:
        return False

    counts = [int(c) for c in to_count_array(tiles)]
    if any(c > 4 for c in counts):
        return False
    if is_seven_pairs(counts, len(melds)) or is_thirteen_orphans(counts, len(melds)):
        return True
    return is_standard_complete(counts)


def enumerate_decompositions(
    tiles: Sequence[Tile],
    melds: Sequence[Meld] = (),
) -> List[Decomposition]:
    """
    Every standard-archetype decomposition of a 14-slot hand.

    Declared melds are fixed groups; the concealed tiles are split in
    every possible way. Returns an empty list if none exist.
    """
    validate_hand_size(tiles, melds, allowed=(14,))
    fixed = [TileGroup.from_meld(m) for m in melds]
    scratch = [int(c) for c in to_count_array(tiles)]

    results: List[Decomposition] = []
    for pair in range(34):
        if scratch[pair] < 2:
            continue
        scratch[pair] -= 2
        splits: List[Tuple[TileGroup, ...]] = []
        _collect_sets(scratch, [], splits)
        scratch[pair] += 2
        for groups in splits:
            results.append(Decomposition(pair, tuple(fixed) + groups))
    return results


