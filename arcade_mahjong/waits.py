"""
Waiting Tiles & Furiten

Waits are found by appending each of the 34 tile kinds to a 13-slot hand
and asking the win detector. Furiten is the intersection of a player's own
discards with the current waits.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Set

from .tiles import Tile, NUM_TILE_TYPES
from .melds import Meld
from .hand import validate_hand_size
from .agari import is_winning_hand
from .shanten import shanten_number


def waiting_tiles(tiles: Sequence[Tile], melds: Sequence[Meld] = ()) -> Set[Tile]:
    """
    Tile kinds that complete a 13-slot hand.

    Empty unless the hand is tenpai. Returned tiles carry id 0; compare
    them by kind.

    Raises:
        InvalidHandSizeError: if the hand is not exactly 13 slots
    """
    validate_hand_size(tiles, melds, allowed=(13,))
    trial = list(tiles)
    waits = set()
    for tile_index in range(NUM_TILE_TYPES):
        candidate = Tile.from_index(tile_index)
        trial.append(candidate)
        if is_winning_hand(trial, melds):
            waits.add(candidate)
        trial.pop()
    return waits


def is_tenpai(tiles: Sequence[Tile], melds: Sequence[Meld] = ()) -> bool:
    """True if the 13-slot hand is one tile from complete."""
    validate_hand_size(tiles, melds, allowed=(13,))
    return shanten_number(tiles, melds) == 0


def is_furiten(own_discards: Iterable[Tile], waits: Iterable[Tile]) -> bool:
    """True iff any of the player's own discards is one of their waits."""
    wait_set = set(waits)
    return any(tile in wait_set for tile in own_discards)


@dataclass
class FuritenState:
    """
    Furiten tracking for one player.

    Discard furiten is recomputed from the full discard history and the
    current waits on every update; nothing carries over between discards.
    """
    waiting: Set[Tile] = field(default_factory=set)
    discard_furiten: bool = False
    temporary: bool = False  # Passed on a winning discard this go-around

    @property
    def is_furiten(self) -> bool:
        return self.discard_furiten or self.temporary

    def update(
        self,
        tiles: Sequence[Tile],
        melds: Sequence[Meld],
        own_discards: List[Tile],
    ) -> bool:
        """Recompute after a discard leaves the hand at 13 slots."""
        self.waiting = waiting_tiles(tiles, melds)
        self.discard_furiten = is_furiten(own_discards, self.waiting)
        self.temporary = False
        return self.is_furiten

    def set_passed_ron(self) -> None:
        """Called when the player declines a winning discard"""
        self.temporary = True
