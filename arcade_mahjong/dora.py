"""
Dora System

Handles dora (bonus tiles):
- Regular dora (from the revealed indicator)
- Ura-dora (under-indicators, counted for reach wins when enabled)

The dora is the successor of its indicator, cycling within the
indicator's own group and never crossing families.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .tiles import Tile, TileFamily
from .melds import Meld


def dora_from_indicator(indicator: Tile) -> Tile:
    """
    Get the dora tile from an indicator.

    The dora is the next tile in sequence:
    - Numbers: 1->2->...->9->1
    - Winds: E->S->W->N->E
    - Dragons: White->Green->Red->White
    """
    if indicator.family != TileFamily.HONOR:
        return Tile(indicator.family, indicator.rank % 9 + 1)
    if indicator.rank <= 4:
        return Tile(TileFamily.HONOR, indicator.rank % 4 + 1)
    return Tile(TileFamily.HONOR, (indicator.rank - 5 + 1) % 3 + 5)


def count_dora(tiles: Iterable[Tile], indicators: Sequence[Tile]) -> int:
    """Number of dora among tiles; an indicator shown twice counts twice."""
    dora_tiles = [dora_from_indicator(ind) for ind in indicators]
    count = 0
    for tile in tiles:
        for dora in dora_tiles:
            if tile == dora:
                count += 1
    return count


@dataclass
class DoraSystem:
    """
    Revealed indicator tiles for a round.

    Attributes:
        dora_indicators: Face-up indicators (one at the start of a round)
        uradora_indicators: Hidden indicators, counted only for reach wins
    """
    dora_indicators: List[Tile] = field(default_factory=list)
    uradora_indicators: List[Tile] = field(default_factory=list)

    def get_all_dora_tiles(self) -> List[Tile]:
        return [dora_from_indicator(ind) for ind in self.dora_indicators]

    def count_dora_in_hand(self, tiles: Sequence[Tile], melds: Sequence[Meld] = ()) -> int:
        """Dora across concealed tiles and every meld tile."""
        all_tiles = list(tiles)
        for meld in melds:
            all_tiles.extend(meld.tiles)
        return count_dora(all_tiles, self.dora_indicators)

    def count_uradora_in_hand(self, tiles: Sequence[Tile], melds: Sequence[Meld] = ()) -> int:
        all_tiles = list(tiles)
        for meld in melds:
            all_tiles.extend(meld.tiles)
        return count_dora(all_tiles, self.uradora_indicators)

    def __repr__(self) -> str:
        dora_str = ", ".join(str(t) for t in self.get_all_dora_tiles())
        return f"DoraSystem(dora=[{dora_str}])"
