"""
Shanten Calculator

Calculates the shanten number (distance to tenpai) for a hand.
Also provides ukeire (acceptance count) for tile efficiency.

Shanten values:
- -1: Complete hand (already won)
-  0: Tenpai (one tile away from winning)
-  1: Iishanten (one away from tenpai)
-  2+: Further from tenpai
"""

from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass
import numpy as np

from .tiles import Tile, TERMINAL_HONOR_INDICES, to_count_array
from .melds import Meld
from .hand import InvalidHandSizeError, hand_slots


@dataclass
class ShantenResult:
    """Result of shanten calculation."""
    shanten: int  # -1 = complete, 0 = tenpai, 1+ = tiles away
    waiting_tiles: List[int]  # Tile indices that lower the shanten
    ukeire: int  # Total number of those tiles still unseen


class _StandardSearch:
    """
    Scratch state for one standard-form search.

    Holds a private copy of the counts and a leftover table; both are
    mutated and restored while backtracking and never leave the search.
    """

    def __init__(self, counts: Sequence[int], num_melds: int):
        self.counts = [int(c) for c in counts]
        self.leftover = [0] * 34
        self.num_melds = num_melds
        self.best = 8

    def run(self) -> int:
        self._search(0, self.num_melds, False)
        return self.best

    def _search(self, start: int, sets: int, has_pair: bool) -> None:
        if self.best == -1:
            return

        counts = self.counts
        idx = -1
        for i in range(start, 34):
            if counts[i] > 0:
                idx = i
                break

        if idx == -1:
            cap = max(0, 4 - sets)
            partials = self._max_partials(0, cap)
            value = 8 - 2 * sets - partials - (1 if has_pair else 0)
            if value < self.best:
                self.best = value
            return

        count = counts[idx]

        # Pair head
        if not has_pair and count >= 2:
            counts[idx] -= 2
            self._search(idx, sets, True)
            counts[idx] += 2

        # Triplet
        if count >= 3:
            counts[idx] -= 3
            self._search(idx, sets + 1, has_pair)
            counts[idx] += 3

        # Sequence (numbered families, start rank <= 7)
        if idx < 27 and idx % 9 <= 6 and counts[idx + 1] > 0 and counts[idx + 2] > 0:
            counts[idx] -= 1
            counts[idx + 1] -= 1
            counts[idx + 2] -= 1
            self._search(idx, sets + 1, has_pair)
            counts[idx] += 1
            counts[idx + 1] += 1
            counts[idx + 2] += 1

        # Leave the rank as unresolved material
        counts[idx] = 0
        self.leftover[idx] += count
        self._search(idx + 1, sets, has_pair)
        self.leftover[idx] -= count
        counts[idx] = count

    def _max_partials(self, start: int, cap: int) -> int:
        """Most partial sets (pairs, adjacent or one-gap shapes) in the leftovers."""
        if cap == 0:
            return 0

        leftover = self.leftover
        idx = -1
        for i in range(start, 34):
            if leftover[i] > 0:
                idx = i
                break
        if idx == -1:
            return 0

        best = 0
        if leftover[idx] >= 2:
            leftover[idx] -= 2
            best = max(best, 1 + self._max_partials(idx, cap - 1))
            leftover[idx] += 2
        if best < cap and idx < 27:
            for step in (1, 2):
                if idx % 9 + step <= 8 and leftover[idx + step] > 0:
                    leftover[idx] -= 1
                    leftover[idx + step] -= 1
                    best = max(best, 1 + self._max_partials(idx, cap - 1))
                    leftover[idx] += 1
                    leftover[idx + step] += 1
        if best < cap:
            leftover[idx] -= 1
            best = max(best, self._max_partials(idx, cap))
            leftover[idx] += 1
        return best


class ShantenCalculator:
    """
    Shanten calculator for Riichi Mahjong.

    Calculates shanten for:
    - Standard form (4 melds + 1 pair)
    - Chiitoitsu (7 pairs)
    - Kokushi musou (13 orphans)

    The calculator keeps no state between calls; every search works on
    its own copy of the counts.
    """

    TERMINALS = [0, 8, 9, 17, 18, 26]  # 1m, 9m, 1p, 9p, 1s, 9s
    HONORS = [27, 28, 29, 30, 31, 32, 33]  # E, S, W, N, White, Green, Red
    KOKUSHI_TILES = list(TERMINAL_HONOR_INDICES)

    def shanten(
        self,
        hand_counts: Sequence[int],
        num_melds: int = 0,
        check_chiitoitsu: bool = True,
        check_kokushi: bool = True,
    ) -> int:
        """
        Shanten number only.

        Args:
            hand_counts: 34-element array of concealed tile counts
            num_melds: Number of declared melds
            check_chiitoitsu: Whether to check for 7 pairs
            check_kokushi: Whether to check for 13 orphans
        """
        best = self._calculate_standard(hand_counts, num_melds)

        # Chiitoitsu and kokushi are closed-hand only
        if check_chiitoitsu and num_melds == 0:
            best = min(best, self._calculate_chiitoitsu(hand_counts))
        if check_kokushi and num_melds == 0:
            best = min(best, self._calculate_kokushi(hand_counts))

        # Tenpai only on a fifth copy of a tile is really iishanten
        if best == 0 and sum(int(c) for c in hand_counts) % 3 == 1:
            if not self._has_live_wait(hand_counts, num_melds):
                best = 1
        return best

    def _has_live_wait(self, hand_counts: Sequence[int], num_melds: int) -> bool:
        """True if some tile the hand holds fewer than four of completes it."""
        counts = [int(c) for c in hand_counts]
        for tile_idx in self._candidate_draws(counts, num_melds):
            if counts[tile_idx] >= 4:
                continue
            counts[tile_idx] += 1
            complete = self.shanten(counts, num_melds) == -1
            counts[tile_idx] -= 1
            if complete:
                return True
        return False

    def calculate(
        self,
        hand_counts: Sequence[int],
        num_melds: int = 0,
        visible_counts: Optional[Sequence[int]] = None,
    ) -> ShantenResult:
        """
        Calculate shanten and ukeire for a hand.

        Args:
            hand_counts: 34-element array of concealed tile counts
            num_melds: Number of declared melds
            visible_counts: Tiles seen elsewhere (discards, melds, dora
                indicator); they reduce the remaining supply

        Returns:
            ShantenResult with shanten value and improving tiles
        """
        best = self.shanten(hand_counts, num_melds)
        waiting_tiles, ukeire = self._calculate_ukeire(
            hand_counts, num_melds, best, visible_counts
        )
        return ShantenResult(shanten=best, waiting_tiles=waiting_tiles, ukeire=ukeire)

    def _calculate_standard(self, counts: Sequence[int], num_melds: int) -> int:
        """
        Standard form shanten (4 sets + 1 pair).

        shanten = 8 - 2*sets - partial_sets - (1 if pair head)
        """
        return _StandardSearch(counts, num_melds).run()

    def _calculate_chiitoitsu(self, counts: Sequence[int]) -> int:
        """
        Shanten for chiitoitsu (7 pairs).

        Shanten = 6 - pairs, plus one for each kind missing below seven
        distinct kinds (four of a kind is not two pairs).
        """
        pairs = 0
        distinct = 0
        for count in counts:
            if count >= 2:
                pairs += 1
            if count >= 1:
                distinct += 1

        shanten = 6 - pairs
        if distinct < 7:
            shanten += 7 - distinct
        return shanten

    def _calculate_kokushi(self, counts: Sequence[int]) -> int:
        """
        Shanten for kokushi musou (13 orphans).

        Shanten = 13 - unique terminals/honors - (1 if any of them paired)
        """
        unique_count = 0
        has_pair = False
        for idx in self.KOKUSHI_TILES:
            if counts[idx] >= 1:
                unique_count += 1
            if counts[idx] >= 2:
                has_pair = True
        return 13 - unique_count - (1 if has_pair else 0)

    def _candidate_draws(self, counts: List[int], num_melds: int) -> List[int]:
        """Tile indices that can possibly change the shanten when drawn."""
        if num_melds == 0 and sum(1 for c in counts if c > 0) < 7:
            return list(range(34))

        candidates = set()
        for idx, count in enumerate(counts):
            if count == 0:
                continue
            candidates.add(idx)
            if idx < 27:
                pos = idx % 9
                for delta in (-2, -1, 1, 2):
                    if 0 <= pos + delta <= 8:
                        candidates.add(idx + delta)
        if num_melds == 0:
            candidates.update(self.KOKUSHI_TILES)
        return sorted(candidates)

    def _calculate_ukeire(
        self,
        hand_counts: Sequence[int],
        num_melds: int,
        current_shanten: int,
        visible_counts: Optional[Sequence[int]] = None,
    ) -> Tuple[List[int], int]:
        """
        Which tiles would improve the hand (ukeire).

        Returns list of tile indices and total count of unseen copies.
        """
        counts = [int(c) for c in hand_counts]
        waiting_tiles = []
        total_ukeire = 0

        for tile_idx in self._candidate_draws(counts, num_melds):
            if counts[tile_idx] >= 4:
                continue

            counts[tile_idx] += 1
            new_shanten = self.shanten(counts, num_melds)
            counts[tile_idx] -= 1

            if new_shanten < current_shanten:
                waiting_tiles.append(tile_idx)
                seen = counts[tile_idx]
                if visible_counts is not None:
                    seen += int(visible_counts[tile_idx])
                total_ukeire += max(0, 4 - seen)

        return waiting_tiles, total_ukeire

    def get_best_discard(
        self,
        counts: Sequence[int],
        num_melds: int = 0,
    ) -> Tuple[int, int, int]:
        """
        Find the discard with the lowest shanten, then the most ukeire.

        Returns: (best_tile_idx, resulting_shanten, resulting_ukeire)
        """
        scratch = [int(c) for c in counts]
        best_tile = -1
        best_ukeire = -1
        best_shanten = 99

        for tile_idx in range(34):
            if scratch[tile_idx] == 0:
                continue

            scratch[tile_idx] -= 1
            result = self.calculate(scratch, num_melds)
            scratch[tile_idx] += 1

            if (result.shanten < best_shanten or
                    (result.shanten == best_shanten and result.ukeire > best_ukeire)):
                best_tile = tile_idx
                best_shanten = result.shanten
                best_ukeire = result.ukeire

        return best_tile, best_shanten, best_ukeire


def calculate_shanten(hand_counts: np.ndarray, num_melds: int = 0) -> int:
    """
    Convenience function to calculate shanten.

    Args:
        hand_counts: 34-element array of tile counts
        num_melds: Number of called melds

    Returns:
        Shanten value (-1 to 8)
    """
    return ShantenCalculator().shanten(hand_counts, num_melds)


def get_ukeire(hand_counts: np.ndarray, num_melds: int = 0) -> Tuple[List[int], int]:
    """
    Get tiles that would improve the hand.

    Returns:
        Tuple of (waiting_tile_indices, total_ukeire_count)
    """
    result = ShantenCalculator().calculate(hand_counts, num_melds)
    return result.waiting_tiles, result.ukeire


def shanten_number(tiles: Sequence[Tile], melds: Sequence[Meld] = ()) -> int:
    """
    Shanten of a concealed hand plus declared melds.

    Seven pairs and thirteen orphans are only considered with no melds.

    Raises:
        InvalidHandSizeError: if the hand holds more than 14 tile slots
    """
    slots = hand_slots(tiles, melds)
    if slots > 14 or len(melds) > 4:
        raise InvalidHandSizeError(slots, (13, 14))
    return calculate_shanten(to_count_array(tiles), len(melds))
