"""
Heuristic CPU Opponent for Arcade Mahjong

A rule-based opponent built only on the rules engine's outputs.

Features:
- Shanten-based tile efficiency
- Ukeire maximization for discards
- Shape value (keep middle tiles and value honor pairs)
- Defense mode when the opponent has declared reach
- Call decisions that protect concealed scoring
- Difficulty-scaled, seedable randomness
"""

import logging
import random
from typing import List, Optional, Sequence, Tuple, Union
import numpy as np

from arcade_mahjong.tiles import Tile, to_count_array
from arcade_mahjong.melds import Meld, MeldType
from arcade_mahjong.hand import validate_hand_size
from arcade_mahjong.shanten import ShantenCalculator
from arcade_mahjong.calls import can_pon, can_kan, enumerate_sequence_claim_options
from arcade_mahjong.dora import dora_from_indicator
from arcade_mahjong.waits import waiting_tiles
from arcade_mahjong.rules import RuleSet, ARCADE_RULES

from .difficulty import DifficultyProfile, MAX_LEVEL, resolve_profile

logger = logging.getLogger(__name__)

ClaimKind = Union[MeldType, str]

_CLAIM_NAMES = {"chi": MeldType.CHI, "pon": MeldType.PON, "kan": MeldType.KAN}


def _claim_type(kind: ClaimKind) -> MeldType:
    if isinstance(kind, MeldType):
        return kind
    return _CLAIM_NAMES[str(kind).lower()]


class HeuristicAgent:
    """
    Heuristic-based arcade opponent.

    Uses tile efficiency (shanten + ukeire) for offense
    and genbutsu/suji for defense.
    """

    # Safety scores against a ready opponent (higher = safer)
    GENBUTSU_SAFETY = 1_000_000.0  # Already in their discards
    HONOR_SAFETY = 3000.0
    TERMINAL_SAFETY = 2500.0
    SIMPLE_2_8_SAFETY = 500.0
    SIMPLE_3_7_SAFETY = -1500.0
    MIDDLE_SAFETY = -3000.0        # 4, 5, 6 are most dangerous
    SUJI_SAFETY = 1500.0

    def __init__(
        self,
        difficulty: Union[int, DifficultyProfile] = MAX_LEVEL,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        rules: Optional[RuleSet] = None,
        seat_wind: Optional[int] = None,
    ):
        """
        Initialize heuristic agent.

        Args:
            difficulty: Level 1-9 or a DifficultyProfile
            seed: Seed for the agent's own random source
            rng: Random source to use instead of a seeded one
            rules: Rule set (round wind, open all-simples)
            seat_wind: The agent's seat wind rank, if it scores
        """
        self.profile = resolve_profile(difficulty)
        self.rng = rng if rng is not None else random.Random(seed)
        self.rules = rules or ARCADE_RULES
        self.seat_wind = seat_wind
        self.shanten_calc = ShantenCalculator()

    # === Discards ===

    def choose_discard(
        self,
        hand: Sequence[Tile],
        melds: Sequence[Meld] = (),
        opponent_discards: Sequence[Tile] = (),
        opponent_is_ready: bool = False,
        dora_indicators: Sequence[Tile] = (),
        visible_tiles: Sequence[Tile] = (),
    ) -> int:
        """
        Pick a tile to discard from a 14-slot hand.

        Args:
            hand: Concealed tiles (including the drawn tile)
            melds: The agent's declared melds
            opponent_discards: Opponent's discard pile
            opponent_is_ready: Opponent has declared reach
            dora_indicators: Revealed dora indicators
            visible_tiles: Any other tiles known to be out of the wall

        Returns:
            Position of the chosen tile in ``hand``
        """
        validate_hand_size(hand, melds, allowed=(14,))
        counts = [int(c) for c in to_count_array(hand)]
        num_melds = len(melds)

        visible = to_count_array(list(opponent_discards) + list(visible_tiles) + list(dora_indicators))
        for meld in melds:
            visible += meld.to_count_array()

        dora = {dora_from_indicator(ind).tile_index for ind in dora_indicators}
        genbutsu = {t.tile_index for t in opponent_discards}

        candidates = [idx for idx in range(34) if counts[idx] > 0]
        scores = np.zeros(len(candidates), dtype=np.float64)
        shantens = np.zeros(len(candidates), dtype=np.int64)

        for i, tile_idx in enumerate(candidates):
            keep_value = self._shape_value(counts, tile_idx)

            # Simulate discard
            counts[tile_idx] -= 1
            visible[tile_idx] += 1
            result = self.shanten_calc.calculate(counts, num_melds, visible)
            visible[tile_idx] -= 1
            counts[tile_idx] += 1
            shantens[i] = result.shanten

            score = -self.profile.shanten_weight * result.shanten
            score += self.profile.ukeire_weight * result.ukeire
            score -= self.profile.value_weight * keep_value
            if tile_idx in dora:
                score -= self.profile.dora_weight

            if opponent_is_ready:
                score += self._safety(tile_idx, genbutsu)

            if self.profile.noise > 0:
                score += self.rng.gauss(0.0, self.profile.noise)
            scores[i] = score

        # Off defense, noise only reorders discards at the best shanten
        if not opponent_is_ready:
            scores[shantens > shantens.min()] = -np.inf

        best_idx = candidates[int(np.argmax(scores))]
        position = next(pos for pos, t in enumerate(hand) if t.tile_index == best_idx)
        logger.debug(
            f"Discard {hand[position]} (score {scores.max():.1f}, "
            f"level {self.profile.level}, defending={opponent_is_ready})"
        )
        return position

    def _is_value_honor(self, tile_idx: int) -> bool:
        """Check if honor tile is yakuhai (gives value)."""
        if tile_idx < 27:
            return False

        # Dragons are always yakuhai
        if tile_idx >= 31:
            return True

        rank = tile_idx - 27 + 1  # 1=E, 2=S, 3=W, 4=N
        return rank == self.rules.round_wind or rank == self.seat_wind

    def _shape_value(self, counts: List[int], tile_idx: int) -> float:
        """
        How much keeping this tile is worth beyond shanten/ukeire.

        Middle ranks and connected tiles are worth more; isolated
        terminals and honors are worth almost nothing, except value honors
        that already form a pair.
        """
        count = counts[tile_idx]

        if tile_idx >= 27:
            if self._is_value_honor(tile_idx):
                return 30.0 if count >= 2 else 4.0
            return 8.0 if count >= 2 else 0.0

        rank = tile_idx % 9 + 1
        value = 2.0 * (4 - abs(5 - rank))
        if count >= 2:
            value += 6.0
        pos = tile_idx % 9
        for delta, bonus in ((-2, 3.0), (-1, 5.0), (1, 5.0), (2, 3.0)):
            if 0 <= pos + delta <= 8 and counts[tile_idx + delta] > 0:
                value += bonus
        return value

    def _safety(self, tile_idx: int, genbutsu: set) -> float:
        """
        Calculate safety score for a tile (higher = safer).

        Considers:
        - Genbutsu (tiles the opponent already discarded)
        - Tile type (honors/terminals safer)
        - Suji (1-4-7 / 2-5-8 / 3-6-9 against a discarded tile)
        """
        if tile_idx in genbutsu:
            return self.GENBUTSU_SAFETY

        if tile_idx >= 27:  # Honors
            safety = self.HONOR_SAFETY
        elif tile_idx % 9 in (0, 8):  # Terminals (1, 9)
            safety = self.TERMINAL_SAFETY
        elif tile_idx % 9 in (1, 7):  # 2, 8
            safety = self.SIMPLE_2_8_SAFETY
        elif tile_idx % 9 in (2, 6):  # 3, 7
            safety = self.SIMPLE_3_7_SAFETY
        else:
            safety = self.MIDDLE_SAFETY

        # Suji: a discarded 4 makes 1 and 7 safer against a two-sided wait
        if tile_idx < 27:
            for delta in (-3, 3):
                other = tile_idx + delta
                if 0 <= tile_idx % 9 + delta <= 8 and other in genbutsu:
                    safety += self.SUJI_SAFETY
                    break

        return safety * self.profile.defense_weight

    # === Reach ===

    def should_declare_reach(
        self,
        hand: Sequence[Tile],
        melds: Sequence[Meld] = (),
        visible_tiles: Sequence[Tile] = (),
    ) -> bool:
        """
        Declare reach when concealed and a discard leaves a live tenpai.

        The declaration itself is taken with the profile's reach_rate.
        """
        validate_hand_size(hand, melds, allowed=(14,))
        if not all(m.is_concealed for m in melds):
            return False

        visible = to_count_array(list(visible_tiles) + list(hand))
        for meld in melds:
            visible += meld.to_count_array()

        for pos in range(len(hand)):
            rest = list(hand[:pos]) + list(hand[pos + 1:])
            waits = waiting_tiles(rest, melds)
            if any(visible[w.tile_index] < 4 for w in waits):
                return self.rng.random() < self.profile.reach_rate
        return False

    # === Calls ===

    def should_claim(
        self,
        hand: Sequence[Tile],
        melds: Sequence[Meld],
        discarded: Tile,
        claim_kind: ClaimKind,
    ) -> bool:
        """
        Decide whether to call pon/chi/kan on a discard.

        Args:
            hand: 13-slot concealed tiles
            melds: Declared melds
            discarded: The opponent's discarded tile
            claim_kind: MeldType or "pon" / "chi" / "kan"

        Returns:
            True to claim. An impossible claim is never approved.
        """
        kind = _claim_type(claim_kind)
        validate_hand_size(hand, melds, allowed=(13,))

        if kind == MeldType.PON and not can_pon(hand, discarded):
            return False
        if kind == MeldType.KAN and not can_kan(hand, discarded):
            return False
        if kind == MeldType.CHI:
            options = enumerate_sequence_claim_options(hand, discarded)
            if not options:
                return False

        # Guaranteed scoring triplet
        if kind != MeldType.CHI and self._is_value_honor(discarded.tile_index):
            logger.debug(f"Claim {kind.name} on value tile {discarded}")
            return True

        counts = [int(c) for c in to_count_array(hand)]
        current = self.shanten_calc.shanten(counts, len(melds))

        if kind == MeldType.CHI:
            outcomes = [
                self._after_claim(counts, melds, [a.tile_index, b.tile_index], discarded)
                for a, b in options
            ]
        else:
            removed = [discarded.tile_index] * (2 if kind == MeldType.PON else 3)
            outcomes = [self._after_claim(counts, melds, removed, discarded)]

        new_shanten = min(s for s, _ in outcomes)
        keeps_simples = any(s == new_shanten and simples for s, simples in outcomes)

        if new_shanten < current:
            logger.debug(f"Claim {kind.name} on {discarded}: shanten {current} -> {new_shanten}")
            return True

        if new_shanten == current and keeps_simples and self.rules.allow_open_tanyao:
            approve = self.rng.random() < self.profile.marginal_claim_rate
            logger.debug(f"Marginal {kind.name} on {discarded}: {'take' if approve else 'pass'}")
            return approve

        return False

    def _after_claim(
        self,
        counts: List[int],
        melds: Sequence[Meld],
        removed: List[int],
        discarded: Tile,
    ) -> Tuple[int, bool]:
        """
        Shanten after making the call and the best following discard, and
        whether a discard at that shanten leaves an all-simples hand.
        """
        scratch = list(counts)
        for idx in removed:
            scratch[idx] -= 1
        num_melds = len(melds) + 1

        melds_simple = all(t.is_simple for m in melds for t in m.tiles)
        claimed_simple = discarded.is_simple and all(
            Tile.from_index(idx).is_simple for idx in removed
        )

        # A quad draws a replacement instead of discarding
        if len(removed) == 3:
            shanten = self.shanten_calc.shanten(scratch, num_melds)
            simples = all(Tile.from_index(i).is_simple for i in range(34) if scratch[i] > 0)
            return shanten, simples and melds_simple and claimed_simple

        best = 99
        best_simples = False
        for idx in range(34):
            if scratch[idx] == 0:
                continue
            scratch[idx] -= 1
            shanten = self.shanten_calc.shanten(scratch, num_melds)
            simples = all(Tile.from_index(i).is_simple for i in range(34) if scratch[i] > 0)
            scratch[idx] += 1
            simples = simples and melds_simple and claimed_simple
            if shanten < best:
                best, best_simples = shanten, simples
            elif shanten == best and simples:
                best_simples = True
        return best, best_simples


def choose_discard(
    hand: Sequence[Tile],
    melds: Sequence[Meld] = (),
    difficulty: Union[int, DifficultyProfile] = MAX_LEVEL,
    opponent_discards: Sequence[Tile] = (),
    opponent_is_ready: bool = False,
    rng: Optional[random.Random] = None,
    dora_indicators: Sequence[Tile] = (),
) -> int:
    """Position in ``hand`` of the tile the CPU discards."""
    agent = HeuristicAgent(difficulty, rng=rng)
    return agent.choose_discard(hand, melds, opponent_discards, opponent_is_ready, dora_indicators)


def should_claim(
    hand: Sequence[Tile],
    melds: Sequence[Meld],
    discarded: Tile,
    claim_kind: ClaimKind,
    difficulty: Union[int, DifficultyProfile] = MAX_LEVEL,
    rng: Optional[random.Random] = None,
    seat_wind: Optional[int] = None,
    rules: Optional[RuleSet] = None,
) -> bool:
    """Whether the CPU calls ``claim_kind`` on ``discarded``."""
    agent = HeuristicAgent(difficulty, rng=rng, rules=rules, seat_wind=seat_wind)
    return agent.should_claim(hand, melds, discarded, claim_kind)
