"""
Arcade Mahjong Scoring System

Implements the yaku (winning patterns) and fan/fu/point calculation.

Order of evaluation:
1. Limit hands (yakuman) first; if any match, ordinary yaku and dora are
   skipped and the hand is paid from the yakuman tier.
2. Otherwise every reading of the hand (each decomposition, and each
   place the winning tile can sit in it) is scored and the one with the
   most fan is kept.
3. A complete hand with no yaku is not a win.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Callable, List, Optional, Sequence, Tuple
from collections import Counter
import numpy as np

from .tiles import Tile, TileFamily, WindType, DragonType, to_count_array, tiles_to_string
from .melds import Meld, MeldType
from .hand import validate_hand_size
from .agari import (
    Decomposition,
    TileGroup,
    enumerate_decompositions,
    is_seven_pairs,
    is_thirteen_orphans,
    is_winning_hand,
)
from .dora import DoraSystem
from .rules import RuleSet, ARCADE_RULES

logger = logging.getLogger(__name__)


class YakuType(IntEnum):
    """Categories of Yaku"""
    NORMAL = 0      # Regular yaku
    YAKUMAN = 1     # Limit hand (yakuman)


class WaitShape(IntEnum):
    """How the winning tile completed the hand"""
    RYANMEN = 0   # Two-sided sequence wait
    KANCHAN = 1   # Middle of a sequence
    PENCHAN = 2   # Edge (3 of 123, 7 of 789)
    SHANPON = 3   # One of two pairs becomes a triplet
    TANKI = 4     # Single tile onto the pair


class WinStatus(Enum):
    """Outcome of checking a 14-slot hand for a win"""
    NOT_COMPLETE = "not_complete"
    NO_YAKU = "no_yaku"
    WIN = "win"


@dataclass(frozen=True)
class Yaku:
    """Represents a Yaku (winning pattern)"""
    name: str
    japanese_name: str
    han_closed: int        # Han value when closed
    han_open: int          # Han value when open (0 = not allowed open)
    yaku_type: YakuType = YakuType.NORMAL

    @property
    def is_yakuman(self) -> bool:
        return self.yaku_type == YakuType.YAKUMAN


@dataclass(frozen=True)
class YakuResult:
    """A matched pattern and the fan it contributed"""
    name: str
    fan: int


@dataclass
class WinContext:
    """
    Circumstances of a win.

    Attributes:
        is_tsumo: Self-drawn win (otherwise won on a discard)
        is_reach: Player had declared reach
        dora_indicator: The revealed indicator tile
        is_dealer: Winner is the dealer (payout x1.5)
        winning_tile: Tile that completed the hand; defaults to the last
            concealed tile
        seat_wind: Winner's seat wind rank (1-4); defaults to East for the
            dealer and South otherwise
        round_wind: Round wind rank; defaults to the rule set's
    """
    is_tsumo: bool = False
    is_reach: bool = False
    dora_indicator: Optional[Tile] = None
    is_dealer: bool = False
    winning_tile: Optional[Tile] = None
    seat_wind: Optional[int] = None
    round_wind: Optional[int] = None
    extra_dora_indicators: List[Tile] = field(default_factory=list)
    uradora_indicators: List[Tile] = field(default_factory=list)
    is_double_reach: bool = False
    is_ippatsu: bool = False
    is_first_turn: bool = False
    is_last_tile: bool = False
    is_after_quad: bool = False
    is_robbing_quad: bool = False

    def dora_system(self) -> DoraSystem:
        indicators = [self.dora_indicator] if self.dora_indicator is not None else []
        return DoraSystem(
            dora_indicators=indicators + list(self.extra_dora_indicators),
            uradora_indicators=list(self.uradora_indicators),
        )


@dataclass
class WinResult:
    """Result of scoring a winning hand"""
    yaku: List[YakuResult]
    fan: int
    fu: int
    dora_count: int
    points: int
    is_yakuman: bool = False
    uradora_count: int = 0
    decomposition: Optional[Decomposition] = None
    wait: Optional[WaitShape] = None

    @property
    def yaku_names(self) -> List[str]:
        return [y.name for y in self.yaku]


@dataclass
class HandAnalysis:
    """One reading of a winning hand"""
    counts: np.ndarray
    melds: Sequence[Meld]
    winning_index: int
    is_tsumo: bool
    is_closed: bool
    round_wind: int
    seat_wind: int
    context: WinContext

    decomposition: Optional[Decomposition] = None
    wait: Optional[WaitShape] = None
    is_chiitoitsu: bool = False
    is_kokushi: bool = False
    is_pinfu: bool = False

    @property
    def groups(self) -> Tuple[TileGroup, ...]:
        return self.decomposition.groups if self.decomposition else ()

    @property
    def pair(self) -> Optional[int]:
        return self.decomposition.pair if self.decomposition else None

    def present(self) -> List[Tile]:
        """One tile per kind held"""
        return [Tile.from_index(i) for i in range(34) if self.counts[i] > 0]


def round_up_100(points: float) -> int:
    return int(math.ceil(points / 100.0)) * 100


def calculate_points(
    fan: int,
    fu: int,
    is_dealer: bool = False,
    rules: Optional[RuleSet] = None,
    is_yakuman: bool = False,
) -> int:
    """
    Final point total from fan and fu.

    13+ fan pays the yakuman tier per 13 fan, 11-12 / 8-10 / 6-7 / 5 the
    fixed tiers, and below that fu x 2^(fan+2) x 4 rounded up to 100,
    capped at the 5-fan tier. The dealer receives 1.5x, rounded up to 100.
    """
    rules = rules or ARCADE_RULES

    if fan >= 13:
        multiples = fan // 13 if (is_yakuman or rules.kazoe_multiples) else 1
        points = rules.yakuman_points * multiples
    elif fan >= 11:
        points = rules.sanbaiman_points
    elif fan >= 8:
        points = rules.baiman_points
    elif fan >= 6:
        points = rules.haneman_points
    elif fan >= 5:
        points = rules.mangan_points
    else:
        base = fu * (2 ** (fan + 2))
        if base >= 2000:
            points = rules.mangan_points
        else:
            points = round_up_100(base * 4)

    if is_dealer:
        points = round_up_100(points * rules.dealer_multiplier)
    return points


class ArcadeScorer:
    """
    Arcade Mahjong Scorer

    Calculates fan, fu, and final points for winning hands. Pure: holds
    only the rule set and the yaku table.
    """

    def __init__(self, rules: Optional[RuleSet] = None):
        self.rules = rules or ARCADE_RULES
        self.yaku_checks = self._create_yaku_checks()

    # === Public API ===

    def evaluate_win(
        self,
        tiles: Sequence[Tile],
        melds: Sequence[Meld] = (),
        context: Optional[WinContext] = None,
    ) -> Optional[WinResult]:
        """
        Score a 14-slot hand.

        Args:
            tiles: Concealed tiles including the winning tile
            melds: Declared melds
            context: Win circumstances

        Returns:
            WinResult, or None if the hand is incomplete or has no yaku

        Raises:
            InvalidHandSizeError: if tiles + 3 x melds is not 13 or 14
        """
        context = context or WinContext()
        slots = validate_hand_size(tiles, melds)
        if slots != 14 or not is_winning_hand(tiles, melds):
            return None

        readings = self._analyze_hand(tiles, melds, context)

        # Yakuman first
        best_limit: Optional[Tuple[HandAnalysis, List[Tuple[Yaku, int]]]] = None
        for analysis in readings:
            matched = self._check_yakuman(analysis)
            total = sum(fan for _, fan in matched)
            if matched and (best_limit is None or total > sum(f for _, f in best_limit[1])):
                best_limit = (analysis, matched)
        if best_limit is not None:
            return self._yakuman_result(*best_limit)

        best: Optional[WinResult] = None
        best_key = None
        for analysis in readings:
            result = self._score_reading(analysis)
            if not result.yaku:
                continue
            key = (result.fan, result.points, result.fu)
            if best_key is None or key > best_key:
                best, best_key = result, key

        if best is None:
            logger.debug(f"Complete hand without yaku: {tiles_to_string(tiles)}")
            return None

        return self._add_dora(best, tiles, melds, context)

    def win_status(
        self,
        tiles: Sequence[Tile],
        melds: Sequence[Meld] = (),
        context: Optional[WinContext] = None,
    ) -> WinStatus:
        """Distinguish an incomplete hand from a complete hand with no yaku."""
        validate_hand_size(tiles, melds)
        if not is_winning_hand(tiles, melds):
            return WinStatus.NOT_COMPLETE
        if self.evaluate_win(tiles, melds, context) is None:
            return WinStatus.NO_YAKU
        return WinStatus.WIN

    # === Hand analysis ===

    def _analyze_hand(
        self,
        tiles: Sequence[Tile],
        melds: Sequence[Meld],
        context: WinContext,
    ) -> List[HandAnalysis]:
        """Every reading of the hand worth scoring."""
        winning_tile = context.winning_tile if context.winning_tile is not None else tiles[-1]
        seat_wind = context.seat_wind
        if seat_wind is None:
            seat_wind = WindType.EAST if context.is_dealer else WindType.SOUTH
        round_wind = context.round_wind if context.round_wind is not None else self.rules.round_wind

        counts = to_count_array(tiles)
        for meld in melds:
            counts += meld.to_count_array()

        base = dict(
            counts=counts,
            melds=melds,
            winning_index=winning_tile.tile_index,
            is_tsumo=context.is_tsumo,
            is_closed=all(m.is_concealed for m in melds),
            round_wind=int(round_wind),
            seat_wind=int(seat_wind),
            context=context,
        )

        concealed = to_count_array(tiles)
        readings: List[HandAnalysis] = []
        if is_thirteen_orphans(concealed, len(melds)):
            readings.append(HandAnalysis(**base, is_kokushi=True, wait=WaitShape.TANKI))
            return readings
        if is_seven_pairs(concealed, len(melds)):
            readings.append(HandAnalysis(**base, is_chiitoitsu=True, wait=WaitShape.TANKI))

        for decomposition in enumerate_decompositions(tiles, melds):
            for placed, wait in self._place_winning_tile(decomposition, base["winning_index"], context.is_tsumo):
                analysis = HandAnalysis(**base, decomposition=placed, wait=wait)
                analysis.is_pinfu = self._check_pinfu(analysis)
                readings.append(analysis)
        return readings

    @staticmethod
    def _place_winning_tile(
        decomposition: Decomposition,
        win_idx: int,
        is_tsumo: bool,
    ) -> List[Tuple[Decomposition, Optional[WaitShape]]]:
        """Each way the winning tile can have completed this decomposition."""
        placements: List[Tuple[Decomposition, Optional[WaitShape]]] = []
        seen = set()

        if decomposition.pair == win_idx:
            placements.append((decomposition, WaitShape.TANKI))

        for i, group in enumerate(decomposition.groups):
            if group.is_meld or win_idx not in group.indices or group in seen:
                continue
            seen.add(group)
            if group.kind == MeldType.CHI:
                pos = win_idx - group.tile_index
                if pos == 1:
                    wait = WaitShape.KANCHAN
                elif (pos == 0 and group.tile_index % 9 == 6) or (pos == 2 and group.tile_index % 9 == 0):
                    wait = WaitShape.PENCHAN
                else:
                    wait = WaitShape.RYANMEN
                placements.append((decomposition, wait))
            else:
                placed = decomposition
                if not is_tsumo:
                    # A triplet completed by a discard counts as open
                    groups = list(decomposition.groups)
                    groups[i] = replace(group, is_concealed=False)
                    placed = Decomposition(decomposition.pair, tuple(groups))
                placements.append((placed, WaitShape.SHANPON))

        if not placements:
            placements.append((decomposition, None))
        return placements

    # === Scoring ===

    def _score_reading(self, a: HandAnalysis) -> WinResult:
        """Ordinary yaku, fan and fu for one reading (dora not yet added)."""
        yaku: List[YakuResult] = []
        for pattern, check_func in self.yaku_checks:
            han = pattern.han_closed if a.is_closed else pattern.han_open
            if han == 0:
                continue
            if check_func(a):
                yaku.append(YakuResult(pattern.name, han))

        fan = sum(y.fan for y in yaku)
        fu = self._calculate_fu(a)
        points = calculate_points(fan, fu, a.context.is_dealer, self.rules) if yaku else 0
        return WinResult(
            yaku=yaku,
            fan=fan,
            fu=fu,
            dora_count=0,
            points=points,
            decomposition=a.decomposition,
            wait=a.wait,
        )

    def _add_dora(
        self,
        result: WinResult,
        tiles: Sequence[Tile],
        melds: Sequence[Meld],
        context: WinContext,
    ) -> WinResult:
        dora = context.dora_system()
        result.dora_count = dora.count_dora_in_hand(tiles, melds)
        if context.is_reach and self.rules.uradora_on_reach_win:
            result.uradora_count = dora.count_uradora_in_hand(tiles, melds)
        result.fan += result.dora_count + result.uradora_count
        result.points = calculate_points(result.fan, result.fu, context.is_dealer, self.rules)
        logger.debug(
            f"Scored {result.yaku_names}: fan={result.fan} fu={result.fu} "
            f"dora={result.dora_count} points={result.points}"
        )
        return result

    def _yakuman_result(self, a: HandAnalysis, matched: List[Tuple[Yaku, int]]) -> WinResult:
        fan = sum(f for _, f in matched)
        points = calculate_points(fan, 0, a.context.is_dealer, self.rules, is_yakuman=True)
        logger.debug(f"Yakuman {[y.name for y, _ in matched]}: fan={fan} points={points}")
        return WinResult(
            yaku=[YakuResult(y.name, f) for y, f in matched],
            fan=fan,
            fu=self._calculate_fu(a),
            dora_count=0,
            points=points,
            is_yakuman=True,
            decomposition=a.decomposition,
            wait=a.wait,
        )

    def _calculate_fu(self, a: HandAnalysis) -> int:
        """Calculate fu (minipoints)"""
        if a.is_chiitoitsu:
            return 25
        if a.is_pinfu and a.is_tsumo:
            return 20

        fu = 20  # Base fu

        # Menzen ron
        if a.is_closed and not a.is_tsumo:
            fu += 10

        # Tsumo
        if a.is_tsumo:
            fu += 2

        # Sets fu
        for group in a.groups:
            if group.kind == MeldType.CHI:
                continue
            value = 2
            if Tile.from_index(group.tile_index).is_terminal_or_honor:
                value *= 2
            if group.is_concealed:
                value *= 2
            if group.kind == MeldType.KAN:
                value *= 4
            fu += value

        # Pair fu
        if a.pair is not None:
            fu += self._pair_fu(a, Tile.from_index(a.pair))

        # Wait fu
        if a.wait in (WaitShape.KANCHAN, WaitShape.PENCHAN, WaitShape.TANKI):
            fu += 2

        # Round up to nearest 10, minimum 30
        fu = ((fu + 9) // 10) * 10
        return max(fu, 30)

    def _pair_fu(self, a: HandAnalysis, tile: Tile) -> int:
        if self.rules.terminal_pair_fu:
            return 2 if tile.is_terminal_or_honor else 0
        fu = 0
        if tile.is_dragon:
            fu += 2
        if tile.is_wind and tile.rank == a.round_wind:
            fu += 2
        if tile.is_wind and tile.rank == a.seat_wind:
            fu += 2
        return fu

    # === Yaku table ===

    def _create_yaku_checks(self) -> List[Tuple[Yaku, Callable[[HandAnalysis], bool]]]:
        """Create list of yaku with their check functions"""
        checks = [
            # 1 Han
            (Yaku("Reach", "立直", 1, 0), self._check_reach),
            (Yaku("Ippatsu", "一発", 1, 0), self._check_ippatsu),
            (Yaku("Menzen Tsumo", "門前清自摸和", 1, 0), self._check_menzen_tsumo),
            (Yaku("Tanyao", "断幺九", 1, 1 if self.rules.allow_open_tanyao else 0), self._check_tanyao),
            (Yaku("Pinfu", "平和", 1, 0), lambda a: a.is_pinfu),
            (Yaku("Iipeikou", "一盃口", 1, 0), self._check_iipeikou),
            (Yaku("Yakuhai (White)", "役牌 白", 1, 1), lambda a: self._check_yakuhai(a, DragonType.WHITE)),
            (Yaku("Yakuhai (Green)", "役牌 發", 1, 1), lambda a: self._check_yakuhai(a, DragonType.GREEN)),
            (Yaku("Yakuhai (Red)", "役牌 中", 1, 1), lambda a: self._check_yakuhai(a, DragonType.RED)),
            (Yaku("Yakuhai (Seat Wind)", "自風牌", 1, 1), lambda a: self._check_yakuhai(a, a.seat_wind)),
            (Yaku("Yakuhai (Round Wind)", "場風牌", 1, 1), lambda a: self._check_yakuhai(a, a.round_wind)),
            (Yaku("Rinshan Kaihou", "嶺上開花", 1, 1), lambda a: a.context.is_after_quad and a.is_tsumo),
            (Yaku("Chankan", "槍槓", 1, 1), lambda a: a.context.is_robbing_quad and not a.is_tsumo),
            (Yaku("Haitei", "海底摸月", 1, 1), lambda a: a.context.is_last_tile and a.is_tsumo),
            (Yaku("Houtei", "河底撈魚", 1, 1), lambda a: a.context.is_last_tile and not a.is_tsumo),

            # 2 Han
            (Yaku("Double Reach", "両立直", 2, 0), lambda a: a.context.is_double_reach),
            (Yaku("Chiitoitsu", "七対子", 2, 0), lambda a: a.is_chiitoitsu),
            (Yaku("Sanshoku Doujun", "三色同順", 2, 1), self._check_sanshoku_doujun),
            (Yaku("Ittsu", "一気通貫", 2, 1), self._check_ittsu),
            (Yaku("Toitoi", "対々和", 2, 2), self._check_toitoi),
            (Yaku("Sanankou", "三暗刻", 2, 2), lambda a: self._concealed_triplets(a) == 3),
            (Yaku("Sanshoku Doukou", "三色同刻", 2, 2), self._check_sanshoku_doukou),
            (Yaku("Sankantsu", "三槓子", 2, 2), lambda a: self._count_kans(a) == 3),
            (Yaku("Chanta", "混全帯幺九", 2, 1), self._check_chanta),
            (Yaku("Honroutou", "混老頭", 2, 2), self._check_honroutou),

            # 3 Han
            (Yaku("Honitsu", "混一色", 3, 2), self._check_honitsu),
            (Yaku("Junchan", "純全帯幺九", 3, 2), self._check_junchan),
            (Yaku("Ryanpeikou", "二盃口", 3, 0), self._check_ryanpeikou),

            # 6 Han
            (Yaku("Chinitsu", "清一色", 6, 5), self._check_chinitsu),

            # 8 Han
            (Yaku("Renhou", "人和", 8, 0), self._check_renhou),
        ]
        if not self.rules.small_three_dragons_yakuman:
            checks.append((Yaku("Shousangen", "小三元", 2, 2), self._check_shousangen))
        return checks

    def _check_yakuman(self, a: HandAnalysis) -> List[Tuple[Yaku, int]]:
        """Check for yakuman hands; each scores 13 fan"""
        yakuman = []

        def add(name: str, japanese: str):
            yakuman.append((Yaku(name, japanese, 13, 13, YakuType.YAKUMAN), 13))

        if a.context.is_first_turn and a.is_tsumo and a.is_closed and not a.melds:
            if a.context.is_dealer:
                add("Tenhou", "天和")
            else:
                add("Chiihou", "地和")
        if a.is_kokushi:
            add("Kokushi Musou", "国士無双")
        if self._concealed_triplets(a) == 4:
            add("Suuankou", "四暗刻")
        if self._dragon_triplets(a) == 3:
            add("Daisangen", "大三元")
        if self.rules.small_three_dragons_yakuman and self._check_shousangen(a):
            add("Shousangen", "小三元")
        if self._wind_triplets(a) == 4:
            add("Daisuushii", "大四喜")
        if self._check_shousuushii(a):
            add("Shousuushii", "小四喜")
        if self._all_present(a, lambda t: t.is_honor):
            add("Tsuuiisou", "字一色")
        if self._all_present(a, lambda t: t.is_terminal):
            add("Chinroutou", "清老頭")
        if self._all_present(a, lambda t: t.is_green):
            add("Ryuuiisou", "緑一色")
        if self._check_chuuren(a):
            add("Chuuren Poutou", "九蓮宝燈")
        if self._count_kans(a) == 4:
            add("Suukantsu", "四槓子")
        return yakuman

    # === Helpers ===

    @staticmethod
    def _all_present(a: HandAnalysis, predicate: Callable[[Tile], bool]) -> bool:
        return all(predicate(t) for t in a.present())

    @staticmethod
    def _triplet_tiles(a: HandAnalysis) -> List[Tile]:
        return [Tile.from_index(g.tile_index) for g in a.groups if g.is_triplet_like]

    def _dragon_triplets(self, a: HandAnalysis) -> int:
        return sum(1 for t in self._triplet_tiles(a) if t.is_dragon)

    def _wind_triplets(self, a: HandAnalysis) -> int:
        return sum(1 for t in self._triplet_tiles(a) if t.is_wind)

    @staticmethod
    def _concealed_triplets(a: HandAnalysis) -> int:
        return sum(1 for g in a.groups if g.is_triplet_like and g.is_concealed)

    @staticmethod
    def _count_kans(a: HandAnalysis) -> int:
        return sum(1 for g in a.groups if g.kind == MeldType.KAN)

    @staticmethod
    def _sequence_keys(a: HandAnalysis) -> List[int]:
        return [g.tile_index for g in a.groups if g.kind == MeldType.CHI]

    @staticmethod
    def _is_value_honor(a: HandAnalysis, tile: Tile) -> bool:
        if tile.is_dragon:
            return True
        return tile.is_wind and tile.rank in (a.round_wind, a.seat_wind)

    # === Yaku Check Functions ===

    def _check_reach(self, a: HandAnalysis) -> bool:
        return a.context.is_reach and not a.context.is_double_reach

    def _check_ippatsu(self, a: HandAnalysis) -> bool:
        return a.context.is_ippatsu and (a.context.is_reach or a.context.is_double_reach)

    def _check_menzen_tsumo(self, a: HandAnalysis) -> bool:
        return a.is_closed and a.is_tsumo

    def _check_tanyao(self, a: HandAnalysis) -> bool:
        """All simples (no terminals/honors)"""
        return self._all_present(a, lambda t: t.is_simple)

    def _check_pinfu(self, a: HandAnalysis) -> bool:
        """All sequences, valueless pair, two-sided wait"""
        if not a.is_closed or a.decomposition is None:
            return False
        if any(g.kind != MeldType.CHI for g in a.groups):
            return False
        if self._is_value_honor(a, Tile.from_index(a.pair)):
            return False
        return a.wait == WaitShape.RYANMEN

    def _check_iipeikou(self, a: HandAnalysis) -> bool:
        """Two identical sequences"""
        counts = Counter(self._sequence_keys(a))
        pairs = sum(c // 2 for c in counts.values())
        return pairs == 1

    def _check_ryanpeikou(self, a: HandAnalysis) -> bool:
        """Two sets of identical sequences"""
        counts = Counter(self._sequence_keys(a))
        return sum(c // 2 for c in counts.values()) >= 2

    def _check_yakuhai(self, a: HandAnalysis, rank: int) -> bool:
        """Triplet or quad of the given honor rank"""
        return any(t.is_honor and t.rank == rank for t in self._triplet_tiles(a))

    def _check_sanshoku_doujun(self, a: HandAnalysis) -> bool:
        """Three families, same sequence"""
        by_rank = {}
        for idx in self._sequence_keys(a):
            by_rank.setdefault(idx % 9, set()).add(idx // 9)
        return any(len(families) == 3 for families in by_rank.values())

    def _check_ittsu(self, a: HandAnalysis) -> bool:
        """1-2-3, 4-5-6, 7-8-9 in same family"""
        starts = set(self._sequence_keys(a))
        return any({f * 9, f * 9 + 3, f * 9 + 6}.issubset(starts) for f in range(3))

    def _check_toitoi(self, a: HandAnalysis) -> bool:
        """All triplets/quads"""
        return a.decomposition is not None and all(g.is_triplet_like for g in a.groups)

    def _check_sanshoku_doukou(self, a: HandAnalysis) -> bool:
        """Same triplet in three families"""
        by_rank = {}
        for t in self._triplet_tiles(a):
            if not t.is_honor:
                by_rank.setdefault(t.rank, set()).add(t.family)
        return any(len(families) == 3 for families in by_rank.values())

    def _group_tiles(self, a: HandAnalysis) -> List[List[Tile]]:
        blocks = [[Tile.from_index(i) for i in g.indices] for g in a.groups]
        blocks.append([Tile.from_index(a.pair)])
        return blocks

    def _check_chanta(self, a: HandAnalysis) -> bool:
        """Every set and the pair hold a terminal or honor, with honors present"""
        if a.decomposition is None or not self._sequence_keys(a):
            return False
        if not all(any(t.is_terminal_or_honor for t in block) for block in self._group_tiles(a)):
            return False
        return any(t.is_honor for t in a.present())

    def _check_junchan(self, a: HandAnalysis) -> bool:
        """Every set and the pair hold a terminal, no honors"""
        if a.decomposition is None or not self._sequence_keys(a):
            return False
        return all(any(t.is_terminal for t in block) for block in self._group_tiles(a))

    def _check_honroutou(self, a: HandAnalysis) -> bool:
        """Only terminals and honors, both present"""
        present = a.present()
        return (all(t.is_terminal_or_honor for t in present)
                and any(t.is_honor for t in present)
                and any(t.is_terminal for t in present))

    def _check_shousangen(self, a: HandAnalysis) -> bool:
        """Small 3 dragons (2 dragon triplets + dragon pair)"""
        if a.pair is None:
            return False
        return self._dragon_triplets(a) == 2 and Tile.from_index(a.pair).is_dragon

    def _check_shousuushii(self, a: HandAnalysis) -> bool:
        """Small 4 winds (3 wind triplets + wind pair)"""
        if a.pair is None:
            return False
        return self._wind_triplets(a) == 3 and Tile.from_index(a.pair).is_wind

    def _check_honitsu(self, a: HandAnalysis) -> bool:
        """One numbered family + honors"""
        present = a.present()
        families = {t.family for t in present if not t.is_honor}
        return len(families) == 1 and any(t.is_honor for t in present)

    def _check_chinitsu(self, a: HandAnalysis) -> bool:
        """Pure one numbered family (no honors)"""
        families = {t.family for t in a.present()}
        return len(families) == 1 and TileFamily.HONOR not in families

    def _check_chuuren(self, a: HandAnalysis) -> bool:
        """Nine gates (1112345678999 + any in same family)"""
        if a.melds or not self._check_chinitsu(a):
            return False
        family = a.present()[0].family
        suit_counts = a.counts[family * 9:family * 9 + 9]
        required = [3, 1, 1, 1, 1, 1, 1, 1, 3]
        return all(suit_counts[i] >= required[i] for i in range(9))

    def _check_renhou(self, a: HandAnalysis) -> bool:
        """Non-dealer wins on a discard before their first draw"""
        return (a.context.is_first_turn and not a.is_tsumo
                and not a.context.is_dealer and not a.melds)


_default_scorer = ArcadeScorer()


def evaluate_win(
    tiles: Sequence[Tile],
    melds: Sequence[Meld] = (),
    context: Optional[WinContext] = None,
    rules: Optional[RuleSet] = None,
) -> Optional[WinResult]:
    """Score a hand with the given (or default arcade) rules."""
    scorer = ArcadeScorer(rules) if rules is not None else _default_scorer
    return scorer.evaluate_win(tiles, melds, context)


def win_status(
    tiles: Sequence[Tile],
    melds: Sequence[Meld] = (),
    context: Optional[WinContext] = None,
    rules: Optional[RuleSet] = None,
) -> WinStatus:
    scorer = ArcadeScorer(rules) if rules is not None else _default_scorer
    return scorer.win_status(tiles, melds, context)
