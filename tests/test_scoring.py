"""
Tests for yaku evaluation and point calculation
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from arcade_mahjong.tiles import man, pin, sou, RED_DRAGON, parse_tiles
from arcade_mahjong.melds import chi, pon, kan
from arcade_mahjong.hand import InvalidHandSizeError
from arcade_mahjong.rules import ARCADE_RULES, STANDARD_RULES
from arcade_mahjong.scoring import (
    ArcadeScorer, WinContext, WinStatus, YakuResult, WaitShape,
    calculate_points, evaluate_win, win_status,
)


PINFU_HAND = "234m22567p345678s"


def names(result):
    return set(result.yaku_names)


class TestPoints:
    """Test the point table"""

    def test_basic_points(self):
        assert calculate_points(1, 30) == 1000
        assert calculate_points(2, 30) == 2000
        assert calculate_points(3, 30) == 3900
        assert calculate_points(4, 30) == 7700

    def test_high_fu_caps_at_mangan(self):
        assert calculate_points(4, 40) == 8000
        assert calculate_points(3, 70) == 8000

    @pytest.mark.parametrize("fan,expected", [
        (5, 8000), (6, 12000), (7, 12000), (8, 16000), (10, 16000),
        (11, 24000), (12, 24000), (13, 32000), (26, 64000),
    ])
    def test_fixed_tiers(self, fan, expected):
        assert calculate_points(fan, 30) == expected

    def test_dealer_multiplier(self):
        assert calculate_points(1, 30, is_dealer=True) == 1500
        assert calculate_points(3, 30, is_dealer=True) == 5900
        assert calculate_points(13, 30, is_dealer=True) == 48000

    def test_counted_limit_multiples(self):
        assert calculate_points(26, 30, rules=STANDARD_RULES) == 32000
        assert calculate_points(26, 30, rules=STANDARD_RULES, is_yakuman=True) == 64000

    def test_monotonic_in_fan(self):
        """Holding fu fixed, more fan never pays less"""
        for fu in range(20, 120, 10):
            previous = 0
            for fan in range(1, 27):
                points = calculate_points(fan, fu)
                assert points >= previous, (fan, fu)
                previous = points


class TestEvaluateWin:
    """Test hand evaluation scenarios"""

    def test_concealed_one_suit_triplets(self):
        """Three concealed triplets, a sequence and a pair, all in sou, self-drawn"""
        tiles = parse_tiles("22233344456788s")
        result = evaluate_win(tiles, [], WinContext(is_tsumo=True, winning_tile=sou(8)))

        assert result is not None
        assert {"Tanyao", "Sanankou", "Chinitsu", "Menzen Tsumo"} <= names(result)
        assert "Iipeikou" not in names(result)
        assert result.fan == 10
        assert result.fu == 40
        assert result.dora_count == 0
        assert result.points == 16000
        assert result.wait == WaitShape.TANKI

    def test_concealed_one_suit_triplets_dealer(self):
        tiles = parse_tiles("22233344456788s")
        ctx = WinContext(is_tsumo=True, winning_tile=sou(8), is_dealer=True)
        assert evaluate_win(tiles, [], ctx).points == 24000

    def test_complete_hand_without_yaku(self):
        tiles = parse_tiles("234m45699p789s")
        melds = [chi([man(1), man(2), man(3)])]
        assert evaluate_win(tiles, melds, WinContext()) is None
        assert win_status(tiles, melds) == WinStatus.NO_YAKU

    def test_incomplete_hand(self):
        tiles = parse_tiles("123m456p789s11123z")
        assert evaluate_win(tiles) is None
        assert win_status(tiles) == WinStatus.NOT_COMPLETE

    def test_invalid_size(self):
        with pytest.raises(InvalidHandSizeError):
            evaluate_win(parse_tiles("123m456p789s1z"))
        with pytest.raises(InvalidHandSizeError):
            win_status(parse_tiles("123m456p789s1z"))

    def test_thirteen_orphans(self):
        tiles = parse_tiles("119m19p19s1234567z")
        result = evaluate_win(tiles, [], WinContext(dora_indicator=man(9)))
        assert result.is_yakuman
        assert names(result) == {"Kokushi Musou"}
        assert result.fan == 13
        assert result.dora_count == 0
        assert result.points == 32000

    def test_thirteen_orphans_dealer(self):
        tiles = parse_tiles("119m19p19s1234567z")
        assert evaluate_win(tiles, [], WinContext(is_dealer=True)).points == 48000

    def test_pinfu_ron(self):
        tiles = parse_tiles(PINFU_HAND)
        result = evaluate_win(tiles, [], WinContext(winning_tile=sou(8)))
        assert names(result) == {"Pinfu", "Tanyao"}
        assert result.fu == 30
        assert result.points == 2000

    def test_pinfu_tsumo(self):
        tiles = parse_tiles(PINFU_HAND)
        result = evaluate_win(tiles, [], WinContext(is_tsumo=True, winning_tile=sou(8)))
        assert names(result) == {"Pinfu", "Tanyao", "Menzen Tsumo"}
        assert result.fu == 20
        assert result.points == 2600

    def test_reach_and_dora(self):
        tiles = parse_tiles(PINFU_HAND)
        ctx = WinContext(is_reach=True, winning_tile=sou(8), dora_indicator=man(1))
        result = evaluate_win(tiles, [], ctx)
        assert "Reach" in names(result)
        assert result.dora_count == 1
        assert result.fan == 4
        assert result.points == 7700

    def test_uradora_on_reach(self):
        tiles = parse_tiles(PINFU_HAND)
        ctx = WinContext(is_reach=True, winning_tile=sou(8), uradora_indicators=[pin(1)])
        result = evaluate_win(tiles, [], ctx)
        assert result.uradora_count == 2
        assert result.fan == 5
        assert result.points == 8000

    def test_uradora_ignored_without_reach(self):
        tiles = parse_tiles(PINFU_HAND)
        ctx = WinContext(winning_tile=sou(8), uradora_indicators=[pin(1)])
        assert evaluate_win(tiles, [], ctx).uradora_count == 0

    def test_open_dragon_triplet(self):
        tiles = parse_tiles("12355m456p789s")
        result = evaluate_win(tiles, [pon(RED_DRAGON)], WinContext(is_tsumo=True))
        assert names(result) == {"Yakuhai (Red)"}
        assert result.fu == 30
        assert result.points == 1000

    def test_open_half_flush(self):
        tiles = parse_tiles("456789m11122z")
        result = evaluate_win(tiles, [chi([man(1), man(2), man(3)])], WinContext())
        assert YakuResult("Honitsu", 2) in result.yaku
        assert YakuResult("Ittsu", 1) in result.yaku
        assert YakuResult("Yakuhai (Round Wind)", 1) in result.yaku
        assert result.fan == 4
        assert result.points == 8000

    def test_concealed_terminal_quad_fu(self):
        """A concealed quad of terminals is worth 32 fu"""
        tiles = parse_tiles("234567p345s55s")
        melds = [kan(man(1), is_concealed=True)]
        result = evaluate_win(tiles, melds, WinContext(is_reach=True, winning_tile=pin(7)))
        assert names(result) == {"Reach"}
        assert result.fu == 70
        assert result.points == 2300

    def test_seven_pairs(self):
        tiles = parse_tiles("1122m3344p5566s77z")
        result = evaluate_win(tiles, [], WinContext(is_tsumo=True))
        assert names(result) == {"Chiitoitsu", "Menzen Tsumo"}
        assert result.fu == 25
        assert result.points == 3200

    def test_ron_completed_triplet_is_open(self):
        tiles = parse_tiles("111m222p333444s55z")
        result = evaluate_win(tiles, [], WinContext(winning_tile=sou(4)))
        assert not result.is_yakuman
        assert {"Toitoi", "Sanankou"} <= names(result)
        assert result.fu == 50
        assert result.points == 8000

    def test_four_concealed_triplets(self):
        tiles = parse_tiles("111m222p333444s55z")
        result = evaluate_win(tiles, [], WinContext(is_tsumo=True, winning_tile=sou(4)))
        assert result.is_yakuman
        assert "Suuankou" in names(result)
        assert result.points == 32000

    def test_big_three_dragons(self):
        tiles = parse_tiles("555666777z123m44p")
        result = evaluate_win(tiles, [], WinContext(dora_indicator=man(1)))
        assert names(result) == {"Daisangen"}
        assert result.dora_count == 0
        assert result.points == 32000

    def test_small_three_dragons_variants(self):
        tiles = parse_tiles("555666z77z123m456p")

        arcade = ArcadeScorer(ARCADE_RULES).evaluate_win(tiles)
        assert arcade.is_yakuman
        assert "Shousangen" in names(arcade)

        standard = ArcadeScorer(STANDARD_RULES).evaluate_win(tiles)
        assert not standard.is_yakuman
        assert YakuResult("Shousangen", 2) in standard.yaku
        assert standard.fan == 4
        assert standard.fu == 50
        assert standard.points == 8000

    def test_heavenly_hand(self):
        tiles = parse_tiles(PINFU_HAND)
        ctx = WinContext(is_tsumo=True, is_dealer=True, is_first_turn=True, winning_tile=sou(8))
        result = evaluate_win(tiles, [], ctx)
        assert names(result) == {"Tenhou"}
        assert result.points == 48000

    def test_blessing_of_man(self):
        tiles = parse_tiles(PINFU_HAND)
        ctx = WinContext(is_first_turn=True, winning_tile=sou(8))
        result = evaluate_win(tiles, [], ctx)
        assert YakuResult("Renhou", 8) in result.yaku
        assert result.fan == 10
        assert result.points == 16000

    def test_win_status_win(self):
        tiles = parse_tiles(PINFU_HAND)
        assert win_status(tiles, [], WinContext(winning_tile=sou(8))) == WinStatus.WIN

    def test_never_empty_yaku(self):
        for notation in (PINFU_HAND, "22233344456788s", "1122m3344p5566s77z"):
            result = evaluate_win(parse_tiles(notation), [], WinContext(is_tsumo=True))
            assert result is None or result.yaku
