"""
Tests for win detection, shanten and waits
"""

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from arcade_mahjong.tiles import Tile, man, pin, sou, EAST, SOUTH, parse_tiles, to_count_array
from arcade_mahjong.melds import MeldType, chi, pon, kan
from arcade_mahjong.hand import InvalidHandSizeError
from arcade_mahjong.agari import (
    is_winning_hand, enumerate_decompositions, is_seven_pairs, is_thirteen_orphans,
)
from arcade_mahjong.shanten import ShantenCalculator, calculate_shanten, get_ukeire, shanten_number
from arcade_mahjong.waits import waiting_tiles, is_tenpai, is_furiten, FuritenState


class TestWinDetection:
    """Test the three complete-hand archetypes"""

    def test_standard_hand(self):
        assert is_winning_hand(parse_tiles("123m456p789s11122z"))

    def test_incomplete_hand(self):
        assert not is_winning_hand(parse_tiles("123m456p789s11123z"))

    def test_thirteen_slots_not_winning(self):
        assert not is_winning_hand(parse_tiles("123m456p789s1122z"))

    @pytest.mark.parametrize("notation", ["123m456p789s1z", "123m456p789s112223z"])
    def test_invalid_size_rejected(self, notation):
        """Slot counts outside 13/14 raise instead of evaluating"""
        with pytest.raises(InvalidHandSizeError):
            is_winning_hand(parse_tiles(notation))

    def test_with_melds(self):
        tiles = parse_tiles("456p789s22z")
        melds = [pon(man(1)), chi([man(2), man(3), man(4)])]
        assert is_winning_hand(tiles, melds)

    def test_invalid_size_with_melds(self):
        with pytest.raises(InvalidHandSizeError):
            is_winning_hand(parse_tiles("456p789s22z"), [pon(man(1))])

    def test_seven_pairs(self):
        tiles = parse_tiles("1122m3344p5566s77z")
        assert is_winning_hand(tiles)
        assert is_seven_pairs(to_count_array(tiles))

    def test_four_of_a_kind_is_not_two_pairs(self):
        tiles = parse_tiles("1111m2233p445566s")
        assert not is_seven_pairs(to_count_array(tiles))
        assert not is_winning_hand(tiles)

    def test_thirteen_orphans(self):
        tiles = parse_tiles("119m19p19s1234567z")
        assert is_thirteen_orphans(to_count_array(tiles))
        assert is_winning_hand(tiles)

    def test_seven_pairs_needs_no_melds(self):
        counts = to_count_array(parse_tiles("1122m3344p5566s77z"))
        assert not is_seven_pairs(counts, num_melds=1)

    def test_honors_never_form_sequences(self):
        assert not is_winning_hand(parse_tiles("123z456z123m456p11s"))

    def test_all_decompositions(self):
        """Three identical sequences also read as three triplets"""
        decompositions = enumerate_decompositions(parse_tiles("111222333m456p55s"))
        assert len(decompositions) == 2
        kinds = sorted(tuple(sorted(g.kind for g in d.groups)) for d in decompositions)
        assert kinds == [
            (MeldType.CHI, MeldType.CHI, MeldType.CHI, MeldType.CHI),
            (MeldType.CHI, MeldType.PON, MeldType.PON, MeldType.PON),
        ]

    def test_melds_are_fixed_groups(self):
        tiles = parse_tiles("456p789s22z")
        melds = [kan(man(1), is_concealed=True), chi([man(2), man(3), man(4)])]
        decompositions = enumerate_decompositions(tiles, melds)
        assert len(decompositions) == 1
        meld_groups = [g for g in decompositions[0].groups if g.is_meld]
        assert len(meld_groups) == 2
        assert meld_groups[0].kind == MeldType.KAN
        assert meld_groups[0].is_concealed


class TestShanten:
    """Test shanten calculation"""

    def test_complete_hand(self):
        assert shanten_number(parse_tiles("123m456p789s11122z")) == -1

    def test_tenpai(self):
        assert shanten_number(parse_tiles("123m456p789s1122z")) == 0

    def test_two_shanten(self):
        assert shanten_number(parse_tiles("123m456p789s1357z")) == 2

    def test_scattered_hand(self):
        """Irregular forms beat the standard form"""
        assert shanten_number(parse_tiles("147m147p147s1234z")) == 6

    def test_seven_pairs_tenpai(self):
        assert shanten_number(parse_tiles("1122m3344p5566s7z")) == 0

    def test_thirteen_orphans_tenpai(self):
        assert shanten_number(parse_tiles("19m19p19s1234567z")) == 0

    @pytest.mark.parametrize("notation", ["7777m111555s777z", "888m8888p222555s", "7777m111666999p"])
    def test_wait_on_fifth_copy(self, notation):
        """A hand that only completes on a fifth copy is not tenpai"""
        tiles = parse_tiles(notation)
        assert shanten_number(tiles) == 1
        assert waiting_tiles(tiles) == set()
        assert not is_tenpai(tiles)

    def test_melds_force_standard_form(self):
        """Five pairs plus a meld cannot use the seven pairs formula"""
        tiles = parse_tiles("1122m3344p55s")
        assert shanten_number(tiles, [pon(EAST)]) == 2

    def test_quad_counts_as_a_set(self):
        tiles = parse_tiles("456p789s2z")
        melds = [kan(man(1)), chi([man(2), man(3), man(4)])]
        assert shanten_number(tiles, melds) == 0

    def test_oversized_hand_rejected(self):
        with pytest.raises(InvalidHandSizeError):
            shanten_number(parse_tiles("123m456p789s112223z"))

    def test_pure(self):
        """The caller's counts are never modified"""
        counts = to_count_array(parse_tiles("12m456p789s1122z5s"))
        before = counts.copy()
        ShantenCalculator().calculate(counts, 0)
        assert np.array_equal(counts, before)

    def test_ukeire(self):
        counts = to_count_array(parse_tiles("123m456p789s1122z"))
        waiting, ukeire = get_ukeire(counts, 0)
        assert sorted(waiting) == [27, 28]
        assert ukeire == 4

    def test_ukeire_respects_visible_tiles(self):
        counts = to_count_array(parse_tiles("123m456p789s1122z"))
        visible = to_count_array([EAST])
        result = ShantenCalculator().calculate(counts, 0, visible)
        assert result.ukeire == 3

    def test_best_discard(self):
        counts = to_count_array(parse_tiles("123456789m11p45s1z"))
        tile_idx, shanten, ukeire = ShantenCalculator().get_best_discard(counts)
        assert tile_idx == EAST.tile_index
        assert shanten == 0
        assert ukeire == 8

    def test_calculate_shanten_array(self):
        assert calculate_shanten(to_count_array(parse_tiles("123m456p789s1122z"))) == 0


class TestWaits:
    """Test waiting tiles and furiten"""

    def test_shanpon_wait(self):
        assert waiting_tiles(parse_tiles("123m456p789s1122z")) == {EAST, SOUTH}

    def test_nine_gates_waits(self):
        waits = waiting_tiles(parse_tiles("1112345678999m"))
        assert waits == {man(r) for r in range(1, 10)}

    def test_waits_complete_the_hand(self):
        """Appending a wait wins; appending anything else does not"""
        tiles = parse_tiles("23456m456p789s11z")
        waits = waiting_tiles(tiles)
        assert waits == {man(1), man(4), man(7)}
        for idx in range(34):
            candidate = Tile.from_index(idx)
            assert is_winning_hand(tiles + [candidate]) == (candidate in waits)

    def test_not_tenpai_has_no_waits(self):
        tiles = parse_tiles("123m456p789s1357z")
        assert waiting_tiles(tiles) == set()
        assert not is_tenpai(tiles)

    def test_waits_require_thirteen_slots(self):
        with pytest.raises(InvalidHandSizeError):
            waiting_tiles(parse_tiles("123m456p789s11122z"))

    def test_is_tenpai(self):
        assert is_tenpai(parse_tiles("123m456p789s1122z"))

    def test_furiten_intersection(self):
        waits = {EAST, SOUTH}
        assert is_furiten([man(1), EAST], waits)
        assert not is_furiten([man(1), pin(2)], waits)
        assert not is_furiten([], waits)

    def test_furiten_state_recomputed(self):
        """No stale furiten after the wait changes"""
        state = FuritenState()
        tiles = parse_tiles("123m456p789s1122z")
        assert state.update(tiles, [], [EAST])

        new_tiles = parse_tiles("123m456p789s2233z")
        assert not state.update(new_tiles, [], [EAST])
        assert state.waiting == {SOUTH, Tile.from_index(29)}

    def test_temporary_furiten(self):
        state = FuritenState()
        tiles = parse_tiles("123m456p789s1122z")
        state.update(tiles, [], [])
        assert not state.is_furiten
        state.set_passed_ron()
        assert state.is_furiten
        state.update(tiles, [], [])
        assert not state.is_furiten
