"""
Tests for the CPU opponent and the benchmark
"""

import random

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from arcade_mahjong.tiles import man, pin, sou, EAST, SOUTH, WindType, parse_tiles
from arcade_mahjong.melds import MeldType, chi
from arcade_mahjong.wall import Wall
from arcade_mahjong.shanten import shanten_number
from cpu_opponent import (
    DifficultyProfile, HeuristicAgent, profile_for_level, resolve_profile,
    choose_discard, should_claim,
)
import benchmark


def discarded_tile(hand, position):
    return str(hand[position])


class TestDifficulty:
    """Test difficulty profiles"""

    def test_levels_clamped(self):
        assert profile_for_level(0).level == 1
        assert profile_for_level(12).level == 9

    def test_top_level_has_no_noise(self):
        assert profile_for_level(9).noise == 0
        assert profile_for_level(1).noise > profile_for_level(5).noise > 0

    def test_lower_levels_take_more_marginal_calls(self):
        assert profile_for_level(1).marginal_claim_rate > profile_for_level(9).marginal_claim_rate
        for level in range(1, 10):
            assert 0.0 <= profile_for_level(level).marginal_claim_rate <= 1.0

    def test_resolve_profile(self):
        profile = DifficultyProfile(level=4, noise=1.0)
        assert resolve_profile(profile) is profile
        assert resolve_profile(3) == profile_for_level(3)


class TestDiscard:
    """Test discard selection"""

    def test_keeps_tenpai(self):
        hand = parse_tiles("123456789m11p45s1z")
        agent = HeuristicAgent(9)
        assert discarded_tile(hand, agent.choose_discard(hand)) == "E"

    def test_isolated_terminals(self):
        hand = parse_tiles("1456m1237p345s9s55z")
        agent = HeuristicAgent(9)
        assert discarded_tile(hand, agent.choose_discard(hand)) in ("1m", "9s")

    def test_defense_prefers_genbutsu(self):
        hand = parse_tiles("345m123p45678s22z9m")
        agent = HeuristicAgent(9)
        position = agent.choose_discard(
            hand, opponent_discards=parse_tiles("7s2z"), opponent_is_ready=True
        )
        assert discarded_tile(hand, position) in ("S", "7s")

    def test_defense_genbutsu_at_every_level(self):
        """The safe tile dominates even with heavy noise"""
        hand = parse_tiles("345m123p45678s22z9m")
        for seed in range(5):
            agent = HeuristicAgent(1, seed=seed)
            position = agent.choose_discard(
                hand, opponent_discards=parse_tiles("7s2z"), opponent_is_ready=True
            )
            assert discarded_tile(hand, position) in ("S", "7s")

    def test_defense_honors_over_middle(self):
        hand = parse_tiles("123567m4565p159s1z")
        agent = HeuristicAgent(9)
        position = agent.choose_discard(
            hand, opponent_discards=parse_tiles("3p"), opponent_is_ready=True
        )
        assert discarded_tile(hand, position) == "E"

    def test_seeded_reproducible(self):
        hands = [parse_tiles("147m258p369s1234z5m"), parse_tiles("1456m1237p345s9s55z")]
        first = HeuristicAgent(1, seed=99)
        second = HeuristicAgent(1, seed=99)
        for hand in hands:
            assert first.choose_discard(hand) == second.choose_discard(hand)

    def test_injected_rng(self):
        hand = parse_tiles("147m258p369s1234z5m")
        a = choose_discard(hand, [], 2, rng=random.Random(5))
        b = choose_discard(hand, [], 2, rng=random.Random(5))
        assert a == b

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_total_on_dealt_hands(self, seed):
        """Any well-formed 14-tile hand yields a valid position"""
        wall = Wall.from_seed(seed)
        hand = wall.deal_hands(2)[0] + [wall.draw()]
        for level in (1, 9):
            position = HeuristicAgent(level, seed=seed).choose_discard(hand)
            assert 0 <= position < 14

    @pytest.mark.parametrize("level", [1, 5, 9])
    def test_noise_never_costs_shanten(self, level):
        """Randomness only picks among discards that keep the best shanten"""
        for seed in range(10):
            wall = Wall.from_seed(seed)
            hand = wall.deal_hands(2)[0] + [wall.draw()]
            best = min(shanten_number(hand[:p] + hand[p + 1:]) for p in range(14))
            position = HeuristicAgent(level, seed=seed).choose_discard(hand)
            assert shanten_number(hand[:position] + hand[position + 1:]) == best

    def test_hand_with_melds(self):
        hand = parse_tiles("67m456p789s22z5z")
        melds = [chi([man(1), man(2), man(3)])]
        position = HeuristicAgent(9).choose_discard(hand, melds)
        assert 0 <= position < len(hand)


class TestClaims:
    """Test call decisions"""

    def test_dragon_pon(self):
        hand = parse_tiles("55z123m456p789s3m9p")
        assert HeuristicAgent(9).should_claim(hand, [], parse_tiles("5z")[0], "pon")

    def test_round_wind_pon(self):
        hand = parse_tiles("11z123m456p789s3m9p")
        assert HeuristicAgent(9).should_claim(hand, [], EAST, MeldType.PON)

    def test_seat_wind_is_valuable(self):
        hand = parse_tiles("22z123m456p789s11m")
        assert not HeuristicAgent(9).should_claim(hand, [], SOUTH, "pon")
        assert HeuristicAgent(9, seat_wind=WindType.SOUTH).should_claim(hand, [], SOUTH, "pon")

    def test_chi_into_tenpai(self):
        hand = parse_tiles("123456789m12p5s1z")
        assert HeuristicAgent(9).should_claim(hand, [], pin(3), "chi")

    def test_pointless_pon_rejected(self):
        hand = parse_tiles("123456m789p11s57s")
        assert not HeuristicAgent(9).should_claim(hand, [], sou(1), "pon")

    def test_claim_that_only_stays_tenpai(self):
        """A tenpai hand that stays tenpai after the call gains nothing"""
        hand = parse_tiles("123m456m789p55s66s")
        agent = HeuristicAgent(DifficultyProfile(marginal_claim_rate=1.0))
        assert not agent.should_claim(hand, [], sou(6), "pon")

    def test_impossible_claims(self):
        hand = parse_tiles("123456m789p11s57s")
        agent = HeuristicAgent(9)
        assert not agent.should_claim(hand, [], man(9), "pon")
        assert not agent.should_claim(hand, [], sou(1), "kan")
        assert not agent.should_claim(hand, [], EAST, "chi")

    def test_marginal_all_simples_claim(self):
        """Shanten-neutral pon that keeps all-simples follows the claim rate"""
        hand = parse_tiles("234m567p345s22s68s")
        always = HeuristicAgent(DifficultyProfile(marginal_claim_rate=1.0))
        never = HeuristicAgent(DifficultyProfile(marginal_claim_rate=0.0))
        assert always.should_claim(hand, [], sou(2), "pon")
        assert not never.should_claim(hand, [], sou(2), "pon")

    def test_module_function(self):
        hand = parse_tiles("55z123m456p789s3m9p")
        assert should_claim(hand, [], parse_tiles("5z")[0], "pon", difficulty=1, rng=random.Random(0))


class TestReach:
    """Test the reach decision"""

    def test_reach_when_tenpai(self):
        hand = parse_tiles("123456m234p5567s4z")
        assert HeuristicAgent(DifficultyProfile(reach_rate=1.0)).should_declare_reach(hand)
        assert not HeuristicAgent(DifficultyProfile(reach_rate=0.0)).should_declare_reach(hand)

    def test_no_reach_when_open(self):
        hand = parse_tiles("456m234p5567s4z")
        melds = [chi([man(1), man(2), man(3)])]
        agent = HeuristicAgent(DifficultyProfile(reach_rate=1.0))
        assert not agent.should_declare_reach(hand, melds)

    def test_no_reach_when_not_tenpai(self):
        hand = parse_tiles("147m147p147s12345z")
        agent = HeuristicAgent(DifficultyProfile(reach_rate=1.0))
        assert not agent.should_declare_reach(hand)

    def test_no_reach_on_dead_wait(self):
        """All four copies of the only wait are visible"""
        hand = parse_tiles("123456m234p789s1z2z")
        agent = HeuristicAgent(DifficultyProfile(reach_rate=1.0))
        assert agent.should_declare_reach(hand)
        assert not agent.should_declare_reach(hand, visible_tiles=parse_tiles("111222z"))


class TestBenchmark:
    """Test the benchmark runner"""

    def test_top_level_passes(self):
        runner = benchmark.BenchmarkRunner(level=9, seed=0)
        assert runner.run_all() >= 0.7
        assert len(runner.results) == len(benchmark.BENCHMARK_TESTS)

    def test_cli(self):
        assert benchmark.main(["--level", "9", "--seed", "0"]) == 0
