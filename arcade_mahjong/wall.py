"""
Arcade Mahjong Wall Module

Handles the wall (tile pile), dealing, drawing and the dora indicators.

The rules functions never shuffle; a caller builds a Wall, optionally with
its own random.Random, and feeds the drawn tiles to the engine.
"""

import random
from typing import List, Optional, Sequence
from dataclasses import dataclass, field

from .tiles import Tile, NUM_TILES, build_deck
from .dora import DoraSystem

DEAD_WALL_SIZE = 14
MAX_DORA_INDICATORS = 5
LIVE_WALL_SIZE = NUM_TILES - DEAD_WALL_SIZE


@dataclass
class Wall:
    """
    Represents the Mahjong wall.

    The last 14 tiles of the shuffled deck form the dead wall, which holds
    the dora indicators (positions 0, 2, 4, ...) and the ura-dora
    indicators beneath them (positions 1, 3, 5, ...).

    Attributes:
        tiles: Remaining live tiles
        dead_wall: Dead wall tiles
        dealt_count: Number of tiles that have been dealt/drawn
        rng: Random source used for shuffling
    """
    tiles: List[Tile] = field(default_factory=list)
    dead_wall: List[Tile] = field(default_factory=list)
    dealt_count: int = 0
    revealed: int = 0
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def __post_init__(self):
        if not self.tiles:
            self._create_wall()
        elif not self.dead_wall:
            self._split_deck(list(self.tiles))

    @classmethod
    def from_seed(cls, seed: int) -> 'Wall':
        return cls(rng=random.Random(seed))

    @classmethod
    def from_deck(cls, deck: Sequence[Tile]) -> 'Wall':
        """Build a wall from a deck the caller has already shuffled"""
        return cls(tiles=list(deck))

    def _create_wall(self) -> None:
        """Create and shuffle a new wall"""
        deck = build_deck()
        self.rng.shuffle(deck)
        self._split_deck(deck)

    def _split_deck(self, deck: List[Tile]) -> None:
        """Set aside the dead wall and turn over the first indicator"""
        if len(deck) <= DEAD_WALL_SIZE:
            raise ValueError(f"A deck needs more than {DEAD_WALL_SIZE} tiles, got {len(deck)}")
        self.dead_wall = deck[-DEAD_WALL_SIZE:]
        self.tiles = deck[:-DEAD_WALL_SIZE]
        self.dealt_count = 0
        self.revealed = 0
        self.reveal_dora()

    def draw(self) -> Optional[Tile]:
        """
        Draw one tile from the wall.
        Returns None if wall is empty.
        """
        if not self.tiles:
            return None
        tile = self.tiles.pop()
        self.dealt_count += 1
        return tile

    def draw_many(self, count: int) -> List[Tile]:
        """
        Draw multiple tiles from the wall.
        Returns fewer tiles if wall doesn't have enough.
        """
        drawn = []
        for _ in range(count):
            tile = self.draw()
            if tile is None:
                break
            drawn.append(tile)
        return drawn

    def deal_hands(self, num_players: int = 2) -> List[List[Tile]]:
        """
        Deal initial hands to all players.
        Each player gets 13 tiles.

        Returns list of hands (each hand is a list of 13 tiles).
        """
        hands = [[] for _ in range(num_players)]

        # Deal 4 tiles at a time, 3 rounds
        for _ in range(3):
            for player_idx in range(num_players):
                hands[player_idx].extend(self.draw_many(4))

        # Deal 1 final tile to each player
        for player_idx in range(num_players):
            tile = self.draw()
            if tile:
                hands[player_idx].append(tile)

        return hands

    def reveal_dora(self) -> Optional[Tile]:
        """Turn over the next dora indicator (after a quad, or at setup)."""
        if self.revealed >= MAX_DORA_INDICATORS:
            return None
        indicator = self.dead_wall[self.revealed * 2]
        self.revealed += 1
        return indicator

    @property
    def dora_indicators(self) -> List[Tile]:
        return [self.dead_wall[i * 2] for i in range(self.revealed)]

    @property
    def uradora_indicators(self) -> List[Tile]:
        return [self.dead_wall[i * 2 + 1] for i in range(self.revealed)]

    def dora_system(self) -> DoraSystem:
        return DoraSystem(self.dora_indicators, self.uradora_indicators)

    @property
    def remaining(self) -> int:
        """Number of tiles remaining in the wall"""
        return len(self.tiles)

    @property
    def is_empty(self) -> bool:
        """Check if wall is empty"""
        return len(self.tiles) == 0

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset the wall with optional random seed"""
        if seed is not None:
            self.rng = random.Random(seed)
        self._create_wall()

    def all_tiles(self) -> List[Tile]:
        """Live and dead wall together (for conservation checks)."""
        return list(self.tiles) + list(self.dead_wall)

    def __len__(self) -> int:
        return len(self.tiles)

    def __repr__(self) -> str:
        return f"Wall({self.remaining} tiles remaining)"
