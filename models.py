"""
Data models and state representations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from config import (
    FAST_TOSS_COUNT,
    FAST_UPDATE_INTERVAL_MS,
    HEADS_SYMBOL,
    SLOW_TOSS_COUNT,
    SLOW_UPDATE_INTERVAL_MS,
    TAILS_SYMBOL,
)


class Coin(Enum):
    HEADS = HEADS_SYMBOL
    TAILS = TAILS_SYMBOL


class SpeedTier(Enum):
    SLOW = "Slow"
    FAST = "Fast"

    @property
    def update_interval_ms(self) -> int:
        """Minimum milliseconds between two simulation steps."""
        if self is SpeedTier.SLOW:
            return SLOW_UPDATE_INTERVAL_MS
        return FAST_UPDATE_INTERVAL_MS

    @property
    def toss_count(self) -> int:
        """How many tosses a single step simulates."""
        if self is SpeedTier.SLOW:
            return SLOW_TOSS_COUNT
        return FAST_TOSS_COUNT


Pattern = Tuple[Coin, Coin, Coin]


@dataclass
class Contestant:
    pattern: Pattern
    score: int = 0

    def clone(self) -> "Contestant":
        return Contestant(pattern=self.pattern, score=self.score)


@dataclass
class Game:
    """State of one game; Idle until started, contestants kept after stop."""
    player: Optional[Contestant] = None
    computer: Optional[Contestant] = None
    history: List[Coin] = field(default_factory=list)   # race window, oldest first
    running: bool = False
    speed: SpeedTier = SpeedTier.SLOW
    last_update: float = 0.0                             # ms timestamp of last step
    tosses: int = 0

    def clone(self) -> "Game":
        return Game(
            player=self.player.clone() if self.player else None,
            computer=self.computer.clone() if self.computer else None,
            history=self.history[:],
            running=self.running,
            speed=self.speed,
            last_update=self.last_update,
            tosses=self.tosses,
        )


@dataclass(frozen=True)
class Snapshot:
    """What the presentation sink receives after each step.

    `history` is None when the speed tier does not surface individual tosses.
    """
    player_pattern: str
    computer_pattern: str
    player_score: int
    computer_score: int
    tosses: int
    history: Optional[str]
    running: bool
