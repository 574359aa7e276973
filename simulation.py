"""
Toss simulation, the speed-gated game loop, and Monte Carlo races.
"""

import logging
import random
import time
from typing import Callable, List, Optional, Tuple

from config import COMPUTER, PLAYER
from game_logic import (
    make_idle_game,
    record_toss,
    sequence_to_string,
    start_game,
    stop_game,
)
from models import Coin, Contestant, Game, Pattern, Snapshot, SpeedTier

logger = logging.getLogger(__name__)

Tick = Callable[[float], None]


def toss_coin(rng: Optional[random.Random] = None) -> Coin:
    """Returns a pseudo-random coin toss."""
    r = rng.random() if rng is not None else random.random()
    return Coin.HEADS if r < 0.5 else Coin.TAILS


def now_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


def step(game: Game, toss: Callable[[], Coin] = toss_coin) -> List[str]:
    """
    Simulate one step of the running game: draw as many tosses as the
    active speed tier asks for, scoring each one as it lands.
    Returns the winners in order; does nothing when the game is idle.
    """
    if not game.running:
        return []

    winners = []
    for _ in range(game.speed.toss_count):
        winner = record_toss(game, toss())
        if winner is not None:
            winners.append(winner)
    return winners


def make_snapshot(game: Game) -> Snapshot:
    """Current scoreboard; the history is only surfaced for the slow tier."""
    if game.player is None:
        return Snapshot("", "", 0, 0, 0, None, game.running)

    history = None
    if game.speed is SpeedTier.SLOW:
        history = sequence_to_string(game.history)

    return Snapshot(
        player_pattern=sequence_to_string(game.player.pattern),
        computer_pattern=sequence_to_string(game.computer.pattern),
        player_score=game.player.score,
        computer_score=game.computer.score,
        tosses=game.tosses,
        history=history,
        running=game.running,
    )


class FrameScheduler:
    """
    Cooperative next-frame scheduler: callbacks queued with
    schedule_next_tick() fire on the following run_pending() call.
    """

    def __init__(self) -> None:
        self._pending: List[Tick] = []

    def schedule_next_tick(self, callback: Tick) -> None:
        self._pending.append(callback)

    def run_pending(self, now: float) -> int:
        """Fire the callbacks queued so far; re-armed callbacks wait for the next frame."""
        due, self._pending = self._pending, []
        for callback in due:
            callback(now)
        return len(due)

    @property
    def idle(self) -> bool:
        return not self._pending


class GameLoop:
    """Drives one Game: start/stop, interval gating and sink notifications."""

    def __init__(
        self,
        schedule_next_tick: Callable[[Tick], None],
        sink: Callable[[Snapshot], None],
        clock: Callable[[], float] = now_ms,
        toss: Callable[[], Coin] = toss_coin,
        game: Optional[Game] = None,
    ) -> None:
        self.game = game if game is not None else make_idle_game()
        self._schedule_next_tick = schedule_next_tick
        self._sink = sink
        self._clock = clock
        self._toss = toss
        self._armed = False   # a tick is queued with the scheduler

    @property
    def running(self) -> bool:
        return self.game.running

    def start(self, pattern: Pattern, speed: SpeedTier) -> bool:
        if not start_game(self.game, pattern, speed, self._clock()):
            return False
        self._sink(self.snapshot())
        # A tick left over from a stopped game picks up the new one
        if not self._armed:
            self._arm()
        return True

    def stop(self) -> bool:
        if not stop_game(self.game):
            return False
        self._sink(self.snapshot())
        return True

    def set_speed(self, speed: SpeedTier) -> None:
        """Switch the speed tier; a running loop picks it up on its next due tick."""
        self.game.speed = speed

    def _arm(self) -> None:
        self._armed = True
        self._schedule_next_tick(self.tick)

    def tick(self, now: float) -> None:
        self._armed = False
        game = self.game
        if not game.running:
            return

        if game.last_update + game.speed.update_interval_ms <= now:
            game.last_update = now
            step(game, self._toss)
            self._sink(self.snapshot())

        self._arm()

    def snapshot(self) -> Snapshot:
        return make_snapshot(self.game)


def race_once(
    player: Pattern,
    computer: Pattern,
    toss: Callable[[], Coin] = toss_coin,
) -> Tuple[str, int]:
    """
    Toss until one of the two patterns completes.
    Returns (winner, tosses in the race).
    """
    game = Game(player=Contestant(player), computer=Contestant(computer), running=True)
    while True:
        winner = record_toss(game, toss())
        if winner is not None:
            return winner, game.tosses


def simulate_matchup(
    player: Pattern,
    computer: Pattern,
    n_races: int = 5000,
    toss: Callable[[], Coin] = toss_coin,
) -> Tuple[float, float, float]:
    """
    Monte Carlo: estimate how often each pattern wins a race.

    Returns:
      - player win share
      - computer win share
      - average tosses per race
    """
    if player == computer:
        raise ValueError("Patterns must differ")
    if n_races <= 0:
        return 0.0, 0.0, 0.0

    wins = {PLAYER: 0, COMPUTER: 0}
    tosses_sum = 0
    for _ in range(n_races):
        winner, tosses = race_once(player, computer, toss)
        wins[winner] += 1
        tosses_sum += tosses

    logger.debug(
        "simulated %d races %s vs %s",
        n_races,
        sequence_to_string(player),
        sequence_to_string(computer),
    )
    return wins[PLAYER] / n_races, wins[COMPUTER] / n_races, tosses_sum / n_races
