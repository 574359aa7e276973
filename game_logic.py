"""
Core game logic: pattern helpers, strategy derivation and game state transitions.
"""

import logging
from itertools import product
from typing import Iterable, List, Optional

from config import COMPUTER, PATTERN_LENGTH, PLAYER
from models import Coin, Contestant, Game, Pattern, SpeedTier

logger = logging.getLogger(__name__)


def invert_coin(coin: Coin) -> Coin:
    """Inverts the value of a coin."""
    return Coin.TAILS if coin is Coin.HEADS else Coin.HEADS


def sequence_to_string(sequence: Iterable[Coin]) -> str:
    return "".join(coin.value for coin in sequence)


def parse_pattern(text: str) -> Pattern:
    """
    Parse a pattern such as "THH" (case-insensitive, surrounding whitespace ignored).
    Raises ValueError on a wrong length or an unknown symbol.
    """
    symbols = text.strip().upper()
    if len(symbols) != PATTERN_LENGTH:
        raise ValueError(
            f"Pattern must have exactly {PATTERN_LENGTH} tosses, got {text!r}"
        )
    try:
        return tuple(Coin(s) for s in symbols)
    except ValueError:
        raise ValueError(f"Pattern may only contain H and T, got {text!r}") from None


def all_patterns() -> List[Pattern]:
    """All 2**3 patterns, HHH first and TTT last."""
    return [tuple(p) for p in product([Coin.HEADS, Coin.TAILS], repeat=PATTERN_LENGTH)]


def derive_opposing_pattern(pattern: Pattern) -> Pattern:
    """
    Derive the best possible pattern against `pattern`:
    invert its second coin, then follow with its own first two coins.
    """
    return (invert_coin(pattern[1]), pattern[0], pattern[1])


def make_idle_game() -> Game:
    """A fresh game with no contestants and the loop not running."""
    return Game()


def start_game(game: Game, pattern: Pattern, speed: SpeedTier, now: float) -> bool:
    """
    If the game is not running, set up both contestants and an empty race window.
    Returns False (and changes nothing) when the game is already running.
    """
    if game.running:
        logger.debug("start ignored: game already running")
        return False

    game.player = Contestant(pattern=pattern, score=0)
    game.computer = Contestant(pattern=derive_opposing_pattern(pattern), score=0)
    game.history.clear()
    game.tosses = 0
    game.speed = speed
    game.last_update = now
    game.running = True
    logger.info(
        "game started: player %s vs computer %s (%s)",
        sequence_to_string(game.player.pattern),
        sequence_to_string(game.computer.pattern),
        speed.value,
    )
    return True


def stop_game(game: Game) -> bool:
    """If the game is running, stop it. Scores and history are kept."""
    if not game.running:
        logger.debug("stop ignored: game not running")
        return False
    game.running = False
    logger.info(
        "game stopped after %d tosses: player %d, computer %d",
        game.tosses,
        game.player.score,
        game.computer.score,
    )
    return True


def resolve_match(game: Game) -> Optional[str]:
    """
    Compare the last three tosses with both patterns, player first.
    On a match the winner scores a point and the race window is cleared.
    Returns the winner name or None.
    """
    if game.player is None or len(game.history) < PATTERN_LENGTH:
        return None

    last_three = tuple(game.history[-PATTERN_LENGTH:])
    if last_three == game.player.pattern:
        winner = PLAYER
        game.player.score += 1
    elif last_three == game.computer.pattern:
        winner = COMPUTER
        game.computer.score += 1
    else:
        return None

    game.history.clear()
    logger.debug("%s matched %s", winner, sequence_to_string(last_three))
    return winner


def record_toss(game: Game, coin: Coin) -> Optional[str]:
    """Append one toss to the race window and check it for a match. Ignored while idle."""
    if not game.running:
        return None
    game.history.append(coin)
    game.tosses += 1
    return resolve_match(game)
