"""
Game analytics: exact Penney's game odds and matchup statistics.
"""

from fractions import Fraction
from typing import Dict, List

from config import PATTERN_LENGTH
from game_logic import all_patterns, derive_opposing_pattern, sequence_to_string
from models import Pattern


def leading_number(a: Pattern, b: Pattern) -> int:
    """
    Conway's leading number of `a` over `b`:
      sum of 2**(k-1) for every k where the last k coins of `a`
      equal the first k coins of `b`.
    """
    total = 0
    for k in range(1, PATTERN_LENGTH + 1):
        if tuple(a[-k:]) == tuple(b[:k]):
            total += 2 ** (k - 1)
    return total


def win_probability(pattern: Pattern, opponent: Pattern) -> Fraction:
    """
    Exact probability that `pattern` shows up before `opponent` in a
    fresh stream of fair tosses.

    Conway's odds for `pattern` are (OO - OP) : (PP - PO), with
    P = pattern, O = opponent and XY = leading_number(X, Y).
    """
    if tuple(pattern) == tuple(opponent):
        raise ValueError("Patterns must differ")

    pp = leading_number(pattern, pattern)
    po = leading_number(pattern, opponent)
    oo = leading_number(opponent, opponent)
    op = leading_number(opponent, pattern)

    for_pattern = oo - op
    for_opponent = pp - po
    return Fraction(for_pattern, for_pattern + for_opponent)


def expected_race_length(a: Pattern, b: Pattern) -> Fraction:
    """Expected number of tosses until either pattern completes."""
    if tuple(a) == tuple(b):
        raise ValueError("Patterns must differ")

    aa = leading_number(a, a)
    ab = leading_number(a, b)
    bb = leading_number(b, b)
    ba = leading_number(b, a)
    return Fraction(2 * (aa * bb - ab * ba), aa + bb - ab - ba)


def matchup_table() -> List[Dict]:
    """One row per player pattern, against the derived computer pattern."""
    rows = []
    for player in all_patterns():
        computer = derive_opposing_pattern(player)
        p_computer = win_probability(computer, player)
        rows.append(
            {
                "Player": sequence_to_string(player),
                "Computer": sequence_to_string(computer),
                "P(computer wins)": p_computer,
                "Odds": f"{p_computer.numerator}:{p_computer.denominator - p_computer.numerator}",
                "Expected tosses": expected_race_length(player, computer),
            }
        )
    return rows
