import pytest

from game_logic import (
    all_patterns,
    derive_opposing_pattern,
    invert_coin,
    make_idle_game,
    parse_pattern,
    record_toss,
    resolve_match,
    sequence_to_string,
    start_game,
    stop_game,
)
from models import Coin, SpeedTier

H = Coin.HEADS
T = Coin.TAILS


def test_invert_coin():
    assert invert_coin(H) is T
    assert invert_coin(T) is H


def test_parse_pattern():
    assert parse_pattern("THH") == (T, H, H)
    assert parse_pattern(" tth ") == (T, T, H)
    with pytest.raises(ValueError):
        parse_pattern("TH")
    with pytest.raises(ValueError):
        parse_pattern("THX")


def test_all_patterns():
    patterns = all_patterns()
    assert len(patterns) == 8
    assert len(set(patterns)) == 8
    assert patterns[0] == (H, H, H)
    assert patterns[-1] == (T, T, T)


def test_derived_pattern_for_thh():
    assert derive_opposing_pattern((T, H, H)) == (T, T, H)


def test_derivation_is_deterministic_and_never_collides():
    for p in all_patterns():
        c = derive_opposing_pattern(p)
        assert c == derive_opposing_pattern(p)
        assert c != p
        assert c == (invert_coin(p[1]), p[0], p[1])


def test_known_best_answers():
    expected = {
        "HHH": "THH",
        "HHT": "THH",
        "HTH": "HHT",
        "HTT": "HHT",
        "THH": "TTH",
        "THT": "TTH",
        "TTH": "HTT",
        "TTT": "HTT",
    }
    for player, computer in expected.items():
        assert sequence_to_string(derive_opposing_pattern(parse_pattern(player))) == computer


def test_start_sets_up_both_contestants():
    game = make_idle_game()
    assert not game.running
    assert game.player is None

    assert start_game(game, (T, H, H), SpeedTier.FAST, now=1234.0)
    assert game.running
    assert game.player.pattern == (T, H, H)
    assert game.computer.pattern == (T, T, H)
    assert game.player.score == 0
    assert game.computer.score == 0
    assert game.history == []
    assert game.speed is SpeedTier.FAST
    assert game.last_update == 1234.0


def test_second_start_is_ignored():
    game = make_idle_game()
    assert start_game(game, (H, H, H), SpeedTier.SLOW, now=0.0)
    assert not start_game(game, (T, T, T), SpeedTier.FAST, now=10.0)
    assert game.player.pattern == (H, H, H)
    assert game.computer.pattern == (T, H, H)
    assert game.speed is SpeedTier.SLOW
    assert game.last_update == 0.0


def test_stop_keeps_scores_until_next_start():
    game = make_idle_game()
    assert not stop_game(game)

    start_game(game, (T, T, H), SpeedTier.SLOW, now=0.0)
    game.history = [H, T, T, H]
    resolve_match(game)
    record_toss(game, H)
    assert stop_game(game)
    assert not game.running
    assert game.player.score == 1
    assert game.history == [H]
    assert not stop_game(game)

    start_game(game, (T, T, H), SpeedTier.SLOW, now=0.0)
    assert game.player.score == 0
    assert game.history == []


def test_trailing_match_scores_player_and_clears_history():
    game = make_idle_game()
    start_game(game, (T, T, H), SpeedTier.SLOW, now=0.0)
    game.history = [H, T, T, H]

    assert resolve_match(game) == "player"
    assert game.player.score == 1
    assert game.computer.score == 0
    assert game.history == []


def test_computer_match():
    game = make_idle_game()
    start_game(game, (T, H, H), SpeedTier.SLOW, now=0.0)
    winners = [record_toss(game, c) for c in (H, T, T, H)]
    assert winners == [None, None, None, "computer"]
    assert game.computer.score == 1
    assert game.player.score == 0
    assert game.history == []
    assert game.tosses == 4


def test_short_history_never_matches():
    game = make_idle_game()
    start_game(game, (H, H, H), SpeedTier.SLOW, now=0.0)
    assert record_toss(game, H) is None
    assert record_toss(game, H) is None
    assert game.history == [H, H]


def test_race_window_restarts_after_a_match():
    game = make_idle_game()
    start_game(game, (H, H, H), SpeedTier.SLOW, now=0.0)
    winners = [record_toss(game, H) for _ in range(5)]
    # HHH scores on the third toss; the next two start a new window
    assert winners == [None, None, "player", None, None]
    assert game.history == [H, H]


def test_resolve_match_on_idle_game_is_noop():
    game = make_idle_game()
    game.history = [H, H, H]
    assert resolve_match(game) is None
    assert game.history == [H, H, H]


def test_record_toss_after_stop_is_ignored():
    game = make_idle_game()
    start_game(game, (H, H, H), SpeedTier.SLOW, now=0.0)
    stop_game(game)
    before = game.clone()

    assert [record_toss(game, H) for _ in range(3)] == [None, None, None]
    assert game == before
    assert game.player.score == 0
