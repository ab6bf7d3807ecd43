from itertools import product

import pytest

from ceelo_fair.comparator import Ordering, compare, compare_numeric, round_winner
from ceelo_fair.outcomes import Category, resolve

WIN_456 = resolve((4, 5, 6))
WIN_333 = resolve((3, 3, 3))
WIN_111 = resolve((1, 1, 1))
POINT_5 = resolve((2, 2, 5))
POINT_2 = resolve((6, 6, 2))
LOSE = resolve((1, 2, 3))
REROLL = resolve((1, 1, 6))
REROLL_2 = resolve((2, 4, 6))

_ONE_PER_CATEGORY = {
    Category.WIN: WIN_333,
    Category.POINT: POINT_5,
    Category.LOSE: LOSE,
    Category.REROLL: REROLL,
}


def test_reroll_vs_reroll_is_tie():
    assert compare(REROLL, REROLL_2) is Ordering.TIE


def test_reroll_loses_to_lose():
    assert compare(REROLL, LOSE) is Ordering.B_WINS
    assert compare(LOSE, REROLL) is Ordering.A_WINS


def test_lose_vs_lose_is_tie():
    assert compare(LOSE, resolve((3, 1, 2))) is Ordering.TIE


def test_higher_triple_wins():
    assert compare(resolve((3, 3, 3)), WIN_111) is Ordering.A_WINS
    assert compare(WIN_111, resolve((3, 3, 3))) is Ordering.B_WINS


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (WIN_456, resolve((6, 6, 6)), Ordering.A_WINS),
        (WIN_111, POINT_5, Ordering.A_WINS),
        (POINT_2, POINT_5, Ordering.B_WINS),
        (POINT_5, resolve((5, 3, 3)), Ordering.TIE),
        (POINT_2, LOSE, Ordering.A_WINS),
        (REROLL, POINT_2, Ordering.B_WINS),
    ],
)
def test_rank_ordering(a, b, expected):
    assert compare(a, b) is expected


@pytest.mark.parametrize("ca, cb", list(product(list(Category), repeat=2)))
def test_numeric_shortcut_matches_category_rules(ca, cb):
    a, b = _ONE_PER_CATEGORY[ca], _ONE_PER_CATEGORY[cb]
    assert compare_numeric(a, b) is compare(a, b)


def test_numeric_shortcut_matches_for_every_hand_pair():
    hands = [resolve(d) for d in product(range(1, 7), repeat=3)]
    distinct = {(h.category, h.rank): h for h in hands}.values()
    for a, b in product(distinct, repeat=2):
        assert compare_numeric(a, b) is compare(a, b)


def test_compare_is_antisymmetric():
    flip = {Ordering.A_WINS: Ordering.B_WINS, Ordering.B_WINS: Ordering.A_WINS, Ordering.TIE: Ordering.TIE}
    for a, b in product(_ONE_PER_CATEGORY.values(), repeat=2):
        assert compare(b, a) is flip[compare(a, b)]


def test_round_winner_picks_best_hand():
    rolls = {"alice": POINT_2, "bob": WIN_333, "carol": LOSE}
    assert round_winner(rolls) == "bob"


def test_round_winner_all_rerolls_is_none():
    assert round_winner({"alice": REROLL, "bob": REROLL_2}) is None


def test_round_winner_top_tie_is_none():
    assert round_winner({"alice": POINT_5, "bob": resolve((3, 5, 3)), "carol": LOSE}) is None


def test_round_winner_lose_beats_rerolls():
    assert round_winner({"alice": REROLL, "bob": LOSE}) == "bob"


def test_round_winner_empty():
    assert round_winner({}) is None
