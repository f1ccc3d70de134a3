import itertools

import pytest

from shoejack.blackjack.evaluator import (
    HandValue,
    card_value,
    evaluate,
    is_natural,
    is_ten_value,
)
from shoejack.common.card import Card, HOLE_CARD, Rank, Suit


@pytest.mark.parametrize(
    "ranks, expected",
    [
        ((), HandValue(0, False)),
        (("A", "6"), HandValue(17, True)),
        (("A", "K"), HandValue(21, True)),
        (("A", "A"), HandValue(12, True)),
        (("A", "A", "9"), HandValue(21, True)),
        (("A", "6", "10"), HandValue(17, False)),
        (("A", "A", "A", "A"), HandValue(14, True)),
        (("10", "6"), HandValue(16, False)),
        (("10", "Q", "2"), HandValue(22, False)),
        (("A", "5", "A", "10"), HandValue(17, False)),
        (("J", "Q", "K"), HandValue(30, False)),
    ],
)
def test_evaluate(make_cards, ranks, expected):
    assert evaluate(make_cards(*ranks)) == expected


def test_evaluate_does_not_mutate(make_cards):
    hand = make_cards("A", "A", "9")
    before = list(hand)
    evaluate(hand)
    assert hand == before


def test_hole_card_scores_nothing(make_cards):
    assert card_value(HOLE_CARD) == 0
    assert evaluate(make_cards("A") + [HOLE_CARD]) == HandValue(11, True)


def test_card_values(make_cards):
    values = [card_value(card) for card in make_cards("A", "2", "9", "10", "J", "Q", "K")]
    assert values == [11, 2, 9, 10, 10, 10, 10]


def test_is_ten_value(make_cards):
    assert all(is_ten_value(card) for card in make_cards("10", "J", "Q", "K"))
    assert not is_ten_value(Card(Suit.HEARTS, Rank.ACE))
    assert not is_ten_value(HOLE_CARD)


def test_is_natural(make_cards):
    assert is_natural(make_cards("A", "K"))
    assert is_natural(make_cards("10", "A"))
    assert not is_natural(make_cards("A", "5", "5"))
    assert not is_natural(make_cards("K", "Q"))
    assert not is_natural(make_cards("A") + [HOLE_CARD])


def _best_assignment(ranks):
    """Best total over every way of counting each ace as 1 or 11."""
    base = sum(10 if rank in ("10", "J", "Q", "K") else int(rank) for rank in ranks if rank != "A")
    aces = sum(1 for rank in ranks if rank == "A")
    totals = [base + sum(choice) for choice in itertools.product((1, 11), repeat=aces)]
    legal = [total for total in totals if total <= 21]
    return max(legal) if legal else min(totals)


def test_evaluate_matches_best_ace_assignment(make_cards):
    ranks = ["A", "2", "5", "6", "9", "K"]
    for size in range(1, 5):
        for combo in itertools.combinations_with_replacement(ranks, size):
            value = evaluate(make_cards(*combo))
            assert value.total == _best_assignment(combo), combo
            if value.is_soft:
                assert "A" in combo
                assert value.total <= 21
