import pytest

from shoejack.blackjack.hand import BlackjackHand
from shoejack.common.card import Card, Rank, Suit


def test_value(make_cards):
    hand = BlackjackHand(make_cards("10", "A"))
    assert hand.value() == 21


def test_value_with_multiple_aces(make_cards):
    hand = BlackjackHand()
    for card in make_cards("A", "A"):
        hand.add_card(card)
    assert hand.value() == 12


def test_is_soft(make_cards):
    assert BlackjackHand(make_cards("A", "2")).is_soft
    assert not BlackjackHand(make_cards("10", "2")).is_soft
    assert not BlackjackHand(make_cards("A", "6", "10")).is_soft


def test_empty_hand_value():
    assert BlackjackHand().value() == 0


def test_hand_bust(make_cards):
    hand = BlackjackHand(make_cards("10", "10", "2"))
    assert hand.is_bust


def test_blackjack(make_cards):
    assert BlackjackHand(make_cards("A", "K")).is_blackjack
    assert not BlackjackHand(make_cards("A", "5", "5")).is_blackjack


def test_split_hand_counts_as_blackjack(make_cards):
    hand = BlackjackHand(make_cards("A", "K"), bet=10, is_split=True)
    assert hand.is_blackjack


def test_pair(make_cards):
    assert BlackjackHand(make_cards("8", "8")).is_pair
    assert BlackjackHand(make_cards("K", "10")).is_pair
    assert BlackjackHand(make_cards("A", "A")).is_pair
    assert not BlackjackHand(make_cards("8", "9")).is_pair
    assert not BlackjackHand(make_cards("8", "8", "8")).is_pair


def test_double():
    hand = BlackjackHand([Card(Suit.HEARTS, Rank.FIVE), Card(Suit.CLUBS, Rank.SIX)], bet=25)
    assert hand.double() == 25
    assert hand.bet == 50
    assert hand.has_doubled


def test_double_twice_raises():
    hand = BlackjackHand(bet=25)
    hand.double()
    with pytest.raises(ValueError):
        hand.double()


def test_new_hand_state():
    hand = BlackjackHand(bet=10)
    assert hand.bet == 10
    assert hand.insurance_bet == 0
    assert not hand.is_finished
    assert not hand.has_doubled
    assert not hand.is_split
