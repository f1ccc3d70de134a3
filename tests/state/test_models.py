"""
Tests for the immutable state models.
"""

import dataclasses

import pytest

from shoejack.common.card import Card, HOLE_CARD, Rank, Suit
from shoejack.state import GamePhase, HandSnapshot, TableSnapshot


def test_phase_values():
    assert str(GamePhase.PLAYER_TURN) == "player-turn"
    assert GamePhase("out-of-chips") is GamePhase.OUT_OF_CHIPS


def test_terminal_phases():
    assert GamePhase.VICTORY.is_terminal
    assert GamePhase.OUT_OF_CHIPS.is_terminal
    assert not GamePhase.BETTING.is_terminal
    assert not GamePhase.SETTLEMENT.is_terminal


def test_hand_snapshot_is_frozen():
    hand = HandSnapshot(bet=10)
    with pytest.raises(dataclasses.FrozenInstanceError):
        hand.bet = 20


def test_hand_snapshot_flags():
    blackjack = HandSnapshot(
        cards=(Card(Suit.HEARTS, Rank.ACE), Card(Suit.SPADES, Rank.KING)), total=21
    )
    assert blackjack.is_blackjack
    assert not blackjack.is_bust
    assert HandSnapshot(total=22).is_bust


def test_hand_snapshot_to_dict():
    hand = HandSnapshot(
        cards=(Card(Suit.HEARTS, Rank.ACE), Card(Suit.SPADES, Rank.SIX)),
        bet=10,
        total=17,
        is_soft=True,
    )
    data = hand.to_dict()
    assert data["cards"] == ["A of ♥", "6 of ♠"]
    assert data["value"] == 17
    assert data["is_soft"]
    assert not data["is_bust"]


def test_table_snapshot_defaults():
    snap = TableSnapshot()
    assert snap.phase == GamePhase.SETUP
    assert snap.active_hand is None
    assert snap.dealer_up_card is None
    assert not snap.hole_card_concealed


def test_table_snapshot_hides_hole_card():
    up_card = Card(Suit.CLUBS, Rank.NINE)
    snap = TableSnapshot(
        phase=GamePhase.PLAYER_TURN,
        hands=(HandSnapshot(bet=10, total=12),),
        dealer_cards=(up_card, HOLE_CARD),
        dealer_total=9,
    )
    assert snap.active_hand.total == 12
    assert snap.dealer_up_card == up_card
    assert snap.hole_card_concealed

    data = snap.to_dict()
    assert data["phase"] == "player-turn"
    assert data["dealer"] == {
        "hand": ["9 of ♣", "[hidden]"],
        "value": 9,
        "hide_second_card": True,
    }
    assert data["hands"][0]["bet"] == 10
