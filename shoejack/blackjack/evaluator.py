"""
Hand evaluation for blackjack.

The evaluator turns a sequence of table cards into a total and a soft flag.
It knows nothing about bets or phases and never mutates what it is given, so
it can be re-run whenever a hand changes.

>>> from shoejack.common.card import Card, Rank, Suit
>>> evaluate([Card(Suit.HEARTS, Rank.ACE), Card(Suit.CLUBS, Rank.SIX)])
HandValue(total=17, is_soft=True)
"""

from typing import Iterable, NamedTuple

from shoejack.blackjack.constants import (
    ACE_DEMOTION,
    BLACKJACK_TOTAL,
    TEN_VALUE_RANKS,
    get_blackjack_value,
)
from shoejack.common.card import Card, Rank, TableCard


class HandValue(NamedTuple):
    total: int
    is_soft: bool


def card_value(card: TableCard) -> int:
    """Blackjack value of a single card; a hole card scores nothing."""
    if not isinstance(card, Card):
        return 0
    return get_blackjack_value(card.rank)


def is_ten_value(card: TableCard) -> bool:
    return isinstance(card, Card) and card.rank in TEN_VALUE_RANKS


def evaluate(cards: Iterable[TableCard]) -> HandValue:
    """
    Compute the best total of a hand and whether it is soft.

    Aces start at 11. While the total is over 21 and an ace is still counted
    high, one ace is demoted to 1. The hand is soft iff an ace is still
    counted as 11 afterwards.
    """
    total = 0
    high_aces = 0

    for card in cards:
        if not isinstance(card, Card):
            continue
        if card.rank == Rank.ACE:
            high_aces += 1
        total += get_blackjack_value(card.rank)

    while total > BLACKJACK_TOTAL and high_aces > 0:
        total -= ACE_DEMOTION
        high_aces -= 1

    return HandValue(total=total, is_soft=high_aces > 0)


def is_natural(cards: Iterable[TableCard]) -> bool:
    """Two face-up cards totalling 21."""
    cards = list(cards)
    if len(cards) != 2 or not all(isinstance(card, Card) for card in cards):
        return False
    return evaluate(cards).total == BLACKJACK_TOTAL
