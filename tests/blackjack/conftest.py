"""
Pytest configuration and fixtures for blackjack tests.
"""

from typing import List

import pytest

from shoejack.blackjack.rules import Rules
from shoejack.blackjack.table import BlackjackTable
from shoejack.common.card import Card, Rank, Suit
from shoejack.common.shoe import Shoe
from shoejack.events import EventEmitter


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "split: mark test as testing split scenarios")
    config.addinivalue_line(
        "markers", "insurance: mark test as testing insurance scenarios"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as a full-round scenario"
    )


def cards(*ranks: str, suit: Suit = Suit.SPADES) -> List[Card]:
    """Build cards from printed ranks, e.g. cards("A", "10", "K")."""
    return [Card(suit, Rank(rank)) for rank in ranks]


class StackedShoe(Shoe):
    """A shoe that always deals the given cards, first card first.

    Filler twos are placed after the stack so that unexpected draws do not
    exhaust the shoe.
    """

    def __init__(self, stack: List[Card], num_decks=1, cut_fraction=0.25, filler=20):
        self._stack = list(stack) + cards(*["2"] * filler, suit=Suit.CLUBS)
        super().__init__(num_decks=num_decks, cut_fraction=cut_fraction)

    def shuffle(self):
        self.cards = list(reversed(self._stack))
        self.total_cards = len(self.cards)
        self.cut_index = int(len(self.cards) * self.cut_fraction)
        self.needs_reshuffle = False
        self.shuffle_count += 1


@pytest.fixture
def make_cards():
    return cards


@pytest.fixture
def emitter():
    return EventEmitter()


@pytest.fixture
def make_table(emitter):
    """Factory for configured tables dealing from a stacked shoe.

    Usage: make_table("10", "6", "9", "8", chips=1000, target=2000)
    The ranks are dealt in order: player, dealer up-card, player, then every
    later draw (split cards, hits, the hole card at reveal, dealer hits).
    """

    def _make(*ranks, chips=1000, target=2000, rules=None, filler=20, **rule_overrides):
        stack = cards(*ranks)
        table = BlackjackTable(
            rules=rules or Rules(**rule_overrides),
            event_bus=emitter,
            shoe_factory=lambda num_decks, cut_fraction, rng: StackedShoe(
                stack, num_decks, cut_fraction, filler
            ),
        )
        assert table.configure(chips, target)
        return table

    return _make
