"""
This module contains the Deck class, which represents a single 52-card deck.

>>> deck = Deck()
>>> len(deck)
52
>>> deck.cards[-1]
Card(Suit.SPADES, Rank.KING)
"""

from typing import List, Optional

from shoejack.common.card import Card, Rank, Suit


class Deck:
    """
    A class representing a deck of cards, in suit then rank order.
    """

    # Precompute the default deck
    _default_deck = [
        Card(suit, rank)
        for suit in [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]
        for rank in Rank
    ]

    def __init__(self, cards: Optional[List[Card]] = None):
        """
        Initialize a Deck instance.

        :param cards: A list of Card instances to populate the deck (optional).
                      If not provided, a default deck will be constructed.
        """
        if cards is None:
            self.cards: List[Card] = self.initialize_default_deck()
        else:
            self.cards = cards.copy()

    def initialize_default_deck(self) -> List[Card]:
        """
        Construct a default deck with all possible combinations of suits and ranks.

        :return: A list of Card instances representing the default deck.
        """
        return self._default_deck.copy()

    def __len__(self) -> int:
        return len(self.cards)
