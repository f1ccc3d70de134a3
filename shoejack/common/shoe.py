"""
The shoe holds one or more shuffled decks for a session of rounds.

A shoe is shuffled once when it is built. A cut card is placed at
``cut_index``: when the number of cards left drops to that position the shoe
asks to be reshuffled, but it never refills itself. The owner decides when the
reshuffle happens, which on a blackjack table is between rounds.
"""

import logging
import math
import random
from typing import List, Optional

from shoejack.common.card import Card
from shoejack.common.deck import Deck

logger = logging.getLogger(__name__)


class Shoe:
    def __init__(
        self,
        num_decks: int = 1,
        cut_fraction: float = 0.25,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a Shoe instance.

        :param num_decks: Number of decks to use in the shoe (default is 1)
        :param cut_fraction: Fraction of the shoe, counted from the bottom,
                             that sits behind the cut card (default is 25%)
        :param rng: Optional random generator, used to make shuffles reproducible
        """
        if num_decks < 1:
            raise ValueError("Number of decks must be at least 1")
        if not 0 <= cut_fraction < 1:
            raise ValueError("Cut fraction must be in the range [0, 1)")

        self.num_decks = num_decks
        self.cut_fraction = cut_fraction
        self.rng = rng or random.Random()
        self.cards: List[Card] = []
        self.cut_index = 0
        self.needs_reshuffle = False
        self.shuffle_count = 0
        self.total_cards = 52 * num_decks

        self.shuffle()

    @classmethod
    def build(
        cls,
        num_decks: int,
        cut_fraction: float,
        rng: Optional[random.Random] = None,
    ) -> "Shoe":
        """Construct a fully shuffled shoe with a freshly placed cut card."""
        return cls(num_decks=num_decks, cut_fraction=cut_fraction, rng=rng)

    def shuffle(self):
        """Gather every deck back into the shoe, shuffle, and place the cut card."""
        self.cards = []
        for _ in range(self.num_decks):
            self.cards.extend(Deck().cards)

        # random.shuffle is a Fisher-Yates shuffle
        self.rng.shuffle(self.cards)

        self.cut_index = math.floor(len(self.cards) * self.cut_fraction)
        self.needs_reshuffle = False
        self.shuffle_count += 1
        logger.debug(
            "Shuffled %d cards, cut card at %d", len(self.cards), self.cut_index
        )

    def draw(self) -> Optional[Card]:
        """
        Remove and return the last card of the shoe.

        :return: The drawn card, or None if the shoe is exhausted
        """
        if not self.cards:
            return None
        return self.cards.pop()

    def remaining_below_cut(self) -> bool:
        """Return whether the cut card has been reached."""
        return len(self.cards) <= self.cut_index

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining in the shoe."""
        return len(self.cards)

    def get_penetration_percentage(self) -> float:
        """Return how far through the shoe we are, as a fraction of all cards."""
        return (self.total_cards - len(self.cards)) / self.total_cards

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        return f"Shoe with {self.cards_remaining} cards remaining"

    def __repr__(self) -> str:
        return f"Shoe(num_decks={self.num_decks}, cut_fraction={self.cut_fraction})"
