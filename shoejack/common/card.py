"""
This module defines the `Suit`, `Rank`, `Card` and `HoleCard` classes, which are
used to represent playing cards on a blackjack table.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Hearts, Diamonds, Clubs, and Spades.

- `Rank`: An enum representing the thirteen ranks of a standard deck of playing
cards: Ace, Two through Ten, Jack, Queen, and King.

- `Card`: An immutable face-up playing card. A card has a suit and a rank, and
provides comparison, hashing and string conversion.

- `HoleCard`: The dealer's face-down card. It has no suit and no rank and is
only ever seen in the dealer's hand while the players act. `HOLE_CARD` is the
single shared instance.

This module is part of the `shoejack` package, a blackjack rules engine.
"""

from dataclasses import dataclass
from enum import Enum, unique
from typing import Union


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"
    SPADES = "♠"

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck.

    Values are the printed index of the rank, so every member is distinct.
    Scoring lives in `shoejack.blackjack.constants`.
    """

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @property
    def rank_str(self) -> str:
        """A string representation of the rank."""
        return self.value

    def __str__(self) -> str:
        return self.rank_str


@dataclass(frozen=True)
class Card:
    """
    Class representing a face-up playing card.

    >>> card = Card(Suit.HEARTS, Rank.TWO)
    >>> print(card)
    2 of ♥
    >>> card.face_up
    True
    """

    suit: Suit
    rank: Rank

    def __post_init__(self):
        if not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank}")

    @property
    def face_up(self) -> bool:
        return True

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"{self.rank.rank_str} of {self.suit}"


class HoleCard:
    """
    The dealer's face-down card.

    A hole card is a stand-in for a card that has not been drawn yet. It scores
    nothing and is replaced by a real card from the shoe when the dealer
    reveals.

    >>> HoleCard() is HOLE_CARD
    True
    >>> print(HOLE_CARD)
    [hidden]
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def face_up(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "HoleCard()"

    def __str__(self) -> str:
        return "[hidden]"


HOLE_CARD = HoleCard()

# Anything that can sit in a hand on the table.
TableCard = Union[Card, HoleCard]
