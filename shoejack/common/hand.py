"""
This module contains classes to represent a hand of cards on the table.

It includes an abstract base class `AbstractHand`, and a concrete implementation `Hand`.
Each hand can have multiple cards, and provides methods for adding and taking back cards.

Classes:

AbstractHand: An abstract base class for a hand of cards.
Hand: A concrete implementation of a hand of cards.
"""
from abc import ABC
from typing import Iterable, List, Optional

from shoejack.common.card import TableCard


class AbstractHand(ABC):
    """
    An abstract base class for a hand of cards.

    This class provides a basic structure for a hand of cards, including methods to add and remove cards.
    Subclasses should override the __repr__ and __str__ methods to provide a string representation of the hand.
    """

    def __init__(self, cards: Optional[Iterable[TableCard]] = None):
        self._cards: List[TableCard] = list(cards) if cards else []

    @property
    def cards(self) -> List[TableCard]:
        """Returns the cards in the hand."""
        return self._cards

    def add_card(self, card: TableCard) -> None:
        """
        Adds a card to the hand.

        Args:
            card: The card to add.
        """
        self._cards.append(card)

    def pop_card(self) -> TableCard:
        """Removes and returns the last card of the hand."""
        return self._cards.pop()

    def __len__(self) -> int:
        return len(self._cards)


class Hand(AbstractHand):
    """
    A concrete implementation of a hand of cards.

    This class provides a string representation of a hand of cards for both debugging and display purposes.
    """

    def __repr__(self) -> str:
        return f"Hand({self.cards!r})"

    def __str__(self) -> str:
        return ", ".join(str(card) for card in self.cards)
