"""
A wagered blackjack hand.
"""

from typing import Iterable, Optional

from shoejack.blackjack.constants import BLACKJACK_TOTAL
from shoejack.blackjack.evaluator import HandValue, card_value, evaluate, is_natural
from shoejack.common.card import TableCard
from shoejack.common.hand import Hand


class BlackjackHand(Hand):
    """A hand in the game of Blackjack, carrying its own wager and play state."""

    __slots__ = ("bet", "insurance_bet", "is_finished", "has_doubled", "is_split")

    def __init__(
        self,
        cards: Optional[Iterable[TableCard]] = None,
        bet: int = 0,
        is_split: bool = False,
    ):
        super().__init__(cards)
        self.bet = bet
        self.insurance_bet = 0
        self.is_finished = False
        self.has_doubled = False
        self.is_split = is_split

    def evaluate(self) -> HandValue:
        return evaluate(self._cards)

    def value(self) -> int:
        """Calculate the optimal value of the hand with ace handling."""
        return self.evaluate().total

    @property
    def is_soft(self) -> bool:
        """Determine if the hand is soft (contains an ace counted as 11)."""
        return self.evaluate().is_soft

    @property
    def is_bust(self) -> bool:
        return self.value() > BLACKJACK_TOTAL

    @property
    def is_blackjack(self) -> bool:
        """Two cards totalling 21, split hands included."""
        return is_natural(self._cards)

    @property
    def is_pair(self) -> bool:
        """Two cards of equal blackjack value; any two ten-valued cards pair."""
        return len(self._cards) == 2 and card_value(self._cards[0]) == card_value(
            self._cards[1]
        )

    def double(self) -> int:
        """
        Double the wager once.

        Returns:
            The additional stake taken.
        """
        if self.has_doubled:
            raise ValueError("Hand has already been doubled")
        extra = self.bet
        self.bet += extra
        self.has_doubled = True
        return extra

    def __repr__(self) -> str:
        return f"BlackjackHand({self.cards!r}, bet={self.bet})"
