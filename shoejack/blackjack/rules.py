"""
Table rules and configuration.

`Rules` carries the knobs of a table together with the legality checks that
depend only on a hand and the player's chips. The round state machine asks
these questions; it does not answer them itself.
"""

from typing import Any, Dict

from shoejack.blackjack.constants import (
    BLACKJACK_TOTAL,
    DEFAULT_CUT_FRACTION,
    DEFAULT_DEALER_STAND_TOTAL,
    DEFAULT_MAX_HANDS,
    DEFAULT_MIN_BET,
    DEFAULT_STARTING_CHIPS,
    DEFAULT_TARGET_CHIPS,
)
from shoejack.blackjack.evaluator import evaluate, is_ten_value
from shoejack.blackjack.hand import BlackjackHand
from shoejack.common.card import Card, Rank, TableCard


class Rules:
    def __init__(
        self,
        num_decks: int = 1,
        cut_fraction: float = DEFAULT_CUT_FRACTION,
        min_bet: int = DEFAULT_MIN_BET,
        max_hands: int = DEFAULT_MAX_HANDS,
        dealer_stand_total: int = DEFAULT_DEALER_STAND_TOTAL,
        default_starting_chips: int = DEFAULT_STARTING_CHIPS,
        default_target_chips: int = DEFAULT_TARGET_CHIPS,
        auto_advance: bool = True,
    ):
        if num_decks < 1:
            raise ValueError("Number of decks must be at least 1")
        if not 0 <= cut_fraction < 1:
            raise ValueError("Cut fraction must be in the range [0, 1)")
        if min_bet < 1:
            raise ValueError("Minimum bet must be at least 1")
        if max_hands < 1:
            raise ValueError("A table must allow at least one hand")
        if not 1 < dealer_stand_total <= BLACKJACK_TOTAL:
            raise ValueError("Dealer stand total must be between 2 and 21")
        if not 0 < default_starting_chips < default_target_chips:
            raise ValueError("Default target must exceed default starting chips")

        self.num_decks = num_decks
        self.cut_fraction = cut_fraction
        self.min_bet = min_bet
        self.max_hands = max_hands
        self.dealer_stand_total = dealer_stand_total
        self.default_starting_chips = default_starting_chips
        self.default_target_chips = default_target_chips
        self.auto_advance = auto_advance

    def to_dict(self) -> dict:
        """Convert rules to a dictionary for serialization."""
        return {
            "num_decks": self.num_decks,
            "cut_fraction": self.cut_fraction,
            "min_bet": self.min_bet,
            "max_hands": self.max_hands,
            "dealer_stand_total": self.dealer_stand_total,
            "default_starting_chips": self.default_starting_chips,
            "default_target_chips": self.default_target_chips,
            "auto_advance": self.auto_advance,
        }

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "Rules":
        """Build rules from a dictionary, ignoring keys that are not rules."""
        known = cls().to_dict()
        return cls(**{key: config[key] for key in known if key in config})

    def min_bet_for(self, chips: int) -> int:
        """The table minimum, or everything the player has left if that is less."""
        return min(self.min_bet, chips)

    def should_dealer_hit(self, cards) -> bool:
        """The dealer draws below the stand total and stands on every 17."""
        return evaluate(cards).total < self.dealer_stand_total

    def can_split(self, hand: BlackjackHand, chips: int, num_hands: int) -> bool:
        """
        Check if the hand can be split.

        Args:
            hand: The player's hand.
            chips: Chips the player holds outside of any wager.
            num_hands: Hands currently in play.

        Returns:
            bool: True if the hand can be split, False otherwise.
        """
        return (
            not hand.is_finished
            and hand.is_pair
            and chips >= hand.bet
            and self.can_split_more(num_hands)
        )

    def can_split_more(self, current_num_hands: int) -> bool:
        return current_num_hands < self.max_hands

    def can_double_down(self, hand: BlackjackHand, chips: int, num_hands: int) -> bool:
        """
        Check if the hand can be doubled down.

        Doubling needs exactly two cards, a matching stake, and a single hand
        in play: this table does not double after a split.
        """
        return (
            len(hand.cards) == 2
            and not hand.is_finished
            and not hand.has_doubled
            and not hand.is_bust
            and chips >= hand.bet
            and num_hands == 1
        )

    def can_hit(self, hand: BlackjackHand) -> bool:
        return not hand.is_finished and hand.value() < BLACKJACK_TOTAL

    def offers_insurance(self, up_card: TableCard) -> bool:
        """Insurance is offered against an ace or a ten-valued up-card."""
        if isinstance(up_card, Card) and up_card.rank == Rank.ACE:
            return True
        return is_ten_value(up_card)
