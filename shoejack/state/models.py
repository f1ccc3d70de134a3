"""
Immutable state models for the shoejack table.

This module provides the phase enum of the round state machine and frozen
dataclasses describing the table as callers see it. The table builds a fresh
snapshot on request; nothing a caller holds can mutate the table.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from shoejack.common.card import TableCard


class GamePhase(Enum):
    """
    Phases of the round state machine.
    """

    SETUP = "setup"
    BETTING = "betting"
    DEALING = "dealing"
    PLAYER_TURN = "player-turn"
    DEALER_TURN = "dealer-turn"
    SETTLEMENT = "settlement"
    VICTORY = "victory"
    OUT_OF_CHIPS = "out-of-chips"

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.VICTORY, GamePhase.OUT_OF_CHIPS)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HandSnapshot:
    """
    Immutable representation of a player hand.

    Attributes:
        cards: Cards in the hand
        bet: Current stake on this hand
        insurance_bet: Insurance stake carried by the hand
        is_finished: Whether play on this hand is over
        has_doubled: Whether the stake has been doubled
        is_split: Whether this hand was created via a split
        total: Best total of the hand
        is_soft: Whether an ace is counted as 11
    """

    cards: Tuple[TableCard, ...] = ()
    bet: int = 0
    insurance_bet: int = 0
    is_finished: bool = False
    has_doubled: bool = False
    is_split: bool = False
    total: int = 0
    is_soft: bool = False

    @property
    def is_bust(self) -> bool:
        return self.total > 21

    @property
    def is_blackjack(self) -> bool:
        return len(self.cards) == 2 and self.total == 21

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cards": [str(card) for card in self.cards],
            "bet": self.bet,
            "insurance_bet": self.insurance_bet,
            "is_finished": self.is_finished,
            "has_doubled": self.has_doubled,
            "is_split": self.is_split,
            "value": self.total,
            "is_soft": self.is_soft,
            "is_bust": self.is_bust,
            "is_blackjack": self.is_blackjack,
        }


@dataclass(frozen=True)
class TableSnapshot:
    """
    Immutable representation of the whole table.

    Attributes:
        phase: Current phase of the round
        chips: Chips held outside of any wager
        current_bet: Stake placed for the current round
        starting_chips: Chips the session started with
        target_chips: Chip total that wins the session
        hands: The player's hands in table order
        active_hand_index: Index of the hand being played
        dealer_cards: Dealer cards, hole card included while concealed
        dealer_total: Total of the dealer's face-up cards
        insurance_available: Whether insurance may still be bought
        insurance_bet: Insurance stake for the round
        can_*: Whether the matching command would currently be accepted
        min_bet / max_bet: Accepted range for the next bet
        message: Human-readable status after the latest transition
        is_busy: Whether a staged sequence is still pending
        shoe_cards_remaining: Cards left in the shoe, None before the first deal
        needs_reshuffle: Whether the shoe is rebuilt before the next deal
        shuffle_count: Times the shoe has been shuffled this session
        round_number: Rounds dealt this session
    """

    phase: GamePhase = GamePhase.SETUP
    chips: int = 0
    current_bet: int = 0
    starting_chips: int = 0
    target_chips: int = 0
    hands: Tuple[HandSnapshot, ...] = ()
    active_hand_index: int = 0
    dealer_cards: Tuple[TableCard, ...] = ()
    dealer_total: int = 0
    insurance_available: bool = False
    insurance_bet: int = 0
    can_hit: bool = False
    can_stand: bool = False
    can_split: bool = False
    can_double_down: bool = False
    can_bet: bool = False
    can_insure: bool = False
    min_bet: int = 0
    max_bet: int = 0
    message: str = ""
    is_busy: bool = False
    shoe_cards_remaining: Optional[int] = None
    needs_reshuffle: bool = False
    shuffle_count: int = 0
    round_number: int = 0
    rules: Dict[str, Any] = field(default_factory=dict)

    @property
    def active_hand(self) -> Optional[HandSnapshot]:
        """Get the hand being played."""
        if not self.hands or self.active_hand_index >= len(self.hands):
            return None
        return self.hands[self.active_hand_index]

    @property
    def dealer_up_card(self) -> Optional[TableCard]:
        return self.dealer_cards[0] if self.dealer_cards else None

    @property
    def hole_card_concealed(self) -> bool:
        return any(not card.face_up for card in self.dealer_cards)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the snapshot to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the table
        """
        return {
            "phase": self.phase.value,
            "round_number": self.round_number,
            "chips": self.chips,
            "current_bet": self.current_bet,
            "starting_chips": self.starting_chips,
            "target_chips": self.target_chips,
            "active_hand_index": self.active_hand_index,
            "hands": [hand.to_dict() for hand in self.hands],
            "dealer": {
                "hand": [str(card) for card in self.dealer_cards],
                "value": self.dealer_total,
                "hide_second_card": self.hole_card_concealed,
            },
            "insurance": {
                "available": self.insurance_available,
                "bet": self.insurance_bet,
            },
            "actions": {
                "hit": self.can_hit,
                "stand": self.can_stand,
                "split": self.can_split,
                "double_down": self.can_double_down,
                "bet": self.can_bet,
                "insure": self.can_insure,
            },
            "min_bet": self.min_bet,
            "max_bet": self.max_bet,
            "message": self.message,
            "is_busy": self.is_busy,
            "shoe": {
                "cards_remaining": self.shoe_cards_remaining,
                "needs_reshuffle": self.needs_reshuffle,
                "shuffle_count": self.shuffle_count,
            },
            "rules": dict(self.rules),
        }
