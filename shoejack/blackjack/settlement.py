"""
Settlement of a finished round.

Given the player's finished hands and the dealer's revealed cards, `settle`
works out what every hand returns and what the insurance side bet returns.
It applies nothing: the table adds the totals to the player's chips.

Every payout is a return on the stake, stake included, because stakes leave
the player's chips when they are placed. A push returns the bet, a win
returns twice the bet, a natural returns two and a half times the bet rounded
down.

Resolution order per hand:

1. a busted hand loses, even if the dealer busts too;
2. a dealer bust pays every live hand;
3. a player natural beats a dealer without one;
4. a dealer natural beats a player without one;
5. otherwise totals are compared.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from shoejack.blackjack.constants import (
    BLACKJACK_PAYOUT_MULTIPLIER,
    BLACKJACK_TOTAL,
    INSURANCE_PAYOUT_MULTIPLIER,
    WIN_PAYOUT_MULTIPLIER,
)
from shoejack.blackjack.evaluator import evaluate, is_natural
from shoejack.blackjack.hand import BlackjackHand
from shoejack.common.card import TableCard

logger = logging.getLogger(__name__)


class HandResult(Enum):
    BUST = "bust"
    WIN = "win"
    BLACKJACK = "blackjack"
    LOSE = "lose"
    PUSH = "push"


@dataclass(frozen=True)
class HandOutcome:
    """
    The resolution of one player hand.

    Attributes:
        hand_number: 1-based position of the hand at the table
        result: How the hand was resolved
        total: Final total of the hand
        bet: Stake on the hand, doubled stakes included
        payout: Chips returned to the player, stake included
        message: Human-readable line for the status message
    """

    hand_number: int
    result: HandResult
    total: int
    bet: int
    payout: int
    message: str

    @property
    def net(self) -> int:
        return self.payout - self.bet


@dataclass(frozen=True)
class SettlementResult:
    dealer_total: int
    dealer_blackjack: bool
    outcomes: List[HandOutcome] = field(default_factory=list)
    insurance_bet: int = 0
    insurance_payout: int = 0

    @property
    def hand_payout(self) -> int:
        return sum(outcome.payout for outcome in self.outcomes)

    @property
    def total_payout(self) -> int:
        return self.hand_payout + self.insurance_payout

    @property
    def net(self) -> int:
        staked = sum(outcome.bet for outcome in self.outcomes) + self.insurance_bet
        return self.total_payout - staked

    @property
    def messages(self) -> List[str]:
        lines = []
        if self.insurance_bet > 0:
            if self.insurance_payout > 0:
                lines.append(f"Insurance payout! Won {self.insurance_payout} chips.")
            else:
                lines.append(f"Insurance lost! Lost {self.insurance_bet} chips.")
        lines.extend(outcome.message for outcome in self.outcomes)
        return lines


def resolve_hand(
    hand_number: int,
    hand: BlackjackHand,
    dealer_total: int,
    dealer_blackjack: bool,
) -> HandOutcome:
    """Resolve a single hand against the dealer's final total."""
    total = hand.value()
    bet = hand.bet
    player_blackjack = hand.is_blackjack

    if total > BLACKJACK_TOTAL:
        return HandOutcome(
            hand_number,
            HandResult.BUST,
            total,
            bet,
            0,
            f"Hand {hand_number} busts with {total}. Lost {bet} chips.",
        )

    if dealer_total > BLACKJACK_TOTAL:
        return HandOutcome(
            hand_number,
            HandResult.WIN,
            total,
            bet,
            bet * WIN_PAYOUT_MULTIPLIER,
            f"Dealer busts. Hand {hand_number} wins {bet} chips.",
        )

    if player_blackjack and not dealer_blackjack:
        payout = math.floor(bet * BLACKJACK_PAYOUT_MULTIPLIER)
        return HandOutcome(
            hand_number,
            HandResult.BLACKJACK,
            total,
            bet,
            payout,
            f"Hand {hand_number} hits Blackjack! Won {payout - bet} chips.",
        )

    if dealer_blackjack and not player_blackjack:
        return HandOutcome(
            hand_number,
            HandResult.LOSE,
            total,
            bet,
            0,
            f"Hand {hand_number} loses. Dealer has Blackjack. Lost {bet} chips.",
        )

    if total > dealer_total:
        return HandOutcome(
            hand_number,
            HandResult.WIN,
            total,
            bet,
            bet * WIN_PAYOUT_MULTIPLIER,
            f"Hand {hand_number} wins vs dealer ({total} vs {dealer_total}). "
            f"Won {bet} chips.",
        )
    if total < dealer_total:
        return HandOutcome(
            hand_number,
            HandResult.LOSE,
            total,
            bet,
            0,
            f"Hand {hand_number} loses vs dealer ({total} vs {dealer_total}). "
            f"Lost {bet} chips.",
        )
    return HandOutcome(
        hand_number,
        HandResult.PUSH,
        total,
        bet,
        bet,
        f"Hand {hand_number} pushes with dealer ({total}). It's a Tie.",
    )


def resolve_insurance(insurance_bet: int, dealer_blackjack: bool) -> int:
    """Insurance pays 2:1 on the side bet, stake included, against a dealer natural."""
    if insurance_bet > 0 and dealer_blackjack:
        return insurance_bet * INSURANCE_PAYOUT_MULTIPLIER
    return 0


def settle(
    hands: Sequence[BlackjackHand],
    dealer_cards: Sequence[TableCard],
    insurance_bet: int = 0,
) -> SettlementResult:
    """
    Resolve every player hand, in table order, and the insurance side bet.

    Args:
        hands: The player's finished hands
        dealer_cards: The dealer's cards with the hole card already revealed
        insurance_bet: The round's insurance stake, 0 if none was placed

    Returns:
        A SettlementResult holding one outcome per hand
    """
    if any(not card.face_up for card in dealer_cards):
        raise ValueError("Dealer hand must be revealed before settlement")

    dealer_total = evaluate(dealer_cards).total
    dealer_blackjack = is_natural(dealer_cards)

    outcomes = [
        resolve_hand(number, hand, dealer_total, dealer_blackjack)
        for number, hand in enumerate(hands, start=1)
    ]
    result = SettlementResult(
        dealer_total=dealer_total,
        dealer_blackjack=dealer_blackjack,
        outcomes=outcomes,
        insurance_bet=insurance_bet,
        insurance_payout=resolve_insurance(insurance_bet, dealer_blackjack),
    )
    logger.info(
        "Settled %d hand(s) against dealer %d: payout %d, net %+d",
        len(outcomes),
        dealer_total,
        result.total_payout,
        result.net,
    )
    return result
