"""Blackjack-specific constants and value mappings."""

from shoejack.common.card import Rank

BLACKJACK_VALUES = {
    Rank.ACE: 11,  # Demoted to 1 by the evaluator when the hand would bust
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
}

TEN_VALUE_RANKS = frozenset(
    rank for rank, value in BLACKJACK_VALUES.items() if value == 10
)

BLACKJACK_TOTAL = 21
ACE_DEMOTION = 10

# Payouts are returns on the stake, stake included.
WIN_PAYOUT_MULTIPLIER = 2
BLACKJACK_PAYOUT_MULTIPLIER = 2.5
INSURANCE_PAYOUT_MULTIPLIER = 2

DEFAULT_MIN_BET = 10
DEFAULT_MAX_HANDS = 8
DEFAULT_DEALER_STAND_TOTAL = 17
DEFAULT_CUT_FRACTION = 0.25
DEFAULT_STARTING_CHIPS = 1000
DEFAULT_TARGET_CHIPS = 2000


def get_blackjack_value(rank: Rank) -> int:
    """Get the blackjack value for a given rank."""
    return BLACKJACK_VALUES[rank]
