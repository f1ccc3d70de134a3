"""
The blackjack table: a single-seat, multi-hand round state machine.

A table moves through the phases

    SETUP -> BETTING -> DEALING -> PLAYER_TURN -> DEALER_TURN -> SETTLEMENT
          -> BETTING | VICTORY | OUT_OF_CHIPS

and owns everything that changes along the way: the shoe, the chips, the
player's hands and the dealer's hand. Callers drive it with commands and read
it through `snapshot()`.

Commands never raise for a move that is merely illegal. They return False,
leave the table untouched and explain themselves in the status message.
Broken invariants, on the other hand, raise `InvariantViolation`.

The deal and the dealer's turn are staged sequences. Each stage is one step of
a generator; `advance()` runs a single stage and `run_pending()` runs them
all. With ``Rules.auto_advance`` (the default) every command runs its
sequence to the end before returning, so a presentation layer that wants to
pace the reveal turns it off and ticks `advance()` itself. Player commands are
refused while a sequence is pending.
"""

import functools
import logging
import random
import time
from typing import Callable, Iterator, List, Optional

from shoejack.blackjack.action import Action
from shoejack.blackjack.constants import BLACKJACK_TOTAL
from shoejack.blackjack.errors import (
    IllegalActionError,
    InsufficientFundsError,
    InvariantViolation,
    ShoeExhaustedError,
)
from shoejack.blackjack.evaluator import evaluate
from shoejack.blackjack.hand import BlackjackHand
from shoejack.blackjack.round_logger import RoundLogger
from shoejack.blackjack.rules import Rules
from shoejack.blackjack.settlement import SettlementResult, settle
from shoejack.blackjack.stats import SessionStats
from shoejack.common.card import HOLE_CARD, Card
from shoejack.common.hand import Hand
from shoejack.common.shoe import Shoe
from shoejack.events import EngineEventType, EventBus, EventEmitter
from shoejack.state.models import GamePhase, HandSnapshot, TableSnapshot

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Welcome to Blackjack! Set your starting chips and win goal to begin."
)
TURN_MESSAGE = "Your turn! Hit, Stand, or Split if possible."

# Cards a round needs when nobody hits: three dealt, one for the hole card.
MIN_CARDS_PER_ROUND = 4

ShoeFactory = Callable[[int, float, Optional[random.Random]], Shoe]


def command(func):
    """
    Turn a table method into a command.

    An `IllegalActionError` raised by the method becomes a rejection: the
    status message explains it and the command returns False. Accepted
    commands run any sequence they scheduled when the table auto-advances.
    """

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            result = func(self, *args, **kwargs)
        except IllegalActionError as exc:
            self._reject(func.__name__, str(exc))
            return False
        self._check_invariants()
        if self.rules.auto_advance:
            self.run_pending()
        return True if result is None else result

    return wrapper


class BlackjackTable:
    """
    Round state machine and chip ledger for one player.

    Attributes:
        rules: Table configuration and legality checks
        event_bus: Emitter the table reports its transitions on
        round_log: Transcript of the status messages of every round
        stats: Chip economy of the session
    """

    def __init__(
        self,
        rules: Optional[Rules] = None,
        event_bus: Optional[EventEmitter] = None,
        rng: Optional[random.Random] = None,
        shoe_factory: Optional[ShoeFactory] = None,
    ):
        """
        Initialize a table in the SETUP phase.

        Args:
            rules: Table rules; defaults apply when omitted
            event_bus: Emitter for table events, the global EventBus by default
            rng: Random generator handed to every shoe the table builds
            shoe_factory: Callable building a shoe from (num_decks, cut_fraction, rng)
        """
        self.rules = rules or Rules()
        self.event_bus = event_bus or EventBus.get_instance()
        self.round_log = RoundLogger()
        self._rng = rng
        self._shoe_factory = shoe_factory or Shoe.build
        self._reset_session()

    def _reset_session(self):
        self._phase = GamePhase.SETUP
        self._starting_chips = self.rules.default_starting_chips
        self._target_chips = self.rules.default_target_chips
        self._chips = self._starting_chips
        self._num_decks = self.rules.num_decks
        self._current_bet = 0
        self._shoe: Optional[Shoe] = None
        self._hands: List[BlackjackHand] = []
        self._active_index = 0
        self._dealer = Hand()
        self._insurance_available = False
        self._insurance_bet = 0
        self._round_number = 0
        self._round_stake = 0
        self._pending: Optional[Iterator[None]] = None
        self._message = WELCOME_MESSAGE
        self.last_settlement: Optional[SettlementResult] = None
        self.stats = SessionStats(self._chips)
        self.round_log.reset()

    # ------------------------------------------------------------------
    # Read-only view

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def chips(self) -> int:
        return self._chips

    @property
    def message(self) -> str:
        return self._message

    @property
    def is_busy(self) -> bool:
        """Whether a staged sequence is still waiting to be advanced."""
        return self._pending is not None

    @property
    def round_number(self) -> int:
        return self._round_number

    def snapshot(self) -> TableSnapshot:
        """Build an immutable picture of the table as it stands."""
        hands = tuple(
            HandSnapshot(
                cards=tuple(hand.cards),
                bet=hand.bet,
                insurance_bet=hand.insurance_bet,
                is_finished=hand.is_finished,
                has_doubled=hand.has_doubled,
                is_split=hand.is_split,
                total=hand.value(),
                is_soft=hand.is_soft,
            )
            for hand in self._hands
        )
        return TableSnapshot(
            phase=self._phase,
            chips=self._chips,
            current_bet=self._current_bet,
            starting_chips=self._starting_chips,
            target_chips=self._target_chips,
            hands=hands,
            active_hand_index=self._active_index,
            dealer_cards=tuple(self._dealer.cards),
            dealer_total=evaluate(self._dealer.cards).total,
            insurance_available=self._insurance_available,
            insurance_bet=self._insurance_bet,
            can_hit=self.can_hit(),
            can_stand=self.can_stand(),
            can_split=self.can_split(),
            can_double_down=self.can_double_down(),
            can_bet=self.can_bet(),
            can_insure=self.can_insure(),
            min_bet=self.min_bet,
            max_bet=self.max_bet,
            message=self._message,
            is_busy=self.is_busy,
            shoe_cards_remaining=self._shoe.cards_remaining if self._shoe else None,
            needs_reshuffle=self._shoe.needs_reshuffle if self._shoe else False,
            shuffle_count=self._shoe.shuffle_count if self._shoe else 0,
            round_number=self._round_number,
            rules=self.rules.to_dict(),
        )

    # ------------------------------------------------------------------
    # Legality

    @property
    def min_bet(self) -> int:
        return self.rules.min_bet_for(self._chips)

    @property
    def max_bet(self) -> int:
        return self._chips

    def _active_hand(self) -> Optional[BlackjackHand]:
        if self._phase is not GamePhase.PLAYER_TURN or self.is_busy:
            return None
        return self._hands[self._active_index]

    def can_bet(self) -> bool:
        return self._phase is GamePhase.BETTING and not self.is_busy and self._chips > 0

    def can_hit(self) -> bool:
        hand = self._active_hand()
        return hand is not None and self.rules.can_hit(hand)

    def can_stand(self) -> bool:
        return self._active_hand() is not None

    def can_split(self, hand_index: Optional[int] = None) -> bool:
        if self._active_hand() is None:
            return False
        if hand_index is None:
            hand_index = self._active_index
        if not 0 <= hand_index < len(self._hands):
            return False
        return self.rules.can_split(
            self._hands[hand_index], self._chips, len(self._hands)
        )

    def can_double_down(self) -> bool:
        hand = self._active_hand()
        return hand is not None and self.rules.can_double_down(
            hand, self._chips, len(self._hands)
        )

    def can_insure(self) -> bool:
        return (
            self._active_hand() is not None
            and self._insurance_available
            and self._insurance_bet == 0
            and self._chips > 0
            and not any(hand.is_finished for hand in self._hands)
        )

    # ------------------------------------------------------------------
    # Commands

    @command
    def configure(
        self,
        starting_chips: int,
        target_chips: int,
        num_decks: Optional[int] = None,
    ):
        """Set the chip totals for the session and open betting."""
        self._require_idle()
        self._require_phase("configure", GamePhase.SETUP)
        if num_decks is None:
            num_decks = self.rules.num_decks
        if not isinstance(starting_chips, int) or starting_chips <= 0:
            raise IllegalActionError("Starting chips must be a positive number.")
        if not isinstance(target_chips, int) or target_chips <= starting_chips:
            raise IllegalActionError("Your goal must be more than your starting chips.")
        if not isinstance(num_decks, int) or num_decks < 1:
            raise IllegalActionError("The shoe needs at least one deck.")

        self._starting_chips = starting_chips
        self._target_chips = target_chips
        self._chips = starting_chips
        self._num_decks = num_decks
        self.stats = SessionStats(starting_chips)
        self._set_phase(GamePhase.BETTING)
        self._set_message(
            f"You have {self._chips} chips. Goal: {target_chips}. "
            "Place your bet to start!"
        )
        self._emit(
            EngineEventType.GAME_CREATED,
            starting_chips=starting_chips,
            target_chips=target_chips,
            num_decks=num_decks,
            rules=self.rules.to_dict(),
        )

    @command
    def place_bet(self, amount: int) -> bool:
        """Stake chips on a new round and schedule the deal."""
        self._require_idle()
        self._require_phase("place a bet", GamePhase.BETTING)
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise IllegalActionError("Bets must be a whole number of chips.")
        if amount < self.min_bet or amount > self._chips:
            raise IllegalActionError(
                f"Invalid bet! Min: {self.min_bet}, Max: {self._chips}"
            )

        self._round_stake = self._chips
        self._chips -= amount
        self._current_bet = amount
        self._round_number += 1
        self.round_log.log_round_start(self._round_number, amount)
        self._set_message(f"Bet placed: {amount} chips. Starting new hand...")
        self._emit(EngineEventType.PLAYER_BET, amount=amount, chips=self._chips)
        self._pending = self._deal_sequence()
        return True

    @command
    def hit(self):
        """Draw one card into the active hand."""
        hand = self._require_player_turn("hit")
        if not self.rules.can_hit(hand):
            raise IllegalActionError(f"You cannot hit on {hand.value()}.")
        self._require_cards(1)

        card = self._draw()
        hand.add_card(card)
        total = hand.value()
        self._record_action(Action.HIT, f"drew {card} for {total}")
        self._emit(
            EngineEventType.CARD_DEALT,
            card=str(card),
            is_dealer=False,
            hand_index=self._active_index,
            hand_value_after=total,
        )

        if total > BLACKJACK_TOTAL:
            hand.is_finished = True
            self._emit(
                EngineEventType.HAND_BUSTED, hand_index=self._active_index, total=total
            )
            self._finish_hand(
                f"Bust on current hand ({total}). Moving to next hand.",
                "All hands finished. Dealer's turn...",
            )
        elif total == BLACKJACK_TOTAL:
            self._set_message(
                "You got 21 on this hand! Stand or continue with other hands."
            )
        else:
            self._set_message(TURN_MESSAGE)

    @command
    def stand(self):
        """Finish the active hand."""
        self._require_player_turn("stand")
        self._stand_active()

    @command
    def double_down(self):
        """Double the stake on a two-card hand and take exactly one more card."""
        hand = self._require_player_turn("double down")
        if not self.rules.can_double_down(hand, self._chips, len(self._hands)):
            raise self._double_down_refusal(hand)
        self._require_cards(1)

        self._chips -= hand.double()
        card = self._draw()
        hand.add_card(card)
        hand.is_finished = True
        self._record_action(Action.DOUBLE, f"drew {card} for {hand.value()}")
        self._emit(
            EngineEventType.CARD_DEALT,
            card=str(card),
            is_dealer=False,
            hand_index=self._active_index,
            hand_value_after=hand.value(),
        )
        self._finish_hand(
            "Double down done. Moving to next hand.",
            "All player hands done. Dealer's turn...",
        )

    @command
    def split(self, hand_index: Optional[int] = None):
        """
        Split a pair into two hands, each with its own equal stake.

        Args:
            hand_index: Hand to split, the active hand when omitted
        """
        self._require_player_turn("split")
        if hand_index is None:
            hand_index = self._active_index
        if (
            not isinstance(hand_index, int)
            or isinstance(hand_index, bool)
            or not 0 <= hand_index < len(self._hands)
        ):
            raise IllegalActionError(f"There is no hand {hand_index} to split.")

        hand = self._hands[hand_index]
        if hand.is_finished:
            raise IllegalActionError(f"Hand {hand_index + 1} is already finished.")
        if not hand.is_pair:
            raise IllegalActionError("This hand cannot be split.")
        if not self.rules.can_split_more(len(self._hands)):
            raise IllegalActionError(
                f"You cannot play more than {self.rules.max_hands} hands."
            )
        if self._chips < hand.bet:
            raise InsufficientFundsError("Not enough chips to split.")
        self._require_cards(2)

        self._chips -= hand.bet
        moved = hand.pop_card()
        new_hand = BlackjackHand([moved], bet=hand.bet, is_split=True)
        hand.is_split = True
        self._hands.insert(hand_index + 1, new_hand)
        hand.add_card(self._draw())
        new_hand.add_card(self._draw())
        self._active_index = hand_index

        self._record_action(Action.SPLIT, f"into hands {hand_index + 1} and {hand_index + 2}")
        self._emit(
            EngineEventType.HAND_SPLIT,
            hand_index=hand_index,
            new_hand_index=hand_index + 1,
            bet=hand.bet,
            num_hands=len(self._hands),
        )
        self._set_message(
            f"Split performed on hand {hand_index + 1}. Now playing it."
        )

    @command
    def place_insurance(self, amount: int):
        """Buy insurance against a dealer natural, then stand the active hand."""
        self._require_player_turn("buy insurance")
        if not self._insurance_available or self._insurance_bet:
            raise IllegalActionError("Insurance is not available.")
        if any(hand.is_finished for hand in self._hands):
            raise IllegalActionError("Insurance must be taken before standing.")
        if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
            raise IllegalActionError("Insurance must be a positive number of chips.")
        if amount > self._chips:
            raise InsufficientFundsError(
                f"Invalid insurance bet! Max: {self._chips}"
            )

        self._chips -= amount
        self._insurance_bet = amount
        self._insurance_available = False
        self._hands[self._active_index].insurance_bet = amount
        self._record_action(Action.INSURANCE, f"for {amount}")
        self._emit(EngineEventType.INSURANCE_DECISION, amount=amount, chips=self._chips)
        self._stand_active()

    @command
    def start_next_round(self):
        """Clear the last round off the table and ask for the next bet."""
        self._require_idle()
        if self._phase.is_terminal:
            raise IllegalActionError("The game is over. Restart to play again.")
        self._require_phase("start the next round", GamePhase.BETTING)

        self._hands = []
        self._active_index = 0
        self._dealer = Hand()
        self._current_bet = 0
        self._set_message(
            f"You have {self._chips} chips. Goal: {self._target_chips}. "
            "Place your bet for the next hand!"
        )

    @command
    def restart(self):
        """Return to SETUP with default chips and a fresh session."""
        self._require_idle()
        self._reset_session()
        self._set_message(WELCOME_MESSAGE)

    # ------------------------------------------------------------------
    # Staged sequences

    def advance(self) -> bool:
        """
        Run the next stage of the pending sequence.

        Returns:
            True if a stage ran, False if nothing was pending
        """
        if self._pending is None:
            return False
        try:
            next(self._pending)
        except StopIteration:
            self._pending = None
        except ShoeExhaustedError as exc:
            self._pending = None
            self._void_round(str(exc))
        self._check_invariants()
        return True

    def run_pending(self) -> int:
        """Run every pending stage; returns how many ran."""
        stages = 0
        while self.advance():
            stages += 1
        return stages

    def _deal_sequence(self) -> Iterator[None]:
        self._begin_deal()
        yield

        hand = self._hands[0]
        self._set_message("Dealing first card to player...")
        self._deal_to(hand)
        yield

        self._set_message("Dealing first card to dealer...")
        self._deal_to(self._dealer, is_dealer=True)
        yield

        self._set_message("Dealing second card to player...")
        self._deal_to(hand)
        yield

        self._set_message("Dealing second card to dealer...")
        self._dealer.add_card(HOLE_CARD)
        self._emit(EngineEventType.CARD_DEALT, card=str(HOLE_CARD), is_dealer=True, is_hole_card=True)
        yield

        up_card = self._dealer.cards[0]
        self._insurance_available = self.rules.offers_insurance(up_card)
        self._set_phase(GamePhase.PLAYER_TURN)
        if hand.value() == BLACKJACK_TOTAL:
            self._set_message("Blackjack! You can stand to continue.")
        else:
            self._set_message(TURN_MESSAGE)
        if self._insurance_available:
            self._emit(EngineEventType.INSURANCE_OFFERED, dealer_up_card=str(up_card))

    def _begin_deal(self):
        """Shuffle if the cut card asked for it, then seat a single hand."""
        if (
            self._shoe is None
            or self._shoe.needs_reshuffle
            or self._shoe.cards_remaining < MIN_CARDS_PER_ROUND
        ):
            self._build_shoe()

        self._hands = [BlackjackHand(bet=self._current_bet)]
        self._active_index = 0
        self._dealer = Hand()
        self._insurance_available = False
        self._insurance_bet = 0
        self._set_phase(GamePhase.DEALING)
        self._set_message("Dealing cards...")
        self._emit(EngineEventType.ROUND_STARTED, bet=self._current_bet)

    def _build_shoe(self):
        if self._shoe is None or self._shoe.num_decks != self._num_decks:
            self._shoe = self._shoe_factory(
                self._num_decks, self.rules.cut_fraction, self._rng
            )
        else:
            logger.info(
                "Reshuffling shoe at %.0f%% penetration",
                self._shoe.get_penetration_percentage() * 100,
            )
            self._shoe.shuffle()
        self._emit(
            EngineEventType.SHUFFLE,
            cards=self._shoe.cards_remaining,
            cut_index=self._shoe.cut_index,
            shuffle_count=self._shoe.shuffle_count,
        )

    def _dealer_sequence(self) -> Iterator[None]:
        self._reveal_hole_card()
        yield

        if all(hand.is_bust for hand in self._hands):
            self._set_message("All player hands bust. Dealer wins automatically.")
            yield
        else:
            while self.rules.should_dealer_hit(self._dealer.cards):
                total = evaluate(self._dealer.cards).total
                self._set_message(f"Dealer hits (has {total})...")
                self._deal_to(self._dealer, is_dealer=True)
                self._emit(EngineEventType.DEALER_ACTION, action="HIT", total_before=total)
                yield

            total = evaluate(self._dealer.cards).total
            if total > BLACKJACK_TOTAL:
                self._set_message(f"Dealer busts with {total}!")
            else:
                self._set_message(f"Dealer stands with {total}.")
            self._emit(EngineEventType.DEALER_ACTION, action="STAND", total=total)
            yield

        self._settle()

    def _reveal_hole_card(self):
        cards = self._dealer.cards
        for index, card in enumerate(cards):
            if not card.face_up:
                cards[index] = self._draw()
                self._emit(
                    EngineEventType.CARD_REVEALED,
                    card=str(cards[index]),
                    dealer_value=evaluate(cards).total,
                )
                self._set_message(f"Dealer reveals {cards[index]}.")
                break

    def _settle(self):
        self._set_phase(GamePhase.SETTLEMENT)
        self._insurance_available = False
        self._check_invariants()

        result = settle(self._hands, self._dealer.cards, self._insurance_bet)
        self._chips += result.total_payout
        self._insurance_bet = 0
        self.last_settlement = result
        self.stats.update(result, self._chips)

        for outcome in result.outcomes:
            self._emit(
                EngineEventType.HAND_RESULT,
                hand_index=outcome.hand_number - 1,
                result=outcome.result.value,
                total=outcome.total,
                bet=outcome.bet,
                payout=outcome.payout,
            )
        self._emit(
            EngineEventType.BANKROLL_UPDATED,
            chips=self._chips,
            payout=result.total_payout,
            net=result.net,
        )

        lines = result.messages
        if self._chips >= self._target_chips:
            self._set_phase(GamePhase.VICTORY)
            lines.append(
                f"CONGRATULATIONS! You reached your goal of {self._target_chips} "
                f"chips! You won with {self._chips} chips!"
            )
        elif self._chips == 0:
            self._set_phase(GamePhase.OUT_OF_CHIPS)
            lines.append("Game Over! You're out of chips.")
        else:
            if self._shoe.remaining_below_cut():
                self._shoe.needs_reshuffle = True
                lines.append("Cut card reached! Reshuffling deck after round end.")
            self._set_phase(GamePhase.BETTING)
        self._set_message("\n".join(lines))

        self.round_log.log_round_end(self._round_number, self._chips, result.net)
        self._emit(EngineEventType.ROUND_ENDED, chips=self._chips, net=result.net)
        if self._phase.is_terminal:
            self._emit(
                EngineEventType.GAME_ENDED,
                outcome=self._phase.value,
                chips=self._chips,
                stats=self.stats.report(),
            )

    def _void_round(self, reason: str):
        """
        Call the round off after the shoe ran dry mid-sequence.

        Every stake on the table, insurance included, goes back to the player.
        The cards are cleared and the shoe is rebuilt before the next deal.
        """
        refund = sum(hand.bet for hand in self._hands) + self._insurance_bet
        self._chips += refund
        self._insurance_bet = 0
        self._insurance_available = False
        self._hands = []
        self._active_index = 0
        self._dealer = Hand()
        self._current_bet = 0
        self._shoe.needs_reshuffle = True
        logger.warning("Round %d void: %s", self._round_number, reason)

        self._set_phase(GamePhase.BETTING)
        self._set_message(
            f"{reason} Round void, {refund} chips returned. Place your bet to continue."
        )
        self.round_log.log_round_end(self._round_number, self._chips, 0)
        self._emit(EngineEventType.ROUND_ENDED, chips=self._chips, net=0, void=True)

    # ------------------------------------------------------------------
    # Helpers

    def _stand_active(self):
        self._hands[self._active_index].is_finished = True
        self._record_action(Action.STAND)
        self._finish_hand("", "Revealing dealer's card...")

    def _finish_hand(self, moving_on: str, dealer_turn: str):
        """Move to the next unfinished hand, or hand over to the dealer."""
        next_index = self._next_unfinished_hand()
        if next_index is not None:
            self._active_index = next_index
            self._set_message(
                f"{moving_on} Now playing hand {next_index + 1}.".strip()
            )
            return

        self._set_phase(GamePhase.DEALER_TURN)
        self._set_message(dealer_turn)
        self._pending = self._dealer_sequence()

    def _next_unfinished_hand(self) -> Optional[int]:
        order = list(range(self._active_index + 1, len(self._hands)))
        order += list(range(0, self._active_index))
        for index in order:
            if not self._hands[index].is_finished:
                return index
        return None

    def _double_down_refusal(self, hand: BlackjackHand) -> IllegalActionError:
        if len(self._hands) > 1:
            return IllegalActionError("You cannot double down after a split.")
        if len(hand.cards) != 2:
            return IllegalActionError("You can only double down on your first two cards.")
        if hand.has_doubled:
            return IllegalActionError("This hand has already been doubled.")
        if self._chips < hand.bet:
            return InsufficientFundsError("Not enough chips to double down.")
        return IllegalActionError("You cannot double down on this hand.")

    def _require_idle(self):
        if self.is_busy:
            raise IllegalActionError("Please wait, the dealer is still playing.")

    def _require_phase(self, action: str, *phases: GamePhase):
        if self._phase not in phases:
            raise IllegalActionError(f"You cannot {action} during {self._phase}.")

    def _require_player_turn(self, action: str) -> BlackjackHand:
        self._require_idle()
        self._require_phase(action, GamePhase.PLAYER_TURN)
        return self._hands[self._active_index]

    def _require_cards(self, count: int):
        if self._shoe is None or self._shoe.cards_remaining < count:
            raise ShoeExhaustedError("Not enough cards left in the shoe.")

    def _draw(self) -> Card:
        card = self._shoe.draw() if self._shoe else None
        if card is None:
            raise ShoeExhaustedError("The shoe is empty.")
        logger.debug("Drew %s, %d left in shoe", card, self._shoe.cards_remaining)
        return card

    def _deal_to(self, hand: Hand, is_dealer: bool = False):
        card = self._draw()
        hand.add_card(card)
        self._emit(
            EngineEventType.CARD_DEALT,
            card=str(card),
            is_dealer=is_dealer,
            hand_value_after=evaluate(hand.cards).total,
        )

    def _record_action(self, action: Action, detail: str = ""):
        self.round_log.log_action(self._round_number, self._active_index, action, detail)
        self._emit(
            EngineEventType.PLAYER_ACTION,
            action=action.name,
            hand_index=self._active_index,
        )

    def _set_phase(self, phase: GamePhase):
        if phase is not self._phase:
            logger.debug("Phase %s -> %s", self._phase, phase)
        self._phase = phase

    def _set_message(self, message: str):
        self._message = message
        self.round_log.log_status(self._round_number, self._phase.value, message)
        self._emit(EngineEventType.STATUS_CHANGED, phase=self._phase.value, message=message)

    def _reject(self, command_name: str, reason: str):
        self.round_log.log_rejection(command_name, reason)
        self._set_message(reason)
        self._emit(EngineEventType.ILLEGAL_ACTION, command=command_name, reason=reason)

    def _emit(self, event_type: EngineEventType, **data):
        data.update(round_number=self._round_number, timestamp=time.time())
        self.event_bus.emit(event_type, data)

    def _check_invariants(self):
        if self._chips < 0:
            raise InvariantViolation(f"Negative chip count: {self._chips}")
        if self._phase is GamePhase.PLAYER_TURN and not (
            0 <= self._active_index < len(self._hands)
        ):
            raise InvariantViolation(
                f"Active hand {self._active_index} out of range "
                f"for {len(self._hands)} hands"
            )
        if self._phase in (
            GamePhase.DEALING,
            GamePhase.PLAYER_TURN,
            GamePhase.DEALER_TURN,
            GamePhase.SETTLEMENT,
        ):
            committed = (
                self._chips
                + sum(hand.bet for hand in self._hands)
                + self._insurance_bet
            )
            if committed != self._round_stake:
                raise InvariantViolation(
                    f"Chips not conserved: {committed} on the table, "
                    f"{self._round_stake} committed"
                )
        hole_cards = [
            index for index, card in enumerate(self._dealer.cards) if not card.face_up
        ]
        if hole_cards and (
            hole_cards != [1]
            or self._phase not in (GamePhase.DEALING, GamePhase.PLAYER_TURN, GamePhase.DEALER_TURN)
        ):
            raise InvariantViolation(f"Unexpected hole card at {hole_cards}")
