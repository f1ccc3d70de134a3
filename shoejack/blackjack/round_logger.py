"""
Round transcript logging for the blackjack table.

Every status message the table posts goes through a `RoundLogger`, which
writes it to the ``shoejack.rounds`` logger and keeps the transcript of the
current round. The transcript preserves the order in which the table moved
through a round, which is what a presentation layer replays.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List

from shoejack.blackjack.action import Action


@dataclass(frozen=True)
class StatusEntry:
    """One status message, stamped with the phase that produced it."""

    timestamp: datetime
    round_number: int
    phase: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "round": self.round_number,
            "phase": self.phase,
            "message": self.message,
        }


def logging_disabled() -> bool:
    """Whether SHOEJACK_DISABLE_LOGGING is set in the environment."""
    return os.environ.get("SHOEJACK_DISABLE_LOGGING", "").lower() in (
        "1",
        "true",
        "yes",
    )


class RoundLogger:
    """Logs the status messages and actions of every round at a table."""

    def __init__(self, log_level=logging.INFO):
        self.logger = logging.getLogger("shoejack.rounds")
        if logging_disabled():
            self.logger.setLevel(logging.ERROR)
        else:
            self.logger.setLevel(log_level)

        self.history: List[StatusEntry] = []
        self.current_round: List[StatusEntry] = []
        self.last_round: List[StatusEntry] = []

    def log_status(self, round_number: int, phase: str, message: str):
        entry = StatusEntry(datetime.now(), round_number, phase, message)
        self.current_round.append(entry)
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"[round {round_number} {phase}] {message}")

    def log_action(self, round_number: int, hand_index: int, action: Action, detail: str = ""):
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(
                f"Round {round_number} hand {hand_index + 1}: {action.value} {detail}".rstrip()
            )

    def log_rejection(self, command: str, reason: str):
        self.logger.warning(f"Rejected {command}: {reason}")

    def log_round_start(self, round_number: int, bet: int):
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(f"=== Round {round_number} starting, bet {bet} ===")
        self.current_round = []

    def log_round_end(self, round_number: int, chips: int, net: int):
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(
                f"=== Round {round_number} ended: net {net:+d}, chips {chips} ==="
            )
        self.history.extend(self.current_round)
        self.last_round = self.current_round
        self.current_round = []

    def last_round_messages(self) -> List[str]:
        """Messages of the most recently settled round, oldest first."""
        return [entry.message for entry in self.last_round]

    def reset(self):
        self.history = []
        self.current_round = []
        self.last_round = []
