"""
This module contains the SessionStats class which is responsible for
tracking the chip economy of a table across rounds.
"""

from typing import Any, Dict, List

import numpy as np

from shoejack.blackjack.settlement import HandResult, SettlementResult


class SessionStats:
    """
    A class that holds the statistics of a session at one table.
    """

    def __init__(self, starting_chips: int = 0):
        """
        Initializes the SessionStats with default values.
        """
        self.starting_chips = starting_chips
        self.rounds_played = 0
        self.hands_played = 0
        self.wins = 0
        self.losses = 0
        self.pushes = 0
        self.blackjacks = 0
        self.busts = 0
        self.insurance_won = 0
        self.insurance_lost = 0
        self.net_chips = 0
        self.chip_history: List[int] = [starting_chips]
        self.round_nets: List[int] = []

    def update(self, result: SettlementResult, chips_after: int):
        """Updates the statistics from one settled round."""
        self.rounds_played += 1
        for outcome in result.outcomes:
            self.hands_played += 1
            if outcome.result == HandResult.BLACKJACK:
                self.blackjacks += 1
                self.wins += 1
            elif outcome.result == HandResult.WIN:
                self.wins += 1
            elif outcome.result == HandResult.PUSH:
                self.pushes += 1
            elif outcome.result == HandResult.BUST:
                self.busts += 1
                self.losses += 1
            else:
                self.losses += 1

        if result.insurance_bet > 0:
            if result.insurance_payout > 0:
                self.insurance_won += 1
            else:
                self.insurance_lost += 1

        self.net_chips += result.net
        self.round_nets.append(result.net)
        self.chip_history.append(chips_after)

    def average_net(self) -> float:
        """Mean net chips per round."""
        if not self.round_nets:
            return 0.0
        return float(np.mean(self.round_nets))

    def max_drawdown(self) -> int:
        """Largest drop from a running chip peak, between settlements."""
        history = np.asarray(self.chip_history)
        if history.size == 0:
            return 0
        running_peak = np.maximum.accumulate(history)
        return int(np.max(running_peak - history))

    def report(self) -> Dict[str, Any]:
        """
        Returns a dictionary containing the current statistics.
        """
        return {
            "rounds_played": self.rounds_played,
            "hands_played": self.hands_played,
            "wins": self.wins,
            "losses": self.losses,
            "pushes": self.pushes,
            "blackjacks": self.blackjacks,
            "busts": self.busts,
            "insurance_won": self.insurance_won,
            "insurance_lost": self.insurance_lost,
            "net_chips": self.net_chips,
            "average_net": self.average_net(),
            "max_drawdown": self.max_drawdown(),
            "peak_chips": max(self.chip_history),
        }
