"""
Table events.

A `BlackjackTable` reports each transition as an `EngineEventType` with a
dict payload. Listeners subscribe to one event type with `on`, or to the
whole stream with `on_any`, and are called synchronously in subscription
order. A listener that raises is logged and skipped; it never reaches the
table.

>>> emitter = EventEmitter()
>>> seen = []
>>> stop = emitter.on(EngineEventType.SHUFFLE, seen.append)
>>> emitter.emit(EngineEventType.SHUFFLE, {"cards": 52})
>>> seen
[{'cards': 52}]
"""

import logging
import threading
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, Dict, List, Union

logger = logging.getLogger(__name__)

EventData = Dict[str, Any]
Listener = Callable[[Any], None]


class EngineEventType(Enum):
    """
    Event types emitted by the blackjack table.
    """

    # Session
    GAME_CREATED = "game_created"
    GAME_ENDED = "game_ended"
    ROUND_STARTED = "round_started"
    ROUND_ENDED = "round_ended"
    STATUS_CHANGED = "status_changed"

    # Player
    PLAYER_BET = "player_bet"
    PLAYER_ACTION = "player_action"
    ILLEGAL_ACTION = "illegal_action"

    # Cards
    CARD_DEALT = "card_dealt"
    CARD_REVEALED = "card_revealed"
    SHUFFLE = "shuffle"

    # Hands
    HAND_SPLIT = "hand_split"
    HAND_BUSTED = "hand_busted"
    HAND_RESULT = "hand_result"
    DEALER_ACTION = "dealer_action"

    # Side bets and chips
    INSURANCE_OFFERED = "insurance_offered"
    INSURANCE_DECISION = "insurance_decision"
    BANKROLL_UPDATED = "bankroll_updated"


def _event_name(event_type: Union[str, EngineEventType]) -> str:
    return event_type.name if isinstance(event_type, Enum) else event_type


class EventEmitter:
    """Synchronous dispatcher for table events."""

    def __init__(self):
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)
        self._stream_listeners: List[Listener] = []
        self._lock = threading.RLock()

    def on(
        self, event_type: Union[str, EngineEventType], callback: Listener
    ) -> Callable[[], None]:
        """
        Call ``callback(data)`` every time ``event_type`` is emitted.

        Returns:
            A function that removes the subscription
        """
        name = _event_name(event_type)
        with self._lock:
            self._listeners[name].append(callback)
        return lambda: self._remove(self._listeners[name], callback)

    def on_any(self, callback: Listener) -> Callable[[], None]:
        """
        Call ``callback((event_name, data))`` for every event emitted.

        Returns:
            A function that removes the subscription
        """
        with self._lock:
            self._stream_listeners.append(callback)
        return lambda: self._remove(self._stream_listeners, callback)

    def emit(self, event_type: Union[str, EngineEventType], data: EventData) -> None:
        name = _event_name(event_type)
        with self._lock:
            calls = [(callback, data) for callback in self._listeners.get(name, [])]
            calls += [(callback, (name, data)) for callback in self._stream_listeners]

        # Listeners may subscribe or unsubscribe while being called
        for callback, payload in calls:
            try:
                callback(payload)
            except Exception:
                logger.exception("Listener for %s failed", name)

    def _remove(self, listeners: List[Listener], callback: Listener):
        with self._lock:
            if callback in listeners:
                listeners.remove(callback)


class EventBus:
    """
    Process-wide emitter used by tables that are not handed one.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance
