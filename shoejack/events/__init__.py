"""
Event system for the shoejack table.

This package provides the emitter the table reports its transitions on.
"""

from shoejack.events.emitter import EventEmitter, EventBus, EngineEventType

__all__ = ["EventEmitter", "EventBus", "EngineEventType"]
