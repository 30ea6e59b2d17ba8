"""Core framework components for FLAPLINE."""

from .state import Phase, StateMachine
from .events import EventBus, Event, EventType
from .clock import FixedStepClock

__all__ = ["Phase", "StateMachine", "EventBus", "Event", "EventType", "FixedStepClock"]
