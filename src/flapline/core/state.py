"""
Run state machine for FLAPLINE.

Phases:
    IDLE: Session created, nothing loaded yet
    READY: Start gate shown, waiting for an explicit start
    ACTIVE: A run is being simulated
    OVER: The bird crashed; waiting for a restart
"""

from enum import Enum, auto
import logging

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Run controller phases."""
    IDLE = auto()
    READY = auto()
    ACTIVE = auto()
    OVER = auto()


class StateMachine:
    """Tracks the run phase and rejects transitions that are not allowed."""

    VALID_TRANSITIONS: list[tuple[Phase, Phase]] = [
        # From IDLE
        (Phase.IDLE, Phase.READY),
        (Phase.IDLE, Phase.ACTIVE),  # No start gate

        # From READY
        (Phase.READY, Phase.ACTIVE),
        (Phase.READY, Phase.IDLE),

        # From ACTIVE
        (Phase.ACTIVE, Phase.OVER),
        (Phase.ACTIVE, Phase.IDLE),  # Session closed mid-run

        # From OVER
        (Phase.OVER, Phase.ACTIVE),  # Restart
        (Phase.OVER, Phase.IDLE),
    ]

    def __init__(self, initial_phase: Phase = Phase.IDLE) -> None:
        self._phase = initial_phase
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"StateMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> Phase:
        """Get current phase."""
        return self._phase

    def can_transition(self, to_phase: Phase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: Phase) -> bool:
        """
        Attempt to transition to a new phase.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase

        logger.debug(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        return True
