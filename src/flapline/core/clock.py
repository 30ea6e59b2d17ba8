"""Fixed-timestep clock decoupling simulation ticks from frame rate."""

import logging

logger = logging.getLogger(__name__)


class FixedStepClock:
    """
    Accumulates real elapsed time and hands it out in whole ticks.

    The renderer may run at any rate; the simulation always advances in
    steps of exactly ``tick_ms``. Leftover time carries into the next call.
    When a frame stalls, at most ``max_steps`` ticks are released and the
    rest of the backlog is dropped so the game does not fast-forward.
    """

    def __init__(self, tick_ms: float = 16.0, max_steps: int = 5) -> None:
        if tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {tick_ms}")
        self.tick_ms = tick_ms
        self.max_steps = max_steps
        self._accumulator = 0.0
        self._total_ticks = 0

    @property
    def total_ticks(self) -> int:
        """Ticks released since creation."""
        return self._total_ticks

    def advance(self, delta_ms: float) -> int:
        """Add elapsed time and return how many ticks to run now."""
        if delta_ms < 0:
            return 0

        self._accumulator += delta_ms
        steps = int(self._accumulator // self.tick_ms)
        self._accumulator -= steps * self.tick_ms

        if steps > self.max_steps:
            logger.debug(f"Dropping {steps - self.max_steps} ticks of backlog")
            steps = self.max_steps
            self._accumulator = 0.0

        self._total_ticks += steps
        return steps

    def reset(self) -> None:
        """Drop any carried-over time, e.g. when a new run starts."""
        self._accumulator = 0.0
