"""
Run session: the process-wide controller around the simulation.

Owns the current world, the run phase, the high score and the fixed-step
clock. Input (flap, start) and time (advance/tick) both enter through here.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple
import logging
import random
import threading

from flapline.core.clock import FixedStepClock
from flapline.core.events import Event, EventBus, EventType
from flapline.core.state import Phase, StateMachine
from flapline.sim.collision import CollisionKind
from flapline.sim.config import GameConfig
from flapline.sim.world import World, idle_world, initial_world, step, with_impulse
from flapline.storage.high_score import HighScoreStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the session handed to renderers each frame."""

    phase: Phase
    bird_y: float
    bird_velocity: float
    obstacles: Tuple[Tuple[float, float], ...]  # (x, gap_height)
    score: int
    high_score: int
    tick: int
    config: GameConfig
    collision: Optional[CollisionKind] = None
    new_high_score: bool = False  # last run beat the previous best


class RunSession:
    """
    Drives runs from start to crash and keeps the high score.

    Lifecycle:
        1. open() - load the high score, show the start gate (or start)
        2. start() / impulse() - player input
        3. advance(delta_ms) or tick() - simulation time
        4. close() - wait for pending saves

    High score saves run on a background thread so the tick loop never
    waits on storage. Use flush() to wait for them.
    """

    def __init__(
        self,
        high_scores: HighScoreStore,
        config: Optional[GameConfig] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        start_gate: bool = True,
        max_steps: int = 5,
    ) -> None:
        self.config = config or GameConfig()
        self.high_scores = high_scores
        self.event_bus = event_bus
        self.start_gate = start_gate

        self._rng = rng or random.Random()
        self._state = StateMachine()
        self._clock = FixedStepClock(self.config.tick_ms, max_steps=max_steps)
        self._world: World = idle_world(self.config)
        self._high_score = 0
        self._new_high_score = False
        self._lock = threading.RLock()

        # Background saves
        self._save_lock = threading.Lock()
        self._saved_score = 0
        self._pending_saves: List[threading.Thread] = []

        self._unsubscribers: List[Callable[[], None]] = []
        if event_bus is not None:
            self._unsubscribers.append(
                event_bus.subscribe(EventType.IMPULSE, self._on_impulse_event)
            )
            self._unsubscribers.append(
                event_bus.subscribe(EventType.START, self._on_start_event)
            )

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def world(self) -> World:
        return self._world

    @property
    def high_score(self) -> int:
        return self._high_score

    # Lifecycle
    def open(self) -> None:
        """Load the high score and get ready for the first run."""
        self._high_score = self.high_scores.load()
        self._saved_score = self._high_score

        if self.start_gate:
            self._state.transition(Phase.READY)
            logger.info("Session open, waiting for start")
        else:
            self.start()

    def close(self, timeout: Optional[float] = 5.0) -> None:
        """Wait for pending saves and return to IDLE."""
        self.flush(timeout)
        with self._lock:
            if self._state.phase != Phase.IDLE:
                self._state.transition(Phase.IDLE)
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        logger.info(f"Session closed after {self._clock.total_ticks} ticks")

    # Input
    def start(self) -> bool:
        """Start a fresh run. Ignored while a run is in progress."""
        with self._lock:
            if not self._state.can_transition(Phase.ACTIVE):
                logger.debug(f"Start ignored in phase {self._state.phase.name}")
                return False

            self._world = initial_world(self.config, self._rng)
            self._new_high_score = False
            self._clock.reset()
            self._state.transition(Phase.ACTIVE)
            logger.info(f"Run started (best {self._high_score})")
            self._emit(EventType.RUN_STARTED, {"high_score": self._high_score})
            return True

    def impulse(self) -> bool:
        """Flap. Has no effect unless a run is active."""
        with self._lock:
            if self._state.phase != Phase.ACTIVE:
                return False
            self._world = with_impulse(self._world, self.config)
            return True

    # Time
    def advance(self, delta_ms: float) -> int:
        """Feed real elapsed time and run the ticks it amounts to."""
        steps = self._clock.advance(delta_ms)
        for _ in range(steps):
            self.tick()
        return steps

    def tick(self) -> World:
        """Run exactly one simulation step."""
        with self._lock:
            if self._state.phase != Phase.ACTIVE:
                return self._world

            previous = self._world
            self._world = step(previous, self.config, self._rng)

            if self._world.run.score != previous.run.score:
                self._emit(EventType.SCORE_CHANGED, {"score": self._world.run.score})

            if self._world.run.is_over:
                self._finish_run()

            return self._world

    def snapshot(self) -> Snapshot:
        with self._lock:
            world = self._world
            return Snapshot(
                phase=self._state.phase,
                bird_y=world.bird.y,
                bird_velocity=world.bird.velocity,
                obstacles=tuple((o.x, o.gap_height) for o in world.obstacles),
                score=world.run.score,
                high_score=self._high_score,
                tick=world.tick,
                config=self.config,
                collision=world.collision,
                new_high_score=self._new_high_score,
            )

    # Persistence
    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait for background saves. Returns True if none are left running."""
        for thread in list(self._pending_saves):
            thread.join(timeout)
        self._pending_saves = [t for t in self._pending_saves if t.is_alive()]
        return not self._pending_saves

    def _finish_run(self) -> None:
        score = self._world.run.score
        kind = self._world.collision
        self._state.transition(Phase.OVER)
        logger.info(f"Run over: score {score} ({kind.name if kind else 'unknown'})")
        self._emit(EventType.RUN_OVER, {
            "score": score,
            "collision": kind.name if kind else None,
            "ticks": self._world.tick,
        })

        if score > self._high_score:
            self._high_score = score
            self._new_high_score = True
            logger.info(f"New high score: {score}")
            self._emit(EventType.HIGH_SCORE, {"score": score})
            self._persist(score)

    def _persist(self, score: int) -> None:
        """Hand the score to the store without blocking the caller."""
        self._pending_saves = [t for t in self._pending_saves if t.is_alive()]
        thread = threading.Thread(
            target=self._save,
            args=(score,),
            name=f"high-score-save-{score}",
            daemon=True,
        )
        self._pending_saves.append(thread)
        thread.start()

    def _save(self, score: int) -> None:
        # Saves may finish out of order; never overwrite a better score
        with self._save_lock:
            if score <= self._saved_score:
                return
            if self.high_scores.save(score):
                self._saved_score = score

    # Event bus wiring
    def _on_impulse_event(self, event: Event) -> None:
        self.impulse()

    def _on_start_event(self, event: Event) -> None:
        self.start()

    def _emit(self, event_type: EventType, data: dict) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(Event(event_type, data=data, source="session"))
