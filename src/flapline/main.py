"""
Main entry point for FLAPLINE.

Reads settings from the environment (and .env) and launches either the
pygame simulator or the headless runner.
"""

import asyncio
import logging
import random
import sys

from flapline.autopilot import should_flap
from flapline.core.events import EventBus
from flapline.core.state import Phase
from flapline.session import RunSession
from flapline.settings import Settings, get_settings
from flapline.storage import HighScoreStore, JsonFileStore


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def create_session(settings: Settings, event_bus: EventBus | None = None) -> RunSession:
    """Build a session wired to the on-disk high score file."""
    store = JsonFileStore(settings.high_score_path)
    rng = random.Random(settings.seed)
    return RunSession(
        high_scores=HighScoreStore(store),
        config=settings.game_config(),
        event_bus=event_bus,
        rng=rng,
        start_gate=settings.rules.start_gate,
    )


async def run_simulator(settings: Settings) -> None:
    """Run the pygame simulator."""
    from flapline.simulator.window import SimulatorWindow, WindowConfig

    event_bus = EventBus()
    session = create_session(settings, event_bus)
    session.open()

    window = SimulatorWindow(
        session=session,
        event_bus=event_bus,
        config=WindowConfig(fps=settings.fps, scale=settings.window_scale),
    )

    try:
        await window.run()
    finally:
        session.close()


def run_headless(settings: Settings) -> list[int]:
    """Let the autopilot play for a fixed number of ticks.

    Returns:
        Scores of every finished run
    """
    logger = logging.getLogger(__name__)

    session = create_session(settings)
    session.open()

    scores: list[int] = []
    for _ in range(settings.headless_ticks):
        if session.phase != Phase.ACTIVE:
            session.start()

        if should_flap(session.snapshot()):
            session.impulse()

        world = session.tick()
        if world.run.is_over:
            scores.append(world.run.score)

    session.close()

    best = max(scores, default=0)
    logger.info(
        f"Headless run finished: {len(scores)} runs, best {best}, "
        f"high score {session.high_score}"
    )
    return scores


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    try:
        settings = get_settings()
    except Exception as e:
        setup_logging()
        logging.getLogger(__name__).exception(f"Invalid settings: {e}")
        sys.exit(1)

    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("FLAPLINE starting...")

    try:
        if settings.env == "simulator":
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(settings))
        elif settings.env == "headless":
            logger.info("Running in headless mode")
            run_headless(settings)
        else:
            logger.error(f"Unknown environment: {settings.env}")
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("FLAPLINE stopped")


if __name__ == "__main__":
    main()
