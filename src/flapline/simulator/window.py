"""
Desktop simulator window using pygame.

Shows the play field, a debug panel and a log viewer, and turns keyboard
and mouse input into events on the bus.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass

from ..core.events import EventBus, impulse_event, start_event
from ..graphics.renderer import new_frame, render_frame
from ..session import RunSession

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    title: str = "FLAPLINE"
    fps: int = 60
    scale: float = 1.0
    panel_width: int = 260

    # Colors
    bg_color: tuple[int, int, int] = (20, 20, 30)
    panel_color: tuple[int, int, int] = (40, 40, 50)
    text_color: tuple[int, int, int] = (200, 200, 220)
    accent_color: tuple[int, int, int] = (100, 150, 255)


class SimulatorWindow:
    """
    Pygame window driving a run session.

    Keyboard Mapping:
        SPACE / UP / left click: Flap
        RETURN / S: Start or restart
        D: Toggle debug panel
        L: Toggle log viewer
        ESC / Q: Exit
    """

    def __init__(
        self,
        session: RunSession,
        event_bus: EventBus,
        config: WindowConfig | None = None,
    ) -> None:
        self.session = session
        self.event_bus = event_bus
        self.config = config or WindowConfig()

        game = session.config
        self._field_size = (
            int(game.field_width * self.config.scale),
            int(game.field_height * self.config.scale),
        )
        self._frame = new_frame(game)

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = True

        # Log viewer
        self._show_log = False
        self._log_buffer: list[str] = []
        self._max_log_lines = 20
        self._log_handler: logging.Handler | None = None

        self._setup_log_capture()
        logger.info("SimulatorWindow created")

    def _setup_log_capture(self) -> None:
        """Setup log capturing for the log viewer."""
        class SimulatorLogHandler(logging.Handler):
            def __init__(self, window: 'SimulatorWindow'):
                super().__init__()
                self.window = window

            def emit(self, record):
                msg = self.format(record)
                self.window._log_buffer.append(msg)
                if len(self.window._log_buffer) > self.window._max_log_lines * 2:
                    self.window._log_buffer = self.window._log_buffer[-self.window._max_log_lines:]

        handler = SimulatorLogHandler(self)
        handler.setFormatter(logging.Formatter('%(levelname).1s %(name)s: %(message)s'))
        logging.getLogger().addHandler(handler)
        self._log_handler = handler

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        width, height = self._field_size
        self._screen = pygame.display.set_mode(
            (width + self.config.panel_width, height),
            pygame.DOUBLEBUF,
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 20)

        logger.info(f"Pygame initialized: {width}x{height} field")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.event_bus.queue_event(impulse_event(source="mouse"))

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_l:
            self._show_log = not self._show_log

        elif key in (pygame.K_SPACE, pygame.K_UP):
            self.event_bus.queue_event(impulse_event(source="keyboard"))
        elif key in (pygame.K_RETURN, pygame.K_s):
            self.event_bus.queue_event(start_event(source="keyboard"))

    def _render(self) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)

        render_frame(self._frame, self.session.snapshot())
        surface = pygame.surfarray.make_surface(self._frame.swapaxes(0, 1))
        if surface.get_size() != self._field_size:
            surface = pygame.transform.scale(surface, self._field_size)
        self._screen.blit(surface, (0, 0))

        if self._show_debug:
            self._render_debug_panel()
        if self._show_log:
            self._render_log_panel()

        pygame.display.flip()

    def _panel_rect(self) -> pygame.Rect:
        width, height = self._field_size
        return pygame.Rect(width + 10, 10, self.config.panel_width - 20, height - 20)

    def _render_debug_panel(self) -> None:
        """Render the debug information panel."""
        rect = self._panel_rect()
        pygame.draw.rect(self._screen, self.config.panel_color, rect, border_radius=5)

        if not self._font:
            return

        snap = self.session.snapshot()
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"Tick: {snap.tick}",
            f"Phase: {snap.phase.name}",
            f"Score: {snap.score}  Best: {snap.high_score}",
            f"Bird y: {snap.bird_y:.1f}",
            f"Velocity: {snap.bird_velocity:.1f}",
            f"Pipes: {len(snap.obstacles)}",
            "",
            "---- EVENTS ----",
            *(
                f"{event.source}: {getattr(event.type, 'name', event.type)}"
                for event in self.event_bus.get_history(limit=4)
            ),
            "",
            "---- CONTROLS ----",
            "SPACE   Flap",
            "RETURN  Start",
            "D       Debug panel",
            "L       Log viewer",
            "Q       Quit",
        ]

        y = rect.y + 10
        for line in lines:
            text_surface = self._font.render(line, True, self.config.text_color)
            self._screen.blit(text_surface, (rect.x + 10, y))
            y += 20

    def _render_log_panel(self) -> None:
        """Render the log viewer over the bottom of the panel."""
        if not self._font:
            return

        panel = self._panel_rect()
        rect = pygame.Rect(panel.x, panel.centery, panel.width, panel.height // 2)

        surf = pygame.Surface((rect.width, rect.height), pygame.SRCALPHA)
        surf.fill((20, 25, 35, 230))
        self._screen.blit(surf, rect.topleft)

        y = rect.y + 6
        for line in self._log_buffer[-self._max_log_lines:]:
            if line.startswith('E'):
                color = (255, 100, 100)
            elif line.startswith('W'):
                color = (255, 200, 100)
            elif line.startswith('I'):
                color = (150, 200, 150)
            else:
                color = (150, 150, 170)

            display_line = line[:30] + "..." if len(line) > 33 else line
            self._screen.blit(self._font.render(display_line, True, color), (rect.x + 6, y))
            y += 16
            if y > rect.bottom - 10:
                break

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        try:
            while self._running:
                self._handle_events()

                # Input queued this frame lands before the frame's ticks
                await self.event_bus.process_queue()

                # Simulation advances in fixed ticks regardless of frame rate
                if self._clock:
                    self.session.advance(self._clock.get_time())

                self._render()

                if self._clock:
                    self._clock.tick(self.config.fps)

                self._frame_count += 1

                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        if self._log_handler:
            logging.getLogger().removeHandler(self._log_handler)
        pygame.quit()
