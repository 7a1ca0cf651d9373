"""pygame front-end: draws engine snapshots and feeds input into the engine."""

from __future__ import annotations

import logging
import math

import pygame

from .config import CELL, FONT_NAME, FONT_SIZE, FPS, LOG_LEVEL, PALETTE, WINDOW_SIZE
from .controls import dispatch_key, swipe_direction
from .effects import Particle, draw_particles, spawn_food_particles, update_particles
from .engine import GameEngine, GameSnapshot, Phase
from .events import GameEvent
from .rules import Position
from .scheduler import FrameScheduler
from .storage import FileStorage

logger = logging.getLogger(__name__)


def hud_text(snap: GameSnapshot) -> str:
    return (
        f"SCORE {snap.score:04}  BEST {snap.high_score:04}  "
        f"LV {snap.level}  LEN {len(snap.snake)}"
    )


def overlay_lines(snap: GameSnapshot) -> list[str]:
    """Text shown over the board for the current phase; empty while playing."""
    if snap.phase is Phase.MENU:
        return ["SNAKE", f"Best: {snap.high_score}", "ENTER to play"]
    if snap.phase is Phase.PAUSED:
        return ["Paused", "SPACE to resume", "M for main menu"]
    if snap.phase is Phase.GAME_OVER:
        return [
            "Game Over",
            f"Score: {snap.score}",
            f"Level: {snap.level}",
            f"Food eaten: {snap.food_count}",
            f"Final length: {len(snap.snake)}",
            f"Best:  {snap.high_score}",
            "R restart / M menu / Q quit",
        ]
    return []


class SnakeApp:
    """Window, renderer and input pump around a :class:`GameEngine`."""

    def __init__(self, engine: GameEngine | None = None) -> None:
        pygame.init()
        self.window = pygame.display.set_mode(
            (WINDOW_SIZE, WINDOW_SIZE), pygame.DOUBLEBUF | pygame.SCALED
        )
        pygame.display.set_caption("Snake")
        self.font = pygame.font.SysFont(FONT_NAME, FONT_SIZE)
        self.background = self._build_background()

        self.engine = engine or GameEngine(
            storage=FileStorage(),
            scheduler=FrameScheduler(),
            clock=pygame.time.get_ticks,
        )
        # frame timestamps must share the engine clock's time base
        self.scheduler = self.engine.scheduler

        self.snapshot: GameSnapshot = self.engine.get_state()
        self.particles: list[Particle] = []
        self._drag_start: tuple[int, int] | None = None

        self.engine.subscribe(GameEvent.STATE_CHANGED, self._on_state_changed)
        self.engine.subscribe(GameEvent.FOOD_EATEN, self._on_food_eaten)
        self.engine.subscribe(GameEvent.GAME_OVER, self._on_game_over)

    # --- Engine observers ------------------------------------------------

    def _on_state_changed(self, snapshot: GameSnapshot) -> None:
        self.snapshot = snapshot

    def _on_food_eaten(self, food: Position) -> None:
        # burst where the snake just ate, i.e. at its new head
        spawn_food_particles(self.particles, self.engine.get_state().head)

    def _on_game_over(self, final_score: int) -> None:
        logger.info("Game over with score %d", final_score)

    # --- Input -----------------------------------------------------------

    def handle_events(self) -> bool:
        """Translate window, keyboard and drag events into engine commands."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if not dispatch_key(self.engine, event.key):
                    return False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._drag_start = event.pos
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                if self._drag_start is None:
                    continue
                direction = swipe_direction(self._drag_start, event.pos)
                self._drag_start = None
                if direction is not None:
                    self.engine.change_direction(direction)
        return True

    # --- Drawing ---------------------------------------------------------

    def _build_background(self) -> pygame.Surface:
        """Create a gradient grid background once to keep draw() light."""
        surface = pygame.Surface((WINDOW_SIZE, WINDOW_SIZE))
        top, bottom = PALETTE["bg_top"], PALETTE["bg_bottom"]
        for y in range(WINDOW_SIZE):
            t = y / WINDOW_SIZE
            color = (
                int(top.r + (bottom.r - top.r) * t),
                int(top.g + (bottom.g - top.g) * t),
                int(top.b + (bottom.b - top.b) * t),
            )
            pygame.draw.line(surface, color, (0, y), (WINDOW_SIZE, y))
        for i in range(0, WINDOW_SIZE, CELL):
            pygame.draw.line(surface, PALETTE["grid"], (i, 0), (i, WINDOW_SIZE), 1)
            pygame.draw.line(surface, PALETTE["grid"], (0, i), (WINDOW_SIZE, i), 1)
        return surface

    def _draw_food(self, food: Position) -> None:
        pulse = (math.sin(pygame.time.get_ticks() * 0.008) + 1.0) * 0.5
        center = (food.x * CELL + CELL // 2, food.y * CELL + CELL // 2)
        glow = pygame.Surface((CELL * 2, CELL * 2), pygame.SRCALPHA)
        pygame.draw.circle(
            glow, PALETTE["food_glow"], (CELL, CELL), int(CELL * 0.6 + pulse * 3)
        )
        self.window.blit(glow, (center[0] - CELL, center[1] - CELL))
        pygame.draw.circle(self.window, PALETTE["food"], center, CELL // 2 - 2)

    def _draw_snake(self, snake: tuple[Position, ...]) -> None:
        for idx, cell in enumerate(snake):
            color = PALETTE["snake_head"] if idx == 0 else PALETTE["snake_body"]
            rect = pygame.Rect(cell.x * CELL, cell.y * CELL, CELL, CELL).inflate(-2, -2)
            pygame.draw.rect(self.window, color, rect, border_radius=4)

    def _draw_overlay(self, lines: list[str]) -> None:
        overlay = pygame.Surface((WINDOW_SIZE, WINDOW_SIZE), pygame.SRCALPHA)
        overlay.fill((5, 5, 15, 140))
        for idx, text in enumerate(lines):
            surf = self.font.render(text, True, PALETTE["text"])
            rect = surf.get_rect()
            rect.center = (WINDOW_SIZE // 2, WINDOW_SIZE // 3 + idx * (FONT_SIZE + 8))
            overlay.blit(surf, rect)
        self.window.blit(overlay, (0, 0))

    def show_hud(self) -> None:
        snap = self.snapshot
        text = self.font.render(hud_text(snap), True, PALETTE["text"])
        hud = pygame.Surface((text.get_width() + 16, text.get_height() + 10), pygame.SRCALPHA)
        hud.fill(PALETTE["hud"])
        hud.blit(text, (8, 5))
        self.window.blit(hud, (10, 10))

    def draw(self) -> None:
        snap = self.snapshot
        self.window.blit(self.background, (0, 0))
        if snap.food is not None:
            self._draw_food(snap.food)
        self._draw_snake(snap.snake)
        draw_particles(self.window, self.particles)
        self.show_hud()

        lines = overlay_lines(snap)
        if lines:
            self._draw_overlay(lines)

    # --- Main loop -------------------------------------------------------

    def run(self) -> None:
        """Pump input, run the engine's frame callbacks, then render."""
        clock = pygame.time.Clock()
        running = True

        while running:
            dt = clock.tick(FPS) / 1000.0
            running = self.handle_events()
            self.scheduler.run_frame(pygame.time.get_ticks())
            if self.snapshot.phase is not Phase.PAUSED:
                self.particles = update_particles(self.particles, dt)
            self.draw()
            pygame.display.update()

        self.engine.cleanup()
        pygame.quit()


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    SnakeApp().run()


if __name__ == "__main__":
    main()
