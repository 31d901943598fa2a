"""
Human Play Mode
===============

Play Frogger interactively. Key presses and the fixed-rate clock are merged
into one event loop; every produced state is drawn by an id-addressed
renderer that follows the state's cleanup signals.

Controls:
    - W/A/S/D: Move
    - R: Restart game
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--record [replay.json]]
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from frogger_core.config_loader import GameConfig, load_config
from frogger_core.event_loop import FixedRateClock, GameLoop, KeySource
from frogger_core.game import CoreGame
from frogger_core.replay_recorder import ReplayRecorder, generate_replay_filename
from frogger_core.state import State, ghost_frog_id

FIELD_SIZE = (600, 640)

# Drawn sizes (width, height) per lane; collision extents live in the state
LANE_STYLES: Dict[str, Tuple[Tuple[int, int], Tuple[int, int, int]]] = {
    "cars": ((60, 30), (220, 40, 40)),
    "buses": ((80, 30), (230, 200, 40)),
    "planks": ((120, 30), (140, 90, 40)),
    "crocs": ((100, 30), (20, 100, 20)),
    "snakes": ((80, 5), (34, 139, 34)),
    "turtles": ((120, 30), (40, 160, 60)),
}
TARGET_STYLE = ((80, 70), (128, 0, 128))
POWER_STYLE = ((20, 20), (0, 0, 0))
FROG_COLOR = (127, 255, 0)
FROG_RADIUS = 25

ROAD_BAND = (270, 560)
RIVER_BAND = (80, 260)


class FroggerRenderer:
    """
    Keeps a table of visual elements keyed by body id.

    Elements are created on first sight, moved on every state and only
    dropped when the state lists them as removable.
    """

    def __init__(self, config: GameConfig):
        self._config = config
        self._elements: Dict[str, dict] = {}
        self._game_over = False
        self._hud = ""

        pygame.font.init()
        self._font_large = pygame.font.Font(None, 64)
        self._font_small = pygame.font.Font(None, 28)

    def apply(self, state: State) -> None:
        """Fold one state into the element table."""
        if state.double_jump:
            self._elements.pop(state.jump_power.id, None)

        if state.restart or state.level_beaten:
            self._game_over = False
            for element_id in state.removables:
                self._elements.pop(element_id, None)

        if state.game_over:
            self._game_over = True

        if state.reached:
            self._elements[ghost_frog_id(state.frog_count)] = {
                "kind": "circle", "pos": state.frog.position.as_tuple(), "color": FROG_COLOR,
            }
        else:
            for name, lane in state.lanes().items():
                size, color = LANE_STYLES[name]
                for body in lane:
                    self._place_rect(body.id, body.position.as_tuple(), size, color)
            for target in state.targets:
                self._place_rect(target.id, target.position.as_tuple(), *TARGET_STYLE)

        frog_pos = state.frog.position.as_tuple()
        if state.snake_bite:
            size, color = LANE_STYLES["snakes"]
            self._elements[state.frog.id] = {
                "kind": "rect", "pos": frog_pos, "size": size, "color": color,
            }
        else:
            self._elements[state.frog.id] = {
                "kind": "circle", "pos": frog_pos, "color": FROG_COLOR,
            }

        if not state.double_jump:
            self._place_rect(state.jump_power.id, state.jump_power.position.as_tuple(), *POWER_STYLE)

        self._hud = f"Level: {state.level} | Score: {state.score} | Highscore: {state.high_score}"

    def _place_rect(self, element_id: str, pos, size, color) -> None:
        self._elements[element_id] = {"kind": "rect", "pos": pos, "size": size, "color": color}

    def draw(self, screen: "pygame.Surface") -> None:
        screen.fill((20, 20, 60))
        width = FIELD_SIZE[0]
        pygame.draw.rect(screen, (40, 40, 40), (0, ROAD_BAND[0], width, ROAD_BAND[1] - ROAD_BAND[0]))
        pygame.draw.rect(screen, (30, 80, 200), (0, RIVER_BAND[0], width, RIVER_BAND[1] - RIVER_BAND[0]))

        for element in self._elements.values():
            x, y = (int(v) for v in element["pos"])
            if element["kind"] == "circle":
                pygame.draw.circle(screen, element["color"], (x, y), FROG_RADIUS)
            else:
                w, h = element["size"]
                pygame.draw.rect(screen, element["color"], (x, y, w, h))

        hud = self._font_small.render(self._hud, True, (255, 255, 255))
        screen.blit(hud, (30, 320))

        if self._game_over:
            text = self._font_large.render("Game Over", True, (255, 0, 0))
            screen.blit(text, (150, 260))


class HumanPlayer:
    """Interactive game driven by the merged event loop."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        target_fps: int = 60,
        record_path: Optional[str] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps
        self._record_path = record_path

        pygame.init()
        self._screen = pygame.display.set_mode(FIELD_SIZE)
        pygame.display.set_caption("Frogger")
        self._clock = pygame.time.Clock()

        self._renderer = FroggerRenderer(config)
        self._keys = KeySource(config)
        self._game = CoreGame(config=config, seed=seed)
        self._recorder = ReplayRecorder(self._game) if record_path else None
        self._loop = GameLoop(
            sources=[self._keys],
            clock=FixedRateClock(config.clock.tick_interval_ms),
            sink=self._renderer.apply,
            game=self._game,
        )
        self._running = True

    def run(self) -> int:
        """Run the game loop. Returns the high score."""
        print("=== Frogger ===")
        print("W/A/S/D to move, R to restart, ESC to quit")
        print()

        start = time.monotonic()
        while self._running:
            self._handle_events()
            self._loop.turn((time.monotonic() - start) * 1000.0)
            self._renderer.draw(self._screen)
            pygame.display.flip()
            self._clock.tick(self._target_fps)

        if self._recorder is not None:
            path = self._recorder.save(self._record_path)
            print(f"Replay saved to {path}")

        pygame.quit()
        return self._game.high_score

    def _handle_events(self) -> None:
        """Forward key presses to the key source."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.unicode:
                    self._keys.press(event.unicode)


def main():
    parser = argparse.ArgumentParser(description="Play Frogger interactively")
    parser.add_argument("--seed", type=int, default=None, help="Powerup RNG seed")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--record", type=str, nargs="?", const="", default=None,
                        help="Save a replay to this path (timestamped name if omitted)")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    record_path = args.record
    if record_path == "":
        record_path = str(generate_replay_filename(seed=args.seed))

    try:
        config = load_config()
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            target_fps=args.fps,
            record_path=record_path
        )
        high_score = player.run()
        print(f"\nHigh Score: {high_score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
