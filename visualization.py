# visualization.py
"""
Handles the pixel surface and the preview window using Pygame.
"""
import logging
import os
import pygame
from typing import Tuple, Optional
from constants import BACKGROUND_COLOR, FPS, WINDOW_CAPTION

# --- Data Contracts ---
#
# class PygameSurface:
#   - __init__(self, surface: pygame.Surface):
#     - Inputs: An existing Pygame surface. Its contents are kept, so
#       strokes layer on top of whatever it already shows.
#
#   - draw_line(self, x1: int, y1: int, x2: int, y2: int,
#               color: Tuple[int, int, int]) -> None:
#     - Side Effects: Draws a one pixel wide segment. Segments that fall
#       partly or wholly off the surface are clipped by Pygame.
#
# class Visualizer:
#   - __init__(self, width: int, height: int,
#              background_color: Optional[tuple] = None,
#              show_window: bool = True):
#     - Side Effects: Initializes Pygame. Opens a window only when
#       show_window is True.
#
#   - show(self) -> None:
#     - Side Effects: Displays the canvas until the user quits or
#       presses ESC.
#
#   - save(self, path: str) -> None:
#     - Side Effects: Writes the canvas to disk with pygame.image.save.


class PygameSurface:
    """
    Adapts a pygame.Surface to the draw_line interface used by the renderer.
    """
    def __init__(self, surface: pygame.Surface):
        self.surface = surface
        self.width, self.height = surface.get_size()

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: Tuple[int, int, int]):
        pygame.draw.line(self.surface, color, (x1, y1), (x2, y2))


class Visualizer:
    """
    Owns the render canvas and, optionally, a window that previews it.
    """
    def __init__(
        self,
        width: int,
        height: int,
        background_color: Optional[tuple] = None,
        show_window: bool = True
    ):
        """
        Initializes Pygame and the canvas.
        """
        self.show_window = show_window
        if not show_window:
            # Allow headless runs on machines without a display.
            os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        pygame.init()

        self.width = width
        self.height = height
        self.background_color = self._parse_color(background_color)

        self.canvas = pygame.Surface((width, height))
        self.canvas.fill(self.background_color)
        self.surface = PygameSurface(self.canvas)

        self.screen = None
        if show_window:
            self.screen = pygame.display.set_mode((width, height))
            pygame.display.set_caption(WINDOW_CAPTION)
            self.clock = pygame.time.Clock()

        logging.info(
            f"Visualizer initialized with a {width}x{height} canvas "
            f"({'windowed' if show_window else 'headless'})."
        )

    def _parse_color(self, color: Optional[tuple]) -> pygame.Color:
        """Parses the background colour from config, falling back to the default."""
        if not color:
            return pygame.Color(BACKGROUND_COLOR)
        try:
            return pygame.Color(color)
        except (ValueError, TypeError) as e:
            logging.error(f"Could not parse background colour {color!r}: {e}. Falling back to default.")
            return pygame.Color(BACKGROUND_COLOR)

    def present(self):
        """Copies the canvas to the window, if there is one."""
        if self.screen is None:
            return
        self.screen.blit(self.canvas, (0, 0))
        pygame.display.flip()

    def show(self):
        """
        Displays the finished canvas until the window is closed.
        """
        if self.screen is None:
            logging.debug("No window to show in headless mode.")
            return

        self.present()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    logging.info("Quit event received. Closing preview.")
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Closing preview.")
                    running = False
            self.clock.tick(FPS)

    def save(self, path: str):
        """Writes the canvas to an image file."""
        out_dir = os.path.dirname(path)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        pygame.image.save(self.canvas, path)
        logging.info(f"Saved render to {path}.")

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
