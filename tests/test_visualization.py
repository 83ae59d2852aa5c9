import os
import pygame
import pytest
from renderer import Renderer
from visualization import PygameSurface, Visualizer

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


def test_draw_line_marks_pixels_along_the_segment():
    canvas = pygame.Surface((10, 10))
    canvas.fill((0, 0, 0))
    surface = PygameSurface(canvas)

    surface.draw_line(1, 2, 8, 2, (255, 255, 255))

    assert tuple(canvas.get_at((4, 2)))[:3] == (255, 255, 255)
    assert tuple(canvas.get_at((4, 6)))[:3] == (0, 0, 0)


def test_draw_line_off_surface_is_clipped():
    canvas = pygame.Surface((10, 10))
    surface = PygameSurface(canvas)
    surface.draw_line(-20, -20, -5, -5, (255, 0, 0))
    surface.draw_line(5, 5, 50, 5, (0, 255, 0))
    assert tuple(canvas.get_at((9, 5)))[:3] == (0, 255, 0)


@pytest.fixture
def headless():
    visualizer = Visualizer(40, 30, background_color=(10, 20, 30), show_window=False)
    yield visualizer
    visualizer.close()


def test_headless_visualizer_fills_background(headless):
    assert headless.screen is None
    assert tuple(headless.canvas.get_at((0, 0)))[:3] == (10, 20, 30)
    assert headless.surface.width == 40 and headless.surface.height == 30


def test_invalid_background_falls_back_to_default():
    visualizer = Visualizer(8, 8, background_color="not a colour", show_window=False)
    try:
        assert tuple(visualizer.canvas.get_at((0, 0)))[:3] == (0, 0, 0)
    finally:
        visualizer.close()


def test_render_and_save(headless, tmp_path):
    renderer = Renderer({'iterations': 20, 'particle_count': 50, 'seed': 0.5}, 40, 30)
    renderer.render(headless.surface)

    out = tmp_path / "nested" / "flow.png"
    headless.save(str(out))
    assert out.exists() and out.stat().st_size > 0
