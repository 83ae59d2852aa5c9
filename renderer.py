# renderer.py
"""
Drives the flow field render loop.

This module defines the Renderer class. It validates the configuration,
builds the FlowField and ParticleSystem, and then for each iteration
advances every particle and draws its motion segment onto an external
surface in a brightness that rises with the iteration index.
"""
import logging
import math
import numbers
import numpy as np
from typing import Dict, Any, Tuple
from errors import ConfigurationError
from gradient_noise import seed_to_int, smooth2
from flow_field import FlowField
from particle import ParticleSystem
from constants import (
    DEFAULT_SCALE, DEFAULT_NOISE_STEP, DEFAULT_ITERATIONS, DEFAULT_MAX_SPEED,
    DEFAULT_PARTICLE_COUNT, DEFAULT_ACCEL, BRUSH_MIN_VALUE, BRUSH_MAX_VALUE
)

# --- Data Contracts ---
#
# class Renderer:
#   - __init__(self, params: Dict[str, Any], width: int, height: int,
#              log_throttle: int = 10):
#     - Inputs:
#       - params: Dictionary of flow parameters from config.json.
#         - "scale": float, "noise_step": float, "iterations": int,
#           "max_speed": float, "particle_count": int, "accel": float,
#           "seed": float in [0, 1), int, or None for a random seed.
#       - width, height: Size of the target surface in pixels.
#     - Side Effects: Validates parameters, then builds the field and the
#       particles. Raises ConfigurationError before any allocation.
#
#   - render(self, surface) -> int:
#     - Inputs:
#       - surface: Any object with draw_line(x1, y1, x2, y2, color).
#     - Outputs: Number of draw_line calls issued.
#     - Side Effects: Mutates particle state and draws onto the surface.
#     - Invariants: Draws are ordered by iteration, then by particle.
#       Exactly iterations * particle_count draws are issued.


def _is_finite_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def frame_brightness(iteration: int, iterations: int) -> float:
    """Brush brightness for a given iteration, eased from 0 toward 255."""
    return float(smooth2(BRUSH_MIN_VALUE, BRUSH_MAX_VALUE, iteration / iterations))


def frame_color(iteration: int, iterations: int) -> Tuple[int, int, int]:
    """Grey brush colour for a given iteration, rounded and clamped."""
    value = min(max(int(round(frame_brightness(iteration, iterations))), 0), 255)
    return (value, value, value)


class Renderer:
    """
    Composes the flow field and particle system and runs the draw loop.
    """
    def __init__(self, params: Dict[str, Any], width: int, height: int, log_throttle: int = 10):
        self.width = width
        self.height = height
        self.scale = params.get('scale', DEFAULT_SCALE)
        self.noise_step = params.get('noise_step', DEFAULT_NOISE_STEP)
        self.iterations = params.get('iterations', DEFAULT_ITERATIONS)
        self.max_speed = params.get('max_speed', DEFAULT_MAX_SPEED)
        self.particle_count = params.get('particle_count', DEFAULT_PARTICLE_COUNT)
        self.accel = params.get('accel', DEFAULT_ACCEL)
        self.log_throttle = max(int(log_throttle), 1)

        self._validate()

        # A missing seed is drawn once here and logged, so the run can be
        # reproduced later from the log.
        self.seed = params.get('seed')
        if self.seed is None:
            self.seed = float(np.random.default_rng().random())
            logging.info(f"No seed configured. Using random seed {self.seed!r}.")
        self.seed_int = seed_to_int(self.seed)

        logging.info("Renderer configuration validated.")

        self.field = FlowField(self.width, self.height, self.scale, self.noise_step, self.seed_int)
        self.particles = ParticleSystem(
            {
                'seed_int': self.seed_int,
                'particle_count': self.particle_count,
                'accel': self.accel,
                'max_speed': self.max_speed,
            },
            self.width,
            self.height
        )

    def _fail(self, msg: str):
        logging.critical(msg)
        raise ConfigurationError(msg)

    def _validate(self):
        """
        Rejects any configuration that cannot produce a valid render.

        Zero iterations and zero particles are allowed and simply draw
        nothing.
        """
        for name in ('width', 'height', 'scale'):
            value = getattr(self, name)
            if not _is_finite_number(value) or value <= 0:
                self._fail(f"Configuration error: {name} must be a positive finite number, got {value!r}.")

        for name in ('iterations', 'particle_count'):
            value = getattr(self, name)
            if not isinstance(value, numbers.Integral) or isinstance(value, bool) or value < 0:
                self._fail(f"Configuration error: {name} must be a non-negative integer, got {value!r}.")

        for name in ('noise_step', 'max_speed', 'accel'):
            value = getattr(self, name)
            if not _is_finite_number(value):
                self._fail(f"Configuration error: {name} must be a finite number, got {value!r}.")

        if self.scale > self.width or self.scale > self.height:
            self._fail(
                f"Configuration error: scale {self.scale} is larger than the surface "
                f"({self.width}x{self.height}), so the flow field would have no cells."
            )

    def render(self, surface) -> int:
        """
        Runs every iteration and draws each particle's motion segment.

        Segments for one iteration are computed in a single jitted pass
        and then flushed to the surface in particle order.
        """
        draws = 0
        logging.info(
            f"Rendering {self.iterations} iterations of {self.particle_count} particles "
            f"onto a {self.width}x{self.height} surface."
        )
        for iteration in range(self.iterations):
            color = frame_color(iteration, self.iterations)
            segments = self.particles.step(self.field)

            for x1, y1, x2, y2 in segments.tolist():
                surface.draw_line(x1, y1, x2, y2, color)
            draws += self.particle_count

            # Hot loops must throttle logs
            if (iteration + 1) % self.log_throttle == 0:
                logging.info(f"Render iteration {iteration + 1}/{self.iterations}")
                mean_speed = np.mean(np.linalg.norm(self.particles.velocities, axis=1)) if self.particle_count else 0.0
                logging.debug(f"Iteration {iteration + 1} | Brush {color[0]} | Average Speed: {mean_speed:.4f}")

        logging.info(f"Render finished with {draws} segments drawn.")
        return draws
