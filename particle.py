# particle.py
"""
Manages the state and advection of all particles.

This module defines the ParticleSystem class, which is responsible for
initializing particle positions and velocities in NumPy arrays and for
moving every particle through a FlowField one step at a time.
"""
import logging
import math
import numpy as np
from typing import Dict, Any, Tuple
from numba import jit
from flow_field import FlowField, _cell_of_numba
from constants import DEFAULT_PARTICLE_COUNT, DEFAULT_ACCEL, DEFAULT_MAX_SPEED

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, params: Dict[str, Any], width: int, height: int):
#     - Inputs:
#       - params: Dictionary of flow parameters from config.json.
#         - "seed_int": int, 32-bit seed for initial placement
#         - "particle_count": int
#         - "accel": float
#         - "max_speed": float
#       - width: int, width of the surface.
#       - height: int, height of the surface.
#     - Outputs: None
#     - Side Effects: Initializes internal NumPy arrays for particle state.
#     - Invariants:
#       - self.positions is a NumPy array of shape (N, 2) of dtype float64.
#       - self.velocities is a NumPy array of shape (N, 2) of dtype float64.
#
#   - step(self, field: FlowField) -> np.ndarray:
#     - Outputs: (N, 4) int64 array of (prev_x, prev_y, new_x, new_y),
#       floored, in particle order.
#     - Side Effects: Updates positions and velocities in place.
#     - Invariants: Particle count remains constant. After the step every
#       velocity component is <= max_speed. There is no lower bound.


@jit(nopython=True)
def _advect_one_numba(positions, velocities, i, vectors, scale, accel, max_speed):
    """
    Numba-jitted update of a single particle.

    Returns the floored start and end points of the traversed segment.
    """
    x = positions[i, 0]
    y = positions[i, 1]
    col, row = _cell_of_numba(x, y, scale, vectors.shape[0], vectors.shape[1])

    prev_x = int(math.floor(x))
    prev_y = int(math.floor(y))

    vx = velocities[i, 0] + vectors[row, col, 0] * accel
    vy = velocities[i, 1] + vectors[row, col, 1] * accel

    # Upper bound only. A particle may still speed up without limit in
    # the negative direction.
    vx = min(vx, max_speed)
    vy = min(vy, max_speed)

    velocities[i, 0] = vx
    velocities[i, 1] = vy
    positions[i, 0] = x + vx
    positions[i, 1] = y + vy

    return prev_x, prev_y, int(math.floor(positions[i, 0])), int(math.floor(positions[i, 1]))


@jit(nopython=True)
def _advect_numba(positions, velocities, vectors, scale, accel, max_speed, segments):
    """
    Numba-jitted function to advance every particle one step.

    Particles do not interact, so each row of the state arrays is touched
    exactly once. Segments are written in particle order.
    """
    for i in range(positions.shape[0]):
        x1, y1, x2, y2 = _advect_one_numba(positions, velocities, i, vectors, scale, accel, max_speed)
        segments[i, 0] = x1
        segments[i, 1] = y1
        segments[i, 2] = x2
        segments[i, 3] = y2


class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(self, params: Dict[str, Any], width: int, height: int):
        """
        Initializes the particle system.

        Args:
            params (Dict[str, Any]): Flow parameters from config.
            width (int): The width of the surface.
            height (int): The height of the surface.
        """
        self.particle_count = int(params.get('particle_count', DEFAULT_PARTICLE_COUNT))
        self.accel = float(params.get('accel', DEFAULT_ACCEL))
        self.max_speed = float(params.get('max_speed', DEFAULT_MAX_SPEED))
        self.seed = params['seed_int']

        # All randomness is controlled by the run seed, so two runs with
        # the same seed place particles identically.
        rng = np.random.default_rng(self.seed)

        self.positions = rng.uniform(
            low=[0, 0],
            high=[width, height],
            size=(self.particle_count, 2)
        )
        self.velocities = np.zeros((self.particle_count, 2), dtype=np.float64)
        self._segments = np.zeros((self.particle_count, 4), dtype=np.int64)

        logging.info(f"ParticleSystem initialized with {self.particle_count} particles.")
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Velocities shape: {self.velocities.shape}"
        )

    def step(self, field: FlowField) -> np.ndarray:
        """
        Moves every particle one step through the field.

        Returns:
            np.ndarray: (N, 4) array of floored segment endpoints. The
            buffer is reused between calls.
        """
        _advect_numba(
            self.positions, self.velocities, field.vectors,
            field.scale, self.accel, self.max_speed, self._segments
        )
        return self._segments

    def step_one(self, index: int, field: FlowField) -> Tuple[int, int, int, int]:
        """Moves a single particle one step and returns its segment."""
        if not 0 <= index < self.particle_count:
            raise IndexError(f"Particle index {index} out of range (count {self.particle_count}).")
        x1, y1, x2, y2 = _advect_one_numba(
            self.positions, self.velocities, index, field.vectors,
            field.scale, self.accel, self.max_speed
        )
        return int(x1), int(y1), int(x2), int(y2)
