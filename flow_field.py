# flow_field.py
"""
Builds and queries the coarse grid of unit flow vectors.

This module defines the FlowField class. The field is sampled once from
gradient noise, one cell per `scale` pixels, and is read-only afterwards.
Lookups are index-clamped, so positions outside the surface read the
vector of the nearest edge cell.
"""
import logging
import math
import numpy as np
from typing import Tuple
from numba import jit
from gradient_noise import perlin

# --- Data Contracts ---
#
# class FlowField:
#   - __init__(self, width: int, height: int, scale: float,
#              noise_step: float, seed: int):
#     - Inputs:
#       - width, height: Surface size in pixels.
#       - scale: Pixels per field cell.
#       - noise_step: Noise-space distance between neighbouring cells.
#       - seed: 32-bit integer seed (see gradient_noise.seed_to_int).
#     - Side Effects: Allocates and fills self.vectors.
#     - Invariants:
#       - self.vectors has shape (rows, cols, 2) and dtype float64.
#       - Every vector has unit length.
#
#   - cell_of(self, x: float, y: float) -> Tuple[int, int]:
#     - Outputs: (col, row), clamped to the grid.
#
#   - vector_at(self, col: int, row: int) -> Tuple[float, float]:
#     - Outputs: The flow vector of the clamped cell.

# Multiplier from noise value to angle. Gives several full turns across
# the noise range so neighbouring cells rotate more than the noise varies.
ANGLE_MULTIPLIER = 8.0


@jit(nopython=True)
def _build_field_numba(rows, cols, noise_step, seed):
    """
    Numba-jitted function to sample the noise once per cell and store
    the resulting unit vector.
    """
    vectors = np.empty((rows, cols, 2), dtype=np.float64)
    for row in range(rows):
        for col in range(cols):
            angle = ANGLE_MULTIPLIER * perlin(col * noise_step, row * noise_step, seed) * math.pi
            vectors[row, col, 0] = math.cos(angle)
            vectors[row, col, 1] = math.sin(angle)
    return vectors


@jit(nopython=True)
def _clamp_index(index, size):
    if index < 0:
        return 0
    if index >= size:
        return size - 1
    return index


@jit(nopython=True)
def _cell_of_numba(x, y, scale, rows, cols):
    col = _clamp_index(int(math.floor(x / scale)), cols)
    row = _clamp_index(int(math.floor(y / scale)), rows)
    return col, row


class FlowField:
    """
    A read-only grid of unit direction vectors derived from gradient noise.
    """
    def __init__(self, width: int, height: int, scale: float, noise_step: float, seed: int):
        self.scale = float(scale)
        self.noise_step = float(noise_step)
        self.seed = seed

        self.rows = int(math.floor(height / scale))
        self.cols = int(math.floor(width / scale))

        self.vectors = _build_field_numba(self.rows, self.cols, self.noise_step, self.seed)
        self.vectors.setflags(write=False)

        logging.info(
            f"FlowField built: {self.cols}x{self.rows} cells, "
            f"cell size {self.scale:.2f}px, noise step {self.noise_step}."
        )

    def cell_of(self, x: float, y: float) -> Tuple[int, int]:
        """Maps a pixel position to the (col, row) of its clamped cell."""
        return _cell_of_numba(float(x), float(y), self.scale, self.rows, self.cols)

    def vector_at(self, col: int, row: int) -> Tuple[float, float]:
        """
        Returns the flow vector at (col, row).

        Indices outside the grid are clamped to the nearest edge cell
        instead of raising.
        """
        col = _clamp_index(int(col), self.cols)
        row = _clamp_index(int(row), self.rows)
        return float(self.vectors[row, col, 0]), float(self.vectors[row, col, 1])
