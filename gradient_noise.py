# gradient_noise.py
"""
Deterministic pseudo-random noise used to build the flow field.

This module provides a stateless integer hash that maps a lattice point and
a seed to a value in [0, 1), and a Perlin-style gradient noise built on top
of it. Every function here is Numba-jitted so the field builder can call
them once per grid cell without Python overhead.
"""
import math
import numbers
import logging
from numba import jit
from errors import ConfigurationError

# --- Data Contracts ---
#
# hash_noise(ix: int, iy: int, seed: int) -> float:
#   - Inputs: integer lattice coordinates and a 32-bit integer seed.
#   - Outputs: float in [0, 1).
#   - Invariants: Pure. Identical inputs always give identical outputs.
#
# perlin(x: float, y: float, seed: int) -> float:
#   - Inputs: continuous coordinates and a 32-bit integer seed.
#   - Outputs: float, empirically within [-1, 1].
#   - Invariants: Pure and C1-continuous across lattice boundaries.
#
# seed_to_int(seed) -> int:
#   - Inputs: float in [0, 1) or an integer.
#   - Outputs: int in [0, 2**32).
#   - Side Effects: Raises ConfigurationError for non-finite or
#     non-numeric seeds.

MASK32 = 0xFFFFFFFF
PRIME_A = 3266489917
PRIME_B = 374761393
PRIME_C = 668265263
PRIME_D = 2246822519
# The hash keeps 24 bits so the result is exactly representable as a float.
HASH_BITS_MASK = 0x00FFFFFF
HASH_NORMALIZER = 1.0 / 0x1000000


def seed_to_int(seed) -> int:
    """
    Converts a run seed into the 32-bit integer consumed by the hash.

    Floats in [0, 1) are spread over the full 32-bit range; integers are
    reduced modulo 2**32.
    """
    if isinstance(seed, bool) or not isinstance(seed, numbers.Real):
        msg = f"Configuration error: seed must be a number, got {seed!r}."
        logging.critical(msg)
        raise ConfigurationError(msg)

    if isinstance(seed, numbers.Integral):
        return int(seed) & MASK32

    seed = float(seed)
    if not math.isfinite(seed):
        msg = f"Configuration error: seed must be finite, got {seed}."
        logging.critical(msg)
        raise ConfigurationError(msg)

    if 0.0 <= seed < 1.0:
        return int(seed * 0x100000000) & MASK32
    # Any other finite float is used by its integer part.
    return int(math.floor(seed)) & MASK32


@jit(nopython=True)
def hash_noise(ix, iy, seed):
    """
    Mixes a lattice point and seed into a float in [0, 1).

    All arithmetic is done modulo 2**32.
    """
    h = (iy * PRIME_A + PRIME_B) & MASK32
    h = ((h << 17) | (h >> 15)) & MASK32
    h = (h + ix * PRIME_A) & MASK32
    h = (h + seed * PRIME_A) & MASK32
    h = (h * PRIME_C) & MASK32
    h ^= h >> 15
    h = (h * PRIME_D) & MASK32
    h ^= h >> 13
    h = (h * PRIME_A) & MASK32
    h ^= h >> 16
    return (h & HASH_BITS_MASK) * HASH_NORMALIZER


@jit(nopython=True)
def smooth(a, b, t):
    """Cubic Hermite blend between a and b with zero slope at both ends."""
    return (b - a) * (3.0 - t * 2.0) * t * t + a


@jit(nopython=True)
def smooth2(a, b, t):
    """Cubic ease-in from a to b."""
    return a + (b - a) * t * t * t


@jit(nopython=True)
def gradient(ix, iy, x, y, seed):
    """
    Dot product of the pseudo-random unit gradient at lattice point
    (ix, iy) with the offset from that point to (x, y).
    """
    angle = 2.0 * hash_noise(ix, iy, seed) * math.pi
    gx = math.cos(angle)
    gy = math.sin(angle)

    dx = x - ix
    dy = y - iy
    return gx * dx + gy * dy


@jit(nopython=True)
def perlin(x, y, seed):
    """
    Samples 2D gradient noise at (x, y).
    """
    x1 = int(math.floor(x))
    y1 = int(math.floor(y))
    x2 = x1 + 1
    y2 = y1 + 1

    t1 = x - x1
    t2 = y - y1

    # Top edge of the cell
    g1 = gradient(x1, y1, x, y, seed)
    g2 = gradient(x2, y1, x, y, seed)
    ix1 = smooth(g1, g2, t1)

    # Bottom edge of the cell
    g3 = gradient(x1, y2, x, y, seed)
    g4 = gradient(x2, y2, x, y, seed)
    ix2 = smooth(g3, g4, t1)

    return smooth(ix1, ix2, t2)
