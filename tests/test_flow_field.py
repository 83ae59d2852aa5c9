import math
import numpy as np
import pytest
from flow_field import FlowField
from gradient_noise import perlin, seed_to_int


@pytest.fixture
def field():
    return FlowField(width=103, height=52, scale=5, noise_step=0.01, seed=seed_to_int(0.5))


def test_grid_dimensions_use_floor(field):
    assert field.cols == 20
    assert field.rows == 10
    assert field.vectors.shape == (10, 20, 2)


def test_every_vector_has_unit_length(field):
    lengths = np.linalg.norm(field.vectors, axis=2)
    assert np.all(np.abs(lengths - 1.0) < 1e-6)


def test_field_is_read_only(field):
    with pytest.raises(ValueError):
        field.vectors[0, 0, 0] = 0.0


def test_field_is_deterministic_for_a_seed():
    a = FlowField(60, 40, 5, 0.01, seed_to_int(0.25))
    b = FlowField(60, 40, 5, 0.01, seed_to_int(0.25))
    c = FlowField(60, 40, 5, 0.01, seed_to_int(0.75))
    assert np.array_equal(a.vectors, b.vectors)
    assert not np.array_equal(a.vectors, c.vectors)


def test_cell_of_maps_pixels_to_cells(field):
    assert field.cell_of(0.0, 0.0) == (0, 0)
    assert field.cell_of(4.99, 9.99) == (0, 1)
    assert field.cell_of(12.5, 27.0) == (2, 5)


def test_cell_of_clamps_out_of_range_positions(field):
    assert field.cell_of(-30.0, -0.1) == (0, 0)
    assert field.cell_of(5000.0, 5000.0) == (19, 9)
    assert field.cell_of(-1.0, 5000.0) == (0, 9)


def test_vector_at_clamps_to_nearest_edge(field):
    assert field.vector_at(-5, 3) == field.vector_at(0, 3)
    assert field.vector_at(25, 3) == field.vector_at(19, 3)
    assert field.vector_at(7, -1) == field.vector_at(7, 0)
    assert field.vector_at(7, 100) == field.vector_at(7, 9)
    fx, fy = field.vector_at(4, 6)
    assert (fx, fy) == (field.vectors[6, 4, 0], field.vectors[6, 4, 1])


def test_vectors_follow_eight_pi_times_noise():
    seed = seed_to_int(0.5)
    field = FlowField(35, 25, 5, 0.01, seed)
    for row in range(field.rows):
        for col in range(field.cols):
            angle = 8 * math.pi * perlin(col * 0.01, row * 0.01, seed)
            assert field.vectors[row, col, 0] == pytest.approx(math.cos(angle), abs=1e-12)
            assert field.vectors[row, col, 1] == pytest.approx(math.sin(angle), abs=1e-12)


def test_noise_step_scales_the_sample_coordinates():
    seed = seed_to_int(0.5)
    field = FlowField(50, 50, 5, 0.37, seed)
    angle = 8 * math.pi * perlin(3 * 0.37, 7 * 0.37, seed)
    assert field.vector_at(3, 7) == pytest.approx((math.cos(angle), math.sin(angle)), abs=1e-12)
