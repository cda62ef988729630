"""Tests for Vec3 class."""

import pytest
import math
import numpy as np

from spherecast.vec3 import Vec3, Point3, Color, degrees_to_radians


class TestVec3Creation:
    """Test Vec3 construction."""

    def test_default_constructor(self):
        v = Vec3()
        assert v.x == 0.0
        assert v.y == 0.0
        assert v.z == 0.0

    def test_from_array(self):
        v = Vec3.from_array(np.array([1.0, 2.0, 3.0]))
        assert (v.x, v.y, v.z) == (1.0, 2.0, 3.0)

    def test_color_aliases(self):
        c = Color(0.5, 0.6, 0.7)
        assert c.r == 0.5
        assert c.g == 0.6
        assert c.b == 0.7

    def test_point_and_color_are_vec3(self):
        assert isinstance(Point3(1, 2, 3), Vec3)
        assert isinstance(Color(1, 2, 3), Vec3)

    def test_iteration_and_indexing(self):
        v = Vec3(1, 2, 3)
        assert list(v) == [1.0, 2.0, 3.0]
        assert v[2] == 3.0


class TestVec3Arithmetic:
    """Test Vec3 arithmetic operations."""

    def test_negation(self):
        assert -Vec3(1, 2, 3) == Vec3(-1, -2, -3)

    def test_addition(self):
        assert Vec3(1, 2, 3) + Vec3(4, 5, 6) == Vec3(5, 7, 9)

    def test_subtraction(self):
        assert Vec3(4, 5, 6) - Vec3(1, 2, 3) == Vec3(3, 3, 3)

    def test_scalar_multiplication_both_sides(self):
        assert Vec3(1, 2, 3) * 2 == Vec3(2, 4, 6)
        assert 2 * Vec3(1, 2, 3) == Vec3(2, 4, 6)

    def test_component_product(self):
        assert Vec3(1, 2, 3) * Vec3(2, 3, 4) == Vec3(2, 6, 12)

    def test_division(self):
        assert Vec3(2, 4, 6) / 2 == Vec3(1, 2, 3)

    def test_operations_do_not_mutate(self):
        v = Vec3(1, 2, 3)
        _ = v + Vec3(1, 1, 1)
        _ = v * 3
        _ = v.normalize()
        assert v == Vec3(1, 2, 3)


class TestVec3VectorOps:
    """Test Vec3 vector operations."""

    def test_length(self):
        v = Vec3(3, 4, 0)
        assert v.length() == 5.0
        assert v.length_squared() == 25.0

    def test_normalize(self):
        n = Vec3(3, 4, 0).normalize()
        assert abs(n.length() - 1.0) < 1e-10
        assert n == Vec3(0.6, 0.8, 0)

    def test_normalize_zero_vector(self):
        assert Vec3(0, 0, 0).normalize().length() == 0.0

    def test_dot_product(self):
        assert Vec3(1, 0, 0).dot(Vec3(0, 1, 0)) == 0.0
        assert Vec3(1, 2, 3).dot(Vec3(4, 5, 6)) == 32.0

    def test_cross_product(self):
        assert Vec3(1, 0, 0).cross(Vec3(0, 1, 0)) == Vec3(0, 0, 1)

    def test_reflect(self):
        incoming = Vec3(1, -1, 0).normalize()
        reflected = incoming.reflect(Vec3(0, 1, 0))
        assert reflected == Vec3(1, 1, 0).normalize()

    def test_refract_straight_through(self):
        refracted = Vec3(0, -1, 0).refract(Vec3(0, 1, 0), 1.0 / 1.5)
        assert refracted == Vec3(0, -1, 0)

    def test_refract_bends_towards_normal(self):
        incoming = Vec3(1, -1, 0).normalize()
        refracted = incoming.refract(Vec3(0, 1, 0), 1.0 / 1.5)
        # Snell: sin(theta_t) = sin(45deg) / 1.5
        assert refracted.x == pytest.approx(math.sin(math.pi / 4) / 1.5)
        assert refracted.y < 0
        assert refracted.length() == pytest.approx(1.0)

    def test_near_zero(self):
        assert Vec3(1e-9, -1e-9, 0).near_zero()
        assert not Vec3(1e-9, 1e-3, 0).near_zero()


class TestVec3Random:
    """Test random vector generators."""

    def setup_method(self):
        np.random.seed(1234)

    def test_random_unit_range(self):
        for _ in range(200):
            v = Vec3.random()
            assert all(0.0 <= c < 1.0 for c in v)

    def test_random_signed_range(self):
        for _ in range(200):
            v = Vec3.random(-1, 1)
            assert all(-1.0 <= c < 1.0 for c in v)

    def test_random_unit_vector_is_unit(self):
        for _ in range(200):
            assert Vec3.random_unit_vector().length() == pytest.approx(1.0)

    def test_random_unit_vector_covers_sphere(self):
        vectors = [Vec3.random_unit_vector() for _ in range(500)]
        mean = sum(vectors, Vec3(0, 0, 0)) / len(vectors)
        assert mean.length() < 0.15

    def test_random_in_unit_disk(self):
        for _ in range(200):
            p = Vec3.random_in_unit_disk()
            assert p.z == 0.0
            assert p.length_squared() < 1.0

    def test_sample_square(self):
        for _ in range(200):
            p = Vec3.sample_square()
            assert -0.5 <= p.x < 0.5
            assert -0.5 <= p.y < 0.5
            assert p.z == 0.0


def test_degrees_to_radians():
    assert degrees_to_radians(180) == pytest.approx(math.pi)
    assert degrees_to_radians(90) == pytest.approx(math.pi / 2)
