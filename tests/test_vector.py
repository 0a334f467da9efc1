"""Unit tests for vector algebra and random sampling.

Tests cover:
- Component-wise arithmetic helpers
- Chebyshev normalization
- Random scalars, vectors and unit vectors
"""

import numpy as np
import pytest
import taichi as ti


class TestArithmetic:
    """Tests for the component-wise helpers."""

    def test_add_multiply_negate(self):
        """Test add, multiply and negate with vector and scalar operands."""
        from bandtrace.core.vector import add, multiply, negate, vec3

        results = ti.field(dtype=ti.math.vec3, shape=4)

        @ti.kernel
        def test_kernel():
            a = vec3(1.0, 2.0, 3.0)
            results[0] = add(a, vec3(1.0, 1.0, 1.0))
            results[1] = add(a, 0.5)
            results[2] = multiply(a, vec3(2.0, 0.5, -1.0))
            results[3] = negate(multiply(a, 2.0))

        test_kernel()
        assert results.to_numpy()[0] == pytest.approx([2.0, 3.0, 4.0])
        assert results.to_numpy()[1] == pytest.approx([1.5, 2.5, 3.5])
        assert results.to_numpy()[2] == pytest.approx([2.0, 1.0, -3.0])
        assert results.to_numpy()[3] == pytest.approx([-2.0, -4.0, -6.0])

    def test_exponentiate_and_reciprocate(self):
        """Test powers and reciprocals."""
        from bandtrace.core.vector import exponentiate, reciprocate, vec3

        results = ti.field(dtype=ti.math.vec3, shape=2)

        @ti.kernel
        def test_kernel():
            results[0] = exponentiate(vec3(2.0, 3.0, 4.0), 2.0)
            results[1] = reciprocate(vec3(2.0, 4.0, -0.5))

        test_kernel()
        assert results.to_numpy()[0] == pytest.approx([4.0, 9.0, 16.0])
        assert results.to_numpy()[1] == pytest.approx([0.5, 0.25, -2.0])

    def test_dot(self):
        """Test dot product."""
        from bandtrace.core.vector import dot, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = dot(vec3(1.0, 2.0, 3.0), vec3(4.0, -5.0, 6.0))

        test_kernel()
        assert result[None] == pytest.approx(12.0)


class TestNormalize:
    """Tests for Chebyshev normalization."""

    def test_normalize_divides_by_largest_component(self):
        """Test that the largest absolute component becomes +-1 and keeps its sign."""
        from bandtrace.core.vector import normalize, vec3

        results = ti.field(dtype=ti.math.vec3, shape=3)

        @ti.kernel
        def test_kernel():
            results[0] = normalize(vec3(2.0, -4.0, 1.0))
            results[1] = normalize(vec3(0.0, 0.0, -3.0))
            results[2] = normalize(vec3(0.1, 0.05, 0.0))

        test_kernel()
        assert results.to_numpy()[0] == pytest.approx([0.5, -1.0, 0.25])
        assert results.to_numpy()[1] == pytest.approx([0.0, 0.0, -1.0])
        assert results.to_numpy()[2] == pytest.approx([1.0, 0.5, 0.0])

    def test_normalize_is_not_euclidean(self):
        """Test that a diagonal vector keeps all components at 1."""
        from bandtrace.core.vector import normalize, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = normalize(vec3(3.0, 3.0, 3.0))

        test_kernel()
        assert result.to_numpy() == pytest.approx([1.0, 1.0, 1.0])

    def test_normalize_zero_vector_is_nan(self):
        """Test that the zero vector is not guarded against."""
        from bandtrace.core.vector import normalize, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = normalize(vec3(0.0, 0.0, 0.0))

        test_kernel()
        assert np.isnan(result.to_numpy()).all()

    def test_normalized_components_are_bounded(self):
        """Test max |component| == 1 for many random vectors."""
        from bandtrace.core.vector import normalize, random_vector

        n = 1000
        results = ti.field(dtype=ti.math.vec3, shape=n)

        @ti.kernel
        def test_kernel():
            for i in range(n):
                results[i] = normalize(random_vector(-5.0, 5.0))

        test_kernel()
        largest = np.abs(results.to_numpy()).max(axis=1)
        assert largest == pytest.approx([1.0] * n, abs=1e-6)


class TestRandom:
    """Tests for random sampling."""

    def test_random_scalar_in_interval(self):
        """Test random scalars lie in [minimum, maximum)."""
        from bandtrace.core.vector import random_scalar

        n = 1000
        results = ti.field(dtype=ti.f32, shape=n)

        @ti.kernel
        def test_kernel():
            for i in range(n):
                results[i] = random_scalar(-1.0 / 3.0, 1.0 / 3.0)

        test_kernel()
        values = results.to_numpy()
        assert values.min() >= -1.0 / 3.0 - 1e-6
        assert values.max() < 1.0 / 3.0 + 1e-6
        # Not degenerate
        assert values.std() > 0.1

    def test_random_vector_components_independent_in_interval(self):
        """Test every component of a random vector lies in the interval."""
        from bandtrace.core.vector import random_vector

        n = 500
        results = ti.field(dtype=ti.math.vec3, shape=n)

        @ti.kernel
        def test_kernel():
            for i in range(n):
                results[i] = random_vector(2.0, 3.0)

        test_kernel()
        values = results.to_numpy()
        assert values.min() >= 2.0
        assert values.max() < 3.0 + 1e-6
        assert not (values[:, 0] == values[:, 1]).all()

    def test_random_unit_vector_has_unit_chebyshev_norm(self):
        """Test random unit vectors lie on the surface of the unit cube."""
        from bandtrace.core.vector import random_unit_vector

        n = 1000
        results = ti.field(dtype=ti.math.vec3, shape=n)

        @ti.kernel
        def test_kernel():
            for i in range(n):
                results[i] = random_unit_vector(-1.0, 1.0)

        test_kernel()
        values = results.to_numpy()
        assert np.abs(values).max(axis=1) == pytest.approx([1.0] * n, abs=1e-6)
        # Both signs occur on every axis
        assert (values.min(axis=0) < 0.0).all()
        assert (values.max(axis=0) > 0.0).all()
