"""Vector algebra for positions, directions and colors.

All three roles share one representation, Taichi's ``vec3``. The helpers in
this module are ``ti.func``s so they can be inlined into the rendering
kernels.

Normalization here is the Chebyshev (L-infinity) kind: every component is
divided by the largest absolute component, so the dominant component becomes
exactly +1 or -1 and keeps its sign. It is NOT Euclidean normalization. Both
surface normals and the random scatter directions depend on this.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from bandtrace.core.vector import normalize, vec3
    >>> # Within a Taichi kernel:
    >>> # normalize(vec3(2.0, -4.0, 1.0)) == vec3(0.5, -1.0, 0.25)
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def add(a: vec3, b) -> vec3:
    """Component-wise sum of a vector and a vector or scalar."""
    return a + b


@ti.func
def multiply(a: vec3, b) -> vec3:
    """Component-wise product of a vector and a vector or scalar."""
    return a * b


@ti.func
def exponentiate(a: vec3, b) -> vec3:
    """Raise each component to a power.

    Args:
        a: The base vector.
        b: A scalar exponent, or a vector of per-component exponents.

    Returns:
        The vector ``(a.x ** b.x, a.y ** b.y, a.z ** b.z)``.
    """
    return a**b


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return tm.dot(a, b)


@ti.func
def negate(v: vec3) -> vec3:
    return -v


@ti.func
def reciprocate(v: vec3) -> vec3:
    """Component-wise reciprocal. Zero components become infinities."""
    return 1.0 / v


@ti.func
def normalize(v: vec3) -> vec3:
    """Chebyshev-normalize a vector.

    Divides every component by ``max(|x|, |y|, |z|)``. The zero vector is not
    guarded against and yields NaN components.

    Args:
        v: The input vector.

    Returns:
        A vector whose largest absolute component is exactly 1.
    """
    largest = ti.max(ti.abs(v.x), ti.max(ti.abs(v.y), ti.abs(v.z)))
    return v / largest


# =============================================================================
# Random Sampling
# =============================================================================


@ti.func
def random_scalar(minimum: ti.f32, maximum: ti.f32) -> ti.f32:
    """Draw a uniform random number in ``[minimum, maximum)``."""
    return minimum + ti.random(ti.f32) * (maximum - minimum)


@ti.func
def random_vector(minimum: ti.f32, maximum: ti.f32) -> vec3:
    """Draw each component independently from ``[minimum, maximum)``."""
    return vec3(
        random_scalar(minimum, maximum),
        random_scalar(minimum, maximum),
        random_scalar(minimum, maximum),
    )


@ti.func
def random_unit_vector(minimum: ti.f32, maximum: ti.f32) -> vec3:
    """Draw a random direction by normalizing a random vector.

    The vector is uniform in the cube and then projected onto the cube's
    surface by the Chebyshev normalization, so the directions are not
    uniformly distributed on the sphere.

    Args:
        minimum: Lower bound of every component before normalization.
        maximum: Upper bound of every component before normalization.

    Returns:
        A direction whose largest absolute component is 1.
    """
    return normalize(random_vector(minimum, maximum))
