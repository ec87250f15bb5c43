"""Internal Bezier polynomial helpers.

This is an internal module containing the control-polygon arithmetic behind
penpath.core.curve. Not intended for public use. All functions take and
return lists of Vec control points of length 2 (line), 3 (quadratic) or
4 (cubic).
"""

import math
from functools import lru_cache

from penpath.domain import Vec


def lerp(a: Vec, b: Vec, t: float) -> Vec:
    """Linear interpolation between two positions."""
    return Vec(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def evaluate(points: list[Vec], t: float) -> Vec:
    """Evaluate a Bezier curve in Bernstein form.

    Args:
        points: Control points (2 to 4)
        t: Curve parameter in [0, 1]

    Returns:
        Position on the curve
    """
    mt = 1.0 - t
    if len(points) == 2:
        p0, p1 = points
        return Vec(mt * p0.x + t * p1.x, mt * p0.y + t * p1.y)
    if len(points) == 3:
        p0, p1, p2 = points
        a, b, c = mt * mt, 2 * mt * t, t * t
        return Vec(
            a * p0.x + b * p1.x + c * p2.x,
            a * p0.y + b * p1.y + c * p2.y,
        )
    p0, p1, p2, p3 = points
    a, b, c, d = mt * mt * mt, 3 * mt * mt * t, 3 * mt * t * t, t * t * t
    return Vec(
        a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )


def hodograph(points: list[Vec]) -> list[Vec]:
    """Control points of the derivative curve.

    The derivative of a degree-n Bezier curve is a degree n-1 curve whose
    control points are ``n * (p[i+1] - p[i])``.

    Args:
        points: Control points (2 to 4)

    Returns:
        Derivative control points (1 to 3)
    """
    degree = len(points) - 1
    return [(points[i + 1] - points[i]) * degree for i in range(degree)]


def derivative(points: list[Vec], t: float) -> Vec:
    """First derivative of a Bezier curve at t."""
    d = hodograph(points)
    if len(d) == 1:
        return d[0]
    return evaluate(d, t)


def subdivide(points: list[Vec], t: float) -> tuple[list[Vec], list[Vec]]:
    """Split a Bezier curve at t using De Casteljau's algorithm.

    Args:
        points: Control points (2 to 4)
        t: Split parameter in [0, 1]

    Returns:
        Tuple of (left, right) control point lists of the same degree. The
        last point of ``left`` and the first point of ``right`` are the
        curve point at t.
    """
    left = [points[0]]
    right = [points[-1]]
    level = list(points)
    while len(level) > 1:
        level = [lerp(level[i], level[i + 1], t) for i in range(len(level) - 1)]
        left.append(level[0])
        right.append(level[-1])
    right.reverse()
    return left, right


def _linear_root(a: float, b: float) -> list[float]:
    """Root of the line through (0, a) and (1, b)."""
    if a == b:
        return []
    return [a / (a - b)]


def _quadratic_roots(a: float, b: float, c: float) -> list[float]:
    """Roots of a 1D quadratic Bezier polynomial with weights a, b, c."""
    # Expand (1-t)^2 a + 2(1-t)t b + t^2 c into k2 t^2 + k1 t + k0.
    k2 = a - 2 * b + c
    k1 = 2 * (b - a)
    k0 = a
    if abs(k2) < 1e-12:
        if abs(k1) < 1e-12:
            return []
        return [-k0 / k1]
    disc = k1 * k1 - 4 * k2 * k0
    if disc < 0:
        return []
    sq = math.sqrt(disc)
    return [(-k1 + sq) / (2 * k2), (-k1 - sq) / (2 * k2)]


def extrema(points: list[Vec]) -> list[float]:
    """Parameters in (0, 1) where either coordinate reaches an extremum.

    Args:
        points: Control points (2 to 4)

    Returns:
        Sorted parameter values strictly inside the curve
    """
    d = hodograph(points)
    roots: list[float] = []
    if len(d) == 2:
        roots += _linear_root(d[0].x, d[1].x)
        roots += _linear_root(d[0].y, d[1].y)
    elif len(d) == 3:
        roots += _quadratic_roots(d[0].x, d[1].x, d[2].x)
        roots += _quadratic_roots(d[0].y, d[1].y, d[2].y)
    return sorted(t for t in roots if 0.0 < t < 1.0)


@lru_cache(maxsize=8)
def gauss_legendre(order: int) -> tuple[tuple[float, ...], tuple[float, ...]]:
    """Gauss-Legendre abscissae and weights on [-1, 1].

    Nodes are found by Newton iteration on the Legendre polynomial starting
    from the Chebyshev-like initial guess.

    Args:
        order: Number of nodes

    Returns:
        Tuple of (abscissae, weights)
    """
    nodes: list[float] = []
    weights: list[float] = []
    for i in range(1, order + 1):
        x = math.cos(math.pi * (i - 0.25) / (order + 0.5))
        for _ in range(100):
            p0, p1 = 1.0, x
            for k in range(2, order + 1):
                p0, p1 = p1, ((2 * k - 1) * x * p1 - (k - 1) * p0) / k
            dp = order * (x * p1 - p0) / (x * x - 1)
            dx = p1 / dp
            x -= dx
            if abs(dx) < 1e-15:
                break
        # Recompute derivative at the converged node for the weight.
        p0, p1 = 1.0, x
        for k in range(2, order + 1):
            p0, p1 = p1, ((2 * k - 1) * x * p1 - (k - 1) * p0) / k
        dp = order * (x * p1 - p0) / (x * x - 1)
        nodes.append(x)
        weights.append(2.0 / ((1 - x * x) * dp * dp))
    return tuple(nodes), tuple(weights)


def arc_length(points: list[Vec], order: int = 24) -> float:
    """Arc length of a Bezier curve by Gauss-Legendre quadrature.

    Args:
        points: Control points (2 to 4)
        order: Quadrature order

    Returns:
        Length of the curve
    """
    if len(points) == 2:
        return (points[1] - points[0]).length()
    nodes, weights = gauss_legendre(order)
    total = 0.0
    for x, w in zip(nodes, weights, strict=True):
        t = 0.5 * x + 0.5
        total += w * derivative(points, t).length()
    return 0.5 * total
