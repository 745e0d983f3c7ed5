"""Pure functions for Bezier curve math.

All functions take control points as an (n + 1, 2) float array, where n is
the curve degree, and have no side effects. Calculators wrap these with typed
Point/BoundingBox values.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from functools import lru_cache

import numpy as np
from numpy.typing import NDArray

from shape_morph.types import Point

# Imaginary parts below this are treated as real roots.
_ROOT_IMAG_TOL = 1e-9

# Slack allowed when accepting roots and intersections at the [0, 1] ends.
_PARAM_TOL = 1e-9


def to_array(points: Sequence[Point]) -> NDArray[np.float64]:
    """Convert points to an (n, 2) array."""
    return np.array([[p.x, p.y] for p in points], dtype=np.float64)


def to_points(control: NDArray[np.float64]) -> list[Point]:
    """Convert an (n, 2) array back to points."""
    return [Point(x=float(x), y=float(y)) for x, y in control]


def blossom(control: NDArray[np.float64], params: Sequence[float]) -> NDArray[np.float64]:
    """Evaluate the polar form of the curve at the given parameters.

    Level k of the de Casteljau pyramid interpolates with params[k]. Each
    interpolation is a weighted sum, so a parameter of exactly 0 or 1 picks a
    control point without rounding.
    """
    pts = control
    for t in params:
        pts = (1 - t) * pts[:-1] + t * pts[1:]
    return pts[0]


def evaluate(control: NDArray[np.float64], t: float) -> NDArray[np.float64]:
    """Evaluate the curve at t with de Casteljau's algorithm."""
    return blossom(control, [t] * (len(control) - 1))


def evaluate_many(control: NDArray[np.float64], ts: NDArray[np.float64]) -> NDArray[np.float64]:
    """Evaluate the curve at many t values using the Bernstein basis."""
    n = len(control) - 1
    ts = np.asarray(ts, dtype=np.float64)[:, None]
    basis = np.hstack(
        [math.comb(n, i) * (1 - ts) ** (n - i) * ts**i for i in range(n + 1)]
    )
    return basis @ control


def subdivide(control: NDArray[np.float64], t1: float, t2: float) -> NDArray[np.float64]:
    """Control points of the piece of the curve between t1 and t2.

    Works for t1 > t2 (the piece comes out reversed) and for parameters
    outside [0, 1] (extrapolation).
    """
    n = len(control) - 1
    return np.array([blossom(control, [t1] * (n - i) + [t2] * i) for i in range(n + 1)])


def derivative(control: NDArray[np.float64]) -> NDArray[np.float64]:
    """Control points of the hodograph (first derivative curve)."""
    n = len(control) - 1
    return n * (control[1:] - control[:-1])


@lru_cache(maxsize=8)
def _gauss_legendre(samples: int) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    nodes, weights = np.polynomial.legendre.leggauss(samples)
    return nodes, weights


def arc_length(control: NDArray[np.float64], samples: int = 24) -> float:
    """Arc length over [0, 1] by Legendre-Gauss quadrature of the speed."""
    if len(control) < 2:
        return 0.0
    nodes, weights = _gauss_legendre(samples)
    ts = 0.5 * nodes + 0.5
    speeds = np.linalg.norm(evaluate_many(derivative(control), ts), axis=1)
    return float(0.5 * np.sum(weights * speeds))


def power_coefficients(values: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert 1D Bernstein coefficients to power-basis coefficients.

    Returns coefficients ordered from the constant term upwards.
    """
    n = len(values) - 1
    coeffs = np.zeros(n + 1)
    for j in range(n + 1):
        total = sum((-1) ** (j - i) * math.comb(j, i) * values[i] for i in range(j + 1))
        coeffs[j] = math.comb(n, j) * total
    return coeffs


def unit_roots(values: NDArray[np.float64]) -> list[float]:
    """Real roots in [0, 1] of a 1D Bernstein polynomial, sorted.

    A polynomial that is identically zero has no isolated roots and yields [].
    """
    coeffs = power_coefficients(values)
    if not np.any(coeffs):
        return []
    roots = np.roots(coeffs[::-1])
    found = sorted(
        min(1.0, max(0.0, float(r.real)))
        for r in roots
        if abs(r.imag) < _ROOT_IMAG_TOL and -_PARAM_TOL <= r.real <= 1 + _PARAM_TOL
    )
    # Collapse repeated roots
    unique: list[float] = []
    for r in found:
        if not unique or abs(r - unique[-1]) > _PARAM_TOL:
            unique.append(r)
    return unique


def extrema(control: NDArray[np.float64]) -> list[float]:
    """Parameters in [0, 1] where either coordinate has a local extremum."""
    if len(control) < 3:
        return []
    hodograph = derivative(control)
    ts = set(unit_roots(hodograph[:, 0])) | set(unit_roots(hodograph[:, 1]))
    return sorted(ts)


def bounds(control: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Tight (min_x, min_y, max_x, max_y) of the curve including interior extrema."""
    ts = [0.0, 1.0, *extrema(control)]
    pts = np.array([evaluate(control, t) for t in ts])
    return (
        float(pts[:, 0].min()),
        float(pts[:, 1].min()),
        float(pts[:, 0].max()),
        float(pts[:, 1].max()),
    )


def line_intersections(
    control: NDArray[np.float64], p1: NDArray[np.float64], p2: NDArray[np.float64]
) -> list[float]:
    """Curve parameters where the curve crosses the segment p1-p2.

    The curve is moved into a frame where the segment lies on the x axis, so
    crossings are the roots of the rotated y coordinate. Roots whose point
    falls outside the segment's extent are dropped.
    """
    dx, dy = p2 - p1
    if dx == 0 and dy == 0:
        return []
    angle = math.atan2(dy, dx)
    shifted = control - p1
    aligned_y = -shifted[:, 0] * math.sin(angle) + shifted[:, 1] * math.cos(angle)

    min_x, max_x = sorted((p1[0], p2[0]))
    min_y, max_y = sorted((p1[1], p2[1]))
    hits: list[float] = []
    for t in unit_roots(aligned_y):
        x, y = evaluate(control, t)
        if (
            min_x - _PARAM_TOL <= x <= max_x + _PARAM_TOL
            and min_y - _PARAM_TOL <= y <= max_y + _PARAM_TOL
        ):
            hits.append(t)
    return hits


def project(
    control: NDArray[np.float64], point: NDArray[np.float64], steps: int = 100
) -> tuple[float, NDArray[np.float64], float]:
    """Closest point on the curve to a query point.

    Scans a lookup table of steps + 1 samples, then narrows the window around
    the best sample three times.

    Returns:
        (t, curve point, distance)
    """
    ts = np.linspace(0.0, 1.0, steps + 1)
    window = 1.0 / steps
    best_t = 0.0
    for _ in range(4):
        samples = evaluate_many(control, ts)
        dists = np.linalg.norm(samples - point, axis=1)
        best_t = float(ts[int(np.argmin(dists))])
        lo = max(0.0, best_t - window)
        hi = min(1.0, best_t + window)
        ts = np.linspace(lo, hi, 21)
        window /= 10
    closest = evaluate(control, best_t)
    return best_t, closest, float(np.linalg.norm(closest - point))
