"""
Bezier curve evaluation.

Degree 1 and 3 segments use closed-form weights; any other number of
control points falls back to the Bernstein polynomial sum.
"""

from typing import Sequence
import numpy as np
from scipy.special import comb


def bernstein_term(t: float, i: int, n: int) -> float:
    return float(comb(n, i, exact=True) * (t ** i) * ((1.0 - t) ** (n - i)))


def linear_bezier(t: float, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return (1.0 - t) * a + t * b


def quadratic_bezier(t: float, a: np.ndarray, b: np.ndarray, c: np.ndarray) -> np.ndarray:
    s = 1.0 - t
    return (s * s) * a + (2.0 * t * s) * b + (t * t) * c


def cubic_bezier(
    t: float,
    a: np.ndarray,
    b: np.ndarray,
    c: np.ndarray,
    d: np.ndarray,
) -> np.ndarray:
    s = 1.0 - t
    return (s * s * s) * a + (3.0 * t * s * s) * b + (3.0 * t * t * s) * c + (t * t * t) * d


def bezier(t: float, points: Sequence[np.ndarray]) -> np.ndarray:
    """
    Evaluate a single Bezier segment defined by ``points`` at ``t`` in [0, 1].

    Parameters
    ----------
    t : float
        Local curve parameter
    points : sequence of np.ndarray
        Control points of the segment (degree + 1 of them)

    Returns
    -------
    np.ndarray
        Point on the curve
    """
    size = len(points)
    if size == 4:
        return cubic_bezier(t, points[0], points[1], points[2], points[3])
    if size == 2:
        return linear_bezier(t, points[0], points[1])
    if size == 3:
        return quadratic_bezier(t, points[0], points[1], points[2])
    result = np.zeros(3, dtype=float)
    for i, p in enumerate(points):
        result = result + bernstein_term(t, i, size - 1) * p
    return result


__all__ = [
    "bernstein_term",
    "linear_bezier",
    "quadratic_bezier",
    "cubic_bezier",
    "bezier",
]
