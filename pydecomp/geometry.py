"""
Geometric primitives for ellipsoid-based free-space decomposition.

An ``Ellipsoid`` is the set ``{C x + d : ||x|| <= 1}``. Its inverse shape
matrix defines the metric used to rank obstacle points, and the gradient of
its quadratic form gives the separating ``Hyperplane`` at the closest one.
The dimension is fixed by the concrete class (``Ellipsoid2D`` or
``Ellipsoid3D``); only the planar class can sample its contour.

Ellipsoids are immutable once constructed: C, d and the cached inverse are
read-only arrays, so a single instance may be queried from several threads.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from pydecomp.config import get_config
from pydecomp.const import DIM_2D, DIM_3D, REAL, SUPPORTED_DIMS
from pydecomp.exceptions import (
    DegenerateHyperplaneError,
    DimensionMismatchError,
    EmptyObstacleSetError,
    InvalidSampleCountError,
    SingularShapeMatrixError,
    UnsupportedDimensionError,
)
from pydecomp.logging import LOG_DEBUG, LOG_INFO, profile_scope


def _readonly(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


def _condition_number(C: np.ndarray) -> float:
    try:
        return float(np.linalg.cond(C))
    except np.linalg.LinAlgError:
        return float("inf")


@dataclass
class Hyperplane:
    """Hyperplane class defined by a point and normal vector"""
    p: np.ndarray  # Point on the plane
    n: np.ndarray  # Outward unit normal

    def signed_dist(self, pt: Sequence[float]) -> float:
        """Calculate signed distance from point to hyperplane"""
        return float(np.dot(self.n, np.asarray(pt, dtype=REAL) - self.p))

    def dist(self, pt: Sequence[float]) -> float:
        """Calculate absolute distance from point to hyperplane"""
        return abs(self.signed_dist(pt))


class Ellipsoid:
    """Ellipsoid defined by shape matrix C and center d.

    Use ``Ellipsoid2D``/``Ellipsoid3D`` (or ``make_ellipsoid``); the base
    class carries no dimension of its own.

    Args:
        C: Invertible DIM x DIM matrix mapping the unit ball onto the ellipsoid.
            Defaults to the identity.
        d: Center, length DIM. Defaults to the origin.
        singular_tolerance: Reciprocal condition number below which C is
            rejected. Defaults to ``ellipsoid.singular_tolerance`` from the
            global configuration.

    Raises:
        UnsupportedDimensionError: The class has no supported ``DIM``.
        DimensionMismatchError: C or d has the wrong shape.
        SingularShapeMatrixError: C cannot be inverted reliably.
    """

    DIM: Optional[int] = None

    def __init__(self, C: Optional[np.ndarray] = None, d: Optional[np.ndarray] = None,
                 singular_tolerance: Optional[float] = None):
        dim = self.DIM
        if dim not in SUPPORTED_DIMS:
            raise UnsupportedDimensionError(dim, sorted(SUPPORTED_DIMS))

        C = np.eye(dim, dtype=REAL) if C is None else np.array(C, dtype=REAL)
        d = np.zeros(dim, dtype=REAL) if d is None else np.array(d, dtype=REAL)
        if C.shape != (dim, dim):
            raise DimensionMismatchError("C", (dim, dim), C.shape)
        if d.shape != (dim,):
            raise DimensionMismatchError("d", (dim,), d.shape)

        if singular_tolerance is None:
            singular_tolerance = get_config().config.ellipsoid.singular_tolerance

        cond = _condition_number(C)
        if not math.isfinite(cond) or 1.0 / cond < singular_tolerance:
            raise SingularShapeMatrixError(cond)
        try:
            C_inv = np.linalg.inv(C)
        except np.linalg.LinAlgError as err:
            raise SingularShapeMatrixError(cond) from err

        self.C_ = _readonly(C)
        self.d_ = _readonly(d)
        self.C_inv_ = _readonly(C_inv)
        # Gradient operator of the quadratic form for symmetric C
        self.metric_ = _readonly(C_inv @ C_inv.T)

    @property
    def dim(self) -> int:
        return self.DIM

    def _as_point(self, pt: Sequence[float], name: str = "pt") -> np.ndarray:
        arr = np.asarray(pt, dtype=REAL)
        if arr.shape != (self.DIM,):
            raise DimensionMismatchError(name, (self.DIM,), arr.shape)
        return arr

    def dist(self, pt: Sequence[float]) -> float:
        """Distance to the center in the ellipsoid metric; 1 on the boundary."""
        return float(np.linalg.norm(self.C_inv_ @ (self._as_point(pt) - self.d_)))

    def inside(self, pt: Sequence[float]) -> bool:
        """Check if point is inside ellipsoid (non-exclusive)"""
        return self.dist(pt) <= 1.0

    def points_inside(self, points: Iterable[Sequence[float]]) -> List[Sequence[float]]:
        """Filter points inside ellipsoid, keeping their input order."""
        return [pt for pt in points if self.inside(pt)]

    def _closest(self, points: Iterable[Sequence[float]]) -> Tuple[Optional[int], Optional[Sequence[float]]]:
        index = None
        closest_pt = None
        min_dist = float("inf")

        for i, pt in enumerate(points):
            if index is None:
                index, closest_pt = i, pt
            dist = self.dist(pt)
            # Strict comparison keeps the first of several equally close points
            if dist < min_dist:
                min_dist = dist
                index, closest_pt = i, pt

        return index, closest_pt

    def closest_index(self, points: Iterable[Sequence[float]]) -> Optional[int]:
        """Index of the point closest in the ellipsoid metric, None if there are no points."""
        return self._closest(points)[0]

    def closest_point(self, points: Iterable[Sequence[float]]) -> np.ndarray:
        """Find the point closest in the ellipsoid metric.

        Ties resolve to the first such point in input order. An empty point
        set yields the zero vector; use ``closest_index`` to tell that case
        apart from an obstacle at the origin.
        """
        index, closest_pt = self._closest(points)
        if index is None:
            LOG_DEBUG(f"{type(self).__name__}.closest_point: no points, returning zero vector")
            return np.zeros(self.DIM, dtype=REAL)
        return self._as_point(closest_pt)

    def closest_hyperplane(self, points: Iterable[Sequence[float]]) -> Hyperplane:
        """Find the hyperplane tangent to the ellipsoid metric at the closest point.

        The normal is the normalized gradient ``C^-1 C^-T (p - d)`` of the
        quadratic form at ``p``, which matches ``p - d`` only when C is a
        scaled rotation.

        Raises:
            EmptyObstacleSetError: ``points`` is empty.
            DegenerateHyperplaneError: The closest point is the center.
        """
        points = list(points)
        if not points:
            raise EmptyObstacleSetError("closest_hyperplane")

        with profile_scope(f"{type(self).__name__}.closest_hyperplane"):
            closest_pt = self.closest_point(points)
            n = self.metric_ @ (closest_pt - self.d_)
            norm = float(np.linalg.norm(n))
            if norm == 0.0 or not math.isfinite(norm):
                raise DegenerateHyperplaneError(closest_pt.tolist())
            return Hyperplane(closest_pt, n / norm)

    def volume(self) -> float:
        """Get ellipsoid volume (determinant of C, up to the unit-ball constant)"""
        return float(np.linalg.det(self.C_))

    def C(self) -> np.ndarray:
        return self.C_

    def d(self) -> np.ndarray:
        return self.d_

    def print_info(self) -> None:
        """Log shape matrix and center."""
        LOG_INFO(f"C: {self.C_}")
        LOG_INFO(f"d: {self.d_}")

    def __str__(self):
        return f"{type(self).__name__} with C: {self.C_}, d: {self.d_}"

    def __repr__(self):
        return self.__str__()


class Ellipsoid2D(Ellipsoid):
    """Planar ellipsoid (an ellipse); supports contour sampling."""

    DIM = DIM_2D

    def sample(self, num: Optional[int] = None) -> List[np.ndarray]:
        """Sample points along the contour, evenly spaced in angle.

        Args:
            num: Number of points. Defaults to ``sampling.num_points`` from
                the global configuration.

        Returns:
            Exactly ``num`` points ``C (cos t, sin t) + d`` for
            ``t = 0, 2pi/num, ...``.
        """
        if num is None:
            num = get_config().config.sampling.num_points
        if isinstance(num, bool) or not isinstance(num, (int, np.integer)) or num < 1:
            raise InvalidSampleCountError(num)

        points = []
        dyaw = 2 * math.pi / num

        for i in range(num):
            yaw = i * dyaw
            pt = np.array([math.cos(yaw), math.sin(yaw)], dtype=REAL)
            points.append(self.C_ @ pt + self.d_)

        return points


class Ellipsoid3D(Ellipsoid):
    """Spatial ellipsoid."""

    DIM = DIM_3D
