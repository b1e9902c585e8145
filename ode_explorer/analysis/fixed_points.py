# ode_explorer/analysis/fixed_points.py
"""
Fixed-point search for planar autonomous systems.

Candidates come from three sources, in order: the origin, the model's
analytically known equilibria inside the search region, and Newton-Raphson
refinement started from every node of a regular grid. Candidates are
accepted when the vector field vanishes to within ``tol`` and deduplicated
on coordinates rounded to three decimals. The search is a heuristic: it
makes no global convergence guarantee.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Set, Tuple
import numpy as np

from ode_explorer.analysis.stability import FixedPoint, analyze_stability, calculate_jacobian
from ode_explorer.models.base import PlanarSystem

if TYPE_CHECKING:
    from ode_explorer.models.base import ODEBase

NEWTON_MAX_ITER = 50
STEP_LIMIT = 0.5
BOUNDS_MARGIN = 2.0
RESIDUAL_TOL = 1e-4
SINGULAR_DET = 1e-10
DEDUP_DECIMALS = 3


@dataclass(frozen=True)
class SearchRegion:
    """Axis-aligned rectangle [min_x, max_x] x [min_y, max_y]."""
    min_x: float = -5.0
    max_x: float = 5.0
    min_y: float = -5.0
    max_y: float = 5.0

    def __post_init__(self):
        if not self.min_x < self.max_x:
            raise ValueError(f"min_x must be below max_x, got {self.min_x} >= {self.max_x}")
        if not self.min_y < self.max_y:
            raise ValueError(f"min_y must be below max_y, got {self.min_y} >= {self.max_y}")

    def contains(self, x: float, y: float, margin: float = 0.0) -> bool:
        return (self.min_x - margin <= x <= self.max_x + margin
                and self.min_y - margin <= y <= self.max_y + margin)

    def grid(self, n: int) -> Tuple[np.ndarray, np.ndarray]:
        """The n+1 node coordinates along each axis."""
        xs = self.min_x + np.arange(n + 1) * ((self.max_x - self.min_x) / n)
        ys = self.min_y + np.arange(n + 1) * ((self.max_y - self.min_y) / n)
        return xs, ys


def _key(x: float, y: float) -> Tuple[float, float]:
    # 0.0 and -0.0 compare and hash equal, so the key needs no sign fix-up.
    return (round(float(x), DEDUP_DECIMALS), round(float(y), DEDUP_DECIMALS))


def _residual(model: ODEBase, point: np.ndarray) -> float:
    return float(np.linalg.norm(model.rhs(0.0, point)))


def newton_refine(
    model: ODEBase,
    seed: np.ndarray,
    region: SearchRegion,
    *,
    max_iter: int = NEWTON_MAX_ITER,
    tol: float = RESIDUAL_TOL,
    step_limit: float = STEP_LIMIT,
    margin: float = BOUNDS_MARGIN,
) -> np.ndarray | None:
    """
    Damped Newton-Raphson from ``seed``.

    Each coordinate of the Newton step is clipped to ``step_limit``. Returns
    the first iterate with ``||f|| < tol``, or None when the Jacobian turns
    singular, the iterate leaves the region by more than ``margin``, or
    ``max_iter`` is exhausted.
    """
    point = np.array(seed, dtype=float)
    for _ in range(max_iter):
        f = model.rhs(0.0, point)
        if np.linalg.norm(f) < tol:
            return point

        (a, b), (c, d) = calculate_jacobian(model, point)
        det = a * d - b * c
        if abs(det) < SINGULAR_DET:
            return None

        dx = -(d * f[0] - b * f[1]) / det
        dy = -(-c * f[0] + a * f[1]) / det
        point = point + np.clip([dx, dy], -step_limit, step_limit)

        if not region.contains(point[0], point[1], margin=margin):
            return None
    return None


def find_fixed_points(
    model: ODEBase,
    region: SearchRegion | None = None,
    grid_size: int = 20,
    *,
    tol: float = RESIDUAL_TOL,
) -> List[FixedPoint]:
    """
    Locate and classify the equilibria of a planar model.

    Parameters
    ----------
    model : PlanarSystem
        The system to analyse.
    region : SearchRegion, optional
        Search rectangle; defaults to [-5, 5] x [-5, 5]. Newton iterates may
        wander up to ``BOUNDS_MARGIN`` outside it.
    grid_size : int, optional
        Number of grid intervals per axis; (grid_size + 1)^2 seeds.
    tol : float, optional
        Acceptance threshold on the vector-field magnitude.

    Returns
    -------
    list[FixedPoint]
        In discovery order: origin, analytic candidates, grid results.
        Empty when no zero of the field is found.
    """
    if not isinstance(model, PlanarSystem):
        raise ValueError(f"fixed-point search needs a planar system, got {type(model).__name__}")
    if grid_size < 1:
        raise ValueError(f"grid_size must be at least 1, got {grid_size}")
    if region is None:
        region = SearchRegion()

    found: List[FixedPoint] = []
    seen: Set[Tuple[float, float]] = set()

    def accept(point: np.ndarray) -> None:
        if _residual(model, point) >= tol:
            return
        key = _key(point[0], point[1])
        if key in seen:
            return
        seen.add(key)
        found.append(analyze_stability(model, point))

    accept(np.zeros(2))

    for x, y, _label in model.equilibria():
        if region.contains(x, y):
            accept(np.array([x, y], dtype=float))

    xs, ys = region.grid(grid_size)
    for x in xs:
        for y in ys:
            if _key(x, y) in seen:
                continue
            root = newton_refine(model, np.array([x, y]), region, tol=tol)
            if root is not None:
                accept(root)

    return found
