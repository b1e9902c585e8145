# ode_explorer/analysis/stability.py
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Tuple
import math
import numpy as np

if TYPE_CHECKING:
    from ode_explorer.models.base import ODEBase

Array = np.ndarray

FixedPointType = Literal[
    "stable-node", "unstable-node", "saddle",
    "stable-spiral", "unstable-spiral", "center",
]
Stability = Literal["stable", "unstable", "semi-stable"]

ZERO_TOL = 1e-6


def calculate_jacobian(model: ODEBase, y_eq: np.ndarray, t: float = 0.0, step: float = 1e-6) -> Array:
    """
    Calculates the Jacobian matrix of the model's RHS function at a
    point using numerical central differences.

    J[i, j] = d(rhs_i) / dy_j

    Parameters
    ----------
    model : ODEBase
        An instance of an ODE model.
    y_eq : np.ndarray
        The state vector at which to linearise.
    t : float, optional
        Time passed to ``rhs``; irrelevant for autonomous systems.
        Defaults to 0.0.
    step : float, optional
        The finite difference step size. Defaults to 1e-6.

    Returns
    -------
    np.ndarray
        The (n_states x n_states) Jacobian matrix.
    """
    y_eq = np.asarray(y_eq, dtype=float)
    n_states = len(y_eq)
    jacobian = np.zeros((n_states, n_states), dtype=float)

    # Central differences: f'(x) approx (f(x+h) - f(x-h)) / (2h)
    for j in range(n_states):
        h_step_vec = np.zeros(n_states)
        h_step_vec[j] = step

        rhs_plus = model.rhs(t, y_eq + h_step_vec)
        rhs_minus = model.rhs(t, y_eq - h_step_vec)

        jacobian[:, j] = (rhs_plus - rhs_minus) / (2.0 * step)

    return jacobian


@dataclass(frozen=True)
class EigenPair:
    """
    Eigenvalues of a 2x2 real matrix.

    A real pair is stored as ((tau + sqrt D)/2, (tau - sqrt D)/2) with zero
    imaginary parts; a complex pair as (re + i im, re - i im), im > 0.
    """
    lambda1: complex
    lambda2: complex

    @property
    def is_complex(self) -> bool:
        return self.lambda1.imag != 0.0

    @property
    def real(self) -> Tuple[float, float]:
        return (self.lambda1.real, self.lambda2.real)

    @property
    def imag(self) -> Tuple[float, float]:
        return (self.lambda1.imag, self.lambda2.imag)

    def as_array(self) -> Array:
        return np.array([self.lambda1, self.lambda2])


def eigenvalues_2x2(matrix: Array) -> EigenPair:
    """
    Eigenvalues from trace tau, determinant delta and discriminant
    D = tau^2 - 4 delta.
    """
    (a, b), (c, d) = np.asarray(matrix, dtype=float)
    trace = a + d
    det = a * d - b * c
    disc = trace * trace - 4.0 * det

    if disc >= 0:
        root = math.sqrt(disc)
        return EigenPair(complex((trace + root) / 2.0, 0.0), complex((trace - root) / 2.0, 0.0))

    re = trace / 2.0
    im = math.sqrt(-disc) / 2.0
    return EigenPair(complex(re, im), complex(re, -im))


def classify_eigenvalues(eig: EigenPair, tol: float = ZERO_TOL) -> Tuple[FixedPointType, Stability]:
    """
    Topological type and stability of an equilibrium from its eigenvalues.

    Real pairs: both near zero -> center; opposite signs -> saddle; both
    negative -> stable node; both positive -> unstable node. Any other real
    sign pattern (one eigenvalue exactly zero) also falls back to center /
    semi-stable. Complex pairs: near-zero real part -> center; otherwise a
    spiral whose stability follows the sign of the real part.
    """
    if not eig.is_complex:
        l1, l2 = eig.real
        if abs(l1) < tol and abs(l2) < tol:
            return "center", "semi-stable"
        if l1 * l2 < 0:
            return "saddle", "unstable"
        if l1 < 0 and l2 < 0:
            return "stable-node", "stable"
        if l1 > 0 and l2 > 0:
            return "unstable-node", "unstable"
        # Non-hyperbolic with one zero eigenvalue; reported as a center.
        return "center", "semi-stable"

    re = eig.lambda1.real
    if abs(re) < tol:
        return "center", "semi-stable"
    if re < 0:
        return "stable-spiral", "stable"
    return "unstable-spiral", "unstable"


def classify_matrix(matrix: Array, tol: float = ZERO_TOL) -> Tuple[EigenPair, FixedPointType, Stability]:
    eig = eigenvalues_2x2(matrix)
    fp_type, stability = classify_eigenvalues(eig, tol)
    return eig, fp_type, stability


@dataclass(frozen=True)
class FixedPoint:
    location: Tuple[float, float]
    eigenvalues: EigenPair
    type: FixedPointType
    stability: Stability

    @property
    def x(self) -> float:
        return self.location[0]

    @property
    def y(self) -> float:
        return self.location[1]

    def as_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "type": self.type,
            "stability": self.stability,
            "lambda1": self.eigenvalues.lambda1,
            "lambda2": self.eigenvalues.lambda2,
        }


def analyze_stability(model: ODEBase, point: np.ndarray, t: float = 0.0) -> FixedPoint:
    """
    Linearise a planar model at ``point`` and classify it.

    Parameters
    ----------
    model : ODEBase
        A two-state model.
    point : np.ndarray
        The equilibrium (x, y).
    t : float, optional
        The time at which to evaluate. Defaults to 0.0.

    Returns
    -------
    FixedPoint
    """
    jac = calculate_jacobian(model, point, t=t)
    eig, fp_type, stability = classify_matrix(jac)
    x, y = (float(v) for v in point)
    return FixedPoint(location=(x, y), eigenvalues=eig, type=fp_type, stability=stability)
