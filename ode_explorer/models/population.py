"""
Single-population growth models.

State is the one-element vector (P,). All models clamp the population at
zero during integration.
"""
from dataclasses import dataclass
from typing import Sequence
import numpy as np
from ode_explorer.models.base import ODEBase


def _check_growth(K: float | None = None, H: float | None = None) -> None:
    if K is not None and K <= 0:
        raise ValueError(f"K (carrying capacity) must be positive, got {K}")
    if H is not None and H < 0:
        raise ValueError(f"H (harvest rate) must be non-negative, got {H}")


def logistic_solution(P0: float, r: float, K: float, t: float) -> float:
    """
    P(t) = K / (1 + ((K - P0)/P0) e^(-rt)).

    P0 <= 0 stays at 0; P0 at the carrying capacity stays at K exactly.
    """
    if P0 <= 0:
        return 0.0
    if abs(P0 - K) < 1e-10:
        return K
    coeff = (K - P0) / P0
    return K / (1.0 + coeff * np.exp(-r * t))


def exponential_harvesting_solution(P0: float, r: float, H: float, t: float) -> float:
    """
    P(t) = (P0 - H/r) e^(rt) + H/r, or P0 - H t when r == 0; floored at 0.
    """
    if r == 0:
        return max(0.0, P0 - H * t)
    C = P0 - H / r
    return max(0.0, C * np.exp(r * t) + H / r)


class PopulationModel(ODEBase):
    nonnegative = True

    @property
    def labels(self) -> Sequence[str]:
        return ("P",)


# ============================================================================
# Unharvested growth
# ============================================================================

@dataclass(frozen=True)
class ExponentialParams:
    r: float = 0.5  # growth rate


@dataclass(frozen=True)
class LogisticParams:
    r: float = 0.5
    K: float = 100.0

    def __post_init__(self):
        _check_growth(K=self.K)


class Exponential(PopulationModel):
    """dP/dt = r P, P(t) = P0 e^(rt)."""
    params_cls = ExponentialParams
    has_closed_form = True

    def __init__(self, r: float):
        self.params = ExponentialParams(r=r)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        return self.params.r * y

    def closed_form(self, y0: np.ndarray, t: float) -> np.ndarray:
        return np.array([y0[0] * np.exp(self.params.r * t)])


class Logistic(PopulationModel):
    """dP/dt = r P (1 - P/K)."""
    params_cls = LogisticParams
    has_closed_form = True

    def __init__(self, r: float, K: float):
        self.params = LogisticParams(r=r, K=K)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        p = self.params
        return p.r * y * (1.0 - y / p.K)

    def closed_form(self, y0: np.ndarray, t: float) -> np.ndarray:
        p = self.params
        return np.array([logistic_solution(float(y0[0]), p.r, p.K, t)])


# ============================================================================
# Harvesting
# ============================================================================

@dataclass(frozen=True)
class HarvestingParams:
    r: float = 0.5
    K: float = 100.0
    H: float = 2.0  # constant harvest rate

    def __post_init__(self):
        _check_growth(K=self.K, H=self.H)


@dataclass(frozen=True)
class ExponentialHarvestingParams:
    r: float = 0.5
    H: float = 2.0

    def __post_init__(self):
        _check_growth(H=self.H)


class Harvesting(PopulationModel):
    """
    Logistic growth with constant harvest.

    dP/dt = r P (1 - P/K) - H

    Saddle-node bifurcation at H = rK/4; above it the population is driven
    to extinction. Solved numerically.
    """
    params_cls = HarvestingParams

    def __init__(self, r: float, K: float, H: float):
        self.params = HarvestingParams(r=r, K=K, H=H)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        p = self.params
        return p.r * y * (1.0 - y / p.K) - p.H


class ExponentialHarvesting(PopulationModel):
    """dP/dt = r P - H; unstable equilibrium at P* = H/r."""
    params_cls = ExponentialHarvestingParams
    has_closed_form = True

    def __init__(self, r: float, H: float):
        self.params = ExponentialHarvestingParams(r=r, H=H)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        return self.params.r * y - self.params.H

    def closed_form(self, y0: np.ndarray, t: float) -> np.ndarray:
        p = self.params
        return np.array([exponential_harvesting_solution(float(y0[0]), p.r, p.H, t)])


# ============================================================================
# Allee effect
# ============================================================================

@dataclass(frozen=True)
class AlleeParams:
    r: float = 0.5
    K: float = 100.0
    A: float = 20.0  # Allee threshold, 0 < A < K for the classic picture

    def __post_init__(self):
        _check_growth(K=self.K)


class Allee(PopulationModel):
    """
    Strong Allee effect.

    dP/dt = (r/K) P (1 - P/K) (P - A)   for P > 0, else 0

    Equilibria 0 and K are stable, A is unstable.
    """
    params_cls = AlleeParams

    def __init__(self, r: float, K: float, A: float):
        self.params = AlleeParams(r=r, K=K, A=A)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        p = self.params
        P = y[0]
        if P <= 0:
            return np.zeros(1)
        return np.array([(p.r / p.K) * P * (1.0 - P / p.K) * (P - p.A)])
