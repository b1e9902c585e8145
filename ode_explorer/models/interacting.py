"""
Interacting two-variable models: Lotka-Volterra predator-prey and its
self-limiting and competition variants, and Richardson's arms race.
"""
from dataclasses import dataclass
from typing import List
import numpy as np
from ode_explorer.models.base import PlanarSystem, Equilibrium


def _check_non_negative(**values: float) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")


# ============================================================================
# Lotka-Volterra predator-prey
# ============================================================================

@dataclass(frozen=True)
class LotkaVolterraParams:
    alpha: float = 1.0  # prey growth
    beta: float = 0.5   # predation
    delta: float = 0.5  # predator gain per prey
    gamma: float = 0.5  # predator death

    def __post_init__(self):
        _check_non_negative(alpha=self.alpha, beta=self.beta,
                            delta=self.delta, gamma=self.gamma)


class LotkaVolterra(PlanarSystem):
    """
    Predator-prey model.

    dx/dt = x (alpha - beta y)
    dy/dt = y (delta x - gamma)

    Equilibria: extinction (0, 0), a saddle, and coexistence
    (gamma/delta, alpha/beta), a center of the linearisation.
    """
    params_cls = LotkaVolterraParams
    default_dt = 0.02

    def __init__(self, alpha: float, beta: float, delta: float, gamma: float):
        self.params = LotkaVolterraParams(alpha=alpha, beta=beta, delta=delta, gamma=gamma)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        x, v = y
        p = self.params
        return np.array([x * (p.alpha - p.beta * v), v * (p.delta * x - p.gamma)])

    def equilibria(self) -> List[Equilibrium]:
        p = self.params
        out = [(0.0, 0.0, "extinction")]
        if p.delta > 1e-6 and p.beta > 1e-6:
            out.append((p.gamma / p.delta, p.alpha / p.beta, "coexistence"))
        return out


# ============================================================================
# Lotka-Volterra with self-limitation
# ============================================================================

@dataclass(frozen=True)
class SelfLimitParams:
    alpha: float = 1.0
    beta: float = 0.5
    delta: float = 0.5
    gamma: float = 0.5
    epsilon: float = 0.1  # prey self-limitation
    eta: float = 0.1      # predator self-limitation

    def __post_init__(self):
        _check_non_negative(alpha=self.alpha, beta=self.beta, delta=self.delta,
                            gamma=self.gamma, epsilon=self.epsilon, eta=self.eta)


class LotkaVolterraSelfLimit(PlanarSystem):
    """
    Predator-prey with intraspecific competition.

    dx/dt = x (alpha - beta y - epsilon x)
    dy/dt = y (-gamma + delta x - eta y)
    """
    params_cls = SelfLimitParams
    default_dt = 0.02

    def __init__(self, alpha: float, beta: float, delta: float, gamma: float,
                 epsilon: float, eta: float):
        self.params = SelfLimitParams(alpha=alpha, beta=beta, delta=delta, gamma=gamma,
                                      epsilon=epsilon, eta=eta)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        x, v = y
        p = self.params
        return np.array([
            x * (p.alpha - p.beta * v - p.epsilon * x),
            v * (-p.gamma + p.delta * x - p.eta * v),
        ])

    def equilibria(self) -> List[Equilibrium]:
        p = self.params
        out = [(0.0, 0.0, "extinction")]
        if p.epsilon > 1e-10:
            out.append((p.alpha / p.epsilon, 0.0, "prey only"))
        denom = p.epsilon * p.eta + p.beta * p.delta
        if abs(denom) > 1e-10:
            x_star = (p.alpha * p.eta + p.gamma * p.beta) / denom
            y_star = (p.alpha * p.delta - p.gamma * p.epsilon) / denom
            if x_star >= 0 and y_star >= 0:
                out.append((x_star, y_star, "coexistence"))
        return out


# ============================================================================
# Two-species competition
# ============================================================================

@dataclass(frozen=True)
class CompetitionParams:
    r1: float = 1.0
    K1: float = 100.0
    a12: float = 0.5  # effect of species 2 on species 1
    r2: float = 0.8
    K2: float = 80.0
    a21: float = 0.5  # effect of species 1 on species 2

    def __post_init__(self):
        if self.K1 <= 0 or self.K2 <= 0:
            raise ValueError(f"carrying capacities must be positive, got K1={self.K1}, K2={self.K2}")
        _check_non_negative(a12=self.a12, a21=self.a21)


class LotkaVolterraCompetition(PlanarSystem):
    """
    Lotka-Volterra competition.

    dx/dt = r1 x (1 - x/K1 - a12 y/K1)
    dy/dt = r2 y (1 - y/K2 - a21 x/K2)

    Coexistence requires K1 > a12 K2 and K2 > a21 K1 (stable when a12 a21 < 1).
    """
    params_cls = CompetitionParams
    default_dt = 0.02

    def __init__(self, r1: float, K1: float, a12: float, r2: float, K2: float, a21: float):
        self.params = CompetitionParams(r1=r1, K1=K1, a12=a12, r2=r2, K2=K2, a21=a21)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        x, v = y
        p = self.params
        dx = p.r1 * x * (1.0 - x / p.K1 - p.a12 * v / p.K1)
        dy = p.r2 * v * (1.0 - v / p.K2 - p.a21 * x / p.K2)
        return np.array([dx, dy])

    def equilibria(self) -> List[Equilibrium]:
        p = self.params
        out = [
            (0.0, 0.0, "extinction"),
            (p.K1, 0.0, "species 1 only"),
            (0.0, p.K2, "species 2 only"),
        ]
        denom = 1.0 - p.a12 * p.a21
        if abs(denom) > 1e-10:
            x_star = (p.K1 - p.a12 * p.K2) / denom
            y_star = (p.K2 - p.a21 * p.K1) / denom
            if x_star >= 0 and y_star >= 0:
                out.append((x_star, y_star, "coexistence"))
        return out


# ============================================================================
# Richardson arms race
# ============================================================================

@dataclass(frozen=True)
class RichardsonParams:
    k: float = 0.5      # reaction of x to y's arms
    l: float = 0.5      # reaction of y to x's arms
    alpha: float = 0.2  # x's fatigue
    beta: float = 0.2   # y's fatigue
    g: float = 1.0      # x's grievance
    h: float = 1.0      # y's grievance


class Richardson(PlanarSystem):
    """
    Richardson's linear arms-race model.

    dx/dt = k y - alpha x + g
    dy/dt = l x - beta y + h

    A unique equilibrium exists when alpha beta != k l; it is stable when
    alpha beta > k l.
    """
    params_cls = RichardsonParams
    default_dt = 0.02

    def __init__(self, k: float, l: float, alpha: float, beta: float, g: float, h: float):
        self.params = RichardsonParams(k=k, l=l, alpha=alpha, beta=beta, g=g, h=h)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        x, v = y
        p = self.params
        return np.array([p.k * v - p.alpha * x + p.g, p.l * x - p.beta * v + p.h])

    def equilibria(self) -> List[Equilibrium]:
        p = self.params
        det = p.alpha * p.beta - p.k * p.l
        if abs(det) <= 1e-10:
            return []
        x_star = (p.beta * p.g + p.k * p.h) / det
        y_star = (p.l * p.g + p.alpha * p.h) / det
        return [(x_star, y_star, "equilibrium")]
