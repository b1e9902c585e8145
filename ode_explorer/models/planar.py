"""
Canonical two-dimensional dynamical systems.

Linear systems (spiral, focus, saddle, center, node) have explicit
solutions; the nonlinear oscillators (Van der Pol, Duffing, damped
pendulum) are solved numerically.
"""
from dataclasses import dataclass
from typing import List
import math
import numpy as np
from ode_explorer.models.base import PlanarSystem, Equilibrium


def _rotate_scale(a: float, b: float, y0: np.ndarray, t: float) -> np.ndarray:
    # Solution of dx = a x - b y, dy = b x + a y.
    x0, v0 = y0
    g = np.exp(a * t)
    c, s = math.cos(b * t), math.sin(b * t)
    return np.array([g * (x0 * c - v0 * s), g * (x0 * s + v0 * c)])


@dataclass(frozen=True)
class NoParams:
    """Parameter record for systems without coefficients."""


# ============================================================================
# Linear systems
# ============================================================================

@dataclass(frozen=True)
class SpiralParams:
    """a: real part of the eigenvalues, b: rotation rate."""
    a: float = -1.0
    b: float = -1.0


@dataclass(frozen=True)
class FocusParams:
    a: float = 1.0
    b: float = 1.0


class Spiral(PlanarSystem):
    """
    Linear spiral.

    dx/dt = a x - b y
    dy/dt = b x + a y

    Eigenvalues a ± ib; stable for a < 0.
    """
    params_cls = SpiralParams
    has_closed_form = True

    def __init__(self, a: float, b: float):
        self.params = SpiralParams(a=a, b=b)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        x, v = y
        p = self.params
        return np.array([p.a * x - p.b * v, p.b * x + p.a * v])

    def closed_form(self, y0: np.ndarray, t: float) -> np.ndarray:
        return _rotate_scale(self.params.a, self.params.b, y0, t)


class Focus(PlanarSystem):
    """Same linear field as ``Spiral`` with the unstable defaults a = b = 1."""
    params_cls = FocusParams
    has_closed_form = True

    def __init__(self, a: float, b: float):
        self.params = FocusParams(a=a, b=b)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        x, v = y
        p = self.params
        return np.array([p.a * x - p.b * v, p.b * x + p.a * v])

    def closed_form(self, y0: np.ndarray, t: float) -> np.ndarray:
        return _rotate_scale(self.params.a, self.params.b, y0, t)


class Saddle(PlanarSystem):
    """dx/dt = x, dy/dt = -y."""
    params_cls = NoParams
    has_closed_form = True

    def __init__(self):
        self.params = NoParams()

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        x, v = y
        return np.array([x, -v])

    def closed_form(self, y0: np.ndarray, t: float) -> np.ndarray:
        x0, v0 = y0
        return np.array([x0 * np.exp(t), v0 * np.exp(-t)])


class Center(PlanarSystem):
    """Harmonic oscillator: dx/dt = -y, dy/dt = x."""
    params_cls = NoParams
    has_closed_form = True

    def __init__(self):
        self.params = NoParams()

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        x, v = y
        return np.array([-v, x])

    def closed_form(self, y0: np.ndarray, t: float) -> np.ndarray:
        return _rotate_scale(0.0, 1.0, y0, t)


class Node(PlanarSystem):
    """Stable node: dx/dt = -2x, dy/dt = -y."""
    params_cls = NoParams
    has_closed_form = True

    def __init__(self):
        self.params = NoParams()

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        x, v = y
        return np.array([-2.0 * x, -v])

    def closed_form(self, y0: np.ndarray, t: float) -> np.ndarray:
        x0, v0 = y0
        return np.array([x0 * np.exp(-2.0 * t), v0 * np.exp(-t)])


# ============================================================================
# Nonlinear oscillators
# ============================================================================

@dataclass(frozen=True)
class VanDerPolParams:
    mu: float = 0.5


@dataclass(frozen=True)
class DuffingParams:
    delta: float = 0.1  # damping

    def __post_init__(self):
        if self.delta < 0:
            raise ValueError(f"delta must be non-negative, got {self.delta}")


@dataclass(frozen=True)
class PendulumParams:
    delta: float = 0.1  # damping

    def __post_init__(self):
        if self.delta < 0:
            raise ValueError(f"delta must be non-negative, got {self.delta}")


class VanDerPol(PlanarSystem):
    """
    Van der Pol oscillator.

    dx/dt = y
    dy/dt = -x + mu (1 - x^2) y

    For mu > 0 trajectories approach a limit cycle around the unstable origin.
    """
    params_cls = VanDerPolParams

    def __init__(self, mu: float):
        self.params = VanDerPolParams(mu=mu)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        x, v = y
        mu = self.params.mu
        return np.array([v, -x + mu * (1.0 - x * x) * v])


class Duffing(PlanarSystem):
    """Damped hardening Duffing oscillator: dx/dt = y, dy/dt = -x - x^3 - delta y."""
    params_cls = DuffingParams

    def __init__(self, delta: float):
        self.params = DuffingParams(delta=delta)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        x, v = y
        return np.array([v, -x - x * x * x - self.params.delta * v])


class Pendulum(PlanarSystem):
    """
    Damped pendulum.

    dx/dt = y
    dy/dt = -sin(x) - delta y

    Equilibria at (n pi, 0): even n are sinks (or centers when undamped),
    odd n are saddles.
    """
    params_cls = PendulumParams

    def __init__(self, delta: float):
        self.params = PendulumParams(delta=delta)

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        x, v = y
        return np.array([v, -math.sin(x) - self.params.delta * v])

    def equilibria(self) -> List[Equilibrium]:
        return [(n * math.pi, 0.0, f"{n}pi") for n in range(-3, 4)]
