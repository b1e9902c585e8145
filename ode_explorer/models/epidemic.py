"""
Kermack-McKendrick compartmental models for a closed population: SI, SIS, SIR.

SI and SIS reduce to a logistic equation in I and are solved in closed
form; SIR is integrated numerically. Compartments are counts and are
clamped at zero during integration.
"""
from dataclasses import dataclass
from typing import Literal, Optional, Sequence
import numpy as np
from ode_explorer.analysis.equilibria import sir_final_size
from ode_explorer.models.base import ODEBase

Mixing = Literal["frequency", "density"]


def _foi(beta: float, I: float, N: float, mixing: Mixing) -> float:
    """
    Calculate force of infection (lambda).

    Args:
        beta: Transmission rate parameter
        I: Number of infectious individuals
        N: Total population (for frequency-dependent)
        mixing: "frequency" (beta * I/N) or "density" (mass-action, beta * I)

    Returns:
        Force of infection lambda
    """
    if mixing == "frequency":
        return beta * I / N if N > 0 else 0.0
    else:
        return beta * I


def _effective_rate(beta: float, N: float, mixing: Mixing) -> float:
    # Per-pair contact rate b in dI/dt = b I (N - I) - gamma I.
    if mixing == "frequency":
        return beta / N if N > 0 else 0.0
    return beta


def _check_mixing(mixing: str) -> None:
    if mixing not in ("frequency", "density"):
        raise ValueError(f"mixing must be 'frequency' or 'density', got '{mixing}'")


class EpidemicModel(ODEBase):
    nonnegative = True

    def R0(self, N0: float = 1.0) -> float:
        """
        Basic reproduction number: R0 = beta N/gamma (density) or beta/gamma
        (frequency).

        Args:
            N0: Total population size (only matters for density-dependent)
        """
        p = self.params
        if p.mixing == "frequency":
            return p.beta / p.gamma
        else:
            return (p.beta * N0) / p.gamma


# ============================================================================
# SI Model
# ============================================================================

@dataclass(frozen=True)
class SIParams:
    """Parameters for the SI model."""
    beta: float = 0.002
    mixing: Mixing = "density"

    def __post_init__(self):
        if self.beta < 0:
            raise ValueError(f"beta must be non-negative, got {self.beta}")
        _check_mixing(self.mixing)


class SI(EpidemicModel):
    """
    Simple SI model (no recovery).

    dS/dt = -lambda * S
    dI/dt = +lambda * S

    With N = S + I constant, dI/dt = b I (N - I), so
    I(t) = N / (1 + ((N - I0)/I0) e^(-b N t)).
    """
    params_cls = SIParams
    has_closed_form = True

    def __init__(self, beta: float, mixing: Mixing = "density"):
        self.params = SIParams(beta=beta, mixing=mixing)

    @property
    def labels(self) -> Sequence[str]:
        return ("S", "I")

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        S, I = y
        lam = _foi(self.params.beta, I, S + I, self.params.mixing)
        return np.array([-lam * S, lam * S])

    def closed_form(self, y0: np.ndarray, t: float) -> np.ndarray:
        S0, I0 = (float(v) for v in y0)
        N = S0 + I0
        if N <= 0 or I0 <= 0:
            return np.array([max(0.0, N - I0), max(0.0, I0)])
        if I0 >= N:
            return np.array([0.0, N])
        b = _effective_rate(self.params.beta, N, self.params.mixing)
        I = N / (1.0 + ((N - I0) / I0) * np.exp(-b * N * t))
        return np.array([N - I, I])

    def R0(self, N0: float = 1.0) -> float:
        """
        SI has no recovery, so R0 is unbounded; returns the transmission
        rate scaled by mixing type instead (beta, or beta*N0 for density).
        """
        if self.params.mixing == "frequency":
            return self.params.beta
        else:
            return self.params.beta * N0


# ============================================================================
# SIS Model
# ============================================================================

@dataclass(frozen=True)
class SISParams:
    beta: float = 0.002
    gamma: float = 0.1
    mixing: Mixing = "density"

    def __post_init__(self):
        if self.beta < 0:
            raise ValueError(f"beta must be non-negative, got {self.beta}")
        if self.gamma <= 0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")
        _check_mixing(self.mixing)


class SIS(EpidemicModel):
    """
    SIS model with recovery but no immunity.

    dS/dt = -lambda * S + gamma * I
    dI/dt = +lambda * S - gamma * I

    With K = N - gamma/b the infected class follows dI/dt = b I (K - I):
    logistic towards K when K > 0, exponential decay otherwise.

    A fully infected start (I0 >= N) is held at (0, N) by the closed form
    for display purposes; the vector field itself still lets recovery pull
    I down towards K, so ``integrate`` leaves that state.
    """
    params_cls = SISParams
    has_closed_form = True

    def __init__(self, beta: float, gamma: float, mixing: Mixing = "density"):
        self.params = SISParams(beta=beta, gamma=gamma, mixing=mixing)

    @property
    def labels(self) -> Sequence[str]:
        return ("S", "I")

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        S, I = y
        p = self.params
        lam = _foi(p.beta, I, S + I, p.mixing)
        return np.array([-lam * S + p.gamma * I, lam * S - p.gamma * I])

    def closed_form(self, y0: np.ndarray, t: float) -> np.ndarray:
        S0, I0 = (float(v) for v in y0)
        N = S0 + I0
        p = self.params
        b = _effective_rate(p.beta, N, p.mixing)
        K = N - p.gamma / b if b > 0 else -np.inf
        if K <= 0 or I0 <= 0:
            I = max(0.0, I0 * np.exp(-(p.gamma - b * N) * t))
            return np.array([N - I, I])
        if I0 >= N:
            return np.array([0.0, N])
        I = min(N, K / (1.0 + ((K - I0) / I0) * np.exp(-b * K * t)))
        return np.array([N - I, I])

    def endemic_equilibrium(self, N0: float = 1.0) -> tuple[float, float]:
        """
        Return (S*, I*) at endemic equilibrium if R0 > 1.
        Returns (N0, 0) if R0 <= 1.
        """
        R0 = self.R0(N0)
        if R0 <= 1.0:
            return (N0, 0.0)

        if self.params.mixing == "frequency":
            S_star = N0 / R0
        else:
            S_star = self.params.gamma / self.params.beta
        return (S_star, N0 - S_star)


# ============================================================================
# SIR Model
# ============================================================================

@dataclass(frozen=True)
class SIRParams:
    beta: float = 0.002
    gamma: float = 0.1
    mixing: Mixing = "density"

    def __post_init__(self):
        if self.beta < 0:
            raise ValueError(f"beta must be non-negative, got {self.beta}")
        if self.gamma <= 0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")
        _check_mixing(self.mixing)


class SIR(EpidemicModel):
    """
    Classic SIR model (closed population).

    dS/dt = -lambda * S
    dI/dt = +lambda * S - gamma * I
    dR/dt = +gamma * I

    No closed form; integrated with RK4. S + I + R is conserved.
    """
    params_cls = SIRParams

    def __init__(self, beta: float, gamma: float, mixing: Mixing = "density"):
        self.params = SIRParams(beta=beta, gamma=gamma, mixing=mixing)

    @property
    def labels(self) -> Sequence[str]:
        return ("S", "I", "R")

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        S, I, R = y
        p = self.params
        lam = _foi(p.beta, I, S + I + R, p.mixing)
        infection = lam * S
        recovery = p.gamma * I
        return np.array([-infection, infection - recovery, recovery])

    def final_size(self, s0: float, R0: Optional[float] = None) -> float:
        """
        Final susceptible fraction s_inf from s_inf = s0 * exp(-R0 * (1 - s_inf)).

        ``R0`` defaults to this model's frequency-mixing value; density-mixing
        callers pass beta*N/gamma.
        """
        if R0 is None:
            if self.params.mixing != "frequency":
                raise ValueError("pass R0 explicitly for density-dependent mixing")
            R0 = self.R0()
        return sir_final_size(s0, R0)
