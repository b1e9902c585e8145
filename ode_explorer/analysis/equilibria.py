"""
Closed-form equilibria and threshold quantities.

Population models: logistic harvesting, exponential harvesting, Allee.
Epidemic models: R0, SIS endemic equilibrium, SIR final size.
"""

import warnings
import numpy as np
from typing import List, Optional, Tuple


# ============================================================================
# Population Models
# ============================================================================

def logistic_harvest_equilibria(r: float, K: float, H: float) -> List[Tuple[float, str]]:
    """
    Equilibria of dP/dt = rP(1 - P/K) - H with their stability.

    Roots P = K/2 (1 ± sqrt(1 - 4H/(rK))). The upper root is stable, the
    lower one unstable; they merge at the saddle-node H = rK/4 and vanish
    beyond it. Without harvesting the lower root is P = 0.

    Examples:
        >>> logistic_harvest_equilibria(r=0.5, K=100, H=0)
        [(100.0, 'stable'), (0.0, 'unstable')]
    """
    if r <= 0 or K <= 0:
        return []
    disc = 1.0 - 4.0 * H / (r * K)
    if disc < 0:
        return []
    if disc == 0:
        return [(K / 2.0, "semi-stable")]
    root = float(np.sqrt(disc))
    return [(K / 2.0 * (1.0 + root), "stable"), (K / 2.0 * (1.0 - root), "unstable")]


def critical_harvest_rate(r: float, K: float) -> float:
    """Maximum sustainable constant harvest rK/4."""
    return r * K / 4.0


def exponential_harvest_equilibrium(r: float, H: float) -> Optional[float]:
    """P* = H/r for dP/dt = rP - H, unstable for r > 0; None when r == 0."""
    if r == 0:
        return None
    return H / r


def allee_equilibria(K: float, A: float) -> List[Tuple[float, str]]:
    """
    Equilibria 0, A, K of the strong Allee model (0 < A < K): 0 and K are
    stable, A is unstable.
    """
    if 0 < A < K:
        return [(0.0, "stable"), (A, "unstable"), (K, "stable")]
    return [(0.0, "stable"), (K, "stable")]


# ============================================================================
# Epidemic Models
# ============================================================================

def R0_from_parameters(beta: float, gamma: float, N: float = 1.0,
                       mixing: str = "density") -> float:
    """
    Calculate R0 from model parameters.

    Args:
        beta: Transmission rate
        gamma: Recovery rate
        N: Population size
        mixing: "frequency" or "density"

    Returns:
        R0: Basic reproduction number
    """
    if mixing == "frequency":
        return beta / gamma
    else:
        return (beta * N) / gamma


def sis_equilibria(beta: float, gamma: float, N: float = 1.0,
                   mixing: str = "density") -> Tuple[float, float]:
    """
    Calculate endemic equilibrium for SIS model.

    Args:
        beta: Transmission rate
        gamma: Recovery rate
        N: Population size
        mixing: "frequency" or "density"

    Returns:
        (S*, I*): Endemic equilibrium values, or (N, 0) if R0 <= 1

    Examples:
        >>> S_star, I_star = sis_equilibria(beta=0.002, gamma=0.1, N=100)
        >>> print(f"S* = {S_star:.1f}, I* = {I_star:.1f}")
        S* = 50.0, I* = 50.0
    """
    R0 = R0_from_parameters(beta, gamma, N, mixing)

    # Disease-free equilibrium
    if R0 <= 1.0:
        return N, 0.0

    if mixing == "frequency":
        S_star = N / R0
    else:
        S_star = gamma / beta
    return S_star, N - S_star


def sir_final_size(s0: float, R0: float, tol: float = 1e-10,
                   max_iter: int = 1000) -> float:
    """
    Calculate final epidemic size for SIR model using implicit equation.

    Solves: s_inf = s0 * exp(-R0 * (1 - s_inf))

    Args:
        s0: Initial susceptible fraction
        R0: Basic reproduction number
        tol: Convergence tolerance
        max_iter: Maximum iterations

    Returns:
        s_inf: Final susceptible fraction

    Examples:
        >>> s_inf = sir_final_size(s0=0.99, R0=5.0)
        >>> attack_rate = 1 - s_inf
    """
    s_inf = s0
    for _ in range(max_iter):
        s_new = s0 * np.exp(-R0 * (1.0 - s_inf))
        if abs(s_new - s_inf) < tol:
            return float(s_new)
        s_inf = s_new

    warnings.warn(
        f"final size iteration did not converge in {max_iter} steps "
        f"(R0={R0:.3g}); returning last estimate"
    )
    return float(s_inf)


def sir_attack_rate(s0: float, R0: float) -> float:
    """Fraction of the population infected over the epidemic, s0 - s_inf."""
    return s0 - sir_final_size(s0, R0)
