# ode_explorer/__init__.py
"""Numerical integration and phase-plane analysis of small ODE systems."""

from .api import (
    vector_field,
    integrate_trajectory,
    state_at_time,
    population_at_time,
    estimate_jacobian,
    find_fixed_points,
    sample_vector_field,
    sample_curve,
)
from .registry import SystemId, SYSTEMS, get_system, make_params, build_model
from .analysis.fixed_points import SearchRegion
from .analysis.stability import EigenPair, FixedPoint
from .solvers.rk4 import Trajectory

__version__ = "0.1.0"

__all__ = [
    "vector_field",
    "integrate_trajectory",
    "state_at_time",
    "population_at_time",
    "estimate_jacobian",
    "find_fixed_points",
    "sample_vector_field",
    "sample_curve",
    "SystemId",
    "SYSTEMS",
    "get_system",
    "make_params",
    "build_model",
    "SearchRegion",
    "EigenPair",
    "FixedPoint",
    "Trajectory",
]
