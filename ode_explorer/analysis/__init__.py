# ode_explorer/analysis/__init__.py

from .equilibria import (
    logistic_harvest_equilibria,
    critical_harvest_rate,
    exponential_harvest_equilibrium,
    allee_equilibria,
    R0_from_parameters,
    sis_equilibria,
    sir_final_size,
    sir_attack_rate,
)
from .stability import (
    calculate_jacobian,
    analyze_stability,
    eigenvalues_2x2,
    classify_eigenvalues,
    classify_matrix,
    EigenPair,
    FixedPoint,
)
from .fixed_points import SearchRegion, find_fixed_points, newton_refine

__all__ = [
    # from equilibria.py
    "logistic_harvest_equilibria",
    "critical_harvest_rate",
    "exponential_harvest_equilibrium",
    "allee_equilibria",
    "R0_from_parameters",
    "sis_equilibria",
    "sir_final_size",
    "sir_attack_rate",

    # from stability.py
    "calculate_jacobian",
    "analyze_stability",
    "eigenvalues_2x2",
    "classify_eigenvalues",
    "classify_matrix",
    "EigenPair",
    "FixedPoint",

    # from fixed_points.py
    "SearchRegion",
    "find_fixed_points",
    "newton_refine",
]
