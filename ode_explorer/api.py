# ode_explorer/api.py
"""
Function-call interface used by the rendering and UI layers.

Every function takes a system identifier and that system's complete
parameter record (see ``registry.make_params``) and is pure: the same
arguments always give the same result.
"""
from __future__ import annotations
from typing import List, Optional, Tuple
import numpy as np

from ode_explorer.analysis.fixed_points import SearchRegion, find_fixed_points as _find_fixed_points
from ode_explorer.analysis.stability import FixedPoint, calculate_jacobian
from ode_explorer.models.base import PlanarSystem
from ode_explorer.registry import SystemId, build_model
from ode_explorer.solvers.rk4 import Trajectory, rk4_integrate

Array = np.ndarray


def _planar(system: SystemId, params) -> PlanarSystem:
    model = build_model(system, params)
    if not isinstance(model, PlanarSystem):
        raise ValueError(f"{system!r} is not a planar phase-plane system")
    return model


def vector_field(system: SystemId, state, params) -> Array:
    """Derivative of ``state``; no clamping, any real state is accepted."""
    model = build_model(system, params)
    return model.rhs(0.0, model.coerce_state(state, clamp=False))


def integrate_trajectory(system: SystemId, y0, t_max: float, params,
                         dt: Optional[float] = None) -> Trajectory:
    """
    RK4 trajectory over [0, t_max], initial sample included.

    ``dt`` defaults to the model's step (0.01, or 0.02 for interacting
    models). Population and epidemic states are clamped at zero.
    """
    model = build_model(system, params)
    t, y = model.integrate(y0, t_max, dt)
    return Trajectory.from_arrays(t, y, model.labels)


def state_at_time(system: SystemId, y0, t: float, params,
                  dt: Optional[float] = None) -> Array:
    """
    State at time ``t``.

    Uses the closed-form solution when the system has one, otherwise
    integrates from 0 to ``t`` and keeps only the final state. For t <= 0
    the initial state is returned as given.
    """
    return build_model(system, params).state_at(y0, t, dt)


def population_at_time(system: SystemId, params, p0: float, t: float,
                       dt: Optional[float] = None) -> float:
    """
    Scalar convenience wrapper of ``state_at_time`` for one-state models.
    ``dt`` only matters for models without a closed form (harvesting, Allee).
    """
    model = build_model(system, params)
    if model.dim != 1:
        raise ValueError(f"{system!r} has {model.dim} states, expected a population model")
    return float(model.state_at(p0, t, dt)[0])


def estimate_jacobian(system: SystemId, state, params) -> Array:
    """2x2 central-difference Jacobian of a planar system at ``state``."""
    model = _planar(system, params)
    return calculate_jacobian(model, model.coerce_state(state, clamp=False))


def find_fixed_points(system: SystemId, params, region: Optional[SearchRegion] = None,
                      grid_size: int = 20) -> List[FixedPoint]:
    """Classified equilibria of a planar system in ``region`` (default [-5, 5]^2)."""
    return _find_fixed_points(_planar(system, params), region, grid_size)


def sample_vector_field(system: SystemId, params, region: Optional[SearchRegion] = None,
                        n: int = 20) -> Tuple[Array, Array, Array, Array]:
    """
    Vector field on an (n+1) x (n+1) lattice over ``region``.

    Returns ``X, Y, U, V`` in ``numpy.meshgrid`` layout, ready for a quiver
    or streamline plot.
    """
    model = _planar(system, params)
    if region is None:
        region = SearchRegion()
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    xs, ys = region.grid(n)
    X, Y = np.meshgrid(xs, ys)
    U = np.empty_like(X)
    V = np.empty_like(Y)
    for idx in np.ndindex(X.shape):
        U[idx], V[idx] = model.rhs(0.0, np.array([X[idx], Y[idx]]))
    return X, Y, U, V


def sample_curve(system: SystemId, y0, t_max: float, params,
                 n_points: int = 200, dt: Optional[float] = None) -> Trajectory:
    """
    Solution sampled at ``n_points + 1`` evenly spaced times in [0, t_max].

    Closed-form systems are evaluated at each time directly; the others are
    integrated once, continuing RK4 from one sample time to the next.
    """
    if n_points < 1:
        raise ValueError(f"n_points must be at least 1, got {n_points}")
    model = build_model(system, params)
    times = np.linspace(0.0, max(t_max, 0.0), n_points + 1)
    y = model.coerce_state(y0)
    states = [y]

    if model.has_closed_form:
        states += [model.state_at(y, t) for t in times[1:]]
    else:
        step = model.default_dt if dt is None else dt
        for t_prev, t_next in zip(times[:-1], times[1:]):
            y = rk4_integrate(lambda s, v: model.rhs(s, v), y, t_next - t_prev, step,
                              nonnegative=model.nonnegative, dense=False)
            states.append(y)

    return Trajectory.from_arrays(times, np.stack(states, axis=1), model.labels)
