#/!/usr/bin/env python3


from dataclasses import asdict
from typing import ClassVar, Dict, List, Optional, Sequence, Tuple
import numpy as np

from ode_explorer.solvers.rk4 import rk4_integrate

Array = np.ndarray
Equilibrium = Tuple[float, float, str]


class ODEBase:
    """
    Autonomous ODE system with a fixed parameter record.

    Subclasses set ``params_cls`` and implement ``labels`` and ``rhs``.
    Models that admit an explicit solution set ``has_closed_form`` and
    override ``closed_form``. Population and compartment models set
    ``nonnegative`` so the integrator clamps every step at zero.
    """
    params_cls: ClassVar[type]
    has_closed_form: ClassVar[bool] = False
    nonnegative: ClassVar[bool] = False
    default_dt: ClassVar[float] = 0.01

    params: object

    @classmethod
    def from_params(cls, params) -> "ODEBase":
        if type(params) is not cls.params_cls:
            raise TypeError(
                f"{cls.__name__} expects {cls.params_cls.__name__}, "
                f"got {type(params).__name__}"
            )
        return cls(**asdict(params))

    @property
    def labels(self) -> Sequence[str]:
        raise NotImplementedError

    @property
    def dim(self) -> int:
        return len(self.labels)

    def rhs(self, t: float, y: Array) -> Array: # type: ignore
        raise NotImplementedError

    def closed_form(self, y0: Array, t: float) -> Array:
        raise NotImplementedError(f"{type(self).__name__} has no closed-form solution")

    def coerce_state(self, y0, clamp: bool = True) -> Array:
        """
        Convert an initial condition to a state vector ordered as ``labels``.

        Accepts a dict keyed by label (missing labels default to 0), a
        list/tuple/array of the right length, or a bare number for
        one-state models. Non-negative models clamp the result at zero
        unless ``clamp`` is False.
        """
        labels = list(self.labels)

        if isinstance(y0, dict):
            y0v = np.array([y0.get(k, 0.0) for k in labels], dtype=float)
        elif isinstance(y0, (np.ndarray, list, tuple)):
            y0v = np.array(y0, dtype=float).reshape(-1)
            if len(y0v) != len(labels):
                raise ValueError(
                    f"y0 array has length {len(y0v)}, but model has "
                    f"{len(labels)} states: {labels}"
                )
        elif isinstance(y0, (int, float, np.floating, np.integer)) and len(labels) == 1:
            y0v = np.array([float(y0)])
        else:
            raise TypeError(
                f"y0 must be a dict, numpy.ndarray, list, or tuple"
                f"{' or a number' if len(labels) == 1 else ''}, got {type(y0)}"
            )

        if clamp and self.nonnegative:
            y0v = np.maximum(y0v, 0.0)
        return y0v

    def integrate(
        self,
        y0: Dict[str, float] | np.ndarray | List[float],
        t_max: float,
        dt: Optional[float] = None,
    ) -> Tuple[Array, Array]:
        """
        Integrate the system from t=0 to ``t_max`` with fixed-step RK4.

        Args:
            y0 (Dict[str, float] | np.ndarray | List[float]):
                Initial conditions, as accepted by ``coerce_state``.
            t_max (float):
                End time. Non-positive values return the initial sample only.
            dt (float, optional):
                Nominal step size; defaults to ``default_dt``.

        Returns:
            (t, y): times of shape (n_times,) and states of shape
            (n_states, n_times), the first column being the initial state.
        """
        y0v = self.coerce_state(y0)
        step = self.default_dt if dt is None else dt

        def f(t, y):
            return self.rhs(t, y)

        return rk4_integrate(f, y0v, t_max, step, nonnegative=self.nonnegative)

    def state_at(self, y0, t: float, dt: Optional[float] = None) -> Array:
        """State at time ``t``; closed form when available, else RK4."""
        y0v = self.coerce_state(y0)
        if t <= 0:
            return y0v
        if self.has_closed_form:
            return np.asarray(self.closed_form(y0v, t), dtype=float)
        step = self.default_dt if dt is None else dt
        return rk4_integrate(
            lambda s, y: self.rhs(s, y), y0v, t, step,
            nonnegative=self.nonnegative, dense=False,
        )


class PlanarSystem(ODEBase):
    """Two-dimensional autonomous system in the (x, y) phase plane."""

    @property
    def labels(self) -> Sequence[str]:
        return ("x", "y")

    def equilibria(self) -> List[Equilibrium]:
        """
        Analytically known equilibria as ``(x, y, label)``.

        Used as seeds by the fixed-point locator; the default is none
        beyond the origin, which the locator always tests.
        """
        return []
