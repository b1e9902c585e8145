# ode_explorer/solvers/rk4.py
"""
Fixed-step classic Runge-Kutta (RK4) integration.

The step used at each iteration is ``min(dt, t_max - elapsed)``; the
number of steps is ``ceil(t_max / dt)`` and the last one always ends on
``t_max`` exactly. There is no error control.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence, Tuple
import math
import numpy as np
import pandas as pd

Array = np.ndarray
RHS = Callable[[float, Array], Array]


def rk4_step(f: RHS, t: float, y: Array, h: float) -> Array:
    """Advance ``y`` by one RK4 step of size ``h``."""
    k1 = f(t, y)
    k2 = f(t + 0.5 * h, y + 0.5 * h * k1)
    k3 = f(t + 0.5 * h, y + 0.5 * h * k2)
    k4 = f(t + h, y + h * k3)
    return y + (h / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)


def rk4_integrate(
    f: RHS,
    y0: Array,
    t_max: float,
    dt: float,
    *,
    nonnegative: bool = False,
    dense: bool = True,
) -> Tuple[Array, Array] | Array:
    """
    Integrate ``dy/dt = f(t, y)`` from t=0 to ``t_max``.

    Parameters
    ----------
    f : Callable[[float, Array], Array]
        Right-hand side.
    y0 : Array
        Initial state.
    t_max : float
        End time. For ``t_max <= 0`` no step is taken.
    dt : float
        Nominal step size, must be positive.
    nonnegative : bool, optional
        Clamp the state at zero after every step (population and
        compartment models).
    dense : bool, optional
        If True return ``(t, y)`` with every accepted step, ``y`` shaped
        (n_states, n_times). If False return only the final state.

    Returns
    -------
    tuple[np.ndarray, np.ndarray] or np.ndarray
    """
    if not dt > 0:
        raise ValueError(f"dt must be positive, got {dt}")

    y = np.array(y0, dtype=float)
    n_steps = math.ceil(t_max / dt) if t_max > 0 else 0

    times = [0.0]
    states = [y.copy()]
    elapsed = 0.0

    for i in range(n_steps):
        # last step absorbs summation drift
        last = i == n_steps - 1
        h = t_max - elapsed if last else min(dt, t_max - elapsed)
        if h <= 0:
            break
        y = rk4_step(f, elapsed, y, h)
        if nonnegative:
            y = np.maximum(y, 0.0)
        elapsed = t_max if last else elapsed + h
        if dense:
            times.append(elapsed)
            states.append(y)

    if not dense:
        return y
    return np.array(times), np.stack(states, axis=1)


@dataclass(frozen=True)
class Trajectory:
    """Time-ordered samples of a solution; ``states`` is (n_states, n_times)."""
    times: Array
    states: Array
    labels: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.times)

    def __iter__(self) -> Iterator[Tuple[float, Array]]:
        for i, t in enumerate(self.times):
            yield float(t), self.states[:, i]

    @property
    def initial_state(self) -> Array:
        return self.states[:, 0]

    @property
    def final_state(self) -> Array:
        return self.states[:, -1]

    def component(self, label: str) -> Array:
        return self.states[list(self.labels).index(label)]

    def to_frame(self) -> pd.DataFrame:
        """One row per sample, columns ``t`` followed by the state labels."""
        data = {"t": self.times}
        data.update({k: self.states[i] for i, k in enumerate(self.labels)})
        return pd.DataFrame(data)

    @classmethod
    def from_arrays(cls, t: Array, y: Array, labels: Sequence[str]) -> "Trajectory":
        return cls(times=np.asarray(t, dtype=float), states=np.asarray(y, dtype=float),
                   labels=tuple(labels))
