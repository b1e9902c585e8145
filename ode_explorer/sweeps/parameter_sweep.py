# ode_explorer/sweeps/parameter_sweep.py
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, Optional, TYPE_CHECKING
import itertools
import warnings
import numpy as np
import pandas as pd

from ode_explorer.registry import SystemId, build_model, make_params

if TYPE_CHECKING:
    from ode_explorer.models.base import ODEBase


def run_parameter_sweep(
    system: SystemId,
    sweep_parameters: Dict[str, Iterable],
    metric_function: Callable[[ODEBase], float | Dict[str, float]],
    *,
    fixed_parameters: Optional[Dict[str, Any]] = None,
) -> pd.DataFrame:
    """
    Evaluates a metric over a grid of parameters of one system.

    Parameters
    ----------
    system : SystemId
        Identifier of the system to sweep (e.g. "logistic").
    sweep_parameters : Dict[str, Iterable]
        Parameter names mapped to the values to try
        (e.g. {"H": np.linspace(0, 20, 11)}). Every combination is run.
    metric_function : Callable
        Takes the model built for one combination and returns a scalar or
        a dict of named metrics, e.g.
        ``lambda m: m.state_at(10.0, t=50.0)[0]``.
    fixed_parameters : Optional[Dict[str, Any]], optional
        Parameters held constant for all runs; anything not given here or
        swept takes the system's default.

    Returns
    -------
    pd.DataFrame
        One row per combination: the swept parameters plus either a
        ``metric`` column or one column per metric name. Combinations with
        an invalid parameter record, or whose metric fails numerically, are
        warned about and recorded as NaN.
    """
    if fixed_parameters is None:
        fixed_parameters = {}

    param_names = list(sweep_parameters.keys())
    param_values = [list(v) for v in sweep_parameters.values()]

    results_list = []
    for combo in itertools.product(*param_values):
        current_sweep_params = dict(zip(param_names, combo))
        all_params = {**fixed_parameters, **current_sweep_params}

        try:
            model = build_model(system, make_params(system, all_params))
            metrics = metric_function(model)
        except (ValueError, ZeroDivisionError, FloatingPointError) as e:
            warnings.warn(f"sweep combination {current_sweep_params} failed: {e}")
            results_list.append({**current_sweep_params, "metric": np.nan})
            continue

        if isinstance(metrics, dict):
            results_list.append({**current_sweep_params, **metrics})
        else:
            results_list.append({**current_sweep_params, "metric": metrics})

    return pd.DataFrame(results_list)
