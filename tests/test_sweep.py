# tests/test_sweep.py
import numpy as np
import pytest

from ode_explorer.sweeps import run_parameter_sweep


def test_harvest_sweep_collects_scalar_metric():
    df = run_parameter_sweep(
        "harvesting",
        {"H": [0.0, 8.0, 20.0]},
        lambda m: m.state_at(50.0, 200.0)[0],
    )
    assert list(df.columns) == ["H", "metric"]
    assert len(df) == 3
    assert np.isclose(df["metric"][0], 100.0, atol=1e-4)
    assert np.isclose(df["metric"][1], 80.0, atol=1e-4)
    assert df["metric"][2] == 0.0


def test_grid_is_cartesian_and_fixed_parameters_apply():
    df = run_parameter_sweep(
        "sir",
        {"beta": [0.001, 0.003], "gamma": [0.1, 0.2]},
        lambda m: {"R0": m.R0(100.0)},
        fixed_parameters={"mixing": "density"},
    )
    assert len(df) == 4
    assert set(df.columns) == {"beta", "gamma", "R0"}
    row = df[(df["beta"] == 0.003) & (df["gamma"] == 0.1)]
    assert np.isclose(row["R0"].iloc[0], 3.0)


def test_invalid_combination_warns_and_records_nan():
    with pytest.warns(UserWarning, match="failed"):
        df = run_parameter_sweep("logistic", {"K": [100.0, -1.0]},
                                 lambda m: m.state_at(10.0, 5.0)[0])
    assert not np.isnan(df["metric"][0])
    assert np.isnan(df["metric"][1])
