# tests/test_epidemic_models.py
import numpy as np
import pytest

from ode_explorer import integrate_trajectory, make_params, state_at_time
from ode_explorer.models.epidemic import SI, SIS, SIR, SIParams, SIRParams
from ode_explorer.analysis.equilibria import (
    R0_from_parameters, sis_equilibria, sir_final_size, sir_attack_rate,
)


def _total(y):
    return np.sum(y, axis=0)


def test_si_closed_form_matches_rk4():
    m = SI(beta=0.002)
    _, y = m.integrate([99.0, 1.0], 50.0)
    assert np.allclose(y[:, -1], m.state_at([99.0, 1.0], 50.0), rtol=1e-6)
    assert np.allclose(_total(y), 100.0)


def test_si_guards():
    m = SI(beta=0.002)
    assert np.array_equal(m.closed_form(np.array([99.0, 0.0]), 10.0), [99.0, 0.0])
    assert np.array_equal(m.closed_form(np.array([0.0, 100.0]), 10.0), [0.0, 100.0])
    assert np.array_equal(m.closed_form(np.array([0.0, 0.0]), 10.0), [0.0, 0.0])


def test_si_frequency_mixing_uses_fractions():
    m = SI(beta=0.5, mixing="frequency")
    _, y = m.integrate(dict(S=0.99, I=0.01), 20.0)
    assert np.allclose(y[:, -1], m.state_at(dict(S=0.99, I=0.01), 20.0), rtol=1e-6)


def test_sis_closed_form_matches_rk4_and_reaches_endemic_level():
    m = SIS(beta=0.002, gamma=0.1)
    _, y = m.integrate([99.0, 1.0], 60.0)
    assert np.allclose(y[:, -1], m.state_at([99.0, 1.0], 60.0), rtol=1e-6)

    S_star, I_star = m.endemic_equilibrium(100.0)
    assert np.isclose(S_star, 50.0) and np.isclose(I_star, 50.0)
    assert np.allclose(m.state_at([99.0, 1.0], 400.0), [S_star, I_star], atol=1e-6)


def test_sis_below_threshold_decays_exponentially():
    m = SIS(beta=0.0005, gamma=0.1)
    S, I = m.state_at([90.0, 10.0], 20.0)
    # dI/dt ~ -(gamma - beta N) I while K = N - gamma/beta <= 0
    assert np.isclose(I, 10.0 * np.exp(-1.0))
    assert np.isclose(S + I, 100.0)


def test_sis_fully_infected_stays():
    m = SIS(beta=0.002, gamma=0.1)
    assert np.array_equal(m.state_at([0.0, 100.0], 5.0), [0.0, 100.0])


def test_sir_rise_then_fall_and_conservation():
    p = make_params("sir")
    traj = integrate_trajectory("sir", dict(S=99.0, I=1.0, R=0.0), 200.0, p)
    I = traj.component("I")
    peak = I.argmax()
    assert I[peak] > 1.0
    assert 0 < peak < len(I) - 1
    assert I[-1] < I[peak]
    assert np.all(np.abs(_total(traj.states) - 100.0) < 1e-6)
    assert np.all(np.diff(traj.component("S")) <= 1e-10)
    assert np.all(np.diff(traj.component("R")) >= -1e-10)


def test_sir_final_size_matches_simulation():
    p = make_params("sir")  # beta N / gamma = 2 at N = 100
    S_end = state_at_time("sir", [99.0, 1.0, 0.0], 400.0, p)[0]
    assert np.isclose(S_end / 100.0, sir_final_size(0.99, 2.0), atol=1e-3)


def test_final_size_values():
    s_inf = sir_final_size(0.999, 2.0)
    assert np.isclose(s_inf, 0.2032, atol=2e-3)
    assert np.isclose(sir_attack_rate(0.999, 2.0), 0.999 - s_inf)


def test_final_size_warns_when_not_converged():
    with pytest.warns(UserWarning, match="did not converge"):
        sir_final_size(0.999, 2.0, max_iter=2)


def test_model_final_size_and_R0():
    m = SIR(beta=0.002, gamma=0.1)
    assert np.isclose(m.R0(100.0), 2.0)
    with pytest.raises(ValueError):
        m.final_size(0.99)
    assert np.isclose(m.final_size(0.99, R0=2.0), sir_final_size(0.99, 2.0))

    f = SIR(beta=0.3, gamma=0.1, mixing="frequency")
    assert np.isclose(f.R0(), 3.0)
    assert np.isclose(f.final_size(0.99), sir_final_size(0.99, 3.0))


def test_threshold_helpers():
    assert np.isclose(R0_from_parameters(0.002, 0.1, N=100.0), 2.0)
    assert np.isclose(R0_from_parameters(0.3, 0.1, mixing="frequency"), 3.0)
    assert sis_equilibria(0.002, 0.1, N=100.0) == pytest.approx((50.0, 50.0))
    assert sis_equilibria(0.0005, 0.1, N=100.0) == (100.0, 0.0)
    S, I = sis_equilibria(0.3, 0.1, mixing="frequency")
    assert np.isclose(S + I, 1.0)


def test_parameter_validation():
    with pytest.raises(ValueError):
        SIParams(beta=-1.0)
    with pytest.raises(ValueError):
        SIRParams(gamma=0.0)
    with pytest.raises(ValueError):
        SIRParams(mixing="random")


def test_sis_fully_infected_closed_form_differs_from_dynamics():
    m = SIS(beta=0.002, gamma=0.1)
    assert np.array_equal(m.state_at([0.0, 100.0], 5.0), [0.0, 100.0])
    _, y = m.integrate([0.0, 100.0], 5.0)
    # recovery still acts on a fully infected population
    assert y[1, -1] < 100.0
    assert np.isclose(y[0, -1] + y[1, -1], 100.0)
