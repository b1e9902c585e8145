# tests/test_planar_models.py
import math
import numpy as np
import pytest

from ode_explorer.models.planar import (
    Spiral, Focus, Saddle, Center, Node, VanDerPol, Duffing, Pendulum,
    DuffingParams, PendulumParams,
)
from ode_explorer.solvers.rk4 import rk4_integrate


CLOSED_FORM_MODELS = [
    Spiral(a=-1.0, b=-1.0),
    Focus(a=1.0, b=1.0),
    Saddle(),
    Center(),
    Node(),
]


@pytest.mark.parametrize("model", CLOSED_FORM_MODELS, ids=lambda m: type(m).__name__)
@pytest.mark.parametrize("t_end", [0.5, 2.0, 5.0])
def test_closed_form_agrees_with_fine_rk4(model, t_end):
    y0 = np.array([1.0, 0.5])
    exact = model.state_at(y0, t_end)
    numeric = rk4_integrate(model.rhs, y0, t_end, 0.001, dense=False)
    assert np.allclose(exact, numeric, rtol=1e-6, atol=1e-8)


def test_center_returns_after_one_period():
    m = Center()
    y0 = np.array([1.0, 0.0])
    assert np.allclose(m.closed_form(y0, 2.0 * math.pi), y0, atol=1e-3)
    _, y = m.integrate(y0, 2.0 * math.pi)
    assert np.allclose(y[:, -1], y0, atol=1e-3)


def test_spiral_decays_and_focus_grows():
    y0 = np.array([1.0, 1.0])
    assert np.linalg.norm(Spiral(a=-1.0, b=-1.0).state_at(y0, 5.0)) < 0.02
    assert np.linalg.norm(Focus(a=1.0, b=1.0).state_at(y0, 5.0)) > 100.0


def test_vector_fields():
    assert np.allclose(Spiral(a=-1.0, b=-1.0).rhs(0.0, np.array([1.0, 0.0])), [-1.0, -1.0])
    assert np.allclose(Saddle().rhs(0.0, np.array([2.0, 3.0])), [2.0, -3.0])
    assert np.allclose(Node().rhs(0.0, np.array([1.0, 1.0])), [-2.0, -1.0])
    assert np.allclose(VanDerPol(mu=0.5).rhs(0.0, np.array([1.0, 1.0])), [1.0, -1.0])
    assert np.allclose(Duffing(delta=0.1).rhs(0.0, np.array([1.0, 1.0])), [1.0, -2.1])
    assert np.allclose(Pendulum(delta=0.0).rhs(0.0, np.array([math.pi / 2, 0.0])), [0.0, -1.0])


def test_undamped_pendulum_conserves_energy():
    m = Pendulum(delta=0.0)
    _, y = m.integrate([1.0, 0.0], 20.0)
    energy = 0.5 * y[1] ** 2 - np.cos(y[0])
    assert np.ptp(energy) < 1e-6


def test_van_der_pol_reaches_limit_cycle():
    m = VanDerPol(mu=0.5)
    _, y = m.integrate([0.1, 0.0], 80.0)
    # the limit cycle amplitude is close to 2 for small mu
    late = y[0, len(y[0]) // 2:]
    assert 1.9 < late.max() < 2.1


def test_pendulum_equilibria_listed():
    eq = Pendulum(delta=0.1).equilibria()
    assert len(eq) == 7
    assert [x for x, _, _ in eq] == [n * math.pi for n in range(-3, 4)]
    assert all(y == 0.0 for _, y, _ in eq)


def test_negative_damping_rejected():
    with pytest.raises(ValueError):
        DuffingParams(delta=-0.1)
    with pytest.raises(ValueError):
        PendulumParams(delta=-1.0)


def test_no_closed_form_for_oscillators():
    with pytest.raises(NotImplementedError):
        VanDerPol(mu=0.5).closed_form(np.array([1.0, 0.0]), 1.0)


def test_state_vector_validation():
    m = Center()
    with pytest.raises(ValueError):
        m.coerce_state([1.0, 2.0, 3.0])
    with pytest.raises(TypeError):
        m.coerce_state(1.0)
    assert np.array_equal(m.coerce_state({"y": 2.0}), [0.0, 2.0])
