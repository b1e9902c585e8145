# tests/test_stability.py
import numpy as np
import pytest

from ode_explorer.analysis.stability import (
    EigenPair, analyze_stability, calculate_jacobian, classify_eigenvalues,
    classify_matrix, eigenvalues_2x2,
)
from ode_explorer.models.interacting import LotkaVolterra
from ode_explorer.models.planar import Duffing, VanDerPol


@pytest.mark.parametrize(
    "matrix, expected_type, expected_stability",
    [
        ([[-1.0, 0.0], [0.0, -2.0]], "stable-node", "stable"),       # tau=-3, det=2
        ([[1.0, 0.0], [0.0, 2.0]], "unstable-node", "unstable"),
        ([[1.0, 0.0], [0.0, -1.0]], "saddle", "unstable"),
        ([[0.0, -1.0], [1.0, 0.0]], "center", "semi-stable"),        # tau=0, det=1
        ([[-1.0, -2.0], [2.0, -1.0]], "stable-spiral", "stable"),
        ([[1.0, -2.0], [2.0, 1.0]], "unstable-spiral", "unstable"),  # tau=2, det=5
        ([[0.0, 0.0], [0.0, 0.0]], "center", "semi-stable"),
        ([[0.0, 0.0], [0.0, -1.0]], "center", "semi-stable"),        # one zero eigenvalue
    ],
)
def test_classification_table(matrix, expected_type, expected_stability):
    _, fp_type, stability = classify_matrix(np.array(matrix))
    assert fp_type == expected_type
    assert stability == expected_stability


def test_real_eigenvalues_ordered_by_discriminant_sign():
    eig = eigenvalues_2x2(np.array([[-1.0, 0.0], [0.0, -2.0]]))
    assert not eig.is_complex
    assert eig.lambda1 == -1.0 and eig.lambda2 == -2.0


def test_complex_eigenvalues_are_conjugate():
    eig = eigenvalues_2x2(np.array([[1.0, -2.0], [2.0, 1.0]]))
    assert eig.is_complex
    assert eig.lambda1 == complex(1.0, 2.0)
    assert eig.lambda2 == eig.lambda1.conjugate()
    assert np.allclose(np.sort_complex(eig.as_array()),
                       np.sort_complex(np.linalg.eigvals([[1.0, -2.0], [2.0, 1.0]])))


def test_tolerance_makes_small_real_parts_centers():
    assert classify_eigenvalues(EigenPair(complex(5e-7, 1.0), complex(5e-7, -1.0)))[0] == "center"
    assert classify_eigenvalues(EigenPair(complex(5e-7, 1.0), complex(5e-7, -1.0)),
                                tol=1e-9)[0] == "unstable-spiral"
    assert classify_eigenvalues(EigenPair(complex(1e-7), complex(-1e-7))) == ("center", "semi-stable")


def test_jacobian_matches_analytic():
    m = Duffing(delta=0.1)
    J = calculate_jacobian(m, np.array([1.0, 0.5]))
    assert np.allclose(J, [[0.0, 1.0], [-4.0, -0.1]], atol=1e-6)

    vdp = VanDerPol(mu=0.5)
    # d/dx of -x + mu (1 - x^2) y at (x, y) = (0.5, 2): -1 - 2 mu x y
    J = calculate_jacobian(vdp, np.array([0.5, 2.0]))
    assert np.allclose(J, [[0.0, 1.0], [-2.0, 0.375]], atol=1e-6)


def test_analyze_stability_lotka_volterra():
    m = LotkaVolterra(alpha=1.0, beta=0.5, delta=0.5, gamma=0.5)
    origin = analyze_stability(m, np.array([0.0, 0.0]))
    assert origin.type == "saddle"
    assert origin.stability == "unstable"

    interior = analyze_stability(m, np.array([1.0, 2.0]))
    assert interior.type == "center"
    assert interior.location == (1.0, 2.0)
    assert np.isclose(abs(interior.eigenvalues.lambda1.imag), np.sqrt(0.5), atol=1e-6)

    d = interior.as_dict()
    assert d["x"] == 1.0 and d["y"] == 2.0
    assert d["type"] == "center"
