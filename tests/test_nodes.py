"""Tests for the node variants: forward formulas and local partials."""

import numpy as np
import pytest

from graddesc.core import (
    Graph, Input, Parameter, LinearReducer, Sigmoid, SquaredError,
    DanglingReferenceError, accumulate,
)


def test_sigmoid_unit_forward_and_gradient(sigmoid_unit):
    g, n = sigmoid_unit
    g.evaluate_all()
    assert n["y"].value == pytest.approx(0.6224593312, abs=1e-9)

    g.backpropagate_from(n["y"])
    y = n["y"].value
    assert n["w"].adj == pytest.approx(0.2350037122, abs=1e-9)
    assert n["w"].adj == pytest.approx(1.0 * y * (1 - y))
    assert n["b"].adj == pytest.approx(y * (1 - y))
    # Input accumulates too, it is just never updated
    assert n["x"].adj == pytest.approx(0.5 * y * (1 - y))


def test_linear_reducer_value_and_partials():
    g = Graph()
    bias = Parameter(g, 0.5)
    a1, b1 = Input(g, 2.0), Parameter(g, 3.0)
    a2, b2 = Input(g, -1.0), Parameter(g, 4.0)
    r = LinearReducer(g, bias, [(a1, b1), (a2, b2)])
    g.sort().raise_for_status()

    g.evaluate_all()
    assert r.value == pytest.approx(0.5 + 6.0 - 4.0)

    g.backpropagate_from(r)
    assert bias.adj == pytest.approx(1.0)
    assert b1.adj == pytest.approx(2.0)
    assert a1.adj == pytest.approx(3.0)
    assert b2.adj == pytest.approx(-1.0)
    assert a2.adj == pytest.approx(4.0)


def test_squared_error_value_and_partials():
    g = Graph()
    a, b = Input(g, 0.75), Input(g, 1.0)
    c, d = Input(g, 0.2), Input(g, 0.0)
    loss = SquaredError(g, [(a, b), (c, d)])
    g.sort().raise_for_status()

    g.evaluate_all()
    assert loss.value == pytest.approx(0.25 ** 2 + 0.2 ** 2)

    g.backpropagate_from(loss)
    assert a.adj == pytest.approx(2 * (0.75 - 1.0))
    assert b.adj == pytest.approx(2 * (1.0 - 0.75))
    assert c.adj == pytest.approx(0.4)
    assert d.adj == pytest.approx(-0.4)


@pytest.mark.parametrize("x", [-800.0, -40.0, 0.0, 40.0, 800.0])
def test_sigmoid_large_inputs_stay_finite(x):
    g = Graph()
    inp = Input(g, x)
    y = Sigmoid(g, inp)
    g.sort().raise_for_status()

    with np.errstate(over="raise"):
        g.evaluate_all()
        g.backpropagate_from(y)

    assert 0.0 <= y.value <= 1.0
    assert np.isfinite(inp.adj)
    assert inp.adj == pytest.approx(y.value * (1 - y.value))


def test_sigmoid_derivative_matches_exp_form():
    g = Graph()
    inp = Input(g, 1.3)
    y = Sigmoid(g, inp)
    g.sort().raise_for_status()
    g.evaluate_all()
    g.backpropagate_from(y)

    e = np.exp(1.3)
    assert inp.adj == pytest.approx(e / (1 + e) ** 2)


def test_dependencies_enumerate_with_multiplicity():
    g = Graph()
    bias, p = Parameter(g), Parameter(g)
    x = Input(g)
    r = LinearReducer(g, bias, [(x, p), (x, x)])
    s = Sigmoid(g, r)
    loss = SquaredError(g, [(s, x)])

    assert list(r.dependencies()) == [bias.index, x.index, p.index, x.index, x.index]
    assert list(s.dependencies()) == [r.index]
    assert list(loss.dependencies()) == [s.index, x.index]
    assert list(x.dependencies()) == []
    assert list(p.dependencies()) == []


def test_accumulate_adds():
    g = Graph()
    p = Parameter(g)
    accumulate(p, 1.5)
    accumulate(p, -0.25)
    assert p.adj == pytest.approx(1.25)


def test_foreign_node_rejected_without_registering():
    g1, g2 = Graph(), Graph()
    x = Input(g1, 1.0)

    with pytest.raises(DanglingReferenceError):
        Sigmoid(g2, x)
    assert len(g2) == 0


def test_non_integer_dependency_rejected():
    g = Graph()
    with pytest.raises(TypeError):
        Sigmoid(g, 1.0)
    with pytest.raises(TypeError):
        Sigmoid(g, True)


def test_parameter_registers_as_trainable():
    g = Graph()
    Input(g, 1.0)
    p0 = Parameter(g, 0.1)
    Input(g, 2.0)
    p1 = Parameter(g, 0.2)

    assert g.num_parameters == 2
    assert g.parameter(0) is p0
    assert g.parameter(1) is p1
    assert [n.index for n in g.parameters] == [1, 3]
