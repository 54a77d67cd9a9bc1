import numpy as np
import pytest

from graddesc.core import Graph, Input, Parameter, LinearReducer, Sigmoid, SquaredError


@pytest.fixture
def sigmoid_unit():
    """y = sigmoid(w*x + b) with x=1, w=0.5, b=0, already sorted."""
    g = Graph()
    x = Input(g, 1.0, name="x")
    w = Parameter(g, 0.5, name="w")
    b = Parameter(g, 0.0, name="b")
    z = LinearReducer(g, b, [(w, x)], name="z")
    y = Sigmoid(g, z, name="y")
    assert g.sort().ok
    return g, {"x": x, "w": w, "b": b, "z": z, "y": y}


@pytest.fixture
def make_random_graph():
    """
    Factory for small random graphs whose insertion order is not topological:
    the cost node is created first and its terms are attached at the end.
    Returns (graph, cost).
    """
    def _make(seed: int, n_params: int = 5, n_inputs: int = 3, n_hidden: int = 3):
        rng = np.random.default_rng(seed)
        g = Graph()
        cost = SquaredError(g)

        params = [Parameter(g, rng.normal(0.0, 1.0)) for _ in range(n_params)]
        inputs = [Input(g, rng.uniform(-1.0, 1.0)) for _ in range(n_inputs)]
        leaves = params + inputs

        hidden = []
        for k in range(n_hidden):
            r = LinearReducer(g, params[k % n_params])
            for _ in range(3):
                a = leaves[rng.integers(len(leaves))]
                b = params[rng.integers(n_params)]
                r.add_term(a, b)
            hidden.append(Sigmoid(g, r))

        top = LinearReducer(g, params[-1])
        for h in hidden:
            top.add_term(h, params[rng.integers(n_params)])
        top.add_term(hidden[0], hidden[-1])
        out = Sigmoid(g, top)

        cost.add_term(out, Input(g, 0.25))
        cost.add_term(hidden[1 % n_hidden], inputs[0])
        return g, cost

    return _make
