"""Tests for the topological sort and its failure statuses."""

import numpy as np
import pytest

from graddesc.core import (
    Graph, Input, Parameter, LinearReducer, Sigmoid, SquaredError,
    SortStatus, CycleError, DanglingReferenceError, topological_order,
)


def assert_valid_order(g):
    position = {idx: pos for pos, idx in enumerate(g.order)}
    assert sorted(position) == list(range(len(g)))
    for node in g.nodes:
        for dep in node.dependencies():
            assert position[dep] < position[node.index]


@pytest.mark.parametrize("seed", range(8))
def test_random_graphs_sort_into_valid_order(make_random_graph, seed):
    g, cost = make_random_graph(seed)
    result = g.sort()

    assert result.status is SortStatus.OK
    assert result.ok
    assert_valid_order(g)
    # the cost node was created first but nothing depends on it
    assert g.order[-1] == cost.index


def test_sort_keeps_node_identity(make_random_graph):
    g, cost = make_random_graph(0)
    before = [g.node(i) for i in range(len(g))]
    g.sort().raise_for_status()

    assert [g.node(i) for i in range(len(g))] == before
    assert set(map(id, g.nodes)) == set(map(id, before))


def test_sink_first_emission_is_reversed():
    g = Graph()
    y = Sigmoid(g, 1)      # index 0 depends on index 1
    x = Input(g, 0.0)      # index 1
    result = g.sort()

    assert result.ok
    assert result.order == (x.index, y.index)
    assert g.nodes == (x, y)


def test_mutual_dependency_reports_cycle():
    g = Graph()
    a = Sigmoid(g, 1)
    b = Sigmoid(g, 0)
    result = g.sort()

    assert result.status is SortStatus.CYCLE
    assert not result.ok
    assert result.offending == (a.index, b.index)
    assert not g.is_sorted
    with pytest.raises(CycleError) as exc_info:
        result.raise_for_status()
    assert exc_info.value.unordered == (0, 1)


def test_cycle_does_not_corrupt_prior_order(sigmoid_unit):
    g, n = sigmoid_unit
    valid_order = g.order

    a = LinearReducer(g, n["b"])
    b = Sigmoid(g, a)
    a.add_term(b, n["w"])
    result = g.sort()

    assert result.status is SortStatus.CYCLE
    assert {a.index, b.index} <= set(result.offending)
    # previous order kept, new nodes appended at registration
    assert g.order[:len(valid_order)] == valid_order
    assert g.order[len(valid_order):] == (a.index, b.index)


def test_cycle_downstream_nodes_are_unordered():
    g = Graph()
    x = Input(g, 1.0)
    r = LinearReducer(g, x)
    s = Sigmoid(g, r)
    r.add_term(s, x)
    out = Sigmoid(g, s)
    result = g.sort()

    assert result.status is SortStatus.CYCLE
    # out itself has no dependents so it is emitted; x hangs below the loop
    assert set(result.offending) == {x.index, r.index, s.index}
    assert out.index not in result.offending


def test_dangling_index_reported():
    g = Graph()
    Input(g, 1.0)
    Sigmoid(g, 7)
    result = g.sort()

    assert result.status is SortStatus.DANGLING_REFERENCE
    assert result.offending == (7,)
    assert not g.is_sorted
    with pytest.raises(DanglingReferenceError) as exc_info:
        result.raise_for_status()
    assert exc_info.value.indices == (7,)


def test_negative_index_is_dangling():
    g = Graph()
    Input(g)
    SquaredError(g, [(0, -1)])
    assert g.sort().status is SortStatus.DANGLING_REFERENCE


def test_dangling_reported_before_cycle():
    g = Graph()
    Sigmoid(g, 1)
    LinearReducer(g, 0, [(0, 9)])
    result = g.sort()
    assert result.status is SortStatus.DANGLING_REFERENCE
    assert result.offending == (9,)


def test_raise_for_status_on_success_returns_result():
    g = Graph()
    Input(g)
    result = g.sort()
    assert result.raise_for_status() is result


def test_verbose_sort_prints_diagnostic(capsys):
    g = Graph()
    Sigmoid(g, 1)
    Sigmoid(g, 0)
    g.sort(verbose=True)
    assert "loop detected" in capsys.readouterr().out


def test_topological_order_on_wide_layer():
    rng = np.random.default_rng(1)
    g = Graph()
    xs = [Input(g, v) for v in rng.uniform(size=6)]
    units = [Sigmoid(g, LinearReducer(g, Parameter(g), [(x, Parameter(g)) for x in xs]))
             for _ in range(4)]
    SquaredError(g, [(u, xs[0]) for u in units])

    result = topological_order([g.node(i) for i in range(len(g))])
    assert result.ok
    assert len(result.order) == len(g)
    g.sort().raise_for_status()
    assert_valid_order(g)
