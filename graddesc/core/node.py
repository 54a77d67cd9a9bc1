# graddesc/core/node.py
"""
Scalar node variants of the computation graph.

Every node holds a forward value and a gradient accumulator (``adj``). Nodes
refer to their dependencies by integer index into the owning graph's arena;
``evaluate`` and ``backpropagate`` receive that arena (``nodes``) to look the
indices up.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import DanglingReferenceError

if TYPE_CHECKING:
    from .graph import Graph

NodeRef = Union["Node", int]


def accumulate(target: "Node", delta: float) -> None:
    """Add ``delta`` to ``target.adj``. The only way accumulators change during a backward pass."""
    target.adj += delta


def _as_index(graph: "Graph", dep: NodeRef) -> int:
    """Resolve a node or raw index to an arena index of ``graph``."""
    if isinstance(dep, Node):
        if dep.graph is not graph:
            raise DanglingReferenceError(
                message=f"{dep!r} belongs to a different graph"
            )
        return dep.index
    if isinstance(dep, (bool, float)) or not isinstance(dep, (int, np.integer)):
        raise TypeError(f"Dependencies must be Node objects or int indices, but got {type(dep)}")
    return int(dep)


class Node(ABC):
    """
    Base class for all graph nodes.

    Attributes
    ----------
    value : float
        Result of the most recent forward evaluation.
    adj : float
        Gradient accumulator (d cost / d value), valid for one backward pass.
    graph : Graph
        The graph that owns this node.
    index : int
        Stable arena index, assigned on registration.
    name : Optional[str]
        Optional debug name.
    """

    op_tag = "node"

    def __init__(self, graph: "Graph", value: float = 0.0, *, name: Optional[str] = None):
        self.value = float(value)
        self.adj = 0.0
        self.name = name
        self.graph = graph
        self.index = -1
        graph.register(self)

    @abstractmethod
    def evaluate(self, nodes: Sequence["Node"]) -> None:
        """Recompute ``value`` from the current values of the dependencies."""

    @abstractmethod
    def backpropagate(self, nodes: Sequence["Node"]) -> None:
        """Push ``adj`` scaled by the local partials into each dependency."""

    @abstractmethod
    def dependencies(self) -> Iterator[int]:
        """Yield dependency indices, once per occurrence, in natural order."""

    def __repr__(self):
        return f"{type(self).__name__}(index={self.index}, value={self.value!r}, name={self.name!r})"


class Input(Node):
    """Externally fed leaf. Its accumulator is computed but never consumed."""

    op_tag = "input"

    def set_value(self, value: float) -> None:
        self.value = float(value)

    def evaluate(self, nodes):
        pass

    def backpropagate(self, nodes):
        pass

    def dependencies(self):
        return iter(())


class Parameter(Node):
    """Trainable leaf, updated by ``Graph.update_parameters``."""

    op_tag = "parameter"

    def __init__(self, graph: "Graph", value: float = 0.0, *, name: Optional[str] = None):
        super().__init__(graph, value, name=name)
        graph.register_parameter(self)

    def set_value(self, value: float) -> None:
        self.value = float(value)

    def evaluate(self, nodes):
        pass

    def backpropagate(self, nodes):
        pass

    def dependencies(self):
        return iter(())


class LinearReducer(Node):
    """
    value = bias + sum_i a_i * b_i

    The building block of a fully-connected pre-activation: ``bias`` is usually
    a Parameter and each term pairs an upstream activation with a weight.
    """

    op_tag = "linear"

    def __init__(self, graph: "Graph", bias: NodeRef,
                 terms: Sequence[Tuple[NodeRef, NodeRef]] = (), *, name: Optional[str] = None):
        self.bias = _as_index(graph, bias)
        self.terms: List[Tuple[int, int]] = [
            (_as_index(graph, a), _as_index(graph, b)) for a, b in terms
        ]
        super().__init__(graph, name=name)

    def add_term(self, a: NodeRef, b: NodeRef) -> None:
        """Append an ``a * b`` term. Invalidates the graph's order."""
        self.terms.append((_as_index(self.graph, a), _as_index(self.graph, b)))
        self.graph.invalidate()

    def evaluate(self, nodes):
        value = nodes[self.bias].value
        for a, b in self.terms:
            value += nodes[a].value * nodes[b].value
        self.value = value

    def backpropagate(self, nodes):
        d = self.adj
        accumulate(nodes[self.bias], d)
        for a, b in self.terms:
            na, nb = nodes[a], nodes[b]
            accumulate(na, d * nb.value)
            accumulate(nb, d * na.value)

    def dependencies(self):
        yield self.bias
        for a, b in self.terms:
            yield a
            yield b


class Sigmoid(Node):
    """
    value = 1 / (1 + exp(-x))

    Both directions avoid exp of a large positive argument: the forward pass
    branches on the sign of x and the local partial is written as y * (1 - y).
    """

    op_tag = "sigmoid"

    def __init__(self, graph: "Graph", x: NodeRef, *, name: Optional[str] = None):
        self.x = _as_index(graph, x)
        super().__init__(graph, name=name)

    def evaluate(self, nodes):
        xv = nodes[self.x].value
        if xv >= 0:
            self.value = float(1.0 / (1.0 + np.exp(-xv)))
        else:
            ex = np.exp(xv)
            self.value = float(ex / (1.0 + ex))

    def backpropagate(self, nodes):
        y = self.value
        accumulate(nodes[self.x], self.adj * y * (1.0 - y))

    def dependencies(self):
        yield self.x


class SquaredError(Node):
    """value = sum_i (a_i - b_i)^2, the loss node of the classifier."""

    op_tag = "squared_error"

    def __init__(self, graph: "Graph", terms: Sequence[Tuple[NodeRef, NodeRef]] = (),
                 *, name: Optional[str] = None):
        self.terms: List[Tuple[int, int]] = [
            (_as_index(graph, a), _as_index(graph, b)) for a, b in terms
        ]
        super().__init__(graph, name=name)

    def add_term(self, a: NodeRef, b: NodeRef) -> None:
        """Append an ``(a - b)^2`` term. Invalidates the graph's order."""
        self.terms.append((_as_index(self.graph, a), _as_index(self.graph, b)))
        self.graph.invalidate()

    def evaluate(self, nodes):
        value = 0.0
        for a, b in self.terms:
            diff = nodes[a].value - nodes[b].value
            value += diff * diff
        self.value = value

    def backpropagate(self, nodes):
        d = self.adj
        for a, b in self.terms:
            na, nb = nodes[a], nodes[b]
            diff = na.value - nb.value
            accumulate(na, d * 2.0 * diff)
            accumulate(nb, d * 2.0 * -diff)

    def dependencies(self):
        for a, b in self.terms:
            yield a
            yield b
