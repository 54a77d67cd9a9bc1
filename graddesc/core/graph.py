# graddesc/core/graph.py
from __future__ import annotations
from typing import List, Sequence, Tuple, Union

import numpy as np

from .errors import GraphNotSortedError
from .node import Node, Parameter
from .topo import SortResult, topological_order


class Graph:
    """
    Owner of every node and driver of the forward, backward and update passes.

    Nodes live in an arena (``node(i)`` returns the node with ``index == i``);
    the evaluation order is kept separately as a list of indices, so sorting
    never changes a node's identity or index.

    Usage:
        >>> g = Graph()
        >>> x = Input(g, 1.0); w = Parameter(g, 0.5); b = Parameter(g, 0.0)
        >>> y = Sigmoid(g, LinearReducer(g, b, [(w, x)]))
        >>> g.sort().raise_for_status()
        >>> g.evaluate_all(); g.backpropagate_from(y)
        >>> g.update_parameters(0.1)
    """

    def __init__(self):
        self._arena: List[Node] = []
        self._order: List[int] = []
        self._parameters: List[Parameter] = []
        self._sorted = True

    # ------------------------------ registration ------------------------------ #
    def register(self, node: Node) -> None:
        """Take ownership of ``node``. Called from ``Node.__init__``."""
        node.index = len(self._arena)
        self._arena.append(node)
        self._order.append(node.index)
        self._sorted = False

    def register_parameter(self, node: Parameter) -> None:
        """Add ``node`` to the trainable list. Called from ``Parameter.__init__``."""
        self._parameters.append(node)

    def invalidate(self) -> None:
        """Mark the stored order stale after a structural change."""
        self._sorted = False

    # --------------------------------- order ---------------------------------- #
    def sort(self, verbose: bool = False) -> SortResult:
        """
        Reorder the nodes topologically.

        On failure the previous order is kept and the graph stays unsorted;
        check ``result.ok`` (or call ``result.raise_for_status()``) before
        running any pass.
        """
        result = topological_order(self._arena)
        if result.ok:
            self._order = list(result.order)
            self._sorted = True
        if verbose:
            print(result.describe())
        return result

    @property
    def is_sorted(self) -> bool:
        return self._sorted

    @property
    def order(self) -> Tuple[int, ...]:
        return tuple(self._order)

    @property
    def nodes(self) -> Tuple[Node, ...]:
        """Nodes in stored (evaluation) order."""
        return tuple(self._arena[i] for i in self._order)

    def node(self, index: int) -> Node:
        return self._arena[index]

    def __len__(self):
        return len(self._arena)

    def __iter__(self):
        return iter(self.nodes)

    # --------------------------------- passes --------------------------------- #
    def _require_sorted(self, what: str) -> None:
        if not self._sorted:
            raise GraphNotSortedError(f"{what} requires a successful sort() after the last graph change")

    def evaluate_all(self) -> None:
        """Zero every accumulator, then evaluate every node once in stored order."""
        self._require_sorted("evaluate_all")
        arena = self._arena
        for i in self._order:
            node = arena[i]
            node.adj = 0.0
            node.evaluate(arena)

    def backpropagate_from(self, cost: Union[Node, int]) -> None:
        """
        Seed ``cost.adj = 1`` and run the chain rule in reverse stored order.

        Expects ``evaluate_all()`` to have run first in the same step, so that
        values are fresh and every other accumulator is zero.
        """
        self._require_sorted("backpropagate_from")
        arena = self._arena
        cost_node = cost if isinstance(cost, Node) else arena[cost]
        cost_node.adj = 1.0
        for i in reversed(self._order):
            arena[i].backpropagate(arena)

    def update_parameters(self, learning_rate: float) -> None:
        """Plain gradient descent: value -= learning_rate * adj."""
        self._require_sorted("update_parameters")
        for p in self._parameters:
            p.value -= learning_rate * p.adj

    # ------------------------------- parameters ------------------------------- #
    @property
    def num_parameters(self) -> int:
        return len(self._parameters)

    def parameter(self, index: int) -> Parameter:
        return self._parameters[index]

    @property
    def parameters(self) -> Tuple[Parameter, ...]:
        return tuple(self._parameters)

    def parameter_values(self) -> np.ndarray:
        return np.array([p.value for p in self._parameters], dtype=np.float64)

    def parameter_gradients(self) -> np.ndarray:
        return np.array([p.adj for p in self._parameters], dtype=np.float64)

    def set_parameter_values(self, values: Union[Sequence[float], np.ndarray]) -> None:
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (len(self._parameters),):
            raise ValueError(
                f"Expected {len(self._parameters)} parameter values, but got shape {values.shape}"
            )
        for p, v in zip(self._parameters, values):
            p.value = float(v)

    def __repr__(self):
        state = "sorted" if self._sorted else "unsorted"
        return f"Graph(nodes={len(self._arena)}, parameters={len(self._parameters)}, {state})"
