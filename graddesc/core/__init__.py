# graddesc/core/__init__.py

"""
Core public API: scalar nodes, the owning graph and its passes.

Exports:
    Graph            : Arena of nodes; sort / evaluate_all / backpropagate_from / update_parameters.
    Input, Parameter : Leaf nodes (fed externally / trained).
    LinearReducer    : bias + sum of a*b terms.
    Sigmoid          : Logistic squashing of one node.
    SquaredError     : Sum of squared differences (the loss).
    SortResult, SortStatus : Explicit outcome of Graph.sort().
    check_gradients  : Analytic vs. centered finite-difference gradients.
"""

from .errors import StructuralError, CycleError, DanglingReferenceError, GraphNotSortedError
from .node import Node, Input, Parameter, LinearReducer, Sigmoid, SquaredError, accumulate
from .topo import SortResult, SortStatus, topological_order
from .graph import Graph
from .gradcheck import analytic_gradients, numeric_gradients, check_gradients
from .graph_utils import get_graph_stats, print_graph_summary

__all__ = [
    "Graph",
    "Node", "Input", "Parameter", "LinearReducer", "Sigmoid", "SquaredError", "accumulate",
    "SortResult", "SortStatus", "topological_order",
    "StructuralError", "CycleError", "DanglingReferenceError", "GraphNotSortedError",
    "analytic_gradients", "numeric_gradients", "check_gradients",
    "get_graph_stats", "print_graph_summary",
]
