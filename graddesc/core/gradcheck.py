# graddesc/core/gradcheck.py
"""
Finite-difference check of the analytic gradients.

Formula (one bump pair per parameter):
    dC/dp ≈ [C(p+ε) - C(p-ε)] / (2ε)

Every bump re-runs the full forward pass, so this is only meant for small
graphs (tests, debugging a new node type).
"""
from __future__ import annotations
import time
from typing import Dict, Union

import numpy as np

from .graph import Graph
from .node import Node


def analytic_gradients(graph: Graph, cost: Union[Node, int]) -> np.ndarray:
    """One forward + backward pass; returns d cost / d parameter in registration order."""
    graph.evaluate_all()
    graph.backpropagate_from(cost)
    return graph.parameter_gradients()


def numeric_gradients(graph: Graph, cost: Union[Node, int], eps: float = 1e-5) -> np.ndarray:
    """Centered finite differences of the cost value for every parameter."""
    cost_node = cost if isinstance(cost, Node) else graph.node(cost)
    grads = np.zeros(graph.num_parameters)

    for k, p in enumerate(graph.parameters):
        p0 = p.value

        p.value = p0 + eps
        graph.evaluate_all()
        c_plus = cost_node.value

        p.value = p0 - eps
        graph.evaluate_all()
        c_minus = cost_node.value

        p.value = p0
        grads[k] = (c_plus - c_minus) / (2 * eps)

    # leave values and accumulators as a plain forward pass would
    graph.evaluate_all()
    return grads


def check_gradients(graph: Graph, cost: Union[Node, int], eps: float = 1e-5,
                    tol: float = 1e-4) -> Dict:
    """
    Compare analytic and numeric gradients.

    Returns:
        {
            'analytic': np.ndarray,
            'numeric': np.ndarray,
            'max_abs_error': float,
            'passed': bool,          # max_abs_error <= tol
            'time_ms': float,
        }
    """
    start_time = time.time()
    analytic = analytic_gradients(graph, cost)
    numeric = numeric_gradients(graph, cost, eps=eps)
    max_abs_error = float(np.max(np.abs(analytic - numeric))) if analytic.size else 0.0
    return {
        'analytic': analytic,
        'numeric': numeric,
        'max_abs_error': max_abs_error,
        'passed': max_abs_error <= tol,
        'time_ms': (time.time() - start_time) * 1000,
    }
