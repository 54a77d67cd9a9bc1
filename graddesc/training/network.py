# graddesc/training/network.py
"""
Fully-connected sigmoid classifier built out of scalar graph nodes.

Each unit is Sigmoid(LinearReducer(bias, [(prev_j, w_j) ...])) with bias and
weights as Parameters drawn from the caller's generator. The cost is a
SquaredError between the output layer and one-hot label Inputs.
"""
from __future__ import annotations
from typing import List, Optional, Sequence

import numpy as np

from ..core import Graph, Input, Node, Parameter, LinearReducer, Sigmoid, SquaredError
from .config import NetworkConfig


def init_parameter(graph: Graph, rng: np.random.Generator, stddev: float) -> Parameter:
    """New Parameter with value ~ N(0, stddev^2) from ``rng``."""
    return Parameter(graph, float(rng.normal(0.0, stddev)))


class ClassifierNetwork:
    """
    Handles into a built classifier graph.

    Attributes:
        graph: Owning graph (already sorted)
        inputs: Input nodes, one per feature
        labels: One-hot label Input nodes, one per class
        outputs: Output layer Sigmoid nodes
        cost: SquaredError node seeded by the backward pass
    """

    def __init__(self, graph: Graph, inputs: List[Input], labels: List[Input],
                 outputs: List[Node], cost: SquaredError, config: NetworkConfig):
        self.graph = graph
        self.inputs = inputs
        self.labels = labels
        self.outputs = outputs
        self.cost = cost
        self.config = config

    def set_sample(self, features: Sequence[float], label: Optional[int] = None) -> None:
        """Feed features (and, when given, the one-hot label) into the Input nodes."""
        features = np.asarray(features, dtype=np.float64).ravel()
        if features.shape[0] != len(self.inputs):
            raise ValueError(f"Expected {len(self.inputs)} features, but got {features.shape[0]}")
        for node, v in zip(self.inputs, features):
            node.set_value(v)
        if label is not None:
            if not 0 <= label < len(self.labels):
                raise ValueError(f"label {label} outside [0, {len(self.labels)})")
            for i, node in enumerate(self.labels):
                node.set_value(1.0 if i == label else 0.0)

    def output_values(self) -> np.ndarray:
        return np.array([n.value for n in self.outputs], dtype=np.float64)

    def predicted_label(self) -> int:
        """Index of the largest output (first one on ties)."""
        return int(np.argmax(self.output_values()))

    def train_step(self, learning_rate: float) -> float:
        """Forward, backward, update on the current inputs. Returns the cost before the update."""
        self.graph.evaluate_all()
        self.graph.backpropagate_from(self.cost)
        self.graph.update_parameters(learning_rate)
        return self.cost.value

    def predict(self, features: Sequence[float]) -> int:
        self.set_sample(features)
        self.graph.evaluate_all()
        return self.predicted_label()

    def __repr__(self):
        return (f"ClassifierNetwork(inputs={len(self.inputs)}, "
                f"layers={list(self.config.layer_sizes)}, parameters={self.graph.num_parameters})")


def build_classifier(config: NetworkConfig, rng: np.random.Generator,
                     graph: Optional[Graph] = None) -> ClassifierNetwork:
    """
    Build and sort a classifier graph.

    Args:
        config: Layer sizes and initialization
        rng: Caller-owned generator used for every parameter draw
        graph: Graph to build into (a new one when None)

    Returns:
        ClassifierNetwork over a sorted graph

    Raises:
        CycleError / DanglingReferenceError if the graph cannot be ordered
    """
    graph = graph if graph is not None else Graph()

    inputs = [Input(graph) for _ in range(config.n_inputs)]
    labels = [Input(graph) for _ in range(config.n_classes)]

    last_layer: List[Node] = list(inputs)
    for layer_size in config.layer_sizes:
        w_std = config.weight_stddev if config.weight_stddev is not None else np.sqrt(1.0 / layer_size)
        layer: List[Node] = []
        for _ in range(layer_size):
            bias = init_parameter(graph, rng, config.bias_stddev)
            terms = [(n, init_parameter(graph, rng, w_std)) for n in last_layer]
            layer.append(Sigmoid(graph, LinearReducer(graph, bias, terms)))
        last_layer = layer

    cost = SquaredError(graph, list(zip(last_layer, labels)))
    graph.sort().raise_for_status()
    return ClassifierNetwork(graph, inputs, labels, last_layer, cost, config)
