# graddesc/__init__.py
# Scalar reverse-mode differentiation graph and a small gradient-descent trainer

from .core import (
    Graph,
    Input,
    Parameter,
    LinearReducer,
    Sigmoid,
    SquaredError,
    SortResult,
    SortStatus,
    StructuralError,
    CycleError,
    DanglingReferenceError,
    GraphNotSortedError,
    check_gradients,
)

__version__ = "0.1.0"

__all__ = [
    # Graph
    'Graph',
    'Input',
    'Parameter',
    'LinearReducer',
    'Sigmoid',
    'SquaredError',
    # Sort
    'SortResult',
    'SortStatus',
    # Errors
    'StructuralError',
    'CycleError',
    'DanglingReferenceError',
    'GraphNotSortedError',
    # Checks
    'check_gradients',
]
