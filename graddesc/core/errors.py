# graddesc/core/errors.py
"""
Structural errors raised while building or ordering a computation graph.

None of these are transient: they all point at a construction bug in the
caller (a dependency cycle, a node wired across graphs, or a pass requested
before a successful sort).
"""
from __future__ import annotations
from typing import Sequence


class StructuralError(Exception):
    """Base class for graph construction problems."""


class CycleError(StructuralError):
    """
    The topological sort could not order every node.

    Attributes
    ----------
    unordered : tuple of int
        Arena indices of the nodes that were never emitted by the sort.
    """

    def __init__(self, unordered: Sequence[int]):
        self.unordered = tuple(unordered)
        super().__init__(
            f"Topological sort failed: loop detected among {len(self.unordered)} node(s) "
            f"{list(self.unordered[:10])}"
        )


class DanglingReferenceError(StructuralError):
    """
    A node depends on something this graph does not own.

    Attributes
    ----------
    indices : tuple of int
        Offending dependency indices (empty when the reference was a node
        object belonging to another graph).
    """

    def __init__(self, indices: Sequence[int] = (), message: str = None):
        self.indices = tuple(indices)
        if message is None:
            message = f"Dependency indices not owned by this graph: {list(self.indices[:10])}"
        super().__init__(message)


class GraphNotSortedError(StructuralError):
    """A forward/backward/update pass was requested without a valid order."""
