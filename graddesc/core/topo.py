# graddesc/core/topo.py
"""
Topological ordering of a graph's arena (Kahn's algorithm).

Counts are kept on the reverse adjacency: ``incoming[d]`` is the number of
dependency occurrences that reference node ``d``. Nodes nothing depends on
(the cost/output nodes) are emitted first, leaf inputs and parameters last,
and the result is reversed into evaluation order.
"""
from __future__ import annotations
from collections import defaultdict, deque
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Sequence, Tuple

from .errors import CycleError, DanglingReferenceError
from .node import Node


class SortStatus(Enum):
    OK = "ok"
    CYCLE = "cycle"
    DANGLING_REFERENCE = "dangling_reference"


@dataclass(frozen=True)
class SortResult:
    """
    Outcome of a topological sort.

    Attributes
    ----------
    status : SortStatus
    order : tuple of int
        Arena indices in evaluation order (empty unless ``status`` is OK).
    offending : tuple of int
        Unordered node indices for CYCLE, dangling indices for
        DANGLING_REFERENCE.
    """
    status: SortStatus
    order: Tuple[int, ...] = ()
    offending: Tuple[int, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is SortStatus.OK

    def raise_for_status(self) -> "SortResult":
        if self.status is SortStatus.CYCLE:
            raise CycleError(self.offending)
        if self.status is SortStatus.DANGLING_REFERENCE:
            raise DanglingReferenceError(self.offending)
        return self

    def describe(self) -> str:
        if self.status is SortStatus.CYCLE:
            return f"Topological sort failed: loop detected ({len(self.offending)} node(s) unordered)"
        if self.status is SortStatus.DANGLING_REFERENCE:
            return f"Topological sort failed: out of graph references {list(self.offending[:10])}"
        return f"Topological sort ok ({len(self.order)} nodes)"


def topological_order(nodes: Sequence[Node]) -> SortResult:
    """
    Order ``nodes`` (the arena, indexed by ``node.index``) so that every
    dependency precedes its dependents.

    Dangling references are checked before the queue runs, since an index the
    arena does not own cannot be expanded.
    """
    n = len(nodes)

    # 1) reverse in-degree per dependency occurrence
    incoming: Dict[int, int] = defaultdict(int)
    for node in nodes:
        for dep in node.dependencies():
            incoming[dep] += 1

    dangling = sorted(k for k in incoming if not 0 <= k < n)
    if dangling:
        return SortResult(SortStatus.DANGLING_REFERENCE, offending=tuple(dangling))

    # 2) seed with nodes nothing depends on
    queue = deque(i for i in range(n) if incoming[i] == 0)

    # 3) sink-to-source emission
    emitted = []
    while queue:
        i = queue.popleft()
        emitted.append(i)
        for dep in nodes[i].dependencies():
            incoming[dep] -= 1
            if incoming[dep] == 0:
                queue.append(dep)

    if len(emitted) < n:
        seen = set(emitted)
        return SortResult(SortStatus.CYCLE, offending=tuple(i for i in range(n) if i not in seen))

    # 4) source-to-sink
    emitted.reverse()
    return SortResult(SortStatus.OK, order=tuple(emitted))
