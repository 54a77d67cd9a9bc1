"""
Graph inspection helpers: statistics and printed summaries of a Graph.
"""

import numpy as np
from typing import Dict
from collections import Counter


def get_graph_stats(graph) -> Dict:
    """
    Collect graph statistics without printing.

    Edges count dependency occurrences, so a node used twice by the same
    LinearReducer contributes two edges.

    Returns:
        Dictionary with node/edge counts, fan-in/fan-out and per-kind counts
    """
    if len(graph) == 0:
        return {
            'nodes': 0,
            'edges': 0,
            'parameters': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {},
            'sorted': graph.is_sorted,
        }

    nodes = graph.nodes
    n_nodes = len(nodes)

    # fan-in: dependencies read by each node
    fan_ins = [sum(1 for _ in node.dependencies()) for node in nodes]
    n_edges = sum(fan_ins)

    # fan-out: how many occurrences reference each node
    fan_outs = [0] * n_nodes
    for node in nodes:
        for dep in node.dependencies():
            if 0 <= dep < n_nodes:
                fan_outs[dep] += 1

    op_counter = Counter(node.op_tag for node in nodes)

    return {
        'nodes': n_nodes,
        'edges': n_edges,
        'parameters': graph.num_parameters,
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter),
        'sorted': graph.is_sorted,
    }


def print_graph_summary(graph, detailed: bool = False) -> Dict:
    """
    Print a summary of the graph.

    Args:
        graph: Graph to inspect
        detailed: Also list every node (only for graphs of at most 100 nodes)

    Returns:
        The statistics dictionary from get_graph_stats
    """
    stats = get_graph_stats(graph)
    if stats['nodes'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Parameters:         {stats['parameters']:,}")
    print(f"Sorted:             {stats['sorted']}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Node kinds:")
    for op_type, count in Counter(stats['operations']).most_common():
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_type:14s}: {count:6,} ({pct:5.1f}%)")

    if detailed and stats['nodes'] <= 100:
        print()
        print("="*70)
        print("NODES IN EVALUATION ORDER")
        print("="*70)
        for node in graph.nodes:
            deps = list(node.dependencies())
            if deps:
                dep_info = ", ".join(f"Node{d}" for d in deps)
                print(f"Node {node.index:3d}: {node.op_tag:14s} ({node.value:10.6f}) <- [{dep_info}]")
            else:
                print(f"Node {node.index:3d}: {node.op_tag:14s} ({node.value:10.6f}) [leaf]")

    print("="*70 + "\n")
    return stats
