"""Contact-network helpers.

A contact network snapshot is an (n, n) matrix whose nonzero off-diagonal
entries mark agents in contact (0/1 or weighted). These helpers turn a
snapshot into a ``networkx`` graph and count neighbors per agent.
"""
from typing import Any

import networkx as nx
import numpy as np

from sombrero.crowd.errors import InvalidInput, ShapeMismatch


def _square(adjacency: Any) -> np.ndarray:
    a = np.asarray(adjacency)
    if a.dtype.kind not in 'biuf':
        raise InvalidInput(f'adjacency must be numeric, got dtype {a.dtype}', field='adjacency')
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ShapeMismatch(f'adjacency must be a square matrix, got shape {a.shape}', field='adjacency')
    return a.astype(float)


def contact_graph(adjacency: Any) -> nx.Graph:
    """Build an undirected graph with one node per agent and weighted contact edges.

    Self-contacts on the diagonal are ignored. If the matrix is not
    symmetric an edge exists when either direction is nonzero, and takes
    the upper-triangle weight when that one is set.
    """
    a = _square(adjacency)
    n = a.shape[0]
    g = nx.Graph()
    g.add_nodes_from(range(n))
    i, j = np.triu_indices(n, k=1)
    w = np.where(a[i, j] != 0, a[i, j], a[j, i])
    for u, v, weight in zip(i[w != 0], j[w != 0], w[w != 0]):
        g.add_edge(int(u), int(v), weight=float(weight))
    return g


def neighbor_counts(adjacency: Any) -> np.ndarray:
    """Return the number of contacts of each agent as an (n,) float array."""
    g = contact_graph(adjacency)
    return np.array([g.degree(k) for k in range(g.number_of_nodes())], dtype=float)


def informed_neighbor_counts(adjacency: Any, informed: Any) -> np.ndarray:
    """Return, per agent, how many of its contacts are informed."""
    g = contact_graph(adjacency)
    flags = np.asarray(informed).astype(bool).reshape(-1)
    if flags.shape[0] != g.number_of_nodes():
        raise ShapeMismatch(
            f'informed must have one entry per agent ({g.number_of_nodes()}), got {flags.shape[0]}',
            field='informed')
    return np.array([sum(flags[m] for m in g.neighbors(k)) for k in range(flags.shape[0])], dtype=float)
