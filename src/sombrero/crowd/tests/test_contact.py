import numpy as np
import pytest

from sombrero.crowd.contact import contact_graph, informed_neighbor_counts, neighbor_counts
from sombrero.crowd.errors import InvalidInput, ShapeMismatch


def chain(n):
    a = np.zeros((n, n))
    for k in range(n - 1):
        a[k, k + 1] = a[k + 1, k] = 1
    return a


def test_contact_graph_nodes_and_edges():
    g = contact_graph(chain(4))
    assert g.number_of_nodes() == 4
    assert sorted(g.edges()) == [(0, 1), (1, 2), (2, 3)]


def test_contact_graph_ignores_diagonal_and_keeps_weights():
    a = np.eye(3) * 5
    a[0, 2] = a[2, 0] = 0.25
    g = contact_graph(a)
    assert g.number_of_edges() == 1
    assert g[0][2]['weight'] == 0.25


def test_contact_graph_asymmetric():
    a = np.zeros((3, 3))
    a[2, 0] = 2.0
    g = contact_graph(a)
    assert g.has_edge(0, 2)
    assert g[0][2]['weight'] == 2.0


def test_contact_graph_isolated_agents():
    g = contact_graph(np.zeros((3, 3)))
    assert g.number_of_nodes() == 3
    assert g.number_of_edges() == 0


def test_neighbor_counts():
    assert neighbor_counts(chain(4)).tolist() == [1.0, 2.0, 2.0, 1.0]
    assert neighbor_counts(np.zeros((0, 0))).shape == (0,)


def test_informed_neighbor_counts():
    counts = informed_neighbor_counts(chain(3), [True, False, False])
    assert counts.tolist() == [0.0, 1.0, 0.0]


def test_bad_inputs():
    with pytest.raises(ShapeMismatch):
        contact_graph(np.zeros((2, 3)))
    with pytest.raises(InvalidInput):
        contact_graph(np.array([['a', 'b'], ['c', 'd']]))
    with pytest.raises(ShapeMismatch):
        informed_neighbor_counts(chain(3), [True, False])
