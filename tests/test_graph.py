import logging

import pytest

from gossip_sim import (
    InvalidConfiguration,
    build_neighbor_map,
    generate_initial_graph,
    initial_states,
    node_id,
)
from gossip_sim.disjoint_set import DisjointSet


def connected(graph):
    forest = DisjointSet(graph.node_ids())
    for link in graph.links:
        forest.union(link.source, link.target)
    return len({forest.find(x) for x in graph.node_ids()}) <= 1


def undirected_pairs(graph):
    return {frozenset((link.source, link.target)) for link in graph.links}


def test_node_ids_use_letter_and_cycle_suffix():
    assert [node_id(i) for i in (0, 1, 25, 26, 27, 51, 52)] == [
        "A", "B", "Z", "A1", "B1", "Z1", "A2"]


def test_nodes_keep_creation_order(rng):
    graph = generate_initial_graph(30, 0.0, rng)
    assert graph.node_ids() == [node_id(i) for i in range(30)]


@pytest.mark.parametrize("n", [1, 2, 5, 20])
def test_zero_density_is_a_tree(n, rng):
    graph = generate_initial_graph(n, 0.0, rng)
    assert len(graph.links) == n - 1
    assert connected(graph)


@pytest.mark.parametrize("n", [2, 5, 12])
def test_full_density_is_complete(n, rng):
    graph = generate_initial_graph(n, 1.0, rng)
    assert len(graph.links) == n * (n - 1) // 2
    assert len(undirected_pairs(graph)) == len(graph.links)


def test_partial_density_adds_floor_of_remaining_pairs(rng):
    n, density = 10, 0.3
    graph = generate_initial_graph(n, density, rng)
    expected_extra = int((n * (n - 1) // 2 - (n - 1)) * density)
    assert len(graph.links) == n - 1 + expected_extra
    assert len(undirected_pairs(graph)) == len(graph.links)
    assert all(link.source != link.target for link in graph.links)
    assert all(link.value == 1 for link in graph.links)
    assert connected(graph)


def test_exactly_one_node_starts_informed():
    for seed in range(20):
        graph = generate_initial_graph(15, 0.2, seed)
        assert sum(node.informed for node in graph.nodes) == 1


def test_zero_nodes_gives_an_empty_graph():
    graph = generate_initial_graph(0, 0.5, 0)
    assert graph.nodes == []
    assert graph.links == []


@pytest.mark.parametrize("count, density", [(-1, 0.0), (5, -0.1), (5, 1.5)])
def test_invalid_parameters_are_rejected(count, density):
    with pytest.raises(InvalidConfiguration):
        generate_initial_graph(count, density, 0)


def test_attempt_bound_falls_back_to_absent_pairs(monkeypatch, caplog):
    monkeypatch.setattr("gossip_sim.graph.EXTRA_EDGE_ATTEMPT_FACTOR", 0)
    with caplog.at_level(logging.WARNING, logger="gossip_sim.graph"):
        graph = generate_initial_graph(8, 1.0, 5)
    assert len(graph.links) == 8 * 7 // 2
    assert len(undirected_pairs(graph)) == len(graph.links)
    assert "gave up" in caplog.text


def test_neighbor_map_is_symmetric(rng):
    graph = generate_initial_graph(12, 0.25, rng)
    neighbors = build_neighbor_map(graph)

    assert set(neighbors) == set(graph.node_ids())
    for node_key, adjacent in neighbors.items():
        for other in adjacent:
            assert node_key in [n.id for n in neighbors[other.id]]
    assert sum(len(v) for v in neighbors.values()) == 2 * len(graph.links)


def test_initial_states_mirror_node_flags(rng):
    graph = generate_initial_graph(6, 0.0, rng)
    states = initial_states(graph)
    assert states == {node.id: node.informed for node in graph.nodes}
