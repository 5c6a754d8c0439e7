"""
Connected random graph generation.

A random spanning tree guarantees connectivity; extra distinct edges are then
added by rejection sampling until the requested density is reached.
"""

import logging
from dataclasses import dataclass, field

from .config import EXTRA_EDGE_ATTEMPT_FACTOR, InvalidConfiguration, check_unit_interval, make_rng
from .mst import generate_mst

logger = logging.getLogger(__name__)


@dataclass
class Node:
    id: str
    informed: bool = False


@dataclass
class Link:
    source: str
    target: str
    value: int = 1


@dataclass
class GraphData:
    nodes: list = field(default_factory=list)
    links: list = field(default_factory=list)

    def node_ids(self):
        return [node.id for node in self.nodes]


def node_id(index):
    """A, B, ..., Z, A1, B1, ..., Z1, A2, ..."""
    suffix = str(index // 26) if index >= 26 else ''
    return chr(65 + index % 26) + suffix


def edge_key(a, b):
    return (a, b) if a <= b else (b, a)


def generate_initial_graph(node_count, density, rng=None):
    """
    Generate a connected graph with exactly one informed node.

    Parameters
    ----------
    node_count : int
        Number of nodes (0 gives an empty graph).
    density : float
        Fraction in [0, 1] of the non-tree pairs to add as extra edges.
    rng : numpy.random.Generator or int, optional
        Random source (or seed).

    Returns
    -------
    graph : GraphData
        Nodes in index order, links with the tree edges first.
    """
    if node_count < 0:
        raise InvalidConfiguration(f"node_count must be >= 0, got {node_count}")
    check_unit_interval('density', density)

    rng = make_rng(rng)
    if node_count == 0:
        return GraphData()

    informed_index = int(rng.integers(node_count))
    nodes = [Node(id=node_id(i), informed=(i == informed_index)) for i in range(node_count)]

    tree = generate_mst([node.id for node in nodes], rng)
    links = [Link(edge.source, edge.target) for edge in tree]

    if density > 0:
        links.extend(_extra_links(nodes, links, density, rng))

    logger.debug("Generated graph: %d nodes, %d links (%d tree), informed=%s",
                 node_count, len(links), len(tree), nodes[informed_index].id)
    return GraphData(nodes=nodes, links=links)


def _extra_links(nodes, tree_links, density, rng):
    n = len(nodes)
    wanted = int((n * (n - 1) // 2 - len(tree_links)) * density)
    if wanted <= 0:
        return []

    present = {edge_key(link.source, link.target) for link in tree_links}
    extra = []

    max_attempts = EXTRA_EDGE_ATTEMPT_FACTOR * n * n
    attempts = 0
    while len(extra) < wanted and attempts < max_attempts:
        attempts += 1
        source = nodes[int(rng.integers(n))].id
        target = nodes[int(rng.integers(n))].id
        if source == target:
            continue
        key = edge_key(source, target)
        if key in present:
            continue
        present.add(key)
        extra.append(Link(source, target))

    if len(extra) < wanted:
        logger.warning("Rejection sampling gave up after %d attempts with %d/%d extra edges; "
                       "filling the rest from the absent pairs", attempts, len(extra), wanted)
        absent = [(nodes[i].id, nodes[j].id)
                  for i in range(n) for j in range(i + 1, n)
                  if edge_key(nodes[i].id, nodes[j].id) not in present]
        for idx in rng.permutation(len(absent))[:wanted - len(extra)]:
            source, target = absent[idx]
            extra.append(Link(source, target))

    return extra


def build_neighbor_map(graph):
    """Undirected adjacency: node id -> list of neighbouring Node objects."""
    by_id = {node.id: node for node in graph.nodes}
    neighbors = {node.id: [] for node in graph.nodes}
    for link in graph.links:
        neighbors[link.source].append(by_id[link.target])
        neighbors[link.target].append(by_id[link.source])
    return neighbors


def initial_states(graph):
    return {node.id: node.informed for node in graph.nodes}
