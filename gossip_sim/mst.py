"""
Minimum spanning tree over randomly weighted candidate edges (Kruskal).

Every unordered pair of nodes is a candidate, so the candidate graph is
complete and the resulting tree always spans all nodes.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .config import InvalidConfiguration, make_rng
from .disjoint_set import DisjointSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    weight: float


def candidate_edges(node_ids, rng):
    """
    One edge per unordered pair (i < j), each with an independent U[0, 1) weight.

    Weights are drawn in generation order so a seeded generator always yields
    the same candidates.
    """
    pairs = [(node_ids[i], node_ids[j])
             for i in range(len(node_ids))
             for j in range(i + 1, len(node_ids))]
    weights = rng.random(len(pairs))
    return [Edge(source, target, float(w)) for (source, target), w in zip(pairs, weights)]


def generate_mst(node_ids, rng=None):
    """
    Build a random spanning tree with Kruskal's algorithm.

    Parameters
    ----------
    node_ids : sequence of str
        Unique node identifiers.
    rng : numpy.random.Generator or int, optional
        Random source (or seed) for the edge weights.

    Returns
    -------
    edges : list of Edge
        ``len(node_ids) - 1`` edges in the order they were accepted.
    """
    node_ids = list(node_ids)
    if len(set(node_ids)) != len(node_ids):
        raise InvalidConfiguration("node ids passed to generate_mst must be unique")

    rng = make_rng(rng)
    candidates = candidate_edges(node_ids, rng)

    # Stable sort keeps generation order among equal weights
    order = np.argsort([edge.weight for edge in candidates], kind='stable')

    forest = DisjointSet(node_ids)
    tree_size = len(node_ids) - 1
    edges = []
    for idx in order:
        if len(edges) >= tree_size:
            break
        edge = candidates[idx]
        if forest.union(edge.source, edge.target):
            edges.append(edge)

    logger.debug("MST over %d nodes: %d of %d candidate edges accepted",
                 len(node_ids), len(edges), len(candidates))
    return edges
