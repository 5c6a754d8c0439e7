"""Epidemic gossip propagation, peer sampling and random connected graphs."""

from .config import InvalidConfiguration, PROTOCOLS, SimulationConfig, make_rng
from .disjoint_set import DisjointSet
from .graph import (
    GraphData,
    Link,
    Node,
    build_neighbor_map,
    generate_initial_graph,
    initial_states,
    node_id,
)
from .metrics import informed_count, informed_percentage, rounds_to_full, run_propagation, summarize_rounds
from .mst import Edge, generate_mst
from .propagation import propagation_step
from .pss import PartialView, PeerNode, PeerSamplingService, bootstrap_views, pss_round

__all__ = [
    "DisjointSet",
    "Edge",
    "GraphData",
    "InvalidConfiguration",
    "Link",
    "Node",
    "PROTOCOLS",
    "PartialView",
    "PeerNode",
    "PeerSamplingService",
    "SimulationConfig",
    "bootstrap_views",
    "build_neighbor_map",
    "generate_initial_graph",
    "generate_mst",
    "informed_count",
    "informed_percentage",
    "initial_states",
    "make_rng",
    "node_id",
    "propagation_step",
    "pss_round",
    "rounds_to_full",
    "run_propagation",
    "summarize_rounds",
]
