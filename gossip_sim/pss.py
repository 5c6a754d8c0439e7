"""
Peer Sampling Service: a bounded, self-aging partial view per node.

Each service knows a handful of peers (itself included). Views are merged
pairwise on exchange: local entries age by one round, unknown remote entries
are copied in at their reported age, and only the youngest ``max_size``
entries survive.

The node's own entry is NOT protected: "self" is simply the first entry in the
view's iteration order. Once the own entry ages out, ``update_informed`` and
``is_informed`` address whichever entry now comes first.
"""

import copy
import logging
from dataclasses import dataclass, field, replace

from .config import PSS_VIEW_SIZE, InvalidConfiguration, make_rng
from .mst import generate_mst

logger = logging.getLogger(__name__)


@dataclass
class PeerNode:
    id: str
    informed: bool
    age: int = 0


@dataclass
class PartialView:
    peers: dict = field(default_factory=dict)
    max_size: int = PSS_VIEW_SIZE


class PeerSamplingService:
    """
    Partial view held by one node.

    Parameters
    ----------
    node_id : str
        Identity of the owning node, seeded into the view at age 0.
    informed : bool
        Initial informed flag of the owning node.
    max_size : int
        Upper bound on view entries after each exchange (> 0).
    rng : numpy.random.Generator or int, optional
        Random source for peer selection.
    """

    def __init__(self, node_id, informed, max_size=PSS_VIEW_SIZE, rng=None):
        if max_size <= 0:
            raise InvalidConfiguration(f"max_size must be > 0, got {max_size}")
        self.max_size = max_size
        self.rng = make_rng(rng)
        self.view = PartialView(
            peers={node_id: PeerNode(node_id, informed, 0)},
            max_size=max_size,
        )

    def select_peer(self):
        """Uniform pick from the current view (may be our own entry), or None."""
        if len(self.view.peers) <= 1:
            return None
        peers = list(self.view.peers.values())
        return replace(peers[int(self.rng.integers(len(peers)))])

    def exchange_views(self, other_view):
        # 1) age everything we already know
        for peer in self.view.peers.values():
            peer.age += 1

        # 2) merge, keeping our copy on conflict
        combined = dict(self.view.peers)
        for peer_id, peer in other_view.peers.items():
            if peer_id not in combined:
                combined[peer_id] = replace(peer)

        # 3) youngest first, bounded
        survivors = sorted(combined.values(), key=lambda p: p.age)[:self.max_size]
        self.view.peers = {peer.id: peer for peer in survivors}

    def _self_entry(self):
        return next(iter(self.view.peers.values()), None)

    def update_informed(self, informed):
        entry = self._self_entry()
        if entry is not None:
            entry.informed = informed

    def is_informed(self):
        entry = self._self_entry()
        return entry.informed if entry is not None else False

    def get_view(self):
        return [replace(peer) for peer in self.view.peers.values()]

    @property
    def partial_view(self):
        """Independent copy of the view, safe to hand to another service."""
        return copy.deepcopy(self.view)

    @staticmethod
    def generate_mst(node_ids, rng=None):
        return generate_mst(node_ids, rng)


# ============================================================================
# OVERLAY DRIVERS
# ============================================================================

def bootstrap_views(services, edges):
    """
    Seed views along a tree so the initial overlay is connected.

    Args:
        services: node id -> PeerSamplingService
        edges: iterable of Edge (e.g. from ``generate_mst``)
    """
    for edge in edges:
        source = services[edge.source]
        target = services[edge.target]
        source_view = source.partial_view
        source.exchange_views(target.partial_view)
        target.exchange_views(source_view)


def pss_round(services, states):
    """
    One gossip round over the overlay.

    Every service (in insertion order) selects a peer from its view; if that
    peer is another known service, both sides swap views and, when either is
    informed, both become informed. ``states`` is the authoritative informed
    map (the views' own flags can drift once a node's entry is evicted); the
    result is mirrored into the views through ``update_informed``.

    Args:
        services: node id -> PeerSamplingService
        states: node id -> informed flag (left untouched)

    Returns:
        New dict of node id -> informed flag
    """
    states = dict(states)
    exchanges = 0
    for node_id, service in services.items():
        peer = service.select_peer()
        if peer is None or peer.id == node_id or peer.id not in services:
            continue

        other = services[peer.id]
        local_view = service.partial_view
        service.exchange_views(other.partial_view)
        other.exchange_views(local_view)
        exchanges += 1

        if states.get(node_id, False) or states.get(peer.id, False):
            states[node_id] = True
            states[peer.id] = True
            service.update_informed(True)
            other.update_informed(True)

    logger.debug("PSS round: %d exchanges among %d services, %d informed",
                 exchanges, len(services), sum(states.values()))
    return states
