"""
One round of epidemic propagation over a fixed neighbour topology.

Model:
- Each sweep visits every node in list order
- A node with neighbours contacts ONE uniform-random neighbour
- The contact only takes effect with probability mix_ratio
- push:     informed node informs the neighbour
- pull:     node pulls the rumour from an informed neighbour
- pushpull: if either side is informed, both end up informed
- Updates are visible immediately to later nodes in the same sweep
  (asynchronous activation, unlike the synchronous round model)
"""

import logging

from .config import check_protocol, check_unit_interval, InvalidConfiguration, make_rng

logger = logging.getLogger(__name__)


def propagation_step(nodes, neighbors, current_states, protocol, mix_ratio,
                     num_exchanges, rng=None):
    """
    Advance informed states by ``num_exchanges`` sweeps.

    Args:
        nodes: sequence of Node, visited in order
        neighbors: node id -> list of neighbouring Node
        current_states: node id -> informed flag (left untouched)
        protocol: 'push', 'pull' or 'pushpull'
        mix_ratio: probability in [0, 1] that an attempted exchange takes effect
        num_exchanges: number of sweeps (>= 1)
        rng: numpy Generator or seed

    Returns:
        New dict of node id -> informed flag
    """
    check_protocol(protocol)
    check_unit_interval('mix_ratio', mix_ratio)
    if num_exchanges < 1:
        raise InvalidConfiguration(f"num_exchanges must be >= 1, got {num_exchanges}")

    rng = make_rng(rng)
    states = dict(current_states)

    for _ in range(num_exchanges):
        for node in nodes:
            node_neighbors = neighbors.get(node.id, [])
            if not node_neighbors:
                continue

            neighbor = node_neighbors[int(rng.integers(len(node_neighbors)))]
            node_informed = states.get(node.id, False)
            neighbor_informed = states.get(neighbor.id, False)

            if rng.random() >= mix_ratio:
                continue

            if protocol == 'push':
                if node_informed:
                    states[neighbor.id] = True
            elif protocol == 'pull':
                if neighbor_informed:
                    states[node.id] = True
            elif node_informed or neighbor_informed:
                states[node.id] = True
                states[neighbor.id] = True

    logger.debug("%s step (%d sweeps): %d/%d informed", protocol, num_exchanges,
                 sum(states.values()), len(states))
    return states
