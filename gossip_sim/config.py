"""
Simulation parameters, configuration validation and random source handling.
"""

from dataclasses import dataclass

import numpy as np

# ============================================================================
# PARAMETERS
# ============================================================================

NODE_COUNT = 10                         # Graph size
NUM_EXCHANGES = 3                       # Sweeps over all nodes per round
MIX_RATIO = 0.3                         # Probability an attempted exchange takes effect
DENSITY = 0.0                           # Fraction of non-tree edges added
PROTOCOL = 'push'                       # push | pull | pushpull
PSS_VIEW_SIZE = 30                      # Max entries in a partial view

TRIALS = 20                             # Repetitions per protocol
MAX_ROUNDS = 500                        # Give up (stall) after this many rounds
BASE_SEED = 42                          # Reproducibility

# Rejection sampling of extra edges gives up after this many draws per n^2
EXTRA_EDGE_ATTEMPT_FACTOR = 50

PROTOCOLS = ('push', 'pull', 'pushpull')


class InvalidConfiguration(ValueError):
    """A simulation parameter violates its contract."""


def make_rng(seed=None):
    """
    Normalize a seed or generator into a ``numpy.random.Generator``.

    Passing an existing Generator (or any object with the same ``integers`` /
    ``random`` interface) returns it unchanged, so callers can thread one
    source through several stochastic operations.
    """
    if hasattr(seed, 'integers') and hasattr(seed, 'random'):
        return seed
    return np.random.default_rng(seed)


def check_protocol(protocol):
    if protocol not in PROTOCOLS:
        raise InvalidConfiguration(
            f"unknown protocol {protocol!r}, expected one of {', '.join(PROTOCOLS)}")


def check_unit_interval(name, value):
    if not 0.0 <= value <= 1.0:
        raise InvalidConfiguration(f"{name} must be in [0, 1], got {value}")


@dataclass
class SimulationConfig:
    """Everything needed to build a graph and advance it round by round."""

    node_count: int = NODE_COUNT
    num_exchanges: int = NUM_EXCHANGES
    mix_ratio: float = MIX_RATIO
    density: float = DENSITY
    protocol: str = PROTOCOL
    seed: int | None = None

    def validate(self):
        if self.node_count < 0:
            raise InvalidConfiguration(f"node_count must be >= 0, got {self.node_count}")
        if self.num_exchanges < 1:
            raise InvalidConfiguration(f"num_exchanges must be >= 1, got {self.num_exchanges}")
        check_unit_interval('mix_ratio', self.mix_ratio)
        check_unit_interval('density', self.density)
        check_protocol(self.protocol)
        return self
