"""
Informed-fraction time series and rounds-to-coverage statistics.
"""

import logging

import numpy as np
import pandas as pd
from scipy import stats

from .config import MAX_ROUNDS, make_rng
from .graph import build_neighbor_map, initial_states
from .propagation import propagation_step

logger = logging.getLogger(__name__)


def informed_count(graph, states):
    """Informed nodes, with ``states`` overriding each node's static flag."""
    return sum(1 for node in graph.nodes if states.get(node.id, node.informed))


def informed_percentage(graph, states):
    if not graph.nodes:
        return 0.0
    return informed_count(graph, states) / len(graph.nodes) * 100


def run_propagation(graph, config, max_rounds=MAX_ROUNDS, rng=None):
    """
    Drive ``propagation_step`` round by round until every node is informed.

    Parameters
    ----------
    graph : GraphData
        Fixed topology with the initial informed flags.
    config : SimulationConfig
        Protocol, mix ratio and exchanges per round.
    max_rounds : int
        Stop after this many rounds even if coverage is incomplete.
    rng : numpy.random.Generator or int, optional
        Random source (or seed); defaults to ``config.seed``.

    Returns
    -------
    series : pandas.DataFrame
        Columns ``round``, ``informed``, ``percentage``; row 0 is the
        initial state.
    """
    config.validate()
    rng = make_rng(config.seed if rng is None else rng)

    neighbors = build_neighbor_map(graph)
    states = initial_states(graph)
    n = len(graph.nodes)

    rows = [{'round': 0, 'informed': informed_count(graph, states),
             'percentage': informed_percentage(graph, states)}]

    for t in range(1, max_rounds + 1):
        if rows[-1]['informed'] >= n:
            break
        states = propagation_step(graph.nodes, neighbors, states, config.protocol,
                                  config.mix_ratio, config.num_exchanges, rng)
        rows.append({'round': t, 'informed': informed_count(graph, states),
                     'percentage': informed_percentage(graph, states)})

    return pd.DataFrame(rows, columns=['round', 'informed', 'percentage'])


def rounds_to_full(series):
    """First round at full coverage, or -1 if the run stalled."""
    full = series[series['percentage'] >= 100.0]
    if len(full) == 0:
        return -1
    return int(full.iloc[0]['round'])


def summarize_rounds(rounds):
    """
    Summary statistics over trials, ignoring stalled runs (-1).

    Returns a dict with mean, 95% CI (t-distribution), median, p90 and the
    number of stalled trials. Statistics are NaN when every trial stalled.
    """
    rounds = list(rounds)
    rounds_arr = np.array([r for r in rounds if r >= 0])
    stalled = len(rounds) - len(rounds_arr)

    if len(rounds_arr) == 0:
        logger.warning("All %d trials stalled", stalled)
        return {'mean': np.nan, 'ci_low': np.nan, 'ci_high': np.nan,
                'median': np.nan, 'p90': np.nan, 'stalled': stalled}

    mean_rounds = rounds_arr.mean()
    median_rounds = np.median(rounds_arr)
    p90_rounds = np.percentile(rounds_arr, 90)

    # 95% CI; degenerate (zero-width) when there is one trial or no spread
    if len(rounds_arr) > 1 and rounds_arr.std() > 0:
        ci = stats.t.interval(0.95, len(rounds_arr) - 1,
                              loc=mean_rounds,
                              scale=stats.sem(rounds_arr))
    else:
        ci = (mean_rounds, mean_rounds)

    return {
        'mean': float(mean_rounds),
        'ci_low': float(ci[0]),
        'ci_high': float(ci[1]),
        'median': float(median_rounds),
        'p90': float(p90_rounds),
        'stalled': stalled,
    }
