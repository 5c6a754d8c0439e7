#!/usr/bin/env python3
"""
Push vs Pull vs Push-Pull on connected random graphs

For every protocol, runs TRIALS seeded simulations:
- Random spanning tree + extra edges up to the requested density
- One random initial informed node
- Each round = num_exchanges sweeps of propagation_step
- Stop when all nodes are informed (or after max_rounds: stalled)

Outputs a summary CSV (rounds to full coverage), the mean informed-percentage
curve per protocol as CSV, and a PNG plot of those curves.
"""

import argparse
import logging
import time
from multiprocessing import Pool, cpu_count
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from tqdm import tqdm

from . import config
from .config import InvalidConfiguration, PROTOCOLS, SimulationConfig
from .graph import generate_initial_graph
from .metrics import rounds_to_full, run_propagation, summarize_rounds

logger = logging.getLogger(__name__)

# ============================================================================
# SIMULATION
# ============================================================================

def simulate_trial(sim_config, max_rounds, seed):
    """
    One independent run: fresh graph, fresh informed node, fresh randomness.

    Returns
    -------
    series : pandas.DataFrame
        Per-round informed counts (see ``run_propagation``).
    """
    rng = np.random.default_rng(seed)
    graph = generate_initial_graph(sim_config.node_count, sim_config.density, rng)
    return run_propagation(graph, sim_config, max_rounds=max_rounds, rng=rng)


def run_single_trial(args):
    """Wrapper for multiprocessing."""
    protocol, trial, base, max_rounds, base_seed = args
    sim_config = SimulationConfig(
        node_count=base.node_count,
        num_exchanges=base.num_exchanges,
        mix_ratio=base.mix_ratio,
        density=base.density,
        protocol=protocol,
    )
    seed = base_seed + PROTOCOLS.index(protocol) * 100_000 + trial
    series = simulate_trial(sim_config, max_rounds, seed)
    return protocol, trial, series


# ============================================================================
# PARALLEL EXECUTION
# ============================================================================

def run_experiments(base, trials, max_rounds, base_seed, protocols=PROTOCOLS, workers=None):
    """Run all (protocol, trial) pairs in parallel and collect the results."""
    base.validate()
    if trials < 1:
        raise InvalidConfiguration(f"trials must be >= 1, got {trials}")
    workers = workers or cpu_count()

    print("=" * 80)
    print("EPIDEMIC PROPAGATION: PUSH vs PULL vs PUSH-PULL")
    print("=" * 80)
    print(f"Nodes (n):             {base.node_count:,}")
    print(f"Density:               {base.density}")
    print(f"Mix ratio:             {base.mix_ratio}")
    print(f"Exchanges per round:   {base.num_exchanges}")
    print(f"Trials per protocol:   {trials}")
    print(f"Max rounds:            {max_rounds}")
    print(f"Workers:               {workers}")
    print("=" * 80)

    tasks = [(protocol, trial, base, max_rounds, base_seed)
             for protocol in protocols for trial in range(trials)]

    start_time = time.time()
    with Pool(workers) as pool:
        outputs = list(tqdm(
            pool.imap(run_single_trial, tasks),
            total=len(tasks),
            desc="Simulations"
        ))
    elapsed = time.time() - start_time
    tqdm.write(f"[OK] {len(tasks)} simulations in {elapsed:.1f}s")

    summary_rows = []
    curves = []
    for protocol in protocols:
        runs = [series for p, _, series in outputs if p == protocol]
        rounds = [rounds_to_full(series) for series in runs]
        summary_rows.append({'protocol': protocol, **summarize_rounds(rounds)})
        curves.append(mean_curve(runs, max_rounds).assign(protocol=protocol))

    return pd.DataFrame(summary_rows), pd.concat(curves, ignore_index=True)


def mean_curve(runs, max_rounds):
    """
    Average informed percentage per round across trials.

    Finished runs are padded with their final value so every trial
    contributes to every round.
    """
    length = min(max(len(series) for series in runs), max_rounds + 1)
    padded = []
    for series in runs:
        values = series['percentage'].to_numpy()[:length]
        padded.append(np.pad(values, (0, length - len(values)), mode='edge'))
    stacked = np.vstack(padded)
    return pd.DataFrame({
        'round': np.arange(length),
        'mean_percentage': stacked.mean(axis=0),
        'std_percentage': stacked.std(axis=0),
    })


# ============================================================================
# OUTPUT
# ============================================================================

def plot_curves(curves, base, png_file):
    fig, ax = plt.subplots(figsize=(10, 6))

    colors = {'push': '#1f77b4', 'pull': '#ff7f0e', 'pushpull': '#2ca02c'}
    markers = {'push': 'o', 'pull': 's', 'pushpull': 'D'}

    for protocol, subset in curves.groupby('protocol', sort=False):
        ax.plot(subset['round'], subset['mean_percentage'],
                marker=markers.get(protocol, 'o'), markersize=5, linewidth=2,
                color=colors.get(protocol), label=protocol)
        ax.fill_between(subset['round'],
                        subset['mean_percentage'] - subset['std_percentage'],
                        subset['mean_percentage'] + subset['std_percentage'],
                        alpha=0.15, color=colors.get(protocol))

    ax.set_xlabel('Round', fontsize=12, fontweight='bold')
    ax.set_ylabel('Informed Nodes (%)', fontsize=12, fontweight='bold')
    ax.set_title(f'Gossip Propagation - n={base.node_count}, density={base.density}, '
                 f'mix={base.mix_ratio}', fontsize=14, fontweight='bold')
    ax.set_ylim(0, 105)
    ax.grid(True, alpha=0.3, linestyle='--')
    ax.legend(fontsize=11, loc='lower right')

    plt.tight_layout()
    plt.savefig(png_file, dpi=300, bbox_inches='tight')
    plt.close(fig)
    print(f"[SAVED] {png_file}")


def print_summary(summary):
    print("\n" + "=" * 80)
    print("SUMMARY: Rounds to Full Coverage")
    print("=" * 80)
    print(summary.to_string(index=False, float_format=lambda x: f'{x:.2f}'))
    print("=" * 80)


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    ap.add_argument("--nodes", type=int, default=config.NODE_COUNT)
    ap.add_argument("--density", type=float, default=config.DENSITY)
    ap.add_argument("--mix_ratio", type=float, default=config.MIX_RATIO)
    ap.add_argument("--exchanges", type=int, default=config.NUM_EXCHANGES)
    ap.add_argument("--protocols", nargs="+", choices=PROTOCOLS, default=list(PROTOCOLS))
    ap.add_argument("--trials", type=int, default=config.TRIALS)
    ap.add_argument("--max_rounds", type=int, default=config.MAX_ROUNDS)
    ap.add_argument("--seed", type=int, default=config.BASE_SEED)
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--outdir", default="out")
    ap.add_argument("--verbose", action="store_true")
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='[%(levelname)s] %(asctime)s - %(message)s'
    )

    base = SimulationConfig(
        node_count=args.nodes,
        num_exchanges=args.exchanges,
        mix_ratio=args.mix_ratio,
        density=args.density,
        protocol=args.protocols[0],
        seed=args.seed,
    )

    summary, curves = run_experiments(base, args.trials, args.max_rounds, args.seed,
                                      protocols=tuple(args.protocols), workers=args.workers)

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    summary.to_csv(outdir / 'propagation_summary.csv', index=False)
    curves.to_csv(outdir / 'propagation_curves.csv', index=False)
    logger.info("Results saved to %s", outdir)

    plot_curves(curves, base, outdir / 'propagation_curves.png')
    print_summary(summary)


if __name__ == '__main__':
    main()
