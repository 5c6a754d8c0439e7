import math

import pandas as pd
import pytest

from gossip_sim import (
    GraphData,
    Node,
    SimulationConfig,
    generate_initial_graph,
    informed_count,
    informed_percentage,
    rounds_to_full,
    run_propagation,
    summarize_rounds,
)


def test_states_override_static_flags():
    graph = GraphData(nodes=[Node("A", True), Node("B", False), Node("C", False), Node("D", False)])
    states = {"A": False, "B": True, "C": True}
    assert informed_count(graph, states) == 2
    assert informed_percentage(graph, states) == 50.0
    # Missing ids fall back to the node flag
    assert informed_count(graph, {}) == 1


def test_percentage_of_empty_graph_is_zero():
    assert informed_percentage(GraphData(), {}) == 0.0


def test_run_propagation_series_shape(rng):
    graph = generate_initial_graph(12, 0.2, rng)
    config = SimulationConfig(node_count=12, density=0.2, protocol="pushpull", mix_ratio=1.0)
    series = run_propagation(graph, config, max_rounds=100, rng=rng)

    assert list(series.columns) == ["round", "informed", "percentage"]
    assert series.iloc[0]["informed"] == 1
    assert series["round"].tolist() == list(range(len(series)))
    assert series["informed"].is_monotonic_increasing
    assert series.iloc[-1]["percentage"] == 100.0
    assert rounds_to_full(series) == len(series) - 1


def test_run_propagation_uses_config_seed():
    graph = generate_initial_graph(20, 0.1, 3)
    config = SimulationConfig(node_count=20, density=0.1, protocol="push", seed=8)
    first = run_propagation(graph, config, max_rounds=50)
    second = run_propagation(graph, config, max_rounds=50)
    pd.testing.assert_frame_equal(first, second)


def test_stalled_run_reports_minus_one(rng):
    graph = generate_initial_graph(5, 0.0, rng)
    config = SimulationConfig(node_count=5, mix_ratio=0.0)
    series = run_propagation(graph, config, max_rounds=4, rng=rng)
    assert len(series) == 5
    assert rounds_to_full(series) == -1


def test_run_propagation_validates_config(rng):
    graph = generate_initial_graph(3, 0.0, rng)
    with pytest.raises(ValueError):
        run_propagation(graph, SimulationConfig(protocol="broadcast"), rng=rng)


def test_summarize_filters_stalls():
    summary = summarize_rounds([4, 6, -1, 5, 5])
    assert summary["stalled"] == 1
    assert summary["mean"] == 5.0
    assert summary["median"] == 5.0
    assert summary["ci_low"] < 5.0 < summary["ci_high"]


def test_summarize_constant_rounds_has_zero_width_ci():
    summary = summarize_rounds([3, 3, 3])
    assert summary["ci_low"] == summary["ci_high"] == 3.0


def test_summarize_all_stalled():
    summary = summarize_rounds([-1, -1])
    assert summary["stalled"] == 2
    assert math.isnan(summary["mean"])
