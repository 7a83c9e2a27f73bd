import pytest

from doublegraph.analysis.ensembles import EnsembleConfig, random_adjacency
from doublegraph.core.double_graph import DoubleGraph


def test_same_seed_same_relation():
    cfg = EnsembleConfig(n_vertices=20, edge_prob=0.2, seed=7)
    assert random_adjacency(cfg) == random_adjacency(cfg)
    assert set(random_adjacency(cfg)) == set(range(20))


def test_connected_flag_gives_one_component():
    for seed in range(10):
        cfg = EnsembleConfig(n_vertices=40, edge_prob=0.0, connected=True, seed=seed)
        g = DoubleGraph(random_adjacency(cfg))
        assert g.is_connected()
        # a spanning tree and nothing more
        assert g.single_edges.num_edges() + g.double_edges.num_edges() == 39


def test_mutual_share_controls_edge_kinds():
    only_double = DoubleGraph(random_adjacency(EnsembleConfig(n_vertices=15, edge_prob=0.3, mutual_prob=1.0, seed=1)))
    assert only_double.single_edges.num_edges() == 0
    assert only_double.double_edges.num_edges() > 0

    only_single = DoubleGraph(random_adjacency(EnsembleConfig(n_vertices=15, edge_prob=0.3, mutual_prob=0.0, seed=1)))
    assert only_single.double_edges.num_edges() == 0
    assert only_single.single_edges.num_edges() > 0


def test_invalid_parameters():
    with pytest.raises(ValueError):
        random_adjacency(EnsembleConfig(edge_prob=1.5))
    with pytest.raises(ValueError):
        random_adjacency(EnsembleConfig(mutual_prob=-0.1))
    with pytest.raises(ValueError):
        random_adjacency(EnsembleConfig(n_vertices=-1))


def test_empty_ensemble():
    assert random_adjacency(EnsembleConfig(n_vertices=0)) == {}
