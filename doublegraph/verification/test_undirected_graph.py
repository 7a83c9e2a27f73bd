import pytest

from doublegraph.analysis.ensembles import EnsembleConfig, random_adjacency
from doublegraph.core.errors import GraphError, MalformedAdjacencyError, VertexNotFoundError
from doublegraph.core.graph import UndirectedGraph


def one_way_k4():
    return {"a": {"b"}, "b": {"d"}, "c": {"a", "b", "d"}, "d": {"a"}}


def full_k4():
    return {
        "a": {"b", "c", "d"},
        "b": {"a", "c", "d"},
        "c": {"a", "b", "d"},
        "d": {"a", "b", "c"},
    }


def tail_graph():
    return {"e": {"h", "f", "g"}, "f": {"h", "g"}, "g": set(), "h": {"e"}}


def two_islands():
    adj = full_k4()
    adj.update(tail_graph())
    return adj


def test_symmetrisation_fills_in_reverse_edges():
    g = UndirectedGraph(one_way_k4())
    assert dict(g.adjacency) == full_k4()
    assert g == UndirectedGraph(full_k4())


def test_symmetry_invariant_on_random_relations():
    for seed in range(10):
        adj = random_adjacency(EnsembleConfig(n_vertices=20, edge_prob=0.2, mutual_prob=0.3, seed=seed))
        g = UndirectedGraph(adj)
        for u, adjs in g.adjacency.items():
            for v in adjs:
                assert u in g.neighbours(v)


def test_input_is_not_aliased():
    adj = one_way_k4()
    g = UndirectedGraph(adj)
    adj["a"].add("zzz")
    assert adj["b"] == {"d"}
    assert "zzz" not in g.neighbours("a")


def test_unknown_neighbour_is_rejected():
    with pytest.raises(MalformedAdjacencyError):
        UndirectedGraph({"a": {"b"}})
    # still a ValueError for callers that only know the builtins
    with pytest.raises(ValueError):
        UndirectedGraph({"a": {"a", "x"}})


def test_empty_graph():
    g = UndirectedGraph()
    assert g.num_vertices() == 0
    assert g.num_ccs() == 0
    assert not g.is_connected()
    assert g == UndirectedGraph({})


def test_single_component():
    g = UndirectedGraph(full_k4())
    assert g.is_connected()
    assert g.num_ccs() == 1
    assert g.vertices_of_ccs()[0] == {"a", "b", "c", "d"}
    assert g.ccs()[0] == g

    g2 = UndirectedGraph(tail_graph())
    assert g2.is_connected()
    assert g2.vertices_of_ccs()[0] == {"e", "f", "g", "h"}
    assert g2.ccs()[0] == g2


def test_components_partition_vertices():
    g = UndirectedGraph(two_islands())
    assert not g.is_connected()
    assert g.num_ccs() == 2

    ccs = g.vertices_of_ccs()
    # first seed in key order comes first
    assert ccs == [{"a", "b", "c", "d"}, {"e", "f", "g", "h"}]
    assert set().union(*ccs) == g.vertices()
    assert not (ccs[0] & ccs[1])

    k4, tail = UndirectedGraph(full_k4()), UndirectedGraph(tail_graph())
    for cc in g.ccs():
        assert (cc == k4) != (cc == tail)


def test_component_queries_are_idempotent():
    g = UndirectedGraph(two_islands())
    assert g.vertices_of_ccs() == g.vertices_of_ccs()
    assert g.ccs() == g.ccs()
    for cc in g.ccs():
        assert cc.is_connected()
        assert cc.num_ccs() == 1


def test_vertex_extraction():
    g = UndirectedGraph(two_islands())
    assert g.num_vertices() == 8
    assert len(g) == 8
    assert g.vertices() == set("abcdefgh")
    assert g.contains("e")
    assert "z" not in g
    assert g.degree("g") == 2


def test_edges_are_listed_once():
    g = UndirectedGraph(full_k4())
    edges = g.edges()
    assert len(edges) == 6
    assert {frozenset(e) for e in edges} == {
        frozenset(p) for p in [("a", "b"), ("a", "c"), ("a", "d"), ("b", "c"), ("b", "d"), ("c", "d")]
    }
    assert UndirectedGraph({"x": {"x"}}).edges() == [("x", "x")]


def test_make_subgraph_prunes_outside_edges():
    g = UndirectedGraph(two_islands())
    sub = g.make_subgraph({"a", "b", "e"})
    assert dict(sub.adjacency) == {"a": {"b"}, "b": {"a"}, "e": set()}
    assert sub.num_ccs() == 2
    # the parent is untouched
    assert g.neighbours("a") == {"b", "c", "d"}


def test_make_subgraph_unknown_vertex():
    g = UndirectedGraph(full_k4())
    with pytest.raises(VertexNotFoundError) as excinfo:
        g.make_subgraph({"a", "q"})
    assert isinstance(excinfo.value, KeyError)
    assert isinstance(excinfo.value, GraphError)
    assert "'q'" in str(excinfo.value)


def test_neighbours_unknown_vertex():
    with pytest.raises(VertexNotFoundError):
        UndirectedGraph(full_k4()).neighbours("q")


def test_union():
    k4, tail = UndirectedGraph(full_k4()), UndirectedGraph(tail_graph())
    union = k4 + tail
    assert union == UndirectedGraph(two_islands())
    assert sorted(len(cc) for cc in union.vertices_of_ccs()) == [4, 4]
    # operands are not mutated
    assert k4.num_vertices() == 4
    assert tail.num_vertices() == 4


def test_union_of_overlapping_graphs():
    left = UndirectedGraph({"a": {"b"}, "b": set(), "c": set()})
    right = UndirectedGraph({"b": {"c"}, "c": set(), "d": {"b"}})
    union = left + right
    for v in union.vertices():
        expected = set()
        if v in left:
            expected |= left.neighbours(v)
        if v in right:
            expected |= right.neighbours(v)
        assert union.neighbours(v) == expected
    assert union.is_connected()


def test_copy_is_deep():
    g = UndirectedGraph(full_k4())
    clone = g.copy()
    assert clone == g
    assert clone.adjacency["a"] is not g.adjacency["a"]


def test_adjacency_view_is_read_only():
    g = UndirectedGraph(full_k4())
    with pytest.raises(TypeError):
        g.adjacency["z"] = set()


def test_neighbour_sets_cannot_be_edited():
    g = UndirectedGraph({"a": {"b"}, "b": set()})
    with pytest.raises(AttributeError):
        g.neighbours("a").discard("b")
    with pytest.raises(AttributeError):
        g.adjacency["b"].add("b")
    assert "b" in g.neighbours("a")
    assert "a" in g.neighbours("b")
    assert g.is_connected()


def test_text_dump_has_one_line_per_vertex():
    g = UndirectedGraph(one_way_k4())
    lines = str(g).splitlines()
    assert len(lines) == 4
    assert lines[0].strip() == "a: b, c, d"
