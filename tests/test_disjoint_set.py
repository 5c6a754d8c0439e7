from gossip_sim.disjoint_set import DisjointSet


def test_singletons_are_their_own_roots():
    forest = DisjointSet("ABC")
    assert len(forest) == 3
    assert [forest.find(x) for x in "ABC"] == ["A", "B", "C"]
    assert not forest.connected("A", "B")


def test_union_merges_and_reports_redundant_edges():
    forest = DisjointSet("ABCD")
    assert forest.union("A", "B")
    assert forest.union("C", "D")
    assert forest.union("B", "D")
    assert not forest.union("A", "C")
    assert forest.connected("A", "D")


def test_equal_rank_union_attaches_second_under_first():
    forest = DisjointSet("AB")
    forest.union("A", "B")
    assert forest.find("B") == "A"
    assert forest.rank["A"] == 1


def test_find_compresses_long_chains():
    forest = DisjointSet(range(5))
    # Build the chain 4 -> 3 -> 2 -> 1 -> 0 by hand
    for i in range(1, 5):
        forest.parent[i] = i - 1
    assert forest.find(4) == 0
    assert all(forest.parent[i] == 0 for i in range(5))


def test_add_is_idempotent():
    forest = DisjointSet()
    forest.add("A")
    forest.add("B")
    forest.union("A", "B")
    forest.add("B")
    assert "B" in forest
    assert forest.connected("A", "B")
