"""
Union-Find over hashable node ids, used for cycle detection in Kruskal's pass.
"""


class DisjointSet:
    """
    Disjoint-set forest with path compression and union by rank.

    Parameters
    ----------
    items : iterable, optional
        Initial elements, each placed in its own singleton set.
    """

    def __init__(self, items=()):
        self.parent = {}
        self.rank = {}
        for item in items:
            self.add(item)

    def add(self, item):
        if item not in self.parent:
            self.parent[item] = item
            self.rank[item] = 0

    def __contains__(self, item):
        return item in self.parent

    def __len__(self):
        return len(self.parent)

    def find(self, item):
        """Return the root of ``item``'s set, flattening the path behind it."""
        root = item
        while self.parent[root] != root:
            root = self.parent[root]

        # Second pass: point every node on the path straight at the root
        while self.parent[item] != root:
            next_item = self.parent[item]
            self.parent[item] = root
            item = next_item
        return root

    def union(self, a, b):
        """
        Merge the sets holding ``a`` and ``b``.

        Returns
        -------
        merged : bool
            False if both were already in the same set.
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False

        rank_a = self.rank[root_a]
        rank_b = self.rank[root_b]
        if rank_a < rank_b:
            self.parent[root_a] = root_b
        elif rank_a > rank_b:
            self.parent[root_b] = root_a
        else:
            self.parent[root_b] = root_a
            self.rank[root_a] = rank_a + 1
        return True

    def connected(self, a, b):
        return self.find(a) == self.find(b)
