"""Lax open hypergraph data structures.

A lax open hypergraph is a hypergraph whose nodes may be declared equal
without being merged. Each ``unify`` call records a pair in the quotient
relation; ``quotient()`` later collapses every class into a single node.

Layout:
    - ``nodes[i]`` is the label of node ``i``
    - ``edges[k]`` is the label of hyperedge ``k``
    - ``adjacency[k]`` holds the ordered source and target nodes of edge ``k``
    - ``quotient`` is a pair of equal-length lists of unified node IDs

The open part is the ordered ``sources`` and ``targets`` boundary lists on
``OpenHypergraph``. Node and edge IDs are plain integer indices.
"""

from dataclasses import dataclass, field
from typing import Any

NodeId = int
EdgeId = int


def _check_index(value: Any, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an int, got: {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{what} must be non-negative, got: {value}")


@dataclass
class Hyperedge:
    """Ordered source and target nodes of a single hyperedge.

    Attributes:
        sources: Node IDs on the input side, in port order
        targets: Node IDs on the output side, in port order

    Raises:
        TypeError: If any entry is not an int
        ValueError: If any entry is negative
    """

    sources: list[NodeId] = field(default_factory=list)
    targets: list[NodeId] = field(default_factory=list)

    def __post_init__(self) -> None:
        for node_id in self.sources:
            _check_index(node_id, "Hyperedge source")
        for node_id in self.targets:
            _check_index(node_id, "Hyperedge target")


@dataclass
class Hypergraph:
    """Labelled hypergraph with a pending quotient relation."""

    nodes: list[Any] = field(default_factory=list)
    edges: list[Any] = field(default_factory=list)
    adjacency: list[Hyperedge] = field(default_factory=list)
    quotient: tuple[list[NodeId], list[NodeId]] = field(default_factory=lambda: ([], []))

    def has_node(self, node_id: NodeId) -> bool:
        return isinstance(node_id, int) and 0 <= node_id < len(self.nodes)

    def _require_node(self, node_id: NodeId) -> None:
        _check_index(node_id, "Node id")
        if node_id >= len(self.nodes):
            raise ValueError(f"Node {node_id} does not exist (graph has {len(self.nodes)} nodes)")

    def new_node(self, label: Any) -> NodeId:
        """Append a node with the given label and return its ID."""
        self.nodes.append(label)
        return len(self.nodes) - 1

    def new_edge(self, label: Any, hyperedge: Hyperedge) -> EdgeId:
        """Append a hyperedge between existing nodes and return its ID.

        Raises:
            ValueError: If the hyperedge references a node that does not exist
        """
        for node_id in (*hyperedge.sources, *hyperedge.targets):
            self._require_node(node_id)
        self.edges.append(label)
        self.adjacency.append(hyperedge)
        return len(self.edges) - 1

    def unify(self, left: NodeId, right: NodeId) -> None:
        """Record that two nodes are equal without merging them."""
        self._require_node(left)
        self._require_node(right)
        lefts, rights = self.quotient
        lefts.append(left)
        rights.append(right)

    def quotient_pairs(self) -> list[tuple[NodeId, NodeId]]:
        lefts, rights = self.quotient
        return list(zip(lefts, rights))


@dataclass
class OpenHypergraph:
    """A hypergraph with ordered input (``sources``) and output (``targets``) boundaries.

    Example:
        ```python
        graph = OpenHypergraph.empty()
        edge_id, (inputs, outputs) = graph.new_operation("Copy", ["A"], ["B", "B"])
        graph.sources = inputs
        graph.targets = outputs
        ```
    """

    hypergraph: Hypergraph = field(default_factory=Hypergraph)
    sources: list[NodeId] = field(default_factory=list)
    targets: list[NodeId] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "OpenHypergraph":
        """Create an open hypergraph with no nodes, edges or boundaries."""
        return cls()

    # ========== Mutation ==========

    def new_node(self, label: Any) -> NodeId:
        return self.hypergraph.new_node(label)

    def new_edge(self, label: Any, hyperedge: Hyperedge) -> EdgeId:
        return self.hypergraph.new_edge(label, hyperedge)

    def new_operation(
        self, label: Any, source_labels: list[Any], target_labels: list[Any]
    ) -> tuple[EdgeId, tuple[list[NodeId], list[NodeId]]]:
        """Add an operation with fresh nodes on both sides.

        Args:
            label: Label of the new hyperedge
            source_labels: One label per input port
            target_labels: One label per output port

        Returns:
            Tuple of (edge_id, (source_node_ids, target_node_ids))
        """
        sources = [self.new_node(lbl) for lbl in source_labels]
        targets = [self.new_node(lbl) for lbl in target_labels]
        edge_id = self.new_edge(label, Hyperedge(sources=list(sources), targets=list(targets)))
        return edge_id, (sources, targets)

    def unify(self, left: NodeId, right: NodeId) -> None:
        self.hypergraph.unify(left, right)

    # ========== Inspection ==========

    @property
    def nodes(self) -> list[Any]:
        return self.hypergraph.nodes

    @property
    def edges(self) -> list[Any]:
        return self.hypergraph.edges

    @property
    def adjacency(self) -> list[Hyperedge]:
        return self.hypergraph.adjacency

    def validate(self) -> dict[str, Any]:
        """Check structural integrity.

        Checks for:
        - ``edges`` and ``adjacency`` having the same length
        - Hyperedges, quotient pairs and boundaries referencing missing nodes
        - Quotient halves of unequal length
        - Unified nodes carrying different labels (warning only)

        Returns:
            Dict with 'valid' (bool), 'errors' (list) and 'warnings' (list)
        """
        hg = self.hypergraph
        errors: list[str] = []
        warnings: list[str] = []

        if len(hg.edges) != len(hg.adjacency):
            errors.append(
                f"Edge label count ({len(hg.edges)}) does not match "
                f"adjacency count ({len(hg.adjacency)})"
            )

        for edge_id, hyperedge in enumerate(hg.adjacency):
            missing = [n for n in (*hyperedge.sources, *hyperedge.targets) if not hg.has_node(n)]
            if missing:
                errors.append(f"Edge {edge_id} references non-existent nodes: {missing}")

        lefts, rights = hg.quotient
        if len(lefts) != len(rights):
            errors.append(
                f"Quotient halves differ in length: {len(lefts)} lefts, {len(rights)} rights"
            )
        for left, right in zip(lefts, rights):
            if not (hg.has_node(left) and hg.has_node(right)):
                errors.append(f"Quotient pair ({left}, {right}) references a non-existent node")
            elif hg.nodes[left] != hg.nodes[right]:
                warnings.append(
                    f"Unified nodes {left} and {right} have different labels: "
                    f"{hg.nodes[left]!r} != {hg.nodes[right]!r}"
                )

        for name, boundary in (("sources", self.sources), ("targets", self.targets)):
            missing = [n for n in boundary if not hg.has_node(n)]
            if missing:
                errors.append(f"Boundary '{name}' references non-existent nodes: {missing}")

        return {"valid": not errors, "errors": errors, "warnings": warnings}

    # ========== Quotient ==========

    def quotient(self) -> "OpenHypergraph":
        """Merge every class of unified nodes into a single node.

        Nodes are renumbered in order of each class's smallest member.
        Edges keep their order; the result has an empty quotient.

        Raises:
            ValueError: If the graph is invalid, or unified nodes have different labels
        """
        report = self.validate()
        if not report["valid"]:
            raise ValueError(f"Cannot quotient an invalid hypergraph: {report['errors']}")

        hg = self.hypergraph
        parent = list(range(len(hg.nodes)))

        def find(n: int) -> int:
            while parent[n] != n:
                parent[n] = parent[parent[n]]
                n = parent[n]
            return n

        for left, right in hg.quotient_pairs():
            if hg.nodes[left] != hg.nodes[right]:
                raise ValueError(
                    f"Cannot merge nodes {left} and {right} with different labels: "
                    f"{hg.nodes[left]!r} != {hg.nodes[right]!r}"
                )
            root_l, root_r = find(left), find(right)
            if root_l != root_r:
                # Smallest index is the class representative
                parent[max(root_l, root_r)] = min(root_l, root_r)

        remap: dict[int, int] = {}
        nodes: list[Any] = []
        for n in range(len(hg.nodes)):
            root = find(n)
            if root not in remap:
                remap[root] = len(nodes)
                nodes.append(hg.nodes[root])

        def new_id(n: int) -> int:
            return remap[find(n)]

        adjacency = [
            Hyperedge(
                sources=[new_id(n) for n in e.sources],
                targets=[new_id(n) for n in e.targets],
            )
            for e in hg.adjacency
        ]
        return OpenHypergraph(
            hypergraph=Hypergraph(nodes=nodes, edges=list(hg.edges), adjacency=adjacency),
            sources=[new_id(n) for n in self.sources],
            targets=[new_id(n) for n in self.targets],
        )

    # ========== Serialization ==========

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict. Labels must themselves be JSON values."""
        hg = self.hypergraph
        return {
            "nodes": list(hg.nodes),
            "edges": list(hg.edges),
            "adjacency": [
                {"sources": list(e.sources), "targets": list(e.targets)} for e in hg.adjacency
            ],
            "quotient": [[left, right] for left, right in hg.quotient_pairs()],
            "sources": list(self.sources),
            "targets": list(self.targets),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OpenHypergraph":
        """Build an open hypergraph from ``to_dict`` output.

        Missing keys default to empty lists. The result is not validated;
        call ``validate()`` to check references.

        Raises:
            TypeError: If a section has the wrong shape
        """
        if not isinstance(data, dict):
            raise TypeError(f"Hypergraph data must be a dict, got: {type(data).__name__}")
        for key in ("nodes", "edges", "adjacency", "quotient", "sources", "targets"):
            if not isinstance(data.get(key, []), list):
                raise TypeError(f"'{key}' must be a list, got: {type(data[key]).__name__}")

        adjacency = []
        for entry in data.get("adjacency", []):
            if not isinstance(entry, dict):
                raise TypeError(f"Adjacency entries must be dicts, got: {type(entry).__name__}")
            adjacency.append(
                Hyperedge(
                    sources=list(entry.get("sources", [])),
                    targets=list(entry.get("targets", [])),
                )
            )

        lefts: list[NodeId] = []
        rights: list[NodeId] = []
        for pair in data.get("quotient", []):
            if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                raise TypeError(f"Quotient entries must be [left, right] pairs, got: {pair!r}")
            _check_index(pair[0], "Quotient node")
            _check_index(pair[1], "Quotient node")
            lefts.append(pair[0])
            rights.append(pair[1])

        sources = list(data.get("sources", []))
        targets = list(data.get("targets", []))
        for node_id in (*sources, *targets):
            _check_index(node_id, "Boundary node")

        return cls(
            hypergraph=Hypergraph(
                nodes=list(data.get("nodes", [])),
                edges=list(data.get("edges", [])),
                adjacency=adjacency,
                quotient=(lefts, rights),
            ),
            sources=sources,
            targets=targets,
        )
