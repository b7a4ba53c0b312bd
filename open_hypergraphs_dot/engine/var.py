"""Build open hypergraphs by writing ordinary expressions over variables.

Each ``Var`` is a wire. Internally it is a *copy* hyperedge with one source
node and one target node per use, so reusing a variable fans it out
explicitly. Operators on ``Var`` (``^ & | ~``) ask the builder's ``Theory``
which operation and result type to create.

Example:
    ```python
    def half_adder(builder):
        a, b = Var(builder, Bit.Bit), Var(builder, Bit.Bit)
        return [a, b], [a ^ b, a & b]

    graph = build(half_adder, BooleanCircuits())
    ```

``forget`` turns those copy edges back into plain wires.
"""

from collections.abc import Callable, Sequence
from typing import Any

from open_hypergraphs_dot.engine.core import Hyperedge, Hypergraph, NodeId, OpenHypergraph


class Theory:
    """Typing rules for the operators available on ``Var``.

    Subclasses override ``var`` and whichever operators they support. Each
    operator receives the argument labels and returns
    ``(result_label, operation_label)``.
    """

    def var(self) -> Any:
        """Label of the copy operation that represents a variable."""
        raise NotImplementedError

    def bitxor(self, left: Any, right: Any) -> tuple[Any, Any]:
        raise TypeError(f"{type(self).__name__} does not support ^")

    def bitand(self, left: Any, right: Any) -> tuple[Any, Any]:
        raise TypeError(f"{type(self).__name__} does not support &")

    def bitor(self, left: Any, right: Any) -> tuple[Any, Any]:
        raise TypeError(f"{type(self).__name__} does not support |")

    def invert(self, value: Any) -> tuple[Any, Any]:
        raise TypeError(f"{type(self).__name__} does not support ~")


class Builder:
    """Shared state for a single ``build`` call."""

    def __init__(self, theory: Theory, graph: OpenHypergraph | None = None) -> None:
        self.theory = theory
        self.graph = graph if graph is not None else OpenHypergraph.empty()


class Var:
    """A variable wire inside a ``Builder``.

    Attributes:
        builder: The builder owning the graph
        label: Node label carried by every node of this wire
        new_source: The node values flow into
        edge_id: ID of the copy hyperedge backing this variable
    """

    def __init__(self, builder: Builder, label: Any) -> None:
        self.builder = builder
        self.label = label
        graph = builder.graph
        self.new_source: NodeId = graph.new_node(label)
        self.edge_id = graph.new_edge(
            builder.theory.var(), Hyperedge(sources=[self.new_source], targets=[])
        )

    def new_target(self) -> NodeId:
        """Add one more output node to the copy edge and return it."""
        graph = self.builder.graph
        node_id = graph.new_node(self.label)
        graph.adjacency[self.edge_id].targets.append(node_id)
        return node_id

    def _binary(self, other: "Var", rule: Callable[[Any, Any], tuple[Any, Any]]) -> "Var":
        if not isinstance(other, Var):
            return NotImplemented
        if other.builder is not self.builder:
            raise ValueError("Cannot combine variables from different builders")
        result_label, op = rule(self.label, other.label)
        return fn_operation(self.builder, [self, other], result_label, op)

    def __xor__(self, other: "Var") -> "Var":
        return self._binary(other, self.builder.theory.bitxor)

    def __and__(self, other: "Var") -> "Var":
        return self._binary(other, self.builder.theory.bitand)

    def __or__(self, other: "Var") -> "Var":
        return self._binary(other, self.builder.theory.bitor)

    def __invert__(self) -> "Var":
        result_label, op = self.builder.theory.invert(self.label)
        return fn_operation(self.builder, [self], result_label, op)

    def __repr__(self) -> str:
        return f"Var({self.label!r}, node={self.new_source})"


def fn_operation(builder: Builder, args: Sequence[Var], result_label: Any, op: Any) -> Var:
    """Apply operation ``op`` to ``args``, producing a single new variable."""
    graph = builder.graph
    _, (op_sources, op_targets) = graph.new_operation(
        op, [v.label for v in args], [result_label]
    )
    for var, node_id in zip(args, op_sources):
        graph.unify(var.new_target(), node_id)
    result = Var(builder, result_label)
    graph.unify(op_targets[0], result.new_source)
    return result


def build(
    fn: Callable[[Builder], tuple[Sequence[Var], Sequence[Var]]],
    theory: Theory,
) -> OpenHypergraph:
    """Run ``fn`` against a fresh builder and return the resulting graph.

    ``fn`` returns ``(inputs, outputs)``. The graph's sources are the input
    variables' source nodes; each output variable gets one new target node
    which becomes a graph target.
    """
    builder = Builder(theory)
    inputs, outputs = fn(builder)
    graph = builder.graph
    graph.sources = [v.new_source for v in inputs]
    graph.targets = [v.new_target() for v in outputs]
    return graph


def forget(graph: OpenHypergraph, is_var: Callable[[Any], bool]) -> OpenHypergraph:
    """Replace copy edges with identity wires.

    Every edge whose label satisfies ``is_var`` is dropped and its source
    node is unified with each of its targets. Nodes and boundaries are kept
    as they are; remaining edges are renumbered in order.

    Raises:
        ValueError: If a copy edge does not have exactly one source
    """
    hg = graph.hypergraph
    lefts, rights = list(hg.quotient[0]), list(hg.quotient[1])
    edges: list[Any] = []
    adjacency: list[Hyperedge] = []

    for edge_id, (label, hyperedge) in enumerate(zip(hg.edges, hg.adjacency)):
        if not is_var(label):
            edges.append(label)
            adjacency.append(
                Hyperedge(sources=list(hyperedge.sources), targets=list(hyperedge.targets))
            )
            continue
        if len(hyperedge.sources) != 1:
            raise ValueError(
                f"Copy edge {edge_id} must have exactly one source, "
                f"got {len(hyperedge.sources)}"
            )
        for target in hyperedge.targets:
            lefts.append(hyperedge.sources[0])
            rights.append(target)

    return OpenHypergraph(
        hypergraph=Hypergraph(
            nodes=list(hg.nodes),
            edges=edges,
            adjacency=adjacency,
            quotient=(lefts, rights),
        ),
        sources=list(graph.sources),
        targets=list(graph.targets),
    )
