"""Sample hypergraphs: a copy/multiply pipeline and boolean adder circuits.

The boolean circuits are built with the ``engine.var`` interface. There is
a single generating object, the bit, and the operations are logic gates.
Wires that are reused are fanned out by explicit ``Copy`` gates; use
``forget_copies`` to turn those back into plain wires.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from open_hypergraphs_dot.engine.core import OpenHypergraph
from open_hypergraphs_dot.engine.var import Builder, Theory, Var, build, fn_operation, forget

# ---------------------------------------------------------------------------
# Copy / multiply
# ---------------------------------------------------------------------------


class NodeType(str, Enum):
    A = "A"
    B = "B"


class Operation(str, Enum):
    Copy = "Copy"
    Mul = "Mul"


def copy_multiply() -> OpenHypergraph:
    """``Copy: A -> B B`` feeding ``Mul: B B -> A``, with boundaries set."""
    graph = OpenHypergraph.empty()
    _, (inputs, copies) = graph.new_operation(
        Operation.Copy, [NodeType.A], [NodeType.B, NodeType.B]
    )
    _, (factors, outputs) = graph.new_operation(
        Operation.Mul, [NodeType.B, NodeType.B], [NodeType.A]
    )
    graph.unify(copies[0], factors[0])
    graph.unify(copies[1], factors[1])
    graph.sources = inputs
    graph.targets = outputs
    return graph


# ---------------------------------------------------------------------------
# Boolean circuits
# ---------------------------------------------------------------------------


class Bit(str, Enum):
    Bit = "Bit"


class Gate(str, Enum):
    Not = "Not"
    Xor = "Xor"
    Zero = "Zero"  # 0 -> 1
    Or = "Or"
    And = "And"
    One = "One"
    Copy = "Copy"  # explicit copying of values


class BooleanCircuits(Theory):
    def var(self) -> Gate:
        return Gate.Copy

    def bitxor(self, left: Bit, right: Bit) -> tuple[Bit, Gate]:
        return Bit.Bit, Gate.Xor

    def bitand(self, left: Bit, right: Bit) -> tuple[Bit, Gate]:
        return Bit.Bit, Gate.And

    def bitor(self, left: Bit, right: Bit) -> tuple[Bit, Gate]:
        return Bit.Bit, Gate.Or

    def invert(self, value: Bit) -> tuple[Bit, Gate]:
        return Bit.Bit, Gate.Not


GATE_SYMBOLS = {
    Gate.Not: "!",
    Gate.Xor: "+",
    Gate.Zero: "0",
    Gate.Or: "∨",
    Gate.And: "∧",
    Gate.One: "1",
    Gate.Copy: "Δ",
}


def gate_label(gate: Any) -> str:
    """Short symbol for a gate; accepts ``Gate`` members or their string values."""
    return GATE_SYMBOLS[Gate(gate)]


def zero(builder: Builder) -> Var:
    return fn_operation(builder, [], Bit.Bit, Gate.Zero)


def full_adder(a: Var, b: Var, cin: Var) -> tuple[Var, Var]:
    # a ^ b is used twice, so it is bound once and copied
    a_xor_b = a ^ b
    total = a_xor_b ^ cin
    cout = (a & b) | (cin & a_xor_b)
    return total, cout


def ripple_carry_adder(builder: Builder, a: list[Var], b: list[Var]) -> tuple[list[Var], Var]:
    """Add two little-endian bit vectors; returns the sum bits and the final carry."""
    if len(a) != len(b):
        raise ValueError(f"Input bit arrays must have the same length, got {len(a)} and {len(b)}")
    total = []
    carry = zero(builder)
    for x, y in zip(a, b):
        s, carry = full_adder(x, y, carry)
        total.append(s)
    return total, carry


def n_bit_adder(n: int) -> OpenHypergraph:
    """An ``n``-bit ripple carry adder: ``2n`` inputs, ``n + 1`` outputs."""
    if n < 1:
        raise ValueError(f"Adder width must be at least 1, got: {n}")

    def circuit(builder: Builder) -> tuple[list[Var], list[Var]]:
        xs = [Var(builder, Bit.Bit) for _ in range(2 * n)]
        zs, cout = ripple_carry_adder(builder, xs[:n], xs[n:])
        return xs, [*zs, cout]

    return build(circuit, BooleanCircuits())


def xor() -> OpenHypergraph:
    def circuit(builder: Builder) -> tuple[list[Var], list[Var]]:
        xs = [Var(builder, Bit.Bit), Var(builder, Bit.Bit)]
        return xs, [xs[0] ^ xs[1]]

    return build(circuit, BooleanCircuits())


def forget_copies(graph: OpenHypergraph) -> OpenHypergraph:
    """Replace explicit ``Copy`` gates with wires."""
    return forget(graph, lambda label: label == Gate.Copy)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def _adder(bits: int = 1) -> OpenHypergraph:
    return n_bit_adder(bits)


EXAMPLES: dict[str, Callable[..., OpenHypergraph]] = {
    "copy-multiply": lambda bits=1: copy_multiply(),
    "adder": _adder,
    "xor": lambda bits=1: xor(),
}

# Edge label functions suited to each example
EDGE_LABELS: dict[str, Callable[[Any], str]] = {
    "adder": gate_label,
    "xor": gate_label,
}


def get_example(name: str, *, bits: int = 1, forget_vars: bool = False) -> OpenHypergraph:
    """Build a registered example by name.

    Args:
        name: One of ``EXAMPLES``
        bits: Width for the adder example
        forget_vars: Replace ``Copy`` gates with wires

    Raises:
        KeyError: If the example name is unknown
    """
    if name not in EXAMPLES:
        raise KeyError(f"Unknown example {name!r}; choose from {sorted(EXAMPLES)}")
    graph = EXAMPLES[name](bits=bits)
    if forget_vars:
        graph = forget_copies(graph)
    return graph
