"""Shared fixtures for open-hypergraphs-dot tests."""

import pytest

from open_hypergraphs_dot import OpenHypergraph
from open_hypergraphs_dot.examples import copy_multiply, n_bit_adder


@pytest.fixture()
def empty_graph():
    """Fresh open hypergraph with nothing in it."""
    return OpenHypergraph.empty()


@pytest.fixture()
def copy_mul():
    """Copy feeding Mul, with boundaries.

    Nodes (6):
        n_0 (A)  Copy source, graph source
        n_1, n_2 (B)  Copy targets
        n_3, n_4 (B)  Mul sources
        n_5 (A)  Mul target, graph target

    Edges (2):
        e_0 Copy: [0] -> [1, 2]
        e_1 Mul:  [3, 4] -> [5]

    Quotient: (1, 3), (2, 4)
    """
    return copy_multiply()


@pytest.fixture()
def adder():
    """One-bit ripple carry adder built with the var interface."""
    return n_bit_adder(1)


@pytest.fixture()
def tmp_json_path(tmp_path):
    """Temporary JSON file path."""
    return str(tmp_path / "graph.json")
