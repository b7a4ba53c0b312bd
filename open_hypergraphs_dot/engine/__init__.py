from open_hypergraphs_dot.engine.core import EdgeId, Hyperedge, Hypergraph, NodeId, OpenHypergraph
from open_hypergraphs_dot.engine.dot import DotGraph
from open_hypergraphs_dot.engine.generate import generate_dot, generate_dot_with
from open_hypergraphs_dot.engine.persistence import load_graph, save_graph
from open_hypergraphs_dot.engine.var import Builder, Theory, Var, build, fn_operation, forget

__all__ = [
    "NodeId",
    "EdgeId",
    "Hyperedge",
    "Hypergraph",
    "OpenHypergraph",
    "DotGraph",
    "generate_dot",
    "generate_dot_with",
    "save_graph",
    "load_graph",
    "Builder",
    "Theory",
    "Var",
    "build",
    "fn_operation",
    "forget",
]
