"""Tests for the open-hypergraphs-dot command line."""

import json

import pytest
from click.testing import CliRunner

from open_hypergraphs_dot import hypergraph_to_dot, save_graph
from open_hypergraphs_dot import render as render_mod
from open_hypergraphs_dot.cli.main import cli
from open_hypergraphs_dot.engine import Hyperedge, Hypergraph, OpenHypergraph


@pytest.fixture()
def runner():
    return CliRunner()


@pytest.fixture()
def graph_file(copy_mul, tmp_json_path):
    save_graph(copy_mul, tmp_json_path)
    return tmp_json_path


@pytest.fixture()
def invalid_file(tmp_json_path):
    g = OpenHypergraph(
        hypergraph=Hypergraph(nodes=["A"], edges=["f"], adjacency=[Hyperedge(targets=[3])])
    )
    save_graph(g, tmp_json_path)
    return tmp_json_path


class TestRender:
    def test_dot_to_stdout(self, runner, graph_file, copy_mul):
        result = runner.invoke(cli, ["render", graph_file])
        assert result.exit_code == 0, result.output
        assert result.output == hypergraph_to_dot(copy_mul)

    def test_dot_to_file(self, runner, graph_file, tmp_path):
        out = tmp_path / "g.dot"
        result = runner.invoke(cli, ["render", graph_file, "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8").startswith("digraph G {")

    def test_dot_to_file_creates_parent_dirs(self, runner, graph_file, tmp_path):
        out = tmp_path / "sub" / "out.dot"
        result = runner.invoke(cli, ["render", graph_file, "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8").startswith("digraph G {")

    def test_dot_to_unwritable_path(self, runner, graph_file, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        result = runner.invoke(cli, ["render", graph_file, "-o", str(blocker / "out.dot")])
        assert result.exit_code == 1
        assert "Cannot write" in result.output
        assert not isinstance(result.exception, OSError)

    def test_options(self, runner, graph_file):
        result = runner.invoke(
            cli,
            ["render", graph_file, "--orientation", "LR", "--theme", "light", "--hide-node-labels"],
        )
        assert result.exit_code == 0, result.output
        assert "rankdir=LR;" in result.output
        assert "bgcolor=white;" in result.output
        assert 'xlabel="A"' not in result.output

    def test_quotient(self, runner, graph_file):
        result = runner.invoke(cli, ["render", graph_file, "--quotient"])
        assert result.exit_code == 0, result.output
        assert "n_4" not in result.output
        assert "style=dotted" not in result.output

    def test_image_requires_output(self, runner, graph_file):
        result = runner.invoke(cli, ["render", graph_file, "--format", "png"])
        assert result.exit_code != 0
        assert "--output is required" in result.output

    def test_image_render(self, runner, graph_file, tmp_path, monkeypatch):
        calls = []

        def fake_render_image(text, output, fmt):
            calls.append((text, output, fmt))
            return output

        monkeypatch.setattr("open_hypergraphs_dot.cli.main.render_image", fake_render_image)
        out = str(tmp_path / "g.svg")
        result = runner.invoke(cli, ["render", graph_file, "--format", "svg", "-o", out])
        assert result.exit_code == 0, result.output
        assert calls[0][1:] == (out, "svg")

    def test_graphviz_missing(self, runner, graph_file, tmp_path, monkeypatch):
        monkeypatch.setattr(render_mod, "find_dot_binary", lambda: None)
        result = runner.invoke(
            cli, ["render", graph_file, "--format", "png", "-o", str(tmp_path / "g.png")]
        )
        assert result.exit_code == 1
        assert "GraphViz 'dot' not found" in result.output

    def test_invalid_graph(self, runner, invalid_file):
        result = runner.invoke(cli, ["render", invalid_file])
        assert result.exit_code == 1
        assert "invalid hypergraph" in result.output

    def test_bad_json(self, runner, tmp_json_path):
        with open(tmp_json_path, "w", encoding="utf-8") as f:
            f.write("[")
        result = runner.invoke(cli, ["render", tmp_json_path])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


class TestExample:
    def test_adder_uses_gate_symbols(self, runner):
        result = runner.invoke(cli, ["example", "adder"])
        assert result.exit_code == 0, result.output
        assert "Δ" in result.output
        assert "∨" in result.output

    def test_forget_removes_copies(self, runner):
        result = runner.invoke(cli, ["example", "adder", "--forget"])
        assert result.exit_code == 0, result.output
        assert "Δ" not in result.output

    def test_save(self, runner, tmp_json_path):
        result = runner.invoke(cli, ["example", "copy-multiply", "--save", tmp_json_path])
        assert result.exit_code == 0, result.output
        with open(tmp_json_path, encoding="utf-8") as f:
            assert json.load(f)["edges"] == ["Copy", "Mul"]

    def test_saved_graph_renders_identically(self, runner, tmp_json_path):
        built = runner.invoke(cli, ["example", "adder", "--save", tmp_json_path])
        assert built.exit_code == 0, built.output
        reloaded = runner.invoke(cli, ["render", tmp_json_path])
        assert reloaded.exit_code == 0, reloaded.output
        assert 'xlabel="Bit"' in reloaded.output
        assert 'BIT' not in reloaded.output

    def test_unknown_name(self, runner):
        result = runner.invoke(cli, ["example", "multiplier"])
        assert result.exit_code == 2

    def test_bits_must_be_positive(self, runner):
        result = runner.invoke(cli, ["example", "adder", "--bits", "0"])
        assert result.exit_code == 2


class TestValidate:
    def test_valid(self, runner, graph_file):
        result = runner.invoke(cli, ["validate", graph_file])
        assert result.exit_code == 0
        assert "Hypergraph is valid." in result.output

    def test_invalid(self, runner, invalid_file):
        result = runner.invoke(cli, ["validate", invalid_file])
        assert result.exit_code == 1
        assert "ERROR: Edge 0 references non-existent nodes: [3]" in result.output

    def test_json_report(self, runner, graph_file):
        result = runner.invoke(cli, ["validate", graph_file, "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"valid": True, "errors": [], "warnings": []}
