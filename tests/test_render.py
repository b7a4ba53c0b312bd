"""Tests for DOT file output and GraphViz invocation."""

import subprocess

import pytest

from open_hypergraphs_dot import (
    GraphvizNotFoundError,
    RenderError,
    generate_dot,
    hypergraph_to_dot,
    render_dot,
    render_image,
    write_dot,
)
from open_hypergraphs_dot import render as render_mod


class _FakeRun:
    """Records subprocess.run calls and returns a canned result."""

    def __init__(self, returncode=0, stderr=""):
        self.calls = []
        self.returncode = returncode
        self.stderr = stderr

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, self.returncode, stdout="", stderr=self.stderr)


@pytest.fixture()
def fake_run(monkeypatch):
    fake = _FakeRun()
    monkeypatch.setattr(render_mod.subprocess, "run", fake)
    return fake


class TestDotText:
    def test_hypergraph_to_dot_matches_two_step(self, copy_mul):
        assert hypergraph_to_dot(copy_mul) == render_dot(generate_dot(copy_mul))

    def test_write_dot(self, copy_mul, tmp_path):
        path = write_dot(generate_dot(copy_mul), tmp_path / "out" / "g.dot")
        assert path.read_text(encoding="utf-8").startswith("digraph G {")

    def test_write_dot_accepts_text(self, tmp_path):
        path = write_dot("digraph G {\n}\n", tmp_path / "g.dot")
        assert path.read_text(encoding="utf-8") == "digraph G {\n}\n"


class TestFindDotBinary:
    def test_env_override(self, monkeypatch, tmp_path):
        binary = tmp_path / "mydot"
        binary.write_text("")
        monkeypatch.setenv(render_mod.DOT_BINARY_ENV, str(binary))
        monkeypatch.setattr(render_mod.shutil, "which", lambda name: None)
        assert render_mod.find_dot_binary() == str(binary)

    def test_env_missing_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv(render_mod.DOT_BINARY_ENV, str(tmp_path / "nope"))
        monkeypatch.setattr(render_mod.shutil, "which", lambda name: None)
        assert render_mod.find_dot_binary() is None

    def test_path_lookup(self, monkeypatch):
        monkeypatch.delenv(render_mod.DOT_BINARY_ENV, raising=False)
        monkeypatch.setattr(render_mod.shutil, "which", lambda name: f"/usr/bin/{name}")
        assert render_mod.find_dot_binary() == "/usr/bin/dot"


class TestRenderImage:
    def test_invokes_dot(self, fake_run, copy_mul, tmp_path):
        out = render_image(generate_dot(copy_mul), tmp_path / "g.png", dot_binary="/bin/dot")
        assert out == tmp_path / "g.png"
        cmd, kwargs = fake_run.calls[0]
        assert cmd == ["/bin/dot", "-Tpng", "-o", str(tmp_path / "g.png")]
        assert kwargs["input"].startswith("digraph G {")

    def test_svg_format(self, fake_run, tmp_path):
        render_image("digraph G {\n}\n", tmp_path / "g.svg", "svg", dot_binary="dot")
        assert fake_run.calls[0][0][1] == "-Tsvg"

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported"):
            render_image("digraph G {}", tmp_path / "g.bmp", "bmp", dot_binary="dot")

    def test_missing_binary(self, monkeypatch, tmp_path):
        monkeypatch.setattr(render_mod, "find_dot_binary", lambda: None)
        with pytest.raises(GraphvizNotFoundError):
            render_image("digraph G {}", tmp_path / "g.png")

    def test_failure_raises_render_error(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            render_mod.subprocess, "run", _FakeRun(returncode=1, stderr="syntax error\n")
        )
        with pytest.raises(RenderError) as exc_info:
            render_image("digraph {", tmp_path / "g.png", dot_binary="dot")
        assert exc_info.value.returncode == 1
        assert exc_info.value.stderr == "syntax error"

    def test_os_error_is_not_found(self, monkeypatch, tmp_path):
        def boom(cmd, **kwargs):
            raise FileNotFoundError(cmd[0])

        monkeypatch.setattr(render_mod.subprocess, "run", boom)
        with pytest.raises(GraphvizNotFoundError, match="Could not execute"):
            render_image("digraph G {}", tmp_path / "g.png", dot_binary="/missing/dot")
