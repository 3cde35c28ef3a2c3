"""Tests for CLI commands."""

import pytest
from click.testing import CliRunner

from desmos_graph.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    from desmos_graph.config import hierarchy

    monkeypatch.setattr(hierarchy, "_GLOBAL_CONFIG_PATH", tmp_path / "none.yaml")
    monkeypatch.chdir(tmp_path)
    for env_key in hierarchy._ENV_MAP:
        monkeypatch.delenv(env_key, raising=False)
    return tmp_path


@pytest.fixture
def graph_file(isolated_env, sample_source):
    path = isolated_env / "graph.desmos"
    path.write_text(sample_source)
    return path


class TestCLIGroup:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "desmos-graph" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0


class TestParseCommand:
    def test_shows_fingerprint_and_equations(self, runner, graph_file):
        from desmos_graph.dsl.parser import parse

        spec = parse(graph_file.read_text())
        result = runner.invoke(cli, ["parse", str(graph_file)])
        assert result.exit_code == 0
        assert spec.fingerprint in result.output
        assert "Equations" in result.output
        assert "DASHED" in result.output

    def test_parse_error_exits_1(self, runner, isolated_env):
        path = isolated_env / "bad.desmos"
        path.write_text("x=1|SOLID|SOLID")
        result = runner.invoke(cli, ["parse", str(path)])
        assert result.exit_code == 1

    def test_nonexistent_file(self, runner):
        result = runner.invoke(cli, ["parse", "nonexistent_file.desmos"])
        assert result.exit_code != 0

    def test_non_utf8_file_exits_1(self, runner, isolated_env):
        path = isolated_env / "latin1.desmos"
        path.write_bytes("y=x|x>\xe9".encode("latin-1"))
        result = runner.invoke(cli, ["parse", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_verbose_flag(self, runner, graph_file):
        result = runner.invoke(cli, ["parse", "-vv", str(graph_file)])
        assert result.exit_code == 0


class TestPageCommand:
    def test_prints_page(self, runner, graph_file):
        result = runner.invoke(cli, ["page", str(graph_file)])
        assert result.exit_code == 0
        assert "Desmos.GraphingCalculator" in result.output

    def test_writes_output_file(self, runner, graph_file, isolated_env):
        out = isolated_env / "out" / "graph.html"
        result = runner.invoke(cli, ["page", str(graph_file), "-o", str(out)])
        assert result.exit_code == 0
        assert out.exists()
        assert "asyncScreenshot" in out.read_text()

    def test_origin_option(self, runner, graph_file):
        result = runner.invoke(cli, ["page", str(graph_file), "--origin", "https://host.example"])
        assert 'const origin = "https://host.example";' in result.output

    def test_verbose_flag(self, runner, graph_file):
        result = runner.invoke(cli, ["page", "-v", str(graph_file)])
        assert result.exit_code == 0

    def test_non_utf8_file_exits_1(self, runner, isolated_env):
        path = isolated_env / "latin1.desmos"
        path.write_bytes(b"y=\xff")
        result = runner.invoke(cli, ["page", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)


class TestCacheCommands:
    def test_cache_help(self, runner):
        result = runner.invoke(cli, ["cache", "--help"])
        assert result.exit_code == 0
        assert "info" in result.output
        assert "stats" in result.output

    def test_cache_info_memory(self, runner, graph_file):
        result = runner.invoke(cli, ["cache", "info", str(graph_file)])
        assert result.exit_code == 0
        assert "Cache Entry" in result.output
        assert "memory" in result.output

    def test_cache_info_filesystem_present(self, runner, graph_file, isolated_env):
        from desmos_graph.dsl.parser import parse

        spec = parse(graph_file.read_text())
        cache_dir = isolated_env / "cache"
        cache_dir.mkdir()
        (cache_dir / f"desmos-graph-{spec.fingerprint}.png").write_bytes(b"png")

        result = runner.invoke(
            cli,
            ["cache", "info", str(graph_file), "--location", "filesystem", "--directory", "cache", "--root", str(isolated_env)],
        )
        assert result.exit_code == 0
        assert "filesystem" in result.output
        assert "Present" in result.output

    def test_cache_stats(self, runner, isolated_env):
        (isolated_env / "desmos-graph-abc.png").write_bytes(b"png")
        result = runner.invoke(cli, ["cache", "stats", "--directory", str(isolated_env)])
        assert result.exit_code == 0
        assert "Cache Statistics" in result.output

    def test_cache_commands_accept_verbose(self, runner, graph_file, isolated_env):
        result = runner.invoke(cli, ["cache", "info", "-v", str(graph_file)])
        assert result.exit_code == 0
        result = runner.invoke(cli, ["cache", "stats", "-v", "--directory", str(isolated_env)])
        assert result.exit_code == 0
