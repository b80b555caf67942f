"""Tests for TOML config file loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from syntaxkit.cli import build_parser, load_config, resolve_perf_options
from syntaxkit.errors import InvalidInputError


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[performance-test]\niterations = 3\n")
        result = load_config(cfg, tmp_path)
        assert result["performance-test"] == {"iterations": 3}

    def test_auto_discover_syntaxkit_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "syntaxkit.toml"
        cfg.write_text('[performance-test]\nengine = "python"\n')
        result = load_config(None, tmp_path)
        assert result["performance-test"] == {"engine": "python"}


class TestConfigMerge:
    def _resolve(self, tmp_path: Path, *argv: str):
        ns = build_parser().parse_args(["performance-test", *argv])
        return resolve_perf_options(ns, search_dir=tmp_path)

    def test_defaults(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, "--directory", "src", "--iterations", "2")
        assert opts.directory == Path("src")
        assert opts.iterations == 2
        assert opts.incremental is False
        assert opts.extension == ".py"
        assert opts.engine == "python"

    def test_config_values_used(self, tmp_path: Path) -> None:
        (tmp_path / "syntaxkit.toml").write_text(
            "[performance-test]\n"
            'directory = "corpus"\n'
            "iterations = 7\n"
            'extension = ".swift"\n'
            'engine = "pkg:Engine"\n'
            "incremental-parse = true\n"
        )
        opts = self._resolve(tmp_path)
        assert opts.directory == Path("corpus")
        assert opts.iterations == 7
        assert opts.extension == ".swift"
        assert opts.engine == "pkg:Engine"
        assert opts.incremental is True

    def test_cli_overrides_config(self, tmp_path: Path) -> None:
        (tmp_path / "syntaxkit.toml").write_text(
            '[performance-test]\ndirectory = "corpus"\niterations = 7\n'
        )
        opts = self._resolve(tmp_path, "--directory", "other", "--iterations", "1")
        assert opts.directory == Path("other")
        assert opts.iterations == 1

    def test_cli_incremental_overrides_config(self, tmp_path: Path) -> None:
        (tmp_path / "syntaxkit.toml").write_text(
            '[performance-test]\ndirectory = "c"\niterations = 1\nincremental-parse = false\n'
        )
        assert self._resolve(tmp_path, "--incremental-parse").incremental is True

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "bench.toml"
        cfg.write_text('[performance-test]\ndirectory = "d"\niterations = 4\n')
        ns = build_parser().parse_args(["--config", str(cfg), "performance-test"])
        opts = resolve_perf_options(ns, search_dir=tmp_path / "elsewhere")
        assert opts.iterations == 4

    def test_directory_required(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidInputError, match="directory"):
            self._resolve(tmp_path, "--iterations", "1")

    def test_iterations_required(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidInputError, match="iteration count"):
            self._resolve(tmp_path, "--directory", "src")

    def test_boolean_iterations_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "syntaxkit.toml").write_text(
            '[performance-test]\ndirectory = "c"\niterations = true\n'
        )
        with pytest.raises(InvalidInputError):
            self._resolve(tmp_path)
