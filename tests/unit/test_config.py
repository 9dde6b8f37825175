#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for CLI configuration discovery, loading and merging."""

import argparse
import json
import logging
from pathlib import Path

import pytest

from mdcard.cli.config import (
    build_options,
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    load_env_config,
    merge_configs,
)
from mdcard.options import MarkdownParserOptions


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at an empty temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.mark.unit
class TestLoadConfigFile:
    """Test the supported config file formats."""

    def test_toml(self, tmp_path: Path) -> None:
        """Test TOML with a nested markdown table."""
        path = tmp_path / ".mdcard.toml"
        path.write_text('template = "book"\nwidth = 420\n\n[markdown]\npreserve_soft_breaks = false\n')
        assert load_config_file(path) == {
            "template": "book",
            "width": 420,
            "markdown": {"preserve_soft_breaks": False},
        }

    def test_yaml(self, tmp_path: Path) -> None:
        """Test YAML config."""
        path = tmp_path / ".mdcard.yml"
        path.write_text("template: dialog\nwatermark: true\n")
        assert load_config_file(path) == {"template": "dialog", "watermark": True}

    def test_empty_yaml(self, tmp_path: Path) -> None:
        """Test that an empty file is an empty config."""
        path = tmp_path / ".mdcard.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path: Path) -> None:
        """Test JSON config."""
        path = tmp_path / ".mdcard.json"
        path.write_text(json.dumps({"pixel_ratio": 3}))
        assert load_config_file(str(path)) == {"pixel_ratio": 3}

    def test_pyproject_section(self, tmp_path: Path) -> None:
        """Test the ``[tool.mdcard]`` table."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.mdcard]\ntemplate = "simple"\n')
        assert load_config_file(path) == {"template": "simple"}

    @pytest.mark.parametrize(
        "filename, content",
        [
            (".mdcard.toml", "template = "),
            (".mdcard.yaml", "template: [unclosed"),
            (".mdcard.json", "{not json"),
            (".mdcard.json", "[1, 2]"),
            ("settings.ini", "template=book"),
        ],
    )
    def test_invalid_files(self, tmp_path: Path, filename: str, content: str) -> None:
        """Test that malformed, non-mapping and unsupported files are rejected."""
        path = tmp_path / filename
        path.write_text(content)
        with pytest.raises(argparse.ArgumentTypeError):
            load_config_file(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a path that does not exist."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")

    def test_directory(self, tmp_path: Path) -> None:
        """Test a path that is not a file."""
        with pytest.raises(argparse.ArgumentTypeError, match="not a file"):
            load_config_file(tmp_path)


@pytest.mark.unit
class TestDiscovery:
    """Test config file discovery."""

    def test_found_in_parent(self, tmp_path: Path) -> None:
        """Test that the search walks up from the start directory."""
        project = tmp_path / "project"
        nested = project / "cards" / "week1"
        nested.mkdir(parents=True)
        config = project / ".mdcard.toml"
        config.write_text('template = "book"\n')
        assert find_config_in_parents(nested) == config.resolve()

    def test_nearest_wins(self, tmp_path: Path) -> None:
        """Test that a closer config shadows one further up."""
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        (tmp_path / "a" / ".mdcard.toml").write_text("")
        closer = nested / ".mdcard.json"
        closer.write_text("{}")
        assert find_config_in_parents(nested) == closer.resolve()

    def test_pyproject_without_section_is_skipped(self, tmp_path: Path) -> None:
        """Test that only pyproject files with a ``[tool.mdcard]`` table count."""
        project = tmp_path / "project"
        project.mkdir()
        (project / "pyproject.toml").write_text('[project]\nname = "x"\n')
        (tmp_path / ".mdcard.yaml").write_text("width: 400\n")
        assert find_config_in_parents(project) == (tmp_path / ".mdcard.yaml").resolve()

    def test_home_fallback(self, tmp_path: Path) -> None:
        """Test that the home directory is searched last."""
        start = tmp_path / "work"
        start.mkdir()
        home = tmp_path / "home"
        home.mkdir()
        config = home / ".mdcard.yaml"
        config.write_text("template: simple\n")
        assert discover_config_file(start, home=home) == config

    def test_nothing_found(self, tmp_path: Path) -> None:
        """Test that discovery returns None without any config."""
        start = tmp_path / "work"
        start.mkdir()
        home = tmp_path / "home"
        home.mkdir()
        assert discover_config_file(start, home=home) is None


@pytest.mark.unit
class TestEnvironment:
    """Test ``MDCARD_*`` environment variables."""

    def test_typed_values(self) -> None:
        """Test conversion by option type."""
        environ = {
            "MDCARD_TEMPLATE": "book",
            "MDCARD_WIDTH": "420",
            "MDCARD_PIXEL_RATIO": "1.5",
            "MDCARD_WATERMARK": "Yes",
            "MDCARD_MARKDOWN_PRESERVE_SOFT_BREAKS": "off",
            "MDCARD_FONT_PATHS": "/ignored",
            "UNRELATED": "1",
        }
        assert load_env_config(environ) == {
            "template": "book",
            "width": 420,
            "pixel_ratio": 1.5,
            "watermark": True,
            "markdown": {"preserve_soft_breaks": False},
        }

    @pytest.mark.parametrize("name, value", [("MDCARD_WATERMARK", "maybe"), ("MDCARD_WIDTH", "wide")])
    def test_invalid_values(self, name: str, value: str) -> None:
        """Test that unconvertible values name the variable."""
        with pytest.raises(argparse.ArgumentTypeError, match=name):
            load_env_config({name: value})

    def test_empty_environment(self) -> None:
        """Test that no variables means no overrides."""
        assert load_env_config({}) == {}


@pytest.mark.unit
class TestPriority:
    """Test merging and the final option objects."""

    def test_merge_is_deep(self) -> None:
        """Test nested merging."""
        merged = merge_configs({"markdown": {"a": 1}, "width": 300}, {"markdown": {"b": 2}, "width": 400})
        assert merged == {"markdown": {"a": 1, "b": 2}, "width": 400}

    def test_environment_overrides_file(self, tmp_path: Path) -> None:
        """Test that environment values win over the explicit file."""
        path = tmp_path / "cfg.toml"
        path.write_text('template = "book"\nwidth = 420\n')
        config = load_config_with_priority(str(path), environ={"MDCARD_WIDTH": "500"})
        assert config == {"template": "book", "width": 500}

    def test_config_path_from_environment(self, tmp_path: Path) -> None:
        """Test ``MDCARD_CONFIG``."""
        path = tmp_path / "cfg.yaml"
        path.write_text("title: Deck\n")
        assert load_config_with_priority(environ={"MDCARD_CONFIG": str(path)}) == {"title": "Deck"}

    def test_discovered_file(self, tmp_path: Path, isolated_home: Path) -> None:
        """Test falling back to discovery."""
        project = tmp_path / "project"
        project.mkdir()
        (project / ".mdcard.json").write_text('{"template": "dialog"}')
        assert load_config_with_priority(environ={}, start_dir=project) == {"template": "dialog"}

    def test_no_configuration(self, tmp_path: Path, isolated_home: Path) -> None:
        """Test that nothing configured is an empty mapping."""
        empty = tmp_path / "empty"
        empty.mkdir()
        assert load_config_with_priority(environ={}, start_dir=empty) == {}

    def test_build_options_overrides(self) -> None:
        """Test that command-line values beat config values and None is ignored."""
        config = {"template": "book", "width": 420, "pixel-ratio": 3, "markdown": {"preserve_soft_breaks": False}}
        options, parser_options = build_options(config, {"width": 500, "title": None})
        assert options.template == "book"
        assert options.width == 500
        assert options.pixel_ratio == 3
        assert options.title == "Q&A"
        assert parser_options.preserve_soft_breaks is False

    def test_font_paths_table(self) -> None:
        """Test font overrides from a config table."""
        options, _ = build_options({"font_paths": {"sans-serif": "/fonts/cjk.ttc"}})
        assert options.font_map == {"sans-serif": "/fonts/cjk.ttc"}

    def test_unknown_keys_are_warned_about(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that typos are reported, not fatal."""
        with caplog.at_level(logging.WARNING, logger="mdcard.cli.config"):
            options, parser_options = build_options({"temlate": "book", "markdown": {"bogus": 1}})
        assert options.template == "default"
        assert parser_options.preserve_soft_breaks is True
        assert "temlate" in caplog.text
        assert "bogus" in caplog.text

    def test_block_separator_key_is_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a configured block separator is not passed to the parser."""
        with caplog.at_level(logging.WARNING, logger="mdcard.cli.config"):
            _options, parser_options = build_options({"markdown": {"block_separator": " injected\n\n"}})
        assert parser_options == MarkdownParserOptions()
        assert "block_separator" in caplog.text

    @pytest.mark.parametrize(
        "config",
        [{"width": 0}, {"font_paths": "/fonts/cjk.ttc"}, {"pixel_ratio": -1}],
    )
    def test_invalid_values(self, config: dict) -> None:
        """Test that bad values become argument errors."""
        with pytest.raises(argparse.ArgumentTypeError):
            build_options(config)
