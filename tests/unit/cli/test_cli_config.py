"""Unit tests for texctx CLI configuration management.

This module tests the configuration system including file discovery, loading
of every supported format, priority handling and option resolution.
"""

import argparse
import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from texctx.cli.config import (
    ResolvedOptions,
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    resolve_options,
)
from texctx.exceptions import ValidationError


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery functionality."""

    def test_discover_config_in_cwd(self, tmp_path):
        """Test discovering a config file in the working directory."""
        config_file = tmp_path / ".texctx.toml"
        config_file.write_text("[latex]\nstrict_mode = true\n")

        with patch("pathlib.Path.cwd", return_value=tmp_path):
            discovered = discover_config_file()

        assert discovered is not None
        assert discovered.resolve() == config_file.resolve()

    def test_discover_config_in_parent(self, tmp_path):
        """Test that parent directories are searched."""
        config_file = tmp_path / ".texctx.yaml"
        config_file.write_text("latex:\n  strict_mode: true\n")
        nested = tmp_path / "chapters" / "intro"
        nested.mkdir(parents=True)

        assert find_config_in_parents(nested) == config_file.resolve()

    def test_discover_config_in_home(self, tmp_path):
        """Test falling back to the home directory."""
        home = tmp_path / "home"
        work = tmp_path / "work"
        home.mkdir()
        work.mkdir()
        config_file = home / ".texctx.json"
        config_file.write_text('{"latex": {"strict_mode": true}}')

        with patch("pathlib.Path.cwd", return_value=work):
            with patch("pathlib.Path.home", return_value=home):
                discovered = discover_config_file()

        assert discovered == config_file

    def test_toml_preferred_over_json(self, tmp_path):
        """Test that TOML wins when several config files exist."""
        (tmp_path / ".texctx.json").write_text("{}")
        toml_file = tmp_path / ".texctx.toml"
        toml_file.write_text("")

        assert find_config_in_parents(tmp_path) == toml_file.resolve()

    def test_pyproject_needs_tool_section(self, tmp_path):
        """Test that pyproject.toml only counts with a [tool.texctx] table."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "paper"\n')
        nested = tmp_path / "src"
        nested.mkdir()

        assert find_config_in_parents(nested) != pyproject.resolve()

        pyproject.write_text('[project]\nname = "paper"\n\n[tool.texctx.latex]\nstrict_mode = true\n')
        assert find_config_in_parents(nested) == pyproject.resolve()


@pytest.mark.unit
@pytest.mark.cli
class TestConfigLoading:
    """Test loading of the supported configuration formats."""

    def test_load_toml(self, tmp_path):
        """Test loading a TOML config."""
        path = tmp_path / ".texctx.toml"
        path.write_text('[math_toggle]\nindent_unit = "  "\n')

        assert load_config_file(path) == {"math_toggle": {"indent_unit": "  "}}

    def test_load_yaml(self, tmp_path):
        """Test loading a YAML config."""
        path = tmp_path / "texctx.yml"
        path.write_text(yaml.safe_dump({"context": {"max_hops": 10}}))

        assert load_config_file(path) == {"context": {"max_hops": 10}}

    def test_load_empty_yaml(self, tmp_path):
        """Test that an empty YAML file is an empty config."""
        path = tmp_path / "texctx.yaml"
        path.write_text("")

        assert load_config_file(path) == {}

    def test_load_json(self, tmp_path):
        """Test loading a JSON config."""
        path = tmp_path / "texctx.json"
        path.write_text(json.dumps({"inspections": {"missing_label_minimum_level": "section"}}))

        assert load_config_file(str(path)) == {"inspections": {"missing_label_minimum_level": "section"}}

    def test_load_pyproject_section(self, tmp_path):
        """Test loading the [tool.texctx] table of pyproject.toml."""
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.texctx.latex]\nstrict_mode = true\n")

        assert load_config_file(path) == {"latex": {"strict_mode": True}}

    @pytest.mark.parametrize(
        "name,content",
        [
            ("bad.toml", "[latex\n"),
            ("bad.json", "{not json"),
            ("list.json", "[1, 2]"),
            ("bad.yaml", "a: [1, 2\n"),
            ("config.ini", "[latex]"),
        ],
    )
    def test_invalid_files(self, tmp_path, name, content):
        """Test that unreadable or malformed configs are rejected."""
        path = tmp_path / name
        path.write_text(content)

        with pytest.raises(argparse.ArgumentTypeError):
            load_config_file(path)

    def test_missing_file(self, tmp_path):
        """Test that a missing file is rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "missing.toml")

    def test_directory_is_not_a_config(self, tmp_path):
        """Test that directories are rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="not a file"):
            load_config_file(tmp_path)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigPriority:
    """Test configuration source priority."""

    def test_explicit_path_wins(self, tmp_path):
        """Test that --config beats the environment variable."""
        explicit = tmp_path / "explicit.toml"
        explicit.write_text("[latex]\nstrict_mode = true\n")
        env = tmp_path / "env.toml"
        env.write_text("[latex]\nstrict_mode = false\n")

        assert load_config_with_priority(str(explicit), str(env)) == {"latex": {"strict_mode": True}}

    def test_env_var_before_discovery(self, tmp_path):
        """Test that the environment variable beats discovered files."""
        (tmp_path / ".texctx.toml").write_text("[context]\nmax_hops = 1\n")
        env = tmp_path / "env.json"
        env.write_text('{"context": {"max_hops": 2}}')

        with patch("pathlib.Path.cwd", return_value=tmp_path):
            assert load_config_with_priority(None, str(env)) == {"context": {"max_hops": 2}}
            assert load_config_with_priority(None, None) == {"context": {"max_hops": 1}}

    def test_nothing_found(self):
        """Test that no config yields an empty mapping."""
        with patch("texctx.cli.config.discover_config_file", return_value=None):
            assert load_config_with_priority() == {}


@pytest.mark.unit
@pytest.mark.cli
class TestResolveOptions:
    """Test turning config mappings into options."""

    def test_defaults(self):
        """Test that an empty config resolves to the defaults."""
        assert resolve_options({}) == ResolvedOptions()

    def test_sections(self):
        """Test that each section configures its options class."""
        options = resolve_options(
            {
                "context": {"extra-math-environments": ["dmath"]},
                "math-toggle": {"indent_unit": "\t"},
                "latex": {"strict_mode": True},
            }
        )

        assert options.context.extra_math_environments == ("dmath",)
        assert options.math_toggle.indent_unit == "\t"
        assert options.latex.strict_mode is True
        assert options.inspections.missing_label_minimum_level == "subsection"

    def test_unknown_section(self, caplog):
        """Test that unknown sections are skipped with a warning."""
        assert resolve_options({"pdf": {"pages": [1]}}) == ResolvedOptions()
        assert "pdf" in caplog.text

    def test_section_must_be_table(self):
        """Test that scalar sections are rejected."""
        with pytest.raises(argparse.ArgumentTypeError):
            resolve_options({"latex": True})

    def test_invalid_value(self):
        """Test that invalid values raise ValidationError."""
        with pytest.raises(ValidationError):
            resolve_options({"context": {"max_hops": 0}})


def test_discovered_path_is_absolute(tmp_path):
    """Test that discovery returns resolved paths."""
    (tmp_path / ".texctx.toml").write_text("")

    found = find_config_in_parents(tmp_path)

    assert isinstance(found, Path)
    assert found.is_absolute()
