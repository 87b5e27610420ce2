"""Tests for node directory discovery."""

import logging

import pytest

from nrbuild.errors import ConfigurationError, ValidationWarning
from nrbuild.scanner import (
    ExtensionUnit,
    find_logic_file,
    inspect_unit,
    scan_nodes_directory,
)


class TestInspectUnit:

    def test_complete_unit_is_valid(self, make_node):
        node_dir = make_node("alpha")
        unit, warning = inspect_unit(node_dir)

        assert unit == ExtensionUnit(
            name="alpha",
            ui_path=node_dir / "alpha.html",
            logic_path=node_dir / "alpha.ts",
            valid=True,
        )
        assert warning is None

    def test_missing_logic_file(self, make_node):
        unit, warning = inspect_unit(make_node("beta", logic=None))

        assert unit.valid is False
        assert unit.logic_path is None
        assert isinstance(warning, ValidationWarning)
        assert warning.unit == "beta"
        assert "beta.ts or beta.js" in warning.reason

    def test_missing_html_file(self, make_node):
        unit, warning = inspect_unit(make_node("gamma", html=False))

        assert unit.valid is False
        assert "gamma.html" in warning.reason

    def test_units_are_immutable(self, make_node):
        unit, _ = inspect_unit(make_node("alpha"))
        with pytest.raises(AttributeError):
            unit.valid = False


class TestFindLogicFile:

    def test_prefers_typescript(self, make_node):
        node_dir = make_node("alpha")
        (node_dir / "alpha.js").write_text("")

        assert find_logic_file(node_dir, "alpha") == node_dir / "alpha.ts"

    def test_falls_back_to_javascript(self, make_node):
        node_dir = make_node("alpha", logic=".js")

        assert find_logic_file(node_dir, "alpha") == node_dir / "alpha.js"

    def test_other_names_do_not_count(self, make_node):
        node_dir = make_node("alpha", logic=None)
        (node_dir / "index.ts").write_text("")

        assert find_logic_file(node_dir, "alpha") is None


class TestScanNodesDirectory:

    def test_valid_and_invalid_units(self, temp_dir, make_node):
        make_node("alpha")
        make_node("beta", logic=None)

        result = scan_nodes_directory("nodes", cwd=temp_dir)

        assert [u.name for u in result.valid_units] == ["alpha"]
        assert [u.name for u in result.units] == ["alpha", "beta"]
        assert [w.unit for w in result.warnings] == ["beta"]
        assert result.entries == {"alpha": temp_dir / "nodes" / "alpha" / "alpha.html"}

    def test_warning_is_logged(self, temp_dir, make_node, caplog):
        make_node("alpha")
        make_node("beta", logic=None)

        with caplog.at_level(logging.WARNING, logger="nrbuild.scanner"):
            scan_nodes_directory("nodes", cwd=temp_dir)

        assert "Node beta is missing" in caplog.text

    def test_silent_keeps_unit_reason(self, temp_dir, make_node):
        make_node("beta", html=False)

        result = scan_nodes_directory("nodes", silent=True, cwd=temp_dir)

        assert result.warnings == []
        assert result.units[0].reason == "is missing beta.html"

    def test_silent_records_no_warnings(self, temp_dir, make_node, caplog):
        make_node("alpha")
        make_node("beta", logic=None)

        with caplog.at_level(logging.INFO, logger="nrbuild.scanner"):
            result = scan_nodes_directory("nodes", silent=True, cwd=temp_dir)

        assert result.warnings == []
        assert [u.name for u in result.valid_units] == ["alpha"]
        assert caplog.records == []

    def test_absolute_root(self, temp_dir, make_node):
        make_node("alpha")

        result = scan_nodes_directory(temp_dir / "nodes")

        assert result.root == temp_dir / "nodes"
        assert list(result.entries) == ["alpha"]

    def test_files_in_root_are_ignored(self, temp_dir, make_node):
        make_node("alpha")
        (temp_dir / "nodes" / "README.md").write_text("docs")

        result = scan_nodes_directory("nodes", cwd=temp_dir)

        assert [u.name for u in result.units] == ["alpha"]

    def test_units_are_sorted(self, temp_dir, make_node):
        for name in ("zeta", "alpha", "mid"):
            make_node(name)

        result = scan_nodes_directory("nodes", cwd=temp_dir)

        assert list(result.entries) == ["alpha", "mid", "zeta"]

    def test_missing_root_raises(self, temp_dir):
        with pytest.raises(ConfigurationError, match="does not exist or is not a directory"):
            scan_nodes_directory("nodes", cwd=temp_dir)

    def test_root_is_a_file_raises(self, temp_dir):
        (temp_dir / "nodes").write_text("")

        with pytest.raises(ConfigurationError, match="not a directory"):
            scan_nodes_directory("nodes", cwd=temp_dir)

    def test_root_without_subdirectories_raises(self, temp_dir):
        (temp_dir / "nodes").mkdir()
        (temp_dir / "nodes" / "loose.html").write_text("")

        with pytest.raises(ConfigurationError, match="does not contain any subdirectories"):
            scan_nodes_directory("nodes", cwd=temp_dir)

    def test_silent_never_hides_configuration_errors(self, temp_dir):
        with pytest.raises(ConfigurationError):
            scan_nodes_directory("nodes", silent=True, cwd=temp_dir)

    def test_all_units_invalid_yields_no_entries(self, temp_dir, make_node):
        make_node("alpha", html=False)
        make_node("beta", logic=None)

        result = scan_nodes_directory("nodes", cwd=temp_dir)

        assert result.entries == {}
        assert len(result.warnings) == 2
