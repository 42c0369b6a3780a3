"""
Tests for confmgr.cli module.

Tests the command-line interface including:
- validate: valid, warning-only and failing files
- show: text and YAML output, prefix filtering, layered files
- get: typed lookups with defaults
- Exit codes
"""

from __future__ import annotations

import pytest
import yaml

from confmgr.cli import main


def run_cli(argv: list[str]) -> int:
    """Run the CLI and return its exit code."""
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestValidateCommand:
    """Tests for 'confmgr validate'."""

    def test_valid_file(self, create_config_file, sample_config_text, capsys):
        """Test validating a good file."""
        path = create_config_file("worldserver.conf", sample_config_text)

        assert run_cli(["validate", str(path)]) == 0

        out = capsys.readouterr().out
        assert "VALID" in out
        assert "Options:     5" in out

    def test_warnings_do_not_fail(self, create_config_file, capsys):
        """Test that malformed lines are listed but still pass."""
        path = create_config_file("warn.conf", "A = 1\nbroken\nA = 2\n")

        assert run_cli(["validate", str(path)]) == 0

        out = capsys.readouterr().out
        assert "Warnings (2):" in out
        assert "Duplicate key name 'A'" in out

    def test_empty_file_fails(self, create_config_file, capsys):
        """Test that a file without options fails validation."""
        path = create_config_file("empty.conf", "# nothing\n")

        assert run_cli(["validate", str(path)]) == 1

        out = capsys.readouterr().out
        assert "[FAILED] Empty file" in out


class TestShowCommand:
    """Tests for 'confmgr show'."""

    def test_text_output_sorted(self, create_config_file, capsys):
        """Test that options print as sorted key = value lines."""
        path = create_config_file("a.conf", "b = 2\na = 1\n")

        assert run_cli(["show", str(path)]) == 0

        assert capsys.readouterr().out == "a = 1\nb = 2\n"

    def test_additional_and_prefix(self, create_config_file, capsys):
        """Test layering and prefix filtering."""
        base = create_config_file("base.conf", "db.host = x\ndb.port = 5\nother = y\n")
        extra = create_config_file("extra.conf", "db.port = 6\n")

        code = run_cli(["show", str(base), "--additional", str(extra), "--prefix", "db."])

        assert code == 0
        assert capsys.readouterr().out == "db.host = x\ndb.port = 6\n"

    def test_yaml_output(self, create_config_file, capsys):
        """Test YAML output parses back to the option mapping."""
        path = create_config_file("a.conf", "Port = 8085\nMOTD = hi there\n")

        assert run_cli(["show", str(path), "--format", "yaml"]) == 0

        data = yaml.safe_load(capsys.readouterr().out)
        assert data == {"MOTD": "hi there", "Port": "8085"}

    def test_missing_file(self, tmp_test_dir, capsys):
        """Test that a missing initial file exits with 1."""
        assert run_cli(["show", str(tmp_test_dir / "missing.conf")]) == 1
        assert "could not load configuration file" in capsys.readouterr().out

    def test_bad_additional_file(self, create_config_file, tmp_test_dir, capsys):
        """Test that a failing additional file exits with 1."""
        base = create_config_file("base.conf", "A = 1\n")

        code = run_cli(["show", str(base), "--additional", str(tmp_test_dir / "nope.conf")])

        assert code == 1
        assert "could not load additional file" in capsys.readouterr().out


class TestGetCommand:
    """Tests for 'confmgr get'."""

    def test_get_string(self, create_config_file, capsys):
        path = create_config_file("a.conf", 'MOTD = "Welcome"\n')

        assert run_cli(["get", str(path), "MOTD"]) == 0
        assert capsys.readouterr().out == "Welcome\n"

    def test_get_int_default(self, create_config_file, capsys):
        """Test that a missing typed option prints the default."""
        path = create_config_file("a.conf", "Other = 1\n")

        assert run_cli(["get", str(path), "Port", "--type", "int", "--default", "8085"]) == 0
        assert capsys.readouterr().out == "8085\n"

    def test_get_bool(self, create_config_file, capsys):
        """Test that booleans print in 1/0 form."""
        path = create_config_file("a.conf", "Console.Enable = false\n")

        assert run_cli(["get", str(path), "Console.Enable", "--type", "bool", "--default", "1"]) == 0
        assert capsys.readouterr().out == "0\n"

    def test_invalid_default(self, create_config_file, capsys):
        """Test that a default not matching --type is rejected."""
        path = create_config_file("a.conf", "Port = 1\n")

        assert run_cli(["get", str(path), "Port", "--type", "int", "--default", "abc"]) == 1
        assert "is not a valid int" in capsys.readouterr().out

    def test_get_typed_without_default(self, create_config_file, capsys):
        """Test that a typed lookup works when --default is omitted."""
        path = create_config_file("a.conf", "Port = 8085\n")

        assert run_cli(["get", str(path), "Port", "--type", "int"]) == 0
        assert capsys.readouterr().out == "8085\n"

    def test_get_typed_without_default_missing(self, create_config_file, capsys):
        """Test that a missing option without --default exits with 1."""
        path = create_config_file("a.conf", "Other = 1\n")

        assert run_cli(["get", str(path), "Port", "--type", "int"]) == 1
        assert "option 'Port' not found" in capsys.readouterr().out

    def test_get_typed_without_default_invalid(self, create_config_file, capsys):
        """Test that an unconvertible option without --default exits with 1."""
        path = create_config_file("a.conf", "Console.Enable = maybe\n")

        assert run_cli(["get", str(path), "Console.Enable", "--type", "bool"]) == 1
        assert "is not a valid bool" in capsys.readouterr().out

    def test_get_string_without_default(self, create_config_file, capsys):
        """Test that a missing string option prints an empty line."""
        path = create_config_file("a.conf", "Other = 1\n")

        assert run_cli(["get", str(path), "MOTD"]) == 0
        assert capsys.readouterr().out == "\n"
