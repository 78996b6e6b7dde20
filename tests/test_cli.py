"""Tests for the command-line interface."""

import json

import pytest

from cmd_tokenize.cli import main, option_overrides, parse_args


@pytest.fixture
def isolated(tmp_path):
    """Arguments pointing the CLI at an empty configuration."""
    return ["--config", str(tmp_path / "config.yaml"), "--config-dir", str(tmp_path / "conf.d")]


class TestParseArgs:
    """Tests for argument parsing."""

    def test_split(self):
        """Test the split action."""
        parsed = parse_args(["split", "prog -a"])

        assert parsed.action == "split"
        assert parsed.command == ["prog -a"]

    def test_overrides(self):
        """Test that flags become option overrides."""
        parsed = parse_args(["--windows", "--no-exec", "--lenient", "split", "x"])

        assert option_overrides(parsed) == {
            "use_windows_delimiters": True,
            "first_is_exec": False,
            "throw_on_unbalanced_quote": False,
        }

    def test_no_overrides(self):
        """Test that no flags means no overrides."""
        assert option_overrides(parse_args(["parse", "x"])) == {}

    def test_action_required(self):
        """Test that an action must be given."""
        with pytest.raises(SystemExit):
            parse_args([])


class TestMain:
    """Tests for main()."""

    def test_split(self, isolated, capsys):
        """Test printing the split command as JSON."""
        assert main([*isolated, "split", 'prog -abc "x y"']) == 0

        assert json.loads(capsys.readouterr().out) == ["prog", "-a", "-b", "-c", "x y"]

    def test_split_joins_arguments(self, isolated, capsys):
        """Test that several command arguments are joined with spaces."""
        assert main([*isolated, "split", "--", "prog", "--a=b"]) == 0

        assert json.loads(capsys.readouterr().out) == ["prog", "--a=", "b"]

    def test_split_with_flag(self, isolated, capsys):
        """Test that flags change the options."""
        assert main([*isolated, "--no-unpack", "split", "prog -abc"]) == 0

        assert json.loads(capsys.readouterr().out) == ["prog", "-abc"]

    def test_parse(self, isolated, capsys):
        """Test printing argument metadata."""
        assert main([*isolated, "parse", "prog --name=value"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["input"] == "prog --name=value"
        assert [a["content"] for a in data["arguments"]] == ["prog", "name", "value"]
        assert data["arguments"][1]["is_key"] is True

    def test_escape(self, isolated, capsys):
        """Test escaping each argument."""
        assert main([*isolated, "escape", "it's", "plain"]) == 0

        assert capsys.readouterr().out.splitlines() == ["\"it's\"", "plain"]

    def test_parse_error(self, isolated, capsys):
        """Test that parse errors exit with status 1."""
        assert main([*isolated, "split", 'prog "x']) == 1

        err = capsys.readouterr().err
        assert "Unterminated quote" in err
        assert "CMD_TOKENIZE_UNTERMINATED_QUOTE" in err

    def test_config_file(self, isolated, tmp_path, capsys):
        """Test that options come from the configuration file."""
        (tmp_path / "config.yaml").write_text("options:\n  first_is_exec: false\n")

        assert main([*isolated, "split", "--", "-ab"]) == 0

        assert json.loads(capsys.readouterr().out) == ["-a", "-b"]

    def test_windows_flag_with_format_section(self, isolated, tmp_path, capsys):
        """Test that --windows switches prefixes even when the config sets a format."""
        (tmp_path / "config.yaml").write_text("format:\n  terminator: '---'\n")

        assert main([*isolated, "--windows", "split", "prog /a:b -c --- /d"]) == 0

        assert json.loads(capsys.readouterr().out) == ["prog", "/a:", "b", "-c", "---", "/d"]

    def test_bad_config_file(self, isolated, tmp_path, capsys):
        """Test that an invalid configuration is reported."""
        (tmp_path / "config.yaml").write_text("options:\n  nonsense: true\n")

        assert main([*isolated, "split", "prog"]) == 1
        assert "Error loading configuration" in capsys.readouterr().err
