"""
Integration tests for the countdown CLI.

Tests the full command path with Click's CliRunner:
- show: configured entries rendered in board order, tag filter applied
- add / list-local / remove: local deadline management
- tags / toggle: persisted tag selection
"""
import pytest
from click.testing import CliRunner

from countdown.cli import cli

NOW_ARG = "2026-03-01T12:00:30+00:00"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def base_args(tmp_dir, data_dir):
    """Global options pointing every path into the temporary directory."""
    return [
        "--log-dir", str(tmp_dir / "logs"),
        "--data-dir", str(data_dir),
        "--store", str(tmp_dir / "var" / "state.db"),
        "--namespace", "ddl.test",
    ]


def invoke(runner, base_args, *args):
    return runner.invoke(cli, [*base_args, *args], obj={})


def positions(output, *titles):
    return [output.index(title) for title in titles]


class TestShowCommand:
    """Tests for show command."""

    def test_board_order(self, runner, base_args):
        result = invoke(runner, base_args, "show", "--now", NOW_ARG, "--tz", "UTC")

        assert result.exit_code == 0, result.output
        order = positions(result.output, "ConfX 2026", "VisionConf 2026", "LaterConf 2026")
        assert order == sorted(order)
        assert "Deadline: 16 Mar 2026, 11:59:59 am" in result.output
        assert "4/4 deadlines shown" in result.output

    def test_past_entry_shows_relative_time(self, runner, base_args):
        result = invoke(runner, base_args, "show", "--now", NOW_ARG, "--tz", "UTC")
        assert "months ago" in result.output

    def test_tag_filter(self, runner, base_args):
        assert invoke(runner, base_args, "toggle", "vision").exit_code == 0

        result = invoke(runner, base_args, "show", "--now", NOW_ARG, "--tz", "UTC")

        assert result.exit_code == 0, result.output
        assert "Filter: vision" in result.output
        assert "ConfX 2026" not in result.output
        assert "VisionConf 2026" in result.output
        assert "2/4 deadlines shown" in result.output

    def test_all_ignores_filter(self, runner, base_args):
        invoke(runner, base_args, "toggle", "vision")
        result = invoke(runner, base_args, "show", "--now", NOW_ARG, "--all")
        assert "ConfX 2026" in result.output

    def test_local_deadline_shown(self, runner, base_args):
        invoke(runner, base_args, "add", "Thesis draft", "2026-03-05 10:30", "--tag", "nlp")

        result = invoke(runner, base_args, "show", "--now", NOW_ARG, "--tz", "UTC")

        assert result.exit_code == 0, result.output
        order = positions(result.output, "Thesis draft", "ConfX 2026")
        assert order == sorted(order)
        assert "1 local" in result.output

    def test_invalid_now(self, runner, base_args):
        result = invoke(runner, base_args, "show", "--now", "yesterday")
        assert result.exit_code != 0

    def test_missing_configuration(self, runner, tmp_dir):
        empty = tmp_dir / "empty"
        empty.mkdir()
        result = runner.invoke(
            cli,
            [
                "--log-dir", str(tmp_dir / "logs"),
                "--data-dir", str(empty),
                "--store", str(tmp_dir / "state.db"),
                "show",
            ],
            obj={},
        )
        assert result.exit_code == 1
        assert "ConfigError" in result.output


class TestLocalCommands:
    """Tests for add, list-local and remove."""

    def test_empty_list(self, runner, base_args):
        result = invoke(runner, base_args, "list-local")
        assert result.exit_code == 0
        assert "No local deadlines." in result.output

    def test_add_list_remove(self, runner, base_args):
        result = invoke(runner, base_args, "add", "Grant", "2026-06-01 17:30", "--details", "Round 2")
        assert result.exit_code == 0, result.output
        assert "Added #0: Grant" in result.output

        invoke(runner, base_args, "add", "Review", "2026-06-02 09:30")
        listing = invoke(runner, base_args, "list-local").output
        assert "#0  Grant  2026-06-01 17:30" in listing
        assert "#1  Review  2026-06-02 09:30" in listing

        result = invoke(runner, base_args, "remove", "0")
        assert result.exit_code == 0
        assert "Removed #0: Grant" in result.output
        assert "#0  Review" in invoke(runner, base_args, "list-local").output

    def test_add_rejects_bad_datetime(self, runner, base_args):
        result = invoke(runner, base_args, "add", "Grant", "someday")
        assert result.exit_code == 2
        assert "No local deadlines." in invoke(runner, base_args, "list-local").output

    def test_remove_unknown_index(self, runner, base_args):
        result = invoke(runner, base_args, "remove", "5")
        assert result.exit_code == 2


class TestTagCommands:
    """Tests for tags and toggle."""

    def test_tags_listing(self, runner, base_args):
        result = invoke(runner, base_args, "tags")
        assert result.exit_code == 0
        assert "[ ] nlp" in result.output
        assert "Computer Vision" in result.output

    def test_toggle_round_trip(self, runner, base_args):
        result = invoke(runner, base_args, "toggle", "nlp")
        assert "nlp checked" in result.output
        assert "[x] nlp" in invoke(runner, base_args, "tags").output

        result = invoke(runner, base_args, "toggle", "nlp")
        assert "nlp unchecked" in result.output
        assert "[ ] nlp" in invoke(runner, base_args, "tags").output

    def test_toggle_unknown_tag(self, runner, base_args):
        result = invoke(runner, base_args, "toggle", "robotics")
        assert result.exit_code == 2


class TestSettingsResolution:
    """Tests for environment settings seen through the CLI."""

    def test_environment_namespace_used(self, runner, tmp_dir, data_dir, monkeypatch):
        from countdown.storage.store import KeyValueStore

        monkeypatch.setenv("COUNTDOWN_NAMESPACE", "env.ns")
        store_path = tmp_dir / "var" / "state.db"
        result = runner.invoke(
            cli,
            [
                "--log-dir", str(tmp_dir / "logs"),
                "--data-dir", str(data_dir),
                "--store", str(store_path),
                "add", "Grant", "2026-06-01 17:30",
            ],
            obj={},
        )
        assert result.exit_code == 0, result.output

        store = KeyValueStore(store_path)
        try:
            assert store.get_json("env.ns:custom_deadlines")[0]["name"] == "Grant"
        finally:
            store.dispose()

    def test_show_options_leave_cached_settings_alone(self, runner, base_args):
        from countdown.core.settings import get_settings

        result = invoke(
            runner, base_args, "show", "--now", NOW_ARG, "--tz", "UTC", "--api-url", "http://[::1"
        )

        assert result.exit_code == 0, result.output
        settings = get_settings()
        assert settings.timezone is None
        assert settings.api_url is None
        assert settings.namespace != "ddl.test"

    def test_invalid_api_url_falls_back(self, runner, base_args):
        invoke(runner, base_args, "add", "Thesis draft", "2026-03-05 10:30")

        result = invoke(
            runner, base_args, "show", "--now", NOW_ARG, "--tz", "UTC", "--api-url", "http://[::1"
        )

        assert result.exit_code == 0, result.output
        assert "ConfX 2026" in result.output
        assert "Thesis draft" in result.output
