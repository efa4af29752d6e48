"""
Smoke tests for the cycle-trainer CLI.

Tests basic functionality:
- App runs and shows help
- init creates the profile and seeds a schedule
- generate / set-day / clear-day edit the schedule
- Sessions can be logged and completed
- stats and template-stats report JSON
"""

import json

import pytest
from typer.testing import CliRunner

from cycle_trainer.cli.main import app


runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Temporary data directory with HOME pointed away from the real user."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return tmp_path / "data"


def _run(data_dir, *args):
    return runner.invoke(app, [*args, "--data-dir", str(data_dir)])


def _init(data_dir, *extra):
    result = _run(data_dir, "init", "--cycle-length", "7", "--timezone", "UTC", *extra)
    assert result.exit_code == 0, result.output
    return result


def _json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "cycle" in result.output.lower()

    def test_init_creates_files(self, data_dir):
        _init(data_dir)
        assert (data_dir / "profile.json").exists()
        assert (data_dir / "schedule.json").exists()
        assert (data_dir / "sessions.jsonl").exists()

    def test_init_seeds_default_schedule(self, data_dir):
        _init(data_dir)
        schedule = _json(_run(data_dir, "show-schedule", "--json"))
        assert [s["ref"] for s in schedule["1"]] == ["push"]
        assert schedule["4"] == [{"kind": "rest"}]
        assert schedule["7"] == [{"kind": "rest"}]

    def test_init_rejects_bad_start_date(self, data_dir):
        result = _run(data_dir, "init", "--start-date", "21/10/2026")
        assert result.exit_code == 1

    def test_init_rejects_unknown_timezone(self, data_dir):
        """An unknown zone is an error line, not a traceback."""
        result = _run(data_dir, "init", "--timezone", "Mars/Base")
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error" in result.output
        assert not (data_dir / "profile.json").exists()

    def test_init_rejects_rest_days_beyond_cycle(self, data_dir):
        result = _run(data_dir, "init", "--cycle-length", "3", "--rest-days", "5")
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert not (data_dir / "profile.json").exists()

    def test_init_short_cycle_keeps_default_rest_in_range(self, data_dir):
        """The default of two rest days shrinks to fit a 2-day cycle."""
        assert _run(data_dir, "init", "--cycle-length", "2").exit_code == 0
        assert _run(data_dir, "generate").exit_code == 0
        schedule = _json(_run(data_dir, "show-schedule", "--json"))
        assert schedule["2"] == [{"kind": "rest"}]

    def test_reinit_shorter_cycle_drops_stale_days(self, data_dir):
        _init(data_dir, "--cycle-length", "14")
        _init(data_dir, "--cycle-length", "7")
        schedule = _json(_run(data_dir, "show-schedule", "--json"))
        assert max(int(day) for day in schedule) <= 7
        assert schedule["4"] == [{"kind": "rest"}]
        assert schedule["7"] == [{"kind": "rest"}]

    def test_reinit_same_cycle_keeps_edits(self, data_dir):
        _init(data_dir)
        _run(data_dir, "set-day", "4", "--add", "cardio-run")
        _init(data_dir, "--timezone", "America/Chicago")
        schedule = _json(_run(data_dir, "show-schedule", "--json"))
        assert [s["ref"] for s in schedule["4"]] == ["cardio-run"]

    def test_today_starts_at_day_one(self, data_dir):
        """With the start date defaulting to today, today is cycle day 1."""
        _init(data_dir)
        data = _json(_run(data_dir, "today", "--json"))
        assert data["cycle_day"] == 1
        assert data["cycle_length"] == 7
        assert data["day_name"] == "Monday"
        assert [s["ref"] for s in data["selections"]] == ["push"]

    @pytest.mark.parametrize(
        "command",
        [["today"], ["show-schedule"], ["generate"], ["stats"], ["history"], ["template-stats", "push"]],
    )
    def test_commands_require_init(self, data_dir, command):
        result = _run(data_dir, *command)
        assert result.exit_code == 1


class TestScheduleCommands:
    def test_generate_mix(self, data_dir):
        _init(data_dir)
        schedule = _json(_run(data_dir, "generate", "--focus", "mix", "--rest-days", "2", "--json"))
        assert schedule["4"] == [{"kind": "rest"}]
        assert schedule["7"] == [{"kind": "rest"}]
        assert [schedule[d][0]["ref"] for d in ("1", "2", "3")] == ["push", "pull", "legs"]
        assert [schedule[d][0]["ref"] for d in ("5", "6")] == ["cardio-run", "cardio-cycle"]

        saved = _json(_run(data_dir, "show-schedule", "--json"))
        assert saved == schedule

    def test_generate_with_mobility(self, data_dir):
        _init(data_dir)
        schedule = _json(_run(data_dir, "generate", "--mobility", "--json"))
        assert schedule["5"][-1]["ref"] == "mobility-hips"
        assert schedule["3"][-1]["ref"] == "mobility-spine"

    def test_dry_run_does_not_save(self, data_dir):
        _init(data_dir)
        before = _json(_run(data_dir, "show-schedule", "--json"))
        result = _run(data_dir, "generate", "--focus", "all-cardio", "--dry-run")
        assert result.exit_code == 0
        assert _json(_run(data_dir, "show-schedule", "--json")) == before

    def test_generate_rejects_too_many_rest_days(self, data_dir):
        _init(data_dir)
        result = _run(data_dir, "generate", "--rest-days", "7")
        assert result.exit_code == 1
        assert "Couldn't build your schedule" in result.output

    def test_set_day_add_replaces_rest(self, data_dir):
        _init(data_dir)
        result = _run(data_dir, "set-day", "4", "--add", "cardio-run")
        assert result.exit_code == 0, result.output
        schedule = _json(_run(data_dir, "show-schedule", "--json"))
        assert [s["ref"] for s in schedule["4"]] == ["cardio-run"]

    def test_set_day_rest_replaces_workouts(self, data_dir):
        _init(data_dir)
        assert _run(data_dir, "set-day", "1", "--rest").exit_code == 0
        schedule = _json(_run(data_dir, "show-schedule", "--json"))
        assert schedule["1"] == [{"kind": "rest"}]

    def test_set_day_three_workouts_warns(self, data_dir):
        _init(data_dir)
        result = _run(data_dir, "set-day", "1", "-a", "cardio-run", "-a", "mobility-hips")
        assert result.exit_code == 0, result.output
        assert "overtraining" in result.output
        schedule = _json(_run(data_dir, "show-schedule", "--json"))
        assert [s["ref"] for s in schedule["1"]] == ["push", "cardio-run", "mobility-hips"]

    def test_set_day_remove(self, data_dir):
        _init(data_dir)
        _run(data_dir, "set-day", "1", "-a", "cardio-run")
        assert _run(data_dir, "set-day", "1", "--remove", "push").exit_code == 0
        schedule = _json(_run(data_dir, "show-schedule", "--json"))
        assert [s["ref"] for s in schedule["1"]] == ["cardio-run"]

    def test_set_day_unknown_workout(self, data_dir):
        _init(data_dir)
        result = _run(data_dir, "set-day", "2", "--add", "zumba")
        assert result.exit_code == 1

    def test_set_day_out_of_range(self, data_dir):
        _init(data_dir)
        result = _run(data_dir, "set-day", "9", "--rest")
        assert result.exit_code == 1

    def test_clear_day(self, data_dir):
        _init(data_dir)
        assert _run(data_dir, "clear-day", "1").exit_code == 0
        schedule = _json(_run(data_dir, "show-schedule", "--json"))
        assert "1" not in schedule


class TestActivityCommands:
    def test_log_session_and_stats(self, data_dir):
        _init(data_dir)
        result = _run(data_dir, "log-session", "cardio-run", "--at", "2026-10-19T08:00:00+00:00")
        assert result.exit_code == 0, result.output

        history = _json(_run(data_dir, "history", "--json"))
        assert len(history) == 1
        assert history[0]["ref"] == "cardio-run"
        assert history[0]["label"] == "Run"
        assert history[0]["kind"] == "cardio"

        stats = _json(_run(data_dir, "stats", "--json"))
        assert stats["total_workouts"] == 1
        assert stats["longest_streak"] == 1
        assert stats["favorite"] == "Run"
        assert set(stats) == {"current_streak", "weekly_count", "total_workouts", "longest_streak", "favorite"}

    def test_log_session_bad_timestamp(self, data_dir):
        _init(data_dir)
        result = _run(data_dir, "log-session", "push", "--at", "last tuesday")
        assert result.exit_code == 1

    def test_started_then_completed(self, data_dir):
        _init(data_dir)
        _run(data_dir, "log-session", "push", "--started", "--at", "2026-10-19T08:00:00+00:00")
        history = _json(_run(data_dir, "history", "--json"))
        assert history[0]["completed_at"] is None
        assert _json(_run(data_dir, "stats", "--json"))["total_workouts"] == 0

        session_id = history[0]["id"]
        result = _run(data_dir, "complete-session", session_id, "--at", "2026-10-19T09:00:00+00:00")
        assert result.exit_code == 0, result.output
        assert _json(_run(data_dir, "stats", "--json"))["total_workouts"] == 1

        again = _run(data_dir, "complete-session", session_id)
        assert again.exit_code == 1

    def test_complete_unknown_session(self, data_dir):
        _init(data_dir)
        assert _run(data_dir, "complete-session", "nope").exit_code == 1

    def test_complete_with_corrupt_profile(self, data_dir):
        _init(data_dir)
        (data_dir / "profile.json").write_text("{not json")
        result = _run(data_dir, "complete-session", "abc")
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error" in result.output

    def test_template_stats(self, data_dir):
        _init(data_dir)
        _run(data_dir, "generate", "--focus", "mix")
        _run(data_dir, "log-session", "cardio-run", "--at", "2026-10-19T08:00:00+00:00")

        data = _json(_run(data_dir, "template-stats", "cardio-run", "--json"))
        assert data["summary"] == "1 session completed"
        assert data["last_session"]["ref"] == "cardio-run"
        assert data["next_scheduled_day"] == 5

    def test_template_stats_unscheduled(self, data_dir):
        _init(data_dir)
        data = _json(_run(data_dir, "template-stats", "cardio-rower", "--json"))
        assert data["summary"] == "No sessions yet"
        assert data["last_session"] is None
        assert data["next_scheduled_day"] is None
