"""
File-based storage for profile, schedule, and session history.

Layout under the data directory (default ~/.cycle-trainer/):
- profile.json   cycle config + default generator preferences
- schedule.json  full schedule mapping {"<day>": [selection, ...]}
- sessions.jsonl one session record per line

Writes replace whole files.  Two writers saving at once resolve
last-write-wins; no locking is attempted.
"""

import json
from datetime import datetime
from pathlib import Path

from ..core.cycle_clock import current_cycle_day
from ..core.models import CycleConfig, Schedule, ScheduleDay, SessionRecord, UserPreferences, WorkoutSelection
from ..core.schedule import validate_assignment
from .serializers import (
    ValidationError,
    cycle_config_to_dict,
    dict_to_cycle_config,
    dict_to_preferences,
    dict_to_schedule,
    dict_to_session,
    preferences_to_dict,
    schedule_to_dict,
    session_to_json_line,
)


class ScheduleStore:
    """
    Persistence collaborator for one user's cycle data.

    The engine never touches this class; the CLI loads snapshots from it,
    hands them to core/ functions, and writes back the results.
    """

    def __init__(self, data_dir: str | Path):
        """
        Initialize the store.

        Args:
            data_dir: Directory holding profile, schedule and sessions files
        """
        self.data_dir = Path(data_dir)
        self.profile_path = self.data_dir / "profile.json"
        self.schedule_path = self.data_dir / "schedule.json"
        self.sessions_path = self.data_dir / "sessions.jsonl"

    def exists(self) -> bool:
        """Check if a profile has been initialised."""
        return self.profile_path.exists()

    def init(self) -> None:
        """Create the data directory and empty schedule/session files if missing."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        if not self.sessions_path.exists():
            self.sessions_path.touch()
        if not self.schedule_path.exists():
            self._write_json(self.schedule_path, {})

    # -- profile -------------------------------------------------------------

    def _read_profile_data(self) -> dict:
        if not self.profile_path.exists():
            raise FileNotFoundError(
                f"Profile not found: {self.profile_path}. Run 'init' first."
            )
        try:
            with open(self.profile_path, "r") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Corrupt profile {self.profile_path}: {e}") from e

    def load_profile(self) -> CycleConfig:
        """
        Load the cycle configuration.

        Raises:
            FileNotFoundError: If no profile exists
            ValidationError: If the profile is invalid
        """
        return dict_to_cycle_config(self._read_profile_data())

    def load_preferences(self) -> UserPreferences:
        """Load default generator preferences (built-in defaults if never saved)."""
        return dict_to_preferences(self._read_profile_data().get("preferences", {}))

    def save_profile(self, config: CycleConfig, preferences: UserPreferences | None = None) -> None:
        """
        Save cycle config and, optionally, default preferences.

        Existing preferences are kept when *preferences* is None.
        """
        data: dict = {}
        if self.profile_path.exists():
            data = self._read_profile_data()
        data.update(cycle_config_to_dict(config))
        if preferences is not None:
            data["preferences"] = preferences_to_dict(preferences)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._write_json(self.profile_path, data)

    def today_cycle_day(self, now: datetime | None = None) -> int:
        """Cycle day for today according to the stored profile."""
        return current_cycle_day(self.load_profile(), now)

    # -- schedule ------------------------------------------------------------

    def load_schedule(self) -> Schedule:
        """
        Load the current schedule; empty when nothing has been saved.

        Raises:
            ValidationError: If the file is corrupt
        """
        if not self.schedule_path.exists():
            return {}
        try:
            with open(self.schedule_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Corrupt schedule {self.schedule_path}: {e}") from e
        return dict_to_schedule(data)

    def clear_schedule(self) -> None:
        """Remove every day assignment."""
        self._write_json(self.schedule_path, {})

    def save_schedule(self, schedule: Schedule) -> None:
        """
        Replace the whole schedule.

        Clears all existing days first so entries from a previous catalog
        never linger after a plan switch.

        Raises:
            ValidationError: If any day breaks the rest-exclusivity rule
        """
        for day, selections in schedule.items():
            self._check_day(day, selections)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.clear_schedule()
        self._write_json(self.schedule_path, schedule_to_dict(schedule))

    def upsert_day(self, day_number: int, selections: list[WorkoutSelection]) -> str | None:
        """
        Set one day's selections, leaving other days untouched.

        Returns:
            The overtraining advisory for the day, if any

        Raises:
            ValidationError: If the day number is not positive or the
                selections break the rest-exclusivity rule
        """
        try:
            day = ScheduleDay(day_number, list(selections))
        except ValueError as e:
            raise ValidationError(str(e)) from e
        check = self._check_day(day.day_number, day.selections)
        schedule = self.load_schedule()
        schedule[day.day_number] = day.selections
        self._write_json(self.schedule_path, schedule_to_dict(schedule))
        return check.advisory

    def delete_day(self, day_number: int) -> None:
        """Mark a day unconfigured."""
        schedule = self.load_schedule()
        if schedule.pop(day_number, None) is not None:
            self._write_json(self.schedule_path, schedule_to_dict(schedule))

    @staticmethod
    def _check_day(day_number: int, selections: list[WorkoutSelection]):
        check = validate_assignment(selections)
        if not check.ok:
            raise ValidationError(f"Day {day_number}: {check.error}")
        return check

    # -- sessions ------------------------------------------------------------

    def load_sessions(self) -> list[SessionRecord]:
        """
        Load all sessions, sorted by start time.

        Raises:
            FileNotFoundError: If the sessions file doesn't exist
            ValidationError: If a line cannot be parsed
        """
        if not self.sessions_path.exists():
            raise FileNotFoundError(
                f"Sessions file not found: {self.sessions_path}. Run 'init' first."
            )

        sessions: list[SessionRecord] = []
        with open(self.sessions_path, "r") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    sessions.append(dict_to_session(json.loads(line)))
                except (json.JSONDecodeError, ValidationError) as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.sessions_path}: {e}"
                    ) from e

        sessions.sort(key=lambda s: s.started_at)
        return sessions

    def append_session(self, session: SessionRecord) -> None:
        """
        Add a session, replacing an in-progress record with the same id.

        Raises:
            FileNotFoundError: If the sessions file doesn't exist
            ValidationError: If a completed record already has this id
        """
        existing = self.load_sessions()
        if any(s.id == session.id and s.is_completed for s in existing):
            raise ValidationError(f"Session {session.id} is already completed")
        sessions = [s for s in existing if s.id != session.id]
        sessions.append(session)
        sessions.sort(key=lambda s: s.started_at)
        self._write_sessions(sessions)

    def complete_session(self, session_id: str, completed_at: str) -> SessionRecord:
        """
        Stamp an in-progress session as completed.

        Raises:
            KeyError: If no session has this id
            ValidationError: If the session was already completed
        """
        sessions = self.load_sessions()
        for i, s in enumerate(sessions):
            if s.id != session_id:
                continue
            if s.is_completed:
                raise ValidationError(f"Session {session_id} is already completed")
            done = SessionRecord(
                id=s.id,
                ref=s.ref,
                started_at=s.started_at,
                completed_at=completed_at,
                label=s.label,
                kind=s.kind,
            )
            sessions[i] = done
            self._write_sessions(sessions)
            return done
        raise KeyError(session_id)

    def _write_sessions(self, sessions: list[SessionRecord]) -> None:
        with open(self.sessions_path, "w") as f:
            for session in sessions:
                f.write(session_to_json_line(session) + "\n")

    @staticmethod
    def _write_json(path: Path, data: dict) -> None:
        with open(path, "w") as f:
            json.dump(data, f, indent=2)


def get_default_data_dir() -> Path:
    """Default data directory: ~/.cycle-trainer."""
    return Path.home() / ".cycle-trainer"
