"""
CLI entry point using Typer.

Provides commands for cycle management:
- init: Create profile and seed the default schedule
- today: Show today's cycle day and workouts
- show-schedule / generate / set-day / clear-day: Manage the cycle
- log-session / complete-session / history: Record workouts
- stats / template-stats: Streaks, weekly counts, per-workout summaries
"""

from .app import app
from .commands import activity, profile, schedule  # noqa: F401  (registers commands)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
