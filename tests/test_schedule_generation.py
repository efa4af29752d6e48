"""
Golden-output and property tests for the auto-schedule generator.

The generator is deterministic, so expected schedules are written out
in full.  Day layouts for a 7-day cycle:
  1 rest day  -> {7}
  2 rest days -> {4, 7}
  3 rest days -> {3, 5, 7}
"""

import pytest

from cycle_trainer.core.errors import InvalidConfig
from cycle_trainer.core.generator import (
    default_schedule,
    generate_schedule,
    mobility_pool,
    mobility_targets,
    spread_rest_days,
    to_selection,
)
from cycle_trainer.core.models import REST, Catalog, CatalogEntry, UserPreferences

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

PUSH = CatalogEntry("push", "Push")
PULL = CatalogEntry("pull", "Pull")
LEGS = CatalogEntry("legs", "Legs")
RUN = CatalogEntry("run", "Run", "run")
CYCLE = CatalogEntry("cycle", "Cycle", "cycle")
ROWER = CatalogEntry("rower", "Rower", "rower")
HIPS = CatalogEntry("mob-hips", "Hip Flow", "hip_knee_ankle")
SPINE = CatalogEntry("mob-spine", "Spine", "spine")
CORE = CatalogEntry("mob-core", "Core Stability", "core")


def _w(entry: CatalogEntry):
    return to_selection("weights", entry)


def _c(entry: CatalogEntry):
    return to_selection("cardio", entry)


def _m(entry: CatalogEntry):
    return to_selection("mobility", entry)


def _catalog(mobility: list[CatalogEntry] | None = None) -> Catalog:
    return Catalog(
        weights=[PUSH, PULL, LEGS],
        cardio=[RUN, CYCLE, ROWER],
        mobility=list(mobility or []),
    )


def _rest_days(schedule) -> list[int]:
    return [day for day, sel in schedule.items() if sel == [REST]]


# ===========================================================================
# Rest placement
# ===========================================================================


class TestSpreadRestDays:
    """Rest positions spread evenly with the last day always rest."""

    @pytest.mark.parametrize(
        "rest_days, expected",
        [(1, [7]), (2, [4, 7]), (3, [3, 5, 7])],
    )
    def test_seven_day_table(self, rest_days, expected):
        assert spread_rest_days(7, rest_days) == expected

    def test_ten_day_three_rest(self):
        """ceil(10/3)=4, ceil(20/3)=7, 10."""
        assert spread_rest_days(10, 3) == [4, 7, 10]

    def test_maximum_rest(self):
        """N-1 rest days leaves exactly day 1 for training."""
        assert spread_rest_days(5, 4) == [2, 3, 4, 5]

    @pytest.mark.parametrize("rest_days", [0, 7, 8, -1])
    def test_out_of_range_rejected(self, rest_days):
        with pytest.raises(InvalidConfig):
            spread_rest_days(7, rest_days)


# ===========================================================================
# Fill by focus
# ===========================================================================


class TestGenerateGolden:
    """Full expected outputs for representative inputs."""

    def test_mix_seven_days_two_rest(self):
        """Training {1,2,3,5,6}: weightsCount = min(3, ceil(5/2)) = 3."""
        schedule = generate_schedule(7, _catalog(), UserPreferences("mix", 2, False))
        assert schedule == {
            1: [_w(PUSH)],
            2: [_w(PULL)],
            3: [_w(LEGS)],
            4: [REST],
            5: [_c(RUN)],
            6: [_c(CYCLE)],
            7: [REST],
        }

    def test_mix_with_two_entry_mobility_pool(self):
        """Candidates [5, 6, 1, 2, 3] -> first (5) and last (3)."""
        schedule = generate_schedule(7, _catalog([HIPS, SPINE]), UserPreferences("mix", 2, True))
        assert schedule[5] == [_c(RUN), _m(HIPS)]
        assert schedule[3] == [_w(LEGS), _m(SPINE)]
        assert schedule[1] == [_w(PUSH)]
        assert schedule[2] == [_w(PULL)]
        assert schedule[6] == [_c(CYCLE)]
        assert _rest_days(schedule) == [4, 7]

    def test_all_weights_wraps_round_robin(self):
        schedule = generate_schedule(7, _catalog(), UserPreferences("all-weights", 1, False))
        assert schedule == {
            1: [_w(PUSH)],
            2: [_w(PULL)],
            3: [_w(LEGS)],
            4: [_w(PUSH)],
            5: [_w(PULL)],
            6: [_w(LEGS)],
            7: [REST],
        }

    def test_all_cardio_three_rest(self):
        catalog = Catalog(cardio=[RUN, CYCLE])
        schedule = generate_schedule(7, catalog, UserPreferences("all-cardio", 3, False))
        assert schedule == {
            1: [_c(RUN)],
            2: [_c(CYCLE)],
            3: [REST],
            4: [_c(RUN)],
            5: [REST],
            6: [_c(CYCLE)],
            7: [REST],
        }

    def test_mix_single_weights_entry(self):
        """weightsCount = min(1, 3) = 1; the other four positions are cardio."""
        catalog = Catalog(weights=[PUSH], cardio=[RUN, CYCLE])
        schedule = generate_schedule(7, catalog, UserPreferences("mix", 2, False))
        assert schedule[1] == [_w(PUSH)]
        assert [schedule[d] for d in (2, 3, 5, 6)] == [
            [_c(RUN)], [_c(CYCLE)], [_c(RUN)], [_c(CYCLE)],
        ]


class TestEmptyCatalog:
    """Empty catalogs degrade to unconfigured days, never errors."""

    def test_all_weights_without_weights(self):
        schedule = generate_schedule(7, Catalog(cardio=[RUN]), UserPreferences("all-weights", 2, False))
        assert schedule == {4: [REST], 7: [REST]}

    def test_mix_without_cardio_leaves_suffix_unset(self):
        catalog = Catalog(weights=[PUSH, PULL, LEGS])
        schedule = generate_schedule(7, catalog, UserPreferences("mix", 2, False))
        assert sorted(schedule) == [1, 2, 3, 4, 7]

    def test_mix_without_weights_is_all_cardio(self):
        catalog = Catalog(cardio=[RUN])
        schedule = generate_schedule(7, catalog, UserPreferences("mix", 2, False))
        assert all(schedule[d] == [_c(RUN)] for d in (1, 2, 3, 5, 6))

    def test_mobility_skipped_without_training_days(self):
        catalog = Catalog(mobility=[HIPS])
        schedule = generate_schedule(7, catalog, UserPreferences("mix", 2, True))
        assert schedule == {4: [REST], 7: [REST]}

    def test_mobility_skipped_with_empty_pool(self):
        schedule = generate_schedule(7, _catalog([]), UserPreferences("mix", 2, True))
        assert all(len(sel) == 1 for sel in schedule.values())


# ===========================================================================
# Mobility
# ===========================================================================


class TestMobility:
    def test_pool_excludes_core_and_duplicate_names(self):
        dup = CatalogEntry("mob-hips-2", "Hip Flow", "hip_knee_ankle")
        assert mobility_pool(_catalog([HIPS, CORE, dup, SPINE])) == [HIPS, SPINE]

    def test_pool_falls_back_to_core(self):
        assert mobility_pool(_catalog([CORE])) == [CORE]

    def test_targets_first_and_last(self):
        assert mobility_targets([5, 6], [1, 2, 3]) == [5, 3]

    def test_single_candidate(self):
        assert mobility_targets([], [1]) == [1]

    def test_no_candidates(self):
        assert mobility_targets([], []) == []

    def test_single_entry_pool_reused(self):
        schedule = generate_schedule(7, _catalog([HIPS]), UserPreferences("mix", 2, True))
        assert schedule[5][-1] == _m(HIPS)
        assert schedule[3][-1] == _m(HIPS)

    def test_single_training_day_gets_mobility(self):
        schedule = generate_schedule(2, _catalog([HIPS, SPINE]), UserPreferences("all-weights", 1, True))
        assert schedule == {1: [_w(PUSH), _m(HIPS)], 2: [REST]}

    def test_mobility_appends_not_replaces(self):
        schedule = generate_schedule(7, _catalog([HIPS, SPINE]), UserPreferences("all-cardio", 2, True))
        # all-cardio: candidates are cardio days [1, 2, 3, 5, 6]
        assert schedule[1] == [_c(RUN), _m(HIPS)]
        assert schedule[6] == [_c(CYCLE), _m(SPINE)]


# ===========================================================================
# Properties
# ===========================================================================


class TestGeneratorProperties:
    @pytest.mark.parametrize("focus", ["all-weights", "all-cardio", "mix"])
    def test_rest_and_training_counts(self, focus):
        catalog = _catalog([HIPS, SPINE])
        for n in range(2, 15):
            for rest_days in range(1, n):
                schedule = generate_schedule(n, catalog, UserPreferences(focus, rest_days, True))
                rest = _rest_days(schedule)
                training = [d for d, sel in schedule.items() if sel != [REST]]
                assert len(rest) == rest_days
                assert len(training) == n - rest_days
                assert rest[-1] == n
                for sel in schedule.values():
                    assert sel == [REST] or all(not s.is_rest for s in sel)

    def test_deterministic(self):
        prefs = UserPreferences("mix", 3, True)
        first = generate_schedule(9, _catalog([HIPS, CORE, SPINE]), prefs)
        second = generate_schedule(9, _catalog([HIPS, CORE, SPINE]), prefs)
        assert first == second

    def test_inputs_not_mutated(self):
        catalog = _catalog([HIPS, SPINE])
        snapshot = _catalog([HIPS, SPINE])
        generate_schedule(7, catalog, UserPreferences("mix", 2, True))
        assert catalog == snapshot


class TestInvalidInput:
    def test_rest_days_equal_to_cycle_length(self):
        with pytest.raises(InvalidConfig):
            generate_schedule(7, _catalog(), UserPreferences("mix", 7, False))

    def test_zero_cycle_length(self):
        with pytest.raises(InvalidConfig):
            generate_schedule(0, _catalog(), UserPreferences("mix", 1, False))

    def test_one_day_cycle_has_no_valid_rest(self):
        with pytest.raises(InvalidConfig):
            generate_schedule(1, _catalog(), UserPreferences("mix", 1, False))

    def test_preferences_reject_zero_rest(self):
        with pytest.raises(InvalidConfig):
            UserPreferences("mix", 0, False)

    def test_preferences_reject_unknown_focus(self):
        with pytest.raises(InvalidConfig):
            UserPreferences("yoga", 2, False)  # type: ignore[arg-type]


class TestDefaultSchedule:
    def test_push_pull_legs_default(self):
        """W1, W2, W3, Rest, W1, W2, Rest."""
        assert default_schedule(7, _catalog()) == {
            1: [_w(PUSH)],
            2: [_w(PULL)],
            3: [_w(LEGS)],
            4: [REST],
            5: [_w(PUSH)],
            6: [_w(PULL)],
            7: [REST],
        }

    def test_one_day_cycle(self):
        assert default_schedule(1, _catalog()) == {1: [_w(PUSH)]}

    def test_two_day_cycle(self):
        assert default_schedule(2, _catalog()) == {1: [_w(PUSH)], 2: [REST]}
