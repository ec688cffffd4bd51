"""Tests for roster statistics."""
from datetime import date

from dutyplan.engine.generator import generate
from dutyplan.engine.stats import (
    calculate_person_stats,
    evaluate_wishes,
    stats_to_dataframe,
    type_distribution,
    weekday_distribution,
)
from dutyplan.models.person import Person
from dutyplan.models.shift import ShiftType, Weekday
from dutyplan.models.wish import MonthlyWish, WishType


class TestPersonStats:
    """Tests for per-person statistics."""

    def test_alternating_pair(self, pair_of_equals, duty_only_config):
        roster = generate(pair_of_equals, 2024, 6, duty_only_config).roster
        stats = calculate_person_stats(roster, pair_of_equals)

        assert [s.name for s in stats] == ["Anna", "Bernd"]
        anna = stats[0]
        assert anna.total == 15
        assert anna.count(ShiftType.DUTY_24H) == 15
        assert anna.count(ShiftType.LATE) == 0
        assert anna.min_spacing == 2
        # Anna works odd dates: Saturdays 1, 15, 29 and Sundays 9, 23
        assert anna.weekend == 5

    def test_person_without_duties(self, pair_of_equals, duty_only_config):
        roster = generate(pair_of_equals, 2024, 6, duty_only_config).roster
        idle = Person(name="Idle", id=9, max_duties=4)
        stats = calculate_person_stats(roster, [idle])
        assert stats[0].total == 0
        assert stats[0].min_spacing == 0
        assert not stats[0].limit_reached

    def test_dataframe(self, pair_of_equals, duty_only_config):
        roster = generate(pair_of_equals, 2024, 6, duty_only_config).roster
        df = stats_to_dataframe(calculate_person_stats(roster, pair_of_equals))
        assert list(df.columns) == ["Name", "24h", "V", "S", "Total", "Weekend", "Limit", "Min spacing"]
        assert df["Total"].sum() == 30


class TestDistributions:
    """Tests for roster-level distributions."""

    def test_type_distribution(self, sample_people):
        roster = generate(sample_people, 2024, 6).roster
        table = type_distribution(roster)
        assert list(table.columns) == ["24h", "V", "S"]
        assert table.values.sum() == 60 - roster.open_count

    def test_type_distribution_empty(self):
        roster = generate([], 2024, 6).roster
        assert type_distribution(roster).empty

    def test_weekday_distribution(self, pair_of_equals, duty_only_config):
        roster = generate(pair_of_equals, 2024, 6, duty_only_config).roster
        dist = weekday_distribution(roster)
        assert list(dist) == list(Weekday)
        # June 2024 has five Saturdays and Sundays, four of every other day
        assert dist[Weekday.SATURDAY] == 5
        assert dist[Weekday.MONDAY] == 4
        assert sum(dist.values()) == 30


class TestWishEvaluation:
    """Tests for soft wish evaluation."""

    def test_free_and_duty_wishes(self, pair_of_equals, duty_only_config):
        roster = generate(pair_of_equals, 2024, 6, duty_only_config).roster
        # Anna works odd dates, Bernd even dates
        wishes = [
            MonthlyWish(1, "Anna", date(2024, 6, 2), WishType.FREE),
            MonthlyWish(1, "Anna", date(2024, 6, 3), WishType.FREE),
            MonthlyWish(2, "Bernd", date(2024, 6, 4), WishType.DUTY),
            MonthlyWish(2, "Bernd", date(2024, 6, 5), WishType.DUTY),
            MonthlyWish(2, "Bernd", date(2024, 6, 9), WishType.VACATION),
        ]
        counts = evaluate_wishes(roster, wishes)
        assert counts == {"free": 2, "free_fulfilled": 1, "duty": 2, "duty_fulfilled": 1}
        assert [w.fulfilled for w in wishes] == [True, False, True, False, None]
