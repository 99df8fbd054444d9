"""Unit tests for consecutive-day streaks."""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

from microscroll.domain.study import StreakCalculator

TODAY = date(2024, 5, 10)


def days_ago(*offsets: int) -> list[date]:
    return [TODAY - timedelta(days=offset) for offset in offsets]


class TestStreakCalculator:
    def test_no_activity(self) -> None:
        summary = StreakCalculator().calculate([], TODAY)

        assert summary.current == 0
        assert summary.longest == 0

    def test_run_ending_today(self) -> None:
        summary = StreakCalculator().calculate(days_ago(0, 1, 2), TODAY)

        assert summary.current == 3
        assert summary.longest == 3

    def test_run_ending_yesterday_is_still_current(self) -> None:
        summary = StreakCalculator().calculate(days_ago(1, 2), TODAY)

        assert summary.current == 2

    def test_gap_breaks_current_streak(self) -> None:
        summary = StreakCalculator().calculate(days_ago(2, 3, 4, 5), TODAY)

        assert summary.current == 0
        assert summary.longest == 4

    def test_duplicates_and_future_days_are_ignored(self) -> None:
        active = [*days_ago(0, 0, 1), TODAY + timedelta(days=1)]

        summary = StreakCalculator().calculate(active, TODAY)

        assert summary.current == 2
        assert summary.longest == 2

    def test_longest_is_the_best_historic_run(self) -> None:
        summary = StreakCalculator().calculate(days_ago(0, 10, 11, 12, 13, 14), TODAY)

        assert summary.current == 1
        assert summary.longest == 5

    def test_day_boundaries_follow_zone(self) -> None:
        """23:30 UTC on May 9 is already May 10 in Berlin."""
        now = datetime(2024, 5, 10, 8, 0, tzinfo=UTC)
        started = [datetime(2024, 5, 9, 23, 30, tzinfo=UTC)]

        in_utc = StreakCalculator().from_timestamps(started, now, UTC)
        in_berlin = StreakCalculator().from_timestamps(started, now, ZoneInfo("Europe/Berlin"))

        assert in_utc.current == 1
        assert in_berlin.current == 1
        assert StreakCalculator().from_timestamps(
            started, now + timedelta(days=1), ZoneInfo("Europe/Berlin")
        ).current == 1
        next_day = now + timedelta(days=1)
        assert StreakCalculator().from_timestamps(started, next_day, UTC).current == 0
