"""Account-level study streaks from the set of active study days."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class StreakSummary:
    current: int
    longest: int


class StreakCalculator:
    """
    Computes consecutive-day streaks.

    A streak is still current when its last day is today or yesterday, so a
    learner keeps their streak until the first full day without study.
    """

    def calculate(self, active_days: Iterable[date], today: date) -> StreakSummary:
        days = sorted({day for day in active_days if day <= today})
        if not days:
            return StreakSummary(current=0, longest=0)

        longest = run = 1
        for previous, day in zip(days, days[1:], strict=False):
            run = run + 1 if day - previous == _ONE_DAY else 1
            longest = max(longest, run)

        return StreakSummary(current=self._current(set(days), today), longest=longest)

    def from_timestamps(
        self, started_at: Iterable[datetime], now: datetime, zone: tzinfo
    ) -> StreakSummary:
        """Streaks from session start times, with day boundaries taken in zone."""
        active_days = (moment.astimezone(zone).date() for moment in started_at)
        return self.calculate(active_days, now.astimezone(zone).date())

    @staticmethod
    def _current(days: set[date], today: date) -> int:
        if today in days:
            cursor = today
        elif today - _ONE_DAY in days:
            cursor = today - _ONE_DAY
        else:
            return 0

        count = 0
        while cursor in days:
            count += 1
            cursor -= _ONE_DAY
        return count
