"""
Semester week arithmetic.
"""

import math
from datetime import date
from typing import Optional


class SemesterCalendar:
    """Maps calendar dates to semester week numbers.

    The start date itself is week 0; each following block of seven days
    is one more week, so days 1-7 fall in week 1, days 8-14 in week 2.
    """

    def __init__(self, start_date: date):
        self._start_date = start_date

    @property
    def start_date(self) -> date:
        return self._start_date

    def week_of(self, day: date) -> int:
        days = (day - self._start_date).days
        return math.ceil(days / 7)

    def current_week(self, today: Optional[date] = None) -> int:
        return self.week_of(today or date.today())
