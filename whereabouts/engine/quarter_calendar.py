"""
Quarter calendar arithmetic.

Pure date-range computations for a (year, quarter).  All dates are naive
calendar dates; no timezone handling happens here or anywhere else in
the engine.

Filing deadline
---------------

Two rules have been used for the filing deadline, and they disagree:

- ``FIFTEENTH_OF_PRIOR_MONTH``: the 15th of the month before the quarter
  starts (Dec 15 of the previous year for Q1).  This is the rule stored on
  every persisted quarter and is the default.
- ``FIFTEEN_DAYS_BEFORE_START``: 15 days before the quarter's first day.

The default awaits confirmation from the compliance domain owner; switch
with the ``FILING_DEADLINE_RULE`` setting rather than editing code.
"""

from __future__ import annotations

import calendar
import datetime
from enum import Enum
from typing import Iterable, Iterator, Optional

from whereabouts.schemas.quarter import QuarterDates, QuarterName


class FilingDeadlineRule(str, Enum):
    FIFTEENTH_OF_PRIOR_MONTH = "fifteenth_of_prior_month"
    FIFTEEN_DAYS_BEFORE_START = "fifteen_days_before_start"


DEFAULT_FILING_DEADLINE_RULE = FilingDeadlineRule.FIFTEENTH_OF_PRIOR_MONTH
FILING_DEADLINE_DAY_OF_MONTH = 15
FILING_DEADLINE_DAYS_BEFORE_START = 15

# (first month, last month) of each quarter, 1-based
QUARTER_MONTHS: dict[QuarterName, tuple[int, int]] = {
    QuarterName.Q1: (1, 3),
    QuarterName.Q2: (4, 6),
    QuarterName.Q3: (7, 9),
    QuarterName.Q4: (10, 12),
}

_QUARTER_ORDER: list[QuarterName] = list(QuarterName)


def _parse_quarter(quarter: QuarterName | str) -> QuarterName:
    try:
        return QuarterName(quarter)
    except ValueError:
        raise ValueError(f"Unknown quarter: {quarter!r}. Expected one of {[q.value for q in QuarterName]}") from None


# ======================================================================
# Date helpers
# ======================================================================


def iter_dates(start: datetime.date, end: datetime.date) -> Iterator[datetime.date]:
    """Yield every date in ``[start, end]`` ascending.  Empty if start > end."""
    current = start
    one_day = datetime.timedelta(days=1)
    while current <= end:
        yield current
        current += one_day


def days_inclusive(start: datetime.date, end: datetime.date) -> int:
    return (end - start).days + 1


# ======================================================================
# Quarter dates
# ======================================================================


def filing_deadline_for(start_date: datetime.date, rule: FilingDeadlineRule | str | None = None) -> datetime.date:
    """Filing deadline of the quarter beginning on *start_date*."""
    rule = FilingDeadlineRule(rule) if rule else DEFAULT_FILING_DEADLINE_RULE
    if rule is FilingDeadlineRule.FIFTEEN_DAYS_BEFORE_START:
        return start_date - datetime.timedelta(days=FILING_DEADLINE_DAYS_BEFORE_START)

    prior_month_end = start_date - datetime.timedelta(days=1)
    return prior_month_end.replace(day=FILING_DEADLINE_DAY_OF_MONTH)


def calculate_quarter_dates(year: int, quarter: QuarterName | str,
                            rule: FilingDeadlineRule | str | None = None, ) -> QuarterDates:
    """Compute start, end, filing deadline and inclusive day count.

    Raises:
        ValueError: if *quarter* is not one of Q1..Q4.
    """
    first_month, last_month = QUARTER_MONTHS[_parse_quarter(quarter)]

    start_date = datetime.date(year, first_month, 1)
    last_day = calendar.monthrange(year, last_month)[1]
    end_date = datetime.date(year, last_month, last_day)

    return QuarterDates(start_date=start_date, end_date=end_date,
                        filing_deadline=filing_deadline_for(start_date, rule),
                        total_days=days_inclusive(start_date, end_date), )


def quarter_days(year: int, quarter: QuarterName | str) -> list[datetime.date]:
    """Every date of the quarter, ascending."""
    dates = calculate_quarter_dates(year, quarter)
    return list(iter_dates(dates.start_date, dates.end_date))


# ======================================================================
# Navigation
# ======================================================================


def quarter_for_date(date: datetime.date) -> tuple[int, QuarterName]:
    """Return ``(year, quarter)`` containing *date*."""
    return date.year, _QUARTER_ORDER[(date.month - 1) // 3]


def next_quarter(year: int, quarter: QuarterName | str) -> tuple[int, QuarterName]:
    index = _QUARTER_ORDER.index(_parse_quarter(quarter))
    if index == len(_QUARTER_ORDER) - 1:
        return year + 1, _QUARTER_ORDER[0]
    return year, _QUARTER_ORDER[index + 1]


def days_until_deadline(deadline: datetime.date, today: Optional[datetime.date] = None) -> int:
    """Days from *today* to *deadline*; negative once the deadline has passed."""
    today = today or datetime.date.today()
    return (deadline - today).days


def find_missing_dates(filled: Iterable[datetime.date], start: datetime.date,
                       end: datetime.date, ) -> list[datetime.date]:
    """Dates in ``[start, end]`` with no entry in *filled*, ascending."""
    filled_set = set(filled)
    return [d for d in iter_dates(start, end) if d not in filled_set]
