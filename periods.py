"""
Date helpers for CDSL fortnightly pages and NSE filing labels.

CDSL settles flows in two fortnights per month (1st-15th and 16th-end), so
every reported range is snapped to one of those two buckets.
"""

import calendar
import re
from datetime import date
from collections import namedtuple
from types import MappingProxyType

# Month name to number mapping
MONTH_MAP = MappingProxyType({
    'January': 1, 'February': 2, 'March': 3, 'April': 4,
    'May': 5, 'June': 6, 'July': 7, 'August': 8,
    'September': 9, 'October': 10, 'November': 11, 'December': 12
})

SHORT_MONTH_MAP = MappingProxyType({name[:3]: num for name, num in MONTH_MAP.items()})

MONTH_NAMES = '|'.join(MONTH_MAP)

RANGE_PAT = re.compile(rf"({MONTH_NAMES}) (\d{{1,2}})-(\d{{1,2}}), (\d{{4}})")
SINGLE_PAT = re.compile(rf"({MONTH_NAMES}) (\d{{1,2}}),? ?(\d{{4}})")
RSS_DATE_PAT = re.compile(r"(\d{1,2})-([A-Za-z]{3})-(\d{4})")


PeriodRange = namedtuple('PeriodRange', ['period_start', 'period_end'])


def to_sql_date(human):
    """'November 15, 2024' -> '2024-11-15'. None for labels that do not parse or name no real day."""
    m = SINGLE_PAT.search(human or '')
    if not m:
        return None
    month_name, day, year = m.groups()
    try:
        return date(int(year), MONTH_MAP[month_name], int(day)).isoformat()
    except ValueError:
        return None


def long_date(d):
    """Render a date the way CDSL writes it in headers: 'November 15, 2024'."""
    return f"{calendar.month_name[d.month]} {d.day}, {d.year}"


def parse_period_range(period_text):
    """
    Snap a reported fortnight label ('November 16-30, 2024') onto the
    settlement cycle. An end day of 15 or less is the first half of the
    month, anything later is the second half.
    """
    m = RANGE_PAT.search(period_text or '')
    if not m:
        return None

    month_name, _start_day, end_day, year = m.groups()
    year, month = int(year), MONTH_MAP[month_name]

    if int(end_day) <= 15:
        start, end = date(year, month, 1), date(year, month, 15)
    else:
        last_day = calendar.monthrange(year, month)[1]
        start, end = date(year, month, 16), date(year, month, last_day)

    return PeriodRange(start.isoformat(), end.isoformat())


def normalize_rss_date(date_str):
    """NSE RSS 'AS ON DATE' value: '31-Dec-2024' -> '2024-12-31'."""
    m = RSS_DATE_PAT.fullmatch((date_str or '').strip())
    if not m:
        return None
    day, mon, year = m.groups()
    month = SHORT_MONTH_MAP.get(mon.title())
    if month is None:
        return None
    try:
        return date(int(year), month, int(day)).isoformat()
    except ValueError:
        return None


def cdsl_publication_dates(start_year, end_year):
    """CDSL publishes on the 15th and on the last calendar day of each month."""
    dates = []
    for year in range(start_year, end_year + 1):
        for month in range(1, 13):
            dates.append(date(year, month, 15))
            dates.append(date(year, month, calendar.monthrange(year, month)[1]))
    return dates
