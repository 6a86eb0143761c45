"""
Rolling AUC deltas per sector from consecutive CDSL statements.

Each window is counted in statements, not days: CDSL publishes twice a
month, so 15D is one statement back, 30D two, and so on.
"""

from datetime import date

import pandas as pd

from periods import to_sql_date

WINDOWS = {
    '15D': 1,
    '30D': 2,
    '90D': 6,
    '180D': 12,
    '360D': 24,
}

MIN_ROLLING_ROWS = 10


def to_frame(records):
    """{'sector', 'statement', 'value'} records -> long frame with a statement_date column."""
    df = pd.DataFrame(records, columns=['sector', 'statement', 'value'])
    df['statement_date'] = [date.fromisoformat(to_sql_date(s)) for s in df['statement']]
    df['value'] = pd.to_numeric(df['value'], errors='coerce')
    return df


def rolling_deltas(records):
    """
    One row per sector: the value at the sector's latest statement minus
    the value N statements earlier on the global statement calendar.
    Sectors whose latest value is blank are dropped; missing history
    gives None. Returns (latest statement date, rows).
    """
    df = to_frame(records)
    if df.empty:
        return None, []

    pivot = df.groupby(['sector', 'statement_date'], sort=True)['value'].last().unstack()
    all_dates = sorted(df['statement_date'].unique())
    pivot = pivot.reindex(columns=all_dates)
    sector_latest = df.groupby('sector')['statement_date'].max()

    rows = []
    for sector, latest_date in sector_latest.items():
        latest_val = pivot.at[sector, latest_date]
        if pd.isna(latest_val):
            continue
        idx = all_dates.index(latest_date)

        row = {'sector': sector}
        for label, back in WINDOWS.items():
            if idx - back < 0:
                row[label] = None
                continue
            old = pivot.at[sector, all_dates[idx - back]]
            row[label] = None if pd.isna(old) else round(float(latest_val) - float(old), 2)
        rows.append(row)

    return all_dates[-1], rows
