#!/usr/bin/env python3
"""
CDSL rolling FPI AUC deltas per sector (15D/30D/90D/180D/360D).

Collects the AUC column of every statement published in the last 400 days,
then writes the change from each lookback statement to the latest one into
cdsl_fii_sector_rolling.csv, keyed on (statement_date, sector).
"""

import argparse
import logging
import time
from datetime import date, timedelta
from pathlib import Path

from tqdm import tqdm

import config
from parse_tables import extract_auc
from periods import cdsl_publication_dates, long_date
from rolling import MIN_ROLLING_ROWS, WINDOWS, rolling_deltas
from scraper import AUC_MARKERS, fetch_working_page
from store import changed_rows, hash_row, upsert_csv

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

LOOKBACK_DAYS = 400
ROLLING_KEYS = ('statement_date', 'sector')


def statement_dates(today, lookback_days=LOOKBACK_DAYS):
    cutoff = today - timedelta(days=lookback_days)
    return [
        d for d in cdsl_publication_dates(today.year - 1, today.year)
        if cutoff <= d <= today
    ]


def scrape_auc(dates, delay=config.REQUEST_DELAY, fetch=None):
    fetch = fetch or fetch_working_page
    scraped = []
    for i, d in enumerate(tqdm(dates, desc="Statements")):
        if i:
            time.sleep(delay)
        label = long_date(d)
        html = fetch(d, markers=AUC_MARKERS)
        rows = extract_auc(html, label)
        if rows:
            logging.info(f"Parsed: {label}")
        scraped.extend(rows)
    return scraped


def build_rolling_rows(records):
    """Rows ready for the sink, each carrying a data_hash of its payload."""
    statement_date, deltas = rolling_deltas(records)
    out = []
    for r in deltas:
        payload = {
            'statement_date': statement_date.isoformat(),
            'sector': r['sector'],
        }
        for label in WINDOWS:
            payload[f"d{label[:-1]}"] = r[label]
        payload['data_hash'] = hash_row(payload)
        out.append(payload)
    return out


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument('--data-dir', type=Path, default=config.DATA_DIR)
    parser.add_argument('--delay', type=float, default=config.REQUEST_DELAY)
    args = parser.parse_args(argv)

    scraped = scrape_auc(statement_dates(date.today()), delay=args.delay)
    rows = build_rolling_rows(scraped)

    if len(rows) < MIN_ROLLING_ROWS:
        logging.error("CDSL page likely not published or blocked. Aborting.")
        return 0
    logging.info(f"Latest statement: {rows[0]['statement_date']}")

    out_csv = args.data_dir / config.ROLLING_CSV
    to_upsert = changed_rows(out_csv, rows, ROLLING_KEYS)
    if not to_upsert:
        logging.info("No change in CDSL data. Skipping update.")
        return 0

    written = upsert_csv(out_csv, to_upsert, ROLLING_KEYS)
    logging.info(f"Rows inserted/updated: {written}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
