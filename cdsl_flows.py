#!/usr/bin/env python3
"""
CDSL fortnightly FPI net investment (equity, INR Cr) per sector.

Walks every CDSL publication date from the start of last year up to today,
skipping dates already covered by the stored flows, and upserts one row per
(sector, period_end) into sector_flows_net.csv.
"""

import argparse
import logging
import time
from datetime import date
from pathlib import Path

from tqdm import tqdm

import config
from parse_tables import extract_net_investment
from periods import cdsl_publication_dates
from scraper import NET_INVESTMENT_MARKERS, fetch_working_page
from store import latest_value, upsert_csv

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

FLOW_KEYS = ('sector', 'period_end')


def pending_dates(today, latest_stored=None):
    """Publication dates not in the future and newer than latest_stored (ISO string)."""
    dates = cdsl_publication_dates(today.year - 1, today.year)
    out = []
    for d in dates:
        if d > today:
            continue
        if latest_stored and d.isoformat() <= latest_stored:
            continue
        out.append(d)
    return out


def scrape_flows(dates, delay=config.REQUEST_DELAY, fetch=None):
    fetch = fetch or fetch_working_page
    scraped = []
    for i, d in enumerate(tqdm(dates, desc="Statements")):
        if i:
            time.sleep(delay)
        html = fetch(d, markers=NET_INVESTMENT_MARKERS)
        rows = extract_net_investment(html)
        if not rows:
            logging.info(f"No rows for {d.isoformat()}")
        scraped.extend(rows)
    return scraped


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument('--data-dir', type=Path, default=config.DATA_DIR)
    parser.add_argument('--delay', type=float, default=config.REQUEST_DELAY)
    args = parser.parse_args(argv)

    out_csv = args.data_dir / config.FLOWS_CSV
    latest = latest_value(out_csv, 'period_end')
    dates = pending_dates(date.today(), latest)
    logging.info(f"Latest stored period_end: {latest}; {len(dates)} statements to check")

    scraped = scrape_flows(dates, delay=args.delay)
    if not scraped:
        logging.info("No data extracted.")
        return 0

    rows = [r for r in scraped if r['net_investment_equity'] is not None]
    written = upsert_csv(out_csv, rows, FLOW_KEYS)
    logging.info(f"Rows processed: {written} -> {out_csv}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
