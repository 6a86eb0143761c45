#!/usr/bin/env python3
"""
NSE shareholding-pattern poller.

Reads the exchange RSS feed, and for every filing link not seen before
downloads the XBRL document, totals the ownership categories and stores
them under (symbol, quarter) in holdings.json.
"""

import argparse
import logging
import re
import time
from pathlib import Path

from lxml import etree
from tqdm import tqdm

import config
from parse_xbrl import parse_shareholding
from periods import normalize_rss_date
from scraper import fetch_xml
from store import HoldingsStore, SeenLinks, load_json

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

AS_ON_PAT = re.compile(r"AS ON DATE\s*:\s*(\d{2}-[A-Za-z]{3}-\d{4})", re.I)


def parse_feed(xml):
    """[(link, description)] for each RSS item, in feed order."""
    root = etree.fromstring(xml, parser=etree.XMLParser(resolve_entities=False, no_network=True))
    items = []
    for item in root.iter('item'):
        link = (item.findtext('link') or '').strip()
        if link:
            items.append((link, (item.findtext('description') or '').strip()))
    return items


def quarter_of(description):
    m = AS_ON_PAT.search(description or '')
    return normalize_rss_date(m.group(1)) if m else None


def isin_to_symbol(companies):
    """companies.json is {symbol: {'isin': ...}}."""
    return {info['isin']: sym for sym, info in companies.items() if info.get('isin')}


def process_filing(link, description, symbols, book, fetch=fetch_xml):
    """Returns True when the filing was handled and can be marked seen."""
    quarter = quarter_of(description)
    if quarter is None:
        logging.warning(f"No AS ON DATE in description: {link}")
        return False

    xml = fetch(link)
    if xml is None:
        return False
    try:
        isin, holdings = parse_shareholding(xml)
    except etree.XMLSyntaxError as e:
        logging.warning(f"Malformed XBRL at {link}: {e}")
        return False

    symbol = symbols.get(isin)
    if symbol is None:
        logging.info(f"Unknown ISIN: {isin}")
        return False

    status = book.upsert(symbol, quarter, holdings)
    logging.info(f"{status.upper()}: {symbol} {quarter}")
    return True


def check_rss(data_dir, delay=config.REQUEST_DELAY, feed_url=config.NSE_SHAREHOLDING_RSS, fetch=fetch_xml):
    seen = SeenLinks(data_dir / config.SEEN_JSON)
    book = HoldingsStore(data_dir / config.HOLDINGS_JSON)
    symbols = isin_to_symbol(load_json(data_dir / config.COMPANIES_JSON, {}))

    feed = fetch(feed_url)
    if feed is None:
        logging.error("Shareholding RSS feed unavailable")
        return 0

    new_items = [(link, desc) for link, desc in parse_feed(feed) if link not in seen]
    logging.info(f"{len(new_items)} new filings")

    processed = 0
    for i, (link, desc) in enumerate(tqdm(new_items, desc="Filings")):
        if i:
            time.sleep(delay)
        logging.info(f"New filing: {link}")
        if process_filing(link, desc, symbols, book, fetch=fetch):
            seen.add(link)
            processed += 1

    seen.save()
    return processed


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument('--data-dir', type=Path, default=config.DATA_DIR)
    parser.add_argument('--delay', type=float, default=config.REQUEST_DELAY)
    args = parser.parse_args(argv)

    processed = check_rss(args.data_dir, delay=args.delay)
    logging.info(f"Filings stored: {processed}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
