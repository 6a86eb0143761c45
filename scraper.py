#!/usr/bin/env python3
"""
Document fetching for CDSL fortnightly pages and NSE filings.

CDSL names its fortnightly files inconsistently, so every publication date
is probed under each known spelling until one returns a usable page.
Failures are logged and reported as None; callers treat that the same as
"page has no usable table".
"""

import logging
from urllib.parse import quote

import requests

from config import CDSL_BASE_URL, HTTP_TIMEOUT, USER_AGENT
from periods import long_date

HTML_HEADERS = {"User-Agent": USER_AGENT}
XML_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept-Language": "en-US,en;q=0.9",
    "Accept": "application/xml,text/xml;q=0.9,*/*;q=0.8",
}

NET_INVESTMENT_MARKERS = ("Sectors", "Net Investment")
AUC_MARKERS = ("Sectors", "AUC as on")


def candidate_urls(d, base_url=CDSL_BASE_URL):
    """Known CDSL filename spellings for one publication date."""
    month, day, year = long_date(d).replace(',', '').split(' ')
    return [
        base_url + f"{month}{day}{year}.html",
        base_url + quote(f"{month} {day} {year}.html"),
        base_url + quote(f"{month} {day}, {year}.html"),
        base_url + quote(f"{month} {day},{year}.html"),
    ]


def fetch_page(url, headers=HTML_HEADERS, session=None):
    """Body text for a 200 response, else None."""
    http = session or requests
    try:
        resp = http.get(url, headers=headers, timeout=HTTP_TIMEOUT)
    except requests.RequestException as e:
        logging.warning(f"Request failed for {url}: {e}")
        return None
    if resp.status_code != 200:
        logging.debug(f"HTTP {resp.status_code} for {url}")
        return None
    return resp.text


def fetch_working_page(d, markers=NET_INVESTMENT_MARKERS, session=None, base_url=CDSL_BASE_URL):
    """First candidate page for date d whose body contains every marker."""
    for url in candidate_urls(d, base_url=base_url):
        logging.info(f"Trying: {url}")
        html = fetch_page(url, session=session)
        if html and all(m in html for m in markers):
            logging.info(f"Found: {url}")
            return html

    logging.info(f"Not published: {d.isoformat()}")
    return None


def fetch_xml(url, session=None):
    """Raw bytes of an XML document (RSS feed or XBRL filing), else None."""
    http = session or requests
    try:
        resp = http.get(url, headers=XML_HEADERS, timeout=HTTP_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as e:
        logging.warning(f"Failed to fetch {url}: {e}")
        return None
    return resp.content
