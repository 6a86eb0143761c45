"""
File-backed sinks: keyed CSV upserts for CDSL flows, a JSON holdings
book for NSE shareholding and the set of RSS links already processed.
"""

import hashlib
import json
import logging
from pathlib import Path

import pandas as pd


def load_json(path, fallback):
    path = Path(path)
    if not path.exists():
        return fallback
    with path.open('r', encoding='utf-8') as f:
        return json.load(f)


def save_json(path, data):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open('w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)


def hash_row(row):
    payload = json.dumps(row, sort_keys=True, default=str)
    return hashlib.sha256(payload.encode('utf-8')).hexdigest()


# ---------------------------------------------------------------------------
# CSV upserts
# ---------------------------------------------------------------------------

def read_table(path):
    path = Path(path)
    if not path.exists():
        return pd.DataFrame()
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def upsert_csv(path, rows, keys):
    """
    Merge rows into the CSV at path, keyed on keys. Incoming rows replace
    stored rows with the same key. Returns the number of rows written.
    """
    if not rows:
        return 0
    path = Path(path)
    incoming = pd.DataFrame(rows).astype(str).replace({'None': ''})
    merged = pd.concat([read_table(path), incoming], ignore_index=True)
    merged = merged.drop_duplicates(subset=list(keys), keep='last')
    merged = merged.sort_values(list(keys), kind='stable')

    path.parent.mkdir(parents=True, exist_ok=True)
    merged.to_csv(path, index=False)
    return len(incoming)


def changed_rows(path, rows, keys, hash_field='data_hash'):
    """Rows whose hash differs from the stored row with the same key."""
    existing = read_table(path)
    if existing.empty or hash_field not in existing.columns:
        return list(rows)
    stored = {
        tuple(r[k] for k in keys): r[hash_field]
        for r in existing.to_dict('records')
    }
    return [
        r for r in rows
        if stored.get(tuple(str(r[k]) for k in keys)) != r[hash_field]
    ]


def latest_value(path, column):
    """Largest stored value of column, or None for an empty store."""
    existing = read_table(path)
    if existing.empty or column not in existing.columns:
        return None
    values = existing[column][existing[column] != '']
    return values.max() if len(values) else None


# ---------------------------------------------------------------------------
# Shareholding book + seen links
# ---------------------------------------------------------------------------

class HoldingsStore:
    """{symbol: {quarter: totals}} persisted as JSON."""

    def __init__(self, path):
        self.path = Path(path)
        self.data = load_json(self.path, {})

    def upsert(self, symbol, quarter, holdings):
        """Store totals; returns 'revision' if the quarter was already present, else 'new'."""
        quarters = self.data.setdefault(symbol, {})
        status = 'revision' if quarter in quarters else 'new'
        quarters[quarter] = holdings
        self.save()
        return status

    def save(self):
        save_json(self.path, self.data)


class SeenLinks:
    """Persisted set of feed links that have been fully processed."""

    def __init__(self, path):
        self.path = Path(path)
        self.links = set(load_json(self.path, []))

    def __contains__(self, link):
        return link in self.links

    def add(self, link):
        self.links.add(link)

    def save(self):
        save_json(self.path, sorted(self.links))
        logging.info(f"Seen links saved: {len(self.links)}")
