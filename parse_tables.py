#!/usr/bin/env python3
"""
Column resolution for CDSL fortnightly sector-wise FPI tables.

The pages carry a single wide table whose first HEADER_ROWS rows are a
merged (colspan) header. The wording drifts between publications, so columns
are located by flattening the header into one path per physical column and
matching those paths against a ColumnSpec.
"""

import re
import logging
from dataclasses import dataclass
from collections import namedtuple

from bs4 import BeautifulSoup

from periods import MONTH_NAMES, parse_period_range

HEADER_ROWS = 4
PATH_SEP = " > "
TOTAL_LABEL = "Grand Total"
PLACEHOLDERS = ("", "--")
NUMBER_PAT = re.compile(r"\d+(?:\.\d+)?")

PERIOD_PAT = re.compile(rf"({MONTH_NAMES}).*?\d{{4}}")
AUC_PATH_TEMPLATE = "AUC as on {date} > IN INR Cr. > Equity > Equity"


def text(cell):
    if cell is None:
        return ''
    return re.sub(r'\s+', ' ', cell.get_text().replace('\xa0', ' ')).strip()


def clean_sector(s):
    return re.sub(r'\s+', ' ', (s or '').replace('\xa0', ' ')).strip()


def parse_number(raw):
    """
    Normalize a CDSL figure. '--' and blanks mean "no data" and give None,
    accounting negatives '(500.00)' give -500.0, thousands commas are dropped.
    Anything left that is not a number also gives None.
    """
    if raw is None:
        return None
    t = raw.replace('\xa0', '').strip()
    if t in PLACEHOLDERS:
        return None

    sign = 1
    if t.startswith('(') and t.endswith(')'):
        sign = -1
        t = t[1:-1]
    t = t.replace(',', '').strip()
    if t.startswith('-'):
        sign, t = -sign, t[1:]
    if not NUMBER_PAT.fullmatch(t):
        return None
    return sign * float(t)


# ---------------------------------------------------------------------------
# Header grid
# ---------------------------------------------------------------------------

def _colspan(cell):
    try:
        return max(int(cell.get('colspan') or 1), 1)
    except (TypeError, ValueError):
        return 1


def read_header_rows(table, header_rows=HEADER_ROWS):
    """(text, colspan) cells for the first header_rows <tr> of a bs4 table."""
    rows = table.find_all('tr')[:header_rows]
    return [
        [(text(c), _colspan(c)) for c in tr.find_all(['td', 'th'])]
        for tr in rows
    ]


def flatten_header(rows):
    """
    Expand colspans into a grid and join each column's non-empty cells
    top-to-bottom with ' > '. The deepest row decides the column count.
    """
    grid = []
    for row in rows:
        slots = []
        for cell_text, span in row:
            slots.extend([cell_text] * span)
        grid.append(slots)

    if not grid:
        return []
    total_cols = len(grid[-1]) or max(len(r) for r in grid)

    paths = []
    for c in range(total_cols):
        parts = [r[c] for r in grid if c < len(r) and r[c]]
        paths.append(PATH_SEP.join(parts))
    return paths


# ---------------------------------------------------------------------------
# Column matching
# ---------------------------------------------------------------------------

TargetColumn = namedtuple('TargetColumn', ['index', 'period', 'header'])


@dataclass(frozen=True)
class ColumnSpec:
    """
    Either a literal header path (exact) or named regex predicates that must
    all hold (fuzzy). In fuzzy mode a column also needs a period token,
    and the rightmost qualifying column wins unless rightmost is False.
    """
    predicates: tuple = ()
    period_pattern: object = PERIOD_PAT
    exact: str = None
    rightmost: bool = True

    @classmethod
    def exact_path(cls, path, period=None):
        return cls(exact=path, period_pattern=re.compile(re.escape(period)) if period else None)

    @classmethod
    def fuzzy(cls, period_pattern=PERIOD_PAT, rightmost=True, **patterns):
        preds = tuple(
            (name, p if isinstance(p, re.Pattern) else re.compile(p, re.I))
            for name, p in patterns.items()
        )
        return cls(predicates=preds, period_pattern=period_pattern, rightmost=rightmost)

    def failed(self, header):
        """Names of predicates the header does not satisfy."""
        return [name for name, pat in self.predicates if not pat.search(header)]


def _period_of(spec, header):
    if spec.period_pattern is None:
        return None
    m = spec.period_pattern.search(header)
    return m.group(0) if m else None


def find_exact_column(header_paths, expected, period=None):
    for i, h in enumerate(header_paths):
        if h == expected:
            return TargetColumn(i, period, h)
    return None


def find_target_column(header_paths, spec):
    """
    Resolve spec against the flattened headers. Periods are laid out
    oldest to newest, so by default the rightmost qualifying column is
    returned; specs with rightmost=False take the leftmost.
    """
    if spec.exact is not None:
        return find_exact_column(header_paths, spec.exact, _period_of(spec, spec.exact))

    candidates = []
    for i, h in enumerate(header_paths):
        header = re.sub(r'\s+', ' ', h).strip()
        if not header or spec.failed(header):
            continue
        period = _period_of(spec, header)
        if spec.period_pattern is not None and period is None:
            continue
        candidates.append(TargetColumn(i, period, header))

    if not candidates:
        return None
    return candidates[-1] if spec.rightmost else candidates[0]


NET_INVESTMENT_SPEC = ColumnSpec.fuzzy(
    net_investment=r"Net Investment",
    equity_equity=r">\s*Equity\s*>\s*Equity",
    inr_crore=r">\s*IN\s*INR\s*Cr\.?",
)

SECTOR_SPEC = ColumnSpec.fuzzy(period_pattern=None, rightmost=False, sectors=r"^Sectors$")


def auc_spec(statement_date_label):
    """Exact AUC column for one statement, e.g. 'November 15, 2024'."""
    return ColumnSpec.exact_path(
        AUC_PATH_TEMPLATE.format(date=statement_date_label),
        period=statement_date_label,
    )


# ---------------------------------------------------------------------------
# Body rows
# ---------------------------------------------------------------------------

def body_rows(table, header_rows=HEADER_ROWS):
    """Cell text lists for the data rows below the header block."""
    out = []
    for tr in table.find_all('tr')[header_rows:]:
        cells = tr.find_all(['td', 'th'])
        if not cells:
            continue
        out.append([text(c) for c in cells])
    return out


def extract_rows(rows, sector_index, target_index):
    """
    (sector, value) per body row, in document order. Blank sectors and the
    Grand Total row are dropped; a short row reads as an empty cell.
    """
    out = []
    for cells in rows:
        sector = clean_sector(cells[sector_index] if sector_index < len(cells) else '')
        if not sector or sector == TOTAL_LABEL:
            continue
        raw = cells[target_index] if target_index < len(cells) else ''
        out.append((sector, parse_number(raw)))
    return out


def first_table(html):
    soup = BeautifulSoup(html, 'lxml')
    return soup.find('table')


def resolve_columns(table, spec):
    """(sector column index, TargetColumn) or None when either is missing."""
    header_paths = flatten_header(read_header_rows(table))

    sector = find_target_column(header_paths, SECTOR_SPEC)
    if sector is None:
        logging.warning("Sector column not found")
        return None

    target = find_target_column(header_paths, spec)
    if target is None:
        logging.warning("Target column not found")
        return None
    return sector.index, target


def extract_net_investment(html, spec=NET_INVESTMENT_SPEC):
    """
    Sector records for the most recent fortnight on a CDSL page:
    dicts with sector, period_start, period_end and net_investment_equity.
    Empty list when the page, table, column or period cannot be resolved.
    """
    if not html:
        return []
    table = first_table(html)
    if table is None:
        return []

    resolved = resolve_columns(table, spec)
    if resolved is None:
        return []
    sector_index, target = resolved

    rng = parse_period_range(target.period)
    if rng is None:
        logging.warning(f"Unrecognised period label: {target.period!r}")
        return []

    logging.info(f"Using column: {target.period}")
    return [
        {
            'sector': sector,
            'period_start': rng.period_start,
            'period_end': rng.period_end,
            'net_investment_equity': value,
        }
        for sector, value in extract_rows(body_rows(table), sector_index, target.index)
    ]


def extract_auc(html, statement_label):
    """
    AUC (INR Cr, equity) per sector for the statement dated statement_label.
    Values stay None when the cell is blank.
    """
    if not html:
        return []
    table = first_table(html)
    if table is None:
        return []

    resolved = resolve_columns(table, auc_spec(statement_label))
    if resolved is None:
        return []
    sector_index, target = resolved

    return [
        {'sector': sector, 'statement': statement_label, 'value': value}
        for sector, value in extract_rows(body_rows(table), sector_index, target.index)
    ]
