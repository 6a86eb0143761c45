#!/usr/bin/env python3
"""
Shareholding-pattern XBRL parsing for NSE filings.

Filings are namespaced XML whose nesting changes between filers, so the
document is loaded into plain dicts/lists/strings and searched by walking
every key rather than by fixed XPaths.
"""

import re
import logging

from lxml import etree

from categories import aggregate_categories

TEXT_KEY = '#text'
ISIN_PREFIX = 'INE'
PERCENT_TAG = 'ShareholdingAsAPercentageOfTotalNumberOfShares'
CONTEXT_SUFFIX_PAT = re.compile(r'_Context.$')


def local_name(tag):
    if not isinstance(tag, str):
        return None
    return etree.QName(tag).localname if tag.startswith('{') else tag.split(':')[-1]


def element_to_tree(elem):
    """
    Element -> plain value. A bare element becomes its text; otherwise a
    dict of attributes, children by local name (repeats become a list)
    and '#text' for any non-blank text.
    """
    children = [c for c in elem if local_name(c.tag)]
    text = (elem.text or '').strip()

    if not children and not elem.attrib:
        return text

    node = {}
    for k, v in elem.attrib.items():
        node[local_name(k)] = v
    for child in children:
        key = local_name(child.tag)
        value = element_to_tree(child)
        if key in node:
            if not isinstance(node[key], list):
                node[key] = [node[key]]
            node[key].append(value)
        else:
            node[key] = value
    if text:
        node[TEXT_KEY] = text
    return node


def load_tree(xml):
    """Parse XBRL bytes/str into {root name: tree}. Raises etree.XMLSyntaxError."""
    if isinstance(xml, str):
        xml = xml.encode('utf-8')
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    root = etree.fromstring(xml, parser=parser)
    return {local_name(root.tag): element_to_tree(root)}


def walk(node):
    """Depth-first, pre-order (key, value) pairs. Lists are descended, not yielded."""
    if isinstance(node, list):
        for item in node:
            yield from walk(item)
    elif isinstance(node, dict):
        for key, value in node.items():
            yield key, value
            yield from walk(value)


def _isin_value(value):
    if isinstance(value, dict):
        value = value.get(TEXT_KEY)
    if isinstance(value, str) and value.startswith(ISIN_PREFIX):
        return value.strip()
    return None


def find_isin(tree):
    for key, value in walk(tree):
        if 'isin' in key.lower():
            isin = _isin_value(value)
            if isin:
                return isin
    return None


def normalize_context(context_ref):
    """Per-instant suffix ('_Context3') -> canonical '_ContextI'."""
    return CONTEXT_SUFFIX_PAT.sub('_ContextI', context_ref)


def iter_percentage_facts(tree):
    """(normalized context id, fraction text) for each shareholding % fact."""
    for key, value in walk(tree):
        if PERCENT_TAG not in key:
            continue
        items = value if isinstance(value, list) else [value]
        for item in items:
            if not isinstance(item, dict):
                continue
            context, raw = item.get('contextRef'), item.get(TEXT_KEY)
            if not context or not raw:
                continue
            yield normalize_context(context), raw


def parse_shareholding(xml):
    """
    (isin, category totals) for one shareholding-pattern filing. isin is
    None when the filing carries none; callers drop such filings.
    """
    tree = load_tree(xml)
    isin = find_isin(tree)
    holdings = aggregate_categories(iter_percentage_facts(tree))
    if isin is None:
        logging.warning("No ISIN found in filing")
    return isin, holdings
