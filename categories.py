"""
Ownership categories for NSE shareholding-pattern XBRL filings.

CATEGORY_MAP ties an instant context id from the filing to one of the
CATEGORY_KEYS buckets. Only exact ids count; anything else is ignored.
"""

from types import MappingProxyType

CATEGORY_MAP = MappingProxyType({
    # Promoter
    'Indian_ContextI': 'promoter',
    'Foreign_ContextI': 'promoter',
    'Promoters_ContextI': 'promoter',
    'PromoterGroup_ContextI': 'promoter',
    'PromoterAndPromoterGroup_ContextI': 'promoter',

    # Institutional
    'InstitutionsForeign_ContextI': 'fii',
    'MutualFundsOrUTI_ContextI': 'mutualFund',
    'InsuranceCompanies_ContextI': 'insurance',
    'Banks_ContextI': 'banks',

    # Individual
    'ResidentIndividualShareholdersHoldingNominalShareCapitalUpToRsTwoLakh_ContextI': 'retail',
    'ResidentIndividualShareholdersHoldingNominalShareCapitalInExcessOfRsTwoLakh_ContextI': 'hni',

    # Other public
    'NonResidentIndians_ContextI': 'nri',
    'BodiesCorporate_ContextI': 'corporate',
    'Trusts_ContextI': 'trust',
    'ClearingMembers_ContextI': 'clearing',
    'NonBankingFinancialCompanies_ContextI': 'nbfc',
    'AnyOther_ContextI': 'others',
})

CATEGORY_KEYS = (
    'promoter', 'fii', 'mutualFund', 'insurance', 'banks',
    'retail', 'hni', 'nri', 'corporate', 'trust',
    'clearing', 'nbfc', 'others',
)

# Derived buckets, always rebuilt from the rounded components
ROLLUPS = MappingProxyType({
    'individual': ('retail', 'hni'),
    'institutional': ('fii', 'mutualFund', 'insurance', 'banks'),
})


def aggregate_categories(facts):
    """
    Fold (context id, fraction text) pairs into percentage totals per
    category. Fractions are on a 0-1 scale in the filing. Returns every
    key in CATEGORY_KEYS plus the ROLLUPS, rounded to 2 places.
    """
    totals = dict.fromkeys(CATEGORY_KEYS, 0.0)

    for context, raw in facts:
        category = CATEGORY_MAP.get(context)
        if category is None:
            continue
        try:
            totals[category] += float(raw) * 100
        except (TypeError, ValueError):
            continue

    result = {k: round(v, 2) for k, v in totals.items()}
    for rollup, parts in ROLLUPS.items():
        result[rollup] = round(sum(result[p] for p in parts), 2)
    return result
