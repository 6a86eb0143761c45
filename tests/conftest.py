import pytest

CDSL_HTML = """
<html><body>
<table>
  <tr>
    <td>Sectors</td>
    <td colspan="2">AUC as on November 15, 2024</td>
    <td colspan="2">Net Investment Fortnight (November 1-15, 2024)</td>
    <td colspan="2">Net Investment Fortnight (November 16-30, 2024)</td>
  </tr>
  <tr>
    <td></td>
    <td colspan="2">IN INR Cr.</td>
    <td colspan="2">IN INR Cr.</td>
    <td colspan="2">IN INR Cr.</td>
  </tr>
  <tr>
    <td></td>
    <td>Equity</td><td>Debt</td>
    <td>Equity</td><td>Debt</td>
    <td>Equity</td><td>Debt</td>
  </tr>
  <tr>
    <td></td>
    <td>Equity</td><td>Debt</td>
    <td>Equity</td><td>Debt</td>
    <td>Equity</td><td>Debt</td>
  </tr>
  <tr>
    <td>Automobile and Auto Components</td>
    <td>1,234.50</td><td>10</td><td>(500.00)</td><td>1</td><td>2,000.25</td><td>2</td>
  </tr>
  <tr>
    <td>Banks&nbsp;</td>
    <td>--</td><td>4</td><td>12</td><td>3</td><td>(300.10)</td><td>5</td>
  </tr>
  <tr>
    <td></td>
    <td>9</td><td>9</td><td>9</td><td>9</td><td>9</td><td>9</td>
  </tr>
  <tr>
    <td>Capital    Goods</td>
    <td>45</td><td>1</td><td>7</td><td>0</td><td>--</td><td>0</td>
  </tr>
  <tr>
    <td>Grand Total</td>
    <td>99,999.00</td><td>1</td><td>1</td><td>1</td><td>1,700.15</td><td>1</td>
  </tr>
</table>
</body></html>
"""

XBRL_DOC = b"""<?xml version="1.0" encoding="UTF-8"?>
<xbrli:xbrl xmlns:xbrli="http://www.xbrl.org/2003/instance"
            xmlns:in-bse-shp="http://www.bseindia.com/xbrl/shp/2023-03-31/in-bse-shp">
  <xbrli:context id="OneD">
    <xbrli:entity><xbrli:identifier scheme="http://www.nseindia.com">ACME</xbrli:identifier></xbrli:entity>
  </xbrli:context>
  <in-bse-shp:Symbol contextRef="OneD">ACME</in-bse-shp:Symbol>
  <in-bse-shp:ISIN contextRef="OneD">INE123A01016</in-bse-shp:ISIN>
  <in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares contextRef="Promoters_Context3" unitRef="pure" decimals="4">0.4512</in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares>
  <in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares contextRef="InstitutionsForeign_ContextI" unitRef="pure" decimals="4">0.1834</in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares>
  <in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares contextRef="MutualFundsOrUTI_Context7" unitRef="pure" decimals="4">0.0911</in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares>
  <in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares contextRef="InsuranceCompanies_ContextI" unitRef="pure" decimals="4">0.0302</in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares>
  <in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares contextRef="Banks_ContextI" unitRef="pure" decimals="4">0.0011</in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares>
  <in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares contextRef="ResidentIndividualShareholdersHoldingNominalShareCapitalUpToRsTwoLakh_ContextI" unitRef="pure" decimals="4">0.12</in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares>
  <in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares contextRef="ResidentIndividualShareholdersHoldingNominalShareCapitalInExcessOfRsTwoLakh_ContextI" unitRef="pure" decimals="4">0.0345</in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares>
  <in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares contextRef="SomethingElse_ContextI" unitRef="pure" decimals="4">0.5</in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares>
  <in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares contextRef="Trusts_Context12" unitRef="pure" decimals="4">0.01</in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares>
  <in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares unitRef="pure" decimals="4">0.2</in-bse-shp:ShareholdingAsAPercentageOfTotalNumberOfShares>
</xbrli:xbrl>
"""

RSS_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Shareholding Pattern</title>
    <item>
      <title>ACME LIMITED</title>
      <link>https://example.test/shp/acme.xml</link>
      <description>ACME LIMITED|AS ON DATE : 31-Dec-2024|SUBMISSION TYPE : Original</description>
    </item>
    <item>
      <title>UNLISTED CO</title>
      <link>https://example.test/shp/unknown.xml</link>
      <description>AS ON DATE : 31-Dec-2024</description>
    </item>
    <item>
      <title>NO DATE</title>
      <link>https://example.test/shp/nodate.xml</link>
      <description>Filing without a date</description>
    </item>
  </channel>
</rss>
"""

UNKNOWN_ISIN_DOC = b"""<?xml version="1.0"?>
<xbrl><ISIN contextRef="OneD">INE999Z01010</ISIN></xbrl>
"""


@pytest.fixture
def cdsl_html():
    return CDSL_HTML


@pytest.fixture
def xbrl_doc():
    return XBRL_DOC


@pytest.fixture
def rss_feed():
    return RSS_FEED


@pytest.fixture
def unknown_isin_doc():
    return UNKNOWN_ISIN_DOC
