import os
from dotenv import load_dotenv
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / '.env')


DATA_DIR = Path(os.environ.get('MARKETFLOWS_DATA_DIR', BASE_DIR / 'data'))

# Seconds between document fetches (NSE/CDSL throttle)
REQUEST_DELAY = float(os.environ.get('MARKETFLOWS_REQUEST_DELAY', '1.0'))
HTTP_TIMEOUT = 20

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 Chrome/120 Safari/537.36"
)

CDSL_BASE_URL = "https://www.cdslindia.com/publications/FII/FortnightlySecWisePages/"
NSE_SHAREHOLDING_RSS = "https://nsearchives.nseindia.com/content/RSS/Shareholding_Pattern.xml"

# Output / state files, relative to DATA_DIR
FLOWS_CSV = 'sector_flows_net.csv'
ROLLING_CSV = 'cdsl_fii_sector_rolling.csv'
HOLDINGS_JSON = 'holdings.json'
SEEN_JSON = 'seen.json'
COMPANIES_JSON = 'companies.json'
