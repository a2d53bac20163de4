"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = Path(os.environ.get("INVOICE_DATA_DIR", str(PROJECT_ROOT / "data")))
DB_PATH = DATA_DIR / "db" / "invoices.db"
SETTINGS_PATH = DATA_DIR / "settings.json"
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# COMPANY PROFILE (printed on every invoice)
# =============================================================================

COMPANY_INFO = {
    "name": "KIZORA SOFTWARE PRIVATE LIMITED",
    "address": "Plot No. 12 First Floor, Hill Top, Ambazari",
    "city": "Nagpur Maharashtra 440033, INDIA",
    "phone": "+91 8080466754",
    "email": "info@kizora.com",
    "website": "www.kizora.com",
    "gst": "27AAECK4021C1Z3",
    "cin": "U72300MH2011PTC219628",
}

WATERMARK_TEXT = "KIZORA"

LOGO_URL = (
    "https://cdn.builder.io/api/v1/image/assets%2F55b229a52c0444268b0b5f1318fee335"
    "%2F348c765c32b5495094a7b58c5d2b32be?format=png&width=800&background=transparent"
)
LOGO_ALT = "Kizora Software Private Limited"

# =============================================================================
# INVOICE RULES
# =============================================================================

PAYMENT_TERMS_DAYS = 15
DEFAULT_CURRENCY = "EUR"
DEFAULT_STATUS = "active"
PROJECT_STATUSES = ("active", "completed", "draft")

# Dates are "today" in this zone when the API derives invoice fields
INVOICE_TIMEZONE = os.environ.get("INVOICE_TIMEZONE", "Asia/Kolkata")

# Year options offered by the work period picker, relative to the current year
WORK_PERIOD_YEARS_BEFORE = 2
WORK_PERIOD_YEAR_COUNT = 10

# =============================================================================
# SPREADSHEET IMPORT
# =============================================================================

SPREADSHEET_EXTENSIONS = (".xlsx", ".xlsm")
IMPORT_MIN_COLUMNS = 4
SAMPLE_IMPORT_HEADERS = ["Employee Name", "Project Name", "Rate Per Hour", "Hours", "Total Amount"]
SAMPLE_PROJECT_NAMES = ["West Horminics", "East Analytics", "North Platform"]

# Uploads awaiting confirmation are held in memory; the oldest are dropped first
IMPORT_SESSION_LIMIT = int(os.environ.get("IMPORT_SESSION_LIMIT", "10"))
IMPORT_SESSION_TTL_SECONDS = int(os.environ.get("IMPORT_SESSION_TTL_SECONDS", "3600"))

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
MAX_UPLOAD_SIZE_MB = int(os.environ.get("MAX_UPLOAD_SIZE_MB", "10"))
MAX_UPLOAD_SIZE_BYTES = MAX_UPLOAD_SIZE_MB * 1024 * 1024
API_VERSION = "1.0.0"
