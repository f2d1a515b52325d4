"""Settings shared by every environment, read from the process environment."""
import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/?replicaSet=rs0")
MONGODB_DB = os.getenv("MONGODB_DB", "late_comers")

# Shared secret for POST /api/clear-monthly?token=...
CRON_SECRET_TOKEN = os.getenv("CRON_SECRET_TOKEN", "")

# Fine policy
LATE_THRESHOLD = int(os.getenv("LATE_THRESHOLD", "3"))
FINE_UNIT_PRICE = int(os.getenv("FINE_UNIT_PRICE", "50"))
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "₹")

# Monthly reset
RESET_PAGE_SIZE = int(os.getenv("RESET_PAGE_SIZE", "500"))
RESET_TIMEZONE = os.getenv("RESET_TIMEZONE", "Asia/Kolkata")

MAX_LEDGER_ENTRIES = int(os.getenv("MAX_LEDGER_ENTRIES", "20000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
