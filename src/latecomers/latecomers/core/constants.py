"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

USERS_COLLECTION = "users"
LATE_COMERS_COLLECTION = "late-comers"
ARCHIVE_COLLECTION = "archive"

ROLL_NUMBER_LENGTH = 5

DEFAULT_LATE_THRESHOLD = 3
DEFAULT_FINE_UNIT_PRICE = 50
DEFAULT_CURRENCY_SYMBOL = "₹"

# Largest atomic batch the store accepts in one commit.
DEFAULT_RESET_PAGE_SIZE = 500
DEFAULT_RESET_TIMEZONE = "Asia/Kolkata"

# Keeps one account document well under the 16 MB document limit.
DEFAULT_MAX_LEDGER_ENTRIES = 20000

CLEARED_LATE_COMER_FIELDS = {
    "checkInTime": None,
    "checkOutTime": None,
    "date": None,
    "lateTime": None,
    "reason": "",
    "status": "",
}

EXPORT_COLUMNS = [
    "Roll Number",
    "Department",
    "Late Count",
    "Fine Amount",
    "Payment Status",
    "Created Date",
    "Archived Date",
]
EXPORT_SHEET_NAME = "Attendance"
