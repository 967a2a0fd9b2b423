"""
Constants Module - Centralized configuration values
===================================================

PURPOSE: Single source of truth for the tee-sheet URLs, selectors and
         scheduling defaults used by the queue processor
PATTERN: Module-level constants grouped by concern
SCOPE: Application-wide defaults; runtime overrides live in settings
"""

# Booking site
LOGIN_URL = "https://lorabaygolf.clubhouseonline-e3.com/login.aspx"
TEE_SHEET_URL = "https://lorabaygolf.clubhouseonline-e3.com/TeeTimes/TeeSheet.aspx"
BROWSER_VIEWPORT = {"width": 1280, "height": 720}
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

# Tee sheet selectors
BOOKING_FRAME_SELECTOR = "iframe#module"
COURSE_NAME = "Lora Bay"
COURSE_READY_SELECTOR = (
    f'div.input-wpr:has(label:text-is("Golf Course")) div.input:text-is("{COURSE_NAME}")'
)
DATE_ITEM_SELECTOR = "div.item.ng-scope.slick-slide"
DATE_TEXT_SELECTOR = "div.date.ng-binding"
SELECTED_DATE_TEMPLATE = (
    'div.item.ng-scope.slick-slide.date-selected:has(div.date.ng-binding:text-is("{label}"))'
)
SLOT_ROW_SELECTOR = "div.flex-row.ng-scope"
SLOT_AVAILABILITY_SELECTOR = "div.availability.ng-scope strong.value.ng-binding"
SLOT_TIME_SELECTOR = "div.teesheet-leftcol.ng-scope div.time.ng-binding"
SLOT_MARKER_ATTRIBUTE = "data-teetime-slot"
ADD_GROUP_TEXT = "ADD BUDDIES & GROUPS"
GROUP_NAME_PATTERN = r"Test group \(\d+ people\)"
BOOK_NOW_SELECTOR = 'a.btn.btn-primary:has-text("BOOK NOW")'
CONFIRMATION_NUMBER_PATTERN = r"Confirmation\s*(?:#|Number|No\.?)?\s*:?\s*([A-Z0-9-]{4,})"

# Timeouts (milliseconds for Playwright, seconds elsewhere)
READY_TIMEOUT_MS = 10_000
SCREENSHOT_TIMEOUT_MS = 5_000
DEFAULT_SETTLE_SECONDS = 3.0
WORKER_TIMEOUT_SECONDS = 900.0

# Scheduling defaults
REQUIRED_PARTY_SIZE = 4
DEFAULT_BATCH_SIZE = 3
DEFAULT_MAX_ATTEMPTS = 2
DEFAULT_RETRY_DELAY_SECONDS = 30.0
DEFAULT_LEAD_DAYS = 30
DEFAULT_GRACE_DAYS = 3
DEFAULT_TIMEZONE = "America/New_York"
DEFAULT_BOOKING_OPEN_TIME = "07:00"
DEFAULT_GATE_LATE_GRACE_MINUTES = 60

# Queue files
DEFAULT_QUEUE_FILE = "booking-queue.json"
TEST_QUEUE_FILE = "test-booking-queue.json"
DEFAULT_LOG_DIR = "logs"

# Month abbreviations as rendered by the tee sheet date carousel ("Jul 12").
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

