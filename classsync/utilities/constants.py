from typing import Final

ISO_DATE_FORMAT: Final[str] = "%Y-%m-%d"
DISPLAY_DATE_FORMAT: Final[str] = "%d/%m/%Y"
DEFAULT_CLASS_TIME: Final[str] = "--:--"
DEFAULT_CANCEL_REASON: Final[str] = "Not specified"

# Upper bounds on the day-by-day walks; hitting one means the schedule
# cannot produce the requested number of slots (e.g. no weekdays configured).
INITIAL_COUNT_CAP: Final[int] = 2000
CLASS_LIST_CAP: Final[int] = 3000

MAX_DURATION_MONTHS: Final[int] = 24

MONTH_NAMES: Final[tuple[str, ...]] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
DAY_NAMES: Final[tuple[str, ...]] = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)

# Remote store: one shared row holding the whole plan list
SYNC_TABLE: Final[str] = "class_sync_data"
SYNC_RECORD_ID: Final[str] = "current_user_data"
