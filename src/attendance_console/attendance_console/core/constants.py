"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_HOURS = 12
DEFAULT_PAGE_SIZE = 30
DEFAULT_EXPORT_DATE_FORMAT = "%d/%m/%Y"

MAX_LEAVE_PLANS = 3

# Excel limits sheet titles to 31 characters.
SHEET_NAME_LIMIT = 31

SHIFT_COLORS = {
    "Blue": "#3B82F6",
    "Green": "#10B981",
    "Yellow": "#F59E0B",
    "Red": "#EF4444",
    "Purple": "#8B5CF6",
    "Pink": "#EC4899",
    "Indigo": "#6366F1",
    "Teal": "#14B8A6",
}
DEFAULT_SHIFT_COLOR = SHIFT_COLORS["Blue"]
SHIFT_TYPE_COLOR = "#FFB3D9"
