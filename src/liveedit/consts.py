"""Constants for liveedit"""

# ==================== File Paths ====================
LOG_FILE_DEFAULT = "data/liveedit.log"
CONFIG_FILE_DEFAULT = "config.toml"

# ==================== Service Paths ====================
PERSIST_PREFIX = "/submissions/test-only/proxy-to-gform/gform/builder"
RENDER_PREFIX = "/submissions/test-only/builder"
ERROR_REPORT_PREFIX = "/submissions/test-only/errors"

# ==================== Query Parameters ====================
PARAM_ACCESS_CODE = "a"
PARAM_COORDINATES = "c"
PARAM_SECTION_PATH = "sectionPath"

# ==================== HTTP ====================
JSON_CONTENT_TYPE = "application/json"
PERSIST_HEADERS = {
    "Accept": JSON_CONTENT_TYPE,
    "Content-Type": JSON_CONTENT_TYPE,
}
RENDER_HEADERS = {"Accept": JSON_CONTENT_TYPE}

# ==================== Error Messages ====================
RENDER_JSON_ERROR = "Server error when rendering data. Json error: {error}"
RENDER_BODY_ERROR = "Server error when rendering data. Response body: {body}"
MISSING_COMPONENT_ID = "missing-form-component-id"

# ==================== Field Defaults ====================
YES_NO_CHOICES = ["Yes", "No"]
EMPTY_CHOICE_PLACEHOLDER = "…"
INVISIBLE_PAGE_TITLE = "invisiblePageTitle"
DEFAULT_LOOKUP = "lookup(country)"
OPTIONAL_MARKERS = ("false", "no")

# Format parameter defaults, keyed by text format name
FORMAT_PARAM_DEFAULTS = {
    "text": ("0", "1000"),
    "shortText": ("0", "1000"),
    "number": ("11", "2"),
    "positiveNumber": ("11", "2"),
}
REFERENCE_NUMBER_PARAMS = ("5", "10")
FORMAT_PARAMS_PATTERN = r"\(\s*(\d+)\s*,\s*(\d+)\s*\)"

# Formats that keep their parameters when switched between each other
FORMAT_FAMILIES = (
    frozenset({"text", "shortText"}),
    frozenset({"number", "positiveNumber"}),
)

# ==================== Notes ====================
NOTE_DEFAULT_POSITION = (610, 15)
NOTE_DEFAULT_SIZE = (300, 250)
NOTE_Z_INDEX_FLOOR = 100
NOTE_Z_INDEX_BASE = 1000000
NOTE_COLORS = {
    "yellow": "#FBF290",
    "orange": "#F5C372",
    "green": "#B8EA9C",
    "blue": "#ACD9F8",
    "purple": "#D6C7FB",
    "red": "#F3B9D2",
}

# ==================== Add To List ====================
ATL_DEFAULT_PAGE_TEMPLATE = {
    "title": "Next give us details of each item",
    "fields": [
        {
            "id": "addPersonDefaultPageId1",
            "type": "info",
            "label": "",
            "infoText": "You will be able to add items one at a time.",
            "infoType": "noformat",
        }
    ],
}
ATL_CYA_PAGE_TEMPLATE = {
    "title": "Check your answers",
    "updateTitle": "Check your answers",
}

# ==================== Summary Section ====================
DISPLAY_WIDTHS = ("", "m", "l", "xl")
KEY_DISPLAY_WIDTHS = ("", "s", "m", "l")
