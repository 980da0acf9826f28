"""Constants and configuration values for Review Insights."""

# Venn Layout Constants
class LayoutConstants:
    """Geometry for the category-overlap diagrams (unscaled SVG user units)."""

    # Two-set canvas
    TWO_SET_WIDTH = 400
    TWO_SET_HEIGHT = 240
    TWO_SET_RADIUS = 80
    TWO_SET_CENTERS = ((135, 110), (265, 110))  # 130 apart, lens is 30 wide
    TWO_SET_CATEGORY_LABELS = ((135, 220), (265, 220))  # under each circle
    TWO_SET_ANCHORS = {
        "a": (100, 100),
        "b": (300, 100),
        "ab": (200, 100),
    }

    # Three-set canvas
    THREE_SET_WIDTH = 450
    THREE_SET_HEIGHT = 360
    THREE_SET_RADIUS = 90
    THREE_SET_CENTERS = ((160, 140), (290, 140), (225, 230))
    THREE_SET_CATEGORY_LABELS = ((100, 60), (350, 60), (225, 345))
    THREE_SET_ANCHORS = {
        "a": (125, 140),
        "b": (325, 140),
        "c": (225, 290),
        "ab": (225, 120),
        "ac": (165, 215),
        "bc": (285, 215),
        "abc": (225, 190),
    }

    # Style tags handed to renderers, one per circle
    STYLE_TAGS = ("set-a", "set-b", "set-c")

    MAX_DIAGRAM_SETS = 3  # categories beyond this are dropped from the layout
    MIN_DIAGRAM_SETS = 2

# Prompt Constants
class PromptConstants:
    """Constants for LLM prompts and templates."""

    # Prompt Versions (for cache invalidation)
    ANALYSIS_PROMPT_VERSION = "v1.2"

    ANALYSIS_TEMPERATURE = 0.1  # low temperature for consistent counts
    ANALYSIS_MAX_TOKENS = 4000

    MIN_DISCOVERED_CATEGORIES = 3
    MAX_DISCOVERED_CATEGORIES = 5

    # Accepted drift when sentiment percentages are summed
    PERCENTAGE_SUM_MIN = 99
    PERCENTAGE_SUM_MAX = 101

# Cache Constants
class CacheConstants:
    """Constants for caching behavior."""

    CACHE_TTL_HOURS = 24  # cache time-to-live in hours
    CACHE_KEY_LENGTH = 8  # length of cache key for logging

# Error Handling Constants
class ErrorConstants:
    """Constants for error handling and retries."""

    MAX_RETRY_ATTEMPTS = 3  # maximum retry attempts
    RETRY_BASE_DELAY = 2  # base delay for exponential backoff
    REQUEST_TIMEOUT = 90  # timeout for API requests

# File and Path Constants
class FileConstants:
    """Constants for file operations."""

    CACHE_DIR = "cache/llm_cache"  # cache directory
    CONFIG_FILE = ".env.example"  # configuration template file
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    ALLOWED_EXTENSIONS = ("csv", "xlsx")
    ALLOWED_MIME_TYPES = (
        "text/csv",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    CSV_ENCODINGS = ("utf-8-sig", "latin-1")

# UI Constants
class UIConstants:
    """Constants for the Streamlit and CLI surfaces."""

    PAGE_TITLE = "Review Insights AI"
    PAGE_ICON = "📊"
    MAX_SUMMARY_PREVIEW = 200  # chars of the summary echoed by the CLI
    EMPTY_DIAGRAM_MESSAGE = "Not enough category overlap to generate a diagram."
