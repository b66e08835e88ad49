"""Constants for icon resolution"""

PARSER: str = "html.parser"

# Priority of icon declarations found in page markup (lower is better).
# `link[rel=icon]` is ranked by the `sizes` it declares, see `ICON_SIZE_PRIORITY`.
APPLE_TOUCH_ICON_PRIORITY: int = 1
APPLE_TOUCH_ICON_PRECOMPOSED_PRIORITY: int = 2
ICON_SIZE_PRIORITY: list[tuple[str, int]] = [
    ("192", 3),
    ("180", 4),
    ("128", 5),
    ("96", 6),
]
ICON_PRIORITY: int = 7
SHORTCUT_ICON_PRIORITY: int = 8
OG_IMAGE_PRIORITY: int = 9
TWITTER_IMAGE_PRIORITY: int = 10

# Candidates declaring one of these sizes are accepted whatever their extension.
HIGH_RESOLUTION_SIZES: tuple[str, ...] = ("192", "180", "128")

# Path extensions of icons worth more than a legacy `.ico`.
IMAGE_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".webp", ".svg")

ALLOWED_ICON_SCHEMES: tuple[str, ...] = ("http", "https")

DEFAULT_FAVICON_PATH: str = "/favicon.ico"

# Conventional icon locations, checked in this order.
CONVENTIONAL_ICON_PATHS: list[str] = [
    "/apple-touch-icon.png",
    "/favicon-32x32.png",
    "/favicon-16x16.png",
    "/android-chrome-192x192.png",
    "/android-chrome-512x512.png",
    "/mstile-150x150.png",
    "/safari-pinned-tab.svg",
    DEFAULT_FAVICON_PATH,
]

# Lower-confidence guesses, only checked after every conventional path failed.
FALLBACK_ICON_PATHS: list[str] = [
    "/logo.png",
    "/logo.svg",
    "/images/logo.png",
    "/img/logo.png",
    "/static/favicon.png",
]

# Servers answering HEAD with one of these get a body-less GET instead.
HEAD_NOT_SUPPORTED_STATUSES: frozenset[int] = frozenset({405, 501})

# HTTP request configuration
REQUEST_HEADERS: dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9,zh-CN;q=0.8",
}

# Placeholder rendering
PLACEHOLDER_LINK_GLYPH: str = "\U0001f517"
PLACEHOLDER_SIZE: int = 64
PLACEHOLDER_CORNER_RADIUS: int = 12
PLACEHOLDER_FONT_SIZE: int = 32
PLACEHOLDER_GRADIENT_END_OPACITY: float = 0.75
PLACEHOLDER_PALETTE: list[str] = [
    "#3B82F6",
    "#EF4444",
    "#10B981",
    "#F59E0B",
    "#8B5CF6",
    "#EC4899",
    "#06B6D4",
    "#84CC16",
    "#F97316",
    "#6366F1",
    "#14B8A6",
    "#A855F7",
]
SVG_DATA_URI_PREFIX: str = "data:image/svg+xml;base64,"

CACHE_KEY_PREFIX: str = "linkmark:icon:"

# Page metadata extraction
DESCRIPTION_MAX_LENGTH: int = 200
