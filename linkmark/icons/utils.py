"""URL helpers for icon resolution"""

from urllib.parse import urljoin, urlparse

from linkmark.icons.constants import ALLOWED_ICON_SCHEMES, IMAGE_EXTENSIONS


def get_origin(url: str) -> str:
    """Extract the origin (e.g., "https://example.com" from "https://example.com/path")."""
    parsed_url = urlparse(url)
    return f"{parsed_url.scheme}://{parsed_url.netloc}"


def is_valid_page_url(url: str) -> bool:
    """Check that the URL is absolute and uses http or https."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ALLOWED_ICON_SCHEMES and bool(parsed.netloc)


def resolve_icon_url(href: str | None, base_url: str) -> str | None:
    """Resolve an `href`/`content` value against the page it was found on.

    Returns None for empty values, values that can't be parsed, and non-http(s)
    references such as `data:`, `javascript:` or `mailto:` URLs.
    """
    if not href or not href.strip():
        return None

    try:
        resolved = urljoin(base_url, href.strip())
        parsed = urlparse(resolved)
    except ValueError:
        return None

    if parsed.scheme not in ALLOWED_ICON_SCHEMES or not parsed.netloc:
        return None
    return resolved


def has_image_extension(url: str) -> bool:
    """Check whether the URL path ends with a high fidelity image extension.

    The query string and fragment are ignored, the comparison is case-insensitive.
    """
    try:
        path = urlparse(url).path
    except ValueError:
        return False
    return path.lower().endswith(IMAGE_EXTENSIONS)


def join_origin(page_url: str, path: str) -> str:
    """Build the URL of an absolute path on the page's origin."""
    return f"{get_origin(page_url)}{path}"
