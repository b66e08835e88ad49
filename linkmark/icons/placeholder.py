"""Placeholder synthesizer: a letter icon for bookmarks without a real one"""

import base64
from xml.sax.saxutils import escape

from linkmark.icons.constants import (
    PLACEHOLDER_CORNER_RADIUS,
    PLACEHOLDER_FONT_SIZE,
    PLACEHOLDER_GRADIENT_END_OPACITY,
    PLACEHOLDER_LINK_GLYPH,
    PLACEHOLDER_PALETTE,
    PLACEHOLDER_SIZE,
    SVG_DATA_URI_PREFIX,
)


def extract_glyph(title: str | None) -> str:
    """Return the single character displayed for a title.

    ASCII letters are uppercased; CJK ideographs, digits, symbols and letters of other
    scripts are used as they are. Blank titles get a generic link glyph.
    """
    title = (title or "").strip()
    if not title:
        return PLACEHOLDER_LINK_GLYPH

    glyph = title[0]
    if glyph.isascii() and glyph.isalpha():
        return glyph.upper()
    return glyph


def pick_accent_color(glyph: str) -> str:
    """Map a glyph onto the palette by its code point."""
    return PLACEHOLDER_PALETTE[ord(glyph[0]) % len(PLACEHOLDER_PALETTE)]


def render_svg(glyph: str, color: str) -> str:
    """Render the glyph in bold white over a rounded, gradient filled square."""
    size = PLACEHOLDER_SIZE
    center = size // 2
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
        f'viewBox="0 0 {size} {size}">'
        '<defs><linearGradient id="bg" x1="0" y1="0" x2="1" y2="1">'
        f'<stop offset="0%" stop-color="{color}"/>'
        f'<stop offset="100%" stop-color="{color}" '
        f'stop-opacity="{PLACEHOLDER_GRADIENT_END_OPACITY}"/>'
        "</linearGradient></defs>"
        f'<rect width="{size}" height="{size}" rx="{PLACEHOLDER_CORNER_RADIUS}" '
        'fill="url(#bg)"/>'
        f'<text x="{center}" y="{center}" dominant-baseline="central" text-anchor="middle" '
        'font-family="-apple-system, BlinkMacSystemFont, \'Segoe UI\', Arial, '
        "'PingFang SC', 'Microsoft YaHei', sans-serif\" "
        f'font-size="{PLACEHOLDER_FONT_SIZE}" font-weight="bold" fill="#FFFFFF">'
        f"{escape(glyph)}</text>"
        "</svg>"
    )


def synthesize_placeholder(title: str | None) -> str:
    """Return a `data:image/svg+xml;base64,` URI of the letter icon for `title`.

    This never touches the network and the output only depends on the title.
    """
    glyph = extract_glyph(title)
    svg = render_svg(glyph, pick_accent_color(glyph))
    return SVG_DATA_URI_PREFIX + base64.b64encode(svg.encode("utf-8")).decode("ascii")
