"""
WCAG contrast calculator.

Colours are 24-bit RGB integers (0xRRGGBB). Thresholds (1.4.3, 1.4.6):

    text           AA     AAA
    normal         4.5    7.0
    large          3.0    4.5

Large text is at least 18px, or at least 14px when bold.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from a11y_auditor.app.errors import ColorParseError, ElementReadError
from a11y_auditor.app.schemas.report import ComplianceLevel


AA_NORMAL = 4.5
AAA_NORMAL = 7.0
AA_LARGE = 3.0
AAA_LARGE = 4.5

LARGE_TEXT_PX = 18.0
LARGE_BOLD_TEXT_PX = 14.0

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*[,\s]\s*(\d{1,3})\s*[,\s]\s*(\d{1,3})"
    r"\s*(?:[,/]\s*([0-9.]+%?)\s*)?\)$",
    re.IGNORECASE,
)
_FONT_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(px|pt|em|rem)?\s*$", re.IGNORECASE)

# CSS Color Module Level 4 named colours. "transparent" is handled apart.
CSS_NAMED_COLORS = {
    "aliceblue": 0xF0F8FF, "antiquewhite": 0xFAEBD7, "aqua": 0x00FFFF,
    "aquamarine": 0x7FFFD4, "azure": 0xF0FFFF, "beige": 0xF5F5DC,
    "bisque": 0xFFE4C4, "black": 0x000000, "blanchedalmond": 0xFFEBCD,
    "blue": 0x0000FF, "blueviolet": 0x8A2BE2, "brown": 0xA52A2A,
    "burlywood": 0xDEB887, "cadetblue": 0x5F9EA0, "chartreuse": 0x7FFF00,
    "chocolate": 0xD2691E, "coral": 0xFF7F50, "cornflowerblue": 0x6495ED,
    "cornsilk": 0xFFF8DC, "crimson": 0xDC143C, "cyan": 0x00FFFF,
    "darkblue": 0x00008B, "darkcyan": 0x008B8B, "darkgoldenrod": 0xB8860B,
    "darkgray": 0xA9A9A9, "darkgreen": 0x006400, "darkgrey": 0xA9A9A9,
    "darkkhaki": 0xBDB76B, "darkmagenta": 0x8B008B, "darkolivegreen": 0x556B2F,
    "darkorange": 0xFF8C00, "darkorchid": 0x9932CC, "darkred": 0x8B0000,
    "darksalmon": 0xE9967A, "darkseagreen": 0x8FBC8F, "darkslateblue": 0x483D8B,
    "darkslategray": 0x2F4F4F, "darkslategrey": 0x2F4F4F, "darkturquoise": 0x00CED1,
    "darkviolet": 0x9400D3, "deeppink": 0xFF1493, "deepskyblue": 0x00BFFF,
    "dimgray": 0x696969, "dimgrey": 0x696969, "dodgerblue": 0x1E90FF,
    "firebrick": 0xB22222, "floralwhite": 0xFFFAF0, "forestgreen": 0x228B22,
    "fuchsia": 0xFF00FF, "gainsboro": 0xDCDCDC, "ghostwhite": 0xF8F8FF,
    "gold": 0xFFD700, "goldenrod": 0xDAA520, "gray": 0x808080,
    "green": 0x008000, "greenyellow": 0xADFF2F, "grey": 0x808080,
    "honeydew": 0xF0FFF0, "hotpink": 0xFF69B4, "indianred": 0xCD5C5C,
    "indigo": 0x4B0082, "ivory": 0xFFFFF0, "khaki": 0xF0E68C,
    "lavender": 0xE6E6FA, "lavenderblush": 0xFFF0F5, "lawngreen": 0x7CFC00,
    "lemonchiffon": 0xFFFACD, "lightblue": 0xADD8E6, "lightcoral": 0xF08080,
    "lightcyan": 0xE0FFFF, "lightgoldenrodyellow": 0xFAFAD2, "lightgray": 0xD3D3D3,
    "lightgreen": 0x90EE90, "lightgrey": 0xD3D3D3, "lightpink": 0xFFB6C1,
    "lightsalmon": 0xFFA07A, "lightseagreen": 0x20B2AA, "lightskyblue": 0x87CEFA,
    "lightslategray": 0x778899, "lightslategrey": 0x778899, "lightsteelblue": 0xB0C4DE,
    "lightyellow": 0xFFFFE0, "lime": 0x00FF00, "limegreen": 0x32CD32,
    "linen": 0xFAF0E6, "magenta": 0xFF00FF, "maroon": 0x800000,
    "mediumaquamarine": 0x66CDAA, "mediumblue": 0x0000CD, "mediumorchid": 0xBA55D3,
    "mediumpurple": 0x9370DB, "mediumseagreen": 0x3CB371, "mediumslateblue": 0x7B68EE,
    "mediumspringgreen": 0x00FA9A, "mediumturquoise": 0x48D1CC,
    "mediumvioletred": 0xC71585, "midnightblue": 0x191970, "mintcream": 0xF5FFFA,
    "mistyrose": 0xFFE4E1, "moccasin": 0xFFE4B5, "navajowhite": 0xFFDEAD,
    "navy": 0x000080, "oldlace": 0xFDF5E6, "olive": 0x808000,
    "olivedrab": 0x6B8E23, "orange": 0xFFA500, "orangered": 0xFF4500,
    "orchid": 0xDA70D6, "palegoldenrod": 0xEEE8AA, "palegreen": 0x98FB98,
    "paleturquoise": 0xAFEEEE, "palevioletred": 0xDB7093, "papayawhip": 0xFFEFD5,
    "peachpuff": 0xFFDAB9, "peru": 0xCD853F, "pink": 0xFFC0CB,
    "plum": 0xDDA0DD, "powderblue": 0xB0E0E6, "purple": 0x800080,
    "rebeccapurple": 0x663399, "red": 0xFF0000, "rosybrown": 0xBC8F8F,
    "royalblue": 0x4169E1, "saddlebrown": 0x8B4513, "salmon": 0xFA8072,
    "sandybrown": 0xF4A460, "seagreen": 0x2E8B57, "seashell": 0xFFF5EE,
    "sienna": 0xA0522D, "silver": 0xC0C0C0, "skyblue": 0x87CEEB,
    "slateblue": 0x6A5ACD, "slategray": 0x708090, "slategrey": 0x708090,
    "snow": 0xFFFAFA, "springgreen": 0x00FF7F, "steelblue": 0x4682B4,
    "tan": 0xD2B48C, "teal": 0x008080, "thistle": 0xD8BFD8,
    "tomato": 0xFF6347, "turquoise": 0x40E0D0, "violet": 0xEE82EE,
    "wheat": 0xF5DEB3, "white": 0xFFFFFF, "whitesmoke": 0xF5F5F5,
    "yellow": 0xFFFF00, "yellowgreen": 0x9ACD32,
}


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------

class ContrastResult(BaseModel):
    """Contrast verdict for one foreground/background pair."""

    ratio: float = Field(..., ge=1.0)
    passes_aa: bool
    passes_aaa: bool
    level: ComplianceLevel
    large_text: bool
    aa_threshold: float
    aaa_threshold: float

    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_css_color(value: str) -> Optional[int]:
    """
    Parse a computed-style colour into a 24-bit RGB integer.

    Accepts hex, rgb()/rgba() and CSS named colours. Returns None for
    fully transparent colours. Partially transparent colours are treated
    as their opaque RGB value.

    Raises ColorParseError for anything else.
    """
    text = value.strip()

    lowered = text.lower()
    if lowered == "transparent":
        return None
    if lowered in CSS_NAMED_COLORS:
        return CSS_NAMED_COLORS[lowered]

    hex_match = _HEX_RE.match(text)
    if hex_match:
        digits = hex_match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        if len(digits) == 8:
            if int(digits[6:8], 16) == 0:
                return None
            digits = digits[:6]
        return int(digits, 16)

    rgb_match = _RGB_RE.match(text)
    if rgb_match:
        r, g, b = (int(rgb_match.group(i)) for i in (1, 2, 3))
        if max(r, g, b) > 255:
            raise ColorParseError(value)

        alpha = rgb_match.group(4)
        if alpha is not None:
            try:
                alpha_value = (
                    float(alpha[:-1]) / 100 if alpha.endswith("%") else float(alpha)
                )
            except ValueError:
                raise ColorParseError(value) from None
            if alpha_value == 0:
                return None

        return (r << 16) | (g << 8) | b

    raise ColorParseError(value)


def parse_font_size(value: str) -> float:
    """
    Parse a font size into CSS pixels (1pt = 4/3px, 1em = 1rem = 16px).

    Raises ElementReadError when the value is not a length.
    """
    match = _FONT_SIZE_RE.match(value)
    if match is None:
        raise ElementReadError(f"Unparsable font size: {value!r}")

    size = float(match.group(1))
    unit = (match.group(2) or "px").lower()
    if unit == "pt":
        return size * 4 / 3
    if unit in {"em", "rem"}:
        return size * 16
    return size


def is_bold_weight(value: str) -> bool:
    """
    Raises ElementReadError for weights that are neither keywords nor numbers.
    """
    text = value.strip().lower()
    if text in {"bold", "bolder"}:
        return True
    if text in {"normal", "lighter"}:
        return False
    try:
        return int(float(text)) >= 700
    except ValueError:
        raise ElementReadError(f"Unparsable font weight: {value!r}") from None


# ---------------------------------------------------------------------------
# Luminance and ratio
# ---------------------------------------------------------------------------

def _linearize(channel: int) -> float:
    c = channel / 255
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb: int) -> float:
    r = _linearize((rgb >> 16) & 0xFF)
    g = _linearize((rgb >> 8) & 0xFF)
    b = _linearize(rgb & 0xFF)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(color_a: int, color_b: int) -> float:
    """
    WCAG contrast ratio between two colours. Symmetric; ranges 1.0 to 21.0.
    """
    lum_a = relative_luminance(color_a)
    lum_b = relative_luminance(color_b)
    lighter = max(lum_a, lum_b)
    darker = min(lum_a, lum_b)
    return (lighter + 0.05) / (darker + 0.05)


def is_large_text(font_size: float, bold: bool) -> bool:
    return font_size >= LARGE_TEXT_PX or (bold and font_size >= LARGE_BOLD_TEXT_PX)


def validate_contrast(
    foreground: int,
    background: int,
    font_size: float = 16.0,
    bold: bool = False,
) -> ContrastResult:
    """
    Evaluate a colour pair against the AA and AAA thresholds for its
    text size.
    """
    ratio = contrast_ratio(foreground, background)
    large = is_large_text(font_size, bold)

    aa_threshold = AA_LARGE if large else AA_NORMAL
    aaa_threshold = AAA_LARGE if large else AAA_NORMAL

    passes_aa = ratio >= aa_threshold
    passes_aaa = ratio >= aaa_threshold

    if passes_aaa:
        level = ComplianceLevel.AAA
    elif passes_aa:
        level = ComplianceLevel.AA
    else:
        level = ComplianceLevel.FAIL

    return ContrastResult(
        ratio=ratio,
        passes_aa=passes_aa,
        passes_aaa=passes_aaa,
        level=level,
        large_text=large,
        aa_threshold=aa_threshold,
        aaa_threshold=aaa_threshold,
    )
