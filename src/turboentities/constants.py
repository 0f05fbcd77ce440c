"""Static tables for character reference decoding and encoding.

All tables are built once at import time and never mutated, so they can be
shared freely between callers.

References:
    - https://html.spec.whatwg.org/multipage/parsing.html#numeric-character-reference-end-state
    - https://infra.spec.whatwg.org/#noncharacter
"""

# HTML5 numeric character reference replacements (§13.2.5.80)
NUMERIC_REPLACEMENTS = {
    0x00: "\ufffd",  # NULL
    0x80: "\u20ac",  # EURO SIGN
    0x82: "\u201a",  # SINGLE LOW-9 QUOTATION MARK
    0x83: "\u0192",  # LATIN SMALL LETTER F WITH HOOK
    0x84: "\u201e",  # DOUBLE LOW-9 QUOTATION MARK
    0x85: "\u2026",  # HORIZONTAL ELLIPSIS
    0x86: "\u2020",  # DAGGER
    0x87: "\u2021",  # DOUBLE DAGGER
    0x88: "\u02c6",  # MODIFIER LETTER CIRCUMFLEX ACCENT
    0x89: "\u2030",  # PER MILLE SIGN
    0x8a: "\u0160",  # LATIN CAPITAL LETTER S WITH CARON
    0x8b: "\u2039",  # SINGLE LEFT-POINTING ANGLE QUOTATION MARK
    0x8c: "\u0152",  # LATIN CAPITAL LIGATURE OE
    0x8e: "\u017d",  # LATIN CAPITAL LETTER Z WITH CARON
    0x91: "\u2018",  # LEFT SINGLE QUOTATION MARK
    0x92: "\u2019",  # RIGHT SINGLE QUOTATION MARK
    0x93: "\u201c",  # LEFT DOUBLE QUOTATION MARK
    0x94: "\u201d",  # RIGHT DOUBLE QUOTATION MARK
    0x95: "\u2022",  # BULLET
    0x96: "\u2013",  # EN DASH
    0x97: "\u2014",  # EM DASH
    0x98: "\u02dc",  # SMALL TILDE
    0x99: "\u2122",  # TRADE MARK SIGN
    0x9a: "\u0161",  # LATIN SMALL LETTER S WITH CARON
    0x9b: "\u203a",  # SINGLE RIGHT-POINTING ANGLE QUOTATION MARK
    0x9c: "\u0153",  # LATIN SMALL LIGATURE OE
    0x9e: "\u017e",  # LATIN SMALL LETTER Z WITH CARON
    0x9f: "\u0178",  # LATIN CAPITAL LETTER Y WITH DIAERESIS
}

REPLACEMENT_CHARACTER = "\ufffd"
MAX_CODEPOINT = 0x10FFFF

# Noncharacters U+nFFFE and U+nFFFF for every plane 0..16
PLANE_NONCHARACTERS = tuple(
    (plane << 16) | low for plane in range(17) for low in (0xFFFE, 0xFFFF)
)

# Numeric references to these are parse errors but still decode to the code point
INVALID_REFERENCE_CODEPOINTS = frozenset(
    [*range(0x01, 0x09), 0x0B, *range(0x0D, 0x20), *range(0x7F, 0xA0), *range(0xFDD0, 0xFDF0), *PLANE_NONCHARACTERS]
)

# Raw code points encode() refuses in strict mode. Lone surrogates are
# handled separately by the encoder's pattern.
FORBIDDEN_RAW_CODEPOINTS = frozenset(
    [*range(0x00, 0x09), 0x0B, *range(0x0E, 0x20), *range(0x7F, 0xA0), *range(0xFDD0, 0xFDF0), *PLANE_NONCHARACTERS]
)

# The five symbols that are never safe to leave raw in markup
UNSAFE_SYMBOLS = "&<>\"'"

ESCAPE_MAP = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}

# Two-symbol sequences with their own reference name, where the first symbol
# has already been turned into a named reference by an earlier pass.
NAMED_LIGATURES = (
    ("&gt;\u20d2", "&nvgt;"),
    ("&lt;\u20d2", "&nvlt;"),
)

SURROGATE_MIN = 0xD800
SURROGATE_MAX = 0xDFFF
LOW_SURROGATE_MIN = 0xDC00
