"""Scanner that finds candidate character references in text.

Each `&` is classified into one of the ReferenceSite kinds, tried in this
order at the same position:

    &#<digits>[;]          DECIMAL
    &#x<hexdigits>[;]      HEX
    &<name>;               NAMED_TERMINATED, or AMBIGUOUS for unknown names
    &<legacy>[lookahead]   NAMED_UNTERMINATED

An `&` matching none of these is plain text and produces no site.
"""

import re
import string

from .entities import LEGACY_TRIE, NAMED_REFERENCES
from .smallset import SmallCharSet
from .tokens import ReferenceSite

_DIGITS = SmallCharSet(string.digits)
_HEX_DIGITS = SmallCharSet(string.hexdigits)
_NAME_CHARS = SmallCharSet(string.ascii_letters + string.digits)
# The one character after an unterminated legacy name that travels with it
_LOOKAHEAD_CHARS = _NAME_CHARS | SmallCharSet("=")

# `&#` followed by something other than a digit or x/X, or `&#x` followed by a
# non-hex character. A bare `&#` or `&#x` at end of input is plain text.
_MALFORMED_NUMERIC_PATTERN = re.compile(r"&#(?:[xX][^0-9A-Fa-f]|[^0-9xX])")


def find_malformed_references(text):
    """Yield the offset of every `&#` that cannot start a numeric reference."""
    for match in _MALFORMED_NUMERIC_PATTERN.finditer(text):
        yield match.start()


class ReferenceScanner:
    """Iterate over the ReferenceSites of `text` in input order."""

    __slots__ = ("length", "text")

    def __init__(self, text):
        self.text = text
        self.length = len(text)

    def __iter__(self):
        text = self.text
        pos = 0
        while True:
            amp = text.find("&", pos)
            if amp == -1:
                return
            site = self.scan_at(amp)
            if site is None:
                pos = amp + 1
                continue
            yield site
            pos = site.end

    def scan_at(self, amp):
        """Classify the `&` at offset `amp`, or return None if it is plain text."""
        next_pos = amp + 1
        if next_pos < self.length and self.text[next_pos] == "#":
            return self._scan_numeric(amp)
        return self._scan_named(amp)

    def _scan_numeric(self, amp):
        text = self.text
        length = self.length
        pos = amp + 2
        kind = ReferenceSite.DECIMAL
        digits = _DIGITS
        if pos < length and text[pos] in "xX":
            kind = ReferenceSite.HEX
            digits = _HEX_DIGITS
            pos += 1

        digit_start = pos
        pos = digits.span(text, pos, length)
        if pos == digit_start:
            return None

        semicolon = pos < length and text[pos] == ";"
        end = pos + 1 if semicolon else pos
        return ReferenceSite(kind, amp, end, text[amp:end], text[digit_start:pos], semicolon)

    def _scan_named(self, amp):
        text = self.text
        length = self.length
        name_start = amp + 1
        name_end = _NAME_CHARS.span(text, name_start, length)
        if name_end == name_start:
            return None

        if name_end < length and text[name_end] == ";":
            name = text[name_start:name_end]
            kind = ReferenceSite.NAMED_TERMINATED if name in NAMED_REFERENCES else ReferenceSite.AMBIGUOUS
            end = name_end + 1
            return ReferenceSite(kind, amp, end, text[amp:end], name, semicolon=True)

        # Legacy names are alphanumeric, so the match never runs past name_end
        match = LEGACY_TRIE.longest_prefix(text, name_start)
        if match is None:
            return None
        legacy_end = match[0]
        end = legacy_end
        next_char = ""
        if end < length and text[end] in _LOOKAHEAD_CHARS:
            next_char = text[end]
            end += 1
        return ReferenceSite(
            ReferenceSite.NAMED_UNTERMINATED,
            amp,
            end,
            text[amp:end],
            text[name_start:legacy_end],
            next_char=next_char,
        )
