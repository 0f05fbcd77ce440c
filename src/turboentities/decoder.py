"""Character reference decoding.

Implements the character reference rules of the HTML standard (§13.2.5.72 and
onwards) over a complete string: numeric references, named references with and
without a terminating semicolon, and the ambiguous-ampersand rule for
attribute values.
"""

from .entities import LEGACY_REFERENCES, NAMED_REFERENCES, codepoint_to_symbol
from .scanner import ReferenceScanner, find_malformed_references
from .tokens import AmbiguousAmpersand, MalformedReference, ReferenceSite, UnterminatedReference, emit_error
from .utils import merge_options

# Any digit string longer than this is far past U+10FFFF in either base; it
# is clamped instead of handed to int(), which caps the digits it accepts.
_MAX_CODEPOINT_DIGITS = 8
_OUT_OF_RANGE = 0x110000


class DecodeOpts:
    __slots__ = ("is_attribute_value", "strict")

    def __init__(self, is_attribute_value=False, strict=False):
        self.is_attribute_value = bool(is_attribute_value)
        self.strict = bool(strict)

    def __repr__(self):
        return f"DecodeOpts(is_attribute_value={self.is_attribute_value}, strict={self.strict})"


class Decoder:
    """Decode character references with one set of options.

    In strict mode the first parse error raises a StrictModeError subclass and
    no output is produced. Otherwise every error is recovered from and, when
    an `errors` list is given, recorded there: malformed `&#` sequences first,
    then the per-reference errors in input order.
    """

    __slots__ = ("errors", "opts")

    def __init__(self, opts=None, errors=None):
        self.opts = opts or DecodeOpts()
        self.errors = errors

    def _emit_error(self, kind, message, position):
        emit_error(kind, message, position, self.opts.strict, self.errors)

    def run(self, html):
        if "&" not in html:
            return html

        if self.opts.strict or self.errors is not None:
            for position in find_malformed_references(html):
                self._emit_error(MalformedReference, "malformed character reference", position)

        parts = []
        last = 0
        for site in ReferenceScanner(html):
            if site.start > last:
                parts.append(html[last:site.start])
            parts.append(self.resolve(site))
            last = site.end
        parts.append(html[last:])
        return "".join(parts)

    def resolve(self, site):
        """Return the replacement text for one ReferenceSite."""
        kind = site.kind
        if kind == ReferenceSite.DECIMAL or kind == ReferenceSite.HEX:
            if not site.semicolon:
                self._emit_error(
                    UnterminatedReference,
                    "character reference was not terminated by a semicolon",
                    site.start,
                )
            digits = site.value.lstrip("0")
            if len(digits) > _MAX_CODEPOINT_DIGITS:
                codepoint = _OUT_OF_RANGE
            elif not digits:
                codepoint = 0
            else:
                codepoint = int(digits, 16 if kind == ReferenceSite.HEX else 10)
            return codepoint_to_symbol(codepoint, self.opts.strict, self.errors, site.start)

        if kind == ReferenceSite.NAMED_TERMINATED:
            return NAMED_REFERENCES[site.value]

        if kind == ReferenceSite.AMBIGUOUS:
            # https://mths.be/notes/ambiguous-ampersands
            self._emit_error(
                AmbiguousAmpersand,
                "named character reference was not terminated by a semicolon",
                site.start,
            )
            return site.raw

        # NAMED_UNTERMINATED: inside an attribute value a legacy name followed
        # by `=` or an alphanumeric stays literal
        if site.next_char and self.opts.is_attribute_value:
            if site.next_char == "=":
                self._emit_error(AmbiguousAmpersand, "`&` did not start a character reference", site.start)
            return site.raw

        self._emit_error(
            UnterminatedReference,
            "named character reference was not terminated by a semicolon",
            site.start,
        )
        return LEGACY_REFERENCES[site.value] + site.next_char


def decode(html, opts=None, *, errors=None, **options):
    """Decode all character references in `html`.

    Args:
        html: text containing character references
        opts: a DecodeOpts instance; keyword options override its fields
        errors: list to collect ParseError records into (non-strict mode)
        **options: `is_attribute_value`, `strict`

    Raises:
        StrictModeError: in strict mode, on the first parse error
        TypeError: for unknown option names

    Returns:
        str: the decoded text
    """
    opts = merge_options(DecodeOpts, opts, options)
    return Decoder(opts, errors).run(html)
