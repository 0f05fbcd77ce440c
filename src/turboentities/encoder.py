"""Character reference encoding.

encode() rewrites raw text as character references in a fixed sequence of
substitution passes. Which passes run depends on the options; the last two
(astral symbols, then anything left outside printable ASCII) always run, so the
output is pure printable ASCII plus line breaks whatever the options.
"""

import re

from .constants import FORBIDDEN_RAW_CODEPOINTS, NAMED_LIGATURES, PLANE_NONCHARACTERS, UNSAFE_SYMBOLS
from .entities import ENCODE_MAP
from .tokens import ForbiddenCodepoint, emit_error
from .utils import combine_surrogates, merge_options, surrogate_pair


def _char_class(codepoints):
    return "[" + "".join(re.escape(chr(codepoint)) for codepoint in sorted(codepoints)) + "]"


def _build_forbidden_pattern():
    astral = [codepoint for codepoint in PLANE_NONCHARACTERS if codepoint > 0xFFFF]
    # The same noncharacters written as surrogate pairs
    pair_highs = sorted({surrogate_pair(codepoint)[0] for codepoint in astral})
    return re.compile(
        _char_class(FORBIDDEN_RAW_CODEPOINTS | set(astral))
        + "|" + _char_class(pair_highs) + "[\udffe\udfff]"
        # Lone surrogates
        + "|[\ud800-\udbff](?![\udc00-\udfff])"
        + "|(?<![\ud800-\udbff])[\udc00-\udfff]"
    )


def _build_named_pattern():
    # Sequences with at least one non-ASCII symbol; longest first so that
    # multi-symbol names win over their single-symbol prefixes
    symbols = [symbol for symbol in ENCODE_MAP if any(ord(char) > 0x7F for char in symbol)]
    sequences = sorted((symbol for symbol in symbols if len(symbol) > 1), key=lambda s: (-len(s), s))
    singles = [ord(symbol) for symbol in symbols if len(symbol) == 1]
    alternatives = [re.escape(sequence) for sequence in sequences]
    alternatives.append(_char_class(singles))
    return re.compile("|".join(alternatives))


_FORBIDDEN_PATTERN = _build_forbidden_pattern()
_NON_ASCII_NAMED_PATTERN = _build_named_pattern()
_ASCII_PATTERN = re.compile(r"[\x01-\x7f]")
_UNSAFE_PATTERN = re.compile(_char_class(ord(symbol) for symbol in UNSAFE_SYMBOLS))
_ASTRAL_PATTERN = re.compile(r"[\ud800-\udbff][\udc00-\udfff]|[\U00010000-\U0010ffff]")
# Everything in the BMP except printable ASCII, LF and CR
_BMP_PATTERN = re.compile(r"[\x00-\x09\x0b\x0c\x0e-\x1f\x7f-\uffff]")


class EncodeOpts:
    __slots__ = ("allow_unsafe_symbols", "decimal", "encode_everything", "strict", "use_named_references")

    def __init__(
        self,
        allow_unsafe_symbols=False,
        encode_everything=False,
        strict=False,
        use_named_references=False,
        decimal=False,
    ):
        self.allow_unsafe_symbols = bool(allow_unsafe_symbols)
        self.encode_everything = bool(encode_everything)
        self.strict = bool(strict)
        self.use_named_references = bool(use_named_references)
        self.decimal = bool(decimal)

    def __repr__(self):
        fields = ", ".join(f"{name}={getattr(self, name)}" for name in self.__slots__)
        return f"EncodeOpts({fields})"


def hex_escape(codepoint):
    return f"&#x{codepoint:X};"


def decimal_escape(codepoint):
    return f"&#{codepoint};"


def _named_reference(match):
    return f"&{ENCODE_MAP[match.group()]};"


def _shorten_ligatures(text):
    for sequence, reference in NAMED_LIGATURES:
        text = text.replace(sequence, reference)
    return text


def encode(text, opts=None, *, errors=None, **options):
    """Encode `text` using character references.

    Args:
        text: raw text
        opts: an EncodeOpts instance; keyword options override its fields
        errors: list to collect ParseError records into (non-strict mode)
        **options: `allow_unsafe_symbols`, `encode_everything`, `strict`,
            `use_named_references`, `decimal`

    Raises:
        ForbiddenCodepoint: in strict mode, if `text` holds a forbidden code point
        TypeError: for unknown option names

    Returns:
        str: the encoded text
    """
    opts = merge_options(EncodeOpts, opts, options)
    if opts.strict or errors is not None:
        for match in _FORBIDDEN_PATTERN.finditer(text):
            emit_error(ForbiddenCodepoint, "forbidden code point", match.start(), opts.strict, errors)

    escape_codepoint = decimal_escape if opts.decimal else hex_escape
    use_named_references = opts.use_named_references

    def escape_symbol(match):
        return escape_codepoint(ord(match.group()))

    if opts.encode_everything:

        def encode_ascii(match):
            symbol = match.group()
            if use_named_references and symbol in ENCODE_MAP:
                return f"&{ENCODE_MAP[symbol]};"
            return escape_codepoint(ord(symbol))

        text = _ASCII_PATTERN.sub(encode_ascii, text)
        if use_named_references:
            text = _shorten_ligatures(text)
            # Neither f nor j has a name, so the pair is two numeric escapes by now
            text = text.replace(escape_codepoint(0x66) + escape_codepoint(0x6A), "&fjlig;")
            text = _NON_ASCII_NAMED_PATTERN.sub(_named_reference, text)
    elif use_named_references:
        if not opts.allow_unsafe_symbols:
            text = _UNSAFE_PATTERN.sub(_named_reference, text)
        text = _shorten_ligatures(text)
        text = _NON_ASCII_NAMED_PATTERN.sub(_named_reference, text)
    elif not opts.allow_unsafe_symbols:
        text = _UNSAFE_PATTERN.sub(escape_symbol, text)

    def escape_astral(match):
        symbol = match.group()
        if len(symbol) == 2:
            return escape_codepoint(combine_surrogates(ord(symbol[0]), ord(symbol[1])))
        return escape_codepoint(ord(symbol))

    text = _ASTRAL_PATTERN.sub(escape_astral, text)
    return _BMP_PATTERN.sub(escape_symbol, text)
