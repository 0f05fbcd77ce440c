"""HTML5 character reference tables and code point resolution.

Named references come from Python's complete HTML5 entity list
(`html.entities.html5`). That table lists every name with its trailing
semicolon and, for the historical subset that browsers also accept without
one, a second time without it; the second group is our legacy table.
"""

import html.entities

from .constants import INVALID_REFERENCE_CODEPOINTS, MAX_CODEPOINT, NUMERIC_REPLACEMENTS, REPLACEMENT_CHARACTER
from .entity_trie import Trie
from .tokens import DisallowedReference, OutOfRangeCodepoint, emit_error
from .utils import is_surrogate

_HTML5_ENTITIES = html.entities.html5

# Names valid with a terminating semicolon, stored without it ("amp", "lang")
NAMED_REFERENCES = {}
# Names also valid without a semicolon ("amp", "copy", "eacute")
LEGACY_REFERENCES = {}
for _key, _value in _HTML5_ENTITIES.items():
    if _key.endswith(";"):
        NAMED_REFERENCES[_key[:-1]] = _value
    else:
        LEGACY_REFERENCES[_key] = _value

LEGACY_TRIE = Trie(LEGACY_REFERENCES)


def _name_rank(name):
    # Shortest first, lowercase before capitalised, then alphabetical
    return (len(name), name[0].isupper(), name)


def _build_encode_map():
    names_by_symbol = {}
    for name, symbol in NAMED_REFERENCES.items():
        names_by_symbol.setdefault(symbol, []).append(name)

    encode_map = {}
    for symbol, names in names_by_symbol.items():
        preferred = None
        if len(symbol) == 1:
            # HTML 4 names are the most widely understood spelling
            preferred = html.entities.codepoint2name.get(ord(symbol))
        if preferred not in names:
            preferred = min(names, key=_name_rank)
        encode_map[symbol] = preferred
    encode_map["'"] = "apos"
    return encode_map


# Raw symbol (one code point, or a short sequence such as "fj") -> reference name
ENCODE_MAP = _build_encode_map()


def codepoint_to_symbol(codepoint, strict=False, errors=None, position=None):
    """Turn the code point of a numeric reference into text.

    Out-of-range code points and surrogates become U+FFFD; a handful of C1
    control code points are remapped to the Windows-1252 symbols authors
    meant. Everything else decodes to itself, including astral code points,
    which a Python str holds as a single character.

    Args:
        codepoint: integer value of the reference
        strict: raise on parse errors instead of recovering
        errors: list collecting ParseError records in non-strict mode
        position: offset of the reference, for error reporting

    Returns:
        str: the decoded text
    """
    if codepoint > MAX_CODEPOINT or is_surrogate(codepoint):
        emit_error(
            OutOfRangeCodepoint,
            "character reference outside the permissible Unicode range",
            position,
            strict,
            errors,
        )
        return REPLACEMENT_CHARACTER

    replacement = NUMERIC_REPLACEMENTS.get(codepoint)
    if replacement is not None:
        emit_error(DisallowedReference, "disallowed character reference", position, strict, errors)
        return replacement

    if codepoint in INVALID_REFERENCE_CODEPOINTS:
        # Reported, but the code point itself is still emitted
        emit_error(DisallowedReference, "disallowed character reference", position, strict, errors)

    return chr(codepoint)
