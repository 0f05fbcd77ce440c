"""Helpers shared by the decoder and the encoder.

Surrogate arithmetic and option merging don't belong to either direction, so
they live here.
"""

from .constants import LOW_SURROGATE_MIN, SURROGATE_MAX, SURROGATE_MIN


def surrogate_pair(codepoint):
    """Split an astral code point into its UTF-16 (high, low) surrogate halves."""
    offset = codepoint - 0x10000
    high = ((offset >> 10) & 0x3FF) | SURROGATE_MIN
    low = (offset & 0x3FF) | LOW_SURROGATE_MIN
    return high, low


def combine_surrogates(high, low):
    """Reconstitute the astral code point a surrogate pair stands for."""
    return (high - SURROGATE_MIN) * 0x400 + (low - LOW_SURROGATE_MIN) + 0x10000


def is_surrogate(codepoint):
    return SURROGATE_MIN <= codepoint <= SURROGATE_MAX


def merge_options(opts_class, opts, overrides):
    """Build a fresh options object from defaults, `opts` and keyword overrides.

    Args:
        opts_class: DecodeOpts or EncodeOpts
        opts: an existing options object, or None for the defaults
        overrides: keyword options that win over `opts`

    Raises:
        TypeError: if an override names an option `opts_class` doesn't have

    Returns:
        A new `opts_class` instance; `opts` itself is never modified.
    """
    fields = opts_class.__slots__
    unknown = sorted(name for name in overrides if name not in fields)
    if unknown:
        raise TypeError(f"Unknown {opts_class.__name__} option(s): {', '.join(unknown)}")
    values = {}
    if opts is not None:
        if not isinstance(opts, opts_class):
            raise TypeError(f"Expected {opts_class.__name__}, got {type(opts).__name__}")
        values = {name: getattr(opts, name) for name in fields}
    values.update(overrides)
    return opts_class(**values)
