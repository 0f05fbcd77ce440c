"""Minimal escaping for embedding text in HTML markup."""

from .constants import ESCAPE_MAP

_ESCAPE_TABLE = str.maketrans(ESCAPE_MAP)


def escape(text):
    """Replace `& < > " '` with named references; everything else is kept.

    Not idempotent: an existing reference has its `&` escaped again, so
    escape("&amp;") == "&amp;amp;".
    """
    if not text:
        return ""
    return str(text).translate(_ESCAPE_TABLE)
