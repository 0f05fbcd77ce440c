class SmallCharSet:
    """ASCII-only character set backed by a 128-bit mask.

    Membership of anything outside ASCII (or the empty string the scanner
    uses for end of input) is always False.
    """

    __slots__ = ("_mask",)

    def __init__(self, chars):
        mask = 0
        for c in chars:
            code = ord(c)
            if code >= 128:
                raise ValueError("SmallCharSet only supports ASCII")
            mask |= 1 << code
        self._mask = mask

    def __contains__(self, c):
        if len(c) != 1:
            return False
        code = ord(c)
        if code >= 128:
            return False
        return (self._mask >> code) & 1 == 1

    def __or__(self, other):
        merged = SmallCharSet("")
        merged._mask = self._mask | other._mask
        return merged

    def span(self, text, pos, end=None):
        """Return the index of the first character at or after `pos` not in the set."""
        if end is None:
            end = len(text)
        mask = self._mask
        while pos < end:
            code = ord(text[pos])
            if code >= 128 or not (mask >> code) & 1:
                break
            pos += 1
        return pos
