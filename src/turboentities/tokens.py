class ReferenceSite:
    """One candidate character reference found by the scanner."""

    __slots__ = ("end", "kind", "next_char", "raw", "semicolon", "start", "value")

    DECIMAL = 0
    HEX = 1
    NAMED_TERMINATED = 2
    NAMED_UNTERMINATED = 3
    AMBIGUOUS = 4

    KIND_NAMES = ("decimal", "hex", "named", "legacy", "ambiguous")

    def __init__(self, kind, start, end, raw, value, semicolon=False, next_char=""):
        self.kind = kind
        self.start = start
        self.end = end
        self.raw = raw
        self.value = value
        self.semicolon = bool(semicolon)
        self.next_char = next_char

    def __repr__(self):
        return f"<{self.KIND_NAMES[self.kind]}:{self.raw!r} @{self.start}>"


class ParseError:
    """Represents a character reference parse error at an input offset."""

    __slots__ = ("code", "message", "position")

    def __init__(self, code, message=None, position=None):
        self.code = code
        self.message = message or code
        self.position = position

    def __repr__(self):
        if self.position is not None:
            return f"ParseError({self.code!r}, position={self.position})"
        return f"ParseError({self.code!r})"

    def __str__(self):
        if self.position is not None:
            if self.message != self.code:
                return f"({self.position}): {self.code} - {self.message}"
            return f"({self.position}): {self.code}"
        if self.message != self.code:
            return f"{self.code} - {self.message}"
        return self.code

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.code == other.code and self.position == other.position

    __hash__ = None  # Unhashable since we define __eq__


class StrictModeError(Exception):
    """Raised in strict mode on the first parse error; `error` holds the details."""

    code = "parse-error"

    def __init__(self, error):
        self.error = error
        super().__init__(str(error))


class MalformedReference(StrictModeError):
    code = "malformed-character-reference"


class UnterminatedReference(StrictModeError):
    code = "missing-semicolon-after-character-reference"


class OutOfRangeCodepoint(StrictModeError):
    code = "character-reference-outside-unicode-range"


class DisallowedReference(StrictModeError):
    code = "disallowed-character-reference"


class AmbiguousAmpersand(StrictModeError):
    code = "ambiguous-ampersand"


class ForbiddenCodepoint(StrictModeError):
    code = "forbidden-code-point"


def emit_error(kind, message, position, strict, errors):
    """Raise `kind` in strict mode, otherwise record the error if collecting.

    Args:
        kind: a StrictModeError subclass naming the error
        message: human readable description
        position: offset into the input text
        strict: whether to abort the call
        errors: list to append ParseError records to, or None
    """
    if not strict and errors is None:
        return
    error = ParseError(kind.code, message, position)
    if strict:
        raise kind(error)
    errors.append(error)
