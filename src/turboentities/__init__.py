from .decoder import DecodeOpts, Decoder, decode
from .encoder import EncodeOpts, encode
from .serialize import escape
from .tokens import (
    AmbiguousAmpersand,
    DisallowedReference,
    ForbiddenCodepoint,
    MalformedReference,
    OutOfRangeCodepoint,
    ParseError,
    StrictModeError,
    UnterminatedReference,
)

__all__ = [
    "AmbiguousAmpersand",
    "DecodeOpts",
    "Decoder",
    "DisallowedReference",
    "EncodeOpts",
    "ForbiddenCodepoint",
    "MalformedReference",
    "OutOfRangeCodepoint",
    "ParseError",
    "StrictModeError",
    "UnterminatedReference",
    "decode",
    "encode",
    "escape",
]
