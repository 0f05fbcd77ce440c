"""Command line interface: python -m turboentities {decode,encode,escape} [TEXT]

Reads TEXT, or stdin when it is omitted, and writes the converted text to
stdout. Strict mode failures go to stderr with exit status 1.
"""

import argparse
import sys

from .decoder import decode
from .encoder import encode
from .serialize import escape
from .tokens import StrictModeError


def build_parser():
    parser = argparse.ArgumentParser(
        prog="turboentities",
        description="Decode, encode or escape HTML character references",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    decode_parser = commands.add_parser("decode", help="Replace character references with the text they stand for")
    decode_parser.add_argument("text", nargs="?", help="Text to decode (default: read stdin)")
    decode_parser.add_argument(
        "--attribute",
        action="store_true",
        help="Treat the input as an attribute value (keeps `&name=` literal)",
    )
    decode_parser.add_argument("--strict", action="store_true", help="Fail on the first parse error")
    decode_parser.add_argument("--errors", action="store_true", help="Print recovered parse errors to stderr")

    encode_parser = commands.add_parser("encode", help="Replace symbols with character references")
    encode_parser.add_argument("text", nargs="?", help="Text to encode (default: read stdin)")
    encode_parser.add_argument("--named", action="store_true", help="Use named references where possible")
    encode_parser.add_argument("--everything", action="store_true", help="Encode printable ASCII as well")
    encode_parser.add_argument("--allow-unsafe", action="store_true", help="Leave & < > \" ' unescaped")
    encode_parser.add_argument("--decimal", action="store_true", help="Use decimal instead of hex escapes")
    encode_parser.add_argument("--strict", action="store_true", help="Fail on forbidden code points")
    encode_parser.add_argument("--errors", action="store_true", help="Print recovered parse errors to stderr")

    escape_parser = commands.add_parser("escape", help="Escape & < > \" ' only")
    escape_parser.add_argument("text", nargs="?", help="Text to escape (default: read stdin)")
    return parser


def run(argv=None, stdin=None, stdout=None, stderr=None):
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    args = build_parser().parse_args(argv)
    text = args.text if args.text is not None else stdin.read()

    if args.command == "escape":
        stdout.write(escape(text))
        return 0

    errors = [] if args.errors else None
    try:
        if args.command == "decode":
            result = decode(text, errors=errors, is_attribute_value=args.attribute, strict=args.strict)
        else:
            result = encode(
                text,
                errors=errors,
                allow_unsafe_symbols=args.allow_unsafe,
                encode_everything=args.everything,
                strict=args.strict,
                use_named_references=args.named,
                decimal=args.decimal,
            )
    except StrictModeError as e:
        print(f"error: {e}", file=stderr)
        return 1

    for error in errors or ():
        print(f"warning: {error}", file=stderr)
    stdout.write(result)
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
