#!/usr/bin/env python3
"""Debug script to inspect how an input's character references are resolved."""

import argparse
import sys

from turboentities.decoder import DecodeOpts, Decoder
from turboentities.scanner import ReferenceScanner, find_malformed_references
from turboentities.tokens import StrictModeError


def debug_text(text, is_attribute_value=False):
    print(f"Input: {text!r}")
    print(f"Attribute value: {is_attribute_value}")

    malformed = list(find_malformed_references(text))
    if malformed:
        print("\nMalformed numeric references at offsets:")
        for position in malformed:
            print(f"  {position}: {text[position:position + 4]!r}")

    errors = []
    decoder = Decoder(DecodeOpts(is_attribute_value=is_attribute_value), errors)
    print("\nSites:")
    for site in ReferenceScanner(text):
        seen = len(errors)
        try:
            resolved = decoder.resolve(site)
        except StrictModeError as e:
            print(f"  {site!r} -> raised {e}")
            continue
        print(f"  {site!r} value={site.value!r} next={site.next_char!r} -> {resolved!r}")
        for error in errors[seen:]:
            print(f"      {error}")

    errors = []
    result = Decoder(DecodeOpts(is_attribute_value=is_attribute_value), errors).run(text)
    print(f"\nOutput: {result!r}")
    print(f"Errors ({len(errors)}):")
    for error in errors:
        print(f"  {error}")


def main():
    parser = argparse.ArgumentParser(description="Show the reference sites found in TEXT")
    parser.add_argument("text", nargs="?", help="Text to inspect (default: read stdin)")
    parser.add_argument("--attribute", action="store_true", help="Decode as an attribute value")
    args = parser.parse_args()
    text = args.text if args.text is not None else sys.stdin.read()
    debug_text(text, is_attribute_value=args.attribute)


if __name__ == "__main__":
    main()
