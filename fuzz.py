#!/usr/bin/env python3
"""
Random fuzzer for TurboEntities.
Generates malformed character references to test decode/encode/escape robustness
and checks the round-trip properties that must hold for any input.
"""

import argparse
import random
import string
import sys
import time
import traceback

from turboentities.constants import NUMERIC_REPLACEMENTS

# Fuzzing strategies
NAMES = [
    "amp", "AMP", "lt", "gt", "quot", "apos", "copy", "COPY", "nbsp", "eacute", "not", "notin",
    "frac12", "fjlig", "nvlt", "nvgt", "Afr", "NewLine", "zwnj", "ThickSpace", "acE",
]

LOOKAHEAD_CHARS = ["=", "a", "Z", "0", "9", ";", " ", "&", "#", ""]

SPECIAL_CHARS = ["<", ">", "&", "\"", "'", "=", "/", "\\", "\x00", "\t", "\n", "\r", "\x0c", "`"]

SYMBOLS = [
    "\xe9", "\xa9", "\xa0", "\u20ac", "\u20d2", "\ufeff", "\ufdd0", "\uffff", "\ufffd",
    "\U0001d306", "\U0001d504", "\U0001fffe", "\U0010ffff",
    "\ud800", "\udc00", "\ud834\udf06", "\ud83f\udffe",
    "\x01", "\x7f", "\x80", "\x9f",
]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_digits(alphabet, min_len=0, max_len=10):
    return "".join(random.choices(alphabet, k=random.randint(min_len, max_len)))


def fuzz_decimal_reference():
    """Generate decimal references, well-formed or not."""
    strategies = [
        lambda: f"&#{random.randint(0, 0x10FFFF)};",
        lambda: f"&#{random.randint(0, 0x10FFFF)}",  # Missing semicolon
        lambda: f"&#{random.randint(0x80, 0x9F)};",  # Windows-1252 range
        lambda: f"&#{random.randint(0xD800, 0xDFFF)};",  # Surrogates
        lambda: "&#" + "0" * random.randint(1, 50) + str(random.randint(0, 200)) + ";",  # Leading zeros
        lambda: "&#" + random_digits(string.digits, 10, 200) + ";",  # Huge
        lambda: "&#" + random_digits(string.digits, 0, 3) + random.choice(SPECIAL_CHARS),
        lambda: "&#",  # End of input
    ]
    return random.choice(strategies)()


def fuzz_hex_reference():
    """Generate hex references, well-formed or not."""
    strategies = [
        lambda: f"&#x{random.randint(0, 0x10FFFF):x};",
        lambda: f"&#X{random.randint(0, 0x10FFFF):X}",  # Missing semicolon
        lambda: f"&#x{random.randint(0x110000, 0xFFFFFFFF):x};",  # Past U+10FFFF
        lambda: "&#x" + random_digits(string.hexdigits, 0, 3) + random.choice(["g", ";", " ", ""]),
        lambda: "&#x" + random_digits(string.hexdigits, 10, 200) + ";",
        lambda: "&#x",  # End of input
    ]
    return random.choice(strategies)()


def fuzz_named_reference():
    """Generate named references with and without semicolons."""
    name = random.choice(NAMES)
    strategies = [
        lambda: f"&{name};",
        lambda: f"&{name}",
        lambda: f"&{name}{random.choice(LOOKAHEAD_CHARS)}",
        lambda: f"&{name}{random_string(1, 5)};",  # Unknown name with semicolon
        lambda: f"&{random_string(1, 10)}",  # Unknown name without semicolon
        lambda: f"&{random_string(1, 40)};",
        lambda: f"&{name.upper()};",
        lambda: "&" * random.randint(1, 5) + name,
    ]
    return random.choice(strategies)()


def fuzz_query_string():
    """Generate attribute-like query strings where `&name=` must survive."""
    pairs = [f"{random.choice(NAMES + [random_string(1, 5)])}={random_string(0, 5)}" for _ in range(random.randint(1, 5))]
    return "?" + "&".join(pairs)


def fuzz_text():
    """Generate text content with edge cases."""
    strategies = [
        lambda: random_string(1, 50),
        lambda: "".join(random.choices(SPECIAL_CHARS, k=random.randint(1, 10))),
        lambda: "".join(random.choices(SYMBOLS, k=random.randint(1, 5))),
        lambda: "fj" * random.randint(1, 3),
        lambda: random.choice(["<", ">"]) + "\u20d2",
        lambda: "\r\n" * random.randint(1, 5),
        lambda: " " * random.randint(10, 100),
    ]
    return random.choice(strategies)()


def generate_fuzzed_text():
    """Generate one fuzzed input mixing references and raw text."""
    parts = []
    for _ in range(random.randint(1, 30)):
        generator = random.choices(
            [fuzz_decimal_reference, fuzz_hex_reference, fuzz_named_reference, fuzz_query_string, fuzz_text],
            weights=[10, 10, 20, 5, 20],
        )[0]
        parts.append(generator())
    return "".join(parts)


def can_round_trip(text):
    """Surrogates and Windows-1252 controls don't survive encode then decode."""
    for char in text:
        codepoint = ord(char)
        if codepoint in NUMERIC_REPLACEMENTS or 0xD800 <= codepoint <= 0xDFFF:
            return False
    return True


def check_properties(text):
    """Run every operation on `text`; return a list of violated properties."""
    from turboentities import decode, encode, escape

    violations = []
    decode(text)
    decode(text, is_attribute_value=True)

    if decode(escape(text)) != text:
        violations.append("decode(escape(text)) != text")

    for named in (False, True):
        for everything in (False, True):
            encoded = encode(text, use_named_references=named, encode_everything=everything)
            if any(not (0x20 <= ord(char) <= 0x7E or char in "\r\n") for char in encoded):
                violations.append(f"non-ASCII output (named={named}, everything={everything})")
            if can_round_trip(text) and decode(encoded) != text:
                violations.append(f"round trip failed (named={named}, everything={everything})")
    return violations


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    """Run the fuzzer."""
    if seed is not None:
        random.seed(seed)

    crashes = []
    hangs = []
    violations = []
    successes = 0

    print(f"Fuzzing turboentities with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        text = generate_fuzzed_text()

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            failed = check_properties(text)
            elapsed = time.perf_counter() - start

            # Check for hangs (>5 seconds)
            if elapsed > 5.0:
                hangs.append({"test_num": i, "text": text, "time": elapsed})
                if verbose:
                    print(f"  HANG: Test {i} took {elapsed:.2f}s")
            elif failed:
                violations.append({"test_num": i, "text": text, "failed": failed})
                if verbose:
                    print(f"  VIOLATION: Test {i}: {', '.join(failed)}")
            else:
                successes += 1

        except Exception as e:
            crashes.append({
                "test_num": i,
                "text": text,
                "error": str(e),
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"  CRASH: Test {i}: {e}")

    elapsed_total = time.time() - start_time

    # Report results
    print(f"\n{'='*60}")
    print("FUZZING RESULTS: turboentities")
    print(f"{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Violations:     {len(violations)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Total time:     {elapsed_total:.2f}s")
    print(f"Tests/second:   {num_tests/elapsed_total:.1f}")

    if crashes:
        print(f"\n{'='*60}")
        print("CRASH DETAILS:")
        print(f"{'='*60}")
        for crash in crashes[:10]:  # Show first 10
            print(f"\nTest #{crash['test_num']}:")
            print(f"  Text: {crash['text'][:200]!r}...")
            print(f"  Error: {crash['error']}")
        if len(crashes) > 10:
            print(f"\n... and {len(crashes) - 10} more crashes")

    if violations:
        print(f"\n{'='*60}")
        print("PROPERTY VIOLATIONS:")
        print(f"{'='*60}")
        for violation in violations[:10]:
            print(f"\nTest #{violation['test_num']}:")
            print(f"  Text: {violation['text'][:200]!r}...")
            for failure in violation["failed"]:
                print(f"  - {failure}")

    if hangs:
        print(f"\n{'='*60}")
        print("HANG DETAILS:")
        print(f"{'='*60}")
        for hang in hangs[:5]:
            print(f"\nTest #{hang['test_num']} ({hang['time']:.2f}s):")
            print(f"  Text: {hang['text'][:200]!r}...")

    if save_failures and (crashes or hangs or violations):
        filename = f"fuzz_failures_{int(time.time())}.txt"
        with open(filename, "w", encoding="utf-8", errors="backslashreplace") as f:
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"Text:\n{crash['text']!r}\n")
                f.write(f"Error: {crash['error']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for violation in violations:
                f.write(f"=== VIOLATION #{violation['test_num']} ===\n")
                f.write(f"Text:\n{violation['text']!r}\n")
                f.write("\n".join(violation["failed"]) + "\n\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"Text:\n{hang['text']!r}\n\n")
        print(f"\nFailures saved to {filename}")

    return not (crashes or hangs or violations)


def main():
    parser = argparse.ArgumentParser(description="Fuzz TurboEntities with malformed character references")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Save failures to a file",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed inputs (no decoding)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i+1} ===")
            print(repr(generate_fuzzed_text()))
            print()
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
