#!/usr/bin/env python3
"""
Performance benchmark for TurboEntities against the standard library.
Reads *.html files from a directory, or builds a synthetic corpus when none is given.
"""

import argparse
import html
import pathlib
import random
import time

SAMPLE_REFERENCES = [
    "&amp;", "&lt;", "&gt;", "&quot;", "&apos;", "&copy;", "&copy", "&eacute;", "&nbsp;",
    "&#65;", "&#x1D306;", "&#128;", "&notit;", "&foo;", "&frac12;", "&AMP", "& ",
]


def build_corpus(count, seed=0):
    """Synthetic documents: prose with a reference every few words."""
    rng = random.Random(seed)
    words = ["lorem", "ipsum", "dolor", "sit", "amet", "caf\xe9", "<b>", "</b>", "a=1"]
    files = []
    for i in range(count):
        parts = []
        for _ in range(rng.randint(200, 2000)):
            parts.append(rng.choice(words))
            if rng.random() < 0.2:
                parts.append(rng.choice(SAMPLE_REFERENCES))
        files.append((f"synthetic-{i}.html", " ".join(parts)))
    return files


def load_files(directory, limit=None):
    paths = sorted(directory.glob("*.html"))
    if limit:
        paths = paths[:limit]
    return [(path.name, path.read_text("utf-8", errors="replace")) for path in paths]


def run_benchmark(fn, html_files, iterations=1):
    """Time fn over every file; returns the same summary dict for every contender."""
    all_times = []
    errors = 0
    error_files = []
    for _ in range(iterations):
        for filename, text in html_files:
            try:
                start = time.perf_counter()
                fn(text)
                all_times.append(time.perf_counter() - start)
            except Exception as e:
                errors += 1
                error_files.append((filename, str(e)))
    return {
        "total_time": sum(all_times),
        "mean_time": sum(all_times) / len(all_times) if all_times else 0,
        "errors": errors,
        "error_files": error_files,
    }


def contenders():
    from turboentities import decode, encode, escape

    return {
        "decode": [
            ("turboentities", decode),
            ("turboentities (attribute)", lambda text: decode(text, is_attribute_value=True)),
            ("html.unescape", html.unescape),
        ],
        "escape": [
            ("turboentities", escape),
            ("html.escape", html.escape),
        ],
        "encode": [
            ("turboentities", encode),
            ("turboentities (named)", lambda text: encode(text, use_named_references=True)),
            ("xmlcharrefreplace", lambda text: text.encode("ascii", "xmlcharrefreplace").decode("ascii")),
        ],
    }


def print_results(operation, results, file_count, iterations):
    """Pretty print benchmark results."""
    print("\n" + "=" * 70)
    print(f"{operation.upper()} ({file_count} files x {iterations} iterations)")
    print("=" * 70)
    print(f"{'Implementation':<28} {'Total (s)':<10} {'Mean (ms)':<10} {'Errors':<8}")
    print("-" * 70)
    baseline = results[0][1]["total_time"]
    for name, result in results:
        speedup = ""
        if baseline > 0 and result["total_time"] > 0 and result is not results[0][1]:
            speedup = f" ({result['total_time'] / baseline:.2f}x)"
        mean_ms = result["mean_time"] * 1000
        print(f"{name:<28} {result['total_time']:<10.3f} {mean_ms:<10.3f} {result['errors']:<8}{speedup}")
    for name, result in results:
        for filename, error_msg in result["error_files"][:10]:
            print(f"  {name}: {filename}: {error_msg}")


def main():
    parser = argparse.ArgumentParser(description="Benchmark TurboEntities against the standard library")
    parser.add_argument("--dir", type=pathlib.Path, help="Directory with *.html files (default: synthetic corpus)")
    parser.add_argument("--limit", type=int, help="Limit number of files to process")
    parser.add_argument("--synthetic", type=int, default=200, help="Synthetic documents to build (default: 200)")
    parser.add_argument("--iterations", type=int, default=3, help="Iterations per file (default: 3)")
    parser.add_argument(
        "--operation",
        choices=["decode", "escape", "encode"],
        action="append",
        help="Operation(s) to benchmark (default: all)",
    )
    args = parser.parse_args()

    if args.dir:
        print(f"Loading HTML files from {args.dir}...")
        html_files = load_files(args.dir, args.limit)
    else:
        print(f"Building {args.synthetic} synthetic documents...")
        html_files = build_corpus(args.synthetic)
    total_bytes = sum(len(text.encode("utf-8")) for _, text in html_files)
    print(f"Loaded {len(html_files)} files, {total_bytes / 1024 / 1024:.2f} MB")

    operations = contenders()
    for operation in args.operation or list(operations):
        results = []
        for name, fn in operations[operation]:
            print(f"Benchmarking {operation} with {name}...", flush=True)
            results.append((name, run_benchmark(fn, html_files, args.iterations)))
        print_results(operation, results, len(html_files), args.iterations)


if __name__ == "__main__":
    main()
