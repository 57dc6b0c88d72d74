#!/usr/bin/env python3
"""
Synthetic dataset generator for NDJSON type statistics benchmarks.

Generates a large newline-delimited JSON file where every line carries a
`type` field drawn from a small vocabulary, with a padded payload. A share of
lines can spell their type with `\\u` escapes (exercising the decoding path),
lack the `type` field, or not be JSON at all (exercising the skip counters).
"""

import argparse
import json
import random
import sys

# Large buffer for efficient streaming writes
BUFFER_SIZE = 1024 * 1024  # 1MB

TYPE_WORDS = [
    "nulla", "dolore", "lorem", "ipsum", "dolor", "amet", "consectetur",
    "adipiscing", "elit", "tempor", "incididunt", "labore", "magna", "aliqua",
    "veniam", "nostrud", "exercitation", "ullamco", "laboris", "commodo",
]

MALFORMED_LINES = [
    "not a json object at all",
    '{"type": 42, "id": 0}',
    '{"type": "unterminated',
    "",
]


def make_type_names(num_types: int) -> list[str]:
    """Return ``num_types`` distinct type names, reusing words with a suffix."""
    names = []
    for i in range(num_types):
        word = TYPE_WORDS[i % len(TYPE_WORDS)]
        names.append(word if i < len(TYPE_WORDS) else f"{word}_{i // len(TYPE_WORDS)}")
    return names


def escape_all(name: str) -> str:
    """Spell every character of ``name`` as a \\uXXXX escape."""
    return "".join(f"\\u{ord(ch):04x}" for ch in name)


def render_record(
    type_name: str,
    record_id: int,
    payload_size: int,
    escaped: bool,
    rng: random.Random,
) -> str:
    """Render one well-formed record line (without newline)."""
    payload = "x" * rng.randint(0, payload_size)
    body = json.dumps({"payload": payload}, separators=(",", ":"))
    type_literal = escape_all(type_name) if escaped else type_name
    # Put `type` second so the scanner has to skip a key first.
    return f'{{"id":{record_id},"type":"{type_literal}",{body[1:]}'


def generate_synthetic_dataset(
    output_path: str,
    num_lines: int,
    num_types: int,
    payload_size: int,
    escaped_ratio: float,
    malformed_ratio: float,
    missing_ratio: float,
    seed: int,
) -> int:
    """
    Generate a synthetic NDJSON dataset.

    Streams output line-by-line to avoid memory issues.

    Args:
        output_path: Path to output file.
        num_lines: Number of lines to write.
        num_types: Number of distinct `type` values.
        payload_size: Maximum payload length per record.
        escaped_ratio: Share of records whose type is written with escapes.
        malformed_ratio: Share of lines that are not usable JSON records.
        missing_ratio: Share of records without a `type` field.
        seed: Random seed for reproducibility.

    Returns:
        Total number of lines written.
    """
    rng = random.Random(seed)
    type_names = make_type_names(num_types)
    total_lines = 0

    with open(output_path, "w", encoding="utf-8", buffering=BUFFER_SIZE) as f:
        for i in range(num_lines):
            roll = rng.random()
            if roll < malformed_ratio:
                line = rng.choice(MALFORMED_LINES)
            elif roll < malformed_ratio + missing_ratio:
                line = json.dumps({"id": i, "kind": "no-type"}, separators=(",", ":"))
            else:
                type_name = rng.choice(type_names)
                escaped = rng.random() < escaped_ratio
                line = render_record(type_name, i, payload_size, escaped, rng)
            f.write(line + "\n")
            total_lines += 1

            # Progress indicator every 1M lines
            if (i + 1) % 1_000_000 == 0:
                print(f"  Generated {i + 1:,}/{num_lines:,} lines...", file=sys.stderr)

    return total_lines


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate synthetic NDJSON dataset with typed records.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate ~1GB of records
  python generate_synthetic_logs.py --out data/synthetic.log --lines 10000000

  # Exercise the escape decoding path heavily
  python generate_synthetic_logs.py --out data/escaped.log --escaped-ratio 0.5
""",
    )

    parser.add_argument("--out", required=True, help="Output file path")
    parser.add_argument(
        "--lines",
        type=int,
        default=1_000_000,
        help="Number of lines to write (default: 1000000)",
    )
    parser.add_argument(
        "--types",
        type=int,
        default=12,
        help="Number of distinct type values (default: 12)",
    )
    parser.add_argument(
        "--payload-size",
        type=int,
        default=128,
        help="Maximum payload length per record (default: 128)",
    )
    parser.add_argument(
        "--escaped-ratio",
        type=float,
        default=0.01,
        help="Share of records whose type uses \\u escapes (default: 0.01)",
    )
    parser.add_argument(
        "--malformed-ratio",
        type=float,
        default=0.001,
        help="Share of lines that are not usable records (default: 0.001)",
    )
    parser.add_argument(
        "--missing-ratio",
        type=float,
        default=0.001,
        help="Share of records without a type field (default: 0.001)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1,
        help="Random seed for reproducibility (default: 1)",
    )

    args = parser.parse_args()

    # Validate
    if args.lines < 0:
        parser.error("--lines must not be negative")
    if args.types < 1:
        parser.error("--types must be at least 1")
    for name in ("escaped_ratio", "malformed_ratio", "missing_ratio"):
        if not 0.0 <= getattr(args, name) <= 1.0:
            parser.error(f"--{name.replace('_', '-')} must be between 0 and 1")
    if args.malformed_ratio + args.missing_ratio > 1.0:
        parser.error("--malformed-ratio plus --missing-ratio must not exceed 1")

    # Approximate line length: ~40 chars plus half the payload
    approx_size_mb = (args.lines * (40 + args.payload_size / 2)) / (1024 * 1024)

    print("=" * 60, file=sys.stderr)
    print("Synthetic NDJSON Dataset Generator", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"Output: {args.out}", file=sys.stderr)
    print(f"Lines: {args.lines:,}", file=sys.stderr)
    print(f"Types: {args.types}", file=sys.stderr)
    print(f"Payload size: <= {args.payload_size}", file=sys.stderr)
    print(f"Seed: {args.seed}", file=sys.stderr)
    print(f"Estimated size: ~{approx_size_mb:.1f} MB", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(file=sys.stderr)

    # Generate
    print("Generating...", file=sys.stderr)
    total_lines = generate_synthetic_dataset(
        output_path=args.out,
        num_lines=args.lines,
        num_types=args.types,
        payload_size=args.payload_size,
        escaped_ratio=args.escaped_ratio,
        malformed_ratio=args.malformed_ratio,
        missing_ratio=args.missing_ratio,
        seed=args.seed,
    )

    print(file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"Done! Wrote {total_lines:,} lines to {args.out}", file=sys.stderr)
    print("=" * 60, file=sys.stderr)


if __name__ == "__main__":
    main()
