"""
CLI entry point for the post linter.

Usage:
  python -m post_linter check                # Lint every post in the series
  python -m post_linter check-file <path>    # Lint a single post
  python -m post_linter index                # JSON summary of the series
  python -m post_linter report               # Write a markdown lint report
"""

import argparse
import json
import sys
from pathlib import Path

from post_linter.errors import ConfigError
from post_linter.linter import PostLinter
from post_linter.services.report import render_text


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="post-lint",
        description="Content checks for a markdown blog series.",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Directory holding the posts (overrides POSTS_DIR env var).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as failures.",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only print the summary line.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("check", help="Lint every post in the series.")
    sub.add_parser("index", help="Print the series index as JSON.")
    sub.add_parser("report", help="Write a markdown lint report.")

    check_file = sub.add_parser("check-file", help="Lint a single post.")
    check_file.add_argument("file", type=Path, help="Path to the post.")

    args = parser.parse_args(argv)

    try:
        linter = PostLinter(root=args.root)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    if args.command == "index":
        print(json.dumps(linter.index.summary(), indent=2))
        return

    if args.command == "check-file":
        if not args.file.is_file():
            print(f"Error: file not found — {args.file}", file=sys.stderr)
            sys.exit(2)
        result = linter.lint_file(args.file)
    else:
        result = linter.lint_all()

    text = render_text(result)
    if args.quiet:
        text = text.splitlines()[-1]
    print(text)

    if args.command == "report":
        path = linter.write_report(result)
        print(f"Lint report written → {path}")

    if not result.ok(strict=args.strict):
        sys.exit(1)


if __name__ == "__main__":
    main()
