#!/usr/bin/env python
"""Compare two JSON files from the command line."""

import argparse
import sys
from dataclasses import replace

from treediff import (
    DiffRunner,
    DiffOptions,
    ParseError,
    OptionsError,
    format_result,
    filter_differences,
    configure_logging,
)
from treediff.metrics import summarize
from treediff.models import ExportFormat, LogLevel


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Structural diff of two JSON documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_diff.py before.json after.json
  python run_diff.py before.json after.json -o options.yaml -f csv -r report.csv
  python run_diff.py before.json after.json --ignore-array-order --only 'users[*].name'
        """
    )

    parser.add_argument("left", help="Path to the left (baseline) JSON file")
    parser.add_argument("right", help="Path to the right JSON file")
    parser.add_argument("-o", "--options", help="Path to YAML/JSON options file")
    parser.add_argument(
        "-f", "--format",
        default=ExportFormat.TXT.value,
        choices=[f.value for f in ExportFormat],
        help="Report format (default: txt)"
    )
    parser.add_argument("-r", "--report", help="Write the report to this file instead of stdout")
    parser.add_argument(
        "--only",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Only report differences whose path matches (repeatable); the summary and exit code count the kept ones"
    )
    parser.add_argument("--ignore-case", action="store_true", help="Case-fold strings")
    parser.add_argument("--ignore-whitespace", action="store_true", help="Collapse whitespace in strings")
    parser.add_argument("--ignore-array-order", action="store_true", help="Compare arrays as sorted copies")
    parser.add_argument("--ignore-extra-keys", action="store_true", help="Ignore keys present on one side only")
    parser.add_argument("--show-unchanged", action="store_true", help="Report equal leaves too")
    parser.add_argument("--max-depth", type=int, default=0, help="Maximum path depth (0 = unlimited)")
    parser.add_argument("--precision", type=int, default=0, help="Decimal digits of numeric tolerance")
    parser.add_argument(
        "--log-level",
        default=LogLevel.WARN.value,
        choices=[level.value for level in LogLevel],
        help="Logging level (default: WARN)"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        options = None
        if not args.options:
            options = DiffOptions(
                ignore_case=args.ignore_case,
                ignore_whitespace=args.ignore_whitespace,
                ignore_array_order=args.ignore_array_order,
                ignore_extra_keys=args.ignore_extra_keys,
                show_unchanged=args.show_unchanged,
                max_depth=args.max_depth,
                precision=args.precision,
            )
        runner = DiffRunner(args.left, args.right, args.options, options)
        result = runner.run()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except OptionsError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2
    except ParseError as e:
        location = f" (line {e.line}, column {e.column})" if e.line is not None else ""
        print(f"Error: {e.side} input: {e.message}{location}: {e.reason}", file=sys.stderr)
        return 2

    if args.only:
        shown = filter_differences(result.differences, args.only)
        result = replace(
            result,
            differences=tuple(shown),
            summary=summarize(shown, result.left_value, result.right_value)
        )

    report = format_result(result, args.format)

    if args.report:
        with open(args.report, "w", encoding="utf-8") as f:
            f.write(report)
        if not args.quiet:
            print(f"Report saved to: {args.report}")
    elif not args.quiet:
        print(report)

    # Return exit code
    return 0 if result.is_identical else 1


if __name__ == "__main__":
    sys.exit(main())
