"""
main.py — command-line entry point.

Reads product records from a JSON file and prints the comparison as JSON.

  spec-compare products.json --category "Smartphones" --feature "5G" --indent 2
  spec-compare payloads.json --category TVs --rainforest

stdout carries only the JSON document; logs go to stderr.

Exit status:
  0  comparison printed
  1  input file missing, not JSON, or not a list of objects
  2  the engine refused the request (validation / data quality)
"""
import argparse
import json
import logging
import sys
from typing import Optional, Sequence

import config
from comparison import compare_products
from errors import AnalysisError
from records.base import RawProductRecord
from records.rainforest import from_rainforest

logger = logging.getLogger(__name__)

EXIT_BAD_INPUT = 1
EXIT_ANALYSIS_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spec-compare",
        description="Normalize product specifications and compare two or more products.",
    )
    parser.add_argument("products", help="JSON file holding a list of product records")
    parser.add_argument("--category", required=True, help='product category label, e.g. "Mobile Phones"')
    parser.add_argument(
        "--feature", dest="features", action="append", default=[],
        help="feature that matters to you (repeatable)",
    )
    parser.add_argument(
        "--require-features", action="store_true",
        help="fail unless at least one --feature is given",
    )
    parser.add_argument(
        "--strict", action="store_true", default=config.STRICT_DATA_QUALITY,
        help="fail instead of warning when product data is thin",
    )
    parser.add_argument(
        "--rainforest", action="store_true",
        help="input items are Rainforest product-details payloads",
    )
    parser.add_argument("--indent", type=int, default=None, help="pretty-print with this indent")
    return parser


def load_records(path: str, category: str, rainforest: bool = False) -> list[RawProductRecord]:
    """Raise ValueError with a readable message for anything that is not a list of objects."""
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValueError(f"{path} must contain a JSON list of product objects")

    if rainforest:
        return [from_rainforest(item, category, i) for i, item in enumerate(data)]
    return [RawProductRecord.from_dict(item, i) for i, item in enumerate(data)]


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        stream=sys.stderr,
    )

    try:
        records = load_records(args.products, args.category, args.rainforest)
    except (ValueError, TypeError) as exc:
        logger.error("%s", exc)
        return EXIT_BAD_INPUT

    try:
        result = compare_products(
            records,
            args.category,
            important_features=args.features,
            require_features=args.require_features,
            strict_quality=args.strict,
        )
    except AnalysisError as exc:
        logger.error("Comparison failed: %s", exc)
        return EXIT_ANALYSIS_ERROR

    json.dump(result.to_dict(), sys.stdout, indent=args.indent, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
