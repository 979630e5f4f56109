#!/usr/bin/env python3
"""
Command line interface for the CMS types generator.

Usage:
    python -m cmstypes                  # content-types and sections
    python -m cmstypes --content-types  # content-types only
    python -m cmstypes --sections       # sections only
    python -m cmstypes --status
"""

import argparse
import sys
from typing import List, Optional

from loguru import logger

from cmstypes.config_utils import get_output_dir, load_environment_config
from cmstypes.generator import build_generator
from cmstypes.status import check_types_status, list_available_types


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cms-types",
        description="Generate TypeBox types from content-types.json and sections.json",
    )
    parser.add_argument("--all", "-a", action="store_true", help="Generate all types (content-types + sections)")
    parser.add_argument("--content-types", action="store_true", help="Generate content-types only")
    parser.add_argument("--sections", action="store_true", help="Generate sections only")
    parser.add_argument("--source-dir", help="Directory containing the catalog files (default: current directory)")
    parser.add_argument("--output-dir", help="node_modules directory to write @cms-types into")
    parser.add_argument("--list", action="store_true", help="List generated types and exit")
    parser.add_argument("--status", action="store_true", help="Check whether the types have been generated and exit")
    return parser


def run(args: argparse.Namespace) -> int:
    """
    Execute the requested generation.

    Returns:
        0 if every requested catalog produced at least one type, 1 otherwise
    """
    output_dir = args.output_dir or get_output_dir()

    if args.list:
        list_available_types(output_dir)
        return 0

    if args.status:
        return 0 if check_types_status(output_dir) else 1

    generator = build_generator(args.source_dir, output_dir)

    only_selected = (args.content_types or args.sections) and not args.all
    if not only_selected:
        result = generator.generate_all()
        return 0 if result.content_types > 0 and result.sections > 0 else 1

    counts = []
    if args.content_types:
        counts.append(generator.generate_content_types_only())
    if args.sections:
        counts.append(generator.generate_sections_only())

    return 0 if all(count > 0 for count in counts) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    load_environment_config()

    exit_code = run(args)

    if args.list or args.status:
        return exit_code

    if exit_code == 0:
        logger.info("✅ Type generation completed successfully!")
    else:
        logger.error("❌ Type generation failed")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
