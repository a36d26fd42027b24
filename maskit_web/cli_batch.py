#!/usr/bin/env python3
"""
Batch processing CLI for MasKIT.
Sends text files to the MasKIT service and writes the anonymized output.

Usage:
    python -m maskit_web.cli_batch input_dir output_dir [--output html|txt] [--hide-originals]
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from maskit_web.core.exceptions import MaskitServiceError
from maskit_web.core.logging_setup import configure_logging
from maskit_web.core.maskit_client import MaskitClient
from maskit_web.schemas.result import (
    DisplayOptions,
    InputFormat,
    OutputFormat,
    ProcessRequest,
)
from maskit_web.utils.annotation_renderer import render

logger = logging.getLogger("maskit_web.cli_batch")


def process_file(
    file_path: Path,
    output_dir: Path,
    client: MaskitClient,
    request_template: ProcessRequest,
    options: DisplayOptions,
) -> Path:
    """Process a single text file and return the path of the written output"""
    text = file_path.read_text(encoding="utf-8")
    # Validated like an API request, so empty files are rejected before reaching the service
    request = ProcessRequest(**{**request_template.model_dump(), "text": text})

    result = client.process(request)

    output_path = output_dir / f"{file_path.stem}.{result.format}"
    output_path.write_text(render(result, options), encoding="utf-8")

    if result.stats:
        stats_path = output_dir / f"{file_path.stem}.stats.html"
        stats_path.write_text(result.stats, encoding="utf-8")

    return output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Anonymize text files with the MasKIT service"
    )
    parser.add_argument(
        "input_dir",
        type=Path,
        help="Directory containing input text files in UTF-8"
    )
    parser.add_argument(
        "output_dir",
        type=Path,
        help="Directory to write the processed files to"
    )
    parser.add_argument(
        "--input",
        choices=[f.value for f in InputFormat],
        default=InputFormat.txt.value,
        help="Input format (default: txt)"
    )
    parser.add_argument(
        "--output",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.html.value,
        help="Output format (default: html)"
    )
    parser.add_argument(
        "--hide-originals",
        action="store_true",
        help="Leave out the original values next to the replacements"
    )
    parser.add_argument(
        "--hide-highlighting",
        action="store_true",
        help="Leave out the highlighting of replacements (html only)"
    )
    parser.add_argument(
        "--no-randomize",
        action="store_true",
        help="Do not replace personal data with random values"
    )
    parser.add_argument(
        "--classes",
        action="store_true",
        help="Replace personal data with class names (implies --no-randomize)"
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="MasKIT API root (default: from settings)"
    )
    parser.add_argument(
        "--extensions",
        nargs="+",
        default=[".txt"],
        help="File extensions to process (default: .txt)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    return parser


def main(argv: Optional[list] = None, client: Optional[MaskitClient] = None) -> int:
    """Main CLI entry point"""
    args = build_parser().parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    # Validate input directory
    if not args.input_dir.is_dir():
        logger.error(f"Input directory '{args.input_dir}' does not exist")
        return 1

    args.output_dir.mkdir(parents=True, exist_ok=True)

    input_files = []
    for ext in args.extensions:
        input_files.extend(args.input_dir.rglob(f"*{ext}"))

    if not input_files:
        logger.error(f"No files found with extensions {args.extensions} in {args.input_dir}")
        return 1

    request_template = ProcessRequest(
        text="-",
        input=InputFormat(args.input),
        output=OutputFormat(args.output),
        randomize=not (args.no_randomize or args.classes),
        classes=args.classes,
    )
    options = DisplayOptions(
        show_originals=not args.hide_originals,
        show_highlighting=not args.hide_highlighting,
    )
    client = client or MaskitClient(base_url=args.api_url)

    logger.debug(f"Found {len(input_files)} files to process")

    processed = 0
    errors = 0

    for file_path in sorted(input_files):
        logger.debug(f"Processing: {file_path}")
        try:
            output_path = process_file(file_path, args.output_dir, client, request_template, options)
        except (MaskitServiceError, ValidationError, OSError, UnicodeDecodeError) as e:
            errors += 1
            logger.error(f"Failed to process {file_path}: {e}")
            continue

        processed += 1
        logger.debug(f"  Written: {output_path}")

    logger.info(f"Processing complete: {processed} processed, {errors} failed, output in {args.output_dir}")

    return 0 if errors == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
