#!/usr/bin/env python3
"""
Main entry point for the ERC-7730 clear signing previewer.

This script orchestrates one of three workflows:
1. Preview calldata against a descriptor (default)
2. Validate a descriptor (--validate)
3. Generate a starter descriptor from an ABI (--generate-from-abi)
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from .utils.constants import DEFAULT_FETCH_TIMEOUT
from .utils.exceptions import ClearSigningError
from .utils.generation import generate_descriptor
from .utils.loading import DescriptorCache
from .utils.preview import TransactionPreviewer
from .utils.reporting import render_preview_json, render_preview_markdown, render_validation_markdown
from .utils.validation import validate_descriptor

# Load environment variables
load_dotenv(override=True)

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    if debug:
        # Create output directory for log file
        output_dir = Path("output")
        output_dir.mkdir(exist_ok=True)

        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
            handlers=[
                logging.FileHandler(output_dir / 'clear_sign.log')
            ]
        )
    else:
        # Disable logging output when debug is False
        logging.basicConfig(
            level=logging.CRITICAL,
            format='%(asctime)s - %(levelname)s - %(message)s',
            handlers=[
                logging.NullHandler()
            ]
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Render transaction calldata as a human-readable ERC-7730 clear signing preview',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables (can also be set in .env file):
  ERC7730_FILE          Path to ERC-7730 JSON file
  DESCRIPTOR_URL        URL of an ERC-7730 JSON file (used when no file is given)
  CALLDATA              Transaction calldata to preview
  DESCRIPTOR_TIMEOUT    HTTP timeout in seconds for DESCRIPTOR_URL (default: 10)

Priority: Command-line arguments > Environment variables > Defaults
        """
    )
    parser.add_argument(
        '--erc7730_file',
        default=os.getenv('ERC7730_FILE') or os.getenv('DESCRIPTOR_URL'),
        help='Path or URL of the ERC-7730 JSON file (env: ERC7730_FILE or DESCRIPTOR_URL)'
    )
    parser.add_argument(
        '--calldata',
        default=os.getenv('CALLDATA'),
        help='Transaction calldata, 0x-prefixed hex (env: CALLDATA)'
    )
    parser.add_argument(
        '--timeout',
        default=os.getenv('DESCRIPTOR_TIMEOUT') or str(DEFAULT_FETCH_TIMEOUT),
        help='HTTP timeout for remote descriptors (env: DESCRIPTOR_TIMEOUT, default: 10)'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        default=False,
        help='Print the preview as JSON instead of markdown'
    )
    parser.add_argument(
        '--validate',
        action='store_true',
        default=False,
        help='Validate the descriptor instead of previewing calldata'
    )
    parser.add_argument(
        '--generate-from-abi',
        type=Path,
        help='Generate a starter descriptor from this ABI JSON file'
    )
    parser.add_argument(
        '--output',
        type=Path,
        help='Write the generated descriptor here instead of stdout'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        default=False,
        help='Enable debug mode to log to output/clear_sign.log (default: False)'
    )
    return parser


def _parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError:
        raise ValueError(f"Invalid timeout {value!r}: expected a number of seconds") from None
    if timeout <= 0:
        raise ValueError(f"Invalid timeout {value!r}: must be positive")
    return timeout


def _generate(abi_file: Path, output: Path = None) -> int:
    with open(abi_file, 'r') as f:
        abi = json.load(f)
    # Accept compiler artifacts as well as bare ABI arrays
    if isinstance(abi, dict):
        abi = abi.get('abi', [])
    if not isinstance(abi, list):
        raise ValueError(f"{abi_file} does not contain an ABI array")

    descriptor = generate_descriptor(abi)
    text = json.dumps(descriptor, indent=2)

    if output:
        output.write_text(text + "\n")
        logger.info(f"Descriptor written to {output}")
    else:
        print(text)
    return 0


def _validate(source: str, timeout: float) -> int:
    data = DescriptorCache(timeout=timeout).fetch_document(source)
    result = validate_descriptor(data)
    print(render_validation_markdown(result))
    return 0 if result.valid else 1


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.debug)

    try:
        if args.generate_from_abi:
            return _generate(args.generate_from_abi, args.output)

        # Validate required arguments
        if not args.erc7730_file:
            parser.error("--erc7730_file is required (or set ERC7730_FILE / DESCRIPTOR_URL environment variable)")

        timeout = _parse_timeout(args.timeout)

        if args.validate:
            return _validate(args.erc7730_file, timeout)

        if not args.calldata:
            parser.error("--calldata is required (or set CALLDATA environment variable)")

        cache = DescriptorCache(args.erc7730_file, timeout=timeout)
        previewer = TransactionPreviewer(cache.load())
        transaction = previewer.preview(args.calldata)
    except (ClearSigningError, OSError, ValueError) as e:
        logger.error(f"❌ {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(render_preview_json(transaction))
    else:
        print(render_preview_markdown(transaction))
    return 0


if __name__ == '__main__':
    sys.exit(main())
