#!/usr/bin/env python3
"""
Command-line entry point: turn a WSDL file into a readable HTML5 reference page.

Usage:
    wsdl-reference [options] <wsdl-file>
    wsdl-reference [options] -              # read from stdin
    wsdl-reference [options] https://host/service.wsdl

Relative imports resolve against the WSDL file's directory (or URL), or the
current directory when reading stdin.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .clients.source_client import SourceFetcher, is_url
from .core.config import loader_config
from .core.errors import ImportFetchError, WsdlReferenceError
from .core.logging import setup_logging
from .services.domain.wsdl import render_html, service_to_dict
from .services.domain.wsdl.loader import base_of
from .services.wsdl_service import load_service

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wsdl-reference",
        description="Generate a readable HTML5 reference page from a WSDL file",
    )
    parser.add_argument("wsdl_file", help='Path to .wsdl / .xml file, an http(s) URL, or "-" to read stdin')
    parser.add_argument("-o", "--output", help="Write output to file instead of stdout")
    parser.add_argument("--title", help="Override the page <title>")
    parser.add_argument("--inline-css", action="store_true", help="Embed the stylesheet inline (fully offline output)")
    parser.add_argument("--json", action="store_true", help="Emit the normalized model as JSON instead of HTML")
    parser.add_argument("--log-level", default=loader_config.LOG_LEVEL, help="Log level (default: %(default)s)")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {loader_config.APP_VERSION}")
    return parser


async def fetch_css(fetcher: SourceFetcher) -> Optional[str]:
    """Stylesheet text for --inline-css; None falls back to the CDN link."""
    if loader_config.CSS_FILE:
        return Path(loader_config.CSS_FILE).read_text(encoding="utf-8")
    try:
        return await fetcher.fetch(loader_config.CSS_URL)
    except ImportFetchError as e:
        logger.warning(f"Could not fetch stylesheet ({e.reason}). Falling back to CDN link.")
        return None


async def run(args: argparse.Namespace) -> str:
    """Load the WSDL named by args and return the rendered output."""
    async with SourceFetcher() as fetcher:
        location = None
        if args.wsdl_file == "-":
            xml = sys.stdin.read()
            base_location = os.getcwd()
        elif is_url(args.wsdl_file):
            location = args.wsdl_file
            xml = await fetcher.fetch(location)
            base_location = base_of(location)
        else:
            location = os.path.abspath(args.wsdl_file)
            xml = await fetcher.fetch(location)
            base_location = base_of(location)

        service, index = await load_service(xml, base_location=base_location, fetcher=fetcher, location=location)

        if args.json:
            return json.dumps(service_to_dict(service), indent=2, ensure_ascii=False) + "\n"

        inline_css = await fetch_css(fetcher) if args.inline_css else None
        return render_html(service, index, title=args.title, inline_css=inline_css)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        output = asyncio.run(run(args))
    except (WsdlReferenceError, OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
