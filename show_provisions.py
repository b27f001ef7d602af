#!/usr/bin/env python3
"""
Script to display the provisions and definitions parsed from register XHTML.

Usage:
    python show_provisions.py <xhtml_file> [act_id]

Arguments:
    xhtml_file     Path to the EPUB XHTML of an act
    act_id         Optional catalogue id or register title id
                   (defaults to the file stem)

Options:
    --debug            Log skipped headings and sections
    --show-content     Display preview of provision content
    --definitions      List extracted definitions
    --max-preview N    Characters to show in preview (default: 300)

Examples:
    python show_provisions.py data/source/privacy-act-1988.html
    python show_provisions.py privacy.html C2004A03712 --show-content
    python show_provisions.py privacy.html --definitions
"""

import sys
import logging
import argparse
from pathlib import Path

from leg2json.acts import get_act
from leg2json.models import ActIndexEntry
from leg2json.parser import ActParser


def main():
    parser = argparse.ArgumentParser(
        description="Display provisions parsed from register XHTML",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python show_provisions.py privacy.html privacy-act-1988
  python show_provisions.py privacy.html --show-content --max-preview 200
        """,
    )

    parser.add_argument("xhtml_file", type=str, help="Path to XHTML file")
    parser.add_argument("act_id", type=str, nargs="?", help="Catalogue id or register title id")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--show-content", action="store_true", help="Show preview of provision content")
    parser.add_argument("--definitions", action="store_true", help="List extracted definitions")
    parser.add_argument(
        "--max-preview",
        type=int,
        default=300,
        help="Maximum characters to show in preview (default: 300)",
    )

    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    html_path = Path(args.xhtml_file)
    if not html_path.exists():
        print(f"Error: File not found: {html_path}", file=sys.stderr)
        return 1

    print(f"Reading file: {html_path}")
    html_content = html_path.read_text(encoding="utf-8")

    act_id = args.act_id or html_path.stem
    act = get_act(act_id)
    if act is None:
        print(f"Act '{act_id}' is not in the catalogue; dates default to 1 January 1900.")
        act = ActIndexEntry(id=act_id, title=act_id, year=1900, title_id=act_id, url=str(html_path))

    parsed = ActParser(html_content, act).parse()

    print(f"\n{'='*80}")
    print(f"PROVISIONS FOUND: {len(parsed.provisions)}  DEFINITIONS: {len(parsed.definitions)}")
    print(f"{'='*80}\n")

    if not parsed.provisions:
        print("No provisions found.")
        return 0

    chapter = None
    for provision in parsed.provisions:
        if provision.chapter != chapter:
            chapter = provision.chapter
            print(f"[{chapter or 'no part'}]")

        print(f"  {provision.provision_ref:<10} {provision.title}  ({len(provision.content):,} chars)")

        if args.show_content:
            preview = provision.content[: args.max_preview]
            if len(provision.content) > args.max_preview:
                preview += "..."
            print(f"             {preview}")

    if args.definitions and parsed.definitions:
        print(f"\n{'='*80}")
        print("DEFINITIONS")
        print(f"{'='*80}\n")
        for definition in parsed.definitions:
            print(f"  {definition.term} ({definition.source_provision})")

    return 0


if __name__ == "__main__":
    sys.exit(main())
