#!/usr/bin/env python3
"""Convert a register XHTML file to a JSON seed file with the same filename."""

import sys
import argparse
from pathlib import Path
from leg2json.acts import get_act
from leg2json.core import convert_to_json
from leg2json.models import ActIndexEntry


def main():
    parser = argparse.ArgumentParser(
        description="Convert register XHTML file to JSON with the same filename but .json extension"
    )
    parser.add_argument("input_file", help="Path to input XHTML file")
    parser.add_argument(
        "-o",
        "--output",
        help="Output file path (optional, defaults to input filename with .json extension)",
    )
    parser.add_argument(
        "--act",
        help="Catalogue id or register title id (e.g., privacy-act-1988, C2004A03712)",
    )
    parser.add_argument("--title", help="Act title when the act is not in the catalogue")
    parser.add_argument("--year", type=int, help="Act year when the act is not in the catalogue")

    args = parser.parse_args()

    # Validate input file
    input_path = Path(args.input_file)
    if not input_path.exists():
        print(f"Error: Input file '{args.input_file}' not found", file=sys.stderr)
        sys.exit(1)

    if not input_path.is_file():
        print(f"Error: '{args.input_file}' is not a file", file=sys.stderr)
        sys.exit(1)

    act = get_act(args.act) if args.act else None
    if act is None:
        if not (args.title and args.year):
            print("Error: pass --act for a catalogued act, or both --title and --year", file=sys.stderr)
            sys.exit(1)
        act = ActIndexEntry(
            id=args.act or input_path.stem,
            title=args.title,
            year=args.year,
            title_id=args.act or input_path.stem,
            url=str(input_path),
        )

    output_path = Path(args.output) if args.output else input_path.with_suffix(".json")

    try:
        with open(input_path, "r", encoding="utf-8") as f:
            html_content = f.read()

        json_content = convert_to_json(html_content, act)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(json_content)

        print(f"Successfully converted '{input_path}' to '{output_path}'")

    except Exception as e:
        print(f"Error during conversion: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
