"""
CLI interface for the GS1 decoder.

Usage:
    python -m gs1_decoder "<barcode text>" [options]
    python -m gs1_decoder --batch scans.txt --csv decoded.csv

Options:
    --json          Output as JSON (camelCase keys)
    --human         Output JSON with display names and dd/mm/yyyy dates
    --lookup        Merge the matching catalog record into JSON output
    --batch FILE    Decode one barcode per line
    --csv OUT       Write batch results to a CSV file
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.decoder import DecodedRecord, DecoderOptions, GS1Decoder
from .formatters.json_formatter import record_to_display_dict
from .lookup import lookup_gtin
from .reports import export_csv

logger = logging.getLogger("gs1_decoder")


def format_record(record: DecodedRecord, decoder: Optional[GS1Decoder] = None) -> str:
    """Format a decoded record for display."""
    decoder = decoder or GS1Decoder()
    lines = [
        "=" * 60,
        "GS1 Decode Result",
        "=" * 60,
        f"Raw Input: {record.raw!r}",
        f"Normalized: {record.normalized!r}",
        f"Format: {record.format.value}",
    ]

    if record.symbology:
        lines.append(f"Symbology: {record.symbology_name} ({record.symbology})")

    lines += [
        "",
        "Elements:",
        "-" * 40,
    ]

    for element in record.elements:
        marker = "" if element.known else " (unregistered)"
        lines.append(f"  AI({element.ai}){marker}: {element.value!r}")

    lines.append("")
    lines.append("Fields:")
    lines.append("-" * 40)
    for name, value in record_to_display_dict(record).items():
        lines.append(f"  {name}: {value}")

    if record.expiry_date:
        status = decoder.expiry_status(record)
        lines.append(f"  Expiry Status: {status.value}")

    if record.remainder:
        lines.append("")
        lines.append(f"Unparsed Remainder: {record.remainder!r}")

    if record.issues:
        lines.extend(["", "Issues:", "-" * 40])
        for issue in record.issues:
            lines.append(f"  [{issue.code.value}] {issue.message}")

    return "\n".join(lines)


def build_json(
    record: DecodedRecord,
    human: bool = False,
    lookup: bool = False,
    lookup_db: Optional[Path] = None,
) -> dict:
    output = record_to_display_dict(record) if human else record.to_dict()

    if lookup:
        if not record.gtin:
            output["_lookup_error"] = "GTIN not found in decoded result"
        else:
            catalog = lookup_gtin(record.gtin, db_path=lookup_db)
            if catalog:
                for key, value in catalog.items():
                    if key in ("gtin", "batch_number", "expiry_date"):
                        continue
                    output[key] = value
            else:
                output["_lookup_error"] = f"GTIN not found in catalog: {record.gtin}"

    return output


def _read_batch(path: str) -> List[str]:
    if path == "-":
        lines = sys.stdin.read().splitlines()
    else:
        lines = Path(path).read_text(encoding="utf-8").splitlines()
    return [line for line in lines if line.strip()]


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='gs1_decoder',
        description='Decode GS1 element strings scanned from medical device labels'
    )

    parser.add_argument(
        'barcode',
        nargs='?',
        help='Barcode data to decode'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output result as JSON'
    )

    parser.add_argument(
        '--human',
        action='store_true',
        help='Use display names and dd/mm/yyyy dates in JSON output'
    )

    parser.add_argument(
        '--lookup',
        action='store_true',
        help='Lookup GTIN in the catalog and merge results (JSON only)'
    )

    parser.add_argument(
        '--lookup-db',
        default=None,
        help='Path to catalog JSON (defaults to package data file)'
    )

    parser.add_argument(
        '--batch',
        metavar='FILE',
        help='Decode one barcode per line from FILE ("-" for stdin)'
    )

    parser.add_argument(
        '--csv',
        metavar='OUT',
        help='Write batch results to a CSV file'
    )

    parser.add_argument(
        '--near-days',
        type=int,
        default=None,
        help='Days before expiry that count as near expiry (default: 30)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log decoding issues to stderr'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.barcode and not args.batch:
        parser.error("a barcode or --batch FILE is required")

    options = DecoderOptions()
    if args.near_days is not None:
        options.near_expiry_days = args.near_days
    decoder = GS1Decoder(options)
    lookup_db = Path(args.lookup_db) if args.lookup_db else None

    if args.batch:
        records = decoder.parse_many(_read_batch(args.batch))
        logger.info("Decoded %d barcode(s)", len(records))
        if args.csv:
            path = export_csv(records, args.csv)
            print(f"Wrote {len(records)} record(s) to {path}")
        else:
            output = [
                build_json(r, human=args.human, lookup=args.lookup, lookup_db=lookup_db)
                for r in records
            ]
            print(json.dumps(output, indent=2, ensure_ascii=False))
        return 0 if any(not r.is_empty for r in records) else 1

    record = decoder.parse(args.barcode)

    if args.json:
        output = build_json(record, human=args.human, lookup=args.lookup, lookup_db=lookup_db)
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(format_record(record, decoder))

    # Exit code: 0 when at least one field was decoded
    return 1 if record.is_empty else 0


if __name__ == '__main__':
    sys.exit(main())
