"""
Preview a property import file from the command line.

Useful for checking how a back-office export maps before onboarding a client.

Usage:
  python scripts/preview_import.py inmuebles.xlsx
  python scripts/preview_import.py export.csv --override "Valor=rent_price" --override "Orientación=_ignore"
  python scripts/preview_import.py inmuebles.xlsx --json
"""

import argparse
import json
import os
import sys

# Allow imports from the project root when running as a script
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import configure_logging, get_settings
from exceptions import AppError
from models.property_import import MAPPABLE_FIELDS
from services.property_import_service import enforce_row_limit, generate_import_preview


def parse_overrides(values: list[str]) -> dict[str, str]:
    """Parse repeated HEADER=FIELD arguments."""
    overrides = {}
    for value in values:
        header, sep, field = value.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"Override must be HEADER=FIELD: {value}")
        overrides[header.strip()] = field.strip()
    return overrides


def print_preview(preview) -> None:
    print(f"\n{'='*60}")
    print("PROPERTY IMPORT PREVIEW")
    print(f"{'='*60}")
    print(f"Sheet: {preview.sheet_name}  (of {', '.join(preview.sheet_names)})")
    print(f"Rows: {preview.total_rows}  valid: {preview.valid_count}  "
          f"errors: {preview.error_count}  duplicates: {preview.duplicate_count}")

    print("\nColumns:")
    for m in preview.column_mappings:
        print(f"  {m.raw_header:<30} -> {m.mapped_field:<18} [{m.confidence}]")
    for header in preview.unmapped_headers:
        print(f"  {header:<30} -> (sin mapear)")

    print("\nSample:")
    for s in preview.preview:
        if s.has_error:
            print(f"  fila {s.row_number}: {s.title}  ERROR: {'; '.join(s.errors)}")
        else:
            print(f"  fila {s.row_number}: {s.title} | {s.property_type} | {s.business_type} | "
                  f"{s.price:,.0f} | {s.city} | {s.area} m² | {s.bedrooms:g} hab | {s.bathrooms:g} baños")

    errors = [r for r in preview.rows if r.errors]
    if errors:
        print("\nErrors:")
        for row in errors[:20]:
            print(f"  fila {row.row_number}: {'; '.join(row.errors)}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Preview a property spreadsheet import",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Fields: " + ", ".join(f["value"] for f in MAPPABLE_FIELDS),
    )
    parser.add_argument("file", help="Path to .xlsx, .xls or .csv file")
    parser.add_argument(
        "--override",
        action="append",
        default=[],
        metavar="HEADER=FIELD",
        help="Manual column mapping (FIELD may be _ignore). Repeatable."
    )
    parser.add_argument("--json", action="store_true", help="Print the full preview as JSON")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)

    try:
        overrides = parse_overrides(args.override)
        preview = generate_import_preview(args.file, overrides, settings=settings)
        enforce_row_limit(preview.total_rows, settings.import_max_rows)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except AppError as e:
        print(json.dumps(e.to_dict(), ensure_ascii=False, indent=2))
        return 1

    if args.json:
        print(json.dumps(preview.to_dict(), ensure_ascii=False, indent=2))
    else:
        print_preview(preview)
    return 0


if __name__ == "__main__":
    sys.exit(main())
