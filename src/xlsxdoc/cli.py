from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .api import read_xlsx_result
from .errors import ParseError
from .model import ParseOptions, WorkbookDoc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Decode an .xlsx package and summarize its contents as JSON")
    parser.add_argument("input", type=Path, help="Input .xlsx file")
    parser.add_argument("-o", "--output", type=Path, help="Output path (defaults to stdout)")
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of threads used to extract worksheets",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def build_summary(workbook: WorkbookDoc) -> dict:
    sheets = []
    for name, sheet in workbook.sheets:
        sheets.append(
            {
                "name": name,
                "cell_count": len(sheet.cells),
                "formula_count": sum(1 for cell in sheet.cells.values() if cell.formula is not None),
                "comment_count": sum(1 for cell in sheet.cells.values() if cell.comment is not None),
                "merge_count": len(sheet.merges),
                "table_count": len(sheet.tables),
                "pivot_table_count": len(sheet.pivot_tables),
                "drawing_anchor_count": len(sheet.drawing.anchors) if sheet.drawing else 0,
            }
        )
    return {
        "sheet_count": len(workbook.sheets),
        "sheets": sheets,
        "defined_names": [dn.name for dn in workbook.defined_names],
        "custom_properties": sorted(workbook.custom_properties),
        "styles_size_bytes": len(workbook.styles),
    }


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    result = read_xlsx_result(args.input.read_bytes(), options=ParseOptions(max_workers=args.workers))
    if isinstance(result, ParseError):
        print(f"error: {result}", file=sys.stderr)
        return 1

    payload = json.dumps(build_summary(result), ensure_ascii=False, indent=2)
    if args.output is None:
        print(payload)
    else:
        args.output.write_text(payload + "\n", encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
