from __future__ import annotations

import json

from xlsxdoc.cli import build_parser, main
from tests.helpers import build_xlsx, corrupt_deflated_part


def test_parser_defaults(tmp_path) -> None:
    args = build_parser().parse_args([str(tmp_path / "in.xlsx")])

    assert args.output is None
    assert args.workers == 1
    assert args.verbose is False


def test_summary_written_to_file(tmp_path, hello_parts) -> None:
    source = tmp_path / "hello.xlsx"
    source.write_bytes(build_xlsx(hello_parts))
    output = tmp_path / "summary.json"

    assert main([str(source), "-o", str(output), "--workers", "2"]) == 0

    summary = json.loads(output.read_text(encoding="utf-8"))
    assert summary["sheet_count"] == 1
    assert summary["sheets"][0]["name"] == "Sheet1"
    assert summary["sheets"][0]["cell_count"] == 2
    assert summary["styles_size_bytes"] == 0


def test_summary_printed_to_stdout(tmp_path, hello_parts, capsys) -> None:
    source = tmp_path / "hello.xlsx"
    source.write_bytes(build_xlsx(hello_parts))

    assert main([str(source)]) == 0
    assert json.loads(capsys.readouterr().out)["sheets"][0]["comment_count"] == 0


def test_parse_error_exit_code(tmp_path, capsys) -> None:
    source = tmp_path / "broken.xlsx"
    source.write_bytes(b"not a zip")

    assert main([str(source)]) == 1
    assert "error: Input is not a valid zip archive" in capsys.readouterr().err


def test_corrupt_part_exit_code(tmp_path, hello_parts, capsys) -> None:
    source = tmp_path / "corrupt.xlsx"
    source.write_bytes(corrupt_deflated_part(hello_parts, "xl/worksheets/sheet1.xml"))

    assert main([str(source)]) == 1
    assert "error: Invalid part: xl/worksheets/sheet1.xml" in capsys.readouterr().err
