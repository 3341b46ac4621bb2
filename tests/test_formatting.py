"""Tests for query output formatting."""
from inspection.schemas.region import ResultRow
from inspection.utils.formatting import format_number, format_results, write_results


def test_format_number():
    assert format_number(1.0) == "1"
    assert format_number(-0.25) == "-0.25"
    assert format_number(1e-07) == "1e-07"
    assert format_number(123456.789) == "123456.789"


def test_format_results_one_line_per_row():
    rows = [
        ResultRow(x=1.0, y=1.0, category=7, group_id=2),
        ResultRow(x=0.5, y=3.0, category=1, group_id=10),
    ]
    assert format_results(rows) == "1 1 7 2\n0.5 3 1 10\n"


def test_write_results_replaces_file(tmp_path):
    path = tmp_path / "query_output.txt"
    path.write_text("stale\n")
    write_results(path, [ResultRow(x=2.0, y=3.5, category=0, group_id=1)])
    assert path.read_text() == "2 3.5 0 1\n"

    write_results(path, [])
    assert path.read_text() == ""
