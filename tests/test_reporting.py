"""Tests for the rich bucket occupancy report."""

import io

from rich.console import Console
from rich.table import Table

from deepset import DeepSet
from deepset.reporting import build_bucket_table, print_bucket_report


def _render(deep_set) -> str:
    buffer = io.StringIO()
    console = Console(file=buffer, width=100, color_system=None)
    print_bucket_report(deep_set, console=console)
    return buffer.getvalue()


class TestBucketReport:

    def test_table_from_set(self, colliding_set):
        table = build_bucket_table(colliding_set(1, 11, 2))
        assert isinstance(table, Table)
        # five summary rows plus one row per non-empty histogram slot
        assert table.row_count == 7

    def test_table_from_stats(self):
        stats = DeepSet(["a", "b"]).stats()
        table = build_bucket_table(stats, title="custom")
        assert table.title == "custom"
        assert table.row_count == 6

    def test_printed_report(self, colliding_set):
        output = _render(colliding_set(1, 11, 21, 2))
        assert "Collisions" in output
        assert "Buckets of 3" in output
        assert "Load factor" in output
        assert "2.000" in output

    def test_empty_set_report(self):
        output = _render(DeepSet())
        assert "Values" in output
        assert "0.000" in output
