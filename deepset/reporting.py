"""
Bucket occupancy reporting.

Renders ``BucketStats`` as a rich table so a caller can see how well a hash
provider spreads values: a healthy provider keeps nearly every bucket at one
value and the collision count near zero.
"""

from typing import Optional, Union

from rich.console import Console
from rich.table import Table

from .core.bucket_index import BucketStats
from .core.deep_set import DeepSet


def _as_stats(source: Union[DeepSet, BucketStats]) -> BucketStats:
    if isinstance(source, BucketStats):
        return source
    return source.stats()


def build_bucket_table(
    source: Union[DeepSet, BucketStats],
    title: str = "DeepSet bucket occupancy"
) -> Table:
    """
    Build a rich table summarizing bucket occupancy.

    Args:
        source: A DeepSet or stats already taken from one
        title: Table title

    Returns:
        Table with summary rows followed by the bucket-length histogram
    """
    stats = _as_stats(source)

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Values", str(stats.size))
    table.add_row("Buckets", str(stats.bucket_count))
    table.add_row("Largest bucket", str(stats.max_bucket_size))
    table.add_row("Collisions", str(stats.collisions))
    table.add_row("Load factor", f"{stats.load_factor:.3f}")

    for length, count in enumerate(stats.histogram):
        if length == 0 or count == 0:
            continue
        style = "green" if length == 1 else "yellow"
        table.add_row(f"[{style}]Buckets of {length}[/{style}]", str(count))

    return table


def print_bucket_report(
    source: Union[DeepSet, BucketStats],
    console: Optional[Console] = None
) -> None:
    """Print the bucket occupancy table to ``console`` (stdout by default)."""
    console = console or Console()
    console.print(build_bucket_table(source))
