"""Rich-based console formatting and time notation helpers"""

import math
import re
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .timeline.models import TimelineState
from .timeline.partition import total_selected_duration

console = Console()

_SECONDS_RE = re.compile(r"^\d+(\.\d+)?$")

def format_time(seconds: float) -> str:
    """Format seconds as MM:SS, or HH:MM:SS from one hour on."""
    h = math.floor(seconds / 3600)
    m = math.floor((seconds % 3600) / 60)
    s = math.floor(seconds % 60)
    if h > 0:
        return f"{h:02d}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"

def parse_time(value: str) -> Optional[float]:
    """
    Parse plain seconds, MM:SS or HH:MM:SS into seconds.

    Returns:
        The time in seconds, or None when the text is not a valid time.
    """
    trimmed = value.strip()
    if _SECONDS_RE.match(trimmed):
        return float(trimmed)

    try:
        parts = [int(p) for p in trimmed.split(":")]
    except ValueError:
        return None

    if len(parts) == 2:
        m, s = parts
        if m < 0 or s < 0 or s >= 60:
            return None
        return float(m * 60 + s)
    if len(parts) == 3:
        h, m, s = parts
        if h < 0 or m < 0 or m >= 60 or s < 0 or s >= 60:
            return None
        return float(h * 3600 + m * 60 + s)
    return None

def print_check(message: str) -> None:
    """Print a checkmark message in bold green."""
    text = Text("✓ ", style="bold green") + Text(message, style="bold")
    console.print(text)

def print_warning(message: str) -> None:
    """Print a warning message in bold yellow."""
    text = Text("⚠ ", style="bold yellow") + Text(message, style="bold")
    console.print(text)

def print_error(message: str) -> None:
    """Print an error message in bold red."""
    text = Text("✗ ", style="bold red") + Text(message, style="bold")
    console.print(text)

def print_success(message: str) -> None:
    """Print a success message in plain green."""
    text = Text("✓ ", style="green") + Text(message, style="green")
    console.print(text)

def print_header(title: str, width: int = 80) -> None:
    """Print a decorative header."""
    separator = Text("=" * width, style="bold blue")
    padding = (width - len(title)) // 2
    title_line = " " * padding + title
    console.print(separator)
    console.print(title_line, style="bold blue")
    console.print(separator)

def print_info(message: str) -> None:
    """Print an informational message in a subtle style."""
    text = Text("ℹ ", style="bold blue") + Text(message, style="blue")
    console.print(text)

def build_segment_table(state: TimelineState) -> Table:
    """Tabulate the segments and markers of a timeline."""
    table = Table(title=f"Timeline {format_time(state.duration)}")
    table.add_column("#", justify="right")
    table.add_column("Keep", justify="center")
    table.add_column("Name")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Id", style="dim")
    for index, segment in enumerate(state.segments, start=1):
        table.add_row(
            str(index),
            "✓" if segment.selected else "",
            segment.name,
            f"{segment.start_time:.2f}",
            f"{segment.end_time:.2f}",
            f"{segment.duration:.2f}",
            segment.id[:8],
        )
    table.caption = (
        f"{len(state.markers)} markers, "
        f"{total_selected_duration(state):.2f}s selected"
    )
    return table

def print_timeline(state: TimelineState) -> None:
    """Print the segment table followed by the marker list."""
    console.print(build_segment_table(state))
    for marker in state.markers:
        console.print(f"  marker {marker.id[:8]} at {marker.time:.2f}s ({format_time(marker.time)})", style="blue")
