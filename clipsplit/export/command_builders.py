"""Helper functions for building ffmpeg commands"""

import logging
from pathlib import Path
from typing import List

import ffmpeg

log = logging.getLogger(__name__)

def _format_time(seconds: float) -> str:
    return f"{seconds:.3f}"

def build_cut_command(
    input_file: Path,
    output_file: Path,
    start_time: float,
    end_time: float
) -> List[str]:
    """Build ffmpeg command for a lossless range extraction"""
    stream = (
        ffmpeg
        .input(str(input_file))
        .output(
            str(output_file),
            ss=_format_time(start_time),
            to=_format_time(end_time),
            c="copy",
        )
        .global_args("-hide_banner", "-loglevel", "warning")
        .overwrite_output()
    )
    return stream.compile()

def build_concat_command(concat_file: Path, output_file: Path) -> List[str]:
    """Build ffmpeg command for concatenating cut parts without re-encoding"""
    stream = (
        ffmpeg
        .input(str(concat_file), format="concat", safe=0, fflags="+genpts")
        .output(str(output_file), c="copy")
        .global_args("-hide_banner", "-loglevel", "error")
        .overwrite_output()
    )
    return stream.compile()

def write_concat_list(parts: List[Path], concat_file: Path) -> None:
    """Write a concat demuxer list preserving the order of parts"""
    with open(concat_file, "w") as f:
        for part in parts:
            escaped = str(part.absolute()).replace("'", "'\\''")
            f.write(f"file '{escaped}'\n")
    log.debug("Wrote concat list with %d parts to %s", len(parts), concat_file)
