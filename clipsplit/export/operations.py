"""Lossless export of timeline segments

Responsibilities:
- Cut a single time range out of the source without re-encoding
- Merge several ranges, in the given order, into one file
- Export the selected segments of a timeline individually or merged

Export reads the timeline but never modifies it. Any failure is raised as
ExportError for the caller to report.
"""

import logging
import uuid
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import psutil

from ..config import DEFAULT_EXTENSION, WORKING_ROOT
from ..exceptions import ExportError
from ..timeline.models import Segment, SourceFile, TimelineState
from ..timeline.partition import selected_segments
from ..utils import ProgressCallback, cleanup_working_dir, ensure_directory, format_size
from .command_builders import build_concat_command, build_cut_command, write_concat_list
from .filenames import (
    generate_export_filename, generate_merged_filename, get_file_extension, unique_export_names
)
from .jobs import ConcatJob, CutJob

logger = logging.getLogger(__name__)


def _scaled_progress(
    on_progress: Optional[ProgressCallback],
    step: int,
    steps: int
) -> Optional[ProgressCallback]:
    """Map one step's 0-100 progress onto its share of the whole operation"""
    if on_progress is None:
        return None
    return lambda percent: on_progress((step + percent / 100.0) / steps * 100.0)


def _source_path(source: SourceFile) -> Path:
    if source.path is None:
        raise ExportError(f"No media path for {source.name}", module="export")
    return Path(source.path)


def _prepare_output_dir(output_dir: Optional[Path]) -> Path:
    try:
        return ensure_directory(Path(output_dir) if output_dir is not None else Path.cwd())
    except ValueError as e:
        raise ExportError(str(e), module="export") from e


def check_disk_space(directory: Path, required: int) -> None:
    """
    Fail fast when a directory cannot hold the expected output.

    Raises:
        ExportError: If free space is below required bytes
    """
    free = psutil.disk_usage(str(directory)).free
    if free < required:
        raise ExportError(
            f"Not enough space in {directory}: {format_size(free)} free, "
            f"{format_size(required)} needed",
            module="export"
        )


def _verify_output(output_file: Path) -> None:
    if not output_file.exists() or output_file.stat().st_size == 0:
        raise ExportError(f"Output {output_file.name} is missing or empty", module="export")


def cut_segment(
    source: SourceFile,
    start_time: float,
    end_time: float,
    output_name: str,
    on_progress: Optional[ProgressCallback] = None,
    output_dir: Optional[Path] = None
) -> Path:
    """
    Extract [start_time, end_time] from the source with stream copy.

    Args:
        source: Source media; its path must be set
        start_time: Range start in seconds
        end_time: Range end in seconds
        output_name: Base name of the output file; the source extension is kept
        on_progress: Optional callback receiving a percentage in [0, 100]
        output_dir: Destination directory, the working directory by default

    Returns:
        Path of the written file.

    Raises:
        ExportError: If the range is invalid or ffmpeg fails
    """
    input_file = _source_path(source)
    if start_time < 0 or end_time <= start_time:
        raise ExportError(f"Invalid range {start_time:.3f}-{end_time:.3f}", module="cut")

    directory = _prepare_output_dir(output_dir)
    check_disk_space(directory, source.size)
    ext = get_file_extension(source.name) or DEFAULT_EXTENSION
    output_file = directory / generate_export_filename(output_name, ext)

    logger.info("Cutting %.3f-%.3f from %s to %s", start_time, end_time, source.name, output_file)
    job = CutJob(build_cut_command(input_file, output_file, start_time, end_time))
    job.execute(total_duration=end_time - start_time, on_progress=on_progress)
    _verify_output(output_file)
    return output_file


def merge_segments(
    source: SourceFile,
    segments: Sequence[Segment],
    on_progress: Optional[ProgressCallback] = None,
    output_dir: Optional[Path] = None,
    output_name: Optional[str] = None
) -> Tuple[Path, str]:
    """
    Cut each segment losslessly and concatenate the parts in the given order.

    Args:
        source: Source media; its path must be set
        segments: Segments to keep, in output order
        on_progress: Optional callback receiving a percentage in [0, 100]
        output_dir: Destination directory, the working directory by default
        output_name: Base name of the output; '<stem>_merged' by default

    Returns:
        The written file and its file name.

    Raises:
        ExportError: If there is nothing to merge or any ffmpeg step fails
    """
    input_file = _source_path(source)
    if not segments:
        raise ExportError("No segments to merge", module="merge")

    directory = _prepare_output_dir(output_dir)
    ext = get_file_extension(source.name) or DEFAULT_EXTENSION
    if output_name:
        filename = generate_export_filename(output_name, ext)
    else:
        filename = generate_merged_filename(source.name)
    output_file = directory / filename

    work_dir = WORKING_ROOT / f"merge_{uuid.uuid4().hex[:8]}"
    steps = len(segments) + 1
    try:
        ensure_directory(work_dir)
        check_disk_space(work_dir, source.size)
        check_disk_space(directory, source.size)

        parts: List[Path] = []
        for i, segment in enumerate(segments):
            part = work_dir / f"temp_{i}{ext}"
            logger.info(
                "Cutting part %d/%d: %.3f-%.3f",
                i + 1, len(segments), segment.start_time, segment.end_time
            )
            CutJob(build_cut_command(input_file, part, segment.start_time, segment.end_time)).execute(
                total_duration=segment.end_time - segment.start_time,
                on_progress=_scaled_progress(on_progress, i, steps)
            )
            _verify_output(part)
            parts.append(part)

        concat_file = work_dir / "concat.txt"
        write_concat_list(parts, concat_file)
        ConcatJob(build_concat_command(concat_file, output_file)).execute(
            total_duration=sum(s.end_time - s.start_time for s in segments),
            on_progress=_scaled_progress(on_progress, steps - 1, steps)
        )
        _verify_output(output_file)
    except ExportError:
        raise
    except (OSError, ValueError) as e:
        raise ExportError(f"Merge failed: {str(e)}", module="merge") from e
    finally:
        cleanup_working_dir(work_dir)

    logger.info("Merged %d segments into %s", len(segments), output_file)
    return output_file, filename


def export_selected(
    source: SourceFile,
    state: TimelineState,
    merge: bool = False,
    on_progress: Optional[ProgressCallback] = None,
    output_dir: Optional[Path] = None,
    output_name: Optional[str] = None
) -> List[Path]:
    """
    Export the selected segments of a timeline.

    Returns:
        The written files: one per selected segment, or the single merged file.
        Segments sharing a name are written as <name>, <name>_2, ..., so no
        export overwrites another.

    Raises:
        ExportError: If no segment is selected or an export step fails
    """
    chosen = selected_segments(state)
    if not chosen:
        raise ExportError("No segments selected", module="export")

    if merge:
        output_file, _ = merge_segments(source, chosen, on_progress, output_dir, output_name)
        return [output_file]

    written = []
    names = unique_export_names([segment.name for segment in chosen])
    for i, (segment, name) in enumerate(zip(chosen, names)):
        written.append(cut_segment(
            source,
            segment.start_time,
            segment.end_time,
            name,
            on_progress=_scaled_progress(on_progress, i, len(chosen)),
            output_dir=output_dir
        ))
    return written
