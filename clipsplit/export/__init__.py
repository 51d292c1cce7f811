"""Lossless segment export through ffmpeg

This package provides:
- ffmpeg command construction for cutting and concatenation
- Job wrappers that run those commands with progress reporting
- Export file naming and source format checks
"""

from .filenames import (
    generate_export_filename, generate_merged_filename, get_file_extension,
    get_supported_formats, is_valid_video_format, sanitize_filename,
    unique_export_names
)
from .operations import check_disk_space, cut_segment, export_selected, merge_segments

__all__ = [
    'check_disk_space',
    'cut_segment',
    'export_selected',
    'merge_segments',
    'generate_export_filename',
    'generate_merged_filename',
    'get_file_extension',
    'get_supported_formats',
    'is_valid_video_format',
    'sanitize_filename',
    'unique_export_names',
]
