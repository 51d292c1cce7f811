"""Export file naming and source format checks"""

import re
from typing import List

from ..config import DEFAULT_EXTENSION, MERGED_SUFFIX, SUPPORTED_FORMATS

INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def sanitize_filename(name: str) -> str:
    """Replace characters that are illegal in file names; blank becomes 'untitled'"""
    if not name or not isinstance(name, str):
        return "untitled"
    sanitized = INVALID_FILENAME_CHARS.sub("_", name.strip())
    return sanitized or "untitled"


def get_file_extension(filename: str) -> str:
    """Lower-case extension including the dot, or '' when there is none"""
    if not filename or not isinstance(filename, str):
        return ""
    last_dot = filename.rfind(".")
    if last_dot == -1:
        return ""
    return filename[last_dot:].lower()


def is_valid_video_format(filename: str) -> bool:
    return get_file_extension(filename) in SUPPORTED_FORMATS


def get_supported_formats() -> List[str]:
    return list(SUPPORTED_FORMATS)


def generate_export_filename(segment_name: str, original_ext: str) -> str:
    """File name for one exported segment, keeping the source extension"""
    ext = original_ext if original_ext.startswith(".") else f".{original_ext}"
    return f"{sanitize_filename(segment_name)}{ext.lower()}"


def generate_merged_filename(original_filename: str) -> str:
    """'<stem>_merged<ext>' for a merge of the given source"""
    last_dot = original_filename.rfind(".")
    if last_dot > 0:
        stem, ext = original_filename[:last_dot], original_filename[last_dot:]
    else:
        stem, ext = original_filename, DEFAULT_EXTENSION
    return f"{sanitize_filename(stem)}{MERGED_SUFFIX}{ext.lower()}"


def unique_export_names(names: List[str]) -> List[str]:
    """Sanitized base names with '_2', '_3', ... appended to repeats"""
    taken = set()
    unique = []
    for name in names:
        base = sanitize_filename(name)
        candidate = base
        counter = 2
        while candidate.lower() in taken:
            candidate = f"{base}_{counter}"
            counter += 1
        taken.add(candidate.lower())
        unique.append(candidate)
    return unique
