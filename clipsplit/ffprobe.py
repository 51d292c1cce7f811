"""
ffprobe.py

Helper functions to query ffprobe for the properties the editor needs.
"""

import logging
import subprocess
from pathlib import Path
from typing import Union

from .exceptions import MetadataError
from .utils import run_cmd

logger = logging.getLogger(__name__)

def get_format_property(path: Path, property_name: str) -> str:
    """
    Fetch a container-level property as a raw string.

    Raises:
        MetadataError: If ffprobe fails or reports no value
    """
    cmd = [
        "ffprobe", "-v", "error",
        "-show_entries", f"format={property_name}",
        "-of", "default=noprint_wrappers=1:nokey=1",
        str(path)
    ]
    try:
        result = run_cmd(cmd)
    except (subprocess.CalledProcessError, OSError) as e:
        raise MetadataError(f"Failed to query ffprobe: {str(e)}", property_name) from e

    value = result.stdout.strip()
    if not value or value.lower() in ["n/a", "nan"]:
        raise MetadataError(f"No valid value found for {property_name}", property_name)
    return value

def get_duration(path: Union[str, Path]) -> float:
    """Get the container duration in seconds"""
    value = get_format_property(Path(path), "duration")
    try:
        duration = float(value)
    except ValueError as e:
        raise MetadataError(f"Invalid duration value: {value}", "duration") from e
    if duration <= 0:
        raise MetadataError(f"Invalid duration value: {value}", "duration")
    logger.debug("Duration of %s: %.3fs", path, duration)
    return duration
