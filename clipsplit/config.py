"""Configuration settings for clipsplit

This module centralizes all configuration settings including:
- State, log and working directory locations
- Timeline tolerance constants shared by every marker/segment operation
- Supported media formats and export defaults

User-facing locations can be overridden via environment variables; the
remaining values are internal constants used throughout the package.
"""

import os
import tempfile
from pathlib import Path

# STATE_DIR: user definable with default of "$HOME/.clipsplit"
STATE_DIR = Path(os.environ.get("CLIPSPLIT_STATE_DIR", str(Path.home() / ".clipsplit")))
STATE_FILE_NAME = "state.json"

# LOG_DIR: user definable with default of "$HOME/clipsplit_logs"
LOG_DIR = Path(os.environ.get("CLIPSPLIT_LOG_DIR", str(Path.home() / "clipsplit_logs")))

# Working root for export temp files
WORKING_ROOT = Path(os.environ.get("CLIPSPLIT_WORKDIR", str(Path(tempfile.gettempdir()) / "clipsplit")))

# Timeline tolerances (seconds)
MARKER_TOLERANCE = 0.1  # Minimum separation between split markers
BOUNDARY_TOLERANCE = 0.01  # Marker/boundary matching when merging segments

# Segment naming
DEFAULT_SEGMENT_NAME = "Segment {index}"

# Export settings
SUPPORTED_FORMATS = (".mp4", ".mov", ".avi", ".mkv")
DEFAULT_EXTENSION = ".mp4"
MERGED_SUFFIX = "_merged"
PROGRESS_LOG_INTERVAL = 10.0  # Percent between progress log lines

# Logging configuration
LOG_LEVEL = "INFO"  # Default logging level; valid values: DEBUG, INFO, WARNING, ERROR, CRITICAL
