"""Utility functions for clipsplit"""

import os
import shutil
import subprocess
import logging
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from .config import PROGRESS_LOG_INTERVAL

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]

def parse_progress_time(value: str) -> Optional[float]:
    """Parse an ffmpeg out_time value (HH:MM:SS.micro) into seconds"""
    parts = value.strip().split(":")
    if len(parts) != 3:
        return None
    try:
        hours, minutes, seconds = parts
        return int(hours) * 3600 + int(minutes) * 60 + float(seconds)
    except ValueError:
        return None

def run_cmd_with_progress(
    cmd: List[str],
    total_duration: Optional[float] = None,
    on_progress: Optional[ProgressCallback] = None,
    log_interval: float = PROGRESS_LOG_INTERVAL
) -> int:
    """
    Run an ffmpeg command with the -progress pipe:1 option.
    It reads progress output, reports every update to on_progress as a
    percentage in [0, 100] and logs a concise line whenever progress
    increases by log_interval percent.

    Args:
        cmd: Command list (without the -progress flag)
        total_duration: Duration of the media being written, in seconds.
        on_progress: Optional callback receiving the percentage.
        log_interval: Minimum percentage interval for logging progress updates.
        
    Returns:
        The process return code.
    """
    cmd_with_progress = cmd + ["-progress", "pipe:1"]
    logger.info("Running ffmpeg command with progress:\n%s", " \\\n    ".join(cmd_with_progress))
    
    process = subprocess.Popen(cmd_with_progress, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
    # Drained concurrently so a full stderr pipe cannot stall ffmpeg
    stderr_chunks: List[str] = []
    stderr_reader = threading.Thread(
        target=lambda: stderr_chunks.append(process.stderr.read()), daemon=True
    )
    stderr_reader.start()
    
    last_logged_percent = 0.0
    
    while True:
        line = process.stdout.readline()
        if line == "":
            if process.poll() is not None:
                break
            time.sleep(0.1)
            continue
        line = line.strip()
        
        if total_duration and line.startswith("out_time="):
            current_time = parse_progress_time(line.split("=", 1)[1])
            if current_time is None:
                logger.debug("Unexpected out_time format: %s", line)
                continue
            percent = max(0.0, min(100.0, (current_time / total_duration) * 100))
            if on_progress:
                on_progress(percent)
            if percent - last_logged_percent >= log_interval:
                logger.info("Progress: %.2f%%", percent)
                last_logged_percent = percent
        elif line == "progress=end":
            if on_progress:
                on_progress(100.0)
            logger.info("Progress: 100%%")
    process.wait()
    stderr_reader.join()
    if process.returncode != 0:
        logger.error("Error output: %s", "".join(stderr_chunks))
    return process.returncode

def run_cmd(cmd: List[str], capture_output: bool = True, 
            check: bool = True) -> subprocess.CompletedProcess:
    """Run a command and handle errors"""
    logger.info("Running command: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=capture_output,
            check=check,
            text=True
        )
        if result.stdout:
            logger.debug("Command stdout: %s", result.stdout)
        if result.stderr:
            logger.debug("Command stderr: %s", result.stderr)
        return result
    except subprocess.CalledProcessError as e:
        logger.error("Command failed: %s", " ".join(cmd))
        logger.error("Error output: %s", e.stderr)
        raise

def get_timestamp() -> str:
    """Get current timestamp in YYYYMMDD_HHMMSS format"""
    return datetime.now().strftime("%Y%m%d_%H%M%S")

def format_size(size: int) -> str:
    """Format file size for display"""
    for unit in ['B', 'KiB', 'MiB', 'GiB', 'TiB']:
        if size < 1024:
            return f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}TiB"

def ensure_directory(path: Path, create: bool = True) -> Path:
    """Ensure a directory exists and is writable.
    
    Args:
        path: The directory path to check/create
        create: Whether to create the directory if it doesn't exist
        
    Returns:
        The resolved path
        
    Raises:
        ValueError: If the path exists but is not a directory or not writable,
                  or if it doesn't exist and create=False
    """
    if not path.exists():
        if not create:
            raise ValueError(f"Directory does not exist: {path}")
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValueError(f"Cannot create directory '{path}': {e}")
    elif not path.is_dir():
        raise ValueError(f"Path exists but is not a directory: {path}")
    elif not os.access(path, os.W_OK):
        raise ValueError(f"Directory exists but is not writable: {path}")
    
    return path.resolve()

def check_dependencies() -> bool:
    """Check for required dependencies"""
    for cmd in ('ffmpeg', 'ffprobe'):
        if shutil.which(cmd) is None:
            logger.error("Required dependency not found: %s", cmd)
            return False
    return True

def cleanup_working_dir(path: Path) -> None:
    """Remove an export working directory; failures are only logged"""
    try:
        if path.exists():
            shutil.rmtree(path)
            logger.debug("Cleaned up working directory %s", path)
    except OSError as e:
        logger.error("Failed to clean up working directory %s: %s", path, e)
