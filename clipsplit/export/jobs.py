"""
jobs.py

Command job wrappers for the export steps: each job runs one ffmpeg
invocation with progress reporting and turns a failure into the matching
clipsplit exception.
"""

import logging
from typing import List, Optional

from .. import utils
from ..exceptions import CommandExecutionError, ExportError
from ..utils import ProgressCallback

logger = logging.getLogger(__name__)

class CommandJob:
    """
    Base class representing an ffmpeg command job.
    
    Attributes:
        cmd (List[str]): The command to run
    """
    def __init__(self, cmd: List[str]):
        self.cmd = cmd

    def execute(
        self,
        total_duration: Optional[float] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> None:
        """
        Execute the stored command, reporting progress against total_duration.
        
        Raises:
            CommandExecutionError: If the command cannot start or exits non-zero
        """
        logger.debug("Executing command: %s", " ".join(self.cmd))
        try:
            return_code = utils.run_cmd_with_progress(self.cmd, total_duration, on_progress)
        except OSError as e:
            raise CommandExecutionError(f"Command failed: {e}", module="jobs") from e
        if return_code != 0:
            raise CommandExecutionError(
                f"Command failed with exit code {return_code}",
                module="jobs"
            )

class CutJob(CommandJob):
    """Job for extracting one time range."""
    def execute(
        self,
        total_duration: Optional[float] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> None:
        try:
            super().execute(total_duration, on_progress)
        except CommandExecutionError as e:
            raise ExportError(f"Cut failed: {e.message}", module="cut") from e

class ConcatJob(CommandJob):
    """Job for concatenating cut parts."""
    def execute(
        self,
        total_duration: Optional[float] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> None:
        try:
            super().execute(total_duration, on_progress)
        except CommandExecutionError as e:
            raise ExportError(f"Concatenation failed: {e.message}", module="merge") from e
