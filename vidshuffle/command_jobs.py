"""
command_jobs.py

Defines a base class for command jobs and specialized implementations for
the external steps of the pipeline (currently clip concatenation).
"""

import logging
import subprocess
from typing import List

from .utils import run_cmd
from .exceptions import CommandExecutionError, ConcatenationError

logger = logging.getLogger(__name__)

class CommandJob:
    """
    Base class representing a command job.

    Attributes:
        cmd (List[str]): The command to run
    """
    def __init__(self, cmd: List[str]):
        self.cmd = cmd

    def execute(self) -> None:
        """
        Execute the stored command.

        Raises:
            CommandExecutionError: If the command exits non-zero or cannot be started
        """
        logger.debug("Executing command: %s", " ".join(self.cmd))
        try:
            run_cmd(self.cmd)
        except subprocess.CalledProcessError as e:
            raise CommandExecutionError(
                f"Command exited with status {e.returncode}: {self.cmd[0]}",
                module="command_jobs",
                returncode=e.returncode
            ) from e
        except OSError as e:
            raise CommandExecutionError(
                f"Could not run {self.cmd[0]}: {e}",
                module="command_jobs"
            ) from e

class ConcatJob(CommandJob):
    """Job for concatenating clips listed in a concat manifest."""
    def execute(self) -> None:
        try:
            super().execute()
        except CommandExecutionError as e:
            raise ConcatenationError(
                f"Concatenation failed: {e.message}",
                module="concatenation"
            ) from e
