"""
Process runner.

Children inherit the parent's stdout/stderr so their output shows up in the
CI log as it is produced.
"""

import os
import subprocess
from pathlib import Path
from typing import Dict, Optional, Sequence

from autopublish import console
from autopublish.errors import ProcessError
from autopublish.models.process import CommandOutcome


class ProcessRunner:
    """Runs external commands to completion."""

    def __init__(self, cwd: Optional[Path] = None):
        """
        Initialize the runner.

        Args:
            cwd: Default working directory for every command
        """
        self.cwd = cwd

    def run(
        self,
        command: str,
        args: Sequence[str] = (),
        cwd: Optional[Path] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> CommandOutcome:
        """
        Run a command and wait for it to exit.

        Args:
            command: Executable name (looked up on PATH) or path
            args: Arguments, passed as-is without a shell
            cwd: Working directory, overriding the runner default
            env: Variables layered over the current environment

        Returns:
            The CommandOutcome of a zero exit

        Raises:
            ProcessError: On a non-zero exit or if the command cannot start
        """
        args = list(args)
        console.command(command, args)

        child_env = None
        if env:
            child_env = {**os.environ, **env}

        try:
            with subprocess.Popen(
                [command, *args],
                cwd=cwd or self.cwd,
                env=child_env,
            ) as proc:
                exit_code = proc.wait()
        except OSError as e:
            raise ProcessError(command, spawn_error=e) from e

        outcome = CommandOutcome(command=command, args=args, exit_code=exit_code)
        if not outcome.succeeded:
            raise ProcessError(command, exit_code=exit_code)
        return outcome
