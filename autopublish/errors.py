"""
Error types for the autopublish pipeline.

Every failure a stage can report is an AutoPublishError. Stages turn these
into failed StageResults; anything else is a bug and propagates to the CLI.
"""

from typing import Optional


class AutoPublishError(Exception):
    """Base class for all pipeline failures."""

    error_code = "autopublish_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ProcessError(AutoPublishError):
    """An external command exited non-zero or could not be spawned."""

    error_code = "process_error"

    def __init__(
        self,
        command: str,
        exit_code: Optional[int] = None,
        spawn_error: Optional[OSError] = None,
    ):
        if spawn_error is not None:
            message = f"❌ Could not start {command}: {spawn_error}"
        else:
            message = f"❌ The process exited with status code: {exit_code}"
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code
        self.spawn_error = spawn_error


class ValidationError(AutoPublishError):
    """The document could not be validated."""

    error_code = "validation_error"


class InputFileNotFoundError(ValidationError, FileNotFoundError):
    """INPUT_FILE does not point at an existing file."""

    error_code = "file_not_found"

    def __init__(self, path: str):
        super().__init__(f"❌ {path} not found!")
        self.filename = path


class NetworkError(AutoPublishError):
    """The HTTP exchange failed at the transport level."""

    error_code = "network_error"

    def __init__(self, url: str, cause: Exception):
        super().__init__(f"❌ Request to {url} failed: {cause}")
        self.url = url
        self.cause = cause


class ResponseDecodeError(AutoPublishError, ValueError):
    """A response declared application/json but its body is not JSON."""

    error_code = "json_decode_error"

    def __init__(self, url: str, cause: ValueError):
        super().__init__(f"❌ Invalid JSON in response from {url}: {cause}")
        self.url = url
        self.cause = cause
