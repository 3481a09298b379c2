"""External command outcome."""

from typing import List

from pydantic import BaseModel, Field


class CommandOutcome(BaseModel):
    """Outcome of one external process execution."""
    command: str = Field(..., description="Executable that was run")
    args: List[str] = Field(default_factory=list, description="Arguments passed to it")
    exit_code: int = Field(..., description="Exit status of the child process")

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0
