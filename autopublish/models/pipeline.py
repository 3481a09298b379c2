"""
Pipeline run data models.

A PipelineRun records, for one invocation, every stage that ran and how it
ended. It is kept in memory and optionally written out by the CLI.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from autopublish.errors import AutoPublishError, ProcessError


class StageName(str, Enum):
    """Names of pipeline stages."""
    INSTALL = "install"
    VALIDATE = "validate"
    PUBLISH = "publish"


class StageStatus(str, Enum):
    """How a stage ended."""
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


class PipelineStatus(str, Enum):
    """Pipeline state machine: pending -> running -> succeeded | failed."""
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class StageError(BaseModel):
    """Serializable view of the error that failed a stage."""
    error_code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    exit_code: Optional[int] = Field(None, description="Exit code, for process failures")

    @classmethod
    def from_exception(cls, exc: AutoPublishError) -> "StageError":
        exit_code = exc.exit_code if isinstance(exc, ProcessError) else None
        return cls(error_code=exc.error_code, message=str(exc), exit_code=exit_code)


class StageResult(BaseModel):
    """Outcome of one pipeline stage."""
    stage: StageName = Field(..., description="Stage that produced this result")
    status: StageStatus = Field(..., description="How the stage ended")
    log: Optional[str] = Field(None, description="Log line produced by the stage")
    error: Optional[StageError] = Field(None, description="Failure details")
    exception: Optional[AutoPublishError] = Field(None, exclude=True, repr=False)
    started_at: datetime = Field(default_factory=datetime.utcnow, description="Start time")
    ended_at: datetime = Field(default_factory=datetime.utcnow, description="End time")

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def succeeded(cls, stage: StageName, log: Optional[str] = None, **kwargs) -> "StageResult":
        return cls(stage=stage, status=StageStatus.SUCCEEDED, log=log, **kwargs)

    @classmethod
    def skipped(cls, stage: StageName, log: Optional[str] = None, **kwargs) -> "StageResult":
        return cls(stage=stage, status=StageStatus.SKIPPED, log=log, **kwargs)

    @classmethod
    def failed(cls, stage: StageName, exc: AutoPublishError, **kwargs) -> "StageResult":
        return cls(
            stage=stage,
            status=StageStatus.FAILED,
            error=StageError.from_exception(exc),
            exception=exc,
            **kwargs,
        )

    @property
    def ok(self) -> bool:
        """Whether the pipeline may continue past this stage."""
        return self.status != StageStatus.FAILED

    @property
    def duration_ms(self) -> int:
        delta = self.ended_at - self.started_at
        return int(delta.total_seconds() * 1000)


class PipelineRun(BaseModel):
    """
    Record of one pipeline run.

    Stages that never started (because an earlier one failed) have no
    entry in `stages`.
    """
    pipeline: str = Field(..., description="Pipeline name")
    status: PipelineStatus = Field(PipelineStatus.PENDING, description="Current state")
    stages: List[StageResult] = Field(default_factory=list, description="Results, in run order")
    failed_stage: Optional[StageName] = Field(None, description="Stage that failed the run")
    started_at: Optional[datetime] = Field(None, description="Start time")
    ended_at: Optional[datetime] = Field(None, description="End time")

    @property
    def succeeded(self) -> bool:
        return self.status == PipelineStatus.SUCCEEDED

    @property
    def error(self) -> Optional[AutoPublishError]:
        """The exception that failed the run, if any."""
        for result in self.stages:
            if not result.ok:
                return result.exception
        return None

    def result_for(self, stage: StageName) -> Optional[StageResult]:
        for result in self.stages:
            if result.stage == stage:
                return result
        return None

    def mark_running(self) -> None:
        self.status = PipelineStatus.RUNNING
        self.started_at = datetime.utcnow()

    def mark_completed(self) -> None:
        """Settle the final state from the recorded stage results."""
        self.ended_at = datetime.utcnow()
        failed = [r for r in self.stages if not r.ok]
        if failed:
            self.status = PipelineStatus.FAILED
            self.failed_stage = failed[0].stage
        else:
            self.status = PipelineStatus.SUCCEEDED

    @property
    def duration_ms(self) -> Optional[int]:
        if self.started_at is None or self.ended_at is None:
            return None
        delta = self.ended_at - self.started_at
        return int(delta.total_seconds() * 1000)
