"""Data models for autopublish."""

from autopublish.models.pipeline import (
    PipelineRun,
    PipelineStatus,
    StageError,
    StageName,
    StageResult,
    StageStatus,
)
from autopublish.models.process import CommandOutcome
from autopublish.models.publication import HttpResponse, PublicationRequest

__all__ = [
    # Pipeline models
    "PipelineRun",
    "PipelineStatus",
    "StageError",
    "StageName",
    "StageResult",
    "StageStatus",
    # Collaborator models
    "CommandOutcome",
    "HttpResponse",
    "PublicationRequest",
]
