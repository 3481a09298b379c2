"""Pipeline engine and the concrete stages."""

from autopublish.engine.pipeline import Pipeline, Stage
from autopublish.engine.stages import InstallStage, PublishStage, ValidateStage, build_pipeline

__all__ = [
    "Pipeline",
    "Stage",
    "build_pipeline",
    "InstallStage",
    "PublishStage",
    "ValidateStage",
]
