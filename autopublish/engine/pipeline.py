"""
Pipeline - fail-fast, strictly sequential stage execution.

Stages run in declaration order. Each one returns a StageResult; the
pipeline checks it and stops at the first failure, so later stages never
run. Every stage is wrapped in a console group.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from autopublish import console
from autopublish.config import Configuration
from autopublish.errors import AutoPublishError
from autopublish.models.pipeline import PipelineRun, StageName, StageResult


class Stage:
    """
    One unit of pipeline work.

    Subclasses implement `execute`, returning a StageResult or raising an
    AutoPublishError; `run` turns the error into a failed result.
    """

    name: StageName
    title: str

    def execute(self, config: Configuration) -> StageResult:
        raise NotImplementedError

    def run(self, config: Configuration) -> StageResult:
        started_at = datetime.utcnow()
        try:
            result = self.execute(config)
        except AutoPublishError as e:
            result = StageResult.failed(self.name, e)
        result.started_at = started_at
        result.ended_at = datetime.utcnow()
        return result


class Pipeline:
    """Ordered, fail-fast sequence of stages."""

    def __init__(self, name: str, stages: Optional[Iterable[Stage]] = None):
        self.name = name
        self._stages: List[Stage] = list(stages or [])

    def add_stage(self, stage: Stage) -> "Pipeline":
        self._stages.append(stage)
        return self

    @property
    def stages(self) -> List[Stage]:
        return list(self._stages)

    def run(self, config: Configuration) -> PipelineRun:
        """
        Run every stage in order until one fails.

        Args:
            config: Configuration shared, read-only, by all stages

        Returns:
            The PipelineRun, in state succeeded or failed
        """
        run = PipelineRun(pipeline=self.name)
        run.mark_running()

        for stage in self._stages:
            with console.group(stage.title):
                result = stage.run(config)
                if result.log:
                    console.echo(result.log)
                if result.error:
                    console.echo(result.error.message)
            run.stages.append(result)
            if not result.ok:
                break

        run.mark_completed()
        return run
