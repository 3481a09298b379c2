"""
The three stages: install dependencies, validate the spec, publish to /TR/.
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence

from autopublish import console
from autopublish.config import Configuration
from autopublish.engine.pipeline import Pipeline, Stage
from autopublish.errors import InputFileNotFoundError
from autopublish.models.pipeline import StageName, StageResult
from autopublish.models.publication import PublicationRequest
from autopublish.services.http_client import HttpClient
from autopublish.services.installer import PackageInstaller
from autopublish.services.process import ProcessRunner

TROUBLESHOOTING_URL = "https://lists.w3.org/Archives/Public/public-tr-notifications/"


class InstallStage(Stage):
    """Install the packages the validate stage needs."""

    name = StageName.INSTALL
    title = "Install dependencies"

    def __init__(self, installer: PackageInstaller, packages: Sequence[str]):
        self.installer = installer
        self.packages = list(packages)

    def execute(self, config: Configuration) -> StageResult:
        self.installer.install(self.packages)
        return StageResult.succeeded(self.name)


class ValidateStage(Stage):
    """Run the validator on INPUT_FILE."""

    name = StageName.VALIDATE
    title = "Validate spec"

    def __init__(self, runner: ProcessRunner, validator: str, working_dir: Optional[Path] = None):
        self.runner = runner
        self.validator = validator
        self.working_dir = working_dir if working_dir is not None else runner.cwd

    def execute(self, config: Configuration) -> StageResult:
        path = config.inputs.input_file
        # Checked before spawning, relative to where the validator runs.
        if not (Path(self.working_dir or ".") / path).is_file():
            raise InputFileNotFoundError(path)

        self.runner.run(self.validator, [path])
        return StageResult.succeeded(self.name, log="✓ Document is valid")


class PublishStage(Stage):
    """Submit the document to Echidna, except on pull request runs."""

    name = StageName.PUBLISH
    title = "Publish to /TR/"

    def __init__(self, client: HttpClient, endpoint: str):
        self.client = client
        self.endpoint = endpoint

    def build_request(self, config: Configuration) -> PublicationRequest:
        inputs = config.inputs
        return PublicationRequest.for_echidna(
            self.endpoint,
            manifest_url=inputs.echidna_manifest_url,
            decision_url=inputs.wg_decision_url,
            token=inputs.echidna_token,
            cc=inputs.cc,
        )

    def execute(self, config: Configuration) -> StageResult:
        if config.inputs.is_pull_request:
            return StageResult.skipped(self.name, log="👻 Skipped.")

        console.echo(f"💁‍♂️ If it fails, check {TROUBLESHOOTING_URL}")
        response = self.client.send(self.build_request(config))

        body = response.body
        if response.is_json:
            body = json.dumps(body, indent=2, ensure_ascii=False)
        return StageResult.succeeded(self.name, log=f"HTTP {response.status_code}\n{body}")


def build_pipeline(
    config: Configuration,
    only: Optional[StageName] = None,
) -> Pipeline:
    """
    Build the install -> validate -> publish pipeline.

    Args:
        config: Configuration the collaborators are set up from
        only: Build a one-stage pipeline with just this stage

    Returns:
        The Pipeline
    """
    tools = config.tools
    runner = ProcessRunner(cwd=tools.working_dir)
    installer = PackageInstaller(
        runner=runner,
        package_manager=tools.package_manager,
        install_args=tools.install_args,
    )

    stages: List[Stage] = [
        InstallStage(installer, tools.packages),
        ValidateStage(runner, tools.validator, tools.working_dir),
        PublishStage(HttpClient(), tools.publish_endpoint),
    ]

    pipeline = Pipeline("autopublish")
    for stage in stages:
        if only is None or stage.name == only:
            pipeline.add_stage(stage)
    return pipeline
