"""
Autopublish CLI - Command line interface for the publication pipeline.

Commands:
- run: Execute the full pipeline (install -> validate -> publish)
- install: Install the validator packages
- validate: Validate INPUT_FILE
- publish: Submit the document to Echidna

Exit codes: 0 on success, 1 if a stage failed, 2 on configuration or
unexpected errors.
"""

import json
import sys
import traceback
from typing import Optional

import click
from pydantic import ValidationError
from pydantic_settings import SettingsError

from autopublish import __version__, console
from autopublish.config import Configuration
from autopublish.engine.stages import build_pipeline
from autopublish.models.pipeline import PipelineRun, StageName


def load_configuration() -> Configuration:
    """Resolve configuration once, failing the run if it is invalid."""
    try:
        return Configuration.load()
    except (ValidationError, SettingsError) as e:
        console.set_failed(f"❌ Invalid configuration: {e}")
        sys.exit(2)


def print_run_summary(run: PipelineRun) -> None:
    """Print one line per stage that ran."""
    click.echo("\n=== Pipeline summary ===")
    for result in run.stages:
        click.echo(f"{result.stage.value:<10} {result.status.value:<10} {result.duration_ms} ms")
    click.echo(f"Overall: {run.status.value}")


def execute(only: Optional[StageName] = None, output: Optional[str] = None) -> None:
    """Build and run the pipeline, then exit with its status."""
    config = load_configuration()

    try:
        pipeline = build_pipeline(config, only=only)
        run = pipeline.run(config)
    except Exception as e:
        click.echo(traceback.format_exc(), err=True)
        console.set_failed(f"❌ Unexpected error: {e}")
        sys.exit(2)

    print_run_summary(run)

    if output:
        with open(output, 'w', encoding='utf-8') as f:
            json.dump(run.model_dump(mode='json'), f, indent=2, ensure_ascii=False, default=str)
        click.echo(f"Run report saved to: {output}")

    if not run.succeeded:
        console.set_failed(str(run.error))
        sys.exit(1)
    sys.exit(0)


@click.group()
@click.version_option(version=__version__)
def cli():
    """Autopublish - validate a spec and publish it to /TR/"""


@cli.command()
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write the run report as JSON')
def run(output: Optional[str]):
    """
    Run the full pipeline: install -> validate -> publish

    Action inputs INPUT_FILE, ECHIDNA_MANIFEST_URL, WG_DECISION_URL,
    ECHIDNA_TOKEN and CC are read from INPUT_<NAME> variables (so the file
    comes from INPUT_INPUT_FILE). Publishing is skipped when
    GITHUB_EVENT_NAME is pull_request.
    """
    execute(output=output)


@cli.command()
def install():
    """Install the validator packages."""
    execute(only=StageName.INSTALL)


@cli.command()
def validate():
    """Validate INPUT_FILE with the installed validator."""
    execute(only=StageName.VALIDATE)


@cli.command()
def publish():
    """Submit the document to Echidna (skipped on pull requests)."""
    execute(only=StageName.PUBLISH)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
