"""
Configuration management for autopublish.

Action inputs are read from the INPUT_* environment variables the CI runner
sets for each declared input. Tool settings (installer, validator,
endpoint) have fixed defaults and may be overridden with AUTOPUBLISH_*
variables or a .env file for local runs.

Configuration is built once at startup and passed into every stage.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ECHIDNA_ENDPOINT = "https://labs.w3.org/echidna/api/request"
PULL_REQUEST_EVENT = "pull_request"


class ActionInputs(BaseSettings):
    """Inputs declared by the action, plus the triggering event."""

    input_file: str = Field("", description="Path to the document to validate")
    echidna_manifest_url: str = Field("", description="Manifest URL sent as `url`")
    wg_decision_url: str = Field("", description="Working group decision URL sent as `decision`")
    echidna_token: str = Field("", description="Echidna token sent as `token`")
    cc: str = Field("", description="Comma separated addresses sent as `cc`")
    event_name: str = Field(
        "",
        validation_alias="GITHUB_EVENT_NAME",
        description="Name of the event that triggered the run",
    )

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator(
        "input_file", "echidna_manifest_url", "wg_decision_url", "echidna_token", "cc", "event_name"
    )
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()

    @property
    def is_pull_request(self) -> bool:
        """Whether the run was triggered by a pull request."""
        return self.event_name == PULL_REQUEST_EVENT


class ToolSettings(BaseSettings):
    """External tools the stages drive."""

    package_manager: str = Field("npm", min_length=1, description="Package manager executable")
    install_args: List[str] = Field(
        default_factory=lambda: ["install", "--silent"],
        description="Install subcommand and its non-interactive flags",
    )
    packages: List[str] = Field(
        default_factory=lambda: ["respec", "respec-validator"],
        description="Packages the validate stage needs",
    )
    validator: str = Field(
        "./node_modules/.bin/respec-validator",
        min_length=1,
        description="Validator executable, relative to the working directory",
    )
    publish_endpoint: str = Field(ECHIDNA_ENDPOINT, min_length=8, description="Echidna request endpoint")
    working_dir: Optional[Path] = Field(None, description="Directory commands run in (default: cwd)")

    model_config = SettingsConfigDict(
        env_prefix="AUTOPUBLISH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


class Configuration(BaseModel):
    """Read-only configuration for one pipeline run."""

    inputs: ActionInputs = Field(default_factory=ActionInputs)
    tools: ToolSettings = Field(default_factory=ToolSettings)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def load(cls) -> "Configuration":
        """Resolve inputs and tool settings from the environment."""
        return cls(inputs=ActionInputs(), tools=ToolSettings())
