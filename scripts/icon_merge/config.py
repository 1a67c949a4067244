"""Configuration models and loaders for icon merging."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigInvalidError, ConfigMissingError
from .svg.transform import A11yStrategy

CONFIG_FILE = "iconmerge.yaml"

Framework = Literal["react", "preact", "solid"]


class OutputConfig(BaseModel):
    """Where generated icons are written."""

    model_config = ConfigDict(frozen=True)

    type: Literal["file", "folder"] = Field("file", description="Single barrel file or one file per icon")
    path: str = Field(..., description="Path relative to the project root")


class HooksConfig(BaseModel):
    """Shell commands run around each command."""

    model_config = ConfigDict(frozen=True)

    pre_add: list[str] = Field(default_factory=list)
    post_add: list[str] = Field(default_factory=list)
    pre_remove: list[str] = Field(default_factory=list)
    post_remove: list[str] = Field(default_factory=list)
    pre_list: list[str] = Field(default_factory=list)
    post_list: list[str] = Field(default_factory=list)
    pre_clear: list[str] = Field(default_factory=list)
    post_clear: list[str] = Field(default_factory=list)


class IconsConfig(BaseModel):
    """Project configuration, read from iconmerge.yaml."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    output: OutputConfig
    framework: Framework
    typescript: bool = Field(True, description="Generate TypeScript")
    track_source: bool = Field(True, description="Embed the registry identifier as data-icon")
    a11y: A11yStrategy = Field("none", description="Accessibility strategy for every icon")
    title: bool = Field(False, description="Inject a <title> with the readable icon name")
    forward_ref: bool = Field(False, description="Wrap components with forwardRef")
    hooks: HooksConfig = Field(default_factory=HooksConfig)

    @field_validator("output", mode="before")
    @classmethod
    def _output_shorthand(cls, value: Any) -> Any:
        # A bare path means single-file mode
        if isinstance(value, str):
            return {"type": "file", "path": value}
        return value

    @field_validator("a11y", mode="before")
    @classmethod
    def _a11y_false(cls, value: Any) -> Any:
        if value is False or value is None:
            return "none"
        return value

    @property
    def is_folder(self) -> bool:
        return self.output.type == "folder"


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def config_path(cwd: Path) -> Path:
    return cwd / CONFIG_FILE


def output_path(cwd: Path, config: IconsConfig) -> Path:
    """Resolve the configured output against the project root."""
    return cwd / config.output.path


def load_config(cwd: Path) -> IconsConfig:
    """Load and validate the project configuration.

    Raises:
        ConfigMissingError: If the project has no configuration file.
        ConfigInvalidError: If the file is not valid YAML or fails validation.
    """
    path = config_path(cwd)
    if not path.exists():
        raise ConfigMissingError(f'{CONFIG_FILE} not found. Run "icon-merge init" first.')

    try:
        data = load_yaml(path)
    except yaml.YAMLError as e:
        raise ConfigInvalidError(f"Invalid YAML in {CONFIG_FILE}: {e}") from e
    except OSError as e:
        raise ConfigInvalidError(f"Failed to read {CONFIG_FILE}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigInvalidError(f"{CONFIG_FILE} must contain a mapping")

    try:
        return IconsConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigInvalidError(f"Invalid {CONFIG_FILE}: {e}") from e


def save_config(cwd: Path, config: IconsConfig) -> Path:
    """Write configuration as YAML, omitting defaults."""
    path = config_path(cwd)
    data = config.model_dump(exclude_defaults=True)
    data["output"] = config.output.model_dump()
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return path
