"""
Configuration loading and validation for api-client-gen.

This module handles configuration file parsing, validation, and provides
defaults for every generator option.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

STABILITY_LEVELS = ["stable", "beta", "experimental"]

CONFIG_NAMES = [".api-client-gen.yaml", ".api-client-gen.yml"]

class GeneratorConfig(BaseModel):
    """Root configuration model for api-client-gen."""

    model_config = ConfigDict(extra="forbid")

    stability: list[str] = Field(
        default_factory=lambda: list(STABILITY_LEVELS),
        description="Stability levels of endpoints to generate.",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns of endpoint names to generate. Empty means all.",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns of endpoint names to skip.",
    )
    union_types: dict[str, str] = Field(
        default_factory=lambda: {"slices": "int | str"},
        description="Annotations for union-typed parameters, by parameter name.",
    )
    root_module: str = Field(
        default="root",
        description="Module name for endpoints without a namespace.",
    )
    validate_output: bool = Field(
        default=True,
        description="Check that generated modules compile.",
    )

def load_config(config_path: Path) -> GeneratorConfig:
    """Read a GeneratorConfig from a YAML file.

    An empty file gives the defaults. A missing file raises FileNotFoundError
    and anything that is not a valid config mapping raises ValueError.
    """
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        return GeneratorConfig.model_validate(data or {})
    except yaml.YAMLError as e:
        raise ValueError(f"{config_path} is not valid YAML: {e}") from e
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {config_path}: {e}") from e


def find_config_file(start_path: Path) -> Path | None:
    """Nearest `.api-client-gen.yaml` / `.yml` in start_path or its parents."""
    start = start_path.resolve()
    for directory in (start, *start.parents):
        for name in CONFIG_NAMES:
            if (directory / name).is_file():
                return directory / name
    return None
