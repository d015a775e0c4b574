"""Auto-detect API description format."""

import json
from pathlib import Path

import yaml

from .base import SpecLoadError


def detect_format(file_path: Path) -> str:
    """Detect the format of an API description file or directory.

    Returns: 'rest-spec' or 'openapi'.
    """
    if file_path.is_dir():
        return "rest-spec"

    text = file_path.read_text(encoding="utf-8")

    data = None
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            pass

    if isinstance(data, dict):
        if "openapi" in data or "swagger" in data:
            return "openapi"
        if any(isinstance(v, dict) and "url" in v for v in data.values()):
            return "rest-spec"

    raise SpecLoadError(f"Unrecognised API description format: {file_path}")
