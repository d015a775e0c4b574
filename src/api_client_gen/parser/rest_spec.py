"""rest-api-spec document parser.

Parses the JSON endpoint definitions used by Elasticsearch / OpenSearch
(one or more endpoints per file, plus an optional ``_common.json``) into
an ApiSpec.
"""

import json
from pathlib import Path

import yaml

from .base import ApiEndpoint, ApiSpec, ParamType, SpecLoadError, TypeKind, UrlPath

COMMON_FILE = "_common.json"


def parse_rest_spec(file_path: Path) -> ApiSpec:
    """Parse a rest-api-spec file or directory of files into an ApiSpec."""
    if file_path.is_dir():
        files = sorted(p for p in file_path.glob("*.json") if p.name != COMMON_FILE)
        common_file = file_path / COMMON_FILE
    else:
        files = [file_path]
        common_file = None

    endpoints = []
    for path in files:
        doc = _load(path)
        for name, definition in doc.items():
            if name.startswith("_"):
                continue
            endpoints.append(_parse_endpoint(name, definition, path))

    common_params = {}
    if common_file is not None and common_file.exists():
        common_params = _parse_params(_load(common_file).get("params", {}))

    return ApiSpec(endpoints=endpoints, common_params=common_params)


def parse_type_kind(raw: str) -> TypeKind:
    """Map a rest-api-spec type string to a TypeKind."""
    if "|" in raw:
        return TypeKind.UNION
    try:
        return TypeKind(raw)
    except ValueError:
        return TypeKind.UNKNOWN


def _load(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            doc = json.loads(text)
        else:
            doc = yaml.safe_load(text)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise SpecLoadError(f"Cannot read {path}: {e}") from e

    if not isinstance(doc, dict):
        raise SpecLoadError(f"{path} does not contain endpoint definitions")
    return doc


def _parse_endpoint(name: str, definition: dict, source: Path) -> ApiEndpoint:
    if not isinstance(definition, dict) or "url" not in definition:
        raise SpecLoadError(f"Endpoint '{name}' in {source} has no url definition")

    documentation = definition.get("documentation", {})
    if isinstance(documentation, str):
        documentation = {"url": documentation}

    paths = [
        UrlPath(
            path=p["path"],
            methods=p.get("methods", []),
            parts=_parse_params(p.get("parts", {})),
            deprecated=_deprecation(p.get("deprecated")),
        )
        for p in definition["url"].get("paths", [])
    ]

    return ApiEndpoint(
        name=name,
        description=documentation.get("description") or "",
        doc_url=documentation.get("url") or "",
        stability=definition.get("stability", "stable"),
        paths=paths,
        params=_parse_params(definition.get("params", {})),
        body=definition.get("body"),
    )


def _parse_params(params: dict) -> dict[str, ParamType]:
    result = {}
    for name, p in params.items():
        raw = p.get("type", "string")
        kind = parse_type_kind(raw)
        result[name] = ParamType(
            kind=kind,
            raw=raw,
            description=p.get("description", ""),
            options=[str(o) for o in p.get("options", [])],
            default=p.get("default"),
            members=raw.split("|") if kind == TypeKind.UNION else [],
        )
    return result


def _deprecation(value) -> str | None:
    if not value:
        return None
    if isinstance(value, dict):
        return f"{value.get('version', '')}: {value.get('description', '')}".strip(": ")
    return str(value)
