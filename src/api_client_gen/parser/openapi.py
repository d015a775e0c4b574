"""OpenAPI document parser.

Parses OpenAPI 3.x documents into an ApiSpec. Operations that are
alternative paths of one logical API call share an ``x-operation-group``;
without one, each ``operationId`` is its own endpoint.
"""

from pathlib import Path

import yaml

from .base import ApiEndpoint, ApiSpec, ParamType, SpecLoadError, TypeKind, UrlPath

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD")

DATE_FORMATS = ("date", "date-time")


def parse_openapi(file_path: Path) -> ApiSpec:
    """Parse an OpenAPI file into an ApiSpec."""
    try:
        doc = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise SpecLoadError(f"Cannot read {file_path}: {e}") from e
    if not isinstance(doc, dict) or "paths" not in doc:
        raise SpecLoadError(f"{file_path} is not an OpenAPI document")

    groups: dict[str, dict] = {}
    for path, item in doc["paths"].items():
        shared = item.get("parameters", [])
        for method, operation in item.items():
            if method.upper() not in HTTP_METHODS:
                continue

            name = operation.get("x-operation-group") or operation.get("operationId")
            if not name:
                name = f"{method.lower()}{path.replace('/', '_').replace('{', '').replace('}', '')}"

            group = groups.setdefault(name, {"paths": {}, "params": {}, "body": None, "operation": operation})
            params = [_resolve(doc, p) for p in shared + operation.get("parameters", [])]

            url_path = group["paths"].get(path)
            if url_path is None:
                url_path = group["paths"][path] = UrlPath(
                    path=path,
                    methods=[],
                    parts=_parse_parameters(doc, params, "path"),
                    deprecated="deprecated" if operation.get("deprecated") else None,
                )
            if method.upper() not in url_path.methods:
                url_path.methods.append(method.upper())

            group["params"].update(_parse_parameters(doc, params, "query"))
            if "requestBody" in operation and group["body"] is None:
                group["body"] = _parse_request_body(doc, operation["requestBody"])

    endpoints = [
        ApiEndpoint(
            name=name,
            description=group["operation"].get("description") or group["operation"].get("summary", ""),
            doc_url=group["operation"].get("externalDocs", {}).get("url", ""),
            stability=group["operation"].get("x-stability", "stable"),
            paths=list(group["paths"].values()),
            params=group["params"],
            body=group["body"],
        )
        for name, group in groups.items()
    ]

    components = doc.get("components", {}).get("parameters", {})
    common_parts = _parse_parameters(doc, list(components.values()), "path")

    return ApiSpec(endpoints=endpoints, common_parts=common_parts)


def _resolve(doc: dict, node: dict) -> dict:
    """Follow a local ``$ref`` such as ``#/components/parameters/index``."""
    seen = set()
    while isinstance(node, dict) and "$ref" in node:
        ref = node["$ref"]
        if ref in seen or not ref.startswith("#/"):
            raise SpecLoadError(f"Cannot resolve reference {ref}")
        seen.add(ref)
        target = doc
        for key in ref[2:].split("/"):
            key = key.replace("~1", "/").replace("~0", "~")
            if not isinstance(target, dict) or key not in target:
                raise SpecLoadError(f"Dangling reference {ref}")
            target = target[key]
        node = target
    return node


def _parse_parameters(doc: dict, params: list[dict], location: str) -> dict[str, ParamType]:
    result = {}
    for p in params:
        p = _resolve(doc, p)
        if p.get("in", "query") != location:
            continue
        schema = _resolve(doc, p.get("schema", {}))
        result[p["name"]] = _schema_type(doc, schema, p.get("description", ""))
    return result


def _schema_type(doc: dict, schema: dict, description: str) -> ParamType:
    if "oneOf" in schema or "anyOf" in schema:
        members = [_resolve(doc, s).get("type", "unknown") for s in schema.get("oneOf", schema.get("anyOf"))]
        return ParamType(kind=TypeKind.UNION, raw="|".join(members), description=description, members=members)

    raw = schema.get("type", "")
    fmt = schema.get("format", "")
    if raw == "array":
        kind = TypeKind.LIST
    elif raw == "integer":
        kind = TypeKind.LONG if fmt == "int64" else TypeKind.INTEGER
    elif raw == "number":
        kind = {"float": TypeKind.FLOAT, "double": TypeKind.DOUBLE}.get(fmt, TypeKind.NUMBER)
    elif raw == "boolean":
        kind = TypeKind.BOOLEAN
    elif raw == "string" and "enum" in schema:
        kind = TypeKind.ENUM
    elif raw == "string" and fmt in DATE_FORMATS:
        kind = TypeKind.DATE
    elif raw == "string":
        kind = TypeKind.STRING
    else:
        kind = TypeKind.UNKNOWN

    return ParamType(
        kind=kind,
        raw=raw,
        description=description,
        options=[str(o) for o in schema.get("enum", [])],
        default=schema.get("default"),
    )


def _parse_request_body(doc: dict, body: dict) -> dict:
    body = _resolve(doc, body)
    content = body.get("content", {})
    return {
        "description": body.get("description", ""),
        "required": body.get("required", False),
        "content_types": list(content),
    }
