"""Builder for endpoint request classes.

Each endpoint gets a class wrapping its parts value with fluent setters for
query parameters and an optional body; ``build()`` returns a Request.
"""

import ast
from typing import Mapping

from api_client_gen.generator.errors import UnsupportedMethodsError
from api_client_gen.generator.parts import PartsEnum
from api_client_gen.generator.types import annotation, to_pascal_case, valid_name
from api_client_gen.parser.base import ApiEndpoint, ParamType

# Builder attributes a query parameter setter must not replace.
BUILDER_NAMES = {"body", "build"}


def endpoint_methods(endpoint: ApiEndpoint) -> list[str]:
    """HTTP methods of all paths of an endpoint, in first-seen order."""
    methods: list[str] = []
    for path in endpoint.paths:
        for method in path.methods:
            if method not in methods:
                methods.append(method)
    return methods


def method_expr(builder_name: str, methods: list[str]) -> str:
    """Source of the expression choosing the HTTP method in build()."""
    if len(methods) == 1:
        return repr(methods[0])
    match sorted(methods):
        case ["POST", "PUT"]:
            return repr("PUT" if "Put" in builder_name else "POST")
        case ["GET", "POST"]:
            return "'POST' if self._body is not None else 'GET'"
        case _:
            raise UnsupportedMethodsError(methods)


def setter_name(param: str) -> str:
    name = valid_name(param)
    return f"{name}_" if name in BUILDER_NAMES else name


def render_request_builder(
    endpoint: ApiEndpoint,
    parts: PartsEnum,
    common_params: Mapping[str, ParamType] | None = None,
    union_types: dict[str, str] | None = None,
) -> list[ast.stmt]:
    """AST for the request builder class of an endpoint."""
    union_types = union_types or {}
    name = to_pascal_case(endpoint.name)
    method = method_expr(name, endpoint_methods(endpoint))

    query = dict(common_params or {})
    query.update(endpoint.params)

    lines = [f"class {name}:"]
    doc = f"Builder for the [{parts.api_name} API]({endpoint.doc_url})" if endpoint.doc_url else f"Builder for the {parts.api_name} API"
    if endpoint.description:
        doc = f"{doc}\n\n{endpoint.description}"
    lines.append(f"    {doc!r}")

    if parts.is_parameterless:
        none_class = parts.variant_class(parts.variants[0])
        lines += [
            "    def __init__(self) -> None:",
            f"        self._parts = {none_class}()",
        ]
    else:
        lines += [
            f"    def __init__(self, parts: {parts.type_name}) -> None:",
            "        self._parts = parts",
        ]
    lines += [
        "        self._params: dict[str, Any] = {}",
        "        self._body: Any = None",
    ]

    if endpoint.supports_body:
        lines += [
            f"    def body(self, body: Any) -> {name!r}:",
            "        'The body for the API call'",
            "        self._body = body",
            "        return self",
        ]

    for param, ty in sorted(query.items()):
        setter = setter_name(param)
        arg = valid_name(param)
        lines.append(f"    def {setter}(self, {arg}: {annotation(param, ty, union_types)}) -> {name!r}:")
        if ty.description:
            lines.append(f"        {ty.description!r}")
        lines += [
            f"        self._params[{param!r}] = {arg}",
            "        return self",
        ]

    lines += [
        "    def build(self) -> Request:",
        "        'Creates the Request for this API call'",
        f"        return Request({method}, self._parts.url(), dict(self._params), self._body)",
    ]
    return ast.parse("\n".join(lines) + "\n").body
