"""Builder for an endpoint's URL parts type.

The generated type only accepts valid parameter combinations, based on
what's given in the paths for an endpoint: one variant per distinct
parameter signature, with the parameterless paths folded into ``None``.
"""

import ast
import logging
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from api_client_gen.generator.errors import (
    DuplicateFieldError,
    GenerationError,
    UnknownPathParameterError,
    VariantNameCollisionError,
)
from api_client_gen.generator.path import PathToken, params, tokenize
from api_client_gen.generator.types import annotation, split_on_pascal_case, to_pascal_case, valid_name
from api_client_gen.generator.url_builder import UrlBuilder, render_url
from api_client_gen.parser.base import ApiEndpoint, ParamType, UrlPath

logger = logging.getLogger(__name__)

NONE_VARIANT = "None"


@dataclass(frozen=True)
class EndpointVariant:
    """One member of a parts type and the path it builds."""

    name: str
    signature: tuple[str, ...]
    template: str
    tokens: tuple[PathToken, ...]
    param_types: Mapping[str, ParamType] = field(compare=False)

    @property
    def fields(self) -> list[str]:
        """Python field names, one per distinct parameter."""
        return [valid_name(p) for p in dict.fromkeys(self.signature)]


@dataclass(frozen=True)
class PartsEnum:
    endpoint: str
    type_name: str
    api_name: str
    variants: list[EndpointVariant]

    @property
    def is_parameterless(self) -> bool:
        """Whether this contains only a single variant with no parts."""
        return len(self.variants) == 1 and not self.variants[0].signature

    def variant_class(self, variant: EndpointVariant) -> str:
        return f"{self.type_name}{variant.name}"


def variant_name(signature: Sequence[str]) -> str:
    if not signature:
        return NONE_VARIANT
    return "".join(to_pascal_case(p) for p in signature)


def group(
    paths: Sequence[UrlPath],
    common_parts: Mapping[str, ParamType] | None = None,
) -> list[EndpointVariant]:
    """Group path templates into variants, one per parameter signature.

    The first template seen for a signature wins; later ones are dropped.
    """
    common_parts = common_parts or {}
    kept: dict[tuple[str, ...], str] = {}
    names: dict[str, str] = {}  # {variant name: template}
    variants = []

    for path in paths:
        tokens = tokenize(path.path)
        signature = tuple(params(tokens))

        if signature in kept:
            if kept[signature] != path.path:
                logger.warning(
                    "Dropping path '%s': parameters %s are already served by '%s'",
                    path.path,
                    list(signature),
                    kept[signature],
                )
            else:
                logger.debug("Ignoring duplicate path '%s'", path.path)
            continue

        param_types = {}
        for name in signature:
            ty = path.parts.get(name) or common_parts.get(name)
            if ty is None:
                raise UnknownPathParameterError(name, path.path)
            param_types[name] = ty

        # fields plus the locals url() binds for them share one namespace
        fields = [valid_name(p) for p in dict.fromkeys(signature)]
        local_names = fields + [f"{f}_str" for f in fields] + [f"encoded_{f}" for f in fields]
        for field_name in fields:
            if local_names.count(field_name) > 1:
                raise DuplicateFieldError(field_name, path.path)

        name = variant_name(signature)
        if name in names:
            raise VariantNameCollisionError(name, path.path, names[name])

        kept[signature] = path.path
        names[name] = path.path
        variants.append(
            EndpointVariant(
                name=name,
                signature=signature,
                template=path.path,
                tokens=tuple(tokens),
                param_types=param_types,
            )
        )

    return variants


def build_parts_enum(endpoint: ApiEndpoint, common_parts: Mapping[str, ParamType] | None = None) -> PartsEnum:
    if not endpoint.paths:
        raise GenerationError(f"Endpoint '{endpoint.name}' has no paths")

    prefix = to_pascal_case(endpoint.name)
    return PartsEnum(
        endpoint=endpoint.name,
        type_name=f"{prefix}Parts",
        api_name=split_on_pascal_case(prefix),
        variants=group(endpoint.paths, common_parts),
    )


def _variant_doc(signature: Sequence[str]) -> str:
    if not signature:
        return "No parts"
    words = [to_pascal_case(p.replace("_", " ")) for p in dict.fromkeys(signature)]
    if len(words) == 1:
        return words[0]
    return f"{', '.join(words[:-1])} and {words[-1]}"


def _parse(source: str) -> list[ast.stmt]:
    return ast.parse(source).body


def render_parts_enum(parts: PartsEnum, union_types: dict[str, str] | None = None) -> list[ast.stmt]:
    """AST for the parts base class, its url() method and one dataclass per variant."""
    union_types = union_types or {}

    base = _parse(
        f"class {parts.type_name}:\n"
        f"    {f'API parts for the {parts.api_name} API'!r}\n"
        f"    __slots__ = ()\n"
        f"    def url(self) -> str:\n"
        f"        {f'Builds a relative URL path to the {parts.api_name} API'!r}\n"
        f"        match self:\n"
        f"            case _:\n"
        f"                pass\n"
        f"        raise TypeError(f'unsupported parts: {{self!r}}')\n"
    )[0]
    url_fn = base.body[2]
    match_stmt = url_fn.body[1]
    match_stmt.cases = [_match_case(parts, v, union_types) for v in parts.variants]

    stmts: list[ast.stmt] = [base]
    for variant in parts.variants:
        stmts.append(_variant_class(parts, variant, union_types))
    return stmts


def _match_case(parts: PartsEnum, variant: EndpointVariant, union_types: dict[str, str]) -> ast.match_case:
    pattern = f"{parts.variant_class(variant)}({', '.join(variant.fields)})"
    case = _parse(f"match _:\n    case {pattern}:\n        pass\n")[0].cases[0]
    expr = UrlBuilder(list(variant.tokens), variant.param_types, union_types).build()
    case.body = render_url(expr)
    return case


def _variant_class(parts: PartsEnum, variant: EndpointVariant, union_types: dict[str, str]) -> ast.stmt:
    lines = [
        "@dataclass(frozen=True)",
        f"class {parts.variant_class(variant)}({parts.type_name}):",
        f"    {_variant_doc(variant.signature)!r}",
    ]
    for name in dict.fromkeys(variant.signature):
        lines.append(f"    {valid_name(name)}: {annotation(name, variant.param_types[name], union_types)}")
    return _parse("\n".join(lines) + "\n")[0]
