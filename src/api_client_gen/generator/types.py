"""Python representation of declared parameter types.

Every TypeKind maps to a type annotation for generated signatures and,
for path parts, to the expression that turns a value into the string that
gets percent-encoded.
"""

import keyword
import re

from api_client_gen.generator.errors import UnsupportedParameterTypeError
from api_client_gen.parser.base import ParamType, TypeKind

# Names generated code relies on; a parameter must not shadow them.
RESERVED_NAMES = {"type", "self", "p", "len", "str", "percent_encode", "UrlBuffer"}

NUMERIC_KINDS = (TypeKind.NUMBER, TypeKind.INTEGER, TypeKind.LONG, TypeKind.FLOAT, TypeKind.DOUBLE)


def valid_name(name: str) -> str:
    """Ensures that the name generated is one that is valid for Python."""
    name = re.sub(r"\W", "_", name)
    if name[:1].isdigit():
        name = f"_{name}"
    if keyword.iskeyword(name) or name in RESERVED_NAMES:
        return f"{name}_"
    return name


def to_pascal_case(name: str) -> str:
    """``indices.get_mapping`` -> ``IndicesGetMapping``."""
    words = re.split(r"[^0-9A-Za-z]+", name)
    return "".join(w[:1].upper() + w[1:] for w in words if w)


def split_on_pascal_case(name: str) -> str:
    """``IndicesGetMapping`` -> ``Indices Get Mapping``."""
    return re.sub(r"(?<!^)(?=[A-Z])", " ", name)


def annotation(name: str, ty: ParamType, union_types: dict[str, str]) -> str:
    """Type annotation for a parameter of the given declared type."""
    match ty.kind:
        case TypeKind.LIST:
            return "Sequence[str]"
        case TypeKind.ENUM if ty.options:
            return f"Literal[{', '.join(repr(o) for o in ty.options)}]"
        case TypeKind.ENUM | TypeKind.STRING | TypeKind.TEXT | TypeKind.DATE | TypeKind.TIME | TypeKind.UNKNOWN:
            return "str"
        case TypeKind.BOOLEAN:
            return "bool"
        case TypeKind.NUMBER | TypeKind.INTEGER | TypeKind.LONG:
            return "int"
        case TypeKind.FLOAT | TypeKind.DOUBLE:
            return "float"
        case TypeKind.UNION if name in union_types:
            return union_types[name]
        case _:
            raise UnsupportedParameterTypeError(name, ty.raw or ty.kind.value)


def stringify_expr(name: str, ty: ParamType, union_types: dict[str, str]) -> str | None:
    """Expression turning the variable ``valid_name(name)`` into a string.

    Returns None for string-like kinds, which are encoded as they are.
    """
    var = valid_name(name)
    match ty.kind:
        case TypeKind.LIST:
            src = f"','.join({var})"
        case kind if kind in NUMERIC_KINDS:
            src = f"str({var})"
        case TypeKind.BOOLEAN:
            src = f"'true' if {var} else 'false'"
        case TypeKind.ENUM | TypeKind.STRING | TypeKind.TEXT | TypeKind.DATE | TypeKind.TIME | TypeKind.UNKNOWN:
            return None
        case TypeKind.UNION if name in union_types:
            src = f"str({var})"
        case _:
            raise UnsupportedParameterTypeError(name, ty.raw or ty.kind.value)
    return src
