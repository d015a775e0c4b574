"""Builder for efficient URL construction code.

For a path with no parameters the URL is the static literal itself. For a
path with parameters, the generated code

1. stringifies every non-string parameter (``index_str = ','.join(index)``),
2. percent-encodes every parameter (``encoded_index = percent_encode(index_str)``),
3. allocates one buffer whose size is the literal byte count, computed here,
   plus the length of each encoded parameter, and appends every token to it
   in template order.
"""

import ast
from dataclasses import dataclass
from typing import Mapping

from api_client_gen.generator.path import Literal, Param, PathToken, params
from api_client_gen.generator.types import stringify_expr, valid_name
from api_client_gen.parser.base import ParamType

BUFFER_NAME = "p"


@dataclass(frozen=True)
class StaticUrl:
    """A URL that is a string literal."""

    path: str


@dataclass(frozen=True)
class Binding:
    """``target = value``, with value as Python source."""

    target: str
    value: str


@dataclass(frozen=True)
class PushChar:
    char: str


@dataclass(frozen=True)
class PushStr:
    text: str


@dataclass(frozen=True)
class PushEncoded:
    name: str


Append = PushChar | PushStr | PushEncoded


@dataclass(frozen=True)
class BufferUrl:
    """A URL assembled into a pre-sized buffer."""

    stringify: tuple[Binding, ...]
    encode: tuple[Binding, ...]
    literal_length: int
    dynamic_lengths: tuple[str, ...]
    appends: tuple[Append, ...]

    @property
    def capacity_expr(self) -> str:
        """Source of the buffer size: literal bytes plus each encoded length."""
        terms = [str(self.literal_length)] + [f"len({name})" for name in self.dynamic_lengths]
        return " + ".join(terms)


UrlBuildExpression = StaticUrl | BufferUrl


def encoded_name(param: str) -> str:
    return f"encoded_{valid_name(param)}"


class UrlBuilder:
    """Builds the URL expression for one tokenized path."""

    def __init__(
        self,
        tokens: list[PathToken],
        param_types: Mapping[str, ParamType],
        union_types: dict[str, str] | None = None,
    ):
        self.tokens = tokens
        self.param_types = param_types
        self.union_types = union_types or {}

    def build(self) -> UrlBuildExpression:
        if any(isinstance(t, Param) for t in self.tokens):
            return self._build_buffer()
        return self._build_static()

    def _build_static(self) -> StaticUrl:
        return StaticUrl("".join(t.text for t in self.tokens))

    def _build_buffer(self) -> BufferUrl:
        stringify = []
        encode = []
        # a name repeated in one path is bound once but appended each time
        for name in dict.fromkeys(params(self.tokens)):
            var = valid_name(name)
            expr = stringify_expr(name, self.param_types[name], self.union_types)
            if expr is not None:
                stringify.append(Binding(f"{var}_str", expr))
                var = f"{var}_str"
            encode.append(Binding(encoded_name(name), f"percent_encode({var})"))

        return BufferUrl(
            stringify=tuple(stringify),
            encode=tuple(encode),
            literal_length=self._literal_length(),
            dynamic_lengths=tuple(encoded_name(t.name) for t in self.tokens if isinstance(t, Param)),
            appends=tuple(self._append(t) for t in self.tokens),
        )

    def _literal_length(self) -> int:
        """Number of bytes in all literal tokens."""
        return sum(len(t.text.encode("utf-8")) for t in self.tokens if isinstance(t, Literal))

    @staticmethod
    def _append(token: PathToken) -> Append:
        if isinstance(token, Param):
            return PushEncoded(encoded_name(token.name))
        if len(token.text.encode("utf-8")) == 1:
            return PushChar(token.text)
        return PushStr(token.text)


def _stmt(source: str) -> ast.stmt:
    return ast.parse(source).body[0]


def render_url(expr: UrlBuildExpression) -> list[ast.stmt]:
    """Statements that compute the URL and return it."""
    if isinstance(expr, StaticUrl):
        return [_stmt(f"return {expr.path!r}")]

    stmts = [_stmt(f"{b.target} = {b.value}") for b in expr.stringify + expr.encode]
    stmts.append(_stmt(f"{BUFFER_NAME} = UrlBuffer({expr.capacity_expr})"))
    for append in expr.appends:
        match append:
            case PushChar(char):
                stmts.append(_stmt(f"{BUFFER_NAME}.push_char({char!r})"))
            case PushStr(text):
                stmts.append(_stmt(f"{BUFFER_NAME}.push_str({text!r})"))
            case PushEncoded(name):
                stmts.append(_stmt(f"{BUFFER_NAME}.push_str({name})"))
    stmts.append(_stmt(f"return {BUFFER_NAME}.finish()"))
    return stmts
