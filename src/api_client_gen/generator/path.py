"""Path template tokenizer.

Splits a URL path template such as ``/{index}/_search`` into literal and
parameter tokens:

    >>> tokenize("/{index}/_search")
    [Literal(text='/'), Param(name='index'), Literal(text='/_search')]
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Literal:
    """Literal text of a path."""

    text: str


@dataclass(frozen=True)
class Param:
    """A ``{name}`` placeholder in a path."""

    name: str


PathToken = Literal | Param


def tokenize(template: str) -> list[PathToken]:
    """Split a path template into alternating literal and parameter tokens.

    Scanning starts in literal mode and alternates with parameter mode at each
    delimiter. Empty segments are dropped, so ``{a}{b}`` yields two adjacent
    parameters. An unterminated delimiter takes the rest of the input.
    """
    tokens: list[PathToken] = []
    pos, end = 0, len(template)
    in_param = False

    while pos < end:
        opener, closer = ("{", "}") if in_param else ("}", "{")
        if template[pos] == opener:
            pos += 1
        stop = template.find(closer, pos)
        if stop == -1:
            stop = end

        text = template[pos:stop]
        if text:
            tokens.append(Param(text) if in_param else Literal(text))

        pos = stop
        in_param = not in_param

    return tokens


def params(tokens: list[PathToken]) -> list[str]:
    """Parameter names of a token sequence, in order."""
    return [t.name for t in tokens if isinstance(t, Param)]


def join_tokens(tokens: list[PathToken]) -> str:
    """Rebuild a template string from its tokens."""
    return "".join(t.text if isinstance(t, Literal) else f"{{{t.name}}}" for t in tokens)
