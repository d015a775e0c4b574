"""Code generator: converts parsed API descriptions into a client package."""

import ast
import logging
from fnmatch import fnmatch
from pathlib import Path

from pydantic import BaseModel

from api_client_gen.config import GeneratorConfig
from api_client_gen.generator.errors import GenerationError, InvalidOutputError
from api_client_gen.generator.parts import build_parts_enum, render_parts_enum
from api_client_gen.generator.request import render_request_builder
from api_client_gen.generator.types import valid_name
from api_client_gen.generator.validator import validate_files
from api_client_gen.parser.base import ApiEndpoint, ApiSpec

logger = logging.getLogger(__name__)

RUNTIME_SOURCE = Path(__file__).parent.parent / "runtime.py"
RUNTIME_MODULE = "_url"

HEADER = "# This file is generated. Do not edit it by hand.\n"

MODULE_IMPORTS = f"""
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

from .{RUNTIME_MODULE} import Request, UrlBuffer, percent_encode
"""


class EndpointFailure(BaseModel):
    """An endpoint that was skipped, and why."""

    endpoint: str
    message: str


class GenerationResult(BaseModel):
    files: dict[str, str]  # {filename: source}
    generated: list[str]  # endpoint names
    failures: list[EndpointFailure]


class CodeGenerator:
    """Generates a typed client package from an ApiSpec."""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()

    def generate(self, spec: ApiSpec) -> GenerationResult:
        """Generate all files of the client package.

        Endpoints that fail are skipped and reported; the rest are
        generated as usual.
        """
        modules: dict[str, list[ast.stmt]] = {}
        generated = []
        failures = []

        for endpoint in self.select_endpoints(spec.endpoints):
            try:
                stmts = self._generate_endpoint(endpoint, spec)
            except GenerationError as e:
                logger.warning("Skipping endpoint %s: %s", endpoint.name, e)
                failures.append(EndpointFailure(endpoint=endpoint.name, message=str(e)))
                continue

            module = valid_name(endpoint.namespace or self.config.root_module)
            modules.setdefault(module, []).extend(stmts)
            generated.append(endpoint.name)
            logger.debug("Generated endpoint %s into %s.py", endpoint.name, module)

        files = {
            "__init__.py": self._render_init(sorted(modules)),
            f"{RUNTIME_MODULE}.py": RUNTIME_SOURCE.read_text(encoding="utf-8"),
        }
        for module, body in sorted(modules.items()):
            files[f"{module}.py"] = self._render_module(module, body)

        if self.config.validate_output:
            errors = validate_files(files)
            if errors:
                raise InvalidOutputError(errors)

        return GenerationResult(files=files, generated=generated, failures=failures)

    def select_endpoints(self, endpoints: list[ApiEndpoint]) -> list[ApiEndpoint]:
        """Filter endpoints by stability and name patterns."""
        selected = []
        for ep in endpoints:
            if ep.stability not in self.config.stability:
                logger.debug("Excluding %s endpoint %s", ep.stability, ep.name)
                continue
            if self.config.include and not any(fnmatch(ep.name, p) for p in self.config.include):
                continue
            if any(fnmatch(ep.name, p) for p in self.config.exclude):
                continue
            selected.append(ep)
        return selected

    def _generate_endpoint(self, endpoint: ApiEndpoint, spec: ApiSpec) -> list[ast.stmt]:
        """Parts type and request builder for one endpoint, all or nothing."""
        union_types = self.config.union_types
        parts = build_parts_enum(endpoint, spec.common_parts)
        try:
            stmts = render_parts_enum(parts, union_types)
            stmts += render_request_builder(endpoint, parts, spec.common_params, union_types)
            tree = ast.fix_missing_locations(ast.Module(body=stmts, type_ignores=[]))
            compile(tree, f"<{endpoint.name}>", "exec", dont_inherit=True)
        except SyntaxError as e:
            raise GenerationError(f"Cannot render endpoint: {e.msg}") from e
        return stmts

    def _render_module(self, module: str, body: list[ast.stmt]) -> str:
        docstring = ast.Expr(value=ast.Constant(value=f"Parts and request builders for the {module} APIs."))
        tree = ast.Module(body=[docstring, *ast.parse(MODULE_IMPORTS).body, *body], type_ignores=[])
        ast.fix_missing_locations(tree)
        return HEADER + ast.unparse(tree) + "\n"

    def _render_init(self, modules: list[str]) -> str:
        lines = [HEADER.rstrip(), '"""Generated API client."""', ""]
        if modules:
            lines.append(f"from . import {', '.join(modules)}")
            lines.append("")
        lines.append(f"__all__ = {modules!r}")
        return "\n".join(lines) + "\n"
