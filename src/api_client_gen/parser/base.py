"""Unified data models for parsed REST API descriptions.

All parsers (rest-api-spec, OpenAPI) convert their input
into these standard models for downstream code generation.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, field_validator


class SpecLoadError(ValueError):
    """Raised when an API description cannot be read or recognised."""


class TypeKind(str, Enum):
    """Declared type of an API parameter."""

    UNKNOWN = "unknown"
    LIST = "list"
    ENUM = "enum"
    STRING = "string"
    TEXT = "text"
    BOOLEAN = "boolean"
    NUMBER = "number"
    FLOAT = "float"
    DOUBLE = "double"
    INTEGER = "int"
    LONG = "long"
    DATE = "date"
    TIME = "time"
    UNION = "union"


class ParamType(BaseModel):
    """Type metadata for a single path part or query parameter."""

    kind: TypeKind
    raw: str = ""  # type string as written in the source document
    description: str = ""
    options: list[str] = []  # enum values
    default: Any = None
    members: list[str] = []  # union member types


class UrlPath(BaseModel):
    """One alternative URL path template of an endpoint."""

    path: str  # /{index}/_search
    methods: list[str]  # GET / POST / PUT / DELETE / HEAD
    parts: dict[str, ParamType] = {}
    deprecated: str | None = None

    @field_validator("path")
    @classmethod
    def _rooted(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"

    @field_validator("methods")
    @classmethod
    def _upper(cls, value: list[str]) -> list[str]:
        return [m.upper() for m in value]


class ApiEndpoint(BaseModel):
    """A single API endpoint with all its alternative paths."""

    name: str  # indices.get_mapping
    description: str = ""
    doc_url: str = ""
    stability: str = "stable"  # stable / beta / experimental
    paths: list[UrlPath]
    params: dict[str, ParamType] = {}
    body: dict | None = None

    @property
    def namespace(self) -> str | None:
        """Namespace of a dotted endpoint name, None for root endpoints."""
        if "." not in self.name:
            return None
        return self.name.split(".", 1)[0]

    @property
    def supports_body(self) -> bool:
        return self.body is not None


class ApiSpec(BaseModel):
    """A complete parsed API description."""

    endpoints: list[ApiEndpoint]
    common_parts: dict[str, ParamType] = {}  # path parts shared across endpoints
    common_params: dict[str, ParamType] = {}  # query params accepted by every endpoint
