"""Core type definitions for SpecDiff.

All types use Pydantic for validation. The document models mirror the
OpenAPI 3.x object graph closely enough for comparison; unknown keywords are
kept as extras so vendor extensions stay reachable.
"""

import os
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ============================================================================
# Enums
# ============================================================================


class HttpMethod(str, Enum):
    """HTTP methods an OpenAPI path item can bind operations to."""

    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    PATCH = "PATCH"
    TRACE = "TRACE"


class ParameterLocation(str, Enum):
    """Where a parameter is bound in the request."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class MessageType(str, Enum):
    """Types of differences that can be found."""

    ADDITION = "Addition"
    UPDATE = "Update"
    REMOVAL = "Removal"


class Severity(str, Enum):
    """How a difference affects existing consumers."""

    BREAKING = "breaking"
    INFO = "informational"


class OutputFormat(str, Enum):
    """Output formats of the command-line tool."""

    JSON = "json"
    TEXT = "text"


class DataDirection(str, Enum):
    """Side of the exchange the comparison is currently visiting."""

    NONE = "none"
    REQUEST = "request"
    RESPONSE = "response"


# ============================================================================
# OpenAPI Document Model
# ============================================================================


class DocumentNode(BaseModel):
    """Base for every node of a parsed OpenAPI document.

    Nodes are frozen: a document pair is never mutated during a comparison.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    @property
    def extensions(self) -> dict[str, Any]:
        """Vendor extensions (``x-*`` keys) declared on this node."""
        return {
            key: value
            for key, value in (self.model_extra or {}).items()
            if key.startswith("x-")
        }


class Schema(DocumentNode):
    """A JSON schema as embedded in an OpenAPI document."""

    ref: str | None = Field(default=None, alias="$ref")
    type: str | list[str] | None = None
    format: str | None = None
    description: str | None = None
    enum: list[Any] | None = None
    required: list[str] = Field(default_factory=list)
    properties: dict[str, "Schema"] = Field(default_factory=dict)
    items: "Schema | None" = None
    additional_properties: "bool | Schema | None" = Field(
        default=None, alias="additionalProperties"
    )
    nullable: bool = False
    deprecated: bool = False


class MediaType(DocumentNode):
    """A body representation for one MIME type."""

    schema_: Schema | None = Field(default=None, alias="schema")


class Header(DocumentNode):
    """A response header definition."""

    ref: str | None = Field(default=None, alias="$ref")
    description: str | None = None
    required: bool = False
    deprecated: bool = False
    schema_: Schema | None = Field(default=None, alias="schema")


class Parameter(DocumentNode):
    """An operation or path-level parameter."""

    ref: str | None = Field(default=None, alias="$ref")
    name: str | None = None
    location: ParameterLocation | None = Field(default=None, alias="in")
    description: str | None = None
    required: bool = False
    deprecated: bool = False
    schema_: Schema | None = Field(default=None, alias="schema")
    content: dict[str, MediaType] = Field(default_factory=dict)

    @property
    def is_required(self) -> bool:
        """Path parameters are always bound, whatever ``required`` says."""
        return self.required or self.location == ParameterLocation.PATH


class RequestBody(DocumentNode):
    """A request body definition."""

    ref: str | None = Field(default=None, alias="$ref")
    description: str | None = None
    required: bool = False
    content: dict[str, MediaType] = Field(default_factory=dict)


class Response(DocumentNode):
    """A single response of an operation."""

    ref: str | None = Field(default=None, alias="$ref")
    description: str | None = None
    headers: dict[str, Header] = Field(default_factory=dict)
    content: dict[str, MediaType] = Field(default_factory=dict)


class Operation(DocumentNode):
    """One HTTP method bound to one path template."""

    operation_id: str | None = Field(default=None, alias="operationId")
    summary: str | None = None
    description: str | None = None
    deprecated: bool = False
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, Response] = Field(default_factory=dict)

    @field_validator("responses", mode="before")
    @classmethod
    def _status_codes_as_strings(cls, value: Any) -> Any:
        # YAML reads an unquoted 200 as an int
        if isinstance(value, dict):
            return {str(code): response for code, response in value.items()}
        return value


class PathItem(DocumentNode):
    """Operations available on a single path template."""

    parameters: list[Parameter] = Field(default_factory=list)
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None

    def operations(self) -> dict[str, Operation]:
        """Operations keyed by lower-case method, in declaration order of HttpMethod."""
        found: dict[str, Operation] = {}
        for method in HttpMethod:
            operation = getattr(self, method.value.lower())
            if operation is not None:
                found[method.value.lower()] = operation
        return found


class Components(DocumentNode):
    """Reusable definitions referenced through ``$ref`` markers."""

    schemas: dict[str, Schema] = Field(default_factory=dict)
    parameters: dict[str, Parameter] = Field(default_factory=dict)
    responses: dict[str, Response] = Field(default_factory=dict)
    headers: dict[str, Header] = Field(default_factory=dict)
    request_bodies: dict[str, RequestBody] = Field(
        default_factory=dict, alias="requestBodies"
    )


class OpenApiDocument(DocumentNode):
    """A parsed OpenAPI 3.x document."""

    openapi: str
    info: dict[str, Any] = Field(default_factory=dict)
    paths: dict[str, PathItem] = Field(default_factory=dict)
    components: Components = Field(default_factory=Components)

    @property
    def title(self) -> str:
        return self.info.get("title", "Untitled API")

    @property
    def version(self) -> str:
        return str(self.info.get("version", "0.0.0"))


Schema.model_rebuild()


# ============================================================================
# Comparison Output
# ============================================================================


class ComparisonMessage(BaseModel):
    """A single difference found between the old and new documents."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    code: str = Field(description="Identifier of the rule that fired")
    kind: MessageType
    severity: Severity
    path: str = Field(description="Pointer-like location in the document")
    old_summary: str = ""
    new_summary: str = ""
    message: str = Field(description="Human-readable description")
    operation: str | None = Field(
        default=None, description="METHOD /template of the enclosing operation"
    )

    @property
    def is_breaking(self) -> bool:
        return self.severity == Severity.BREAKING


class ComparisonSummary(BaseModel):
    """Aggregated counts over the findings of one run."""

    total: int
    breaking: int
    informational: int
    by_code: dict[str, int]

    @property
    def has_breaking_changes(self) -> bool:
        return self.breaking > 0


# ============================================================================
# Configuration
# ============================================================================


class ComparisonSettings(BaseModel):
    """Limits applied to a single comparison run."""

    max_nodes: int = Field(default=100_000, gt=0)
    max_depth: int = Field(default=256, gt=0)
    max_reference_hops: int = Field(default=32, gt=0)

    @classmethod
    def from_env(cls) -> "ComparisonSettings":
        """Build settings, overriding defaults with SPECDIFF_* variables."""
        overrides: dict[str, str] = {}
        for field_name in cls.model_fields:
            value = os.environ.get(f"SPECDIFF_{field_name.upper()}")
            if value:
                overrides[field_name] = value
        return cls(**overrides)
