"""Normalized data models consumed by the renderer.

The normalizer converts a resolved, merged document into these models.
Defaults for absent optional fields are filled here, so the renderer
never has to check for missing values.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SchemaProperty(BaseModel):
    """One schema node: an object, an array, or a scalar leaf."""

    model_config = ConfigDict(frozen=True)

    type: str = "Object"
    description: str = ""
    properties: dict[str, "SchemaProperty"] = {}
    items: "SchemaProperty | None" = None
    required: list[str] = []  # names of this node's own required children
    example: Any = None


class ParameterDescriptor(BaseModel):
    """A single operation parameter (path, query, header, or body)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    location: str = Field(alias="in")  # path / query / header / body / formData
    param_type: str = ""
    description: str = ""
    required: bool = False
    schema_: SchemaProperty | None = Field(default=None, alias="schema")


class ResponseDescriptor(BaseModel):
    """One declared response of an operation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status_code: str
    description: str = ""
    schema_: SchemaProperty | None = Field(default=None, alias="schema")


class EndpointDescriptor(BaseModel):
    """A single (path, method) operation."""

    model_config = ConfigDict(frozen=True)

    path: str
    method: str  # lowercase, as written in the document
    operation_id: str = ""
    description: str = ""
    tags: list[str]
    parameters: list[ParameterDescriptor]
    responses: dict[str, ResponseDescriptor] = {}
    schemes: list[str] | None = None


class ApiDocument(BaseModel):
    """Document-level metadata plus every endpoint in document order."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""
    base_path: str = ""
    schemes: list[str] | None = None
    endpoints: list[EndpointDescriptor]
