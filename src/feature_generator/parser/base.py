"""Endpoint descriptors extracted from an OpenAPI document.

Descriptors are built once per run and never mutated afterwards,
so every model here is frozen.
"""

from pydantic import BaseModel, ConfigDict

SUPPORTED_METHODS = ("get", "post", "put", "delete", "patch")


class Parameter(BaseModel):
    """A single path, query or header parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    location: str  # path / query / header / cookie
    required: bool = False
    type: str  # int / double / bool / List<String> / String
    description: str | None = None


class RequestBody(BaseModel):
    """A JSON request body with its schema resolved one level deep."""

    model_config = ConfigDict(frozen=True)

    required: bool = False
    json_schema: dict | None = None


class ResponseDef(BaseModel):
    """One response entry, keyed by status code on the endpoint."""

    model_config = ConfigDict(frozen=True)

    description: str = ""
    json_schema: dict | None = None


class ApiEndpoint(BaseModel):
    """One (HTTP verb, URL template) operation."""

    model_config = ConfigDict(frozen=True)

    path: str  # /users/{id}
    method: str  # lowercase: get / post / put / delete / patch
    summary: str = ""
    operation_id: str | None = None
    parameters: tuple[Parameter, ...] = ()
    request_body: RequestBody | None = None
    responses: dict[str, ResponseDef] = {}

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the endpoint inside a spec: (method, path)."""
        return (self.method, self.path)

    def params_in(self, location: str) -> list[Parameter]:
        return [p for p in self.parameters if p.location == location]
