"""OpenAPI document parser.

Turns a decoded OpenAPI 3.x document into ApiEndpoint descriptors and an
EndpointCatalog that numbers them for selection. Extraction is all or
nothing: a malformed document raises SpecError and yields no endpoints.
"""

from typing import Iterable, Iterator, NamedTuple

from pydantic import ValidationError

from feature_generator.errors import SelectionError, SpecError
from feature_generator.parser.base import (
    SUPPORTED_METHODS,
    ApiEndpoint,
    Parameter,
    RequestBody,
    ResponseDef,
)

SCHEMA_REF_PREFIX = "#/components/schemas/"
DEFAULT_TAG = "default"


class NumberedEndpoint(NamedTuple):
    index: int
    tag: str
    endpoint: ApiEndpoint


class EndpointCatalog:
    """Deduplicated endpoint store with a tag index over it.

    An operation with several tags is stored once and listed once per tag,
    so it gets one selection number per tag that all resolve to the same
    descriptor.
    """

    def __init__(self) -> None:
        self._endpoints: dict[tuple[str, str], ApiEndpoint] = {}
        self._tags: dict[str, list[tuple[str, str]]] = {}

    def add(self, endpoint: ApiEndpoint, tags: Iterable[str]) -> None:
        self._endpoints.setdefault(endpoint.key, endpoint)
        for tag in tags:
            keys = self._tags.setdefault(tag, [])
            if endpoint.key not in keys:
                keys.append(endpoint.key)

    def __len__(self) -> int:
        return len(self._endpoints)

    @property
    def endpoints(self) -> list[ApiEndpoint]:
        return list(self._endpoints.values())

    @property
    def tags(self) -> list[str]:
        return list(self._tags)

    def by_tag(self) -> dict[str, list[ApiEndpoint]]:
        return {
            tag: [self._endpoints[key] for key in keys]
            for tag, keys in self._tags.items()
        }

    def numbered(self) -> Iterator[NumberedEndpoint]:
        """Yield endpoints in (tag, endpoint) order with 1-based indices."""
        index = 1
        for tag, keys in self._tags.items():
            for key in keys:
                yield NumberedEndpoint(index, tag, self._endpoints[key])
                index += 1

    def select(self, indices: Iterable[int] | None) -> list[ApiEndpoint]:
        """Resolve selection numbers; ``None`` selects every endpoint."""
        by_index = {n.index: n.endpoint for n in self.numbered()}
        if indices is None:
            indices = list(by_index)

        selected: dict[tuple[str, str], ApiEndpoint] = {}
        for i in indices:
            if i not in by_index:
                raise SelectionError(
                    f"Invalid endpoint index {i} (valid range: 1-{len(by_index)})"
                )
            endpoint = by_index[i]
            selected.setdefault(endpoint.key, endpoint)

        if not selected:
            raise SelectionError("At least one endpoint must be selected")
        return list(selected.values())


def parse_selection(text: str) -> list[int] | None:
    """Parse ``all`` or a comma-separated list of numbers.

    Returns None for ``all``.
    """
    text = text.strip()
    if text.lower() == "all":
        return None
    try:
        return [int(part.strip()) for part in text.split(",") if part.strip()]
    except ValueError:
        raise SelectionError(
            f'Invalid endpoint indices: {text}. Use comma-separated numbers (e.g., 1,3,5) or "all"'
        ) from None


def parse_openapi(doc: dict) -> EndpointCatalog:
    """Extract every supported operation from a decoded OpenAPI document."""
    if not isinstance(doc, dict):
        raise SpecError("Specification root must be a mapping")
    paths = doc.get("paths")
    if not isinstance(paths, dict):
        raise SpecError("Specification has no 'paths' mapping")

    schemas = _component_schemas(doc)
    catalog = EndpointCatalog()

    for path, methods in paths.items():
        if not isinstance(methods, dict):
            raise SpecError(f"Path item for {path} must be a mapping")
        for method, operation in methods.items():
            method = str(method).lower()
            if method not in SUPPORTED_METHODS:
                continue
            if not isinstance(operation, dict):
                raise SpecError(f"Operation {method.upper()} {path} must be a mapping")

            endpoint = _parse_operation(path, method, operation, schemas)
            catalog.add(endpoint, operation.get("tags") or [DEFAULT_TAG])

    return catalog


def resolve_schema_ref(schema: dict | None, schemas: dict) -> dict | None:
    """Resolve one level of ``#/components/schemas/<Name>``.

    A schema without ``$ref`` is returned unchanged; an unknown reference
    resolves to None.
    """
    if schema is None:
        return None
    ref = schema.get("$ref")
    if isinstance(ref, str) and ref.startswith(SCHEMA_REF_PREFIX):
        return schemas.get(ref[len(SCHEMA_REF_PREFIX):])
    return schema


def parameter_type(schema: dict | None) -> str:
    """Map a parameter schema to the Dart type used in signatures."""
    if not schema:
        return "String"
    schema_type = schema.get("type")
    if schema_type == "integer":
        return "int"
    if schema_type == "number":
        return "double"
    if schema_type == "boolean":
        return "bool"
    if schema_type == "array":
        return "List<String>"
    return "String"


def _component_schemas(doc: dict) -> dict:
    components = doc.get("components") or {}
    if not isinstance(components, dict):
        raise SpecError("'components' must be a mapping")
    schemas = components.get("schemas") or {}
    if not isinstance(schemas, dict):
        raise SpecError("'components.schemas' must be a mapping")
    return schemas


def _parse_operation(path: str, method: str, operation: dict, schemas: dict) -> ApiEndpoint:
    where = f"{method.upper()} {path}"
    tags = operation.get("tags")
    if tags is not None and not (isinstance(tags, list) and all(isinstance(t, str) for t in tags)):
        raise SpecError(f"{where}: 'tags' must be a list of strings")

    operation_id = operation.get("operationId")
    try:
        return ApiEndpoint(
            path=path,
            method=method,
            summary=operation.get("summary") or "",
            operation_id=str(operation_id) if operation_id else None,
            parameters=tuple(_parse_parameters(operation.get("parameters"), where)),
            request_body=_parse_request_body(operation.get("requestBody"), schemas, where),
            responses=_parse_responses(operation.get("responses"), schemas, where),
        )
    except ValidationError as e:
        raise SpecError(f"{where}: {e}") from e


def _parse_parameters(params: list | None, where: str) -> list[Parameter]:
    if params is None:
        return []
    if not isinstance(params, list):
        raise SpecError(f"{where}: 'parameters' must be a list")

    result = []
    for p in params:
        if not isinstance(p, dict) or "name" not in p or "in" not in p:
            raise SpecError(f"{where}: every parameter needs 'name' and 'in'")
        result.append(
            Parameter(
                name=p["name"],
                location=p["in"],
                required=bool(p.get("required", False)),
                type=parameter_type(p.get("schema")),
                description=p.get("description"),
            )
        )
    return result


def _json_schema(container: dict, schemas: dict, where: str) -> dict | None:
    content = container.get("content") or {}
    if not isinstance(content, dict):
        raise SpecError(f"{where}: 'content' must be a mapping")
    media = content.get("application/json") or {}
    if not isinstance(media, dict):
        raise SpecError(f"{where}: media type 'application/json' must be a mapping")
    schema = media.get("schema")
    if schema is not None and not isinstance(schema, dict):
        raise SpecError(f"{where}: schema must be a mapping")
    return resolve_schema_ref(schema, schemas)


def _parse_request_body(body: dict | None, schemas: dict, where: str) -> RequestBody | None:
    if body is None:
        return None
    if not isinstance(body, dict):
        raise SpecError(f"{where}: 'requestBody' must be a mapping")
    return RequestBody(
        required=bool(body.get("required", False)),
        json_schema=_json_schema(body, schemas, where),
    )


def _parse_responses(responses: dict | None, schemas: dict, where: str) -> dict[str, ResponseDef]:
    if responses is None:
        return {}
    if not isinstance(responses, dict):
        raise SpecError(f"{where}: 'responses' must be a mapping")

    result = {}
    for status_code, resp in responses.items():
        if not isinstance(resp, dict):
            raise SpecError(f"{where}: response {status_code} must be a mapping")
        result[str(status_code)] = ResponseDef(
            description=resp.get("description") or "",
            json_schema=_json_schema(resp, schemas, where),
        )
    return result
