"""Derive identifiers from feature names and endpoints.

Every template takes its names from here, so the service, source,
repository, use-case and bloc layers always agree on them.

Method names:
  operationId "placeOrder"          -> placeOrder
  operationId "list-pets"           -> listPets
  GET    /users/{id}                -> getUsers
  POST   /orders                    -> createOrders
  PUT    /users/{id}/profile        -> updateProfile
  DELETE /users/{id}                -> deleteUsers
  PATCH  /users/{id}                -> patchUsers
  GET    /                          -> get

Model names are always synthesized from the method name
(PlaceOrderRequest, GetUsersResponse), never taken from the schema name.
"""

import re

from feature_generator.parser.base import ApiEndpoint, ResponseDef

_WORD_SPLIT = re.compile(r"[-_\s]+")

_VERB_PREFIXES: dict[str, str] = {
    "get": "get",
    "post": "create",
    "put": "update",
    "delete": "delete",
    "patch": "patch",
}

SUCCESS_STATUS_CODES = ("200", "201", "204")

DYNAMIC_TYPE = "dynamic"


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def to_pascal_case(text: str) -> str:
    """``user_management`` -> ``UserManagement``; inner capitals are kept."""
    return "".join(_capitalize(w) for w in _WORD_SPLIT.split(text) if w)


def to_camel_case(text: str) -> str:
    pascal = to_pascal_case(text)
    return pascal[:1].lower() + pascal[1:]


def to_title_case(text: str) -> str:
    """``user_management`` -> ``User Management``."""
    return " ".join(_capitalize(w) for w in _WORD_SPLIT.split(text) if w)


def to_snake_case(text: str) -> str:
    """``GetUsersResponse`` -> ``get_users_response``.

    Works on identifiers that are already PascalCase or camelCase; it does
    not split on separators like the other converters.
    """
    return re.sub(r"([A-Z])", lambda m: "_" + m.group(1).lower(), text).lstrip("_")


def method_name(endpoint: ApiEndpoint) -> str:
    if endpoint.operation_id:
        return to_camel_case(endpoint.operation_id)

    parts = [p for p in endpoint.path.split("/") if p and not p.startswith("{")]
    method = endpoint.method.lower()
    if not parts:
        return method

    base_name = parts[-1]
    prefix = _VERB_PREFIXES.get(method)
    if prefix is None:
        return to_camel_case(base_name)
    return prefix + to_pascal_case(base_name)


def request_model_name(endpoint: ApiEndpoint) -> str:
    return to_pascal_case(method_name(endpoint)) + "Request"


def response_model_name(endpoint: ApiEndpoint) -> str:
    return to_pascal_case(method_name(endpoint)) + "Response"


def state_field_name(endpoint: ApiEndpoint) -> str:
    return method_name(endpoint) + "Response"


def event_name(endpoint: ApiEndpoint) -> str:
    return method_name(endpoint) + "Requested"


def success_response(endpoint: ApiEndpoint) -> ResponseDef | None:
    """First of the 200, 201 and 204 responses that the endpoint declares."""
    for code in SUCCESS_STATUS_CODES:
        if code in endpoint.responses:
            return endpoint.responses[code]
    return None


def response_schema(endpoint: ApiEndpoint) -> dict | None:
    response = success_response(endpoint)
    return response.json_schema if response else None


def return_type(endpoint: ApiEndpoint) -> str:
    """Response model name, or ``dynamic`` when there is no success schema."""
    if response_schema(endpoint) is not None:
        return response_model_name(endpoint)
    return DYNAMIC_TYPE


def required_models(endpoint: ApiEndpoint) -> list[str]:
    """Model classes an endpoint's signatures refer to."""
    models = []
    if endpoint.request_body is not None:
        models.append(request_model_name(endpoint))
    if response_schema(endpoint) is not None:
        models.append(response_model_name(endpoint))
    return models


def model_file_name(model_name: str) -> str:
    return f"{to_snake_case(model_name)}.dart"
