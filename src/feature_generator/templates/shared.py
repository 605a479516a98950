"""Helpers shared by all Dart templates: render context, imports, signatures."""

from dataclasses import dataclass
from typing import Iterable

from feature_generator.naming import (
    model_file_name,
    request_model_name,
    required_models,
    to_camel_case,
    to_pascal_case,
)
from feature_generator.parser.base import ApiEndpoint

IMPORT_TOKEN = "import '"


@dataclass(frozen=True)
class RenderContext:
    """Everything a template needs besides the endpoints."""

    project_name: str
    feature_name: str
    model_folder: str = "model"

    @property
    def pascal(self) -> str:
        return to_pascal_case(self.feature_name)

    @property
    def camel(self) -> str:
        return to_camel_case(self.feature_name)

    @property
    def feature_package(self) -> str:
        return f"package:{self.project_name}/features/{self.feature_name}"

    @property
    def core_error_import(self) -> str:
        return f"package:{self.project_name}/core/error/error.dart"

    def model_import(self, model_name: str) -> str:
        return f"{self.feature_package}/data/{self.model_folder}/{model_file_name(model_name)}"

    def model_imports(self, endpoints: Iterable[ApiEndpoint]) -> list[str]:
        return unique(
            self.model_import(model)
            for endpoint in endpoints
            for model in required_models(endpoint)
        )


def unique(items: Iterable[str]) -> list[str]:
    """Drop duplicates, keeping first-seen order."""
    return list(dict.fromkeys(items))


def render_imports(imports: Iterable[str]) -> str:
    return "\n".join(f"{IMPORT_TOKEN}{i}';" for i in imports)


def typed_params(endpoint: ApiEndpoint) -> str:
    """``int id, String? q, CreateUsersRequest params``."""
    params = [f"{p.type} {p.name}" for p in endpoint.params_in("path")]
    params += [f"{p.type}? {p.name}" for p in endpoint.params_in("query")]
    if endpoint.request_body is not None:
        params.append(f"{request_model_name(endpoint)} params")
    return ", ".join(params)


def call_args(endpoint: ApiEndpoint) -> str:
    """Argument names matching typed_params: ``id, q, params``."""
    args = [p.name for p in endpoint.params_in("path")]
    args += [p.name for p in endpoint.params_in("query")]
    if endpoint.request_body is not None:
        args.append("params")
    return ", ".join(args)


def retrofit_params(endpoint: ApiEndpoint) -> str:
    params = [f'@Path("{p.name}") {p.type} {p.name}' for p in endpoint.params_in("path")]
    params += [f'@Query("{p.name}") {p.type}? {p.name}' for p in endpoint.params_in("query")]
    if endpoint.request_body is not None:
        params.append(f"@Body() {request_model_name(endpoint)} params")
    return ", ".join(params)


def named_params(endpoint: ApiEndpoint) -> str:
    """Named parameter block for a freezed factory, or an empty string."""
    params = [f"required {p.type} {p.name}" for p in endpoint.params_in("path")]
    params += [f"{p.type}? {p.name}" for p in endpoint.params_in("query")]
    if endpoint.request_body is not None:
        params.append(f"required {request_model_name(endpoint)} params")
    return "{" + ", ".join(params) + "}" if params else ""


def join_args(*parts: str) -> str:
    return ", ".join(p for p in parts if p)
