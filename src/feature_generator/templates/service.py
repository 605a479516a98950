"""Retrofit service interface: one annotated method per endpoint."""

import re

from feature_generator.naming import method_name, return_type
from feature_generator.parser.base import ApiEndpoint
from feature_generator.templates.shared import (
    RenderContext,
    render_imports,
    retrofit_params,
    unique,
)

ANNOTATED_VERBS = ("GET", "POST", "PUT", "DELETE", "PATCH")

# Matches the annotations written by path_annotation().
ENDPOINT_ANNOTATION = re.compile(r'@(GET|POST|PUT|DELETE|PATCH)\("([^"]+)"\)')


def path_annotation(endpoint: ApiEndpoint) -> str:
    verb = endpoint.method.upper()
    if verb not in ANNOTATED_VERBS:
        # Unknown verbs are annotated as GET.
        verb = "GET"
    return f'@{verb}("{endpoint.path}")'


def find_annotated_endpoints(source: str) -> set[tuple[str, str]]:
    """(method, path) pairs already declared in a rendered service file."""
    return {(verb.lower(), path) for verb, path in ENDPOINT_ANNOTATION.findall(source)}


def service_class(ctx: RenderContext) -> str:
    return f"{ctx.pascal}RemoteService"


def render_service_method(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    return (
        f"  {path_annotation(endpoint)}\n"
        f"  Future<{return_type(endpoint)}> {method_name(endpoint)}({retrofit_params(endpoint)});"
    )


def service_imports(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> list[str]:
    return unique([
        "package:dio/dio.dart",
        "package:injectable/injectable.dart",
        "package:retrofit/retrofit.dart",
        *ctx.model_imports(endpoints),
    ])


def render_service(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> str:
    class_name = service_class(ctx)
    methods = "\n\n".join(render_service_method(ctx, e) for e in endpoints)
    return f"""{render_imports(service_imports(ctx, endpoints))}

part '{ctx.feature_name}_service.g.dart';

/// The contract for the {ctx.feature_name} remote service.
@RestApi()
@injectable
abstract class {class_name} {{
  @factoryMethod
  factory {class_name}(Dio dio) = _{class_name};

{methods}
}}
"""
