"""Use-case aggregate: one delegating method per endpoint."""

from feature_generator.naming import method_name
from feature_generator.parser.base import ApiEndpoint
from feature_generator.templates.repository import either_type, repository_class
from feature_generator.templates.shared import (
    RenderContext,
    call_args,
    render_imports,
    typed_params,
    unique,
)


def usecase_class(ctx: RenderContext) -> str:
    return f"{ctx.pascal}UseCases"


def render_usecase_method(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    name = method_name(endpoint)
    return (
        f"  Future<{either_type(endpoint)}> {name}({typed_params(endpoint)}) =>\n"
        f"      repository.{name}({call_args(endpoint)});"
    )


def usecase_imports(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> list[str]:
    return unique([
        "package:dartz/dartz.dart",
        "package:injectable/injectable.dart",
        ctx.core_error_import,
        f"{ctx.feature_package}/domain/repository/{ctx.feature_name}_repository.dart",
        *ctx.model_imports(endpoints),
    ])


def render_usecases(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> str:
    class_name = usecase_class(ctx)
    methods = "\n\n".join(render_usecase_method(ctx, e) for e in endpoints)
    return f"""{render_imports(usecase_imports(ctx, endpoints))}

@injectable
class {class_name} {{
  {class_name}(this.repository);

  final {repository_class(ctx)} repository;

{methods}
}}
"""
