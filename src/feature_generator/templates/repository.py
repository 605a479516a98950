"""Repository interface (domain) and implementation (data).

The implementation wraps every data source call and maps thrown errors
into ``Left(Error.customErrorType(...))``.
"""

from feature_generator.naming import method_name, return_type
from feature_generator.parser.base import ApiEndpoint
from feature_generator.templates.shared import (
    RenderContext,
    call_args,
    render_imports,
    typed_params,
    unique,
)
from feature_generator.templates.source import source_class


def repository_class(ctx: RenderContext) -> str:
    return f"{ctx.pascal}Repository"


def either_type(endpoint: ApiEndpoint) -> str:
    return f"Either<Error, {return_type(endpoint)}>"


def render_repository_method(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    return f"  Future<{either_type(endpoint)}> {method_name(endpoint)}({typed_params(endpoint)});"


def render_repository_impl_method(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    name = method_name(endpoint)
    return f"""  @override
  Future<{either_type(endpoint)}> {name}({typed_params(endpoint)}) async {{
    try {{
      final res = await remoteDataSource.{name}({call_args(endpoint)});
      return right(res);
    }} catch (e) {{
      return left(Error.customErrorType(e.toString()));
    }}
  }}"""


def repository_imports(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> list[str]:
    return unique([
        "package:dartz/dartz.dart",
        ctx.core_error_import,
        *ctx.model_imports(endpoints),
    ])


def render_repository_interface(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> str:
    methods = "\n\n".join(render_repository_method(ctx, e) for e in endpoints)
    return f"""{render_imports(repository_imports(ctx, endpoints))}

/// The contract for the {ctx.feature_name} repository.
abstract class {repository_class(ctx)} {{
{methods}
}}
"""


def repository_impl_imports(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> list[str]:
    feature = ctx.feature_name
    return unique([
        ctx.core_error_import,
        f"{ctx.feature_package}/data/remote/source/{feature}_source.dart",
        f"{ctx.feature_package}/domain/repository/{feature}_repository.dart",
        "package:dartz/dartz.dart",
        "package:injectable/injectable.dart",
        *ctx.model_imports(endpoints),
    ])


def render_repository_implementation(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> str:
    interface = repository_class(ctx)
    impl = f"{interface}Impl"
    methods = "\n\n".join(render_repository_impl_method(ctx, e) for e in endpoints)
    return f"""{render_imports(repository_impl_imports(ctx, endpoints))}

@Injectable(as: {interface})
class {impl} implements {interface} {{
  {impl}(this.remoteDataSource);

  final {source_class(ctx)} remoteDataSource;

{methods}
}}
"""
