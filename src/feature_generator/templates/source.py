"""Remote data source interface and its implementation over the service."""

from feature_generator.naming import method_name, return_type
from feature_generator.parser.base import ApiEndpoint
from feature_generator.templates.service import service_class
from feature_generator.templates.shared import (
    RenderContext,
    call_args,
    render_imports,
    typed_params,
    unique,
)


def source_class(ctx: RenderContext) -> str:
    return f"{ctx.pascal}RemoteDataSource"


def service_field(ctx: RenderContext) -> str:
    return f"{ctx.camel}Service"


def render_source_method(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    return f"  Future<{return_type(endpoint)}> {method_name(endpoint)}({typed_params(endpoint)});"


def render_source_impl_method(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    name = method_name(endpoint)
    return (
        "  @override\n"
        f"  Future<{return_type(endpoint)}> {name}({typed_params(endpoint)}) =>\n"
        f"      {service_field(ctx)}.{name}({call_args(endpoint)});"
    )


def render_source_interface(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> str:
    methods = "\n\n".join(render_source_method(ctx, e) for e in endpoints)
    imports = render_imports(ctx.model_imports(endpoints))
    header = f"{imports}\n\n" if imports else ""
    return f"""{header}/// The contract for the {ctx.feature_name} remote data source.
abstract class {source_class(ctx)} {{
{methods}
}}
"""


def source_impl_imports(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> list[str]:
    feature = ctx.feature_name
    return unique([
        f"{ctx.feature_package}/data/remote/service/{feature}_service.dart",
        f"{ctx.feature_package}/data/remote/source/{feature}_source.dart",
        "package:injectable/injectable.dart",
        *ctx.model_imports(endpoints),
    ])


def render_source_implementation(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> str:
    interface = source_class(ctx)
    impl = f"{interface}Impl"
    field = service_field(ctx)
    methods = "\n\n".join(render_source_impl_method(ctx, e) for e in endpoints)
    return f"""{render_imports(source_impl_imports(ctx, endpoints))}

@Injectable(as: {interface})
class {impl} implements {interface} {{
  {impl}(this.{field});

  final {service_class(ctx)} {field};

{methods}
}}
"""
