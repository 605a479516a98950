"""flutter_bloc state container: bloc, freezed events and freezed state.

The plain_* renderers produce the alternative "one subclass per case"
style, used when appending to event/state files that are not freezed.
"""

from feature_generator.naming import (
    DYNAMIC_TYPE,
    event_name,
    method_name,
    return_type,
    state_field_name,
    to_pascal_case,
)
from feature_generator.parser.base import ApiEndpoint
from feature_generator.templates.shared import (
    RenderContext,
    call_args,
    join_args,
    named_params,
    render_imports,
    typed_params,
    unique,
)
from feature_generator.templates.usecase import usecase_class


def bloc_class(ctx: RenderContext) -> str:
    return f"{ctx.pascal}Bloc"


def event_class(ctx: RenderContext) -> str:
    return f"{ctx.pascal}Event"


def state_class(ctx: RenderContext) -> str:
    return f"{ctx.pascal}State"


def handler_name(endpoint: ApiEndpoint) -> str:
    return f"_{method_name(endpoint)}"


# -- freezed style -----------------------------------------------------------

def render_event_case(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    name = event_name(endpoint)
    return (
        f"  const factory {event_class(ctx)}.{name}({named_params(endpoint)}) = "
        f"{to_pascal_case(name)};"
    )


def render_when_case(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    args = call_args(endpoint)
    return (
        f"        {event_name(endpoint)}: ({args}) => "
        f"{handler_name(endpoint)}({join_args(args, 'emit')}),"
    )


def render_state_field(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    type_name = return_type(endpoint)
    if type_name != DYNAMIC_TYPE:
        type_name += "?"
    return f"    @Default(null) {type_name} {state_field_name(endpoint)},"


def render_bloc_handler(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    params = join_args(typed_params(endpoint), f"Emitter<{state_class(ctx)}> emit")
    return f"""  Future<void> {handler_name(endpoint)}({params}) async {{
    emit(state.copyWith(isLoading: true, error: const Error.none()));

    final result = await _useCases.{method_name(endpoint)}({call_args(endpoint)});

    result.fold(
      (error) => emit(state.copyWith(
        isLoading: false,
        error: error,
      )),
      (response) => emit(state.copyWith(
        isLoading: false,
        {state_field_name(endpoint)}: response,
        error: const Error.none(),
      )),
    );
  }}"""


def bloc_imports(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> list[str]:
    return unique([
        "dart:async",
        "package:flutter_bloc/flutter_bloc.dart",
        "package:freezed_annotation/freezed_annotation.dart",
        "package:injectable/injectable.dart",
        ctx.core_error_import,
        f"{ctx.feature_package}/domain/usecase/{ctx.feature_name}_usecase.dart",
        *ctx.model_imports(endpoints),
    ])


def render_bloc(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> str:
    feature = ctx.feature_name
    bloc, event, state = bloc_class(ctx), event_class(ctx), state_class(ctx)
    cases = "\n".join(render_when_case(ctx, e) for e in endpoints)
    handlers = "\n\n".join(render_bloc_handler(ctx, e) for e in endpoints)
    return f"""{render_imports(bloc_imports(ctx, endpoints))}

part '{feature}_bloc.freezed.dart';
part '{feature}_event.dart';
part '{feature}_state.dart';

@injectable
class {bloc} extends Bloc<{event}, {state}> {{
  {bloc}(this._useCases) : super(const {state}()) {{
    on<{event}>((event, emit) async {{
      await event.when(
{cases}
      );
    }});
  }}

  final {usecase_class(ctx)} _useCases;

{handlers}
}}
"""


def render_event(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> str:
    event = event_class(ctx)
    cases = "\n\n".join(render_event_case(ctx, e) for e in endpoints)
    return f"""part of '{ctx.feature_name}_bloc.dart';

@freezed
class {event} with _${event} {{
{cases}
}}
"""


def render_state(ctx: RenderContext, endpoints: list[ApiEndpoint]) -> str:
    state = state_class(ctx)
    fields = [
        "    @Default(false) bool isLoading,",
        "    @Default(Error.none()) Error error,",
        *(render_state_field(ctx, e) for e in endpoints),
    ]
    body = "\n".join(fields)
    return f"""part of '{ctx.feature_name}_bloc.dart';

@freezed
class {state} with _${state} {{
  const factory {state}({{
{body}
  }}) = _{state};
}}
"""


# -- plain subclass style ----------------------------------------------------

def plain_event_class(endpoint: ApiEndpoint) -> str:
    return f"{to_pascal_case(method_name(endpoint))}Event"


def render_plain_event(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    name = plain_event_class(endpoint)
    args = call_args(endpoint)
    if not args:
        return f"class {name} extends {event_class(ctx)} {{}}"

    fields = "\n".join(f"  final {p};" for p in typed_params(endpoint).split(", "))
    this_args = ", ".join(f"this.{a}" for a in args.split(", "))
    return f"""class {name} extends {event_class(ctx)} {{
  {name}({this_args});

{fields}
}}"""


def render_plain_states(ctx: RenderContext, endpoint: ApiEndpoint) -> list[tuple[str, str]]:
    """(class name, declaration) for the loading, success and error states."""
    prefix = to_pascal_case(method_name(endpoint))
    base = state_class(ctx)
    loading, success, error = (f"{prefix}{s}State" for s in ("Loading", "Success", "Error"))
    return [
        (loading, f"class {loading} extends {base} {{}}"),
        (success, f"""class {success} extends {base} {{
  {success}(this.data);

  final {return_type(endpoint)} data;
}}"""),
        (error, f"""class {error} extends {base} {{
  {error}(this.message);

  final String message;
}}"""),
    ]


def plain_handler_name(endpoint: ApiEndpoint) -> str:
    return f"_on{plain_event_class(endpoint)}"


def render_plain_registration(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    return f"    on<{plain_event_class(endpoint)}>({plain_handler_name(endpoint)});"


def render_plain_handler(ctx: RenderContext, endpoint: ApiEndpoint) -> str:
    event = plain_event_class(endpoint)
    prefix = to_pascal_case(method_name(endpoint))
    args = call_args(endpoint)
    event_args = ", ".join(f"event.{a}" for a in args.split(", ")) if args else ""
    return f"""  Future<void> {plain_handler_name(endpoint)}({event} event, Emitter<{state_class(ctx)}> emit) async {{
    emit({prefix}LoadingState());

    final result = await _useCases.{method_name(endpoint)}({event_args});

    result.fold(
      (error) => emit({prefix}ErrorState(error.toString())),
      (response) => emit({prefix}SuccessState(response)),
    );
  }}"""
