"""Screen stub rendering the loading, error and success states of the bloc."""

from feature_generator.naming import to_title_case
from feature_generator.templates.bloc import bloc_class, state_class
from feature_generator.templates.shared import RenderContext, render_imports


def screen_class(ctx: RenderContext) -> str:
    return f"{ctx.pascal}Screen"


def render_screen(ctx: RenderContext) -> str:
    screen = screen_class(ctx)
    bloc = bloc_class(ctx)
    title = to_title_case(ctx.feature_name)
    imports = render_imports([
        "package:flutter/material.dart",
        "package:flutter_bloc/flutter_bloc.dart",
        f"package:{ctx.project_name}/di/di_container.dart",
        ctx.core_error_import,
        f"{ctx.feature_package}/presentation/bloc/{ctx.feature_name}_bloc.dart",
    ])
    return f"""{imports}

class {screen} extends StatelessWidget {{
  const {screen}({{super.key}});

  @override
  Widget build(BuildContext context) {{
    return BlocProvider(
      create: (context) => getIt<{bloc}>(),
      child: const _{screen}View(),
    );
  }}
}}

class _{screen}View extends StatelessWidget {{
  const _{screen}View();

  @override
  Widget build(BuildContext context) {{
    return Scaffold(
      appBar: AppBar(
        title: const Text('{title}'),
      ),
      body: BlocBuilder<{bloc}, {state_class(ctx)}>(
        builder: (context, state) {{
          if (state.isLoading) {{
            return const Center(
              child: CircularProgressIndicator(),
            );
          }}

          if (state.error != const Error.none()) {{
            return Center(
              child: Column(
                mainAxisAlignment: MainAxisAlignment.center,
                children: [
                  const Icon(Icons.error_outline, size: 64, color: Colors.red),
                  const SizedBox(height: 16),
                  Text(
                    'Error: ${{state.error}}',
                    style: Theme.of(context).textTheme.bodyLarge,
                    textAlign: TextAlign.center,
                  ),
                ],
              ),
            );
          }}

          return const Center(
            child: Text(
              '{title} Screen',
              style: TextStyle(fontSize: 24, fontWeight: FontWeight.bold),
            ),
          );
        }},
      ),
    );
  }}
}}
"""
