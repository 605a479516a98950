"""CLI entry point for feature-generator."""

from pathlib import Path

import click

from feature_generator.config import GeneratorConfig
from feature_generator.context import SpecContext, load_context
from feature_generator.errors import GeneratorError
from feature_generator.generator.feature import ExistsAction, FeatureGenerator
from feature_generator.parser.openapi import parse_selection

EXISTS_CHOICES = {"1": ExistsAction.APPEND, "2": ExistsAction.OVERWRITE, "3": ExistsAction.CANCEL}


def _load(obj: dict) -> tuple[GeneratorConfig, SpecContext]:
    config: GeneratorConfig = obj["config"]
    try:
        return config, load_context(config)
    except GeneratorError as e:
        raise click.ClickException(str(e)) from e
    except Exception as e:
        raise click.ClickException(f"Failed to load project: {e}") from e


def _show_endpoints(context: SpecContext) -> None:
    click.echo("Available API endpoints by category:")
    click.echo("=" * 50)
    current_tag = None
    for numbered in context.catalog.numbered():
        if numbered.tag != current_tag:
            current_tag = numbered.tag
            click.echo(f"\n{current_tag}:")
        endpoint = numbered.endpoint
        click.echo(f"  {numbered.index}. {endpoint.method.upper()} {endpoint.path}")
        if endpoint.summary:
            click.echo(f"     {endpoint.summary}")
    click.echo("\n" + "=" * 50)


def _print_usage() -> None:
    click.echo("Usage:")
    click.echo("  Show endpoints:     feature-generator endpoints")
    click.echo("  Generate feature:   feature-generator generate <feature_name> <endpoint_indices>")
    click.echo("")
    click.echo("Examples:")
    click.echo("  feature-generator generate user_management 1,3,5")
    click.echo("  feature-generator generate products all")
    click.echo("")
    click.echo("Feature name should be in snake_case (e.g., user_management, products, etc.)")


def _ask_exists_action(feature_name: str, location: str) -> ExistsAction:
    click.echo(f'Feature "{feature_name}" already exists at {location}')
    click.echo("  1. Add new endpoints to the existing feature")
    click.echo("  2. Overwrite the feature")
    click.echo("  3. Cancel")
    answer = click.prompt("Choose an option", default="1", show_default=True)
    return EXISTS_CHOICES.get(answer.strip(), ExistsAction.CANCEL)


@click.group()
@click.option("--project-root", type=click.Path(file_okay=False, path_type=Path), default=".",
              envvar="FEATURE_GEN_PROJECT_ROOT", show_default=True, help="Flutter project root.")
@click.option("--spec", "spec_file", default="swagger.json", envvar="FEATURE_GEN_SPEC",
              show_default=True, help="OpenAPI document, relative to the project root.")
@click.option("--features-path", default="lib/features", envvar="FEATURE_GEN_FEATURES_PATH",
              show_default=True, help="Directory the features are generated into.")
@click.pass_context
def main(ctx: click.Context, project_root: Path, spec_file: str, features_path: str):
    """Feature Generator: scaffold Flutter features from an OpenAPI document."""
    ctx.obj = {
        "config": GeneratorConfig.for_root(
            project_root, spec_file=spec_file, features_path=features_path,
        ),
    }


@main.command()
@click.pass_obj
def endpoints(obj: dict):
    """List the endpoints of the OpenAPI document with their numbers."""
    _, context = _load(obj)
    _show_endpoints(context)


@main.command()
@click.argument("feature_name", required=False)
@click.argument("indices", required=False)
@click.option("--on-exists", default="ask",
              type=click.Choice(["ask", "append", "overwrite", "cancel"]), show_default=True,
              help="What to do when the feature already exists.")
@click.pass_obj
def generate(obj: dict, feature_name: str | None, indices: str | None, on_exists: str):
    """Generate FEATURE_NAME from the endpoints numbered INDICES (e.g. 1,3,5 or all)."""
    config, context = _load(obj)
    if not feature_name or not indices:
        _print_usage()
        click.echo("")
        _show_endpoints(context)
        return

    generator = FeatureGenerator(context, config)
    try:
        config.validate_feature_name(feature_name)
        selected = context.catalog.select(parse_selection(indices))

        click.echo(f"Selected {len(selected)} endpoint(s):")
        for endpoint in selected:
            click.echo(f"  - {endpoint.method.upper()} {endpoint.path}")

        if on_exists == "ask" and generator.feature_exists(feature_name):
            action = _ask_exists_action(feature_name, config.feature_location(feature_name))
        elif on_exists == "ask":
            action = ExistsAction.APPEND
        else:
            action = ExistsAction(on_exists)

        result = generator.generate(feature_name, selected, on_exists=action)
    except GeneratorError as e:
        raise click.ClickException(str(e)) from e
    except (click.ClickException, click.Abort):
        raise
    except Exception as e:
        raise click.ClickException(f"Generation failed: {e}") from e

    if result.nothing_to_do or result.cancelled:
        return

    if result.warnings:
        click.echo(f"\n{len(result.warnings)} file(s) could not be updated, see warnings above.", err=True)
    click.echo("\nGeneration completed!")
    click.echo("Next steps:")
    click.echo('  1. Run "dart run build_runner build" to generate the .g.dart and .freezed.dart files')
    click.echo("  2. Register the new classes in your DI container")
    click.echo("  3. Use the generated bloc in your screens")


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8080, type=int, show_default=True)
@click.pass_obj
def serve(obj: dict, host: str, port: int):
    """Serve the web form for selecting endpoints and generating features."""
    import uvicorn

    from feature_generator.web.app import create_app

    config, context = _load(obj)
    click.echo(f"Open your browser at http://{host}:{port}")
    uvicorn.run(create_app(context, config), host=host, port=port)
