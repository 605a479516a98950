"""Feature generator: full generation or append into an existing feature."""

from enum import Enum

import click
from pydantic import BaseModel, ConfigDict, Field

from feature_generator.config import GeneratorConfig
from feature_generator.context import SpecContext
from feature_generator.errors import SelectionError
from feature_generator.generator import patcher
from feature_generator.generator.append import FeatureAppender, existing_endpoints, render_models
from feature_generator.generator.layout import FeatureLayout
from feature_generator.naming import method_name
from feature_generator.parser.base import ApiEndpoint
from feature_generator.templates import bloc, repository, screen, service, source, usecase
from feature_generator.templates.core import render_core_error
from feature_generator.templates.shared import RenderContext


class ExistsAction(str, Enum):
    """What to do when the feature directory already exists."""

    APPEND = "append"
    OVERWRITE = "overwrite"
    CANCEL = "cancel"


class PresentationComponents(BaseModel):
    bloc: bool = True
    screens: bool = True
    widgets: bool = True


class LayerSelection(BaseModel):
    """Which layers to generate. Accepts the camelCase keys of the web form."""

    model_config = ConfigDict(populate_by_name=True)

    data: bool = True
    domain: bool = True
    presentation: bool = True
    presentation_components: PresentationComponents = Field(
        default_factory=PresentationComponents, alias="presentationComponents",
    )

    def selected(self) -> list[str]:
        return [name for name in ("data", "domain", "presentation") if getattr(self, name)]


class GenerationResult(BaseModel):
    feature_name: str
    is_update: bool = False
    endpoint_count: int = 0
    new_endpoints: list[str] = []
    files_written: list[str] = []
    warnings: list[str] = []
    nothing_to_do: bool = False
    cancelled: bool = False


def describe(endpoint: ApiEndpoint) -> str:
    return f"{endpoint.method.upper()} {endpoint.path}"


class FeatureGenerator:
    """Generates or extends one feature of a Flutter project."""

    def __init__(self, context: SpecContext, config: GeneratorConfig):
        self.context = context
        self.config = config

    def layout(self, feature_name: str) -> FeatureLayout:
        return FeatureLayout.detect(self.config.feature_path(feature_name), feature_name)

    def render_context(self, layout: FeatureLayout) -> RenderContext:
        return RenderContext(
            project_name=self.context.project_name,
            feature_name=layout.name,
            model_folder=layout.model_folder,
        )

    def feature_exists(self, feature_name: str) -> bool:
        return self.config.feature_path(feature_name).is_dir()

    def existing_endpoints(self, feature_name: str) -> set[tuple[str, str]]:
        return existing_endpoints(self.layout(feature_name))

    def generate(
        self,
        feature_name: str,
        endpoints: list[ApiEndpoint],
        layers: LayerSelection | None = None,
        on_exists: ExistsAction = ExistsAction.APPEND,
    ) -> GenerationResult:
        """Generate ``feature_name`` from the selected endpoints.

        An existing feature is extended, regenerated or left alone depending
        on ``on_exists``. Selection problems raise SelectionError before any
        file is touched.
        """
        self.config.validate_feature_name(feature_name)
        layers = layers or LayerSelection()
        if not layers.selected():
            raise SelectionError("Please select at least one layer to generate")
        if not endpoints:
            raise SelectionError("At least one endpoint must be selected")

        if self.feature_exists(feature_name):
            if on_exists == ExistsAction.CANCEL:
                click.echo("Operation cancelled.")
                return GenerationResult(feature_name=feature_name, cancelled=True)
            if on_exists == ExistsAction.APPEND:
                return self._append(feature_name, endpoints, layers)

        return self._generate_full(feature_name, endpoints, layers)

    def render_files(
        self, layout: FeatureLayout, endpoints: list[ApiEndpoint], layers: LayerSelection,
    ) -> dict[str, str]:
        """Render every selected file as ``{feature-relative path: content}``."""
        ctx = self.render_context(layout)
        files: dict[str, str] = {}

        if layers.data:
            files.update(render_models(layout, endpoints))
            files[layout.service] = service.render_service(ctx, endpoints)
            files[layout.source] = source.render_source_interface(ctx, endpoints)
            files[layout.source_impl] = source.render_source_implementation(ctx, endpoints)
            files[layout.repository_impl] = repository.render_repository_implementation(ctx, endpoints)

        if layers.domain:
            files[layout.repository] = repository.render_repository_interface(ctx, endpoints)
            files[layout.usecase] = usecase.render_usecases(ctx, endpoints)

        if layers.presentation:
            components = layers.presentation_components
            if components.bloc:
                files[layout.bloc] = bloc.render_bloc(ctx, endpoints)
                files[layout.event] = bloc.render_event(ctx, endpoints)
                files[layout.state] = bloc.render_state(ctx, endpoints)
            if components.screens:
                files[layout.screen] = screen.render_screen(ctx)

        return files

    def _directories(self, layout: FeatureLayout, layers: LayerSelection) -> list[str]:
        dirs = []
        if layers.data:
            dirs += layout.data_dirs()
        if layers.domain:
            dirs += layout.domain_dirs()
        if layers.presentation and layers.presentation_components.widgets:
            dirs.append(layout.widget_dir)
        return dirs

    def _generate_full(
        self, feature_name: str, endpoints: list[ApiEndpoint], layers: LayerSelection,
    ) -> GenerationResult:
        layout = self.layout(feature_name)
        click.echo(f"Generating feature: {feature_name}")

        files = self.render_files(layout, endpoints, layers)
        for directory in self._directories(layout, layers):
            layout.path(directory).mkdir(parents=True, exist_ok=True)
        for relative, content in files.items():
            file_path = layout.path(relative)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
            click.echo(f"  Created {relative}")

        self._ensure_core_error()
        click.echo(
            f"Feature '{feature_name}' generated with {len(endpoints)} endpoint(s) "
            f"at {self.config.feature_location(feature_name)}"
        )
        return GenerationResult(
            feature_name=feature_name,
            endpoint_count=len(endpoints),
            new_endpoints=[describe(e) for e in endpoints],
            files_written=list(files),
        )

    def _append(
        self, feature_name: str, endpoints: list[ApiEndpoint], layers: LayerSelection,
    ) -> GenerationResult:
        layout = self.layout(feature_name)
        existing = existing_endpoints(layout)
        new, warnings = self._without_name_clashes(
            layout, [e for e in endpoints if e.key not in existing],
        )
        if not new:
            click.echo("All selected endpoints already exist in this feature. Nothing to do.")
            return GenerationResult(
                feature_name=feature_name, is_update=True, nothing_to_do=True, warnings=warnings,
            )

        click.echo(f"Appending {len(new)} new endpoint(s) to feature: {feature_name}")
        appender = FeatureAppender(self.render_context(layout), layout)
        if layers.data:
            appender.append_data(new)
        if layers.domain:
            appender.append_domain(new)
        if layers.presentation:
            appender.append_presentation(new, layers.presentation_components)

        self._ensure_core_error()
        click.echo(f"Feature '{feature_name}' updated with {len(new)} new endpoint(s)")
        return GenerationResult(
            feature_name=feature_name,
            is_update=True,
            endpoint_count=len(new),
            new_endpoints=[describe(e) for e in new],
            files_written=appender.files_written,
            warnings=warnings + appender.warnings,
        )

    def _without_name_clashes(
        self, layout: FeatureLayout, endpoints: list[ApiEndpoint],
    ) -> tuple[list[ApiEndpoint], list[str]]:
        """Drop endpoints whose method name is already taken in the service file or the batch."""
        service_path = layout.path(layout.service)
        content = service_path.read_text(encoding="utf-8") if service_path.exists() else ""

        kept: dict[str, ApiEndpoint] = {}
        warnings = []
        for endpoint in endpoints:
            name = method_name(endpoint)
            if name in kept:
                owner = describe(kept[name])
            elif patcher.has_member(content, name):
                owner = layout.service
            else:
                kept[name] = endpoint
                continue
            message = f"Skipped {describe(endpoint)}: method name {name} is already used by {owner}"
            warnings.append(message)
            click.echo(f"  Warning: {message}", err=True)
        return list(kept.values()), warnings

    def _ensure_core_error(self) -> None:
        path = self.config.core_error_path
        if path.exists():
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_core_error(), encoding="utf-8")
        click.echo(f"  Created {path.relative_to(self.config.project_root)}")
