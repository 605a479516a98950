"""Append mode: splice new endpoints into an existing feature, layer by layer.

Each file is handled on its own. A missing file is rendered in full for
the new endpoints; a file whose anchors cannot be found is skipped with a
warning and the remaining files are still updated.
"""

import re
from typing import Callable

import click

from feature_generator.errors import AnchorNotFound
from feature_generator.generator import patcher
from feature_generator.generator.layout import FeatureLayout
from feature_generator.naming import (
    method_name,
    request_model_name,
    response_model_name,
    response_schema,
    state_field_name,
)
from feature_generator.parser.base import ApiEndpoint
from feature_generator.templates import bloc, model, repository, screen, service, source, usecase
from feature_generator.templates.shared import RenderContext

FREEZED_VARIANT = re.compile(r"const factory[^;]*;")
WHEN_CASE = re.compile(r"^[ \t]+\w+: \([^)]*\) => _\w+\([^)]*\),[ \t]*$", re.MULTILINE)
STATE_FIELDS_END = re.compile(r"const factory \w+\(\{.*?(?=\n[ \t]*\}\))", re.DOTALL)
BLOC_REGISTRATION = re.compile(r"^[ \t]+on<\w+>\(.*\);[ \t]*$", re.MULTILINE)


def existing_endpoints(layout: FeatureLayout) -> set[tuple[str, str]]:
    """(method, path) pairs already declared in the feature's service file."""
    service_path = layout.path(layout.service)
    if not service_path.exists():
        return set()
    return service.find_annotated_endpoints(service_path.read_text(encoding="utf-8"))


class FeatureAppender:
    """Updates the files of one existing feature with new endpoints."""

    def __init__(self, ctx: RenderContext, layout: FeatureLayout):
        self.ctx = ctx
        self.layout = layout
        self.files_written: list[str] = []
        self.warnings: list[str] = []

    # -- file plumbing --------------------------------------------------------

    def _write(self, relative: str, content: str) -> None:
        path = self.layout.path(relative)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        self.files_written.append(relative)

    def _patch(
        self,
        relative: str,
        render_full: Callable[[], str],
        patch: Callable[[str], str],
    ) -> None:
        path = self.layout.path(relative)
        if not path.exists():
            self._write(relative, render_full())
            click.echo(f"  Created {relative}")
            return

        content = path.read_text(encoding="utf-8")
        try:
            updated = patch(content)
        except AnchorNotFound as e:
            message = f"Skipped {relative}: {e}"
            self.warnings.append(message)
            click.echo(f"  Warning: {message}", err=True)
            return

        if updated == content:
            click.echo(f"  No new members for {relative}")
            return
        self._write(relative, updated)
        click.echo(f"  Updated {relative}")

    def _missing(self, content: str, endpoints: list[ApiEndpoint], key=method_name) -> list[ApiEndpoint]:
        return [e for e in endpoints if not patcher.has_member(content, key(e))]

    def _flat_patch(self, render_member):
        """Patch for files holding one class: imports, then members before the last brace."""
        def patch(content: str, endpoints: list[ApiEndpoint]) -> str:
            new = self._missing(content, endpoints)
            if not new:
                return content
            content = patcher.insert_imports(content, self.ctx.model_imports(new))
            members = [render_member(self.ctx, e) for e in new]
            return patcher.insert_before_last_brace(content, members)
        return patch

    # -- data layer -----------------------------------------------------------

    def append_models(self, endpoints: list[ApiEndpoint]) -> None:
        for relative, content in render_models(self.layout, endpoints).items():
            if not self.layout.path(relative).exists():
                self._write(relative, content)
                click.echo(f"  Created {relative}")

    def append_data(self, endpoints: list[ApiEndpoint]) -> None:
        ctx, layout = self.ctx, self.layout
        self.append_models(endpoints)

        targets = [
            (layout.service, service.render_service, service.render_service_method),
            (layout.source, source.render_source_interface, source.render_source_method),
            (layout.source_impl, source.render_source_implementation, source.render_source_impl_method),
            (layout.repository_impl, repository.render_repository_implementation,
             repository.render_repository_impl_method),
        ]
        for relative, render_full, render_member in targets:
            patch = self._flat_patch(render_member)
            self._patch(
                relative,
                lambda render_full=render_full: render_full(ctx, endpoints),
                lambda content, patch=patch: patch(content, endpoints),
            )

    # -- domain layer ---------------------------------------------------------

    def append_domain(self, endpoints: list[ApiEndpoint]) -> None:
        ctx, layout = self.ctx, self.layout
        repo_patch = self._flat_patch(repository.render_repository_method)
        self._patch(
            layout.repository,
            lambda: repository.render_repository_interface(ctx, endpoints),
            lambda content: repo_patch(content, endpoints),
        )
        self._patch(
            layout.usecase,
            lambda: usecase.render_usecases(ctx, endpoints),
            lambda content: self._patch_usecases(content, endpoints),
        )

    def _patch_usecases(self, content: str, endpoints: list[ApiEndpoint]) -> str:
        new = self._missing(content, endpoints)
        if not new:
            return content
        content = patcher.insert_imports(content, self.ctx.model_imports(new))
        members = [usecase.render_usecase_method(self.ctx, e) for e in new]
        return patcher.insert_into_class(content, usecase.usecase_class(self.ctx), members)

    # -- presentation layer ---------------------------------------------------

    def append_presentation(self, endpoints: list[ApiEndpoint], components) -> None:
        ctx, layout = self.ctx, self.layout
        if components.bloc:
            self._patch(
                layout.event,
                lambda: bloc.render_event(ctx, endpoints),
                lambda content: self._patch_events(content, endpoints),
            )
            self._patch(
                layout.state,
                lambda: bloc.render_state(ctx, endpoints),
                lambda content: self._patch_states(content, endpoints),
            )
            self._patch(
                layout.bloc,
                lambda: bloc.render_bloc(ctx, endpoints),
                lambda content: self._patch_bloc(content, endpoints),
            )

        if components.screens:
            if layout.path(layout.screen).exists():
                click.echo(f"  {layout.screen} already exists (no changes)")
            else:
                self._write(layout.screen, screen.render_screen(ctx))
                click.echo(f"  Created {layout.screen}")

        if components.widgets:
            layout.path(layout.widget_dir).mkdir(parents=True, exist_ok=True)

    def _patch_events(self, content: str, endpoints: list[ApiEndpoint]) -> str:
        if patcher.uses_factory_pattern(content):
            new = self._missing(content, endpoints, key=bloc.event_name)
            if not new:
                return content
            cases = "".join("\n\n" + bloc.render_event_case(self.ctx, e) for e in new)
            return patcher.insert_after_last_match(content, FREEZED_VARIANT, cases)

        new = [e for e in endpoints if f"class {bloc.plain_event_class(e)} " not in content]
        if not new:
            return content
        # Plain subclasses are top-level declarations, so they follow the final brace.
        return patcher.append_declarations(
            content, [bloc.render_plain_event(self.ctx, e) for e in new],
        )

    def _patch_states(self, content: str, endpoints: list[ApiEndpoint]) -> str:
        if patcher.uses_factory_pattern(content):
            new = self._missing(content, endpoints, key=state_field_name)
            if not new:
                return content
            fields = "".join("\n" + bloc.render_state_field(self.ctx, e) for e in new)
            return patcher.insert_after_last_match(content, STATE_FIELDS_END, fields)

        declarations = [
            declaration
            for e in endpoints
            for name, declaration in bloc.render_plain_states(self.ctx, e)
            if f"class {name} " not in content
        ]
        if not declarations:
            return content
        # Same as events: each state is its own top-level class after the final brace.
        return patcher.append_declarations(content, declarations)

    def _patch_bloc(self, content: str, endpoints: list[ApiEndpoint]) -> str:
        ctx = self.ctx
        if "event.when(" in content:
            new = [e for e in endpoints if not patcher.has_member(content, bloc.handler_name(e))]
            if not new:
                return content
            content = patcher.insert_imports(content, ctx.model_imports(new))
            cases = "".join("\n" + bloc.render_when_case(ctx, e) for e in new)
            content = patcher.insert_after_last_match(content, WHEN_CASE, cases)
            handlers = [bloc.render_bloc_handler(ctx, e) for e in new]
            return patcher.insert_into_class(content, bloc.bloc_class(ctx), handlers)

        new = [e for e in endpoints if not patcher.has_member(content, bloc.plain_handler_name(e))]
        if not new:
            return content
        content = patcher.insert_imports(content, ctx.model_imports(new))
        registrations = "".join("\n" + bloc.render_plain_registration(ctx, e) for e in new)
        content = patcher.insert_after_last_match(content, BLOC_REGISTRATION, registrations)
        handlers = [bloc.render_plain_handler(ctx, e) for e in new]
        return patcher.insert_into_class(content, bloc.bloc_class(ctx), handlers)


def render_models(layout: FeatureLayout, endpoints: list[ApiEndpoint]) -> dict[str, str]:
    """One file per distinct request/response model name."""
    files: dict[str, str] = {}
    for endpoint in endpoints:
        if endpoint.request_body is not None:
            name = request_model_name(endpoint)
            files.setdefault(
                layout.model(name),
                model.render_model(name, endpoint.request_body.json_schema),
            )
        schema = response_schema(endpoint)
        if schema is not None:
            name = response_model_name(endpoint)
            files.setdefault(layout.model(name), model.render_model(name, schema, is_response=True))
    return files
